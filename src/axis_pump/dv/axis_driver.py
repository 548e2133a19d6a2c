# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/axis_pump/dv/axis_driver.py

"""Protocol driver: one transaction at a time through a HandshakePort."""

from __future__ import annotations

import logging
import random

from . import utils_dv
from .axis_config import AxisWidths, DelayPolicy, validate_model
from .axis_item import AxisItem
from .errors import ProtocolMismatchError
from .handshake_port import HandshakePort
from .rendezvous import ItemSource


class AxisDriver:
    """Valid/ready stimulus driver with reset handling and idle-gap injection.

    The driver is independent of any simulation kernel: time only advances
    through ``port.tick()`` and items only arrive through ``source``.

    run() states:
        1. Reset-Hold: deassert valid; optionally wait until a reset has been
           observed; stay while reset is asserted.
        2. Wait-Release: one extra tick after reset is seen released.
        3. Idle/Fetch: ``await source.get_next_item()``.
        4. Drive: ``port.send(item)`` holds valid and payload until ready.
        5. Post-Transfer-Delay: ``source.item_done()``, then idle for
           ``delay_policy.sample()`` ticks and return to 3.

    A reset seen during 4 aborts the transfer. The same item object is kept
    and re-driven from the start of 4 once reset is released, so the source
    never loses an item and ``item_done()`` is called exactly once per item.

    Attributes:
        widths: Interface widths every item must match.
        delay_policy: Idle-gap bounds (default no gap).
        wait_for_reset: Wait for a reset assertion before the first fetch.
        item_count: Number of completed transfers.

    Example:
        >>> drv = AxisDriver(port, chan, AxisWidths(data_width=8))
        >>> drv.configure(min_delay=1, max_delay=3)
        >>> kernel.start(drv.run(), "drv")
    """

    def __init__(  # pylint: disable=too-many-arguments
        self,
        port: HandshakePort,
        source: ItemSource[AxisItem],
        widths: AxisWidths,
        rng: random.Random | None = None,
        *,
        name: str = "drv",
        wait_for_reset: bool = True,
    ) -> None:
        self.logger: logging.Logger = utils_dv.component_logger(name)
        self.port = port
        self.source = source
        self.widths = widths
        self.rng = rng if rng is not None else utils_dv.make_rng()
        self.wait_for_reset = wait_for_reset
        self.delay_policy = DelayPolicy()
        self.item_count: int = 0
        self.replay_count: int = 0
        self._pending: AxisItem | None = None
        self._epoch: int = 0

    def configure(self, min_delay: int, max_delay: int) -> None:
        """Set the post-transfer delay bounds (raises ConfigurationError)."""
        self.delay_policy = validate_model(
            DelayPolicy, {"min_delay": min_delay, "max_delay": max_delay}
        )
        self.logger.debug(
            "configure: min_delay=%d max_delay=%d", min_delay, max_delay
        )

    async def run(self) -> None:
        """Drive items forever; returns only by raising."""
        self.logger.debug("run begin")
        while True:
            await self.reset_hold()
            await self.pump()

    async def reset_hold(self) -> None:
        """Hold valid low through reset, then wait the release tick."""
        self.logger.debug("reset_hold begin")
        port = self.port
        port.idle()
        if self.wait_for_reset:
            while port.reset_epoch == 0:
                await port.tick()
        while port.in_reset():
            await port.tick()
        await port.tick()
        self._epoch = port.reset_epoch
        self.logger.debug("reset_hold end: epoch=%d", self._epoch)

    async def pump(self) -> None:
        """Fetch, drive and space out items until a reset is observed."""
        port = self.port
        while True:
            if self._pending is None:
                tr = await self.source.get_next_item()
                self.check_item(tr)
                self._pending = tr
            # nothing driven yet, so a reset seen here is not a replay
            if port.reset_epoch != self._epoch or port.in_reset():
                return
            if not await port.send(self._pending):
                self.replay_count += 1
                self.logger.debug("transfer aborted by reset, will replay")
                return
            tr, self._pending = self._pending, None
            self.item_count += 1
            self.logger.debug("transfer %d done: %s", self.item_count, tr)
            self.source.item_done()
            delay = self.delay_policy.sample(self.rng)
            for _ in range(delay):
                await port.tick()
                if port.in_reset():
                    return

    def check_item(self, tr: AxisItem) -> None:
        """Reject items built for a different interface."""
        if not isinstance(tr, AxisItem):
            raise ProtocolMismatchError(f"expected AxisItem, got {type(tr).__name__}")
        if tr.widths != self.widths:
            raise ProtocolMismatchError(
                f"item widths {tr.widths.model_dump()} do not match "
                f"driver widths {self.widths.model_dump()}"
            )
