# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/axis_pump/dv/axis_receiver.py

"""Software stand-ins for the external reset source and ready receiver."""

from __future__ import annotations

import logging
import random

from . import utils_dv
from .errors import ConfigurationError
from .handshake_port import SimHandshakePort
from .sim_kernel import SimKernel


class AxisResetDriver:
    """Synchronous reset generator for a SimHandshakePort.

    Reset Sequence:
        1. Assert reset before the first edge
        2. Hold it for reset_cycles edges
        3. Deassert it

    ``pulse()`` asserts reset again mid-run, e.g. to interrupt a transfer.
    """

    def __init__(
        self,
        kernel: SimKernel,
        port: SimHandshakePort,
        reset_cycles: int = 4,
        *,
        name: str = "reset_driver",
    ) -> None:
        if reset_cycles < 0:
            raise ConfigurationError("reset_cycles must be >= 0")
        self.logger: logging.Logger = utils_dv.component_logger(name)
        self.kernel = kernel
        self.port = port
        self.reset_cycles = reset_cycles

    async def run(self) -> None:
        """Apply the initial reset pulse."""
        self.logger.debug("run begin")
        await self.pulse(self.reset_cycles)
        self.logger.debug("run end")

    async def pulse(self, cycles: int) -> None:
        """Assert reset now and hold it for ``cycles`` edges."""
        if cycles <= 0:
            return
        self.logger.debug(
            "pulse begin: %d cycles at cycle %d", cycles, self.kernel.cycle
        )
        self.port.set_reset(True)
        for _ in range(cycles):
            await self.kernel.tick()
        self.port.set_reset(False)
        self.logger.debug("pulse end at cycle %d", self.kernel.cycle)


class AxisReadyReceiver:
    """Receiver that asserts ready nondeterministically.

    Before every edge ready is asserted with probability ``ready_prob``;
    ``1.0`` is an always-ready sink and ``0.0`` a receiver that never accepts.
    """

    def __init__(
        self,
        kernel: SimKernel,
        port: SimHandshakePort,
        ready_prob: float = 0.5,
        rng: random.Random | None = None,
        *,
        name: str = "receiver",
    ) -> None:
        if not 0.0 <= ready_prob <= 1.0:
            raise ConfigurationError(
                f"ready_prob must be in [0.0, 1.0], got {ready_prob}"
            )
        self.logger: logging.Logger = utils_dv.component_logger(name)
        self.kernel = kernel
        self.port = port
        self.ready_prob = ready_prob
        self.rng = rng if rng is not None else utils_dv.make_rng()

    async def run(self) -> None:
        """Pick ready for every upcoming edge, forever."""
        while True:
            if self.ready_prob >= 1.0:
                ready = True
            elif self.ready_prob <= 0.0:
                ready = False
            else:
                ready = self.rng.random() < self.ready_prob
            self.port.set_ready(ready)
            await self.kernel.tick()
