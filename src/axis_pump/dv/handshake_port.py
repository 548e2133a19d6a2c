# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/axis_pump/dv/handshake_port.py

"""Handshake channel abstraction between a driver and a receiver.

A HandshakePort replaces the raw signal bundle a hardware driver writes to.
It exposes the tick source, the sampled reset and ready inputs, and the
valid/payload outputs. ``send()`` builds the valid/ready transfer on top of
those primitives so every port implementation shares one definition of a
completed transfer.

Timing model:
    ``in_reset()`` and ``poll_ready()`` return the values sampled at the most
    recent tick. ``drive()`` and ``idle()`` change the outputs seen at the
    next tick. ``reset_epoch`` counts reset assertions observed at ticks.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from .axis_item import AxisItem
from .sim_kernel import SimKernel


@dataclass(frozen=True)
class TickSample:
    """Line values observed at one tick (payload is None while valid is low)."""

    cycle: int
    reset: bool
    valid: bool
    ready: bool
    item: AxisItem | None

    @property
    def fired(self) -> bool:
        """True when a transfer completes at this tick."""
        return self.valid and self.ready and not self.reset


class HandshakePort(ABC):
    """Typed valid/ready channel seen from the driving side."""

    def __init__(self) -> None:
        self.reset_epoch: int = 0

    @abstractmethod
    async def tick(self) -> None:
        """Block until the next tick and sample the inputs."""

    @abstractmethod
    def in_reset(self) -> bool:
        """Reset level sampled at the last tick."""

    @abstractmethod
    def poll_ready(self) -> bool:
        """Receiver ready sampled at the last tick."""

    @abstractmethod
    def drive(self, item: AxisItem) -> None:
        """Assert valid with ``item`` as payload."""

    @abstractmethod
    def idle(self) -> None:
        """Deassert valid."""

    async def send(self, item: AxisItem) -> bool:
        """Hold ``item`` on the channel until accepted.

        Returns True once a tick samples valid and ready together, False if
        reset is seen first (the item is then not transferred). There is no
        timeout: a receiver that never asserts ready stalls forever.
        """
        while True:
            if self.in_reset():
                self.idle()
                return False
            self.drive(item)
            await self.tick()
            if self.in_reset():
                self.idle()
                return False
            if self.poll_ready():
                self.idle()
                return True


class SimHandshakePort(HandshakePort):
    """Software port whose lines are plain attributes sampled at kernel edges.

    The reset line clears ``valid`` as soon as it is asserted, like an output
    register with an asynchronous clear; the driver itself only learns about
    the reset at the next tick.
    """

    def __init__(self, kernel: SimKernel) -> None:
        super().__init__()
        self._kernel = kernel
        # live lines
        self.valid: bool = False
        self.item: AxisItem | None = None
        self.ready: bool = False
        self.reset: bool = False
        # values sampled at the last edge
        self._reset_s: bool = False
        self._ready_s: bool = False
        kernel.on_edge(self._sample)

    def _sample(self, cycle: int) -> None:
        if self.reset and not self._reset_s:
            self.reset_epoch += 1
        self._reset_s = self.reset
        self._ready_s = self.ready

    def lines(self, cycle: int) -> TickSample:
        """Current live lines as a sample (what an edge at ``cycle`` sees)."""
        return TickSample(
            cycle=cycle,
            reset=self.reset,
            valid=self.valid,
            ready=self.ready,
            item=self.item if self.valid else None,
        )

    def set_reset(self, active: bool) -> None:
        """Drive the reset line (external collaborator side)."""
        self.reset = active
        if active:
            self.valid = False

    def set_ready(self, ready: bool) -> None:
        """Drive the ready line (receiver side)."""
        self.ready = ready

    async def tick(self) -> None:
        await self._kernel.tick()

    def in_reset(self) -> bool:
        return self._reset_s

    def poll_ready(self) -> bool:
        return self._ready_s

    def drive(self, item: AxisItem) -> None:
        self.item = item
        self.valid = not self.reset

    def idle(self) -> None:
        self.valid = False
