# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/axis_pump/dv/axis_monitor.py

"""Passive handshake monitor and protocol checker.

The monitor consumes one TickSample per tick and does not care where the
samples come from: the software bench feeds it from a kernel edge hook, the
cocotb bench from a ReadOnly sample after each rising edge.

Checked rules:
    valid_in_reset: valid is low on every tick that samples reset.
    valid_after_reset: valid is low on the release tick and the tick after.
    valid_dropped_before_ready: once valid is high without ready, it stays
        high on the next tick (unless reset intervenes).
    payload_changed_while_stalled: the payload does not change while waiting
        for ready.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from . import utils_dv
from .axis_item import AxisItem
from .handshake_port import TickSample

# Number of non-reset ticks after a reset during which valid must stay low
RELEASE_TICKS = 2


@dataclass(frozen=True)
class Violation:
    """One protocol rule broken at one tick."""

    cycle: int
    rule: str
    message: str


class AxisMonitor:
    """Record the handshake trace, accepted items and protocol violations.

    Attributes:
        trace: Every observed sample, in order.
        transfers: ``(cycle, item)`` for every completed transfer.
        violations: Broken rules, in order.
        stall_cycles: Ticks with valid high and ready low.
        idle_cycles: Ticks out of reset with valid low.
        reset_cycles: Ticks sampling reset.
        last_reset_cycle: Cycle of the most recent reset sample, if any.
    """

    def __init__(self, name: str = "mon", keep_trace: bool = True) -> None:
        self.logger: logging.Logger = utils_dv.component_logger(name)
        self.keep_trace = keep_trace
        self.trace: list[TickSample] = []
        self.transfers: list[tuple[int, AxisItem]] = []
        self.violations: list[Violation] = []
        self.stall_cycles: int = 0
        self.idle_cycles: int = 0
        self.reset_cycles: int = 0
        self.last_reset_cycle: int | None = None
        self._prev: TickSample | None = None
        self._since_release: int | None = None

    @property
    def items(self) -> list[AxisItem]:
        """Accepted items in transfer order."""
        return [tr for _, tr in self.transfers]

    def _flag(self, s: TickSample, rule: str, message: str) -> None:
        v = Violation(s.cycle, rule, message)
        self.violations.append(v)
        self.logger.error("cycle %d: %s: %s", s.cycle, rule, message)

    def observe(self, s: TickSample) -> AxisItem | None:
        """Check and record one tick; return the item accepted at it, if any."""
        prev = self._prev
        self._prev = s
        if self.keep_trace:
            self.trace.append(s)

        if s.reset:
            self.reset_cycles += 1
            self.last_reset_cycle = s.cycle
            self._since_release = 0
            if s.valid:
                self._flag(s, "valid_in_reset", "valid asserted while in reset")
            return None

        if self._since_release is not None:
            if self._since_release < RELEASE_TICKS and s.valid:
                self._flag(
                    s,
                    "valid_after_reset",
                    f"valid asserted {self._since_release} tick(s) after reset",
                )
            self._since_release += 1
            if self._since_release >= RELEASE_TICKS:
                self._since_release = None

        if prev is not None and prev.valid and not prev.ready and not prev.reset:
            if not s.valid:
                self._flag(
                    s, "valid_dropped_before_ready", "valid deasserted without ready"
                )
            elif s.item != prev.item:
                self._flag(
                    s,
                    "payload_changed_while_stalled",
                    f"payload {prev.item} changed to {s.item}",
                )

        if not s.valid:
            self.idle_cycles += 1
            return None
        if not s.ready:
            self.stall_cycles += 1
            return None
        assert s.item is not None, "valid sample without payload"
        self.transfers.append((s.cycle, s.item))
        self.logger.debug("cycle %d: accepted %s", s.cycle, s.item)
        return s.item

    def idle_gaps(self) -> list[int]:
        """Idle ticks between each transfer and the next valid assertion."""
        gaps: list[int] = []
        count: int | None = None
        for s in self.trace:
            if s.reset:
                count = None
                continue
            if s.valid:
                if count is not None:
                    gaps.append(count)
                count = 0 if s.ready else None
            elif count is not None:
                count += 1
        return gaps

    def summary(self) -> dict[str, int]:
        """Counters for logging/JSON."""
        return {
            "transfers": len(self.transfers),
            "stall_cycles": self.stall_cycles,
            "idle_cycles": self.idle_cycles,
            "reset_cycles": self.reset_cycles,
            "violations": len(self.violations),
        }
