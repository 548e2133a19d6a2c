# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/axis_pump/uvm/uvm_clocking.py

"""Stream interface clocking: clock generation plus sample and drive edges."""

from __future__ import annotations

from typing import Any, cast

import cocotb
import pyuvm
from cocotb.clock import Clock
from cocotb.handle import LogicObject, SimHandleBase
from cocotb.task import Task
from cocotb.triggers import NextTimeStep, ReadOnly, Timer

from . import utils_uvm


class AxisClocking:
    """Clock of one stream interface and where the bench touches it.

    Every bench process samples the interface in the ReadOnly phase after a
    rising edge and writes it at the drive point: the falling edge, or
    ``drive_skew`` of a period after the rising edge when
    ``drive_falling_edge`` is False. Writes therefore never coincide with a
    sampling edge, whichever process wakes first.

    Configuration (via config_db, see ``from_config``):
        clock_name (str): Clock signal (default: "clk")
        clock_period_ps (int): Period in picoseconds (default: 1000)
        drive_falling_edge (bool): Drive on the falling edge (default: True)
        drive_skew (float): Fraction of a period after the rising edge to
                            drive at when drive_falling_edge is False
                            (default: 0.2)

    Example:
        >>> clocking = AxisClocking(dut.clk, 2_000)
        >>> clocking.start()
        >>> await clocking.sample_edge()
        >>> tready = dut.s_axis_tready.value
    """

    def __init__(
        self,
        clk: SimHandleBase,
        period_ps: int = 1_000,
        *,
        drive_falling_edge: bool = True,
        drive_skew: float = 0.2,
    ) -> None:
        if period_ps <= 0:
            raise ValueError(f"clock_period_ps must be > 0, got {period_ps}")
        if not 0.0 <= drive_skew < 1.0:
            raise ValueError(f"drive_skew must be in [0.0, 1.0), got {drive_skew}")
        self.clk = clk
        self.period_ps = period_ps
        self.drive_falling_edge = drive_falling_edge
        self.skew_ps: int = 0 if drive_falling_edge else int(period_ps * drive_skew)
        self._task: Task | None = None

    @classmethod
    def from_config(cls, comp: pyuvm.uvm_component) -> AxisClocking:
        """Bind the clock named in ``comp``'s config_db scope."""
        dut: Any = utils_uvm.uvm_config_db_get(comp, "dut")
        name = utils_uvm.uvm_config_db_get_try(comp, "clock_name")
        period = utils_uvm.uvm_config_db_get_try(comp, "clock_period_ps")
        falling = utils_uvm.uvm_config_db_get_try(comp, "drive_falling_edge")
        skew = utils_uvm.uvm_config_db_get_try(comp, "drive_skew")
        return cls(
            utils_uvm.get_signal(dut, name if isinstance(name, str) and name else "clk"),
            period if isinstance(period, int) else 1_000,
            drive_falling_edge=falling if isinstance(falling, bool) else True,
            drive_skew=float(skew) if isinstance(skew, (int, float)) else 0.2,
        )

    def start(self, start_high: bool = False) -> None:
        """Toggle the clock from the bench (skip when the HDL drives it)."""
        if self._task is None:
            clk = cast(LogicObject, self.clk)
            self._task = cocotb.start_soon(
                Clock(clk, self.period_ps, unit="ps").start(start_high=start_high)
            )

    def stop(self) -> None:
        if self._task is not None:
            self._task.cancel()
            self._task = None

    async def sample_edge(self) -> None:
        """Wait for the rising edge and the read-only phase after it."""
        await self.clk.rising_edge
        await ReadOnly()

    async def drive_after_sample(self) -> None:
        """Move from a sample point to the drive point of the same cycle."""
        if self.drive_falling_edge:
            await self.clk.falling_edge
        elif self.skew_ps > 0:
            await Timer(self.skew_ps, unit="ps")
        else:
            await NextTimeStep()

    async def drive_edge(self) -> None:
        """Wait for the next drive point."""
        if self.drive_falling_edge:
            await self.clk.falling_edge
        else:
            await self.clk.rising_edge
            if self.skew_ps > 0:
                await Timer(self.skew_ps, unit="ps")
