# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/axis_pump/uvm/uvm_reset_driver.py

"""Bench reset generator."""

from __future__ import annotations

from typing import Any

import pyuvm
from cocotb.triggers import NextTimeStep, ReadWrite

from . import utils_uvm
from .uvm_clocking import AxisClocking


class AxisUvmResetDriver(pyuvm.uvm_component):
    """Synchronous reset pulse aligned to the drive edge.

    Reset Sequence:
        1. Assert reset at time 0 using a non-blocking write
        2. Hold reset for reset_cycles drive edges
        3. Deassert reset on a drive edge

    ``pulse_reset(cycles)`` asserts reset again mid-run.

    Configuration (via config_db):
        reset_enable (bool): Enable reset driver (default: True)
        reset_name (str): Name of reset signal (default: "rst_n")
        reset_active_low (bool): True for active-low reset (default: True)
        reset_cycles (int): Number of clock cycles to hold reset (default: 10)
    """

    def __init__(self, name: str, parent: pyuvm.uvm_component | None) -> None:
        super().__init__(name, parent)
        utils_uvm.configure_component_logger(self)
        self.clocking: AxisClocking
        self._dut: Any = None
        self.reset_enable: bool = True
        self.reset_name: str = "rst_n"
        self.reset_active_low: bool = True
        self.reset_cycles: int = 10

    def end_of_elaboration_phase(self) -> None:
        self.logger.debug("end_of_elaboration_phase begin")
        super().end_of_elaboration_phase()
        self.clocking = AxisClocking.from_config(self)
        self._dut = utils_uvm.uvm_config_db_get(self, "dut")
        self._reset_pull_config()
        self.logger.debug("end_of_elaboration_phase end")

    def _reset_pull_config(self) -> None:
        """Read per-instance config from uvm_config_db (once) with defaults."""
        v = utils_uvm.uvm_config_db_get_try(self, "reset_enable")
        if isinstance(v, bool):
            self.reset_enable = v
        v = utils_uvm.uvm_config_db_get_try(self, "reset_name")
        if isinstance(v, str) and v:
            self.reset_name = v
        v = utils_uvm.uvm_config_db_get_try(self, "reset_active_low")
        if isinstance(v, bool):
            self.reset_active_low = v
        v = utils_uvm.uvm_config_db_get_try(self, "reset_cycles")
        if isinstance(v, int):
            self.reset_cycles = v
        if self.reset_enable and self.reset_cycles < 0:
            raise ValueError("reset_cycles must be >= 0")

    async def run_phase(self) -> None:
        self.logger.debug("run_phase begin")
        if not self.reset_enable:
            self.logger.debug(
                "Reset '%s' disabled (assumed driven in HDL).", self.reset_name
            )
            return
        rst = utils_uvm.get_signal(self._dut, self.reset_name)
        rst.value = self._level(True)
        await ReadWrite()  # like an NBA at t=0
        await NextTimeStep()
        await self.pulse_reset(self.reset_cycles)
        self.logger.debug("run_phase end")

    def _level(self, active: bool) -> int:
        return int(active) ^ int(self.reset_active_low)

    async def pulse_reset(self, cycles: int) -> None:
        """Assert reset now and release it after ``cycles`` drive edges."""
        self.logger.debug("pulse_reset begin: %d cycles", cycles)
        rst = utils_uvm.get_signal(self._dut, self.reset_name)
        rst.value = self._level(True)
        for _ in range(max(0, cycles)):
            await self.clocking.drive_edge()
        rst.value = self._level(False)
        self.logger.debug("pulse_reset end")
