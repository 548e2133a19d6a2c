# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/axis_pump/uvm/uvm_monitor.py

"""Passive stream monitor feeding the kernel-independent protocol checker."""

from __future__ import annotations

from typing import Any

import pyuvm

from axis_pump.dv.axis_config import AxisWidths
from axis_pump.dv.axis_monitor import AxisMonitor

from . import utils_uvm
from .uvm_clocking import AxisClocking
from .uvm_handshake_port import AxisBus
from .uvm_item import AxisSeqItem


class AxisUvmMonitor(pyuvm.uvm_monitor):
    """Sample the bus after every rising edge and publish accepted beats.

    Each sample goes through an AxisMonitor, which keeps the transfer list
    and the protocol violations; every accepted beat is also written to
    ``ap`` as an AxisSeqItem.

    Configuration (via config_db):
        axis_widths (AxisWidths): Interface widths (required)
        reset_name (str), reset_active_low (bool): Reset line
        axis_prefix (str): Signal name prefix (default "s_axis_")
    """

    def __init__(self, name: str, parent: pyuvm.uvm_component | None) -> None:
        super().__init__(name, parent)
        utils_uvm.configure_component_logger(self)
        self.clocking: AxisClocking
        self._dut: Any = None
        self.ap: pyuvm.uvm_analysis_port
        self.checker = AxisMonitor(name, keep_trace=False)
        self.bus: AxisBus
        self.cycle: int = 0

    def build_phase(self) -> None:
        self.logger.debug("build_phase begin")
        super().build_phase()
        self.ap = pyuvm.uvm_analysis_port("ap", self)
        self.logger.debug("build_phase end")

    def end_of_elaboration_phase(self) -> None:
        self.logger.debug("end_of_elaboration_phase begin")
        super().end_of_elaboration_phase()
        self.clocking = AxisClocking.from_config(self)
        self._dut = utils_uvm.uvm_config_db_get(self, "dut")
        widths = utils_uvm.uvm_config_db_get(self, "axis_widths")
        if not isinstance(widths, AxisWidths):
            raise TypeError(f"axis_widths must be AxisWidths, got {widths!r}")
        reset_name = utils_uvm.uvm_config_db_get_try(self, "reset_name")
        active_low = utils_uvm.uvm_config_db_get_try(self, "reset_active_low")
        prefix = utils_uvm.uvm_config_db_get_try(self, "axis_prefix")
        self.bus = AxisBus(
            self._dut,
            widths,
            prefix=prefix if isinstance(prefix, str) else "s_axis_",
            reset_name=reset_name if isinstance(reset_name, str) else "rst_n",
            reset_active_low=active_low if isinstance(active_low, bool) else True,
        )
        self.logger.debug("end_of_elaboration_phase end")

    async def run_phase(self) -> None:
        self.logger.debug("run_phase begin")
        while True:
            await self.clocking.sample_edge()
            self.cycle += 1
            tr = self.checker.observe(self.bus.sample(self.cycle))
            if tr is not None:
                self.ap.write(AxisSeqItem(f"mon{len(self.checker.transfers)}", tr))

    def report_phase(self) -> None:
        self.logger.info("monitor summary: %s", self.checker.summary())
