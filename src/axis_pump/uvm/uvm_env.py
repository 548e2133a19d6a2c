# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/axis_pump/uvm/uvm_env.py

"""Stream bench environment (UVM-style, factory-first)."""

from __future__ import annotations

import pyuvm

from . import utils_uvm
from .uvm_driver import AxisUvmDriver
from .uvm_monitor import AxisUvmMonitor
from .uvm_ready_driver import AxisUvmReadyDriver


class AxisUvmEnv(pyuvm.uvm_env):
    """Build and connect the stream driver, its sequencer, monitor and receiver.

    Components:
        sqr: Sequencer the test starts sequences on
        drv: AxisUvmDriver (pulls from sqr)
        mon: AxisUvmMonitor (protocol checker, publishes accepted beats)
        ready_driver: AxisUvmReadyDriver (receiver backpressure)

    Every component is created through the factory, so tests can override
    any of them by type.
    """

    def __init__(self, name: str, parent: pyuvm.uvm_component | None) -> None:
        super().__init__(name, parent)
        utils_uvm.configure_component_logger(self)
        self.sqr: pyuvm.uvm_sequencer
        self.drv: AxisUvmDriver
        self.mon: AxisUvmMonitor
        self.ready_driver: AxisUvmReadyDriver

    def build_phase(self) -> None:
        self.logger.debug("build_phase begin")
        super().build_phase()
        create = pyuvm.uvm_factory().create_component_by_type
        parent_inst_path = self.get_full_name()
        self.sqr = create(
            pyuvm.uvm_sequencer,
            parent_inst_path=parent_inst_path,
            name="sqr",
            parent=self,
        )
        self.drv = create(
            AxisUvmDriver, parent_inst_path=parent_inst_path, name="drv", parent=self
        )
        self.mon = create(
            AxisUvmMonitor, parent_inst_path=parent_inst_path, name="mon", parent=self
        )
        self.ready_driver = create(
            AxisUvmReadyDriver,
            parent_inst_path=parent_inst_path,
            name="ready_driver",
            parent=self,
        )
        self.logger.debug("build_phase end")

    def connect_phase(self) -> None:
        self.logger.debug("connect_phase begin")
        super().connect_phase()
        self.drv.seq_item_port.connect(self.sqr.seq_item_export)
        self.logger.debug("connect_phase end")
