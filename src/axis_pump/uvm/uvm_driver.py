# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/axis_pump/uvm/uvm_driver.py

"""pyuvm driver running the core AxisDriver against a DUT."""

from __future__ import annotations

import random
from typing import Any

import pyuvm
from cocotb.triggers import NextTimeStep, ReadWrite

from axis_pump.dv.axis_config import AxisWidths
from axis_pump.dv.axis_driver import AxisDriver
from axis_pump.dv.axis_item import AxisItem

from . import utils_uvm
from .uvm_clocking import AxisClocking
from .uvm_handshake_port import AxisBus, CocotbHandshakePort
from .uvm_item import AxisSeqItem


class SeqItemSource:
    """Adapt a pyuvm seq_item_port to the driver's ItemSource."""

    def __init__(self, seq_item_port: Any) -> None:
        self.seq_item_port = seq_item_port

    async def get_next_item(self) -> AxisItem:
        """Unwrap the AxisItem of the next sequence item."""
        item: AxisSeqItem = await self.seq_item_port.get_next_item()
        return item.tr  # type: ignore[return-value]

    def item_done(self) -> None:
        """Complete the current sequence item."""
        self.seq_item_port.item_done()


class AxisUvmDriver(pyuvm.uvm_driver):
    """Stream driver component.

    The component only binds things: the protocol itself (reset hold,
    release tick, valid/ready hold, replay after reset, idle gaps) is the
    kernel-independent AxisDriver running over a CocotbHandshakePort.

    Configuration (via config_db):
        axis_widths (AxisWidths): Interface widths (required)
        min_delay / max_delay (int): Post-transfer delay bounds (default 1/1)
        reset_name (str), reset_active_low (bool): Reset line
        axis_prefix (str): Signal name prefix (default "s_axis_")
    """

    def __init__(self, name: str, parent: pyuvm.uvm_component | None) -> None:
        super().__init__(name, parent)
        utils_uvm.configure_component_logger(self)
        self.widths: AxisWidths
        self.min_delay: int = 1
        self.max_delay: int = 1
        self.reset_name: str = "rst_n"
        self.reset_active_low: bool = True
        self.prefix: str = "s_axis_"
        self.clocking: AxisClocking
        self.port: CocotbHandshakePort
        self.core: AxisDriver

    def end_of_elaboration_phase(self) -> None:
        self.logger.debug("end_of_elaboration_phase begin")
        super().end_of_elaboration_phase()
        self.clocking = AxisClocking.from_config(self)
        self._driver_pull_config()
        bus = AxisBus(
            utils_uvm.uvm_config_db_get(self, "dut"),
            self.widths,
            prefix=self.prefix,
            reset_name=self.reset_name,
            reset_active_low=self.reset_active_low,
        )
        self.port = CocotbHandshakePort(
            self.clocking,
            bus,
            name=f"{self.get_name()}.port",
        )
        # cocotb seeds the global random module from the run seed
        self.core = AxisDriver(
            self.port,
            SeqItemSource(self.seq_item_port),
            self.widths,
            random.Random(random.getrandbits(32)),
            name=self.get_name(),
        )
        self.core.configure(self.min_delay, self.max_delay)
        self.logger.debug("end_of_elaboration_phase end")

    def _driver_pull_config(self) -> None:
        """Read per-instance config from uvm_config_db (once) with defaults."""
        widths = utils_uvm.uvm_config_db_get(self, "axis_widths")
        if not isinstance(widths, AxisWidths):
            raise TypeError(f"axis_widths must be AxisWidths, got {widths!r}")
        self.widths = widths
        v = utils_uvm.uvm_config_db_get_try(self, "min_delay")
        if isinstance(v, int):
            self.min_delay = v
        v = utils_uvm.uvm_config_db_get_try(self, "max_delay")
        if isinstance(v, int):
            self.max_delay = v
        v = utils_uvm.uvm_config_db_get_try(self, "reset_name")
        if isinstance(v, str) and v:
            self.reset_name = v
        v = utils_uvm.uvm_config_db_get_try(self, "reset_active_low")
        if isinstance(v, bool):
            self.reset_active_low = v
        v = utils_uvm.uvm_config_db_get_try(self, "axis_prefix")
        if isinstance(v, str):
            self.prefix = v

    async def run_phase(self) -> None:
        self.logger.debug("run_phase begin")
        await self.apply_initial_dut_inputs()
        self.port.start()
        try:
            await self.core.run()
        finally:
            self.port.stop()

    async def apply_initial_dut_inputs(self) -> None:
        """Deassert tvalid at time 0 and advance one delta cycle."""
        self.logger.debug("apply_initial_dut_inputs begin")
        self.port.idle()
        await ReadWrite()  # like an NBA at t=0
        await NextTimeStep()
        self.logger.debug("apply_initial_dut_inputs end")

    def report_phase(self) -> None:
        self.logger.info(
            "%d transfers, %d replayed after reset",
            self.core.item_count,
            self.core.replay_count,
        )
