# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/axis_pump/uvm/uvm_ready_driver.py

"""Receiver-side tready driver for the stream sink."""

from __future__ import annotations

import random
from typing import Any

import pyuvm

from . import utils_uvm
from .uvm_clocking import AxisClocking


class AxisUvmReadyDriver(pyuvm.uvm_component):
    """Drive tready with probability ``ready_prob`` on every drive edge.

    Configuration (via config_db):
        ready_prob (float): Probability of ready per cycle (default: 0.5)
        axis_prefix (str): Signal name prefix (default "s_axis_")
    """

    def __init__(self, name: str, parent: pyuvm.uvm_component | None) -> None:
        super().__init__(name, parent)
        utils_uvm.configure_component_logger(self)
        self.clocking: AxisClocking
        self._dut: Any = None
        self.ready_prob: float = 0.5
        self.prefix: str = "s_axis_"
        # cocotb seeds the global random module from the run seed
        self.rng = random.Random(random.getrandbits(32))

    def end_of_elaboration_phase(self) -> None:
        self.logger.debug("end_of_elaboration_phase begin")
        super().end_of_elaboration_phase()
        self.clocking = AxisClocking.from_config(self)
        self._dut = utils_uvm.uvm_config_db_get(self, "dut")
        v = utils_uvm.uvm_config_db_get_try(self, "ready_prob")
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            self.ready_prob = float(v)
        v = utils_uvm.uvm_config_db_get_try(self, "axis_prefix")
        if isinstance(v, str):
            self.prefix = v
        if not 0.0 <= self.ready_prob <= 1.0:
            raise ValueError(f"ready_prob must be in [0.0, 1.0], got {self.ready_prob}")
        self.logger.debug("end_of_elaboration_phase end")

    async def run_phase(self) -> None:
        self.logger.debug("run_phase begin")
        tready = utils_uvm.get_signal(self._dut, f"{self.prefix}tready")
        tready.value = 0
        while True:
            await self.clocking.drive_edge()
            tready.value = int(self.rng.random() < self.ready_prob)
