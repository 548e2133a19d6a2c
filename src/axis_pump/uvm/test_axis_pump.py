# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/axis_pump/uvm/test_axis_pump.py

"""cocotb/pyuvm tests driving the axis_sink DUT."""

from __future__ import annotations

import logging

import cocotb
import pyuvm
from cocotb.triggers import Timer
from pyuvm import ConfigDB

from axis_pump.dv import utils_cli, utils_dv
from axis_pump.dv.axis_config import AxisWidths, validate_model

from . import utils_uvm
from .uvm_clocking import AxisClocking
from .uvm_env import AxisUvmEnv
from .uvm_reset_driver import AxisUvmResetDriver
from .uvm_sequence import AxisSequence


@pyuvm.test()
class AxisBaseTest(pyuvm.uvm_test):
    """Pump SEQ_LEN random beats into the sink and check the handshake.

    UVM Phases:
        build_phase: Publish DUT and settings, create reset driver and env
        start_of_simulation_phase: Start the bench clock
        run_phase: Run one AxisSequence, then drain
        check_phase: Protocol violations, scoreboard and DUT beat count

    Configuration Sources (precedence: env > plusargs > defaults):
        Interface: DATA_WIDTH, ID_WIDTH, DEST_WIDTH, USER_WIDTH
        Pump: SEQ_LEN, MAX_PACKET_BEATS, MIN_DELAY, MAX_DELAY
        Receiver: READY_PROB
        Clock: CLOCK_ENABLE, CLOCK_NAME, CLOCK_PERIOD_PS, DRIVE_FALLING_EDGE
        Reset: RESET_NAME, RESET_ACTIVE_LOW, RESET_CYCLES
        Test: DRAIN_TIME_PS
    """

    def __init__(self, name: str, parent: pyuvm.uvm_component | None) -> None:
        super().__init__(name, parent)
        utils_uvm.configure_component_logger(self)
        self.clocking: AxisClocking | None = None
        self.reset_driver: AxisUvmResetDriver
        self.env: AxisUvmEnv
        self.widths: AxisWidths
        self.seq: AxisSequence | None = None

    def build_phase(self) -> None:
        self.logger.debug("build_phase begin")
        utils_uvm.uvm_config_db_set(self, "*", "dut", cocotb.top)
        utils_uvm.apply_factory_overrides_from_plusargs(self.logger)
        super().build_phase()
        self.build_config()
        create = pyuvm.uvm_factory().create_component_by_type
        path = self.get_full_name()
        self.reset_driver = create(
            AxisUvmResetDriver, parent_inst_path=path, name="reset_driver", parent=self
        )
        self.env = create(AxisUvmEnv, parent_inst_path=path, name="env", parent=self)
        self.logger.debug("build_phase end")

    def build_config(self) -> None:
        """Get and set testbench config properties."""
        self.widths = validate_model(
            AxisWidths,
            {
                "data_width": utils_cli.get_int_setting("DATA_WIDTH", 32),
                "id_width": utils_cli.get_int_setting("ID_WIDTH", 4),
                "dest_width": utils_cli.get_int_setting("DEST_WIDTH", 4),
                "user_width": utils_cli.get_int_setting("USER_WIDTH", 1),
            },
        )
        settings: dict[str, object] = {
            "axis_widths": self.widths,
            "min_delay": utils_cli.get_int_setting("MIN_DELAY", 1),
            "max_delay": utils_cli.get_int_setting("MAX_DELAY", 4),
            "ready_prob": utils_cli.get_float_setting("READY_PROB", 0.7),
            "clock_name": utils_cli.get_str_setting("CLOCK_NAME", "clk"),
            "clock_period_ps": utils_cli.get_int_setting("CLOCK_PERIOD_PS", 1_000),
            "drive_falling_edge": utils_cli.get_bool_setting("DRIVE_FALLING_EDGE", True),
            "reset_name": utils_cli.get_str_setting("RESET_NAME", "rst_n"),
            "reset_active_low": utils_cli.get_bool_setting("RESET_ACTIVE_LOW", True),
            "reset_cycles": utils_cli.get_int_setting("RESET_CYCLES", 10),
            "drain_time_ps": utils_cli.get_int_setting("DRAIN_TIME_PS", 10_000),
        }
        for key, value in settings.items():
            utils_uvm.uvm_config_db_set(self, "*", key, value)
        utils_uvm.uvm_config_db_set(
            self, "", "drain_time_ps", settings["drain_time_ps"]
        )

    def end_of_elaboration_phase(self) -> None:
        self.logger.debug("end_of_elaboration_phase begin")
        super().end_of_elaboration_phase()
        self.set_logging_level_hier(utils_dv.desired_log_level())
        if self.logger.isEnabledFor(logging.DEBUG):
            print(ConfigDB())
        self.logger.debug("end_of_elaboration_phase end")

    def start_of_simulation_phase(self) -> None:
        self.logger.debug("start_of_simulation_phase begin")
        super().start_of_simulation_phase()
        if utils_cli.get_bool_setting("CLOCK_ENABLE", True):
            self.clocking = AxisClocking(
                utils_uvm.get_signal(
                    cocotb.top, utils_cli.get_str_setting("CLOCK_NAME", "clk")
                ),
                utils_cli.get_int_setting("CLOCK_PERIOD_PS", 1_000),
            )
            self.clocking.start()
        self.logger.debug("start_of_simulation_phase end")

    async def run_phase(self) -> None:
        self.logger.debug("run_phase begin")
        self.raise_objection()
        self.seq = AxisSequence("seq", self.widths)
        await self.run_stimulus(self.seq)
        await self.drain()
        self.drop_objection()
        self.logger.debug("run_phase end")

    async def run_stimulus(self, seq: AxisSequence) -> None:
        """Run the sequence to completion."""
        await seq.start(self.env.sqr)

    async def drain(self) -> None:
        """Wait drain_time_ps of simulation time for the last beat to land."""
        dt = utils_uvm.uvm_config_db_get_try(self, "drain_time_ps")
        if isinstance(dt, int) and dt > 0:
            await Timer(dt, unit="ps")

    def check_phase(self) -> None:
        self.logger.debug("check_phase begin")
        super().check_phase()
        assert self.seq is not None, "check_phase before run_phase"
        checker = self.env.mon.checker
        errors: list[str] = [
            f"cycle {v.cycle} {v.rule}: {v.message}" for v in checker.violations
        ]
        if checker.items != self.seq.produced:
            errors.append(
                f"scoreboard: {len(self.seq.produced)} produced, "
                f"{len(checker.items)} accepted, contents differ"
            )
        beat_count = utils_uvm.get_signal_value_int(cocotb.top.beat_count.value)
        expected = self.expected_beat_count()
        if beat_count != expected:
            errors.append(f"DUT counted {beat_count} beats, expected {expected}")
        if errors:
            for e in errors:
                self.logger.error(e)
            self.logger.error("*** TEST FAILED - %d error(s) ***", len(errors))
            raise AssertionError(f"{len(errors)} check(s) failed: {errors[0]}")
        self.logger.info(
            "*** TEST PASSED - %d beats, summary %s ***",
            len(self.seq.produced),
            checker.summary(),
        )
        self.logger.debug("check_phase end")

    def final_phase(self) -> None:
        if self.clocking is not None:
            self.clocking.stop()
        super().final_phase()

    def expected_beat_count(self) -> int:
        """Beats the sink should have counted since its last reset."""
        checker = self.env.mon.checker
        last = checker.last_reset_cycle
        return sum(1 for cycle, _ in checker.transfers if last is None or cycle > last)


@pyuvm.test()
class AxisMidResetTest(AxisBaseTest):
    """Pulse reset while the pump is busy; interrupted beats are re-driven.

    Extra settings: MID_RESET_AT_PS (time of the pulse), MID_RESET_CYCLES.
    """

    async def run_stimulus(self, seq: AxisSequence) -> None:
        task = cocotb.start_soon(seq.start(self.env.sqr))
        period = utils_cli.get_int_setting("CLOCK_PERIOD_PS", 1_000)
        at_ps = utils_cli.get_int_setting("MID_RESET_AT_PS", 60 * period)
        await Timer(at_ps, unit="ps")
        await self.reset_driver.pulse_reset(
            utils_cli.get_int_setting("MID_RESET_CYCLES", 3)
        )
        await task

    def check_phase(self) -> None:
        super().check_phase()
        self.logger.info(
            "replayed after reset: %d", self.env.drv.core.replay_count
        )
