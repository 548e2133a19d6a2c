# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/axis_pump/uvm/uvm_handshake_port.py

"""HandshakePort over cocotb signal handles."""

from __future__ import annotations

import logging
from typing import Any

import cocotb
from cocotb.handle import SimHandleBase
from cocotb.task import Task

from axis_pump.dv import utils_dv
from axis_pump.dv.axis_config import AxisWidths
from axis_pump.dv.axis_item import AxisItem
from axis_pump.dv.handshake_port import HandshakePort, TickSample

from . import utils_uvm
from .uvm_clocking import AxisClocking


class AxisBus:
    """Bound AXI4-Stream signal handles of one interface.

    Signals are looked up as ``<prefix><name>``: tvalid, tready, tdata, tkeep,
    tstrb and tlast are required; tid, tdest and tuser are bound only when
    their width is non-zero.
    """

    def __init__(
        self,
        dut: Any,
        widths: AxisWidths,
        *,
        prefix: str = "s_axis_",
        reset_name: str = "rst_n",
        reset_active_low: bool = True,
    ) -> None:
        self.widths = widths
        self.reset_active_low = reset_active_low
        self.rst = utils_uvm.get_signal(dut, reset_name)
        self.tvalid = utils_uvm.get_signal(dut, f"{prefix}tvalid")
        self.tready = utils_uvm.get_signal(dut, f"{prefix}tready")
        self.payload: dict[str, SimHandleBase] = {
            "data": utils_uvm.get_signal(dut, f"{prefix}tdata"),
            "keep": utils_uvm.get_signal(dut, f"{prefix}tkeep"),
            "strb": utils_uvm.get_signal(dut, f"{prefix}tstrb"),
            "last": utils_uvm.get_signal(dut, f"{prefix}tlast"),
        }
        for name, width in (
            ("id", widths.id_width),
            ("dest", widths.dest_width),
            ("user", widths.user_width),
        ):
            if width:
                self.payload[name] = utils_uvm.get_signal(dut, f"{prefix}t{name}")
        self._get_val = utils_uvm.get_signal_value_int

    def reset_active(self) -> bool:
        """Live reset level; X/Z counts as in reset."""
        v = self._get_val(self.rst.value)
        if v is None:
            return True
        return v == (0 if self.reset_active_low else 1)

    def bit(self, sig: SimHandleBase) -> bool:
        """Live value of a 1-bit line; X/Z reads as 0."""
        return bool(self._get_val(sig.value) or 0)

    def write(self, tr: AxisItem) -> None:
        """Put the payload of ``tr`` on the bus (valid untouched)."""
        for name, sig in self.payload.items():
            sig.value = int(getattr(tr, name))

    def set_valid(self, valid: bool) -> None:
        """Drive tvalid."""
        self.tvalid.value = int(valid)

    def read_item(self) -> AxisItem:
        """Decode the payload currently on the bus."""
        fields: dict[str, Any] = {}
        for name, sig in self.payload.items():
            v = self._get_val(sig.value)
            fields[name] = 0 if v is None else v
        fields["last"] = bool(fields["last"])
        return AxisItem(self.widths, **fields)

    def sample(self, cycle: int) -> TickSample:
        """Lines as seen now (call in ReadOnly after the sampling edge)."""
        reset = self.reset_active()
        valid = self.bit(self.tvalid)
        return TickSample(
            cycle=cycle,
            reset=reset,
            valid=valid,
            ready=self.bit(self.tready),
            item=self.read_item() if valid else None,
        )


class CocotbHandshakePort(HandshakePort):
    """HandshakePort bound to a DUT's stream input.

    One tick is the clocking sample point, where reset and tready are read,
    followed by the drive point of the same cycle, so the driver's writes
    land between sampling edges. A watcher deasserts tvalid as soon as reset
    goes active.

    Example:
        >>> port = CocotbHandshakePort(AxisClocking(dut.clk), AxisBus(dut, widths))
        >>> port.start()
        >>> await AxisDriver(port, source, widths).run()
    """

    def __init__(
        self,
        clocking: AxisClocking,
        bus: AxisBus,
        *,
        name: str = "port",
    ) -> None:
        super().__init__()
        self.logger: logging.Logger = utils_dv.component_logger(name)
        self.clocking = clocking
        self.bus = bus
        self.cycle: int = 0
        self._reset_s: bool = False
        self._ready_s: bool = False
        self._watcher: Task | None = None

    def start(self) -> None:
        """Start the reset watcher."""
        if self._watcher is None:
            self._watcher = cocotb.start_soon(self._watch_reset())

    def stop(self) -> None:
        """Stop the reset watcher."""
        if self._watcher is not None:
            self._watcher.cancel()
            self._watcher = None

    async def _watch_reset(self) -> None:
        while True:
            await self.bus.rst.value_change
            if self.bus.reset_active():
                self.bus.set_valid(False)

    async def tick(self) -> None:
        await self.clocking.sample_edge()
        self.cycle += 1
        reset = self.bus.reset_active()
        if reset and not self._reset_s:
            self.reset_epoch += 1
            self.logger.debug("reset seen at cycle %d", self.cycle)
        self._reset_s = reset
        self._ready_s = self.bus.bit(self.bus.tready)
        await self.clocking.drive_after_sample()

    def in_reset(self) -> bool:
        return self._reset_s

    def poll_ready(self) -> bool:
        return self._ready_s

    def drive(self, item: AxisItem) -> None:
        self.bus.write(item)
        self.bus.set_valid(not self.bus.reset_active())

    def idle(self) -> None:
        self.bus.set_valid(False)
