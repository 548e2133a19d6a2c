# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/axis_pump/uvm/uvm_sequence.py

"""Counted constrained-random stream sequence."""

from __future__ import annotations

import logging
import random

import pyuvm

from axis_pump.dv import utils_cli, utils_dv
from axis_pump.dv.axis_config import AxisWidths, GeneratorModel, validate_model
from axis_pump.dv.axis_generator import AxisItemSampler
from axis_pump.dv.axis_item import AxisItem

from .uvm_item import AxisSeqItem


class AxisSequence(pyuvm.uvm_sequence):
    """Generator side of the pump as a pyuvm sequence.

    Execution Flow:
        For each of seq_len items:
            a. start_item(item) - Acquire sequencer grant
            b. item.tr = sampler.sample() - last beat of the run forced last
            c. finish_item(item) - returns after the driver's item_done()

    Attributes:
        seq_len (int): Number of items (SEQ_LEN setting, default 100)
        produced: AxisItems handed to the driver, in order

    Example:
        >>> seq = AxisSequence("seq", widths)
        >>> await seq.start(env.sqr)
    """

    def __init__(
        self,
        name: str = "seq",
        widths: AxisWidths | None = None,
        seq_len: int | None = None,
        max_packet_beats: int | None = None,
    ) -> None:
        super().__init__(name)
        self.logger: logging.Logger = logging.getLogger(f"axis.{name}")
        utils_dv.configure_non_component_logger(self.logger)
        self.widths = widths if widths is not None else AxisWidths()
        model = validate_model(
            GeneratorModel,
            {
                "count": (
                    seq_len
                    if seq_len is not None
                    else utils_cli.get_int_setting("SEQ_LEN", 100)
                ),
                "max_packet_beats": (
                    max_packet_beats
                    if max_packet_beats is not None
                    else utils_cli.get_int_setting("MAX_PACKET_BEATS", 4)
                ),
            },
        )
        self.seq_len: int = model.count
        # cocotb seeds the global random module from the run seed
        self.sampler = AxisItemSampler(
            self.widths, random.Random(random.getrandbits(32)), model.max_packet_beats
        )
        self.produced: list[AxisItem] = []

    async def body(self) -> None:
        self.logger.debug("AxisSequence body begin: length = %d", self.seq_len)
        self.produced = []
        for i in range(self.seq_len):
            item = AxisSeqItem(f"tr{i}")
            await self.start_item(item)
            item.tr = self.sampler.sample(force_last=i == self.seq_len - 1)
            self.produced.append(item.tr)
            await self.finish_item(item)
        self.logger.debug("AxisSequence body end")
