# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/axis_pump/uvm/uvm_item.py

"""Sequence item carrying one immutable AxisItem."""

from __future__ import annotations

import json

import pyuvm

from axis_pump.dv.axis_item import AxisItem


class AxisSeqItem(pyuvm.uvm_sequence_item):
    """pyuvm envelope for an AxisItem.

    The sequencer handshake needs a mutable uvm_sequence_item; the payload
    itself stays immutable and is set once, between start_item and
    finish_item.
    """

    def __init__(self, name: str = "tr", tr: AxisItem | None = None) -> None:
        super().__init__(name)
        self.tr: AxisItem | None = tr

    def to_dict(self) -> dict[str, object]:
        """Structured view for logging/JSON."""
        return self.tr.to_dict() if self.tr is not None else {}

    def __str__(self) -> str:
        return json.dumps(self.to_dict(), sort_keys=True)

