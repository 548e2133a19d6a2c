# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: tests/test_item.py

from __future__ import annotations

import dataclasses
import json

import pytest

from axis_pump.dv.axis_config import AxisWidths
from axis_pump.dv.axis_item import AxisItem
from axis_pump.dv.errors import ProtocolMismatchError


def test_keep_and_strb_default_to_all_bytes(widths: AxisWidths) -> None:
    tr = AxisItem(widths, data=0xBEEF)
    assert tr.keep == 0b11
    assert tr.strb == 0b11
    assert tr.last is True
    assert (tr.id, tr.dest, tr.user) == (0, 0, 0)


def test_strb_follows_explicit_keep(widths: AxisWidths) -> None:
    tr = AxisItem(widths, data=1, keep=0b01)
    assert tr.strb == 0b01
    tr = AxisItem(widths, data=1, keep=0b11, strb=0b10)
    assert tr.strb == 0b10


def test_fields_at_their_limits(widths: AxisWidths) -> None:
    tr = AxisItem(widths, data=0xFFFF, id=3, dest=7, user=1, last=False)
    assert tr.data == 0xFFFF
    assert tr.dest == 7


@pytest.mark.parametrize(
    "kwargs",
    [
        {"data": 1 << 16},
        {"data": -1},
        {"data": 1, "keep": 0b100},
        {"data": 1, "strb": 0b100},
        {"data": 1, "id": 4},
        {"data": 1, "dest": 8},
        {"data": 1, "user": 2},
        {"data": True},
        {"data": 1.0},
        {"data": 1, "last": 1},
    ],
)
def test_out_of_range_fields_rejected(widths: AxisWidths, kwargs: dict) -> None:
    with pytest.raises(ProtocolMismatchError):
        AxisItem(widths, **kwargs)


def test_absent_sidebands_must_be_zero() -> None:
    w = AxisWidths(data_width=8)
    with pytest.raises(ProtocolMismatchError, match="id"):
        AxisItem(w, data=0, id=1)


def test_items_are_immutable(widths: AxisWidths) -> None:
    tr = AxisItem(widths, data=5)
    with pytest.raises(dataclasses.FrozenInstanceError):
        tr.data = 6  # type: ignore[misc]


def test_value_equality(widths: AxisWidths) -> None:
    assert AxisItem(widths, data=5) == AxisItem(widths, data=5)
    assert AxisItem(widths, data=5) != AxisItem(widths, data=5, last=False)
    assert AxisItem(widths, data=5) != AxisItem(AxisWidths(data_width=16), data=5)


def test_structured_views(widths: AxisWidths) -> None:
    tr = AxisItem(widths, data=0x1234, id=2)
    d = tr.to_dict()
    assert "widths" not in d
    assert list(d) == list(AxisItem.payload_fields())
    assert tr.to_dict(["data", "id"]) == {"data": 0x1234, "id": 2}
    assert json.loads(str(tr))["data"] == 0x1234
