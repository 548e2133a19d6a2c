# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/axis_pump/dv/axis_item.py

"""Immutable stream transaction (one beat)."""

from __future__ import annotations

import json
from dataclasses import dataclass, fields
from typing import Iterable

from .axis_config import AxisWidths
from .errors import ProtocolMismatchError
from .utils_dv import mask


@dataclass(frozen=True, eq=True)
class AxisItem:
    """One beat of an AXI4-Stream-like transfer.

    The item is immutable once built and carries the widths it was built for,
    so a driver can refuse items meant for a different interface. Every field
    must fit its width; nothing is truncated.

    ``keep`` and ``strb`` default to all ones (every byte valid).

    Example:
        >>> w = AxisWidths(data_width=16, id_width=2)
        >>> tr = AxisItem(w, data=0xBEEF, id=3)
        >>> tr.keep
        3
    """

    widths: AxisWidths
    data: int
    keep: int | None = None
    strb: int | None = None
    last: bool = True
    id: int = 0
    dest: int = 0
    user: int = 0

    def __post_init__(self) -> None:
        w = self.widths
        if self.keep is None:
            object.__setattr__(self, "keep", w.byte_mask)
        if self.strb is None:
            object.__setattr__(self, "strb", self.keep)
        self._check("data", self.data, w.data_width)
        self._check("keep", self.keep, w.byte_width)
        self._check("strb", self.strb, w.byte_width)
        self._check("id", self.id, w.id_width)
        self._check("dest", self.dest, w.dest_width)
        self._check("user", self.user, w.user_width)
        if not isinstance(self.last, bool):
            raise ProtocolMismatchError(f"last must be a bool, got {self.last!r}")

    @staticmethod
    def _check(name: str, value: object, width: int) -> None:
        if not isinstance(value, int) or isinstance(value, bool):
            raise ProtocolMismatchError(f"{name} must be an int, got {value!r}")
        if not 0 <= value <= mask(width):
            raise ProtocolMismatchError(
                f"{name}={value:#x} does not fit in {width} bit(s)"
            )

    @classmethod
    def payload_fields(cls) -> tuple[str, ...]:
        """Fields presented on the wire (everything but ``widths``)."""
        return tuple(f.name for f in fields(cls) if f.name != "widths")

    def to_dict(self, names: Iterable[str] | None = None) -> dict[str, object]:
        """Structured view for logging/JSON."""
        return {f: getattr(self, f) for f in (names or self.payload_fields())}

    def __str__(self) -> str:
        return json.dumps(self.to_dict(), sort_keys=True)
