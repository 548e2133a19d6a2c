# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: tests/conftest.py

"""Shared fixtures for the axis_pump test suite."""

from __future__ import annotations

import random
from typing import Any, Callable

import pytest

from axis_pump.dv.axis_config import AxisWidths
from axis_pump.dv.axis_env import AxisEnv

_SETTINGS = (
    "PLUSARGS",
    "COCOTB_PLUSARGS",
    "AXIS_PLUSARGS",
    "SEED",
    "AXIS_SEED",
    "SEQ_LEN",
    "AXIS_SEQ_LEN",
)


@pytest.fixture(autouse=True)
def _clean_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the caller's environment from leaking into bench settings."""
    for name in _SETTINGS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def rng() -> random.Random:
    """Deterministic random source."""
    return random.Random(1234)


@pytest.fixture
def widths() -> AxisWidths:
    """A small interface with every sideband present."""
    return AxisWidths(data_width=16, id_width=2, dest_width=3, user_width=1)


@pytest.fixture
def make_env() -> Callable[..., AxisEnv]:
    """Factory for seeded software benches, always-ready with a short reset."""

    def _make(count: int, **overrides: Any) -> AxisEnv:
        spec: dict[str, Any] = {
            "generator": {"count": count},
            "receiver": {"ready_prob": 1.0},
            "reset": {"reset_cycles": 2},
            "seed": 1,
        }
        spec.update(overrides)
        return AxisEnv.from_dict(spec)

    return _make
