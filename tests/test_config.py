# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: tests/test_config.py

"""Configuration models, error taxonomy and settings helpers."""

from __future__ import annotations

import json
import logging
import random
from pathlib import Path

import pytest

from axis_pump.dv import utils_cli, utils_dv
from axis_pump.dv.axis_config import (
    AxisWidths,
    BenchModel,
    DelayPolicy,
    GeneratorModel,
    ReceiverModel,
    validate_model,
)
from axis_pump.dv.errors import (
    AxisPumpError,
    ConfigurationError,
    ProtocolMismatchError,
)


def test_error_hierarchy() -> None:
    assert issubclass(ConfigurationError, AxisPumpError)
    assert issubclass(ConfigurationError, ValueError)
    assert issubclass(ProtocolMismatchError, AxisPumpError)
    assert issubclass(ProtocolMismatchError, ValueError)


def test_widths_defaults_and_derived() -> None:
    w = AxisWidths()
    assert w.data_width == 32
    assert w.byte_width == 4
    assert w.byte_mask == 0xF
    assert w.data_max == 0xFFFF_FFFF
    assert (w.id_width, w.dest_width, w.user_width) == (0, 0, 0)


@pytest.mark.parametrize(
    "data",
    [
        {"data_width": 12},
        {"data_width": 0},
        {"data_width": 32, "id_width": -1},
        {"data_width": True},
        {"data_width": "32"},
        {"data_width": 32, "bogus": 1},
    ],
)
def test_widths_rejected(data: dict) -> None:
    with pytest.raises(ConfigurationError):
        validate_model(AxisWidths, data)


def test_widths_are_hashable_and_compare_by_value() -> None:
    assert AxisWidths(data_width=8) == AxisWidths(data_width=8)
    assert AxisWidths(data_width=8) != AxisWidths(data_width=16)
    assert len({AxisWidths(data_width=8), AxisWidths(data_width=8)}) == 1


@pytest.mark.parametrize(
    "lo, hi",
    [(0, 1), (3, 2), (-1, 4), (True, 2), (1.0, 2)],
)
def test_delay_bounds_rejected(lo: object, hi: object) -> None:
    with pytest.raises(ConfigurationError):
        validate_model(DelayPolicy, {"min_delay": lo, "max_delay": hi})


def test_delay_sample_range(rng: random.Random) -> None:
    p = DelayPolicy(min_delay=2, max_delay=5)
    draws = {p.sample(rng) for _ in range(500)}
    assert draws == {1, 2, 3, 4}
    assert DelayPolicy().sample(rng) == 0


def test_generator_count_required_and_strict() -> None:
    with pytest.raises(ConfigurationError, match="count"):
        validate_model(GeneratorModel, {})
    for bad in (-1, "3", 2.0, None):
        with pytest.raises(ConfigurationError):
            validate_model(GeneratorModel, {"count": bad})
    assert validate_model(GeneratorModel, {"count": 0}).count == 0


def test_receiver_probability_bounds() -> None:
    assert validate_model(ReceiverModel, {"ready_prob": 1.0}).ready_prob == 1.0
    with pytest.raises(ConfigurationError):
        validate_model(ReceiverModel, {"ready_prob": 1.5})


def test_bench_model_nested(tmp_path: Path) -> None:
    m = validate_model(
        BenchModel,
        {
            "widths": {"data_width": 8},
            "driver": {"delay": {"min_delay": 2, "max_delay": 3}},
            "generator": {"count": 10},
            "seed": 7,
        },
    )
    assert m.widths.byte_width == 1
    assert m.driver.delay.max_delay == 3
    assert m.driver.wait_for_reset is True
    assert m.reset.reset_cycles == 4
    m.save(tmp_path, "bench")
    saved = json.loads((tmp_path / "bench.json").read_text())
    assert saved["generator"]["count"] == 10
    assert "BenchModel" in str(m)


def test_bench_model_requires_generator() -> None:
    with pytest.raises(ConfigurationError):
        validate_model(BenchModel, {"seed": 1})


def test_settings_precedence(monkeypatch: pytest.MonkeyPatch) -> None:
    assert utils_cli.get_int_setting("SEQ_LEN", 100) == 100
    monkeypatch.setenv("PLUSARGS", "+SEQ_LEN=0x10 +FAST +READY_PROB=0.25")
    assert utils_cli.get_int_setting("SEQ_LEN", 100) == 16
    assert utils_cli.get_bool_setting("FAST", False) is True
    assert utils_cli.get_float_setting("READY_PROB", 0.5) == 0.25
    monkeypatch.setenv("AXIS_SEQ_LEN", "7")
    assert utils_cli.get_int_setting("SEQ_LEN", 100) == 7
    monkeypatch.setenv("SEQ_LEN", "9")
    assert utils_cli.get_int_setting("SEQ_LEN", 100) == 9
    assert list(utils_cli.iter_plusargs())[1] == "+FAST"


def test_bad_setting_falls_back(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SEQ_LEN", "lots")
    assert utils_cli.get_int_setting("SEQ_LEN", 3) == 3
    monkeypatch.setenv("PLUSARGS", "+FAST=maybe")
    assert utils_cli.get_bool_setting("FAST", False) is False


def test_log_level_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("AXIS_LOG_LEVEL", raising=False)
    monkeypatch.setenv("COCOTB_LOG_LEVEL", "warning")
    assert utils_dv.desired_log_level() == logging.WARNING
    monkeypatch.setenv("AXIS_LOG_LEVEL", "DEBUG")
    assert utils_dv.desired_log_level() == logging.DEBUG
    assert utils_dv.component_logger("drv").name == "axis.drv"


def test_make_rng_seeding(monkeypatch: pytest.MonkeyPatch) -> None:
    a = utils_dv.make_rng(5).getrandbits(32)
    assert a == utils_dv.make_rng(5).getrandbits(32)
    monkeypatch.setenv("SEED", "5")
    assert utils_dv.make_rng().getrandbits(32) == a


def test_mask() -> None:
    assert utils_dv.mask(0) == 0
    assert utils_dv.mask(1) == 1
    assert utils_dv.mask(8) == 0xFF
