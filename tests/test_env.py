# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: tests/test_env.py

"""Software bench wiring and results."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Callable

import pytest

from axis_pump.dv.axis_env import AxisEnv, AxisResults
from axis_pump.dv.errors import ConfigurationError

MakeEnv = Callable[..., AxisEnv]


def test_default_bench_passes(make_env: MakeEnv) -> None:
    env = make_env(
        100,
        widths={"data_width": 32, "id_width": 4, "dest_width": 4, "user_width": 1},
        driver={"delay": {"min_delay": 1, "max_delay": 4}},
        receiver={"ready_prob": 0.7},
    )
    res = asyncio.run(env.run())
    assert res.passed
    assert res.generated == res.completed == 100
    assert res.summary["transfers"] == 100
    assert res.scoreboard_match


def test_same_seed_same_run(make_env: MakeEnv) -> None:
    def once() -> tuple[AxisResults, AxisEnv]:
        env = make_env(30, receiver={"ready_prob": 0.5}, seed=42,
                       driver={"delay": {"min_delay": 1, "max_delay": 3}})
        return asyncio.run(env.run()), env

    (ra, ea), (rb, eb) = once(), once()
    assert ra == rb
    assert ea.mon.transfers == eb.mon.transfers


def test_seed_from_setting(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SEED", "3")
    a = AxisEnv.from_dict({"generator": {"count": 1}})
    b = AxisEnv.from_dict({"generator": {"count": 1}})
    assert a.seed == b.seed


def test_unfinished_run_fails(make_env: MakeEnv) -> None:
    env = make_env(3, receiver={"ready_prob": 0.0}, max_cycles=40)
    res = asyncio.run(env.run())
    assert not res.finished
    assert not res.passed
    assert res.cycles == 40


def test_drain_cycles_run_after_finish(make_env: MakeEnv) -> None:
    a = asyncio.run(make_env(3, drain_cycles=0).run())
    b = asyncio.run(make_env(3, drain_cycles=10).run())
    assert b.cycles == a.cycles + 10


def test_invalid_spec_rejected() -> None:
    with pytest.raises(ConfigurationError):
        AxisEnv.from_dict({"generator": {"count": 1}, "widths": {"data_width": 7}})
    with pytest.raises(ConfigurationError):
        AxisEnv.from_dict({"generator": {"count": 1}, "typo": True})


def test_results_saved_as_json(make_env: MakeEnv, tmp_path: Path) -> None:
    res = asyncio.run(make_env(2).run())
    res.save(tmp_path)
    data = json.loads((tmp_path / "results.json").read_text())
    assert data["seed"] == 1
    assert data["finished"] is True
    assert data["summary"]["transfers"] == 2
    assert data["violations"] == []
