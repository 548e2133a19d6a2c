# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/axis_pump/cli.py

"""Command line for running YAML-described software benches.

Example spec file::

    widths: {data_width: 32, id_width: 4}
    driver: {delay: {min_delay: 1, max_delay: 4}}
    generator: {count: 200}
    receiver: {ready_prob: 0.7}
    seed: 1234

Usage::

    axis-pump bench.yaml --outdir out --plot
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import os
import shutil
import time
from pathlib import Path
from typing import Any, Sequence, cast

import yaml
from tabulate import tabulate

from axis_pump.dv import utils_dv
from axis_pump.dv.axis_env import AxisEnv, AxisResults
from axis_pump.dv.errors import ConfigurationError
from axis_pump.utils import (
    PlotTrace,
    configure_logger,
    green,
    normalize_seed,
    red,
    yellow,
)


def get_args(
    argv: Sequence[str] | None = None, description: str = ""
) -> argparse.Namespace:
    """Parse command line arguments."""
    ap = argparse.ArgumentParser(
        description=description,
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    ap.add_argument("spec", nargs="+", help="YAML bench spec file path(s)")
    ap.add_argument("--outdir", help="output directory")
    ap.add_argument(
        "--seed", help="override the spec seed (decimal, 0x..., or 'random')"
    )
    ap.add_argument(
        "--verbosity",
        choices=["critical", "error", "warning", "info", "debug"],
        default="info",
        help="logging level",
    )
    ap.add_argument(
        "--plot", action="store_true", help="save a valid/ready trace plot"
    )
    return ap.parse_args(argv)


def _get_outdir(spec_file: str, user_outdir: str | None, multi: bool) -> Path:
    """
    Determine output directory for one spec.

    Uses the command-line override if provided (one subdirectory per spec
    when several specs are given), otherwise a directory named after the spec.
    """
    spec_path = Path(spec_file)
    if user_outdir:
        outdir = Path(user_outdir)
        if multi:
            outdir = outdir / spec_path.stem
    else:
        outdir = Path(f"out_axis_pump_{spec_path.stem}")
    # Clean output directory: delete contents if it exists, then create it
    if outdir.exists():
        shutil.rmtree(outdir)
    outdir.mkdir(parents=True)
    return outdir


def _get_spec(spec_file: str, logger: logging.Logger) -> dict[str, Any]:
    """Load and parse a YAML bench spec."""
    spec_path = Path(spec_file)
    if not spec_path.exists():
        raise SystemExit(f"ERROR: Spec file not found: {spec_file}")
    with open(spec_path, encoding="utf-8") as f:
        s = f.read()
        logger.debug("Input spec:\n%s", s)
        spec = yaml.safe_load(s) or {}
    if not isinstance(spec, dict):
        raise SystemExit(f"ERROR: Spec file {spec_file} is not a mapping")
    logger.debug("Loaded spec:\n%s", json.dumps(spec, indent=2))
    return cast(dict[str, Any], spec)


def _build_env(
    spec: dict[str, Any], seed: str | None, logger: logging.Logger
) -> AxisEnv:
    """Validate the spec (with an optional seed override) into a bench."""
    if seed is not None:
        spec = {**spec, "seed": normalize_seed(utils_dv.make_rng(), seed)}
    try:
        env = AxisEnv.from_dict(spec)
    except ConfigurationError as exc:
        logger.error(red(str(exc)))
        raise SystemExit(f"ERROR: invalid bench spec: {exc}") from exc
    logger.info("Bench model: %s", env.model)
    return env


def _handle_results(results: AxisResults, logger: logging.Logger) -> int:
    """
    Log the outcome of one run.

    Returns 1 if the run failed, 0 if it passed.
    """
    if not results.finished:
        logger.warning(yellow("generator did not finish (receiver stalled?)"))
    s = (
        f"passed={results.passed} scoreboard_match={results.scoreboard_match} "
        f"violations={len(results.violations)}"
    )
    if results.passed:
        logger.info(green(s))
        return 0
    logger.error(red(s))
    for v in results.violations:
        logger.error("  cycle %d %s: %s", v["cycle"], v["rule"], v["message"])
    return 1


def _plot(env: AxisEnv, outdir: Path) -> Path:
    """Plot reset/valid/ready/accepted lines of the recorded trace."""
    trace = env.mon.trace
    xs = [s.cycle for s in trace]
    plot = PlotTrace(outdir)
    plot.set_title(f"axis-pump seed={env.seed}")
    plot.add_line(xs, [int(s.reset) for s in trace], "reset", "gray")
    plot.add_line(xs, [int(s.valid) for s in trace], "valid", "blue")
    plot.add_line(xs, [int(s.ready) for s in trace], "ready", "orange")
    plot.add_line(xs, [int(s.fired) for s in trace], "accepted", "green")
    return plot.save("trace")


def _log_elapsed_time(
    start_time: float, spec_file: str, logger: logging.Logger
) -> None:
    """Log elapsed time in HH:MM:SS format since start_time."""
    elapsed_time = time.time() - start_time
    hours, remainder = divmod(int(elapsed_time), 3600)
    minutes, seconds = divmod(remainder, 60)
    logger.info("Completed %s in %d:%02d:%02d", spec_file, hours, minutes, seconds)


def run_spec(
    spec_file: str, args: argparse.Namespace, multi: bool = False
) -> tuple[int, AxisResults]:
    """Run one spec file; return its exit status and results."""
    start_time = time.time()
    outdir = _get_outdir(spec_file, args.outdir, multi)
    logger = configure_logger(args.verbosity, outdir / "run.log")
    logger.info("Logging to console and %s", outdir / "run.log")
    spec = _get_spec(spec_file, logger)
    env = _build_env(spec, args.seed, logger)
    results = asyncio.run(env.run())
    results.save(outdir)
    logger.info("Wrote %s", outdir / "results.json")
    if args.plot:
        logger.info("Wrote %s", _plot(env, outdir))
    status = _handle_results(results, logger)
    _log_elapsed_time(start_time, spec_file, logger)
    return status, results


def main(argv: Sequence[str] | None = None) -> int:
    """
    Run every spec file given on the command line.

    Returns 0 when every run passed, 1 otherwise.
    """
    args = get_args(argv, "Handshake transaction pump bench")
    # Component loggers read their level from the environment
    os.environ.setdefault("AXIS_LOG_LEVEL", args.verbosity.upper())
    multi = len(args.spec) > 1
    status = 0
    rows: list[list[object]] = []
    for spec_file in args.spec:
        rc, results = run_spec(spec_file, args, multi)
        status |= rc
        rows.append(
            [
                spec_file,
                results.seed,
                results.cycles,
                results.summary.get("transfers", 0),
                results.summary.get("stall_cycles", 0),
                len(results.violations),
                "PASS" if results.passed else "FAIL",
            ]
        )
    headers = ["spec", "seed", "cycles", "transfers", "stalls", "violations", "result"]
    print(tabulate(rows, headers=headers, tablefmt="github"))
    return status


if __name__ == "__main__":
    raise SystemExit(main())
