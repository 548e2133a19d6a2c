# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/axis_pump/dv/axis_env.py

"""Software bench: wires the pump to the tick kernel and its collaborators."""

from __future__ import annotations

import json
import logging
import random
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from . import utils_dv
from .axis_config import BenchModel, validate_model
from .axis_driver import AxisDriver
from .axis_generator import AxisGenerator, AxisItemSampler
from .axis_item import AxisItem
from .axis_monitor import AxisMonitor
from .axis_receiver import AxisReadyReceiver, AxisResetDriver
from .handshake_port import SimHandshakePort
from .rendezvous import Rendezvous
from .sim_kernel import SimKernel


@dataclass
class AxisResults:
    """Outcome of one bench run."""

    seed: int
    cycles: int
    generated: int
    completed: int
    finished: bool
    scoreboard_match: bool
    summary: dict[str, int] = field(default_factory=dict)
    violations: list[dict[str, Any]] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        """True when the run finished cleanly and every item arrived in order."""
        return self.finished and self.scoreboard_match and not self.violations

    def save(self, outdir: Path, name: str = "results") -> None:
        """Write the results as ``<outdir>/<name>.json``."""
        (outdir / f"{name}.json").write_text(
            json.dumps(asdict(self), indent=2) + "\n"
        )


class AxisEnv:
    """Build and run one software bench.

    Components:
        kernel: SimKernel tick source
        port: SimHandshakePort between driver and receiver
        chan: Rendezvous between generator and driver
        reset_driver / receiver: external collaborators
        drv / gen / mon: the pump and its checker

    Every random source is derived from one seed so a run is reproducible.

    Example:
        >>> env = AxisEnv.from_dict({"generator": {"count": 10}, "seed": 1})
        >>> results = asyncio.run(env.run())
        >>> results.passed
        True
    """

    def __init__(self, model: BenchModel) -> None:
        self.logger: logging.Logger = utils_dv.component_logger("env")
        self.model = model
        seed_rng = utils_dv.make_rng(model.seed)
        self.seed: int = model.seed if model.seed is not None else seed_rng.getrandbits(32)
        root = random.Random(self.seed)

        self.kernel = SimKernel()
        self.port = SimHandshakePort(self.kernel)
        self.mon = AxisMonitor()
        self.kernel.on_edge(lambda cycle: self.mon.observe(self.port.lines(cycle)))
        self.chan: Rendezvous[AxisItem] = Rendezvous(self.kernel)

        self.reset_driver = AxisResetDriver(
            self.kernel, self.port, model.reset.reset_cycles
        )
        self.receiver = AxisReadyReceiver(
            self.kernel,
            self.port,
            model.receiver.ready_prob,
            random.Random(root.getrandbits(32)),
        )
        self.drv = AxisDriver(
            self.port,
            self.chan,
            model.widths,
            random.Random(root.getrandbits(32)),
            wait_for_reset=model.driver.wait_for_reset,
        )
        self.drv.configure(
            model.driver.delay.min_delay, model.driver.delay.max_delay
        )
        sampler = AxisItemSampler(
            model.widths,
            random.Random(root.getrandbits(32)),
            model.generator.max_packet_beats,
        )
        self.gen = AxisGenerator(self.chan, sampler)
        self.gen.configure(model.generator.count)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AxisEnv:
        """Validate a plain dict (e.g. loaded YAML) into a bench."""
        return cls(validate_model(BenchModel, data))

    def start(self) -> None:
        """Start every process; the generator last so the driver waits on it."""
        k = self.kernel
        k.start(self.reset_driver.run(), "reset_driver")
        k.start(self.receiver.run(), "receiver")
        k.start(self.drv.run(), "drv")
        k.start(self.gen.run(), "gen")

    def gen_finished(self) -> bool:
        """True once the generator has returned."""
        return self.kernel.task("gen").done()

    async def run(self) -> AxisResults:
        """Run until the generator finishes (plus drain) or max_cycles."""
        self.logger.info("run begin: seed=%d", self.seed)
        self.start()
        finished = await self.kernel.run_until(
            self.gen_finished, self.model.max_cycles
        )
        if finished:
            await self.kernel.run(self.model.drain_cycles)
        else:
            self.logger.error(
                "generator did not finish within %d cycles", self.model.max_cycles
            )
        self.kernel.stop()
        results = self.results(finished)
        self.report(results)
        return results

    def results(self, finished: bool) -> AxisResults:
        """Collect the outcome of the run."""
        return AxisResults(
            seed=self.seed,
            cycles=self.kernel.cycle,
            generated=len(self.gen.produced),
            completed=self.gen.done_count,
            finished=finished,
            scoreboard_match=self.mon.items == self.gen.produced,
            summary=self.mon.summary(),
            violations=[asdict(v) for v in self.mon.violations],
        )

    def report(self, results: AxisResults) -> None:
        """Log the pass/fail line."""
        if results.passed:
            self.logger.info(
                "*** TEST PASSED - %d transfers in %d cycles ***",
                results.summary["transfers"],
                results.cycles,
            )
        else:
            self.logger.error(
                "*** TEST FAILED - finished=%s scoreboard_match=%s violations=%d ***",
                results.finished,
                results.scoreboard_match,
                len(results.violations),
            )
