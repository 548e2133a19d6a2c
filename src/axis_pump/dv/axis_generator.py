# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/axis_pump/dv/axis_generator.py

"""Constrained-random transaction generator."""

from __future__ import annotations

import logging
import random
from typing import Protocol

from . import utils_dv
from .axis_config import AxisWidths, GeneratorModel, validate_model
from .axis_item import AxisItem
from .distribution import WeightedBucketSampler, boundary_buckets
from .errors import ConfigurationError


class ItemSink(Protocol):
    """Where a generator hands items (a Rendezvous fits)."""

    async def put(self, item: AxisItem) -> None:
        """Block until the consumer has taken ``item``."""

    async def wait_item_done(self) -> None:
        """Block until the consumer completed the last item."""


class AxisItemSampler:
    """Draw randomized stream beats.

    Fields:
        data: all-zero 2%, all-ones 2%, uniform interior 96%
        id/dest/user: uniform over their widths
        last: packets of uniform length 1..max_packet_beats, last on the
            final beat
        keep: all ones, except a contiguous low-byte mask of uniform length
            1..byte_width on a last beat
        strb: equal to keep
    """

    def __init__(
        self, widths: AxisWidths, rng: random.Random, max_packet_beats: int = 4
    ) -> None:
        if max_packet_beats < 1:
            raise ConfigurationError(
                f"max_packet_beats must be >= 1, got {max_packet_beats}"
            )
        self.widths = widths
        self.rng = rng
        self.max_packet_beats = max_packet_beats
        self.data_sampler = WeightedBucketSampler(
            boundary_buckets(widths.data_width), rng
        )
        self._beats_left: int = 0

    def _packet_beats(self) -> int:
        return self.rng.randint(1, self.max_packet_beats)

    def _tail_keep(self) -> int:
        nbytes = self.rng.randint(1, self.widths.byte_width)
        return utils_dv.mask(nbytes)

    def sample(self, force_last: bool = False) -> AxisItem:
        """Return the next beat; ``force_last`` closes the current packet."""
        if self._beats_left == 0:
            self._beats_left = self._packet_beats()
        self._beats_left -= 1
        last = force_last or self._beats_left == 0
        if last:
            self._beats_left = 0
        w = self.widths
        keep = self._tail_keep() if last else w.byte_mask
        return AxisItem(
            w,
            data=self.data_sampler.sample(),
            keep=keep,
            strb=keep,
            last=last,
            id=self.rng.getrandbits(w.id_width) if w.id_width else 0,
            dest=self.rng.getrandbits(w.dest_width) if w.dest_width else 0,
            user=self.rng.getrandbits(w.user_width) if w.user_width else 0,
        )


class AxisGenerator:
    """Produce ``count`` items, one at a time, through a blocking handoff.

    Each item is handed to ``sink.put()``, which returns once the driver took
    that item, then the generator waits for the driver's completion before
    sampling the next one. ``run()`` may be called again to replay the count.

    Attributes:
        count: Items per run; None until configured.
        produced: Items handed off by the last run, in order.

    Example:
        >>> gen = AxisGenerator(chan, AxisItemSampler(widths, rng))
        >>> gen.configure(100)
        >>> kernel.start(gen.run(), "gen")
    """

    def __init__(
        self, sink: ItemSink, sampler: AxisItemSampler, *, name: str = "gen"
    ) -> None:
        self.logger: logging.Logger = utils_dv.component_logger(name)
        self.sink = sink
        self.sampler = sampler
        self.count: int | None = None
        self.produced: list[AxisItem] = []
        self.done_count: int = 0

    def configure(self, count: int) -> None:
        """Set the number of items per run (raises ConfigurationError)."""
        model = validate_model(
            GeneratorModel,
            {"count": count, "max_packet_beats": self.sampler.max_packet_beats},
        )
        self.count = model.count
        self.logger.debug("configure: count=%d", self.count)

    async def run(self) -> None:
        """Hand off ``count`` items, waiting for each to complete."""
        if self.count is None:
            raise ConfigurationError("generator count was never configured")
        count = self.count
        self.logger.debug("run begin: count=%d", count)
        self.produced = []
        self.done_count = 0
        for i in range(count):
            tr = self.sampler.sample(force_last=i == count - 1)
            self.produced.append(tr)
            await self.sink.put(tr)
            await self.sink.wait_item_done()
            self.done_count += 1
        self.logger.debug("run end: %d items", self.done_count)
