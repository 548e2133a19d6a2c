# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/axis_pump/dv/distribution.py

"""Weighted-bucket sampling for constrained-random fields.

A SystemVerilog ``dist`` constraint such as::

    data dist { 0 := 2, MAX := 2, [1:MAX-1] :/ 96 };

becomes a list of ``Bucket(lo, hi, weight)`` entries. A selector is drawn in
``[0, total_weight)``, the bucket owning that selector is chosen, and a value
is drawn uniformly from the bucket's inclusive range. Boundary buckets keep a
fixed share of the draws no matter how wide the field is, which plain uniform
sampling cannot give for wide fields.
"""

from __future__ import annotations

import bisect
import random
from itertools import accumulate
from typing import NamedTuple, Sequence

from .errors import ConfigurationError
from .utils_dv import mask

BOUNDARY_WEIGHT = 2
INTERIOR_WEIGHT = 96


class Bucket(NamedTuple):
    """Inclusive value range ``[lo, hi]`` drawn with relative ``weight``."""

    lo: int
    hi: int
    weight: int


def boundary_buckets(width: int) -> list[Bucket]:
    """Buckets giving all-zero and all-ones 2/100 each, the interior 96/100.

    Empty ranges are dropped, so a 1-bit field splits evenly between 0 and 1
    and a 0-bit field always yields 0.
    """
    top = mask(width)
    if top == 0:
        return [Bucket(0, 0, 1)]
    buckets = [
        Bucket(0, 0, BOUNDARY_WEIGHT),
        Bucket(top, top, BOUNDARY_WEIGHT),
        Bucket(1, top - 1, INTERIOR_WEIGHT),
    ]
    return [b for b in buckets if b.lo <= b.hi]


def uniform_buckets(width: int) -> list[Bucket]:
    """A single bucket covering the whole field."""
    return [Bucket(0, mask(width), 1)]


class WeightedBucketSampler:
    """Draw integers from weighted, inclusive ranges.

    Example:
        >>> s = WeightedBucketSampler(boundary_buckets(8), random.Random(1))
        >>> 0 <= s.sample() <= 255
        True
    """

    def __init__(self, buckets: Sequence[Bucket], rng: random.Random) -> None:
        if not buckets:
            raise ConfigurationError("at least one bucket is required")
        for b in buckets:
            if b.lo > b.hi:
                raise ConfigurationError(f"empty bucket range: {b}")
            if b.weight <= 0:
                raise ConfigurationError(f"bucket weight must be > 0: {b}")
        self.buckets: tuple[Bucket, ...] = tuple(buckets)
        self.rng = rng
        self._bounds: list[int] = list(accumulate(b.weight for b in self.buckets))

    @property
    def total_weight(self) -> int:
        """Sum of all bucket weights (the selector range)."""
        return self._bounds[-1]

    def pick(self, selector: int) -> Bucket:
        """Return the bucket owning ``selector`` in ``[0, total_weight)``."""
        if not 0 <= selector < self.total_weight:
            raise ValueError(f"selector {selector} outside [0, {self.total_weight})")
        return self.buckets[bisect.bisect_right(self._bounds, selector)]

    def sample(self) -> int:
        """Draw one value."""
        b = self.pick(self.rng.randrange(self.total_weight))
        if b.lo == b.hi:
            return b.lo
        return self.rng.randint(b.lo, b.hi)
