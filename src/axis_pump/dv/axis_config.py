# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/axis_pump/dv/axis_config.py

"""Validated configuration models for the pump and its benches.

Every knob is validated once, when the model is built. pydantic's
ValidationError is re-raised as ConfigurationError so callers only deal with
the pump's own error taxonomy.
"""

from __future__ import annotations

import json
import random
from pathlib import Path
from typing import Annotated, Any, Self, Type, TypeVar

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictInt,
    ValidationError,
    model_validator,
)

from .errors import ConfigurationError
from .utils_dv import mask

M = TypeVar("M", bound=BaseModel)

# Integer knobs reject bools and floats instead of coercing them
NonNegativeInt = Annotated[StrictInt, Field(ge=0)]
PositiveInt = Annotated[StrictInt, Field(gt=0)]


def validate_model(model_class: Type[M], data: Any) -> M:
    """Validate ``data`` into ``model_class`` or raise ConfigurationError."""
    try:
        return model_class.model_validate(data)
    except ValidationError as exc:
        raise ConfigurationError(
            f"invalid {model_class.__name__} configuration:\n{exc}"
        ) from exc


class AxisBaseModel(BaseModel):
    """Base model providing JSON rendering and file saving."""

    model_config = ConfigDict(extra="forbid")

    def __str__(self) -> str:
        """Return JSON-formatted string representation of the model."""
        return f"{self.__class__.__name__}:\n" + json.dumps(self.model_dump(), indent=2)

    def save(self, outdir: Path, name: str = "") -> None:
        """Save the model to ``<outdir>/<name>.json`` (defaults to class name)."""
        name = name if name else self.__class__.__name__
        (outdir / f"{name}.json").write_text(
            json.dumps(self.model_dump(), indent=2) + "\n"
        )


class AxisWidths(AxisBaseModel):
    """Bit widths of the stream interface.

    ``data_width`` must be a positive multiple of 8; ``strb`` and ``keep``
    carry one bit per data byte. Tag widths default to 0 (field absent).
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    data_width: PositiveInt = 32
    id_width: NonNegativeInt = 0
    dest_width: NonNegativeInt = 0
    user_width: NonNegativeInt = 0

    @model_validator(mode="after")
    def _check_bytes(self) -> Self:
        if self.data_width % 8:
            raise ValueError(
                f"data_width must be a multiple of 8, got {self.data_width}"
            )
        return self

    @property
    def byte_width(self) -> int:
        """Number of bytes in one data beat (width of strb/keep)."""
        return self.data_width // 8

    @property
    def data_max(self) -> int:
        """All-ones data value."""
        return mask(self.data_width)

    @property
    def byte_mask(self) -> int:
        """All-ones strb/keep value."""
        return mask(self.byte_width)


class DelayPolicy(AxisBaseModel):
    """Post-transfer idle gap bounds, both inclusive.

    After each transfer the driver idles for a uniform integer number of ticks
    in ``[min_delay - 1, max_delay - 1]``. The default ``(1, 1)`` inserts no
    idle ticks.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    min_delay: StrictInt = 1
    max_delay: StrictInt = 1

    @model_validator(mode="after")
    def _check_bounds(self) -> Self:
        if self.min_delay < 1:
            raise ValueError(f"min_delay must be >= 1, got {self.min_delay}")
        if self.max_delay < self.min_delay:
            raise ValueError(
                f"max_delay must be >= min_delay, got "
                f"min_delay={self.min_delay} max_delay={self.max_delay}"
            )
        return self

    def sample(self, rng: random.Random) -> int:
        """Return the number of idle ticks to insert after one transfer."""
        return rng.randint(self.min_delay - 1, self.max_delay - 1)


class DriverModel(AxisBaseModel):
    """Driver knobs: delay policy and whether to wait for a reset pulse."""

    delay: DelayPolicy = Field(default_factory=DelayPolicy)
    wait_for_reset: bool = True


class GeneratorModel(AxisBaseModel):
    """Generator knobs. ``count`` has no default: it must be given."""

    count: NonNegativeInt
    max_packet_beats: PositiveInt = 4


class ReceiverModel(AxisBaseModel):
    """Receiver knobs: per-tick probability of asserting ready."""

    ready_prob: float = Field(default=0.5, ge=0.0, le=1.0)


class ResetModel(AxisBaseModel):
    """Reset knobs: ticks the reset is held at the start of a run."""

    reset_cycles: NonNegativeInt = 4


class BenchModel(AxisBaseModel):
    """One software bench run, as loaded from a YAML/JSON spec file."""

    widths: AxisWidths = Field(default_factory=AxisWidths)
    driver: DriverModel = Field(default_factory=DriverModel)
    generator: GeneratorModel
    receiver: ReceiverModel = Field(default_factory=ReceiverModel)
    reset: ResetModel = Field(default_factory=ResetModel)
    seed: NonNegativeInt | None = None
    max_cycles: PositiveInt = 1_000_000
    drain_cycles: NonNegativeInt = 4
