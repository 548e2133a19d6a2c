# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/axis_pump/dv/utils_dv.py

"""Logging and randomization helpers shared by the pump components.

Functions:
    desired_log_level(): Get log level from AXIS_LOG_LEVEL / COCOTB_LOG_LEVEL
    component_logger(): Return a configured ``axis.<name>`` logger
    configure_non_component_logger(): Configure a plain logger's level
    make_rng(): Build a seeded random source (seed from SEED setting if unset)
    mask(): All-ones value of a given bit width

Example:
    >>> log = component_logger("drv")
    >>> rng = make_rng(1234)
    >>> mask(8)
    255
"""

from __future__ import annotations

import logging
import os
import random

from . import utils_cli


def desired_log_level(default: int = logging.INFO) -> int:
    """Return desired log level from env vars or default."""
    name = (
        os.getenv("AXIS_LOG_LEVEL") or os.getenv("COCOTB_LOG_LEVEL") or "INFO"
    ).upper()
    return getattr(logging, name, default)


def configure_non_component_logger(logger: logging.Logger) -> None:
    """Configure logger for a non-component"""
    logger.setLevel(desired_log_level())
    # Make sure it bubbles up to the root handlers (don't add new handlers)
    logger.propagate = True


def component_logger(name: str) -> logging.Logger:
    """Return the ``axis.<name>`` logger, configured like a component's."""
    logger = logging.getLogger(f"axis.{name}")
    configure_non_component_logger(logger)
    return logger


def make_rng(seed: int | None = None) -> random.Random:
    """Return a random source seeded from ``seed`` or the SEED setting.

    With neither given the source is seeded from the OS, and the chosen seed
    is logged so the run can be reproduced.
    """
    if seed is None:
        seed = utils_cli.get_int_setting("SEED", -1)
        if seed < 0:
            seed = random.SystemRandom().getrandbits(32)
            logging.getLogger("axis.utils_dv").info("Run seed: %d", seed)
    return random.Random(seed)


def mask(width: int) -> int:
    """Return the all-ones value for ``width`` bits (0 for width 0)."""
    return (1 << width) - 1
