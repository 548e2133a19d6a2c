# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/axis_pump/dv/utils_cli.py

"""Command-line and environment settings for benches.

This module reads bench knobs from environment variables and plusargs,
following the standard UVM command-line processor pattern.

Configuration Precedence:
    1. Environment variables (NAME or AXIS_NAME)
    2. Plusargs (+NAME or +NAME=value)
    3. Default values

Functions:
    get_bool_setting: Resolve boolean configuration
    get_str_setting: Resolve string configuration
    get_int_setting: Resolve integer configuration (supports hex with 0x)
    get_float_setting: Resolve float configuration
    iter_plusargs: Iterate over all plusargs

Plusargs Format:
    Boolean flags: +NAME (treated as True) or +NAME=1/0/true/false/yes/no
    String values: +NAME=value
    Integer values: +NAME=123 or +NAME=0x7B (hex supported)

Environment Variables:
    PLUSARGS, COCOTB_PLUSARGS, or AXIS_PLUSARGS: Space-separated plusargs
    Individual settings: NAME or AXIS_NAME (e.g., SEQ_LEN=200, AXIS_MAX_DELAY=4)

Example:
    >>> count = get_int_setting("SEQ_LEN", 100)
    >>> ready_prob = get_float_setting("READY_PROB", 0.5)
"""

from __future__ import annotations

import os
from typing import Iterable

_TRUE_SET = {"1", "true", "yes", "y", "on"}
_FALSE_SET = {"0", "false", "no", "n", "off"}


def _parse_bool(s: str) -> bool | None:
    """Convert str to bool."""
    v = s.strip().lower()
    if v in _TRUE_SET:
        return True
    if v in _FALSE_SET:
        return False
    return None


def _plusargs_str() -> str:
    return (
        os.environ.get("PLUSARGS", "")
        or os.environ.get("COCOTB_PLUSARGS", "")
        or os.environ.get("AXIS_PLUSARGS", "")
    )


def _get_plusarg(name: str) -> str | None:
    """Return the value of +NAME or +NAME=val if present; else None.
    - If found as '+NAME=val', returns 'val'
    - If found as bare '+NAME', returns '1' (treat like a true/enable flag)
    """
    plusargs = _plusargs_str()
    if not plusargs:
        return None
    prefix = f"+{name}="
    for tok in plusargs.split():
        if tok.startswith(prefix):
            return tok[len(prefix) :]
        if tok == f"+{name}":
            return "1"
    return None


def iter_plusargs() -> Iterable[str]:
    """Yield +args from the plusargs env vars."""
    return _plusargs_str().split()


def get_bool_setting(name: str, default: bool) -> bool:
    """
    Resolve a boolean setting with precedence: env > plusarg > default.
    bare +NAME is treated as True
    """
    for key in (name, f"AXIS_{name}"):
        v = os.environ.get(key)
        if v is not None:
            parsed = _parse_bool(v)
            if parsed is not None:
                return parsed
    v = _get_plusarg(name)
    if v is not None:
        parsed = _parse_bool(v)
        if parsed is not None:
            return parsed
    return default


def get_str_setting(name: str, default: str) -> str:
    """Resolve a string setting: env > plusarg > default (always returns str)."""
    for key in (name, f"AXIS_{name}"):
        v = os.environ.get(key)
        if v is not None:
            return v
    v = _get_plusarg(name)
    return v if v is not None else default


def get_int_setting(name: str, default: int) -> int:
    """Resolve an int setting: env > plusarg > default (always returns int)."""
    for key in (name, f"AXIS_{name}"):
        v = os.environ.get(key)
        if v is not None:
            try:
                return int(v, 0)  # supports 10/16 prefixes (e.g., "0x10")
            except ValueError:
                continue  # try the AXIS_ variant, then fall through
    v = _get_plusarg(name)
    if v is not None:
        try:
            return int(v, 0)
        except ValueError:
            pass
    return default


def get_float_setting(name: str, default: float) -> float:
    """Resolve a float setting: env > plusarg > default (always returns float)."""
    for key in (name, f"AXIS_{name}"):
        v = os.environ.get(key)
        if v is not None:
            try:
                return float(v)
            except ValueError:
                continue
    v = _get_plusarg(name)
    if v is not None:
        try:
            return float(v)
        except ValueError:
            pass
    return default
