# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/axis_pump/uvm/utils_uvm.py

"""pyuvm and cocotb helpers for the simulator bench.

Type-safe wrappers around pyuvm's config_db, signal handle lookup, and
factory overrides from plusargs.

Functions:
    Config DB:
        uvm_config_db(): Return cached config DB instance
        uvm_config_db_get_try(): Get config value or None if missing
        uvm_config_db_get(): Get config value or raise ConfigKeyError
        uvm_config_db_set(): Set config value

    Signal Access:
        get_signal(): Get signal handle from DUT with validation
        get_signal_value_int(): Extract integer from Logic/LogicArray (None if X/Z)

    Components:
        configure_component_logger(): Configure logger for UVM component
        apply_factory_overrides_from_plusargs(): +uvm_set_*_override support

Example:
    >>> dut = uvm_config_db_get(self, "dut")
    >>> clk = get_signal(dut, "clk")
    >>> tready = get_signal(dut, "s_axis_tready")
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any, Tuple, Union, cast

import pyuvm
from cocotb.handle import SimHandleBase
from cocotb.types import Logic, LogicArray
from pyuvm import error_classes

from axis_pump.dv import utils_cli, utils_dv

# pyuvm typically throws lookup/value/type errors on bad overrides
_FACTORY_EXC: Tuple[type[BaseException], ...] = (KeyError, ValueError, TypeError)


class ConfigKeyError(KeyError):
    """Raised when a required key is missing from pyuvm's config_db."""


def configure_component_logger(comp: pyuvm.uvm_component) -> None:
    """Configure logger for a component."""
    comp.set_logging_level(utils_dv.desired_log_level())


@lru_cache(maxsize=1)
def uvm_config_db() -> Any:
    """Return pyuvm's config DB object (cached) without tripping static checkers."""
    if hasattr(pyuvm, "ConfigDB") and callable(getattr(pyuvm, "ConfigDB")):
        return getattr(pyuvm, "ConfigDB")()
    return getattr(pyuvm, "uvm_config_db")()


def uvm_config_db_get_try(
    comp: pyuvm.uvm_component, key: str, inst: str = ""
) -> Any | None:
    """Return value or None if missing (no logging/raise).
    Note: pyuvm allows wildcards only for set(), not get()."""
    if inst == "*":
        inst = ""
    try:
        return cast(Any, uvm_config_db().get(comp, inst, key))
    except error_classes.UVMConfigItemNotFound:
        return None


def uvm_config_db_get(comp: pyuvm.uvm_component, key: str) -> object:
    """Like uvm_config_db_get_try but raises if key is missing."""
    val = uvm_config_db_get_try(comp, key)
    if val is not None:
        return val
    raise ConfigKeyError(
        f"config_db[{key!r}] missing for component '{comp.get_full_name()}'. "
        "Did you forget to set it in build_phase?"
    )


def uvm_config_db_set(
    ctx: pyuvm.uvm_component | None, inst_name: str, key: str, value: Any
) -> None:
    """Set a key in the config DB (inst_name like '' or '*' etc.)."""
    uvm_config_db().set(ctx, inst_name, key, value)


def get_signal(dut: Any, signal_name: str) -> SimHandleBase:
    """Return dut.<signal_name> or raise a clear error.

    Raises RuntimeError if signal not found, TypeError if signal has no .value.
    """
    signal = getattr(dut, signal_name, None)
    if signal is None:
        raise RuntimeError(f"Signal '{signal_name}' not found on DUT")
    if not hasattr(signal, "value"):
        raise TypeError(f"Signal '{signal_name}' has no .value property")
    return cast(SimHandleBase, signal)


def get_signal_value_int(sig: Union[Logic, LogicArray]) -> int | None:
    """Return integer value if resolvable (no X/Z), else None."""
    if isinstance(sig, Logic):
        return (
            int(sig) if sig.is_resolvable else None
        )  # pyright: ignore[reportArgumentType]
    return sig.to_unsigned() if sig.is_resolvable else None


def apply_factory_overrides_from_plusargs(logger: logging.Logger | None = None) -> None:
    """
    Parse +uvm_set_type_override / +uvm_set_inst_override from PLUSARGS and apply
    via pyuvm's factory (uvm_cmdline_processor style). Safe to call multiple times.
    """
    log = logger or logging.getLogger("axis.utils_uvm.factory")
    f = pyuvm.uvm_factory()

    for tok in utils_cli.iter_plusargs():
        if tok.startswith("+uvm_set_type_override="):
            body = tok.split("=", 1)[1]
            parts = [p.strip() for p in body.split(",")]
            if len(parts) not in (2, 3):
                log.warning("Bad +uvm_set_type_override: %s", tok)
                continue
            req, over = parts[0], parts[1]
            replace = True if len(parts) == 2 else (parts[2] != "0")
            try:
                f.set_type_override_by_name(req, over, replace=replace)
                log.debug(
                    "Factory: type override %s -> %s (replace=%s)", req, over, replace
                )
            except _FACTORY_EXC as e:  # pragma: no cover
                log.warning("Override failed (%s): %s", tok, e)

        elif tok.startswith("+uvm_set_inst_override="):
            body = tok.split("=", 1)[1]
            parts = [p.strip() for p in body.split(",")]
            if len(parts) != 3:
                log.warning("Bad +uvm_set_inst_override: %s", tok)
                continue
            req, over, path = parts
            try:
                f.set_inst_override_by_name(req, over, path)
                log.debug("Factory: inst override %s @ %s -> %s", req, path, over)
            except _FACTORY_EXC as e:  # pragma: no cover
                log.warning("Override failed (%s): %s", tok, e)
