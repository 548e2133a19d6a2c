# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/axis_pump/dv/errors.py

"""Exception hierarchy for the transaction pump.

Both error classes are fatal: they are raised where the problem is detected
and propagate out of the owning coroutine. Nothing in the pump catches them.
Receiver stalls are not errors and have no exception class.
"""

from __future__ import annotations


class AxisPumpError(Exception):
    """Base class for all exceptions raised by axis_pump."""


class ConfigurationError(AxisPumpError, ValueError):
    """Raised when a component is configured with missing or invalid values.

    Examples
    --------
    - ``AxisGenerator.run()`` without a prior ``configure(count)``.
    - ``AxisDriver.configure(min_delay=3, max_delay=2)``.
    - A data width that is not a positive multiple of 8.
    """


class ProtocolMismatchError(AxisPumpError, ValueError):
    """Raised when a transaction does not match the interface it is driven on.

    This covers an item whose widths disagree with the driver's configured
    widths, and a field value that does not fit its declared width. The pump
    never truncates or pads a field to make it fit.
    """
