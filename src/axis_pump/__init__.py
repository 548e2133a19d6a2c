# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/axis_pump/__init__.py

"""axis-pump: handshake-driven transaction pump for AXI4-Stream-like interfaces.

The project turns an abstract stream of transactions into a correctly paced
valid/ready handshake exchange, with randomized post-transfer idle gaps and
constrained-random payload generation.

Main Components:

dv:
    Simulation-kernel independent core:
    - AxisDriver: drives one transaction at a time through a HandshakePort
    - AxisGenerator: counted, weighted-random transaction generator
    - Rendezvous: single-slot blocking handoff between the two
    - SimKernel: deterministic software tick source for running the core
      without an HDL simulator
    - AxisMonitor / AxisEnv: protocol checking and bench wiring

uvm:
    cocotb/pyuvm binding of the same driver to a DUT.

cli:
    The ``axis-pump`` command that runs YAML-described software benches.

For more information, see the module docstrings.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as pkg_version

try:
    __version__ = pkg_version("axis-pump")
except PackageNotFoundError:
    __version__ = "0+local"
