# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/axis_pump/dv/__init__.py

"""Kernel-independent core of the transaction pump.

Nothing in this package imports cocotb or pyuvm: the driver talks to a
HandshakePort and pulls items from anything shaped like a sequencer port, so
the same classes run under SimKernel in plain pytest and under a simulator
through axis_pump.uvm.

Pump:
- AxisDriver: valid/ready driver with reset handling and idle gaps
- AxisGenerator: counted constrained-random transaction producer
- AxisItemSampler: per-beat field sampling
- Rendezvous: single-slot generator/driver handoff

Data:
- AxisItem: immutable stream beat
- AxisWidths, DelayPolicy, BenchModel, ...: pydantic configuration models
- WeightedBucketSampler: weighted-bucket integer distribution

Kernel and collaborators:
- SimKernel: deterministic discrete-tick scheduler
- HandshakePort / SimHandshakePort: channel abstraction and software lines
- AxisResetDriver, AxisReadyReceiver: external reset and receiver stand-ins
- AxisMonitor: protocol checker
- AxisEnv: bench wiring and results

Utilities:
- utils_dv: logging and randomization helpers
- utils_cli: environment/plusarg settings
"""

from __future__ import annotations

from axis_pump import __version__

from . import utils_cli, utils_dv
from .axis_config import (
    AxisWidths,
    BenchModel,
    DelayPolicy,
    DriverModel,
    GeneratorModel,
    ReceiverModel,
    ResetModel,
    validate_model,
)
from .axis_driver import AxisDriver
from .axis_env import AxisEnv, AxisResults
from .axis_generator import AxisGenerator, AxisItemSampler
from .axis_item import AxisItem
from .axis_monitor import AxisMonitor, Violation
from .axis_receiver import AxisReadyReceiver, AxisResetDriver
from .distribution import (
    Bucket,
    WeightedBucketSampler,
    boundary_buckets,
    uniform_buckets,
)
from .errors import AxisPumpError, ConfigurationError, ProtocolMismatchError
from .handshake_port import HandshakePort, SimHandshakePort, TickSample
from .rendezvous import ItemSource, Rendezvous
from .sim_kernel import SimEvent, SimKernel

__all__ = (
    "AxisDriver",
    "AxisEnv",
    "AxisGenerator",
    "AxisItem",
    "AxisItemSampler",
    "AxisMonitor",
    "AxisPumpError",
    "AxisReadyReceiver",
    "AxisResetDriver",
    "AxisResults",
    "AxisWidths",
    "BenchModel",
    "Bucket",
    "ConfigurationError",
    "DelayPolicy",
    "DriverModel",
    "GeneratorModel",
    "HandshakePort",
    "ItemSource",
    "ProtocolMismatchError",
    "ReceiverModel",
    "Rendezvous",
    "ResetModel",
    "SimEvent",
    "SimHandshakePort",
    "SimKernel",
    "TickSample",
    "Violation",
    "WeightedBucketSampler",
    "boundary_buckets",
    "uniform_buckets",
    "validate_model",
    "utils_cli",
    "utils_dv",
    "__version__",
)
