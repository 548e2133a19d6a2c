# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/axis_pump/uvm/__init__.py

"""cocotb/pyuvm bench for the transaction pump.

The components here only bind the kernel-independent core in axis_pump.dv to
simulator signals; the protocol behavior lives in AxisDriver.

Components:
- AxisUvmEnv: sequencer, driver, monitor and ready driver
- AxisUvmDriver: AxisDriver over a CocotbHandshakePort
- AxisUvmMonitor: AxisMonitor fed from ReadOnly samples
- AxisUvmResetDriver / AxisUvmReadyDriver
- AxisClocking: clock generation and the sample/drive edges
- AxisSeqItem / AxisSequence: sequencer-side transaction and generator
- CocotbHandshakePort / AxisBus: signal binding

Tests (test_axis_pump): AxisBaseTest, AxisMidResetTest, run against
rtl/axis_sink.sv.
"""

from __future__ import annotations

from axis_pump import __version__

from . import utils_uvm
from .uvm_clocking import AxisClocking
from .uvm_driver import AxisUvmDriver, SeqItemSource
from .uvm_env import AxisUvmEnv
from .uvm_handshake_port import AxisBus, CocotbHandshakePort
from .uvm_item import AxisSeqItem
from .uvm_monitor import AxisUvmMonitor
from .uvm_ready_driver import AxisUvmReadyDriver
from .uvm_reset_driver import AxisUvmResetDriver
from .uvm_sequence import AxisSequence

__all__ = (
    "AxisBus",
    "AxisClocking",
    "AxisSeqItem",
    "AxisSequence",
    "AxisUvmDriver",
    "AxisUvmEnv",
    "AxisUvmMonitor",
    "AxisUvmReadyDriver",
    "AxisUvmResetDriver",
    "CocotbHandshakePort",
    "SeqItemSource",
    "utils_uvm",
    "__version__",
)
