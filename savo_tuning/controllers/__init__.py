#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Robot SAVO — savo_tuning.controllers
------------------------------------
Multi-slot PID profile managers.

- ProfileStore        : profiles + current selection (base class)
- ControlEvaluator    : software PID path (one accumulator per slot)
- HardwareProfileSync : on-device PID path (gain push + slot switching)
- Pid                 : scalar PID accumulator
"""

from .control_evaluator import ControlEvaluator, FeedbackSupplier
from .hardware_sync import HardwareProfileSync
from .pid_py import Pid, PidConfig, PidResult
from .profile_store import ControlMode, ProfileStore, SlotRef

__all__ = [
    "ControlMode",
    "SlotRef",
    "ProfileStore",
    "ControlEvaluator",
    "FeedbackSupplier",
    "HardwareProfileSync",
    "Pid",
    "PidConfig",
    "PidResult",
]
