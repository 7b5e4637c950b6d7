# -*- coding: utf-8 -*-
"""
Robot SAVO — savo_tuning/__init__.py
------------------------------------
Package root exports for `savo_tuning`.

This file provides:
- package version helpers
- the multi-slot PID profile managers
- the realtime tuning bridge

Design notes
------------
- Keep imports lightweight: nothing here imports rclpy.
- ROS adapters live in `savo_tuning.ros` and are imported explicitly.
"""

from __future__ import annotations

from .version import VERSION, __version__, get_package_version_info, get_version
from .constants import DEFAULT_PERIOD_S, DEFAULT_TIMEOUT_MS, DISABLED_INDEX
from .exceptions import (
    BindingError,
    IndexOutOfRangeError,
    ProfileConfigError,
    TuningErrorContext,
    TuningException,
)
from .models import GainProfile, MotionExtra, MotionFamily, MotionProfile
from .controllers import ControlEvaluator, ControlMode, HardwareProfileSync, ProfileStore
from .drivers import DryRunMotorController, MotorController
from .tuning import LiveValueTable, MotorTuner, TuningBridge, ValueStore
from .commands import SetPositionTask

__all__ = [
    "__version__",
    "VERSION",
    "get_version",
    "get_package_version_info",
    "DISABLED_INDEX",
    "DEFAULT_PERIOD_S",
    "DEFAULT_TIMEOUT_MS",
    "TuningErrorContext",
    "TuningException",
    "ProfileConfigError",
    "IndexOutOfRangeError",
    "BindingError",
    "GainProfile",
    "MotionExtra",
    "MotionFamily",
    "MotionProfile",
    "ControlMode",
    "ProfileStore",
    "ControlEvaluator",
    "HardwareProfileSync",
    "MotorController",
    "DryRunMotorController",
    "ValueStore",
    "LiveValueTable",
    "TuningBridge",
    "MotorTuner",
    "SetPositionTask",
]
