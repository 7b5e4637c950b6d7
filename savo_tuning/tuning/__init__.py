#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Robot SAVO — savo_tuning.tuning
-------------------------------
Live tuning: value stores, the tuning bridge and the motor tuning layout.
"""

from .motor_tuner import MotorTuner
from .tuning_bridge import TuningBinding, TuningBridge, Updater
from .value_store import LiveValueTable, SubscriptionHandle, ValueCallback, ValueStore

__all__ = [
    "ValueCallback",
    "ValueStore",
    "SubscriptionHandle",
    "LiveValueTable",
    "Updater",
    "TuningBinding",
    "TuningBridge",
    "MotorTuner",
]
