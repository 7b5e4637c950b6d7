#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Robot SAVO — savo_tuning.drivers
--------------------------------
Motor controller contract, actuator exceptions and the dry-run controller.
"""

from .actuator_exceptions import ActuatorClosedError, ActuatorConfigError, ActuatorError
from .dryrun_motor_controller import DryRunControllerCall, DryRunControllerState, DryRunMotorController
from .motor_controller import MotorController

__all__ = [
    "ActuatorError",
    "ActuatorClosedError",
    "ActuatorConfigError",
    "MotorController",
    "DryRunControllerCall",
    "DryRunControllerState",
    "DryRunMotorController",
]
