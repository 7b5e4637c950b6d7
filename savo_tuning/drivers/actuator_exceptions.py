#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Robot SAVO — savo_tuning/drivers/actuator_exceptions.py
-------------------------------------------------------
Actuator (motor controller) failures.

Any exception raised by a `MotorController` call is a hardware configuration
failure from the point of view of the profile managers and the tuning bridge:
they let it propagate unmodified and never retry.
"""

from __future__ import annotations

from savo_tuning.exceptions import TuningException


class ActuatorError(TuningException):
    """
    Base class for motor controller command failures.
    """


class ActuatorClosedError(ActuatorError):
    """
    Command sent to a controller that has already been closed.
    """


class ActuatorConfigError(ActuatorError):
    """
    Controller rejected a configuration value (bad slot, non-finite gain,
    injected failure in the dry-run controller, vendor error code).
    """


__all__ = ["ActuatorError", "ActuatorClosedError", "ActuatorConfigError"]
