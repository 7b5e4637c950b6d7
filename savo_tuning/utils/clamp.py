#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Robot SAVO — savo_tuning/utils/clamp.py
---------------------------------------
Small clamping and unit helpers shared by the control and tuning modules.

Why this file exists
--------------------
Loop outputs, joystick inputs and encoder angles all need the same bounded
arithmetic. Keeping it here avoids duplicated edge-case handling.

Design goals
------------
- Tiny and dependency-free
- Predictable behavior (no hidden side effects)
- Safe in both ROS nodes and pure Python modules
"""

from __future__ import annotations

import math
from typing import TypeVar

Number = TypeVar("Number", int, float)

# Joystick deadband used by `fit_deadband` when none is given.
DEFAULT_DEADBAND = 0.08

# 4096-count encoder over one revolution.
TICKS_PER_DEGREE = 4096.0 / 360.0


def clamp(value: Number, lo: Number, hi: Number) -> Number:
    """
    Clamp `value` into the closed interval [lo, hi].

    If `lo > hi`, the bounds are swapped.
    """
    if lo > hi:
        lo, hi = hi, lo
    if value < lo:
        return lo
    if value > hi:
        return hi
    return value


def clamp_float(value: float, lo: float, hi: float) -> float:
    """
    Clamp a float into [lo, hi] and return float.
    """
    return float(clamp(float(value), float(lo), float(hi)))


def clamp_symmetric(value: float, limit: float) -> float:
    """
    Clamp a float symmetrically into [-abs(limit), +abs(limit)].

    This is a hard saturation, not a rescale.

    Examples
    --------
    >>> clamp_symmetric(20.0, 1.0)
    1.0
    >>> clamp_symmetric(-2.0, 0.5)
    -0.5
    """
    lim = abs(float(limit))
    return clamp_float(float(value), -lim, +lim)


def fit_deadband(value: float, deadband: float = DEFAULT_DEADBAND) -> float:
    """
    Zero small inputs and shift the rest toward zero by `deadband`.

    Inputs at or beyond +/-1 saturate to +/-1.
    """
    v = float(value)
    db = abs(float(deadband))
    if abs(v) < db:
        return 0.0
    if v >= 1.0:
        return 1.0
    if v <= -1.0:
        return -1.0
    if v > 0.0:
        return v - db
    if v < 0.0:
        return v + db
    return 0.0


def is_within_tolerance(value: float, target: float, tolerance: float) -> bool:
    """
    True when |value - target| < tolerance (strict).
    """
    return abs(float(value) - float(target)) < float(tolerance)


def wrap_to_circle(angle: float, full_circle: float = 360.0) -> float:
    """
    Wrap an angle into [0, full_circle).
    """
    fc = float(full_circle)
    a = math.fmod(float(angle), fc)
    if a < 0.0:
        a += fc
    return a


def degrees_to_ticks(degrees: float, ticks_per_degree: float = TICKS_PER_DEGREE) -> float:
    return float(degrees) * float(ticks_per_degree)


def ticks_to_degrees(ticks: float, degrees_per_tick: float = 1.0 / TICKS_PER_DEGREE) -> float:
    return float(ticks) * float(degrees_per_tick)


def magnitude(*values: float) -> float:
    """
    Euclidean norm of the given components.
    """
    return math.sqrt(sum(float(v) * float(v) for v in values))


__all__ = [
    "DEFAULT_DEADBAND",
    "TICKS_PER_DEGREE",
    "clamp",
    "clamp_float",
    "clamp_symmetric",
    "fit_deadband",
    "is_within_tolerance",
    "wrap_to_circle",
    "degrees_to_ticks",
    "ticks_to_degrees",
    "magnitude",
]
