#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Robot SAVO — savo_tuning/models/gain_profile.py
-----------------------------------------------
PIDF gain profile for one closed-loop slot.

Purpose
-------
Store one set of loop constants (P, I, D, feed forward), the symmetric output
range the loop is allowed to command, and the "at setpoint" tolerance.

Profiles are created once per subsystem from fixed tuning constants (or
loaded ROS parameters) and then live for the whole control session. They are
mutated only through the setters below, typically from a realtime tuning
callback running on another thread. Every field is an independent float, so
a reader sees either the old or the new value of a field, never a torn one.

Typical usage
-------------
from savo_tuning.models.gain_profile import GainProfile

position = GainProfile(p=0.8, i=0.0, d=0.05, output_range=0.5)
velocity = GainProfile(0.1, 0.001, 0.0, feed_forward=0.045)
position.set_p(1.2).set_tolerance(0.25)
"""

from __future__ import annotations

import math
from dataclasses import dataclass, asdict
from typing import Any, Dict

from savo_tuning.constants import DEFAULT_OUTPUT_RANGE, DEFAULT_TOLERANCE
from savo_tuning.exceptions import ProfileConfigError, TuningErrorContext


def _finite(name: str, value: Any) -> float:
    try:
        v = float(value)
    except (TypeError, ValueError) as e:
        raise ProfileConfigError(
            f"{name} must be a number, got {value!r}",
            context=TuningErrorContext(component="GainProfile", operation=f"set_{name}"),
            cause=e,
        ) from e
    if not math.isfinite(v):
        raise ProfileConfigError(
            f"{name} must be finite",
            context=TuningErrorContext(component="GainProfile", operation=f"set_{name}", value=v),
        )
    return v


def _validate_output_range(value: Any) -> float:
    v = _finite("output_range", value)
    if v <= 0.0:
        raise ProfileConfigError(
            "output_range must be > 0",
            context=TuningErrorContext(component="GainProfile", operation="set_output_range", value=v),
        )
    return v


def _validate_tolerance(value: Any) -> float:
    v = _finite("tolerance", value)
    if v < 0.0:
        raise ProfileConfigError(
            "tolerance must be >= 0",
            context=TuningErrorContext(component="GainProfile", operation="set_tolerance", value=v),
        )
    return v


@dataclass
class GainProfile:
    """
    PIDF loop constants for one profile slot.

    Attributes
    ----------
    p : proportional gain; output proportional to current error.
    i : integral gain; output from accumulated error.
    d : derivative gain; typically used for damping.
    feed_forward : feed forward constant (scaled by the setpoint).
    output_range : maximum absolute output; computed output is saturated
                   to [-output_range, +output_range]. Must be > 0.
    tolerance : absolute error considered "at setpoint". Must be >= 0.
    """
    p: float
    i: float = 0.0
    d: float = 0.0
    feed_forward: float = 0.0
    output_range: float = DEFAULT_OUTPUT_RANGE
    tolerance: float = DEFAULT_TOLERANCE

    def __post_init__(self) -> None:
        self.p = _finite("p", self.p)
        self.i = _finite("i", self.i)
        self.d = _finite("d", self.d)
        self.feed_forward = _finite("feed_forward", self.feed_forward)
        self.output_range = _validate_output_range(self.output_range)
        self.tolerance = _validate_tolerance(self.tolerance)

    # -------------------------------------------------------------------------
    # Chainable setters (live tuning entry points)
    # -------------------------------------------------------------------------
    def set_p(self, value: float) -> "GainProfile":
        self.p = _finite("p", value)
        return self

    def set_i(self, value: float) -> "GainProfile":
        self.i = _finite("i", value)
        return self

    def set_d(self, value: float) -> "GainProfile":
        self.d = _finite("d", value)
        return self

    def set_feed_forward(self, value: float) -> "GainProfile":
        self.feed_forward = _finite("feed_forward", value)
        return self

    def set_output_range(self, value: float) -> "GainProfile":
        self.output_range = _validate_output_range(value)
        return self

    def set_tolerance(self, value: float) -> "GainProfile":
        self.tolerance = _validate_tolerance(value)
        return self

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------
    def gains(self) -> tuple[float, float, float, float]:
        """(p, i, d, feed_forward) snapshot."""
        return (self.p, self.i, self.d, self.feed_forward)

    def copy(self) -> "GainProfile":
        return GainProfile(**asdict(self))

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GainProfile":
        """
        Build a profile from a dict using either field names or the short
        parameter keys (kp, ki, kd, kf).
        """
        def pick(*keys: str, default: Any = None) -> Any:
            for k in keys:
                if k in data and data[k] is not None:
                    return data[k]
            return default

        p = pick("p", "kp")
        if p is None:
            raise ProfileConfigError(
                "gain profile requires 'p' (or 'kp')",
                context=TuningErrorContext(component="GainProfile", operation="from_dict"),
            )
        return cls(
            p=p,
            i=pick("i", "ki", default=0.0),
            d=pick("d", "kd", default=0.0),
            feed_forward=pick("feed_forward", "kf", "ff", default=0.0),
            output_range=pick("output_range", "range", default=DEFAULT_OUTPUT_RANGE),
            tolerance=pick("tolerance", default=DEFAULT_TOLERANCE),
        )


__all__ = ["GainProfile"]
