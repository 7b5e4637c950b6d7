#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Robot SAVO — savo_tuning/models/motion_profile.py
-------------------------------------------------
Motion-profile constants pushed to on-device controllers alongside PID gains.

Purpose
-------
Hold the non-PID constants used by controllers that run their own motion
profiling (cruise velocity, acceleration, integral zone, S-curve smoothing,
minimum velocity), plus the setup options (factory reset, status frames,
call timeout/period).

Every motion constant is nullable: `None` means "leave the hardware default"
and is skipped by `HardwareProfileSync`.

Controller families
-------------------
The family-specific extra constant is carried as a tagged value (`MotionExtra`)
instead of a subclass, so consumers dispatch on `extra.family`:

- BASIC         -> no extra constant
- MOTION_MAGIC  -> s_curve_strength (int, controller-wide)
- SMART_MOTION  -> min_velocity (float, per slot)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from savo_tuning.constants import DEFAULT_STATUS_FRAME_PERIOD_MS, DEFAULT_TIMEOUT_MS
from savo_tuning.exceptions import ProfileConfigError, TuningErrorContext


class MotionFamily(str, Enum):
    BASIC = "BASIC"
    MOTION_MAGIC = "MOTION_MAGIC"
    SMART_MOTION = "SMART_MOTION"


@dataclass
class MotionExtra:
    """
    Family tag plus the one family-specific constant.

    Use the constructors `basic()`, `motion_magic(...)`, `smart_motion(...)`
    rather than filling fields by hand.
    """
    family: MotionFamily = MotionFamily.BASIC
    s_curve_strength: Optional[int] = None
    min_velocity: Optional[float] = None

    def __post_init__(self) -> None:
        self.family = MotionFamily(self.family)
        if self.family is not MotionFamily.MOTION_MAGIC and self.s_curve_strength is not None:
            raise ProfileConfigError(
                "s_curve_strength is only valid for MOTION_MAGIC",
                context=TuningErrorContext(component="MotionExtra", value=self.family.value),
            )
        if self.family is not MotionFamily.SMART_MOTION and self.min_velocity is not None:
            raise ProfileConfigError(
                "min_velocity is only valid for SMART_MOTION",
                context=TuningErrorContext(component="MotionExtra", value=self.family.value),
            )

    @classmethod
    def basic(cls) -> "MotionExtra":
        return cls(MotionFamily.BASIC)

    @classmethod
    def motion_magic(cls, s_curve_strength: Optional[int] = None) -> "MotionExtra":
        return cls(MotionFamily.MOTION_MAGIC, s_curve_strength=s_curve_strength)

    @classmethod
    def smart_motion(cls, min_velocity: Optional[float] = None) -> "MotionExtra":
        return cls(MotionFamily.SMART_MOTION, min_velocity=min_velocity)


@dataclass
class MotionProfile:
    """
    Motion-profiling setup for one controller.

    Attributes
    ----------
    max_velocity : cruise / max velocity in native units (e.g. ticks per 100 ms).
    max_acceleration : max acceleration in native units.
    integral_zone : error band outside which the integral term is ignored.
    timeout_ms : timeout passed to every controller configuration call.
    period_ms : period used for status-frame configuration.
    reset : restore the controller to factory defaults before setup.
    status_frames : status frame ids whose period is set during setup.
    extra : family tag + family-specific constant.
    """
    max_velocity: Optional[float] = None
    max_acceleration: Optional[float] = None
    integral_zone: Optional[int] = None
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    period_ms: int = DEFAULT_STATUS_FRAME_PERIOD_MS
    reset: bool = False
    status_frames: List[int] = field(default_factory=list)
    extra: MotionExtra = field(default_factory=MotionExtra)

    def __post_init__(self) -> None:
        if int(self.timeout_ms) < 0:
            raise ProfileConfigError(
                "timeout_ms must be >= 0",
                context=TuningErrorContext(component="MotionProfile", value=self.timeout_ms),
            )
        if int(self.period_ms) <= 0:
            raise ProfileConfigError(
                "period_ms must be > 0",
                context=TuningErrorContext(component="MotionProfile", value=self.period_ms),
            )
        self.timeout_ms = int(self.timeout_ms)
        self.period_ms = int(self.period_ms)

    @property
    def family(self) -> MotionFamily:
        return self.extra.family

    # -------------------------------------------------------------------------
    # Chainable setters (builder style)
    # -------------------------------------------------------------------------
    def add_status_frames(self, *frames: int) -> "MotionProfile":
        self.status_frames.extend(int(f) for f in frames)
        return self

    def set_max_velocity(self, value: Optional[float]) -> "MotionProfile":
        self.max_velocity = None if value is None else float(value)
        return self

    def set_max_acceleration(self, value: Optional[float]) -> "MotionProfile":
        self.max_acceleration = None if value is None else float(value)
        return self

    def set_integral_zone(self, value: Optional[int]) -> "MotionProfile":
        self.integral_zone = None if value is None else int(value)
        return self

    def set_s_curve_strength(self, value: Optional[int]) -> "MotionProfile":
        if self.extra.family is not MotionFamily.MOTION_MAGIC:
            raise ProfileConfigError(
                "s_curve_strength requires a MOTION_MAGIC profile",
                context=TuningErrorContext(component="MotionProfile", value=self.extra.family.value),
            )
        self.extra.s_curve_strength = None if value is None else int(value)
        return self

    def set_min_velocity(self, value: Optional[float]) -> "MotionProfile":
        if self.extra.family is not MotionFamily.SMART_MOTION:
            raise ProfileConfigError(
                "min_velocity requires a SMART_MOTION profile",
                context=TuningErrorContext(component="MotionProfile", value=self.extra.family.value),
            )
        self.extra.min_velocity = None if value is None else float(value)
        return self

    def to_dict(self) -> Dict[str, Any]:
        return {
            "family": self.extra.family.value,
            "max_velocity": self.max_velocity,
            "max_acceleration": self.max_acceleration,
            "integral_zone": self.integral_zone,
            "s_curve_strength": self.extra.s_curve_strength,
            "min_velocity": self.extra.min_velocity,
            "timeout_ms": self.timeout_ms,
            "period_ms": self.period_ms,
            "reset": self.reset,
            "status_frames": list(self.status_frames),
        }


__all__ = ["MotionFamily", "MotionExtra", "MotionProfile"]
