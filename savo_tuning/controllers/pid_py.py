#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Robot SAVO — savo_tuning.controllers.pid_py
===========================================

Purpose
-------
ROS-independent scalar PID accumulator. One instance holds the integral and
derivative bookkeeping of one profile slot; `ControlEvaluator` owns one per
slot and feeds it the live gains of that slot every cycle.

Caller responsibilities
-----------------------
- compute / provide the scalar error (or setpoint + measurement)
- provide dt_sec from the loop timing
- apply feed-forward, output saturation and mode gating in higher layers
"""

from __future__ import annotations

from dataclasses import dataclass
from math import isfinite


# =============================================================================
# PID parameter set
# =============================================================================

@dataclass
class PidConfig:
    # Gains
    kp: float = 0.0
    ki: float = 0.0
    kd: float = 0.0

    # dt validity bounds
    min_dt_sec: float = 1e-6
    max_dt_sec: float = 1.0


# =============================================================================
# PID debug/result output bundle
# =============================================================================

@dataclass
class PidResult:
    # Unsaturated sum (P+I+D)
    output_raw: float = 0.0

    # Terms
    p_term: float = 0.0
    i_term: float = 0.0
    d_term: float = 0.0

    # Diagnostics/internal states
    error: float = 0.0
    integral_state: float = 0.0
    dt_sec: float = 0.0

    # Flags
    valid: bool = False
    dt_valid: bool = False


# =============================================================================
# Scalar PID accumulator
# =============================================================================

class Pid:
    """
    Scalar PID accumulator.

    Invalid input (non-finite error) yields a 0.0 output and leaves the
    accumulated state untouched. An invalid dt freezes the integral and
    zeroes the derivative for that step.
    """

    def __init__(self, config: PidConfig | None = None) -> None:
        self._config = config if config is not None else PidConfig()
        self._normalize_config()

        self._integral_state = 0.0
        self._prev_error = 0.0
        self._has_prev_error = False

    def config(self) -> PidConfig:
        return self._config

    def set_gains(self, kp: float, ki: float, kd: float) -> None:
        c = self._config
        c.kp = float(kp) if isfinite(kp) else 0.0
        c.ki = float(ki) if isfinite(ki) else 0.0
        c.kd = float(kd) if isfinite(kd) else 0.0

    # -------------------------------------------------------------------------
    # State management
    # -------------------------------------------------------------------------
    def reset(self) -> None:
        self._integral_state = 0.0
        self._prev_error = 0.0
        self._has_prev_error = False

    def has_previous_error(self) -> bool:
        return self._has_prev_error

    def integral_state(self) -> float:
        return self._integral_state

    # -------------------------------------------------------------------------
    # Compute PID output from error
    # -------------------------------------------------------------------------
    def update(self, error: float, dt_sec: float) -> PidResult:
        r = PidResult()
        r.error = float(error) if error is not None else float("nan")
        r.dt_sec = float(dt_sec) if dt_sec is not None else float("nan")

        dt_ok = self._valid_dt(r.dt_sec)
        r.dt_valid = dt_ok

        if not isfinite(r.error):
            return r

        c = self._config

        r.p_term = c.kp * r.error

        if dt_ok:
            self._integral_state += r.error * r.dt_sec
        r.integral_state = self._integral_state
        r.i_term = c.ki * self._integral_state

        # Derivative on error; first sample / bad dt: no derivative kick
        if dt_ok and self._has_prev_error:
            r.d_term = c.kd * (r.error - self._prev_error) / r.dt_sec

        r.output_raw = r.p_term + r.i_term + r.d_term

        self._prev_error = r.error
        self._has_prev_error = True

        r.valid = True
        return r

    def update_from_setpoint(self, setpoint: float, measurement: float, dt_sec: float) -> PidResult:
        error = float(setpoint) - float(measurement)
        return self.update(error, dt_sec)

    # -------------------------------------------------------------------------
    # Internal helpers
    # -------------------------------------------------------------------------
    def _valid_dt(self, dt_sec: float) -> bool:
        return (
            isfinite(dt_sec)
            and dt_sec >= self._config.min_dt_sec
            and dt_sec <= self._config.max_dt_sec
        )

    def _normalize_config(self) -> None:
        c = self._config
        self.set_gains(c.kp, c.ki, c.kd)
        if (not isfinite(c.min_dt_sec)) or (c.min_dt_sec <= 0.0):
            c.min_dt_sec = 1e-6
        if (not isfinite(c.max_dt_sec)) or (c.max_dt_sec < c.min_dt_sec):
            c.max_dt_sec = max(1.0, c.min_dt_sec)


__all__ = ["PidConfig", "PidResult", "Pid"]
