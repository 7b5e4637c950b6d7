#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Robot SAVO — savo_tuning.controllers.control_evaluator
======================================================

Purpose
-------
Software PID path for motor controllers that cannot run closed-loop control
on the device. Owns one `Pid` accumulator per profile slot and computes the
bounded motor output for the currently selected slot, once per control cycle.

States
------
- Disabled          -> output is 0.0 (selection and setpoints are kept)
- Enabled-NoSetpoint -> output is 0.0 until a setpoint is given for the slot
- Enabled-Running   -> PID output, hard-clamped to the slot's output range

Fail-safe policy
----------------
Nothing here raises for invalid runtime state. Disabled, invalid selection,
missing setpoint, missing feedback source, non-finite feedback or an
overflowing PID sum all return exactly 0.0, so a misconfigured loop never
commands motion. Non-finite setpoints are rejected at `set_setpoint()`.

Threading
---------
`calculate()` runs on the control thread. Gains, setpoints and the selected
index may be written from a tuning listener thread; each is a single scalar
assignment, so the loop sees a value at most one cycle stale.

Typical usage
-------------
evaluator = ControlEvaluator([position_gains, velocity_gains])
evaluator.supply_feedback_source(ControlMode.POSITION, encoder.get_position)
evaluator.select(ControlMode.POSITION)
evaluator.set_setpoint(1200.0)
motor.set(evaluator.calculate())   # every 20 ms
"""

from __future__ import annotations

import math
from typing import Callable, Dict, List, Optional, Sequence

from savo_tuning.constants import DEFAULT_PERIOD_S
from savo_tuning.controllers.pid_py import Pid, PidConfig
from savo_tuning.controllers.profile_store import ProfileStore, SlotRef
from savo_tuning.models.gain_profile import GainProfile
from savo_tuning.utils.clamp import clamp_symmetric
from savo_tuning.utils.logging import LoggerAdapter, RateLimitedLogger, get_logger_adapter, log_event

FeedbackSupplier = Callable[[], float]


class ControlEvaluator(ProfileStore):
    """
    Multi-slot software PID evaluator.

    Parameters
    ----------
    profiles : gain profiles, one per slot (slot i uses profiles[i]).
    period_s : control-loop period used as dt for every calculation.
    enabled : initial enable state. Defaults to True so a freshly built
        evaluator drives its slot as soon as a setpoint is given; pass
        enabled=False to start with output frozen at 0.0 until `enable()`.
    logger : optional LoggerAdapter / ROS logger / stdlib logger.
    """

    def __init__(
        self,
        profiles: Sequence[GainProfile],
        *,
        period_s: float = DEFAULT_PERIOD_S,
        enabled: bool = True,
        logger: Optional[object] = None,
    ) -> None:
        super().__init__(profiles)
        period = float(period_s)
        if not math.isfinite(period) or period <= 0.0:
            period = DEFAULT_PERIOD_S
        self._period_s = period

        self._pids: List[Pid] = []
        for prof in self.profiles():
            pid = Pid(PidConfig(kp=prof.p, ki=prof.i, kd=prof.d, max_dt_sec=max(1.0, period)))
            self._pids.append(pid)

        self._setpoints: List[Optional[float]] = [None] * len(self)
        self._last_errors: List[Optional[float]] = [None] * len(self)
        self._feedback_suppliers: Dict[int, FeedbackSupplier] = {}
        self._enabled = bool(enabled)

        self._log: LoggerAdapter = get_logger_adapter(logger, name="savo_tuning.control_evaluator")
        self._rate_log = RateLimitedLogger(self._log, period_s=1.0)

    # -------------------------------------------------------------------------
    # Enable / disable
    # -------------------------------------------------------------------------
    def enable(self) -> None:
        """
        Enable output. A disabled -> enabled transition clears every slot's
        accumulated integral/derivative history.
        """
        if not self._enabled:
            self.reset()
            log_event(self._log, "enabled", level="DEBUG", component="ControlEvaluator",
                      details={"slot": self.current_index()})
        self._enabled = True

    def disable(self) -> None:
        """
        Freeze output at 0.0. Keeps the selected slot and its setpoint.
        """
        if self._enabled:
            log_event(self._log, "disabled", level="DEBUG", component="ControlEvaluator",
                      details={"slot": self.current_index()})
        self._enabled = False

    def is_enabled(self) -> bool:
        return self._enabled

    @property
    def period_s(self) -> float:
        return self._period_s

    # -------------------------------------------------------------------------
    # Setpoint / feedback
    # -------------------------------------------------------------------------
    def set_setpoint(self, value: float) -> bool:
        """
        Set the setpoint of the currently selected slot.

        Returns False (nothing stored) when the selection is invalid or the
        value is not a finite number.
        """
        idx = self.current_index()
        if not 0 <= idx < len(self):
            return False
        value = float(value)
        if not math.isfinite(value):
            log_event(self._log, "setpoint_rejected", level="WARN", component="ControlEvaluator",
                      details={"slot": idx, "value": value})
            return False
        self._setpoints[idx] = value
        return True

    def setpoint(self, index: Optional[SlotRef] = None) -> Optional[float]:
        """
        Stored setpoint of `index` (default: current slot); None if unset or invalid.
        """
        idx = self.current_index() if index is None else int(index)
        if not 0 <= idx < len(self):
            return None
        return self._setpoints[idx]

    def has_setpoint(self) -> bool:
        return self.setpoint() is not None

    def supply_feedback_source(self, index: SlotRef, supplier: FeedbackSupplier) -> None:
        """
        Register the zero-argument feedback accessor used by `calculate()`
        while slot `index` is selected. Replaces any previous supplier.
        """
        self._feedback_suppliers[int(index)] = supplier

    # -------------------------------------------------------------------------
    # Calculation
    # -------------------------------------------------------------------------
    def calculate(self, feedback: Optional[float] = None) -> float:
        """
        Bounded output for the current slot.

        With no argument, feedback is read from the supplier registered for
        the current slot (0.0 if there is none).
        """
        if not self._enabled:
            return 0.0

        idx = self.current_index()
        if feedback is None:
            supplier = self._feedback_suppliers.get(idx)
            if supplier is None:
                return 0.0
            feedback = supplier()

        if not 0 <= idx < len(self):
            return 0.0

        setpoint = self._setpoints[idx]
        if setpoint is None:
            return 0.0

        measurement = float(feedback)
        if not math.isfinite(measurement):
            self._rate_log.warn(f"feedback_{idx}", f"[ControlEvaluator] non-finite feedback on slot {idx}")
            return 0.0

        profile = self.profiles()[idx]
        pid = self._pids[idx]
        pid.set_gains(profile.p, profile.i, profile.d)

        result = pid.update_from_setpoint(setpoint, measurement, self._period_s)
        self._last_errors[idx] = result.error

        output = result.output_raw + profile.feed_forward * setpoint
        if not math.isfinite(output):
            self._rate_log.warn(f"output_{idx}", f"[ControlEvaluator] non-finite output on slot {idx}")
            return 0.0
        return clamp_symmetric(output, profile.output_range)

    def at_setpoint(self) -> bool:
        """
        True when the last calculated error of the current slot is within the
        slot's tolerance.
        """
        idx = self.current_index()
        if not 0 <= idx < len(self):
            return False
        err = self._last_errors[idx]
        if err is None:
            return False
        return abs(err) <= self.profiles()[idx].tolerance

    def reset(self, index: Optional[SlotRef] = None) -> None:
        """
        Clear accumulator history of one slot, or of every slot.
        """
        if index is None:
            targets = range(len(self))
        else:
            idx = int(index)
            if not 0 <= idx < len(self):
                return
            targets = (idx,)
        for i in targets:
            self._pids[i].reset()
            self._last_errors[i] = None


__all__ = ["FeedbackSupplier", "ControlEvaluator"]
