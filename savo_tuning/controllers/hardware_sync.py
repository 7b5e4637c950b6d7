#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Robot SAVO — savo_tuning.controllers.hardware_sync
==================================================

Purpose
-------
On-device PID path. The motor controller runs the closed loop itself; this
class only pushes every profile's gains into the controller's slots once, and
switches the controller's active slot whenever the selection changes.

Setup order (constructor, exactly once)
---------------------------------------
1. factory reset                      (motion.reset)
2. status frame periods               (motion.status_frames)
3. per slot: kp, ki, kd, kf
   + integral zone                    (motion given)
   + max vel / max accel / min vel    (SMART_MOTION only)
4. controller-wide: cruise velocity, acceleration (BASIC / MOTION_MAGIC)
   + S-curve strength                 (MOTION_MAGIC only)
5. select_profile_slot(0)

Any `None` motion constant is skipped. Peak output is never touched here.

Errors
------
Controller failures propagate unmodified. Nothing is retried or wrapped; a
partially applied setup is left as-is for the caller to handle.
"""

from __future__ import annotations

import threading
from typing import Optional, Sequence

from savo_tuning.constants import DEFAULT_TIMEOUT_MS
from savo_tuning.controllers.profile_store import ProfileStore, SlotRef
from savo_tuning.drivers.motor_controller import MotorController
from savo_tuning.models.gain_profile import GainProfile
from savo_tuning.models.motion_profile import MotionFamily, MotionProfile
from savo_tuning.utils.logging import LoggerAdapter, get_logger_adapter, log_event, log_exception


class HardwareProfileSync(ProfileStore):
    """
    Profile manager bound to one on-device PID motor controller.

    Parameters
    ----------
    controller : MotorController receiving gains and slot switches.
    profiles : gain profiles; profile i is written to hardware slot i.
    motion : optional motion-profile setup applied in the same pass.
    timeout_ms : timeout for configuration calls (motion.timeout_ms wins when
        a motion profile is given).
    """

    def __init__(
        self,
        controller: MotorController,
        profiles: Sequence[GainProfile],
        *,
        motion: Optional[MotionProfile] = None,
        timeout_ms: int = DEFAULT_TIMEOUT_MS,
        logger: Optional[object] = None,
    ) -> None:
        super().__init__(profiles)
        self._controller = controller
        self._motion = motion
        self._timeout_ms = int(motion.timeout_ms if motion is not None else timeout_ms)
        self._lock = threading.Lock()
        self._log: LoggerAdapter = get_logger_adapter(logger, name="savo_tuning.hardware_sync")

        with self._lock:
            try:
                self._setup()
            except Exception as exc:
                log_exception(self._log, exc, message="profile setup failed", component="HardwareProfileSync")
                raise

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------
    @property
    def controller(self) -> MotorController:
        return self._controller

    @property
    def motion(self) -> Optional[MotionProfile]:
        return self._motion

    @property
    def timeout_ms(self) -> int:
        return self._timeout_ms

    # -------------------------------------------------------------------------
    # Selection
    # -------------------------------------------------------------------------
    def select(self, index: SlotRef) -> bool:
        """
        Store the selection; on a real change to a valid slot, issue exactly one
        `select_profile_slot(index)`.
        """
        with self._lock:
            changed = super().select(index)
            if changed and self.is_selection_valid():
                idx = self.current_index()
                self._controller.select_profile_slot(idx)
                log_event(self._log, "slot_selected", level="DEBUG",
                          component="HardwareProfileSync", details={"slot": idx})
            elif changed:
                log_event(self._log, "deselected", level="DEBUG",
                          component="HardwareProfileSync", details={"index": self.current_index()})
            return changed

    def reapply(self, index: Optional[SlotRef] = None) -> None:
        """
        Push gains (and per-slot motion constants) again for one slot or all
        slots. Does not change the active slot.
        """
        with self._lock:
            if index is None:
                for slot in range(len(self)):
                    self._push_slot(slot)
            else:
                slot = int(index)
                self.get_profile(slot)
                self._push_slot(slot)
        log_event(self._log, "gains_reapplied", component="HardwareProfileSync",
                  details={"slot": "all" if index is None else int(index)})

    # -------------------------------------------------------------------------
    # Setup
    # -------------------------------------------------------------------------
    def _setup(self) -> None:
        ctrl = self._controller
        timeout = self._timeout_ms
        motion = self._motion

        if motion is not None:
            if motion.reset:
                ctrl.config_factory_default(timeout)
            for frame in motion.status_frames:
                ctrl.set_status_frame_period(frame, motion.period_ms, timeout)

        for slot in range(len(self)):
            self._push_slot(slot)

        if motion is not None and motion.family is not MotionFamily.SMART_MOTION:
            if motion.max_velocity is not None:
                ctrl.config_cruise_velocity(motion.max_velocity, timeout)
            if motion.max_acceleration is not None:
                ctrl.config_acceleration(motion.max_acceleration, timeout)
            if motion.family is MotionFamily.MOTION_MAGIC and motion.extra.s_curve_strength is not None:
                ctrl.config_s_curve_strength(motion.extra.s_curve_strength, timeout)

        ctrl.select_profile_slot(0)

        log_event(
            self._log,
            "profiles_applied",
            component="HardwareProfileSync",
            details={
                "slots": len(self),
                "family": motion.family.value if motion is not None else "NONE",
                "timeout_ms": timeout,
            },
        )

    def _push_slot(self, slot: int) -> None:
        ctrl = self._controller
        timeout = self._timeout_ms
        prof = self.profiles()[slot]

        ctrl.config_kp(slot, prof.p, timeout)
        ctrl.config_ki(slot, prof.i, timeout)
        ctrl.config_kd(slot, prof.d, timeout)
        ctrl.config_kf(slot, prof.feed_forward, timeout)

        motion = self._motion
        if motion is None:
            return

        if motion.integral_zone is not None:
            ctrl.config_integral_zone(slot, motion.integral_zone, timeout)

        if motion.family is MotionFamily.SMART_MOTION:
            if motion.max_velocity is not None:
                ctrl.config_max_velocity(slot, motion.max_velocity, timeout)
            if motion.max_acceleration is not None:
                ctrl.config_max_acceleration(slot, motion.max_acceleration, timeout)
            if motion.extra.min_velocity is not None:
                ctrl.config_min_velocity(slot, motion.extra.min_velocity, timeout)


__all__ = ["HardwareProfileSync"]
