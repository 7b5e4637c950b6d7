#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Robot SAVO — savo_tuning/tuning/motor_tuner.py
----------------------------------------------
Standard PID + motion-profile live tuning layout for one controller slot.

Entries bound by `bind_controller()`:

    P Gain, I Gain, D Gain, Feed Forward  -> gains + config_kp/ki/kd/kf
    I Zone                                -> motion.integral_zone + config_integral_zone
    Max Output / Min Output               -> gains.output_range + peak output fwd/rev
    Max Velocity / Max Acceleration       -> motion fields + cruise (or per-slot smart motion) values
    S Curve Strength                      -> MOTION_MAGIC only
    Min Vel                               -> SMART_MOTION only

"Min Output" is published as the negated output range; an edit stores
`-value` as the new range, so only negative edits are accepted.
"""

from __future__ import annotations

from typing import Optional

from savo_tuning.constants import (
    LABEL_D_GAIN,
    LABEL_FEED_FORWARD,
    LABEL_I_GAIN,
    LABEL_I_ZONE,
    LABEL_MAX_ACCELERATION,
    LABEL_MAX_OUTPUT,
    LABEL_MAX_VELOCITY,
    LABEL_MIN_OUTPUT,
    LABEL_MIN_VELOCITY,
    LABEL_P_GAIN,
    LABEL_S_CURVE_STRENGTH,
)
from savo_tuning.drivers.motor_controller import MotorController
from savo_tuning.models.gain_profile import GainProfile
from savo_tuning.models.motion_profile import MotionFamily, MotionProfile
from savo_tuning.tuning.tuning_bridge import TuningBridge
from savo_tuning.tuning.value_store import ValueStore
from savo_tuning.utils.logging import log_event


def _or_zero(value: Optional[float]) -> float:
    return 0.0 if value is None else float(value)


class MotorTuner(TuningBridge):
    """
    TuningBridge preloaded with the motor tuning layout.

    Does not bind anything until `bind_controller()` is called.
    """

    def __init__(
        self,
        store: ValueStore,
        gains: GainProfile,
        motion: Optional[MotionProfile] = None,
        *,
        name: str = "motor_tuner",
        logger: Optional[object] = None,
    ) -> None:
        super().__init__(store, name=name, logger=logger)
        self._gains = gains
        self._motion = motion if motion is not None else MotionProfile()

    @property
    def gains(self) -> GainProfile:
        return self._gains

    @property
    def motion(self) -> MotionProfile:
        return self._motion

    def bind_controller(self, controller: MotorController, slot: int = 0) -> bool:
        """
        Bind the base layout to `controller` slot `slot`.

        Returns True if the family-specific entry (S Curve Strength or Min Vel)
        was bound as well.
        """
        g = self._gains
        m = self._motion
        timeout = m.timeout_ms
        slot = int(slot)
        smart = m.family is MotionFamily.SMART_MOTION

        def _set_izone(v: float) -> None:
            m.integral_zone = int(v)

        def _set_max_vel(v: float) -> None:
            m.max_velocity = v

        def _set_max_accel(v: float) -> None:
            m.max_acceleration = v

        def push_vel(v: float) -> None:
            if smart:
                controller.config_max_velocity(slot, v, timeout)
            else:
                controller.config_cruise_velocity(v, timeout)

        def push_accel(v: float) -> None:
            if smart:
                controller.config_max_acceleration(slot, v, timeout)
            else:
                controller.config_acceleration(v, timeout)

        (
            self.bind_field(LABEL_P_GAIN, g.p, g.set_p,
                            lambda v: controller.config_kp(slot, v, timeout))
            .bind_field(LABEL_I_GAIN, g.i, g.set_i,
                        lambda v: controller.config_ki(slot, v, timeout))
            .bind_field(LABEL_D_GAIN, g.d, g.set_d,
                        lambda v: controller.config_kd(slot, v, timeout))
            .bind_field(LABEL_FEED_FORWARD, g.feed_forward, g.set_feed_forward,
                        lambda v: controller.config_kf(slot, v, timeout))
            .bind_field(LABEL_I_ZONE, _or_zero(m.integral_zone), _set_izone,
                        lambda v: controller.config_integral_zone(slot, int(v), timeout))
            .bind_field(LABEL_MAX_OUTPUT, g.output_range, g.set_output_range,
                        lambda v: controller.config_peak_output_forward(v, timeout))
            .bind_field(LABEL_MIN_OUTPUT, -g.output_range, lambda v: g.set_output_range(-v),
                        lambda v: controller.config_peak_output_reverse(v, timeout))
            .bind_field(LABEL_MAX_VELOCITY, _or_zero(m.max_velocity), _set_max_vel, push_vel)
            .bind_field(LABEL_MAX_ACCELERATION, _or_zero(m.max_acceleration), _set_max_accel, push_accel)
        )

        extra = m.extra
        bound_extra = False
        if m.family is MotionFamily.MOTION_MAGIC:
            def _set_s_curve(v: float) -> None:
                extra.s_curve_strength = int(v)

            self.bind_field(LABEL_S_CURVE_STRENGTH, _or_zero(extra.s_curve_strength), _set_s_curve,
                            lambda v: controller.config_s_curve_strength(int(v), timeout))
            bound_extra = True
        elif smart:
            def _set_min_vel(v: float) -> None:
                extra.min_velocity = v

            self.bind_field(LABEL_MIN_VELOCITY, _or_zero(extra.min_velocity), _set_min_vel,
                            lambda v: controller.config_min_velocity(slot, v, timeout))
            bound_extra = True

        log_event(self._log, "controller_bound", component="MotorTuner",
                  details={"slot": slot, "family": m.family.value, "fields": len(self.labels())})
        return bound_extra


__all__ = ["MotorTuner"]
