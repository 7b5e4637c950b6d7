#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Robot SAVO — savo_tuning/drivers/motor_controller.py
----------------------------------------------------
Abstract motor controller contract used by `HardwareProfileSync` and
`MotorTuner`.

Real implementations wrap a vendor API (smart motor controller with on-device
closed loop). Every `config_*` call is opaque: it may block for up to
`timeout_ms` and raises on failure. Per-slot calls take the slot index first;
controller-wide calls (motion cruise values, peak output) do not.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class MotorController(ABC):
    """
    On-device PID motor controller.
    """

    # -------------------------------------------------------------------------
    # Per-slot gains
    # -------------------------------------------------------------------------
    @abstractmethod
    def config_kp(self, slot: int, value: float, timeout_ms: int) -> None: ...

    @abstractmethod
    def config_ki(self, slot: int, value: float, timeout_ms: int) -> None: ...

    @abstractmethod
    def config_kd(self, slot: int, value: float, timeout_ms: int) -> None: ...

    @abstractmethod
    def config_kf(self, slot: int, value: float, timeout_ms: int) -> None: ...

    @abstractmethod
    def config_integral_zone(self, slot: int, value: int, timeout_ms: int) -> None: ...

    # -------------------------------------------------------------------------
    # Per-slot motion constants (smart-motion style controllers)
    # -------------------------------------------------------------------------
    @abstractmethod
    def config_max_velocity(self, slot: int, value: float, timeout_ms: int) -> None: ...

    @abstractmethod
    def config_max_acceleration(self, slot: int, value: float, timeout_ms: int) -> None: ...

    @abstractmethod
    def config_min_velocity(self, slot: int, value: float, timeout_ms: int) -> None: ...

    # -------------------------------------------------------------------------
    # Controller-wide motion constants (motion-magic style controllers)
    # -------------------------------------------------------------------------
    @abstractmethod
    def config_cruise_velocity(self, value: float, timeout_ms: int) -> None: ...

    @abstractmethod
    def config_acceleration(self, value: float, timeout_ms: int) -> None: ...

    @abstractmethod
    def config_s_curve_strength(self, value: int, timeout_ms: int) -> None: ...

    # -------------------------------------------------------------------------
    # Output limits / housekeeping
    # -------------------------------------------------------------------------
    @abstractmethod
    def config_peak_output_forward(self, value: float, timeout_ms: int) -> None: ...

    @abstractmethod
    def config_peak_output_reverse(self, value: float, timeout_ms: int) -> None: ...

    @abstractmethod
    def config_factory_default(self, timeout_ms: int) -> None: ...

    @abstractmethod
    def set_status_frame_period(self, frame: int, period_ms: int, timeout_ms: int) -> None: ...

    @abstractmethod
    def select_profile_slot(self, slot: int) -> None:
        """
        Make `slot` the active closed-loop gain slot (primary PID loop).
        """


__all__ = ["MotorController"]
