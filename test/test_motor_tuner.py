#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import pytest

from savo_tuning.constants import BASE_TUNING_LABELS
from savo_tuning.drivers.dryrun_motor_controller import DryRunMotorController
from savo_tuning.models.gain_profile import GainProfile
from savo_tuning.models.motion_profile import MotionExtra, MotionProfile
from savo_tuning.tuning.motor_tuner import MotorTuner
from savo_tuning.tuning.value_store import LiveValueTable


def _motion_magic():
    return MotionProfile(
        max_velocity=1200.0,
        max_acceleration=600.0,
        integral_zone=100,
        timeout_ms=20,
        extra=MotionExtra.motion_magic(2),
    )


def test_motion_magic_layout_and_initial_values():
    store = LiveValueTable()
    gains = GainProfile(0.4, i=0.01, d=2.0, feed_forward=0.05, output_range=0.8)
    tuner = MotorTuner(store, gains, _motion_magic())

    assert tuner.bind_controller(DryRunMotorController(), slot=1) is True
    assert set(tuner.labels()) == set(BASE_TUNING_LABELS) | {"S Curve Strength"}
    assert store.get("P Gain") == 0.4
    assert store.get("Max Output") == 0.8
    assert store.get("Min Output") == -0.8
    assert store.get("I Zone") == 100.0
    assert store.get("S Curve Strength") == 2.0


def test_gain_edits_reach_profile_and_slot():
    store = LiveValueTable()
    gains = GainProfile(0.4)
    ctrl = DryRunMotorController()
    MotorTuner(store, gains, _motion_magic()).bind_controller(ctrl, slot=1)

    store.set("P Gain", 0.7)
    store.set("Feed Forward", 0.3)
    assert gains.p == 0.7
    assert gains.feed_forward == 0.3
    assert ctrl.calls("config_kp")[-1].args == (1, 0.7, 20)
    assert ctrl.value("config_kf", 1) == 0.3


def test_motion_magic_edits_use_controller_wide_calls():
    store = LiveValueTable()
    motion = _motion_magic()
    ctrl = DryRunMotorController()
    MotorTuner(store, GainProfile(0.4), motion).bind_controller(ctrl)

    store.set("Max Velocity", 1500.0)
    store.set("Max Acceleration", 700.0)
    store.set("S Curve Strength", 4.0)
    store.set("I Zone", 250.0)

    assert motion.max_velocity == 1500.0
    assert motion.max_acceleration == 700.0
    assert motion.extra.s_curve_strength == 4
    assert motion.integral_zone == 250
    assert ctrl.value("config_cruise_velocity") == 1500.0
    assert ctrl.value("config_acceleration") == 700.0
    assert ctrl.value("config_s_curve_strength") == 4
    assert isinstance(ctrl.value("config_s_curve_strength"), int)
    assert ctrl.value("config_integral_zone", 0) == 250


def test_output_limits():
    store = LiveValueTable()
    gains = GainProfile(0.4, output_range=1.0)
    ctrl = DryRunMotorController()
    MotorTuner(store, gains).bind_controller(ctrl)

    store.set("Max Output", 0.9)
    assert gains.output_range == 0.9
    assert ctrl.value("config_peak_output_forward") == 0.9

    store.set("Min Output", -0.6)
    assert gains.output_range == 0.6
    assert ctrl.value("config_peak_output_reverse") == -0.6


def test_smart_motion_binds_min_velocity_per_slot():
    store = LiveValueTable()
    motion = MotionProfile(max_velocity=3000.0, extra=MotionExtra.smart_motion(25.0))
    ctrl = DryRunMotorController()
    tuner = MotorTuner(store, GainProfile(0.1), motion)

    assert tuner.bind_controller(ctrl, slot=2) is True
    assert tuner.is_bound("Min Vel")
    assert not tuner.is_bound("S Curve Strength")

    store.set("Min Vel", 40.0)
    store.set("Max Velocity", 2500.0)
    assert motion.extra.min_velocity == 40.0
    assert ctrl.value("config_min_velocity", 2) == 40.0
    assert ctrl.value("config_max_velocity", 2) == 2500.0
    assert ctrl.count("config_cruise_velocity") == 0


def test_basic_profile_binds_base_layout_only():
    store = LiveValueTable()
    tuner = MotorTuner(store, GainProfile(0.1))

    assert tuner.bind_controller(DryRunMotorController()) is False
    assert tuner.labels() == BASE_TUNING_LABELS
    assert store.get("Max Velocity") == 0.0
    assert store.get("I Zone") == 0.0


def test_positive_min_output_edit_is_rejected_by_profile():
    store = LiveValueTable()
    gains = GainProfile(0.4, output_range=1.0)
    ctrl = DryRunMotorController()
    MotorTuner(store, gains).bind_controller(ctrl)

    with pytest.raises(ValueError):
        store.set("Min Output", 0.5)
    assert gains.output_range == 1.0
    assert ctrl.count("config_peak_output_reverse") == 0


def test_unbind_removes_whole_layout():
    store = LiveValueTable()
    tuner = MotorTuner(store, GainProfile(0.1), _motion_magic())
    tuner.bind_controller(DryRunMotorController())
    tuner.unbind(remove_external_entries=True)
    assert store.labels() == ()
    assert store.listener_count() == 0
