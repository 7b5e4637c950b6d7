#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import threading

import pytest

from savo_tuning.controllers.hardware_sync import HardwareProfileSync
from savo_tuning.drivers.actuator_exceptions import ActuatorClosedError, ActuatorConfigError
from savo_tuning.drivers.dryrun_motor_controller import DryRunMotorController
from savo_tuning.exceptions import IndexOutOfRangeError
from savo_tuning.models.gain_profile import GainProfile
from savo_tuning.models.motion_profile import MotionExtra, MotionProfile

GAIN_CALLS = ["config_kp", "config_ki", "config_kd", "config_kf"]


def _profiles():
    return [
        GainProfile(0.4, i=0.001, d=4.0, feed_forward=0.05),
        GainProfile(0.1, i=0.0, d=0.0, feed_forward=0.2),
    ]


def test_construction_pushes_each_slot_once_then_selects_slot_zero():
    ctrl = DryRunMotorController()
    HardwareProfileSync(ctrl, _profiles())

    assert ctrl.methods() == GAIN_CALLS + GAIN_CALLS + ["select_profile_slot"]
    assert ctrl.calls("select_profile_slot")[0].args == (0,)
    assert [c.args[0] for c in ctrl.calls("config_kp")] == [0, 1]
    assert ctrl.value("config_kp", 0) == 0.4
    assert ctrl.value("config_kf", 1) == 0.2
    assert ctrl.selected_slot == 0


def test_select_issues_hardware_switch_only_on_change():
    ctrl = DryRunMotorController()
    sync = HardwareProfileSync(ctrl, _profiles())
    ctrl.reset_history()

    assert sync.select(0) is False
    assert ctrl.get_history() == []

    assert sync.select(1) is True
    assert ctrl.methods() == ["select_profile_slot"]
    assert ctrl.selected_slot == 1


def test_disabled_selection_issues_no_hardware_call():
    ctrl = DryRunMotorController()
    sync = HardwareProfileSync(ctrl, _profiles())
    ctrl.reset_history()

    assert sync.deselect() is True
    assert not sync.is_selection_valid()
    assert ctrl.get_history() == []

    assert sync.select(0) is True
    assert ctrl.count("select_profile_slot") == 1
    assert ctrl.selected_slot == 0


def test_timeout_is_passed_through():
    ctrl = DryRunMotorController()
    HardwareProfileSync(ctrl, _profiles(), timeout_ms=25)
    assert all(c.args[-1] == 25 for c in ctrl.calls("config_kp"))


def test_motion_magic_setup_order():
    ctrl = DryRunMotorController()
    motion = MotionProfile(
        max_velocity=1500.0,
        max_acceleration=800.0,
        integral_zone=200,
        timeout_ms=30,
        reset=True,
        status_frames=[10, 13],
        extra=MotionExtra.motion_magic(3),
    )
    HardwareProfileSync(ctrl, _profiles(), motion=motion)

    per_slot = GAIN_CALLS + ["config_integral_zone"]
    assert ctrl.methods() == (
        ["config_factory_default", "set_status_frame_period", "set_status_frame_period"]
        + per_slot
        + per_slot
        + ["config_cruise_velocity", "config_acceleration", "config_s_curve_strength", "select_profile_slot"]
    )
    assert [c.args for c in ctrl.calls("set_status_frame_period")] == [(10, 10, 30), (13, 10, 30)]
    assert ctrl.value("config_cruise_velocity") == 1500.0
    assert ctrl.value("config_s_curve_strength") == 3
    assert ctrl.value("config_integral_zone", 1) == 200
    assert ctrl.count("config_peak_output_forward") == 0


def test_smart_motion_constants_are_per_slot():
    ctrl = DryRunMotorController()
    motion = MotionProfile(
        max_velocity=2000.0,
        max_acceleration=1000.0,
        extra=MotionExtra.smart_motion(50.0),
    )
    HardwareProfileSync(ctrl, _profiles(), motion=motion)

    per_slot = GAIN_CALLS + ["config_max_velocity", "config_max_acceleration", "config_min_velocity"]
    assert ctrl.methods() == per_slot + per_slot + ["select_profile_slot"]
    assert ctrl.value("config_min_velocity", 1) == 50.0
    assert ctrl.count("config_cruise_velocity") == 0


def test_unset_motion_constants_are_skipped():
    ctrl = DryRunMotorController()
    HardwareProfileSync(ctrl, _profiles(), motion=MotionProfile(extra=MotionExtra.motion_magic()))
    assert ctrl.methods() == GAIN_CALLS + GAIN_CALLS + ["select_profile_slot"]


def test_reapply_pushes_gains_without_selecting():
    gains = _profiles()
    ctrl = DryRunMotorController()
    sync = HardwareProfileSync(ctrl, gains)
    ctrl.reset_history()

    gains[1].set_p(0.9)
    sync.reapply(1)
    assert ctrl.methods() == GAIN_CALLS
    assert ctrl.value("config_kp", 1) == 0.9

    ctrl.reset_history()
    sync.reapply()
    assert ctrl.methods() == GAIN_CALLS + GAIN_CALLS

    with pytest.raises(IndexOutOfRangeError):
        sync.reapply(4)


def test_controller_failure_propagates_unmodified():
    ctrl = DryRunMotorController()
    ctrl.fail_on("config_kd")
    with pytest.raises(ActuatorConfigError):
        HardwareProfileSync(ctrl, _profiles())
    # setup stopped at the failing call
    assert ctrl.methods() == ["config_kp", "config_ki", "config_kd"]
    assert ctrl.calls("config_kd")[0].ok is False


def test_closed_controller_raises_on_select():
    ctrl = DryRunMotorController()
    sync = HardwareProfileSync(ctrl, _profiles())
    ctrl.close()
    with pytest.raises(ActuatorClosedError):
        sync.select(1)


def test_concurrent_selects_issue_one_call_per_change():
    ctrl = DryRunMotorController(max_history=10_000)
    sync = HardwareProfileSync(ctrl, _profiles())
    ctrl.reset_history()
    changes = []
    changes_lock = threading.Lock()

    def worker(first):
        n = 0
        for k in range(200):
            if sync.select((first + k) % 2):
                n += 1
        with changes_lock:
            changes.append(n)

    threads = [threading.Thread(target=worker, args=(t,)) for t in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert ctrl.count("select_profile_slot") == sum(changes)
    assert ctrl.selected_slot == sync.current_index()
