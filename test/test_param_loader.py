#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import math

import pytest

from savo_tuning.exceptions import ProfileConfigError
from savo_tuning.models.gain_profile import GainProfile
from savo_tuning.models.motion_profile import MotionFamily
from savo_tuning.utils.param_loader import (
    ParamLoader,
    ParamSpec,
    load_gain_profiles,
    load_motion_profile,
)


def test_defaults_without_node():
    profiles = load_gain_profiles(None, ["position", "velocity"], [GainProfile(0.4, d=2.0)])
    assert len(profiles) == 2
    assert profiles[0].p == 0.4
    assert profiles[0].d == 2.0
    assert profiles[1].p == 0.0
    assert profiles[1].output_range == 1.0


def test_gain_profiles_from_node_overrides(make_node):
    node = make_node({
        "pid.position.kp": 0.8,
        "pid.position.output_range": 0.5,
        "pid.velocity.kf": "0.05",
        "pid.velocity.tolerance": -3.0,
    })
    pl = ParamLoader(node, component="arm")
    position, velocity = pl.load_gain_profiles(["position", "velocity"])

    assert position.p == 0.8
    assert position.output_range == 0.5
    assert velocity.feed_forward == 0.05
    assert velocity.tolerance == 0.0
    assert pl.summary.records["pid.velocity.tolerance"].clamped
    assert node.has_parameter("pid.velocity.kd")


def test_declaration_is_idempotent(make_node):
    node = make_node()
    pl = ParamLoader(node)
    pl.load_gain_profiles(["position"])
    pl.load_gain_profiles(["position"])
    assert len(pl.values_dict()) == 6


def test_non_finite_gain_is_a_config_error(make_node):
    node = make_node({"pid.position.kp": math.nan})
    with pytest.raises(ProfileConfigError):
        load_gain_profiles(node, ["position"])


def test_motion_profile_unset_constants(make_node):
    motion = load_motion_profile(make_node(), family=MotionFamily.MOTION_MAGIC)
    assert motion.family is MotionFamily.MOTION_MAGIC
    assert motion.max_velocity is None
    assert motion.integral_zone is None
    assert motion.extra.s_curve_strength is None
    assert motion.timeout_ms == 10
    assert motion.status_frames == []


def test_motion_profile_from_node(make_node):
    node = make_node({
        "lift.max_velocity": 2000.0,
        "lift.max_acceleration": 900,
        "lift.integral_zone": 150,
        "lift.min_velocity": 10.0,
        "lift.reset": "yes",
        "lift.status_frames": "10, 13",
        "lift.timeout_ms": 50_000,
    })
    motion = load_motion_profile(node, "lift", MotionFamily.SMART_MOTION)
    assert motion.max_velocity == 2000.0
    assert motion.max_acceleration == 900.0
    assert motion.integral_zone == 150
    assert motion.extra.min_velocity == 10.0
    assert motion.reset is True
    assert motion.status_frames == [10, 13]
    assert motion.timeout_ms == 10_000


def test_load_specs_auto_kinds(make_node):
    node = make_node({"loop_hz": "100", "debug": "on", "slot": "0x2"})
    pl = ParamLoader(node)
    vals = pl.load_specs([
        ParamSpec("loop_hz", 50.0, lo=1.0, hi=200.0),
        ParamSpec("debug", False),
        ParamSpec("slot", 0, hi=3),
    ])
    assert vals == {"loop_hz": 100.0, "debug": True, "slot": 2}
    assert pl.summary_dict()["count"] == 3


def test_log_loaded_lists_every_record(caplog):
    pl = ParamLoader(None, component="demo")
    pl.load_gain_profiles(["position"])
    with caplog.at_level("INFO", logger="savo_tuning"):
        pl.log_loaded()
    assert "Loaded 6 parameters" in caplog.text
    assert "pid.position.kp" in caplog.text
