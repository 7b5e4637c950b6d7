#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import math

import pytest

from savo_tuning.exceptions import ProfileConfigError
from savo_tuning.models.gain_profile import GainProfile
from savo_tuning.models.motion_profile import MotionExtra, MotionFamily, MotionProfile


def test_gain_profile_defaults():
    g = GainProfile(0.5)
    assert g.gains() == (0.5, 0.0, 0.0, 0.0)
    assert g.output_range == 1.0
    assert g.tolerance == 0.0


@pytest.mark.parametrize(
    "kwargs",
    [
        {"p": math.nan},
        {"p": 1.0, "d": math.inf},
        {"p": 1.0, "output_range": 0.0},
        {"p": 1.0, "output_range": -1.0},
        {"p": 1.0, "tolerance": -0.1},
        {"p": "fast"},
    ],
)
def test_gain_profile_rejects_invalid_values(kwargs):
    with pytest.raises(ProfileConfigError):
        GainProfile(**kwargs)


def test_gain_profile_setters_chain_and_validate():
    g = GainProfile(0.1).set_p(0.2).set_i(0.01).set_d(1.5).set_feed_forward(0.3).set_tolerance(2.0)
    assert g.gains() == (0.2, 0.01, 1.5, 0.3)
    assert g.tolerance == 2.0
    with pytest.raises(ValueError):
        g.set_output_range(0.0)
    assert g.output_range == 1.0


def test_gain_profile_from_dict_short_keys():
    g = GainProfile.from_dict({"kp": 0.4, "kd": 3.0, "ff": 0.1, "range": 0.7})
    assert g.gains() == (0.4, 0.0, 3.0, 0.1)
    assert g.output_range == 0.7
    assert g.copy() == g
    assert g.copy() is not g
    with pytest.raises(ProfileConfigError):
        GainProfile.from_dict({"ki": 1.0})


def test_motion_extra_is_tagged():
    assert MotionExtra.basic().family is MotionFamily.BASIC
    assert MotionExtra.motion_magic(3).s_curve_strength == 3
    assert MotionExtra.smart_motion(5.0).min_velocity == 5.0
    with pytest.raises(ProfileConfigError):
        MotionExtra(MotionFamily.BASIC, s_curve_strength=2)
    with pytest.raises(ProfileConfigError):
        MotionExtra(MotionFamily.MOTION_MAGIC, min_velocity=2.0)


def test_motion_profile_builders():
    m = (
        MotionProfile(extra=MotionExtra.motion_magic())
        .set_max_velocity(100)
        .set_max_acceleration(50)
        .set_integral_zone(20.7)
        .set_s_curve_strength(4)
        .add_status_frames(10, 13)
    )
    assert m.family is MotionFamily.MOTION_MAGIC
    assert m.to_dict()["max_velocity"] == 100.0
    assert m.integral_zone == 20
    assert m.extra.s_curve_strength == 4
    assert m.status_frames == [10, 13]
    with pytest.raises(ProfileConfigError):
        m.set_min_velocity(1.0)


def test_motion_profile_validates_timing():
    with pytest.raises(ProfileConfigError):
        MotionProfile(timeout_ms=-1)
    with pytest.raises(ProfileConfigError):
        MotionProfile(period_ms=0)
