#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import math

import pytest

from savo_tuning.constants import DEFAULT_PERIOD_S
from savo_tuning.controllers.control_evaluator import ControlEvaluator
from savo_tuning.controllers.profile_store import ControlMode
from savo_tuning.models.gain_profile import GainProfile


def _two_slot():
    return ControlEvaluator([
        GainProfile(1.0, output_range=0.5),
        GainProfile(2.0, output_range=1.0),
    ])


def test_velocity_slot_output_is_clamped_to_its_range():
    ev = _two_slot()
    assert ev.select(1) is True
    assert ev.set_setpoint(10.0) is True
    out = ev.calculate(0.0)
    assert 0.0 < out <= 1.0
    assert out == 1.0


def test_position_slot_uses_its_own_range():
    ev = _two_slot()
    ev.set_setpoint(10.0)
    assert ev.calculate(0.0) == 0.5
    ev.set_setpoint(-10.0)
    assert ev.calculate(0.0) == -0.5


def test_proportional_output_inside_range():
    ev = ControlEvaluator([GainProfile(0.01, output_range=1.0)])
    ev.set_setpoint(10.0)
    assert ev.calculate(0.0) == pytest.approx(0.1)


def test_setpoints_are_kept_per_slot():
    ev = _two_slot()
    ev.set_setpoint(3.0)
    ev.select(ControlMode.VELOCITY)
    assert ev.setpoint() is None
    assert not ev.has_setpoint()
    ev.set_setpoint(7.0)
    assert ev.setpoint(0) == 3.0
    assert ev.setpoint(ControlMode.VELOCITY) == 7.0


def test_no_setpoint_gives_zero():
    ev = _two_slot()
    assert ev.calculate(0.0) == 0.0


def test_invalid_selection_gives_zero_and_rejects_setpoint():
    ev = _two_slot()
    ev.set_setpoint(10.0)
    ev.deselect()
    assert ev.set_setpoint(4.0) is False
    assert ev.calculate(0.0) == 0.0
    assert ev.setpoint() is None
    ev.select(0)
    assert ev.setpoint() == 10.0


def test_disable_freezes_output_but_keeps_state():
    ev = _two_slot()
    ev.select(1)
    ev.set_setpoint(10.0)
    ev.disable()
    assert not ev.is_enabled()
    assert ev.calculate(0.0) == 0.0
    assert ev.current_index() == 1
    assert ev.setpoint() == 10.0
    ev.enable()
    assert ev.is_enabled()
    assert ev.calculate(0.0) == 1.0


def test_starts_disabled_when_requested():
    ev = ControlEvaluator([GainProfile(1.0)], enabled=False)
    ev.set_setpoint(1.0)
    assert ev.calculate(0.0) == 0.0


def test_feedback_supplier_is_used_when_no_feedback_given():
    ev = ControlEvaluator([GainProfile(0.1), GainProfile(1.0)])
    ev.supply_feedback_source(ControlMode.POSITION, lambda: 4.0)
    ev.set_setpoint(5.0)
    assert ev.calculate() == pytest.approx(0.1)


def test_missing_supplier_gives_zero():
    ev = ControlEvaluator([GainProfile(0.1), GainProfile(1.0)])
    ev.supply_feedback_source(0, lambda: 4.0)
    ev.select(1)
    ev.set_setpoint(5.0)
    assert ev.calculate() == 0.0


def test_non_finite_feedback_gives_zero_and_keeps_accumulator():
    ev = ControlEvaluator([GainProfile(0.0, i=1.0, output_range=100.0)])
    ev.set_setpoint(10.0)
    first = ev.calculate(0.0)
    assert ev.calculate(math.nan) == 0.0
    assert ev.calculate(math.inf) == 0.0
    second = ev.calculate(0.0)
    assert second == pytest.approx(2.0 * first)


def test_feed_forward_scales_setpoint():
    ev = ControlEvaluator([GainProfile(0.0, feed_forward=0.05, output_range=1.0)])
    ev.set_setpoint(10.0)
    assert ev.calculate(10.0) == pytest.approx(0.5)


def test_gain_edits_apply_on_next_cycle():
    gains = GainProfile(0.01, output_range=1.0)
    ev = ControlEvaluator([gains])
    ev.set_setpoint(10.0)
    assert ev.calculate(0.0) == pytest.approx(0.1)
    gains.set_p(0.02)
    assert ev.calculate(0.0) == pytest.approx(0.2)


def test_integral_accumulates_and_enable_transition_resets_it():
    ev = ControlEvaluator([GainProfile(0.0, i=1.0, output_range=100.0)])
    ev.set_setpoint(10.0)
    assert ev.calculate(0.0) == pytest.approx(10.0 * DEFAULT_PERIOD_S)
    assert ev.calculate(0.0) == pytest.approx(20.0 * DEFAULT_PERIOD_S)

    ev.enable()  # already enabled: no reset
    assert ev.calculate(0.0) == pytest.approx(30.0 * DEFAULT_PERIOD_S)

    ev.disable()
    ev.enable()
    assert ev.calculate(0.0) == pytest.approx(10.0 * DEFAULT_PERIOD_S)


def test_slot_switch_keeps_accumulators():
    ev = ControlEvaluator([
        GainProfile(0.0, i=1.0, output_range=100.0),
        GainProfile(1.0, output_range=100.0),
    ])
    ev.set_setpoint(10.0)
    ev.calculate(0.0)
    ev.select(1)
    ev.set_setpoint(1.0)
    ev.calculate(0.0)
    ev.select(0)
    assert ev.calculate(0.0) == pytest.approx(20.0 * DEFAULT_PERIOD_S)


def test_reset_single_slot():
    ev = ControlEvaluator([GainProfile(0.0, i=1.0, output_range=100.0)])
    ev.set_setpoint(10.0)
    ev.calculate(0.0)
    ev.reset(0)
    assert ev.calculate(0.0) == pytest.approx(10.0 * DEFAULT_PERIOD_S)
    ev.reset(7)  # out of range: ignored


def test_at_setpoint_uses_profile_tolerance():
    ev = ControlEvaluator([GainProfile(1.0, tolerance=0.5)])
    ev.set_setpoint(10.0)
    assert not ev.at_setpoint()
    ev.calculate(9.8)
    assert ev.at_setpoint()
    ev.calculate(5.0)
    assert not ev.at_setpoint()


def test_invalid_period_falls_back_to_default():
    ev = ControlEvaluator([GainProfile(1.0)], period_s=0.0)
    assert ev.period_s == DEFAULT_PERIOD_S


def test_non_finite_setpoint_is_rejected():
    ev = ControlEvaluator([GainProfile(1.0, output_range=0.5)])
    assert ev.set_setpoint(4.0) is True
    for bad in (math.inf, -math.inf, math.nan):
        assert ev.set_setpoint(bad) is False
    assert ev.setpoint() == 4.0
    out = ev.calculate(0.0)
    assert -0.5 <= out <= 0.5


def test_infinite_setpoint_never_reaches_output():
    ev = ControlEvaluator([GainProfile(1.0, output_range=0.5)])
    ev.set_setpoint(math.inf)
    assert ev.calculate(0.0) == 0.0


def test_overflowing_terms_give_zero_not_nan():
    ev = ControlEvaluator([GainProfile(1e10, d=1e10, output_range=1.0)])
    ev.set_setpoint(0.0)
    first = ev.calculate(-1e300)
    second = ev.calculate(-1e299)
    for out in (first, second):
        assert not math.isnan(out)
        assert -1.0 <= out <= 1.0


@pytest.mark.parametrize("feedback", [1e9, -1e9, 1e300, -1e300, 0.0])
def test_extreme_feedback_stays_within_every_slot_range(feedback):
    ev = ControlEvaluator([
        GainProfile(1.0, output_range=0.5),
        GainProfile(2.0, i=0.5, d=0.1, feed_forward=0.01, output_range=1.0),
        GainProfile(1e6, i=1e3, d=1e3, output_range=0.25),
    ])
    for slot in range(len(ev)):
        ev.select(slot)
        ev.set_setpoint(100.0)
        limit = ev.current_profile().output_range
        for _ in range(3):
            out = ev.calculate(feedback)
            assert -limit <= out <= limit
