#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import pytest

from savo_tuning.exceptions import BindingError
from savo_tuning.models.gain_profile import GainProfile
from savo_tuning.ros.param_store import RosParamValueStore, label_to_param_name
from savo_tuning.tuning.tuning_bridge import TuningBridge
from savo_tuning.tuning.value_store import ValueStore


def test_label_to_param_name():
    assert label_to_param_name("P Gain") == "tuning.p_gain"
    assert label_to_param_name("Max Acceleration", "arm") == "arm.max_acceleration"
    assert label_to_param_name("Min Vel", "") == "min_vel"
    with pytest.raises(BindingError):
        label_to_param_name("  ")


def test_store_satisfies_value_store_protocol(fake_node):
    assert isinstance(RosParamValueStore(fake_node), ValueStore)


def test_publish_declares_parameter(fake_node):
    store = RosParamValueStore(fake_node)
    store.publish("P Gain", 0.4)
    assert fake_node.get_parameter("tuning.p_gain").value == 0.4
    assert store.get("P Gain") == 0.4
    assert store.get("I Gain", 7.0) == 7.0


def test_operator_edit_drives_tuning_bridge(fake_node):
    store = RosParamValueStore(fake_node, namespace="arm")
    gains = GainProfile(0.4)
    hardware = []
    bridge = TuningBridge(store).bind_field("P Gain", gains.p, gains.set_p, hardware.append)

    assert len(fake_node.post_set_callbacks) == 1
    fake_node.operator_set("arm.p_gain", 0.9)
    assert gains.p == 0.9
    assert hardware == [0.9]

    fake_node.operator_set("arm.unrelated", 1.0)
    assert hardware == [0.9]

    bridge.unbind(remove_external_entries=True)
    assert fake_node.post_set_callbacks == []
    assert not fake_node.has_parameter("arm.p_gain")


def test_listener_receives_label_not_param_name(fake_node):
    store = RosParamValueStore(fake_node)
    seen = []
    store.publish("Max Velocity", 100.0)
    store.subscribe("Max Velocity", lambda label, value: seen.append((label, value)))
    fake_node.operator_set("tuning.max_velocity", 250.0)
    assert seen == [("Max Velocity", 250.0)]


def test_single_node_callback_for_many_listeners(fake_node):
    store = RosParamValueStore(fake_node)
    a = store.subscribe("P Gain", lambda *_: None)
    b = store.subscribe("I Gain", lambda *_: None)
    assert len(fake_node.post_set_callbacks) == 1
    store.unsubscribe(a)
    assert len(fake_node.post_set_callbacks) == 1
    store.unsubscribe(b)
    assert fake_node.post_set_callbacks == []
    store.unsubscribe(b)


def test_close_removes_callback(fake_node):
    store = RosParamValueStore(fake_node)
    store.subscribe("P Gain", lambda *_: None)
    store.close()
    store.close()
    assert fake_node.post_set_callbacks == []


def test_delete_missing_entry_is_noop(fake_node):
    store = RosParamValueStore(fake_node)
    store.delete("P Gain")
    assert not fake_node.has_parameter("tuning.p_gain")
