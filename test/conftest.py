#!/usr/bin/env python3
# -*- coding: utf-8 -*-

from dataclasses import dataclass
from typing import Any

import pytest


@dataclass
class FakeParameter:
    name: str
    value: Any


class FakeNode:
    """
    Parameter surface of an rclpy Node, without ROS.

    `operator_set()` plays the role of `ros2 param set`: it stores the value and
    runs the post-set callbacks.
    """

    def __init__(self, overrides=None):
        self._overrides = dict(overrides or {})
        self.params = {}
        self.post_set_callbacks = []

    def has_parameter(self, name):
        return name in self.params

    def declare_parameter(self, name, value=None):
        if name in self.params:
            raise RuntimeError(f"parameter {name} already declared")
        self.params[name] = FakeParameter(name, self._overrides.get(name, value))
        return self.params[name]

    def get_parameter(self, name):
        return self.params[name]

    def undeclare_parameter(self, name):
        del self.params[name]

    def add_post_set_parameters_callback(self, callback):
        self.post_set_callbacks.append(callback)
        return callback

    def remove_post_set_parameters_callback(self, callback):
        self.post_set_callbacks.remove(callback)

    def operator_set(self, name, value):
        param = FakeParameter(name, value)
        self.params[name] = param
        for cb in list(self.post_set_callbacks):
            cb([param])


@pytest.fixture
def fake_node():
    return FakeNode()


@pytest.fixture
def make_node():
    return FakeNode
