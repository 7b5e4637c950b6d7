#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Robot SAVO — savo_tuning/ros/param_store.py
-------------------------------------------
`ValueStore` backed by ROS2 node parameters.

With this store, `ros2 param set /arm_node tuning.p_gain 0.8` (or rqt's
parameter editor) becomes the live tuning dashboard for a `TuningBridge`.

Naming
------
Dashboard labels contain spaces ("P Gain"), parameter names cannot. A label
is mapped to `<namespace>.<snake_case_label>`, e.g. "P Gain" -> "tuning.p_gain".

Notifications
-------------
One post-set parameters callback is registered on the node while at least one
listener exists. Writes made through `publish()` are program-side writes and
do not notify listeners.

rclpy is imported lazily and only needed when `publish()` updates a parameter
that is already declared; the node object itself is duck-typed.
"""

from __future__ import annotations

import itertools
import re
import threading
from typing import Any, Dict, List, Optional, Set

from savo_tuning.exceptions import BindingError, TuningErrorContext
from savo_tuning.tuning.value_store import SubscriptionHandle, ValueCallback
from savo_tuning.utils.logging import LoggerAdapter, get_logger_adapter, log_event

_NON_NAME_CHARS = re.compile(r"[^0-9a-zA-Z]+")


def label_to_param_name(label: str, namespace: str = "tuning") -> str:
    """
    "P Gain" -> "tuning.p_gain"; "Max Acceleration" -> "tuning.max_acceleration".
    """
    stem = _NON_NAME_CHARS.sub("_", str(label).strip()).strip("_").lower()
    if not stem:
        raise BindingError(
            "label has no usable characters for a parameter name",
            context=TuningErrorContext(component="RosParamValueStore", label=str(label)),
        )
    return f"{namespace}.{stem}" if namespace else stem


class RosParamValueStore:
    """
    ROS2 parameter server as a live value store.

    Parameters
    ----------
    node : rclpy Node (or a duck-typed object with the same parameter API).
    namespace : parameter prefix for every label.
    """

    def __init__(self, node: Any, *, namespace: str = "tuning") -> None:
        self._node = node
        self._namespace = str(namespace)
        self._lock = threading.Lock()
        self._listeners: Dict[str, Dict[int, ValueCallback]] = {}
        self._labels: Dict[str, str] = {}
        self._muted: Set[str] = set()
        self._tokens = itertools.count(1)
        self._callback_handle: Optional[Any] = None
        self._log: LoggerAdapter = get_logger_adapter(node, name="savo_tuning.param_store")

    @property
    def node(self) -> Any:
        return self._node

    def param_name(self, label: str) -> str:
        return label_to_param_name(label, self._namespace)

    # -------------------------------------------------------------------------
    # ValueStore API
    # -------------------------------------------------------------------------
    def publish(self, label: str, value: Any) -> None:
        name = self.param_name(label)
        with self._lock:
            self._labels[name] = str(label)

        if not self._node.has_parameter(name):
            self._node.declare_parameter(name, value)
            return

        from rclpy.parameter import Parameter

        with self._lock:
            self._muted.add(name)
        try:
            self._node.set_parameters([Parameter(name, value=value)])
        finally:
            with self._lock:
                self._muted.discard(name)

    def subscribe(self, label: str, callback: ValueCallback) -> SubscriptionHandle:
        name = self.param_name(label)
        with self._lock:
            self._labels[name] = str(label)
            token = next(self._tokens)
            self._listeners.setdefault(name, {})[token] = callback
            install = self._callback_handle is None
        if install:
            handle = self._node.add_post_set_parameters_callback(self._on_parameters_set)
            with self._lock:
                self._callback_handle = handle
            log_event(self._log, "param_callback_installed", level="DEBUG", component="RosParamValueStore")
        return SubscriptionHandle(name, token)

    def unsubscribe(self, handle: SubscriptionHandle) -> None:
        with self._lock:
            listeners = self._listeners.get(handle.label)
            if listeners is not None:
                listeners.pop(handle.token, None)
                if not listeners:
                    del self._listeners[handle.label]
            remove = None
            if not self._listeners and self._callback_handle is not None:
                remove, self._callback_handle = self._callback_handle, None
        if remove is not None:
            self._node.remove_post_set_parameters_callback(remove)
            log_event(self._log, "param_callback_removed", level="DEBUG", component="RosParamValueStore")

    def delete(self, label: str) -> None:
        name = self.param_name(label)
        if self._node.has_parameter(name):
            self._node.undeclare_parameter(name)

    def get(self, label: str, default: Any = None) -> Any:
        name = self.param_name(label)
        if not self._node.has_parameter(name):
            return default
        value = self._node.get_parameter(name).value
        return default if value is None else value

    def close(self) -> None:
        """
        Drop every listener and the node callback (idempotent).
        """
        with self._lock:
            self._listeners.clear()
            remove, self._callback_handle = self._callback_handle, None
        if remove is not None:
            self._node.remove_post_set_parameters_callback(remove)

    # -------------------------------------------------------------------------
    # Node callback
    # -------------------------------------------------------------------------
    def _on_parameters_set(self, parameters: List[Any]) -> None:
        for param in parameters:
            name = param.name
            with self._lock:
                if name in self._muted:
                    continue
                callbacks = list(self._listeners.get(name, {}).values())
                label = self._labels.get(name, name)
            for cb in callbacks:
                cb(label, param.value)


__all__ = ["label_to_param_name", "RosParamValueStore"]
