#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Robot SAVO — savo_tuning/tuning/value_store.py
----------------------------------------------
Live value store used by the tuning bridge.

A value store is the operator-facing side of live tuning: a table of labeled
numbers that a dashboard (or `ros2 param set`) can edit while the robot runs.
The bridge only needs five operations, captured by the `ValueStore` protocol.

`LiveValueTable` is the in-process implementation:
- `publish()` writes a value without notifying anyone (program-side write)
- `set()` writes a value and notifies subscribers (operator-side edit)

Threading
- Entry and listener maps are guarded by one lock
- Callbacks run on the caller's thread of `set()`, outside the lock, so a
  callback may itself publish/subscribe/unsubscribe
"""

from __future__ import annotations

import itertools
import threading
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Protocol, Tuple, runtime_checkable

ValueCallback = Callable[[str, Any], None]


@dataclass(frozen=True)
class SubscriptionHandle:
    """
    Opaque token returned by `subscribe()`.
    """
    label: str
    token: int


@runtime_checkable
class ValueStore(Protocol):
    def publish(self, label: str, value: Any) -> None: ...

    def subscribe(self, label: str, callback: ValueCallback) -> Any: ...

    def unsubscribe(self, handle: Any) -> None: ...

    def delete(self, label: str) -> None: ...

    def get(self, label: str, default: Any = None) -> Any: ...


class LiveValueTable:
    """
    Thread-safe in-process `ValueStore`.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._values: Dict[str, Any] = {}
        self._listeners: Dict[str, Dict[int, ValueCallback]] = {}
        self._tokens = itertools.count(1)

    # -------------------------------------------------------------------------
    # ValueStore API
    # -------------------------------------------------------------------------
    def publish(self, label: str, value: Any) -> None:
        with self._lock:
            self._values[str(label)] = value

    def subscribe(self, label: str, callback: ValueCallback) -> SubscriptionHandle:
        key = str(label)
        with self._lock:
            token = next(self._tokens)
            self._listeners.setdefault(key, {})[token] = callback
        return SubscriptionHandle(key, token)

    def unsubscribe(self, handle: SubscriptionHandle) -> None:
        """
        Remove one listener. Unknown or already removed handles are ignored.
        """
        with self._lock:
            listeners = self._listeners.get(handle.label)
            if listeners is None:
                return
            listeners.pop(handle.token, None)
            if not listeners:
                del self._listeners[handle.label]

    def delete(self, label: str) -> None:
        with self._lock:
            self._values.pop(str(label), None)

    def get(self, label: str, default: Any = None) -> Any:
        with self._lock:
            return self._values.get(str(label), default)

    # -------------------------------------------------------------------------
    # Operator-side edit
    # -------------------------------------------------------------------------
    def set(self, label: str, value: Any) -> int:
        """
        Write `value` and notify every listener of `label`.

        Returns the number of listeners notified.
        """
        key = str(label)
        with self._lock:
            self._values[key] = value
            callbacks: List[ValueCallback] = list(self._listeners.get(key, {}).values())
        for cb in callbacks:
            cb(key, value)
        return len(callbacks)

    # -------------------------------------------------------------------------
    # Introspection
    # -------------------------------------------------------------------------
    def __contains__(self, label: object) -> bool:
        with self._lock:
            return label in self._values

    def labels(self) -> Tuple[str, ...]:
        with self._lock:
            return tuple(self._values.keys())

    def listener_count(self, label: str | None = None) -> int:
        with self._lock:
            if label is None:
                return sum(len(v) for v in self._listeners.values())
            return len(self._listeners.get(str(label), {}))

    def snapshot(self) -> Dict[str, Any]:
        with self._lock:
            return dict(self._values)


__all__ = ["ValueCallback", "SubscriptionHandle", "ValueStore", "LiveValueTable"]
