#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Robot SAVO — savo_tuning/tuning/tuning_bridge.py
------------------------------------------------
Realtime tuning bridge.

Purpose
- Expose numeric fields (gains, motion constants) as live entries in a
  `ValueStore` so an operator can edit them while the robot runs
- Fan every edit out to:
    1) a storage updater (in-memory profile field), then
    2) an actuator updater (push to the physical controller)
  synchronously, on the thread that delivered the notification

Lifecycle
- `bind_field()` publishes the initial value and subscribes (builder style)
- `unbind()` removes every listener this bridge registered, optionally
  deleting the entries; calling it twice is safe
- Rebinding a label that is already bound replaces the old registration
  (old listener removed first, warning logged)

Errors
- Updater exceptions (e.g. actuator failures) are not caught here; they
  propagate to the value store's notifying thread unmodified.
"""

from __future__ import annotations

import math
import threading
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Tuple

from savo_tuning.exceptions import BindingError, TuningErrorContext
from savo_tuning.tuning.value_store import ValueStore
from savo_tuning.utils.logging import LoggerAdapter, get_logger_adapter, log_event

Updater = Callable[[float], Any]


@dataclass(frozen=True)
class TuningBinding:
    """
    One live field: label, initial value, updaters, value-store handle.
    """
    label: str
    initial_value: float
    storage_updater: Optional[Updater]
    actuator_updater: Optional[Updater]
    handle: Any


class TuningBridge:
    """
    Owns the listener registry for one group of live-tuned fields.

    Parameters
    ----------
    store : ValueStore receiving the entries (dashboard, ROS params, ...).
    name : used in log lines.
    """

    def __init__(self, store: ValueStore, *, name: str = "tuning_bridge", logger: Optional[object] = None) -> None:
        self._store = store
        self._name = str(name)
        self._lock = threading.Lock()
        # held across unsubscribe/publish/subscribe/insert so every store
        # registration has exactly one entry in _bindings
        self._bind_lock = threading.Lock()
        self._bindings: Dict[str, TuningBinding] = {}
        self._log: LoggerAdapter = get_logger_adapter(logger, name=f"savo_tuning.{self._name}")

    @property
    def store(self) -> ValueStore:
        return self._store

    @property
    def name(self) -> str:
        return self._name

    # -------------------------------------------------------------------------
    # Binding
    # -------------------------------------------------------------------------
    def bind_field(
        self,
        label: str,
        initial_value: float,
        storage_updater: Optional[Updater] = None,
        actuator_updater: Optional[Updater] = None,
    ) -> "TuningBridge":
        """
        Publish `initial_value` under `label` and subscribe to edits.

        Either updater may be None ("observe only" / "actuate only").
        Returns self for chaining.
        """
        if not isinstance(label, str) or not label.strip():
            raise BindingError(
                "label must be a non-empty string",
                context=TuningErrorContext(component="TuningBridge", operation="bind_field", value=repr(label)),
            )
        try:
            init = float(initial_value)
        except (TypeError, ValueError) as e:
            raise BindingError(
                "initial value must be numeric",
                context=TuningErrorContext(
                    component="TuningBridge", operation="bind_field", label=label, value=repr(initial_value)
                ),
                cause=e,
            ) from e

        with self._bind_lock:
            with self._lock:
                previous = self._bindings.pop(label, None)
            if previous is not None:
                self._store.unsubscribe(previous.handle)
                log_event(self._log, "binding_overwritten", level="WARN", component="TuningBridge",
                          details={"bridge": self._name, "label": label})

            self._store.publish(label, init)
            handle = self._store.subscribe(label, self._make_listener(label, storage_updater, actuator_updater))

            with self._lock:
                self._bindings[label] = TuningBinding(label, init, storage_updater, actuator_updater, handle)

        log_event(self._log, "field_bound", level="DEBUG", component="TuningBridge",
                  details={"bridge": self._name, "label": label, "value": init})
        return self

    def _make_listener(
        self,
        label: str,
        storage_updater: Optional[Updater],
        actuator_updater: Optional[Updater],
    ) -> Callable[[str, Any], None]:
        def _on_change(_key: str, raw: Any) -> None:
            try:
                value = float(raw)
            except (TypeError, ValueError):
                log_event(self._log, "ignored_non_numeric_edit", level="WARN", component="TuningBridge",
                          details={"bridge": self._name, "label": label, "value": repr(raw)})
                return
            if not math.isfinite(value):
                log_event(self._log, "ignored_non_finite_edit", level="WARN", component="TuningBridge",
                          details={"bridge": self._name, "label": label, "value": value})
                return
            if storage_updater is not None:
                storage_updater(value)
            if actuator_updater is not None:
                actuator_updater(value)

        return _on_change

    # -------------------------------------------------------------------------
    # Introspection
    # -------------------------------------------------------------------------
    def is_initialized(self) -> bool:
        """
        True while at least one field is bound.
        """
        with self._lock:
            return bool(self._bindings)

    def labels(self) -> Tuple[str, ...]:
        with self._lock:
            return tuple(self._bindings.keys())

    def is_bound(self, label: str) -> bool:
        with self._lock:
            return label in self._bindings

    def binding(self, label: str) -> Optional[TuningBinding]:
        with self._lock:
            return self._bindings.get(label)

    # -------------------------------------------------------------------------
    # Teardown
    # -------------------------------------------------------------------------
    def unbind(self, remove_external_entries: bool = False) -> None:
        """
        Remove every listener registered by this bridge; optionally delete
        the entries from the store. Idempotent.
        """
        with self._bind_lock:
            with self._lock:
                bindings = list(self._bindings.values())
                self._bindings.clear()

            for b in bindings:
                self._store.unsubscribe(b.handle)
                if remove_external_entries:
                    self._store.delete(b.label)

        if bindings:
            log_event(self._log, "unbound", component="TuningBridge",
                      details={"bridge": self._name, "fields": len(bindings),
                               "entries_removed": bool(remove_external_entries)})

    # -------------------------------------------------------------------------
    # Context manager support
    # -------------------------------------------------------------------------
    def __enter__(self) -> "TuningBridge":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.unbind()


__all__ = ["Updater", "TuningBinding", "TuningBridge"]
