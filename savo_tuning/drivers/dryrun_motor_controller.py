#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Robot SAVO — savo_tuning/drivers/dryrun_motor_controller.py
-----------------------------------------------------------
Dry-run motor controller for Robot Savo (unit tests / bench tools).

Purpose
- Software-only stand-in for a smart motor controller with on-device PID
- Records every configuration call in order, so tests can assert exact call
  sequences and counts (gain push, slot select, motion constants)
- Keeps the last value written per (method, slot) as a readable "register map"

Failure injection
- `fail_on("config_kp")` makes the next matching calls raise
  `ActuatorConfigError`; the failing call is still recorded with ok=False.

Typical use
-----------
from savo_tuning.drivers.dryrun_motor_controller import DryRunMotorController

ctrl = DryRunMotorController()
sync = HardwareProfileSync(ctrl, [pos_gains, vel_gains])
assert ctrl.count("select_profile_slot") == 1
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set, Tuple

from savo_tuning.drivers.actuator_exceptions import ActuatorClosedError, ActuatorConfigError
from savo_tuning.drivers.motor_controller import MotorController
from savo_tuning.exceptions import TuningErrorContext
from savo_tuning.utils.logging import get_logger_adapter
from savo_tuning.utils.timing import now_mono_s


# =============================================================================
# Typed records
# =============================================================================
@dataclass(frozen=True)
class DryRunControllerCall:
    """
    Snapshot of one controller call.
    """
    timestamp_s: float
    method: str
    args: Tuple[Any, ...]
    ok: bool = True

    def as_dict(self) -> Dict[str, Any]:
        return {
            "timestamp_s": self.timestamp_s,
            "method": self.method,
            "args": list(self.args),
            "ok": self.ok,
        }


@dataclass
class DryRunControllerState:
    """
    Mutable runtime state for the dry-run controller.
    """
    is_open: bool = True
    call_count: int = 0
    selected_slot: Optional[int] = None
    factory_reset_count: int = 0
    registers: Dict[Tuple[str, Optional[int]], Any] = field(default_factory=dict)


# =============================================================================
# Dry-run controller implementation
# =============================================================================
class DryRunMotorController(MotorController):
    """
    Software-only `MotorController` that records calls instead of talking to
    hardware.
    """

    def __init__(
        self,
        *,
        max_history: int = 1000,
        debug: bool = False,
        name: str = "DryRunMotorController",
    ) -> None:
        self.name = str(name)
        self.debug = bool(debug)
        self.max_history = max(1, int(max_history))

        self._state = DryRunControllerState()
        self._history: List[DryRunControllerCall] = []
        self._fail_methods: Set[str] = set()
        self._log = get_logger_adapter(name="savo_tuning.dryrun_motor_controller")

    # -------------------------------------------------------------------------
    # Internal helpers
    # -------------------------------------------------------------------------
    def _ensure_open(self, method: str) -> None:
        if not self._state.is_open:
            raise ActuatorClosedError(
                f"{self.name} is closed",
                context=TuningErrorContext(component=self.name, operation=method),
            )

    def _append_history(self, call: DryRunControllerCall) -> None:
        self._history.append(call)
        if len(self._history) > self.max_history:
            self._history = self._history[-self.max_history :]

    def _record(self, method: str, slot: Optional[int], value: Any, *args: Any) -> None:
        self._ensure_open(method)

        ok = method not in self._fail_methods
        self._state.call_count += 1
        self._append_history(DryRunControllerCall(now_mono_s(), method, args, ok=ok))

        if not ok:
            raise ActuatorConfigError(
                f"{self.name}: injected failure",
                context=TuningErrorContext(component=self.name, operation=method, slot=slot, value=value),
            )

        self._state.registers[(method, slot)] = value
        if self.debug:
            self._log.debug(f"[{self.name}] #{self._state.call_count} {method}{args}")

    # -------------------------------------------------------------------------
    # MotorController API
    # -------------------------------------------------------------------------
    def config_kp(self, slot: int, value: float, timeout_ms: int) -> None:
        self._record("config_kp", slot, value, slot, value, timeout_ms)

    def config_ki(self, slot: int, value: float, timeout_ms: int) -> None:
        self._record("config_ki", slot, value, slot, value, timeout_ms)

    def config_kd(self, slot: int, value: float, timeout_ms: int) -> None:
        self._record("config_kd", slot, value, slot, value, timeout_ms)

    def config_kf(self, slot: int, value: float, timeout_ms: int) -> None:
        self._record("config_kf", slot, value, slot, value, timeout_ms)

    def config_integral_zone(self, slot: int, value: int, timeout_ms: int) -> None:
        self._record("config_integral_zone", slot, value, slot, value, timeout_ms)

    def config_max_velocity(self, slot: int, value: float, timeout_ms: int) -> None:
        self._record("config_max_velocity", slot, value, slot, value, timeout_ms)

    def config_max_acceleration(self, slot: int, value: float, timeout_ms: int) -> None:
        self._record("config_max_acceleration", slot, value, slot, value, timeout_ms)

    def config_min_velocity(self, slot: int, value: float, timeout_ms: int) -> None:
        self._record("config_min_velocity", slot, value, slot, value, timeout_ms)

    def config_cruise_velocity(self, value: float, timeout_ms: int) -> None:
        self._record("config_cruise_velocity", None, value, value, timeout_ms)

    def config_acceleration(self, value: float, timeout_ms: int) -> None:
        self._record("config_acceleration", None, value, value, timeout_ms)

    def config_s_curve_strength(self, value: int, timeout_ms: int) -> None:
        self._record("config_s_curve_strength", None, value, value, timeout_ms)

    def config_peak_output_forward(self, value: float, timeout_ms: int) -> None:
        self._record("config_peak_output_forward", None, value, value, timeout_ms)

    def config_peak_output_reverse(self, value: float, timeout_ms: int) -> None:
        self._record("config_peak_output_reverse", None, value, value, timeout_ms)

    def config_factory_default(self, timeout_ms: int) -> None:
        self._record("config_factory_default", None, True, timeout_ms)
        self._state.factory_reset_count += 1

    def set_status_frame_period(self, frame: int, period_ms: int, timeout_ms: int) -> None:
        self._record("set_status_frame_period", frame, period_ms, frame, period_ms, timeout_ms)

    def select_profile_slot(self, slot: int) -> None:
        self._record("select_profile_slot", None, slot, slot)
        self._state.selected_slot = int(slot)

    # -------------------------------------------------------------------------
    # Test / diagnostics helpers
    # -------------------------------------------------------------------------
    def fail_on(self, *methods: str) -> None:
        """
        Make subsequent calls to `methods` raise ActuatorConfigError.
        """
        self._fail_methods.update(str(m) for m in methods)

    def clear_failures(self) -> None:
        self._fail_methods.clear()

    def get_history(self) -> List[DryRunControllerCall]:
        """
        Return a shallow copy of call records.
        """
        return list(self._history)

    def calls(self, method: str) -> List[DryRunControllerCall]:
        return [c for c in self._history if c.method == method]

    def count(self, method: str) -> int:
        return len(self.calls(method))

    def methods(self) -> List[str]:
        """
        Method names in call order.
        """
        return [c.method for c in self._history]

    def reset_history(self) -> None:
        self._history.clear()

    def value(self, method: str, slot: Optional[int] = None, default: Any = None) -> Any:
        """
        Last value successfully written by `method` (for `slot`, if per slot).
        """
        return self._state.registers.get((method, slot), default)

    @property
    def selected_slot(self) -> Optional[int]:
        return self._state.selected_slot

    @property
    def is_open(self) -> bool:
        return self._state.is_open

    def close(self) -> None:
        """
        Mark the controller unusable for further commands (idempotent).
        """
        self._state.is_open = False

    def get_state_dict(self) -> Dict[str, object]:
        """
        Structured state snapshot for logs/tests/diagnostics.
        """
        return {
            "name": self.name,
            "is_open": self._state.is_open,
            "call_count": self._state.call_count,
            "selected_slot": self._state.selected_slot,
            "factory_reset_count": self._state.factory_reset_count,
            "history_len": len(self._history),
            "max_history": self.max_history,
            "failing": sorted(self._fail_methods),
        }

    # -------------------------------------------------------------------------
    # Context manager support
    # -------------------------------------------------------------------------
    def __enter__(self) -> "DryRunMotorController":
        self._ensure_open("__enter__")
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


__all__ = ["DryRunControllerCall", "DryRunControllerState", "DryRunMotorController"]
