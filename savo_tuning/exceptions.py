#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Robot SAVO — savo_tuning/exceptions.py
--------------------------------------
Exception hierarchy for `savo_tuning`.

Purpose
- One base class for every failure raised by this package
- Structured context attached to failures (slot, label, operation, value)
- Distinguish configuration mistakes from actuator/hardware failures

Design notes
- No ROS dependencies
- Invalid *runtime state* (disabled loop, invalid selection, missing feedback)
  is never an exception: control paths degrade to a 0.0 output instead.
- Actuator failures (see `savo_tuning.drivers.actuator_exceptions`) are never
  caught or wrapped by the control/tuning layers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


# =============================================================================
# Base exception + structured context
# =============================================================================
@dataclass(frozen=True)
class TuningErrorContext:
    """
    Optional structured context attached to `savo_tuning` exceptions.

    Common fields (examples):
    - component="ProfileStore"
    - operation="get_profile"
    - slot=3
    - label="P Gain"
    - value=-0.5
    """
    component: Optional[str] = None
    operation: Optional[str] = None
    slot: Optional[int] = None
    label: Optional[str] = None
    value: Optional[int | float | str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert context to a compact dict, excluding None values.
        """
        out: Dict[str, Any] = {}
        if self.component is not None:
            out["component"] = self.component
        if self.operation is not None:
            out["operation"] = self.operation
        if self.slot is not None:
            out["slot"] = self.slot
        if self.label is not None:
            out["label"] = self.label
        if self.value is not None:
            out["value"] = self.value
        if self.extra:
            out["extra"] = dict(self.extra)
        return out

    def format_compact(self) -> str:
        parts = []
        if self.component is not None:
            parts.append(f"component={self.component}")
        if self.operation is not None:
            parts.append(f"op={self.operation}")
        if self.slot is not None:
            parts.append(f"slot={self.slot}")
        if self.label is not None:
            parts.append(f"label={self.label!r}")
        if self.value is not None:
            parts.append(f"value={self.value}")
        if self.extra:
            parts.append(f"extra={self.extra}")
        return ", ".join(parts)


class TuningException(RuntimeError):
    """
    Base exception for all `savo_tuning` failures.

    Supports optional structured context and exception chaining.
    """

    def __init__(
        self,
        message: str,
        *,
        context: Optional[TuningErrorContext] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        self.message = str(message)
        self.context = context
        self.cause = cause
        super().__init__(self.__str__())

        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        if self.context is None:
            return self.message
        ctx = self.context.format_compact()
        if not ctx:
            return self.message
        return f"{self.message} [{ctx}]"

    def to_dict(self) -> Dict[str, Any]:
        """
        Structured representation suitable for logs/JSON diagnostics.
        """
        out: Dict[str, Any] = {
            "type": self.__class__.__name__,
            "message": self.message,
        }
        if self.context is not None:
            out["context"] = self.context.to_dict()
        if self.cause is not None:
            out["cause_type"] = self.cause.__class__.__name__
            out["cause_message"] = str(self.cause)
        return out


# =============================================================================
# Configuration / lookup errors
# =============================================================================
class ProfileConfigError(TuningException, ValueError):
    """
    Invalid gain/motion profile values or an empty profile set.
    """


class IndexOutOfRangeError(TuningException, IndexError):
    """
    Direct profile lookup with an index outside [0, N).

    Selection never raises this: storing an out-of-range index is how a
    profile manager is disabled.
    """


class BindingError(TuningException):
    """
    Invalid tuning binding (empty label, unknown label, bad value type).
    """


__all__ = [
    "TuningErrorContext",
    "TuningException",
    "ProfileConfigError",
    "IndexOutOfRangeError",
    "BindingError",
]
