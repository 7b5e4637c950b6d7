#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Robot SAVO — savo_tuning/utils/param_loader.py
----------------------------------------------
ROS2 Jazzy-friendly parameter loading for `savo_tuning`.

Why this exists
---------------
Gain profiles and motion constants are robot-specific and should come from
parameters (YAML / launch files), not from code. This module provides:
- idempotent parameter declaration
- typed reads with safe defaults and numeric clamping
- a local record of loaded values for diagnostics/logging
- bundles that build `GainProfile` / `MotionProfile` objects directly

Works with a ROS2 Node, any duck-typed object exposing
`has_parameter / declare_parameter / get_parameter`, or `None` (defaults only,
for unit tests and dry-run tools).

Parameter layout
----------------
<prefix>.<slot>.kp | ki | kd | kf | output_range | tolerance     (gain profiles)
<prefix>.max_velocity | max_acceleration | integral_zone         (motion)
<prefix>.s_curve_strength | min_velocity                          (motion extra)
<prefix>.timeout_ms | period_ms | reset | status_frames           (motion setup)

ROS parameters cannot hold None, so a negative motion constant means
"unset" (leave the hardware default).

Usage
-----
pl = ParamLoader(self, component="arm_node")
profiles = pl.load_gain_profiles(["position", "velocity"], defaults)
motion = pl.load_motion_profile(family=MotionFamily.MOTION_MAGIC)
pl.log_loaded()
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Union

from savo_tuning.constants import (
    DEFAULT_STATUS_FRAME_PERIOD_MS,
    DEFAULT_TIMEOUT_MS,
    PARAM_PREFIX_MOTION,
    PARAM_PREFIX_PID,
)
from savo_tuning.models.gain_profile import GainProfile
from savo_tuning.models.motion_profile import MotionExtra, MotionFamily, MotionProfile
from savo_tuning.utils.logging import LoggerAdapter, get_logger_adapter


# =============================================================================
# Generic parsing helpers
# =============================================================================

def _clamp_num(value: Union[int, float], lo: Optional[Union[int, float]], hi: Optional[Union[int, float]]) -> Union[int, float]:
    if lo is not None and value < lo:
        value = lo
    if hi is not None and value > hi:
        value = hi
    return value


def _to_bool(value: Any, default: bool = False) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return bool(default)
    if isinstance(value, (int, float)):
        return bool(value)
    text = str(value).strip().lower()
    if text in ("1", "true", "t", "yes", "y", "on"):
        return True
    if text in ("0", "false", "f", "no", "n", "off"):
        return False
    return bool(default)


def _to_int(value: Any, default: int = 0) -> int:
    if value is None:
        return int(default)
    if isinstance(value, (bool, int)):
        return int(value)
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else int(default)
    text = str(value).strip()
    try:
        return int(text, 0)
    except ValueError:
        try:
            return int(float(text))
        except (ValueError, OverflowError):
            return int(default)


def _to_float(value: Any, default: float = 0.0) -> float:
    if value is None:
        return float(default)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    try:
        return float(str(value).strip())
    except ValueError:
        return float(default)


def _to_int_list(value: Any, default: Optional[List[int]] = None) -> List[int]:
    if default is None:
        default = []
    if value is None:
        return list(default)
    if isinstance(value, (list, tuple)):
        return [_to_int(v) for v in value]
    text = str(value).strip()
    if not text:
        return list(default)
    return [_to_int(p) for p in text.split(",") if p.strip()]


def _optional(value: float) -> Optional[float]:
    """
    Negative / non-finite motion constants mean "unset".
    """
    if not math.isfinite(value) or value < 0.0:
        return None
    return value


# =============================================================================
# Structured records
# =============================================================================

@dataclass
class ParamSpec:
    """
    Describes a parameter declaration and optional typed loading constraints.
    """
    name: str
    default: Any
    kind: str = "auto"       # auto | bool | int | float | int_list
    lo: Optional[float] = None
    hi: Optional[float] = None
    description: str = ""


@dataclass
class ParamRecord:
    """
    Final loaded parameter value and metadata for diagnostics/logging.
    """
    name: str
    declared_default: Any
    loaded_value: Any
    kind: str
    clamped: bool = False
    notes: str = ""


@dataclass
class ParamLoadSummary:
    component: str = "savo_tuning"
    records: Dict[str, ParamRecord] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "component": self.component,
            "count": len(self.records),
            "params": {
                k: {
                    "declared_default": v.declared_default,
                    "loaded_value": v.loaded_value,
                    "kind": v.kind,
                    "clamped": v.clamped,
                    "notes": v.notes,
                }
                for k, v in self.records.items()
            },
        }

    def values_dict(self) -> Dict[str, Any]:
        return {k: v.loaded_value for k, v in self.records.items()}


# =============================================================================
# ParamLoader
# =============================================================================

class ParamLoader:
    """
    Parameter loader wrapper for ROS2 Nodes (or None).

    - declares before reading (idempotent)
    - clamps numeric params into [lo, hi]
    - keeps a record of every loaded value
    """

    def __init__(self, node: Optional[Any], *, component: str = "savo_tuning") -> None:
        self.node = node
        self.component = component
        self.logger: LoggerAdapter = get_logger_adapter(node, name=f"savo_tuning.{component}")
        self.summary = ParamLoadSummary(component=component)

    # -------------------------------------------------------------------------
    # Core ROS helpers
    # -------------------------------------------------------------------------
    def _declare_if_needed(self, name: str, default: Any) -> None:
        if self.node is None:
            return
        if self.node.has_parameter(name):
            return
        self.node.declare_parameter(name, default)

    def _read_raw(self, name: str, default: Any) -> Any:
        if self.node is None:
            return default
        value = self.node.get_parameter(name).value
        return default if value is None else value

    def declare_many(self, params: Mapping[str, Any]) -> "ParamLoader":
        for name, default in params.items():
            self._declare_if_needed(str(name), default)
        return self

    def _record(self, name: str, default: Any, value: Any, kind: str, *, clamped: bool = False, notes: str = "") -> None:
        self.summary.records[name] = ParamRecord(
            name=name,
            declared_default=default,
            loaded_value=value,
            kind=kind,
            clamped=clamped,
            notes=notes,
        )

    # -------------------------------------------------------------------------
    # Typed getters
    # -------------------------------------------------------------------------
    def get_bool(self, name: str, *, default: bool = False) -> bool:
        self._declare_if_needed(name, default)
        val = _to_bool(self._read_raw(name, default), default=default)
        self._record(name, default, val, "bool")
        return val

    def get_int(self, name: str, *, default: int = 0, lo: Optional[int] = None, hi: Optional[int] = None) -> int:
        self._declare_if_needed(name, default)
        before = _to_int(self._read_raw(name, default), default=default)
        val = int(_clamp_num(before, lo, hi))
        self._record(
            name, default, val, "int",
            clamped=(val != before),
            notes=f"range=[{lo},{hi}]" if (lo is not None or hi is not None) else "",
        )
        return val

    def get_float(self, name: str, *, default: float = 0.0, lo: Optional[float] = None, hi: Optional[float] = None) -> float:
        self._declare_if_needed(name, default)
        before = _to_float(self._read_raw(name, default), default=default)
        val = float(_clamp_num(before, lo, hi)) if math.isfinite(before) else before
        self._record(
            name, default, val, "float",
            clamped=(val != before),
            notes=f"range=[{lo},{hi}]" if (lo is not None or hi is not None) else "",
        )
        return val

    def get_int_list(self, name: str, *, default: Optional[List[int]] = None) -> List[int]:
        dflt = list(default) if default is not None else []
        # Declared as a comma-separated string: rclpy cannot infer the type of [].
        self._declare_if_needed(name, ",".join(str(x) for x in dflt))
        val = _to_int_list(self._read_raw(name, dflt), default=dflt)
        self._record(name, dflt, list(val), "int_list")
        return val

    def get_from_spec(self, spec: ParamSpec) -> Any:
        kind = (spec.kind or "auto").strip().lower()
        d = spec.default
        if kind == "auto":
            if isinstance(d, bool):
                kind = "bool"
            elif isinstance(d, int):
                kind = "int"
            elif isinstance(d, (list, tuple)):
                kind = "int_list"
            else:
                kind = "float"

        if kind == "bool":
            return self.get_bool(spec.name, default=bool(d))
        if kind == "int":
            return self.get_int(
                spec.name,
                default=int(d),
                lo=int(spec.lo) if spec.lo is not None else None,
                hi=int(spec.hi) if spec.hi is not None else None,
            )
        if kind == "int_list":
            return self.get_int_list(spec.name, default=[int(x) for x in d])
        return self.get_float(spec.name, default=float(d), lo=spec.lo, hi=spec.hi)

    def load_specs(self, specs: Iterable[ParamSpec]) -> Dict[str, Any]:
        """
        Declare + load a set of ParamSpec entries. Returns {name: typed_value}.
        """
        return {spec.name: self.get_from_spec(spec) for spec in specs}

    # -------------------------------------------------------------------------
    # Tuning bundles
    # -------------------------------------------------------------------------
    def load_gain_profiles(
        self,
        slots: Sequence[str],
        defaults: Optional[Sequence[GainProfile]] = None,
        *,
        prefix: str = PARAM_PREFIX_PID,
    ) -> List[GainProfile]:
        """
        One GainProfile per slot name, read from `<prefix>.<slot>.*`.

        `defaults[i]` supplies the declared defaults of slot i; missing
        defaults are all-zero gains with the package default range/tolerance.
        Raises ProfileConfigError if a loaded gain is not finite.
        """
        defaults = list(defaults) if defaults is not None else []
        out: List[GainProfile] = []
        for i, slot in enumerate(slots):
            base = defaults[i] if i < len(defaults) else GainProfile(0.0)
            key = f"{prefix}.{slot}"
            vals = self.load_specs([
                ParamSpec(f"{key}.kp", float(base.p), kind="float"),
                ParamSpec(f"{key}.ki", float(base.i), kind="float"),
                ParamSpec(f"{key}.kd", float(base.d), kind="float"),
                ParamSpec(f"{key}.kf", float(base.feed_forward), kind="float"),
                ParamSpec(f"{key}.output_range", float(base.output_range), kind="float", lo=1e-6),
                ParamSpec(f"{key}.tolerance", float(base.tolerance), kind="float", lo=0.0),
            ])
            out.append(
                GainProfile(
                    p=vals[f"{key}.kp"],
                    i=vals[f"{key}.ki"],
                    d=vals[f"{key}.kd"],
                    feed_forward=vals[f"{key}.kf"],
                    output_range=vals[f"{key}.output_range"],
                    tolerance=vals[f"{key}.tolerance"],
                )
            )
        return out

    def load_motion_profile(
        self,
        *,
        prefix: str = PARAM_PREFIX_MOTION,
        family: MotionFamily = MotionFamily.BASIC,
    ) -> MotionProfile:
        """
        MotionProfile of the given family, read from `<prefix>.*`.
        """
        family = MotionFamily(family)
        vals = self.load_specs([
            ParamSpec(f"{prefix}.max_velocity", -1.0, kind="float"),
            ParamSpec(f"{prefix}.max_acceleration", -1.0, kind="float"),
            ParamSpec(f"{prefix}.integral_zone", -1, kind="int"),
            ParamSpec(f"{prefix}.timeout_ms", DEFAULT_TIMEOUT_MS, kind="int", lo=0, hi=10_000),
            ParamSpec(f"{prefix}.period_ms", DEFAULT_STATUS_FRAME_PERIOD_MS, kind="int", lo=1, hi=10_000),
            ParamSpec(f"{prefix}.reset", False, kind="bool"),
            ParamSpec(f"{prefix}.status_frames", [], kind="int_list"),
        ])

        if family is MotionFamily.MOTION_MAGIC:
            s_curve = self.get_int(f"{prefix}.s_curve_strength", default=-1, hi=8)
            extra = MotionExtra.motion_magic(s_curve if s_curve >= 0 else None)
        elif family is MotionFamily.SMART_MOTION:
            min_vel = self.get_float(f"{prefix}.min_velocity", default=-1.0)
            extra = MotionExtra.smart_motion(_optional(min_vel))
        else:
            extra = MotionExtra.basic()

        izone = int(vals[f"{prefix}.integral_zone"])
        return MotionProfile(
            max_velocity=_optional(vals[f"{prefix}.max_velocity"]),
            max_acceleration=_optional(vals[f"{prefix}.max_acceleration"]),
            integral_zone=izone if izone >= 0 else None,
            timeout_ms=vals[f"{prefix}.timeout_ms"],
            period_ms=vals[f"{prefix}.period_ms"],
            reset=vals[f"{prefix}.reset"],
            status_frames=list(vals[f"{prefix}.status_frames"]),
            extra=extra,
        )

    # -------------------------------------------------------------------------
    # Logging / export helpers
    # -------------------------------------------------------------------------
    def values_dict(self) -> Dict[str, Any]:
        return self.summary.values_dict()

    def summary_dict(self) -> Dict[str, Any]:
        return self.summary.to_dict()

    def log_loaded(self, *, component: Optional[str] = None, include_values: bool = True) -> None:
        comp = component or self.component
        self.logger.info(f"[{comp}] Loaded {len(self.summary.records)} parameters")
        if not include_values:
            return
        for name in sorted(self.summary.records.keys()):
            rec = self.summary.records[name]
            suffix_parts = []
            if rec.clamped:
                suffix_parts.append("clamped")
            if rec.notes:
                suffix_parts.append(rec.notes)
            suffix = f" ({', '.join(suffix_parts)})" if suffix_parts else ""
            self.logger.info(f"[{comp}]   {name} = {rec.loaded_value!r} [{rec.kind}]{suffix}")


# =============================================================================
# Functional helpers
# =============================================================================

def load_gain_profiles(
    node: Any,
    slots: Sequence[str],
    defaults: Optional[Sequence[GainProfile]] = None,
    *,
    prefix: str = PARAM_PREFIX_PID,
) -> List[GainProfile]:
    return ParamLoader(node).load_gain_profiles(slots, defaults, prefix=prefix)


def load_motion_profile(
    node: Any,
    prefix: str = PARAM_PREFIX_MOTION,
    family: MotionFamily = MotionFamily.BASIC,
) -> MotionProfile:
    return ParamLoader(node).load_motion_profile(prefix=prefix, family=family)


__all__ = [
    "ParamSpec",
    "ParamRecord",
    "ParamLoadSummary",
    "ParamLoader",
    "load_gain_profiles",
    "load_motion_profile",
]
