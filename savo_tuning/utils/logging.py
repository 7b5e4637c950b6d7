#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Robot SAVO — savo_tuning/utils/logging.py
-----------------------------------------
Lightweight logging helpers for `savo_tuning` (ROS2 Jazzy friendly).

Purpose
-------
Let profile managers, tuners and drivers log consistently whether they run:
- inside ROS2 nodes (`rclpy` logger available), or
- in plain Python scripts / tests (stdlib `logging`)

Typical usage
-------------
from savo_tuning.utils.logging import get_logger_adapter, log_event

logger = get_logger_adapter(name="savo_tuning.hardware_sync")
log_event(logger, "slot_selected", component="HardwareProfileSync", details={"slot": 1})
"""

from __future__ import annotations

import json
import logging
import sys
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Optional


_LEVEL_DEBUG = "DEBUG"
_LEVEL_INFO = "INFO"
_LEVEL_WARN = "WARN"
_LEVEL_ERROR = "ERROR"

_ROOT_NAME = "savo_tuning"


# =============================================================================
# Formatting helpers
# =============================================================================

def _safe_json(payload: Dict[str, Any]) -> str:
    try:
        return json.dumps(payload, ensure_ascii=False, separators=(",", ":"), default=str)
    except (TypeError, ValueError):
        return str(payload)


# =============================================================================
# Stdlib logger setup
# =============================================================================

def _ensure_std_logger(name: str = _ROOT_NAME) -> logging.Logger:
    """
    Return a stdlib logger; the package root gets one stdout handler (idempotent).
    """
    root = logging.getLogger(_ROOT_NAME)
    if not root.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(
            logging.Formatter(
                fmt="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        root.addHandler(handler)
        root.setLevel(logging.INFO)
    return logging.getLogger(name)


# =============================================================================
# Logger adapter (ROS2 logger or stdlib logger)
# =============================================================================

@dataclass
class LoggerAdapter:
    """
    Hides whether the underlying logger is a ROS2 logger (rclpy) or a
    stdlib `logging.Logger`.

    Methods match common ROS logger style: debug(), info(), warn(), error()
    """
    target: Any = None
    name: str = _ROOT_NAME

    def __post_init__(self) -> None:
        if self.target is None:
            self.target = _ensure_std_logger(self.name)

    @property
    def is_std_logger(self) -> bool:
        return isinstance(self.target, logging.Logger)

    @property
    def is_ros_logger(self) -> bool:
        t = self.target
        return (not self.is_std_logger) and all(hasattr(t, m) for m in ("info", "warn", "error"))

    def _emit(self, level: str, msg: Any) -> None:
        text = str(msg)

        if self.is_ros_logger:
            if level == _LEVEL_DEBUG and hasattr(self.target, "debug"):
                self.target.debug(text)
            elif level == _LEVEL_INFO:
                self.target.info(text)
            elif level == _LEVEL_WARN:
                self.target.warn(text)
            else:
                self.target.error(text)
            return

        std_logger = self.target if self.is_std_logger else _ensure_std_logger(self.name)
        if level == _LEVEL_DEBUG:
            std_logger.debug(text)
        elif level == _LEVEL_INFO:
            std_logger.info(text)
        elif level == _LEVEL_WARN:
            std_logger.warning(text)
        else:
            std_logger.error(text)

    def debug(self, msg: Any) -> None:
        self._emit(_LEVEL_DEBUG, msg)

    def info(self, msg: Any) -> None:
        self._emit(_LEVEL_INFO, msg)

    def warn(self, msg: Any) -> None:
        self._emit(_LEVEL_WARN, msg)

    def error(self, msg: Any) -> None:
        self._emit(_LEVEL_ERROR, msg)


def get_logger_adapter(source: Any = None, *, name: str = _ROOT_NAME) -> LoggerAdapter:
    """
    Create a LoggerAdapter from a source object.

    Supported sources
    -----------------
    - ROS2 Node (`source.get_logger()`)
    - ROS2 logger directly
    - stdlib logging.Logger
    - an existing LoggerAdapter (returned as-is)
    - None (stdlib logger named `name`)
    """
    if isinstance(source, LoggerAdapter):
        return source
    if source is None:
        return LoggerAdapter(target=_ensure_std_logger(name), name=name)
    if hasattr(source, "get_logger") and callable(source.get_logger):
        return LoggerAdapter(target=source.get_logger(), name=name)
    return LoggerAdapter(target=source, name=name)


# =============================================================================
# Structured logging helpers
# =============================================================================

def format_kv(**kwargs: Any) -> str:
    """
    Format key=value pairs into a compact stable string.

    Example:
      format_kv(slot=1, kp=0.4) -> "slot=1 kp=0.4"
    """
    return " ".join(f"{k}={v}" for k, v in kwargs.items())


def format_event(
    event: str,
    *,
    level: str = _LEVEL_INFO,
    component: Optional[str] = None,
    details: Optional[Dict[str, Any]] = None,
) -> str:
    """
    Format a standardized event log line.

    Example output:
      [INFO] [HardwareProfileSync] slot_selected slot=1
    """
    lvl = str(level).upper()
    comp = f"[{component}] " if component else ""
    base = f"[{lvl}] {comp}{event}"
    if details:
        if all(isinstance(k, str) for k in details.keys()):
            return f"{base} {format_kv(**details)}"
        return f"{base} details={_safe_json(details)}"
    return base


def log_event(
    logger: LoggerAdapter,
    event: str,
    *,
    level: str = _LEVEL_INFO,
    component: Optional[str] = None,
    details: Optional[Dict[str, Any]] = None,
) -> None:
    """
    Emit a standardized event message through the adapter.
    """
    msg = format_event(event, level=level, component=component, details=details)
    lvl = str(level).upper()
    if lvl == _LEVEL_DEBUG:
        logger.debug(msg)
    elif lvl in ("WARN", "WARNING"):
        logger.warn(msg)
    elif lvl == _LEVEL_ERROR:
        logger.error(msg)
    else:
        logger.info(msg)


def log_exception(
    logger: LoggerAdapter,
    exc: BaseException,
    *,
    message: str = "Unhandled exception",
    component: Optional[str] = None,
) -> None:
    """
    Emit a compact exception log message (without full traceback).
    """
    exc_text = f"{exc.__class__.__name__}: {exc}"
    if component:
        logger.error(f"[{component}] {message} | {exc_text}")
    else:
        logger.error(f"{message} | {exc_text}")


# =============================================================================
# Rate-limited logging helper
# =============================================================================

@dataclass
class RateLimitedLogger:
    """
    Per-key rate limiter for repeated warnings in the control loop.

    Example
    -------
    rl = RateLimitedLogger(get_logger_adapter(), period_s=1.0)
    rl.warn("bad_feedback", "Feedback is not finite")
    """
    logger: LoggerAdapter
    period_s: float = 1.0
    _last_emit_mono: Dict[str, float] = field(default_factory=dict)

    def _can_emit(self, key: str) -> bool:
        now = time.monotonic()
        last = self._last_emit_mono.get(str(key))
        if last is None or (now - last) >= max(0.0, float(self.period_s)):
            self._last_emit_mono[str(key)] = now
            return True
        return False

    def debug(self, key: str, msg: Any) -> bool:
        if self._can_emit(key):
            self.logger.debug(msg)
            return True
        return False

    def info(self, key: str, msg: Any) -> bool:
        if self._can_emit(key):
            self.logger.info(msg)
            return True
        return False

    def warn(self, key: str, msg: Any) -> bool:
        if self._can_emit(key):
            self.logger.warn(msg)
            return True
        return False

    def error(self, key: str, msg: Any) -> bool:
        if self._can_emit(key):
            self.logger.error(msg)
            return True
        return False


__all__ = [
    "LoggerAdapter",
    "RateLimitedLogger",
    "get_logger_adapter",
    "format_kv",
    "format_event",
    "log_event",
    "log_exception",
]
