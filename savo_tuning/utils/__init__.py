# -*- coding: utf-8 -*-
"""
Robot SAVO — savo_tuning/utils/__init__.py
------------------------------------------
Shared helpers: clamping/math, timing, logging and parameter loading.
"""

from __future__ import annotations

from .clamp import clamp, clamp_float, clamp_symmetric, fit_deadband, is_within_tolerance
from .logging import LoggerAdapter, RateLimitedLogger, get_logger_adapter, log_event, log_exception
from .timing import elapsed_s, now_mono_s

__all__ = [
    "clamp",
    "clamp_float",
    "clamp_symmetric",
    "fit_deadband",
    "is_within_tolerance",
    "LoggerAdapter",
    "RateLimitedLogger",
    "get_logger_adapter",
    "log_event",
    "log_exception",
    "now_mono_s",
    "elapsed_s",
]
