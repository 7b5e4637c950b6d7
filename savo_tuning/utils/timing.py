#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Robot SAVO — savo_tuning/utils/timing.py
----------------------------------------
Monotonic timing helpers.

Real robot timeouts must use monotonic time: wall-clock time can jump
(NTP sync, manual clock changes), monotonic time does not.
"""

from __future__ import annotations

import time
from typing import Optional


def now_mono_s() -> float:
    """
    Current monotonic time in seconds (float).
    """
    return float(time.monotonic())


def elapsed_s(since_mono_s: float, now_s: Optional[float] = None) -> float:
    """
    Elapsed monotonic seconds since `since_mono_s`, clamped at 0.0.
    """
    if now_s is None:
        now_s = now_mono_s()
    dt = float(now_s) - float(since_mono_s)
    return dt if dt > 0.0 else 0.0


__all__ = ["now_mono_s", "elapsed_s"]
