# -*- coding: utf-8 -*-
"""
Robot SAVO — savo_tuning/models/__init__.py
-------------------------------------------
Data models for `savo_tuning` (no ROS, no hardware).

Example
-------
    from savo_tuning.models import GainProfile, MotionProfile, MotionExtra
"""

from __future__ import annotations

from .gain_profile import GainProfile
from .motion_profile import MotionExtra, MotionFamily, MotionProfile

__all__ = [
    "GainProfile",
    "MotionExtra",
    "MotionFamily",
    "MotionProfile",
]
