# -*- coding: utf-8 -*-

"""
Robot SAVO — savo_tuning/constants.py
-------------------------------------
Centralized package-wide constants for `savo_tuning`.

Notes
-----
- Dependency-free (no ROS imports).
- These are code defaults only; ROS parameters override them through
  `savo_tuning.utils.param_loader`.
"""

from __future__ import annotations

from typing import Final, Tuple


# =============================================================================
# Profile selection
# =============================================================================
# Stored as the current index to disable a multi-profile manager.
DISABLED_INDEX: Final[int] = -1

# Profile slots available on typical on-device PID controllers.
MAX_HARDWARE_SLOTS: Final[int] = 4

# Primary closed loop (auxiliary loops are not managed here).
PRIMARY_PID_LOOP: Final[int] = 0


# =============================================================================
# Timing defaults
# =============================================================================
# Software PID control-loop period (50 Hz robot loop).
DEFAULT_PERIOD_S: Final[float] = 0.02

# Timeout passed through to controller configuration calls.
DEFAULT_TIMEOUT_MS: Final[int] = 10

# Status frame period used by motion-profile setup.
DEFAULT_STATUS_FRAME_PERIOD_MS: Final[int] = 10


# =============================================================================
# Gain profile defaults
# =============================================================================
DEFAULT_OUTPUT_RANGE: Final[float] = 1.0
DEFAULT_TOLERANCE: Final[float] = 0.0


# =============================================================================
# Tuning dashboard labels
# =============================================================================
LABEL_P_GAIN: Final[str] = "P Gain"
LABEL_I_GAIN: Final[str] = "I Gain"
LABEL_D_GAIN: Final[str] = "D Gain"
LABEL_FEED_FORWARD: Final[str] = "Feed Forward"
LABEL_I_ZONE: Final[str] = "I Zone"
LABEL_MAX_OUTPUT: Final[str] = "Max Output"
LABEL_MIN_OUTPUT: Final[str] = "Min Output"
LABEL_MAX_VELOCITY: Final[str] = "Max Velocity"
LABEL_MAX_ACCELERATION: Final[str] = "Max Acceleration"
LABEL_S_CURVE_STRENGTH: Final[str] = "S Curve Strength"
LABEL_MIN_VELOCITY: Final[str] = "Min Vel"

BASE_TUNING_LABELS: Final[Tuple[str, ...]] = (
    LABEL_P_GAIN,
    LABEL_I_GAIN,
    LABEL_D_GAIN,
    LABEL_FEED_FORWARD,
    LABEL_I_ZONE,
    LABEL_MAX_OUTPUT,
    LABEL_MIN_OUTPUT,
    LABEL_MAX_VELOCITY,
    LABEL_MAX_ACCELERATION,
)


# =============================================================================
# Parameter naming (ROS params / config)
# =============================================================================
PARAM_PREFIX_PID: Final[str] = "pid"
PARAM_PREFIX_MOTION: Final[str] = "motion"


__all__ = [
    "DISABLED_INDEX",
    "MAX_HARDWARE_SLOTS",
    "PRIMARY_PID_LOOP",
    "DEFAULT_PERIOD_S",
    "DEFAULT_TIMEOUT_MS",
    "DEFAULT_STATUS_FRAME_PERIOD_MS",
    "DEFAULT_OUTPUT_RANGE",
    "DEFAULT_TOLERANCE",
    "LABEL_P_GAIN",
    "LABEL_I_GAIN",
    "LABEL_D_GAIN",
    "LABEL_FEED_FORWARD",
    "LABEL_I_ZONE",
    "LABEL_MAX_OUTPUT",
    "LABEL_MIN_OUTPUT",
    "LABEL_MAX_VELOCITY",
    "LABEL_MAX_ACCELERATION",
    "LABEL_S_CURVE_STRENGTH",
    "LABEL_MIN_VELOCITY",
    "BASE_TUNING_LABELS",
    "PARAM_PREFIX_PID",
    "PARAM_PREFIX_MOTION",
]
