#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Robot SAVO — savo_tuning.controllers.profile_store
==================================================

Purpose
-------
Base class for managers of several PID profiles on one mechanism (most often
separate position and velocity constants, but any number of slots works).

Selection model
---------------
One integer holds both "which profile is active" and "is the manager
disabled": any index outside [0, N) (by convention `DISABLED_INDEX = -1`) is
the disabled state. `select()` never validates bounds so that storing the
sentinel stays possible; only direct lookup (`get_profile`) raises.

`select()` returns True only when the stored index actually changed, which
is what subclasses use to trigger side effects (hardware slot switch).
"""

from __future__ import annotations

from enum import IntEnum
from typing import Optional, Sequence, Tuple, Union

from savo_tuning.constants import DISABLED_INDEX
from savo_tuning.exceptions import IndexOutOfRangeError, ProfileConfigError, TuningErrorContext
from savo_tuning.models.gain_profile import GainProfile


class ControlMode(IntEnum):
    """
    Physics movement types; the value is the profile slot index.
    """
    POSITION = 0
    VELOCITY = 1
    ACCELERATION = 2


SlotRef = Union[int, ControlMode]


class ProfileStore:
    """
    Ordered, fixed-length collection of GainProfiles plus the current selection.

    The collection is fixed at construction; profiles themselves stay mutable
    (live tuning edits them in place).
    """

    def __init__(self, profiles: Sequence[GainProfile]) -> None:
        items = tuple(profiles)
        if not items:
            raise ProfileConfigError(
                "at least one gain profile is required",
                context=TuningErrorContext(component=type(self).__name__, operation="__init__"),
            )
        for idx, prof in enumerate(items):
            if not isinstance(prof, GainProfile):
                raise ProfileConfigError(
                    f"profile {idx} is not a GainProfile: {type(prof).__name__}",
                    context=TuningErrorContext(component=type(self).__name__, operation="__init__", slot=idx),
                )
        self._profiles: Tuple[GainProfile, ...] = items
        self._current_index: int = 0

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------
    def __len__(self) -> int:
        return len(self._profiles)

    def profiles(self) -> Tuple[GainProfile, ...]:
        return self._profiles

    def get_profile(self, index: SlotRef) -> GainProfile:
        """
        Profile stored at `index` (int or ControlMode).

        Raises IndexOutOfRangeError if index is outside [0, N).
        """
        idx = int(index)
        if not 0 <= idx < len(self._profiles):
            raise IndexOutOfRangeError(
                f"profile index {idx} out of range [0, {len(self._profiles)})",
                context=TuningErrorContext(component=type(self).__name__, operation="get_profile", slot=idx),
            )
        return self._profiles[idx]

    # -------------------------------------------------------------------------
    # Selection
    # -------------------------------------------------------------------------
    def select(self, index: SlotRef) -> bool:
        """
        Store `index` as the current selection.

        Returns True iff the index differs from the previous value. Out-of-range
        indices are stored as-is (disabled state).
        """
        idx = int(index)
        changed = idx != self._current_index
        if changed:
            self._current_index = idx
        return changed

    def deselect(self) -> bool:
        """
        Select the disabled sentinel. Returns True if that was a change.
        """
        return self.select(DISABLED_INDEX)

    def current_index(self) -> int:
        return self._current_index

    def is_selection_valid(self) -> bool:
        return 0 <= self._current_index < len(self._profiles)

    def current_profile(self) -> Optional[GainProfile]:
        """
        Active profile, or None while the selection is invalid.
        """
        idx = self._current_index
        if 0 <= idx < len(self._profiles):
            return self._profiles[idx]
        return None

    def current_mode(self) -> Optional[ControlMode]:
        """
        ControlMode of the current slot, or None if the selection is invalid
        or the slot has no named mode.
        """
        if not self.is_selection_valid():
            return None
        try:
            return ControlMode(self._current_index)
        except ValueError:
            return None


__all__ = ["ControlMode", "SlotRef", "ProfileStore"]
