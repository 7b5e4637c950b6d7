#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Robot SAVO — savo_tuning/commands/set_position_task.py
------------------------------------------------------
Finite-duration "go to position" task for an on-device closed loop.

`initialize()` hands the setpoint to the mechanism once and starts the timer;
the caller's loop then polls `is_finished()`. The task is finished when the
position is within `max_error` of the setpoint, the timeout has elapsed, or an
enabled travel limit has been reached.

Units are whatever the mechanism uses (ticks, degrees, meters) as long as
setpoint, error and limits agree. A negative `timeout_s` disables the timeout;
a limit of None disables that limit.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Callable, Optional

from savo_tuning.utils.clamp import is_within_tolerance
from savo_tuning.utils.timing import elapsed_s, now_mono_s


class FinishReason(str, Enum):
    NOT_FINISHED = "NOT_FINISHED"
    AT_TARGET = "AT_TARGET"
    TIMED_OUT = "TIMED_OUT"
    FORWARD_LIMIT = "FORWARD_LIMIT"
    BACKWARD_LIMIT = "BACKWARD_LIMIT"


class SetPositionTask:
    """
    Poll-driven position move.

    Parameters
    ----------
    position_source : zero-argument callable returning the current position.
    position_sink : callable receiving the setpoint (e.g. a motor's set method).
    setpoint : target position.
    max_error : tolerance around the setpoint (strict).
    timeout_s : maximum duration after `initialize()`; negative disables it.
    forward_limit / backward_limit : optional travel limits.
    clock : monotonic time source in seconds (injectable for tests).
    """

    def __init__(
        self,
        position_source: Callable[[], float],
        position_sink: Callable[[float], object],
        setpoint: float,
        max_error: float,
        timeout_s: float,
        *,
        forward_limit: Optional[float] = None,
        backward_limit: Optional[float] = None,
        clock: Callable[[], float] = now_mono_s,
    ) -> None:
        self._source = position_source
        self._sink = position_sink
        self.setpoint = float(setpoint)
        self.max_error = abs(float(max_error))
        self.timeout_s = float(timeout_s)
        self.forward_limit = None if forward_limit is None else float(forward_limit)
        self.backward_limit = None if backward_limit is None else float(backward_limit)
        self._clock = clock
        self._start_s: Optional[float] = None

    def initialize(self) -> None:
        """
        Send the setpoint, then start the timeout timer.
        """
        self._sink(self.setpoint)
        self._start_s = float(self._clock())

    @property
    def started(self) -> bool:
        return self._start_s is not None

    def elapsed_s(self) -> float:
        if self._start_s is None:
            return 0.0
        return elapsed_s(self._start_s, self._clock())

    def has_timed_out(self) -> bool:
        if self._start_s is None or self.timeout_s < 0.0:
            return False
        return self.elapsed_s() > self.timeout_s

    def finish_reason(self) -> FinishReason:
        """
        Why the task is finished (first matching condition), or NOT_FINISHED.
        """
        pos = float(self._source())
        if math.isfinite(pos) and is_within_tolerance(pos, self.setpoint, self.max_error):
            return FinishReason.AT_TARGET
        if self.has_timed_out():
            return FinishReason.TIMED_OUT
        if self.forward_limit is not None and pos >= self.forward_limit:
            return FinishReason.FORWARD_LIMIT
        if self.backward_limit is not None and pos <= self.backward_limit:
            return FinishReason.BACKWARD_LIMIT
        return FinishReason.NOT_FINISHED

    def is_finished(self) -> bool:
        return self.finish_reason() is not FinishReason.NOT_FINISHED


__all__ = ["FinishReason", "SetPositionTask"]
