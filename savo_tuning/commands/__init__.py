"""
Robot SAVO — savo_tuning.commands
"""

from .set_position_task import FinishReason, SetPositionTask

__all__ = ["FinishReason", "SetPositionTask"]
