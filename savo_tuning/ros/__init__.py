"""
Robot SAVO — savo_tuning.ros
----------------------------
ROS2 adapters. Importing this package does not import rclpy.
"""

from .param_store import RosParamValueStore, label_to_param_name

__all__ = ["RosParamValueStore", "label_to_param_name"]
