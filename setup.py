#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Robot SAVO — setup.py (savo_tuning)
-----------------------------------
Purpose:
- Package the Python modules under `savo_tuning/`
- Multi-slot PID configuration, software PID evaluation, on-device slot sync,
  and realtime (dashboard / ROS parameter) gain tuning for motor controllers.

ROS note
--------
`savo_tuning.ros` talks to `rclpy`, which is provided by the ROS 2 Jazzy
install (package.xml / rosdep), not by pip. Everything else is pure Python
and installs/tests without ROS.
"""

from setuptools import find_packages, setup

package_name = "savo_tuning"

setup(
    name=package_name,
    version="0.1.0",
    packages=find_packages(exclude=("test", "test.*")),
    include_package_data=True,
    install_requires=[
        "setuptools",
    ],
    extras_require={
        "test": ["pytest"],
    },
    python_requires=">=3.10",
    zip_safe=False,
    maintainer="Ahnaf Tahmid",
    maintainer_email="tahmidahnaf998@gmail.com",
    description=(
        "Robot SAVO motor-controller tuning helpers: multi-slot PID profile "
        "store, bounded software PID evaluation, hardware profile-slot sync, "
        "and realtime tuning bridge."
    ),
    license="Proprietary",
    tests_require=["pytest"],
    entry_points={
        "console_scripts": [],
    },
)
