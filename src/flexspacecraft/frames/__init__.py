"""Coordinate frames and frame transformations.

Provides the immutable :class:`Frame` triad, the frame algebra
(:func:`rotate`, :func:`difference`) and the transformation matrices
between the frames used by the simulator:

- **ECI**: inertial reference, :func:`eci_frame`
- **Body**: spacecraft-fixed, from the attitude quaternion
- **LVLH**: orbit-attached local vertical / local horizontal
"""

from .frame import Frame, difference, eci_frame, rotate
from .transformations import (
    Rx,
    Ry,
    Rz,
    body_frame,
    lvlh_frame,
    quaternion_multiply,
    quaternion_to_euler_angles,
    rotation_body_to_eci,
    rotation_eci_to_body,
    rotation_eci_to_lvlh,
    rotation_lvlh_to_eci,
)

__all__ = [
    # Frame algebra
    "Frame",
    "rotate",
    "difference",
    "eci_frame",
    # Elementary rotations
    "Rx",
    "Ry",
    "Rz",
    # Attitude
    "rotation_eci_to_body",
    "rotation_body_to_eci",
    "body_frame",
    "quaternion_multiply",
    "quaternion_to_euler_angles",
    # Orbit frames
    "rotation_lvlh_to_eci",
    "rotation_eci_to_lvlh",
    "lvlh_frame",
]
