"""Transformation matrices between the simulator's frames.

Naming follows ``rotation_<from>_to_<to>``: the returned matrix maps
vector components expressed in ``<from>`` into components expressed in
``<to>``.

Convention:
    Quaternions are scalar-last ``[q1, q2, q3, q4]`` with ``q4`` the
    scalar part, so the identity attitude is ``[0, 0, 0, 1]``.  A
    quaternion describes the orientation of the body frame with respect
    to ECI.

Frames:

- **ECI**: Earth-centered inertial.  Fixed; attitude is integrated
  with respect to it.
- **Body**: fixed to the spacecraft structure.
- **LVLH**: local vertical / local horizontal.  X along the direction of
  travel (roll), Y opposite the orbit angular momentum (pitch),
  Z toward the Earth's center (yaw).

References:
    1. B. Wie, *Space Vehicle Dynamics and Control*, 2nd ed., AIAA, 2008,
       Sec. 5.3.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from flexspacecraft.config import get_dtype
from flexspacecraft.frames.frame import Frame, eci_frame, rotate

# ──────────────────────────────────────────────
# Elementary rotations
# ──────────────────────────────────────────────


def Rx(angle: ArrayLike) -> Array:
    """Transformation matrix for a frame rotation of *angle* about x.

    Args:
        angle: Rotation angle [rad].

    Returns:
        jax.Array: ``(3, 3)`` matrix.
    """
    c = jnp.cos(angle)
    s = jnp.sin(angle)
    return jnp.array([[1.0, 0.0, 0.0],
                      [0.0, c, s],
                      [0.0, -s, c]], dtype=get_dtype())


def Ry(angle: ArrayLike) -> Array:
    """Transformation matrix for a frame rotation of *angle* about y.

    Args:
        angle: Rotation angle [rad].

    Returns:
        jax.Array: ``(3, 3)`` matrix.
    """
    c = jnp.cos(angle)
    s = jnp.sin(angle)
    return jnp.array([[c, 0.0, -s],
                      [0.0, 1.0, 0.0],
                      [s, 0.0, c]], dtype=get_dtype())


def Rz(angle: ArrayLike) -> Array:
    """Transformation matrix for a frame rotation of *angle* about z.

    Args:
        angle: Rotation angle [rad].

    Returns:
        jax.Array: ``(3, 3)`` matrix.
    """
    c = jnp.cos(angle)
    s = jnp.sin(angle)
    return jnp.array([[c, s, 0.0],
                      [-s, c, 0.0],
                      [0.0, 0.0, 1.0]], dtype=get_dtype())


# ──────────────────────────────────────────────
# Quaternion kernels
# ──────────────────────────────────────────────


def rotation_eci_to_body(q: ArrayLike) -> Array:
    """Transformation matrix from ECI to the spacecraft body frame.

    Args:
        q: Attitude quaternion ``[q1, q2, q3, q4]`` (scalar-last).

    Returns:
        jax.Array: ``(3, 3)`` direction cosine matrix ``C`` such that
            ``v_body = C @ v_eci``.

    Examples:
        ```python
        import jax.numpy as jnp
        C = rotation_eci_to_body(jnp.array([0.0, 0.0, 0.0, 1.0]))
        ```
    """
    q = jnp.asarray(q, dtype=get_dtype())
    q1, q2, q3, q4 = q[0], q[1], q[2], q[3]

    return jnp.array([
        [q1*q1 - q2*q2 - q3*q3 + q4*q4,  2.0*(q1*q2 + q3*q4),            2.0*(q1*q3 - q2*q4)],
        [2.0*(q1*q2 - q3*q4),            q2*q2 - q1*q1 - q3*q3 + q4*q4,  2.0*(q2*q3 + q1*q4)],
        [2.0*(q1*q3 + q2*q4),            2.0*(q2*q3 - q1*q4),            q3*q3 - q1*q1 - q2*q2 + q4*q4],
    ])


def rotation_body_to_eci(q: ArrayLike) -> Array:
    """Transformation matrix from the body frame to ECI.

    Transpose of :func:`rotation_eci_to_body`.

    Args:
        q: Attitude quaternion ``[q1, q2, q3, q4]`` (scalar-last).

    Returns:
        jax.Array: ``(3, 3)`` matrix.
    """
    return rotation_eci_to_body(q).T


def body_frame(q: ArrayLike, reference: Frame | None = None) -> Frame:
    """Body axes for attitude *q*, expressed in the reference frame.

    Args:
        q: Attitude quaternion ``[q1, q2, q3, q4]`` (scalar-last).
        reference: Inertial reference frame.  Defaults to
            :func:`~flexspacecraft.frames.frame.eci_frame`.

    Returns:
        Frame: ``rotate(C_body_to_eci, reference)``.
    """
    if reference is None:
        reference = eci_frame()
    return rotate(rotation_body_to_eci(q), reference)


def quaternion_multiply(p: ArrayLike, q: ArrayLike) -> Array:
    """Hamilton product ``p ⊗ q`` of two scalar-last quaternions.

    Args:
        p: Left quaternion ``[p1, p2, p3, p4]``.
        q: Right quaternion ``[q1, q2, q3, q4]``.

    Returns:
        jax.Array: Product quaternion of shape ``(4,)``.  Not normalized.
    """
    _float = get_dtype()
    p = jnp.asarray(p, dtype=_float)
    q = jnp.asarray(q, dtype=_float)
    pv, ps = p[:3], p[3]
    qv, qs = q[:3], q[3]

    v = ps * qv + qs * pv + jnp.cross(pv, qv)
    s = ps * qs - jnp.dot(pv, qv)
    return jnp.concatenate([v, jnp.array([s])])


def quaternion_to_euler_angles(q: ArrayLike) -> Array:
    """3-2-1 Euler angles of the ECI to body rotation.

    The body frame is reached from ECI by a yaw ``psi`` about z, a pitch
    ``theta`` about the new y and a roll ``phi`` about the new x.

    Args:
        q: Attitude quaternion ``[q1, q2, q3, q4]`` (scalar-last).

    Returns:
        jax.Array: ``[phi, theta, psi]`` (roll, pitch, yaw) [rad].
    """
    C = rotation_eci_to_body(q)
    return jnp.array([
        jnp.arctan2(C[1, 2], C[2, 2]),
        -jnp.arcsin(jnp.clip(C[0, 2], -1.0, 1.0)),
        jnp.arctan2(C[0, 1], C[0, 0]),
    ])


# ──────────────────────────────────────────────
# Orbit-attached frames
# ──────────────────────────────────────────────


def rotation_lvlh_to_eci(x_eci: ArrayLike) -> Array:
    """Compute the rotation matrix from the LVLH frame to ECI.

    The columns of the returned matrix are the LVLH unit vectors
    expressed in ECI coordinates: ``[x_hat | y_hat | z_hat]``.

    Args:
        x_eci: 6-element ECI state ``[x, y, z, vx, vy, vz]``.
            Units: m, m/s.

    Returns:
        jax.Array: 3x3 rotation matrix (LVLH -> ECI).
    """
    x_eci = jnp.asarray(x_eci, dtype=get_dtype())

    r = x_eci[:3]
    v = x_eci[3:6]
    h = jnp.cross(r, v)

    z_hat = -r / jnp.linalg.norm(r)
    y_hat = -h / jnp.linalg.norm(h)
    x_hat = jnp.cross(y_hat, z_hat)

    return jnp.column_stack([x_hat, y_hat, z_hat])


def rotation_eci_to_lvlh(x_eci: ArrayLike) -> Array:
    """Compute the rotation matrix from ECI to the LVLH frame.

    This is the transpose of :func:`rotation_lvlh_to_eci`.

    Args:
        x_eci: 6-element ECI state ``[x, y, z, vx, vy, vz]``.

    Returns:
        jax.Array: 3x3 rotation matrix (ECI -> LVLH).
    """
    return rotation_lvlh_to_eci(x_eci).T


def lvlh_frame(x_eci: ArrayLike) -> Frame:
    """LVLH axes for the orbit state *x_eci*, expressed in ECI.

    Args:
        x_eci: 6-element ECI state ``[x, y, z, vx, vy, vz]``.

    Returns:
        Frame: LVLH triad.
    """
    return Frame._from_internal(rotation_eci_to_lvlh(x_eci))
