"""Core rigid-body attitude dynamics equations.

Provides pure JAX functions for quaternion kinematics and Euler's
rotational equation of motion:

- :func:`quaternion_derivative` -- quaternion time-derivative from
  angular velocity, ``q_dot = 0.5 * q ⊗ [omega, 0]``.
- :func:`euler_equation` -- angular acceleration from Euler's equation
  with external torque.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from flexspacecraft.config import get_dtype


def quaternion_derivative(q: ArrayLike, omega: ArrayLike) -> Array:
    """Compute the quaternion time-derivative from angular velocity.

    Uses the 4x4 Omega matrix form of ``0.5 * q ⊗ [omega, 0]``::

        q_dot = 0.5 * Omega(omega) @ q

    where, for scalar-last ``[q1, q2, q3, q4]`` quaternions::

            [  0    wz  -wy   wx ]
        O = [ -wz   0    wx   wy ]
            [  wy  -wx   0    wz ]
            [ -wx  -wy  -wz   0  ]

    Args:
        q: Unit quaternion ``[q1, q2, q3, q4]`` of shape ``(4,)``.
        omega: Angular velocity in the body frame ``[wx, wy, wz]``
            of shape ``(3,)`` [rad/s].

    Returns:
        Quaternion derivative of shape ``(4,)``.

    Examples:
        ```python
        import jax.numpy as jnp
        q = jnp.array([0.0, 0.0, 0.0, 1.0])  # identity
        omega = jnp.array([0.0, 0.0, 0.1])    # yaw rate
        q_dot = quaternion_derivative(q, omega)
        ```
    """
    _float = get_dtype()
    q = jnp.asarray(q, dtype=_float)
    omega = jnp.asarray(omega, dtype=_float)

    wx, wy, wz = omega[0], omega[1], omega[2]

    Omega = jnp.array([
        [0.0, wz, -wy, wx],
        [-wz, 0.0, wx, wy],
        [wy, -wx, 0.0, wz],
        [-wx, -wy, -wz, 0.0],
    ], dtype=_float)

    return 0.5 * Omega @ q


def euler_equation(
    omega: ArrayLike,
    I: ArrayLike,  # noqa: E741
    tau: ArrayLike,
) -> Array:
    """Compute angular acceleration from Euler's rotational equation.

    Euler's equation for a rigid body::

        I @ omega_dot = tau - omega x (I @ omega)

    Uses ``jnp.linalg.solve`` instead of an explicit inverse.

    Args:
        omega: Angular velocity in the body frame ``[wx, wy, wz]``
            of shape ``(3,)`` [rad/s].
        I: Inertia tensor of shape ``(3, 3)`` [kg m^2].
        tau: Total external torque in the body frame ``[tx, ty, tz]``
            of shape ``(3,)`` [N m].

    Returns:
        Angular acceleration ``[dwx, dwy, dwz]``
            of shape ``(3,)`` [rad/s^2].
    """
    _float = get_dtype()
    omega = jnp.asarray(omega, dtype=_float)
    I = jnp.asarray(I, dtype=_float)  # noqa: E741
    tau = jnp.asarray(tau, dtype=_float)

    rhs = tau - jnp.cross(omega, I @ omega)
    return jnp.linalg.solve(I, rhs)
