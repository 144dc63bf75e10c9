"""Post-run evaluation of attitude trajectories.

Helpers applied to the arrays returned by the trajectory containers,
e.g. ``result.attitude.quaternion()``:

- :func:`quaternion_constraint` -- unit-norm check over every sample
- :func:`angular_momentum` -- body angular momentum ``I @ omega``
- :func:`euler_angles` -- 3-2-1 Euler angles of every sample
"""

from __future__ import annotations

import jax
import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from flexspacecraft.config import get_dtype, get_quaternion_tolerance
from flexspacecraft.frames import quaternion_to_euler_angles


def quaternion_constraint(quaternions: ArrayLike, tol: float | None = None) -> bool:
    """Check that every quaternion sample has unit norm.

    Args:
        quaternions: Quaternion history of shape ``(N, 4)`` (or a single
            quaternion of shape ``(4,)``).
        tol: Absolute tolerance on ``| ||q|| - 1 |``.  Defaults to
            :func:`~flexspacecraft.config.get_quaternion_tolerance`.

    Returns:
        bool: ``True`` if all samples satisfy the constraint.

    Examples:
        ```python
        time, attitude, orbit = run_simulation(...)
        assert quaternion_constraint(attitude.quaternion())
        ```
    """
    if tol is None:
        tol = get_quaternion_tolerance()
    q = jnp.atleast_2d(jnp.asarray(quaternions, dtype=get_dtype()))
    norms = jnp.linalg.norm(q, axis=-1)
    return bool(jnp.all(jnp.abs(norms - 1.0) <= tol))


def angular_momentum(angular_velocity: ArrayLike, inertia: ArrayLike) -> Array:
    """Body-frame angular momentum ``I @ omega`` of every sample.

    Args:
        angular_velocity: Shape ``(N, 3)`` [rad/s].
        inertia: Inertia tensor of shape ``(3, 3)`` [kg m^2].

    Returns:
        jax.Array: Shape ``(N, 3)`` [kg m^2/s].
    """
    _float = get_dtype()
    w = jnp.asarray(angular_velocity, dtype=_float)
    I = jnp.asarray(inertia, dtype=_float)  # noqa: E741
    return w @ I.T


def euler_angles(quaternions: ArrayLike) -> Array:
    """Roll, pitch and yaw of every quaternion sample.

    Args:
        quaternions: Quaternion history of shape ``(N, 4)``.

    Returns:
        jax.Array: Shape ``(N, 3)``, columns ``[roll, pitch, yaw]`` [rad].
    """
    q = jnp.asarray(quaternions, dtype=get_dtype())
    return jax.vmap(quaternion_to_euler_angles)(q)
