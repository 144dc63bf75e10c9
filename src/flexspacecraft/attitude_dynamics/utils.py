"""Helpers for keeping the attitude state consistent during integration."""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from flexspacecraft.config import get_dtype


def normalize_attitude_state(state: ArrayLike) -> Array:
    """Renormalize the quaternion portion of an attitude state vector.

    Explicit integration lets the quaternion norm drift from unity.
    This divides the quaternion (elements 0--3) by its norm and leaves
    the angular velocity (elements 4--6) unchanged.

    Args:
        state: Attitude state ``[q1, q2, q3, q4, wx, wy, wz]``
            of shape ``(7,)``.

    Returns:
        State with normalized quaternion, shape ``(7,)``.
    """
    state = jnp.asarray(state, dtype=get_dtype())

    q = state[:4]
    return jnp.concatenate([q / jnp.linalg.norm(q), state[4:7]])
