"""Explicit (forward) Euler integrator.

First-order, single-stage fixed-step method:

.. math::

    x_{k+1} = x_k + h \\, f(t_k, x_k)

Mainly useful as a cheap reference and for step-size studies; the global
error is :math:`O(h)`.
"""

from __future__ import annotations

from collections.abc import Callable

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from flexspacecraft.config import get_dtype
from flexspacecraft.integrators._types import StepResult


def euler_step(
    dynamics: Callable[[ArrayLike, ArrayLike], Array],
    t: ArrayLike,
    state: ArrayLike,
    dt: ArrayLike,
) -> StepResult:
    """Perform a single forward Euler step.

    Args:
        dynamics: ODE right-hand side function ``f(t, x) -> dx/dt``.
        t: Current time.
        state: Current state vector.
        dt: Timestep to take.

    Returns:
        StepResult: Named tuple with the state at ``t + dt`` and the
            timestep used.
    """
    dtype = get_dtype()
    t = jnp.asarray(t, dtype=dtype)
    state = jnp.asarray(state, dtype=dtype)
    dt = jnp.asarray(dt, dtype=dtype)

    return StepResult(state=state + dt * dynamics(t, state), dt_used=dt)
