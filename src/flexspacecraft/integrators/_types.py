"""Type definitions for numerical integrators.

:class:`StepResult` is the output of every step function.  It is a
:class:`~typing.NamedTuple`, which JAX treats as a pytree automatically,
so it works with ``jax.jit`` and the ``jax.lax`` control flow primitives.
"""

from __future__ import annotations

from typing import NamedTuple

from jax import Array


class StepResult(NamedTuple):
    """Result of a single fixed-step integrator step.

    Attributes:
        state: State vector at time ``t + dt``.
        dt_used: Timestep taken.  Always equals the requested ``dt``.
    """

    state: Array
    dt_used: Array
