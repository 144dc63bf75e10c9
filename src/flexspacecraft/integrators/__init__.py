"""Fixed-step numerical ODE integrators.

Implemented in JAX for compatibility with ``jax.jit`` and ``jax.lax``
loops.

Available integrators:

- :func:`rk4_step` -- Classic 4th-order Runge-Kutta
- :func:`euler_step` -- Explicit Euler

All step functions share a common interface::

    result = step_fn(dynamics, t, state, dt)

where ``dynamics(t, x) -> dx`` defines the ODE right-hand side, and the
result is a :class:`StepResult` named tuple.  :data:`INTEGRATORS` maps
the method names accepted by the simulation configuration onto the step
functions.
"""

from flexspacecraft.integrators._types import StepResult
from flexspacecraft.integrators.euler import euler_step
from flexspacecraft.integrators.rk4 import rk4_step

INTEGRATORS = {
    "rk4": rk4_step,
    "euler": euler_step,
}

__all__ = [
    "StepResult",
    "INTEGRATORS",
    "rk4_step",
    "euler_step",
]
