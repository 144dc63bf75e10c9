"""Attitude dynamics closures and the per-step integration policy.

:func:`create_attitude_dynamics` closes a dynamics model and a torque
over the 7-element attitude state ``[q1, q2, q3, q4, wx, wy, wz]``,
producing a ``dynamics(t, x) -> dx`` function accepted by every
integrator in :mod:`flexspacecraft.integrators`.

:func:`create_attitude_stepper` wraps one integrator into the step
policy used by the simulation driver: it consumes
``(q, omega, torque, dt)`` and returns the renormalized ``(q, omega)``
one step later.  The torque is held constant over the step.
"""

from __future__ import annotations

from collections.abc import Callable

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from flexspacecraft.attitude_dynamics.euler_dynamics import quaternion_derivative
from flexspacecraft.attitude_dynamics.models import RigidBodyModel
from flexspacecraft.attitude_dynamics.utils import normalize_attitude_state
from flexspacecraft.errors import ConfigurationError
from flexspacecraft.integrators import INTEGRATORS

AttitudeStepper = Callable[[ArrayLike, ArrayLike, ArrayLike, ArrayLike], tuple[Array, Array]]


def create_attitude_dynamics(
    model: RigidBodyModel,
    torque: ArrayLike,
) -> Callable[[ArrayLike, ArrayLike], Array]:
    """Create the attitude equations of motion under a constant torque.

    Args:
        model: Dynamics model supplying the inertia tensor.
        torque: Body-frame torque applied over the step [N m].

    Returns:
        A callable ``dynamics(t, x) -> dx`` where *x* is
        ``[q1, q2, q3, q4, wx, wy, wz]``.

    Examples:
        ```python
        import jax.numpy as jnp
        from flexspacecraft.attitude_dynamics import RigidBodyModel, SpacecraftInertia
        from flexspacecraft.integrators import rk4_step
        model = RigidBodyModel(SpacecraftInertia.from_principal(10.0, 20.0, 30.0))
        dynamics = create_attitude_dynamics(model, jnp.zeros(3))
        x0 = jnp.array([0.0, 0.0, 0.0, 1.0, 0.0, 0.0, 0.1])
        result = rk4_step(dynamics, 0.0, x0, 0.01)
        ```
    """

    def dynamics(t: ArrayLike, x: ArrayLike) -> Array:
        q = x[:4]
        omega = x[4:7]
        q_dot = quaternion_derivative(q, omega)
        omega_dot = model.angular_acceleration(omega, torque)
        return jnp.concatenate([q_dot, omega_dot])

    return dynamics


def create_attitude_stepper(model: RigidBodyModel, method: str = "rk4") -> AttitudeStepper:
    """Create the per-step attitude integration policy.

    Args:
        model: Dynamics model.
        method: Integrator name, a key of
            :data:`~flexspacecraft.integrators.INTEGRATORS`.

    Returns:
        A callable ``step(q, omega, torque, dt) -> (q_next, omega_next)``
        with ``q_next`` renormalized to unit norm.

    Raises:
        ConfigurationError: If *method* is not a known integrator.
    """
    try:
        step_fn = INTEGRATORS[method]
    except KeyError:
        raise ConfigurationError(
            "simconfig.method",
            f"unknown integrator '{method}', expected one of {sorted(INTEGRATORS)}",
        ) from None

    def step(q: ArrayLike, omega: ArrayLike, torque: ArrayLike, dt: ArrayLike) -> tuple[Array, Array]:
        dynamics = create_attitude_dynamics(model, torque)
        x = jnp.concatenate([jnp.asarray(q), jnp.asarray(omega)])
        x_next = normalize_attitude_state(step_fn(dynamics, 0.0, x, dt).state)
        return x_next[:4], x_next[4:7]

    return step
