"""Disturbance torque aggregator factory."""

from __future__ import annotations

from collections.abc import Callable

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from flexspacecraft.config import get_dtype
from flexspacecraft.disturbances.config import DisturbanceConfig
from flexspacecraft.disturbances.models import DISTURBANCE_MODELS


def create_disturbance_torque(
    config: DisturbanceConfig | None,
    inertia: ArrayLike,
) -> Callable[[ArrayLike, ArrayLike, ArrayLike, ArrayLike], Array]:
    """Create the combined disturbance torque function.

    Returns a closure ``torque(t, q, omega, orbit_state) -> tau`` equal to
    the sum of every enabled model evaluated at the same instant.  The
    set of enabled models is fixed when the closure is built, so a
    disabled model contributes exactly zero and is never evaluated.

    Args:
        config: Disturbance configuration.  ``None`` disables everything.
        inertia: Spacecraft inertia tensor of shape ``(3, 3)`` [kg m^2].

    Returns:
        A callable ``torque(t, q, omega, orbit_state) -> tau`` where:

        - *t*: simulation time [s].
        - *q*: attitude quaternion ``[q1, q2, q3, q4]``.
        - *omega*: body angular velocity [rad/s].
        - *orbit_state*: ECI ``[x, y, z, vx, vy, vz]`` [m, m/s].
        - *tau*: total body-frame torque of shape ``(3,)`` [N m].

    Examples:
        ```python
        import jax.numpy as jnp
        from flexspacecraft.disturbances import DisturbanceConfig
        torque = create_disturbance_torque(
            DisturbanceConfig(gravity_gradient=True), jnp.diag(jnp.array([10.0, 20.0, 30.0]))
        )
        tau = torque(0.0, jnp.array([0.0, 0.0, 0.0, 1.0]), jnp.zeros(3),
                     jnp.array([7000e3, 0.0, 0.0, 0.0, 7546.0, 0.0]))
        ```
    """
    if config is None:
        config = DisturbanceConfig.none()

    _I = jnp.asarray(inertia, dtype=get_dtype())
    _models = [DISTURBANCE_MODELS[name](config, _I) for name in config.enabled_models()]

    def torque(t: ArrayLike, q: ArrayLike, omega: ArrayLike, orbit_state: ArrayLike) -> Array:
        tau = jnp.zeros(3, dtype=get_dtype())
        for model in _models:
            tau = tau + model(t, q, omega, orbit_state)
        return tau

    return torque
