"""Disturbance torque models and their registry.

Every model evaluates ``model(t, q, omega, orbit_state) -> torque`` with
the torque expressed in the body frame [N m].  Models are independent
of each other; the aggregator sums the enabled ones.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from flexspacecraft.config import get_dtype
from flexspacecraft.constants import GM_EARTH
from flexspacecraft.disturbances.config import DisturbanceConfig
from flexspacecraft.disturbances.gravity_gradient import torque_gravity_gradient


@dataclass(frozen=True)
class GravityGradientTorque:
    """Gravity gradient torque of a rigid body with inertia *I*."""

    I: Array  # noqa: E741
    mu: float = GM_EARTH

    def __call__(self, t: ArrayLike, q: ArrayLike, omega: ArrayLike,
                 orbit_state: ArrayLike) -> Array:
        return torque_gravity_gradient(q, orbit_state[:3], self.I, self.mu)


@dataclass(frozen=True)
class ConstantTorque:
    """Fixed body-frame torque, independent of state and time."""

    torque: Array

    def __call__(self, t: ArrayLike, q: ArrayLike, omega: ArrayLike,
                 orbit_state: ArrayLike) -> Array:
        return jnp.asarray(self.torque, dtype=get_dtype())


DisturbanceModel = Callable[[ArrayLike, ArrayLike, ArrayLike, ArrayLike], Array]

DISTURBANCE_MODELS: dict[str, Callable[[DisturbanceConfig, Array], DisturbanceModel]] = {
    "gravitygradient": lambda config, I: GravityGradientTorque(I=I, mu=config.mu),
    "constanttorque": lambda config, I: ConstantTorque(torque=config.constant_torque),
}
"""Builders keyed by configuration name, each taking ``(config, inertia)``."""
