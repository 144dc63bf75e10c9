"""Spacecraft dynamics models.

A dynamics model carries the physical parameters the rotational equation
of motion needs.  Models are selected by name through
:func:`create_dynamics_model`, which looks the name up in the
:data:`DYNAMICS_MODELS` registry; loaders map a configuration key onto
that name.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from flexspacecraft.attitude_dynamics.euler_dynamics import euler_equation
from flexspacecraft.config import get_dtype
from flexspacecraft.errors import ConfigurationError


@dataclass(frozen=True)
class SpacecraftInertia:
    """Rigid-body inertia tensor of the spacecraft.

    Stores the 3x3 inertia tensor in the body frame.  For most
    spacecraft the tensor is diagonal (principal axes aligned with body
    axes) and can be constructed with :meth:`from_principal`.

    Args:
        I: 3x3 inertia tensor [kg m^2].  Must be symmetric and positive
            definite.

    Raises:
        ConfigurationError: If the tensor is malformed.

    Examples:
        ```python
        inertia = SpacecraftInertia.from_principal(100.0, 200.0, 300.0)
        inertia.I.shape
        ```
    """

    I: Array = field(default_factory=lambda: jnp.eye(3, dtype=get_dtype()))  # noqa: E741

    def __post_init__(self) -> None:
        I = jnp.asarray(self.I, dtype=get_dtype())  # noqa: E741
        if I.shape != (3, 3):
            raise ConfigurationError("model.inertia", f"expected shape (3, 3), got {I.shape}")
        if not bool(jnp.all(jnp.isfinite(I))):
            raise ConfigurationError("model.inertia", "contains non-finite values")
        if not bool(jnp.allclose(I, I.T)):
            raise ConfigurationError("model.inertia", "must be symmetric")
        if not bool(jnp.all(jnp.linalg.eigvalsh(I) > 0.0)):
            raise ConfigurationError("model.inertia", "must be positive definite")
        object.__setattr__(self, "I", I)

    @staticmethod
    def from_principal(Ixx: float, Iyy: float, Izz: float) -> SpacecraftInertia:
        """Create an inertia tensor from principal moments.

        Args:
            Ixx: Moment of inertia about the body x-axis [kg m^2].
            Iyy: Moment of inertia about the body y-axis [kg m^2].
            Izz: Moment of inertia about the body z-axis [kg m^2].

        Returns:
            SpacecraftInertia: Diagonal inertia tensor.
        """
        _float = get_dtype()
        I = jnp.diag(jnp.array([Ixx, Iyy, Izz], dtype=_float))  # noqa: E741
        return SpacecraftInertia(I=I)


@dataclass(frozen=True)
class RigidBodyModel:
    """Rigid spacecraft: the attitude state is driven by Euler's equation only.

    Args:
        inertia: Spacecraft inertia tensor.
    """

    inertia: SpacecraftInertia = field(default_factory=SpacecraftInertia)

    def angular_acceleration(self, omega: ArrayLike, torque: ArrayLike) -> Array:
        """Body angular acceleration under *torque* [rad/s^2]."""
        return euler_equation(omega, self.inertia.I, torque)


def _rigid_body(inertia: ArrayLike | SpacecraftInertia | None = None) -> RigidBodyModel:
    if inertia is None:
        return RigidBodyModel()
    if not isinstance(inertia, SpacecraftInertia):
        inertia = SpacecraftInertia(I=jnp.asarray(inertia, dtype=get_dtype()))
    return RigidBodyModel(inertia=inertia)


DYNAMICS_MODELS: dict[str, Callable[..., RigidBodyModel]] = {
    "rigid_body": _rigid_body,
}


def create_dynamics_model(kind: str = "rigid_body", **params) -> RigidBodyModel:
    """Build a dynamics model from its registry name and parameters.

    Args:
        kind: Registry key, e.g. ``"rigid_body"``.
        **params: Model parameters, e.g. ``inertia`` as a 3x3 array or
            :class:`SpacecraftInertia`.

    Returns:
        The constructed model.

    Raises:
        ConfigurationError: If *kind* is not registered.

    Examples:
        ```python
        model = create_dynamics_model(
            "rigid_body", inertia=[[10, 0, 0], [0, 20, 0], [0, 0, 30]]
        )
        ```
    """
    try:
        factory = DYNAMICS_MODELS[kind]
    except KeyError:
        raise ConfigurationError(
            "model.kind",
            f"unknown dynamics model '{kind}', expected one of {sorted(DYNAMICS_MODELS)}",
        ) from None
    return factory(**params)
