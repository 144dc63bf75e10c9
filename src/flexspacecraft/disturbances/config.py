"""Disturbance torque configuration.

:class:`DisturbanceConfig` toggles the individual disturbance models.
Configuration is static: the aggregator built from it by
:func:`~flexspacecraft.disturbances.factory.create_disturbance_torque`
resolves each toggle with a Python ``if`` at trace time, so a disabled
model is never evaluated.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import jax.numpy as jnp
from jax import Array

from flexspacecraft.config import get_dtype
from flexspacecraft.constants import GM_EARTH
from flexspacecraft.errors import ConfigurationError


@dataclass(frozen=True)
class DisturbanceConfig:
    """Enabled disturbance torque models and their parameters.

    Args:
        gravity_gradient: Enable the gravity gradient torque.
        constant_torque: Body-frame torque applied at every step [N m],
            or ``None`` to disable.
        mu: Gravitational parameter used by the gravity gradient model
            [m^3/s^2].

    Examples:
        ```python
        config = DisturbanceConfig(gravity_gradient=True)
        config.enabled_models()
        ```
    """

    gravity_gradient: bool = False
    constant_torque: Array | None = None
    mu: float = GM_EARTH

    def __post_init__(self) -> None:
        if not isinstance(self.gravity_gradient, bool):
            raise ConfigurationError(
                "distconfig.gravitygradient",
                f"expected a bool, got {type(self.gravity_gradient).__name__}",
            )
        if self.constant_torque is not None:
            torque = jnp.asarray(self.constant_torque, dtype=get_dtype())
            if torque.shape != (3,):
                raise ConfigurationError(
                    "distconfig.constanttorque", f"expected shape (3,), got {torque.shape}"
                )
            if not bool(jnp.all(jnp.isfinite(torque))):
                raise ConfigurationError("distconfig.constanttorque", "contains non-finite values")
            object.__setattr__(self, "constant_torque", torque)
        if not self.mu > 0.0:
            raise ConfigurationError("distconfig.mu", f"must be positive, got {self.mu}")

    @staticmethod
    def none() -> DisturbanceConfig:
        """Preset: every disturbance model disabled."""
        return DisturbanceConfig()

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> DisturbanceConfig:
        """Build a configuration from loader output.

        Keys are the registry names of
        :data:`~flexspacecraft.disturbances.models.DISTURBANCE_MODELS`.
        ``gravitygradient`` takes a bool; ``constanttorque`` takes a
        3-vector, or ``None``/``False`` to disable.

        Args:
            mapping: e.g. ``{"gravitygradient": True}``.

        Returns:
            DisturbanceConfig: Parsed configuration.

        Raises:
            ConfigurationError: On an unknown key or a malformed value.

        Examples:
            ```python
            config = DisturbanceConfig.from_mapping(
                {"gravitygradient": True, "constanttorque": [0.0, 0.0, 1e-4]}
            )
            ```
        """
        known = ("gravitygradient", "constanttorque", "mu")
        for key in mapping:
            if key not in known:
                raise ConfigurationError(
                    f"distconfig.{key}", f"unknown disturbance model, expected one of {list(known)}"
                )

        constant_torque = mapping.get("constanttorque")
        if constant_torque is False:
            constant_torque = None

        return cls(
            gravity_gradient=mapping.get("gravitygradient", False),
            constant_torque=constant_torque,
            mu=mapping.get("mu", GM_EARTH),
        )

    def enabled_models(self) -> list[str]:
        """Registry names of the enabled models, in summation order."""
        names = []
        if self.gravity_gradient:
            names.append("gravitygradient")
        if self.constant_torque is not None:
            names.append("constanttorque")
        return names
