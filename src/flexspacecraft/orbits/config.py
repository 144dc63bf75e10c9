"""Orbit definition consumed by the orbit propagators."""

from __future__ import annotations

import math
from dataclasses import dataclass

import jax.numpy as jnp
from jax import Array

from flexspacecraft.config import get_dtype
from flexspacecraft.constants import GM_EARTH, R_EARTH
from flexspacecraft.errors import ConfigurationError


@dataclass(frozen=True)
class OrbitInfo:
    """Initial orbit and propagation model.

    Args:
        elements: Keplerian elements at ``t = 0``,
            ``[a, e, i, RAAN, omega, M]``.  Semi-major axis in *m*,
            angles in *rad* (or *deg* if ``use_degrees=True``).
        model: Propagation model, a key of
            :data:`~flexspacecraft.orbits.propagators.ORBIT_MODELS`.
        samplingtime: Internal step of the orbit propagator [s].  Must
            divide the attitude sampling period into an integer number
            of sub-steps.  ``None`` uses the attitude sampling period.
        mu: Gravitational parameter of the central body [m^3/s^2].
        use_degrees: Interpret angular elements as degrees.

    Raises:
        ConfigurationError: If the elements do not describe a closed orbit
            or the sampling time is not positive.

    Examples:
        ```python
        orbit = OrbitInfo.circular(500e3, inclination=97.4, use_degrees=True)
        orbit.period
        ```
    """

    elements: Array
    model: str = "keplerian"
    samplingtime: float | None = None
    mu: float = GM_EARTH
    use_degrees: bool = False

    def __post_init__(self) -> None:
        oe = jnp.asarray(self.elements, dtype=get_dtype())
        if oe.shape != (6,):
            raise ConfigurationError("orbitinfo.elements", f"expected shape (6,), got {oe.shape}")
        if not bool(jnp.all(jnp.isfinite(oe))):
            raise ConfigurationError("orbitinfo.elements", "contains non-finite values")
        if not float(oe[0]) > 0.0:
            raise ConfigurationError(
                "orbitinfo.elements", f"semi-major axis must be positive, got {float(oe[0])}"
            )
        if not 0.0 <= float(oe[1]) < 1.0:
            raise ConfigurationError(
                "orbitinfo.elements", f"eccentricity must be in [0, 1), got {float(oe[1])}"
            )
        if self.samplingtime is not None and not (
            math.isfinite(self.samplingtime) and self.samplingtime > 0.0
        ):
            raise ConfigurationError(
                "orbitinfo.samplingtime", f"must be positive and finite, got {self.samplingtime}"
            )
        if not self.mu > 0.0:
            raise ConfigurationError("orbitinfo.mu", f"must be positive, got {self.mu}")

        object.__setattr__(self, "elements", oe)

    @staticmethod
    def circular(
        altitude: float,
        inclination: float = 0.0,
        raan: float = 0.0,
        arg_latitude: float = 0.0,
        model: str = "keplerian",
        samplingtime: float | None = None,
        use_degrees: bool = False,
    ) -> OrbitInfo:
        """Preset: circular Earth orbit.

        Args:
            altitude: Altitude above the Earth's equatorial radius [m].
            inclination: Inclination.
            raan: Right ascension of the ascending node.
            arg_latitude: Argument of latitude at ``t = 0``.
            model: Propagation model name.
            samplingtime: Orbit propagator step [s].
            use_degrees: Interpret angles as degrees.

        Returns:
            OrbitInfo: Circular orbit definition.
        """
        elements = [R_EARTH + altitude, 0.0, inclination, raan, 0.0, arg_latitude]
        return OrbitInfo(
            elements=elements,
            model=model,
            samplingtime=samplingtime,
            use_degrees=use_degrees,
        )

    @property
    def koe(self) -> Array:
        """Elements with angles in radians."""
        if self.use_degrees:
            return self.elements.at[2:].set(jnp.deg2rad(self.elements[2:]))
        return self.elements

    @property
    def period(self) -> float:
        """Orbital period [s]."""
        a = float(self.elements[0])
        return 2.0 * math.pi * math.sqrt(a**3 / self.mu)
