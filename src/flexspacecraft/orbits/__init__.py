"""Orbit definition and propagation.

- **Keplerian mechanics**: period, mean motion, Kepler's equation,
  element to ECI state conversion
- **Config**: :class:`OrbitInfo`
- **Propagators**: :data:`ORBIT_MODELS` and :func:`create_orbit_propagator`
"""

from .config import OrbitInfo
from .keplerian import (
    accel_point_mass,
    anomaly_mean_to_eccentric,
    mean_motion,
    orbital_period,
    state_koe_to_eci,
)
from .propagators import (
    ORBIT_MODELS,
    OrbitPropagator,
    create_orbit_propagator,
    orbit_substeps,
)

__all__ = [
    # Keplerian mechanics
    "orbital_period",
    "mean_motion",
    "anomaly_mean_to_eccentric",
    "state_koe_to_eci",
    "accel_point_mass",
    # Config
    "OrbitInfo",
    # Propagators
    "ORBIT_MODELS",
    "OrbitPropagator",
    "create_orbit_propagator",
    "orbit_substeps",
]
