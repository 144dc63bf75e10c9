"""Orbit propagators synchronized with the attitude sampling clock.

A propagator advances the ECI state from ``t`` to ``t + samplingtime``,
where *samplingtime* is the attitude sampling period.  Internally it may
take several sub-steps of the orbit's own step size; the two periods
must be commensurate, which :func:`create_orbit_propagator` checks
before any integration starts.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable
from typing import NamedTuple

import jax
import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from flexspacecraft.errors import ConfigurationError
from flexspacecraft.integrators import rk4_step
from flexspacecraft.orbits.config import OrbitInfo
from flexspacecraft.orbits.keplerian import accel_point_mass, mean_motion, state_koe_to_eci

logger = logging.getLogger(__name__)

# Relative tolerance when testing that the periods divide evenly
_COMMENSURATE_RTOL = 1e-9


class OrbitPropagator(NamedTuple):
    """Orbit propagation closures bound to one :class:`OrbitInfo`.

    Attributes:
        initial_state: ECI state at ``t = 0``, shape ``(6,)``.
        advance: ``advance(t, state) -> state_next`` returning the ECI
            state one attitude sampling period after *t*.
        substeps: Orbit steps per attitude sampling period.
    """

    initial_state: Array
    advance: Callable[[ArrayLike, ArrayLike], Array]
    substeps: int


def _keplerian(info: OrbitInfo, samplingtime: float, substeps: int):
    elements = info.koe
    mu = info.mu
    n = mean_motion(elements[0], mu)

    def state_at(t):
        return state_koe_to_eci(elements.at[5].set(elements[5] + n * t), mu)

    def advance(t: ArrayLike, state: ArrayLike) -> Array:
        return state_at(t + samplingtime)

    return state_at(0.0), advance


def _two_body(info: OrbitInfo, samplingtime: float, substeps: int):
    mu = info.mu
    dt = samplingtime / substeps

    def dynamics(t, x):
        return jnp.concatenate([x[3:6], accel_point_mass(x[:3], mu)])

    def advance(t: ArrayLike, state: ArrayLike) -> Array:
        def body(i, x):
            return rk4_step(dynamics, t + i * dt, x, dt).state

        return jax.lax.fori_loop(0, substeps, body, state)

    return state_koe_to_eci(info.koe, mu), advance


ORBIT_MODELS = {
    "keplerian": _keplerian,
    "two_body": _two_body,
}
"""Propagator builders keyed by model name.

- ``"keplerian"``: analytic two-body motion, ``M(t) = M0 + n t``.
- ``"two_body"``: point-mass gravity integrated with RK4 sub-steps.
"""


def orbit_substeps(info: OrbitInfo, samplingtime: float) -> int:
    """Number of orbit steps per attitude sampling period.

    Raises:
        ConfigurationError: If the orbit step does not divide
            *samplingtime* into a whole number of sub-steps.
    """
    if info.samplingtime is None:
        return 1

    ratio = samplingtime / info.samplingtime
    substeps = math.floor(ratio + 0.5)
    if substeps < 1 or abs(ratio - substeps) > _COMMENSURATE_RTOL * max(ratio, 1.0):
        raise ConfigurationError(
            "orbitinfo.samplingtime",
            f"orbit step {info.samplingtime} s is not commensurate with the "
            f"attitude sampling period {samplingtime} s",
        )
    return substeps


def create_orbit_propagator(info: OrbitInfo, samplingtime: float) -> OrbitPropagator:
    """Build the propagator for *info* on the attitude clock.

    Args:
        info: Orbit definition.
        samplingtime: Attitude sampling period [s].

    Returns:
        OrbitPropagator: Initial state and ``advance`` closure.

    Raises:
        ConfigurationError: If the model is unknown or the orbit step is
            not commensurate with *samplingtime*.

    Examples:
        ```python
        orbit = OrbitInfo.circular(500e3, model="two_body", samplingtime=0.5)
        propagator = create_orbit_propagator(orbit, 1.0)
        x1 = propagator.advance(0.0, propagator.initial_state)
        ```
    """
    try:
        builder = ORBIT_MODELS[info.model]
    except KeyError:
        raise ConfigurationError(
            "orbitinfo.model",
            f"unknown orbit model '{info.model}', expected one of {sorted(ORBIT_MODELS)}",
        ) from None

    substeps = orbit_substeps(info, samplingtime)
    logger.debug(
        "Orbit model '%s': %d sub-step(s) of %g s per attitude step",
        info.model, substeps, samplingtime / substeps,
    )

    initial_state, advance = builder(info, samplingtime, substeps)
    return OrbitPropagator(initial_state=initial_state, advance=advance, substeps=substeps)
