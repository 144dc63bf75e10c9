"""Two-body orbital mechanics used by the orbit propagators.

Element ordering is ``[a, e, i, RAAN, omega, M]``:

| Index | Element                       | Units         |
|-------|-------------------------------|---------------|
| 0     | *a* — semi-major axis         | m             |
| 1     | *e* — eccentricity            | dimensionless |
| 2     | *i* — inclination             | rad           |
| 3     | *Ω* — right ascension (RAAN)  | rad           |
| 4     | *ω* — argument of perigee     | rad           |
| 5     | *M* — mean anomaly            | rad           |

All functions use JAX operations and are compatible with ``jax.jit``.
The Kepler equation solver runs a fixed number of Newton-Raphson
iterations in ``jax.lax.fori_loop``.

References:
    1. O. Montenbruck and E. Gill, *Satellite Orbits: Models, Methods
       and Applications*, Springer, 2012, Sec. 2.2.
"""

from __future__ import annotations

import jax
import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from flexspacecraft.config import get_dtype
from flexspacecraft.constants import GM_EARTH

# ──────────────────────────────────────────────
# Period and mean motion
# ──────────────────────────────────────────────


def orbital_period(a: ArrayLike, mu: float = GM_EARTH) -> Array:
    """Compute the orbital period.

    Args:
        a: Semi-major axis. Units: *m*
        mu: Gravitational parameter. Units: *m^3/s^2*

    Returns:
        Orbital period. Units: *s*

    Examples:
        ```python
        from flexspacecraft.constants import R_EARTH
        T = orbital_period(R_EARTH + 500e3)
        ```
    """
    a = jnp.asarray(a, dtype=get_dtype())
    return 2.0 * jnp.pi * jnp.sqrt(a**3 / mu)


def mean_motion(a: ArrayLike, mu: float = GM_EARTH) -> Array:
    """Compute the mean motion.

    Args:
        a: Semi-major axis. Units: *m*
        mu: Gravitational parameter. Units: *m^3/s^2*

    Returns:
        Mean motion. Units: *rad/s*
    """
    a = jnp.asarray(a, dtype=get_dtype())
    return jnp.sqrt(mu / a**3)


# ──────────────────────────────────────────────
# Kepler's equation
# ──────────────────────────────────────────────


def anomaly_mean_to_eccentric(anm_mean: ArrayLike, e: ArrayLike) -> Array:
    """Convert mean anomaly to eccentric anomaly.

    Solves Kepler's equation ``M = E - e * sin(E)`` for ``E``.

    Args:
        anm_mean: Mean anomaly. Units: *rad*
        e: Eccentricity. Dimensionless.

    Returns:
        Eccentric anomaly in ``[0, 2pi)`` for ``e = 0``. Units: *rad*
    """
    _float = get_dtype()
    M = jnp.asarray(anm_mean, dtype=_float) % (2.0 * jnp.pi)
    e = jnp.asarray(e, dtype=_float)

    # Initial guess: M for low eccentricity, pi for high eccentricity
    E0 = jnp.where(e < 0.8, M, jnp.pi)

    def newton_step(_, E):
        f = E - e * jnp.sin(E) - M
        return E - f / (1.0 - e * jnp.cos(E))

    return jax.lax.fori_loop(0, 10, newton_step, E0)


# ──────────────────────────────────────────────
# Elements to Cartesian state
# ──────────────────────────────────────────────


def state_koe_to_eci(x_oe: ArrayLike, mu: float = GM_EARTH) -> Array:
    """Convert Keplerian orbital elements to an ECI Cartesian state vector.

    Solves Kepler's equation for the eccentric anomaly, then constructs
    position and velocity from the perifocal P and Q vectors
    (Montenbruck & Gill Eq. 2.43–2.44).

    Args:
        x_oe: Orbital elements ``[a, e, i, RAAN, omega, M]`` in *m* and *rad*.
        mu: Gravitational parameter. Units: *m^3/s^2*

    Returns:
        ECI state ``[x, y, z, vx, vy, vz]`` in *m* and *m/s*.

    Examples:
        ```python
        import jax.numpy as jnp
        from flexspacecraft.constants import R_EARTH
        state = state_koe_to_eci(jnp.array([R_EARTH + 500e3, 0.0, 0.0, 0.0, 0.0, 0.0]))
        ```
    """
    x_oe = jnp.asarray(x_oe, dtype=get_dtype())
    a, e, i, raan, omega, M = (x_oe[k] for k in range(6))

    E = anomaly_mean_to_eccentric(M, e)

    cos_o = jnp.cos(omega)
    sin_o = jnp.sin(omega)
    cos_R = jnp.cos(raan)
    sin_R = jnp.sin(raan)
    cos_i = jnp.cos(i)
    sin_i = jnp.sin(i)

    P = jnp.array([
        cos_o * cos_R - sin_o * cos_i * sin_R,
        cos_o * sin_R + sin_o * cos_i * cos_R,
        sin_o * sin_i,
    ])
    Q = jnp.array([
        -sin_o * cos_R - cos_o * cos_i * sin_R,
        -sin_o * sin_R + cos_o * cos_i * cos_R,
        cos_o * sin_i,
    ])

    cos_E = jnp.cos(E)
    sin_E = jnp.sin(E)
    sqrt_1me2 = jnp.sqrt(1.0 - e * e)

    r_vec = a * (cos_E - e) * P + a * sqrt_1me2 * sin_E * Q
    r_mag = jnp.linalg.norm(r_vec)
    v_vec = (jnp.sqrt(mu * a) / r_mag) * (-sin_E * P + sqrt_1me2 * cos_E * Q)

    return jnp.concatenate([r_vec, v_vec])


def accel_point_mass(r: ArrayLike, mu: float = GM_EARTH) -> Array:
    """Two-body acceleration ``-mu * r / |r|^3`` of a central point mass.

    Args:
        r: Position [m].  Shape ``(3,)`` or ``(6,)`` (first 3 elements used).
        mu: Gravitational parameter [m^3/s^2].

    Returns:
        Acceleration [m/s^2], shape ``(3,)``.
    """
    r = jnp.asarray(r, dtype=get_dtype())[:3]
    return -mu * r / jnp.linalg.norm(r) ** 3
