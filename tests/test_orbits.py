"""Tests for the orbits module.

Tests cover:
- Keplerian helpers (period, mean motion, Kepler's equation)
- Element to ECI state conversion
- OrbitInfo validation and presets
- Propagators (analytic and numerical) and their agreement
- Commensurability of orbit and attitude sampling periods
"""

import logging
import math

import jax.numpy as jnp
import pytest

from flexspacecraft.constants import GM_EARTH, R_EARTH
from flexspacecraft.errors import ConfigurationError
from flexspacecraft.orbits import (
    ORBIT_MODELS,
    OrbitInfo,
    anomaly_mean_to_eccentric,
    create_orbit_propagator,
    mean_motion,
    orbit_substeps,
    orbital_period,
    state_koe_to_eci,
)

_SMA = R_EARTH + 500e3


# ===========================================================================
# Keplerian helpers
# ===========================================================================


class TestKeplerian:
    def test_orbital_period(self):
        expected = 2.0 * math.pi * math.sqrt(_SMA**3 / GM_EARTH)
        assert float(orbital_period(_SMA)) == pytest.approx(expected, rel=1e-12)

    def test_mean_motion_times_period(self):
        assert float(mean_motion(_SMA) * orbital_period(_SMA)) == pytest.approx(2.0 * math.pi)

    def test_kepler_circular(self):
        """For e = 0 the eccentric anomaly equals the mean anomaly."""
        assert float(anomaly_mean_to_eccentric(1.3, 0.0)) == pytest.approx(1.3, abs=1e-12)

    def test_kepler_equation_satisfied(self):
        M, e = 2.0, 0.3
        E = float(anomaly_mean_to_eccentric(M, e))
        assert E - e * math.sin(E) == pytest.approx(M, abs=1e-12)

    def test_state_circular_equatorial(self):
        """Zero anomaly puts the satellite on +x moving along +y."""
        x = state_koe_to_eci(jnp.array([_SMA, 0.0, 0.0, 0.0, 0.0, 0.0]))
        v = math.sqrt(GM_EARTH / _SMA)
        assert jnp.allclose(x, jnp.array([_SMA, 0.0, 0.0, 0.0, v, 0.0]), atol=1e-6)

    def test_state_inclined(self):
        """At the ascending node of a polar orbit the velocity points along +z."""
        x = state_koe_to_eci(jnp.array([_SMA, 0.0, math.pi / 2, 0.0, 0.0, 0.0]))
        assert float(x[5]) == pytest.approx(math.sqrt(GM_EARTH / _SMA), rel=1e-12)
        assert abs(float(x[4])) < 1e-6


# ===========================================================================
# OrbitInfo
# ===========================================================================


class TestOrbitInfo:
    def test_circular_preset(self):
        orbit = OrbitInfo.circular(500e3, inclination=0.5)
        assert float(orbit.elements[0]) == pytest.approx(_SMA)
        assert float(orbit.elements[1]) == 0.0
        assert float(orbit.elements[2]) == pytest.approx(0.5)
        assert orbit.model == "keplerian"

    def test_degrees(self):
        orbit = OrbitInfo.circular(500e3, inclination=90.0, use_degrees=True)
        assert float(orbit.koe[2]) == pytest.approx(math.pi / 2)
        assert float(orbit.elements[2]) == pytest.approx(90.0)

    def test_period(self):
        orbit = OrbitInfo.circular(500e3)
        assert orbit.period == pytest.approx(float(orbital_period(_SMA)), rel=1e-12)

    def test_wrong_shape_raises(self):
        with pytest.raises(ConfigurationError) as excinfo:
            OrbitInfo(elements=[_SMA, 0.0, 0.0])
        assert excinfo.value.field == "orbitinfo.elements"

    def test_hyperbolic_raises(self):
        with pytest.raises(ConfigurationError, match="eccentricity"):
            OrbitInfo(elements=[_SMA, 1.2, 0.0, 0.0, 0.0, 0.0])

    def test_negative_sma_raises(self):
        with pytest.raises(ConfigurationError, match="semi-major axis"):
            OrbitInfo(elements=[-_SMA, 0.0, 0.0, 0.0, 0.0, 0.0])

    def test_bad_samplingtime_raises(self):
        with pytest.raises(ConfigurationError) as excinfo:
            OrbitInfo.circular(500e3, samplingtime=0.0)
        assert excinfo.value.field == "orbitinfo.samplingtime"


# ===========================================================================
# Propagators
# ===========================================================================


class TestSubsteps:
    def test_default_one(self):
        assert orbit_substeps(OrbitInfo.circular(500e3), 1.0) == 1

    def test_integer_ratio(self):
        assert orbit_substeps(OrbitInfo.circular(500e3, samplingtime=0.1), 1.0) == 10

    def test_incommensurate_raises(self):
        with pytest.raises(ConfigurationError) as excinfo:
            orbit_substeps(OrbitInfo.circular(500e3, samplingtime=0.3), 1.0)
        assert excinfo.value.field == "orbitinfo.samplingtime"

    def test_orbit_step_longer_than_attitude_step_raises(self):
        with pytest.raises(ConfigurationError):
            orbit_substeps(OrbitInfo.circular(500e3, samplingtime=2.0), 1.0)

    @pytest.mark.parametrize("orbit_step", [0.4, 2.0 / 3.0])
    def test_half_step_ratio_raises(self, orbit_step):
        """Ratios of 2.5 and 1.5 are rejected, not rounded to a neighbour."""
        with pytest.raises(ConfigurationError):
            orbit_substeps(OrbitInfo.circular(500e3, samplingtime=orbit_step), 1.0)

    def test_near_integer_ratio_rounds(self):
        assert orbit_substeps(OrbitInfo.circular(500e3, samplingtime=1.0 / 3.0), 1.0) == 3


class TestCreateOrbitPropagator:
    def test_registry(self):
        assert set(ORBIT_MODELS) == {"keplerian", "two_body"}

    def test_unknown_model_raises(self):
        with pytest.raises(ConfigurationError) as excinfo:
            create_orbit_propagator(OrbitInfo.circular(500e3, model="sgp4"), 1.0)
        assert excinfo.value.field == "orbitinfo.model"

    def test_initial_state(self):
        orbit = OrbitInfo.circular(500e3)
        propagator = create_orbit_propagator(orbit, 1.0)
        assert jnp.allclose(propagator.initial_state, state_koe_to_eci(orbit.elements))

    def test_keplerian_advance(self):
        """Advancing by one step moves the argument of latitude by n * dt."""
        orbit = OrbitInfo.circular(500e3)
        propagator = create_orbit_propagator(orbit, 10.0)
        x1 = propagator.advance(0.0, propagator.initial_state)
        angle = float(mean_motion(_SMA)) * 10.0
        expected = state_koe_to_eci(jnp.array([_SMA, 0.0, 0.0, 0.0, 0.0, angle]))
        assert jnp.allclose(x1, expected, atol=1e-6)

    def test_keplerian_full_period_returns(self):
        orbit = OrbitInfo.circular(500e3)
        propagator = create_orbit_propagator(orbit, orbit.period)
        x1 = propagator.advance(0.0, propagator.initial_state)
        assert jnp.allclose(x1[:3], propagator.initial_state[:3], atol=1e-3)

    def test_two_body_matches_keplerian(self):
        """The numerical two-body propagator tracks the analytic solution."""
        kep = create_orbit_propagator(OrbitInfo.circular(500e3, inclination=0.9), 10.0)
        num = create_orbit_propagator(
            OrbitInfo.circular(500e3, inclination=0.9, model="two_body", samplingtime=1.0), 10.0
        )
        assert num.substeps == 10

        x_kep = kep.initial_state
        x_num = num.initial_state
        for k in range(60):
            x_kep = kep.advance(k * 10.0, x_kep)
            x_num = num.advance(k * 10.0, x_num)
        assert float(jnp.linalg.norm(x_kep[:3] - x_num[:3])) < 1e-2

    def test_substep_debug_log(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="flexspacecraft.orbits.propagators"):
            create_orbit_propagator(OrbitInfo.circular(500e3, samplingtime=0.5), 1.0)
        assert "2 sub-step(s)" in caplog.text
