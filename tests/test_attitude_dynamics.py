"""Tests for the attitude_dynamics module.

Tests cover:
- Inertia tensor and dynamics model registry
- Quaternion kinematics (derivative)
- Euler rotational equation
- Dynamics closure and the per-step integration policy
- Torque-free propagation (angular momentum conservation)
- State normalization utility
- JIT compatibility
"""

import math

import jax
import jax.numpy as jnp
import pytest

from flexspacecraft.attitude_dynamics import (
    DYNAMICS_MODELS,
    RigidBodyModel,
    SpacecraftInertia,
    create_attitude_dynamics,
    create_attitude_stepper,
    create_dynamics_model,
    euler_equation,
    normalize_attitude_state,
    quaternion_derivative,
)
from flexspacecraft.config import get_dtype
from flexspacecraft.errors import ConfigurationError
from flexspacecraft.frames import quaternion_multiply, rotation_body_to_eci
from flexspacecraft.integrators import rk4_step


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _identity_q() -> jnp.ndarray:
    """Identity quaternion [q1, q2, q3, q4] (scalar-last)."""
    return jnp.array([0.0, 0.0, 0.0, 1.0], dtype=get_dtype())


def _asymmetric_model() -> RigidBodyModel:
    """Rigid body with all principal moments different."""
    return RigidBodyModel(SpacecraftInertia.from_principal(10.0, 20.0, 30.0))


# ===========================================================================
# Models
# ===========================================================================


class TestSpacecraftInertia:
    def test_default(self):
        """Default inertia is 3x3 identity."""
        inertia = SpacecraftInertia()
        assert inertia.I.shape == (3, 3)
        assert jnp.allclose(inertia.I, jnp.eye(3))

    def test_from_principal(self):
        """from_principal creates a diagonal tensor."""
        inertia = SpacecraftInertia.from_principal(10.0, 20.0, 30.0)
        assert jnp.allclose(inertia.I, jnp.diag(jnp.array([10.0, 20.0, 30.0])))

    def test_frozen(self):
        inertia = SpacecraftInertia()
        with pytest.raises(AttributeError):
            inertia.I = jnp.eye(3) * 2.0

    def test_wrong_shape_raises(self):
        with pytest.raises(ConfigurationError) as excinfo:
            SpacecraftInertia(I=jnp.eye(2))
        assert excinfo.value.field == "model.inertia"

    def test_asymmetric_raises(self):
        with pytest.raises(ConfigurationError, match="symmetric"):
            SpacecraftInertia(I=jnp.array([[1.0, 0.5, 0.0], [0.0, 1.0, 0.0], [0.0, 0.0, 1.0]]))

    def test_not_positive_definite_raises(self):
        with pytest.raises(ConfigurationError, match="positive definite"):
            SpacecraftInertia.from_principal(10.0, -1.0, 30.0)


class TestDynamicsModelRegistry:
    def test_rigid_body_registered(self):
        assert "rigid_body" in DYNAMICS_MODELS

    def test_create_from_array(self):
        model = create_dynamics_model("rigid_body", inertia=[[10, 0, 0], [0, 20, 0], [0, 0, 30]])
        assert isinstance(model, RigidBodyModel)
        assert jnp.allclose(model.inertia.I, jnp.diag(jnp.array([10.0, 20.0, 30.0])))

    def test_create_from_inertia(self):
        inertia = SpacecraftInertia.from_principal(1.0, 2.0, 3.0)
        assert create_dynamics_model("rigid_body", inertia=inertia).inertia is inertia

    def test_create_default(self):
        assert jnp.allclose(create_dynamics_model().inertia.I, jnp.eye(3))

    def test_unknown_kind_raises(self):
        with pytest.raises(ConfigurationError) as excinfo:
            create_dynamics_model("flexible_beam")
        assert excinfo.value.field == "model.kind"


# ===========================================================================
# Quaternion kinematics
# ===========================================================================


class TestQuaternionDerivative:
    def test_output_shape(self):
        q_dot = quaternion_derivative(_identity_q(), jnp.array([0.1, 0.0, 0.0]))
        assert q_dot.shape == (4,)

    def test_zero_omega(self):
        """Zero angular velocity gives zero quaternion derivative."""
        q_dot = quaternion_derivative(_identity_q(), jnp.zeros(3))
        assert jnp.allclose(q_dot, jnp.zeros(4), atol=1e-15)

    def test_identity_q_with_z_rotation(self):
        """q_dot = 0.5 * [0, 0, wz, 0] for the identity quaternion."""
        wz = 0.2
        q_dot = quaternion_derivative(_identity_q(), jnp.array([0.0, 0.0, wz]))
        assert jnp.allclose(q_dot, jnp.array([0.0, 0.0, 0.5 * wz, 0.0]), atol=1e-15)

    def test_matches_quaternion_product(self):
        """Omega-matrix form equals 0.5 * q ⊗ [omega, 0]."""
        q = jnp.array([0.1, -0.3, 0.5, 0.8])
        q = q / jnp.linalg.norm(q)
        omega = jnp.array([0.1, -0.2, 0.3])
        expected = 0.5 * quaternion_multiply(q, jnp.concatenate([omega, jnp.zeros(1)]))
        assert jnp.allclose(quaternion_derivative(q, omega), expected, atol=1e-15)

    def test_preserves_unit_norm_infinitesimally(self):
        """q_dot is perpendicular to q: d/dt(|q|^2) = 2 q . q_dot = 0."""
        q = jnp.array([0.5, 0.5, 0.5, 0.5])
        q_dot = quaternion_derivative(q, jnp.array([0.1, -0.2, 0.3]))
        assert abs(float(jnp.dot(q, q_dot))) < 1e-15


# ===========================================================================
# Euler equation
# ===========================================================================


class TestEulerEquation:
    def test_principal_axis_spin_torque_free(self):
        """Spin about a principal axis with no torque gives zero acceleration."""
        J = jnp.diag(jnp.array([10.0, 20.0, 30.0]))
        for axis in jnp.eye(3):
            omega_dot = euler_equation(0.5 * axis, J, jnp.zeros(3))
            assert jnp.allclose(omega_dot, jnp.zeros(3), atol=1e-15)

    def test_known_euler_result_off_axis(self):
        """I = diag(10, 20, 30), omega = [1, 1, 0], tau = 0 gives [0, 0, -1/3].

        omega x (I @ omega) = [1, 1, 0] x [10, 20, 0] = [0, 0, 10]
        """
        J = jnp.diag(jnp.array([10.0, 20.0, 30.0]))
        omega_dot = euler_equation(jnp.array([1.0, 1.0, 0.0]), J, jnp.zeros(3))
        assert jnp.allclose(omega_dot, jnp.array([0.0, 0.0, -1.0 / 3.0]), atol=1e-12)

    def test_with_external_torque(self):
        """tau = [10, 0, 0] on a body at rest gives omega_dot = [1, 0, 0]."""
        J = jnp.diag(jnp.array([10.0, 20.0, 30.0]))
        omega_dot = euler_equation(jnp.zeros(3), J, jnp.array([10.0, 0.0, 0.0]))
        assert jnp.allclose(omega_dot, jnp.array([1.0, 0.0, 0.0]), atol=1e-12)

    def test_rigid_body_model_delegates(self):
        model = _asymmetric_model()
        omega = jnp.array([0.1, 0.2, 0.3])
        tau = jnp.array([0.0, 1e-3, 0.0])
        assert jnp.allclose(
            model.angular_acceleration(omega, tau), euler_equation(omega, model.inertia.I, tau)
        )


# ===========================================================================
# Dynamics closure and stepping policy
# ===========================================================================


class TestCreateAttitudeDynamics:
    def test_derivative_shape(self):
        dynamics = create_attitude_dynamics(_asymmetric_model(), jnp.zeros(3))
        x0 = jnp.concatenate([_identity_q(), jnp.array([0.1, 0.0, 0.0])])
        assert dynamics(0.0, x0).shape == (7,)

    def test_torque_enters_omega_dot(self):
        dynamics = create_attitude_dynamics(_asymmetric_model(), jnp.array([10.0, 0.0, 0.0]))
        x0 = jnp.concatenate([_identity_q(), jnp.zeros(3)])
        dx = dynamics(0.0, x0)
        assert jnp.allclose(dx[4:], jnp.array([1.0, 0.0, 0.0]))

    def test_torque_free_angular_momentum_conserved(self):
        """Inertial angular momentum is conserved in torque-free motion."""
        model = _asymmetric_model()
        dynamics = create_attitude_dynamics(model, jnp.zeros(3))
        x = jnp.concatenate([_identity_q(), jnp.array([0.1, -0.05, 0.2])])

        def h_inertial(x):
            return rotation_body_to_eci(x[:4]) @ (model.inertia.I @ x[4:])

        h0 = h_inertial(x)
        for _ in range(500):
            x = normalize_attitude_state(rk4_step(dynamics, 0.0, x, 0.01).state)
        assert jnp.allclose(h_inertial(x), h0, atol=1e-9)


class TestCreateAttitudeStepper:
    def test_returns_unit_quaternion(self):
        step = create_attitude_stepper(_asymmetric_model(), "rk4")
        q, w = step(_identity_q(), jnp.array([0.3, -0.2, 0.5]), jnp.zeros(3), 0.1)
        assert q.shape == (4,)
        assert w.shape == (3,)
        assert float(jnp.linalg.norm(q)) == pytest.approx(1.0, abs=1e-15)

    def test_z_spin_single_step(self):
        """One step of a z-spin advances the angle by wz * dt."""
        step = create_attitude_stepper(_asymmetric_model())
        q, w = step(_identity_q(), jnp.array([0.0, 0.0, 0.1]), jnp.zeros(3), 0.5)
        expected = jnp.array([0.0, 0.0, math.sin(0.025), math.cos(0.025)])
        assert jnp.allclose(q, expected, atol=1e-9)
        assert jnp.allclose(w, jnp.array([0.0, 0.0, 0.1]))

    def test_euler_method(self):
        step = create_attitude_stepper(_asymmetric_model(), "euler")
        q, w = step(_identity_q(), jnp.zeros(3), jnp.array([10.0, 0.0, 0.0]), 0.1)
        assert jnp.allclose(w, jnp.array([0.1, 0.0, 0.0]))
        assert jnp.allclose(q, _identity_q())

    def test_unknown_method_raises(self):
        with pytest.raises(ConfigurationError) as excinfo:
            create_attitude_stepper(_asymmetric_model(), "leapfrog")
        assert excinfo.value.field == "simconfig.method"

    def test_jit(self):
        step = jax.jit(create_attitude_stepper(_asymmetric_model()))
        q, w = step(_identity_q(), jnp.array([0.1, 0.2, 0.3]), jnp.zeros(3), 0.01)
        assert jnp.all(jnp.isfinite(q))
        assert jnp.all(jnp.isfinite(w))


# ===========================================================================
# Utilities
# ===========================================================================


class TestNormalizeAttitudeState:
    def test_normalizes_quaternion(self):
        x = jnp.array([0.0, 0.0, 0.0, 2.0, 0.1, 0.2, 0.3])
        xn = normalize_attitude_state(x)
        assert jnp.allclose(xn[:4], _identity_q())

    def test_leaves_angular_velocity(self):
        x = jnp.array([1.0, 1.0, 1.0, 1.0, 0.1, 0.2, 0.3])
        assert jnp.allclose(normalize_attitude_state(x)[4:], x[4:])
