"""Rigid-body attitude dynamics for spacecraft attitude propagation.

Provides the equations of motion and the per-step integration policy
for the attitude state (quaternion + angular velocity) of a rigid
spacecraft:

- **Models**: inertia tensor and the dynamics model registry
- **Euler dynamics**: Quaternion kinematics and Euler's rotational equation
- **Factory**: Dynamics closure and step policy for the integrators
- **Utilities**: State normalization helpers
"""

from .euler_dynamics import euler_equation, quaternion_derivative
from .factory import AttitudeStepper, create_attitude_dynamics, create_attitude_stepper
from .models import (
    DYNAMICS_MODELS,
    RigidBodyModel,
    SpacecraftInertia,
    create_dynamics_model,
)
from .utils import normalize_attitude_state

__all__ = [
    # Models
    "SpacecraftInertia",
    "RigidBodyModel",
    "DYNAMICS_MODELS",
    "create_dynamics_model",
    # Euler dynamics
    "quaternion_derivative",
    "euler_equation",
    # Factory
    "AttitudeStepper",
    "create_attitude_dynamics",
    "create_attitude_stepper",
    # Utilities
    "normalize_attitude_state",
]
