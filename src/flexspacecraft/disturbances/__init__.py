"""Disturbance torques acting on the spacecraft attitude.

- **Config**: :class:`DisturbanceConfig` model toggles
- **Models**: gravity gradient and constant torque, :data:`DISTURBANCE_MODELS`
- **Factory**: :func:`create_disturbance_torque` sums the enabled models
"""

from .config import DisturbanceConfig
from .factory import create_disturbance_torque
from .gravity_gradient import torque_gravity_gradient
from .models import DISTURBANCE_MODELS, ConstantTorque, GravityGradientTorque

__all__ = [
    # Config
    "DisturbanceConfig",
    # Models
    "torque_gravity_gradient",
    "GravityGradientTorque",
    "ConstantTorque",
    "DISTURBANCE_MODELS",
    # Factory
    "create_disturbance_torque",
]
