"""
flexspacecraft simulates the coupled attitude and orbit motion of a spacecraft, implemented in JAX.
"""

from .constants import (
    DEG2RAD,
    RAD2DEG,
    R_EARTH,
    GM_EARTH,
)

from .config import set_dtype, get_dtype, get_quaternion_tolerance
from .errors import ConfigurationError, NumericalDivergenceError

from .frames import (
    Frame,
    rotate,
    difference,
    eci_frame,
    Rx,
    Ry,
    Rz,
    rotation_eci_to_body,
    rotation_body_to_eci,
    body_frame,
    lvlh_frame,
)

from .timeline import (
    data_index,
    StateTrajectory,
    FrameTrajectory,
    OrbitTrajectory,
    InitData,
    init_simulation_data,
)

from .attitude_dynamics import (
    SpacecraftInertia,
    RigidBodyModel,
    create_dynamics_model,
)

from .disturbances import DisturbanceConfig
from .orbits import OrbitInfo

from .simulation import (
    SimulationConfig,
    Simulation,
    SimulationStatus,
    SimulationResult,
    run_simulation,
)

from .evaluation import quaternion_constraint, angular_momentum, euler_angles
from .export import to_dataframe

__all__ = [
    # Constants
    "DEG2RAD",
    "RAD2DEG",
    "R_EARTH",
    "GM_EARTH",
    # Config
    "set_dtype",
    "get_dtype",
    "get_quaternion_tolerance",
    # Errors
    "ConfigurationError",
    "NumericalDivergenceError",
    # Frames
    "Frame",
    "rotate",
    "difference",
    "eci_frame",
    "Rx",
    "Ry",
    "Rz",
    "rotation_eci_to_body",
    "rotation_body_to_eci",
    "body_frame",
    "lvlh_frame",
    # Timeline
    "data_index",
    "StateTrajectory",
    "FrameTrajectory",
    "OrbitTrajectory",
    "InitData",
    "init_simulation_data",
    # Dynamics
    "SpacecraftInertia",
    "RigidBodyModel",
    "create_dynamics_model",
    # Configuration records
    "DisturbanceConfig",
    "OrbitInfo",
    "SimulationConfig",
    # Driver
    "Simulation",
    "SimulationStatus",
    "SimulationResult",
    "run_simulation",
    # Evaluation and export
    "quaternion_constraint",
    "angular_momentum",
    "euler_angles",
    "to_dataframe",
]
