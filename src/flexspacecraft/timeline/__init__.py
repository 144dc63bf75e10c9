"""Time-indexed data containers for simulation results.

All containers are preallocated once per run, sample on the common clock
``t_k = k * samplingtime`` and share one time-range to index-range rule
(:func:`data_index`), so samples stay aligned across containers:

- :class:`StateTrajectory` -- quaternion and angular velocity
- :class:`FrameTrajectory` -- coordinate frames (body, LVLH)
- :class:`OrbitTrajectory` -- ECI orbit state and LVLH frames
- :class:`InitData` -- initial-condition record
"""

from .frame_trajectory import FrameTrajectory
from .indexing import data_index, time_index
from .initdata import InitData, init_simulation_data
from .state_trajectory import OrbitTrajectory, StateTrajectory

__all__ = [
    # Indexing
    "data_index",
    "time_index",
    # Containers
    "StateTrajectory",
    "FrameTrajectory",
    "OrbitTrajectory",
    # Initial values
    "InitData",
    "init_simulation_data",
]
