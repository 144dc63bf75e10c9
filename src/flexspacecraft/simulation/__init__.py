"""Attitude-orbit simulation driver and its records.

- **Config**: :class:`SimulationConfig`
- **Driver**: :class:`Simulation`, :func:`run_simulation`
- **Results**: :class:`SimulationResult`, :class:`AttitudeData`
"""

from .config import SimulationConfig
from .result import AttitudeData, SimulationResult
from .runner import Simulation, SimulationStatus, run_simulation

__all__ = [
    # Config
    "SimulationConfig",
    # Driver
    "Simulation",
    "SimulationStatus",
    "run_simulation",
    # Results
    "SimulationResult",
    "AttitudeData",
]
