"""Run result records handed back by the driver."""

from __future__ import annotations

from typing import NamedTuple

from jax import Array

from flexspacecraft.timeline import FrameTrajectory, OrbitTrajectory, StateTrajectory


class AttitudeData(NamedTuple):
    """Attitude trajectories of a run.

    Attributes:
        state: Quaternion and angular velocity histories.
        bodyframe: Body frame history, expressed in the reference frame.
    """

    state: StateTrajectory
    bodyframe: FrameTrajectory

    def quaternion(self, timerange: tuple[float, float] | None = None) -> Array:
        return self.state.quaternion(timerange)

    def angular_velocity(self, timerange: tuple[float, float] | None = None) -> Array:
        return self.state.angular_velocity(timerange)


class SimulationResult(NamedTuple):
    """Output of :func:`~flexspacecraft.simulation.run_simulation`.

    Unpacks as ``time, attitude, orbit``.

    Attributes:
        time: Sample times ``k * samplingtime`` [s].
        attitude: Attitude trajectories.
        orbit: ECI orbit state and LVLH frame histories.
    """

    time: Array
    attitude: AttitudeData
    orbit: OrbitTrajectory
