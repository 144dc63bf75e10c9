"""Initial-condition record and allocation of the attitude containers."""

from __future__ import annotations

from dataclasses import dataclass, field

import jax.numpy as jnp
from jax import Array

from flexspacecraft.config import get_dtype
from flexspacecraft.errors import ConfigurationError
from flexspacecraft.frames import Frame, body_frame, eci_frame
from flexspacecraft.timeline.frame_trajectory import FrameTrajectory
from flexspacecraft.timeline.state_trajectory import StateTrajectory

# Accepted deviation of the initial quaternion norm from 1.
_INIT_NORM_TOL = 1e-6


@dataclass(frozen=True)
class InitData:
    """Initial state of the time-variant quantities of a run.

    Args:
        quaternion: Initial attitude ``[q1, q2, q3, q4]`` (scalar-last).
            Must be unit norm within 1e-6; stored renormalized.
        angular_velocity: Initial body angular velocity [rad/s].
        reference_frame: Inertial reference frame the body frame is
            rotated from.  Defaults to ECI.

    Raises:
        ConfigurationError: If a vector has the wrong length, holds
            non-finite values, or the quaternion is not unit norm.

    Examples:
        ```python
        initvalue = InitData([0.0, 0.0, 0.0, 1.0], [0.0, 0.0, 0.1])
        ```
    """

    quaternion: Array
    angular_velocity: Array
    reference_frame: Frame = field(default_factory=eci_frame)

    def __post_init__(self) -> None:
        _float = get_dtype()
        q = jnp.asarray(self.quaternion, dtype=_float)
        w = jnp.asarray(self.angular_velocity, dtype=_float)

        if q.shape != (4,):
            raise ConfigurationError("initvalue.quaternion", f"expected shape (4,), got {q.shape}")
        if w.shape != (3,):
            raise ConfigurationError(
                "initvalue.angular_velocity", f"expected shape (3,), got {w.shape}"
            )
        if not bool(jnp.all(jnp.isfinite(q))):
            raise ConfigurationError("initvalue.quaternion", "contains non-finite values")
        if not bool(jnp.all(jnp.isfinite(w))):
            raise ConfigurationError("initvalue.angular_velocity", "contains non-finite values")
        norm = float(jnp.linalg.norm(q))
        if abs(norm - 1.0) > _INIT_NORM_TOL:
            raise ConfigurationError("initvalue.quaternion", f"must be unit norm, got {norm}")
        if not isinstance(self.reference_frame, Frame):
            raise ConfigurationError("initvalue.reference_frame", "must be a Frame")

        # Frozen dataclass: bypass __setattr__ to store the coerced arrays
        object.__setattr__(self, "quaternion", q / norm)
        object.__setattr__(self, "angular_velocity", w)


def init_simulation_data(
    datanum: int,
    initvalue: InitData,
    samplingtime: float,
) -> tuple[StateTrajectory, FrameTrajectory]:
    """Allocate the attitude containers for a run.

    Index 0 holds the initial condition itself: the initial quaternion,
    the initial angular velocity and the body frame obtained by rotating
    the reference frame with the initial attitude.

    Args:
        datanum: Number of samples.
        initvalue: Initial-condition record.
        samplingtime: Sampling period [s].

    Returns:
        tuple: ``(state, bodyframe)`` containers of length *datanum*.
    """
    state = StateTrajectory.init(
        datanum, initvalue.quaternion, initvalue.angular_velocity, samplingtime
    )
    frames = FrameTrajectory.init(
        datanum, body_frame(initvalue.quaternion, initvalue.reference_frame), samplingtime
    )
    return state, frames
