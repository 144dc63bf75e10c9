"""Time series of attitude and orbit states."""

from __future__ import annotations

import jax
import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from flexspacecraft.config import get_dtype
from flexspacecraft.timeline.frame_trajectory import FrameTrajectory
from flexspacecraft.timeline.indexing import check_write_index
from flexspacecraft.timeline.series import SampledSeries


class StateTrajectory(SampledSeries):
    """Preallocated quaternion and angular velocity histories.

    Quaternions are stored as an ``(N, 4)`` array (scalar-last) and body
    angular velocities as an ``(N, 3)`` array, both indexed by the same
    sample index.

    Registered as a JAX pytree (both arrays as leaves, sampling time as
    auxiliary data).

    Examples:
        ```python
        import jax.numpy as jnp
        traj = StateTrajectory.init(
            11, jnp.array([0.0, 0.0, 0.0, 1.0]), jnp.zeros(3), 0.1
        )
        traj.quaternion().shape
        ```
    """

    __slots__ = ('_quaternion', '_angular_velocity')

    @classmethod
    def _from_internal(cls, quaternion: Array, angular_velocity: Array,
                       samplingtime: float) -> StateTrajectory:
        obj = object.__new__(cls)
        obj._quaternion = quaternion
        obj._angular_velocity = angular_velocity
        obj._samplingtime = samplingtime
        return obj

    @classmethod
    def init(cls, datanum: int, quaternion: ArrayLike, angular_velocity: ArrayLike,
             samplingtime: float) -> StateTrajectory:
        """Allocate *datanum* samples seeded with the initial state at index 0.

        Args:
            datanum: Number of samples.
            quaternion: Initial quaternion, shape ``(4,)``.
            angular_velocity: Initial angular velocity, shape ``(3,)`` [rad/s].
            samplingtime: Sampling period [s].

        Returns:
            StateTrajectory: New container, zero-filled past index 0.
        """
        _float = get_dtype()
        q = jnp.zeros((datanum, 4), dtype=_float).at[0].set(jnp.asarray(quaternion, dtype=_float))
        w = jnp.zeros((datanum, 3), dtype=_float).at[0].set(jnp.asarray(angular_velocity, dtype=_float))
        return cls._from_internal(q, w, samplingtime)

    @property
    def datanum(self) -> int:
        return self._quaternion.shape[0]

    def write(self, index, quaternion: ArrayLike, angular_velocity: ArrayLike) -> StateTrajectory:
        """Set sample *index* to ``(quaternion, angular_velocity)``.

        Raises:
            IndexError: If a concrete *index* is outside ``[0, datanum)``.
        """
        check_write_index(index, self.datanum)
        return StateTrajectory._from_internal(
            self._quaternion.at[index].set(quaternion),
            self._angular_velocity.at[index].set(angular_velocity),
            self._samplingtime,
        )

    def __getitem__(self, index: int) -> tuple[Array, Array]:
        index = self._check_read_index(index)
        return self._quaternion[index], self._angular_velocity[index]

    def quaternion(self, timerange: tuple[float, float] | None = None) -> Array:
        """Quaternion history in *timerange*, shape ``(M, 4)``."""
        return self._quaternion[self.index(timerange)]

    def angular_velocity(self, timerange: tuple[float, float] | None = None) -> Array:
        """Angular velocity history in *timerange*, shape ``(M, 3)`` [rad/s]."""
        return self._angular_velocity[self.index(timerange)]


class OrbitTrajectory(SampledSeries):
    """Preallocated orbit state history and the matching LVLH frames.

    The ECI state ``[x, y, z, vx, vy, vz]`` is stored as an ``(N, 6)``
    array; :attr:`lvlh` holds the LVLH frame of each sample.

    Registered as a JAX pytree.
    """

    __slots__ = ('_state', '_lvlh')

    @classmethod
    def _from_internal(cls, state: Array, lvlh: FrameTrajectory,
                       samplingtime: float) -> OrbitTrajectory:
        obj = object.__new__(cls)
        obj._state = state
        obj._lvlh = lvlh
        obj._samplingtime = samplingtime
        return obj

    @classmethod
    def init(cls, datanum: int, state: ArrayLike, lvlh: FrameTrajectory,
             samplingtime: float) -> OrbitTrajectory:
        """Allocate *datanum* samples seeded with the orbit state at index 0.

        Args:
            datanum: Number of samples.
            state: ECI state at ``t = 0``, shape ``(6,)`` [m, m/s].
            lvlh: LVLH frame container of the same length.
            samplingtime: Sampling period [s].

        Returns:
            OrbitTrajectory: New container.
        """
        _float = get_dtype()
        x = jnp.zeros((datanum, 6), dtype=_float).at[0].set(jnp.asarray(state, dtype=_float))
        return cls._from_internal(x, lvlh, samplingtime)

    @property
    def datanum(self) -> int:
        return self._state.shape[0]

    @property
    def lvlh(self) -> FrameTrajectory:
        """LVLH frame history."""
        return self._lvlh

    def write(self, index, state: ArrayLike, lvlh) -> OrbitTrajectory:
        """Set sample *index* to the ECI *state* and its LVLH frame."""
        check_write_index(index, self.datanum)
        return OrbitTrajectory._from_internal(
            self._state.at[index].set(state),
            self._lvlh.write(index, lvlh),
            self._samplingtime,
        )

    def __getitem__(self, index: int) -> Array:
        return self._state[self._check_read_index(index)]

    def state(self, timerange: tuple[float, float] | None = None) -> Array:
        """ECI state history in *timerange*, shape ``(M, 6)``."""
        return self._state[self.index(timerange)]

    def position(self, timerange: tuple[float, float] | None = None) -> Array:
        """ECI position history in *timerange*, shape ``(M, 3)`` [m]."""
        return self._state[self.index(timerange), :3]

    def velocity(self, timerange: tuple[float, float] | None = None) -> Array:
        """ECI velocity history in *timerange*, shape ``(M, 3)`` [m/s]."""
        return self._state[self.index(timerange), 3:]


jax.tree_util.register_pytree_node(
    StateTrajectory,
    lambda s: ((s._quaternion, s._angular_velocity), s._samplingtime),
    lambda samplingtime, children: StateTrajectory._from_internal(*children, samplingtime),
)

jax.tree_util.register_pytree_node(
    OrbitTrajectory,
    lambda o: ((o._state, o._lvlh), o._samplingtime),
    lambda samplingtime, children: OrbitTrajectory._from_internal(*children, samplingtime),
)
