"""Time series of coordinate frames."""

from __future__ import annotations

import jax
import jax.numpy as jnp
from jax import Array

from flexspacecraft.config import get_dtype
from flexspacecraft.frames import Frame
from flexspacecraft.timeline.indexing import check_write_index
from flexspacecraft.timeline.series import SampledSeries


class FrameTrajectory(SampledSeries):
    """Preallocated sequence of :class:`~flexspacecraft.frames.Frame` samples.

    Storage is a single ``(N, 3, 3)`` array; sample ``k`` holds the rows
    ``x, y, z`` of the frame at ``t_k``.  :meth:`write` returns a new
    container sharing the update semantics of ``Array.at[k].set``, so
    inside a jitted loop the buffer is updated in place.

    Registered as a JAX pytree (data array as leaf, sampling time as
    auxiliary data).

    Examples:
        ```python
        from flexspacecraft.frames import eci_frame
        frames = FrameTrajectory.init(101, eci_frame(), 0.1)
        frames.get_frame(0.0)
        ```
    """

    __slots__ = ('_data',)

    @classmethod
    def _from_internal(cls, data: Array, samplingtime: float) -> FrameTrajectory:
        obj = object.__new__(cls)
        obj._data = data
        obj._samplingtime = samplingtime
        return obj

    @classmethod
    def init(cls, datanum: int, initial: Frame, samplingtime: float) -> FrameTrajectory:
        """Allocate *datanum* samples with *initial* at index 0.

        Remaining samples are zero-filled until written.

        Args:
            datanum: Number of samples.
            initial: Frame at ``t = 0``.
            samplingtime: Sampling period [s].

        Returns:
            FrameTrajectory: New container.
        """
        data = jnp.zeros((datanum, 3, 3), dtype=get_dtype())
        data = data.at[0].set(initial.to_matrix())
        return cls._from_internal(data, samplingtime)

    @property
    def datanum(self) -> int:
        return self._data.shape[0]

    def write(self, index, frame: Frame) -> FrameTrajectory:
        """Set sample *index* to *frame*.

        Raises:
            IndexError: If a concrete *index* is outside ``[0, datanum)``.
        """
        check_write_index(index, self.datanum)
        return FrameTrajectory._from_internal(
            self._data.at[index].set(frame.to_matrix()), self._samplingtime
        )

    def __getitem__(self, index: int) -> Frame:
        return Frame._from_internal(self._data[self._check_read_index(index)])

    def get_frame(self, time: float) -> Frame:
        """Frame sampled nearest to *time* [s]."""
        return self[self.time_index(time)]

    def read(self, timerange: tuple[float, float] | None = None) -> Array:
        """Frames in *timerange* as an ``(M, 3, 3)`` array (rows x, y, z)."""
        return self._data[self.index(timerange)]

    def x(self, timerange: tuple[float, float] | None = None) -> Array:
        """x-axis history, shape ``(M, 3)``."""
        return self._data[self.index(timerange), 0]

    def y(self, timerange: tuple[float, float] | None = None) -> Array:
        """y-axis history, shape ``(M, 3)``."""
        return self._data[self.index(timerange), 1]

    def z(self, timerange: tuple[float, float] | None = None) -> Array:
        """z-axis history, shape ``(M, 3)``."""
        return self._data[self.index(timerange), 2]


jax.tree_util.register_pytree_node(
    FrameTrajectory,
    lambda f: ((f._data,), f._samplingtime),
    lambda samplingtime, children: FrameTrajectory._from_internal(children[0], samplingtime),
)
