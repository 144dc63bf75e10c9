"""Common base for fixed-length, uniformly sampled trajectory containers."""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array

from flexspacecraft.config import get_dtype
from flexspacecraft.timeline.indexing import data_index, time_index


class SampledSeries:
    """Uniform time base shared by all trajectory containers.

    Sample ``k`` holds the value at ``t_k = k * samplingtime``.  The
    number of samples is fixed when the container is allocated.
    Subclasses provide :attr:`datanum`, the number of samples.
    """

    __slots__ = ('_samplingtime',)

    @property
    def samplingtime(self) -> float:
        """Sampling period [s]."""
        return self._samplingtime

    def __len__(self) -> int:
        return self.datanum

    def time(self, timerange: tuple[float, float] | None = None) -> Array:
        """Sample times, optionally restricted to *timerange*.

        Args:
            timerange: ``(start, end)`` in seconds; ``None`` or a
                degenerate range selects every sample.

        Returns:
            jax.Array: Strictly increasing times starting at 0 [s].
        """
        t = jnp.arange(self.datanum, dtype=get_dtype()) * self._samplingtime
        return t[self.index(timerange)]

    def index(self, timerange: tuple[float, float] | None = None) -> slice:
        """Index range covered by *timerange*.

        See :func:`~flexspacecraft.timeline.indexing.data_index`.
        """
        return data_index(timerange, self._samplingtime, self.datanum)

    def time_index(self, time: float) -> int:
        """Index of the sample nearest to *time*."""
        return time_index(time, self._samplingtime, self.datanum)

    def _check_read_index(self, index: int) -> int:
        if not -self.datanum <= index < self.datanum:
            raise IndexError(
                f"sample index {index} out of range for trajectory of length {self.datanum}"
            )
        return index
