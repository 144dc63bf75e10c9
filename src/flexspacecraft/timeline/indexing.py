"""Time to sample-index mapping shared by every trajectory container.

All containers sample on the same clock ``t_k = k * samplingtime`` for
``k = 0 .. datanum - 1``, so a single rule keeps quaternion, angular
velocity, frame and orbit samples aligned by index:

.. math::

    k(t) = \\mathrm{clamp}(\\lfloor t / T_s + 1/2 \\rfloor, 0, N - 1)

Times are rounded half-up to the nearest sample.
"""

from __future__ import annotations

import math
import numbers

import jax


def time_index(time: float, samplingtime: float, datanum: int) -> int:
    """Return the sample index nearest to *time*.

    Args:
        time: Simulation time [s].
        samplingtime: Sampling period [s].
        datanum: Number of samples in the container.

    Returns:
        int: Index clamped to ``[0, datanum - 1]``.

    Examples:
        ```python
        time_index(0.26, 0.1, 11)
        ```
    """
    k = math.floor(time / samplingtime + 0.5)
    return min(max(k, 0), datanum - 1)


def data_index(
    timerange: tuple[float, float] | None,
    samplingtime: float,
    datanum: int,
) -> slice:
    """Map a ``(start, end)`` time range onto a contiguous index range.

    The returned slice selects every sample whose index ``k`` satisfies
    ``k(start) <= k <= k(end)``.  ``None`` or a degenerate range
    (``start == end``, including the default ``(0, 0)``) selects every
    sample.

    Args:
        timerange: ``(start, end)`` in seconds, or ``None``.
        samplingtime: Sampling period [s].
        datanum: Number of samples in the container.

    Returns:
        slice: Index range into the container's leading axis.

    Raises:
        ValueError: If ``end < start``.

    Examples:
        ```python
        data_index((1.0, 2.0), 0.1, 101)   # slice(10, 21)
        data_index((0, 0), 0.1, 101)       # slice(None)
        ```
    """
    if timerange is None:
        return slice(None)

    start, end = timerange
    if start == end:
        return slice(None)
    if end < start:
        raise ValueError(f"timerange end ({end}) precedes start ({start})")

    i0 = time_index(start, samplingtime, datanum)
    i1 = time_index(end, samplingtime, datanum)
    return slice(i0, i1 + 1)


def check_write_index(index, datanum: int) -> None:
    """Reject a concrete write index outside ``[0, datanum)``.

    Concrete ``jax.Array`` indices are checked like Python integers.
    Traced indices (inside ``jax.lax`` loops) are bounded by the loop and
    are not checked here.

    Raises:
        IndexError: If *index* is a concrete integer out of range.
    """
    if isinstance(index, jax.core.Tracer):
        return
    if isinstance(index, jax.Array) and index.ndim == 0:
        index = int(index)
    if isinstance(index, numbers.Integral) and not 0 <= index < datanum:
        raise IndexError(
            f"sample index {index} out of range for trajectory of length {datanum}"
        )
