"""Tabular export of a run result."""

from __future__ import annotations

import polars as pl

from flexspacecraft.simulation.result import SimulationResult

_QUATERNION_COLUMNS = ("q1", "q2", "q3", "q4")
_ANGULAR_VELOCITY_COLUMNS = ("wx", "wy", "wz")
_ORBIT_COLUMNS = ("x", "y", "z", "vx", "vy", "vz")


def to_dataframe(
    result: SimulationResult,
    timerange: tuple[float, float] | None = None,
) -> pl.DataFrame:
    """Flatten a run result into a polars DataFrame, one row per sample.

    Columns are ``time``, the quaternion ``q1..q4`` (scalar-last), the
    body angular velocity ``wx, wy, wz`` and the ECI orbit state
    ``x, y, z, vx, vy, vz``, all as ``Float64``.

    Args:
        result: Output of :func:`~flexspacecraft.simulation.run_simulation`.
        timerange: Optional ``(start, end)`` restricting the rows, using
            the same index rule as the trajectory containers.

    Returns:
        pl.DataFrame: Sampled trajectories.

    Examples:
        ```python
        df = to_dataframe(run_simulation(...), timerange=(0.0, 1.0))
        df.select("time", "q4")
        ```
    """
    state = result.attitude.state
    index = state.index(timerange)

    columns = {"time": pl.Series(result.time[index].tolist(), dtype=pl.Float64)}

    blocks = (
        (_QUATERNION_COLUMNS, state.quaternion(timerange)),
        (_ANGULAR_VELOCITY_COLUMNS, state.angular_velocity(timerange)),
        (_ORBIT_COLUMNS, result.orbit.state(timerange)),
    )
    for names, values in blocks:
        for j, name in enumerate(names):
            columns[name] = pl.Series(values[:, j].tolist(), dtype=pl.Float64)

    return pl.DataFrame(columns)
