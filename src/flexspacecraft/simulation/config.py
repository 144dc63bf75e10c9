"""Simulation clock configuration."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

import jax.numpy as jnp
from jax import Array

from flexspacecraft.config import get_dtype
from flexspacecraft.errors import ConfigurationError
from flexspacecraft.integrators import INTEGRATORS

logger = logging.getLogger(__name__)

# Relative tolerance for treating simulationtime / samplingtime as integral
_INTEGRAL_RTOL = 1e-9


@dataclass(frozen=True)
class SimulationConfig:
    """Duration, sampling period and integrator of a run.

    The number of samples is ``round(simulationtime / samplingtime) + 1``.
    A ratio that is not an integer is rounded to the nearest step (halves
    round up) and a warning is logged.

    Args:
        simulationtime: Total simulated duration [s].
        samplingtime: Sampling period of the attitude clock [s].
        method: Integrator name, a key of
            :data:`~flexspacecraft.integrators.INTEGRATORS`.

    Raises:
        ConfigurationError: If a duration is not positive and finite, the
            run is shorter than one step, or *method* is unknown.

    Examples:
        ```python
        config = SimulationConfig(simulationtime=10.0, samplingtime=0.01)
        config.datanum  # 1001
        ```
    """

    simulationtime: float
    samplingtime: float
    method: str = "rk4"

    def __post_init__(self) -> None:
        for name in ("simulationtime", "samplingtime"):
            value = getattr(self, name)
            if not (math.isfinite(value) and value > 0.0):
                raise ConfigurationError(f"simconfig.{name}", f"must be positive and finite, got {value}")
        if self.method not in INTEGRATORS:
            raise ConfigurationError(
                "simconfig.method",
                f"unknown integrator '{self.method}', expected one of {sorted(INTEGRATORS)}",
            )

        ratio = self.simulationtime / self.samplingtime
        steps = math.floor(ratio + 0.5)
        if steps < 1:
            raise ConfigurationError(
                "simconfig.simulationtime",
                f"{self.simulationtime} s is shorter than one sampling period ({self.samplingtime} s)",
            )
        if abs(ratio - steps) > _INTEGRAL_RTOL * ratio:
            logger.warning(
                "simulationtime / samplingtime = %.12g is not an integer; rounded to %d steps",
                ratio, steps,
            )

    @property
    def datanum(self) -> int:
        """Number of samples, including the initial one."""
        return math.floor(self.simulationtime / self.samplingtime + 0.5) + 1

    def time(self) -> Array:
        """Time axis ``k * samplingtime`` for ``k = 0 .. datanum - 1`` [s]."""
        return jnp.arange(self.datanum, dtype=get_dtype()) * self.samplingtime
