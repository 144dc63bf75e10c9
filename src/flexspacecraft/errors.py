"""Exception types raised by the simulation core.

Two failure classes surface to the caller of the driver:

- :class:`ConfigurationError` -- an input record is malformed or two
  records disagree (e.g. orbit and attitude sampling periods that are not
  commensurate).  Always raised before the integration loop starts.
- :class:`NumericalDivergenceError` -- the integration produced a
  non-finite value.  Raised after the loop stops at the offending step.

Out-of-range trajectory access raises the builtin :class:`IndexError`.
"""

from __future__ import annotations


class ConfigurationError(ValueError):
    """Invalid or inconsistent simulation input.

    Args:
        field: Dotted path of the offending field,
            e.g. ``"simconfig.samplingtime"``.
        message: Human readable description of the problem.
    """

    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"{field}: {message}")
        self.field = field


class NumericalDivergenceError(ArithmeticError):
    """A non-finite value appeared during integration.

    Args:
        step: Step index ``k`` at which the value was produced.
        time: Simulation time of that step [s].
        quantity: Name of the offending quantity (``"quaternion"``,
            ``"angular_velocity"``, ``"orbit_state"`` or
            ``"disturbance_torque"``).
        component: Index of the first non-finite element of *quantity*.
    """

    def __init__(self, step: int, time: float, quantity: str, component: int) -> None:
        super().__init__(
            f"non-finite {quantity}[{component}] at step {step} (t = {time:g} s)"
        )
        self.step = step
        self.time = time
        self.quantity = quantity
        self.component = component
