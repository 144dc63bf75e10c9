"""Attitude-orbit integration driver.

The driver owns the sampling clock.  For every step ``k = 1 .. N-1``
(``t = k * samplingtime``) it

1. advances the orbit to ``t``,
2. evaluates the combined disturbance torque from the attitude at
   ``k - 1`` and the orbit at ``t``,
3. integrates the attitude over one sampling period,
4. renormalizes the quaternion,
5. derives the body frame by rotating the reference frame, and
6. writes the sample into the preallocated trajectories at index ``k``.

The whole loop is one jitted ``jax.lax.while_loop`` whose carry holds
the trajectory buffers; writes use ``.at[k].set`` and are performed in
place by XLA.  The loop also stops at the first non-finite value, which
is then reported as a :class:`~flexspacecraft.errors.NumericalDivergenceError`.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Mapping

import jax
import jax.numpy as jnp

from flexspacecraft.attitude_dynamics import RigidBodyModel, create_attitude_stepper
from flexspacecraft.config import get_dtype
from flexspacecraft.disturbances import DisturbanceConfig, create_disturbance_torque
from flexspacecraft.errors import ConfigurationError, NumericalDivergenceError
from flexspacecraft.frames import body_frame, lvlh_frame
from flexspacecraft.orbits import OrbitInfo, create_orbit_propagator
from flexspacecraft.simulation.config import SimulationConfig
from flexspacecraft.simulation.result import AttitudeData, SimulationResult
from flexspacecraft.timeline import (
    FrameTrajectory,
    InitData,
    OrbitTrajectory,
    init_simulation_data,
)

logger = logging.getLogger(__name__)

# Quantities checked for finiteness after every step, in reporting order
_CHECKED_QUANTITIES = ("orbit_state", "disturbance_torque", "quaternion", "angular_velocity")


class SimulationStatus(enum.Enum):
    """Lifecycle of a :class:`Simulation`.  A run is single pass."""

    INITIALIZED = "initialized"
    RUNNING = "running"
    COMPLETE = "complete"
    FAILED = "failed"


class Simulation:
    """One attitude-orbit simulation run.

    Every input is checked when the object is constructed, so
    configuration errors surface before any integration.  :meth:`run`
    may be called once.

    Args:
        model: Spacecraft dynamics model.
        initvalue: Initial attitude state and reference frame.
        orbitinfo: Orbit definition.
        distconfig: Disturbance configuration, or a mapping accepted by
            :meth:`DisturbanceConfig.from_mapping`, or ``None`` for no
            disturbances.
        simconfig: Simulation clock configuration.

    Raises:
        ConfigurationError: If an input record is of the wrong type or the
            records are inconsistent.

    Examples:
        ```python
        from flexspacecraft.attitude_dynamics import RigidBodyModel, SpacecraftInertia
        from flexspacecraft.orbits import OrbitInfo
        from flexspacecraft.simulation import Simulation, SimulationConfig
        from flexspacecraft.timeline import InitData

        sim = Simulation(
            RigidBodyModel(SpacecraftInertia.from_principal(10.0, 20.0, 30.0)),
            InitData([0.0, 0.0, 0.0, 1.0], [0.0, 0.0, 0.1]),
            OrbitInfo.circular(500e3),
            None,
            SimulationConfig(simulationtime=10.0, samplingtime=0.01),
        )
        time, attitude, orbit = sim.run()
        ```
    """

    def __init__(
        self,
        model: RigidBodyModel,
        initvalue: InitData,
        orbitinfo: OrbitInfo,
        distconfig: DisturbanceConfig | Mapping | None,
        simconfig: SimulationConfig,
    ) -> None:
        if not isinstance(model, RigidBodyModel):
            raise ConfigurationError("model", f"expected RigidBodyModel, got {type(model).__name__}")
        if not isinstance(initvalue, InitData):
            raise ConfigurationError("initvalue", f"expected InitData, got {type(initvalue).__name__}")
        if not isinstance(orbitinfo, OrbitInfo):
            raise ConfigurationError("orbitinfo", f"expected OrbitInfo, got {type(orbitinfo).__name__}")
        if not isinstance(simconfig, SimulationConfig):
            raise ConfigurationError(
                "simconfig", f"expected SimulationConfig, got {type(simconfig).__name__}"
            )
        if distconfig is None:
            distconfig = DisturbanceConfig.none()
        elif isinstance(distconfig, Mapping):
            distconfig = DisturbanceConfig.from_mapping(distconfig)
        elif not isinstance(distconfig, DisturbanceConfig):
            raise ConfigurationError(
                "distconfig", f"expected DisturbanceConfig, got {type(distconfig).__name__}"
            )

        self.model = model
        self.initvalue = initvalue
        self.orbitinfo = orbitinfo
        self.distconfig = distconfig
        self.simconfig = simconfig

        self._propagator = create_orbit_propagator(orbitinfo, simconfig.samplingtime)
        self._stepper = create_attitude_stepper(model, simconfig.method)
        self._torque = create_disturbance_torque(distconfig, model.inertia.I)
        self._status = SimulationStatus.INITIALIZED

    @property
    def status(self) -> SimulationStatus:
        return self._status

    def run(self) -> SimulationResult:
        """Integrate the full configured duration.

        Returns:
            SimulationResult: Time axis, attitude and orbit trajectories.

        Raises:
            RuntimeError: If the simulation has already been run.
            NumericalDivergenceError: If a non-finite value is produced.
        """
        if self._status is not SimulationStatus.INITIALIZED:
            raise RuntimeError(f"Simulation already run (status: {self._status.value})")
        self._status = SimulationStatus.RUNNING

        simconfig = self.simconfig
        datanum = simconfig.datanum
        Ts = simconfig.samplingtime
        logger.info(
            "Starting simulation: %d samples at %g s, integrator '%s', disturbances %s",
            datanum, Ts, simconfig.method, self.distconfig.enabled_models() or "none",
        )

        state, bodyframe = init_simulation_data(datanum, self.initvalue, Ts)
        x0 = self._propagator.initial_state
        lvlh = FrameTrajectory.init(datanum, lvlh_frame(x0), Ts)
        orbit = OrbitTrajectory.init(datanum, x0, lvlh, Ts)

        try:
            state, bodyframe, orbit, failure = self._integrate(state, bodyframe, orbit)
        except Exception:
            self._status = SimulationStatus.FAILED
            raise

        code, component, step = (int(v) for v in failure)
        if code >= 0:
            self._status = SimulationStatus.FAILED
            raise NumericalDivergenceError(
                step=step,
                time=step * Ts,
                quantity=_CHECKED_QUANTITIES[code],
                component=component,
            )

        self._status = SimulationStatus.COMPLETE
        logger.info("Simulation complete: %d samples", datanum)
        return SimulationResult(
            time=simconfig.time(),
            attitude=AttitudeData(state=state, bodyframe=bodyframe),
            orbit=orbit,
        )

    def _integrate(self, state, bodyframe, orbit):
        _float = get_dtype()
        datanum = state.datanum
        Ts = self.simconfig.samplingtime
        reference = self.initvalue.reference_frame
        stepper = self._stepper
        torque_fn = self._torque
        advance = self._propagator.advance

        def cond(carry):
            k, *_, code, _component, _step = carry
            return (k < datanum) & (code < 0)

        def body(carry):
            k, q, w, x_orb, state, bodyframe, orbit, _, _, _ = carry
            t_prev = (k - 1).astype(_float) * Ts
            t = k.astype(_float) * Ts

            x_orb = advance(t_prev, x_orb)
            tau = torque_fn(t, q, w, x_orb)
            q, w = stepper(q, w, tau, Ts)

            state = state.write(k, q, w)
            bodyframe = bodyframe.write(k, body_frame(q, reference))
            orbit = orbit.write(k, x_orb, lvlh_frame(x_orb))

            checked = (x_orb, tau, q, w)
            bad = [~jnp.all(jnp.isfinite(v)) for v in checked]
            code = jnp.select(bad, [jnp.int32(i) for i in range(len(checked))], -1)
            component = jnp.select(bad, [jnp.argmax(~jnp.isfinite(v)) for v in checked], 0)
            return (k + 1, q, w, x_orb, state, bodyframe, orbit,
                    code.astype(jnp.int32), component.astype(jnp.int32), k)

        @jax.jit
        def loop(state, bodyframe, orbit):
            q0, w0 = state[0]
            carry = (jnp.int32(1), q0, w0, orbit[0], state, bodyframe, orbit,
                     jnp.int32(-1), jnp.int32(0), jnp.int32(0))
            carry = jax.lax.while_loop(cond, body, carry)
            _, _, _, _, state, bodyframe, orbit, code, component, step = carry
            return state, bodyframe, orbit, (code, component, step)

        return loop(state, bodyframe, orbit)


def run_simulation(
    model: RigidBodyModel,
    initvalue: InitData,
    orbitinfo: OrbitInfo,
    distconfig: DisturbanceConfig | Mapping | None,
    simconfig: SimulationConfig,
) -> SimulationResult:
    """Construct a :class:`Simulation` and run it.

    Args:
        model: Spacecraft dynamics model.
        initvalue: Initial attitude state and reference frame.
        orbitinfo: Orbit definition.
        distconfig: Disturbance configuration (or mapping, or ``None``).
        simconfig: Simulation clock configuration.

    Returns:
        SimulationResult: ``(time, attitude, orbit)``.

    Raises:
        ConfigurationError: If the inputs are invalid or inconsistent.
        NumericalDivergenceError: If a non-finite value is produced.
    """
    return Simulation(model, initvalue, orbitinfo, distconfig, simconfig).run()
