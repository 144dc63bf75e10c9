# /// script
# requires-python = ">=3.11"
# dependencies = ["typer>=0.9.0", "flexspacecraft"]
#
# [tool.uv.sources]
# flexspacecraft = { path = ".." }
# ///
"""Run an attitude-orbit simulation of a rigid spacecraft.

Simulates a spacecraft with a diagonal inertia tensor on a circular orbit,
optionally perturbed by the gravity gradient torque, then checks the
quaternion constraint and prints a summary of the trajectories.

Requires flexspacecraft to be installed (``uv pip install -e .`` from the
repo root).

Usage:
    uv run examples/run_simulation.py [OPTIONS]

Examples:
    # Free spin about the z-axis for 10 s
    uv run examples/run_simulation.py --simulationtime 10 --samplingtime 0.01

    # One orbit with gravity gradient, exported to CSV
    uv run examples/run_simulation.py --gravity-gradient --simulationtime 5700 \\
        --samplingtime 1.0 --wz 0.0 --output run.csv
"""

import enum
import logging
import time
from pathlib import Path
from typing import Annotated

import jax.numpy as jnp
import typer

from flexspacecraft import (
    DisturbanceConfig,
    InitData,
    OrbitInfo,
    SimulationConfig,
    create_dynamics_model,
    euler_angles,
    quaternion_constraint,
    run_simulation,
    set_dtype,
    to_dataframe,
)

set_dtype(jnp.float64)  # Must be before any JIT compilation


class OrbitModel(enum.StrEnum):
    """Orbit propagation model."""

    keplerian = "keplerian"
    two_body = "two_body"


class Method(enum.StrEnum):
    """Attitude integrator."""

    rk4 = "rk4"
    euler = "euler"


def main(
    simulationtime: Annotated[float, typer.Option(help="Simulated duration in seconds")] = 10.0,
    samplingtime: Annotated[float, typer.Option(help="Sampling period in seconds")] = 0.01,
    method: Annotated[Method, typer.Option(help="Attitude integrator")] = Method.rk4,
    ixx: Annotated[float, typer.Option(help="Principal inertia about x [kg m^2]")] = 10.0,
    iyy: Annotated[float, typer.Option(help="Principal inertia about y [kg m^2]")] = 20.0,
    izz: Annotated[float, typer.Option(help="Principal inertia about z [kg m^2]")] = 30.0,
    wx: Annotated[float, typer.Option(help="Initial angular velocity about x [rad/s]")] = 0.0,
    wy: Annotated[float, typer.Option(help="Initial angular velocity about y [rad/s]")] = 0.0,
    wz: Annotated[float, typer.Option(help="Initial angular velocity about z [rad/s]")] = 0.1,
    altitude: Annotated[float, typer.Option(help="Circular orbit altitude in km")] = 500.0,
    inclination: Annotated[float, typer.Option(help="Orbit inclination in degrees")] = 51.6,
    orbit_model: Annotated[OrbitModel, typer.Option(help="Orbit model")] = OrbitModel.keplerian,
    gravity_gradient: Annotated[
        bool, typer.Option(help="Enable the gravity gradient torque")
    ] = False,
    output: Annotated[
        Path | None, typer.Option(help="Write the trajectories to this CSV file")
    ] = None,
    verbose: Annotated[bool, typer.Option(help="Enable INFO logging")] = False,
) -> None:
    """Simulate the attitude of a rigid spacecraft on a circular orbit."""
    if verbose:
        logging.basicConfig(level=logging.INFO, format="%(name)s: %(message)s")

    model = create_dynamics_model(
        "rigid_body", inertia=jnp.diag(jnp.array([ixx, iyy, izz]))
    )
    initvalue = InitData(quaternion=[0.0, 0.0, 0.0, 1.0], angular_velocity=[wx, wy, wz])
    orbitinfo = OrbitInfo.circular(
        altitude * 1e3, inclination=inclination, model=orbit_model.value, use_degrees=True
    )
    distconfig = DisturbanceConfig(gravity_gradient=gravity_gradient)
    simconfig = SimulationConfig(simulationtime, samplingtime, method=method.value)

    print(f"Simulating {simconfig.datanum} samples ({simulationtime} s at {samplingtime} s)")
    t0 = time.perf_counter()
    result = run_simulation(model, initvalue, orbitinfo, distconfig, simconfig)
    result.attitude.state.quaternion().block_until_ready()
    print(f"  Finished in {time.perf_counter() - t0:.2f}s")

    quaternions = result.attitude.quaternion()
    omega = result.attitude.angular_velocity()
    print(f"  Quaternion constraint satisfied: {quaternion_constraint(quaternions)}")
    print(f"  Final quaternion:       {quaternions[-1].tolist()}")
    print(f"  Final angular velocity: {omega[-1].tolist()} rad/s")
    print(f"  Final roll/pitch/yaw:   {jnp.rad2deg(euler_angles(quaternions[-1:]))[0].tolist()} deg")

    if output is not None:
        to_dataframe(result).write_csv(output)
        print(f"  Wrote {output}")

    print("\nDone.")


if __name__ == "__main__":
    typer.run(main)
