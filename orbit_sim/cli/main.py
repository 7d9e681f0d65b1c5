"""CLI main entry point."""

import argparse
import logging
import sys

from orbit_sim.io.reporter import BinaryTrajectoryWriter, TextReporter
from orbit_sim.io.state_io import save_state
from orbit_sim.physics.diagnostics import Diagnostics
from orbit_sim.physics.force_calculator import METHODS
from orbit_sim.physics.nbody import NBodySystem
from orbit_sim.physics.simulator import (
    SECONDS_PER_DAY, SECONDS_PER_JULIAN_YEAR, SimulationParameters, Simulator
)
from orbit_sim.render.trajectory_plot import TrajectoryRecorder, plot_trajectories
from orbit_sim.utils.config import ConfigError, load_bodies, save_bodies

logger = logging.getLogger("orbit_sim")


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="orbit-sim",
        description="Orbit simulator - brute-force N-body integration with explicit Euler steps"
    )
    parser.add_argument('config', type=str,
                        help='Body configuration file (.ini, .yaml or .json)')

    # Simulation parameters
    parser.add_argument('-d', '--duration', type=float, default=SECONDS_PER_JULIAN_YEAR,
                        help='Total simulated time in seconds (default: one Julian year)')
    parser.add_argument('-t', '--delta', type=float, default=1.0,
                        help='Time step in seconds (default: 1.0)')
    parser.add_argument('-s', '--samplerate', type=float, default=float(SECONDS_PER_DAY),
                        help='Reporting interval in seconds (default: one day)')
    parser.add_argument('--method', type=str, default='direct', choices=list(METHODS),
                        help='Acceleration kernel (both give identical results)')

    # Output
    parser.add_argument('-q', '--quiet', action='store_true',
                        help='Do not print samples to stdout')
    parser.add_argument('-o', '--output', type=str, default=None,
                        help='Also write samples as raw float64 records to this file')
    parser.add_argument('--plot', type=str, default=None,
                        help='Save an orbit plot (e.g. orbits.png)')
    parser.add_argument('--plane', type=str, default='xy', choices=['xy', 'xz', 'yz'],
                        help='Projection plane for --plot')
    parser.add_argument('--save-state', type=str, default=None,
                        help='Save final state snapshot (.npz or .json)')
    parser.add_argument('--save-config', type=str, default=None,
                        help='Write final state as a new configuration (.ini, .yaml or .json)')
    parser.add_argument('--diagnostics', action='store_true',
                        help='Print energy drift and momentum at the end of the run')
    parser.add_argument('-v', '--verbose', action='count', default=0,
                        help='Increase log verbosity (-v info, -vv debug)')
    return parser


def configure_logging(verbosity: int):
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s", stream=sys.stderr)


def run_simulation(args, params: SimulationParameters) -> int:
    """Run a simulation from parsed arguments; returns the exit status."""
    try:
        bodies = load_bodies(args.config)
    except ConfigError as e:
        logger.error("%s", e)
        return 1

    system = NBodySystem(bodies, method=args.method)
    sim = Simulator(system, params)
    diagnostics = Diagnostics(system) if args.diagnostics else None

    handlers = []
    if not args.quiet:
        handlers.append(TextReporter(sys.stdout))
    recorder = None
    if args.plot:
        recorder = TrajectoryRecorder()
        handlers.append(recorder)
    writer = None
    if args.output:
        try:
            writer = BinaryTrajectoryWriter(args.output)
        except OSError as e:
            logger.error("Cannot open output file %s: %s", args.output, e.strerror or e)
            return 1
        handlers.append(writer)

    def on_sample(sample):
        for handler in handlers:
            handler(sample)

    logger.info("Bodies: %s; integrator: %s; method: %s",
                ", ".join(system.names), system.integrator.name, args.method)
    try:
        n_samples = sim.run(on_sample)
    finally:
        if writer:
            writer.close()

    logger.info("Completed %d steps, %d samples", sim.step_count, n_samples)
    if not system.is_finite():
        logger.warning("State is no longer finite; the configuration diverged")

    if diagnostics:
        K, U, E = diagnostics.energies()
        dE = diagnostics.relative_energy_drift() * 100
        print(f"K={K:.6e} U={U:.6e} E={E:.6e} dE/E0={dE:.4f}%", file=sys.stderr)
        print(f"Momentum: {diagnostics.momentum()}", file=sys.stderr)

    if recorder:
        path = plot_trajectories(recorder.names, recorder.trajectories, args.plot, plane=args.plane)
        print(f"Plot saved to {path}", file=sys.stderr)

    if args.save_state:
        save_state(system.bodies, args.save_state, metadata={
            'time': sim.time,
            'steps': sim.step_count,
            'delta': params.delta,
            'integrator': system.integrator.name,
        })
        print(f"State saved to {args.save_state}", file=sys.stderr)

    if args.save_config:
        try:
            save_bodies(system.bodies, args.save_config)
        except ValueError as e:
            logger.error("Configuration not saved: %s", e)
            return 1
        print(f"Configuration saved to {args.save_config}", file=sys.stderr)

    return 0


def main(argv=None) -> int:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    try:
        params = SimulationParameters(duration=args.duration, delta=args.delta, sample_rate=args.samplerate)
    except ValueError as e:
        parser.error(str(e))

    if args.save_state and not args.save_state.endswith(('.npz', '.json')):
        parser.error("--save-state must end in .npz or .json")

    return run_simulation(args, params)


if __name__ == '__main__':
    sys.exit(main())
