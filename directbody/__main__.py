"""
Command line entry point: ``python -m directbody [N] [T] [options]``.

Parses the run parameters into a SimConfig, runs a SimulationDriver and maps the outcome
onto the process exit status: EXIT_OK on completion, EXIT_ABORT when storage or
initialisation fails, EXIT_INVALID for rejected input.
"""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from .errors import (
	EXIT_ABORT,
	EXIT_INVALID,
	EXIT_OK,
	InitializationError,
	InvalidInputError,
	ResourceExhaustionError,
)
from .reporters import ConsoleReporter
from .sim_config import SimConfig
from .simulation import SimulationDriver


def build_parser() -> argparse.ArgumentParser:
	defaults = SimConfig()
	p = argparse.ArgumentParser(
		prog="directbody",
		description="Direct-summation gravitational N-body simulation with unit timesteps.",
	)
	p.add_argument("n_particles", nargs="?", type=int, default=defaults.n_particles,
				   help="number of particles (default: %(default)s)")
	p.add_argument("timesteps", nargs="?", type=int, default=defaults.timesteps,
				   help="number of unit timesteps (default: %(default)s)")
	p.add_argument("--seed", type=int, default=defaults.seed,
				   help="seed for the initial-condition sampler (default: %(default)s)")
	p.add_argument("--gravity", type=float, default=defaults.G,
				   help="gravitational constant (default: %(default)s)")
	p.add_argument("--softening", type=float, default=defaults.softening_floor,
				   help="minimum separation used in the force law (default: %(default)s)")
	p.add_argument("--n-jobs", type=int, default=defaults.n_jobs,
				   help="worker threads per step, -1 for all cores (default: %(default)s)")
	p.add_argument("--block-size", type=int, default=defaults.block_size,
				   help="particle rows per parallel task (default: %(default)s)")
	p.add_argument("--dump-particles", action="store_true",
				   help="print the particle table after initialisation and at the end")
	p.add_argument("--quiet", action="store_true", help="suppress progress output")
	return p


def config_from_args(args: argparse.Namespace) -> SimConfig:
	return SimConfig(
		n_particles=args.n_particles,
		timesteps=args.timesteps,
		G=args.gravity,
		softening_floor=args.softening,
		seed=args.seed,
		n_jobs=args.n_jobs,
		block_size=args.block_size,
		dump_particles=args.dump_particles,
		quiet=args.quiet,
	)


def main(argv: Optional[List[str]] = None) -> int:
	args = build_parser().parse_args(argv)
	cfg = config_from_args(args)
	reporter = ConsoleReporter(quiet=cfg.quiet)
	driver = SimulationDriver(cfg, reporter)

	try:
		driver.run()
	except ResourceExhaustionError as exc:
		reporter.error(f"ERROR in allocation for {exc.resource} ({exc.n} particles)")
		return EXIT_ABORT
	except InitializationError as exc:
		reporter.error(f"ERROR during initialisation: {exc}")
		return EXIT_ABORT
	except InvalidInputError as exc:
		reporter.error(f"invalid input: {exc}")
		return EXIT_INVALID
	return EXIT_OK


if __name__ == "__main__":
	sys.exit(main())
