from __future__ import annotations
from dataclasses import dataclass

"""
This configuration module gathers every run parameter in the SimConfig dataclass: the
particle count, the number of unit timesteps, the gravitational constant, the softening
floor applied to pairwise separations, the seed for the initial-condition sampler, and
the data-parallel settings (worker count and rows per task) used by the step integrator.
Reporting switches for quiet runs and particle table dumps live here as well. The class
provides a copy method so drivers and tests can derive variants without mutating a
shared instance. Validation is left to SimulationValidator.check_config.

"""


@dataclass
class SimConfig:
	n_particles: int = 20000
	timesteps: int = 10
	G: float = 0.001
	softening_floor: float = 0.01
	seed: int | None = 1
	n_jobs: int = 1
	block_size: int = 64
	dump_particles: bool = False
	quiet: bool = False

	def copy(self) -> "SimConfig":
		new = object.__new__(SimConfig)
		new.__dict__ = dict(getattr(self, "__dict__", {}))
		return new
