"""
This module implements SimulationDriver, which owns the time loop of a direct-summation run.

The driver validates the configuration, allocates the particle system and the step
snapshot, fills the system with initial conditions, reports the t=0 centre of mass, and
then advances the system one unit step at a time, reporting the centre of mass after every
committed step. It finishes with the wall-clock time for initialisation plus stepping and
the final centre of mass. Progress is tracked through RunState: UNINITIALIZED, then
INITIALIZED, then STEPPING once per step, then COMPLETED; any failure moves the driver to
ABORTED and the exception propagates to the caller. Both end states are terminal. The
result of a completed run is a SimulationResult carrying the final system and a pandas
history of the centre of mass per step.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple

import pandas as pd

from .diagnostics import center_of_mass, total_mass
from .initial_condition_generator import GeneratorConfig, InitialConditionGenerator
from .integrator import StepIntegrator
from .particle_system import ParticleSystem
from .reporters import ConsoleReporter
from .sim_config import SimConfig
from .simulation_validator import SimulationValidator


Vec3 = Tuple[float, float, float]


class RunState(Enum):
	UNINITIALIZED = "uninitialized"
	INITIALIZED = "initialized"
	STEPPING = "stepping"
	COMPLETED = "completed"
	ABORTED = "aborted"


@dataclass
class SimulationResult:
	system: ParticleSystem
	total_mass: float
	initial_com: Vec3
	final_com: Vec3
	elapsed: float
	history: pd.DataFrame


class SimulationDriver:

	def __init__(
		self,
		cfg: SimConfig | None = None,
		reporter: ConsoleReporter | None = None,
		*,
		generator: InitialConditionGenerator | None = None,
		integrator: StepIntegrator | None = None,
	) -> None:
		self.cfg: SimConfig = cfg if cfg is not None else SimConfig()
		self.reporter = reporter if reporter is not None else ConsoleReporter(quiet=self.cfg.quiet)
		self.generator = generator
		self.integrator = integrator
		self.system: ParticleSystem | None = None
		self.steps_done = 0
		self._state = RunState.UNINITIALIZED

	@property
	def state(self) -> RunState:
		return self._state

	def run(self) -> SimulationResult:
		if self._state is not RunState.UNINITIALIZED:
			raise RuntimeError(f"driver already {self._state.value}; create a new one to run again")
		try:
			return self._run()
		except Exception:
			self._state = RunState.ABORTED
			raise

	def _run(self) -> SimulationResult:
		cfg = self.cfg
		rep = self.reporter
		start = time.perf_counter()

		SimulationValidator.check_config(cfg)
		n = int(cfg.n_particles)
		timesteps = int(cfg.timesteps)

		if self.generator is None:
			self.generator = InitialConditionGenerator(GeneratorConfig(seed=cfg.seed))
		if self.integrator is None:
			self.integrator = StepIntegrator.from_config(cfg)

		rep.initializing(n)
		system = ParticleSystem.allocate(n)
		self.integrator.bind(system)
		rep.allocated()

		self.generator.fill(system)
		rep.init_complete()
		self.system = system
		self._state = RunState.INITIALIZED

		M = total_mass(system)
		com0 = center_of_mass(system, M)
		rep.initial_com(com0)
		if cfg.dump_particles:
			rep.particles(system)

		rows: List[Tuple[int, float, float, float]] = [(0, *com0)]
		rep.integrating(timesteps)

		com = com0
		for k in range(1, timesteps + 1):
			self._state = RunState.STEPPING
			self.integrator.step(system)
			self.steps_done = k

			com = center_of_mass(system, M)
			rep.step(k, com)
			rows.append((k, *com))

		if cfg.dump_particles and timesteps > 0:
			rep.particles(system)

		elapsed = time.perf_counter() - start
		rep.finished(n, timesteps, elapsed)
		rep.final_com(com)
		self._state = RunState.COMPLETED

		history = pd.DataFrame(rows, columns=["step", "com_x", "com_y", "com_z"])
		return SimulationResult(
			system=system,
			total_mass=M,
			initial_com=com0,
			final_com=com,
			elapsed=elapsed,
			history=history,
		)
