"""
This module provides validation utilities for direct-summation runs.

The SimulationValidator class offers static methods that check particle states (positive
finite masses, finite positions and velocities, matching (N,3) shapes) and run
configurations (at least one particle, a non-negative step count, a finite gravitational
constant, a positive softening floor, sane parallel settings). The check_* methods raise
InvalidInputError so bad input is rejected before any computation; state_is_valid gives a
plain boolean for callers that only need a yes or no, and report_invalid_state prints the
offending pieces for debugging.
"""

from __future__ import annotations
import math
from typing import TYPE_CHECKING
import numpy as np

from .errors import InvalidInputError

if TYPE_CHECKING:
    from .sim_config import SimConfig




class SimulationValidator:

	@staticmethod
	def _state_problem(masses, positions, velocities) -> str | None:
		if masses is None or positions is None or velocities is None:
			return "masses, positions and velocities are all required"

		m = np.asarray(masses, dtype=float)
		r = np.asarray(positions, dtype=float)
		v = np.asarray(velocities, dtype=float)

		if m.ndim != 1:
			return f"masses must be one-dimensional, got shape {m.shape}"
		if r.ndim != 2 or r.shape[1] != 3:
			return f"positions must have shape (N,3), got {r.shape}"
		if v.shape != r.shape:
			return f"velocities shape {v.shape} does not match positions shape {r.shape}"
		if r.shape[0] != m.size:
			return f"{m.size} masses given for {r.shape[0]} positions"
		if not np.all(np.isfinite(m)) or np.any(m <= 0.0):
			return "all masses must be positive finite numbers"
		if not np.all(np.isfinite(r)):
			return "positions must be finite"
		if not np.all(np.isfinite(v)):
			return "velocities must be finite"
		return None

	@staticmethod
	def state_is_valid(masses, positions, velocities) -> bool:
		return SimulationValidator._state_problem(masses, positions, velocities) is None

	@staticmethod
	def check_state(masses, positions, velocities) -> None:
		problem = SimulationValidator._state_problem(masses, positions, velocities)
		if problem is not None:
			raise InvalidInputError(problem)

	@staticmethod
	def _is_int(value) -> bool:
		return isinstance(value, (int, np.integer)) and not isinstance(value, bool)

	@staticmethod
	def _is_real(value) -> bool:
		return isinstance(value, (int, float, np.integer, np.floating)) and not isinstance(value, bool)

	@staticmethod
	def check_config(cfg: "SimConfig") -> None:
		is_int = SimulationValidator._is_int
		is_real = SimulationValidator._is_real

		n = cfg.n_particles
		if not is_int(n):
			raise InvalidInputError(f"particle count must be an integer, got {n!r}")
		if n < 1:
			# total mass would be zero and the centre of mass undefined
			raise InvalidInputError(f"particle count must be at least 1, got {n}")
		t = cfg.timesteps
		if not is_int(t) or t < 0:
			raise InvalidInputError(f"timesteps must be a non-negative integer, got {t!r}")
		if not is_real(cfg.G) or not math.isfinite(float(cfg.G)):
			raise InvalidInputError(f"gravitational constant must be a finite number, got {cfg.G!r}")
		floor = cfg.softening_floor
		if not is_real(floor) or not (math.isfinite(float(floor)) and floor > 0.0):
			raise InvalidInputError(f"softening floor must be a positive number, got {floor!r}")
		if not is_int(cfg.n_jobs) or cfg.n_jobs == 0:
			raise InvalidInputError(f"n_jobs must be a non-zero integer, got {cfg.n_jobs!r}")
		if not is_int(cfg.block_size) or cfg.block_size < 1:
			raise InvalidInputError(f"block_size must be an integer of at least 1, got {cfg.block_size!r}")

	@staticmethod
	def report_invalid_state(label: str, masses=None, positions=None, velocities=None) -> None:
		print(f"[invalid] {label}")
		problem = SimulationValidator._state_problem(masses, positions, velocities)
		if problem is not None:
			print(f"  {problem}")
		if masses is not None:
			print("masses", masses)
		if positions is not None:
			print("positions", positions)
		if velocities is not None:
			print("velocities", velocities)
