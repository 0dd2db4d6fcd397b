"""
This module generates the pseudo-random initial conditions for a direct-summation run.

The InitialConditionGenerator class fills a ParticleSystem with uniformly sampled
positions (x and y in [-50, 50), z in [0, 100)), velocity components in [-5, 5) and masses
in [0.1, 10.1). Reproducibility hinges on the sampling order: for each particle in turn
the generator consumes x, y, z, vx, vy, vz, mass from the stream before moving on to the
next particle. Drawing one (N, 7) block of uniforms in row-major order from a seeded
numpy Generator consumes the stream in exactly that order, so the block is sliced into
columns afterwards. The GeneratorConfig dataclass carries the ranges and the seed.
Storage failure surfaces as ResourceExhaustionError and any sampler failure (an
exception from the random source, or samples outside [0, 1)) as InitializationError;
both are fatal for the run.
"""

from __future__ import annotations

import numpy as np
from dataclasses import dataclass
from typing import Optional, Tuple

from .errors import InitializationError, ResourceExhaustionError
from .particle_system import ParticleSystem


# column order of one particle's draws
_X, _Y, _Z, _VX, _VY, _VZ, _M = range(7)
_DRAWS_PER_PARTICLE = 7


@dataclass
class GeneratorConfig:
	min_pos: float = -50.0
	pos_span: float = 100.0
	min_z: float = 0.0
	max_vel: float = 5.0
	min_mass: float = 0.1
	mass_span: float = 10.0
	seed: Optional[int] = 1


class InitialConditionGenerator:

	def __init__(self, config: GeneratorConfig | None = None, rng: np.random.Generator | None = None):
		self.config: GeneratorConfig = config or GeneratorConfig()
		if rng is None:
			rng = np.random.default_rng(self.config.seed)
		self.rng = rng

	def _draw(self, n: int) -> np.ndarray:
		try:
			u = self.rng.random((n, _DRAWS_PER_PARTICLE))
		except MemoryError as exc:
			raise ResourceExhaustionError("random samples", n) from exc
		except Exception as exc:
			raise InitializationError(f"random sampler failed: {exc}") from exc

		u = np.asarray(u, dtype=np.float64)
		if u.shape != (n, _DRAWS_PER_PARTICLE):
			raise InitializationError(
				f"random sampler returned shape {u.shape}, expected {(n, _DRAWS_PER_PARTICLE)}"
			)
		if not np.all(np.isfinite(u)) or np.any(u < 0.0) or np.any(u >= 1.0):
			raise InitializationError("random sampler returned values outside [0, 1)")
		return u

	def fill(self, system: ParticleSystem) -> ParticleSystem:
		cfg = self.config
		u = self._draw(system.n_bodies)

		pos = system.pos
		vel = system.vel
		pos[:, 0] = cfg.min_pos + cfg.pos_span * u[:, _X]
		pos[:, 1] = cfg.min_pos + cfg.pos_span * u[:, _Y]
		pos[:, 2] = cfg.min_z + cfg.pos_span * u[:, _Z]
		vel[:, 0] = -cfg.max_vel + 2.0 * cfg.max_vel * u[:, _VX]
		vel[:, 1] = -cfg.max_vel + 2.0 * cfg.max_vel * u[:, _VY]
		vel[:, 2] = -cfg.max_vel + 2.0 * cfg.max_vel * u[:, _VZ]
		system.mass[:] = cfg.min_mass + cfg.mass_span * u[:, _M]
		return system

	def create_system(self, n_bodies: int) -> ParticleSystem:
		return self.fill(ParticleSystem.allocate(n_bodies))

	def generate_single(self, n_bodies: int) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
		system = self.create_system(n_bodies)
		return system.mass, system.pos, system.vel
