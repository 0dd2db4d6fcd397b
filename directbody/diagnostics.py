from __future__ import annotations
import math
from typing import Tuple, TYPE_CHECKING
import numpy as np

from .errors import InvalidInputError
if TYPE_CHECKING:
    from .particle_system import ParticleSystem

"""
This module computes summary metrics of a ParticleSystem for verification. total_mass sums the particle masses and center_of_mass returns the mass-weighted mean position given a precomputed total mass, raising InvalidInputError when that total is not positive rather than returning NaN. The Diagnostics class bundles both and adds kinetic energy and linear momentum. Everything here is a pure read of the current state; nothing feeds back into the dynamics.

"""

Vec3 = Tuple[float, float, float]


def total_mass(system: "ParticleSystem") -> float:
	return float(np.sum(system.mass))


def center_of_mass(system: "ParticleSystem", total_mass: float) -> Vec3:
	M = float(total_mass)
	if not (math.isfinite(M) and M > 0.0):
		raise InvalidInputError(f"centre of mass needs a positive total mass, got {M}")
	com = np.einsum("i,ij->j", system.mass, system.pos) / M
	return float(com[0]), float(com[1]), float(com[2])


class Diagnostics:

	def __init__(self, system: "ParticleSystem"):
		self.system = system

	def total_mass(self) -> float:
		return total_mass(self.system)

	def center_of_mass(self, M: float | None = None) -> Vec3:
		if M is None:
			M = self.total_mass()
		return center_of_mass(self.system, M)

	def kinetic_energy(self) -> float:
		v = self.system.vel
		return 0.5 * float(np.sum(self.system.mass * np.sum(v * v, axis=1)))

	def linear_momentum(self) -> Vec3:
		p = np.einsum("i,ij->j", self.system.mass, self.system.vel)
		return float(p[0]), float(p[1]), float(p[2])
