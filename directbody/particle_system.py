"""
This module owns the simulation state for direct-summation N-body runs.

The ParticleSystem class holds three float64 numpy arrays (mass of shape (N,), position
and velocity of shape (N,3)) whose length is fixed when the system is allocated; nothing
ever resizes them. Property setters accept whole arrays of matching shape and refuse
anything else, leaving the state untouched. Systems are obtained either empty through
allocate, which reports storage failure per array, or populated and validated through
from_arrays and from_bodies. The Snapshot class is the read side of a step: a pair of
buffers, allocated once for a given N, into which the integrator copies masses and
positions before any particle is updated. Between captures the snapshot arrays are
flagged read-only so nothing can write through them while a step is in flight.
"""

from __future__ import annotations
import numpy as np
import pandas as pd
from typing import List, Sequence, Tuple

from .body import Body
from .body_view import BodyView
from .errors import InvalidInputError, ResourceExhaustionError
from .simulation_validator import SimulationValidator




def _alloc(name: str, shape: Tuple[int, ...], n: int) -> np.ndarray:
	try:
		return np.empty(shape, dtype=np.float64)
	except MemoryError as exc:
		raise ResourceExhaustionError(name, n) from exc


class ParticleSystem:

	def __init__(self, mass: np.ndarray, pos: np.ndarray, vel: np.ndarray) -> None:
		self.n_bodies: int = int(mass.shape[0])
		self._mass: np.ndarray = mass
		self._pos: np.ndarray = pos
		self._vel: np.ndarray = vel

	@classmethod
	def allocate(cls, n: int) -> "ParticleSystem":
		n = int(n)
		if n < 0:
			raise InvalidInputError(f"particle count must be >= 0, got {n}")
		mass = _alloc("mass", (n,), n)
		pos = _alloc("position", (n, 3), n)
		vel = _alloc("velocity", (n, 3), n)
		return cls(mass, pos, vel)

	@classmethod
	def from_arrays(cls, masses, positions, velocities=None) -> "ParticleSystem":
		m = np.asarray(masses, dtype=np.float64).ravel()
		r = np.asarray(positions, dtype=np.float64)
		if r.ndim == 1 and r.size % 3 == 0:
			r = r.reshape(-1, 3)
		if velocities is None:
			v = np.zeros_like(r)
		else:
			v = np.asarray(velocities, dtype=np.float64)
			if v.ndim == 1 and v.size % 3 == 0:
				v = v.reshape(-1, 3)
		SimulationValidator.check_state(m, r, v)

		system = cls.allocate(m.shape[0])
		system._mass[...] = m
		system._pos[...] = r
		system._vel[...] = v
		return system

	@classmethod
	def from_bodies(cls, bodies: Sequence[Body]) -> "ParticleSystem":
		masses = [b.mass for b in bodies]
		positions = [(b.x, b.y, b.z) for b in bodies]
		velocities = [(b.vx, b.vy, b.vz) for b in bodies]
		return cls.from_arrays(masses, positions, velocities)

	@property
	def mass(self) -> np.ndarray:
		return self._mass

	@property
	def pos(self) -> np.ndarray:
		return self._pos

	@property
	def vel(self) -> np.ndarray:
		return self._vel

	@mass.setter
	def mass(self, value: np.ndarray) -> None:
		arr = np.asarray(value, dtype=np.float64).ravel()
		if arr.shape != self._mass.shape:
			print(f"[error] shape mismatch when assigning to mass: "
				  f"expected {self._mass.shape}, got {arr.shape}")
			return
		if np.any(arr <= 0) or not np.all(np.isfinite(arr)):
			print("[error] all masses must be positive finite numbers")
			return
		self._mass[...] = arr

	@pos.setter
	def pos(self, value: np.ndarray) -> None:
		arr = np.asarray(value, dtype=np.float64)
		if arr.ndim == 1:
			arr = arr.reshape(-1, 3)
		if arr.shape != self._pos.shape:
			print(f"[error] shape mismatch when assigning to pos: "
				  f"expected {self._pos.shape}, got {arr.shape}")
			return
		self._pos[...] = arr

	@vel.setter
	def vel(self, value: np.ndarray) -> None:
		arr = np.asarray(value, dtype=np.float64)
		if arr.ndim == 1:
			arr = arr.reshape(-1, 3)
		if arr.shape != self._vel.shape:
			print(f"[error] shape mismatch when assigning to vel: "
				  f"expected {self._vel.shape}, got {arr.shape}")
			return
		self._vel[...] = arr

	@property
	def bodies(self) -> List[BodyView]:
		return [BodyView(self, i) for i in range(self.n_bodies)]

	def __len__(self) -> int:
		return self.n_bodies

	def __getitem__(self, idx: int) -> BodyView:
		idx = int(idx)
		if idx < 0:
			idx += self.n_bodies
		if not 0 <= idx < self.n_bodies:
			raise IndexError(f"particle index {idx} out of range for {self.n_bodies} particles")
		return BodyView(self, idx)

	def copy(self) -> "ParticleSystem":
		return ParticleSystem(self._mass.copy(), self._pos.copy(), self._vel.copy())

	def to_frame(self) -> pd.DataFrame:
		return pd.DataFrame({
			"x": self._pos[:, 0],
			"y": self._pos[:, 1],
			"z": self._pos[:, 2],
			"vx": self._vel[:, 0],
			"vy": self._vel[:, 1],
			"vz": self._vel[:, 2],
			"mass": self._mass,
		})

	def __repr__(self) -> str:
		return f"ParticleSystem(n_bodies={self.n_bodies})"


class Snapshot:
	"""Step-start copy of masses and positions.

	The buffers are allocated once and refilled by ``capture``; outside of a capture
	they are read-only.
	"""

	def __init__(self, n: int) -> None:
		self.n_bodies = int(n)
		self._mass = _alloc("snapshot mass", (self.n_bodies,), self.n_bodies)
		self._pos = _alloc("snapshot position", (self.n_bodies, 3), self.n_bodies)
		self._mass.fill(0.0)
		self._pos.fill(0.0)
		self._freeze()

	@property
	def mass(self) -> np.ndarray:
		return self._mass

	@property
	def pos(self) -> np.ndarray:
		return self._pos

	def _freeze(self) -> None:
		self._mass.setflags(write=False)
		self._pos.setflags(write=False)

	def capture(self, system: ParticleSystem) -> "Snapshot":
		if system.n_bodies != self.n_bodies:
			raise InvalidInputError(
				f"snapshot sized for {self.n_bodies} particles, system has {system.n_bodies}"
			)
		self._mass.setflags(write=True)
		self._pos.setflags(write=True)
		try:
			np.copyto(self._mass, system.mass)
			np.copyto(self._pos, system.pos)
		finally:
			self._freeze()
		return self
