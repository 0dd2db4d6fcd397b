from __future__ import annotations
from typing import TYPE_CHECKING, List, Tuple
import numpy as np
from joblib import Parallel, delayed, effective_n_jobs

from .errors import ResourceExhaustionError
from .forces import block_accelerations
from .geometry_cache import BlockScratch
from .particle_system import Snapshot

if TYPE_CHECKING:
	from .particle_system import ParticleSystem
	from .sim_config import SimConfig

"""
This central module implements StepIntegrator, which advances a ParticleSystem by one unit timestep with direct all-pairs gravity. Each step first captures a Snapshot of masses and positions for every particle, then maps over worker slots, each slot owning a fixed share of the contiguous blocks of particle rows. For each of its blocks a slot computes the net acceleration of those rows from the snapshot, adds it to their velocities, and sets their positions to the snapshot position plus the new velocity. Slots read only the snapshot and the masses of their own rows, and write only their own rows of the velocity and position arrays, so they can run concurrently on joblib's threading backend with numpy releasing the GIL inside the kernels. The map returning is the end-of-step barrier. The snapshot and one BlockScratch per slot are allocated by bind, once per particle count, so a step itself allocates no particle-sized storage; a MemoryError that escapes a step anyway is reported as ResourceExhaustionError. There is no timestep scaling: one step has unit duration, and velocity accumulates the summed acceleration directly.

"""

class StepIntegrator:
	def __init__(
		self,
		G: float = 0.001,
		softening_floor: float = 0.01,
		*,
		n_jobs: int = 1,
		block_size: int = 64,
	) -> None:
		self.G = float(G)
		self.softening_floor = float(softening_floor)
		self.n_jobs = int(n_jobs)
		self.block_size = max(1, int(block_size))
		self.step_count = 0
		self._snapshot: Snapshot | None = None
		self._scratch: List[BlockScratch] = []
		self._slot_blocks: List[List[Tuple[int, int]]] = []

	@classmethod
	def from_config(cls, cfg: "SimConfig") -> "StepIntegrator":
		return cls(
			G=cfg.G,
			softening_floor=cfg.softening_floor,
			n_jobs=cfg.n_jobs,
			block_size=cfg.block_size,
		)

	@property
	def snapshot(self) -> Snapshot | None:
		return self._snapshot

	@property
	def scratch(self) -> List[BlockScratch]:
		return self._scratch

	def _blocks(self, n: int) -> List[Tuple[int, int]]:
		return [(start, min(start + self.block_size, n)) for start in range(0, n, self.block_size)]

	def _n_slots(self, n_blocks: int) -> int:
		if n_blocks == 0:
			return 0
		if self.n_jobs == 1:
			return 1
		return max(1, min(effective_n_jobs(self.n_jobs), n_blocks))

	def bind(self, system: "ParticleSystem") -> Snapshot:
		n = system.n_bodies
		snap = self._snapshot
		if snap is not None and snap.n_bodies == n:
			return snap

		blocks = self._blocks(n)
		n_slots = self._n_slots(len(blocks))
		rows = min(self.block_size, n)
		try:
			scratch = [BlockScratch(rows, n) for _ in range(n_slots)]
		except MemoryError as exc:
			raise ResourceExhaustionError("step scratch", n) from exc

		self._snapshot = None
		self._scratch = scratch
		self._slot_blocks = [blocks[w::n_slots] for w in range(n_slots)]
		snap = Snapshot(n)
		self._snapshot = snap
		return snap

	def _advance_block(
		self,
		system: "ParticleSystem",
		snap: Snapshot,
		start: int,
		stop: int,
		scratch: BlockScratch,
	) -> None:
		acc = block_accelerations(
			snap.pos,
			snap.mass,
			system.mass[start:stop],
			start,
			stop,
			G=self.G,
			floor=self.softening_floor,
			scratch=scratch,
		)
		vel = system.vel
		pos = system.pos
		vel[start:stop] += acc
		np.add(snap.pos[start:stop], vel[start:stop], out=pos[start:stop])

	def _advance_slot(self, system: "ParticleSystem", snap: Snapshot, slot: int) -> None:
		scratch = self._scratch[slot]
		for start, stop in self._slot_blocks[slot]:
			self._advance_block(system, snap, start, stop, scratch)

	def step(self, system: "ParticleSystem") -> None:
		snap = self.bind(system).capture(system)

		n_slots = len(self._scratch)
		try:
			if n_slots < 2:
				for slot in range(n_slots):
					self._advance_slot(system, snap, slot)
			else:
				Parallel(n_jobs=n_slots, prefer="threads", require="sharedmem")(
					delayed(self._advance_slot)(system, snap, slot)
					for slot in range(n_slots)
				)
		except MemoryError as exc:
			raise ResourceExhaustionError("step scratch", system.n_bodies) from exc

		self.step_count += 1

	def run(self, system: "ParticleSystem", steps: int) -> None:
		for _ in range(int(steps)):
			self.step(system)
