"""
This module collects the console output of a direct-summation run in ConsoleReporter:
the initialisation acknowledgement, the t=0 centre of mass, one line per completed step
(three decimals), the elapsed wall-clock time and the final centre of mass (five
decimals). The optional particle table is followed by the kinetic energy and linear
momentum of the same state. Output goes through print between steps only, never from
inside a step.
A quiet reporter drops progress lines but still prints errors, so an aborted run always
says which resource or stage failed.
"""

from __future__ import annotations
from typing import Sequence, TYPE_CHECKING

from .diagnostics import Diagnostics

if TYPE_CHECKING:
	from .particle_system import ParticleSystem


def _fmt(com: Sequence[float], spec: str) -> str:
	return "(" + ",".join(format(float(c), spec) for c in com) + ")"


class ConsoleReporter:
	def __init__(self, quiet: bool = False) -> None:
		self.quiet = bool(quiet)

	def _emit(self, msg: str, end: str = "\n") -> None:
		if not self.quiet:
			print(msg, end=end, flush=True)

	def initializing(self, n: int) -> None:
		self._emit(f"Initializing for {n} particles in x,y,z space...", end="")

	def allocated(self) -> None:
		self._emit("  (allocated)  ", end="")

	def init_complete(self) -> None:
		self._emit("  INIT COMPLETE")

	def initial_com(self, com: Sequence[float]) -> None:
		self._emit(f"At t=0, centre of mass = {_fmt(com, 'g')}")

	def integrating(self, timesteps: int) -> None:
		self._emit(f"Now to integrate for {timesteps} timesteps")

	def step(self, k: int, com: Sequence[float]) -> None:
		self._emit(f"End of timestep {k}, centre of mass = {_fmt(com, '.3f')}")

	def finished(self, n: int, timesteps: int, elapsed: float) -> None:
		self._emit(f"Time to init+solve {n} molecules for {timesteps} timesteps is {elapsed:g} seconds")

	def final_com(self, com: Sequence[float]) -> None:
		self._emit(f"Centre of mass = {_fmt(com, '.5f')}")

	def particles(self, system: "ParticleSystem") -> None:
		if self.quiet:
			return
		frame = system.to_frame()
		frame.index.name = "num"
		print(frame.to_string(), flush=True)
		diag = Diagnostics(system)
		px, py, pz = diag.linear_momentum()
		print(f"kinetic energy = {diag.kinetic_energy():g}, "
			  f"linear momentum = ({px:g},{py:g},{pz:g})", flush=True)

	def error(self, msg: str) -> None:
		print(f"\n [error] {msg} - aborting", flush=True)
