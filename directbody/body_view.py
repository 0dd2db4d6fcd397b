"""
This module implements BodyView, a proxy giving Body-like access to one particle slot of
a ParticleSystem.

Attribute access (mass, x, y, z, vx, vy, vz) maps straight onto the owning system's
arrays, so reading or writing through a view never copies data. Views are intended for
inspection and for hand-editing small systems between steps; the integrator itself works
on whole arrays. A view assumes its index stays within the system's fixed length.
"""

from __future__ import annotations
from typing import TYPE_CHECKING
if TYPE_CHECKING:
    from .particle_system import ParticleSystem




class BodyView:
	__slots__ = ("_system", "_i")

	def __init__(self, system: "ParticleSystem", idx: int) -> None:
		self._system = system
		self._i = int(idx)

	@property
	def index(self) -> int:
		return self._i

	@property
	def mass(self) -> float:
		return float(self._system._mass[self._i])
	@mass.setter
	def mass(self, v: float) -> None:
		v = float(v)
		if not v > 0.0:
			print(f"[error] mass of particle {self._i} must be positive, got {v}")
			return
		self._system._mass[self._i] = v

	@property
	def x(self) -> float:
		return float(self._system._pos[self._i, 0])
	@x.setter
	def x(self, v: float) -> None:
		self._system._pos[self._i, 0] = float(v)

	@property
	def y(self) -> float:
		return float(self._system._pos[self._i, 1])
	@y.setter
	def y(self, v: float) -> None:
		self._system._pos[self._i, 1] = float(v)

	@property
	def z(self) -> float:
		return float(self._system._pos[self._i, 2])
	@z.setter
	def z(self, v: float) -> None:
		self._system._pos[self._i, 2] = float(v)

	@property
	def vx(self) -> float:
		return float(self._system._vel[self._i, 0])
	@vx.setter
	def vx(self, v: float) -> None:
		self._system._vel[self._i, 0] = float(v)

	@property
	def vy(self) -> float:
		return float(self._system._vel[self._i, 1])
	@vy.setter
	def vy(self, v: float) -> None:
		self._system._vel[self._i, 1] = float(v)

	@property
	def vz(self) -> float:
		return float(self._system._vel[self._i, 2])
	@vz.setter
	def vz(self, v: float) -> None:
		self._system._vel[self._i, 2] = float(v)

	def __repr__(self) -> str:
		return (f"Body(mass={self.mass}, x={self.x}, y={self.y}, z={self.z}, "
				f"vx={self.vx}, vy={self.vy}, vz={self.vz})")
