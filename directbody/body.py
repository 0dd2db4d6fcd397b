"""
This module defines the Body class, a plain record for a single point mass used when a
system is assembled by hand (test scenarios, small hand-built configurations).

The class stores mass, position x/y/z and velocity vx/vy/vz as floats. It is converted
to the array layout of ParticleSystem by ParticleSystem.from_bodies and carries no
behaviour of its own beyond a readable representation.
"""
class Body:
	def __init__(self, mass: float, x: float, y: float, z: float,
				 vx: float = 0.0, vy: float = 0.0, vz: float = 0.0):
		self.mass = float(mass)
		self.x = float(x)
		self.y = float(y)
		self.z = float(z)
		self.vx = float(vx)
		self.vy = float(vy)
		self.vz = float(vz)

	def __repr__(self) -> str:
		return (f"Body(mass={self.mass}, x={self.x}, y={self.y}, z={self.z}, "
				f"vx={self.vx}, vy={self.vy}, vz={self.vz})")
