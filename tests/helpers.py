import math
from typing import List
import numpy as np
from directbody import Body, ParticleSystem, InitialConditionGenerator, GeneratorConfig
def make_two_body(separation: float = 2.0, mass: float = 1.0) -> ParticleSystem:
    half = 0.5 * separation
    return ParticleSystem.from_bodies([Body(mass, -half, 0.0, 0.0), Body(mass, half, 0.0, 0.0)])
def triangle_vertices() -> np.ndarray:
    angles = [0.0, 2.0 * math.pi / 3.0, 4.0 * math.pi / 3.0]
    return np.array([[math.cos(a), math.sin(a), 0.0] for a in angles])
def make_triangle(mass: float = 1.0) -> ParticleSystem:
    bodies: List[Body] = [Body(mass, *p) for p in triangle_vertices()]
    return ParticleSystem.from_bodies(bodies)
def make_random_system(n: int, seed: int = 7) -> ParticleSystem:
    return InitialConditionGenerator(GeneratorConfig(seed=seed)).create_system(n)
def reference_step(mass: np.ndarray, pos: np.ndarray, vel: np.ndarray, G: float = 0.001, floor: float = 0.01):
    """Scalar double loop over an explicit copy of the step-start state."""
    n = len(mass)
    old_pos = pos.copy()
    old_mass = mass.copy()
    new_pos = pos.copy()
    new_vel = vel.copy()
    for i in range(n):
        acc = np.zeros(3)
        for j in range(n):
            if j == i:
                continue
            dr = old_pos[j] - old_pos[i]
            d = max(math.sqrt(float(np.dot(dr, dr))), floor)
            F = G * mass[i] * old_mass[j] / (d * d)
            acc += (F / mass[i]) * dr / d
        new_vel[i] = new_vel[i] + acc
        new_pos[i] = old_pos[i] + new_vel[i]
    return new_pos, new_vel
