"""
This module implements the inverse-square acceleration kernel used by the step
integrator.

block_accelerations evaluates the net acceleration on a contiguous block of particles
[start, stop) from every other particle, reading separations and source masses from the
step's snapshot and the target masses from the live system. The force magnitude carries
the target mass as a factor and the acceleration divides it back out, exactly as in the
force law F = G m_i m_j / d^2, a = (F / m_i) d_vec / d. Self pairs are removed by an
explicit mask rather than relying on the softening floor. Given a BlockScratch the kernel
works entirely inside it and returns a view of its acceleration rows, valid until the
next call with the same scratch. pairwise_accelerations is the whole-system convenience
wrapper.
"""

from __future__ import annotations
import numpy as np
from numpy.typing import NDArray
from .geometry_cache import BlockScratch, geometry_buffers









def block_accelerations(
    old_pos: NDArray[np.floating],
    old_mass: NDArray[np.floating],
    mass_rows: NDArray[np.floating],
    start: int,
    stop: int,
    G: float = 0.001,
    floor: float = 0.01,
    scratch: BlockScratch | None = None,
) -> NDArray[np.floating]:

    start = int(start)
    stop = int(stop)
    n_rows = stop - start
    if n_rows <= 0:
        return np.zeros((0, 3), dtype=np.float64)

    if scratch is None:
        scratch = BlockScratch(n_rows, old_pos.shape[0])
    dr = scratch.dr[:n_rows]
    d = scratch.d[:n_rows]
    F = scratch.f[:n_rows]
    acc = scratch.acc[:n_rows]

    geometry_buffers(old_pos[start:stop], old_pos, floor, out=(dr, d))

    old_mass = np.asarray(old_mass, dtype=np.float64)
    m_i = np.asarray(mass_rows, dtype=np.float64)[:, None]
    np.multiply(m_i, old_mass[None, :], out=F)
    F *= float(G)
    F /= d
    F /= d

    # self pairs sit on the diagonal of the block's own columns
    np.fill_diagonal(F[:, start:stop], 0.0)

    F /= m_i
    F /= d
    np.einsum("ij,ijk->ik", F, dr, out=acc)
    return acc


def pairwise_accelerations(
    pos: NDArray[np.floating],
    mass: NDArray[np.floating],
    G: float = 0.001,
    floor: float = 0.01,
) -> NDArray[np.floating]:
    pos = np.asarray(pos, dtype=np.float64)
    mass = np.asarray(mass, dtype=np.float64)
    n = pos.shape[0]
    if n < 2 or float(G) == 0.0:
        return np.zeros_like(pos)
    return block_accelerations(pos, mass, mass, 0, n, G=G, floor=floor).copy()
