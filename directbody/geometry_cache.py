from __future__ import annotations
import numpy as np
from typing import Tuple

"""
This module provides the geometric kernel for direct-summation force evaluation and the scratch buffers it works in. The geometry_buffers function computes, for a contiguous block of target rows, the displacement from each target to every source position and the separation clamped from below by the softening floor, using Einstein summation for the squared norms. When handed an out pair it writes into those arrays instead of allocating, which is how the step integrator keeps its stepping loop allocation-free: each worker slot owns one BlockScratch sized for a full block against all N sources, and partial blocks use leading row slices of it. The floor only guards against division blow-up at tiny separations; self pairs are not handled here and must be masked by the caller. Positions are expected as (N,3) float arrays.

"""




__all__ = ["geometry_buffers", "BlockScratch"]


class BlockScratch:
    __slots__ = ("rows", "n", "dr", "d", "f", "acc")

    def __init__(self, rows: int, n: int) -> None:
        self.rows = int(rows)
        self.n = int(n)
        self.dr = np.empty((self.rows, self.n, 3), dtype=np.float64)
        self.d = np.empty((self.rows, self.n), dtype=np.float64)
        self.f = np.empty((self.rows, self.n), dtype=np.float64)
        self.acc = np.empty((self.rows, 3), dtype=np.float64)

    @property
    def nbytes(self) -> int:
        return self.dr.nbytes + self.d.nbytes + self.f.nbytes + self.acc.nbytes


def geometry_buffers(
    targets: np.ndarray,
    sources: np.ndarray,
    floor: float = 0.01,
    out: Tuple[np.ndarray, np.ndarray] | None = None,
) -> Tuple[np.ndarray, np.ndarray]:
    targets = np.asarray(targets, dtype=np.float64)
    sources = np.asarray(sources, dtype=np.float64)

    if out is None:
        dr = np.empty((targets.shape[0], sources.shape[0], 3), dtype=np.float64)
        d = np.empty((targets.shape[0], sources.shape[0]), dtype=np.float64)
    else:
        dr, d = out

    # dr[k, j] = sources[j] - targets[k]
    np.subtract(sources[None, :, :], targets[:, None, :], out=dr)
    np.einsum("ijk,ijk->ij", dr, dr, out=d)

    np.sqrt(d, out=d)
    np.maximum(d, float(floor), out=d)
    return dr, d
