"""reconstruct.py

Rebuild the reduced and the original matrix from the recorded rotations.

With P = U1 U2 ... Uk and Pt_rev = Uk^T ... U1^T (= P^T by orthogonality and
the reversal law for transposes of products), each driver step
W <- U^T W U telescopes to

    reduced  = Pt_rev @ original @ P
    original = P @ reduced @ Pt_rev

Both are computed independently of the driver's running state and rounded
before comparison, so they act as a self-consistency check on the rotation
sequence.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from .matrix import identity, multiply, round_matrix, transpose
from .reduction import Reduction
from .rotation import Rotation


DEFAULT_PRECISION = 4


def composite_product(rotations: Sequence[Rotation], n: int) -> np.ndarray:
    """P = U1 @ U2 @ ... @ Uk (identity when empty)."""
    P = identity(n)
    for rotation in rotations:
        P = multiply(P, rotation.U)
    return P


def composite_transpose_product(rotations: Sequence[Rotation], n: int) -> np.ndarray:
    """Uk^T @ ... @ U1^T (identity when empty)."""
    Pt = identity(n)
    for rotation in reversed(rotations):
        Pt = multiply(Pt, transpose(rotation.U))
    return Pt


@dataclass(frozen=True, eq=False)
class Reconstruction:
    P: np.ndarray
    Pt_rev: np.ndarray
    reduced_reconstructed: np.ndarray
    original_reconstructed: np.ndarray
    reduced_expected: np.ndarray
    original_expected: np.ndarray
    precision: int

    @property
    def reduced_residual(self) -> float:
        return float(np.max(np.abs(self.reduced_reconstructed - self.reduced_expected), initial=0.0))

    @property
    def original_residual(self) -> float:
        return float(np.max(np.abs(self.original_reconstructed - self.original_expected), initial=0.0))

    def is_consistent(self, tol: Optional[float] = None) -> bool:
        if tol is None:
            # Rounded values differ in whole units of the last decimal; allow one.
            tol = 1.5 * 10.0 ** (-self.precision)
        return self.reduced_residual <= tol and self.original_residual <= tol


def reconstruct(reduction: Reduction, *, precision: int = DEFAULT_PRECISION) -> Reconstruction:
    if precision < 0:
        raise ValueError("precision must be non-negative")

    n = reduction.n
    rotations = reduction.rotations
    P = composite_product(rotations, n)
    Pt_rev = composite_transpose_product(rotations, n)

    reduced_rec = multiply(multiply(Pt_rev, reduction.original), P)
    original_rec = multiply(multiply(P, reduction.reduced), Pt_rev)

    return Reconstruction(
        P=P,
        Pt_rev=Pt_rev,
        reduced_reconstructed=round_matrix(reduced_rec, precision),
        original_reconstructed=round_matrix(original_rec, precision),
        reduced_expected=round_matrix(reduction.reduced, precision),
        original_expected=round_matrix(reduction.original, precision),
        precision=int(precision),
    )
