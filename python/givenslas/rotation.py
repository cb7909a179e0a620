"""rotation.py

Givens-style rotations that zero one sub-subdiagonal entry.

For a target at (row=i, col=j) the rotation acts on the index pair
p = j+1, q = i. It is built against the *current* working matrix: the pivot
is b = W[j+1, j] and the target is a = W[i, j]. Applied as the similarity
transform U^T W U it sends W[i, j] to s*b + c*a, which the coefficients below
make zero.

A zero pivot takes a fixed right-angle branch (c, s) = (0, 1), so the
coefficient formula never divides by zero.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

import numpy as np

from .matrix import identity
from .scan import Position


def givens_coefficients(pivot: float, target: float) -> Tuple[float, float]:
    """Return (cos, sin) that annihilate target against pivot."""
    b = float(pivot)
    a = float(target)
    if b == 0.0:
        return 0.0, 1.0
    r = math.sqrt(b * b + a * a)
    c = abs(b) / r
    s = -math.copysign(1.0, b) * a / r
    return c, s


@dataclass(frozen=True, eq=False)
class Rotation:
    """Orthogonal U: identity except the 2x2 block through (p, q).

    U[p,p] = U[q,q] = cos, U[p,q] = sin, U[q,p] = -sin.
    """

    p: int
    q: int
    cos: float
    sin: float
    U: np.ndarray

    @property
    def n(self) -> int:
        return self.U.shape[0]

    @property
    def angle_degrees(self) -> float:
        # Reporting only; the reduction never uses the angle.
        return math.degrees(math.acos(min(1.0, max(-1.0, self.cos))))


def rotation_matrix(n: int, p: int, q: int, c: float, s: float) -> np.ndarray:
    U = identity(n)
    U[p, p] = c
    U[q, q] = c
    U[p, q] = s
    U[q, p] = -s
    return U


def build_rotation(W: np.ndarray, position: Position) -> Rotation:
    """Build the rotation eliminating W[position] against the pivot W[col+1, col]."""
    i, j = position
    p = j + 1
    q = i
    c, s = givens_coefficients(W[p, j], W[i, j])
    U = rotation_matrix(W.shape[0], p, q, c, s)
    U.setflags(write=False)
    return Rotation(p=p, q=q, cos=c, sin=s, U=U)
