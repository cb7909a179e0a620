"""scan.py

Locate the entries strictly below the first subdiagonal that a reduction
has to eliminate.

The scan order fixes the elimination order, and therefore the exact rotation
sequence: columns ascending from 0, and within a column rows ascending from
col+2. A different order is a legitimate variant but produces different
rotations.
"""

from __future__ import annotations

from typing import List, NamedTuple

import numpy as np


class Position(NamedTuple):
    """Zero-based (row, col) with row >= col + 2."""

    row: int
    col: int


def scan_sub_subdiagonal(A: np.ndarray, *, tol: float = 0.0) -> List[Position]:
    """Return the positions with |A[row, col]| > tol in elimination order.

    With the default tol=0.0 this is an exact comparison against zero.
    n < 3 has no sub-subdiagonal and yields an empty list.
    """
    n = A.shape[0]
    positions: List[Position] = []
    for col in range(max(0, n - 2)):
        for row in range(col + 2, n):
            if abs(A[row, col]) > tol:
                positions.append(Position(row, col))
    return positions
