"""matrix.py

Dense matrix primitives used by the Givens reduction.

Every function here returns a new array; none of them mutate their inputs.
Squareness is established once by `as_matrix` at the entry points, after which
all participating matrices share the same n and are not re-checked.
"""

from __future__ import annotations

import numpy as np


def as_matrix(A, name: str = "A") -> np.ndarray:
    """Return a float64 copy of A, which must be a square 2D array."""
    try:
        M = np.array(A, dtype=np.float64, copy=True)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{name} must be a numeric 2D array: {exc}") from exc
    if M.ndim != 2:
        raise ValueError(f"{name} must be 2D (got ndim={M.ndim})")
    if M.shape[0] != M.shape[1]:
        raise ValueError(f"{name} must be square (got shape={M.shape})")
    return M


def identity(n: int) -> np.ndarray:
    return np.eye(n, dtype=np.float64)


def multiply(A: np.ndarray, B: np.ndarray) -> np.ndarray:
    """A @ B. Shapes are the caller's responsibility."""
    return A @ B


def transpose(A: np.ndarray) -> np.ndarray:
    return np.array(A.T, copy=True)


def round_matrix(A: np.ndarray, k: int) -> np.ndarray:
    """Round every entry to k decimals, reporting zeros as +0.0.

    Sums of signed terms near zero can round to -0.0, which compares equal to
    0.0 but prints differently.
    """
    R = np.round(np.asarray(A, dtype=np.float64), int(k))
    R[R == 0.0] = 0.0
    return R


def sub_subdiagonal_max(A: np.ndarray) -> float:
    """Max |A[i,j]| over i >= j+2 (0 when n < 3)."""
    n = A.shape[0]
    maxv = 0.0
    for j in range(max(0, n - 2)):
        for i in range(j + 2, n):
            maxv = max(maxv, float(abs(A[i, j])))
    return maxv
