"""reduction.py

Drive a sequence of Givens similarity transforms over a working copy of the
input matrix.

Algorithm
---------
The positions to eliminate are scanned once, up front, from the *original*
matrix. Each position is then processed exactly once, in scan order:

    U = build_rotation(W, position)     # against the current W
    W <- U^T W U

and the rotation is recorded. Nothing re-checks whether a later rotation
refills an earlier position or a position that was zero at scan time, so the
result is near-Hessenberg rather than guaranteed Hessenberg.

Re-scan sweeps
--------------
`reduce_matrix(..., max_sweeps=k)` with k > 1 re-scans the working matrix
after each sweep (with a small threshold, since eliminated entries are only
zero up to rounding) and runs another sweep over whatever it finds. The
recorded rotation sequence spans all sweeps, so reconstruction still
telescopes. The default k = 1 is the plain single pass.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional

import numpy as np

from .matrix import as_matrix, multiply, transpose
from .rotation import Rotation, build_rotation
from .scan import Position, scan_sub_subdiagonal


@dataclass(frozen=True, eq=False)
class Step:
    """One elimination: rotation `index` (1-based) in sweep `sweep` (0-based)."""

    index: int
    sweep: int
    position: Position
    target: float
    rotation: Rotation
    working: np.ndarray


@dataclass
class Reduction:
    original: np.ndarray
    reduced: np.ndarray
    positions: List[Position]
    steps: List[Step] = field(default_factory=list)

    @property
    def n(self) -> int:
        return self.original.shape[0]

    @property
    def rotations(self) -> List[Rotation]:
        return [step.rotation for step in self.steps]

    @property
    def num_sweeps(self) -> int:
        if not self.steps:
            return 0
        return self.steps[-1].sweep + 1


def _similarity_inplace(W: np.ndarray, rotation: Rotation) -> None:
    """W <- U^T W U."""
    U = rotation.U
    W[:, :] = multiply(multiply(transpose(U), W), U)


def _run_sweep(
    W: np.ndarray,
    positions: Iterable[Position],
    *,
    sweep: int,
    steps: List[Step],
) -> None:
    for position in positions:
        target = float(W[position.row, position.col])
        rotation = build_rotation(W, position)
        _similarity_inplace(W, rotation)
        steps.append(
            Step(
                index=len(steps) + 1,
                sweep=sweep,
                position=position,
                target=target,
                rotation=rotation,
                working=W.copy(),
            )
        )


def apply_rotations(A, positions: Iterable[Position]) -> Reduction:
    """Eliminate `positions` from a copy of A, one rotation per position."""
    original = as_matrix(A)
    positions = [Position(int(i), int(j)) for i, j in positions]
    n = original.shape[0]
    for i, j in positions:
        if j < 0 or i < j + 2 or i >= n:
            raise ValueError(f"position ({i},{j}) is not below the first subdiagonal of a {n}x{n} matrix")

    W = original.copy()
    steps: List[Step] = []
    _run_sweep(W, positions, sweep=0, steps=steps)
    return Reduction(original=original, reduced=W, positions=positions, steps=steps)


def reduce_matrix(
    A,
    *,
    max_sweeps: int = 1,
    rescan_tol: float = 1e-12,
    positions: Optional[Iterable[Position]] = None,
) -> Reduction:
    """Scan A and eliminate its sub-subdiagonal with Givens similarity transforms.

    The first sweep uses the exact scan of the original matrix (or `positions`
    if given). Later sweeps, when max_sweeps > 1, re-scan the working matrix
    with threshold `rescan_tol` and stop as soon as nothing is found.
    """
    if max_sweeps < 1:
        raise ValueError("max_sweeps must be >= 1")
    if rescan_tol < 0:
        raise ValueError("rescan_tol must be non-negative")

    original = as_matrix(A)
    if positions is None:
        positions = scan_sub_subdiagonal(original)
    reduction = apply_rotations(original, positions)

    W = reduction.reduced
    for sweep in range(1, max_sweeps):
        found = scan_sub_subdiagonal(W, tol=float(rescan_tol))
        if not found:
            break
        _run_sweep(W, found, sweep=sweep, steps=reduction.steps)

    return reduction
