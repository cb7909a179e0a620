"""report.py

Everything a presentation layer needs from one reduction run, plus a plain
text rendering of it.

The core modules hand back arrays and scalars only; labels ("U1",
"U1 · U2 · U3") and column formatting live here.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple

import numpy as np

from .matrix import as_matrix, round_matrix, sub_subdiagonal_max
from .reconstruct import DEFAULT_PRECISION, Reconstruction, reconstruct
from .reduction import Reduction, reduce_matrix
from .scan import Position


WORKED_EXAMPLE = np.array(
    [
        [1.0, 2.0, 3.0, 4.0],
        [5.0, 6.0, 7.0, 6.0],
        [9.0, 3.0, 11.0, 12.0],
        [12.0, 1.0, 6.0, 7.0],
    ],
    dtype=np.float64,
)


def rotation_label(index: int) -> str:
    return f"U{index}"


def product_label(count: int, *, transposed: bool = False) -> str:
    """'U1 · U2 · … · Uk', or the reversed transposes for transposed=True."""
    if count <= 0:
        return "I"
    if transposed:
        names = [f"U{k}ᵗ" for k in range(count, 0, -1)]
    else:
        names = [f"U{k}" for k in range(1, count + 1)]
    if count > 3:
        names = [names[0], names[1], "…", names[-1]]
    return " · ".join(names)


@dataclass(frozen=True, eq=False)
class LabeledMatrix:
    label: str
    matrix: np.ndarray


@dataclass(frozen=True, eq=False)
class ReductionReport:
    precision: int
    targets: List[Tuple[Position, float]]
    rotations: List[LabeledMatrix]
    angles_degrees: List[float]
    reduced: np.ndarray
    reconstructions: List[LabeledMatrix]
    reduction: Reduction
    reconstruction: Reconstruction

    @property
    def consistent(self) -> bool:
        return self.reconstruction.is_consistent()

    @property
    def residual_fill(self) -> float:
        return sub_subdiagonal_max(self.reduction.reduced)


def build_report(
    A,
    *,
    precision: int = DEFAULT_PRECISION,
    max_sweeps: int = 1,
    rescan_tol: float = 1e-12,
) -> ReductionReport:
    original = as_matrix(A)
    reduction = reduce_matrix(original, max_sweeps=max_sweeps, rescan_tol=rescan_tol)
    rec = reconstruct(reduction, precision=precision)

    targets = [(pos, float(original[pos.row, pos.col])) for pos in reduction.positions]
    rotations = [
        LabeledMatrix(rotation_label(step.index), round_matrix(step.rotation.U, precision))
        for step in reduction.steps
    ]
    k = len(reduction.steps)
    p_label = product_label(k)
    pt_label = product_label(k, transposed=True)
    reconstructions = [
        LabeledMatrix(f"({pt_label}) · A · ({p_label})", rec.reduced_reconstructed),
        LabeledMatrix(f"({p_label}) · R · ({pt_label})", rec.original_reconstructed),
    ]
    return ReductionReport(
        precision=int(precision),
        targets=targets,
        rotations=rotations,
        angles_degrees=[step.rotation.angle_degrees for step in reduction.steps],
        reduced=round_matrix(reduction.reduced, precision),
        reconstructions=reconstructions,
        reduction=reduction,
        reconstruction=rec,
    )


# -----------------------------------------------------------------------------
# Text rendering
# -----------------------------------------------------------------------------


def format_matrix(M: np.ndarray, precision: int, *, width: int = 0) -> str:
    M = round_matrix(M, precision)
    cells = [[f"{v:.{precision}f}" for v in row] for row in M]
    if width <= 0:
        width = max((len(c) for row in cells for c in row), default=0)
    return "\n".join("  ".join(c.rjust(width) for c in row) for row in cells)


def _section(title: str) -> str:
    return f"{title}\n{'-' * len(title)}"


def render_report(report: ReductionReport, *, width: int = 0) -> str:
    k = report.precision
    out: List[str] = []

    out.append(_section("A"))
    out.append(format_matrix(report.reduction.original, k, width=width))

    out.append("")
    out.append(_section("Eliminated entries"))
    if not report.reduction.steps:
        out.append("(none)")
    for step in report.reduction.steps:
        i, j = step.position
        if step.sweep == 0:
            value = report.targets[step.index - 1][1]
            out.append(f"{rotation_label(step.index)}: A[{i + 1},{j + 1}] = {value:.{k}f}")
        else:
            out.append(f"{rotation_label(step.index)}: W[{i + 1},{j + 1}] = {step.target:.3e}  (sweep {step.sweep})")

    for labeled, angle in zip(report.rotations, report.angles_degrees):
        out.append("")
        out.append(_section(f"{labeled.label}  (theta = {angle:.2f} deg)"))
        out.append(format_matrix(labeled.matrix, k, width=width))

    out.append("")
    out.append(_section("R"))
    out.append(format_matrix(report.reduced, k, width=width))

    for labeled in report.reconstructions:
        out.append("")
        out.append(_section(labeled.label))
        out.append(format_matrix(labeled.matrix, k, width=width))

    rec = report.reconstruction
    out.append("")
    out.append(
        f"max|reduced - reconstructed|={rec.reduced_residual:.3e}  "
        f"max|A - reconstructed|={rec.original_residual:.3e}  "
        f"max|R[i>=j+2]|={report.residual_fill:.3e}"
    )
    return "\n".join(out)


def describe_targets(targets: Sequence[Tuple[Position, float]]) -> str:
    """1-based 'A[i,j]' labels, matching render_report."""
    return ", ".join(f"A[{i + 1},{j + 1}]" for (i, j), _ in targets)
