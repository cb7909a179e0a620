"""
givenslas

A small dense-matrix engine that reduces a square real matrix to
near-Hessenberg form with Givens similarity transforms, records each
rotation, and reconstructs both the reduced and the original matrix from the
recorded rotations as a round-trip check.
"""

from .matrix import as_matrix, identity, multiply, round_matrix, sub_subdiagonal_max, transpose
from .scan import Position, scan_sub_subdiagonal
from .rotation import Rotation, build_rotation, givens_coefficients
from .reduction import Reduction, Step, apply_rotations, reduce_matrix
from .reconstruct import Reconstruction, composite_product, composite_transpose_product, reconstruct
from .report import WORKED_EXAMPLE, ReductionReport, build_report, render_report

__version__ = "0.1.0"
