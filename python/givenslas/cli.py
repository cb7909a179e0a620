"""Command-line driver: reduce a matrix, print the report, optionally dump steps.

Example:
  python -m givenslas --matrix "1,2,3,4;5,6,7,6;9,3,11,12;12,1,6,7" --precision 4
  python -m givenslas --matrix-csv A.csv --max-sweeps 3 --dump-csv output/steps.csv
"""

from __future__ import annotations

import argparse
import os
from typing import Iterable, Optional

import numpy as np

from .dump import write_steps_csv
from .reconstruct import DEFAULT_PRECISION
from .report import WORKED_EXAMPLE, build_report, describe_targets, render_report


def parse_matrix(text: str) -> np.ndarray:
    """Parse rows separated by ';' and entries separated by ','."""
    rows = [r for r in (part.strip() for part in text.split(";")) if r]
    if not rows:
        raise ValueError("empty matrix")
    data = [[float(v) for v in row.split(",")] for row in rows]
    widths = {len(row) for row in data}
    if len(widths) != 1:
        raise ValueError(f"ragged matrix rows: lengths {sorted(widths)}")
    return np.array(data, dtype=np.float64)


def load_matrix_csv(path: str) -> np.ndarray:
    if not os.path.isfile(path):
        raise FileNotFoundError(f"CSV not found: {path}")
    return np.loadtxt(path, delimiter=",", dtype=np.float64, ndmin=2)


def main(argv: Optional[Iterable[str]] = None) -> int:
    ap = argparse.ArgumentParser(
        prog="givenslas",
        description="Reduce a square matrix with Givens similarity transforms and verify the round trip",
    )
    src = ap.add_mutually_exclusive_group()
    src.add_argument("--matrix", default=None, help='Inline matrix, rows separated by ";" (default: worked 4x4 example)')
    src.add_argument("--matrix-csv", default=None, help="Path to a comma-separated matrix file (no header)")
    ap.add_argument("--precision", type=int, default=DEFAULT_PRECISION, help="Decimal digits for rounding/reporting")
    ap.add_argument("--max-sweeps", type=int, default=1, help="1 => single pass over the original scan")
    ap.add_argument("--rescan-tol", type=float, default=1e-12, help="Threshold used by re-scan sweeps")
    ap.add_argument("--width", type=int, default=0, help="Column width for matrices (0 => auto)")
    ap.add_argument("--dump-csv", default=None, help="Write per-step working matrices to this CSV")
    ap.add_argument("--quiet", action="store_true", help="Only print the one-line summary")

    args = ap.parse_args(list(argv) if argv is not None else None)

    if args.precision < 0:
        ap.error("--precision must be non-negative")
    if args.max_sweeps < 1:
        ap.error("--max-sweeps must be >= 1")

    try:
        if args.matrix is not None:
            A = parse_matrix(args.matrix)
        elif args.matrix_csv is not None:
            A = load_matrix_csv(args.matrix_csv)
        else:
            A = WORKED_EXAMPLE
        report = build_report(
            A,
            precision=args.precision,
            max_sweeps=args.max_sweeps,
            rescan_tol=args.rescan_tol,
        )
    except (ValueError, FileNotFoundError) as exc:
        ap.error(str(exc))

    if not args.quiet:
        print(render_report(report, width=args.width))
        print()

    rec = report.reconstruction
    status = "ok" if report.consistent else "MISMATCH"
    print(
        f"n={report.reduction.n} rotations={len(report.rotations)} "
        f"sweeps={report.reduction.num_sweeps} eliminated=[{describe_targets(report.targets)}] "
        f"round-trip {status} (precision={rec.precision})"
    )

    if args.dump_csv:
        write_steps_csv(report.reduction, args.dump_csv)
        print(f"Wrote {len(report.reduction.steps) + 1} step(s) to {args.dump_csv}")

    return 0 if report.consistent else 1


if __name__ == "__main__":
    raise SystemExit(main())
