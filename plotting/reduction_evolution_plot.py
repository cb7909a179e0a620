#!/usr/bin/env python3
"""reduction_evolution_plot

Plot the working matrix of a Givens reduction as it changes step by step.

This script consumes the long-form CSV dumps written by
`python -m givenslas --dump-csv ...` (columns step, sweep, row, col, value;
step 0 is the original matrix) and draws one heatmap panel per step in a
single mosaic with a shared color scale.

Example:
  python -m givenslas --max-sweeps 2 --dump-csv output/givens_dumps/example.csv
  python3 plotting/reduction_evolution_plot.py \
      --dump-csv output/givens_dumps/example.csv \
      --out output/givens_plots/example_mosaic.png --mode abs

Or generate the dump in-process:
  python3 plotting/reduction_evolution_plot.py --generate \
      --matrix "1,2,3,4;5,6,7,6;9,3,11,12;12,0,6,7" --max-sweeps 3 \
      --out output/givens_plots/rescan.png --mode nz --eps 1e-12

Set GIVENSLAS_PLOT_TITLE to put a title over the mosaic.
"""

from __future__ import annotations

import argparse
import os
from typing import Dict, Iterable, Optional

from plot_common import compute_field, default_cmap, heatmap_mosaic, save_figure, shared_range

import numpy as np

from givenslas.cli import parse_matrix
from givenslas.dump import frame_to_matrices, read_steps_frame, steps_to_frame
from givenslas.reduction import reduce_matrix
from givenslas.report import WORKED_EXAMPLE


def _default_plot_path() -> str:
    here = os.path.dirname(os.path.abspath(__file__))
    return os.path.join(here, "..", "output", "plots", "givens_reduction_evolution.png")


def step_title(step: int, sweep: Optional[int] = None) -> str:
    if step == 0:
        return "A (original)"
    if sweep is None:
        return f"after U{step}"
    return f"after U{step}  sweep={sweep}"


def plot_steps(
    matrices: Dict[int, np.ndarray],
    *,
    out_path: str,
    mode: str = "abs",
    eps: float = 0.0,
    cols: int = 4,
    cmap: Optional[str] = None,
    sweeps: Optional[Dict[int, int]] = None,
) -> int:
    if not matrices:
        raise ValueError("no steps to plot")
    order = sorted(matrices)
    fields = [compute_field(matrices[s], mode, eps=eps) for s in order]
    titles = [step_title(s, None if sweeps is None else sweeps.get(s)) for s in order]
    if mode == "nz":
        vmin, vmax = 0.0, 1.0
    else:
        vmin, vmax = shared_range(fields)
    fig = heatmap_mosaic(
        fields,
        titles,
        cols=cols,
        cmap=cmap or default_cmap(mode),
        vlim=(vmin, vmax),
        title=os.environ.get("GIVENSLAS_PLOT_TITLE") or None,
    )
    save_figure(fig, out_path)
    return len(fields)


def main(argv: Optional[Iterable[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Plot the working matrix after each Givens rotation")
    ap.add_argument("--dump-csv", default=None, help="Step dump written by `python -m givenslas --dump-csv`")
    ap.add_argument("--generate", action="store_true", help="Run the reduction in-process instead of reading a dump")
    ap.add_argument("--matrix", default=None, help='(generate) inline matrix, rows separated by ";" (default: worked example)')
    ap.add_argument("--max-sweeps", type=int, default=1, help="(generate) sweeps to run")
    ap.add_argument("--out", default=None, help="Output PNG path (default: output/plots/givens_reduction_evolution.png)")
    ap.add_argument("--mode", choices=["abs", "nz"], default="abs")
    ap.add_argument("--eps", type=float, default=0.0, help="Threshold for --mode nz (treat |W_ij| <= eps as zero)")
    ap.add_argument("--cols", type=int, default=4, help="Mosaic columns")
    ap.add_argument("--cmap", default=None, help="Matplotlib colormap (defaults based on mode)")

    args = ap.parse_args(list(argv) if argv is not None else None)

    if args.generate == (args.dump_csv is not None):
        raise SystemExit("Provide exactly one of --dump-csv or --generate.")

    try:
        if args.generate:
            A = parse_matrix(args.matrix) if args.matrix is not None else WORKED_EXAMPLE
            df = steps_to_frame(reduce_matrix(A, max_sweeps=args.max_sweeps))
        else:
            df = read_steps_frame(args.dump_csv)
        matrices = frame_to_matrices(df)
    except (ValueError, FileNotFoundError) as exc:
        raise SystemExit(str(exc))

    sweeps = {int(s): int(g) for s, g in df.groupby("step")["sweep"].first().items() if int(s) > 0}
    out_path = args.out or _default_plot_path()
    count = plot_steps(
        matrices,
        out_path=out_path,
        mode=args.mode,
        eps=float(args.eps),
        cols=args.cols,
        cmap=args.cmap,
        sweeps=sweeps,
    )
    print(f"Wrote mosaic with {count} frame(s) to {out_path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
