"""dump.py

Long-form CSV dumps of the working matrix after every elimination step.

Layout: one row per matrix entry, columns `step, sweep, row, col, value`.
Step 0 is the original matrix (sweep -1); step k is the working matrix
right after rotation U_k.
"""

from __future__ import annotations

import os
from typing import Dict

import numpy as np
import pandas as pd

from .reduction import Reduction


COLUMNS = ["step", "sweep", "row", "col", "value"]


def _frame_for(step: int, sweep: int, W: np.ndarray) -> pd.DataFrame:
    n = W.shape[0]
    rows, cols = np.indices((n, n))
    return pd.DataFrame(
        {
            "step": step,
            "sweep": sweep,
            "row": rows.ravel(),
            "col": cols.ravel(),
            "value": W.ravel(),
        },
        columns=COLUMNS,
    )


def steps_to_frame(reduction: Reduction) -> pd.DataFrame:
    frames = [_frame_for(0, -1, reduction.original)]
    for step in reduction.steps:
        frames.append(_frame_for(step.index, step.sweep, step.working))
    return pd.concat(frames, ignore_index=True)


def ensure_dir_for(path: str) -> str:
    directory = os.path.dirname(os.path.abspath(path))
    if directory:
        os.makedirs(directory, exist_ok=True)
    return path


def write_steps_csv(reduction: Reduction, path: str) -> str:
    ensure_dir_for(path)
    steps_to_frame(reduction).to_csv(path, index=False, float_format="%.17g")
    return path


def frame_to_matrices(df: pd.DataFrame) -> Dict[int, np.ndarray]:
    missing = [c for c in COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"step dump is missing columns: {', '.join(missing)}")

    out: Dict[int, np.ndarray] = {}
    for step, g in df.groupby("step", sort=True):
        n = int(max(g["row"].max(), g["col"].max())) + 1
        W = np.zeros((n, n), dtype=np.float64)
        W[g["row"].to_numpy(dtype=int), g["col"].to_numpy(dtype=int)] = g["value"].to_numpy(dtype=np.float64)
        out[int(step)] = W
    return out


def read_steps_frame(path: str) -> pd.DataFrame:
    if not os.path.isfile(path):
        raise FileNotFoundError(f"CSV not found: {path}")
    # The default C parser can be off by one ulp on 17-digit values.
    return pd.read_csv(path, float_precision="round_trip")


def load_steps_csv(path: str) -> Dict[int, np.ndarray]:
    return frame_to_matrices(read_steps_frame(path))
