from __future__ import annotations
import math
from typing import Iterable, List, Optional, Sequence, Tuple

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np

from givenslas.dump import ensure_dir_for


def save_figure(fig: plt.Figure, path: str) -> None:
    ensure_dir_for(path)
    fig.savefig(path)
    plt.close(fig)
    print(f"Saved plot to {path}")


def compute_field(W: np.ndarray, mode: str, *, eps: float) -> np.ndarray:
    if mode == "abs":
        return np.abs(W)
    if mode == "nz":
        # Binary mask: 1 if |W_ij| > eps else 0.
        return (np.abs(W) > eps).astype(np.float32)
    raise ValueError(f"unknown mode={mode}")


def shared_range(
    fields: Iterable[np.ndarray],
    *,
    vmin: Optional[float] = None,
    vmax: Optional[float] = None,
) -> Tuple[float, float]:
    fields = list(fields)
    if not fields:
        raise ValueError("no fields to scale")
    if vmin is None:
        vmin = float(min(np.min(f) for f in fields))
    if vmax is None:
        vmax = float(max(np.max(f) for f in fields))
    return vmin, vmax


def default_cmap(mode: str) -> str:
    return "Greys" if mode == "nz" else "magma"


def heatmap_mosaic(
    fields: Sequence[np.ndarray],
    titles: Sequence[str],
    *,
    cols: int,
    cmap: str,
    vlim: Tuple[float, float],
    title: Optional[str] = None,
) -> plt.Figure:
    """Grid of equally scaled heatmaps sharing one colorbar; unused cells are hidden."""
    if len(fields) != len(titles):
        raise ValueError("fields/titles length mismatch")
    if not fields:
        raise ValueError("no fields to plot")
    cols = max(1, min(int(cols), len(fields)))
    rows = math.ceil(len(fields) / cols)

    fig, axes = plt.subplots(
        rows,
        cols,
        figsize=(2.2 * cols + 1.0, 2.2 * rows + (0.4 if title else 0.0)),
        squeeze=False,
        constrained_layout=True,
    )
    used: List[plt.Axes] = []
    im = None
    for ax, field, label in zip(axes.flat, fields, titles):
        # Row 0 at the top, as matrices are written.
        im = ax.imshow(field, origin="upper", interpolation="nearest", cmap=cmap, vmin=vlim[0], vmax=vlim[1])
        ax.set_title(label, fontsize=8)
        ax.set_xticks([])
        ax.set_yticks([])
        used.append(ax)
    for ax in axes.ravel()[len(fields):]:
        ax.axis("off")

    fig.colorbar(im, ax=used, shrink=0.8)
    if title:
        fig.suptitle(title)
    return fig
