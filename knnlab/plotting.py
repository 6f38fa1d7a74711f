# knnlab/plotting.py

"""
matplotlib charts used across the notebooks and the kfold CLI.

Every plot function returns the Figure; nothing is shown implicitly, so
the same code works in a notebook, a script, or a headless container.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Sequence

import matplotlib
import numpy as np
import pandas as pd
from sklearn.metrics import confusion_matrix

from . import config
from .kfold import KFoldResult

logger = logging.getLogger(__name__)


def use_backend(name: Optional[str] = None) -> str:
    """
    Switch the matplotlib backend (default: KNNLAB_PLOT_BACKEND, "Agg").

    This is the only global setting the notebooks touch.
    """
    backend = name or config.PLOT_BACKEND
    matplotlib.use(backend, force=True)
    logger.debug("matplotlib backend set to %s", backend)
    return backend


def _pyplot():
    import matplotlib.pyplot as plt
    return plt


def plot_feature_scatter(
    frame: pd.DataFrame,
    x: str,
    y: str,
    hue: Optional[str] = None,
    title: Optional[str] = None,
):
    plt = _pyplot()
    fig, ax = plt.subplots(figsize=(6, 4))

    if hue is None:
        ax.scatter(frame[x], frame[y], s=15, alpha=0.7)
    else:
        for label, group in frame.groupby(hue):
            ax.scatter(group[x], group[y], s=15, alpha=0.7, label=str(label))
        ax.legend(title=hue)

    ax.set_xlabel(x)
    ax.set_ylabel(y)
    ax.set_title(title or f"{y} vs {x}")
    fig.tight_layout()
    return fig


def plot_cv_scores(result: KFoldResult, title: Optional[str] = None):
    """Mean CV score (+/- std) against n_neighbors, one line per weighting."""
    plt = _pyplot()
    df = result.to_frame()
    fig, ax = plt.subplots(figsize=(6, 4))

    for weights, group in df.groupby("weights", sort=False):
        group = group.sort_values("n_neighbors")
        ax.errorbar(
            group["n_neighbors"],
            group["mean"],
            yerr=group["std"],
            marker="o",
            capsize=3,
            label=f"weights={weights}",
        )

    best = result.best
    ax.axvline(best.n_neighbors, color="grey", linestyle="--", linewidth=1)
    ax.set_xlabel("n_neighbors (k)")
    ax.set_ylabel(f"{result.metric} ({result.options.n_folds}-fold mean)")
    ax.set_title(title or f"K-Fold CV: best k={best.n_neighbors}")
    ax.legend()
    fig.tight_layout()
    return fig


def plot_confusion(y_true, y_pred, labels: Optional[Sequence] = None, title: str = "Confusion matrix"):
    plt = _pyplot()
    if labels is None:
        labels = np.unique(np.concatenate([np.asarray(y_true), np.asarray(y_pred)]))
    cm = confusion_matrix(y_true, y_pred, labels=labels)

    fig, ax = plt.subplots(figsize=(5, 4))
    im = ax.imshow(cm, cmap="Blues")
    fig.colorbar(im, ax=ax)

    ticks = np.arange(len(labels))
    ax.set_xticks(ticks)
    ax.set_yticks(ticks)
    ax.set_xticklabels([str(l) for l in labels], rotation=45, ha="right")
    ax.set_yticklabels([str(l) for l in labels])

    for i in range(cm.shape[0]):
        for j in range(cm.shape[1]):
            ax.text(j, i, int(cm[i, j]), ha="center", va="center")

    ax.set_xlabel("Predicted")
    ax.set_ylabel("True")
    ax.set_title(title)
    fig.tight_layout()
    return fig


def plot_predictions(y_true, y_pred, title: str = "Predicted vs true"):
    """Regression diagnostic: scatter of predictions against the identity line."""
    plt = _pyplot()
    y_true = np.asarray(y_true, dtype=float)
    y_pred = np.asarray(y_pred, dtype=float)

    fig, ax = plt.subplots(figsize=(5, 5))
    ax.scatter(y_true, y_pred, s=15, alpha=0.7)
    lo = float(min(y_true.min(), y_pred.min()))
    hi = float(max(y_true.max(), y_pred.max()))
    ax.plot([lo, hi], [lo, hi], color="grey", linestyle="--", linewidth=1)
    ax.set_xlabel("True")
    ax.set_ylabel("Predicted")
    ax.set_title(title)
    fig.tight_layout()
    return fig


def save_figure(fig, name: str, directory: Optional[Path] = None) -> Path:
    """Write fig to <directory>/<name>.png (default: artifacts/figures)."""
    out_dir = Path(directory or config.FIGURES_DIR)
    out_dir.mkdir(parents=True, exist_ok=True)
    fp = out_dir / (name if name.endswith(".png") else f"{name}.png")
    fig.savefig(fp, dpi=120)
    logger.info("Saved figure to %s", fp)
    return fp
