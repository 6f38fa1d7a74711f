# knnlab/kfold.py

"""
K-Fold cross-validation over a small KNN hyperparameter grid.

    result = cross_validate_knn(X, y, n_folds=5, neighbors=[1, 3, 5, 7])
    result.best          # GridPointResult with the best mean score
    result.to_frame()    # one row per (n_neighbors, weights)

The data is shuffled once and cut into folds; every grid point is scored
on the same folds so the means are comparable.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field, fields
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

import numpy as np
import pandas as pd

from .config import RANDOM_SEED
from .errors import InvalidOptionsError
from .metrics import TASKS, default_metric, greater_is_better, score, validate_metric
from .models import create_local_model, model_name_for_task
from .tensors import shuffle_indices, take_rows

logger = logging.getLogger(__name__)

WEIGHTS = ("uniform", "distance")
DISTANCES = ("minkowski", "euclidean", "manhattan", "chebyshev", "cosine")


@dataclass(frozen=True)
class KFoldOptions:
    n_folds: int = 5
    neighbors: Tuple[int, ...] = (1, 3, 5, 7, 9)
    weights: Tuple[str, ...] = ("uniform",)
    task: str = "classification"
    metric: Optional[str] = None      # None -> default for the task
    distance: str = "minkowski"       # KNN distance metric
    shuffle: bool = True
    seed: Optional[int] = RANDOM_SEED
    scale: bool = True

    def grid(self) -> List[Tuple[int, str]]:
        """(n_neighbors, weights) pairs in evaluation order."""
        return [(k, w) for k in self.neighbors for w in self.weights]


@dataclass
class GridPointResult:
    n_neighbors: int
    weights: str
    fold_scores: List[float]
    mean: float
    std: float

    @property
    def params(self) -> Dict[str, Any]:
        return {"n_neighbors": self.n_neighbors, "weights": self.weights}


@dataclass
class KFoldResult:
    options: KFoldOptions
    metric: str
    grid: List[GridPointResult] = field(default_factory=list)

    @property
    def greater_is_better(self) -> bool:
        return greater_is_better(self.metric)

    @property
    def best(self) -> GridPointResult:
        """Best grid point; ties go to the one evaluated first."""
        if not self.grid:
            raise ValueError("No grid points were evaluated")
        best = self.grid[0]
        for point in self.grid[1:]:
            if self.greater_is_better and point.mean > best.mean:
                best = point
            elif not self.greater_is_better and point.mean < best.mean:
                best = point
        return best

    def to_frame(self) -> pd.DataFrame:
        rows = []
        for point in self.grid:
            row = {
                "n_neighbors": point.n_neighbors,
                "weights": point.weights,
                "mean": point.mean,
                "std": point.std,
            }
            for i, s in enumerate(point.fold_scores):
                row[f"fold_{i}"] = s
            rows.append(row)
        return pd.DataFrame(rows)

    def as_dict(self) -> Dict[str, Any]:
        opts = asdict(self.options)
        opts["neighbors"] = list(opts["neighbors"])
        opts["weights"] = list(opts["weights"])
        return {
            "metric": self.metric,
            "greater_is_better": self.greater_is_better,
            "options": opts,
            "grid": [asdict(p) for p in self.grid],
            "best": asdict(self.best),
        }


# ---------- Option parsing ----------

def _is_int(value) -> bool:
    return isinstance(value, (int, np.integer)) and not isinstance(value, bool)


def _as_tuple(value, name: str) -> Tuple:
    if isinstance(value, (str, bytes)) or _is_int(value):
        return (value,)
    if isinstance(value, Iterable):
        return tuple(value)
    raise InvalidOptionsError(f"{name} must be a value or a list of values, got {value!r}")


def _dedupe(values: Tuple, name: str) -> Tuple:
    try:
        return tuple(dict.fromkeys(values))
    except TypeError:
        raise InvalidOptionsError(f"{name} entries must be scalar values, got {list(values)!r}") from None


def parse_options(
    options: Union[KFoldOptions, Mapping[str, Any], None] = None,
    **overrides,
) -> KFoldOptions:
    """
    Build validated KFoldOptions from an options object, a dict, or keywords.

    Keyword overrides win over `options`. Raises InvalidOptionsError for
    unknown keys or invalid values.
    """
    known = {f.name for f in fields(KFoldOptions)}

    if options is None:
        raw: Dict[str, Any] = {}
    elif isinstance(options, KFoldOptions):
        raw = asdict(options)
    elif isinstance(options, Mapping):
        raw = dict(options)
    else:
        raise InvalidOptionsError(f"options must be a dict or KFoldOptions, got {type(options).__name__}")

    raw.update(overrides)

    unknown = sorted(set(raw) - known)
    if unknown:
        raise InvalidOptionsError(f"Unknown option(s): {', '.join(unknown)}")

    merged = {**asdict(KFoldOptions()), **raw}

    n_folds = merged["n_folds"]
    if not _is_int(n_folds) or n_folds < 2:
        raise InvalidOptionsError(f"n_folds must be an integer >= 2, got {n_folds!r}")

    neighbors = _dedupe(_as_tuple(merged["neighbors"], "neighbors"), "neighbors")
    if not neighbors:
        raise InvalidOptionsError("neighbors must not be empty")
    for k in neighbors:
        if not _is_int(k) or k < 1:
            raise InvalidOptionsError(f"neighbors must be positive integers, got {k!r}")

    weights = _dedupe(_as_tuple(merged["weights"], "weights"), "weights")
    if not weights:
        raise InvalidOptionsError("weights must not be empty")
    for w in weights:
        if w not in WEIGHTS:
            raise InvalidOptionsError(f"weights must be one of {WEIGHTS}, got {w!r}")

    task = merged["task"]
    if task not in TASKS:
        raise InvalidOptionsError(f"task must be one of {TASKS}, got {task!r}")

    metric = merged["metric"] or default_metric(task)
    try:
        validate_metric(task, metric)
    except ValueError as e:
        raise InvalidOptionsError(str(e)) from None

    distance = merged["distance"]
    if distance not in DISTANCES:
        raise InvalidOptionsError(f"distance must be one of {DISTANCES}, got {distance!r}")

    for flag in ("shuffle", "scale"):
        if not isinstance(merged[flag], (bool, np.bool_)):
            raise InvalidOptionsError(f"{flag} must be True or False, got {merged[flag]!r}")

    seed = merged["seed"]
    if seed is not None and not _is_int(seed):
        raise InvalidOptionsError(f"seed must be an integer or None, got {seed!r}")

    return KFoldOptions(
        n_folds=int(n_folds),
        neighbors=tuple(int(k) for k in neighbors),
        weights=weights,
        task=task,
        metric=metric,
        distance=distance,
        shuffle=bool(merged["shuffle"]),
        seed=None if seed is None else int(seed),
        scale=bool(merged["scale"]),
    )


# ---------- Folds ----------

def fold_indices(
    n_samples: int,
    n_folds: int,
    shuffle: bool = True,
    seed: Optional[int] = None,
) -> List[np.ndarray]:
    """
    Partition range(n_samples) into n_folds index arrays.

    Fold sizes differ by at most one (the first n_samples % n_folds folds
    get the extra sample).
    """
    if n_folds < 2:
        raise InvalidOptionsError(f"n_folds must be >= 2, got {n_folds}")
    if n_folds > n_samples:
        raise InvalidOptionsError(f"Cannot make {n_folds} folds from {n_samples} samples")

    idx = shuffle_indices(n_samples, seed) if shuffle else np.arange(n_samples)
    return np.array_split(idx, n_folds)


# ---------- Cross-validation ----------

def cross_validate_knn(
    X,
    y,
    options: Union[KFoldOptions, Mapping[str, Any], None] = None,
    **overrides,
) -> KFoldResult:
    """
    Score every (n_neighbors, weights) pair with K-Fold cross-validation.

    For each grid point and each fold: fit a fresh KNN model on the other
    folds, predict the held-out fold and score it with the options' metric.
    The per-fold scores are averaged into GridPointResult.mean / .std.
    """
    opts = parse_options(options, **overrides)

    X = np.asarray(X, dtype=float)
    y = np.asarray(y)
    if X.ndim != 2:
        raise ValueError(f"Expected 2D array for X, got shape {X.shape}")
    if X.shape[0] != y.shape[0]:
        raise ValueError(f"X and y have different lengths: {X.shape[0]} vs {y.shape[0]}")

    folds = fold_indices(X.shape[0], opts.n_folds, shuffle=opts.shuffle, seed=opts.seed)

    min_train = X.shape[0] - max(len(f) for f in folds)
    if max(opts.neighbors) > min_train:
        raise InvalidOptionsError(
            f"n_neighbors={max(opts.neighbors)} exceeds the smallest training set "
            f"({min_train} samples with {opts.n_folds} folds)"
        )

    # r2 is undefined on a single held-out sample
    min_val = min(len(f) for f in folds)
    if opts.metric == "r2" and min_val < 2:
        raise InvalidOptionsError(
            f"metric r2 needs at least 2 samples per validation fold, got {min_val} "
            f"({X.shape[0]} samples with {opts.n_folds} folds)"
        )

    model_name = model_name_for_task(opts.task)
    result = KFoldResult(options=opts, metric=opts.metric)

    logger.info(
        "K-Fold CV: %d samples, %d folds, %d grid points, metric=%s",
        X.shape[0], opts.n_folds, len(opts.grid()), opts.metric,
    )

    for n_neighbors, weights in opts.grid():
        fold_scores: List[float] = []
        for i, val_idx in enumerate(folds):
            train_idx = np.concatenate([f for j, f in enumerate(folds) if j != i])

            model = create_local_model(
                model_name,
                n_neighbors=n_neighbors,
                weights=weights,
                metric=opts.distance,
                scale=opts.scale,
            )
            model.fit(take_rows(X, train_idx), take_rows(y, train_idx))
            y_pred = model.predict(take_rows(X, val_idx))
            fold_scores.append(score(opts.metric, take_rows(y, val_idx), y_pred))

        point = GridPointResult(
            n_neighbors=n_neighbors,
            weights=weights,
            fold_scores=fold_scores,
            mean=float(np.mean(fold_scores)),
            std=float(np.std(fold_scores)),
        )
        logger.debug(
            "k=%d weights=%s %s=%.4f (+/- %.4f)",
            n_neighbors, weights, opts.metric, point.mean, point.std,
        )
        result.grid.append(point)

    best = result.best
    logger.info(
        "Best: k=%d weights=%s %s=%.4f", best.n_neighbors, best.weights, opts.metric, best.mean
    )
    return result
