# knnlab/tensors.py

"""
Small numpy helpers for the tensor notebook.

They are deliberately thin: the point of the notebook is to see what
numpy does, and `nearest_neighbors` is the by-hand version of what
scikit-learn's KNeighbors* models do in `kneighbors`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import numpy as np


@dataclass
class TensorInfo:
    shape: Tuple[int, ...]
    ndim: int
    dtype: str
    size: int


_ELEMENTWISE_OPS = {
    "add": np.add,
    "sub": np.subtract,
    "mul": np.multiply,
    "div": np.divide,
    "pow": np.power,
    "maximum": np.maximum,
    "minimum": np.minimum,
}


def as_tensor(data, dtype=float) -> np.ndarray:
    return np.asarray(data, dtype=dtype)


def describe_tensor(t) -> TensorInfo:
    t = np.asarray(t)
    return TensorInfo(shape=tuple(t.shape), ndim=t.ndim, dtype=str(t.dtype), size=int(t.size))


def elementwise(op: str, a, b) -> np.ndarray:
    """
    Apply a named elementwise operation with numpy broadcasting.

    Supported ops: add, sub, mul, div, pow, maximum, minimum.
    """
    try:
        fn = _ELEMENTWISE_OPS[op]
    except KeyError:
        raise ValueError(
            f"Unknown elementwise op: {op!r} (expected one of {sorted(_ELEMENTWISE_OPS)})"
        ) from None
    return fn(np.asarray(a, dtype=float), np.asarray(b, dtype=float))


def shuffle_indices(n: int, seed: Optional[int] = None) -> np.ndarray:
    """Random permutation of range(n); same seed -> same permutation."""
    if n < 0:
        raise ValueError(f"n must be non-negative, got {n}")
    rng = np.random.default_rng(seed)
    return rng.permutation(n)


def take_rows(t, indices) -> np.ndarray:
    return np.asarray(t)[np.asarray(indices, dtype=int)]


def reshape(t, shape: Sequence[int]) -> np.ndarray:
    t = np.asarray(t)
    try:
        return t.reshape(tuple(shape))
    except ValueError as e:
        raise ValueError(f"Cannot reshape tensor of shape {t.shape} into {tuple(shape)}: {e}") from e


def pairwise_distances(a, b, metric: str = "euclidean") -> np.ndarray:
    """
    Distance matrix of shape (len(a), len(b)).

    metric: "euclidean" or "manhattan".
    """
    a = np.atleast_2d(np.asarray(a, dtype=float))
    b = np.atleast_2d(np.asarray(b, dtype=float))
    if a.shape[1] != b.shape[1]:
        raise ValueError(f"Feature dimension mismatch: {a.shape[1]} vs {b.shape[1]}")

    diff = a[:, None, :] - b[None, :, :]
    if metric == "euclidean":
        return np.sqrt((diff ** 2).sum(axis=-1))
    if metric == "manhattan":
        return np.abs(diff).sum(axis=-1)
    raise ValueError(f"Unknown distance metric: {metric!r}")


def nearest_neighbors(
    train,
    query,
    k: int,
    metric: str = "euclidean",
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Return (distances, indices) of the k nearest training rows for each query row.

    Rows are sorted by ascending distance; equal distances keep the lower
    training index first.
    """
    train = np.atleast_2d(np.asarray(train, dtype=float))
    if k < 1 or k > train.shape[0]:
        raise ValueError(f"k must be between 1 and {train.shape[0]}, got {k}")

    dist = pairwise_distances(query, train, metric=metric)
    # stable sort keeps index order for ties
    order = np.argsort(dist, axis=1, kind="stable")[:, :k]
    return np.take_along_axis(dist, order, axis=1), order
