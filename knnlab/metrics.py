# knnlab/metrics.py

from typing import Callable, Dict

import numpy as np
from sklearn.metrics import (
    accuracy_score,
    balanced_accuracy_score,
    f1_score,
    mean_absolute_error,
    mean_squared_error,
    r2_score,
)


def _rmse(y_true, y_pred) -> float:
    return float(np.sqrt(mean_squared_error(y_true, y_pred)))


def _f1_macro(y_true, y_pred) -> float:
    return float(f1_score(y_true, y_pred, average="macro"))


CLASSIFICATION_METRICS: Dict[str, Callable] = {
    "accuracy": accuracy_score,
    "balanced_accuracy": balanced_accuracy_score,
    "f1_macro": _f1_macro,
}

REGRESSION_METRICS: Dict[str, Callable] = {
    "rmse": _rmse,
    "mae": mean_absolute_error,
    "r2": r2_score,
}

# error metrics: lower is better
_LOWER_IS_BETTER = {"rmse", "mae"}

TASKS = ("classification", "regression")


def metrics_for_task(task: str) -> Dict[str, Callable]:
    if task == "classification":
        return CLASSIFICATION_METRICS
    if task == "regression":
        return REGRESSION_METRICS
    raise ValueError(f"Unknown task: {task!r} (expected one of {TASKS})")


def default_metric(task: str) -> str:
    if task == "classification":
        return "accuracy"
    if task == "regression":
        return "rmse"
    raise ValueError(f"Unknown task: {task!r} (expected one of {TASKS})")


def validate_metric(task: str, metric: str) -> str:
    known = metrics_for_task(task)
    if metric not in known:
        raise ValueError(
            f"Metric {metric!r} is not valid for {task} (expected one of {sorted(known)})"
        )
    return metric


def greater_is_better(metric: str) -> bool:
    return metric not in _LOWER_IS_BETTER


def score(metric: str, y_true, y_pred) -> float:
    fn = CLASSIFICATION_METRICS.get(metric) or REGRESSION_METRICS.get(metric)
    if fn is None:
        raise ValueError(f"Unknown metric: {metric!r}")
    return float(fn(y_true, y_pred))


def evaluate(task: str, y_true, y_pred) -> Dict[str, float]:
    """All metrics for the task, as plain floats (JSON-friendly)."""
    return {name: float(fn(y_true, y_pred)) for name, fn in metrics_for_task(task).items()}
