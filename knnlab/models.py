# knnlab/models.py

from enum import Enum
from dataclasses import dataclass, field
from typing import Any, Dict

from sklearn.neighbors import KNeighborsClassifier, KNeighborsRegressor
from sklearn.pipeline import Pipeline
from sklearn.preprocessing import StandardScaler


class ModelFamily(str, Enum):
    KNN_CLASSIFIER = "knn_classifier"
    KNN_REGRESSOR = "knn_regressor"


@dataclass
class ModelSpec:
    """
    High-level description of a model.
    - family: which estimator it is
    - task_type: 'classification' or 'regression'
    - extra: free-form dict for special flags
    """
    family: ModelFamily
    task_type: str = "classification"
    extra: Dict[str, Any] = field(default_factory=dict)


def get_model_spec(name: str) -> ModelSpec:
    """
    Map a short, user-facing model name to a full spec.
    This is where you define *all* supported models.
    """
    if name in ("knn", "knn_classifier"):
        return ModelSpec(family=ModelFamily.KNN_CLASSIFIER, task_type="classification")

    if name in ("knn_regressor", "knn_reg"):
        return ModelSpec(family=ModelFamily.KNN_REGRESSOR, task_type="regression")

    raise ValueError(f"Unknown model name: {name}")


def model_name_for_task(task: str) -> str:
    if task == "classification":
        return "knn"
    if task == "regression":
        return "knn_regressor"
    raise ValueError(f"Unknown task: {task}")


def create_local_model(
    model_name: str,
    n_neighbors: int = 5,
    weights: str = "uniform",
    metric: str = "minkowski",
    scale: bool = True,
):
    """
    Create a KNN estimator.

    With scale=True the estimator is wrapped in a Pipeline behind a
    StandardScaler, since KNN distances are sensitive to feature units.
    The final step is always named "model".
    """
    spec = get_model_spec(model_name)

    params = dict(n_neighbors=n_neighbors, weights=weights, metric=metric)

    if spec.family == ModelFamily.KNN_CLASSIFIER:
        estimator = KNeighborsClassifier(**params)
    elif spec.family == ModelFamily.KNN_REGRESSOR:
        estimator = KNeighborsRegressor(**params)
    else:
        raise ValueError(f"Unhandled model family: {spec.family}")

    if not scale:
        return estimator

    return Pipeline(
        steps=[
            ("scaler", StandardScaler()),
            ("model", estimator),
        ]
    )
