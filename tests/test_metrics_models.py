# tests/test_metrics_models.py

import numpy as np
import pytest
from sklearn.neighbors import KNeighborsClassifier, KNeighborsRegressor
from sklearn.pipeline import Pipeline

from knnlab import metrics
from knnlab.models import ModelFamily, create_local_model, get_model_spec, model_name_for_task


def test_default_metrics():
    assert metrics.default_metric("classification") == "accuracy"
    assert metrics.default_metric("regression") == "rmse"
    with pytest.raises(ValueError):
        metrics.default_metric("ranking")


def test_score_and_direction():
    assert metrics.score("accuracy", [0, 1, 1, 0], [0, 1, 0, 0]) == pytest.approx(0.75)
    assert metrics.score("rmse", [0.0, 0.0], [3.0, 4.0]) == pytest.approx(np.sqrt(12.5))
    assert metrics.greater_is_better("accuracy")
    assert not metrics.greater_is_better("mae")
    with pytest.raises(ValueError):
        metrics.score("logloss", [0], [0])


def test_validate_metric():
    assert metrics.validate_metric("regression", "r2") == "r2"
    with pytest.raises(ValueError, match="not valid for classification"):
        metrics.validate_metric("classification", "mae")


def test_evaluate_returns_all_task_metrics():
    out = metrics.evaluate("regression", [1.0, 2.0, 3.0], [1.0, 2.0, 4.0])
    assert set(out) == {"rmse", "mae", "r2"}
    assert all(isinstance(v, float) for v in out.values())


def test_model_specs():
    assert get_model_spec("knn").family == ModelFamily.KNN_CLASSIFIER
    assert get_model_spec("knn_regressor").task_type == "regression"
    assert model_name_for_task("regression") == "knn_regressor"
    with pytest.raises(ValueError, match="Unknown model name"):
        get_model_spec("logreg")


def test_create_local_model():
    model = create_local_model("knn", n_neighbors=3, weights="distance")
    assert isinstance(model, Pipeline)
    assert isinstance(model["model"], KNeighborsClassifier)
    assert model["model"].n_neighbors == 3
    assert model["model"].weights == "distance"

    bare = create_local_model("knn_regressor", scale=False, metric="manhattan")
    assert isinstance(bare, KNeighborsRegressor)
    assert bare.metric == "manhattan"
