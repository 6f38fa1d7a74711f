# tests/test_train_predict.py

import json

import numpy as np
import pandas as pd
import pytest

from knnlab import tensors
from knnlab.data import load_example_dataset, load_builtin_frame
from knnlab.predict import kneighbors, load_trained_model, predict_array, predict_dataframe
from knnlab.train import TrainConfig, train


def test_train_builtin_dataset_saves_artifacts(artifacts):
    result = train(TrainConfig(dataset="iris_builtin", test_size=0.3, save_model_name="iris"))

    model_dir = artifacts / "pretrained" / "iris"
    assert (model_dir / "model.joblib").exists()
    meta = json.loads((model_dir / "meta.json").read_text())

    assert meta["config"]["model_name"] == "knn"
    assert meta["extra"]["task"] == "classification"
    assert meta["extra"]["n_neighbors"] == 5
    assert result["metrics"]["accuracy"] > 0.85
    assert set(result["metrics"]) == {"accuracy", "balanced_accuracy", "f1_macro"}


def test_train_with_tuning_records_cv(artifacts):
    result = train(
        TrainConfig(dataset="wine", tune=True, n_folds=3, neighbors=(1, 5, 9), save_model_name="wine")
    )

    extra = result["extra"]
    assert extra["n_neighbors"] in (1, 5, 9)
    assert extra["weights"] in ("uniform", "distance")
    assert len(extra["cv"]["grid"]) == 6
    assert extra["cv"]["best"]["n_neighbors"] == extra["n_neighbors"]


def test_train_synthetic_regression(artifacts):
    result = train(
        TrainConfig(dataset="synthetic_regression", n_samples=200, n_features=5, save_model_name="reg")
    )
    assert result["config"]["model_name"] == "knn_regressor"
    assert set(result["metrics"]) == {"rmse", "mae", "r2"}


def test_train_rejects_task_mismatch(artifacts):
    with pytest.raises(ValueError, match="regression dataset"):
        train(TrainConfig(dataset="diabetes", model_name="knn"))


def test_train_rejects_unknown_dataset(artifacts):
    with pytest.raises(KeyError):
        train(TrainConfig(dataset="mnist"))


def test_load_and_predict(artifacts):
    train(TrainConfig(dataset="iris_builtin", save_model_name="iris"))
    loaded = load_trained_model("iris")

    assert loaded.dataset == "iris_builtin"
    assert loaded.task == "classification"

    frame = load_builtin_frame("iris_builtin")
    X_df = frame.features.head(5)

    from_df = predict_dataframe(loaded, X_df)
    from_array = predict_array(loaded, X_df.to_numpy())
    np.testing.assert_array_equal(from_df, from_array)
    assert from_df.shape == (5,)

    with pytest.raises(ValueError, match="2D"):
        predict_array(loaded, np.zeros(4))
    with pytest.raises(TypeError):
        predict_dataframe(loaded, X_df.to_numpy())


def test_kneighbors_uses_scaled_space(artifacts):
    train(TrainConfig(dataset="synthetic", n_samples=200, n_features=6, save_model_name="syn"))
    loaded = load_trained_model("syn")

    splits = load_example_dataset(n_samples=200, n_features=6, test_size=0.2)
    query = splits.X_test[:3]

    dist, idx = kneighbors(loaded, query, n_neighbors=4)
    assert dist.shape == (3, 4)
    assert np.all(np.diff(dist, axis=1) >= 0)

    scaler = loaded.model["scaler"]
    ref_dist, ref_idx = tensors.nearest_neighbors(
        scaler.transform(splits.X_train), scaler.transform(query), k=4
    )
    np.testing.assert_allclose(dist, ref_dist, rtol=1e-6)
    np.testing.assert_array_equal(idx, ref_idx)


def test_load_missing_model(artifacts):
    with pytest.raises(FileNotFoundError):
        load_trained_model("nope")


def test_load_tolerates_broken_meta(artifacts):
    train(TrainConfig(dataset="synthetic", n_samples=100, n_features=4, save_model_name="m"))
    (artifacts / "pretrained" / "m" / "meta.json").write_text("{not json")

    loaded = load_trained_model("m")
    assert loaded.meta == {}
    assert loaded.dataset is None
