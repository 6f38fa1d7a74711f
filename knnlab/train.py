# knnlab/train.py

from dataclasses import dataclass, asdict
from typing import Dict, Any, Optional, Tuple
from pathlib import Path
import json
import logging

from joblib import dump

from .data import (
    SYNTHETIC_DATASETS,
    dataset_task,
    load_example_dataset,
    load_frame,
    load_regression_dataset,
)
from .frames import split_frame
from .kfold import cross_validate_knn
from .metrics import evaluate
from .models import create_local_model, get_model_spec, model_name_for_task
from . import config

logger = logging.getLogger(__name__)


@dataclass
class TrainConfig:
    # What dataset to train on
    # - "synthetic" / "synthetic_regression": generated numeric data
    # - "iris_builtin", "wine", "diabetes": bundled with scikit-learn
    # - "iris", "penguins", "mpg", "tips": public CSVs (downloaded once)
    dataset: str = "synthetic"

    # Model choice (resolved via models.py); None -> picked from the dataset's task
    model_name: Optional[str] = None

    # KNN hyperparameters (used as-is unless tune=True)
    n_neighbors: int = 5
    weights: str = "uniform"

    # K-Fold tuning on the training split
    tune: bool = False
    n_folds: int = 5
    neighbors: Tuple[int, ...] = (1, 3, 5, 7, 9)

    # Synthetic datasets only:
    n_samples: int = 1000
    n_features: int = 20

    # Common:
    test_size: float = 0.2
    save_model_name: str = "default_model"  # folder under artifacts/pretrained


def _load_splits(cfg: TrainConfig, task: str):
    """Return (X_train, X_test, y_train, y_test, feature_names)."""
    if cfg.dataset in SYNTHETIC_DATASETS:
        loader = load_example_dataset if task == "classification" else load_regression_dataset
        splits = loader(
            n_samples=cfg.n_samples,
            n_features=cfg.n_features,
            test_size=cfg.test_size,
        )
        return splits.X_train, splits.X_test, splits.y_train, splits.y_test, None

    frame = load_frame(cfg.dataset)
    splits = split_frame(frame, test_size=cfg.test_size, stratify=(task == "classification"))
    return (
        splits.X_train,
        splits.X_test,
        splits.y_train,
        splits.y_test,
        list(frame.features.columns),
    )


def train(cfg: TrainConfig) -> Dict[str, Any]:
    """
    High-level training entrypoint.

    - Loads the dataset and splits it into train/test
    - Optionally tunes (n_neighbors, weights) with K-Fold CV on the train split
    - Fits the KNN model and evaluates it on the test split
    - Saves model + metadata to artifacts/pretrained/<save_model_name>/
    - Returns a dict with model_path, config, metrics, etc.
    """
    task = dataset_task(cfg.dataset)
    model_name = cfg.model_name or model_name_for_task(task)
    spec = get_model_spec(model_name)
    if spec.task_type != task:
        raise ValueError(
            f"Model {model_name!r} is a {spec.task_type} model but dataset "
            f"{cfg.dataset!r} is a {task} dataset"
        )

    X_train, X_test, y_train, y_test, feature_names = _load_splits(cfg, task)
    logger.info(
        "Training %s on %s (%d train / %d test rows)",
        model_name, cfg.dataset, len(X_train), len(X_test),
    )

    n_neighbors, weights = cfg.n_neighbors, cfg.weights
    extra: Dict[str, Any] = {
        "dataset": cfg.dataset,
        "task": task,
        "n_train_rows": int(len(X_train)),
        "n_features": int(X_train.shape[1]),
        "feature_names": feature_names,
    }

    if cfg.tune:
        cv = cross_validate_knn(
            X_train,
            y_train,
            task=task,
            n_folds=cfg.n_folds,
            neighbors=cfg.neighbors,
            weights=("uniform", "distance"),
        )
        n_neighbors, weights = cv.best.n_neighbors, cv.best.weights
        extra["cv"] = cv.as_dict()

    extra["n_neighbors"] = n_neighbors
    extra["weights"] = weights

    model = create_local_model(model_name, n_neighbors=n_neighbors, weights=weights)
    model.fit(X_train, y_train)

    y_pred = model.predict(X_test)
    metrics = evaluate(task, y_test, y_pred)
    logger.info("Test metrics: %s", metrics)

    # Prepare directory for saving
    model_dir: Path = config.PRETRAINED_DIR / cfg.save_model_name
    model_dir.mkdir(parents=True, exist_ok=True)

    model_fp = model_dir / "model.joblib"
    meta_fp = model_dir / "meta.json"

    dump(model, model_fp)

    meta = {
        "config": {**asdict(cfg), "model_name": model_name},
        "metrics": metrics,
        "extra": extra,
    }
    meta_fp.write_text(json.dumps(meta, indent=2))

    return {
        "model_path": str(model_fp),
        "config": meta["config"],
        "metrics": metrics,
        "extra": extra,
    }
