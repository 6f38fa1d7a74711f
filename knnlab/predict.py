# knnlab/predict.py

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import json
import logging

import numpy as np
import pandas as pd
from joblib import load
from sklearn.pipeline import Pipeline

from . import config

logger = logging.getLogger(__name__)


@dataclass
class LoadedModel:
    model: Any
    meta: Dict[str, Any]
    path: Path

    @property
    def dataset(self) -> Optional[str]:
        """
        Try to infer the dataset name from metadata.

        Priority:
        1. meta["extra"]["dataset"]
        2. meta["config"]["dataset"]
        """
        extra = self.meta.get("extra", {})
        if isinstance(extra, dict) and "dataset" in extra:
            return extra["dataset"]

        cfg = self.meta.get("config", {})
        if isinstance(cfg, dict) and "dataset" in cfg:
            return cfg["dataset"]

        return None

    @property
    def task(self) -> Optional[str]:
        extra = self.meta.get("extra", {})
        if isinstance(extra, dict):
            return extra.get("task")
        return None

    @property
    def feature_names(self):
        extra = self.meta.get("extra", {})
        if isinstance(extra, dict):
            return extra.get("feature_names")
        return None


def load_trained_model(name: str) -> LoadedModel:
    """
    Load a trained model and its metadata from artifacts/pretrained/<name>/.

    Assumes:
      - model.joblib
      - meta.json  (optional, but recommended)
    """
    model_dir = config.PRETRAINED_DIR / name
    model_fp = model_dir / "model.joblib"
    meta_fp = model_dir / "meta.json"

    if not model_fp.exists():
        raise FileNotFoundError(f"Model file not found: {model_fp}")

    model = load(model_fp)

    meta: Dict[str, Any] = {}
    if meta_fp.exists():
        try:
            meta = json.loads(meta_fp.read_text())
        except json.JSONDecodeError:
            logger.warning("Ignoring unreadable metadata file %s", meta_fp)
            meta = {}

    return LoadedModel(model=model, meta=meta, path=model_dir)


def _as_frame_if_named(loaded: LoadedModel, X: np.ndarray):
    # Models fitted on DataFrames expect the same column names back
    names = loaded.feature_names
    if names and len(names) == X.shape[1]:
        return pd.DataFrame(X, columns=names)
    return X


def predict_array(loaded: LoadedModel, X: np.ndarray) -> np.ndarray:
    """Run predictions on a 2D numpy array X using the loaded model."""
    if X.ndim != 2:
        raise ValueError(f"Expected 2D array for X, got shape {X.shape}")
    return loaded.model.predict(_as_frame_if_named(loaded, X))


def predict_dataframe(loaded: LoadedModel, df: pd.DataFrame) -> np.ndarray:
    """
    Run predictions on a pandas DataFrame using the loaded model.

    Intended for the tabular datasets, where the model was fitted on a
    DataFrame with named columns.
    """
    if not isinstance(df, pd.DataFrame):
        raise TypeError(f"Expected pandas DataFrame, got {type(df)}")

    return loaded.model.predict(df)


def kneighbors(
    loaded: LoadedModel,
    X: np.ndarray,
    n_neighbors: Optional[int] = None,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Return (distances, indices) of the nearest training samples.

    For scaled pipelines the query goes through the scaler first, so the
    distances are in the same (standardized) space the model votes in.
    Indices refer to rows of the training split the model was fitted on.
    """
    X = np.asarray(X, dtype=float)
    if X.ndim != 2:
        raise ValueError(f"Expected 2D array for X, got shape {X.shape}")

    model = loaded.model
    query = _as_frame_if_named(loaded, X)
    if isinstance(model, Pipeline):
        query = model[:-1].transform(query)
        model = model[-1]

    return model.kneighbors(query, n_neighbors=n_neighbors)
