# knnlab/serve.py

from __future__ import annotations

import os
from functools import lru_cache
from typing import List, Optional, Union

import numpy as np
from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from .predict import kneighbors, load_trained_model, predict_array


# ---------- Config ----------

DEFAULT_MODEL_NAME = os.getenv("KNNLAB_MODEL_NAME", "default_model")


# ---------- Request / Response schemas ----------

class PredictRequest(BaseModel):
    instances: List[List[float]]


class PredictResponse(BaseModel):
    model_name: str
    dataset: Optional[str]
    task: Optional[str]
    n_instances: int
    predictions: List[Union[int, float, str]]


class NeighborsRequest(BaseModel):
    instances: List[List[float]]
    n_neighbors: Optional[int] = None


class NeighborsResponse(BaseModel):
    model_name: str
    n_instances: int
    distances: List[List[float]]
    indices: List[List[int]]


# ---------- FastAPI app ----------

app = FastAPI(title="KNNLab Inference API")


@lru_cache(maxsize=1)
def get_loaded_model():
    """Load and cache the trained model specified by KNNLAB_MODEL_NAME."""
    return load_trained_model(os.getenv("KNNLAB_MODEL_NAME", DEFAULT_MODEL_NAME))


def _to_array(instances: List[List[float]]) -> np.ndarray:
    if not instances:
        raise HTTPException(status_code=400, detail="No instances provided.")
    try:
        X = np.array(instances, dtype=float)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=f"Invalid input: {e}")
    if X.ndim != 2:
        raise HTTPException(status_code=400, detail="instances must be 2D")
    return X


def _to_python(value):
    # numpy scalars -> plain int/float/str for JSON
    if isinstance(value, np.generic):
        return value.item()
    return value


@app.get("/health")
def health():
    loaded = get_loaded_model()
    return {
        "status": "ok",
        "model_name": str(loaded.path.name),
        "dataset": loaded.dataset,
        "task": loaded.task,
    }


@app.post("/predict", response_model=PredictResponse)
def predict(req: PredictRequest):
    """
    Predict with the loaded KNN model.

    Expects:
      {
        "instances": [[f1, f2, ...], [...], ...]
      }
    """
    loaded = get_loaded_model()
    X = _to_array(req.instances)

    try:
        preds = predict_array(loaded, X)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=f"Error during prediction: {e}")

    return PredictResponse(
        model_name=str(loaded.path.name),
        dataset=loaded.dataset,
        task=loaded.task,
        n_instances=X.shape[0],
        predictions=[_to_python(p) for p in preds],
    )


@app.post("/neighbors", response_model=NeighborsResponse)
def neighbors(req: NeighborsRequest):
    """Nearest training samples (distance, training-row index) per instance."""
    loaded = get_loaded_model()
    X = _to_array(req.instances)

    try:
        dist, idx = kneighbors(loaded, X, n_neighbors=req.n_neighbors)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=f"Error during neighbour search: {e}")

    return NeighborsResponse(
        model_name=str(loaded.path.name),
        n_instances=X.shape[0],
        distances=dist.tolist(),
        indices=idx.astype(int).tolist(),
    )
