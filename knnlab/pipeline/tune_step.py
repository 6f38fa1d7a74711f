"""
Pipeline tuning step for KNNLab on Kubeflow / OpenShift AI.

This script is designed to run inside a container as a single pipeline step.
It:
- trains a KNN model on the configured dataset, with K-Fold tuning of k,
- writes model.joblib + meta.json to an OUTPUT_DIR (local path in the container).

The pipeline captures OUTPUT_DIR as an output artifact.
"""

from __future__ import annotations

import os
import shutil
from pathlib import Path

from knnlab import config
from knnlab.logging_config import setup_logging
from knnlab.train import TrainConfig, train

# --------------------------------------------------------------------
# Read configuration from environment variables (pipeline-friendly)
# --------------------------------------------------------------------

DATASET = os.getenv("KNNLAB_DATASET", "iris_builtin")
N_FOLDS = int(os.getenv("KNNLAB_N_FOLDS", "5"))
NEIGHBORS = tuple(int(k) for k in os.getenv("KNNLAB_NEIGHBORS", "1,3,5,7,9").split(","))
TEST_SIZE = float(os.getenv("KNNLAB_TEST_SIZE", "0.2"))
SAVE_MODEL_NAME = os.getenv("KNNLAB_SAVE_MODEL_NAME", "knn_pipeline")
OUTPUT_DIR = Path(os.getenv("KNNLAB_OUTPUT_DIR", "artifacts/pipeline_output"))


def main():
    logger = setup_logging()
    logger.info("=== KNN pipeline tuning step ===")
    logger.info("Dataset: %s, folds: %d, k grid: %s", DATASET, N_FOLDS, NEIGHBORS)

    cfg = TrainConfig(
        dataset=DATASET,
        tune=True,
        n_folds=N_FOLDS,
        neighbors=NEIGHBORS,
        test_size=TEST_SIZE,
        save_model_name=SAVE_MODEL_NAME,
    )
    result = train(cfg)

    OUTPUT_DIR.mkdir(parents=True, exist_ok=True)
    model_dir = config.PRETRAINED_DIR / SAVE_MODEL_NAME
    for name in ("model.joblib", "meta.json"):
        shutil.copy2(model_dir / name, OUTPUT_DIR / name)
        logger.info("Copied %s -> %s", name, OUTPUT_DIR)

    logger.info("Test metrics: %s", result["metrics"])
    logger.info("=== Tuning step complete ===")
    return result


if __name__ == "__main__":
    main()
