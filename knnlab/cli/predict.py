# knnlab/cli/predict.py

import argparse
import json

import numpy as np

from knnlab.data import SYNTHETIC_DATASETS, load_example_dataset, load_frame, load_regression_dataset
from knnlab.logging_config import setup_logging
from knnlab.predict import kneighbors, load_trained_model, predict_array, predict_dataframe


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Run predictions with a trained KNNLab model."
    )
    parser.add_argument(
        "--model-name",
        required=True,
        help="Name of the trained model directory under artifacts/pretrained/",
    )
    parser.add_argument(
        "--num-samples",
        type=int,
        default=5,
        help="How many samples to predict on.",
    )
    parser.add_argument(
        "--show-neighbors",
        action="store_true",
        help="Also print the nearest training samples for each prediction.",
    )
    parser.add_argument("--log-level", default=None)
    return parser.parse_args()


def _sample_inputs(loaded, num_samples: int):
    """Fresh samples shaped like the model's training data."""
    meta_cfg = loaded.meta.get("config", {})
    dataset = loaded.dataset or "synthetic"

    if dataset in SYNTHETIC_DATASETS:
        loader = load_example_dataset if dataset == "synthetic" else load_regression_dataset
        splits = loader(
            n_samples=200, n_features=meta_cfg.get("n_features", 20), test_size=0.2
        )
        return splits.X_test[:num_samples]

    frame = load_frame(dataset)
    return frame.features.head(num_samples)


def main():
    args = parse_args()
    setup_logging(args.log_level)

    loaded = load_trained_model(args.model_name)
    X = _sample_inputs(loaded, args.num_samples)

    if isinstance(X, np.ndarray):
        preds = predict_array(loaded, X)
    else:
        preds = predict_dataframe(loaded, X)

    output = {
        "model_name": args.model_name,
        "meta": loaded.meta,
        "n_samples": int(X.shape[0]),
        "predictions": preds.tolist(),
    }

    if args.show_neighbors:
        dist, idx = kneighbors(loaded, np.asarray(X, dtype=float))
        output["neighbors"] = {"distances": dist.tolist(), "indices": idx.tolist()}

    print(json.dumps(output, indent=2))


if __name__ == "__main__":
    main()
