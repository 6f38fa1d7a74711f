# knnlab/cli/train.py

import argparse
import json

from knnlab.data import available_datasets
from knnlab.logging_config import setup_logging
from knnlab.train import TrainConfig, train


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Train a KNN model with KNNLab."
    )

    parser.add_argument(
        "--dataset",
        choices=available_datasets(),
        default="synthetic",
        help="Which dataset to train on.",
    )

    parser.add_argument(
        "--model-name",
        default=None,
        help="Model name (knn, knn_regressor). Defaults to the dataset's task.",
    )

    parser.add_argument("--n-neighbors", type=int, default=5, help="k for the KNN model.")
    parser.add_argument(
        "--weights",
        choices=["uniform", "distance"],
        default="uniform",
        help="Neighbour vote weighting.",
    )

    parser.add_argument(
        "--tune",
        action="store_true",
        help="Pick n_neighbors/weights with K-Fold CV on the training split.",
    )
    parser.add_argument("--n-folds", type=int, default=5, help="Folds used when --tune is set.")
    parser.add_argument(
        "--neighbors",
        type=int,
        nargs="+",
        default=[1, 3, 5, 7, 9],
        help="Candidate k values used when --tune is set.",
    )

    # Synthetic-only arguments
    parser.add_argument(
        "--n-samples",
        type=int,
        default=1000,
        help="Number of samples (synthetic datasets only).",
    )
    parser.add_argument(
        "--n-features",
        type=int,
        default=20,
        help="Number of features (synthetic datasets only).",
    )

    parser.add_argument(
        "--test-size",
        type=float,
        default=0.2,
        help="Fraction of data to use as test split.",
    )

    parser.add_argument(
        "--save-model-name",
        default="default_model",
        help="Name of folder under artifacts/pretrained/ to store the trained model.",
    )
    parser.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING...")

    return parser.parse_args()


def main():
    args = parse_args()
    setup_logging(args.log_level)

    cfg = TrainConfig(
        dataset=args.dataset,
        model_name=args.model_name,
        n_neighbors=args.n_neighbors,
        weights=args.weights,
        tune=args.tune,
        n_folds=args.n_folds,
        neighbors=tuple(args.neighbors),
        n_samples=args.n_samples,
        n_features=args.n_features,
        test_size=args.test_size,
        save_model_name=args.save_model_name,
    )

    results = train(cfg)
    print(json.dumps(results, indent=2))


if __name__ == "__main__":
    main()
