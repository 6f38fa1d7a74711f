# knnlab/cli/kfold.py

import argparse
import json

from knnlab.data import (
    SYNTHETIC_DATASETS,
    available_datasets,
    dataset_task,
    load_example_dataset,
    load_frame,
    load_regression_dataset,
)
from knnlab.kfold import DISTANCES, cross_validate_knn
from knnlab.logging_config import setup_logging


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="K-Fold cross-validate a KNN model over a grid of k values."
    )
    parser.add_argument("--dataset", choices=available_datasets(), default="iris_builtin")
    parser.add_argument("--n-folds", type=int, default=5)
    parser.add_argument("--neighbors", type=int, nargs="+", default=[1, 3, 5, 7, 9])
    parser.add_argument(
        "--weights",
        nargs="+",
        choices=["uniform", "distance"],
        default=["uniform"],
    )
    parser.add_argument("--metric", default=None, help="Scoring metric (default depends on task).")
    parser.add_argument("--distance", choices=DISTANCES, default="minkowski")
    parser.add_argument("--no-scale", action="store_true", help="Skip feature standardization.")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument(
        "--plot",
        action="store_true",
        help="Save the CV curve under artifacts/figures/.",
    )
    parser.add_argument("--log-level", default=None)
    return parser.parse_args(argv)


def _load_xy(dataset: str):
    if dataset in SYNTHETIC_DATASETS:
        loader = load_example_dataset if dataset == "synthetic" else load_regression_dataset
        splits = loader()
        return splits.X_train, splits.y_train
    frame = load_frame(dataset)
    return frame.features, frame.target


def main(argv=None):
    args = parse_args(argv)
    setup_logging(args.log_level)

    X, y = _load_xy(args.dataset)

    overrides = dict(
        task=dataset_task(args.dataset),
        n_folds=args.n_folds,
        neighbors=args.neighbors,
        weights=args.weights,
        metric=args.metric,
        distance=args.distance,
        scale=not args.no_scale,
    )
    if args.seed is not None:
        overrides["seed"] = args.seed

    result = cross_validate_knn(X, y, **overrides)
    output = {"dataset": args.dataset, **result.as_dict()}

    if args.plot:
        from knnlab.plotting import plot_cv_scores, save_figure, use_backend

        use_backend()
        fig = plot_cv_scores(result, title=f"{args.dataset}: K-Fold CV")
        output["figure"] = str(save_figure(fig, f"kfold_{args.dataset}"))

    print(json.dumps(output, indent=2))
    return output


if __name__ == "__main__":
    main()
