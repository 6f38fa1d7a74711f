# knnlab/data.py

from dataclasses import dataclass
import numpy as np
import pandas as pd

from sklearn.datasets import load_diabetes, load_iris, load_wine, make_classification, make_regression
from sklearn.model_selection import train_test_split

from .config import RANDOM_SEED
from .datasets import PUBLIC_DATASETS, get_source, load_public_dataset
from .errors import UnknownDatasetError
from .frames import FeatureFrame, make_feature_frame


@dataclass
class DatasetSplits:
    X_train: np.ndarray
    X_test: np.ndarray
    y_train: np.ndarray
    y_test: np.ndarray


# name -> (loader, task); all bundled with scikit-learn, no download needed
BUILTIN_DATASETS = {
    "iris_builtin": (load_iris, "classification"),
    "wine": (load_wine, "classification"),
    "diabetes": (load_diabetes, "regression"),
}

SYNTHETIC_DATASETS = {
    "synthetic": "classification",
    "synthetic_regression": "regression",
}


def load_example_dataset(
    n_samples: int = 1000,
    n_features: int = 20,
    test_size: float = 0.2,
) -> DatasetSplits:
    """
    Generate a synthetic dataset for classification.

    We choose n_informative and n_redundant *based on* n_features so that:
    n_informative + n_redundant < n_features  (to keep sklearn happy).
    """
    n_informative = max(2, n_features // 2)
    n_redundant = max(0, min(5, n_features - n_informative - 1))

    X, y = make_classification(
        n_samples=n_samples,
        n_features=n_features,
        n_informative=n_informative,
        n_redundant=n_redundant,
        n_repeated=0,
        random_state=RANDOM_SEED,
    )

    X_train, X_test, y_train, y_test = train_test_split(
        X, y, test_size=test_size, random_state=RANDOM_SEED
    )

    return DatasetSplits(X_train=X_train, X_test=X_test, y_train=y_train, y_test=y_test)


def load_regression_dataset(
    n_samples: int = 1000,
    n_features: int = 20,
    test_size: float = 0.2,
    noise: float = 10.0,
) -> DatasetSplits:
    """Synthetic regression counterpart of load_example_dataset."""
    X, y = make_regression(
        n_samples=n_samples,
        n_features=n_features,
        n_informative=max(1, n_features // 2),
        noise=noise,
        random_state=RANDOM_SEED,
    )

    X_train, X_test, y_train, y_test = train_test_split(
        X, y, test_size=test_size, random_state=RANDOM_SEED
    )

    return DatasetSplits(X_train=X_train, X_test=X_test, y_train=y_train, y_test=y_test)


def load_builtin_frame(name: str) -> FeatureFrame:
    """Load one of the scikit-learn bundled datasets as a FeatureFrame."""
    try:
        loader, _ = BUILTIN_DATASETS[name]
    except KeyError:
        raise UnknownDatasetError(
            f"Unknown builtin dataset: {name!r} (known: {sorted(BUILTIN_DATASETS)})"
        ) from None

    bunch = loader(as_frame=True)
    features: pd.DataFrame = bunch.data
    target: pd.Series = bunch.target
    return FeatureFrame(features=features, target=target)


def dataset_task(name: str) -> str:
    """'classification' or 'regression' for any dataset name train() accepts."""
    if name in SYNTHETIC_DATASETS:
        return SYNTHETIC_DATASETS[name]
    if name in BUILTIN_DATASETS:
        return BUILTIN_DATASETS[name][1]
    return get_source(name).task


def available_datasets():
    return sorted(list(SYNTHETIC_DATASETS) + list(BUILTIN_DATASETS) + list(PUBLIC_DATASETS))


def load_frame(name: str, **fetch_kwargs) -> FeatureFrame:
    """
    Load a tabular dataset (builtin or public) as numeric features + target.

    Public datasets are downloaded on first use.
    """
    if name in BUILTIN_DATASETS:
        return load_builtin_frame(name)

    source = get_source(name)
    df = load_public_dataset(name, **fetch_kwargs)
    return make_feature_frame(df, target=source.target)
