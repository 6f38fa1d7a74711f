# knnlab/frames.py

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd
from sklearn.model_selection import train_test_split

from .config import RANDOM_SEED


# ---------- Simple containers ----------

@dataclass
class FeatureFrame:
    features: pd.DataFrame   # X
    target: pd.Series        # y


@dataclass
class FrameSplits:
    X_train: pd.DataFrame
    X_test: pd.DataFrame
    y_train: pd.Series
    y_test: pd.Series


# ---------- Transforms ----------

def make_feature_frame(
    df: pd.DataFrame,
    target: str,
    feature_cols: Optional[Sequence[str]] = None,
    numeric_only: bool = True,
    dropna: bool = True,
) -> FeatureFrame:
    """
    Split a raw table into (X, y).

    - feature_cols: explicit feature list; defaults to every other column.
    - numeric_only: keep only numeric features (KNN needs distances).
    - dropna: drop rows with a missing value in any kept column.
    """
    if target not in df.columns:
        raise KeyError(f"Target column {target!r} not in frame columns {list(df.columns)}")

    if feature_cols is None:
        features = df.drop(columns=[target])
    else:
        features = df[list(feature_cols)]

    if numeric_only:
        features = features.select_dtypes(include="number")

    data = pd.concat([features, df[target]], axis=1)
    if dropna:
        data = data.dropna()

    return FeatureFrame(
        features=data.drop(columns=[target]),
        target=data[target],
    )


def describe_frame(df: pd.DataFrame) -> pd.DataFrame:
    """
    Per-column summary for numeric columns: count, mean, std, quartiles,
    plus the number of missing values.
    """
    summary = df.describe().T
    summary["missing"] = df[summary.index].isna().sum()
    return summary


def class_balance(y: pd.Series) -> pd.DataFrame:
    counts = y.value_counts()
    return pd.DataFrame({"count": counts, "fraction": counts / counts.sum()})


def encode_labels(y: pd.Series) -> Tuple[np.ndarray, List]:
    """Map labels to integer codes; returns (codes, classes in code order)."""
    codes, classes = pd.factorize(y, sort=True)
    return codes, list(classes)


def split_frame(
    frame: FeatureFrame,
    test_size: float = 0.2,
    stratify: bool = True,
) -> FrameSplits:
    stratify_vec = frame.target if stratify else None

    X_train, X_test, y_train, y_test = train_test_split(
        frame.features,
        frame.target,
        test_size=test_size,
        random_state=RANDOM_SEED,
        stratify=stratify_vec,
    )

    return FrameSplits(X_train=X_train, X_test=X_test, y_train=y_train, y_test=y_test)
