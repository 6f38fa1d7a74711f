# tests/test_frames.py

import numpy as np
import pandas as pd
import pytest

from knnlab.data import load_builtin_frame
from knnlab.frames import (
    FeatureFrame,
    class_balance,
    describe_frame,
    encode_labels,
    make_feature_frame,
    split_frame,
)


@pytest.fixture
def raw_df():
    return pd.DataFrame(
        {
            "height": [1.0, 2.0, np.nan, 4.0, 5.0],
            "weight": [10, 20, 30, 40, 50],
            "colour": ["r", "g", "b", "r", "g"],
            "label": ["a", "b", "a", "b", "a"],
        }
    )


def test_make_feature_frame_keeps_numeric_and_drops_na(raw_df):
    frame = make_feature_frame(raw_df, target="label")
    assert list(frame.features.columns) == ["height", "weight"]
    assert len(frame.features) == 4
    assert frame.target.tolist() == ["a", "b", "b", "a"]


def test_make_feature_frame_explicit_columns(raw_df):
    frame = make_feature_frame(raw_df, target="label", feature_cols=["weight"], dropna=False)
    assert list(frame.features.columns) == ["weight"]
    assert len(frame.features) == 5


def test_make_feature_frame_missing_target(raw_df):
    with pytest.raises(KeyError, match="species"):
        make_feature_frame(raw_df, target="species")


def test_describe_frame_counts_missing(raw_df):
    summary = describe_frame(raw_df)
    assert "missing" in summary.columns
    assert summary.loc["height", "missing"] == 1
    assert summary.loc["weight", "missing"] == 0
    assert summary.loc["weight", "mean"] == 30


def test_class_balance(raw_df):
    balance = class_balance(raw_df["label"])
    assert balance.loc["a", "count"] == 3
    assert balance["fraction"].sum() == pytest.approx(1.0)


def test_encode_labels_sorted():
    codes, classes = encode_labels(pd.Series(["b", "a", "c", "a"]))
    assert classes == ["a", "b", "c"]
    assert codes.tolist() == [1, 0, 2, 0]


def test_split_frame_stratified():
    frame = load_builtin_frame("iris_builtin")
    splits = split_frame(frame, test_size=0.2, stratify=True)
    assert len(splits.X_train) == 120
    assert len(splits.X_test) == 30
    assert splits.y_test.value_counts().tolist() == [10, 10, 10]


def test_builtin_frames():
    wine = load_builtin_frame("wine")
    assert isinstance(wine, FeatureFrame)
    assert wine.features.shape[0] == len(wine.target)

    with pytest.raises(KeyError):
        load_builtin_frame("mnist")
