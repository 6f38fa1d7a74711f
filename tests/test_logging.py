# tests/test_logging.py

import logging

import numpy as np
import pytest
from sklearn.datasets import load_iris

from knnlab.kfold import cross_validate_knn
from knnlab.logging_config import setup_logging


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    logger = logging.getLogger("knnlab")
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


def test_setup_logging_twice_keeps_one_handler():
    setup_logging("INFO")
    logger = setup_logging("DEBUG")

    assert logger.name == "knnlab"
    assert len(logger.handlers) == 1
    assert logger.level == logging.DEBUG


def test_setup_logging_with_file(tmp_path):
    log_fp = tmp_path / "knnlab.log"
    setup_logging(logging.INFO, log_file=str(log_fp))
    logger = setup_logging(logging.INFO, log_file=str(log_fp))
    assert len(logger.handlers) == 2

    logging.getLogger("knnlab.test").info("hello file")
    for handler in logger.handlers:
        handler.flush()
    assert "hello file" in log_fp.read_text(encoding="utf-8")


def test_unknown_level_name_falls_back_to_info():
    logger = setup_logging("chatty")
    assert logger.level == logging.INFO


def test_cross_validate_logs_grid_points_and_winner(caplog):
    X, y = load_iris(return_X_y=True)
    caplog.set_level(logging.DEBUG, logger="knnlab")

    result = cross_validate_knn(X, y, n_folds=3, neighbors=[1, 5])

    records = [r for r in caplog.records if r.name == "knnlab.kfold"]
    debug = [r.getMessage() for r in records if r.levelno == logging.DEBUG]
    info = [r.getMessage() for r in records if r.levelno == logging.INFO]

    assert len(debug) == 2
    assert debug[0].startswith("k=1 weights=uniform accuracy=")
    assert any(m.startswith(f"Best: k={result.best.n_neighbors} ") for m in info)
