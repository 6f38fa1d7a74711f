# tests/conftest.py

import matplotlib

matplotlib.use("Agg")

import pytest
import requests

from knnlab import config


IRIS_CSV = b"""sepal_length,sepal_width,petal_length,petal_width,species
5.1,3.5,1.4,0.2,setosa
4.9,3.0,1.4,0.2,setosa
4.7,3.2,1.3,,setosa
7.0,3.2,4.7,1.4,versicolor
6.4,3.2,4.5,1.5,versicolor
6.9,3.1,4.9,1.5,versicolor
6.3,3.3,6.0,2.5,virginica
5.8,2.7,5.1,1.9,virginica
7.1,3.0,5.9,2.1,virginica
"""


class FakeResponse:
    def __init__(self, content: bytes, status_code: int = 200):
        self.content = content
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")


class FakeSession:
    """Stand-in for requests.Session that records the URLs it was asked for."""

    def __init__(self, content: bytes = IRIS_CSV, status_code: int = 200, exc=None):
        self.content = content
        self.status_code = status_code
        self.exc = exc
        self.calls = []

    def get(self, url, timeout=None):
        self.calls.append((url, timeout))
        if self.exc is not None:
            raise self.exc
        return FakeResponse(self.content, self.status_code)


@pytest.fixture
def artifacts(tmp_path, monkeypatch):
    """Point every artifacts directory at a temporary location."""
    root = tmp_path / "artifacts"
    monkeypatch.setattr(config, "ARTIFACTS_DIR", root)
    monkeypatch.setattr(config, "DATASETS_DIR", root / "datasets")
    monkeypatch.setattr(config, "PRETRAINED_DIR", root / "pretrained")
    monkeypatch.setattr(config, "FIGURES_DIR", root / "figures")
    return root


@pytest.fixture
def fake_session():
    return FakeSession()
