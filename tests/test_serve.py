# tests/test_serve.py

import pytest
from fastapi.testclient import TestClient

from knnlab import serve
from knnlab.data import load_builtin_frame
from knnlab.train import TrainConfig, train


@pytest.fixture
def client(artifacts, monkeypatch):
    train(TrainConfig(dataset="iris_builtin", save_model_name="served_iris"))
    monkeypatch.setenv("KNNLAB_MODEL_NAME", "served_iris")
    serve.get_loaded_model.cache_clear()
    yield TestClient(serve.app)
    serve.get_loaded_model.cache_clear()


@pytest.fixture
def instances():
    return load_builtin_frame("iris_builtin").features.head(3).to_numpy().tolist()


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "ok"
    assert body["model_name"] == "served_iris"
    assert body["dataset"] == "iris_builtin"
    assert body["task"] == "classification"


def test_predict(client, instances):
    resp = client.post("/predict", json={"instances": instances})
    assert resp.status_code == 200
    body = resp.json()
    assert body["n_instances"] == 3
    # first rows of iris are all setosa (class 0)
    assert body["predictions"] == [0, 0, 0]


def test_neighbors(client, instances):
    resp = client.post("/neighbors", json={"instances": instances, "n_neighbors": 2})
    assert resp.status_code == 200
    body = resp.json()
    assert len(body["distances"]) == 3
    assert all(len(row) == 2 for row in body["indices"])
    assert all(row[0] <= row[1] for row in body["distances"])


@pytest.mark.parametrize(
    "payload",
    [
        {"instances": []},
        {"instances": [[1.0, 2.0], [1.0]]},
        {"instances": [[1.0, 2.0]]},
    ],
)
def test_predict_bad_input(client, payload):
    resp = client.post("/predict", json=payload)
    assert resp.status_code == 400


def test_neighbors_too_many(client, instances):
    resp = client.post("/neighbors", json={"instances": instances, "n_neighbors": 10_000})
    assert resp.status_code == 400
