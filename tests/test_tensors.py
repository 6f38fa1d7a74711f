# tests/test_tensors.py

import numpy as np
import pytest
from sklearn.neighbors import NearestNeighbors

from knnlab import tensors


def test_describe_tensor():
    info = tensors.describe_tensor(np.zeros((2, 3)))
    assert info.shape == (2, 3)
    assert info.ndim == 2
    assert info.size == 6
    assert info.dtype == "float64"


def test_elementwise_broadcasts():
    a = tensors.as_tensor([[1, 2, 3], [4, 5, 6]])
    out = tensors.elementwise("add", a, [10, 20, 30])
    np.testing.assert_array_equal(out, [[11, 22, 33], [14, 25, 36]])
    np.testing.assert_array_equal(tensors.elementwise("maximum", [1, 5], [3, 2]), [3, 5])


def test_elementwise_unknown_op():
    with pytest.raises(ValueError, match="Unknown elementwise op"):
        tensors.elementwise("mod", [1], [2])


def test_shuffle_indices_is_a_seeded_permutation():
    idx = tensors.shuffle_indices(20, seed=7)
    assert sorted(idx.tolist()) == list(range(20))
    np.testing.assert_array_equal(idx, tensors.shuffle_indices(20, seed=7))


def test_take_rows_and_reshape():
    t = np.arange(12).reshape(4, 3)
    np.testing.assert_array_equal(tensors.take_rows(t, [3, 0]), [[9, 10, 11], [0, 1, 2]])
    assert tensors.reshape(np.arange(12), (2, 6)).shape == (2, 6)
    with pytest.raises(ValueError, match="Cannot reshape"):
        tensors.reshape(np.arange(12), (5, 5))


def test_pairwise_distances():
    a = [[0.0, 0.0]]
    b = [[3.0, 4.0], [1.0, 1.0]]
    np.testing.assert_allclose(tensors.pairwise_distances(a, b), [[5.0, np.sqrt(2)]])
    np.testing.assert_allclose(tensors.pairwise_distances(a, b, metric="manhattan"), [[7.0, 2.0]])
    with pytest.raises(ValueError):
        tensors.pairwise_distances(a, [[1.0, 2.0, 3.0]])


def test_nearest_neighbors_matches_sklearn():
    rng = np.random.default_rng(0)
    train = rng.normal(size=(30, 3))
    query = rng.normal(size=(4, 3))

    dist, ind = tensors.nearest_neighbors(train, query, k=5)
    ref_dist, ref_ind = NearestNeighbors(n_neighbors=5).fit(train).kneighbors(query)

    np.testing.assert_allclose(dist, ref_dist, rtol=1e-6)
    np.testing.assert_array_equal(ind, ref_ind)


def test_nearest_neighbors_ties_keep_index_order():
    train = [[1.0], [-1.0], [2.0]]
    dist, ind = tensors.nearest_neighbors(train, [[0.0]], k=2)
    assert ind.tolist() == [[0, 1]]
    assert dist.tolist() == [[1.0, 1.0]]


def test_nearest_neighbors_rejects_k_larger_than_train():
    with pytest.raises(ValueError, match="k must be between"):
        tensors.nearest_neighbors([[0.0], [1.0]], [[0.5]], k=3)
