# ---
# jupyter:
#   jupytext:
#     formats: py:percent
#   kernelspec:
#     display_name: Python 3
#     language: python
#     name: python3
# ---

# %% [markdown]
# # 01 - Tensors
#
# numpy arrays are the tensors every other notebook builds on.
# Here: shapes, elementwise math, shuffling, slicing, reshaping,
# and computing nearest neighbours by hand.

# %%
import numpy as np

from knnlab import tensors

# %% [markdown]
# ## Shapes and elementwise math

# %%
a = tensors.as_tensor([[1, 2, 3], [4, 5, 6]])
b = tensors.as_tensor([10, 20, 30])

print(tensors.describe_tensor(a))
print(tensors.elementwise("add", a, b))   # b is broadcast over the rows
print(tensors.elementwise("pow", a, 2))

# %% [markdown]
# ## Shuffling, slicing, reshaping
#
# A shuffled index array is how K-Fold cross-validation decides which
# rows land in which fold.

# %%
idx = tensors.shuffle_indices(6, seed=0)
print(idx)
print(tensors.take_rows(np.arange(6) * 10, idx))
print(tensors.reshape(np.arange(12), (3, 4)))

# %% [markdown]
# ## Nearest neighbours by hand

# %%
train = np.array([[0.0, 0.0], [1.0, 0.0], [0.0, 2.0], [5.0, 5.0]])
query = np.array([[0.2, 0.1]])

dist, ind = tensors.nearest_neighbors(train, query, k=2)
print("distances:", dist)
print("indices:  ", ind)

# %%
from sklearn.neighbors import NearestNeighbors

nn = NearestNeighbors(n_neighbors=2).fit(train)
print(nn.kneighbors(query))  # same answer as above
