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
# # 04 - Plotting
#
# Look at the data before fitting anything: if the classes do not
# separate in feature space, no choice of k will save the model.

# %%
import matplotlib.pyplot as plt

from knnlab.datasets import load_public_dataset
from knnlab.plotting import plot_feature_scatter, save_figure, use_backend

use_backend()  # KNNLAB_PLOT_BACKEND, "Agg" unless overridden

# %%
iris = load_public_dataset("iris")
fig = plot_feature_scatter(iris, "petal_length", "petal_width", hue="species")
save_figure(fig, "iris_petals")

# %%
fig = plot_feature_scatter(iris, "sepal_length", "sepal_width", hue="species")
save_figure(fig, "iris_sepals")
plt.close("all")
