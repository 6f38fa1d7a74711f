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
# # 03 - KNN and K-Fold cross-validation
#
# Pick k for a KNN classifier and a KNN regressor with K-Fold CV,
# then check the chosen model on a held-out test split.

# %%
import sys

from knnlab.plotting import use_backend

if "ipykernel" in sys.modules:
    use_backend("module://matplotlib_inline.backend_inline")
else:
    use_backend()

import matplotlib.pyplot as plt

from knnlab.data import load_builtin_frame
from knnlab.frames import split_frame
from knnlab.kfold import cross_validate_knn, fold_indices
from knnlab.metrics import evaluate
from knnlab.models import create_local_model
from knnlab.plotting import plot_confusion, plot_cv_scores, plot_predictions

# %% [markdown]
# ## How the folds are cut

# %%
for i, fold in enumerate(fold_indices(10, 3, seed=0)):
    print(i, fold)

# %% [markdown]
# ## Classification: wine

# %%
wine = load_builtin_frame("wine")
splits = split_frame(wine, test_size=0.25)

result = cross_validate_knn(
    splits.X_train,
    splits.y_train,
    n_folds=5,
    neighbors=range(1, 22, 2),
    weights=["uniform", "distance"],
)
result.to_frame().sort_values("mean", ascending=False).head()

# %%
plot_cv_scores(result)
plt.show()

# %%
best = result.best
model = create_local_model("knn", n_neighbors=best.n_neighbors, weights=best.weights)
model.fit(splits.X_train, splits.y_train)
y_pred = model.predict(splits.X_test)
print(evaluate("classification", splits.y_test, y_pred))
plot_confusion(splits.y_test, y_pred)
plt.show()

# %% [markdown]
# ## Regression: diabetes

# %%
diabetes = load_builtin_frame("diabetes")
splits = split_frame(diabetes, test_size=0.25, stratify=False)

result = cross_validate_knn(
    splits.X_train,
    splits.y_train,
    task="regression",
    metric="rmse",
    neighbors=range(1, 40, 3),
)
print("best k:", result.best.n_neighbors, "rmse:", round(result.best.mean, 2))

# %%
model = create_local_model("knn_regressor", n_neighbors=result.best.n_neighbors)
model.fit(splits.X_train, splits.y_train)
y_pred = model.predict(splits.X_test)
print(evaluate("regression", splits.y_test, y_pred))
plot_predictions(splits.y_test, y_pred)
plt.show()
