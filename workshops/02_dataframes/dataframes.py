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
# # 02 - Dataframes
#
# Download a public CSV, look at it, and turn it into numeric features
# plus a target column.

# %%
from knnlab.datasets import PUBLIC_DATASETS, load_public_dataset
from knnlab.frames import class_balance, describe_frame, make_feature_frame, split_frame
from knnlab.logging_config import setup_logging

setup_logging()

# %%
for name, src in PUBLIC_DATASETS.items():
    print(f"{name:10s} {src.task:15s} {src.description}")

# %%
penguins = load_public_dataset("penguins")
penguins.head()

# %%
describe_frame(penguins)

# %% [markdown]
# KNN needs numbers and no gaps: keep numeric columns, drop rows with NaN.

# %%
frame = make_feature_frame(penguins, target="species")
print(frame.features.shape)
class_balance(frame.target)

# %%
splits = split_frame(frame, test_size=0.25, stratify=True)
class_balance(splits.y_test)
