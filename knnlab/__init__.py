# knnlab/__init__.py

"""
KNNLab: small library behind the k-nearest-neighbours workshop notebooks.

Tensors (numpy), dataframes (pandas), KNN models and K-Fold
cross-validation (scikit-learn), charts (matplotlib). Runs the same
locally, in containers and on Kubernetes/OpenShift.
"""

from . import config, data, frames, kfold, metrics, models, tensors, train

__version__ = "0.1.0"
