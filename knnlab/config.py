# knnlab/config.py

from pathlib import Path
import os

# Root of the project; overridable via env for containers/K8s
PROJECT_ROOT = Path(
    os.getenv("KNNLAB_ROOT", Path(__file__).resolve().parents[1])
)

# Base artifacts directory (models, datasets, figures)
ARTIFACTS_DIR = PROJECT_ROOT / "artifacts"

# Downloaded public datasets (CSV)
DATASETS_DIR = ARTIFACTS_DIR / "datasets"

# Where trained models / artifacts are stored
PRETRAINED_DIR = ARTIFACTS_DIR / "pretrained"

# Saved notebook / CLI figures
FIGURES_DIR = ARTIFACTS_DIR / "figures"

# Global random seed (overridable via env)
RANDOM_SEED = int(os.getenv("KNNLAB_RANDOM_SEED", "42"))

# Default matplotlib backend; notebooks switch to an inline one
PLOT_BACKEND = os.getenv("KNNLAB_PLOT_BACKEND", "Agg")

# Seconds to wait on dataset downloads
HTTP_TIMEOUT = float(os.getenv("KNNLAB_HTTP_TIMEOUT", "30"))

LOG_LEVEL = os.getenv("KNNLAB_LOG_LEVEL", "INFO")
