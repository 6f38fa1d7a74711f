# knnlab/datasets.py

"""
Public CSV datasets used in the workshop notebooks.

Files are downloaded once into artifacts/datasets/ and read from there
afterwards.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

import pandas as pd
import requests

from . import config
from .errors import DatasetDownloadError, UnknownDatasetError

logger = logging.getLogger(__name__)

SEABORN_DATA_URL = "https://raw.githubusercontent.com/mwaskom/seaborn-data/master"


@dataclass(frozen=True)
class DatasetSource:
    name: str
    url: str
    filename: str
    target: str
    task: str  # "classification" or "regression"
    description: str = ""


PUBLIC_DATASETS: Dict[str, DatasetSource] = {
    "iris": DatasetSource(
        name="iris",
        url=f"{SEABORN_DATA_URL}/iris.csv",
        filename="iris.csv",
        target="species",
        task="classification",
        description="Fisher's iris flowers: 4 measurements, 3 species.",
    ),
    "penguins": DatasetSource(
        name="penguins",
        url=f"{SEABORN_DATA_URL}/penguins.csv",
        filename="penguins.csv",
        target="species",
        task="classification",
        description="Palmer penguins: bill/flipper/body measurements, 3 species.",
    ),
    "mpg": DatasetSource(
        name="mpg",
        url=f"{SEABORN_DATA_URL}/mpg.csv",
        filename="mpg.csv",
        target="mpg",
        task="regression",
        description="Auto MPG: predict fuel efficiency from engine specs.",
    ),
    "tips": DatasetSource(
        name="tips",
        url=f"{SEABORN_DATA_URL}/tips.csv",
        filename="tips.csv",
        target="tip",
        task="regression",
        description="Restaurant tips: predict the tip from bill and party size.",
    ),
}


def get_source(name: str) -> DatasetSource:
    try:
        return PUBLIC_DATASETS[name]
    except KeyError:
        raise UnknownDatasetError(
            f"Unknown public dataset: {name!r} (known: {sorted(PUBLIC_DATASETS)})"
        ) from None


def dataset_path(name: str, directory: Optional[Path] = None) -> Path:
    source = get_source(name)
    return Path(directory or config.DATASETS_DIR) / source.filename


def fetch_dataset(
    name: str,
    force: bool = False,
    session: Optional[requests.Session] = None,
    timeout: Optional[float] = None,
    directory: Optional[Path] = None,
) -> Path:
    """
    Download a public dataset into the datasets directory and return its path.

    An existing file is reused unless force=True.
    """
    source = get_source(name)
    target_fp = dataset_path(name, directory)

    if target_fp.exists() and not force:
        logger.debug("Using cached %s at %s", name, target_fp)
        return target_fp

    http = session or requests
    logger.info("Downloading %s from %s", name, source.url)
    try:
        resp = http.get(source.url, timeout=config.HTTP_TIMEOUT if timeout is None else timeout)
        resp.raise_for_status()
    except requests.RequestException as e:
        raise DatasetDownloadError(f"Failed to download {name!r} from {source.url}: {e}") from e

    target_fp.parent.mkdir(parents=True, exist_ok=True)
    # target_fp only ever holds a complete download
    part_fp = target_fp.with_suffix(target_fp.suffix + ".part")
    part_fp.write_bytes(resp.content)
    part_fp.replace(target_fp)
    logger.info("Saved %s (%d bytes) to %s", name, len(resp.content), target_fp)
    return target_fp


def load_public_dataset(name: str, **fetch_kwargs) -> pd.DataFrame:
    """Fetch (if needed) and read a public dataset as a DataFrame."""
    return pd.read_csv(fetch_dataset(name, **fetch_kwargs))
