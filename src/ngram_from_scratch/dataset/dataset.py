"""
Dataset discovery and loading
-----------------------------
Training data is a collection of documents with a `text` column
(.parquet or .csv), or a plain .txt file with one document per line.
"""

import logging
from pathlib import Path
from typing import List, Optional, Union

import pandas as pd

from ngram_from_scratch.config import DATASET_DIR, DEFAULT_DATASET

logger = logging.getLogger(__name__)

TEXT_COLUMN = "text"


def list_dataset_files(dataset_dir: Union[str, Path] = DATASET_DIR) -> List[str]:
    """Sorted names of the .parquet files in dataset_dir."""
    dataset_dir = Path(dataset_dir)
    if not dataset_dir.is_dir():
        return []
    return sorted(p.name for p in dataset_dir.glob("*.parquet"))


def select_dataset_file(
    dataset_dir: Union[str, Path] = DATASET_DIR,
    choice: Optional[str] = None,
    default: str = DEFAULT_DATASET,
) -> Path:
    """
    Resolve a dataset name to a path inside dataset_dir.

    An empty choice picks the default; an unknown one logs a warning and falls
    back to the default.
    """
    dataset_dir = Path(dataset_dir)
    files = list_dataset_files(dataset_dir)
    if not files:
        raise FileNotFoundError(f"No .parquet files found in {dataset_dir}/")

    logger.info("Available datasets: " + ", ".join(
        f"{name} (default)" if name == default else name for name in files
    ))

    if choice is None or choice.strip() == "":
        logger.info(f"Using default: {default}")
        return dataset_dir / default

    selected = choice.strip()
    if selected in files:
        return dataset_dir / selected

    logger.warning(f'File "{selected}" not found. Using default: {default}')
    return dataset_dir / default


def read_lines(path: Path) -> List[str]:
    text = path.read_text(encoding="utf-8")
    return [ln.strip() for ln in text.splitlines() if ln.strip()]


def _texts_from_frame(df: pd.DataFrame, path: Path) -> List[str]:
    if TEXT_COLUMN not in df.columns:
        raise ValueError(f"{path} has no '{TEXT_COLUMN}' column")
    # keep string records only (nulls and numbers are skipped)
    return [value for value in df[TEXT_COLUMN].tolist() if isinstance(value, str)]


def load_training_texts(path: Union[str, Path]) -> List[str]:
    """Load the training documents stored at path."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"{path} not found!")

    suffix = path.suffix.lower()
    logger.info(f'Loading "{path}"...')
    if suffix == ".parquet":
        texts = _texts_from_frame(pd.read_parquet(path), path)
    elif suffix == ".csv":
        texts = _texts_from_frame(pd.read_csv(path), path)
    elif suffix == ".txt":
        texts = read_lines(path)
    else:
        raise ValueError(f"Unsupported dataset format: {path.suffix}")

    logger.info(f"- Collected {len(texts)} text entries")
    return texts
