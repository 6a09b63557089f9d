"""
File I/O utilities for the movie pipeline.
Handles loading and saving CSV, JSON, YAML and plain-text files.
"""

import json
import yaml
import pandas as pd
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

from .logging_utils import get_logger
from ..errors import SchemaError

logger = get_logger(__name__)


def load_config(config_path: Union[str, Path]) -> Dict[str, Any]:
    """
    Load YAML configuration file.

    Args:
        config_path: Path to YAML config file

    Returns:
        Configuration dictionary (empty if the file is empty)

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If YAML is malformed

    Example:
        >>> config = load_config("config/pipeline_config.yaml")
        >>> print(config['outliers']['zscore_threshold'])
        3.0
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    logger.info(f"Loading config from: {config_path}")

    with open(config_path, 'r') as f:
        config = yaml.safe_load(f)

    return config or {}


def load_csv(
    file_path: Union[str, Path],
    sample_size: Optional[int] = None,
    **kwargs
) -> pd.DataFrame:
    """
    Load CSV file into pandas DataFrame.

    Args:
        file_path: Path to CSV file
        sample_size: Number of rows to load (None = all rows)
        **kwargs: Additional arguments passed to pd.read_csv

    Returns:
        DataFrame containing CSV data

    Raises:
        FileNotFoundError: If the file doesn't exist
        SchemaError: If the file cannot be parsed as CSV

    Example:
        >>> df = load_csv("data/raw/movie_metadata.csv")
        >>> print(f"Loaded {len(df)} rows")
    """
    file_path = Path(file_path)

    if not file_path.exists():
        raise FileNotFoundError(f"CSV file not found: {file_path}")

    logger.info(f"Loading CSV: {file_path}")

    try:
        if sample_size:
            df = pd.read_csv(file_path, nrows=sample_size, **kwargs)
            logger.info(f"Loaded {len(df)} rows (sampled from {sample_size})")
        else:
            df = pd.read_csv(file_path, **kwargs)
            logger.info(f"Loaded {len(df)} rows")
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
        raise SchemaError(f"Malformed CSV {file_path}: {e}") from e

    return df


def save_csv(
    df: pd.DataFrame,
    file_path: Union[str, Path],
    columns: Optional[Sequence[str]] = None,
    delimiter: str = ','
) -> Path:
    """
    Save DataFrame to a delimited text file without the index.

    Args:
        df: DataFrame to save
        file_path: Output file path
        columns: Columns to write, in order (None = all)
        delimiter: Field separator

    Returns:
        Path of the written file
    """
    file_path = Path(file_path)
    file_path.parent.mkdir(parents=True, exist_ok=True)

    logger.debug(f"Saving CSV: {file_path}")
    df.to_csv(file_path, sep=delimiter, columns=list(columns) if columns else None, index=False)
    logger.info(f"Saved {len(df)} rows to: {file_path}")

    return file_path


def load_json(file_path: Union[str, Path]) -> Union[Dict, List]:
    """
    Load JSON file.

    Args:
        file_path: Path to JSON file

    Returns:
        Parsed JSON data (dict or list)
    """
    file_path = Path(file_path)

    if not file_path.exists():
        raise FileNotFoundError(f"JSON file not found: {file_path}")

    logger.debug(f"Loading JSON: {file_path}")

    with open(file_path, 'r') as f:
        data = json.load(f)

    return data


def save_json(
    data: Union[Dict, List],
    file_path: Union[str, Path],
    indent: int = 2
) -> Path:
    """
    Save data to JSON file.

    NaN and infinite floats are written as JSON null.

    Args:
        data: Data to save (dict or list)
        file_path: Output file path
        indent: JSON indentation (default: 2)

    Example:
        >>> save_json({"rows": 3756}, "data/outputs/cleaning_log.json")
    """
    file_path = Path(file_path)
    file_path.parent.mkdir(parents=True, exist_ok=True)

    logger.debug(f"Saving JSON: {file_path}")

    with open(file_path, 'w') as f:
        json.dump(_json_safe(data), f, indent=indent, default=str)

    logger.info(f"Saved JSON to: {file_path}")

    return file_path


def save_text(text: str, file_path: Union[str, Path]) -> Path:
    """Write a text artifact (e.g. a regression summary)."""
    file_path = Path(file_path)
    file_path.parent.mkdir(parents=True, exist_ok=True)

    with open(file_path, 'w') as f:
        f.write(text)

    logger.info(f"Saved text to: {file_path}")

    return file_path


def _json_safe(value: Any) -> Any:
    if isinstance(value, dict):
        return {str(k): _json_safe(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_json_safe(v) for v in value]
    if hasattr(value, 'item') and not isinstance(value, (str, bytes)):
        try:
            value = value.item()
        except (ValueError, TypeError):
            return value
    if isinstance(value, float) and (value != value or value in (float('inf'), float('-inf'))):
        return None
    return value
