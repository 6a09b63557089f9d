"""
Exporter - Stage 4

Writes the cleaned table as delimited text: one header row, then one row per
movie, columns in the fixed order, no index column.
"""

import pandas as pd
from pathlib import Path
from typing import Sequence, Union

from ..errors import SchemaError
from ..schema import FINAL_COLUMNS, require_columns
from ..utils.file_utils import save_csv
from ..utils.logging_utils import get_logger

logger = get_logger(__name__)

SUPPORTED_DELIMITERS = (',', ';')


def export_dataset(
    df: pd.DataFrame,
    path: Union[str, Path],
    delimiter: str = ',',
    columns: Sequence[str] = tuple(FINAL_COLUMNS)
) -> Path:
    """
    Serialize the dataset.

    Args:
        df: Cleaned table
        path: Output file
        delimiter: ',' or ';'
        columns: Column order to write

    Returns:
        Path of the written file

    Raises:
        SchemaError: If a column is missing or the delimiter is not supported
    """
    if delimiter not in SUPPORTED_DELIMITERS:
        raise SchemaError(
            f"Unsupported delimiter {delimiter!r}; expected one of {SUPPORTED_DELIMITERS}"
        )

    columns = list(columns)
    require_columns(df, columns, context="export")

    logger.info(f"Exporting {len(df)} rows x {len(columns)} columns (delimiter {delimiter!r})")

    return save_csv(df, path, columns=columns, delimiter=delimiter)
