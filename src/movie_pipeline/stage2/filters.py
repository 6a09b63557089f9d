"""
Row filter and column selector.

Both return new DataFrames; the input is never modified.
"""

import pandas as pd
from typing import Any, Sequence

from ..schema import require_columns
from ..utils.logging_utils import get_logger

logger = get_logger(__name__)


def filter_rows(df: pd.DataFrame, column: str, value: Any) -> pd.DataFrame:
    """
    Keep the rows where ``df[column] == value``, in their original order.

    Args:
        df: Input table
        column: Column to test
        value: Value a row must have to be kept

    Returns:
        New DataFrame with the matching rows and a fresh 0..n-1 index

    Raises:
        SchemaError: If ``column`` is not in the table

    Example:
        >>> usa = filter_rows(movies, 'country', 'USA')
    """
    require_columns(df, [column], context="filter input")

    result = df.loc[df[column] == value].reset_index(drop=True)

    logger.info(f"Filter {column} == {value!r}: {len(df)} -> {len(result)} rows")

    return result


def select_columns(df: pd.DataFrame, columns: Sequence[str]) -> pd.DataFrame:
    """
    Project the table onto ``columns``, in the given order.

    Args:
        df: Input table
        columns: Column names to keep

    Returns:
        New DataFrame with exactly ``columns`` and the same rows

    Raises:
        SchemaError: If any requested column is missing
    """
    columns = list(columns)
    require_columns(df, columns, context="column selection")

    result = df[columns].copy()

    logger.info(f"Selected {len(columns)} of {len(df.columns)} columns")

    return result
