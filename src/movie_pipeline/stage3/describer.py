"""
Descriptive statistics for the cleaned movie table.
"""

import pandas as pd
from typing import Optional, Sequence

from ..schema import require_columns
from ..utils.logging_utils import get_logger
from ..utils.stats_utils import calculate_basic_stats

logger = get_logger(__name__)

STAT_NAMES = ['count', 'min', 'q25', 'median', 'mean', 'q75', 'max', 'std']


def describe_dataset(df: pd.DataFrame, columns: Optional[Sequence[str]] = None) -> pd.DataFrame:
    """
    Summary statistics per numeric column.

    Args:
        df: Table to describe
        columns: Columns to include (default: every numeric column)

    Returns:
        DataFrame indexed by column name with STAT_NAMES as columns. An empty
        table gives count 0 and NaN everywhere else.

    Example:
        >>> stats = describe_dataset(clean_df)
        >>> stats.loc['budget', 'median']
        25000000.0
    """
    if columns is None:
        columns = df.select_dtypes(include='number').columns.tolist()
    else:
        columns = list(columns)
        require_columns(df, columns, context="descriptive statistics")

    if len(df) == 0:
        logger.warning("Describing an empty dataset - all statistics are NaN")

    rows = {}
    for column in columns:
        stats = calculate_basic_stats(df[column])
        rows[column] = {name: stats[name] for name in STAT_NAMES}

    report = pd.DataFrame.from_dict(rows, orient='index', columns=STAT_NAMES)
    report.index.name = 'column'

    logger.info(f"Described {len(columns)} columns over {len(df)} rows")

    return report
