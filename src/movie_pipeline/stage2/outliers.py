"""
Z-score outlier removal.

Mean and sample standard deviation are computed once per column on the table
as given; a row is dropped when any column's z-score reaches the threshold.
Only the upper tail is tested unless ``two_sided`` is set.
"""

import pandas as pd
from typing import Dict, Any, Sequence, Tuple

from tqdm import tqdm

from ..schema import require_columns
from ..utils.logging_utils import get_logger
from ..utils.stats_utils import zscore, detect_outliers

logger = get_logger(__name__)


def compute_zscores(df: pd.DataFrame, columns: Sequence[str]) -> pd.DataFrame:
    """
    Z-score of every value in ``columns``.

    Args:
        df: Input table
        columns: Numeric columns

    Returns:
        DataFrame with the same index and one z-score column per input column.
        A column with zero or undefined standard deviation is all NaN.
    """
    columns = list(columns)
    require_columns(df, columns, context="z-score input")

    return pd.DataFrame(
        {column: zscore(df[column])[0] for column in columns},
        index=df.index,
        columns=columns
    )


def find_outliers(
    df: pd.DataFrame,
    columns: Sequence[str],
    threshold: float = 3.0,
    two_sided: bool = False
) -> Tuple[pd.Series, Dict[str, Dict[str, Any]]]:
    """
    Flag rows with at least one outlying value.

    Returns:
        Tuple of (row_mask, per_column_info); row_mask is True for rows to drop
    """
    columns = list(columns)
    require_columns(df, columns, context="outlier input")

    row_mask = pd.Series(False, index=df.index)
    info = {}

    for column in tqdm(columns, desc="Scoring columns", leave=False):
        column_mask, column_info = detect_outliers(
            df[column], zscore_threshold=threshold, two_sided=two_sided
        )
        row_mask |= column_mask
        info[column] = column_info

        if column_info['outlier_count']:
            logger.debug(f"  {column}: {column_info['outlier_count']} values at z >= {threshold}")

    return row_mask, info


def remove_outliers(
    df: pd.DataFrame,
    columns: Sequence[str],
    threshold: float = 3.0,
    two_sided: bool = False
) -> pd.DataFrame:
    """
    Drop rows whose z-score reaches ``threshold`` in any of ``columns``.

    Args:
        df: Input table
        columns: Numeric columns to score
        threshold: Z-score at or above which a value is an outlier
        two_sided: Use |z| instead of z

    Returns:
        New DataFrame without the outlying rows, order preserved

    Example:
        >>> trimmed = remove_outliers(movies, ['gross', 'budget'], threshold=3.0)
    """
    row_mask, _ = find_outliers(df, columns, threshold=threshold, two_sided=two_sided)

    result = df.loc[~row_mask].reset_index(drop=True)

    logger.info(
        f"Removed {int(row_mask.sum())} outlier rows "
        f"({'|z|' if two_sided else 'z'} >= {threshold}); {len(result)} left"
    )

    return result
