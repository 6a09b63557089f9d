"""
Data Cleaner - Stage 2

Turns the raw movie table into the analysis table:
- keeps only rows from one country
- projects onto the analysis columns
- drops incomplete and duplicate rows
- stores the numeric columns as integers
- trims high z-score outliers

Every step returns a new DataFrame. The row count after each step is kept in
``DataCleaner.log``.
"""

import numpy as np
import pandas as pd
from typing import Dict, Any, List, Optional

from ..errors import PreconditionError
from ..schema import FINAL_COLUMNS, NUMERIC_COLUMNS, require_columns
from ..utils.logging_utils import get_logger
from .filters import filter_rows, select_columns
from .outliers import remove_outliers

logger = get_logger(__name__)


def drop_incomplete_rows(df: pd.DataFrame) -> pd.DataFrame:
    """Remove every row that has a missing value in any column."""
    result = df.dropna(how='any').reset_index(drop=True)

    logger.info(f"Dropped {len(df) - len(result)} incomplete rows ({len(result)} left)")

    return result


def drop_duplicate_rows(df: pd.DataFrame) -> pd.DataFrame:
    """
    Remove rows identical to an earlier row across all columns.

    The first occurrence of each distinct row is kept and order is preserved.
    """
    result = df.drop_duplicates(keep='first').reset_index(drop=True)

    logger.info(f"Dropped {len(df) - len(result)} duplicate rows ({len(result)} left)")

    return result


def coerce_integer(df: pd.DataFrame, column: str) -> pd.DataFrame:
    """
    Store ``column`` as int64.

    Args:
        df: Input table
        column: Numeric column whose values are all whole numbers

    Returns:
        New DataFrame with ``column`` cast to int64

    Raises:
        SchemaError: If the column is missing
        PreconditionError: If a value is missing, non-numeric or has a fractional part
    """
    require_columns(df, [column], context="integer coercion")

    values = pd.to_numeric(df[column], errors='coerce')

    bad = values.isna() | ~np.isfinite(values.astype(float))
    if bad.any():
        raise PreconditionError(
            f"Cannot store '{column}' as integer: {int(bad.sum())} missing or non-numeric values"
        )

    fractional = (values.astype(float) % 1) != 0
    if fractional.any():
        sample = values[fractional].head(3).tolist()
        raise PreconditionError(
            f"Cannot store '{column}' as integer: {int(fractional.sum())} values "
            f"have a fractional part (e.g. {sample})"
        )

    return df.assign(**{column: values.astype('int64')})


class DataCleaner:
    """
    Stage 2: Cleaner

    Runs filter -> select -> drop incomplete -> drop duplicates -> integer
    coercion -> outlier removal.

    Example:
        >>> cleaner = DataCleaner(config={'zscore_threshold': 3.0})
        >>> clean_df = cleaner.clean(raw_df)
        >>> cleaner.log[-1]
        {'step': 'remove_outliers', 'rows_before': 3790, 'rows_after': 3653}
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize the Cleaner.

        Args:
            config: Flat configuration dict; see the defaults below
        """
        self.config = {
            'filter_column': 'country',
            'filter_value': 'USA',
            'columns': list(FINAL_COLUMNS),
            'integer_columns': list(NUMERIC_COLUMNS),
            'outlier_columns': list(NUMERIC_COLUMNS),
            'zscore_threshold': 3.0,
            'two_sided': False,
        }

        if config:
            self.config.update(config)

        self.log: List[Dict[str, Any]] = []

        logger.info("Initialized DataCleaner")

    def clean(self, df: pd.DataFrame) -> pd.DataFrame:
        """
        Apply every cleaning step in order.

        Args:
            df: Raw table from Stage 1

        Returns:
            Cleaned table with the configured columns
        """
        self.log = []

        # The filter column is checked before projection drops it
        require_columns(df, [self.config['filter_column']] + self.config['columns'],
                        context="raw dataset")

        df = self._step('filter_rows', df, lambda d: filter_rows(
            d, self.config['filter_column'], self.config['filter_value']))
        df = self._step('select_columns', df, lambda d: select_columns(d, self.config['columns']))
        df = self._step('drop_incomplete_rows', df, drop_incomplete_rows)
        df = self._step('drop_duplicate_rows', df, drop_duplicate_rows)
        df = self._step('coerce_integer', df, self._coerce_all)
        df = self._step('remove_outliers', df, lambda d: remove_outliers(
            d,
            self.config['outlier_columns'],
            threshold=self.config['zscore_threshold'],
            two_sided=self.config['two_sided']
        ))

        logger.info(f"Cleaning complete: {self.log[0]['rows_before']} -> {len(df)} rows")

        return df

    def _coerce_all(self, df: pd.DataFrame) -> pd.DataFrame:
        for column in self.config['integer_columns']:
            df = coerce_integer(df, column)
        return df

    def _step(self, name, df, func) -> pd.DataFrame:
        result = func(df)
        self.log.append({
            'step': name,
            'rows_before': len(df),
            'rows_after': len(result),
        })
        return result
