"""
Stage 2: Cleaner

Country filter, column selection, missing-value and duplicate removal,
integer coercion and z-score outlier trimming.
"""

from .filters import filter_rows, select_columns
from .outliers import compute_zscores, find_outliers, remove_outliers
from .cleaner import DataCleaner, drop_incomplete_rows, drop_duplicate_rows, coerce_integer

__all__ = [
    'DataCleaner',
    'filter_rows',
    'select_columns',
    'drop_incomplete_rows',
    'drop_duplicate_rows',
    'coerce_integer',
    'compute_zscores',
    'find_outliers',
    'remove_outliers',
]
