"""
Statistical utilities for the movie pipeline.
Provides z-scores, per-column summary statistics and one-sided outlier masks.
"""

import numpy as np
import pandas as pd
from typing import Dict, Any, Tuple

from .logging_utils import get_logger

logger = get_logger(__name__)


def zscore(series: pd.Series, ddof: int = 1) -> Tuple[pd.Series, float, float]:
    """
    Standardize a numeric Series as (x - mean) / std.

    The standard deviation is the sample one by default (ddof=1). When it is
    zero or undefined the returned z-scores are all NaN.

    Args:
        series: Numeric Series
        ddof: Delta degrees of freedom for the standard deviation

    Returns:
        Tuple of (z_scores, mean, std)

    Example:
        >>> z, mean, std = zscore(pd.Series([1, 1, 1, 1, 100]))
        >>> round(z.iloc[-1], 2)
        1.79
    """
    numeric_series = pd.to_numeric(series, errors='coerce').astype(float)

    mean = float(numeric_series.mean())
    std = float(numeric_series.std(ddof=ddof))

    if not np.isfinite(std) or std == 0.0:
        logger.warning(
            f"Column '{series.name}' has zero or undefined standard deviation - z-scores are NaN"
        )
        return pd.Series(np.nan, index=series.index, name=series.name), mean, std

    return (numeric_series - mean) / std, mean, std


def calculate_basic_stats(series: pd.Series) -> Dict[str, Any]:
    """
    Calculate summary statistics for a numeric Series.

    An empty or all-null Series yields NaN for every statistic.

    Args:
        series: Pandas Series to analyze

    Returns:
        Dictionary with count, null_count, min, q25, median, mean, q75, max, std

    Example:
        >>> stats = calculate_basic_stats(pd.Series([10, 20, 30, 40, 50]))
        >>> print(stats['mean'])
        30.0
    """
    numeric_series = pd.to_numeric(series, errors='coerce').astype(float)
    non_null = numeric_series.dropna()

    return {
        'count': int(len(non_null)),
        'null_count': int(numeric_series.isna().sum()),
        'min': float(non_null.min()) if len(non_null) else np.nan,
        'q25': float(non_null.quantile(0.25)) if len(non_null) else np.nan,
        'median': float(non_null.median()) if len(non_null) else np.nan,
        'mean': float(non_null.mean()) if len(non_null) else np.nan,
        'q75': float(non_null.quantile(0.75)) if len(non_null) else np.nan,
        'max': float(non_null.max()) if len(non_null) else np.nan,
        'std': float(non_null.std()) if len(non_null) > 1 else np.nan,
    }


def detect_outliers(
    series: pd.Series,
    zscore_threshold: float = 3.0,
    two_sided: bool = False
) -> Tuple[pd.Series, Dict[str, Any]]:
    """
    Flag z-score outliers in a numeric Series.

    By default only the upper tail is tested (z >= threshold); values far below
    the mean are kept. Pass two_sided=True to test |z| >= threshold.

    Args:
        series: Numeric Series to analyze
        zscore_threshold: Z-score at or above which a value is an outlier
        two_sided: Also flag large negative z-scores

    Returns:
        Tuple of (outlier_mask, outlier_info)
        - outlier_mask: Boolean Series (True = outlier); all False when std is 0
        - outlier_info: Dict with mean, std, threshold and counts
    """
    z_scores, mean, std = zscore(series)

    compared = z_scores.abs() if two_sided else z_scores
    # NaN compares False, so an undefined z never flags a row
    outlier_mask = compared >= zscore_threshold

    info = {
        'method': 'zscore',
        'two_sided': two_sided,
        'mean': mean,
        'std': std,
        'threshold': zscore_threshold,
        'max_zscore': float(z_scores.max()) if z_scores.notna().any() else np.nan,
        'outlier_count': int(outlier_mask.sum()),
        'outlier_rate': float(outlier_mask.mean()) if len(outlier_mask) else 0.0
    }

    return outlier_mask, info
