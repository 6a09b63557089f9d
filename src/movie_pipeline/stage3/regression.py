"""
Regression Module

Ordinary least squares of the target on the predictors (statsmodels), with
in-sample error metrics and a Variance Inflation Factor per predictor.
"""

import numpy as np
import pandas as pd
import statsmodels.api as sm
from statsmodels.stats.outliers_influence import variance_inflation_factor
from sklearn.metrics import mean_absolute_error, mean_squared_error, r2_score
from typing import Dict, Any, List, Optional, Sequence

from tqdm import tqdm

from ..errors import PreconditionError
from ..schema import PREDICTOR_COLUMNS, TARGET_COLUMN, require_columns
from ..utils.logging_utils import get_logger

logger = get_logger(__name__)


def _design_matrix(df: pd.DataFrame, predictors: Sequence[str]) -> pd.DataFrame:
    X = df[list(predictors)].astype(float)
    if X.isna().any().any() or not np.isfinite(X.to_numpy()).all():
        raise PreconditionError("Predictors contain missing or infinite values")
    # 'add' keeps the intercept even when a predictor is itself constant
    return sm.add_constant(X, has_constant='add')


def compute_vif(df: pd.DataFrame, predictors: Sequence[str]) -> Dict[str, float]:
    """
    Variance Inflation Factor of each predictor.

    VIF_i = 1 / (1 - R²_i), with R²_i from regressing predictor i (plus an
    intercept) on the other predictors. A predictor that is an exact linear
    combination of the others gets ``inf``; a constant predictor gets NaN.

    Args:
        df: Table with the predictor columns
        predictors: Predictor names

    Returns:
        Dict of {predictor: vif}, in predictor order
    """
    predictors = list(predictors)
    require_columns(df, predictors, context="VIF input")

    exog = _design_matrix(df, predictors)
    values = exog.to_numpy()

    vif = {}
    with np.errstate(divide='ignore', invalid='ignore'):
        # Column 0 is the intercept
        for i, name in enumerate(tqdm(predictors, desc="Computing VIF", leave=False), start=1):
            if np.ptp(values[:, i]) == 0:
                # R²_i has a zero denominator for a constant predictor
                logger.warning(f"Predictor '{name}' is constant - VIF undefined")
                vif[name] = np.nan
                continue

            value = float(variance_inflation_factor(values, i))
            # R²_i rounding to >= 1 shows up as a negative or infinite VIF
            if value < 0 or np.isinf(value):
                value = np.inf
            vif[name] = value

    for name, value in vif.items():
        logger.debug(f"  VIF {name}: {value:.3f}")

    return vif


def fit_regression(
    df: pd.DataFrame,
    target: str = TARGET_COLUMN,
    predictors: Sequence[str] = tuple(PREDICTOR_COLUMNS)
) -> Dict[str, Any]:
    """
    Fit ``target ~ const + predictors`` by OLS.

    Args:
        df: Cleaned table
        target: Dependent variable
        predictors: Independent variables

    Returns:
        Dict with 'model' (statsmodels results), 'coefficients', 'r_squared',
        'adj_r_squared', 'f_statistic', 'f_pvalue', 'aic', 'bic', 'nobs',
        'metrics' (mae/rmse/r2), 'vif', 'fitted', 'residuals' and 'summary'

    Raises:
        SchemaError: If a column is missing
        PreconditionError: If there are fewer rows than parameters, or missing values
    """
    predictors = list(predictors)
    require_columns(df, [target] + predictors, context="regression input")

    n_params = len(predictors) + 1
    if len(df) < n_params:
        raise PreconditionError(
            f"Regression needs at least {n_params} rows for {n_params} parameters, got {len(df)}"
        )

    y = df[target].astype(float)
    if y.isna().any():
        raise PreconditionError(f"Target '{target}' contains missing values")

    X = _design_matrix(df, predictors)

    logger.info(f"Fitting OLS: {target} ~ {' + '.join(predictors)} ({len(df)} rows)")

    with np.errstate(divide='ignore', invalid='ignore'):
        model = sm.OLS(y, X).fit()

        conf_int = model.conf_int()
        coefficients = {
            term: {
                'coef': float(model.params[term]),
                'std_err': float(model.bse[term]),
                't_value': float(model.tvalues[term]),
                'p_value': float(model.pvalues[term]),
                'ci_lower': float(conf_int.loc[term, 0]),
                'ci_upper': float(conf_int.loc[term, 1]),
            }
            for term in model.params.index
        }

        result = {
            'model': model,
            'target': target,
            'predictors': predictors,
            'nobs': int(model.nobs),
            'coefficients': coefficients,
            'r_squared': float(model.rsquared),
            'adj_r_squared': float(model.rsquared_adj),
            'f_statistic': float(model.fvalue),
            'f_pvalue': float(model.f_pvalue),
            'aic': float(model.aic),
            'bic': float(model.bic),
            'condition_number': float(model.condition_number),
            'fitted': model.fittedvalues,
            'residuals': model.resid,
        }

    result['metrics'] = _calculate_metrics(y, model.fittedvalues)
    result['vif'] = compute_vif(df, predictors)
    result['summary'] = summary_text(model, coefficients)

    logger.info(f"  R²: {result['r_squared']:.4f}, adjusted R²: {result['adj_r_squared']:.4f}")

    return result


def _calculate_metrics(y_true, y_pred) -> Dict[str, float]:
    """In-sample regression metrics."""
    mse = mean_squared_error(y_true, y_pred)

    return {
        'mae': float(mean_absolute_error(y_true, y_pred)),
        'mse': float(mse),
        'rmse': float(np.sqrt(mse)),
        'r2': float(r2_score(y_true, y_pred)),
    }


def summary_text(model, coefficients: Dict[str, Dict[str, float]]) -> str:
    """
    statsmodels summary table, or just the coefficient table when the sample is
    too small for the normality tests in the full summary.
    """
    try:
        with np.errstate(divide='ignore', invalid='ignore'):
            return str(model.summary())
    except (ValueError, ZeroDivisionError, np.linalg.LinAlgError) as e:
        logger.warning(f"Full OLS summary unavailable ({e}); writing coefficients only")
        return pd.DataFrame.from_dict(coefficients, orient='index').to_string()


def to_report(result: Dict[str, Any]) -> Dict[str, Any]:
    """JSON-ready subset of a fit_regression result."""
    keep = [
        'target', 'predictors', 'nobs', 'coefficients', 'r_squared', 'adj_r_squared',
        'f_statistic', 'f_pvalue', 'aic', 'bic', 'condition_number', 'metrics', 'vif',
    ]
    return {key: result[key] for key in keep}


class RegressionAnalyzer:
    """
    Fits the gross-revenue model and keeps the last result.

    Example:
        >>> analyzer = RegressionAnalyzer(config={'target': 'gross'})
        >>> result = analyzer.fit(clean_df)
        >>> result['vif']['budget']
        1.43
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self.config = {
            'target': TARGET_COLUMN,
            'predictors': list(PREDICTOR_COLUMNS),
        }

        if config:
            self.config.update(config)

        self.result: Optional[Dict[str, Any]] = None

        logger.info("Initialized RegressionAnalyzer")

    @property
    def predictors(self) -> List[str]:
        return list(self.config['predictors'])

    def fit(self, df: pd.DataFrame) -> Dict[str, Any]:
        self.result = fit_regression(df, self.config['target'], self.predictors)
        return self.result

    def report(self) -> Dict[str, Any]:
        if self.result is None:
            raise RuntimeError("fit() has not been called")
        return to_report(self.result)
