"""
Verification: Regression Check

Validates a fitted regression:
- Multicollinearity (VIF per predictor)
- Goodness of fit (R², adjusted R²)
- Residual bias
"""

import numpy as np
from typing import Dict, Any, Optional
from datetime import datetime

from ..utils.logging_utils import get_logger

logger = get_logger(__name__)


class RegressionChecker:
    """
    Multicollinearity and fit-quality checks.

    Example:
        >>> checker = RegressionChecker(config={'vif_error_threshold': 10.0})
        >>> report = checker.verify(fit_regression(clean_df))
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize the Regression Checker.

        Args:
            config: Configuration dictionary
        """
        self.config = {
            'vif_warning_threshold': 5.0,
            'vif_error_threshold': 10.0,
            'min_r2': 0.0,
            'residual_mean_threshold': 0.1,  # |mean| / std of residuals
        }

        if config:
            self.config.update(config)

        logger.info("Initialized Regression Checker")

    def verify(self, result: Dict[str, Any]) -> Dict[str, Any]:
        """
        Check a fit_regression result.

        Returns:
            Report with 'status', 'errors', 'warnings' and 'checks'
        """
        report = {
            'timestamp': datetime.now().isoformat(),
            'target': result.get('target'),
            'status': 'pass',
            'errors': [],
            'warnings': [],
            'checks': {}
        }

        self._check_vif(result.get('vif', {}), report)
        self._check_fit(result, report)
        if result.get('residuals') is not None:
            self._check_residuals(np.asarray(result['residuals'], dtype=float), report)

        if report['errors']:
            report['status'] = 'fail'
        elif report['warnings']:
            report['status'] = 'pass_with_warnings'

        logger.info(f"  Regression check: {report['status']}")

        return report

    def _check_vif(self, vif: Dict[str, float], report: Dict[str, Any]) -> None:
        warn_at = self.config['vif_warning_threshold']
        fail_at = self.config['vif_error_threshold']

        undefined = [p for p, v in vif.items() if np.isnan(v)]
        severe = {p: v for p, v in vif.items() if not np.isnan(v) and v > fail_at}
        moderate = {p: v for p, v in vif.items() if not np.isnan(v) and warn_at < v <= fail_at}

        report['checks']['vif'] = {
            'values': vif,
            'status': 'fail' if severe else 'pass'
        }

        for predictor, value in severe.items():
            report['errors'].append({
                'check': 'vif',
                'type': 'multicollinearity',
                'predictor': predictor,
                'vif': value,
                'message': f'VIF of {predictor} ({value:.2f}) exceeds {fail_at}'
            })

        for predictor, value in moderate.items():
            report['warnings'].append({
                'check': 'vif',
                'type': 'moderate_multicollinearity',
                'predictor': predictor,
                'vif': value,
                'message': f'VIF of {predictor} ({value:.2f}) exceeds {warn_at}'
            })

        for predictor in undefined:
            report['warnings'].append({
                'check': 'vif',
                'type': 'undefined_vif',
                'predictor': predictor,
                'message': f'VIF of {predictor} is undefined (constant predictor?)'
            })

    def _check_fit(self, result: Dict[str, Any], report: Dict[str, Any]) -> None:
        r2 = result.get('r_squared')
        adj_r2 = result.get('adj_r_squared')

        report['checks']['fit'] = {
            'r_squared': r2,
            'adj_r_squared': adj_r2,
            'nobs': result.get('nobs'),
            'status': 'pass'
        }

        if r2 is None or np.isnan(r2):
            report['warnings'].append({
                'check': 'fit',
                'type': 'undefined_r2',
                'message': 'R² is undefined'
            })
        elif r2 < self.config['min_r2']:
            report['warnings'].append({
                'check': 'fit',
                'type': 'low_r2',
                'r2': r2,
                'threshold': self.config['min_r2'],
                'message': f'R² ({r2:.3f}) below threshold ({self.config["min_r2"]})'
            })

    def _check_residuals(self, residuals: np.ndarray, report: Dict[str, Any]) -> None:
        if len(residuals) < 2:
            report['checks']['residuals'] = {'status': 'skipped'}
            return

        residual_mean = float(residuals.mean())
        residual_std = float(residuals.std(ddof=1))

        report['checks']['residuals'] = {
            'mean': residual_mean,
            'std': residual_std,
            'status': 'pass'
        }

        if residual_std > 0 and abs(residual_mean / residual_std) > self.config['residual_mean_threshold']:
            report['warnings'].append({
                'check': 'residuals',
                'type': 'non_zero_mean',
                'mean': residual_mean,
                'std': residual_std,
                'message': f'Residual mean ({residual_mean:.4f}) not close to zero'
            })
