"""
Stage 3: Analysis

Descriptive statistics, OLS regression with VIF, and plots.
"""

from .describer import describe_dataset
from .regression import RegressionAnalyzer, compute_vif, fit_regression, to_report
from .visualizer import Visualizer

__all__ = [
    'describe_dataset',
    'RegressionAnalyzer',
    'compute_vif',
    'fit_regression',
    'to_report',
    'Visualizer',
]
