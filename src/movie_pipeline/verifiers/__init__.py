"""
Verification checkpoints for the movie pipeline.

Cleaning check (after Stage 2)
Regression check (after Stage 3)
"""

from .cleaning_check import CleaningChecker
from .regression_check import RegressionChecker

__all__ = ['CleaningChecker', 'RegressionChecker']
