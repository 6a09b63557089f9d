"""
Utility modules for the movie pipeline.
Provides common functionality for logging, file I/O, and statistics.
"""

from .logging_utils import setup_logger, get_logger
from .file_utils import load_config, load_csv, save_csv, load_json, save_json, save_text
from .stats_utils import zscore, calculate_basic_stats, detect_outliers

__all__ = [
    'setup_logger',
    'get_logger',
    'load_config',
    'load_csv',
    'save_csv',
    'load_json',
    'save_json',
    'save_text',
    'zscore',
    'calculate_basic_stats',
    'detect_outliers',
]
