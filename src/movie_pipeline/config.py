"""
Configuration Management

Loads and manages pipeline configuration from YAML files and environment variables.
"""

import copy
import os
from pathlib import Path
from typing import Dict, Any, Optional, Union
from dotenv import load_dotenv

from .schema import FINAL_COLUMNS, NUMERIC_COLUMNS, PREDICTOR_COLUMNS, TARGET_COLUMN
from .utils.file_utils import load_config as load_yaml_config
from .utils.logging_utils import get_logger

logger = get_logger(__name__)


DEFAULT_CONFIG: Dict[str, Any] = {
    'data': {
        'input_path': 'data/raw/movie_metadata.csv',
        'outputs_dir': 'data/outputs',
    },
    'filter': {
        'column': 'country',
        'value': 'USA',
    },
    'cleaning': {
        'columns': list(FINAL_COLUMNS),
        'integer_columns': list(NUMERIC_COLUMNS),
    },
    'outliers': {
        'columns': list(NUMERIC_COLUMNS),
        'zscore_threshold': 3.0,
        'two_sided': False,
    },
    'regression': {
        'target': TARGET_COLUMN,
        'predictors': list(PREDICTOR_COLUMNS),
    },
    'export': {
        'file_name': 'movies_clean.csv',
        'delimiter': ',',
    },
    'visualization': {
        'enabled': True,
        'dpi': 150,
    },
    'verification': {
        'cleaning': {},
        'regression': {},
    },
    'logging': {
        'level': 'INFO',
        'file': {
            'enabled': False,
            'path': 'logs/pipeline.log',
        },
    },
}


class Config:
    """
    Pipeline configuration manager.

    Loads configuration from:
    1. Built-in defaults (DEFAULT_CONFIG)
    2. YAML file (config/pipeline_config.yaml)
    3. Environment variables (.env)

    Example:
        >>> config = Config()
        >>> print(config.get('outliers.zscore_threshold'))
        3.0
    """

    def __init__(self, config_file: Optional[Union[str, Path]] = None):
        """
        Initialize configuration.

        Args:
            config_file: Path to YAML config file (optional). A missing default
                file falls back to the built-in defaults; a missing explicit one
                is an error.

        Raises:
            FileNotFoundError: If config_file is given but does not exist
        """
        env_path = Path.cwd() / '.env'
        if env_path.exists():
            load_dotenv(env_path)
            logger.info(f"Loaded environment variables from: {env_path}")

        if config_file is not None and not Path(config_file).exists():
            raise FileNotFoundError(f"Config file not found: {config_file}")

        if config_file is None:
            config_file = Path.cwd() / 'config' / 'pipeline_config.yaml'

        self.config = copy.deepcopy(DEFAULT_CONFIG)
        if Path(config_file).exists():
            _deep_update(self.config, load_yaml_config(config_file))
            logger.info(f"Loaded config from: {config_file}")
        else:
            logger.warning(f"Config file not found: {config_file} - using defaults")

        self._apply_env_overrides()

    def _apply_env_overrides(self):
        """Apply environment variable overrides to config."""
        if os.getenv('ZSCORE_THRESHOLD'):
            self.set('outliers.zscore_threshold', float(os.getenv('ZSCORE_THRESHOLD')))

        if os.getenv('OUTPUT_DELIMITER'):
            self.set('export.delimiter', os.getenv('OUTPUT_DELIMITER'))

        if os.getenv('LOG_LEVEL'):
            self.set('logging.level', os.getenv('LOG_LEVEL'))

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value using dot notation.

        Args:
            key: Config key (e.g., 'data.outputs_dir')
            default: Default value if key not found

        Returns:
            Configuration value

        Example:
            >>> config.get('export.delimiter')
            ','
            >>> config.get('nonexistent.key', 'default')
            'default'
        """
        value = self.config

        for k in key.split('.'):
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def set(self, key: str, value: Any):
        """
        Set a configuration value using dot notation.

        Args:
            key: Config key (e.g., 'outliers.zscore_threshold')
            value: Value to set
        """
        keys = key.split('.')
        config = self.config

        for k in keys[:-1]:
            if k not in config:
                config[k] = {}
            config = config[k]

        config[keys[-1]] = value

    def get_stage_config(self, stage: str) -> Dict[str, Any]:
        """
        Get configuration for a specific section.

        Args:
            stage: Section name ('filter', 'cleaning', 'outliers', 'regression', ...)

        Returns:
            Section configuration dictionary
        """
        return self.config.get(stage, {})

    def get_verification_config(self, verification: str) -> Dict[str, Any]:
        """
        Get configuration for a specific verifier ('cleaning' or 'regression').
        """
        return self.config.get('verification', {}).get(verification, {})

    def to_dict(self) -> Dict[str, Any]:
        """Get the full configuration as a dictionary."""
        return copy.deepcopy(self.config)


def _deep_update(base: Dict[str, Any], overrides: Dict[str, Any]) -> None:
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _deep_update(base[key], value)
        else:
            base[key] = value
