"""
Movie Loader - Stage 1

Reads the raw movie CSV into a DataFrame and checks that every source column
the later stages rely on is present. Extra columns are kept; they are dropped
by the column selector in Stage 2.
"""

import pandas as pd
from pathlib import Path
from typing import Dict, Any, List, Optional, Union

from ..schema import REQUIRED_SOURCE_COLUMNS, TITLE_COLUMN, require_columns
from ..utils.file_utils import load_csv
from ..utils.logging_utils import get_logger

logger = get_logger(__name__)


class MovieLoader:
    """
    Stage 1: Loader

    Example:
        >>> loader = MovieLoader("data/raw/movie_metadata.csv")
        >>> df = loader.load()
    """

    def __init__(
        self,
        input_path: Union[str, Path],
        config: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize the Loader.

        Args:
            input_path: Path to the raw CSV file
            config: Configuration dict ('required_columns', 'sample_size', 'read_options')
        """
        self.input_path = Path(input_path)

        self.config = {
            'required_columns': list(REQUIRED_SOURCE_COLUMNS),
            'sample_size': None,
            'read_options': {},
        }

        if config:
            self.config.update(config)

        logger.info(f"Initialized MovieLoader ({self.input_path})")

    @property
    def required_columns(self) -> List[str]:
        return self.config['required_columns']

    def load(self) -> pd.DataFrame:
        """
        Read and validate the raw table.

        Returns:
            Raw DataFrame with at least the required columns

        Raises:
            FileNotFoundError: If the CSV does not exist
            SchemaError: If the CSV is malformed or a required column is missing
        """
        read_options = dict(self.config['read_options'])
        # Titles such as "1917" or "300" would otherwise be parsed as numbers
        read_options['dtype'] = {TITLE_COLUMN: str, **read_options.get('dtype', {})}

        df = load_csv(
            self.input_path,
            sample_size=self.config['sample_size'],
            **read_options
        )

        # Header cells may carry stray whitespace
        df.columns = [str(c).strip() for c in df.columns]

        require_columns(df, self.required_columns, context=self.input_path.name)

        logger.info(f"  {len(df)} rows, {len(df.columns)} columns")

        return df


def load_movies(input_path: Union[str, Path], **kwargs) -> pd.DataFrame:
    """Shortcut for MovieLoader(input_path, config=kwargs).load()."""
    return MovieLoader(input_path, config=kwargs or None).load()
