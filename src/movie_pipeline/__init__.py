"""
Movie gross revenue analysis pipeline.

Loads the IMDB movie metadata table, cleans it, describes it, regresses gross
revenue on five predictors with a VIF multicollinearity check, and exports the
cleaned table.
"""

from .errors import PipelineError, SchemaError, PreconditionError
from .schema import MovieRecord, FINAL_COLUMNS, NUMERIC_COLUMNS, PREDICTOR_COLUMNS, TARGET_COLUMN

__version__ = "0.1.0"

__all__ = [
    'PipelineError',
    'SchemaError',
    'PreconditionError',
    'MovieRecord',
    'FINAL_COLUMNS',
    'NUMERIC_COLUMNS',
    'PREDICTOR_COLUMNS',
    'TARGET_COLUMN',
]
