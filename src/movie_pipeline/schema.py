"""
Movie dataset schema.

Column names used across the pipeline and the typed row model the cleaned
table is validated against.
"""

from typing import Any, Dict, List, Sequence

import pandas as pd
from pydantic import BaseModel, Field, ValidationError

from .errors import SchemaError

TITLE_COLUMN = 'movie_title'
TARGET_COLUMN = 'gross'
COUNTRY_COLUMN = 'country'

PREDICTOR_COLUMNS = [
    'duration',
    'budget',
    'num_critic_for_reviews',
    'director_facebook_likes',
    'cast_total_facebook_likes',
]

NUMERIC_COLUMNS = [TARGET_COLUMN] + PREDICTOR_COLUMNS

# Fixed order of the cleaned and exported table
FINAL_COLUMNS = [TITLE_COLUMN] + NUMERIC_COLUMNS

REQUIRED_SOURCE_COLUMNS = [COUNTRY_COLUMN] + FINAL_COLUMNS


class MovieRecord(BaseModel):
    """One row of the cleaned movie table."""

    movie_title: str = Field(description="Title as published, not unique")
    gross: int = Field(description="Domestic gross revenue in USD")
    duration: int = Field(description="Running time in minutes")
    budget: int = Field(description="Production budget in USD")
    num_critic_for_reviews: int = Field(description="Number of critic reviews")
    director_facebook_likes: int = Field(description="Director's Facebook likes")
    cast_total_facebook_likes: int = Field(description="Sum of cast Facebook likes")


def missing_columns(df: pd.DataFrame, columns: Sequence[str]) -> List[str]:
    """Return the entries of ``columns`` that ``df`` does not have, in order."""
    present = set(df.columns)
    return [c for c in columns if c not in present]


def require_columns(df: pd.DataFrame, columns: Sequence[str], context: str = "dataset") -> None:
    """
    Raise SchemaError if any of ``columns`` is absent from ``df``.

    Args:
        df: Table to check
        columns: Column names that must be present
        context: Short label used in the error message
    """
    missing = missing_columns(df, columns)
    if missing:
        raise SchemaError(
            f"{context} is missing required columns: {', '.join(missing)}",
            missing=missing
        )


def to_records(df: pd.DataFrame) -> List[MovieRecord]:
    """
    Validate every row of a cleaned table as a MovieRecord.

    Args:
        df: Cleaned table with the FINAL_COLUMNS

    Returns:
        List of MovieRecord, in table order

    Raises:
        SchemaError: If a column is missing or a row does not validate
    """
    require_columns(df, FINAL_COLUMNS, context="cleaned dataset")

    records = []
    for position, row in enumerate(df[FINAL_COLUMNS].to_dict('records')):
        try:
            records.append(MovieRecord(**_to_python(row)))
        except ValidationError as e:
            raise SchemaError(f"Row {position} failed validation: {e}") from e

    return records


def _to_python(row: Dict[str, Any]) -> Dict[str, Any]:
    # pydantic does not accept numpy scalar types
    return {k: (v.item() if hasattr(v, 'item') else v) for k, v in row.items()}
