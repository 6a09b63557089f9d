"""
Pipeline exceptions.

SchemaError covers configuration problems (missing columns, unreadable CSV,
rows that fail typed validation). PreconditionError covers inputs a stage is
not defined for. Both abort the run.
"""


class PipelineError(Exception):
    """Base class for all pipeline failures."""


class SchemaError(PipelineError, ValueError):
    """Raised when the table does not have the expected shape or types."""

    def __init__(self, message: str, missing=None):
        super().__init__(message)
        self.missing = list(missing or [])


class PreconditionError(PipelineError, ValueError):
    """Raised when a stage is asked to operate on data it is not defined for."""
