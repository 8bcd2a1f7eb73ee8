"""
Error taxonomy for the station data pipeline.

Everything except EmptyResultWarning is fatal: the run stops and reports
rather than continuing on partial data.
"""
from __future__ import annotations

from typing import Iterable


class PipelineError(Exception):
    """Base class for station pipeline failures."""


class SourceNotFound(PipelineError, FileNotFoundError):
    """The input workbook (or its sheet) does not exist."""


class SchemaMismatch(PipelineError):
    """Declared positional column types do not fit the source."""


class ParseError(PipelineError, ValueError):
    """A cell could not be coerced to its declared type."""


class MissingColumnError(PipelineError, KeyError):
    """One or more declared columns are absent after normalization."""

    def __init__(self, missing: Iterable[str], context: str = ""):
        self.missing = list(missing)
        self.context = context
        where = f" ({context})" if context else ""
        super().__init__(f"Missing columns{where}: {self.missing}")

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return self.args[0]


class EmptyResultWarning(UserWarning):
    """A filter step produced zero rows."""
