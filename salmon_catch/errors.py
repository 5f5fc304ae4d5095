# salmon_catch/errors.py
from __future__ import annotations


class SalmonCatchError(Exception):
    """Base class for pipeline errors."""


class SchemaError(SalmonCatchError, ValueError):
    """A column is missing, unexpected, or of the wrong kind."""

    def __init__(self, message: str, columns=None):
        super().__init__(message)
        self.columns = list(columns or [])


class ShapeError(SalmonCatchError, ValueError):
    """A reshape or join cannot be done without ambiguity."""

    def __init__(self, message: str, keys=None):
        super().__init__(message)
        self.keys = list(keys or [])


class AggregationError(SalmonCatchError, ValueError):
    """A statistic is undefined for a group (e.g. mean of nothing)."""

    def __init__(self, message: str, keys=None):
        super().__init__(message)
        self.keys = list(keys or [])


class RetrievalError(SalmonCatchError, RuntimeError):
    """The loader could not fetch or parse the source."""


class TypeCoercionWarning(UserWarning):
    """
    A value became missing during a numeric cast.

    Collected and returned next to the coerced table; never raised by the
    pipeline itself.
    """

    def __init__(self, column: str, row, value):
        self.column = column
        self.row = row
        self.value = value
        super().__init__(f"{column}[{row!r}]: {value!r} is not numeric; set to missing")

    def as_dict(self) -> dict:
        return {"column": self.column, "row": self.row, "value": self.value}
