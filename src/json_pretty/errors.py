"""Exception hierarchy for json_pretty."""

from __future__ import annotations


class JSONPrettyError(Exception):
    """Base class for every error raised by json_pretty."""


class JSONReadError(JSONPrettyError, ValueError):
    """Raw text could not be parsed as JSON."""

    def __init__(self, message: str, lineno: int | None = None, colno: int | None = None) -> None:
        self.msg = message
        self.lineno = lineno
        self.colno = colno
        if lineno is not None and colno is not None:
            message = f"{message}: line {lineno} column {colno}"
        super().__init__(message)


class UnsupportedValueError(JSONPrettyError, TypeError):
    """A Python object has no JSON counterpart."""


class NumericRepresentationError(JSONPrettyError, ValueError):
    """A number is NaN or infinite and cannot be written as JSON."""
