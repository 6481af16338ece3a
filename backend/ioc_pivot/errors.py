"""
Error taxonomy.

Every error a user should see is a PivotError; its str() is the exact
notification text. ParseError is the exception: callers swallow it and
treat the click as a no-op.
"""

from __future__ import annotations


class PivotError(Exception):
    """Base class for all ioc_pivot errors."""


class ParseError(PivotError):
    """An encoded menu-entry id does not follow the command grammar."""


class CommandError(PivotError):
    """A command was executed through the wrong action method."""


class UnknownAnalyzerError(PivotError):
    """A command names an analyzer that does not handle its indicator type."""


class MissingCredentialError(PivotError):
    """A scanner needs an API key that was not supplied."""

    def __init__(self, message: str, key_name: str):
        super().__init__(message)
        self.key_name = key_name


class UpstreamError(PivotError):
    """A remote scan call failed or answered with an error status."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code
