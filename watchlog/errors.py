"""Exceptions raised while reading a watch log.

Every recoverable, per-line failure inherits from WatchLogError so callers
can skip a bad line with a single except clause.
"""

from __future__ import annotations

import datetime


class WatchLogError(Exception):
    """Base exception for all recoverable watch log errors."""

    pass


class ConfigError(WatchLogError):
    """Configuration file could not be read or holds invalid values."""

    pass


# ---------------------------------------------------------------------------
# Format errors
# ---------------------------------------------------------------------------


class LogFormatError(WatchLogError, ValueError):
    """A token or line does not have the expected textual form."""

    def __init__(self, message: str, text: str) -> None:
        super().__init__(message)
        self.text = text


class DateFormatError(LogFormatError):
    """Line is not a valid DD/MM/YYYY date header."""

    pass


class TitleFormatError(LogFormatError):
    """Line is not a valid `<title>:` header."""

    pass


class LineFormatError(LogFormatError):
    """Line does not have the shape of a watch session."""

    pass


class TimeFormatError(LogFormatError):
    """HH:MM value is not a valid clock time."""

    pass


class InvalidEpisodeError(LogFormatError):
    """Episode token is not a whole, optionally signed, number."""

    pass


class InvalidCompanyFormatError(LogFormatError):
    """Company group is not wrapped in a single pair of braces."""

    pass


# ---------------------------------------------------------------------------
# Context errors
# ---------------------------------------------------------------------------


class MissingContextError(WatchLogError):
    """Watch session seen before the date or title it belongs to."""

    pass


class NoCurrentDateError(MissingContextError):
    """No date header has been seen yet."""

    pass


class NoCurrentShowError(MissingContextError):
    """No title header has been seen since the last date header."""

    pass


class NonMonotonicDateError(WatchLogError):
    """Date header is not strictly after the current date."""

    def __init__(self, previous: datetime.date, date: datetime.date) -> None:
        super().__init__(
            f"Date {date:%d/%m/%Y} is not after current date {previous:%d/%m/%Y}"
        )
        self.previous = previous
        self.date = date


class UnrecognizedLineError(WatchLogError):
    """No recognizer accepted the line."""

    def __init__(self, text: str, attempts: list[WatchLogError] | None = None) -> None:
        super().__init__(f"Unrecognized line: {text!r}")
        self.text = text
        self.attempts = attempts or []


# ---------------------------------------------------------------------------
# Store errors
# ---------------------------------------------------------------------------


class StoreError(WatchLogError):
    """Failure reported by a show store."""

    pass


class UnknownShowError(StoreError):
    """Show handle was never issued by the store."""

    def __init__(self, handle: object) -> None:
        super().__init__(f"Unknown show handle: {handle!r}")
        self.handle = handle


# ---------------------------------------------------------------------------
# Programming errors
# ---------------------------------------------------------------------------


class InconsistentContextError(RuntimeError):
    """Entry recorded under a show other than the current one.

    Signals a bug in the caller, not bad input, so it does not inherit
    from WatchLogError and is never turned into a diagnostic.
    """

    pass
