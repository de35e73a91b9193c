"""Line processor: turns one raw log line into one parsed record."""

from __future__ import annotations

import datetime
import logging
from dataclasses import dataclass
from typing import Union

from .context import ParsingContext
from .elements import WatchEntry
from .errors import (
    DateFormatError,
    LineFormatError,
    TitleFormatError,
    UnrecognizedLineError,
    WatchLogError,
)
from .parser import (
    LineType,
    classify_line,
    parse_date_line,
    parse_title_line,
    parse_watch_line,
)

logger = logging.getLogger(__name__)


# --- Parsed record types ---


@dataclass(frozen=True)
class DateHeader:
    """A date line; the context has already moved to ``date``."""

    date: datetime.date


@dataclass(frozen=True)
class TitleHeader:
    """A title line; the caller resolves the show and calls select_show."""

    title: str


@dataclass(frozen=True)
class SessionEntry:
    """A watch session line, already committed to the context."""

    entry: WatchEntry


# Union type for all parsed records
ParsedLine = Union[DateHeader, TitleHeader, SessionEntry]


# ---------------------------------------------------------------------------
# Recognizers, in priority order
# ---------------------------------------------------------------------------


def _process_date(context: ParsingContext, line: str) -> DateHeader:
    date = parse_date_line(line)
    context.advance_to_date(date)
    return DateHeader(date=date)


def _process_title(context: ParsingContext, line: str) -> TitleHeader:
    return TitleHeader(title=parse_title_line(line))


def _process_session(context: ParsingContext, line: str) -> SessionEntry:
    session = parse_watch_line(context, line)
    return SessionEntry(entry=context.commit_session(session))


# Failures in these error classes mean "not this kind of line": the next
# recognizer is tried. Any other failure is reported for the line.
_RECOGNIZERS = (
    (_process_date, DateFormatError),
    (_process_title, TitleFormatError),
    (_process_session, LineFormatError),
)


# ---------------------------------------------------------------------------
# process_line
# ---------------------------------------------------------------------------


def process_line(context: ParsingContext, line: str) -> ParsedLine | None:
    """Process a single log line.

    Args:
        context: Parsing context for the current log.
        line: Raw line text, with or without its line ending.

    Returns:
        DateHeader, TitleHeader or SessionEntry, or None for blank and
        comment lines.

    Raises:
        WatchLogError: For a line that cannot be applied. The context is
            left as it was before the call.
    """
    line_type = classify_line(line)
    if line_type in (LineType.BLANK, LineType.COMMENT):
        return None

    attempts: list[WatchLogError] = []
    for recognizer, mismatch in _RECOGNIZERS:
        try:
            return recognizer(context, line)
        except mismatch as exc:
            attempts.append(exc)

    raise UnrecognizedLineError(line, attempts)
