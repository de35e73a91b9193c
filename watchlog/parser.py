"""Watch log line classification and per-line recognizers."""

from __future__ import annotations

import datetime
import logging
import re
import sys
from enum import Enum, auto
from pathlib import Path

from .context import ParsingContext, SessionLine
from .elements import CompanyGroup, Episode, WatchEntry
from .errors import (
    DateFormatError,
    LineFormatError,
    NoCurrentDateError,
    NoCurrentShowError,
    TimeFormatError,
    TitleFormatError,
)

logger = logging.getLogger(__name__)

COMMENT_TOKEN = "//"
EPISODE_PLACEHOLDER = "--"

_ONE_DAY = datetime.timedelta(days=1)

# ---------------------------------------------------------------------------
# Line classification enum
# ---------------------------------------------------------------------------


class LineType(Enum):
    # Skip
    BLANK = auto()
    COMMENT = auto()

    # Headers
    DATE = auto()
    TITLE = auto()

    # Entries
    SESSION = auto()

    UNRECOGNIZED = auto()


# ---------------------------------------------------------------------------
# Line shapes
# ---------------------------------------------------------------------------

_DATE_RE = re.compile(
    r"^\s*(?P<day>[0-9]{2})/(?P<month>[0-9]{2})/(?P<year>[0-9]{4})\s*(?://.*)?$"
)

# Title starts with a letter or digit, holds no brackets or braces and never
# spans a `//`. The lazy group stops at the first colon followed only by an
# optional comment.
_TITLE_RE = re.compile(r"^\s*(?P<title>[^\W_](?:(?!//)[^\[\]{}])*?)\s*:\s*(?://.*)?$")

# The company group runs up to an optional trailing comment and is validated
# by CompanyGroup.parse.
_SESSION_RE = re.compile(
    r"^\s*(?P<start>[0-9]{2}:[0-9]{2})\s*-\s*(?P<end>[0-9]{2}:[0-9]{2})"
    r"\s+(?P<episode>--|-?[0-9]+(?:\.[0-9]+)?)"
    r"\s*(?P<company>\{.*?)?\s*(?://.*)?$"
)


# ---------------------------------------------------------------------------
# classify_line
# ---------------------------------------------------------------------------


def classify_line(line: str) -> LineType:
    """Classify a raw log line by its shape alone.

    Shape matches are checked in the fixed order date, title, session. A
    DATE result does not guarantee a valid calendar date; the recognizers
    perform full validation.
    """
    stripped = line.strip()
    if not stripped:
        return LineType.BLANK
    if stripped.startswith(COMMENT_TOKEN):
        return LineType.COMMENT
    if _DATE_RE.match(line):
        return LineType.DATE
    if _TITLE_RE.match(line):
        return LineType.TITLE
    if _SESSION_RE.match(line):
        return LineType.SESSION
    return LineType.UNRECOGNIZED


# ---------------------------------------------------------------------------
# Header recognizers
# ---------------------------------------------------------------------------


def parse_date_line(line: str) -> datetime.date:
    """Parse a ``DD/MM/YYYY`` date header, optionally followed by a comment.

    Raises:
        DateFormatError: If the line is not a date header or names a day
            that does not exist.
    """
    match = _DATE_RE.match(line)
    if match is None:
        raise DateFormatError(f"Date parse error: {line!r}", line)
    try:
        return datetime.date(
            int(match.group("year")),
            int(match.group("month")),
            int(match.group("day")),
        )
    except ValueError as exc:
        raise DateFormatError(f"Date parse error: {line!r}: {exc}", line) from exc


def parse_title_line(line: str) -> str:
    """Parse a ``<title>:`` header and return the title without the colon.

    Colons inside the title are kept: ``"Re:Zero:"`` gives ``"Re:Zero"``.

    Raises:
        TitleFormatError: If the line is not a title header.
    """
    match = _TITLE_RE.match(line)
    if match is None:
        raise TitleFormatError(f"Title parse error (missing colon?): {line!r}", line)
    return match.group("title").strip()


# ---------------------------------------------------------------------------
# Session recognizer
# ---------------------------------------------------------------------------


def _parse_time(text: str) -> datetime.time:
    try:
        return datetime.datetime.strptime(text, "%H:%M").time()
    except ValueError as exc:
        raise TimeFormatError(f"Invalid time: {text!r}", text) from exc


def _resolve_dates(
    context: ParsingContext, start: datetime.time, end: datetime.time
) -> tuple[datetime.date, datetime.date]:
    """Return the (start, end) dates of a session under the current context.

    A session that starts earlier in the day than the previous one ended
    happened after midnight, unless it crosses midnight itself, in which
    case it is anchored on the current date.
    """
    date = context.current_date
    last = context.last_entry
    crosses_midnight = end < start

    if last is not None and last.end.time() > start and not crosses_midnight:
        return date + _ONE_DAY, date + _ONE_DAY
    if crosses_midnight:
        return date, date + _ONE_DAY
    return date, date


def parse_watch_line(context: ParsingContext, line: str) -> SessionLine:
    """Parse ``HH:MM - HH:MM <episode|--> [{company}] [//comment]`` against the context.

    The context is only read. The returned SessionLine carries the built
    entry and the date the context moves to once it is committed.

    Raises:
        LineFormatError: If the line does not have the session shape.
        NoCurrentDateError: If no date header precedes the line.
        NoCurrentShowError: If no title header follows the last date.
        TimeFormatError: If either clock value is not a valid time.
        InvalidEpisodeError: If the episode is fractional.
        InvalidCompanyFormatError: If the company group is malformed.
        DateFormatError: If the session would roll past ``date.max``.
    """
    match = _SESSION_RE.match(line)
    if match is None:
        raise LineFormatError(f"Line doesn't match session format: {line!r}", line)

    if context.current_date is None:
        raise NoCurrentDateError(f"No current date for session: {line!r}")
    if context.current_show is None:
        raise NoCurrentShowError(f"No current anime for session: {line!r}")

    start_time = _parse_time(match.group("start"))
    end_time = _parse_time(match.group("end"))

    episode_text = match.group("episode")
    episode = None if episode_text == EPISODE_PLACEHOLDER else Episode.parse(episode_text)

    company_text = match.group("company")
    company = CompanyGroup.parse(company_text) if company_text is not None else None

    try:
        start_date, end_date = _resolve_dates(context, start_time, end_time)
    except OverflowError as exc:
        raise DateFormatError(
            f"Session rolls past the last representable date: {line!r}", line
        ) from exc
    entry = WatchEntry(
        show_id=context.current_show,
        start=datetime.datetime.combine(start_date, start_time),
        end=datetime.datetime.combine(end_date, end_time),
        episode=episode,
        company=company,
    )
    return SessionLine(entry=entry, date=end_date)


# ---------------------------------------------------------------------------
# Log file reader
# ---------------------------------------------------------------------------


def read_log(path: str | Path) -> list[tuple[int, str]]:
    """Read a watch log and return ``(line_num, text)`` pairs.

    ``"-"`` reads from standard input. Line endings are stripped; blank lines
    are kept so that line numbers stay aligned with the source.
    """
    if str(path) == "-":
        return [(n, raw.rstrip("\r\n")) for n, raw in enumerate(sys.stdin, start=1)]

    path = Path(path)
    results: list[tuple[int, str]] = []
    with path.open("r", encoding="utf-8") as f:
        for line_num, raw_line in enumerate(f, start=1):
            results.append((line_num, raw_line.rstrip("\r\n")))
    logger.debug("Read %d lines from %s", len(results), path)
    return results
