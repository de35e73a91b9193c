"""Parsing state threaded across the lines of one watch log."""

from __future__ import annotations

import datetime
import logging
from dataclasses import dataclass, replace

from .elements import ShowHandle, WatchEntry
from .errors import InconsistentContextError, NonMonotonicDateError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionLine:
    """A fully resolved watch session waiting to be committed.

    ``date`` is the context date once the session is applied; it is later
    than the current date when the session rolled past midnight.
    """

    entry: WatchEntry
    date: datetime.date


@dataclass
class ParsingContext:
    """Date and show continuity for a single parse session.

    Recognizers only read the context. Every write goes through one of the
    transition methods below, and each of them validates before mutating.
    """

    current_date: datetime.date | None = None
    current_show: ShowHandle | None = None
    last_entry: WatchEntry | None = None

    def reset(self) -> None:
        """Reset all context state."""
        self.current_date = None
        self.current_show = None
        self.last_entry = None

    def snapshot(self) -> ParsingContext:
        """Return a detached copy of the current state."""
        return replace(self)

    def restore(self, snapshot: ParsingContext) -> None:
        """Put back the state captured by snapshot()."""
        self.current_date = snapshot.current_date
        self.current_show = snapshot.current_show
        self.last_entry = snapshot.last_entry

    def advance_to_date(self, date: datetime.date) -> None:
        """Move to a new date header.

        The show and session continuity of the previous date no longer
        apply and are cleared.

        Raises:
            NonMonotonicDateError: If ``date`` is not after the current date.
        """
        if self.current_date is not None and date <= self.current_date:
            raise NonMonotonicDateError(self.current_date, date)
        logger.debug("Current date %s -> %s", self.current_date, date)
        self.current_date = date
        self.current_show = None
        self.last_entry = None

    def select_show(self, show_id: ShowHandle) -> None:
        """Make ``show_id`` the show that following sessions belong to."""
        self.current_show = show_id
        self.last_entry = None

    def record_entry(self, entry: WatchEntry) -> None:
        """Remember ``entry`` for rollover inference of the next session."""
        if entry.show_id != self.current_show:
            raise InconsistentContextError(
                f"Entry for show {entry.show_id!r} recorded while "
                f"current show is {self.current_show!r}"
            )
        self.last_entry = entry

    def roll_to_date(self, date: datetime.date) -> None:
        """Advance the date after a midnight crossing, keeping the show."""
        if self.current_date is not None and date < self.current_date:
            raise NonMonotonicDateError(self.current_date, date)
        if date != self.current_date:
            logger.debug("Rolled over midnight: %s -> %s", self.current_date, date)
        self.current_date = date

    def commit_session(self, session: SessionLine) -> WatchEntry:
        """Apply a resolved session in one step and return its entry."""
        if session.entry.show_id != self.current_show:
            raise InconsistentContextError(
                f"Session for show {session.entry.show_id!r} committed while "
                f"current show is {self.current_show!r}"
            )
        self.roll_to_date(session.date)
        self.record_entry(session.entry)
        return session.entry
