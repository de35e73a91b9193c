"""Tests for ParsingContext transitions."""

import datetime

import pytest

from watchlog.context import ParsingContext, SessionLine
from watchlog.elements import Episode, WatchEntry
from watchlog.errors import InconsistentContextError, NonMonotonicDateError, WatchLogError


def _entry(show_id: int, day: datetime.date, start: str = "10:00", end: str = "11:00") -> WatchEntry:
    return WatchEntry(
        show_id=show_id,
        start=datetime.datetime.combine(day, datetime.time.fromisoformat(start)),
        end=datetime.datetime.combine(day, datetime.time.fromisoformat(end)),
        episode=Episode(1),
    )


class TestInitialState:
    """Tests for a fresh context."""

    def test_empty(self, empty_context: ParsingContext) -> None:
        assert empty_context.current_date is None
        assert empty_context.current_show is None
        assert empty_context.last_entry is None


class TestAdvanceToDate:
    """Tests for ParsingContext.advance_to_date."""

    def test_first_date(self, empty_context: ParsingContext, day: datetime.date) -> None:
        empty_context.advance_to_date(day)
        assert empty_context.current_date == day

    def test_later_date_clears_show_and_entry(self, context: ParsingContext, day: datetime.date) -> None:
        context.record_entry(_entry(1, day))
        context.advance_to_date(day + datetime.timedelta(days=3))
        assert context.current_date == day + datetime.timedelta(days=3)
        assert context.current_show is None
        assert context.last_entry is None

    def test_equal_date_rejected(self, context: ParsingContext, day: datetime.date) -> None:
        with pytest.raises(NonMonotonicDateError) as exc_info:
            context.advance_to_date(day)
        assert exc_info.value.previous == day
        assert exc_info.value.date == day

    def test_earlier_date_rejected(self, context: ParsingContext, day: datetime.date) -> None:
        with pytest.raises(NonMonotonicDateError):
            context.advance_to_date(day - datetime.timedelta(days=1))

    def test_rejection_leaves_context_untouched(self, context: ParsingContext, day: datetime.date) -> None:
        entry = _entry(1, day)
        context.record_entry(entry)
        with pytest.raises(WatchLogError):
            context.advance_to_date(day)
        assert context.current_date == day
        assert context.current_show == 1
        assert context.last_entry == entry


class TestSelectShow:
    """Tests for ParsingContext.select_show."""

    def test_sets_show_and_clears_entry(self, context: ParsingContext, day: datetime.date) -> None:
        context.record_entry(_entry(1, day))
        context.select_show(2)
        assert context.current_show == 2
        assert context.last_entry is None
        assert context.current_date == day

    def test_without_date(self, empty_context: ParsingContext) -> None:
        empty_context.select_show(5)
        assert empty_context.current_show == 5


class TestRecordEntry:
    """Tests for ParsingContext.record_entry."""

    def test_stores_last_entry(self, context: ParsingContext, day: datetime.date) -> None:
        entry = _entry(1, day)
        context.record_entry(entry)
        assert context.last_entry == entry

    def test_show_mismatch_is_fatal(self, context: ParsingContext, day: datetime.date) -> None:
        with pytest.raises(InconsistentContextError):
            context.record_entry(_entry(2, day))
        assert context.last_entry is None

    def test_show_mismatch_is_not_recoverable_error(self) -> None:
        assert not issubclass(InconsistentContextError, WatchLogError)


class TestCommitSession:
    """Tests for ParsingContext.commit_session."""

    def test_same_day(self, context: ParsingContext, day: datetime.date) -> None:
        entry = _entry(1, day)
        assert context.commit_session(SessionLine(entry=entry, date=day)) is entry
        assert context.current_date == day
        assert context.last_entry == entry

    def test_rollover_keeps_show(self, context: ParsingContext, day: datetime.date) -> None:
        next_day = day + datetime.timedelta(days=1)
        entry = _entry(1, next_day, "00:00", "00:10")
        context.commit_session(SessionLine(entry=entry, date=next_day))
        assert context.current_date == next_day
        assert context.current_show == 1
        assert context.last_entry == entry

    def test_mismatch_leaves_date_untouched(self, context: ParsingContext, day: datetime.date) -> None:
        next_day = day + datetime.timedelta(days=1)
        with pytest.raises(InconsistentContextError):
            context.commit_session(SessionLine(entry=_entry(7, next_day), date=next_day))
        assert context.current_date == day


class TestReset:
    """Tests for ParsingContext.reset."""

    def test_reset(self, context: ParsingContext, day: datetime.date) -> None:
        context.record_entry(_entry(1, day))
        context.reset()
        assert context == ParsingContext()


class TestSnapshot:
    """Tests for ParsingContext.snapshot and restore."""

    def test_snapshot_is_detached(self, context: ParsingContext, day: datetime.date) -> None:
        saved = context.snapshot()
        context.record_entry(_entry(1, day))
        assert saved.last_entry is None
        assert saved.current_date == day

    def test_restore_undoes_commit(self, context: ParsingContext, day: datetime.date) -> None:
        saved = context.snapshot()
        next_day = day + datetime.timedelta(days=1)
        context.commit_session(SessionLine(entry=_entry(1, next_day, "00:00", "00:10"), date=next_day))
        context.restore(saved)
        assert context.current_date == day
        assert context.current_show == 1
        assert context.last_entry is None
