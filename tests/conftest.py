"""Shared test fixtures for watchlog."""

import datetime

import pytest

from watchlog.context import ParsingContext
from watchlog.store import InMemoryShowStore


@pytest.fixture
def day() -> datetime.date:
    return datetime.date(2022, 2, 10)


@pytest.fixture
def empty_context() -> ParsingContext:
    """Return a fresh ParsingContext."""
    return ParsingContext()


@pytest.fixture
def context(day: datetime.date) -> ParsingContext:
    """Context positioned on a date with show 1 selected."""
    return ParsingContext(current_date=day, current_show=1)


@pytest.fixture
def store() -> InMemoryShowStore:
    return InMemoryShowStore()


# ---------------------------------------------------------------------------
# Log samples
# ---------------------------------------------------------------------------


@pytest.fixture
def sample_log_lines() -> list[str]:
    """One date, two titles, five sessions."""
    return [
        "19/03/2022",
        "Evangelion: 1.0 You Are (Not) Alone: // 1.11",
        "16:40 - 18:24 01 {Vinicius Russo}",
        "",
        "One Pace: Reverie:",
        "20:09 - 20:46 01 {Lucas Romero}",
        "20:46 - 21:26 02 {Lucas Romero, }",
        "// short break",
        "21:27 - 22:04 03",
        "22:44 - 23:17 04 {}",
    ]


@pytest.fixture
def sample_log_file(tmp_path, sample_log_lines):
    path = tmp_path / "watch.log"
    path.write_text("\n".join(sample_log_lines) + "\n", encoding="utf-8")
    return path
