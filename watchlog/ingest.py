"""Feeds watch log lines through the processor into a show store."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from .config import ErrorPolicy, IngestConfig
from .context import ParsingContext
from .elements import Episode, ShowHandle, WatchEntry
from .errors import StoreError, WatchLogError
from .parser import read_log
from .processor import ParsedLine, SessionEntry, TitleHeader, process_line
from .store import InMemoryShowStore, ShowStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Diagnostic:
    """A line that could not be applied, and why."""

    line_num: int | None
    text: str
    error: WatchLogError

    def __str__(self) -> str:
        where = f"line {self.line_num}" if self.line_num is not None else "line ?"
        return f"{where}: {self.error}"


@dataclass
class IngestResult:
    """Entries accepted and diagnostics reported during one ingestion."""

    entries: list[WatchEntry] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.diagnostics


class LogIngester:
    """Runs one parse session over a stream of lines.

    Title headers are resolved to show handles through the store before
    ``select_show`` is called, and each committed entry is appended to the
    store. Failed lines become diagnostics; with ``ErrorPolicy.ABORT`` the
    failure is re-raised after it has been recorded.
    """

    def __init__(self, store: ShowStore, config: IngestConfig | None = None) -> None:
        self.store = store
        self.config = config or IngestConfig()
        self.context = ParsingContext()
        self.result = IngestResult()
        self._last_episode: dict[ShowHandle, Episode] = {}

    def feed(self, line: str, line_num: int | None = None) -> ParsedLine | None:
        """Process one line.

        Returns:
            The parsed record, or None for skipped or failed lines.
        """
        checkpoint = self.context.snapshot()
        try:
            parsed = process_line(self.context, line)
            if isinstance(parsed, TitleHeader):
                self.context.select_show(self.store.create_or_get_show(parsed.title))
            elif isinstance(parsed, SessionEntry):
                try:
                    self.store.append_entry(parsed.entry.show_id, parsed.entry)
                except StoreError:
                    # The session was already committed to the context
                    self.context.restore(checkpoint)
                    raise
                self._accept(parsed.entry, line_num)
        except WatchLogError as exc:
            diagnostic = Diagnostic(line_num=line_num, text=line, error=exc)
            self.result.diagnostics.append(diagnostic)
            logger.warning("%s", diagnostic)
            if self.config.on_error is ErrorPolicy.ABORT:
                raise
            return None
        return parsed

    def ingest(self, lines: Iterable[str | tuple[int, str]]) -> IngestResult:
        """Feed every line and return the accumulated result.

        Lines may be plain strings or ``(line_num, text)`` pairs as returned
        by read_log.
        """
        for line_num, item in enumerate(lines, start=1):
            if isinstance(item, tuple):
                line_num, item = item
            self.feed(item, line_num)
        return self.result

    def _accept(self, entry: WatchEntry, line_num: int | None) -> None:
        self.result.entries.append(entry)
        if entry.episode is None:
            return
        previous = self._last_episode.get(entry.show_id)
        if (
            previous is not None
            and entry.episode.number <= previous.number
            and self.config.warn_on_episode_regression
        ):
            logger.warning(
                "line %s: episode %s is not after previous episode %s",
                line_num,
                entry.episode,
                previous,
            )
        self._last_episode[entry.show_id] = entry.episode


def ingest_log(
    path: str | Path,
    store: ShowStore | None = None,
    config: IngestConfig | None = None,
) -> tuple[ShowStore, IngestResult]:
    """Read and ingest a whole log file (``"-"`` for stdin)."""
    store = store if store is not None else InMemoryShowStore()
    ingester = LogIngester(store, config)
    result = ingester.ingest(read_log(path))
    logger.info(
        "Ingested %d entries from %s with %d diagnostics",
        len(result.entries),
        path,
        len(result.diagnostics),
    )
    return store, result
