"""Markdown and JSON summaries of an ingested show store."""

from __future__ import annotations

import datetime

from .elements import WatchEntry
from .store import InMemoryShowStore


def format_duration(seconds: int) -> str:
    """Format a number of seconds as ``45m`` or ``1h 5m``."""
    minutes = seconds // 60
    if minutes < 60:
        return f"{minutes}m"
    hours = minutes // 60
    remaining_minutes = minutes % 60
    return f"{hours}h {remaining_minutes}m"


def _total_seconds(entries: list[WatchEntry]) -> int:
    total = sum((e.duration for e in entries), datetime.timedelta())
    return int(total.total_seconds())


def format_entry(entry: WatchEntry) -> str:
    """Format a single session as a markdown list item."""
    parts = [f"{entry.start:%d/%m/%Y %H:%M}–{entry.end:%H:%M}"]
    if entry.end.date() != entry.start.date():
        parts[0] += f" (+{(entry.end.date() - entry.start.date()).days}d)"
    if entry.episode is not None:
        parts.append(f"ep {entry.episode}")
    if entry.company is not None and len(entry.company):
        parts.append("with " + ", ".join(entry.company))
    return "- " + " · ".join(parts)


def format_store_markdown(store: InMemoryShowStore) -> str:
    """Render every show with its sessions and total watch time.

    Shows appear in the order they were first seen; shows without any
    sessions are omitted.
    """
    sections: list[str] = []
    for _handle, record in store.shows():
        if not record.entries:
            continue
        lines = [f"## {record.title}", ""]
        lines.extend(format_entry(e) for e in record.entries)
        lines.append("")
        sessions = len(record.entries)
        lines.append(
            f"Total: {format_duration(_total_seconds(record.entries))} "
            f"over {sessions} session{'s' if sessions != 1 else ''}"
        )
        sections.append("\n".join(lines))
    return "\n\n".join(sections)


def store_to_dict(store: InMemoryShowStore) -> dict:
    """Build a JSON-serializable report of the store."""
    return {
        "shows": [
            {
                "id": handle,
                "title": record.title,
                "total_seconds": _total_seconds(record.entries),
                "entries": [e.to_dict() for e in record.entries],
            }
            for handle, record in store.shows()
        ]
    }
