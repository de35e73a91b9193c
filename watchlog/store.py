"""Show store protocol and a simple in-memory implementation.

The parsing core never talks to a store directly. The ingester resolves
each title header through ``create_or_get_show`` and hands committed
entries to ``append_entry``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Protocol, runtime_checkable

from .elements import ShowHandle, WatchEntry
from .errors import UnknownShowError


@runtime_checkable
class ShowStore(Protocol):
    """Protocol for collections of watched shows."""

    def create_or_get_show(self, title: str) -> ShowHandle:
        """Return the handle for ``title``, creating the show if needed.

        Must return the same handle for the same title within one store.
        """
        ...

    def append_entry(self, handle: ShowHandle, entry: WatchEntry) -> None:
        """Append an entry to the show identified by ``handle``.

        Raises:
            StoreError: If the handle was not issued by this store.
        """
        ...


@dataclass
class ShowRecord:
    """A show and the sessions logged for it, in input order."""

    title: str
    entries: list[WatchEntry] = field(default_factory=list)


class InMemoryShowStore:
    """Keeps shows in a list; handles are list indices."""

    def __init__(self) -> None:
        self._shows: list[ShowRecord] = []
        self._handles: dict[str, ShowHandle] = {}

    def create_or_get_show(self, title: str) -> ShowHandle:
        handle = self._handles.get(title)
        if handle is None:
            handle = len(self._shows)
            self._shows.append(ShowRecord(title=title))
            self._handles[title] = handle
        return handle

    def append_entry(self, handle: ShowHandle, entry: WatchEntry) -> None:
        self._record(handle).entries.append(entry)

    def title_of(self, handle: ShowHandle) -> str:
        return self._record(handle).title

    def entries_for(self, handle: ShowHandle) -> list[WatchEntry]:
        return list(self._record(handle).entries)

    def shows(self) -> Iterator[tuple[ShowHandle, ShowRecord]]:
        """Iterate over ``(handle, record)`` pairs in creation order."""
        return iter(enumerate(self._shows))

    def _record(self, handle: ShowHandle) -> ShowRecord:
        if not isinstance(handle, int) or not 0 <= handle < len(self._shows):
            raise UnknownShowError(handle)
        return self._shows[handle]

    def __len__(self) -> int:
        return len(self._shows)
