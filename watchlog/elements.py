"""Value types produced by the watch log recognizers."""

from __future__ import annotations

import datetime
import re
from dataclasses import dataclass

from .errors import InvalidCompanyFormatError, InvalidEpisodeError

# Opaque identifier issued by a ShowStore
ShowHandle = int

_EPISODE_RE = re.compile(r"-?[0-9]+")
_COMPANY_RE = re.compile(r"\{([^{}]*)\}")


# ---------------------------------------------------------------------------
# Episode
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Episode:
    """Episode number, negative for pre-air specials."""

    number: int

    @classmethod
    def parse(cls, text: str) -> Episode:
        """Parse an episode token such as ``"07"`` or ``"-1"``.

        Fractional episodes (``"1.5"``) are not supported and are rejected
        rather than truncated.

        Raises:
            InvalidEpisodeError: If the text is not a whole number.
        """
        if not _EPISODE_RE.fullmatch(text):
            raise InvalidEpisodeError(f"Invalid episode number: {text!r}", text)
        return cls(number=int(text))

    def __int__(self) -> int:
        return self.number

    def __str__(self) -> str:
        return str(self.number)


# ---------------------------------------------------------------------------
# CompanyGroup
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CompanyGroup:
    """People who watched along, in the order they were written."""

    names: tuple[str, ...] = ()

    @classmethod
    def parse(cls, text: str) -> CompanyGroup:
        """Parse a ``{name, name, ...}`` group.

        Names are trimmed and empty names dropped, so ``{}`` and a trailing
        comma are both accepted.

        Raises:
            InvalidCompanyFormatError: If the text is not wrapped in braces.
        """
        match = _COMPANY_RE.fullmatch(text)
        if match is None:
            raise InvalidCompanyFormatError(
                f"Company must be wrapped in braces: {text!r}", text
            )
        names = (piece.strip() for piece in match.group(1).split(","))
        return cls(names=tuple(name for name in names if name))

    def __iter__(self):
        return iter(self.names)

    def __len__(self) -> int:
        return len(self.names)

    def __str__(self) -> str:
        return "{" + ", ".join(self.names) + "}"


# ---------------------------------------------------------------------------
# WatchEntry
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class WatchEntry:
    """One contiguous watching interval of a show."""

    show_id: ShowHandle
    start: datetime.datetime
    end: datetime.datetime
    episode: Episode | None
    company: CompanyGroup | None = None

    def __post_init__(self) -> None:
        if self.end < self.start:
            raise ValueError(f"Entry ends before it starts: {self.start} > {self.end}")

    @property
    def duration(self) -> datetime.timedelta:
        return self.end - self.start

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {
            "show_id": self.show_id,
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
            "episode": self.episode.number if self.episode is not None else None,
            "company": list(self.company.names) if self.company is not None else None,
        }
