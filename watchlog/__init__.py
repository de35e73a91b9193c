"""Parse a personal anime watch log into structured watch sessions."""

from watchlog.config import ErrorPolicy, IngestConfig, load_config
from watchlog.context import ParsingContext, SessionLine
from watchlog.elements import CompanyGroup, Episode, ShowHandle, WatchEntry
from watchlog.errors import (
    ConfigError,
    DateFormatError,
    InconsistentContextError,
    InvalidCompanyFormatError,
    InvalidEpisodeError,
    LineFormatError,
    LogFormatError,
    MissingContextError,
    NoCurrentDateError,
    NoCurrentShowError,
    NonMonotonicDateError,
    StoreError,
    TimeFormatError,
    TitleFormatError,
    UnknownShowError,
    UnrecognizedLineError,
    WatchLogError,
)
from watchlog.ingest import Diagnostic, IngestResult, LogIngester, ingest_log
from watchlog.parser import (
    LineType,
    classify_line,
    parse_date_line,
    parse_title_line,
    parse_watch_line,
    read_log,
)
from watchlog.processor import (
    DateHeader,
    ParsedLine,
    SessionEntry,
    TitleHeader,
    process_line,
)
from watchlog.store import InMemoryShowStore, ShowStore

__version__ = "0.1.0"

__all__ = [
    # Elements module
    "Episode",
    "CompanyGroup",
    "WatchEntry",
    "ShowHandle",
    # Context module
    "ParsingContext",
    "SessionLine",
    # Parser module
    "LineType",
    "classify_line",
    "parse_date_line",
    "parse_title_line",
    "parse_watch_line",
    "read_log",
    # Processor module
    "DateHeader",
    "TitleHeader",
    "SessionEntry",
    "ParsedLine",
    "process_line",
    # Store module
    "ShowStore",
    "InMemoryShowStore",
    # Ingest module
    "LogIngester",
    "IngestResult",
    "Diagnostic",
    "ingest_log",
    # Config module
    "IngestConfig",
    "ErrorPolicy",
    "load_config",
    # Errors module
    "WatchLogError",
    "ConfigError",
    "LogFormatError",
    "DateFormatError",
    "TitleFormatError",
    "LineFormatError",
    "TimeFormatError",
    "InvalidEpisodeError",
    "InvalidCompanyFormatError",
    "MissingContextError",
    "NoCurrentDateError",
    "NoCurrentShowError",
    "NonMonotonicDateError",
    "UnrecognizedLineError",
    "StoreError",
    "UnknownShowError",
    "InconsistentContextError",
]
