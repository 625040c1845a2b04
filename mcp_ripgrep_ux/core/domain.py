"""
Domain Models - Pure search entities

No external dependencies. These represent the core search concepts:
what to search for, what the search tool printed, and what the
session reports back to its consumer.
"""
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional, Union

from .errors import InvalidSpecError


@dataclass(frozen=True)
class SearchSpec:
    """Parameters of one search request"""
    pattern: str
    root_directory: Path
    case_sensitive: bool = False
    include_hidden: bool = False
    use_regex: bool = True

    def validate(self) -> None:
        """Raise InvalidSpecError unless this search can be launched"""
        if not self.pattern:
            raise InvalidSpecError("Search pattern must not be empty")
        if "\0" in self.pattern:
            raise InvalidSpecError("Search pattern must not contain NUL characters")
        if not str(self.root_directory) or not Path(self.root_directory).is_dir():
            raise InvalidSpecError(f"Search directory does not exist: {self.root_directory}")


# Result records - one per line of search tool output

@dataclass(frozen=True)
class FileHeader:
    """A line naming a file; sets context for the lines that follow"""
    path: str


@dataclass(frozen=True)
class MatchLine:
    """A 'lineno:content' hit inside the current file"""
    file: str
    line_number: int
    content: str


@dataclass(frozen=True)
class PlainLine:
    """A line with no parseable line number"""
    file: str
    content: str


@dataclass(frozen=True)
class ErrorLine:
    """An error reported inline on stdout"""
    message: str


ResultRecord = Union[FileHeader, MatchLine, PlainLine, ErrorLine]


@dataclass(frozen=True)
class MatchSpan:
    """A highlighted range of a content string"""
    start: int
    length: int

    @property
    def end(self) -> int:
        return self.start + self.length


# Runner events - ProcessRunner to SearchSession

@dataclass(frozen=True)
class OutputChunk:
    """Raw bytes read from the process stdout"""
    data: bytes


@dataclass(frozen=True)
class ErrorChunk:
    """Raw bytes read from the process stderr"""
    data: bytes


@dataclass(frozen=True)
class ProcessExited:
    """Terminal runner event, emitted exactly once per started process"""
    exit_code: Optional[int]
    normal: bool = True
    cancelled: bool = False


RunnerEvent = Union[OutputChunk, ErrorChunk, ProcessExited]


# Session events - SearchSession to consumer

class SessionState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    ERRORED = "errored"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in (SessionState.COMPLETED, SessionState.ERRORED, SessionState.CANCELLED)


class RunnerState(str, Enum):
    NOT_STARTED = "not_started"
    RUNNING = "running"
    STOPPED = "stopped"


class NoticeKind(str, Enum):
    STDERR = "stderr"               # advisory text on the error stream
    OUTPUT = "output"               # ErrorLine seen on stdout
    LAUNCH = "launch"               # executable missing or spawn refused
    ABNORMAL_EXIT = "abnormal_exit"  # crash or signal


@dataclass(frozen=True)
class SearchNotice:
    """A non-record error event; only LAUNCH and ABNORMAL_EXIT precede an ERRORED finish"""
    kind: NoticeKind
    message: str


@dataclass(frozen=True)
class SearchFinished:
    """The single terminal event of a search"""
    state: SessionState
    exit_code: Optional[int] = None
    message: str = ""


SessionEvent = Union[FileHeader, MatchLine, PlainLine, ErrorLine, SearchNotice, SearchFinished]


@dataclass
class SearchOutcome:
    """Collected results of one search run to completion"""
    spec: SearchSpec
    records: list[Union[MatchLine, PlainLine]]
    files: list[str]
    notices: list[SearchNotice]
    state: SessionState
    exit_code: Optional[int] = None
    truncated: bool = False

    @property
    def match_count(self) -> int:
        return len(self.records)
