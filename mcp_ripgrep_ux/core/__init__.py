"""
Core - Domain logic and ports

This package contains:
- domain.py: Pure domain models
- errors.py: Errors raised to callers
- ports.py: Port interfaces (abstractions for external dependencies)
- parser.py: Search tool output parser
- highlight.py: Match span computation
- command.py: Search tool argument construction
- services.py: Application services (use cases)
"""
from .domain import (
    SearchSpec,
    FileHeader,
    MatchLine,
    PlainLine,
    ErrorLine,
    ResultRecord,
    MatchSpan,
    OutputChunk,
    ErrorChunk,
    ProcessExited,
    SessionState,
    RunnerState,
    NoticeKind,
    SearchNotice,
    SearchFinished,
    SearchOutcome,
)
from .errors import InvalidSpecError, LaunchError
from .ports import ProcessRunner, ExecutableLocator
from .parser import OutputParser
from .highlight import compute_spans, split_segments
from .command import build_search_args
from .services import SearchSession, SearchStream, SearchService

__all__ = [
    # Domain models
    "SearchSpec",
    "FileHeader",
    "MatchLine",
    "PlainLine",
    "ErrorLine",
    "ResultRecord",
    "MatchSpan",
    "OutputChunk",
    "ErrorChunk",
    "ProcessExited",
    "SessionState",
    "RunnerState",
    "NoticeKind",
    "SearchNotice",
    "SearchFinished",
    "SearchOutcome",
    # Errors
    "InvalidSpecError",
    "LaunchError",
    # Ports
    "ProcessRunner",
    "ExecutableLocator",
    # Parsing and highlighting
    "OutputParser",
    "compute_spans",
    "split_segments",
    "build_search_args",
    # Services
    "SearchSession",
    "SearchStream",
    "SearchService",
]
