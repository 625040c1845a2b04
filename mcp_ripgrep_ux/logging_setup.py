"""
Logging setup shared by the CLI and both MCP servers

Everything goes to stderr: stdout carries search results (CLI) or the
MCP stdio protocol (server).
"""
import logging
import sys
from datetime import datetime, timezone
from typing import Optional, TextIO

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y/%m/%d %H:%M:%S"


class MillisecondFormatter(logging.Formatter):
    """Timestamps with sub-second precision as a :XXXX suffix"""

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:  # noqa: N802
        if not datefmt:
            return super().formatTime(record, datefmt)
        stamp = datetime.fromtimestamp(record.created, tz=timezone.utc).strftime(datefmt)
        return f"{stamp}:{int((record.created % 1) * 10000):04d}"


def configure_logging(level: int = logging.INFO, stream: Optional[TextIO] = None) -> logging.Handler:
    """Install one stderr handler on the root logger, replacing earlier ones"""
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(MillisecondFormatter(LOG_FORMAT, datefmt=DATE_FORMAT))

    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level)
    return handler
