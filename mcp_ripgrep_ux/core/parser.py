"""
Search Output Parser

Turns raw search tool output into ResultRecords. The tool groups hits
under a file path line followed by 'lineno:content' lines:

    src/app.py
    12:import os
    40:    os.environ["HOME"]

Chunks arrive in arbitrary sizes, so a line (or a UTF-8 sequence) may be
split across two chunks.
"""
import codecs
import re
from typing import Union

from .domain import ErrorLine, FileHeader, MatchLine, PlainLine, ResultRecord

ERROR_MARKERS = ("Error:", "错误:")

LINE_NUMBER_RE = re.compile(r"^(\d+):(.*)$")


class OutputParser:
    """Stateful line reassembler and classifier, one per search session"""

    def __init__(self, buffer_partial_lines: bool = True):
        self.buffer_partial_lines = buffer_partial_lines
        self.current_file = ""
        self._pending = ""
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")

    def reset(self) -> None:
        """Forget file context and any buffered partial line"""
        self.current_file = ""
        self._pending = ""
        self._decoder.reset()

    def feed(self, chunk: Union[bytes, str]) -> list[ResultRecord]:
        """Parse one chunk, returning the records for every complete line in it"""
        if isinstance(chunk, bytes):
            if self.buffer_partial_lines:
                text = self._decoder.decode(chunk)
            else:
                text = chunk.decode("utf-8", errors="replace")
        else:
            text = chunk

        if not self.buffer_partial_lines:
            return self._parse_lines(text.split("\n"))

        text = self._pending + text
        lines = text.split("\n")
        # Last segment is incomplete until a newline (or flush) arrives
        self._pending = lines.pop()
        return self._parse_lines(lines)

    def flush(self) -> list[ResultRecord]:
        """Parse whatever partial line is left at end of stream"""
        tail = self._pending + self._decoder.decode(b"", final=True)
        self._pending = ""
        return self._parse_lines([tail])

    def _parse_lines(self, lines: list[str]) -> list[ResultRecord]:
        records = []
        for raw in lines:
            line = raw.strip()
            if not line:
                continue
            records.append(self.classify(line))
        return records

    def classify(self, line: str) -> ResultRecord:
        """Classify one trimmed line, updating the current file on headers"""
        if line.startswith(ERROR_MARKERS):
            return ErrorLine(message=line)

        if ":" not in line:
            self.current_file = line
            return FileHeader(path=line)

        match = LINE_NUMBER_RE.match(line)
        if match:
            return MatchLine(
                file=self.current_file,
                line_number=int(match.group(1)),
                content=match.group(2),
            )

        return PlainLine(file=self.current_file, content=line)
