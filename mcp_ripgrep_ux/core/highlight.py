"""
Match highlighting

Spans are recomputed from the user's pattern rather than taken from the
search tool, so highlighting works on any output format.
"""
import logging
import re
from functools import lru_cache
from typing import Optional

from .domain import MatchSpan

logger = logging.getLogger(__name__)


@lru_cache(maxsize=256)
def compile_highlighter(pattern: str, case_sensitive: bool, use_regex: bool) -> Optional[re.Pattern]:
    """Compile the pattern used for highlighting; None when there is nothing to highlight.

    An invalid regex degrades to a literal match of the raw pattern text.
    """
    if not pattern:
        return None

    flags = 0 if case_sensitive else re.IGNORECASE

    if use_regex:
        try:
            return re.compile(pattern, flags)
        except re.error as e:
            logger.debug(f"Invalid regex {pattern!r} ({e}), highlighting literally")

    return re.compile(re.escape(pattern), flags)


def compute_spans(
    content: str,
    pattern: str,
    case_sensitive: bool = False,
    use_regex: bool = True
) -> list[MatchSpan]:
    """Find all non-overlapping matches of pattern in content, left to right.

    Zero-length matches are skipped (finditer always advances past them).
    """
    regex = compile_highlighter(pattern, case_sensitive, use_regex)
    if regex is None:
        return []

    spans = []
    for match in regex.finditer(content):
        start, end = match.span()
        if end > start:
            spans.append(MatchSpan(start=start, length=end - start))
    return spans


def split_segments(content: str, spans: list[MatchSpan]) -> list[tuple[str, bool]]:
    """Split content into (text, highlighted) pieces between span boundaries"""
    segments = []
    last_pos = 0

    for span in spans:
        if span.start > last_pos:
            segments.append((content[last_pos:span.start], False))
        segments.append((content[span.start:span.end], True))
        last_pos = span.end

    if last_pos < len(content):
        segments.append((content[last_pos:], False))

    return segments
