"""
Formatters for search results

Render records with their match spans, either as ANSI-coloured terminal
lines (file bold blue, line number green, matches on yellow) or as plain
text with matches wrapped in markers. Used by both CLI and MCP adapters
for consistent presentation.
"""
from typing import Any, Optional, Union

from .core.domain import MatchLine, MatchSpan, PlainLine
from .core.highlight import compute_spans, split_segments

# ANSI styles
RESET = "\033[0m"
FILE_STYLE = "\033[1;34m"
LINE_NUMBER_STYLE = "\033[32m"
MATCH_STYLE = "\033[30;43m"
ERROR_STYLE = "\033[31m"

TEXT_MARKERS = ("**", "**")


def render_content(
    content: str,
    spans: list[MatchSpan],
    color: bool = False,
    markers: tuple[str, str] = TEXT_MARKERS
) -> str:
    """Emit unmatched text, then highlighted text, between span boundaries"""
    parts = []
    for text, highlighted in split_segments(content, spans):
        if not highlighted:
            parts.append(text)
        elif color:
            parts.append(f"{MATCH_STYLE}{text}{RESET}")
        else:
            parts.append(f"{markers[0]}{text}{markers[1]}")
    return "".join(parts)


def render_record(
    record: Union[MatchLine, PlainLine],
    pattern: str,
    case_sensitive: bool = False,
    use_regex: bool = True,
    color: bool = False
) -> str:
    """Render one result line as 'file:line:content' with highlighted matches.

    PlainLine records have no line number and render as 'file:content'.
    """
    spans = compute_spans(record.content, pattern, case_sensitive, use_regex)
    content = render_content(record.content, spans, color=color)

    file_part = f"{FILE_STYLE}{record.file}{RESET}" if color else record.file
    if isinstance(record, MatchLine):
        number = f"{LINE_NUMBER_STYLE}{record.line_number}{RESET}" if color else str(record.line_number)
        return f"{file_part}:{number}:{content}"
    return f"{file_part}:{content}"


def render_error(message: str, color: bool = False) -> str:
    text = f"Error: {message}"
    return f"{ERROR_STYLE}{text}{RESET}" if color else text


def format_search_results(result: dict[str, Any]) -> str:
    """Format search_directory result as text.

    Example output:
        SEARCH "timeout" | /srv/app | case-insensitive, regex

        MATCHES (3 found in 2 files)
        ──────────────────────────────────────────────────────────────────────
        src/client.py:12:    **timeout** = 30
        src/client.py:40:        raise **Timeout**Error()
        README.md:7:Set the **timeout** in config.toml

        COMPLETED (exit code 0)
    """
    if not result.get("success"):
        return f"ERROR: {result.get('error', 'Unknown error')}"

    lines = []
    options = result.get("options", {})
    flags = [
        "case-sensitive" if options.get("case_sensitive") else "case-insensitive",
        "regex" if options.get("use_regex", True) else "fixed string",
    ]
    if options.get("include_hidden"):
        flags.append("hidden files")
    lines.append(f"SEARCH \"{result['pattern']}\" | {result['directory']} | {', '.join(flags)}")
    lines.append("")

    match_count = result["match_count"]
    if match_count == 0:
        lines.append("NO MATCHES FOUND")
    else:
        file_count = len(result.get("files", []))
        shown = " (truncated)" if result.get("truncated") else ""
        lines.append(f"MATCHES ({match_count} found in {file_count} files{shown})")
        lines.append("─" * 70)
        for match in result["matches"]:
            spans = [MatchSpan(start, length) for start, length in match.get("spans", [])]
            content = render_content(match["line"], spans)
            if match.get("line_number") is None:
                lines.append(f"{match['file']}:{content}")
            else:
                lines.append(f"{match['file']}:{match['line_number']}:{content}")

    notices = result.get("notices", [])
    if notices:
        lines.append("")
        for notice in notices:
            lines.append(render_error(notice["message"]))

    lines.append("")
    lines.append(_format_status(result.get("state", ""), result.get("exit_code")))

    if result.get("truncated"):
        lines.append("More: search_directory(..., max_results=N) with a larger N, or a narrower pattern")

    return "\n".join(lines)


def format_highlight(result: dict[str, Any]) -> str:
    """Format highlight_matches result as text.

    Example output:
        HIGHLIGHT "foo" (2 spans)
        **Foo**Bar **Foo**
        SPANS: 0+3, 7+3
    """
    if not result.get("success"):
        return f"ERROR: {result.get('error', 'Unknown error')}"

    spans = [MatchSpan(start, length) for start, length in result["spans"]]
    lines = [
        f"HIGHLIGHT \"{result['pattern']}\" ({len(spans)} spans)",
        render_content(result["content"], spans),
    ]
    if spans:
        lines.append("SPANS: " + ", ".join(f"{s.start}+{s.length}" for s in spans))
    return "\n".join(lines)


def _format_status(state: str, exit_code: Optional[int]) -> str:
    status = state.upper() if state else "UNKNOWN"
    if exit_code is None:
        return status
    return f"{status} (exit code {exit_code})"
