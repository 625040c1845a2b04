"""
MCP Tool Handlers

Shared handlers for MCP tools that use the hexagonal core.
"""
from pathlib import Path
from typing import Any, Optional

from ... import config
from ...container import Container
from ...core.domain import MatchLine, SearchSpec
from ...core.highlight import compute_spans


class MCPHandlers:
    """Handlers for MCP tools using dependency injection"""

    def __init__(self, container: Container):
        self.container = container

    async def search_directory(
        self,
        pattern: str,
        directory: Optional[str] = None,
        case_sensitive: bool = False,
        include_hidden: bool = False,
        use_regex: bool = True,
        max_results: Optional[int] = None
    ) -> dict[str, Any]:
        """Run a search to completion and return matches with highlight spans"""
        try:
            spec = SearchSpec(
                pattern=pattern,
                root_directory=Path(directory) if directory else config.get_search_root(),
                case_sensitive=case_sensitive,
                include_hidden=include_hidden,
                use_regex=use_regex
            )
            limit = max_results if max_results is not None else config.get_max_results()

            outcome = await self.container.search.execute(spec, max_results=limit)

            # Format matches for output
            formatted_matches = []
            for record in outcome.records:
                spans = compute_spans(record.content, pattern, case_sensitive, use_regex)
                formatted_matches.append({
                    "file": record.file,
                    "line_number": record.line_number if isinstance(record, MatchLine) else None,
                    "line": record.content,
                    "spans": [[span.start, span.length] for span in spans]
                })

            return {
                "success": True,
                "pattern": pattern,
                "directory": str(spec.root_directory),
                "options": {
                    "case_sensitive": case_sensitive,
                    "include_hidden": include_hidden,
                    "use_regex": use_regex,
                },
                "matches": formatted_matches,
                "match_count": outcome.match_count,
                "files": outcome.files,
                "truncated": outcome.truncated,
                "state": outcome.state.value,
                "exit_code": outcome.exit_code,
                "notices": [
                    {"kind": notice.kind.value, "message": notice.message}
                    for notice in outcome.notices
                ],
            }

        except Exception as e:
            return {
                "success": False,
                "error": f"Failed to search: {str(e)}"
            }

    async def highlight_matches(
        self,
        content: str,
        pattern: str,
        case_sensitive: bool = False,
        use_regex: bool = True
    ) -> dict[str, Any]:
        """Compute highlight spans for a line of text"""
        try:
            spans = compute_spans(content, pattern, case_sensitive, use_regex)
            return {
                "success": True,
                "content": content,
                "pattern": pattern,
                "spans": [[span.start, span.length] for span in spans],
            }

        except Exception as e:
            return {
                "success": False,
                "error": f"Failed to highlight: {str(e)}"
            }
