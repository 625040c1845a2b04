"""
Unit tests for mcp_ripgrep_ux.server

Tests the MCP server layer (tool wrappers, not full MCP protocol).
"""
import asyncio
from unittest.mock import AsyncMock, patch

import pytest
from starlette.testclient import TestClient

from mcp_ripgrep_ux import server_http
from mcp_ripgrep_ux.server import highlight_matches, search_directory


class TestSearchDirectoryTool:
    """Test search_directory MCP tool."""

    @patch('mcp_ripgrep_ux.server.handlers')
    def test_success(self, mock_handlers):
        """Test successful search passes through the handler result."""
        mock_handlers.search_directory = AsyncMock(return_value={
            "success": True,
            "match_count": 1,
            "matches": [{"file": "a.py", "line_number": 1, "line": "foo", "spans": [[0, 3]]}]
        })

        result = asyncio.run(search_directory("foo", "/srv/app"))

        assert result["success"] is True
        assert result["match_count"] == 1
        mock_handlers.search_directory.assert_called_once()

    @patch('mcp_ripgrep_ux.server.handlers')
    def test_options_forwarded(self, mock_handlers):
        """Test search options reach the handler."""
        mock_handlers.search_directory = AsyncMock(return_value={"success": True})

        asyncio.run(search_directory(
            "a.b", "/srv/app", case_sensitive=True, include_hidden=True, use_regex=False, max_results=5
        ))

        call_args = mock_handlers.search_directory.call_args
        assert call_args.kwargs["case_sensitive"] is True
        assert call_args.kwargs["include_hidden"] is True
        assert call_args.kwargs["use_regex"] is False
        assert call_args.kwargs["max_results"] == 5

    @patch('mcp_ripgrep_ux.server.handlers')
    def test_error_result(self, mock_handlers):
        """Test handler errors come back as failed results."""
        mock_handlers.search_directory = AsyncMock(return_value={
            "success": False,
            "error": "Failed to search: Search pattern must not be empty"
        })

        result = asyncio.run(search_directory("", "/srv/app"))

        assert result["success"] is False
        assert "empty" in result["error"]


class TestHighlightMatchesTool:
    """Test highlight_matches MCP tool."""

    def test_real_handler(self):
        """Test spans from the real handler."""
        result = asyncio.run(highlight_matches("FooBar Foo", "foo"))

        assert result["success"] is True
        assert result["spans"] == [[0, 3], [7, 3]]

    def test_invalid_regex(self):
        """Test an invalid regex is highlighted literally."""
        result = asyncio.run(highlight_matches("f(x) and f(", "f(", use_regex=True))

        assert result["spans"] == [[0, 2], [9, 2]]


class TestHTTPServer:
    """Test HTTP/SSE server dispatch and routes."""

    def test_unknown_tool(self):
        """Test unknown tool names raise ValueError."""
        with pytest.raises(ValueError, match="Unknown tool"):
            asyncio.run(server_http._dispatch_tool("grep", {}))

    @patch('mcp_ripgrep_ux.server_http.handlers')
    def test_call_tool_formats_text(self, mock_handlers):
        """Test call_tool returns formatted text content."""
        mock_handlers.search_directory = AsyncMock(return_value={
            "success": True,
            "pattern": "foo",
            "directory": "/srv/app",
            "options": {"case_sensitive": False, "include_hidden": False, "use_regex": True},
            "matches": [{"file": "a.py", "line_number": 2, "line": "x = foo", "spans": [[4, 3]]}],
            "match_count": 1,
            "files": ["a.py"],
            "truncated": False,
            "state": "completed",
            "exit_code": 0,
            "notices": [],
        })

        content = asyncio.run(server_http.call_tool("search_directory", {"pattern": "foo"}))

        assert len(content) == 1
        assert "a.py:2:x = **foo**" in content[0].text
        assert "COMPLETED (exit code 0)" in content[0].text
        assert mock_handlers.search_directory.call_args.kwargs["directory"] is None

    def test_list_tools(self):
        """Test tools are listed from the shared schemas."""
        tools = asyncio.run(server_http.list_tools())
        assert sorted(tool.name for tool in tools) == ["highlight_matches", "search_directory"]

    def test_ping(self):
        """Test health check endpoint."""
        client = TestClient(server_http.app)
        response = client.get("/ping")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "ok"
        assert body["rg"]
