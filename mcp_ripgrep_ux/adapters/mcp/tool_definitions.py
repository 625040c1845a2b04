"""
MCP Tool Definitions

Single source of truth for tool schemas and descriptions.
Used by both stdio and HTTP/SSE servers.
"""

# Tool schemas for MCP
TOOL_SCHEMAS = {
    "search_directory": {
        "name": "search_directory",
        "description": """Search a directory tree with ripgrep. Returns file:line matches with highlight spans.

search_directory("timeout", "/srv/app") → case-insensitive regex search
search_directory("a.b", "/srv/app", use_regex=False) → fixed-string search
search_directory("TODO|FIXME", "/srv/app", case_sensitive=True) → OR pattern
""",
        "inputSchema": {
            "type": "object",
            "properties": {
                "pattern": {
                    "type": "string",
                    "description": "Search pattern (regex unless use_regex is false)"
                },
                "directory": {
                    "type": "string",
                    "description": "Directory to search. Defaults to $SEARCH_ROOT or the server's working directory."
                },
                "case_sensitive": {
                    "type": "boolean",
                    "description": "Case-sensitive search (default: case-insensitive)",
                    "default": False
                },
                "include_hidden": {
                    "type": "boolean",
                    "description": "Also search hidden files and directories",
                    "default": False
                },
                "use_regex": {
                    "type": "boolean",
                    "description": "Treat pattern as a regex; false for a fixed string",
                    "default": True
                },
                "max_results": {
                    "type": "integer",
                    "description": "Stop the search after this many matching lines",
                    "default": 200
                }
            },
            "required": ["pattern"]
        }
    },
    "highlight_matches": {
        "name": "highlight_matches",
        "description": """Compute highlight spans of a pattern in a line of text. Invalid regexes match literally.

highlight_matches("FooBar Foo", "foo") → spans [[0, 3], [7, 3]]
""",
        "inputSchema": {
            "type": "object",
            "properties": {
                "content": {
                    "type": "string",
                    "description": "Text to highlight"
                },
                "pattern": {
                    "type": "string",
                    "description": "Search pattern"
                },
                "case_sensitive": {
                    "type": "boolean",
                    "description": "Case-sensitive matching",
                    "default": False
                },
                "use_regex": {
                    "type": "boolean",
                    "description": "Treat pattern as a regex",
                    "default": True
                }
            },
            "required": ["content", "pattern"]
        }
    }
}
