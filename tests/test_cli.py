"""
Tests for the CLI commands
"""
import asyncio
import io
import sys

from mcp_ripgrep_ux import cli
from mcp_ripgrep_ux.container import Container

from .conftest import posix_only


def run_search(container, directory, **kwargs):
    options = {
        "pattern": "os",
        "case_sensitive": False,
        "include_hidden": False,
        "use_regex": True,
        "max_results": None,
        "color": False,
    }
    options.update(kwargs)
    return asyncio.run(cli.search_command(container=container, directory=directory, **options))


class TestUseColor:
    """Test --color resolution."""

    def test_explicit(self):
        """Test always and never ignore the stream."""
        assert cli.use_color("always", io.StringIO()) is True
        assert cli.use_color("never", io.StringIO()) is False

    def test_auto_without_tty(self):
        """Test auto is off for non-terminals."""
        assert cli.use_color("auto", io.StringIO()) is False


@posix_only
class TestSearchCommand:
    """Test streaming search output."""

    def test_streams_matches(self, canned_tool, tmp_path, capsys):
        """Test matches print to stdout with highlight markers."""
        code = run_search(Container(rg_path=canned_tool, heading=False), str(tmp_path))

        captured = capsys.readouterr()
        assert code == cli.EXIT_OK
        assert captured.out.splitlines() == [
            "src/a.py:12:import **os**",
            "src/a.py:40:home = **os**.getenv('HOME')",
            "README.md:3:see the **os** module docs",
        ]
        assert "Searching..." in captured.err
        assert "Search complete (3 matches)" in captured.err

    def test_max_stops_search(self, canned_tool, tmp_path, capsys):
        """Test --max cancels the search once reached and still exits 0."""
        code = run_search(Container(rg_path=canned_tool, heading=False), str(tmp_path), max_results=1)

        captured = capsys.readouterr()
        assert code == cli.EXIT_OK
        assert captured.out.splitlines() == ["src/a.py:12:import **os**"]
        assert "stopped at --max 1" in captured.err

    def test_invalid_directory(self, tmp_path, capsys):
        """Test a missing directory is reported before anything runs."""
        code = run_search(Container(rg_path="rg"), str(tmp_path / "missing"))

        assert code == cli.EXIT_ERROR
        assert "does not exist" in capsys.readouterr().err

    def test_missing_executable(self, tmp_path, capsys):
        """Test a launch failure is reported as a search error."""
        code = run_search(Container(rg_path=str(tmp_path / "no-rg")), str(tmp_path))

        captured = capsys.readouterr()
        assert code == cli.EXIT_ERROR
        assert "Failed to start" in captured.err
        assert "Search error" in captured.err

    def test_stderr_notice(self, fake_tool, tmp_path, capsys):
        """Test tool stderr is printed as an error line."""
        tool = fake_tool("""
            import sys
            sys.stderr.write("rg: ./locked: Permission denied\\n")
            sys.exit(2)
        """)

        code = run_search(Container(rg_path=tool), str(tmp_path))

        captured = capsys.readouterr()
        assert code == cli.EXIT_OK
        assert "Error: rg: ./locked: Permission denied" in captured.err
        assert "Search complete (0 matches)" in captured.err


class TestHighlightCommand:
    """Test highlight output."""

    def test_highlight(self, capsys):
        """Test rendered line and one line per span."""
        code = asyncio.run(cli.highlight_command("foo", "FooBar Foo", False, False, False))

        lines = capsys.readouterr().out.splitlines()
        assert code == cli.EXIT_OK
        assert lines[0] == "**Foo**Bar **Foo**"
        assert len(lines) == 3
        assert lines[1].split() == ["0+3", "Foo"]


class TestMain:
    """Test argument parsing."""

    def test_list_tools(self, monkeypatch, capsys):
        """Test list-tools prints every tool."""
        monkeypatch.setattr(sys, "argv", ["mcp-ripgrep-ux-cli", "list-tools"])

        assert cli.main() == cli.EXIT_OK
        out = capsys.readouterr().out
        assert "Tool: search_directory" in out
        assert "Tool: highlight_matches" in out

    def test_no_command(self, monkeypatch, capsys):
        """Test missing command prints help."""
        monkeypatch.setattr(sys, "argv", ["mcp-ripgrep-ux-cli"])

        assert cli.main() == cli.EXIT_ERROR
        assert "usage" in capsys.readouterr().out

    def test_highlight_fixed_strings(self, monkeypatch, capsys):
        """Test -F makes the pattern literal."""
        monkeypatch.setattr(sys, "argv", ["mcp-ripgrep-ux-cli", "highlight", "a.b", "axb a.b", "-F", "--color", "never"])

        assert cli.main() == cli.EXIT_OK
        assert capsys.readouterr().out.splitlines()[0] == "axb **a.b**"

    def test_bad_grace_period(self, monkeypatch, capsys, tmp_path):
        """Test invalid configuration is reported, not raised."""
        monkeypatch.setenv("RG_GRACE_PERIOD", "soon")
        monkeypatch.setattr(sys, "argv", ["mcp-ripgrep-ux-cli", "search", "x", str(tmp_path)])

        assert cli.main() == cli.EXIT_ERROR
        assert "RG_GRACE_PERIOD" in capsys.readouterr().err
