"""
Shared fixtures

Process tests run a fake search tool: an executable Python script that
prints canned ripgrep-style output, so rg itself is not required.
"""
import stat
import sys
import textwrap

import pytest

from mcp_ripgrep_ux.adapters import AsyncProcessRunner, RipgrepLocator
from mcp_ripgrep_ux.core import SearchSession

posix_only = pytest.mark.skipif(sys.platform == "win32", reason="fake tool relies on a shebang script")

RG_OUTPUT = (
    "src/a.py\n"
    "12:import os\n"
    "40:home = os.getenv('HOME')\n"
    "\n"
    "README.md\n"
    "3:see the os module docs\n"
)


@pytest.fixture
def fake_tool(tmp_path):
    """Factory: write a Python script body as an executable fake search tool"""
    counter = {"n": 0}

    def make(body: str) -> str:
        counter["n"] += 1
        script = tmp_path / f"fake_rg_{counter['n']}"
        script.write_text(f"#!{sys.executable}\n" + textwrap.dedent(body))
        script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return str(script)

    return make


@pytest.fixture
def canned_tool(fake_tool):
    """Fake tool printing RG_OUTPUT and exiting 0"""
    return fake_tool(f"""
        import sys
        sys.stdout.write({RG_OUTPUT!r})
        sys.stdout.flush()
    """)


@pytest.fixture
def slow_tool(fake_tool):
    """Fake tool printing one hit, then hanging until terminated"""
    return fake_tool("""
        import sys, time
        sys.stdout.write("slow.txt\\n1:first hit\\n")
        sys.stdout.flush()
        time.sleep(30)
    """)


def make_session(executable: str, grace_period: float = 1.0) -> SearchSession:
    return SearchSession(
        runner=AsyncProcessRunner(grace_period=grace_period),
        locator=RipgrepLocator(explicit_path=executable)
    )
