"""
Tests for the dev mode auto-restart runner
"""
import subprocess
from unittest.mock import patch

from watchdog.events import DirModifiedEvent, FileCreatedEvent, FileModifiedEvent

import dev


def make_handler(grace_period=3.0):
    with patch("dev.subprocess.Popen") as popen:
        popen.return_value.poll.return_value = None
        handler = dev.ServerRestartHandler(command=["server"], grace_period=grace_period)
    return handler, popen


class TestServerRestartHandler:
    """Test server restarts on file changes."""

    def test_starts_server(self):
        """Test the server starts with the configured command."""
        handler, popen = make_handler()

        assert popen.call_args.args[0] == ["server"]
        assert handler.process is popen.return_value
        assert handler.restarts == 0

    @patch("dev.time.sleep")
    def test_restart_on_python_change(self, _sleep):
        """Test .py changes stop the old process and start a new one."""
        handler, _ = make_handler()
        old = handler.process

        with patch("dev.subprocess.Popen") as popen:
            handler.dispatch(FileModifiedEvent("mcp_ripgrep_ux/cli.py"))

        old.terminate.assert_called_once()
        assert handler.process is popen.return_value
        assert handler.restarts == 1

    @patch("dev.time.sleep")
    def test_restart_on_new_module(self, _sleep):
        """Test a new .py file also restarts."""
        handler, _ = make_handler()

        with patch("dev.subprocess.Popen"):
            handler.dispatch(FileCreatedEvent("mcp_ripgrep_ux/core/new.py"))

        assert handler.restarts == 1

    @patch("dev.time.sleep")
    def test_ignores_other_files(self, _sleep):
        """Test non-Python files and directories are ignored."""
        handler, _ = make_handler()
        old = handler.process

        with patch("dev.subprocess.Popen") as popen:
            handler.dispatch(FileModifiedEvent("README.md"))
            handler.dispatch(DirModifiedEvent("mcp_ripgrep_ux"))

        popen.assert_not_called()
        assert handler.process is old

    def test_kill_after_timeout(self):
        """Test a server ignoring terminate is killed."""
        handler, _ = make_handler(grace_period=1.0)
        handler.process.wait.side_effect = [subprocess.TimeoutExpired("server", 1.0), 0]

        handler.stop()

        handler.process.terminate.assert_called_once()
        handler.process.kill.assert_called_once()

    def test_stop_exited_server(self):
        """Test stopping a server that already exited does nothing."""
        handler, _ = make_handler()
        handler.process.poll.return_value = 0

        handler.stop()

        handler.process.terminate.assert_not_called()
