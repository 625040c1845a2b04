#!/usr/bin/env python3
"""
Dev mode runner for mcp-ripgrep-ux

Runs the HTTP/SSE server and restarts it whenever a Python file under
mcp_ripgrep_ux/ is created, modified or moved. Server output is relayed
to this terminal.
"""
import subprocess
import sys
import time
from pathlib import Path

from watchdog.events import FileSystemEvent, PatternMatchingEventHandler
from watchdog.observers import Observer

PACKAGE_DIR = Path(__file__).parent / "mcp_ripgrep_ux"

SERVER_COMMAND = [sys.executable, "-m", "mcp_ripgrep_ux.server_http"]

DEBOUNCE = 0.1


class ServerRestartHandler(PatternMatchingEventHandler):
    """Owns the server process; restarts it on source changes."""

    def __init__(self, command: list[str] = SERVER_COMMAND, grace_period: float = 3.0):
        super().__init__(patterns=["*.py"], ignore_directories=True)
        self.command = command
        self.grace_period = grace_period
        self.process = None
        self.restarts = 0
        self.start_server()

    def start_server(self):
        if self.process:
            self.stop()
            self.restarts += 1

        self.process = subprocess.Popen(
            self.command,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            bufsize=1
        )
        print(f"[dev] server running, PID {self.process.pid} (restarts: {self.restarts})")

    def restart(self, event: FileSystemEvent):
        print(f"\n[dev] {event.src_path} changed, restarting")
        time.sleep(DEBOUNCE)
        self.start_server()

    on_modified = restart
    on_created = restart
    on_moved = restart

    def stop(self):
        """Terminate the server, killing it after the grace period."""
        if self.process is None or self.process.poll() is not None:
            return
        self.process.terminate()
        try:
            self.process.wait(timeout=self.grace_period)
        except subprocess.TimeoutExpired:
            print(f"[dev] server ignored SIGTERM for {self.grace_period}s, killing")
            self.process.kill()
            self.process.wait()

    def relay_output(self):
        """Copy one line of server output, if any, to stdout."""
        if self.process and self.process.stdout:
            line = self.process.stdout.readline()
            if line:
                print(line, end='')


def main():
    """Run dev server with auto-restart."""
    print(f"mcp-ripgrep-ux dev mode, watching {PACKAGE_DIR}")
    print("Ctrl+C to stop\n")

    handler = ServerRestartHandler()
    observer = Observer()
    observer.schedule(handler, str(PACKAGE_DIR), recursive=True)
    observer.start()

    try:
        while True:
            handler.relay_output()
            time.sleep(DEBOUNCE)
    except KeyboardInterrupt:
        print("\n[dev] stopping")
    finally:
        observer.stop()
        handler.stop()
        observer.join()


if __name__ == "__main__":
    main()
