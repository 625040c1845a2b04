"""
Core errors

Only the failures that reach a caller synchronously are exceptions.
Process-level failures travel as session events instead.
"""


class InvalidSpecError(ValueError):
    """Empty pattern or missing search directory; raised before any process starts"""


class LaunchError(RuntimeError):
    """The search executable could not be found or spawned"""

    def __init__(self, executable: str, reason: str):
        self.executable = executable
        self.reason = reason
        super().__init__(f"Failed to start {executable}: {reason}")
