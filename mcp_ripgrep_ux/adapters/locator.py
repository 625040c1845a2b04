"""
Executable Locator Adapter

Implements ExecutableLocator port for ripgrep: explicit path, then a
binary bundled next to the application, then the system PATH.
"""
import logging
import os
import shutil
import sys
from pathlib import Path
from typing import Optional

from ..core.ports import ExecutableLocator

logger = logging.getLogger(__name__)

RG_NAME = "rg"


class RipgrepLocator(ExecutableLocator):
    """Resolves the rg executable"""

    def __init__(self, explicit_path: Optional[str] = None, bundle_dir: str | Path | None = None):
        self.explicit_path = explicit_path
        self.bundle_dir = Path(bundle_dir) if bundle_dir else None

    def locate(self) -> str:
        if self.explicit_path:
            return self.explicit_path

        bundle_dir = self.bundle_dir or Path.cwd()
        for name in self._bundled_names():
            candidate = bundle_dir / name
            if candidate.is_file() and os.access(candidate, os.X_OK):
                logger.debug(f"Using bundled ripgrep: {candidate}")
                return str(candidate)

        found = shutil.which(RG_NAME)
        if found:
            return found

        # Let the launch fail with a LaunchError naming "rg"
        return RG_NAME

    def _bundled_names(self) -> list[str]:
        if sys.platform == "win32":
            return [f"{RG_NAME}.exe"]
        return [RG_NAME, f"{RG_NAME}.exe"]
