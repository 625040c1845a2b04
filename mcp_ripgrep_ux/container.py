"""
Dependency Injection Container

Wires together the hexagonal architecture by creating and injecting dependencies.
"""
from pathlib import Path
from typing import Optional

from . import config
from .adapters import AsyncProcessRunner, RipgrepLocator
from .core import SearchService, SearchSession

HEADING_ARGS = ("--heading",)


class Container:
    """Dependency injection container for the application"""

    def __init__(
        self,
        rg_path: Optional[str] = None,
        bundle_dir: str | Path | None = None,
        grace_period: Optional[float] = None,
        heading: Optional[bool] = None
    ):
        # Adapters (infrastructure)
        self.locator = RipgrepLocator(
            explicit_path=rg_path or config.get_rg_path(),
            bundle_dir=bundle_dir or config.get_bundle_dir()
        )
        self.grace_period = grace_period if grace_period is not None else config.get_grace_period()
        use_heading = heading if heading is not None else config.get_heading()
        self.extra_args = HEADING_ARGS if use_heading else ()

        # Services (use cases)
        self.search = SearchService(session_factory=self.create_session)

    def create_session(self) -> SearchSession:
        """New session with its own process runner"""
        return SearchSession(
            runner=AsyncProcessRunner(grace_period=self.grace_period),
            locator=self.locator,
            extra_args=self.extra_args
        )
