"""
Adapters - External implementations of ports

This package contains implementations of the core ports:
- process.py: asyncio subprocess runner
- locator.py: ripgrep executable resolution
"""
from .process import AsyncProcessRunner
from .locator import RipgrepLocator

__all__ = [
    "AsyncProcessRunner",
    "RipgrepLocator",
]
