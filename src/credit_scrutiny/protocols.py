"""Protocol definitions for dependency injection.

These protocols define the abstract interfaces that scrutiny components depend on,
enabling isolated unit testing with in-memory implementations.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class FileSystem(Protocol):
    """Abstract filesystem for reading reference data and config files."""

    def read_text(self, path: Path) -> str:
        """Read UTF-8 text from a file."""
        ...

    def exists(self, path: Path) -> bool:
        """Return True if the path exists."""
        ...
