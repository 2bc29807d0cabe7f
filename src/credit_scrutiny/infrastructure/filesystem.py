"""Filesystem implementations for infrastructure.

Usage example:
    from pathlib import Path

    from credit_scrutiny.infrastructure.filesystem import LocalFileSystem

    fs = LocalFileSystem()
    payload = fs.read_text(Path("data/reference/thai_taxonomy.json"))
"""

from __future__ import annotations

from pathlib import Path
from typing_extensions import override

from ..protocols import FileSystem


class LocalFileSystem(FileSystem):
    """Local filesystem implementation."""

    @override
    def read_text(self, path: Path) -> str:
        return path.read_text(encoding="utf-8")

    @override
    def exists(self, path: Path) -> bool:
        return path.exists()
