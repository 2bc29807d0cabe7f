"""Composition root for wiring CLI dependencies."""

from __future__ import annotations

from .cli import CliDependencies, create_app
from .config import ScrutinyConfig
from .infrastructure import LocalFileSystem


def build_cli_dependencies(*, config: ScrutinyConfig) -> CliDependencies:
    """Build concrete dependencies for CLI commands.

    Args:
        config: Scrutiny configuration from the environment.
    """
    _ = config
    return CliDependencies(fs=LocalFileSystem())


app = create_app(build_cli_dependencies)
