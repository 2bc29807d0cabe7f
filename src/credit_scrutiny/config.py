"""Centralised, injectable configuration for the credit scrutiny engine."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Self

from dotenv import load_dotenv

from .config_file import KNOWN_ROLES, LOG_LEVELS, ScrutinyConfigFile


class RoleEnvVarError(ValueError):
    """Raised when an environment variable must name a known viewer role."""

    def __init__(self, env_name: str) -> None:
        super().__init__(f"{env_name} must be one of: {', '.join(sorted(KNOWN_ROLES))}.")


class LogLevelEnvVarError(ValueError):
    """Raised when an environment variable must name a logging level."""

    def __init__(self, env_name: str) -> None:
        super().__init__(f"{env_name} must be one of: {', '.join(sorted(LOG_LEVELS))}.")


@dataclass(frozen=True)
class ScrutinyConfig:
    """Immutable configuration for taxonomy loading and evaluation.

    Load from environment with `ScrutinyConfig.from_env()` or construct directly for testing.
    """

    # Reference data; empty means the bundled Thai taxonomy
    taxonomy_path: str = ""

    # Role the CLI evaluates as
    viewer_role: str = "internal"

    log_level: str = "INFO"

    @classmethod
    def from_env(cls, dotenv_path: str | None = None) -> Self:
        """Load configuration from environment variables.

        Args:
            dotenv_path: Optional path to .env file. If None, uses default .env discovery.

        Returns:
            ScrutinyConfig instance populated from environment.
        """
        load_dotenv(dotenv_path)

        return cls(
            taxonomy_path=os.getenv("SCRUTINY_TAXONOMY_PATH", "").strip(),
            viewer_role=_parse_role(
                os.getenv("SCRUTINY_VIEWER_ROLE", "internal"),
                env_name="SCRUTINY_VIEWER_ROLE",
            ),
            log_level=_parse_log_level(
                os.getenv("SCRUTINY_LOG_LEVEL", "INFO"),
                env_name="SCRUTINY_LOG_LEVEL",
            ),
        )

    def with_overrides(
        self,
        *,
        taxonomy_path: str | None = None,
        viewer_role: str | None = None,
        log_level: str | None = None,
    ) -> Self:
        """Return a new config with specified overrides (for CLI options)."""
        return replace(
            self,
            taxonomy_path=self.taxonomy_path if taxonomy_path is None else taxonomy_path.strip(),
            viewer_role=self.viewer_role
            if viewer_role is None
            else viewer_role.strip().lower(),
            log_level=self.log_level if log_level is None else log_level.strip().upper(),
        )

    def with_file_overrides(self, file_config: ScrutinyConfigFile) -> Self:
        """Return a new config with config-file values overriding env/default values."""
        return replace(
            self,
            taxonomy_path=self.taxonomy_path
            if file_config.taxonomy_path is None
            else file_config.taxonomy_path,
            viewer_role=self.viewer_role
            if file_config.viewer_role is None
            else file_config.viewer_role,
            log_level=self.log_level if file_config.log_level is None else file_config.log_level,
        )


def _parse_role(value: str, *, env_name: str) -> str:
    """Parse a viewer role, defaulting blanks to internal."""
    text = value.strip().lower()
    if not text:
        return "internal"
    if text not in KNOWN_ROLES:
        raise RoleEnvVarError(env_name)
    return text


def _parse_log_level(value: str, *, env_name: str) -> str:
    """Parse a logging level name, defaulting blanks to INFO."""
    text = value.strip().upper()
    if not text:
        return "INFO"
    if text not in LOG_LEVELS:
        raise LogLevelEnvVarError(env_name)
    return text
