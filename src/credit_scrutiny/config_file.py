"""Typed parsing and validation for scrutiny config files."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from .exceptions import ConfigFileNotFoundError, ConfigFileParseError, ConfigFileValidationError
from .protocols import FileSystem

_SCHEMA_VERSION = 1
KNOWN_ROLES = frozenset({"internal", "admin", "super_admin", "external"})
LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


@dataclass(frozen=True)
class ScrutinyConfigFile:
    """Validated scrutiny config values loaded from a TOML file."""

    taxonomy_path: str | None = None
    viewer_role: str | None = None
    log_level: str | None = None


class _ScrutinySectionModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    taxonomy_path: str | None = None
    viewer_role: str | None = None
    log_level: str | None = None

    @field_validator("taxonomy_path")
    @classmethod
    def _validate_non_empty_text(cls, value: str | None) -> str | None:
        if value is None:
            return None
        text = value.strip()
        if not text:
            raise ValueError
        return text

    @field_validator("viewer_role")
    @classmethod
    def _validate_role(cls, value: str | None) -> str | None:
        if value is None:
            return None
        role = value.strip().lower()
        if role not in KNOWN_ROLES:
            raise ValueError
        return role

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str | None) -> str | None:
        if value is None:
            return None
        level = value.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError
        return level


class _ConfigFileModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    schema_version: int
    scrutiny: _ScrutinySectionModel

    @field_validator("schema_version")
    @classmethod
    def _validate_schema_version(cls, value: int) -> int:
        if value != _SCHEMA_VERSION:
            raise ValueError
        return value


def _format_validation_error(exc: ValidationError) -> str:
    first = exc.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ("<root>",)))
    message = str(first.get("msg", "invalid value"))
    return f"{location}: {message}"


def load_scrutiny_config_file(*, path: Path, fs: FileSystem) -> ScrutinyConfigFile:
    """Load and validate a scrutiny TOML config file."""
    if not fs.exists(path):
        raise ConfigFileNotFoundError(str(path))

    raw_payload = fs.read_text(path)
    try:
        payload: object = tomllib.loads(raw_payload)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigFileParseError(str(path), str(exc)) from exc

    try:
        model = _ConfigFileModel.model_validate(payload)
    except ValidationError as exc:
        raise ConfigFileValidationError(str(path), _format_validation_error(exc)) from exc

    section = model.scrutiny
    return ScrutinyConfigFile(
        taxonomy_path=section.taxonomy_path,
        viewer_role=section.viewer_role,
        log_level=section.log_level,
    )
