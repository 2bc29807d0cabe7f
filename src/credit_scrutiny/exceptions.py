"""Custom exceptions for the credit scrutiny engine.

These exceptions provide clear error handling and enable testing of error paths.
"""

from __future__ import annotations


class ScrutinyError(Exception):
    """Base exception for all credit scrutiny errors."""

    pass


class InvalidSelectionError(ScrutinyError, ValueError):
    """Raised when a cascading classification choice does not belong to its parent.

    Reaching this through normal use indicates stale UI state, not bad user input.
    """

    def __init__(self, level: str, value: str, parent: str | None) -> None:
        self.level = level
        self.value = value
        self.parent = parent
        owner = f"'{parent}'" if parent else "an empty parent selection"
        super().__init__(f"Invalid {level} '{value}': not listed under {owner}.")


class TaxonomyError(ScrutinyError):
    """Base exception for taxonomy reference-data defects."""

    pass


class TaxonomyFileNotFoundError(TaxonomyError):
    """Raised when a taxonomy catalogue path does not exist."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Taxonomy catalogue not found: {path}")


class TaxonomyValidationError(TaxonomyError):
    """Raised when taxonomy reference data fails validation."""

    def __init__(self, source: str, detail: str) -> None:
        self.source = source
        self.detail = detail
        super().__init__(f"Invalid taxonomy catalogue {source}: {detail}")


class EmptyTaxonomyError(TaxonomyError):
    """Raised when a taxonomy registry would be built with no entries.

    This is a build or deployment defect; there is no fallback.
    """

    def __init__(self) -> None:
        super().__init__("Taxonomy registry is empty; refusing to start without reference data.")


class ScrutinyAccessDeniedError(ScrutinyError, PermissionError):
    """Raised when a non-internal viewer requests an underwriting result."""

    def __init__(self, role: str) -> None:
        self.role = role
        shown = role.strip() or "<blank>"
        super().__init__(f"Access denied: credit scrutiny is internal only (role: {shown}).")


class ConfigFileNotFoundError(ScrutinyError):
    """Raised when the config file path does not exist."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Config file not found: {path}")


class ConfigFileParseError(ScrutinyError):
    """Raised when the config file is not valid TOML."""

    def __init__(self, path: str, detail: str) -> None:
        super().__init__(f"Config file {path} could not be parsed: {detail}")


class ConfigFileValidationError(ScrutinyError):
    """Raised when the config file fails schema validation."""

    def __init__(self, path: str, detail: str) -> None:
        super().__init__(f"Config file {path} is invalid: {detail}")
