"""Loading and strict validation for taxonomy catalogues.

The bundled Thai sector taxonomy is parsed once per process and shared as an
immutable registry. A custom catalogue with the same schema can be loaded from
disk instead (see ``ScrutinyConfig.taxonomy_path``).
"""

from __future__ import annotations

from functools import cache
from importlib import resources
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from ..config import ScrutinyConfig
from ..domain.taxonomy import (
    MAX_CREDIT_SCORE,
    MAX_PRIORITY_POINTS,
    MIN_CREDIT_SCORE,
    MIN_PRIORITY_POINTS,
    SubIndustryOption,
    TaxonomyEntry,
    TaxonomyRegistry,
)
from ..exceptions import TaxonomyFileNotFoundError, TaxonomyValidationError
from ..observability.logging import get_logger
from ..protocols import FileSystem

_SCHEMA_VERSION = 1
_BUNDLED_PACKAGE = "credit_scrutiny.data"
_BUNDLED_RESOURCE = "thai_taxonomy.json"
_BUNDLED_SOURCE = f"<bundled:{_BUNDLED_RESOURCE}>"

logger = get_logger("credit_scrutiny.taxonomy_catalog")


class _TaxonomyEntryModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True, strict=True)

    sector: str
    industry: str
    sub_industry: str
    score: int
    points: int

    @field_validator("sector", "industry", "sub_industry")
    @classmethod
    def _validate_non_empty(cls, value: str) -> str:
        text = value.strip()
        if not text:
            raise ValueError
        return text

    @field_validator("score")
    @classmethod
    def _validate_score(cls, value: int) -> int:
        if value < MIN_CREDIT_SCORE or value > MAX_CREDIT_SCORE:
            raise ValueError
        return value

    @field_validator("points")
    @classmethod
    def _validate_points(cls, value: int) -> int:
        if value < MIN_PRIORITY_POINTS or value > MAX_PRIORITY_POINTS:
            raise ValueError
        return value


class _TaxonomyCatalogModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    schema_version: int
    name: str
    entries: tuple[_TaxonomyEntryModel, ...]

    @field_validator("schema_version")
    @classmethod
    def _validate_schema_version(cls, value: int) -> int:
        if value != _SCHEMA_VERSION:
            raise ValueError
        return value

    @field_validator("entries")
    @classmethod
    def _validate_entries(
        cls, value: tuple[_TaxonomyEntryModel, ...]
    ) -> tuple[_TaxonomyEntryModel, ...]:
        if not value:
            raise ValueError
        return value


def _format_validation_error(exc: ValidationError) -> str:
    first = exc.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ("<root>",)))
    message = str(first.get("msg", "invalid value"))
    return f"{location}: {message}"


def parse_taxonomy_catalog(payload: str, *, source: str) -> TaxonomyRegistry:
    """Validate a JSON catalogue and build its registry.

    Raises:
        TaxonomyValidationError: On schema, range, or cross-entry consistency failures.
    """
    try:
        model = _TaxonomyCatalogModel.model_validate_json(payload)
    except ValidationError as exc:
        raise TaxonomyValidationError(source, _format_validation_error(exc)) from exc

    entries = tuple(
        TaxonomyEntry(
            sector=entry.sector,
            industry=entry.industry,
            sub_industry=entry.sub_industry,
            score=entry.score,
            points=entry.points,
        )
        for entry in model.entries
    )
    try:
        registry = TaxonomyRegistry(entries)
    except TaxonomyValidationError as exc:
        raise TaxonomyValidationError(source, exc.detail) from exc

    logger.info(
        "Loaded taxonomy '%s' from %s: %d entries across %d sectors",
        model.name,
        source,
        len(registry),
        len(registry.get_sectors()),
    )
    return registry


def load_taxonomy_catalog(*, path: Path, fs: FileSystem) -> TaxonomyRegistry:
    """Load and validate a taxonomy catalogue from a JSON file."""
    if not fs.exists(path):
        raise TaxonomyFileNotFoundError(str(path))
    return parse_taxonomy_catalog(fs.read_text(path), source=str(path))


def load_bundled_taxonomy() -> TaxonomyRegistry:
    """Parse the taxonomy shipped with the package."""
    payload = resources.files(_BUNDLED_PACKAGE).joinpath(_BUNDLED_RESOURCE).read_text("utf-8")
    return parse_taxonomy_catalog(payload, source=_BUNDLED_SOURCE)


@cache
def default_registry() -> TaxonomyRegistry:
    """Process-wide taxonomy, loaded on first use and never mutated."""
    return load_bundled_taxonomy()


def registry_for_config(*, config: ScrutinyConfig, fs: FileSystem) -> TaxonomyRegistry:
    """Return the configured catalogue, or the bundled default when no path is set."""
    if not config.taxonomy_path:
        return default_registry()
    return load_taxonomy_catalog(path=Path(config.taxonomy_path), fs=fs)


def get_sectors() -> list[str]:
    return default_registry().get_sectors()


def get_industries(sector: str | None) -> list[str]:
    return default_registry().get_industries(sector)


def get_sub_industries(industry: str | None) -> list[SubIndustryOption]:
    return default_registry().get_sub_industries(industry)


def get_taxonomy_info(sub_industry: str | None) -> TaxonomyEntry | None:
    return default_registry().get_taxonomy_info(sub_industry)


def find_taxonomy(
    sector: str | None = None,
    industry: str | None = None,
    sub_industry: str | None = None,
) -> TaxonomyEntry | None:
    return default_registry().find_taxonomy(sector, industry, sub_industry)
