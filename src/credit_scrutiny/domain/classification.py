"""Cascading sector → industry → sub-industry selection.

Every transition returns a new selection; choosing a parent clears its children.

Usage example:
    from credit_scrutiny.application.taxonomy_catalog import default_registry
    from credit_scrutiny.domain.classification import (
        ClassificationSelection,
        select_industry,
        select_sector,
    )

    registry = default_registry()
    selection = select_sector(ClassificationSelection(), "Energy & Utilities")
    selection = select_industry(selection, "Power generation", registry=registry)
    assert selection.sub_industry is None
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from ..exceptions import InvalidSelectionError
from .taxonomy import TaxonomyRegistry


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    text = value.strip()
    return text or None


@dataclass(frozen=True)
class ClassificationSelection:
    """A possibly partial classification held by the caller."""

    sector: str | None = None
    industry: str | None = None
    sub_industry: str | None = None

    @classmethod
    def from_record(
        cls,
        sector: str | None = None,
        industry: str | None = None,
        sub_industry: str | None = None,
    ) -> ClassificationSelection:
        """Build a selection from stored record fields, treating blanks as unset.

        Stored values are taken as-is and not validated against the registry.
        """
        return cls(
            sector=_clean(sector),
            industry=_clean(industry),
            sub_industry=_clean(sub_industry),
        )

    @property
    def is_complete(self) -> bool:
        return bool(self.sector and self.industry and self.sub_industry)


def select_sector(
    selection: ClassificationSelection,
    sector: str | None,
) -> ClassificationSelection:
    """Choose a sector; industry and sub-industry are always cleared."""
    return replace(selection, sector=_clean(sector), industry=None, sub_industry=None)


def select_industry(
    selection: ClassificationSelection,
    industry: str | None,
    *,
    registry: TaxonomyRegistry,
) -> ClassificationSelection:
    """Choose an industry within the selected sector; the sub-industry is cleared.

    Raises:
        InvalidSelectionError: If the industry is not listed under the current sector.
    """
    value = _clean(industry)
    if value is not None and value not in registry.get_industries(selection.sector):
        raise InvalidSelectionError("industry", value, selection.sector)
    return replace(selection, industry=value, sub_industry=None)


def select_sub_industry(
    selection: ClassificationSelection,
    sub_industry: str | None,
    *,
    registry: TaxonomyRegistry,
) -> ClassificationSelection:
    """Choose a sub-industry within the selected industry.

    Raises:
        InvalidSelectionError: If the sub-industry is not listed under the current industry.
    """
    value = _clean(sub_industry)
    if value is not None:
        names = {option.name for option in registry.get_sub_industries(selection.industry)}
        if value not in names:
            raise InvalidSelectionError("sub-industry", value, selection.industry)
    return replace(selection, sub_industry=value)


def fill_missing_parents(
    selection: ClassificationSelection,
    *,
    registry: TaxonomyRegistry,
) -> ClassificationSelection:
    """Complete blank parent levels from the most specific label supplied.

    Supplied parents are kept as-is, so a mismatch is still rejected by the cascade.
    Unknown labels leave the selection unchanged.
    """
    if selection.sub_industry:
        entry = registry.get_taxonomy_info(selection.sub_industry)
    elif selection.industry:
        entry = registry.find_taxonomy(industry=selection.industry)
    else:
        return selection
    if entry is None:
        return selection
    return replace(
        selection,
        sector=selection.sector or entry.sector,
        industry=selection.industry or entry.industry,
    )


def resolve_selection(
    *,
    sector: str | None,
    industry: str | None,
    sub_industry: str | None,
    registry: TaxonomyRegistry,
) -> ClassificationSelection:
    """Walk the cascade top-down, validating each supplied level against its parent."""
    selection = select_sector(ClassificationSelection(), sector)
    selection = select_industry(selection, industry, registry=registry)
    return select_sub_industry(selection, sub_industry, registry=registry)
