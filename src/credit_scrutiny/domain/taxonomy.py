"""Thai sector taxonomy model for credit underwriting.

Each leaf is a (sector, industry, sub-industry) triple carrying a base credit
score (1-10, lower is better credit) and priority points (1-5, higher is more
strategically desirable).

Usage example:
    from credit_scrutiny.domain.taxonomy import TaxonomyEntry, TaxonomyRegistry

    registry = TaxonomyRegistry(
        (
            TaxonomyEntry(
                sector="Energy & Utilities",
                industry="Power generation",
                sub_industry="IPP - renewable",
                score=2,
                points=5,
            ),
        )
    )
    assert registry.get_industries("Energy & Utilities") == ["Power generation"]
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from enum import StrEnum

from ..exceptions import EmptyTaxonomyError, TaxonomyValidationError

MIN_CREDIT_SCORE = 1
MAX_CREDIT_SCORE = 10
MIN_PRIORITY_POINTS = 1
MAX_PRIORITY_POINTS = 5

_REGISTRY_SOURCE = "<registry>"


@dataclass(frozen=True)
class TaxonomyEntry:
    """One classification leaf."""

    sector: str
    industry: str
    sub_industry: str
    score: int  # 1-10, lower = better credit
    points: int  # 1-5, higher = higher priority


@dataclass(frozen=True)
class SubIndustryOption:
    """A sub-industry choice as offered under its industry."""

    name: str
    score: int
    points: int


class CreditScoreBand(StrEnum):
    """Reference band for a taxonomy credit score."""

    EXCELLENT = "excellent"
    STRONG = "strong"
    MODERATE = "moderate"
    WEAK = "weak"
    POOR = "poor"


class PriorityBand(StrEnum):
    """Reference band for taxonomy priority points."""

    TOP = "top"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


def credit_score_band(score: int) -> CreditScoreBand:
    """Band a 1-10 taxonomy credit score (lower is better)."""
    if score <= 2:
        return CreditScoreBand.EXCELLENT
    if score <= 4:
        return CreditScoreBand.STRONG
    if score <= 6:
        return CreditScoreBand.MODERATE
    if score <= 8:
        return CreditScoreBand.WEAK
    return CreditScoreBand.POOR


def priority_band(points: int) -> PriorityBand:
    """Band 1-5 priority points (higher is better)."""
    if points >= 5:
        return PriorityBand.TOP
    if points >= 4:
        return PriorityBand.HIGH
    if points >= 3:
        return PriorityBand.MEDIUM
    return PriorityBand.LOW


def _sort_key(name: str) -> tuple[str, str]:
    return (name.casefold(), name)


def _validate_entries(entries: tuple[TaxonomyEntry, ...]) -> None:
    if not entries:
        raise EmptyTaxonomyError()

    sector_of_industry: dict[str, str] = {}
    industry_of_sub: dict[str, str] = {}
    for entry in entries:
        if not (entry.sector.strip() and entry.industry.strip() and entry.sub_industry.strip()):
            raise TaxonomyValidationError(_REGISTRY_SOURCE, f"blank label in {entry!r}")
        if not MIN_CREDIT_SCORE <= entry.score <= MAX_CREDIT_SCORE:
            raise TaxonomyValidationError(
                _REGISTRY_SOURCE, f"score {entry.score} out of range for '{entry.sub_industry}'"
            )
        if not MIN_PRIORITY_POINTS <= entry.points <= MAX_PRIORITY_POINTS:
            raise TaxonomyValidationError(
                _REGISTRY_SOURCE, f"points {entry.points} out of range for '{entry.sub_industry}'"
            )

        owner = sector_of_industry.setdefault(entry.industry, entry.sector)
        if owner != entry.sector:
            raise TaxonomyValidationError(
                _REGISTRY_SOURCE,
                f"industry '{entry.industry}' listed under both '{owner}' and '{entry.sector}'",
            )
        if entry.sub_industry in industry_of_sub:
            raise TaxonomyValidationError(
                _REGISTRY_SOURCE, f"duplicate sub-industry '{entry.sub_industry}'"
            )
        industry_of_sub[entry.sub_industry] = entry.industry


class TaxonomyRegistry:
    """Read-only table of taxonomy leaves.

    Entries keep their authored order; "first match" lookups follow it.
    Construction fails loudly on an empty or inconsistent table.
    """

    __slots__ = ("_entries", "_by_sub_industry")

    def __init__(self, entries: Iterable[TaxonomyEntry]) -> None:
        frozen = tuple(entries)
        _validate_entries(frozen)
        self._entries = frozen
        self._by_sub_industry = {entry.sub_industry: entry for entry in frozen}

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[TaxonomyEntry]:
        return iter(self._entries)

    def __repr__(self) -> str:
        return f"TaxonomyRegistry(entries={len(self._entries)})"

    @property
    def entries(self) -> tuple[TaxonomyEntry, ...]:
        return self._entries

    def get_sectors(self) -> list[str]:
        """Return unique sector names, sorted."""
        return sorted({entry.sector for entry in self._entries})

    def get_industries(self, sector: str | None) -> list[str]:
        """Return unique industries within a sector, sorted. Unknown or empty → []."""
        if not sector:
            return []
        return sorted({entry.industry for entry in self._entries if entry.sector == sector})

    def get_sub_industries(self, industry: str | None) -> list[SubIndustryOption]:
        """Return the sub-industries of an industry, sorted by name."""
        if not industry:
            return []
        options = [
            SubIndustryOption(name=entry.sub_industry, score=entry.score, points=entry.points)
            for entry in self._entries
            if entry.industry == industry
        ]
        return sorted(options, key=lambda option: _sort_key(option.name))

    def get_taxonomy_info(self, sub_industry: str | None) -> TaxonomyEntry | None:
        """Exact match on sub-industry."""
        if not sub_industry:
            return None
        return self._by_sub_industry.get(sub_industry)

    def find_taxonomy(
        self,
        sector: str | None = None,
        industry: str | None = None,
        sub_industry: str | None = None,
    ) -> TaxonomyEntry | None:
        """Return the first entry matching the most specific criterion supplied.

        Only the most specific non-empty criterion is consulted: a supplied but
        unknown sub-industry returns None rather than falling back to the industry.
        """
        if sub_industry:
            return self.get_taxonomy_info(sub_industry)
        if industry:
            return self._first(lambda entry: entry.industry == industry)
        if sector:
            return self._first(lambda entry: entry.sector == sector)
        return None

    def resolve_base_entry(
        self,
        sector: str | None = None,
        industry: str | None = None,
        sub_industry: str | None = None,
    ) -> TaxonomyEntry | None:
        """Best available classification: sub-industry, then industry, then sector.

        Unlike ``find_taxonomy`` this falls through when a stored label no longer
        matches, so a partially classified or stale record still gets a base entry.
        """
        return (
            self.find_taxonomy(sub_industry=sub_industry)
            or self.find_taxonomy(industry=industry)
            or self.find_taxonomy(sector=sector)
        )

    def _first(self, predicate: Callable[[TaxonomyEntry], bool]) -> TaxonomyEntry | None:
        for entry in self._entries:
            if predicate(entry):
                return entry
        return None
