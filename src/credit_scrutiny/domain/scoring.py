"""Domain scoring rules for counterparty bankability.

The score is additive over six categories, then clamped to 0-100. The taxonomy
``points`` value drives the base; the taxonomy ``score`` field is a reference
figure for underwriters and never enters the sum.

Usage example:
    from credit_scrutiny.application.taxonomy_catalog import default_registry
    from credit_scrutiny.domain.classification import ClassificationSelection
    from credit_scrutiny.domain.scoring import (
        DebtLevel,
        EstateType,
        OwnershipType,
        PaymentHistory,
        ScoringInputs,
        score_of,
    )

    result = score_of(
        ClassificationSelection(sub_industry="IPP - renewable"),
        ScoringInputs(
            years_in_business=12,
            ownership_type=OwnershipType.JV_WITH_MNC,
            estate_type=EstateType.TIER_2_ESTATE,
            debt_level=DebtLevel.MEDIUM,
            payment_history=PaymentHistory.GOOD,
            financials_available=True,
        ),
        registry=default_registry(),
    )
    assert 0 <= result.score <= 100
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from types import MappingProxyType
from typing import Self

from .classification import ClassificationSelection
from .taxonomy import TaxonomyEntry, TaxonomyRegistry
from .verdict import VerdictTier, classify_verdict

MIN_SCORE = 0
MAX_SCORE = 100
UNCLASSIFIED_BASE_SCORE = 30
POINTS_MULTIPLIER = 10
FINANCIALS_AVAILABLE_BONUS = 5


class OwnershipType(StrEnum):
    MNC_LISTED = "MNC/Listed"
    JV_WITH_MNC = "JV with MNC"
    PRIVATE_LOCAL_CO = "Private Local Co"
    STARTUP_SME = "Startup/SME"


class EstateType(StrEnum):
    TIER_1_ESTATE = "Tier-1 Estate"
    TIER_2_ESTATE = "Tier-2 Estate"
    INDUSTRIAL_ZONE = "Industrial Zone"
    STANDALONE_SITE = "Standalone Site"


class DebtLevel(StrEnum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class PaymentHistory(StrEnum):
    EXCELLENT = "Excellent"
    GOOD = "Good"
    FAIR = "Fair"
    POOR = "Poor"


# Longevity bands: (strictly more than N years, bonus), most senior first.
LONGEVITY_BONUSES: tuple[tuple[int, int], ...] = ((20, 10), (10, 7), (5, 5))
NEW_BUSINESS_YEARS = 2  # strictly fewer years than this is penalised
NEW_BUSINESS_PENALTY = -5

OWNERSHIP_BONUSES = MappingProxyType(
    {
        OwnershipType.MNC_LISTED: 15,
        OwnershipType.JV_WITH_MNC: 10,
        OwnershipType.PRIVATE_LOCAL_CO: 5,
        OwnershipType.STARTUP_SME: -5,
    }
)

ESTATE_BONUSES = MappingProxyType(
    {
        EstateType.TIER_1_ESTATE: 15,
        EstateType.TIER_2_ESTATE: 10,
        EstateType.INDUSTRIAL_ZONE: 5,
        EstateType.STANDALONE_SITE: 0,
    }
)

DEBT_ADJUSTMENTS = MappingProxyType(
    {
        DebtLevel.LOW: 5,
        DebtLevel.MEDIUM: 0,
        DebtLevel.HIGH: -15,
    }
)

PAYMENT_HISTORY_BONUSES = MappingProxyType(
    {
        PaymentHistory.EXCELLENT: 10,
        PaymentHistory.GOOD: 5,
        PaymentHistory.FAIR: 0,
        PaymentHistory.POOR: -10,
    }
)


@dataclass(frozen=True)
class ScoringInputs:
    """Qualitative underwriting inputs for one evaluation."""

    years_in_business: int
    ownership_type: OwnershipType
    estate_type: EstateType
    debt_level: DebtLevel
    payment_history: PaymentHistory
    financials_available: bool

    @classmethod
    def defaults(cls) -> Self:
        """Starting values offered to an underwriter before any edits."""
        return cls(
            years_in_business=10,
            ownership_type=OwnershipType.PRIVATE_LOCAL_CO,
            estate_type=EstateType.TIER_1_ESTATE,
            debt_level=DebtLevel.MEDIUM,
            payment_history=PaymentHistory.GOOD,
            financials_available=False,
        )


@dataclass(frozen=True)
class ScoreBreakdown:
    """Per-category contributions, unclamped."""

    base_score: int
    longevity_bonus: int
    ownership_bonus: int
    estate_bonus: int
    financial_overlay: int
    payment_bonus: int

    @property
    def raw_total(self) -> int:
        return (
            self.base_score
            + self.longevity_bonus
            + self.ownership_bonus
            + self.estate_bonus
            + self.financial_overlay
            + self.payment_bonus
        )


@dataclass(frozen=True)
class ScrutinyResult:
    """Bankability outcome for display and audit."""

    score: int
    tier: VerdictTier
    label: str
    guidance: str
    underwriting_note: str
    breakdown: ScoreBreakdown
    taxonomy_match: TaxonomyEntry | None

    @property
    def is_classified(self) -> bool:
        return self.taxonomy_match is not None


def score_base(entry: TaxonomyEntry | None) -> int:
    """Base contribution from taxonomy points, or the unclassified default."""
    if entry is None:
        return UNCLASSIFIED_BASE_SCORE
    return entry.points * POINTS_MULTIPLIER


def score_longevity(years_in_business: int) -> int:
    """Longevity bonus. Years 2 to 5 inclusive are neutral."""
    for more_than_years, bonus in LONGEVITY_BONUSES:
        if years_in_business > more_than_years:
            return bonus
    if years_in_business < NEW_BUSINESS_YEARS:
        return NEW_BUSINESS_PENALTY
    return 0


def score_ownership(ownership_type: OwnershipType) -> int:
    return OWNERSHIP_BONUSES[ownership_type]


def score_estate(estate_type: EstateType) -> int:
    return ESTATE_BONUSES[estate_type]


def score_financial_overlay(financials_available: bool, debt_level: DebtLevel) -> int:
    """Financials bonus and debt adjustment; both apply together."""
    bonus = FINANCIALS_AVAILABLE_BONUS if financials_available else 0
    return bonus + DEBT_ADJUSTMENTS[debt_level]


def score_payment_history(payment_history: PaymentHistory) -> int:
    return PAYMENT_HISTORY_BONUSES[payment_history]


def clamp_score(raw: int) -> int:
    return max(MIN_SCORE, min(MAX_SCORE, raw))


def calculate_breakdown(entry: TaxonomyEntry | None, inputs: ScoringInputs) -> ScoreBreakdown:
    """Calculate every category contribution for one evaluation."""
    return ScoreBreakdown(
        base_score=score_base(entry),
        longevity_bonus=score_longevity(inputs.years_in_business),
        ownership_bonus=score_ownership(inputs.ownership_type),
        estate_bonus=score_estate(inputs.estate_type),
        financial_overlay=score_financial_overlay(
            inputs.financials_available, inputs.debt_level
        ),
        payment_bonus=score_payment_history(inputs.payment_history),
    )


def score_of(
    classification: ClassificationSelection,
    inputs: ScoringInputs,
    *,
    registry: TaxonomyRegistry,
) -> ScrutinyResult:
    """Score a counterparty and attach its verdict."""
    entry = registry.resolve_base_entry(
        sector=classification.sector,
        industry=classification.industry,
        sub_industry=classification.sub_industry,
    )
    breakdown = calculate_breakdown(entry, inputs)
    score = clamp_score(breakdown.raw_total)
    verdict = classify_verdict(score)
    return ScrutinyResult(
        score=score,
        tier=verdict.tier,
        label=verdict.label,
        guidance=verdict.guidance,
        underwriting_note=verdict.underwriting_note,
        breakdown=breakdown,
        taxonomy_match=entry,
    )
