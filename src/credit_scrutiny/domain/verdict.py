"""Investor verdict tiers for bankability scores."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from functools import total_ordering
from types import MappingProxyType

# Lower bound of each band, inclusive. Fixed; not runtime configuration.
PRIME_THRESHOLD = 85
BANKABLE_THRESHOLD = 65
SPECULATIVE_THRESHOLD = 45


@total_ordering
class VerdictTier(Enum):
    """Risk tiers, ordered from worst to best."""

    HIGH_RISK = "HIGH_RISK"
    SPECULATIVE = "SPECULATIVE"
    BANKABLE = "BANKABLE"
    PRIME = "PRIME"

    @property
    def rank(self) -> int:
        return _TIER_RANK[self]

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, VerdictTier):
            return NotImplemented
        return self.rank < other.rank


_TIER_RANK = MappingProxyType({tier: rank for rank, tier in enumerate(VerdictTier)})


@dataclass(frozen=True)
class Verdict:
    """Commercial outcome for a tier."""

    tier: VerdictTier
    label: str
    guidance: str
    underwriting_note: str


VERDICTS = MappingProxyType(
    {
        VerdictTier.PRIME: Verdict(
            tier=VerdictTier.PRIME,
            label="AAA / AA - PRIME",
            guidance="Standard terms, no deposit required.",
            underwriting_note=(
                "This offtaker presents minimal credit risk. Standard PPA terms apply. "
                "Consider for priority pipeline."
            ),
        ),
        VerdictTier.BANKABLE: Verdict(
            tier=VerdictTier.BANKABLE,
            label="A / BBB - BANKABLE",
            guidance="Require 3-month security deposit.",
            underwriting_note=(
                "Acceptable credit profile. Recommend 3-month security deposit and "
                "standard payment terms (Net 30)."
            ),
        ),
        VerdictTier.SPECULATIVE: Verdict(
            tier=VerdictTier.SPECULATIVE,
            label="BB - SPECULATIVE",
            guidance="Require 6-month deposit + parent-company guarantee.",
            underwriting_note=(
                "Elevated risk profile. Require 6-month deposit, parent company guarantee, "
                "and consider shorter PPA term."
            ),
        ),
        VerdictTier.HIGH_RISK: Verdict(
            tier=VerdictTier.HIGH_RISK,
            label="C - HIGH RISK",
            guidance=(
                "Decline, or require 12-month bank guarantee with advance payment "
                "and enhanced monitoring."
            ),
            underwriting_note=(
                "High credit risk. Either decline or require 12-month bank guarantee, "
                "advance payments, and enhanced monitoring."
            ),
        ),
    }
)


def classify_tier(score: int) -> VerdictTier:
    """Map a 0-100 score to its tier. Each band includes its lower bound."""
    if score >= PRIME_THRESHOLD:
        return VerdictTier.PRIME
    if score >= BANKABLE_THRESHOLD:
        return VerdictTier.BANKABLE
    if score >= SPECULATIVE_THRESHOLD:
        return VerdictTier.SPECULATIVE
    return VerdictTier.HIGH_RISK


def classify_verdict(score: int) -> Verdict:
    """Map a 0-100 score to its full verdict."""
    return VERDICTS[classify_tier(score)]
