"""Tests for verdict tier classification."""

import pytest

from credit_scrutiny.domain.verdict import (
    BANKABLE_THRESHOLD,
    PRIME_THRESHOLD,
    SPECULATIVE_THRESHOLD,
    VERDICTS,
    VerdictTier,
    classify_tier,
    classify_verdict,
)


@pytest.mark.parametrize(
    ("score", "expected"),
    [
        (100, VerdictTier.PRIME),
        (85, VerdictTier.PRIME),
        (84, VerdictTier.BANKABLE),
        (65, VerdictTier.BANKABLE),
        (64, VerdictTier.SPECULATIVE),
        (45, VerdictTier.SPECULATIVE),
        (44, VerdictTier.HIGH_RISK),
        (0, VerdictTier.HIGH_RISK),
    ],
)
def test_classify_tier_bands_include_lower_bound(score: int, expected: VerdictTier) -> None:
    assert classify_tier(score) is expected


def test_thresholds_are_fixed() -> None:
    assert (PRIME_THRESHOLD, BANKABLE_THRESHOLD, SPECULATIVE_THRESHOLD) == (85, 65, 45)


def test_tiers_order_from_worst_to_best() -> None:
    assert VerdictTier.HIGH_RISK < VerdictTier.SPECULATIVE < VerdictTier.BANKABLE
    assert VerdictTier.BANKABLE < VerdictTier.PRIME
    assert max(VerdictTier) is VerdictTier.PRIME
    assert VerdictTier.PRIME.rank == 3


def test_tier_is_monotonic_in_score() -> None:
    tiers = [classify_tier(score) for score in range(0, 101)]

    assert tiers == sorted(tiers)


def test_every_tier_has_a_verdict() -> None:
    assert set(VERDICTS) == set(VerdictTier)
    for tier, verdict in VERDICTS.items():
        assert verdict.tier is tier
        assert verdict.label
        assert verdict.guidance
        assert verdict.underwriting_note


@pytest.mark.parametrize(
    ("score", "label", "guidance"),
    [
        (90, "AAA / AA - PRIME", "Standard terms, no deposit required."),
        (70, "A / BBB - BANKABLE", "Require 3-month security deposit."),
        (50, "BB - SPECULATIVE", "Require 6-month deposit + parent-company guarantee."),
        (
            10,
            "C - HIGH RISK",
            "Decline, or require 12-month bank guarantee with advance payment "
            "and enhanced monitoring.",
        ),
    ],
)
def test_classify_verdict_returns_commercial_guidance(
    score: int, label: str, guidance: str
) -> None:
    verdict = classify_verdict(score)

    assert verdict.label == label
    assert verdict.guidance == guidance
