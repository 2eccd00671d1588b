import pytest

from heartbot.advice.tiers import (
    RiskTier,
    ensure_tier_table,
    tier_from_keyword,
    tier_from_percent,
    tier_label,
)


@pytest.mark.parametrize(
    ("percent", "expected"),
    [
        (0.0, RiskTier.LOW),
        (4.99, RiskTier.LOW),
        (5.0, RiskTier.MODERATE),
        (12.5, RiskTier.MODERATE),
        (19.99, RiskTier.MODERATE),
        (20.0, RiskTier.HIGH),
        (23.0, RiskTier.HIGH),
        (100.0, RiskTier.HIGH),
    ],
)
def test_tier_from_percent_uses_inclusive_lower_bounds(percent: float, expected: RiskTier) -> None:
    assert tier_from_percent(percent) is expected


def test_tier_from_percent_matches_thresholds_across_full_range() -> None:
    for tenths in range(0, 1001):
        percent = tenths / 10.0
        tier = tier_from_percent(percent)
        assert (tier is RiskTier.HIGH) == (percent >= 20.0)
        assert (tier is RiskTier.MODERATE) == (5.0 <= percent < 20.0)
        assert (tier is RiskTier.LOW) == (percent < 5.0)


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("high", RiskTier.HIGH),
        ("  HIGH ", RiskTier.HIGH),
        ("very severe", RiskTier.HIGH),
        ("moderate", RiskTier.MODERATE),
        ("Medium", RiskTier.MODERATE),
        ("kind of medium", RiskTier.MODERATE),
        ("low", RiskTier.LOW),
        ("pretty mild", RiskTier.LOW),
        ("moderately severe", RiskTier.HIGH),
    ],
)
def test_tier_from_keyword_resolves_loose_tier_words(text: str, expected: RiskTier) -> None:
    assert tier_from_keyword(text) is expected


@pytest.mark.parametrize("text", ["", "   ", "unknown", "extreme", None])
def test_tier_from_keyword_returns_none_for_unrecognized_words(text) -> None:
    assert tier_from_keyword(text) is None


def test_tier_label_covers_every_tier() -> None:
    assert [tier_label(tier) for tier in RiskTier] == ["Low", "Moderate", "High"]
    assert tier_label("high") == "High"


def test_ensure_tier_table_rejects_missing_tier() -> None:
    with pytest.raises(RuntimeError, match="moderate"):
        ensure_tier_table({RiskTier.LOW: 1, RiskTier.HIGH: 3}, "partial")
