"""Scoring configuration validation and override parsing tests."""

from __future__ import annotations

import pytest

from pagesage.domain.models import Category, Severity
from pagesage.services.scoring_config import (
    DEFAULT_SCORING_CONFIG,
    DEFAULT_SEVERITY_PENALTIES,
    PenaltyRule,
    ScoringConfig,
    ScoringConfigError,
)


@pytest.mark.parametrize("fallback", [0, 100, -5, 150])
def test_fallback_must_sit_strictly_inside_range(fallback: int) -> None:
    with pytest.raises(ScoringConfigError):
        ScoringConfig(default_fallback_score=fallback)

    with pytest.raises(ScoringConfigError):
        ScoringConfig(fallback_scores={Category.FORMS: fallback})


def test_negative_penalty_rejected() -> None:
    with pytest.raises(ScoringConfigError):
        ScoringConfig(penalties={"aria:invalid-aria-role": PenaltyRule(-1, 10)})

    with pytest.raises(ScoringConfigError):
        ScoringConfig(
            severity_penalties={
                **DEFAULT_SEVERITY_PENALTIES,
                Severity.MINOR: PenaltyRule(2, -10),
            }
        )


def test_preview_limit_and_weights_validated() -> None:
    with pytest.raises(ScoringConfigError):
        ScoringConfig(location_preview_limit=0)

    with pytest.raises(ScoringConfigError):
        ScoringConfig(category_weights={Category.SEO: -1.0})


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (None, 5),
        ("3", 3),
        (" 7 ", 7),
        ("abc", 5),
        ("", 5),
        (True, 5),
        (0, 5),
        (12.9, 12),
        (50, 20),
        (float("nan"), 5),
        (float("inf"), 5),
        (float("-inf"), 5),
        ("nan", 5),
    ],
)
def test_preview_limit_override_is_bounded(raw: object, expected: int) -> None:
    config = ScoringConfig.from_mapping({"location_preview_limit": raw})

    assert config.location_preview_limit == expected


@pytest.mark.parametrize(("raw", "expected"), [(100, 99), ("40", 40), (0, 50)])
def test_fallback_override_is_clamped(raw: object, expected: int) -> None:
    config = ScoringConfig.from_mapping({"default_fallback_score": raw})

    assert config.default_fallback_score == expected


@pytest.mark.parametrize(("raw", "expected"), [(0, 30), (900, 300), ("45", 45)])
def test_probe_timeout_override(raw: object, expected: int) -> None:
    config = ScoringConfig.from_mapping({"probe_timeout_seconds": raw})

    assert config.probe_timeout_seconds == expected


def test_missing_overrides_give_defaults() -> None:
    assert ScoringConfig.from_mapping(None) == DEFAULT_SCORING_CONFIG
    assert ScoringConfig.from_mapping({}) == DEFAULT_SCORING_CONFIG


def test_penalty_lookup_falls_back_to_severity() -> None:
    config = DEFAULT_SCORING_CONFIG

    explicit = config.penalty_for(Category.IMAGES, "missing-alt-text", Severity.MINOR)
    fallback = config.penalty_for(Category.IMAGES, "new-check", Severity.SERIOUS)

    assert explicit == PenaltyRule(15, 40)
    assert fallback == DEFAULT_SEVERITY_PENALTIES[Severity.SERIOUS]


def test_penalty_rule_caps_deduction() -> None:
    rule = PenaltyRule(5, 20)

    deductions = [rule.deduction(count) for count in (0, 1, 4, 5, 100)]

    assert deductions == [0, 5, 20, 20, 20]


def test_weights_default_to_one() -> None:
    assert DEFAULT_SCORING_CONFIG.weight_for(Category.STRUCTURE) == 2.0
    assert DEFAULT_SCORING_CONFIG.weight_for(Category.SEO) == 1.0
    assert DEFAULT_SCORING_CONFIG.fallback_for(Category.TABLES) == 50


def test_non_finite_overrides_keep_defaults() -> None:
    config = ScoringConfig.from_mapping(
        {
            "probe_timeout_seconds": float("inf"),
            "revenue_per_critical_issue": float("nan"),
        }
    )

    assert config.probe_timeout_seconds == 30
    assert config.revenue_per_critical_issue == 1000
