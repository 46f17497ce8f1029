"""Centralized tuning constants for scoring, prioritization and estimates.

Every hand-tuned number the engine uses lives here so tuning stays auditable
in one place. Values are heuristics, not calibrated measurements.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Mapping

from ..domain.models import BusinessImpact, Category, Severity


class ScoringConfigError(ValueError):
    """Raised when a tuning value would break a scoring invariant."""


@dataclass(frozen=True)
class PenaltyRule:
    """Per-occurrence deduction and the cap bounding it."""

    per_occurrence: int
    cap: int

    def deduction(self, occurrences: int) -> int:
        return min(self.per_occurrence * max(occurrences, 0), self.cap)


DEFAULT_PENALTIES: dict[str, PenaltyRule] = {
    # aria
    "aria:missing-main-landmark": PenaltyRule(15, 15),
    "aria:missing-navigation-landmark": PenaltyRule(10, 10),
    "aria:missing-banner-landmark": PenaltyRule(5, 5),
    "aria:empty-aria-label": PenaltyRule(5, 15),
    "aria:invalid-aria-labelledby": PenaltyRule(8, 20),
    "aria:invalid-aria-describedby": PenaltyRule(5, 15),
    "aria:invalid-aria-role": PenaltyRule(10, 25),
    "aria:invalid-aria-state": PenaltyRule(5, 20),
    "aria:hidden-interactive-element": PenaltyRule(15, 30),
    # forms
    "forms:unlabeled-form-control": PenaltyRule(10, 40),
    "forms:required-field-without-indicator": PenaltyRule(8, 25),
    "forms:fieldset-without-legend": PenaltyRule(10, 20),
    "forms:button-without-accessible-name": PenaltyRule(12, 30),
    "forms:placeholder-used-as-label": PenaltyRule(5, 5),
    "forms:missing-form-validation": PenaltyRule(5, 5),
    # keyboard
    "keyboard:keyboard-inaccessible-element": PenaltyRule(10, 30),
    "keyboard:positive-tabindex": PenaltyRule(8, 25),
    "keyboard:missing-skip-link": PenaltyRule(15, 15),
    "keyboard:broken-skip-link": PenaltyRule(10, 20),
    "keyboard:missing-focus-indicator": PenaltyRule(5, 20),
    "keyboard:hidden-focusable-element": PenaltyRule(8, 25),
    "keyboard:illogical-tab-order": PenaltyRule(15, 15),
    # color contrast
    "color-contrast:contrast-below-aa": PenaltyRule(15, 60),
    "color-contrast:contrast-below-aaa": PenaltyRule(5, 20),
    # images
    "images:missing-alt-text": PenaltyRule(15, 40),
    "images:meaningless-alt-text": PenaltyRule(10, 30),
    "images:complex-image-without-description": PenaltyRule(12, 25),
    "images:inaccessible-svg": PenaltyRule(8, 20),
    "images:decorative-image-with-alt": PenaltyRule(5, 15),
    "images:image-map-issue": PenaltyRule(10, 15),
    "images:text-in-image": PenaltyRule(6, 15),
    # tables
    "tables:table-missing-caption": PenaltyRule(15, 40),
    "tables:table-missing-headers": PenaltyRule(20, 50),
    "tables:complex-table-missing-scope": PenaltyRule(15, 30),
    "tables:empty-header-cell": PenaltyRule(10, 25),
    "tables:layout-table": PenaltyRule(10, 20),
    "tables:table-missing-thead": PenaltyRule(5, 5),
    # structure
    "structure:missing-main-element": PenaltyRule(15, 15),
    "structure:missing-nav-element": PenaltyRule(10, 10),
    "structure:missing-header-element": PenaltyRule(10, 10),
    "structure:missing-footer-element": PenaltyRule(5, 5),
    "structure:missing-h1": PenaltyRule(20, 20),
    "structure:multiple-h1": PenaltyRule(10, 10),
    "structure:heading-level-skip": PenaltyRule(5, 20),
    "structure:missing-document-title": PenaltyRule(10, 10),
    "structure:missing-document-language": PenaltyRule(10, 10),
    # navigation
    "navigation:missing-primary-navigation": PenaltyRule(40, 40),
    "navigation:navigation-without-landmark-role": PenaltyRule(10, 10),
    "navigation:navigation-without-label": PenaltyRule(10, 10),
    "navigation:empty-primary-navigation": PenaltyRule(20, 20),
    "navigation:missing-breadcrumbs": PenaltyRule(10, 10),
    "navigation:missing-skip-navigation": PenaltyRule(25, 25),
    "navigation:broken-skip-navigation": PenaltyRule(10, 20),
    "navigation:inconsistent-navigation": PenaltyRule(5, 15),
    # content structure
    "content-structure:long-paragraph": PenaltyRule(5, 25),
    "content-structure:large-content-chunk": PenaltyRule(5, 20),
    "content-structure:long-line-length": PenaltyRule(15, 15),
    "content-structure:inadequate-line-height": PenaltyRule(5, 30),
    "content-structure:inadequate-section-spacing": PenaltyRule(5, 25),
    # text readability
    "text-readability:zoom-layout-break": PenaltyRule(15, 30),
    "text-readability:decorative-font": PenaltyRule(10, 20),
    "text-readability:small-font-size": PenaltyRule(5, 15),
    "text-readability:justified-text": PenaltyRule(3, 10),
    "text-readability:tight-line-height": PenaltyRule(5, 20),
    "text-readability:tight-text-spacing": PenaltyRule(3, 15),
    "text-readability:responsive-text-issue": PenaltyRule(8, 20),
    # mobile
    "mobile:missing-viewport": PenaltyRule(25, 25),
    "mobile:viewport-meta": PenaltyRule(10, 10),
    "mobile:zoom-disabled": PenaltyRule(20, 20),
    "mobile:small-touch-target": PenaltyRule(5, 20),
    # seo
    "seo:missing-title": PenaltyRule(20, 20),
    "seo:title-length": PenaltyRule(5, 5),
    "seo:missing-meta-description": PenaltyRule(15, 15),
    "seo:meta-description-length": PenaltyRule(5, 5),
    "seo:missing-canonical": PenaltyRule(10, 10),
    "seo:missing-open-graph": PenaltyRule(5, 5),
    # technical
    "technical:not-https": PenaltyRule(25, 25),
    "technical:missing-robots-txt": PenaltyRule(10, 10),
    "technical:missing-sitemap": PenaltyRule(10, 10),
    "technical:missing-structured-data": PenaltyRule(5, 5),
    "technical:broken-resource": PenaltyRule(5, 20),
}
"""Per issue-kind penalty table keyed ``"<category>:<issue id>"``."""

DEFAULT_SEVERITY_PENALTIES: dict[Severity, PenaltyRule] = {
    Severity.CRITICAL: PenaltyRule(15, 30),
    Severity.SERIOUS: PenaltyRule(10, 25),
    Severity.MODERATE: PenaltyRule(5, 15),
    Severity.MINOR: PenaltyRule(2, 10),
}
"""Bounded fallback for issue kinds without an explicit penalty rule."""

DEFAULT_CATEGORY_WEIGHTS: dict[Category, float] = {
    Category.STRUCTURE: 2.0,
    Category.KEYBOARD: 2.0,
    Category.ARIA: 1.5,
    Category.FORMS: 1.5,
}
"""Relative category weights; categories not listed weigh 1.0."""

DEFAULT_SEVERITY_POINTS: dict[Severity, int] = {
    Severity.CRITICAL: 10,
    Severity.SERIOUS: 8,
    Severity.MODERATE: 5,
    Severity.MINOR: 2,
}

DEFAULT_BUSINESS_IMPACT_POINTS: dict[BusinessImpact, int] = {
    BusinessImpact.HIGH: 3,
    BusinessImpact.MEDIUM: 2,
    BusinessImpact.LOW: 1,
}

DEFAULT_EFFORT_BANDS: tuple[tuple[int, int], ...] = ((15, 1), (60, 3), (240, 6))
"""``(max fix minutes, effort points)`` bands, checked in order."""


def _bounded_int(
    raw: Any,
    default: int,
    *,
    min_value: int = 0,
    max_value: int | None = None,
) -> int:
    """Return a bounded integer from a loosely-typed override value."""

    if raw is None or isinstance(raw, bool):
        return default
    if isinstance(raw, str):
        if not raw.strip():
            return default
        try:
            parsed = int(raw)
        except ValueError:
            return default
    elif isinstance(raw, float):
        if not math.isfinite(raw):
            return default
        parsed = int(raw)
    elif isinstance(raw, int):
        parsed = raw
    else:
        return default
    if parsed < min_value:
        return default
    if max_value is not None and parsed > max_value:
        return max_value
    return parsed


@dataclass(frozen=True)
class ScoringConfig:
    """Container describing every tunable constant of the engine."""

    penalties: Mapping[str, PenaltyRule] = field(
        default_factory=lambda: dict(DEFAULT_PENALTIES)
    )
    severity_penalties: Mapping[Severity, PenaltyRule] = field(
        default_factory=lambda: dict(DEFAULT_SEVERITY_PENALTIES)
    )
    default_fallback_score: int = 50
    fallback_scores: Mapping[Category, int] = field(default_factory=dict)
    category_weights: Mapping[Category, float] = field(
        default_factory=lambda: dict(DEFAULT_CATEGORY_WEIGHTS)
    )
    location_preview_limit: int = 5
    default_fix_minutes: int = 30
    severity_points: Mapping[Severity, int] = field(
        default_factory=lambda: dict(DEFAULT_SEVERITY_POINTS)
    )
    business_impact_points: Mapping[BusinessImpact, int] = field(
        default_factory=lambda: dict(DEFAULT_BUSINESS_IMPACT_POINTS)
    )
    user_benefit_min_length: int = 50
    user_benefit_bonus: int = 2
    effort_bands: tuple[tuple[int, int], ...] = DEFAULT_EFFORT_BANDS
    effort_ceiling_points: int = 10
    technical_effort_bump: int = 2
    location_effort_threshold: int = 10
    location_effort_bump: int = 2
    max_priority_score: int = 10
    high_impact_threshold: int = 7
    low_effort_threshold: int = 3
    user_impact_factor: float = 0.15
    legal_risk_high_threshold: int = 5
    legal_risk_medium_threshold: int = 2
    revenue_per_critical_issue: int = 1000
    development_hours_per_issue: int = 4
    max_development_hours: int = 500
    testing_hours_per_issue: int = 2
    max_testing_hours: int = 200
    development_hourly_rate: int = 75
    testing_hourly_rate: int = 60
    audit_fee: int = 2500
    legal_savings_ratio: float = 0.30
    market_expansion_ratio: float = 0.15
    probe_timeout_seconds: int = 30

    def __post_init__(self) -> None:
        fallbacks = [self.default_fallback_score, *self.fallback_scores.values()]
        if any(not 0 < value < 100 for value in fallbacks):
            raise ScoringConfigError(
                "Fallback scores must be strictly between 0 and 100."
            )
        rules = [*self.penalties.values(), *self.severity_penalties.values()]
        if any(rule.per_occurrence < 0 or rule.cap < 0 for rule in rules):
            raise ScoringConfigError("Penalty rules must be non-negative.")
        if self.location_preview_limit < 1:
            raise ScoringConfigError("Location preview limit must be positive.")
        if any(weight < 0 for weight in self.category_weights.values()):
            raise ScoringConfigError("Category weights must be non-negative.")

    @classmethod
    def from_mapping(cls, overrides: Mapping[str, Any] | None) -> "ScoringConfig":
        """Return a config with scalar overrides supplied by the host service.

        Invalid or out-of-range values fall back to the defaults.
        """

        overrides = overrides or {}
        base = DEFAULT_SCORING_CONFIG
        return cls(
            default_fallback_score=_bounded_int(
                overrides.get("default_fallback_score"),
                base.default_fallback_score,
                min_value=1,
                max_value=99,
            ),
            location_preview_limit=_bounded_int(
                overrides.get("location_preview_limit"),
                base.location_preview_limit,
                min_value=1,
                max_value=20,
            ),
            default_fix_minutes=_bounded_int(
                overrides.get("default_fix_minutes"),
                base.default_fix_minutes,
            ),
            revenue_per_critical_issue=_bounded_int(
                overrides.get("revenue_per_critical_issue"),
                base.revenue_per_critical_issue,
            ),
            legal_risk_high_threshold=_bounded_int(
                overrides.get("legal_risk_high_threshold"),
                base.legal_risk_high_threshold,
            ),
            legal_risk_medium_threshold=_bounded_int(
                overrides.get("legal_risk_medium_threshold"),
                base.legal_risk_medium_threshold,
            ),
            probe_timeout_seconds=_bounded_int(
                overrides.get("probe_timeout_seconds"),
                base.probe_timeout_seconds,
                min_value=1,
                max_value=300,
            ),
        )

    def penalty_for(
        self, category: Category, issue_id: str, severity: Severity
    ) -> PenaltyRule:
        """Return the explicit rule for a kind, else the severity default."""

        rule = self.penalties.get(f"{category.value}:{issue_id}")
        if rule is not None:
            return rule
        return self.severity_penalties[severity]

    def fallback_for(self, category: Category) -> int:
        return self.fallback_scores.get(category, self.default_fallback_score)

    def weight_for(self, category: Category) -> float:
        return self.category_weights.get(category, 1.0)


DEFAULT_SCORING_CONFIG = ScoringConfig()
