"""Heuristic business estimates derived from a finished report.

Every figure here comes from fixed constants in :mod:`scoring_config` and is
flagged as an estimate in the serialized document.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Iterable

from ..domain.models import (
    BusinessInsights,
    Category,
    Issue,
    OverallReport,
    PageContext,
    PriorityBucket,
    PriorityMatrix,
    RemediationCost,
    RevenueLossEstimate,
    RiskTier,
    Severity,
)
from .aggregator import round_half_up
from .priority import build_priority_matrix
from .recommendations import describe_effort
from .scoring_config import DEFAULT_SCORING_CONFIG, ScoringConfig

BASELINE_COMPLIANCE = "WCAG 2.1 AA"

INDUSTRY_COMPLIANCE: dict[str, tuple[str, ...]] = {
    "healthcare": ("HIPAA", "Section 508"),
    "finance": ("PCI DSS", "Section 508"),
    "government": ("Section 508", "WCAG 2.1 AAA"),
    "education": ("Section 508", "ADA"),
}
"""Regulations that apply on top of the baseline, by industry."""

ECOMMERCE_COMPLIANCE: tuple[str, ...] = ("ADA", "Consumer Protection")

_SEARCH_CATEGORIES = frozenset({Category.SEO, Category.TECHNICAL})


def critical_occurrences(issues: Iterable[Issue]) -> int:
    """Count critical findings, weighting each issue kind by its occurrences."""

    return sum(
        issue.occurrences for issue in issues if issue.severity is Severity.CRITICAL
    )


def legal_risk_for(
    critical_count: int, config: ScoringConfig | None = None
) -> RiskTier:
    config = config or DEFAULT_SCORING_CONFIG
    if critical_count > config.legal_risk_high_threshold:
        return RiskTier.HIGH
    if critical_count > config.legal_risk_medium_threshold:
        return RiskTier.MEDIUM
    return RiskTier.LOW


def compliance_requirements(page_context: PageContext) -> tuple[str, ...]:
    requirements = [BASELINE_COMPLIANCE]
    requirements.extend(INDUSTRY_COMPLIANCE.get(page_context.industry, ()))
    if page_context.is_ecommerce:
        requirements.extend(ECOMMERCE_COMPLIANCE)
    return tuple(dict.fromkeys(requirements))


def improvement_estimates(issues: Iterable[Issue]) -> dict[str, int]:
    """Rough score gains expected from fixing the reported issues."""

    high_impact = 0
    search = 0
    for issue in issues:
        if issue.category in _SEARCH_CATEGORIES:
            search += 1
        elif issue.severity in (Severity.CRITICAL, Severity.SERIOUS):
            high_impact += 1
    accessibility = min(high_impact * 5, 40)
    seo = min(search * 2, 30)
    return {
        "accessibility": accessibility,
        "seo": seo,
        "user_experience": round_half_up(
            Decimal(accessibility + seo) * Decimal("0.8")
        ),
    }


def remediation_cost(
    issue_count: int, config: ScoringConfig | None = None
) -> RemediationCost:
    config = config or DEFAULT_SCORING_CONFIG
    development_hours = min(
        config.max_development_hours, issue_count * config.development_hours_per_issue
    )
    testing_hours = min(
        config.max_testing_hours, issue_count * config.testing_hours_per_issue
    )
    cost = (
        development_hours * config.development_hourly_rate
        + testing_hours * config.testing_hourly_rate
        + config.audit_fee
    )
    benefit = cost * (config.legal_savings_ratio + config.market_expansion_ratio)
    return RemediationCost(
        development_hours=development_hours,
        testing_hours=testing_hours,
        estimated_cost=cost,
        potential_benefit=round(benefit),
        roi_percent=round(benefit / cost * 100) if cost else 0,
    )


def time_to_value(matrix: PriorityMatrix) -> str:
    """Human effort range of the quick wins, or of everything without any."""

    entries = matrix.bucket(PriorityBucket.QUICK_WIN) or matrix.entries
    return describe_effort(
        sum(entry.issue.estimated_fix_minutes for entry in entries)
    )


def estimate(
    report: OverallReport,
    page_context: PageContext | None = None,
    matrix: PriorityMatrix | None = None,
    config: ScoringConfig | None = None,
) -> BusinessInsights:
    config = config or DEFAULT_SCORING_CONFIG
    page_context = page_context or PageContext()
    if matrix is None:
        matrix = report.priority_matrix or build_priority_matrix(report.issues, config)

    user_impact = None
    if report.overall_score is not None:
        user_impact = round_half_up(
            Decimal(100 - report.overall_score)
            * Decimal(str(config.user_impact_factor))
        )

    critical = critical_occurrences(report.issues)
    revenue = None
    if page_context.is_ecommerce:
        revenue = RevenueLossEstimate(
            amount=critical * config.revenue_per_critical_issue
        )

    return BusinessInsights(
        user_impact_percent=user_impact,
        legal_risk_tier=legal_risk_for(critical, config),
        critical_issue_count=critical,
        time_to_value=time_to_value(matrix),
        compliance_requirements=compliance_requirements(page_context),
        improvement_estimates=improvement_estimates(report.issues),
        remediation_cost=remediation_cost(len(report.issues), config),
        estimated_revenue_loss=revenue,
    )
