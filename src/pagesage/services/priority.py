"""Impact/effort classification into the 2x2 priority matrix."""

from __future__ import annotations

from typing import Iterable

from ..domain.models import (
    Category,
    Classification,
    ClassifiedIssue,
    Issue,
    PriorityBucket,
    PriorityMatrix,
)
from .scoring_config import DEFAULT_SCORING_CONFIG, ScoringConfig


def impact_score(issue: Issue, config: ScoringConfig | None = None) -> int:
    config = config or DEFAULT_SCORING_CONFIG
    points = config.severity_points[issue.severity]
    if issue.user_benefit and len(issue.user_benefit) > config.user_benefit_min_length:
        points += config.user_benefit_bonus
    if issue.business_impact is not None:
        points += config.business_impact_points[issue.business_impact]
    return min(points, config.max_priority_score)


def effort_score(issue: Issue, config: ScoringConfig | None = None) -> int:
    config = config or DEFAULT_SCORING_CONFIG
    points = config.effort_ceiling_points
    for limit, band_points in config.effort_bands:
        if issue.estimated_fix_minutes <= limit:
            points = band_points
            break
    if issue.category is Category.TECHNICAL:
        points += config.technical_effort_bump
    if issue.located_count > config.location_effort_threshold:
        points += config.location_effort_bump
    return min(points, config.max_priority_score)


def bucket_for(
    impact: int, effort: int, config: ScoringConfig | None = None
) -> PriorityBucket:
    """Fixed decision rule on the (impact, effort) pair, for every category."""

    config = config or DEFAULT_SCORING_CONFIG
    high_impact = impact >= config.high_impact_threshold
    low_effort = effort <= config.low_effort_threshold
    if high_impact and low_effort:
        return PriorityBucket.QUICK_WIN
    if high_impact:
        return PriorityBucket.MAJOR_PROJECT
    if low_effort:
        return PriorityBucket.FILL_IN
    return PriorityBucket.QUESTIONABLE


def classify(issue: Issue, config: ScoringConfig | None = None) -> Classification:
    config = config or DEFAULT_SCORING_CONFIG
    impact = impact_score(issue, config)
    effort = effort_score(issue, config)
    return Classification(
        impact_score=impact,
        effort_score=effort,
        bucket=bucket_for(impact, effort, config),
    )


def build_priority_matrix(
    issues: Iterable[Issue], config: ScoringConfig | None = None
) -> PriorityMatrix:
    """Classify every issue, keeping the incoming order inside each bucket."""

    config = config or DEFAULT_SCORING_CONFIG
    return PriorityMatrix(
        entries=tuple(
            ClassifiedIssue(issue=issue, classification=classify(issue, config))
            for issue in issues
        )
    )
