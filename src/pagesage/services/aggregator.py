"""Combine category scores into one overall report."""

from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Mapping

from ..domain.models import (
    Category,
    CategoryScore,
    Issue,
    OverallReport,
    ReportStatus,
    ScoreStatus,
)
from .scoring_config import DEFAULT_SCORING_CONFIG, ScoringConfig

_LOG = logging.getLogger(__name__)

GRADE_THRESHOLDS: tuple[tuple[int, str], ...] = (
    (95, "A+"),
    (90, "A"),
    (85, "B+"),
    (80, "B"),
    (75, "C+"),
    (70, "C"),
    (65, "D+"),
    (60, "D"),
)
"""Minimum overall score for each letter grade, best first."""


def grade_for(overall: int | None) -> str | None:
    if overall is None:
        return None
    for threshold, grade in GRADE_THRESHOLDS:
        if overall >= threshold:
            return grade
    return "F"


def round_half_up(value: float | Decimal) -> int:
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def weighted_mean(
    category_scores: Iterable[CategoryScore], config: ScoringConfig
) -> int | None:
    """Weighted mean over applicable categories, or None when nothing counts."""

    total = 0.0
    weights = 0.0
    for category_score in category_scores:
        if not category_score.applicable:
            continue
        weight = config.weight_for(category_score.category)
        total += category_score.score * weight
        weights += weight
    if weights <= 0:
        return None
    return round_half_up(total / weights)


def incomplete_notice(category: Category) -> str:
    return f"analysis incomplete for {category.value}"


def aggregate(
    category_scores: Mapping[Category, CategoryScore] | Iterable[CategoryScore],
    issues_by_category: Mapping[Category, Iterable[Issue]] | None = None,
    *,
    config: ScoringConfig | None = None,
    analysis_id: str,
    timestamp: str,
) -> OverallReport:
    """Build the overall report from per-category scores and issues.

    Categories that do not apply are left out of the mean. Categories without
    signal take part with their neutral fallback and are named in the notices.
    When no category with a positive weight was actually observed the report
    carries ``insufficient_data`` and no overall score.
    """

    config = config or DEFAULT_SCORING_CONFIG
    if isinstance(category_scores, Mapping):
        given = dict(category_scores)
    else:
        given = {item.category: item for item in category_scores}
    scores = {
        category: given[category] for category in Category if category in given
    }
    issues_by_category = issues_by_category or {}

    issues: list[Issue] = []
    for category in scores:
        issues.extend(issues_by_category.get(category, ()))

    no_signal = [category for category, item in scores.items() if item.no_signal]
    # A zero-weight observed category cannot anchor the mean.
    observed = [
        item
        for item in scores.values()
        if item.status is ScoreStatus.SCORED and config.weight_for(item.category) > 0
    ]
    notices = tuple(incomplete_notice(category) for category in no_signal)

    if not observed:
        _LOG.warning("No weighted observed category; overall score is undefined")
        return OverallReport(
            analysis_id=analysis_id,
            timestamp=timestamp,
            status=ReportStatus.INSUFFICIENT_DATA,
            overall_score=None,
            grade=None,
            category_scores=scores,
            issues=tuple(issues),
            notices=notices,
        )

    overall = weighted_mean(scores.values(), config)
    status = ReportStatus.INCOMPLETE if no_signal else ReportStatus.COMPLETE
    return OverallReport(
        analysis_id=analysis_id,
        timestamp=timestamp,
        status=status,
        overall_score=overall,
        grade=grade_for(overall),
        category_scores=scores,
        issues=tuple(issues),
        notices=notices,
    )
