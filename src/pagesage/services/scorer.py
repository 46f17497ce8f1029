"""Bounded-penalty category scorer."""

from __future__ import annotations

from typing import Iterable

from ..domain.models import (
    Category,
    CategoryScore,
    Deduction,
    Issue,
    ScoreStatus,
    Signal,
)
from .scoring_config import DEFAULT_SCORING_CONFIG, ScoringConfig

PERFECT_SCORE = 100


def score(
    category: Category | str,
    issues: Iterable[Issue],
    signal: Signal = Signal.OBSERVED,
    config: ScoringConfig | None = None,
) -> CategoryScore:
    """Score one category from its issues.

    Each distinct issue kind deducts ``min(per_occurrence * occurrences, cap)``
    and the result is clamped to ``[0, 100]`` once all deductions are applied.
    A category without signal carries its neutral fallback; a category that
    does not apply, or has nothing to fail, scores 100.
    """

    category = Category.parse(category)
    config = config or DEFAULT_SCORING_CONFIG
    issues = tuple(issues)

    if signal is Signal.NO_SIGNAL:
        return CategoryScore(
            category=category,
            score=config.fallback_for(category),
            status=ScoreStatus.NO_SIGNAL,
        )
    if signal is Signal.NOT_APPLICABLE:
        return CategoryScore(
            category=category,
            score=PERFECT_SCORE,
            status=ScoreStatus.NOT_APPLICABLE,
        )
    if signal is Signal.VACUOUS:
        return CategoryScore(category=category, score=PERFECT_SCORE)

    deductions: list[Deduction] = []
    for issue in issues:
        rule = config.penalty_for(category, issue.id, issue.severity)
        amount = rule.deduction(issue.occurrences)
        deductions.append(
            Deduction(
                issue_id=issue.id,
                reason=issue.title,
                occurrences=issue.occurrences,
                amount=amount,
            )
        )

    total = sum(deduction.amount for deduction in deductions)
    return CategoryScore(
        category=category,
        score=max(0, min(PERFECT_SCORE, PERFECT_SCORE - total)),
        deductions=tuple(deductions),
        issue_count=len(issues),
    )
