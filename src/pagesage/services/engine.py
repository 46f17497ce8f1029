"""Pipeline entry point: probe outcomes in, validated analysis document out."""

from __future__ import annotations

import dataclasses
import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Iterable, Mapping

from ..contracts import schema_registry
from ..domain.models import (
    Category,
    CategoryFindings,
    CategoryScore,
    Issue,
    OverallReport,
    PageContext,
    UnknownCategoryError,
)
from ..domain.outcome import ProbeOutcome
from . import signal_audit
from .aggregator import aggregate
from .business_impact import estimate
from .normalizer import normalize_outcome
from .priority import build_priority_matrix
from .recommendations import (
    CodeFix,
    ContextAdvice,
    Recommendation,
    compose,
    context_advice,
    suggest_code_fixes,
)
from .scorer import score
from .scoring_config import DEFAULT_SCORING_CONFIG, ScoringConfig

_LOG = logging.getLogger(__name__)

REPORT_SCHEMA = "analysis_report_v1"


class ReportContractError(ValueError):
    """Raised when an analysis document violates its JSON schema."""


@dataclass(frozen=True)
class AnalysisResult:
    """Everything one analysis run hands to the renderer."""

    report: OverallReport
    recommendations: tuple[Recommendation, ...] = ()
    context_advice: tuple[ContextAdvice, ...] = ()
    code_fixes: tuple[CodeFix, ...] = ()

    def to_mapping(self) -> dict[str, Any]:
        mapping = self.report.to_mapping()
        mapping["recommendations"] = [
            item.to_mapping() for item in self.recommendations
        ]
        mapping["context_advice"] = [item.to_mapping() for item in self.context_advice]
        mapping["code_fixes"] = [item.to_mapping() for item in self.code_fixes]
        return mapping

    def to_document(self) -> dict[str, Any]:
        """Return the JSON-compatible document, validated against its schema."""

        document = self.to_mapping()
        try:
            schema_registry.validate(REPORT_SCHEMA, document)
        except schema_registry.SchemaValidationError as exc:
            raise ReportContractError(
                f"Analysis document violates {REPORT_SCHEMA}: {exc.message}"
            ) from exc
        return document


def _as_outcomes(
    outcomes: Iterable[ProbeOutcome] | Mapping[Any, Any]
) -> list[ProbeOutcome]:
    """Accept outcomes or a category -> raw findings mapping, skipping unknowns."""

    if isinstance(outcomes, Mapping):
        pairs = list(outcomes.items())
    else:
        pairs = [(None, outcome) for outcome in outcomes]

    accepted: list[ProbeOutcome] = []
    for tag, value in pairs:
        if isinstance(value, ProbeOutcome):
            accepted.append(value)
            continue
        try:
            category = Category.parse(tag)
        except UnknownCategoryError:
            _LOG.warning("Skipping findings for unknown category %r", tag)
            signal_audit.record_unknown_category(tag)
            continue
        accepted.append(ProbeOutcome(category=category, findings=value))
    return accepted


def _timestamp(now: datetime | None) -> str:
    moment = now or datetime.now(timezone.utc)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).isoformat()


def run_analysis(
    outcomes: Iterable[ProbeOutcome] | Mapping[Any, Any],
    page_context: PageContext | Mapping[str, Any] | None = None,
    *,
    config: ScoringConfig | None = None,
    analysis_id: str | None = None,
    now: datetime | None = None,
) -> AnalysisResult:
    """Run every synchronous stage over collected probe outcomes.

    Categories are reported in the fixed :class:`Category` order whatever
    order the outcomes arrive in. A later outcome for the same category
    replaces an earlier one.
    """

    config = config or DEFAULT_SCORING_CONFIG
    if not isinstance(page_context, PageContext):
        page_context = PageContext.from_mapping(page_context)

    findings: dict[Category, CategoryFindings] = {}
    for outcome in _as_outcomes(outcomes):
        findings[outcome.category] = normalize_outcome(outcome, config=config)

    scores: dict[Category, CategoryScore] = {}
    issues: dict[Category, tuple[Issue, ...]] = {}
    for category in Category:
        if category not in findings:
            continue
        found = findings[category]
        scores[category] = score(category, found.issues, found.signal, config)
        issues[category] = found.issues

    report = aggregate(
        scores,
        issues,
        config=config,
        analysis_id=analysis_id or uuid.uuid4().hex,
        timestamp=_timestamp(now),
    )
    matrix = build_priority_matrix(report.issues, config)
    insights = estimate(report, page_context, matrix, config)
    report = dataclasses.replace(
        report, priority_matrix=matrix, business_insights=insights
    )

    return AnalysisResult(
        report=report,
        recommendations=compose(report, matrix, insights, page_context),
        context_advice=context_advice(page_context),
        code_fixes=suggest_code_fixes(report.issues, page_context),
    )
