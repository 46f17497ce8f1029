"""Turn raw probe findings into canonical, bounded Issue records."""

from __future__ import annotations

import logging
import math
import re
from typing import Any, Iterable, Mapping

from ..contracts import reason_codes
from ..domain.models import (
    BusinessImpact,
    Category,
    CategoryFindings,
    Issue,
    Severity,
    Signal,
)
from ..domain.outcome import PROBE_FAILED, ProbeOutcome
from . import signal_audit
from .probe_catalog import IssueKind, MalformedFieldError, catalog_for, describe
from .scoring_config import DEFAULT_SCORING_CONFIG, ScoringConfig

_LOG = logging.getLogger(__name__)
_SLUG_RE = re.compile(r"[^a-z0-9]+")


def is_failure(raw: Any) -> bool:
    """Return True when ``raw`` marks a failed probe rather than findings."""

    if raw is None or raw is PROBE_FAILED:
        return True
    if isinstance(raw, ProbeOutcome):
        return raw.failed or is_failure(raw.findings)
    if not isinstance(raw, Mapping):
        return True
    if raw.get("error"):
        return True
    summary = raw.get("summary")
    return isinstance(summary, Mapping) and bool(summary.get("testFailed"))


def _unwrap(raw: Any) -> Any:
    if isinstance(raw, ProbeOutcome):
        return raw.findings
    return raw


def assess_signal(category: Category | str, raw: Any) -> Signal:
    """Classify whether a probe result is usable evidence for its category."""

    category = Category.parse(category)
    if is_failure(raw):
        return Signal.NO_SIGNAL
    return catalog_for(category).assess(_unwrap(raw))


def _slug(value: str) -> str:
    return _SLUG_RE.sub("-", value.strip().lower()).strip("-")


def _positive_int(value: Any, default: int) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    if isinstance(value, float) and not math.isfinite(value):
        return default
    return max(int(value), 0)


def _text(entry: Mapping[str, Any], *keys: str) -> str | None:
    for key in keys:
        value = entry.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


def _from_kind(
    category: Category, kind: IssueKind, raw: Mapping[str, Any], config: ScoringConfig
) -> Issue | None:
    try:
        found = kind.extract(raw)
    except MalformedFieldError as exc:
        _LOG.debug(
            "Skipping %s:%s; malformed field %s", category.value, kind.id, exc
        )
        return None
    if found is None or found.occurrences <= 0:
        return None
    return Issue(
        id=kind.id,
        category=category,
        severity=kind.severity,
        title=kind.title,
        locations=found.locations,
        occurrences=found.occurrences,
        wcag_criterion=kind.wcag_criterion,
        estimated_fix_minutes=(
            kind.fix_minutes
            if kind.fix_minutes is not None
            else config.default_fix_minutes
        ),
        business_impact=kind.business_impact,
        user_benefit=kind.user_benefit,
    )


def _from_entry(
    category: Category, entry: Any, config: ScoringConfig
) -> Issue | None:
    if not isinstance(entry, Mapping):
        _LOG.debug("Skipping non-mapping %s issue entry", category.value)
        return None
    raw_id = _text(entry, "id", "type")
    if raw_id is None or not _slug(raw_id):
        _LOG.debug("Skipping %s issue entry without id", category.value)
        return None
    issue_id = _slug(raw_id)

    raw_locations = entry.get("locations")
    if isinstance(raw_locations, (list, tuple)):
        locations = tuple(
            descriptor
            for descriptor in (describe(item) for item in raw_locations)
            if descriptor
        )
    else:
        single = describe(entry.get("element")) or _text(entry, "selector")
        locations = (single,) if single else ()

    occurrences = _positive_int(
        entry.get("count", entry.get("occurrences")), max(len(locations), 1)
    )
    if occurrences == 0:
        return None

    return Issue(
        id=issue_id,
        category=category,
        severity=Severity.collapse(entry.get("severity", entry.get("impact"))),
        title=_text(entry, "title", "message", "description") or issue_id,
        locations=locations,
        occurrences=occurrences,
        wcag_criterion=_text(entry, "wcagCriterion", "wcag_criterion"),
        estimated_fix_minutes=_positive_int(
            entry.get("estimatedFixTime", entry.get("estimated_fix_minutes")),
            config.default_fix_minutes,
        ),
        business_impact=BusinessImpact.parse(
            entry.get("businessImpact", entry.get("business_impact"))
        ),
        user_benefit=_text(entry, "userBenefit", "user_benefit"),
    )


def _merge(first: Issue, second: Issue) -> Issue:
    severity = first.severity
    if second.severity.rank > severity.rank:
        severity = second.severity
    return Issue(
        id=first.id,
        category=first.category,
        severity=severity,
        title=first.title,
        locations=first.locations + second.locations,
        occurrences=first.occurrences + second.occurrences,
        wcag_criterion=first.wcag_criterion or second.wcag_criterion,
        estimated_fix_minutes=max(
            first.estimated_fix_minutes, second.estimated_fix_minutes
        ),
        business_impact=first.business_impact or second.business_impact,
        user_benefit=first.user_benefit or second.user_benefit,
    )


def _bounded(issue: Issue, limit: int) -> Issue:
    seen = len(issue.locations)
    occurrences = max(issue.occurrences, seen)
    if seen <= limit and occurrences == issue.occurrences:
        return issue
    if seen > limit:
        signal_audit.record_truncation(issue.category, issue.id, seen, limit)
    return Issue(
        id=issue.id,
        category=issue.category,
        severity=issue.severity,
        title=issue.title,
        locations=issue.locations[:limit],
        occurrences=occurrences,
        wcag_criterion=issue.wcag_criterion,
        estimated_fix_minutes=issue.estimated_fix_minutes,
        business_impact=issue.business_impact,
        user_benefit=issue.user_benefit,
    )


def canonicalize(
    issues: Iterable[Issue], *, config: ScoringConfig | None = None
) -> tuple[Issue, ...]:
    """Merge duplicate ids and truncate locations, preserving first-seen order."""

    config = config or DEFAULT_SCORING_CONFIG
    merged: dict[str, Issue] = {}
    for issue in issues:
        existing = merged.get(issue.id)
        merged[issue.id] = issue if existing is None else _merge(existing, issue)
    return tuple(
        _bounded(issue, config.location_preview_limit) for issue in merged.values()
    )


def normalize(
    category: Category | str,
    raw_findings: Any,
    *,
    config: ScoringConfig | None = None,
) -> tuple[Issue, ...]:
    """Return the canonical issues a probe's raw findings describe.

    A failed probe yields no issues; the missing evidence is reported through
    :func:`assess_signal` instead.
    """

    category = Category.parse(category)
    config = config or DEFAULT_SCORING_CONFIG
    if is_failure(raw_findings):
        return ()
    raw = _unwrap(raw_findings)
    catalog = catalog_for(category)
    if catalog.assess(raw) in (Signal.NOT_APPLICABLE, Signal.VACUOUS):
        return ()

    candidates: list[Issue] = []
    for kind in catalog.kinds:
        issue = _from_kind(category, kind, raw, config)
        if issue is not None:
            candidates.append(issue)

    if catalog.free_form_issues:
        entries = raw.get("issues")
        if isinstance(entries, (list, tuple)):
            for entry in entries:
                issue = _from_entry(category, entry, config)
                if issue is not None:
                    candidates.append(issue)
        elif entries is not None:
            _LOG.debug("Skipping malformed %s issues list", category.value)

    return canonicalize(candidates, config=config)


def normalize_outcome(
    outcome: ProbeOutcome, *, config: ScoringConfig | None = None
) -> CategoryFindings:
    """Normalize one probe outcome into its issues and signal state."""

    signal = assess_signal(outcome.category, outcome)
    if signal is Signal.NO_SIGNAL:
        reason = outcome.reason_code or reason_codes.PROBE_FAILED
        _LOG.warning(
            "Probe for %s produced no signal (%s)", outcome.category.value, reason
        )
        signal_audit.record_no_signal(outcome.category, reason)
        return CategoryFindings(outcome.category, (), signal, reason)
    issues = normalize(outcome.category, outcome, config=config)
    reason = reason_codes.NOT_APPLICABLE if signal is Signal.NOT_APPLICABLE else None
    return CategoryFindings(outcome.category, issues, signal, reason)
