"""Compose ordered remediation advice from the priority matrix."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable

from ..domain.models import (
    BusinessInsights,
    ClassifiedIssue,
    Issue,
    OverallReport,
    PageContext,
    PriorityBucket,
    PriorityMatrix,
    RiskTier,
    Severity,
)

_LOG = logging.getLogger(__name__)

EFFORT_RANGES: tuple[tuple[int, str], ...] = (
    (60, "<1 hour"),
    (240, "1-4 hours"),
    (960, "1-2 days"),
    (2400, "3-5 days"),
    (4800, "1-2 weeks"),
    (9600, "2-4 weeks"),
)
"""Upper bound in minutes for each human time range, shortest first."""

LONGEST_EFFORT_RANGE = "1-3 months"
TOP_ISSUES_PER_RECOMMENDATION = 3


@dataclass(frozen=True)
class Recommendation:
    bucket: PriorityBucket
    title: str
    description: str
    priority: str
    business_impact: str
    time_to_implement: str
    estimated_fix_minutes: int
    issue_ids: tuple[str, ...]

    def to_mapping(self) -> dict[str, Any]:
        return {
            "bucket": self.bucket.value,
            "title": self.title,
            "description": self.description,
            "priority": self.priority,
            "business_impact": self.business_impact,
            "time_to_implement": self.time_to_implement,
            "estimated_fix_minutes": self.estimated_fix_minutes,
            "issue_ids": list(self.issue_ids),
        }


@dataclass(frozen=True)
class ContextAdvice:
    """Advice driven by what kind of site was analyzed, not by its issues."""

    id: str
    title: str
    description: str
    priority: str
    business_impact: str
    time_to_implement: str

    def to_mapping(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "priority": self.priority,
            "business_impact": self.business_impact,
            "time_to_implement": self.time_to_implement,
        }


@dataclass(frozen=True)
class CodeFix:
    id: str
    title: str
    description: str
    code: str
    language: str
    framework: str
    issue_ids: tuple[str, ...] = ()

    def to_mapping(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "code": self.code,
            "language": self.language,
            "framework": self.framework,
            "issue_ids": list(self.issue_ids),
        }


def describe_effort(minutes: int) -> str:
    """Bucket a total fix time into a human range."""

    for limit, label in EFFORT_RANGES:
        if minutes <= limit:
            return label
    return LONGEST_EFFORT_RANGE


_BUCKET_TEXT: dict[PriorityBucket, tuple[str, str, str]] = {
    PriorityBucket.QUICK_WIN: (
        "Quick wins: high impact, low effort",
        "high",
        "Removes serious barriers for users quickly and visibly.",
    ),
    PriorityBucket.MAJOR_PROJECT: (
        "Major projects: plan high-impact work",
        "medium",
        "Large improvement for affected users once scheduled and resourced.",
    ),
    PriorityBucket.FILL_IN: (
        "Fill-ins: low-effort polish",
        "low",
        "Incremental quality gains that fit between larger tasks.",
    ),
    PriorityBucket.QUESTIONABLE: (
        "Reconsider: low impact, high effort",
        "low",
        "Limited benefit for the effort; revisit after higher priorities.",
    ),
}


def _top_issues(entries: Iterable[ClassifiedIssue]) -> list[Issue]:
    ranked = sorted(
        entries,
        key=lambda entry: (
            -entry.classification.impact_score,
            -entry.issue.severity.rank,
        ),
    )
    return [entry.issue for entry in ranked[:TOP_ISSUES_PER_RECOMMENDATION]]


def _describe(entries: tuple[ClassifiedIssue, ...]) -> str:
    count = len(entries)
    noun = "issue" if count == 1 else "issues"
    top = "; ".join(issue.title for issue in _top_issues(entries))
    return f"{count} {noun} in this group. Start with: {top}."


def _business_text(
    bucket: PriorityBucket,
    entries: tuple[ClassifiedIssue, ...],
    insights: BusinessInsights | None,
) -> str:
    text = _BUCKET_TEXT[bucket][2]
    critical = sum(
        1 for entry in entries if entry.issue.severity is Severity.CRITICAL
    )
    if critical:
        text += f" Resolves {critical} critical issue kind(s)."
    loss = insights.estimated_revenue_loss if insights is not None else None
    if loss is not None and critical:
        text += (
            f" Estimated revenue at risk: {loss.amount} {loss.currency}"
            f" per {loss.period}."
        )
    return text


def _priority(
    bucket: PriorityBucket,
    entries: tuple[ClassifiedIssue, ...],
    insights: BusinessInsights | None,
) -> str:
    base = _BUCKET_TEXT[bucket][1]
    if (
        insights is not None
        and insights.legal_risk_tier is RiskTier.HIGH
        and any(entry.issue.severity is Severity.CRITICAL for entry in entries)
    ):
        return "critical"
    return base


def compose(
    report: OverallReport,
    matrix: PriorityMatrix | None = None,
    insights: BusinessInsights | None = None,
    page_context: PageContext | None = None,
) -> tuple[Recommendation, ...]:
    """One recommendation per non-empty bucket, in remediation order."""

    matrix = matrix or report.priority_matrix or PriorityMatrix()
    insights = insights or report.business_insights
    recommendations = []
    for bucket in matrix.non_empty_buckets():
        entries = matrix.bucket(bucket)
        minutes = sum(entry.issue.estimated_fix_minutes for entry in entries)
        recommendations.append(
            Recommendation(
                bucket=bucket,
                title=_BUCKET_TEXT[bucket][0],
                description=_describe(entries),
                priority=_priority(bucket, entries, insights),
                business_impact=_business_text(bucket, entries, insights),
                time_to_implement=describe_effort(minutes),
                estimated_fix_minutes=minutes,
                issue_ids=tuple(entry.issue.id for entry in entries),
            )
        )
    return tuple(recommendations)


def context_advice(page_context: PageContext | None) -> tuple[ContextAdvice, ...]:
    """Site-specific advice for commerce, healthcare and senior audiences."""

    page_context = page_context or PageContext()
    advice = []
    if page_context.is_ecommerce:
        advice.append(
            ContextAdvice(
                id="ecommerce_accessibility",
                title="E-commerce accessibility priority",
                description=(
                    "Focus on product pages, the checkout flow and search, "
                    "where barriers cost the most sales."
                ),
                priority="high",
                business_impact="Revenue protection and customer retention",
                time_to_implement="2-4 weeks",
            )
        )
    if page_context.industry == "healthcare":
        advice.append(
            ContextAdvice(
                id="healthcare_compliance",
                title="Healthcare compliance focus",
                description=(
                    "Check HIPAA obligations and make patient-facing flows "
                    "usable with assistive technology."
                ),
                priority="critical",
                business_impact="Legal compliance and patient care",
                time_to_implement="2-4 weeks",
            )
        )
    if page_context.target_audience == "seniors":
        advice.append(
            ContextAdvice(
                id="senior_friendly",
                title="Senior-friendly design",
                description=(
                    "Use larger text, higher contrast and simpler navigation "
                    "for older visitors."
                ),
                priority="high",
                business_impact="Better experience for the target audience",
                time_to_implement="1-2 weeks",
            )
        )
    return tuple(advice)


@dataclass(frozen=True)
class _Snippet:
    title: str
    description: str
    language: str
    code: str


CODE_SNIPPETS: dict[str, dict[str, _Snippet]] = {
    "react": {
        "missing-alt-text": _Snippet(
            "Accessible image component",
            "Wrap images so a missing alt text is caught during development.",
            "jsx",
            "const AccessibleImage = ({ src, alt, ...props }) => {\n"
            "  if (alt === undefined) {\n"
            "    console.warn('Image missing alt text:', src);\n"
            "  }\n"
            "  return <img src={src} alt={alt} {...props} />;\n"
            "};",
        ),
        "unlabeled-form-control": _Snippet(
            "Labelled input component",
            "Pair every input with a label through a generated id.",
            "jsx",
            "const LabelledInput = ({ label, ...props }) => {\n"
            "  const id = React.useId();\n"
            "  return (\n"
            "    <>\n"
            "      <label htmlFor={id}>{label}</label>\n"
            "      <input id={id} {...props} />\n"
            "    </>\n"
            "  );\n"
            "};",
        ),
    },
    "vue": {
        "missing-alt-text": _Snippet(
            "Alt text guard directive",
            "Warn in development when an image is rendered without alt text.",
            "javascript",
            "app.directive('require-alt', {\n"
            "  mounted(el) {\n"
            "    if (!el.hasAttribute('alt')) {\n"
            "      console.warn('Image missing alt text:', el.src);\n"
            "    }\n"
            "  },\n"
            "});",
        ),
        "unlabeled-form-control": _Snippet(
            "Labelled field component",
            "Render each field with a bound label.",
            "html",
            "<template>\n"
            "  <label :for=\"id\">{{ label }}</label>\n"
            "  <input :id=\"id\" v-bind=\"$attrs\" />\n"
            "</template>",
        ),
    },
    "wordpress": {
        "missing-alt-text": _Snippet(
            "Image alt text filter",
            "Give content images an empty alt attribute when none is set.",
            "php",
            "function ensure_image_alt_text($content) {\n"
            "  return preg_replace('/<img(?![^>]*alt=)([^>]*)>/i', "
            "'<img$1 alt=\"\">', $content);\n"
            "}\n"
            "add_filter('the_content', 'ensure_image_alt_text');",
        ),
        "missing-skip-link": _Snippet(
            "Theme skip link",
            "Print a skip link as the first focusable element of the page.",
            "php",
            "add_action('wp_body_open', function () {\n"
            "  echo '<a class=\"skip-link screen-reader-text\" "
            "href=\"#content\">Skip to content</a>';\n"
            "});",
        ),
    },
}
"""Code samples keyed by tech stack, then by issue id."""


def suggest_code_fixes(
    issues: Iterable[Issue], page_context: PageContext | None
) -> tuple[CodeFix, ...]:
    """Best-effort code samples for the detected tech stack.

    Never raises; a failure is logged and yields no samples.
    """

    try:
        stack = (page_context or PageContext()).tech_stack
        snippets = CODE_SNIPPETS.get(stack)
        if not snippets:
            return ()
        fixes = []
        for issue in issues:
            snippet = snippets.get(issue.id)
            if snippet is None:
                continue
            fixes.append(
                CodeFix(
                    id=f"{stack}:{issue.category.value}:{issue.id}",
                    title=snippet.title,
                    description=snippet.description,
                    code=snippet.code,
                    language=snippet.language,
                    framework=stack,
                    issue_ids=(issue.id,),
                )
            )
        return tuple(fixes)
    except Exception as exc:
        _LOG.warning("Unable to build code fix suggestions: %s", exc)
        return ()
