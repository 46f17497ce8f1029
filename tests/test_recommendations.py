"""Recommendation composer, context advice and code fix tests."""

from __future__ import annotations

import logging

import pytest

from pagesage.domain.models import (
    BusinessInsights,
    Category,
    Issue,
    OverallReport,
    PageContext,
    PriorityBucket,
    ReportStatus,
    RiskTier,
    Severity,
)
from pagesage.services import recommendations
from pagesage.services.priority import build_priority_matrix
from pagesage.services.recommendations import (
    compose,
    context_advice,
    describe_effort,
    suggest_code_fixes,
)


def _report(*issues: Issue) -> OverallReport:
    return OverallReport(
        analysis_id="run",
        timestamp="2026-01-15T09:30:00+00:00",
        status=ReportStatus.COMPLETE,
        overall_score=80,
        grade="B",
        category_scores={},
        issues=issues,
    )


def _issue(
    issue_id: str,
    severity: Severity,
    minutes: int,
    category: Category = Category.IMAGES,
) -> Issue:
    return Issue(
        id=issue_id,
        category=category,
        severity=severity,
        title=issue_id.replace("-", " ").capitalize(),
        estimated_fix_minutes=minutes,
    )


@pytest.mark.parametrize(
    ("minutes", "label"),
    [
        (0, "<1 hour"),
        (60, "<1 hour"),
        (61, "1-4 hours"),
        (240, "1-4 hours"),
        (241, "1-2 days"),
        (960, "1-2 days"),
        (961, "3-5 days"),
        (2400, "3-5 days"),
        (2401, "1-2 weeks"),
        (4800, "1-2 weeks"),
        (4801, "2-4 weeks"),
        (9600, "2-4 weeks"),
        (9601, "1-3 months"),
    ],
)
def test_describe_effort_ranges(minutes: int, label: str) -> None:
    assert describe_effort(minutes) == label


def test_one_recommendation_per_non_empty_bucket_in_order() -> None:
    fill_in = _issue("decorative-image-with-alt", Severity.MINOR, 5)
    quick = _issue("missing-alt-text", Severity.CRITICAL, 10)
    questionable = _issue("text-in-image", Severity.MINOR, 600)
    report = _report(fill_in, quick, questionable)
    matrix = build_priority_matrix(report.issues)

    result = compose(report, matrix, None, PageContext())

    assert [item.bucket for item in result] == [
        PriorityBucket.QUICK_WIN,
        PriorityBucket.FILL_IN,
        PriorityBucket.QUESTIONABLE,
    ]
    assert [item.issue_ids for item in result] == [
        ("missing-alt-text",),
        ("decorative-image-with-alt",),
        ("text-in-image",),
    ]
    assert result[2].time_to_implement == "1-2 days"
    assert result[0].estimated_fix_minutes == 10


def test_description_names_top_issues() -> None:
    issues = [
        _issue("missing-alt-text", Severity.CRITICAL, 10),
        _issue("meaningless-alt-text", Severity.SERIOUS, 10),
    ]
    report = _report(*issues)

    (item,) = compose(report, build_priority_matrix(issues))

    assert item.description.startswith("2 issues in this group.")
    assert "Missing alt text" in item.description
    assert "Meaningless alt text" in item.description
    assert item.priority == "high"


def test_empty_matrix_yields_no_recommendations() -> None:
    report = _report()

    assert compose(report, build_priority_matrix([])) == ()


def test_high_legal_risk_escalates_priority() -> None:
    issue = _issue("missing-alt-text", Severity.CRITICAL, 10)
    report = _report(issue)
    insights = BusinessInsights(
        user_impact_percent=3,
        legal_risk_tier=RiskTier.HIGH,
        critical_issue_count=8,
        time_to_value="<1 hour",
    )

    (item,) = compose(report, build_priority_matrix([issue]), insights)

    assert item.priority == "critical"
    assert "1 critical issue kind(s)" in item.business_impact


def test_context_advice_by_page_context() -> None:
    context = PageContext(
        site_type="ecommerce", industry="healthcare", target_audience="seniors"
    )

    advice = context_advice(context)

    assert [item.id for item in advice] == [
        "ecommerce_accessibility",
        "healthcare_compliance",
        "senior_friendly",
    ]
    assert context_advice(PageContext()) == ()
    assert context_advice(None) == ()


@pytest.mark.parametrize("stack", ["react", "vue", "wordpress"])
def test_code_fixes_follow_tech_stack(stack: str) -> None:
    issue = _issue("missing-alt-text", Severity.CRITICAL, 10)

    (fix,) = suggest_code_fixes([issue], PageContext(tech_stack=stack))

    assert fix.framework == stack
    assert fix.issue_ids == ("missing-alt-text",)
    assert fix.code


def test_code_fixes_skip_unknown_stacks_and_issues() -> None:
    issue = _issue("missing-alt-text", Severity.CRITICAL, 10)
    other = _issue("svg-thing", Severity.MINOR, 10)

    assert suggest_code_fixes([issue], PageContext(tech_stack="angular")) == ()
    assert suggest_code_fixes([other], PageContext(tech_stack="react")) == ()
    assert suggest_code_fixes([issue], None) == ()


def test_code_fix_failure_never_blocks(
    monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    class ExplodingSnippets:
        def get(self, key: str) -> None:
            raise RuntimeError("template store offline")

    monkeypatch.setattr(recommendations, "CODE_SNIPPETS", ExplodingSnippets())
    caplog.set_level(logging.WARNING)
    issue = _issue("missing-alt-text", Severity.CRITICAL, 10)

    result = suggest_code_fixes([issue], PageContext(tech_stack="react"))

    assert result == ()
    assert any(
        "Unable to build code fix suggestions" in record.getMessage()
        for record in caplog.records
    )
