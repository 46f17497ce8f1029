"""Normalizer coverage: failure markers, canonical shape and applicability."""

from __future__ import annotations

import logging

import pytest

from pagesage.contracts import reason_codes
from pagesage.domain.models import Category, Severity, Signal, UnknownCategoryError
from pagesage.domain.outcome import PROBE_FAILED, ProbeOutcome
from pagesage.services import signal_audit
from pagesage.services.normalizer import (
    assess_signal,
    is_failure,
    normalize,
    normalize_outcome,
)
from pagesage.services.scoring_config import ScoringConfig

ALL_LANDMARKS = {
    "hasMainLandmark": True,
    "hasNavigationLandmark": True,
    "hasBannerLandmark": True,
}


@pytest.fixture(autouse=True)
def clear_signal_events() -> None:
    """Keep audit events isolated per test."""

    signal_audit.clear_signal_events()
    yield
    signal_audit.clear_signal_events()


@pytest.mark.parametrize(
    "raw",
    [
        None,
        PROBE_FAILED,
        ProbeOutcome.failure("aria"),
        ProbeOutcome.success("aria", None),
        {"error": "Execution context was destroyed"},
        {"summary": {"testFailed": True}, "landmarks": {"hasMainLandmark": False}},
        "not a mapping",
    ],
)
def test_failure_markers_emit_no_issues(raw: object) -> None:
    """A failed probe degrades to no data, never to a synthetic issue."""

    assert is_failure(raw)
    assert normalize(Category.ARIA, raw) == ()
    assert assess_signal(Category.ARIA, raw) is Signal.NO_SIGNAL


def test_empty_error_field_is_not_a_failure() -> None:
    raw = {"error": None, "landmarks": dict(ALL_LANDMARKS)}

    assert not is_failure(raw)
    assert assess_signal("aria", raw) is Signal.OBSERVED


def test_absent_flags_never_count_as_violations() -> None:
    assert normalize(Category.ARIA, {}) == ()
    assert normalize(Category.STRUCTURE, {"hasMain": None}) == ()


def test_aria_counts_and_lists_become_issues() -> None:
    raw = {
        "landmarks": {**ALL_LANDMARKS, "hasMainLandmark": False},
        "ariaLabels": {"emptyAriaLabels": 2},
        "ariaRoles": {"invalidRoles": [{"selector": "div#x"}, "span.y"]},
    }

    issues = normalize("aria", raw)

    by_id = {issue.id: issue for issue in issues}
    assert set(by_id) == {
        "missing-main-landmark",
        "empty-aria-label",
        "invalid-aria-role",
    }
    assert by_id["missing-main-landmark"].locations == ("<body>",)
    assert by_id["empty-aria-label"].occurrences == 2
    assert by_id["invalid-aria-role"].locations == ("div#x", "span.y")
    assert all(issue.category is Category.ARIA for issue in issues)


def test_malformed_field_drops_only_that_issue_kind(
    caplog: pytest.LogCaptureFixture,
) -> None:
    """Wrong-typed fields are skipped per kind; the rest still counts."""

    caplog.set_level(logging.DEBUG, logger="pagesage.services.normalizer")
    raw = {
        "landmarks": "yes",
        "ariaLabels": {"emptyAriaLabels": "three", "invalidLabelledby": True},
        "ariaRoles": {"invalidRoles": "div#x"},
        "hiddenContent": {"hiddenInteractive": 2},
    }

    issues = normalize(Category.ARIA, raw)

    assert [issue.id for issue in issues] == ["hidden-interactive-element"]
    assert any("malformed field" in record.getMessage() for record in caplog.records)


def test_locations_truncated_to_preview_limit_and_audited() -> None:
    selectors = [f"img:nth-of-type({idx})" for idx in range(1, 9)]
    raw = {
        "summary": {"totalImages": 12, "missingAltCount": 8},
        "missingAlt": selectors,
    }

    (issue,) = normalize(Category.IMAGES, raw)

    assert issue.id == "missing-alt-text"
    assert issue.locations == tuple(selectors[:5])
    assert issue.occurrences == 8
    events = signal_audit.get_signal_events()
    assert events == [
        {
            "event": signal_audit.LOCATIONS_TRUNCATED,
            "category": "images",
            "issue_id": "missing-alt-text",
            "seen": 8,
            "kept": 5,
        }
    ]


def test_preview_limit_follows_config() -> None:
    raw = {
        "summary": {"totalImages": 4, "missingAltCount": 4},
        "missingAlt": list("abcd"),
    }
    config = ScoringConfig(location_preview_limit=3)

    (issue,) = normalize(Category.IMAGES, raw, config=config)

    assert issue.locations == ("a", "b", "c")
    assert issue.occurrences == 4


def test_duplicate_ids_are_merged() -> None:
    """Duplicates sum occurrences, keep the worst severity and bound locations."""

    raw = {
        "touchTargets": {"tooSmall": ["a#1", "a#2", "a#3"]},
        "issues": [
            {
                "type": "small_touch_target",
                "severity": "critical",
                "locations": ["b#1", "b#2", "b#3", "b#4"],
            }
        ],
    }

    issues = normalize(Category.MOBILE, raw)

    assert len(issues) == 1
    (issue,) = issues
    assert issue.id == "small-touch-target"
    assert issue.occurrences == 7
    assert issue.severity is Severity.CRITICAL
    assert issue.locations == ("a#1", "a#2", "a#3", "b#1", "b#2")


@pytest.mark.parametrize(
    ("vocabulary", "expected"),
    [
        ("critical", Severity.CRITICAL),
        ("blocker", Severity.CRITICAL),
        ("error", Severity.CRITICAL),
        ("serious", Severity.SERIOUS),
        ("high", Severity.SERIOUS),
        ("major", Severity.SERIOUS),
        ("moderate", Severity.MODERATE),
        ("medium", Severity.MODERATE),
        ("warning", Severity.MODERATE),
        ("minor", Severity.MINOR),
        ("low", Severity.MINOR),
        ("info", Severity.MINOR),
        ("notice", Severity.MINOR),
        ("HIGH ", Severity.SERIOUS),
        ("catastrophic", Severity.MODERATE),
        (None, Severity.MODERATE),
        (3, Severity.MODERATE),
    ],
)
def test_severity_vocabulary_collapses(vocabulary: object, expected: Severity) -> None:
    assert Severity.collapse(vocabulary) is expected
    entry = {"type": "zoom_disabled"}
    if vocabulary is not None:
        entry["severity"] = vocabulary
    (issue,) = normalize(Category.MOBILE, {"issues": [entry]})
    assert issue.severity is expected


def test_free_form_issue_fields_are_mapped() -> None:
    raw = {
        "issues": [
            {
                "type": "missing_viewport",
                "impact": "high",
                "message": "Missing viewport meta tag for mobile optimization",
                "wcagCriterion": "1.4.10",
                "element": {"html": "<head>"},
                "estimatedFixTime": 5,
                "businessImpact": "medium",
                "userBenefit": "Pages fit small screens",
            },
            {"severity": "high"},
            "garbage",
        ]
    }

    (issue,) = normalize(Category.MOBILE, raw)

    mapping = issue.to_mapping()
    assert mapping == {
        "id": "missing-viewport",
        "category": "mobile",
        "severity": "serious",
        "title": "Missing viewport meta tag for mobile optimization",
        "locations": ["<head>"],
        "occurrences": 1,
        "estimated_fix_minutes": 5,
        "wcag_criterion": "1.4.10",
        "business_impact": "medium",
        "user_benefit": "Pages fit small screens",
    }


def test_free_form_issue_defaults_fix_minutes() -> None:
    (issue,) = normalize(Category.NAVIGATION, {"issues": [{"id": "mega-menu"}]})

    assert issue.estimated_fix_minutes == 30
    assert issue.title == "mega-menu"


def test_normalizing_twice_is_deterministic() -> None:
    raw = {
        "interactiveElements": {
            "total": 12,
            "potentiallyInaccessible": ["div.card", "span.link"],
            "withPositiveTabindex": 3,
        },
        "skipLinks": {"total": 0},
        "tabNavigationTest": {"hasLogicalOrder": False},
    }

    assert normalize(Category.KEYBOARD, raw) == normalize(Category.KEYBOARD, raw)


@pytest.mark.parametrize(
    ("category", "raw", "expected"),
    [
        (Category.TABLES, {"totalTables": 0}, Signal.NOT_APPLICABLE),
        (Category.TABLES, {"tableAnalysis": {"total": 0}}, Signal.NOT_APPLICABLE),
        (Category.TABLES, {"totalTables": 2}, Signal.OBSERVED),
        (Category.FORMS, {"totalFormControls": 0}, Signal.NOT_APPLICABLE),
        (Category.FORMS, {"formControls": {"total": 0}}, Signal.NOT_APPLICABLE),
        (Category.FORMS, {"totalFormControls": "many"}, Signal.OBSERVED),
        (Category.IMAGES, {"summary": {"totalImages": 0}}, Signal.NOT_APPLICABLE),
        (Category.KEYBOARD, {"interactiveElements": {"total": 0}}, Signal.VACUOUS),
        (Category.KEYBOARD, {"interactiveElements": {"total": 4}}, Signal.OBSERVED),
        (Category.SEO, {}, Signal.OBSERVED),
    ],
)
def test_applicability_rules(category: Category, raw: dict, expected: Signal) -> None:
    assert assess_signal(category, raw) is expected


def test_inapplicable_categories_emit_no_issues() -> None:
    raw = {"totalTables": 0, "tablesForLayout": 2}

    assert normalize(Category.TABLES, raw) == ()


def test_table_shortfalls_and_scope() -> None:
    raw = {
        "totalTables": 3,
        "tableAnalysis": {
            "total": 3,
            "withCaption": 1,
            "withHeaders": 3,
            "withThead": 1,
            "withScope": 0,
            "complexTables": 2,
        },
    }

    issues = {issue.id: issue for issue in normalize(Category.TABLES, raw)}

    assert issues["table-missing-caption"].occurrences == 2
    assert issues["complex-table-missing-scope"].occurrences == 2
    assert "table-missing-thead" in issues
    assert "table-missing-headers" not in issues


def test_normalize_outcome_records_no_signal() -> None:
    outcome = ProbeOutcome.failure("forms", reason_codes.PROBE_TIMEOUT)

    findings = normalize_outcome(outcome)

    assert findings.signal is Signal.NO_SIGNAL
    assert findings.issues == ()
    assert findings.reason_code == reason_codes.PROBE_TIMEOUT
    assert signal_audit.get_signal_events() == [
        {
            "event": signal_audit.CATEGORY_NO_SIGNAL,
            "category": "forms",
            "reason_code": reason_codes.PROBE_TIMEOUT,
        }
    ]


def test_normalize_outcome_for_success() -> None:
    outcome = ProbeOutcome.success("seo", {"title": {"present": False}})

    findings = normalize_outcome(outcome)

    assert findings.signal is Signal.OBSERVED
    assert [issue.id for issue in findings.issues] == ["missing-title"]
    assert findings.reason_code is None


def test_unknown_category_is_rejected() -> None:
    with pytest.raises(UnknownCategoryError):
        normalize("colour", {})


@pytest.mark.parametrize("bad", [float("nan"), float("inf"), float("-inf")])
def test_non_finite_free_form_numbers_fall_back(bad: float) -> None:
    """Browser probes can hand over NaN or Infinity for counts and fix times."""

    (mobile,) = normalize(
        "mobile", {"issues": [{"id": "zoom_disabled", "count": bad}]}
    )
    (navigation,) = normalize(
        Category.NAVIGATION,
        {"issues": [{"type": "missing-breadcrumbs", "estimatedFixTime": bad}]},
    )

    assert (mobile.id, mobile.occurrences) == ("zoom-disabled", 1)
    assert navigation.estimated_fix_minutes == 30


def test_non_finite_count_keeps_other_categories_running() -> None:
    outcomes = [
        ProbeOutcome.success(
            "mobile", {"issues": [{"id": "x", "count": float("nan")}]}
        ),
        ProbeOutcome.success("aria", {"landmarks": ALL_LANDMARKS}),
    ]

    findings = [normalize_outcome(outcome) for outcome in outcomes]

    assert [item.signal for item in findings] == [Signal.OBSERVED, Signal.OBSERVED]
    assert findings[0].issues[0].occurrences == 1
    assert findings[1].issues == ()
