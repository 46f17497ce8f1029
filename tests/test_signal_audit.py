"""Signal audit events: in-memory capture and production sink routing."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from pagesage.domain.models import Category
from pagesage.services import signal_audit
from pagesage.services.audit_log import (
    AuditConfig,
    reset_audit_config,
    set_audit_config,
)
from pagesage.services.signal_audit import InMemorySignalAuditSink


@pytest.fixture(autouse=True)
def _clean_sinks() -> None:
    signal_audit.clear_signal_events()
    yield
    signal_audit.clear_signal_events()
    signal_audit.reset_production_signal_audit_sink()
    reset_audit_config()


def test_no_signal_event_is_recorded() -> None:
    signal_audit.record_no_signal(Category.FORMS, "probe_timeout")

    assert signal_audit.get_signal_events() == [
        {
            "event": signal_audit.CATEGORY_NO_SIGNAL,
            "category": "forms",
            "reason_code": "probe_timeout",
        }
    ]


def test_truncation_event_carries_counts() -> None:
    signal_audit.record_truncation(Category.IMAGES, "missing-alt-text", 12, 5)

    (event,) = signal_audit.get_signal_events()
    assert event["event"] == signal_audit.LOCATIONS_TRUNCATED
    assert (event["seen"], event["kept"]) == (12, 5)


def test_events_snapshot_is_a_copy() -> None:
    signal_audit.record_no_signal(Category.SEO, "probe_failed")

    snapshot = signal_audit.get_signal_events()
    snapshot.clear()

    assert len(signal_audit.get_signal_events()) == 1


def test_production_sink_can_be_replaced() -> None:
    captured: list[dict[str, object]] = []
    signal_audit.set_production_signal_audit_sink(InMemorySignalAuditSink(captured))

    signal_audit.record_no_signal(Category.ARIA, "probe_error")

    assert [entry["category"] for entry in captured] == ["aria"]


def test_production_sink_can_be_disabled() -> None:
    signal_audit.set_production_signal_audit_sink(None)

    signal_audit.record_no_signal(Category.ARIA, "probe_error")

    assert len(signal_audit.get_signal_events()) == 1


def test_default_sink_writes_audit_log(tmp_path: Path) -> None:
    config = AuditConfig.in_directory(tmp_path)
    set_audit_config(config)

    signal_audit.record_truncation(Category.NAVIGATION, "missing-breadcrumbs", 7, 5)

    (line,) = config.audit_file.read_text(encoding="utf-8").splitlines()
    assert json.loads(line) == {
        "event": "LOCATIONS_TRUNCATED",
        "category": "navigation",
        "issue_id": "missing-breadcrumbs",
        "seen": 7,
        "kept": 5,
    }


def test_recent_events_stay_bounded() -> None:
    signal_audit.set_production_signal_audit_sink(None)

    for index in range(signal_audit.MAX_RECENT_EVENTS + 50):
        signal_audit.record_truncation(Category.IMAGES, f"kind-{index}", 9, 5)

    events = signal_audit.get_signal_events()
    assert len(events) == signal_audit.MAX_RECENT_EVENTS
    assert events[-1]["issue_id"] == f"kind-{signal_audit.MAX_RECENT_EVENTS + 49}"


def test_unknown_category_event() -> None:
    signal_audit.record_unknown_category("colour")

    assert signal_audit.get_signal_events() == [
        {
            "event": signal_audit.UNKNOWN_CATEGORY_SKIPPED,
            "tag": "colour",
            "reason_code": "unknown_category",
        }
    ]
