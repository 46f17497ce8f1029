"""Audit events for missing signal, truncated locations and unknown categories."""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import MutableSequence, Protocol

from ..contracts import reason_codes
from ..domain.models import Category
from .audit_log import append_audit_event

_LOG = logging.getLogger(__name__)

MAX_RECENT_EVENTS = 200
"""Recent events kept in memory; older ones are only in the audit log."""

_EVENTS: MutableSequence[dict[str, object]] = deque(maxlen=MAX_RECENT_EVENTS)

CATEGORY_NO_SIGNAL = "CATEGORY_NO_SIGNAL"
LOCATIONS_TRUNCATED = "LOCATIONS_TRUNCATED"
UNKNOWN_CATEGORY_SKIPPED = "UNKNOWN_CATEGORY_SKIPPED"


class SignalAuditSink(Protocol):
    """Protocol describing a signal audit sink."""

    def emit(self, entry: dict[str, object]) -> None:  # pragma: no cover - trivial
        ...


@dataclass
class InMemorySignalAuditSink:
    """Simple sink used for tests."""

    events: MutableSequence[dict[str, object]]

    def emit(self, entry: dict[str, object]) -> None:
        self.events.append(dict(entry))


class ProductionSignalAuditSink:
    """Sink that writes events to the persistent audit log."""

    __slots__ = ()

    def emit(self, entry: dict[str, object]) -> None:
        try:
            append_audit_event(entry)
        except Exception as exc:  # pragma: no cover
            _LOG.warning("Unable to record signal audit event: %s", exc)


_IN_MEMORY_SINK = InMemorySignalAuditSink(events=_EVENTS)
_DEFAULT_PRODUCTION_SINK: SignalAuditSink = ProductionSignalAuditSink()
_PRODUCTION_SINK: SignalAuditSink | None = _DEFAULT_PRODUCTION_SINK


def set_production_signal_audit_sink(sink: SignalAuditSink | None) -> None:
    """Override the production audit sink (for testing)."""

    global _PRODUCTION_SINK
    _PRODUCTION_SINK = sink


def reset_production_signal_audit_sink() -> None:
    set_production_signal_audit_sink(_DEFAULT_PRODUCTION_SINK)


def _emit(entry: dict[str, object]) -> None:
    _IN_MEMORY_SINK.emit(entry)
    if _PRODUCTION_SINK is not None:
        _PRODUCTION_SINK.emit(entry)


def record_no_signal(category: Category, reason_code: str) -> None:
    """Record that a category carries a neutral score instead of evidence."""

    _emit(
        {
            "event": CATEGORY_NO_SIGNAL,
            "category": category.value,
            "reason_code": reason_code,
        }
    )


def record_truncation(category: Category, issue_id: str, seen: int, kept: int) -> None:
    """Record that an issue's locations were cut down to the preview limit."""

    _emit(
        {
            "event": LOCATIONS_TRUNCATED,
            "category": category.value,
            "issue_id": issue_id,
            "seen": seen,
            "kept": kept,
        }
    )


def record_unknown_category(tag: object) -> None:
    """Record that findings tagged with an unknown category were dropped."""

    _emit(
        {
            "event": UNKNOWN_CATEGORY_SKIPPED,
            "tag": str(tag),
            "reason_code": reason_codes.UNKNOWN_CATEGORY,
        }
    )


def get_signal_events() -> list[dict[str, object]]:
    """Return a snapshot of the most recent signal events."""

    return list(_EVENTS)


def clear_signal_events() -> None:
    """Clear the recorded signal events (testing aid)."""

    _EVENTS.clear()
