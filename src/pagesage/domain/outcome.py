"""Result-style probe outcome passed from the probe boundary into the engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..contracts import reason_codes
from .models import Category


class _ProbeFailedMarker:
    """Sentinel a probe adapter may hand over instead of raw findings."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "PROBE_FAILED"

    def __bool__(self) -> bool:
        return False


PROBE_FAILED = _ProbeFailedMarker()
"""Failure marker accepted anywhere raw findings are accepted."""


@dataclass(frozen=True)
class ProbeOutcome:
    """Either raw findings from a probe or an explicit failure marker.

    Keeping failure explicit lets "no signal" and "zero issues" stay
    distinguishable through the whole pipeline.
    """

    category: Category
    findings: Any = None
    failed: bool = False
    reason_code: str | None = None

    @classmethod
    def success(cls, category: Category | str, findings: Any) -> "ProbeOutcome":
        return cls(category=Category.parse(category), findings=findings)

    @classmethod
    def failure(
        cls, category: Category | str, reason_code: str = reason_codes.PROBE_FAILED
    ) -> "ProbeOutcome":
        return cls(
            category=Category.parse(category),
            findings=None,
            failed=True,
            reason_code=reason_code,
        )
