"""Core entities without I/O for the PageSage scoring engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping

from ..contracts import reason_codes


class UnknownCategoryError(ValueError):
    """Raised when a category tag is not one of the fixed probe categories."""


class Category(Enum):
    """Fixed probe categories; each issue belongs to exactly one."""

    ARIA = "aria"
    FORMS = "forms"
    KEYBOARD = "keyboard"
    COLOR_CONTRAST = "color-contrast"
    IMAGES = "images"
    TABLES = "tables"
    STRUCTURE = "structure"
    NAVIGATION = "navigation"
    CONTENT_STRUCTURE = "content-structure"
    TEXT_READABILITY = "text-readability"
    MOBILE = "mobile"
    SEO = "seo"
    TECHNICAL = "technical"

    @classmethod
    def parse(cls, value: "Category | str") -> "Category":
        """Return the category for an enum member or its tag string."""

        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as exc:
            raise UnknownCategoryError("Unsupported probe category.") from exc


class Severity(Enum):
    """Four-point ordinal severity scale."""

    CRITICAL = "critical"
    SERIOUS = "serious"
    MODERATE = "moderate"
    MINOR = "minor"

    @property
    def rank(self) -> int:
        """Higher rank means more severe."""

        return _SEVERITY_RANK[self]

    @classmethod
    def collapse(cls, value: object) -> "Severity":
        """Map any probe vocabulary onto the ordinal scale.

        Unknown or missing values default to :attr:`MODERATE`.
        """

        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return cls.MODERATE
        return SEVERITY_ALIASES.get(value.strip().lower(), cls.MODERATE)


_SEVERITY_RANK = {
    Severity.CRITICAL: 3,
    Severity.SERIOUS: 2,
    Severity.MODERATE: 1,
    Severity.MINOR: 0,
}

SEVERITY_ALIASES: dict[str, Severity] = {
    "critical": Severity.CRITICAL,
    "blocker": Severity.CRITICAL,
    "error": Severity.CRITICAL,
    "serious": Severity.SERIOUS,
    "high": Severity.SERIOUS,
    "major": Severity.SERIOUS,
    "moderate": Severity.MODERATE,
    "medium": Severity.MODERATE,
    "warning": Severity.MODERATE,
    "minor": Severity.MINOR,
    "low": Severity.MINOR,
    "info": Severity.MINOR,
    "notice": Severity.MINOR,
}
"""Probe severity vocabularies collapsed onto :class:`Severity`."""


class BusinessImpact(Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @classmethod
    def parse(cls, value: object) -> "BusinessImpact | None":
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


class Signal(Enum):
    """Whether a probe produced usable evidence for its category."""

    OBSERVED = "observed"
    NO_SIGNAL = reason_codes.NO_SIGNAL
    NOT_APPLICABLE = reason_codes.NOT_APPLICABLE
    VACUOUS = "vacuous"


class ScoreStatus(Enum):
    SCORED = "scored"
    NO_SIGNAL = reason_codes.NO_SIGNAL
    NOT_APPLICABLE = reason_codes.NOT_APPLICABLE


class ReportStatus(Enum):
    COMPLETE = "complete"
    INCOMPLETE = "incomplete"
    INSUFFICIENT_DATA = reason_codes.INSUFFICIENT_DATA


class PriorityBucket(Enum):
    """Impact/effort quadrants, declared in remediation order."""

    QUICK_WIN = "quick_win"
    MAJOR_PROJECT = "major_project"
    FILL_IN = "fill_in"
    QUESTIONABLE = "questionable"


class RiskTier(Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(frozen=True)
class Issue:
    """Canonical record of one detected defect kind within a category."""

    id: str
    category: Category
    severity: Severity
    title: str
    locations: tuple[str, ...] = ()
    occurrences: int = 1
    wcag_criterion: str | None = None
    estimated_fix_minutes: int = 30
    business_impact: BusinessImpact | None = None
    user_benefit: str | None = None

    @property
    def located_count(self) -> int:
        """Number of affected elements, including truncated ones."""

        return max(len(self.locations), self.occurrences)

    def to_mapping(self) -> dict[str, Any]:
        mapping: dict[str, Any] = {
            "id": self.id,
            "category": self.category.value,
            "severity": self.severity.value,
            "title": self.title,
            "locations": list(self.locations),
            "occurrences": self.occurrences,
            "estimated_fix_minutes": self.estimated_fix_minutes,
        }
        if self.wcag_criterion:
            mapping["wcag_criterion"] = self.wcag_criterion
        if self.business_impact is not None:
            mapping["business_impact"] = self.business_impact.value
        if self.user_benefit:
            mapping["user_benefit"] = self.user_benefit
        return mapping


@dataclass(frozen=True)
class CategoryFindings:
    """Normalizer output for one probe: its issues plus its signal state."""

    category: Category
    issues: tuple[Issue, ...]
    signal: Signal
    reason_code: str | None = None


@dataclass(frozen=True)
class Deduction:
    issue_id: str
    reason: str
    occurrences: int
    amount: int

    def to_mapping(self) -> dict[str, Any]:
        return {
            "issue_id": self.issue_id,
            "reason": self.reason,
            "occurrences": self.occurrences,
            "amount": self.amount,
        }


@dataclass(frozen=True)
class CategoryScore:
    """Bounded 0-100 score for a single category."""

    category: Category
    score: int
    status: ScoreStatus = ScoreStatus.SCORED
    deductions: tuple[Deduction, ...] = ()
    issue_count: int = 0

    @property
    def no_signal(self) -> bool:
        return self.status is ScoreStatus.NO_SIGNAL

    @property
    def applicable(self) -> bool:
        return self.status is not ScoreStatus.NOT_APPLICABLE

    @property
    def total_deducted(self) -> int:
        return sum(deduction.amount for deduction in self.deductions)

    def to_mapping(self) -> dict[str, Any]:
        return {
            "category": self.category.value,
            "score": self.score,
            "status": self.status.value,
            "deductions": [deduction.to_mapping() for deduction in self.deductions],
            "issue_count": self.issue_count,
        }


@dataclass(frozen=True)
class Classification:
    impact_score: int
    effort_score: int
    bucket: PriorityBucket


@dataclass(frozen=True)
class ClassifiedIssue:
    issue: Issue
    classification: Classification

    def to_mapping(self) -> dict[str, Any]:
        return {
            "issue_id": self.issue.id,
            "category": self.issue.category.value,
            "impact_score": self.classification.impact_score,
            "effort_score": self.classification.effort_score,
        }


@dataclass(frozen=True)
class PriorityMatrix:
    """Classified issues grouped by bucket, preserving issue order."""

    entries: tuple[ClassifiedIssue, ...] = ()

    def bucket(self, bucket: PriorityBucket) -> tuple[ClassifiedIssue, ...]:
        return tuple(
            entry for entry in self.entries if entry.classification.bucket is bucket
        )

    def non_empty_buckets(self) -> tuple[PriorityBucket, ...]:
        return tuple(bucket for bucket in PriorityBucket if self.bucket(bucket))

    def to_mapping(self) -> dict[str, list[dict[str, Any]]]:
        return {
            bucket.value: [entry.to_mapping() for entry in self.bucket(bucket)]
            for bucket in PriorityBucket
        }


@dataclass(frozen=True)
class PageContext:
    """What kind of site the analyzed page belongs to."""

    site_type: str = "unknown"
    industry: str = "unknown"
    target_audience: str = "unknown"
    tech_stack: str = "unknown"

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any] | None) -> "PageContext":
        """Build a context from loosely-typed detector output."""

        if not isinstance(raw, Mapping):
            return cls()

        def _text(*keys: str) -> str:
            for key in keys:
                value = raw.get(key)
                if isinstance(value, str) and value.strip():
                    return value.strip().lower()
            return "unknown"

        return cls(
            site_type=_text("site_type", "siteType", "type"),
            industry=_text("industry"),
            target_audience=_text("target_audience", "targetAudience"),
            tech_stack=_text("tech_stack", "techStack"),
        )

    @property
    def is_ecommerce(self) -> bool:
        return self.site_type == "ecommerce"


@dataclass(frozen=True)
class RevenueLossEstimate:
    amount: int
    currency: str = "USD"
    period: str = "month"

    def to_mapping(self) -> dict[str, Any]:
        return {
            "amount": self.amount,
            "currency": self.currency,
            "period": self.period,
            "is_estimate": True,
        }


@dataclass(frozen=True)
class RemediationCost:
    development_hours: int
    testing_hours: int
    estimated_cost: int
    potential_benefit: int
    roi_percent: int

    def to_mapping(self) -> dict[str, Any]:
        return {
            "development_hours": self.development_hours,
            "testing_hours": self.testing_hours,
            "estimated_cost": self.estimated_cost,
            "potential_benefit": self.potential_benefit,
            "roi_percent": self.roi_percent,
            "is_estimate": True,
        }


@dataclass(frozen=True)
class BusinessInsights:
    """Heuristic business estimates; never measurements."""

    user_impact_percent: int | None
    legal_risk_tier: RiskTier
    critical_issue_count: int
    time_to_value: str
    compliance_requirements: tuple[str, ...] = ()
    improvement_estimates: Mapping[str, int] = field(default_factory=dict)
    remediation_cost: RemediationCost | None = None
    estimated_revenue_loss: RevenueLossEstimate | None = None

    def to_mapping(self) -> dict[str, Any]:
        mapping: dict[str, Any] = {
            "user_impact_percent": self.user_impact_percent,
            "legal_risk_tier": self.legal_risk_tier.value,
            "critical_issue_count": self.critical_issue_count,
            "time_to_value": self.time_to_value,
            "compliance_requirements": list(self.compliance_requirements),
            "improvement_estimates": dict(self.improvement_estimates),
            "is_estimate": True,
        }
        if self.remediation_cost is not None:
            mapping["remediation_cost"] = self.remediation_cost.to_mapping()
        if self.estimated_revenue_loss is not None:
            mapping["estimated_revenue_loss"] = self.estimated_revenue_loss.to_mapping()
        return mapping


@dataclass(frozen=True)
class OverallReport:
    """Single-run report; later stages derive copies instead of mutating."""

    analysis_id: str
    timestamp: str
    status: ReportStatus
    overall_score: int | None
    grade: str | None
    category_scores: Mapping[Category, CategoryScore]
    issues: tuple[Issue, ...] = ()
    notices: tuple[str, ...] = ()
    priority_matrix: PriorityMatrix | None = None
    business_insights: BusinessInsights | None = None

    @property
    def insufficient_data(self) -> bool:
        return self.status is ReportStatus.INSUFFICIENT_DATA

    @property
    def no_signal_categories(self) -> tuple[Category, ...]:
        return tuple(
            category
            for category, score in self.category_scores.items()
            if score.no_signal
        )

    def to_mapping(self) -> dict[str, Any]:
        mapping: dict[str, Any] = {
            "analysis_id": self.analysis_id,
            "timestamp": self.timestamp,
            "status": self.status.value,
            "overall_score": self.overall_score,
            "grade": self.grade,
            "category_scores": {
                category.value: score.to_mapping()
                for category, score in self.category_scores.items()
            },
            "issues": [issue.to_mapping() for issue in self.issues],
            "notices": list(self.notices),
        }
        if self.priority_matrix is not None:
            mapping["priority_matrix"] = self.priority_matrix.to_mapping()
        if self.business_insights is not None:
            mapping["business_insights"] = self.business_insights.to_mapping()
        return mapping
