"""Reason codes shared by probe outcomes, scores and audit events."""

from __future__ import annotations

PROBE_TIMEOUT = "probe_timeout"
"""The probe did not finish within its time box."""

PROBE_ERROR = "probe_error"
"""The probe raised while inspecting the page."""

PROBE_FAILED = "probe_failed"
"""The probe reported failure itself (error field, testFailed flag, marker)."""

NO_SIGNAL = "no_signal"
"""A category produced no usable evidence and carries a neutral score."""

NOT_APPLICABLE = "not_applicable"
"""The category does not apply to this page (e.g. no tables present)."""

INSUFFICIENT_DATA = "insufficient_data"
"""No observed category was available to compute an overall score."""

UNKNOWN_CATEGORY = "unknown_category"
"""A probe outcome was tagged with a category the engine does not know."""
