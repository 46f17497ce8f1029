"""JSONL audit trail for PageSage signal events.

Writing is off until the host service calls :func:`set_audit_config`. Disk
problems never reach the analysis: they are logged, at most once per interval
for each kind of failure, and the event is dropped.
"""

from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass
from pathlib import Path

_LOG = logging.getLogger(__name__)
DEFAULT_MAX_AUDIT_BYTES = 1_000_000
BACKUP_SUFFIX = ".1"

_WARNING_INTERVAL_SECONDS = 60.0
_LAST_WARN: dict[str, float] = {}


@dataclass(frozen=True)
class AuditConfig:
    """Where audit lines go and when the file is rolled over."""

    audit_file: Path
    max_bytes: int | None = DEFAULT_MAX_AUDIT_BYTES

    @classmethod
    def in_directory(
        cls, directory: Path | str, max_bytes: int | None = DEFAULT_MAX_AUDIT_BYTES
    ) -> "AuditConfig":
        """Create a config writing ``audit.jsonl`` inside ``directory``.

        A non-positive ``max_bytes`` disables rotation.
        """

        if max_bytes is not None and max_bytes <= 0:
            max_bytes = None
        return cls(audit_file=Path(directory) / "audit.jsonl", max_bytes=max_bytes)

    @property
    def backup_file(self) -> Path:
        return self.audit_file.with_name(self.audit_file.name + BACKUP_SUFFIX)


_CONFIG: AuditConfig | None = None


def set_audit_config(config: AuditConfig | None) -> None:
    """Enable the audit trail with ``config`` or disable it with ``None``."""

    global _CONFIG
    _CONFIG = config


def reset_audit_config() -> None:
    set_audit_config(None)


def get_audit_config() -> AuditConfig | None:
    return _CONFIG


def set_audit_warning_interval(seconds: float | None) -> None:
    """Set the per-failure warning interval; ``None`` warns every time."""

    global _WARNING_INTERVAL_SECONDS
    _WARNING_INTERVAL_SECONDS = 0.0 if seconds is None else max(seconds, 0.0)


def reset_audit_warning_state() -> None:
    _LAST_WARN.clear()


def _warn_limited(kind: str, message: str, *args: object) -> None:
    if _WARNING_INTERVAL_SECONDS > 0:
        now = time.monotonic()
        last = _LAST_WARN.get(kind)
        if last is not None and now - last < _WARNING_INTERVAL_SECONDS:
            return
        _LAST_WARN[kind] = now
    _LOG.warning(message, *args)


def _needs_rotation(config: AuditConfig) -> bool:
    if config.max_bytes is None:
        return False
    try:
        return config.audit_file.stat().st_size >= config.max_bytes
    except FileNotFoundError:
        return False
    except OSError as exc:
        _warn_limited("stat", "Unable to stat audit log %s: %s", config.audit_file, exc)
        return False


def _rotate(config: AuditConfig) -> None:
    """Move the full log aside, replacing any previous backup."""

    try:
        config.audit_file.replace(config.backup_file)
    except OSError as exc:
        _warn_limited(
            "rotate", "Unable to rotate audit log %s: %s", config.audit_file, exc
        )


def append_audit_event(event: dict[str, object]) -> None:
    """Append ``event`` as one JSON line when the audit trail is enabled."""

    config = _CONFIG
    if config is None:
        return

    directory = config.audit_file.parent
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        _warn_limited(
            "mkdir", "Unable to create audit directory %s: %s", directory, exc
        )
        return

    if _needs_rotation(config):
        _rotate(config)

    line = json.dumps(event, ensure_ascii=False, sort_keys=True) + "\n"
    try:
        with config.audit_file.open("a", encoding="utf-8") as handle:
            handle.write(line)
    except OSError as exc:
        _warn_limited(
            "write", "Unable to write audit event to %s: %s", config.audit_file, exc
        )
