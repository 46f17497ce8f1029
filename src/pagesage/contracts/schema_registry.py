"""Utility to surface the report JSON schemas and examples."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Mapping

from jsonschema import Draft7Validator, ValidationError

PACKAGE_ROOT = Path(__file__).resolve().parents[1]
SCHEMA_DIR = PACKAGE_ROOT / "schemas"
EXAMPLE_DIR = SCHEMA_DIR / "examples"

SchemaValidationError = ValidationError
"""Alias for jsonschema.ValidationError.
Keeps callers unaware of the implementation.
"""

SCHEMA_FILES = {
    "analysis_report_v1": "analysis_report_schema_v1.json",
}

EXAMPLE_FILES = {
    "analysis_report_example_min": "analysis_report_example_min.json",
    "analysis_report_example_incomplete": (
        "analysis_report_example_incomplete.json"
    ),
    "analysis_report_example_insufficient": (
        "analysis_report_example_insufficient.json"
    ),
}

EXAMPLE_SCHEMAS = {
    "analysis_report_example_min": "analysis_report_v1",
    "analysis_report_example_incomplete": "analysis_report_v1",
    "analysis_report_example_insufficient": "analysis_report_v1",
}
"""Schema each shipped example must satisfy."""

_SCHEMAS: dict[str, Mapping[str, Any]] = {}
_EXAMPLES: dict[str, Mapping[str, Any]] = {}


def _load_json_file(path: Path) -> Mapping[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        return json.load(handle)


def _schema_path(name: str) -> Path:
    return SCHEMA_DIR / SCHEMA_FILES[name]


def _example_path(name: str) -> Path:
    return EXAMPLE_DIR / EXAMPLE_FILES[name]


def get_schema(name: str) -> Mapping[str, Any]:
    """Return the JSON schema with the given registry name."""

    if name not in _SCHEMAS:
        _SCHEMAS[name] = _load_json_file(_schema_path(name))
    return _SCHEMAS[name]


def get_example(name: str) -> Mapping[str, Any]:
    """Return a representative example document by name."""

    if name not in _EXAMPLES:
        _EXAMPLES[name] = _load_json_file(_example_path(name))
    return _EXAMPLES[name]


def validate(name: str, instance: Any) -> None:
    """Validate an instance against a named schema."""

    schema = get_schema(name)
    Draft7Validator(schema).validate(instance)
