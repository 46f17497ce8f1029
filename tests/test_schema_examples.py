"""Ensure the report schema is exercised by its published examples."""

import copy

import pytest

from pagesage.contracts import schema_registry


def test_all_examples_validate_against_their_schemas() -> None:
    """Every example file should match its declared schema contract."""

    for example_name, schema_name in schema_registry.EXAMPLE_SCHEMAS.items():
        example = schema_registry.get_example(example_name)
        schema_registry.validate(schema_name, example)


def test_every_example_is_registered() -> None:
    assert set(schema_registry.EXAMPLE_SCHEMAS) == set(schema_registry.EXAMPLE_FILES)
    assert set(schema_registry.EXAMPLE_SCHEMAS.values()) <= set(
        schema_registry.SCHEMA_FILES
    )


def test_insufficient_data_requires_null_score() -> None:
    example = copy.deepcopy(
        dict(schema_registry.get_example("analysis_report_example_insufficient"))
    )
    example["overall_score"] = 50

    with pytest.raises(schema_registry.SchemaValidationError):
        schema_registry.validate("analysis_report_v1", example)


def test_unknown_top_level_field_is_rejected() -> None:
    example = copy.deepcopy(
        dict(schema_registry.get_example("analysis_report_example_min"))
    )
    example["debug"] = True

    with pytest.raises(schema_registry.SchemaValidationError):
        schema_registry.validate("analysis_report_v1", example)
