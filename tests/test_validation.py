"""
Tests for argument validation: required fields, defaults, coercion,
enums and clamping.
"""

import pytest

from birdcore.catalog import CATALOG
from birdcore.errors import InvalidArguments, UnknownOperation
from birdcore.validation import validate_arguments


def test_unknown_operation():
    with pytest.raises(UnknownOperation) as excinfo:
        validate_arguments(CATALOG, "get_penguin_jokes", {})
    assert excinfo.value.kind == "unknown_operation"
    assert "get_penguin_jokes" in str(excinfo.value)


def test_missing_required_parameter():
    with pytest.raises(InvalidArguments) as excinfo:
        validate_arguments(CATALOG, "search_birds", {"limit": 5})
    assert excinfo.value.kind == "invalid_arguments"
    assert "query" in excinfo.value.message


def test_all_missing_required_parameters_are_named():
    with pytest.raises(InvalidArguments) as excinfo:
        validate_arguments(CATALOG, "get_birds_by_taxonomy", {})
    assert "level" in excinfo.value.message
    assert "value" in excinfo.value.message


def test_defaults_are_applied():
    assert validate_arguments(CATALOG, "search_birds", {"query": "owl"}) == {
        "query": "owl",
        "exact": False,
        "limit": 20,
    }
    assert validate_arguments(CATALOG, "get_extinct_species", None) == {"limit": 100}
    assert validate_arguments(CATALOG, "get_random_birds", {}) == {"count": 10}
    assert validate_arguments(CATALOG, "get_bird_stats", {}) == {}


def test_random_count_is_clamped_to_fifty():
    assert validate_arguments(CATALOG, "get_random_birds", {"count": 100}) == {"count": 50}


def test_limits_below_minimum_are_clamped_up():
    args = validate_arguments(CATALOG, "get_birds_by_region", {"region": "Madagascar", "limit": 0})
    assert args["limit"] == 1


def test_numbers_are_coerced():
    args = validate_arguments(CATALOG, "search_birds", {"query": "owl", "limit": "15"})
    assert args["limit"] == 15
    args = validate_arguments(CATALOG, "search_birds", {"query": "owl", "limit": 15.0})
    assert args["limit"] == 15
    assert isinstance(args["limit"], int)


@pytest.mark.parametrize("bad", ["many", True, [5], {"n": 5}])
def test_non_numeric_limit_is_rejected(bad):
    with pytest.raises(InvalidArguments):
        validate_arguments(CATALOG, "search_birds", {"query": "owl", "limit": bad})


def test_fractional_counts_are_truncated():
    args = validate_arguments(CATALOG, "search_birds", {"query": "owl", "limit": 2.5})
    assert args["limit"] == 2
    assert isinstance(args["limit"], int)
    assert validate_arguments(CATALOG, "get_random_birds", {"count": "7.9"}) == {"count": 7}
    assert validate_arguments(CATALOG, "get_random_birds", {"count": 0.4}) == {"count": 1}


@pytest.mark.parametrize("bad", ["nan", float("inf"), "-inf"])
def test_non_finite_limit_is_rejected(bad):
    with pytest.raises(InvalidArguments, match="finite"):
        validate_arguments(CATALOG, "search_birds", {"query": "owl", "limit": bad})


def test_booleans_are_coerced():
    args = validate_arguments(CATALOG, "search_birds", {"query": "owl", "exact": "true"})
    assert args["exact"] is True
    with pytest.raises(InvalidArguments):
        validate_arguments(CATALOG, "search_birds", {"query": "owl", "exact": "sometimes"})


def test_enum_violation_is_rejected():
    with pytest.raises(InvalidArguments) as excinfo:
        validate_arguments(CATALOG, "get_conservation_status", {"category": "XX"})
    assert "CR" in excinfo.value.message

    with pytest.raises(InvalidArguments):
        validate_arguments(CATALOG, "get_birds_by_taxonomy", {"level": "Genus", "value": "Aquila"})


def test_string_parameter_must_be_a_string():
    with pytest.raises(InvalidArguments):
        validate_arguments(CATALOG, "get_bird_report", {"scientific_name": 42})


def test_filters_must_be_an_object():
    with pytest.raises(InvalidArguments):
        validate_arguments(CATALOG, "custom_bird_query", {"filters": "Family=Strigidae"})

    filters = {"Family": "Strigidae", "IUCN_Red_List_Category": ["EN", "CR"]}
    args = validate_arguments(CATALOG, "custom_bird_query", {"filters": filters})
    assert args == {"filters": filters, "limit": 50}


def test_undeclared_arguments_are_dropped_and_input_is_untouched():
    raw = {"query": "owl", "colour": "brown"}
    args = validate_arguments(CATALOG, "search_birds", raw)
    assert "colour" not in args
    assert raw == {"query": "owl", "colour": "brown"}


def test_non_mapping_arguments_are_rejected():
    with pytest.raises(InvalidArguments):
        validate_arguments(CATALOG, "search_birds", ["owl"])
