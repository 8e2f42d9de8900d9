"""
Tests for the tool catalog.

Test Categories:
1. Shape - eleven uniquely named operations, in a stable order
2. Schemas - required fields, enums, defaults and bounds as published
3. Wiring - every operation has an endpoint builder and a formatter
"""

import pytest

from birdcore.catalog import CATALOG, IUCN_CATEGORIES, TAXONOMY_LEVELS, Catalog, OperationSpec, ParamSpec
from birdcore.endpoints import BUILDERS
from birdcore.formatters import FORMATTERS

EXPECTED_OPERATIONS = [
    "get_bird_stats",
    "search_birds",
    "get_birds_by_taxonomy",
    "get_conservation_status",
    "get_birds_by_region",
    "get_extinct_species",
    "get_birds_by_authority",
    "get_random_birds",
    "get_bird_report",
    "custom_bird_query",
    "execute_jsonata_query",
]


def test_catalog_lists_eleven_operations_in_order():
    assert CATALOG.names() == EXPECTED_OPERATIONS
    assert len(CATALOG) == 11


def test_every_operation_has_builder_and_formatter():
    for name in CATALOG.names():
        assert name in BUILDERS, name
        assert name in FORMATTERS, name
    assert set(BUILDERS) == set(CATALOG.names())
    assert set(FORMATTERS) == set(CATALOG.names())


def test_list_operations_is_idempotent_and_returns_fresh_copies():
    first = CATALOG.list_operations()
    first[0]["name"] = "tampered"
    first[1]["inputSchema"]["required"].append("bogus")

    second = CATALOG.list_operations()
    assert second[0]["name"] == "get_bird_stats"
    assert second[1]["inputSchema"]["required"] == ["query"]
    assert [op["name"] for op in second] == EXPECTED_OPERATIONS


def test_duplicate_operation_names_are_rejected():
    op = OperationSpec(name="get_bird_stats", description="dup")
    with pytest.raises(ValueError, match="Duplicate"):
        Catalog([op, op])


def test_unknown_parameter_type_is_rejected():
    with pytest.raises(ValueError):
        ParamSpec("x", "integer", "not a supported type")


@pytest.mark.parametrize(
    "name, required",
    [
        ("get_bird_stats", []),
        ("search_birds", ["query"]),
        ("get_birds_by_taxonomy", ["level", "value"]),
        ("get_conservation_status", ["category"]),
        ("get_birds_by_region", ["region"]),
        ("get_extinct_species", []),
        ("get_birds_by_authority", ["authority"]),
        ("get_random_birds", []),
        ("get_bird_report", ["scientific_name"]),
        ("custom_bird_query", ["filters"]),
        ("execute_jsonata_query", ["query"]),
    ],
)
def test_required_parameters(name, required):
    schema = CATALOG.get(name).input_schema()
    assert schema["type"] == "object"
    assert schema["required"] == required


def test_enumerated_parameters():
    taxonomy = CATALOG.get("get_birds_by_taxonomy").input_schema()
    assert taxonomy["properties"]["level"]["enum"] == list(TAXONOMY_LEVELS) == ["Order", "Family", "Taxon_rank"]

    conservation = CATALOG.get("get_conservation_status").input_schema()
    assert conservation["properties"]["category"]["enum"] == list(IUCN_CATEGORIES)
    assert set(IUCN_CATEGORIES) == {"CR", "EN", "VU", "NT", "LC", "DD", "EX", "EW"}


def test_defaults_and_bounds():
    search = CATALOG.get("search_birds").input_schema()["properties"]
    assert search["exact"]["default"] is False
    assert search["limit"]["default"] == 20

    assert CATALOG.get("get_extinct_species").param("limit").default == 100

    count = CATALOG.get("get_random_birds").input_schema()["properties"]["count"]
    assert count["default"] == 10
    assert count["maximum"] == 50


def test_custom_query_filters_schema():
    filters = CATALOG.get("custom_bird_query").input_schema()["properties"]["filters"]
    assert filters["type"] == "object"
    assert set(filters["properties"]) == {"Family", "Order", "IUCN_Red_List_Category", "Taxon_rank"}
    assert filters["properties"]["IUCN_Red_List_Category"]["type"] == "array"


def test_lookup_helpers():
    assert "search_birds" in CATALOG
    assert "fly_away" not in CATALOG
    assert CATALOG.get("fly_away") is None
    with pytest.raises(KeyError):
        CATALOG.get("search_birds").param("nope")
