# =============================================================================
# birdcore/catalog.py  -  The Tool Catalog (what operations exist)
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Declares, once, the eleven bird data operations: their names, the
#   descriptions the LLM reads to decide when to call them, and a formal
#   parameter schema for each (types, required flags, defaults, enums,
#   numeric bounds).
#
#   The catalog is built at import time and never changes afterwards.
#   Listing it has no side effects, so hosts may ask as often as they like.
#
# TOOL NAMING CONVENTIONS:
#   - get_*     -> Read-only lookup
#   - search_*  -> Name search with optional fuzzy matching
#   - custom_* / execute_* -> Free-form queries forwarded to the API
#   Every operation is read-only.
# =============================================================================

import copy
from dataclasses import dataclass
from typing import Any, Iterator, Optional

# Closed value sets shared with validation and the tool server
TAXONOMY_LEVELS = ("Order", "Family", "Taxon_rank")
IUCN_CATEGORIES = ("CR", "EN", "VU", "NT", "LC", "DD", "EX", "EW")
RANDOM_COUNT_MAX = 50

PARAM_TYPES = ("string", "number", "boolean", "object", "array")


# -----------------------------------------------------------------------------
# ParamSpec - one input parameter
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class ParamSpec:
    name: str
    type: str                                    # One of PARAM_TYPES
    description: str
    required: bool = False
    default: Any = None                          # Applied when absent (optional params only)
    enum: Optional[tuple[str, ...]] = None       # Closed set of legal values
    minimum: Optional[int] = None                # Values below are clamped up
    maximum: Optional[int] = None                # Values above are clamped down
    properties: Optional[dict] = None            # Nested schema for "object" params
    items: Optional[str] = None                  # Item type for "array" params

    def __post_init__(self):
        if self.type not in PARAM_TYPES:
            raise ValueError(f"Unsupported parameter type for {self.name!r}: {self.type!r}")

    def json_schema(self) -> dict:
        schema: dict[str, Any] = {"type": self.type, "description": self.description}
        if self.enum is not None:
            schema["enum"] = list(self.enum)
        if not self.required and self.default is not None:
            schema["default"] = self.default
        if self.minimum is not None:
            schema["minimum"] = self.minimum
        if self.maximum is not None:
            schema["maximum"] = self.maximum
        if self.properties is not None:
            schema["properties"] = copy.deepcopy(self.properties)
        if self.items is not None:
            schema["items"] = {"type": self.items}
        return schema


# -----------------------------------------------------------------------------
# OperationSpec - one tool
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class OperationSpec:
    name: str
    description: str
    params: tuple[ParamSpec, ...] = ()

    @property
    def required(self) -> tuple[str, ...]:
        return tuple(p.name for p in self.params if p.required)

    def param(self, name: str) -> ParamSpec:
        for p in self.params:
            if p.name == name:
                return p
        raise KeyError(f"{self.name} has no parameter {name!r}")

    def input_schema(self) -> dict:
        """JSON Schema for this tool's arguments, as MCP publishes it."""
        return {
            "type": "object",
            "properties": {p.name: p.json_schema() for p in self.params},
            "required": list(self.required),
        }

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema(),
        }


class Catalog:
    """An immutable, ordered collection of OperationSpecs with unique names."""

    def __init__(self, operations):
        ops = tuple(operations)
        index: dict[str, OperationSpec] = {}
        for op in ops:
            if op.name in index:
                raise ValueError(f"Duplicate operation name in catalog: {op.name}")
            index[op.name] = op
        self._operations = ops
        self._index = index

    def __iter__(self) -> Iterator[OperationSpec]:
        return iter(self._operations)

    def __len__(self) -> int:
        return len(self._operations)

    def __contains__(self, name: object) -> bool:
        return name in self._index

    def get(self, name: str) -> Optional[OperationSpec]:
        return self._index.get(name)

    def names(self) -> list[str]:
        return [op.name for op in self._operations]

    def list_operations(self) -> list[dict]:
        """The "list tools" answer: a fresh list of plain dicts, in catalog order."""
        return [op.to_dict() for op in self._operations]


def _limit(default: int, description: Optional[str] = None) -> ParamSpec:
    return ParamSpec(
        name="limit",
        type="number",
        description=description or f"Maximum number of results to return (default: {default})",
        default=default,
        minimum=1,
    )


# =============================================================================
# THE CATALOG
# =============================================================================
CATALOG = Catalog((
    OperationSpec(
        name="get_bird_stats",
        description=(
            "Get comprehensive statistics about the bird dataset including total records, "
            "species count, families, orders, and conservation categories."
        ),
    ),
    OperationSpec(
        name="search_birds",
        description="Search for birds by scientific or common name with fuzzy matching support.",
        params=(
            ParamSpec("query", "string", "Search term (bird name to search for)", required=True),
            ParamSpec(
                "exact", "boolean",
                "Whether to use exact matching (default: false for fuzzy search)",
                default=False,
            ),
            _limit(20),
        ),
    ),
    OperationSpec(
        name="get_birds_by_taxonomy",
        description="Get birds filtered by taxonomic classification (Order, Family, or taxonomic rank).",
        params=(
            ParamSpec("level", "string", "Taxonomic level to filter by", required=True, enum=TAXONOMY_LEVELS),
            ParamSpec(
                "value", "string",
                'Value to filter by (e.g., "Strigiformes" for owls, "Accipitridae" for hawks)',
                required=True,
            ),
            _limit(50),
        ),
    ),
    OperationSpec(
        name="get_conservation_status",
        description=(
            "Get birds by IUCN Red List conservation status (CR=Critically Endangered, "
            "EN=Endangered, VU=Vulnerable, EX=Extinct, etc.)."
        ),
        params=(
            ParamSpec("category", "string", "IUCN Red List category", required=True, enum=IUCN_CATEGORIES),
            _limit(50),
        ),
    ),
    OperationSpec(
        name="get_birds_by_region",
        description="Find birds by geographic region or range (e.g., Madagascar, Australia, Africa, etc.).",
        params=(
            ParamSpec("region", "string", "Geographic region to search for in bird ranges", required=True),
            _limit(50),
        ),
    ),
    OperationSpec(
        name="get_extinct_species",
        description="Get all extinct or possibly extinct bird species.",
        params=(_limit(100),),
    ),
    OperationSpec(
        name="get_birds_by_authority",
        description="Find birds described by a specific taxonomic authority (e.g., Linnaeus, Darwin, etc.).",
        params=(
            ParamSpec("authority", "string", "Name of the taxonomic authority", required=True),
            _limit(50),
        ),
    ),
    OperationSpec(
        name="get_random_birds",
        description="Get a random sample of birds for exploration and discovery.",
        params=(
            ParamSpec(
                "count", "number",
                f"Number of random birds to return (default: 10, max: {RANDOM_COUNT_MAX})",
                default=10,
                minimum=1,
                maximum=RANDOM_COUNT_MAX,
            ),
        ),
    ),
    OperationSpec(
        name="get_bird_report",
        description=(
            "Get a detailed report for a specific bird species including related species "
            "and comprehensive information."
        ),
        params=(
            ParamSpec(
                "scientific_name", "string",
                'Scientific name of the bird species (e.g., "Aquila chrysaetos")',
                required=True,
            ),
        ),
    ),
    OperationSpec(
        name="custom_bird_query",
        description="Perform complex queries with multiple filters for advanced bird data analysis.",
        params=(
            ParamSpec(
                "filters", "object",
                "Object containing field-value pairs for filtering",
                required=True,
                properties={
                    "Family": {"type": "string"},
                    "Order": {"type": "string"},
                    "IUCN_Red_List_Category": {"type": "array", "items": {"type": "string"}},
                    "Taxon_rank": {"type": "string"},
                },
            ),
            _limit(50),
        ),
    ),
    OperationSpec(
        name="execute_jsonata_query",
        description=(
            "Execute a raw JSONata query for advanced data analysis and transformation. "
            "JSONata is a powerful query language for JSON data."
        ),
        params=(
            ParamSpec(
                "query", "string",
                'JSONata query expression (e.g., "$count($[Taxon_rank = \\"species\\"])" to count species)',
                required=True,
            ),
            _limit(50, "Maximum number of results to return for array results (default: 50)"),
        ),
    ),
))
