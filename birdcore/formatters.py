# =============================================================================
# birdcore/formatters.py  -  JSON -> Markdown Reports
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Renders the API's JSON answer for each operation as one Markdown text
#   report.  Every formatter follows the same skeleton:
#
#     # Title line
#     Summary block (counts from pagination.totalItems when the API sent it)
#     1. **Scientific name**          <- enumerated, 1-indexed records
#        - Common name: ...              with a fixed field subset per tool
#        - Family: ...
#     *Note: Showing 50 of 500 total records; 450 more available...*
#
# PLACEHOLDERS, NOT ERRORS:
#   A record without a common name says "No common name"; one without an
#   IUCN category says "Not assessed"; and so on (see BirdRecord.show).
#   Absent `data` renders as an empty list.  Only a payload of the wrong
#   SHAPE (e.g. a string where a list of records belongs) raises
#   FormattingAnomaly.
#
# CONTEXT BUDGET:
#   Long result lists are capped for display (10 for taxonomy, 15 for
#   regions and authorities, 20 for extinct species) and long text fields
#   (range, bibliography) are cut to an excerpt.
#
# Every function here is pure: the same ApiResponse always gives the same
# text.
# =============================================================================

import json
from typing import Any, Callable, Iterable, Mapping, Optional

from birdcore.errors import FormattingAnomaly
from birdcore.models import NO_RANGE_DATA, ApiResponse, BirdRecord

CATEGORY_NAMES = {
    "CR": "Critically Endangered",
    "EN": "Endangered",
    "VU": "Vulnerable",
    "NT": "Near Threatened",
    "LC": "Least Concern",
    "DD": "Data Deficient",
    "EX": "Extinct",
    "EW": "Extinct in the Wild",
}

TAXONOMY_DISPLAY_LIMIT = 10
REGION_DISPLAY_LIMIT = 15
AUTHORITY_DISPLAY_LIMIT = 15
EXTINCT_DISPLAY_LIMIT = 20

NO_RECORDS = "_No matching records._"


# =============================================================================
# Shared building blocks
# =============================================================================
def _records(operation: str, response: ApiResponse) -> list[BirdRecord]:
    data = response.data
    if data is None:
        return []
    if not isinstance(data, list):
        raise FormattingAnomaly(
            operation, f"expected a list of bird records in 'data', got {_json_type(data)}"
        )
    return [BirdRecord.from_payload(item) for item in data]


def _mapping(operation: str, value: Any, what: str) -> Mapping:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise FormattingAnomaly(operation, f"expected {what} to be an object, got {_json_type(value)}")
    return value


def _count(value: Any) -> str:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return "Unknown"
    if isinstance(value, float) and not value.is_integer():
        return f"{value:,}"
    return f"{int(value):,}"


def _json_type(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    return "object"


def _json_value(value: Any) -> str:
    """Strings as-is; everything else as (pretty-printed) JSON."""
    if isinstance(value, str):
        return value
    return json.dumps(value, indent=2, ensure_ascii=False)


def _enumerate(items: Iterable[Any], render: Callable[[Any], str], sep: str = "\n\n") -> str:
    lines = [f"{i}. {render(item)}" for i, item in enumerate(items, start=1)]
    return sep.join(lines) if lines else NO_RECORDS


def _heading(label: str, shown: int, returned: int) -> str:
    if returned > shown:
        return f"**{label}** (first {shown} of {returned} returned):"
    return f"**{label}:**"


def _more_note(response: ApiResponse, returned: int, noun: str = "records") -> str:
    """Trailing note when the API says there are more results than it sent."""
    if not response.has_next:
        return ""
    total = response.pagination.total_items
    if total is None:
        return f"*Note: Showing {returned} {noun}; more available. Use a higher limit to see more.*"
    remaining = max(total - returned, 0)
    return (
        f"*Note: Showing {returned} of {total:,} total {noun}; "
        f"{remaining:,} more available. Use a higher limit to see more.*"
    )


def _join(*blocks: str) -> str:
    return "\n\n".join(block for block in blocks if block)


# =============================================================================
# get_bird_stats
# =============================================================================
def format_bird_stats(response: ApiResponse, args: dict) -> str:
    stats = _mapping("get_bird_stats", response.data, "'data'")
    categories = stats.get("iucnCategories")
    if isinstance(categories, list) and categories:
        category_text = ", ".join(str(c) for c in categories)
    else:
        category_text = "None listed"

    return _join(
        "# Bird Dataset Statistics",
        "📊 **Dataset Overview:**\n"
        f"- **Total Records:** {_count(stats.get('totalRecords'))}\n"
        f"- **Species:** {_count(stats.get('totalSpecies'))}\n"
        f"- **Families:** {_count(stats.get('totalFamilies'))}\n"
        f"- **Orders:** {_count(stats.get('totalOrders'))}\n"
        f"- **Extinct Species:** {_count(stats.get('extinctSpecies'))}",
        f"🚨 **IUCN Conservation Categories:** {category_text}",
        "This comprehensive dataset contains information about birds worldwide, including "
        "taxonomic classification, conservation status, geographic distribution, and historical data.",
    )


# =============================================================================
# search_birds
# =============================================================================
def _search_item(bird: BirdRecord) -> str:
    return (
        f"**{bird.show('scientific_name')}**\n"
        f"   - Common name: {bird.show('common_name')}\n"
        f"   - Family: {bird.show('family')}\n"
        f"   - Order: {bird.show('order')}\n"
        f"   - Conservation: {bird.show('iucn_category')}\n"
        f"   - Authority: {bird.show('authority')}"
    )


def format_search_birds(response: ApiResponse, args: dict) -> str:
    query = args.get("query", "")
    birds = _records("search_birds", response)
    total = response.total_or(len(birds))
    return _join(
        f'# Search Results for "{query}"',
        f'Found **{total:,}** birds matching "{query}" (showing {len(birds)}):',
        _enumerate(birds, _search_item),
        _more_note(response, len(birds), "results"),
    )


# =============================================================================
# get_birds_by_taxonomy
# =============================================================================
def _taxonomy_item(bird: BirdRecord) -> str:
    return (
        f"**{bird.show('scientific_name')}** ({bird.show('taxon_rank')})\n"
        f"   - Common name: {bird.show('common_name')}\n"
        f"   - Family: {bird.show('family')}\n"
        f"   - Conservation: {bird.show('iucn_category')}"
    )


def format_birds_by_taxonomy(response: ApiResponse, args: dict) -> str:
    birds = _records("get_birds_by_taxonomy", response)
    total = response.total_or(len(birds))
    species = sum(1 for bird in birds if bird.taxon_rank == "species")
    shown = birds[:TAXONOMY_DISPLAY_LIMIT]
    return _join(
        f"# {args.get('level', '')}: {args.get('value', '')}",
        "📊 **Summary:**\n"
        f"- **Total records:** {total:,}\n"
        f"- **Species in results:** {species}",
        _heading("Sample records", len(shown), len(birds)) + "\n" + _enumerate(shown, _taxonomy_item),
        _more_note(response, len(birds)),
    )


# =============================================================================
# get_conservation_status
# =============================================================================
def _conservation_item(bird: BirdRecord) -> str:
    return (
        f"**{bird.show('scientific_name')}**\n"
        f"   - Common name: {bird.show('common_name')}\n"
        f"   - Family: {bird.show('family')}\n"
        f"   - Range: {bird.excerpt('range', 100)}"
    )


def format_conservation_status(response: ApiResponse, args: dict) -> str:
    category = args.get("category", "")
    birds = _records("get_conservation_status", response)
    total = response.total_or(len(birds))
    return _join(
        f"# {CATEGORY_NAMES.get(category, category)} Species",
        f"🚨 **{total:,}** species with IUCN status: **{category}**",
        "**Species list:**\n" + _enumerate(birds, _conservation_item),
        _more_note(response, len(birds), "species"),
    )


# =============================================================================
# get_birds_by_region
# =============================================================================
def _region_item(bird: BirdRecord) -> str:
    return (
        f"**{bird.show('scientific_name')}**\n"
        f"   - Common name: {bird.show('common_name')}\n"
        f"   - Family: {bird.show('family')}\n"
        f"   - Conservation: {bird.show('iucn_category')}"
    )


def format_birds_by_region(response: ApiResponse, args: dict) -> str:
    region = args.get("region", "")
    birds = _records("get_birds_by_region", response)
    total = response.total_or(len(birds))
    shown = birds[:REGION_DISPLAY_LIMIT]
    return _join(
        f"# Birds of {region}",
        f"🌍 **{total:,}** bird records found in {region}",
        _heading("Regional species", len(shown), len(birds)) + "\n" + _enumerate(shown, _region_item),
        _more_note(response, len(birds), "records for this region"),
    )


# =============================================================================
# get_extinct_species
# =============================================================================
def _extinct_item(bird: BirdRecord) -> str:
    return (
        f"**{bird.show('scientific_name')}**\n"
        f"   - Common name: {bird.show('common_name')}\n"
        f"   - Family: {bird.show('family')}\n"
        f"   - Last known: {bird.show('extinct')}\n"
        f"   - Authority: {bird.show('authority')}"
    )


def format_extinct_species(response: ApiResponse, args: dict) -> str:
    birds = _records("get_extinct_species", response)
    total = response.total_or(len(birds))
    shown = birds[:EXTINCT_DISPLAY_LIMIT]
    return _join(
        "# Extinct and Possibly Extinct Species",
        f"💀 **{total:,}** extinct or possibly extinct bird species documented",
        _heading("Extinct species", len(shown), len(birds)) + "\n" + _enumerate(shown, _extinct_item),
        _more_note(response, len(birds), "extinct species"),
        "This represents a significant loss of avian biodiversity and highlights the "
        "importance of conservation efforts.",
    )


# =============================================================================
# get_birds_by_authority
# =============================================================================
def _authority_item(bird: BirdRecord) -> str:
    return (
        f"**{bird.show('scientific_name')}**\n"
        f"   - Common name: {bird.show('common_name')}\n"
        f"   - Family: {bird.show('family')}\n"
        f"   - Described: {bird.show('authority')}\n"
        f"   - Publication: {bird.excerpt('bibliographic_details', 80)}"
    )


def format_birds_by_authority(response: ApiResponse, args: dict) -> str:
    authority = args.get("authority", "")
    birds = _records("get_birds_by_authority", response)
    total = response.total_or(len(birds))
    shown = birds[:AUTHORITY_DISPLAY_LIMIT]
    return _join(
        f"# Birds Described by {authority}",
        f"👨‍🔬 **{total:,}** birds described by {authority}",
        _heading("Historical contributions", len(shown), len(birds)) + "\n"
        + _enumerate(shown, _authority_item),
        _more_note(response, len(birds), f"species described by {authority}"),
    )


# =============================================================================
# get_random_birds
# =============================================================================
def _random_item(bird: BirdRecord) -> str:
    return (
        f"**{bird.show('scientific_name')}**\n"
        f"   - Common name: {bird.show('common_name')}\n"
        f"   - Family: {bird.show('family')} ({bird.show('order')})\n"
        f"   - Conservation: {bird.show('iucn_category')}\n"
        f"   - Range: {bird.excerpt('range', 100)}"
    )


def format_random_birds(response: ApiResponse, args: dict) -> str:
    birds = _records("get_random_birds", response)
    return _join(
        "# Random Bird Discovery",
        f"🎲 **{len(birds)}** randomly selected birds for exploration:",
        _enumerate(birds, _random_item),
        _more_note(response, len(birds)),
        "These random selections showcase the incredible diversity of avian species in the database!",
    )


# =============================================================================
# get_bird_report
# =============================================================================
# The API answers with:
#   data.bird               the full record
#   data.relatedInFamily    a few other records from the same family
#   data.conservationStatus a human-readable status string
#   data.hasUrls            {birdLife, birdsOfTheWorld, originalDescription}
# -----------------------------------------------------------------------------
def _related_item(bird: BirdRecord) -> str:
    return f"**{bird.show('scientific_name')}** - {bird.show('common_name')}"


def format_bird_report(response: ApiResponse, args: dict) -> str:
    op = "get_bird_report"
    report = _mapping(op, response.data, "'data'")
    bird = BirdRecord.from_payload(_mapping(op, report.get("bird"), "'data.bird'"))
    related_raw = report.get("relatedInFamily")
    related = [BirdRecord.from_payload(r) for r in related_raw] if isinstance(related_raw, list) else []
    urls = _mapping(op, report.get("hasUrls"), "'data.hasUrls'")
    status = report.get("conservationStatus") or "Unknown"

    name = bird.show("scientific_name", args.get("scientific_name") or "Unknown")
    alternative = bird.clements_name or bird.birdlife_name or "None listed"

    resources = []
    if urls.get("birdLife"):
        resources.append("- **BirdLife DataZone:** Available")
    if urls.get("birdsOfTheWorld"):
        resources.append("- **Birds of the World:** Available")
    if urls.get("originalDescription"):
        resources.append("- **Original Description:** Available")
    resources.append(f"- **Species Code:** {bird.show('species_code')}")
    resources.append(f"- **AvibaseID:** {bird.show('avibase_id')}")

    if related:
        related_text = _enumerate(related, _related_item, sep="\n")
    else:
        related_text = "No related species data available"

    return _join(
        f"# Detailed Report: {name}",
        "## Basic Information\n"
        f"- **Scientific Name:** {name}\n"
        f"- **Common Name:** {bird.show('common_name', 'No common name available')}\n"
        f"- **Alternative Names:** {alternative}\n"
        f"- **Taxonomic Authority:** {bird.show('authority')}",
        "## Taxonomic Classification\n"
        f"- **Order:** {bird.show('order')}\n"
        f"- **Family:** {bird.show('family')} "
        f"({bird.show('family_english_name', 'Family name not available')})\n"
        f"- **Taxonomic Rank:** {bird.show('taxon_rank')}",
        "## Conservation & Status\n"
        f"- **IUCN Red List Category:** {bird.show('iucn_category')}\n"
        f"- **Conservation Status:** {status}\n"
        f"- **Extinction Status:** {bird.show('extinct', 'Not extinct')}",
        "## Geographic Distribution\n"
        f"**Range:** {bird.show('range', NO_RANGE_DATA + ' available')}",
        "## Additional Information\n"
        f"- **Type Locality:** {bird.show('type_locality')}\n"
        f"- **Original Description:** {bird.show('original_description_title')}\n"
        f"- **Bibliographic Details:** {bird.show('bibliographic_details', 'Not available')}",
        "## External Resources\n" + "\n".join(resources),
        f"## Related Species in {bird.show('family', 'the Same Family')}\n{related_text}",
    )


# =============================================================================
# custom_bird_query
# =============================================================================
def _describe_filters(filters: Mapping) -> str:
    parts = []
    for key, value in filters.items():
        if isinstance(value, list):
            value = ", ".join(str(v) for v in value)
        parts.append(f"{key}: {value}")
    return ", ".join(parts) if parts else "none"


def _custom_item(item: Any) -> str:
    if not isinstance(item, Mapping):
        return _json_value(item)
    bird = BirdRecord.from_payload(item)
    return (
        f"**{bird.show('scientific_name')}**\n"
        f"   - Common name: {bird.show('common_name')}\n"
        f"   - Family: {bird.show('family')}\n"
        f"   - Order: {bird.show('order')}\n"
        f"   - Conservation: {bird.show('iucn_category')}\n"
        f"   - Range: {bird.excerpt('range', 80)}"
    )


def _value_block(value: Any) -> str:
    return f"**Result Type:** {_json_type(value)}\n**Result:** {_json_value(value)}"


def format_custom_query(response: ApiResponse, args: dict) -> str:
    filters = args.get("filters") or {}
    header = f"🎯 **Query Filters:** {_describe_filters(filters)}"
    data = response.data

    if data is not None and not isinstance(data, list):
        return _join("# Custom Query Results", header, _value_block(data))

    items = data or []
    total = response.total_or(len(items))
    return _join(
        "# Custom Query Results",
        f"{header}\n📊 **Results:** {total:,} birds found",
        _enumerate(items, _custom_item),
        _more_note(response, len(items), "matching records"),
    )


# =============================================================================
# execute_jsonata_query
# =============================================================================
# A JSONata expression can evaluate to anything: an array of records, a
# single number ("$count(...)"), an object, a string.  We don't interpret
# the query; we just render whatever came back by its JSON type.
# -----------------------------------------------------------------------------
def format_jsonata_query(response: ApiResponse, args: dict) -> str:
    query = args.get("query", "")
    data = response.data

    if isinstance(data, list):
        total = response.total_or(len(data))
        result_text = (
            f"**Query:** `{query}`\n"
            f"**Result Type:** Array with {total:,} items\n\n"
            "**Results:**\n" + _enumerate(data, _json_value)
        )
        note = _more_note(response, len(data), "results")
    else:
        result_text = f"**Query:** `{query}`\n" + _value_block(data)
        note = ""

    return _join("# JSONata Query Execution", result_text, note)


FORMATTERS: dict[str, Callable[[ApiResponse, dict], str]] = {
    "get_bird_stats": format_bird_stats,
    "search_birds": format_search_birds,
    "get_birds_by_taxonomy": format_birds_by_taxonomy,
    "get_conservation_status": format_conservation_status,
    "get_birds_by_region": format_birds_by_region,
    "get_extinct_species": format_extinct_species,
    "get_birds_by_authority": format_birds_by_authority,
    "get_random_birds": format_random_birds,
    "get_bird_report": format_bird_report,
    "custom_bird_query": format_custom_query,
    "execute_jsonata_query": format_jsonata_query,
}


def format_report(name: str, response: ApiResponse, args: Optional[dict] = None) -> str:
    """Render the report for operation `name`."""
    return FORMATTERS[name](response, args or {})
