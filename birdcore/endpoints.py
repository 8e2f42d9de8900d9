# =============================================================================
# birdcore/endpoints.py  -  Operation -> HTTP Request Mapping
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Turns a validated (operation, arguments) pair into exactly one
#   ApiRequest.  The mapping is pure: same input, same request.
#
#   | Operation               | Method | Path / params                     |
#   |-------------------------|--------|-----------------------------------|
#   | get_bird_stats          | GET    | /stats                            |
#   | search_birds            | GET    | /search?q=&exact=&limit=          |
#   | get_birds_by_taxonomy   | GET    | /taxonomy/{level}/{value}?limit=  |
#   | get_conservation_status | GET    | /conservation/{category}?limit=   |
#   | get_birds_by_region     | GET    | /range?region=&limit=             |
#   | get_extinct_species     | GET    | /extinct?limit=                   |
#   | get_birds_by_authority  | GET    | /authority?name=&limit=           |
#   | get_random_birds        | GET    | /random?count=   (count <= 50)    |
#   | get_bird_report         | GET    | /bird/{scientific_name}           |
#   | custom_bird_query       | POST   | /custom  {filters, limit}         |
#   | execute_jsonata_query   | POST   | /query   {query, limit}           |
#
#   Caller-supplied text that lands in a path segment is percent-encoded
#   with no "safe" characters, so "Aquila chrysaetos" becomes
#   "Aquila%20chrysaetos" and a stray "/" can't change the route.
# =============================================================================

from typing import Any, Callable
from urllib.parse import quote

from birdcore.catalog import RANDOM_COUNT_MAX
from birdcore.models import ApiRequest


def _segment(value: Any) -> str:
    return quote(str(value), safe="")


def _param(value: Any) -> str:
    # JSON-style booleans in query strings: exact=true, not exact=True
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _get(path: str, **query: Any) -> ApiRequest:
    return ApiRequest("GET", path, tuple((k, _param(v)) for k, v in query.items()))


def build_stats(args: dict) -> ApiRequest:
    return _get("/stats")


def build_search(args: dict) -> ApiRequest:
    return _get("/search", q=args["query"], exact=args.get("exact", False), limit=args.get("limit", 20))


def build_taxonomy(args: dict) -> ApiRequest:
    path = f"/taxonomy/{_segment(args['level'])}/{_segment(args['value'])}"
    return _get(path, limit=args.get("limit", 50))


def build_conservation(args: dict) -> ApiRequest:
    return _get(f"/conservation/{_segment(args['category'])}", limit=args.get("limit", 50))


def build_region(args: dict) -> ApiRequest:
    return _get("/range", region=args["region"], limit=args.get("limit", 50))


def build_extinct(args: dict) -> ApiRequest:
    return _get("/extinct", limit=args.get("limit", 100))


def build_authority(args: dict) -> ApiRequest:
    return _get("/authority", name=args["authority"], limit=args.get("limit", 50))


def build_random(args: dict) -> ApiRequest:
    # Validation already clamps; clamp again so direct callers can't exceed it
    return _get("/random", count=min(args.get("count", 10), RANDOM_COUNT_MAX))


def build_bird_report(args: dict) -> ApiRequest:
    return _get(f"/bird/{_segment(args['scientific_name'])}")


def build_custom_query(args: dict) -> ApiRequest:
    return ApiRequest("POST", "/custom", body={"filters": args["filters"], "limit": args.get("limit", 50)})


def build_jsonata_query(args: dict) -> ApiRequest:
    return ApiRequest("POST", "/query", body={"query": args["query"], "limit": args.get("limit", 50)})


BUILDERS: dict[str, Callable[[dict], ApiRequest]] = {
    "get_bird_stats": build_stats,
    "search_birds": build_search,
    "get_birds_by_taxonomy": build_taxonomy,
    "get_conservation_status": build_conservation,
    "get_birds_by_region": build_region,
    "get_extinct_species": build_extinct,
    "get_birds_by_authority": build_authority,
    "get_random_birds": build_random,
    "get_bird_report": build_bird_report,
    "custom_bird_query": build_custom_query,
    "execute_jsonata_query": build_jsonata_query,
}


def build_request(name: str, args: dict) -> ApiRequest:
    """Look up the builder for `name` and apply it to validated arguments."""
    return BUILDERS[name](args)
