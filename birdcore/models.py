# =============================================================================
# birdcore/models.py  -  Data Models (the "nouns" of the system)
# =============================================================================
#
# These dataclasses define the shape of everything that flows between the
# bird data API and the reports we hand back to the host.  None of them is
# persisted; each lives for exactly one tool call.
#
# THE ONE RULE FOR UPSTREAM DATA:
#   Nothing the API sends is guaranteed to be there.  A bird record may lack
#   a common name, a family, a conservation category... anything.  So every
#   upstream field is Optional, and every field has a placeholder string that
#   the formatters print instead of "None" or an empty cell.
# =============================================================================

from dataclasses import dataclass, field, fields
from typing import Any, Mapping, Optional
from urllib.parse import quote, urlencode


# -----------------------------------------------------------------------------
# ApiRequest - one outbound HTTP request, fully described
# -----------------------------------------------------------------------------
# Built by endpoints.py, sent by client.py.  Frozen so a builder can't be
# tempted to tweak a request after the fact.
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class ApiRequest:
    """A method + path + query/body, relative to the API base URL."""

    method: str                                  # "GET" or "POST"
    path: str                                    # "/taxonomy/Family/Strigidae"
    query: tuple[tuple[str, str], ...] = ()      # Ordered query parameters
    body: Optional[dict] = None                  # JSON body (POST only)

    @property
    def target(self) -> str:
        """Path plus percent-encoded query string, e.g. "/search?q=bald%20eagle"."""
        if not self.query:
            return self.path
        return f"{self.path}?{urlencode(self.query, quote_via=quote)}"

    def params(self) -> dict[str, str]:
        return dict(self.query)


# -----------------------------------------------------------------------------
# Pagination - the API's "there's more where that came from" record
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class Pagination:
    total_items: Optional[int] = None            # totalItems
    has_next: bool = False                       # hasNext

    @classmethod
    def from_payload(cls, payload: Any) -> Optional["Pagination"]:
        if not isinstance(payload, Mapping):
            return None
        total = payload.get("totalItems")
        if isinstance(total, bool) or not isinstance(total, (int, float)):
            total = None
        return cls(
            total_items=int(total) if total is not None else None,
            has_next=payload.get("hasNext") is True,
        )


# -----------------------------------------------------------------------------
# ApiResponse - the parsed JSON body for one request (the UpstreamResult)
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class ApiResponse:
    """Parsed API answer: a `data` payload plus optional pagination."""

    data: Any = None
    pagination: Optional[Pagination] = None

    @classmethod
    def from_json(cls, payload: Mapping) -> "ApiResponse":
        return cls(
            data=payload.get("data"),
            pagination=Pagination.from_payload(payload.get("pagination")),
        )

    @property
    def has_next(self) -> bool:
        return self.pagination is not None and self.pagination.has_next

    def total_or(self, fallback: int) -> int:
        """pagination.totalItems when the API sent it, else `fallback`."""
        if self.pagination is not None and self.pagination.total_items is not None:
            return self.pagination.total_items
        return fallback


# -----------------------------------------------------------------------------
# Placeholders - what we print when a field is missing
# -----------------------------------------------------------------------------
NO_COMMON_NAME = "No common name"
NOT_ASSESSED = "Not assessed"
UNKNOWN = "Unknown"
NO_RANGE_DATA = "No range data"
NOT_SPECIFIED = "Not specified"
NOT_AVAILABLE = "Not available"


# -----------------------------------------------------------------------------
# BirdRecord - one row of the bird dataset
# -----------------------------------------------------------------------------
# The API uses the dataset's own column names (Scientific_name,
# English_name_AviList, ...).  We map them to snake_case attributes once,
# here, and the formatters only ever talk to BirdRecord.
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class BirdRecord:
    """A loosely-typed bird record.  Every field may be None."""

    scientific_name: Optional[str] = field(default=None, metadata={"key": "Scientific_name", "placeholder": UNKNOWN})
    common_name: Optional[str] = field(default=None, metadata={"key": "English_name_AviList", "placeholder": NO_COMMON_NAME})
    clements_name: Optional[str] = field(default=None, metadata={"key": "English_name_Clements_v2024", "placeholder": NOT_AVAILABLE})
    birdlife_name: Optional[str] = field(default=None, metadata={"key": "English_name_BirdLife_v9", "placeholder": NOT_AVAILABLE})
    family: Optional[str] = field(default=None, metadata={"key": "Family", "placeholder": UNKNOWN})
    family_english_name: Optional[str] = field(default=None, metadata={"key": "Family_English_name", "placeholder": NOT_AVAILABLE})
    order: Optional[str] = field(default=None, metadata={"key": "Order", "placeholder": UNKNOWN})
    taxon_rank: Optional[str] = field(default=None, metadata={"key": "Taxon_rank", "placeholder": UNKNOWN})
    iucn_category: Optional[str] = field(default=None, metadata={"key": "IUCN_Red_List_Category", "placeholder": NOT_ASSESSED})
    authority: Optional[str] = field(default=None, metadata={"key": "Authority", "placeholder": UNKNOWN})
    range: Optional[str] = field(default=None, metadata={"key": "Range", "placeholder": NO_RANGE_DATA})
    extinct: Optional[str] = field(default=None, metadata={"key": "Extinct_or_possibly_extinct", "placeholder": UNKNOWN})
    type_locality: Optional[str] = field(default=None, metadata={"key": "Type_locality", "placeholder": NOT_SPECIFIED})
    original_description_title: Optional[str] = field(default=None, metadata={"key": "Title_of_original_description", "placeholder": NOT_AVAILABLE})
    bibliographic_details: Optional[str] = field(default=None, metadata={"key": "Bibliographic_details", "placeholder": NOT_SPECIFIED})
    species_code: Optional[str] = field(default=None, metadata={"key": "Species_code_Cornell_Lab", "placeholder": NOT_AVAILABLE})
    avibase_id: Optional[str] = field(default=None, metadata={"key": "AvibaseID", "placeholder": NOT_AVAILABLE})

    @classmethod
    def from_payload(cls, payload: Any) -> "BirdRecord":
        """Build a record from one API row.  Non-mappings give an empty record."""
        if not isinstance(payload, Mapping):
            return cls()
        values = {}
        for f in fields(cls):
            raw = payload.get(f.metadata["key"])
            # Empty strings and nulls both mean "absent"
            if raw is None or raw == "":
                continue
            values[f.name] = raw if isinstance(raw, str) else str(raw)
        return cls(**values)

    def show(self, name: str, placeholder: Optional[str] = None) -> str:
        """The field's value, or its placeholder when absent.

        Args:
            name: Attribute name (e.g. "common_name").
            placeholder: Override for this one call site; defaults to the
                field's own placeholder ("No common name", "Not assessed"...).
        """
        value = getattr(self, name)
        if value is not None:
            return value
        if placeholder is not None:
            return placeholder
        return _PLACEHOLDERS[name]

    def excerpt(self, name: str, length: int, placeholder: Optional[str] = None) -> str:
        """First `length` characters of a long text field, followed by "..."."""
        value = getattr(self, name)
        if value is None:
            return self.show(name, placeholder)
        return value[:length] + "..."


_PLACEHOLDERS: dict[str, str] = {f.name: f.metadata["placeholder"] for f in fields(BirdRecord)}
