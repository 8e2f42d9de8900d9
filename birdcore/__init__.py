# =============================================================================
# birdcore/__init__.py
# =============================================================================
# This package contains ALL logic for the bird data tool server.
#
# ARCHITECTURAL RULE:
#   Nothing in this package imports FastMCP, Google ADK, or any orchestration
#   framework.  The only outside dependencies are httpx (the HTTP transport
#   to the bird data API) and python-dotenv (configuration).
#
# THE PIPELINE (one tool call):
#   catalog.py     -> which operations exist and what they accept
#   validation.py  -> check and default the caller's arguments
#   endpoints.py   -> turn (operation, arguments) into one HTTP request
#   client.py      -> send it, get JSON back (or a clean error)
#   formatters.py  -> render the JSON as a Markdown report
#   dispatch.py    -> run the steps above in order
# =============================================================================

from birdcore.catalog import CATALOG, Catalog, OperationSpec, ParamSpec
from birdcore.client import BirdApiClient
from birdcore.config import Settings, load_settings
from birdcore.dispatch import dispatch
from birdcore.errors import (
    BirdDataError,
    FormattingAnomaly,
    InvalidArguments,
    UnknownOperation,
    UpstreamFailure,
)

__all__ = [
    "CATALOG",
    "BirdApiClient",
    "BirdDataError",
    "Catalog",
    "FormattingAnomaly",
    "InvalidArguments",
    "OperationSpec",
    "ParamSpec",
    "Settings",
    "UnknownOperation",
    "UpstreamFailure",
    "dispatch",
    "load_settings",
]
