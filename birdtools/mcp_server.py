# =============================================================================
# birdtools/mcp_server.py  -  FastMCP Tool Server (ALL bird tools in one place)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Publishes the eleven bird data operations from birdcore/catalog.py as
#   MCP tools.  Each tool publishes its catalog JSON Schema unchanged and
#   hands the raw arguments to birdcore.dispatch(), which validates them,
#   calls the bird data API once, and renders the JSON answer as a Markdown
#   report.
#
# HOW IT WORKS (the flow):
#   1. The host (an AI assistant) asks "what tools exist?" -> tools/list
#   2. It calls a tool by name, e.g. "search_birds" with {"query": "owl"}
#   3. UnknownToolGuard rejects names outside the catalog
#   4. The CatalogTool opens a BirdApiClient and runs dispatch()
#   5. The host receives ONE text block (the report) or ONE labeled error
#
# ERRORS:
#   Every failure (unknown tool, bad arguments, API down, garbage payload)
#   is raised as a FastMCP ToolError with the message
#       "[<kind>] <explanation>"
#   so the host sees isError=true.  The server keeps running.
#
# RUNNING THIS SERVER:
#     a) Standalone over stdio:   python -m birdtools.mcp_server
#                                 (or the `bird-data-mcp` console script)
#     b) Spawned by the console agent (birdagent/explorer_agent.py)
# =============================================================================

import logging
import sys
from typing import Any, Awaitable, Callable, Optional

from dotenv import load_dotenv
from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from fastmcp.server.middleware import Middleware, MiddlewareContext
from fastmcp.tools import Tool
from fastmcp.tools.tool import ToolResult
import httpx
from pydantic import Field

from birdcore.catalog import CATALOG, Catalog, OperationSpec
from birdcore.client import BirdApiClient
from birdcore.config import Settings, load_settings
from birdcore.dispatch import dispatch
from birdcore.errors import BirdDataError, UnknownOperation

SERVER_NAME = "bird-data-server"
SERVER_VERSION = "1.0.0"

# =============================================================================
# Logging Setup
# =============================================================================
# Logs go to STDERR.  STDOUT is the MCP transport; a stray log line there
# would corrupt the JSON-RPC stream and break the host.
#
#   CYAN   incoming tool calls (name + arguments)
#   YELLOW status / failures
#   GREEN  responses (first line + size of the report)
# =============================================================================
_CYAN = "\033[36m"
_GREEN = "\033[32m"
_YELLOW = "\033[33m"
_RESET = "\033[0m"

logger = logging.getLogger("birdtools")


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [MCP] %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


def _log_request(tool_name: str, **params) -> None:
    """Log an incoming tool call with its parameters in CYAN."""
    param_str = ", ".join(f"{k}={v!r}" for k, v in params.items())
    logger.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    """Log an intermediate status message in YELLOW."""
    logger.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_response(tool_name: str, report: str) -> str:
    """Log the report's title line and size in GREEN, then return it."""
    title = report.splitlines()[0] if report else ""
    logger.info(f"{_GREEN}  ← {tool_name} response: {title!r} ({len(report)} chars){_RESET}")
    return report


def _tool_error(operation: str, exc: BirdDataError) -> ToolError:
    """Log a failed call in YELLOW and turn it into the labeled host-facing error."""
    _log_status(f"{operation} failed: {exc.to_dict()}")
    return ToolError(f"[{exc.kind}] {exc.message}")


# =============================================================================
# Catalog-backed tools
# =============================================================================
# Each tool publishes its catalog entry's JSON Schema verbatim and hands the
# raw arguments to birdcore.  Argument checking belongs to
# birdcore.validation; FastMCP never validates these calls itself.
# =============================================================================
class CatalogTool(Tool):
    """An MCP tool whose schema and behaviour come from one catalog entry."""

    call: Callable[[str, dict], Awaitable[str]] = Field(exclude=True)

    @classmethod
    def from_operation(cls, op: OperationSpec, call) -> "CatalogTool":
        return cls(
            name=op.name,
            description=op.description,
            parameters=op.input_schema(),
            call=call,
        )

    async def run(self, arguments: dict[str, Any]) -> ToolResult:
        report = await self.call(self.name, arguments)
        return ToolResult(content=report)


class UnknownToolGuard(Middleware):
    """Answer calls to names outside the catalog with an unknown_operation error."""

    def __init__(self, catalog: Catalog):
        self.catalog = catalog

    async def on_call_tool(self, context: MiddlewareContext, call_next):
        name = context.message.name
        if name not in self.catalog:
            _log_request(name, **(context.message.arguments or {}))
            raise _tool_error(name, UnknownOperation(name))
        return await call_next(context)


# =============================================================================
# Server factory
# =============================================================================
# The tools close over `settings` and `transport`; tests build a server with
# an httpx.MockTransport so no request leaves the process.
# =============================================================================
def create_server(
    settings: Optional[Settings] = None,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    catalog: Catalog = CATALOG,
) -> FastMCP:
    """Build the FastMCP server with every catalog operation registered."""
    settings = settings or load_settings()
    mcp = FastMCP(SERVER_NAME, version=SERVER_VERSION)
    mcp.add_middleware(UnknownToolGuard(catalog))

    async def run(operation: str, arguments: dict) -> str:
        _log_request(operation, **(arguments if isinstance(arguments, dict) else {}))
        try:
            async with BirdApiClient(settings, transport=transport) as client:
                report = await dispatch(catalog, operation, arguments, client)
        except BirdDataError as exc:
            raise _tool_error(operation, exc) from exc
        return _log_response(operation, report)

    for op in catalog:
        mcp.add_tool(CatalogTool.from_operation(op, run))

    return mcp



# =============================================================================
# Module-level server
# =============================================================================
# Settings come from the environment (and a .env file, if present).
# `fastmcp run birdtools/mcp_server.py:mcp` also finds this instance.
# =============================================================================
load_dotenv()
_settings = load_settings()
mcp = create_server(_settings)


def main() -> None:
    configure_logging(_settings.log_level)
    logger.info(f"🦅 Bird Data MCP Server running on stdio (API: {_settings.base_url})")
    mcp.run()


if __name__ == "__main__":
    main()
