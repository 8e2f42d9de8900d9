# =============================================================================
# birdcore/client.py  -  The Bird Data API Client
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Sends ONE ApiRequest to the bird data REST API and returns the parsed
#   JSON as an ApiResponse.  Anything that goes wrong on the way
#
#     - connection refused, DNS failure, timeout
#     - a non-2xx HTTP status
#     - a body that isn't JSON, or JSON that isn't an object
#
#   comes back as a single UpstreamFailure carrying the operation name and
#   a short human-readable cause.  The full transport detail goes to the
#   log (stderr), never to the caller.
#
# NO RETRIES:
#   Exactly one request per tool call.  Every request is bounded by the
#   configured timeout (BIRD_API_TIMEOUT, default 15 seconds).
#
# TESTING:
#   Pass `transport=httpx.MockTransport(handler)` to answer requests from
#   a Python function instead of the network.
# =============================================================================

import logging
from typing import Optional

import httpx

from birdcore.config import Settings
from birdcore.errors import UpstreamFailure
from birdcore.models import ApiRequest, ApiResponse

logger = logging.getLogger(__name__)

USER_AGENT = "bird-data-mcp/1.0.0"


def build_async_client(
    settings: Settings,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    """Create an httpx.AsyncClient pointed at the bird data API."""
    return httpx.AsyncClient(
        base_url=settings.base_url,
        timeout=httpx.Timeout(settings.timeout_seconds),
        headers={
            "Accept": "application/json",
            "Content-Type": "application/json",
            "User-Agent": USER_AGENT,
        },
        transport=transport,
    )


class BirdApiClient:
    """Async client for the bird data API.

    Use it as an async context manager so the connection pool is closed:

        async with BirdApiClient(settings) as client:
            response = await client.execute("get_bird_stats", request)
    """

    def __init__(
        self,
        settings: Settings,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings
        self._http = build_async_client(settings, transport=transport)

    async def __aenter__(self) -> "BirdApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def execute(self, operation: str, request: ApiRequest) -> ApiResponse:
        """Send `request` and parse the JSON answer.

        Raises:
            UpstreamFailure: for every transport, status, or body problem.
        """
        target = request.target
        try:
            response = await self._http.request(request.method, target, json=request.body)
        except httpx.TimeoutException as exc:
            logger.error("API request timed out for %s %s: %r", request.method, target, exc)
            raise UpstreamFailure(
                operation,
                f"Failed to fetch data from bird API: request timed out after "
                f"{self.settings.timeout_seconds:g}s",
            ) from exc
        except httpx.HTTPError as exc:
            logger.error("API request error for %s %s: %r", request.method, target, exc)
            raise UpstreamFailure(
                operation, f"Failed to fetch data from bird API: {exc.__class__.__name__}: {exc}"
            ) from exc

        if not response.is_success:
            logger.error(
                "API request failed for %s %s: %s %s", request.method, target,
                response.status_code, response.reason_phrase,
            )
            raise UpstreamFailure(
                operation,
                f"Failed to fetch data from bird API: API request failed: "
                f"{response.status_code} {response.reason_phrase}",
            )

        try:
            payload = response.json()
        except ValueError as exc:
            logger.error("API returned a non-JSON body for %s %s: %r", request.method, target, exc)
            raise UpstreamFailure(
                operation, "Failed to fetch data from bird API: response body is not valid JSON"
            ) from exc

        if not isinstance(payload, dict):
            logger.error(
                "API returned %s instead of a JSON object for %s %s",
                type(payload).__name__, request.method, target,
            )
            raise UpstreamFailure(
                operation, "Failed to fetch data from bird API: response is not a JSON object"
            )

        return ApiResponse.from_json(payload)
