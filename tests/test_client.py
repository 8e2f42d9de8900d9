"""
Tests for BirdApiClient: one request per call, and every failure mode
normalized into UpstreamFailure.
"""

import httpx
import pytest

from birdcore.client import BirdApiClient
from birdcore.config import Settings
from birdcore.errors import UpstreamFailure
from birdcore.models import ApiRequest


@pytest.mark.asyncio
async def test_get_request_joins_base_url_and_parses_json(api_client, fake_api):
    fake_api.respond_with({"data": [{"Scientific_name": "Strix aluco"}], "pagination": {"totalItems": 1, "hasNext": False}})

    async with api_client:
        response = await api_client.execute(
            "search_birds", ApiRequest("GET", "/search", (("q", "tawny owl"), ("limit", "5")))
        )

    assert len(fake_api.requests) == 1
    sent = fake_api.last_request
    assert sent.method == "GET"
    assert sent.url.host == "birds.test"
    assert sent.url.path == "/avibase-mcp/search"
    assert sent.url.params["q"] == "tawny owl"
    assert sent.url.params["limit"] == "5"

    assert response.data == [{"Scientific_name": "Strix aluco"}]
    assert response.pagination.total_items == 1
    assert response.has_next is False


@pytest.mark.asyncio
async def test_post_request_sends_json_body(api_client, fake_api):
    fake_api.respond_with({"data": 42})

    async with api_client:
        response = await api_client.execute(
            "execute_jsonata_query", ApiRequest("POST", "/query", body={"query": "$count($)", "limit": 50})
        )

    assert fake_api.last_request.method == "POST"
    assert fake_api.last_request.url.path == "/avibase-mcp/query"
    assert fake_api.last_json_body() == {"query": "$count($)", "limit": 50}
    assert response.data == 42
    assert response.pagination is None


@pytest.mark.asyncio
async def test_http_error_status_becomes_upstream_failure(api_client, fake_api):
    fake_api.respond_with({"error": "boom"}, status=500)

    async with api_client:
        with pytest.raises(UpstreamFailure) as excinfo:
            await api_client.execute("get_bird_stats", ApiRequest("GET", "/stats"))

    error = excinfo.value
    assert error.kind == "upstream_failure"
    assert error.operation == "get_bird_stats"
    assert "500" in error.message
    assert "get_bird_stats" in error.message
    assert len(fake_api.requests) == 1


@pytest.mark.asyncio
async def test_not_found_becomes_upstream_failure(api_client, fake_api):
    fake_api.respond_with({"error": "no such bird"}, status=404)

    async with api_client:
        with pytest.raises(UpstreamFailure, match="404"):
            await api_client.execute("get_bird_report", ApiRequest("GET", "/bird/Nope"))


@pytest.mark.asyncio
async def test_connection_failure_becomes_upstream_failure(api_client, fake_api):
    fake_api.fail_with(httpx.ConnectError("Connection refused"))

    async with api_client:
        with pytest.raises(UpstreamFailure) as excinfo:
            await api_client.execute("get_bird_stats", ApiRequest("GET", "/stats"))

    assert "ConnectError" in excinfo.value.message
    assert isinstance(excinfo.value.__cause__, httpx.ConnectError)


@pytest.mark.asyncio
async def test_timeout_becomes_upstream_failure(fake_api):
    fake_api.fail_with(httpx.ReadTimeout("timed out"))
    client = BirdApiClient(Settings(base_url="http://birds.test", timeout_seconds=3), transport=fake_api.transport)

    async with client:
        with pytest.raises(UpstreamFailure, match="timed out after 3s"):
            await client.execute("get_random_birds", ApiRequest("GET", "/random", (("count", "10"),)))


@pytest.mark.asyncio
async def test_malformed_json_becomes_upstream_failure(api_client, fake_api):
    fake_api.respond_with(raw_body=b"<html>gateway error</html>")

    async with api_client:
        with pytest.raises(UpstreamFailure, match="not valid JSON"):
            await api_client.execute("get_bird_stats", ApiRequest("GET", "/stats"))


@pytest.mark.asyncio
async def test_non_object_json_becomes_upstream_failure(api_client, fake_api):
    fake_api.respond_with([1, 2, 3])

    async with api_client:
        with pytest.raises(UpstreamFailure, match="not a JSON object"):
            await api_client.execute("get_bird_stats", ApiRequest("GET", "/stats"))


@pytest.mark.asyncio
async def test_transport_detail_is_logged(api_client, fake_api, caplog):
    fake_api.respond_with({}, status=503)

    async with api_client:
        with pytest.raises(UpstreamFailure):
            await api_client.execute("get_bird_stats", ApiRequest("GET", "/stats"))

    assert any("503" in record.getMessage() for record in caplog.records)
