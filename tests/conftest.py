"""
Shared fixtures for the bird data server tests.

No test talks to the real bird data API: requests are answered by an
httpx.MockTransport wired to a FakeBirdApi, which records every request so
tests can assert on exactly what was sent (and that nothing was sent).
"""

import json
import os
import sys
from typing import Any, Optional

import httpx
import pytest

# Ensure project root is on sys.path so the flat-layout packages resolve
_PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _PROJECT_ROOT not in sys.path:
    sys.path.insert(0, _PROJECT_ROOT)

from birdcore.client import BirdApiClient  # noqa: E402
from birdcore.config import Settings  # noqa: E402

BASE_URL = "http://birds.test/avibase-mcp"


class FakeBirdApi:
    """Answers every request with one canned response (or exception)."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.status = 200
        self.payload: Any = {"data": []}
        self.raw_body: Optional[bytes] = None
        self.error: Optional[Exception] = None

    def respond_with(self, payload: Any = None, status: int = 200, raw_body: Optional[bytes] = None):
        self.payload = payload
        self.status = status
        self.raw_body = raw_body
        return self

    def fail_with(self, error: Exception):
        self.error = error
        return self

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if self.raw_body is not None:
            return httpx.Response(self.status, content=self.raw_body)
        return httpx.Response(self.status, json=self.payload)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    @property
    def last_request(self) -> httpx.Request:
        assert self.requests, "no request was sent"
        return self.requests[-1]

    def last_json_body(self) -> Any:
        return json.loads(self.last_request.content)


@pytest.fixture
def settings() -> Settings:
    return Settings(base_url=BASE_URL, timeout_seconds=2.0)


@pytest.fixture
def fake_api() -> FakeBirdApi:
    return FakeBirdApi()


@pytest.fixture
def api_client(settings, fake_api):
    return BirdApiClient(settings, transport=fake_api.transport)


# -----------------------------------------------------------------------------
# Sample upstream rows (column names as the API sends them)
# -----------------------------------------------------------------------------
GOLDEN_EAGLE = {
    "Scientific_name": "Aquila chrysaetos",
    "English_name_AviList": "Golden Eagle",
    "English_name_Clements_v2024": "Golden Eagle",
    "Family": "Accipitridae",
    "Family_English_name": "Hawks, Eagles, and Kites",
    "Order": "Accipitriformes",
    "Taxon_rank": "species",
    "IUCN_Red_List_Category": "LC",
    "Authority": "(Linnaeus, 1758)",
    "Range": "Holarctic: North America, Eurasia and North Africa, wintering south to Mexico and the Himalayas",
    "Type_locality": "Sweden",
    "Bibliographic_details": "Syst. Nat. ed. 10 1 p. 88",
    "Species_code_Cornell_Lab": "goleag",
    "AvibaseID": "5B9E4A4C2B52B5DF",
}

DODO = {
    "Scientific_name": "Raphus cucullatus",
    "English_name_AviList": "Dodo",
    "Family": "Columbidae",
    "Order": "Columbiformes",
    "Taxon_rank": "species",
    "IUCN_Red_List_Category": "EX",
    "Extinct_or_possibly_extinct": "Extinct (1662)",
    "Authority": "(Linnaeus, 1758)",
}

# No common name, no IUCN category
BARE_RECORD = {
    "Scientific_name": "Aves incognita",
    "Family": "Incertae sedis",
    "Order": "Passeriformes",
    "Taxon_rank": "species",
    "English_name_AviList": "",
}


@pytest.fixture
def golden_eagle() -> dict:
    return dict(GOLDEN_EAGLE)


@pytest.fixture
def dodo() -> dict:
    return dict(DODO)


@pytest.fixture
def bare_record() -> dict:
    return dict(BARE_RECORD)
