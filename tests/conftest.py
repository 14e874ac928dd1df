"""
Shared pytest fixtures: fake upstream providers and an app client factory.
"""

import json
from typing import Any, Callable, Dict, List, Optional

import httpx
import pytest
from fastapi.testclient import TestClient

from concierge.config import Settings
from concierge.dependencies import get_settings, get_upstream_transport
from concierge.main import app

CENTER = (25.8009, -80.1997)
# ~350 m north-east of the center
NEAR = (25.8040, -80.1990)
# ~2.1 km north of the center
FAR = (25.8200, -80.1997)


def geometry(lat: float, lng: float) -> Dict[str, Any]:
    return {"location": {"lat": lat, "lng": lng}}


def components(number: str = "", route: str = "", city: str = "Miami",
               state: str = "FL", postal_code: str = "33127") -> List[Dict[str, Any]]:
    """Google-style address_components."""
    parts = [
        (number, ["street_number"]),
        (route, ["route"]),
        (city, ["locality", "political"]),
        (state, ["administrative_area_level_1", "political"]),
        (postal_code, ["postal_code"]),
    ]
    return [{"long_name": value, "short_name": value, "types": types} for value, types in parts if value]


def place_details(place_id: str, name: str, location=NEAR, **extra) -> Dict[str, Any]:
    details = {
        "place_id": place_id,
        "name": name,
        "business_status": "OPERATIONAL",
        "rating": 4.5,
        "user_ratings_total": 120,
        "geometry": geometry(*location),
        "address_components": components("2550", "NW 2nd Ave"),
        "formatted_address": "2550 NW 2nd Ave, Miami, FL 33127, USA",
        "website": f"https://{place_id}.example.com",
    }
    details.update(extra)
    return details


class FakeGoogleMaps:
    """
    In-memory Google Maps Platform.

    ``details`` values may be a dict, None (no result) or an Exception
    instance, which makes the request fail at the transport level.
    """

    def __init__(self):
        self.search_payload: Dict[str, Any] = {"status": "OK", "results": []}
        self.details: Dict[str, Any] = {}
        self.reverse: Dict[str, Optional[str]] = {}
        self.find_place: Any = {"status": "ZERO_RESULTS", "candidates": []}
        self.geocode: Dict[str, Any] = {"status": "ZERO_RESULTS", "results": []}
        self.requests: List[httpx.Request] = []

    def add(self, details: Dict[str, Any], hit: Optional[Dict[str, Any]] = None) -> None:
        """Register a place as both a search hit and a details record."""
        self.details[details["place_id"]] = details
        self.search_payload["results"].append(
            hit or {"place_id": details["place_id"], "name": details.get("name")}
        )

    def calls(self, endpoint: str) -> List[httpx.Request]:
        return [request for request in self.requests if endpoint in request.url.path]

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        params = request.url.params

        if path.endswith("/place/textsearch/json") or path.endswith("/place/nearbysearch/json"):
            return httpx.Response(200, json=self.search_payload)

        if path.endswith("/place/details/json"):
            record = self.details.get(params["place_id"])
            if isinstance(record, Exception):
                raise httpx.ConnectError(str(record), request=request)
            if record is None:
                return httpx.Response(200, json={"status": "NOT_FOUND"})
            return httpx.Response(200, json={"status": "OK", "result": record})

        if path.endswith("/geocode/json"):
            if "latlng" in params:
                address = self.reverse.get(params["latlng"])
                results = [{"formatted_address": address}] if address else []
                return httpx.Response(
                    200, json={"status": "OK" if results else "ZERO_RESULTS", "results": results}
                )
            return httpx.Response(200, json=self.geocode)

        if path.endswith("/place/findplacefromtext/json"):
            if isinstance(self.find_place, Exception):
                raise httpx.ConnectError(str(self.find_place), request=request)
            return httpx.Response(200, json=self.find_place)

        return httpx.Response(404, json={"status": "NOT_FOUND"})


class FakeOpenAI:
    def __init__(self):
        self.status_code = 200
        self.payload: Any = {
            "choices": [{"message": {"role": "assistant", "content": "Try Arlo Wynwood!"}}]
        }
        self.raw_body: Optional[bytes] = None
        self.error: Optional[Exception] = None
        self.requests: List[httpx.Request] = []

    def sent_json(self, index: int = -1) -> Dict[str, Any]:
        return json.loads(self.requests[index].content)

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise httpx.ConnectError(str(self.error), request=request)
        if self.raw_body is not None:
            return httpx.Response(self.status_code, content=self.raw_body)
        return httpx.Response(self.status_code, json=self.payload)


@pytest.fixture
def fake_maps() -> FakeGoogleMaps:
    return FakeGoogleMaps()


@pytest.fixture
def fake_openai() -> FakeOpenAI:
    return FakeOpenAI()


@pytest.fixture
def upstream_transport(fake_maps, fake_openai) -> httpx.MockTransport:
    """One transport routing by host to the fake providers."""

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.host == "maps.googleapis.com":
            return fake_maps.handle(request)
        if request.url.host == "api.openai.com":
            return fake_openai.handle(request)
        return httpx.Response(502)

    return httpx.MockTransport(handler)


@pytest.fixture
def make_settings() -> Callable[..., Settings]:
    def factory(**overrides) -> Settings:
        values = {
            "google_maps_api_key": "maps-test-key",
            "openai_api_key": "sk-test",
            "venue_overrides_file": None,
        }
        values.update(overrides)
        return Settings(_env_file=None, **values)

    return factory


@pytest.fixture
def make_client(make_settings, upstream_transport):
    """Build a TestClient with settings and upstream transport overridden."""

    def factory(**setting_overrides) -> TestClient:
        app_settings = make_settings(**setting_overrides)
        app.dependency_overrides[get_settings] = lambda: app_settings
        app.dependency_overrides[get_upstream_transport] = lambda: upstream_transport
        return TestClient(app)

    yield factory
    app.dependency_overrides.clear()


@pytest.fixture
def client(make_client) -> TestClient:
    return make_client()
