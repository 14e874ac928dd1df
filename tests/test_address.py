import asyncio

import httpx
import pytest

from concierge.enrichment.address import (
    AddressContext,
    build_street_address,
    formatted_address,
    partial_components,
    resolve_address,
    reverse_geocode,
    street_components,
)
from concierge.services.google_maps import GoogleMapsClient
from concierge.utils.geo import Coordinate

from .conftest import NEAR, components

pytestmark = pytest.mark.unit


def run_resolution(fake_maps, details, resolvers=None):
    async def run():
        async with GoogleMapsClient("key", transport=httpx.MockTransport(fake_maps.handle)) as maps:
            ctx = AddressContext(details=details, location=Coordinate(*NEAR), maps=maps)
            if resolvers is None:
                return await resolve_address(ctx)
            return await resolve_address(ctx, resolvers)

    return asyncio.run(run())


def test_build_street_address_full():
    assert build_street_address(components("519", "NW 26th St")) == "519 NW 26th St, Miami, FL 33127"


def test_build_street_address_defaults_city_and_state():
    parts = [{"long_name": "NW 2nd Ave", "types": ["route"]}]
    assert build_street_address(parts) == "NW 2nd Ave, Miami, FL"


def test_build_street_address_city_fallbacks():
    parts = [
        {"long_name": "Wynwood", "types": ["sublocality", "political"]},
        {"long_name": "Florida", "types": ["administrative_area_level_1"]},
    ]
    assert build_street_address(parts) == "Wynwood, Florida"


def test_build_street_address_without_components():
    assert build_street_address(None) == ""
    assert build_street_address([]) == "Miami, FL"


def test_street_components_preferred(fake_maps):
    details = {"address_components": components("2550", "NW 2nd Ave")}

    assert run_resolution(fake_maps, details) == "2550 NW 2nd Ave, Miami, FL 33127"
    assert fake_maps.calls("/geocode/") == []


def test_numbered_route_and_zip_are_not_a_street_number(fake_maps):
    details = {"address_components": components(route="NW 26th St", postal_code="33127")}

    assert run_resolution(fake_maps, details, [street_components]) == ""
    assert run_resolution(fake_maps, {"address_components": components("519", "NW 26th St")},
                          [street_components]) == "519 NW 26th St, Miami, FL 33127"


def test_reverse_geocode_when_no_street_number(fake_maps):
    fake_maps.reverse[Coordinate(*NEAR).as_param()] = "2601 NW 2nd Ave, Miami, FL 33127, USA"
    details = {"address_components": components(route="NW 2nd Ave")}

    assert run_resolution(fake_maps, details) == "2601 NW 2nd Ave, Miami, FL 33127, USA"
    request = fake_maps.calls("/geocode/")[0]
    assert request.url.params["result_type"] == "street_address"


def test_partial_components_when_reverse_geocode_empty(fake_maps):
    details = {
        "address_components": components(route="NW 2nd Ave"),
        "formatted_address": "Wynwood, Miami, FL",
    }
    assert run_resolution(fake_maps, details) == "NW 2nd Ave, Miami, FL 33127"


def test_formatted_address_last_resort(fake_maps):
    details = {"formatted_address": "Wynwood, Miami, FL, USA"}
    assert run_resolution(fake_maps, details) == "Wynwood, Miami, FL, USA"


def test_nothing_resolves_to_empty(fake_maps):
    assert run_resolution(fake_maps, {}) == ""


def test_failing_resolver_is_skipped():
    def handler(request):
        raise httpx.ConnectError("down", request=request)

    class Down:
        def handle(self, request):
            return handler(request)

        def calls(self, endpoint):
            return []

    details = {"address_components": components(route="NW 2nd Ave")}
    assert run_resolution(Down(), details) == "NW 2nd Ave, Miami, FL 33127"


def test_custom_resolver_order(fake_maps):
    details = {
        "address_components": components("2550", "NW 2nd Ave"),
        "formatted_address": "formatted",
    }
    assert run_resolution(fake_maps, details, [formatted_address, street_components]) == "formatted"
    assert run_resolution(fake_maps, details, [reverse_geocode, partial_components]) == (
        "2550 NW 2nd Ave, Miami, FL 33127"
    )
