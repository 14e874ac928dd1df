"""Async client for the Google Maps Platform web services (Places + Geocoding)."""
import logging
from typing import Any, Dict, List, Optional

import httpx

from concierge.utils.geo import Coordinate
from concierge.exceptions import UpstreamError, UpstreamStatusError

logger = logging.getLogger(__name__)

SERVICE = "google_maps"
BASE_URL = "https://maps.googleapis.com/maps/api"
SEARCH_OK_STATUSES = {"OK", "ZERO_RESULTS"}

DETAIL_FIELDS = [
    "name",
    "business_status",
    "place_id",
    "rating",
    "user_ratings_total",
    "geometry",
    "address_components",
    "formatted_address",
    "website",
]


class GoogleMapsClient:
    """Thin wrapper over the legacy Places and Geocoding JSON endpoints."""

    def __init__(
        self,
        api_key: str,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.api_key = api_key
        self.http_client = httpx.AsyncClient(
            base_url=BASE_URL, timeout=timeout, transport=transport
        )

    async def aclose(self) -> None:
        await self.http_client.aclose()

    async def __aenter__(self) -> "GoogleMapsClient":
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.aclose()

    async def _get(self, path: str, params: Dict[str, Any]) -> Dict[str, Any]:
        """GET ``path`` with the API key attached and return the decoded body."""
        params = {**params, "key": self.api_key}
        try:
            response = await self.http_client.get(path, params=params)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPError as exc:
            logger.error(f"Google Maps {path} error: {exc}")
            raise UpstreamError(SERVICE, str(exc)) from exc
        except ValueError as exc:
            logger.error(f"Google Maps {path} returned invalid JSON: {exc}")
            raise UpstreamError(SERVICE, "invalid JSON body") from exc

    @staticmethod
    def _check_search_status(path: str, payload: Dict[str, Any]) -> None:
        status = payload.get("status")
        if status not in SEARCH_OK_STATUSES:
            logger.warning(
                f"Google Maps {path} status: {status}, error_message: {payload.get('error_message')}"
            )
            raise UpstreamStatusError(SERVICE, status or "ERROR", payload.get("error_message"))

    async def text_search(
        self,
        query: str,
        location: Coordinate,
        radius: int,
        type: Optional[str] = None,
        open_now: bool = True,
        region: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """Text search biased to ``location``. Returns the raw hits."""
        params: Dict[str, Any] = {
            "query": query,
            "location": location.as_param(),
            "radius": str(radius),
        }
        if open_now:
            params["opennow"] = "true"
        if region:
            params["region"] = region
        if type:
            params["type"] = type

        payload = await self._get("/place/textsearch/json", params)
        self._check_search_status("textsearch", payload)
        return payload.get("results") or []

    async def nearby_search(
        self,
        location: Coordinate,
        type: Optional[str] = None,
        keyword: Optional[str] = None,
        open_now: bool = True,
    ) -> List[Dict[str, Any]]:
        """Nearby search ranked by distance from ``location``."""
        params: Dict[str, Any] = {
            "location": location.as_param(),
            "rankby": "distance",
        }
        if open_now:
            params["opennow"] = "true"
        if type:
            params["type"] = type
        if keyword:
            params["keyword"] = keyword

        payload = await self._get("/place/nearbysearch/json", params)
        self._check_search_status("nearbysearch", payload)
        return payload.get("results") or []

    async def place_details(
        self, place_id: str, fields: Optional[List[str]] = None
    ) -> Optional[Dict[str, Any]]:
        params = {
            "place_id": place_id,
            "fields": ",".join(fields or DETAIL_FIELDS),
        }
        payload = await self._get("/place/details/json", params)
        return payload.get("result") or None

    async def reverse_geocode(
        self, location: Coordinate, result_type: str = "street_address"
    ) -> Optional[str]:
        """Formatted street address at ``location``, if Google knows one."""
        params = {"latlng": location.as_param(), "result_type": result_type}
        payload = await self._get("/geocode/json", params)
        results = payload.get("results") or []
        if not results:
            return None
        return results[0].get("formatted_address") or None

    async def geocode(self, address: str) -> Optional[Dict[str, Any]]:
        payload = await self._get("/geocode/json", {"address": address})
        results = payload.get("results") or []
        return results[0] if results else None

    async def find_place_from_text(
        self, text: str, location_bias: Optional[Coordinate] = None
    ) -> Optional[Dict[str, Any]]:
        """First candidate for an address or name, with place_id and geometry."""
        params = {
            "input": text,
            "inputtype": "textquery",
            "fields": "place_id,name,geometry,formatted_address",
        }
        if location_bias is not None:
            params["locationbias"] = f"point:{location_bias.as_param()}"
        payload = await self._get("/place/findplacefromtext/json", params)
        candidates = payload.get("candidates") or []
        return candidates[0] if candidates else None
