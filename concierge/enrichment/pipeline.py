"""
Places search pipeline.

search -> detail-fetch -> override-match -> distance-filter -> address-resolve

Each candidate produces an ``EnrichmentOutcome``: either an ``EnrichedResult``
or the reason it was dropped. A failing candidate never aborts the search.
"""
import asyncio
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple

from concierge.config import Settings
from concierge.enrichment.address import (
    DEFAULT_RESOLVERS,
    AddressContext,
    AddressResolver,
    resolve_address,
)
from concierge.enrichment.overrides import VenueOverride, find_override
from concierge.exceptions import UpstreamError, UpstreamStatusError
from concierge.models.places import (
    EnrichedResult,
    PlacesSearchRequest,
    PlacesSearchResponse,
    SearchStatusEnum,
)
from concierge.services.google_maps import GoogleMapsClient
from concierge.utils.geo import Coordinate, haversine_m, meters_to_miles

logger = logging.getLogger(__name__)

MIN_CANDIDATES = 12
OVERFETCH_FACTOR = 3
MAPS_PLACE_URL = "https://www.google.com/maps/place/?q=place_id:{place_id}"


class SkipReason(str, Enum):
    MISSING_PLACE_ID = "missing_place_id"
    NO_DETAILS = "no_details"
    NOT_OPERATIONAL = "not_operational"
    NO_GEOMETRY = "no_geometry"
    OUT_OF_RANGE = "out_of_range"
    UPSTREAM_ERROR = "upstream_error"


@dataclass
class EnrichmentOutcome:
    place_id: Optional[str]
    result: Optional[EnrichedResult] = None
    skip_reason: Optional[SkipReason] = None
    detail: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.result is not None


@dataclass
class PipelineConfig:
    center: Coordinate
    area: str = "Wynwood Miami"
    search_radius_m: int = 1500
    region: Optional[str] = "us"
    max_distance_m: float = 1300
    enforce_distance_cap: bool = True
    strategy: str = "text"
    concurrent: bool = False
    overrides: List[VenueOverride] = field(default_factory=list)
    resolvers: Sequence[AddressResolver] = field(default_factory=lambda: list(DEFAULT_RESOLVERS))

    @classmethod
    def from_settings(
        cls, settings: Settings, overrides: List[VenueOverride]
    ) -> "PipelineConfig":
        return cls(
            center=Coordinate(settings.center_lat, settings.center_lng),
            area=settings.search_area,
            search_radius_m=settings.search_radius_m,
            region=settings.region,
            max_distance_m=settings.max_distance_m,
            enforce_distance_cap=settings.enforce_distance_cap,
            strategy=settings.search_strategy,
            concurrent=settings.concurrent_enrichment,
            overrides=overrides,
        )


def build_search_text(query: Optional[str], type_: Optional[str], area: str) -> str:
    """Topic-biased text query: "<query> in <area>", "<type> in <area>" or "<area>"."""
    query = (query or "").strip()
    type_ = (type_ or "").strip()
    if query:
        return f"{query} in {area}"
    if type_:
        return f"{type_} in {area}"
    return area


def candidate_budget(limit: int) -> int:
    """Over-fetch so distance and status filtering still leave ``limit`` results."""
    return max(limit * OVERFETCH_FACTOR, MIN_CANDIDATES)


class PlacesPipeline:
    """Runs one places search against Google Maps."""

    def __init__(self, maps: GoogleMapsClient, config: PipelineConfig) -> None:
        self.maps = maps
        self.config = config

    async def search(self, request: PlacesSearchRequest) -> PlacesSearchResponse:
        try:
            hits = await self._fetch_candidates(request)
        except UpstreamStatusError as exc:
            return PlacesSearchResponse(
                results=[], status=exc.status, error_message=exc.error_message
            )

        candidates = hits[: candidate_budget(request.limit)]
        results = await self._enrich_all(candidates, request.limit)
        logger.info(
            f"Places search '{request.query or request.type}': "
            f"{len(hits)} hits, {len(candidates)} candidates, {len(results)} results"
        )
        return PlacesSearchResponse(results=results, status=SearchStatusEnum.OK.value)

    async def _fetch_candidates(self, request: PlacesSearchRequest) -> List[Dict[str, Any]]:
        if self.config.strategy == "nearby":
            return await self.maps.nearby_search(
                self.config.center,
                type=request.type.strip() or None,
                keyword=request.query.strip() or None,
            )
        return await self.maps.text_search(
            build_search_text(request.query, request.type, self.config.area),
            self.config.center,
            radius=self.config.search_radius_m,
            type=request.type.strip() or None,
            region=self.config.region,
        )

    async def _enrich_all(
        self, candidates: List[Dict[str, Any]], limit: int
    ) -> List[EnrichedResult]:
        if self.config.concurrent:
            outcomes = await asyncio.gather(
                *(self.enrich_candidate(candidate) for candidate in candidates)
            )
            return [outcome.result for outcome in outcomes if outcome.ok][:limit]

        results: List[EnrichedResult] = []
        for candidate in candidates:
            outcome = await self.enrich_candidate(candidate)
            if outcome.ok:
                results.append(outcome.result)
                if len(results) >= limit:
                    break
        return results

    async def enrich_candidate(self, candidate: Dict[str, Any]) -> EnrichmentOutcome:
        """Enrich one search hit; every failure becomes a skip."""
        place_id = candidate.get("place_id")
        try:
            outcome = await self._enrich(candidate)
        except Exception as exc:
            outcome = EnrichmentOutcome(
                place_id=place_id,
                skip_reason=SkipReason.UPSTREAM_ERROR,
                detail=str(exc),
            )

        if not outcome.ok:
            logger.info(
                f"Skipping candidate {place_id}: {outcome.skip_reason.value}"
                + (f" ({outcome.detail})" if outcome.detail else "")
            )
        return outcome

    async def _enrich(self, candidate: Dict[str, Any]) -> EnrichmentOutcome:
        place_id = candidate.get("place_id")
        if not place_id:
            return EnrichmentOutcome(place_id=None, skip_reason=SkipReason.MISSING_PLACE_ID)

        details = await self.maps.place_details(place_id)
        if not details:
            return EnrichmentOutcome(place_id=place_id, skip_reason=SkipReason.NO_DETAILS)

        business_status = details.get("business_status")
        if business_status and business_status != "OPERATIONAL":
            return EnrichmentOutcome(
                place_id=place_id,
                skip_reason=SkipReason.NOT_OPERATIONAL,
                detail=business_status,
            )

        name = details.get("name") or candidate.get("name") or ""
        override = find_override(name, self.config.overrides)

        resolved_id = details.get("place_id") or place_id
        location = Coordinate.from_geometry(details) or Coordinate.from_geometry(candidate)
        if override and override.geocode_address:
            relocated = await self._relocate(override)
            if relocated:
                new_id, location = relocated
                resolved_id = new_id or resolved_id

        if location is None:
            return EnrichmentOutcome(place_id=place_id, skip_reason=SkipReason.NO_GEOMETRY)

        meters = haversine_m(self.config.center, location)
        if (
            override is None
            and self.config.enforce_distance_cap
            and meters > self.config.max_distance_m
        ):
            return EnrichmentOutcome(
                place_id=place_id,
                skip_reason=SkipReason.OUT_OF_RANGE,
                detail=f"{round(meters)}m",
            )

        if override and override.address:
            address = override.address
        else:
            address = await resolve_address(
                AddressContext(details=details, location=location, maps=self.maps),
                self.config.resolvers,
            )

        website = details.get("website") or None
        if override:
            name = override.name or name
            website = override.website or website
            logger.info(f"Applied venue override for '{name}'")

        result = EnrichedResult(
            name=name,
            address=address,
            rating=_first_present(details, candidate, "rating"),
            user_ratings_total=_first_present(details, candidate, "user_ratings_total"),
            place_id=resolved_id,
            maps_url=MAPS_PLACE_URL.format(place_id=resolved_id),
            website=website,
            distance_m=round(meters),
            distance_mi=meters_to_miles(meters),
        )
        return EnrichmentOutcome(place_id=place_id, result=result)

    async def _relocate(self, override: VenueOverride) -> Optional[Tuple[Optional[str], Coordinate]]:
        """Re-resolve place_id and coordinate from the override's canonical address."""
        match = None
        try:
            match = await self.maps.find_place_from_text(
                override.geocode_address, location_bias=self.config.center
            )
        except UpstreamError as exc:
            logger.warning(f"Override find-place failed for '{override.geocode_address}': {exc}")

        if not match or Coordinate.from_geometry(match) is None:
            try:
                match = await self.maps.geocode(override.geocode_address)
            except UpstreamError as exc:
                logger.warning(f"Override geocode failed for '{override.geocode_address}': {exc}")
                return None
        if not match:
            return None

        location = Coordinate.from_geometry(match)
        if location is None:
            return None
        return match.get("place_id"), location


def _first_present(primary: Dict[str, Any], fallback: Dict[str, Any], key: str) -> Any:
    value = primary.get(key)
    return value if value is not None else fallback.get(key)
