"""Places API router: street-level Wynwood results from Google Maps."""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Response
from fastapi.responses import PlainTextResponse

from concierge.config import Settings
from concierge.dependencies import get_maps_client, get_overrides, get_settings
from concierge.enrichment import PipelineConfig, PlacesPipeline, VenueOverride
from concierge.models.places import (
    PlacesSearchRequest,
    PlacesSearchResponse,
    SearchStatusEnum,
)
from concierge.services.google_maps import GoogleMapsClient

router = APIRouter(prefix="/places", tags=["places"])
logger = logging.getLogger(__name__)


@router.post("", response_model=PlacesSearchResponse, response_model_exclude_unset=True)
async def search_places(
    payload: Optional[PlacesSearchRequest] = None,
    app_settings: Settings = Depends(get_settings),
    maps: GoogleMapsClient = Depends(get_maps_client),
    overrides: List[VenueOverride] = Depends(get_overrides),
):
    """
    Search open venues near Wynwood Walls.

    Body: {"query": "tacos", "type": "restaurant", "limit": 5}

    Always answers 200. ``status`` is OK, NO_API_KEY, ERROR or the
    provider's own status (e.g. REQUEST_DENIED) passed through.
    """
    request = payload or PlacesSearchRequest()

    if not app_settings.google_maps_api_key:
        logger.warning("Google Maps API key not configured")
        return PlacesSearchResponse(results=[], status=SearchStatusEnum.NO_API_KEY.value)

    pipeline = PlacesPipeline(maps, PipelineConfig.from_settings(app_settings, overrides))
    try:
        return await pipeline.search(request)
    except Exception as exc:
        logger.error(f"Places search failed: {exc}")
        return PlacesSearchResponse(
            results=[], status=SearchStatusEnum.ERROR.value, error=str(exc)
        )


@router.options("")
async def places_options():
    return Response(status_code=200)


@router.api_route("", methods=["GET", "HEAD", "PUT", "PATCH", "DELETE"])
async def places_placeholder():
    return PlainTextResponse("OK")
