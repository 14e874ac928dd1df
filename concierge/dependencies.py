"""Dependencies for FastAPI routes."""
from functools import lru_cache
from typing import AsyncGenerator, List, Optional

import httpx
from fastapi import Depends

from concierge.config import Settings, settings
from concierge.enrichment.overrides import VenueOverride, load_overrides
from concierge.services.google_maps import GoogleMapsClient
from concierge.services.openai_chat import OpenAIChatClient


def get_settings() -> Settings:
    return settings


def get_upstream_transport() -> Optional[httpx.AsyncBaseTransport]:
    """Transport for outbound calls; None means a real network transport."""
    return None


@lru_cache(maxsize=8)
def _cached_overrides(path: Optional[str]) -> List[VenueOverride]:
    return load_overrides(path)


def get_overrides(app_settings: Settings = Depends(get_settings)) -> List[VenueOverride]:
    return _cached_overrides(app_settings.venue_overrides_file)


async def get_maps_client(
    app_settings: Settings = Depends(get_settings),
    transport: Optional[httpx.AsyncBaseTransport] = Depends(get_upstream_transport),
) -> AsyncGenerator[GoogleMapsClient, None]:
    """Provide a Google Maps client for the duration of one request."""
    client = GoogleMapsClient(
        api_key=app_settings.google_maps_api_key or "",
        timeout=app_settings.upstream_timeout,
        transport=transport,
    )
    try:
        yield client
    finally:
        await client.aclose()


async def get_chat_client(
    app_settings: Settings = Depends(get_settings),
    transport: Optional[httpx.AsyncBaseTransport] = Depends(get_upstream_transport),
) -> AsyncGenerator[OpenAIChatClient, None]:
    client = OpenAIChatClient(
        api_key=app_settings.openai_api_key or "",
        model=app_settings.openai_model,
        temperature=app_settings.openai_temperature,
        base_url=app_settings.openai_base_url,
        timeout=app_settings.upstream_timeout,
        transport=transport,
    )
    try:
        yield client
    finally:
        await client.aclose()
