"""
Street address resolution.

Google's ``formatted_address`` often drops the street number for venues inside
larger lots, so the address is resolved through an ordered list of strategies
and the first non-empty answer wins:

1. address components with a street number
2. reverse geocoding of the venue coordinate (street_address results only)
3. address components without a street number
4. the provider's ``formatted_address``
"""
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence

from concierge.utils.geo import Coordinate
from concierge.exceptions import UpstreamError
from concierge.services.google_maps import GoogleMapsClient

logger = logging.getLogger(__name__)

DEFAULT_CITY = "Miami"
DEFAULT_STATE = "FL"


@dataclass
class AddressContext:
    details: Dict[str, Any]
    location: Coordinate
    maps: GoogleMapsClient


AddressResolver = Callable[[AddressContext], Awaitable[Optional[str]]]


def _component(components: List[Dict[str, Any]], type_: str) -> str:
    for component in components:
        if type_ in (component.get("types") or []):
            return component.get("long_name") or ""
    return ""


def build_street_address(components: Optional[List[Dict[str, Any]]]) -> str:
    """
    Build "<number> <route>, <city>, <state> <zip>" from address components.

    Missing pieces are dropped; city and state default to Miami, FL.
    Returns "" when there are no components at all.
    """
    if components is None:
        return ""

    number = _component(components, "street_number")
    route = _component(components, "route")
    city = (
        _component(components, "locality")
        or _component(components, "sublocality")
        or _component(components, "postal_town")
        or DEFAULT_CITY
    )
    state = _component(components, "administrative_area_level_1") or DEFAULT_STATE
    postal_code = _component(components, "postal_code")

    line1 = " ".join(part for part in (number, route) if part)
    line2 = ", ".join(part for part in (city, state) if part)
    if postal_code:
        line2 = f"{line2} {postal_code}"

    if line1 and line2:
        return f"{line1}, {line2}"
    if route:
        return f"{route}, {line2}"
    return line2


async def street_components(ctx: AddressContext) -> Optional[str]:
    components = ctx.details.get("address_components") or []
    if not _component(components, "street_number"):
        return None
    return build_street_address(components)


async def reverse_geocode(ctx: AddressContext) -> Optional[str]:
    return await ctx.maps.reverse_geocode(ctx.location)


async def partial_components(ctx: AddressContext) -> Optional[str]:
    return build_street_address(ctx.details.get("address_components")) or None


async def formatted_address(ctx: AddressContext) -> Optional[str]:
    return ctx.details.get("formatted_address") or None


DEFAULT_RESOLVERS: List[AddressResolver] = [
    street_components,
    reverse_geocode,
    partial_components,
    formatted_address,
]


async def resolve_address(
    ctx: AddressContext,
    resolvers: Sequence[AddressResolver] = DEFAULT_RESOLVERS,
) -> str:
    """Apply ``resolvers`` in order; the first non-empty value wins."""
    for resolver in resolvers:
        try:
            value = await resolver(ctx)
        except UpstreamError as exc:
            logger.warning(f"Address resolver {resolver.__name__} failed: {exc}")
            continue
        if value:
            return value
    return ""
