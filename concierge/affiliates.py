"""Affiliate hotel links shared by the chat persona and the redirector."""
from typing import Dict, NamedTuple, Optional


class Affiliate(NamedTuple):
    name: str
    url: str


AFFILIATES: Dict[str, Affiliate] = {
    "arlo": Affiliate(
        "Arlo Wynwood",
        "https://www.hotels.com/affiliates/arlo-wynwood-miami-united-states-of-america.uPxnph9",
    ),
    "sentral": Affiliate(
        "Sentral Wynwood",
        "https://www.hotels.com/affiliates/sentral-wynwood-miami-united-states-of-america.ZuIyBzv",
    ),
    "moxy": Affiliate(
        "Moxy Miami Wynwood",
        "https://www.hotels.com/affiliates/moxy-miami-wynwood-miami-united-states-of-america.qQ45ZN9",
    ),
    "hyde": Affiliate(
        "Hyde Suites Midtown",
        "https://www.hotels.com/affiliates/hyde-suites-midtown-miami-miami-united-states-of-america.Asog0p9",
    ),
}


def resolve_affiliate(key: Optional[str]) -> Optional[str]:
    """Return the affiliate URL for ``key`` (case-insensitive), or None."""
    if not key:
        return None
    affiliate = AFFILIATES.get(key.strip().lower())
    return affiliate.url if affiliate else None
