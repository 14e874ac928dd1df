"""
Venue overrides: operator-maintained corrections for venues Google gets wrong.

Each record lists the names it applies to and the fields to force. Records
come from a JSON file (``VENUE_OVERRIDES_FILE``) or, when none is configured,
from ``BUILTIN_OVERRIDES``.
"""
import json
import logging
from pathlib import Path
from typing import List, Optional, Union

from pydantic import BaseModel, Field, TypeAdapter

from concierge.utils.normalizers import normalize_name

logger = logging.getLogger(__name__)


class VenueOverride(BaseModel):
    """Canonical data for one venue, matched by normalized name."""
    names: List[str] = Field(..., min_length=1, description="Names or aliases to match")
    name: Optional[str] = Field(None, description="Canonical display name")
    address: Optional[str] = Field(None, description="Canonical street address")
    website: Optional[str] = None
    geocode_address: Optional[str] = Field(
        None, description="Address used to re-resolve place_id and coordinates"
    )

    def matches(self, venue_name: Optional[str]) -> bool:
        normalized = normalize_name(venue_name)
        if not normalized:
            return False
        return any(normalize_name(alias) == normalized for alias in self.names)


BUILTIN_OVERRIDES: List[VenueOverride] = [
    VenueOverride(
        names=["Dante's HiFi", "Dantes Hi-Fi"],
        name="Dante's HiFi",
        address="519 NW 26th St, Miami, FL 33127",
        website="https://danteshifi.com",
        geocode_address="519 NW 26th St, Miami, FL 33127",
    ),
]

_OVERRIDE_LIST = TypeAdapter(List[VenueOverride])


def load_overrides(path: Optional[Union[str, Path]] = None) -> List[VenueOverride]:
    """Load override records from ``path``; fall back to the built-in table."""
    if not path:
        return list(BUILTIN_OVERRIDES)

    raw = json.loads(Path(path).read_text(encoding="utf-8"))
    overrides = _OVERRIDE_LIST.validate_python(raw)
    logger.info(f"Loaded {len(overrides)} venue overrides from {path}")
    return overrides


def find_override(
    venue_name: Optional[str], overrides: List[VenueOverride]
) -> Optional[VenueOverride]:
    for override in overrides:
        if override.matches(venue_name):
            return override
    return None
