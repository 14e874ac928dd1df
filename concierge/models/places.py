"""Pydantic models for Places."""
from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
from enum import Enum

MIN_LIMIT = 1
# one page of Google text search results
MAX_LIMIT = 20


class SearchStatusEnum(str, Enum):
    """Statuses produced by the service itself (provider statuses pass through)."""
    OK = "OK"
    NO_API_KEY = "NO_API_KEY"
    ERROR = "ERROR"


class PlacesSearchRequest(BaseModel):
    """Request model for place search."""
    query: str = Field("", description="Free-text topic, e.g. 'tacos'")
    type: str = Field("", description="Google place type, e.g. 'restaurant'")
    limit: int = Field(5, description="Maximum number of results, clamped to 1..20")

    @field_validator("limit")
    @classmethod
    def clamp_limit(cls, value: int) -> int:
        return min(max(value, MIN_LIMIT), MAX_LIMIT)


class EnrichedResult(BaseModel):
    """A nearby place with a street-level address and distance from the center."""
    name: str
    address: str
    rating: Optional[float] = None
    user_ratings_total: Optional[int] = None
    place_id: str
    maps_url: str
    website: Optional[str] = None
    distance_m: int
    distance_mi: float


class PlacesSearchResponse(BaseModel):
    """Response for place search. ``status`` is always set; HTTP status is always 200."""
    results: List[EnrichedResult] = []
    status: str
    error_message: Optional[str] = None
    error: Optional[str] = None
