"""
Enrichment Module
=================

Turns raw Google search hits into street-addressed, distance-filtered results.

- address: ordered street address resolver strategies
- overrides: operator-maintained venue corrections
- pipeline: search -> details -> override -> distance filter -> address
"""

from .address import (
    AddressContext,
    build_street_address,
    resolve_address,
)
from .overrides import (
    VenueOverride,
    find_override,
    load_overrides,
)
from .pipeline import (
    EnrichmentOutcome,
    PipelineConfig,
    PlacesPipeline,
    SkipReason,
    build_search_text,
)

__all__ = [
    "AddressContext",
    "build_street_address",
    "resolve_address",
    "VenueOverride",
    "find_override",
    "load_overrides",
    "EnrichmentOutcome",
    "PipelineConfig",
    "PlacesPipeline",
    "SkipReason",
    "build_search_text",
]
