"""Configuration settings for the application."""
from pydantic_settings import BaseSettings
from typing import Literal, Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # CORS origin for the chat widget
    allow_origin: str = "*"

    # OpenAI chat completions
    openai_api_key: Optional[str] = None
    openai_model: str = "gpt-4o-mini"
    openai_temperature: float = 0.3
    openai_base_url: str = "https://api.openai.com/v1"

    # Google Maps Platform (Places + Geocoding, billing ON)
    google_maps_api_key: Optional[str] = None

    # Wynwood center (near Wynwood Walls)
    center_lat: float = 25.8009
    center_lng: float = -80.1997
    search_area: str = "Wynwood Miami"
    search_radius_m: int = 1500
    region: str = "us"

    # ~0.8 mi
    max_distance_m: float = 1300
    enforce_distance_cap: bool = True
    search_strategy: Literal["text", "nearby"] = "text"
    concurrent_enrichment: bool = False

    # JSON list of venue override records; built-in table when unset
    venue_overrides_file: Optional[str] = None

    upstream_timeout: float = 10.0
    log_level: str = "INFO"

    # FastAPI Configuration
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_reload: bool = True

    # Environment
    environment: str = "development"

    class Config:
        env_file = ".env"
        case_sensitive = False


# Global settings instance
settings = Settings()
