# ABOUTME: Runtime configuration for provider endpoints, API keys and HTTP behaviour.
# ABOUTME: Loads a .env file with python-dotenv and reads environment variables into a Settings model.

import os

from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv()

FORECAST_URL = "https://weather.visualcrossing.com/VisualCrossingWebServices/rest/services/timeline"
GEOCODE_URL = "https://nominatim.openstreetmap.org"
AIR_QUALITY_URL = "https://airquality.googleapis.com/v1/currentConditions:lookup"
POLLEN_URL = "https://pollen.googleapis.com/v1/forecast:lookup"
MARINE_URL = "https://marine-api.open-meteo.com/v1/marine"
TIDE_URL = "https://api.stormglass.io/v2/tide/extremes/point"
TIDE_CACHE_TTL = 24 * 60 * 60


class Settings(BaseModel):
    """Provider endpoints and credentials used by the fetchers."""

    visualcrossing_api_key: str = ""
    google_api_key: str = ""
    stormglass_api_key: str = ""
    forecast_url: str = FORECAST_URL
    geocode_url: str = GEOCODE_URL
    air_quality_url: str = AIR_QUALITY_URL
    pollen_url: str = POLLEN_URL
    marine_url: str = MARINE_URL
    tide_url: str = TIDE_URL
    tide_cache_ttl: float = TIDE_CACHE_TTL
    http_timeout: float = 10.0
    http_attempts: int = 1
    user_agent: str = "weatherdash/0.1"

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables, keeping defaults for anything unset."""
        env = os.environ
        return cls(
            visualcrossing_api_key=env.get("VISUALCROSSING_API_KEY", ""),
            google_api_key=env.get("GOOGLE_API_KEY", ""),
            stormglass_api_key=env.get("STORMGLASS_API_KEY", ""),
            forecast_url=env.get("WEATHER_FORECAST_URL", FORECAST_URL),
            geocode_url=env.get("WEATHER_GEOCODE_URL", GEOCODE_URL),
            air_quality_url=env.get("WEATHER_AIR_QUALITY_URL", AIR_QUALITY_URL),
            pollen_url=env.get("WEATHER_POLLEN_URL", POLLEN_URL),
            marine_url=env.get("WEATHER_MARINE_URL", MARINE_URL),
            tide_url=env.get("WEATHER_TIDE_URL", TIDE_URL),
            tide_cache_ttl=float(env.get("WEATHER_TIDE_CACHE_TTL", TIDE_CACHE_TTL)),
            http_timeout=float(env.get("WEATHER_HTTP_TIMEOUT", "10")),
            http_attempts=int(env.get("WEATHER_HTTP_ATTEMPTS", "1")),
            user_agent=env.get("WEATHER_USER_AGENT", "weatherdash/0.1"),
        )
