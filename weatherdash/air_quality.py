# ABOUTME: Air quality adapter for the Google Air Quality current-conditions endpoint.
# ABOUTME: Normalizes every index onto the canonical good-high scale and returns a sentinel on failure.

import logging

import httpx

from weatherdash.deps import DashboardDeps
from weatherdash.models import UNAVAILABLE_AIR_QUALITY, AirQualityRecord, Pollutants
from weatherdash.units import aqi_category, bad_high_to_canonical

logger = logging.getLogger(__name__)

CANONICAL_INDEX = "uaqi"

# Tie-break order for the dominant pollutant.
POLLUTANT_ORDER = ("co", "no2", "o3", "pm10", "pm25")


async def fetch_air_quality(deps: DashboardDeps, latitude: float, longitude: float) -> AirQualityRecord:
    """Fetch current air quality, or the "Unavailable" sentinel if anything goes wrong."""
    try:
        resp = await deps.http_client.post(
            deps.settings.air_quality_url,
            params={"key": deps.settings.google_api_key},
            json={
                "location": {"latitude": latitude, "longitude": longitude},
                "universalAqi": True,
                "extraComputations": ["POLLUTANT_CONCENTRATION"],
            },
        )
        resp.raise_for_status()
        return parse_air_quality(resp.json())
    except (httpx.HTTPError, ValueError, KeyError, TypeError, AttributeError) as e:
        logger.warning("Air quality lookup failed for %s,%s: %s", latitude, longitude, e, exc_info=True)
        return UNAVAILABLE_AIR_QUALITY


def parse_air_quality(data: dict) -> AirQualityRecord:
    """Convert a currentConditions response into an AirQualityRecord.

    The universal AQI already runs 0 (worst) to 100 (best). Any other index is a
    bad-high scale and is flipped first. The label always comes from aqi_category,
    never from the provider.
    """
    if not isinstance(data, dict):
        raise ValueError(f"Unexpected air quality response: {type(data).__name__}")
    indexes = data.get("indexes") or []
    if not indexes:
        raise ValueError("Air quality response has no index data")
    index = next((i for i in indexes if i.get("code") == CANONICAL_INDEX), indexes[0])

    if index.get("code", CANONICAL_INDEX) == CANONICAL_INDEX:
        aqi = int(index["aqi"])
    else:
        aqi = bad_high_to_canonical(float(index["aqi"]))
    description = aqi_category(aqi)

    pollutants = parse_pollutants(data.get("pollutants") or [])
    dominant = dominant_pollutant(pollutants)
    if dominant is None:
        dominant = (index.get("dominantPollutant") or "N/A").upper()

    return AirQualityRecord(aqi=aqi, description=description, dominant_pollutant=dominant, pollutants=pollutants)


def parse_pollutants(raw: list[dict]) -> Pollutants:
    values = {}
    for item in raw:
        code = (item.get("code") or "").lower()
        if code in POLLUTANT_ORDER:
            values[code] = float((item.get("concentration") or {}).get("value") or 0)
    return Pollutants(**values)


def dominant_pollutant(pollutants: Pollutants) -> str | None:
    """Return the upper-cased code with the highest concentration, earliest code winning ties.

    None when every concentration is zero.
    """
    best, best_value = None, 0.0
    for code in POLLUTANT_ORDER:
        value = getattr(pollutants, code)
        if value > best_value:
            best, best_value = code, value
    return best.upper() if best else None
