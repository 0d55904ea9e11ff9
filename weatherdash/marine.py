# ABOUTME: Marine adapter for the Open-Meteo marine forecast endpoint, with tide extremes attached.
# ABOUTME: Picks the sample for the current local hour and returns None when there is no usable sea data.

import asyncio
import logging
from datetime import datetime, timezone

import httpx

from weatherdash.astro import to_local
from weatherdash.deps import DashboardDeps
from weatherdash.models import SeaData
from weatherdash.tides import fetch_tides

logger = logging.getLogger(__name__)

HOURLY_PARAMS = "sea_surface_temperature,wave_height,wave_direction,wave_period"


async def fetch_marine(
    deps: DashboardDeps,
    latitude: float,
    longitude: float,
    now: datetime | None = None,
) -> SeaData | None:
    """Fetch the current hour's sea conditions and next tides, or None for inland points and failures.

    The provider resolves the timezone itself, so this can run before the main forecast returns.
    Tides are looked up alongside and only attached when sea data exists.
    """
    now = now or datetime.now(timezone.utc)
    sea_data, tides = await asyncio.gather(
        _fetch_sea_sample(deps, latitude, longitude, now),
        fetch_tides(deps, latitude, longitude, now),
    )
    if sea_data is None or not tides:
        return sea_data
    return sea_data.model_copy(update={"tides": tides})


async def _fetch_sea_sample(deps: DashboardDeps, latitude: float, longitude: float, now: datetime) -> SeaData | None:
    try:
        resp = await deps.http_client.get(
            deps.settings.marine_url,
            params={
                "latitude": latitude,
                "longitude": longitude,
                "hourly": HOURLY_PARAMS,
                "timezone": "auto",
                "forecast_days": 1,
            },
        )
        resp.raise_for_status()
        data = resp.json()
        if not isinstance(data, dict):
            raise ValueError(f"Unexpected marine response: {type(data).__name__}")
        local_now = to_local(now, data.get("timezone") or "UTC")
        return parse_marine(data.get("hourly") or {}, local_now.hour)
    except (httpx.HTTPError, ValueError, KeyError, TypeError, AttributeError) as e:
        logger.warning("Marine lookup failed for %s,%s: %s", latitude, longitude, e, exc_info=True)
        return None


def parse_marine(hourly: dict, current_hour: int) -> SeaData | None:
    """Build SeaData from the first hourly sample whose hour of day equals ``current_hour``.

    Partial data is kept: a wave height without a water temperature yields temperature 0.
    """
    index = next(
        (i for i, t in enumerate(hourly.get("time") or []) if datetime.fromisoformat(t).hour == current_hour),
        None,
    )
    if index is None:
        return None

    temperature = _get_at(hourly, "sea_surface_temperature", index)
    wave_height = _get_at(hourly, "wave_height", index)
    if temperature is None and wave_height is None:
        return None

    return SeaData(
        temperature=round(temperature) if temperature is not None else 0,
        wave_height=wave_height,
        wave_direction=_get_at(hourly, "wave_direction", index),
        wave_period=_get_at(hourly, "wave_period", index),
    )


def _get_at(data: dict, key: str, index: int):
    """Safely get value at index from a column array, returning None if missing."""
    col = data.get(key)
    if col is None or index >= len(col):
        return None
    return col[index]
