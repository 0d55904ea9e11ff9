# ABOUTME: Tide adapter for a Stormglass-style tide extremes endpoint, with a per-location cache.
# ABOUTME: Returns the next high/low extremes, or an empty tuple when unconfigured or failing.

import logging
from datetime import datetime, timedelta, timezone

import httpx

from weatherdash.deps import DashboardDeps
from weatherdash.models import Tide

logger = logging.getLogger(__name__)

NEXT_TIDES = 2
# Fetched window outlasts the cache lifetime so a cached entry still has upcoming extremes.
FETCH_WINDOW = timedelta(days=2)


async def fetch_tides(
    deps: DashboardDeps,
    latitude: float,
    longitude: float,
    now: datetime | None = None,
) -> tuple[Tide, ...]:
    """Fetch the next tide extremes after ``now``. Empty when no tide key is set or the lookup fails."""
    settings = deps.settings
    if not settings.stormglass_api_key:
        return ()
    now = now or datetime.now(timezone.utc)

    extremes = deps.tide_cache.get(latitude, longitude, now, settings.tide_cache_ttl)
    if extremes is None:
        try:
            resp = await deps.http_client.get(
                settings.tide_url,
                params={
                    "lat": latitude,
                    "lng": longitude,
                    "start": now.isoformat(),
                    "end": (now + FETCH_WINDOW).isoformat(),
                },
                headers={"Authorization": settings.stormglass_api_key},
            )
            resp.raise_for_status()
            extremes = parse_tides(resp.json())
        except (httpx.HTTPError, ValueError, KeyError, TypeError, AttributeError) as e:
            logger.warning("Tide lookup failed for %s,%s: %s", latitude, longitude, e, exc_info=True)
            return ()
        deps.tide_cache.put(latitude, longitude, now, extremes)
        logger.debug("Cached %d tide extremes for %s,%s", len(extremes), latitude, longitude)
    return next_tides(extremes, now)


def parse_tides(data: dict) -> tuple[Tide, ...]:
    """Convert an extremes response into Tide records sorted by time."""
    if not isinstance(data, dict):
        raise ValueError(f"Unexpected tide response: {type(data).__name__}")
    tides = [
        Tide(time=_parse_instant(row["time"]), type=row["type"].lower(), height=float(row["height"]))
        for row in data.get("data") or []
    ]
    return tuple(sorted(tides, key=lambda t: t.time))


def next_tides(extremes: tuple[Tide, ...], now: datetime, count: int = NEXT_TIDES) -> tuple[Tide, ...]:
    return tuple(t for t in extremes if t.time >= now)[:count]


def _parse_instant(value: str) -> datetime:
    instant = datetime.fromisoformat(value.replace("Z", "+00:00"))
    return instant if instant.tzinfo else instant.replace(tzinfo=timezone.utc)
