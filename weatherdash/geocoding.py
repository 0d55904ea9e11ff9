# ABOUTME: Reverse geocoding and place search against a Nominatim-style geocoder.
# ABOUTME: Builds display names from the finest address parts available and degrades to None or [] on failure.

import logging

import httpx

from weatherdash.deps import DashboardDeps
from weatherdash.models import Coordinates, SavedLocation

logger = logging.getLogger(__name__)

UNKNOWN_LOCATION = "Unknown location"
MIN_QUERY_LENGTH = 3
SEARCH_LIMIT = 5

LOCAL_KEYS = ("suburb", "city_district")
CITY_KEYS = ("city", "town", "village", "municipality")


def _first(address: dict, keys: tuple[str, ...]) -> str | None:
    return next((address[k] for k in keys if address.get(k)), None)


def build_location_name(address: dict) -> str | None:
    """Prefer "Suburb, City"; otherwise "City, CC"; None when the address has no usable names."""
    local = _first(address, LOCAL_KEYS)
    city = _first(address, CITY_KEYS)
    if local and city and local != city:
        return f"{local}, {city}"
    place = city or local
    if not place:
        return None
    country = (address.get("country_code") or "").upper()
    return f"{place}, {country}" if country else place


async def reverse_geocode(deps: DashboardDeps, latitude: float, longitude: float) -> str | None:
    """Look up a display name for coordinates. Returns None if the geocoder fails or knows nothing."""
    try:
        resp = await deps.http_client.get(
            f"{deps.settings.geocode_url}/reverse",
            params={"lat": latitude, "lon": longitude, "format": "jsonv2", "addressdetails": 1},
        )
        resp.raise_for_status()
        return build_location_name(resp.json().get("address") or {})
    except (httpx.HTTPError, ValueError, TypeError, AttributeError) as e:
        logger.warning("Reverse geocoding failed for %s,%s: %s", latitude, longitude, e, exc_info=True)
        return None


async def search_locations(deps: DashboardDeps, query: str) -> list[SavedLocation]:
    """Find up to five places matching ``query``. Short queries and failures return an empty list."""
    query = query.strip()
    if len(query) < MIN_QUERY_LENGTH:
        return []
    try:
        resp = await deps.http_client.get(
            f"{deps.settings.geocode_url}/search",
            params={"q": query, "format": "jsonv2", "addressdetails": 1, "limit": SEARCH_LIMIT},
        )
        resp.raise_for_status()
        return parse_search_results(resp.json())
    except (httpx.HTTPError, ValueError, KeyError, TypeError, AttributeError) as e:
        logger.warning("Location search failed for %r: %s", query, e, exc_info=True)
        return []


def parse_search_results(results: list[dict]) -> list[SavedLocation]:
    """Turn geocoder search rows into saved locations, skipping rows without a name or coordinates."""
    if not isinstance(results, list):
        raise ValueError(f"Unexpected search response: {type(results).__name__}")
    locations = []
    for item in results[:SEARCH_LIMIT]:
        address = item.get("address") or {}
        place = item.get("name") or _first(address, CITY_KEYS)
        if not place or item.get("lat") is None or item.get("lon") is None:
            continue
        country = (address.get("country_code") or "").upper()
        locations.append(
            SavedLocation(
                name=f"{place}, {country}" if country else place,
                coordinates=Coordinates(latitude=float(item["lat"]), longitude=float(item["lon"])),
            )
        )
    return locations
