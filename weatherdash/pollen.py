# ABOUTME: Pollen adapter for the Google Pollen forecast endpoint.
# ABOUTME: Produces grass/tree/weed records with category, season flag and health advice.

import logging

import httpx

from weatherdash.deps import DashboardDeps
from weatherdash.models import UNKNOWN_POLLEN, PollenCategory, PollenInfo, PollenRecord
from weatherdash.units import pollen_category

logger = logging.getLogger(__name__)

POLLEN_TYPES = {"grass": "GRASS", "tree": "TREE", "weed": "WEED"}

# The Universal Pollen Index runs 0-5; this puts it on the 0-100 scale pollen_category expects.
UPI_TO_CANONICAL = 10

PROVIDER_CATEGORIES = {
    "none": PollenCategory.LOW,
    "very low": PollenCategory.LOW,
    "low": PollenCategory.LOW,
    "moderate": PollenCategory.MODERATE,
    "high": PollenCategory.HIGH,
    "very high": PollenCategory.VERY_HIGH,
}


async def fetch_pollen(deps: DashboardDeps, latitude: float, longitude: float) -> PollenRecord:
    """Fetch today's pollen levels, or an all-Unknown record on failure."""
    try:
        resp = await deps.http_client.get(
            deps.settings.pollen_url,
            params={
                "key": deps.settings.google_api_key,
                "location.latitude": latitude,
                "location.longitude": longitude,
                "days": 1,
            },
        )
        resp.raise_for_status()
        return parse_pollen(resp.json())
    except (httpx.HTTPError, ValueError, KeyError, TypeError, AttributeError) as e:
        logger.warning("Pollen lookup failed for %s,%s: %s", latitude, longitude, e, exc_info=True)
        return UNKNOWN_POLLEN


def parse_pollen(data: dict) -> PollenRecord:
    if not isinstance(data, dict):
        raise ValueError(f"Unexpected pollen response: {type(data).__name__}")
    daily = data.get("dailyInfo") or []
    if not daily:
        raise ValueError("Pollen response has no daily info")
    by_code = {info.get("code"): info for info in daily[0].get("pollenTypeInfo") or []}
    return PollenRecord(**{name: _pollen_info(by_code.get(code)) for name, code in POLLEN_TYPES.items()})


def _pollen_info(info: dict | None) -> PollenInfo:
    """A missing type or index stays Unknown. The provider's category wins over the rescaled value."""
    if not info or not info.get("indexInfo"):
        return PollenInfo(recommendations=tuple((info or {}).get("healthRecommendations") or ()))
    index = info["indexInfo"]
    value = float(index.get("value") or 0)
    category = PROVIDER_CATEGORIES.get((index.get("category") or "").lower())
    return PollenInfo(
        value=value,
        category=category or pollen_category(value * UPI_TO_CANONICAL),
        in_season=value > 0,
        recommendations=tuple(info.get("healthRecommendations") or ()),
    )
