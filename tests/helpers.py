# ABOUTME: Shared builders for the weather dashboard test suite.
# ABOUTME: Mocked httpx clients, deps and canned provider payloads imported by the test modules.

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock
from zoneinfo import ZoneInfo

import httpx

from weatherdash.config import Settings
from weatherdash.deps import DashboardDeps

TZ_NAME = "Europe/Amsterdam"
TZ = ZoneInfo(TZ_NAME)

# 12:30 local time in Amsterdam (CEST).
NOW = datetime(2025, 6, 15, 10, 30, tzinfo=timezone.utc)


def json_response(json_data, status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code=status_code, json=json_data, request=httpx.Request("GET", "https://test"))


def mock_client(get=None, post=None) -> httpx.AsyncClient:
    """Create a mock httpx.AsyncClient.

    ``get``/``post`` may be a single response, an exception, or a callable taking the URL.
    """
    mock = AsyncMock(spec=httpx.AsyncClient)
    for method, answer in (("get", get), ("post", post)):
        if answer is None:
            continue
        if callable(answer) and not isinstance(answer, httpx.Response):
            getattr(mock, method).side_effect = lambda url, *args, _answer=answer, **kwargs: _answer(url)
        elif isinstance(answer, Exception):
            getattr(mock, method).side_effect = answer
        else:
            getattr(mock, method).return_value = answer
    return mock


def make_deps(client: httpx.AsyncClient, **overrides) -> DashboardDeps:
    settings = Settings(visualcrossing_api_key="vc", google_api_key="g", **overrides)
    return DashboardDeps(http_client=client, settings=settings)


def timeline_payload(days: int = 9, conditions: str = "Clear", moon_phase: float = 0.25) -> dict:
    """A Visual Crossing style timeline starting on 2025-06-15 in Amsterdam with 24 hours per day."""
    start = datetime(2025, 6, 15, tzinfo=TZ)
    day_rows = []
    for d in range(days):
        midnight = start + timedelta(days=d)
        day_rows.append(
            {
                "datetime": midnight.date().isoformat(),
                "datetimeEpoch": int(midnight.timestamp()),
                "tempmax": 20.0 + d,
                "tempmin": 10.0 + d,
                "conditions": conditions,
                "description": f"Day {d} description",
                "precipprob": 10.0 * d,
                "moonphase": moon_phase,
                "sunrise": "05:20:00",
                "sunset": "22:05:00",
                "uvindex": 7,
                "hours": [
                    {
                        "datetime": f"{h:02d}:00:00",
                        "datetimeEpoch": int((midnight + timedelta(hours=h)).timestamp()),
                        "temp": 12.0 + h / 2,
                        "conditions": conditions,
                        "precipprob": 5.0,
                        "uvindex": max(0, 6 - abs(13 - h)),
                    }
                    for h in range(24)
                ],
            }
        )
    return {
        "latitude": 52.37,
        "longitude": 4.89,
        "timezone": TZ_NAME,
        "resolvedAddress": "Amsterdam, Noord-Holland, Nederland",
        "currentConditions": {
            "temp": 18.4,
            "feelslike": 17.9,
            "conditions": conditions,
            "windspeed": 12.0,
            "winddir": 225.0,
            "humidity": 64.0,
            "uvindex": 5.0,
            "precipprob": 20.0,
            "sunrise": "05:20:00",
            "sunset": "22:05:00",
        },
        "days": day_rows,
    }


def air_quality_payload() -> dict:
    return {
        "indexes": [
            {"code": "uaqi", "aqi": 72, "category": "Good air quality", "dominantPollutant": "o3"},
        ],
        "pollutants": [
            {"code": "co", "concentration": {"value": 180.5, "units": "PARTS_PER_BILLION"}},
            {"code": "no2", "concentration": {"value": 12.1, "units": "PARTS_PER_BILLION"}},
            {"code": "o3", "concentration": {"value": 31.0, "units": "PARTS_PER_BILLION"}},
            {"code": "pm10", "concentration": {"value": 14.2, "units": "MICROGRAMS_PER_CUBIC_METER"}},
            {"code": "pm25", "concentration": {"value": 6.3, "units": "MICROGRAMS_PER_CUBIC_METER"}},
        ],
    }


def pollen_payload() -> dict:
    return {
        "dailyInfo": [
            {
                "pollenTypeInfo": [
                    {
                        "code": "GRASS",
                        "indexInfo": {"value": 4, "category": "High"},
                        "inSeason": True,
                        "healthRecommendations": ["Keep windows closed."],
                    },
                    {"code": "TREE", "indexInfo": {"value": 0, "category": "None"}, "inSeason": False},
                ]
            }
        ]
    }


def marine_payload(times: list[str] | None = None) -> dict:
    times = times or [f"2025-06-15T{h:02d}:00" for h in range(24)]
    return {
        "timezone": TZ_NAME,
        "hourly": {
            "time": times,
            "sea_surface_temperature": [17.6] * len(times),
            "wave_height": [0.8] * len(times),
            "wave_direction": [250.0] * len(times),
            "wave_period": [5.1] * len(times),
        },
    }


def reverse_payload() -> dict:
    return {"address": {"suburb": "Jordaan", "city": "Amsterdam", "country_code": "nl"}}


def tide_payload() -> dict:
    """Stormglass-style extremes around NOW: one already past, then high, low, high."""
    return {
        "data": [
            {"height": 0.92, "time": "2025-06-15T14:25:00+00:00", "type": "high"},
            {"height": -0.71, "time": "2025-06-15T08:10:00+00:00", "type": "low"},
            {"height": -0.65, "time": "2025-06-15T20:40:00+00:00", "type": "low"},
            {"height": 0.98, "time": "2025-06-16T02:55:00+00:00", "type": "High"},
        ],
        "meta": {"station": {"name": "ijmuiden"}},
    }
