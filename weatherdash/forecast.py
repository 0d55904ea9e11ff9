# ABOUTME: Primary forecast fetcher for the Visual Crossing style timeline endpoint.
# ABOUTME: Parses current conditions and per-day hourly arrays into Timeline rows.

from datetime import date, datetime
from zoneinfo import ZoneInfo

from weatherdash.deps import DashboardDeps
from weatherdash.models import Timeline, TimelineCurrent, TimelineDay, TimelineHour

PERIOD = "next8days"
INCLUDE = "current,days,hours"


async def fetch_timeline(deps: DashboardDeps, latitude: float, longitude: float) -> Timeline:
    """Fetch the forecast timeline. HTTP and parsing errors propagate to the caller."""
    resp = await deps.http_client.get(
        f"{deps.settings.forecast_url}/{latitude},{longitude}/{PERIOD}",
        params={
            "key": deps.settings.visualcrossing_api_key,
            "unitGroup": "metric",
            "include": INCLUDE,
            "contentType": "json",
        },
    )
    resp.raise_for_status()
    return parse_timeline(resp.json())


def parse_timeline(data: dict) -> Timeline:
    """Build a Timeline from a raw response. Raises KeyError if current conditions are missing."""
    tz = ZoneInfo(data["timezone"])
    return Timeline(
        latitude=data["latitude"],
        longitude=data["longitude"],
        timezone=data["timezone"],
        resolved_address=data.get("resolvedAddress"),
        current=parse_current(data["currentConditions"]),
        days=[parse_day(day, tz) for day in data.get("days", [])],
    )


def parse_current(raw: dict) -> TimelineCurrent:
    return TimelineCurrent(
        temperature=raw["temp"],
        feels_like=raw.get("feelslike"),
        conditions=raw.get("conditions"),
        wind_speed=raw.get("windspeed"),
        wind_direction=raw.get("winddir"),
        humidity=raw.get("humidity"),
        uv_index=raw.get("uvindex"),
        precip_chance=raw.get("precipprob"),
        sunrise=raw.get("sunrise"),
        sunset=raw.get("sunset"),
    )


def parse_day(raw: dict, tz: ZoneInfo) -> TimelineDay:
    """Parse one day; hour and day timestamps come from the epoch fields, localized to ``tz``."""
    return TimelineDay(
        date=date.fromisoformat(raw["datetime"]),
        timestamp=datetime.fromtimestamp(raw["datetimeEpoch"], tz),
        temp_max=raw.get("tempmax"),
        temp_min=raw.get("tempmin"),
        conditions=raw.get("conditions"),
        description=raw.get("description"),
        precip_chance=raw.get("precipprob"),
        moon_phase=raw.get("moonphase"),
        sunrise=raw.get("sunrise"),
        sunset=raw.get("sunset"),
        uv_index=raw.get("uvindex"),
        hours=[parse_hour(hour, tz) for hour in raw.get("hours") or []],
    )


def parse_hour(raw: dict, tz: ZoneInfo) -> TimelineHour:
    return TimelineHour(
        timestamp=datetime.fromtimestamp(raw["datetimeEpoch"], tz),
        temperature=raw.get("temp"),
        conditions=raw.get("conditions"),
        precip_chance=raw.get("precipprob"),
        uv_index=raw.get("uvindex"),
    )
