# ABOUTME: Aggregator that turns one coordinate pair into a complete WeatherSnapshot.
# ABOUTME: Runs geocoding, the primary forecast and the secondary adapters concurrently, then merges them.

import asyncio
import logging
from datetime import datetime, timedelta, timezone

import httpx

from weatherdash.air_quality import fetch_air_quality
from weatherdash.astro import format_time_of_day, moon_illumination, moon_phase_name, parse_time_of_day, to_local
from weatherdash.conditions import map_condition
from weatherdash.deps import DashboardDeps
from weatherdash.errors import WeatherFetchError
from weatherdash.forecast import fetch_timeline
from weatherdash.geocoding import UNKNOWN_LOCATION, reverse_geocode
from weatherdash.marine import fetch_marine
from weatherdash.models import (
    AirQualityRecord,
    Coordinates,
    DailyForecast,
    DayForecast,
    HourlyForecast,
    PollenRecord,
    SeaData,
    Timeline,
    TimelineDay,
    TomorrowForecast,
    UVDetails,
    WeatherDetails,
    WeatherSnapshot,
)
from weatherdash.pollen import fetch_pollen

logger = logging.getLogger(__name__)

HOURLY_WINDOW = 24
# Days after tomorrow shown in the daily strip.
DAILY_SLICE = slice(2, 9)


async def fetch_weather(
    deps: DashboardDeps,
    latitude: float,
    longitude: float,
    use_24_hour: bool = True,
    now: datetime | None = None,
) -> WeatherSnapshot:
    """Fetch and merge everything the dashboard shows for one location.

    Raises WeatherFetchError if the primary forecast fails. Air quality, pollen and
    marine failures degrade to their sentinels instead.
    """
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    location, timeline, air_quality, pollen, sea_data = await asyncio.gather(
        reverse_geocode(deps, latitude, longitude),
        _fetch_primary(deps, latitude, longitude),
        fetch_air_quality(deps, latitude, longitude),
        fetch_pollen(deps, latitude, longitude),
        fetch_marine(deps, latitude, longitude, now),
    )

    try:
        snapshot = build_snapshot(
            timeline,
            coordinates=Coordinates(latitude=latitude, longitude=longitude),
            location=location or timeline.resolved_address or UNKNOWN_LOCATION,
            now=now,
            use_24_hour=use_24_hour,
            air_quality=air_quality,
            pollen=pollen,
            sea_data=sea_data,
        )
    except (ValueError, KeyError) as e:
        raise WeatherFetchError(f"Forecast for {latitude},{longitude} could not be normalized: {e}") from e
    logger.debug("Built weather snapshot for %s (%s)", snapshot.location, snapshot.coordinates)
    return snapshot


async def _fetch_primary(deps: DashboardDeps, latitude: float, longitude: float) -> Timeline:
    try:
        timeline = await fetch_timeline(deps, latitude, longitude)
    except (httpx.HTTPError, ValueError, KeyError, TypeError) as e:
        raise WeatherFetchError(f"Forecast unavailable for {latitude},{longitude}: {e}") from e
    if not timeline.days:
        raise WeatherFetchError(f"Forecast for {latitude},{longitude} has no daily data")
    return timeline


def build_snapshot(
    timeline: Timeline,
    coordinates: Coordinates,
    location: str,
    now: datetime,
    use_24_hour: bool,
    air_quality: AirQualityRecord,
    pollen: PollenRecord,
    sea_data: SeaData | None = None,
) -> WeatherSnapshot:
    """Assemble the snapshot from an already fetched timeline.

    Today's sunrise/sunset pair is applied to every hourly and daily point, including
    later days.
    """
    tz = timeline.timezone
    local_now = to_local(now, tz)
    today_index = _today_index(timeline.days, local_now)
    today = timeline.days[today_index]
    tomorrow = timeline.days[today_index + 1] if today_index + 1 < len(timeline.days) else today
    current = timeline.current

    sunrise = current.sunrise or today.sunrise or ""
    sunset = current.sunset or today.sunset or ""

    def condition_at(text, temperature, instant):
        return map_condition(text, temperature, sunrise, sunset, instant, tz)

    return WeatherSnapshot(
        temperature=current.temperature,
        feels_like=_first_of(current.feels_like, current.temperature),
        condition=condition_at(current.conditions, current.temperature, now),
        location=location,
        coordinates=coordinates,
        timezone=tz,
        current_date=f"{local_now:%A, %B} {local_now.day}",
        use_24_hour=use_24_hour,
        sunrise=_display_time(sunrise, use_24_hour),
        sunset=_display_time(sunset, use_24_hour),
        today_forecast=DayForecast(
            high=_first_of(today.temp_max, current.temperature),
            low=_first_of(today.temp_min, current.temperature),
        ),
        tomorrow_forecast=TomorrowForecast(
            high=_first_of(tomorrow.temp_max, current.temperature),
            low=_first_of(tomorrow.temp_min, current.temperature),
            description=tomorrow.description or tomorrow.conditions or "",
            condition=condition_at(tomorrow.conditions, tomorrow.temp_max, _local_noon(tomorrow)),
        ),
        details=WeatherDetails(
            wind_speed=_first_of(current.wind_speed, 0.0),
            wind_direction=_first_of(current.wind_direction, 0.0),
            uv=_uv_details(today, current.uv_index),
            humidity=_first_of(current.humidity, 0.0),
            rain_chance=_first_of(current.precip_chance, today.precip_chance, 0.0),
            air_quality=air_quality,
            pollen=pollen,
        ),
        hourly_forecast=build_hourly_forecast(
            timeline.days[today_index : today_index + 2], now, condition_at, use_24_hour
        ),
        daily_forecast=tuple(
            _daily_entry(day, condition_at) for day in timeline.days[today_index:][DAILY_SLICE]
        ),
        sea_data=sea_data,
    )


def build_hourly_forecast(days: list[TimelineDay], now: datetime, condition_at, use_24_hour: bool) -> tuple:
    """Up to 24 hourly points at or after ``now``, spanning today and tomorrow, oldest first."""
    hours = [h for day in days for h in day.hours if h.timestamp >= now and h.temperature is not None]
    hours.sort(key=lambda h: h.timestamp)
    return tuple(
        HourlyForecast(
            timestamp=h.timestamp,
            time=format_time_of_day(h.timestamp, use_24_hour),
            temperature=h.temperature,
            condition=condition_at(h.conditions, h.temperature, h.timestamp),
            precip_chance=_first_of(h.precip_chance, 0.0),
        )
        for h in hours[:HOURLY_WINDOW]
    )


def _daily_entry(day: TimelineDay, condition_at) -> DailyForecast:
    # Providers report the cycle as [0, 1]; 1.0 is the next new moon.
    fraction = _first_of(day.moon_phase, 0.0) % 1.0
    return DailyForecast(
        date=day.date.isoformat(),
        high=_first_of(day.temp_max, 0.0),
        low=_first_of(day.temp_min, 0.0),
        condition=condition_at(day.conditions, day.temp_max, _local_noon(day)),
        precip_chance=_first_of(day.precip_chance, 0.0),
        moon_phase_name=moon_phase_name(fraction),
        moon_illumination=moon_illumination(fraction),
    )


def _today_index(days: list[TimelineDay], local_now: datetime) -> int:
    return next((i for i, day in enumerate(days) if day.date == local_now.date()), 0)


def _local_noon(day: TimelineDay) -> datetime:
    return day.timestamp.replace(hour=0, minute=0, second=0) + timedelta(hours=12)


def _uv_details(today: TimelineDay, current_uv: float | None) -> UVDetails:
    current = _first_of(current_uv, today.uv_index, 0.0)
    readings = [h.uv_index for h in today.hours if h.uv_index is not None] or [current]
    return UVDetails(current=current, min=min(readings), max=max(readings))


def _display_time(value: str, use_24_hour: bool) -> str:
    if not value:
        return ""
    return format_time_of_day(parse_time_of_day(value), use_24_hour)


def _first_of(*values):
    return next((v for v in values if v is not None), None)
