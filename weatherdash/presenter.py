# ABOUTME: Render-time view of a WeatherSnapshot for the dashboard front end.
# ABOUTME: Applies the display unit and the descriptive buckets from units.py to snapshot values.

from weatherdash.astro import format_time_of_day, to_local
from weatherdash.models import WeatherSnapshot
from weatherdash.units import (
    aqi_category,
    compass_direction,
    convert_temp,
    rain_description,
    uv_category,
    wind_description,
)


def present(snapshot: WeatherSnapshot, fahrenheit: bool = False) -> dict:
    """Build display strings and converted temperatures. The snapshot itself stays in Celsius."""

    def temp(celsius: float) -> float:
        return convert_temp(celsius, fahrenheit)

    details = snapshot.details
    air = details.air_quality
    return {
        "unit": "F" if fahrenheit else "C",
        "temperature": temp(snapshot.temperature),
        "feels_like": temp(snapshot.feels_like),
        "today": {"high": temp(snapshot.today_forecast.high), "low": temp(snapshot.today_forecast.low)},
        "tomorrow": {
            "high": temp(snapshot.tomorrow_forecast.high),
            "low": temp(snapshot.tomorrow_forecast.low),
        },
        "wind": {
            "description": wind_description(details.wind_speed),
            "direction": compass_direction(details.wind_direction),
        },
        "uv": uv_category(details.uv.current),
        "rain": rain_description(details.rain_chance),
        # The sentinel keeps its own description; aqi=0 is not a reading.
        "air_quality": aqi_category(air.aqi) if air.available else air.description,
        "pollen": {name: getattr(details.pollen, name).category.value for name in ("grass", "tree", "weed")},
        "hourly": [{"time": h.time, "temperature": temp(h.temperature)} for h in snapshot.hourly_forecast],
        "daily": [
            {"date": d.date, "high": temp(d.high), "low": temp(d.low)} for d in snapshot.daily_forecast
        ],
        "sea_temperature": temp(snapshot.sea_data.temperature) if snapshot.sea_data else None,
        "tides": [
            {
                "time": format_time_of_day(to_local(t.time, snapshot.timezone), snapshot.use_24_hour),
                "type": t.type,
                "height": t.height,
            }
            for t in (snapshot.sea_data.tides if snapshot.sea_data else ())
        ],
    }
