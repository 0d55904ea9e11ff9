# ABOUTME: Pydantic BaseModels for the unified weather snapshot and its normalized parts.
# ABOUTME: Every model is frozen; a fetch cycle builds them once and replaces them wholesale.

from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Condition(str, Enum):
    """Canonical weather conditions. SUNNY and CLEAR are the same sky split by day/night."""

    SUNNY = "sunny"
    CLEAR = "clear"
    RAINY = "rainy"
    ICY = "icy"
    CLOUDY = "cloudy"
    WINDY = "windy"


class MoonPhase(str, Enum):
    NEW_MOON = "New Moon"
    WAXING_CRESCENT = "Waxing Crescent"
    FIRST_QUARTER = "First Quarter"
    WAXING_GIBBOUS = "Waxing Gibbous"
    FULL_MOON = "Full Moon"
    WANING_GIBBOUS = "Waning Gibbous"
    LAST_QUARTER = "Last Quarter"
    WANING_CRESCENT = "Waning Crescent"


class PollenCategory(str, Enum):
    LOW = "Low"
    MODERATE = "Moderate"
    HIGH = "High"
    VERY_HIGH = "Very High"
    UNKNOWN = "Unknown"


class Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class Coordinates(Frozen):
    """Latitude/longitude pair; the identity of a location."""

    latitude: float
    longitude: float


class SavedLocation(Frozen):
    """A location the user pinned, identified by its coordinates."""

    name: str
    coordinates: Coordinates


class Pollutants(Frozen):
    co: float = 0.0
    no2: float = 0.0
    o3: float = 0.0
    pm10: float = 0.0
    pm25: float = 0.0


class AirQualityRecord(Frozen):
    """Air quality on the canonical good-high scale (100 best, 0 worst).

    ``aqi=0`` together with ``description="Unavailable"`` is the failure sentinel,
    not a reading.
    """

    aqi: int
    description: str
    dominant_pollutant: str
    pollutants: Pollutants = Field(default_factory=Pollutants)

    @property
    def available(self) -> bool:
        return self.description != UNAVAILABLE


class PollenInfo(Frozen):
    value: float = 0.0
    category: PollenCategory = PollenCategory.UNKNOWN
    in_season: bool = False
    recommendations: tuple[str, ...] = ()


class PollenRecord(Frozen):
    grass: PollenInfo = Field(default_factory=PollenInfo)
    tree: PollenInfo = Field(default_factory=PollenInfo)
    weed: PollenInfo = Field(default_factory=PollenInfo)


class Tide(Frozen):
    """One tide extreme; ``type`` is "high" or "low", height in metres."""

    time: datetime
    type: str
    height: float


class SeaData(Frozen):
    """Marine conditions for the current hour. ``temperature=0`` means the water temperature was missing.

    ``tides`` holds the next tide extremes, empty when no tide source answered.
    """

    temperature: int
    wave_height: float | None = None
    wave_direction: float | None = None
    wave_period: float | None = None
    location: str = "Nearest coast"
    tides: tuple[Tide, ...] = ()


class DayForecast(Frozen):
    high: float
    low: float


class TomorrowForecast(Frozen):
    high: float
    low: float
    description: str
    condition: Condition


class UVDetails(Frozen):
    current: float
    min: float
    max: float


class WeatherDetails(Frozen):
    wind_speed: float
    wind_direction: float
    uv: UVDetails
    humidity: float
    rain_chance: float
    air_quality: AirQualityRecord
    pollen: PollenRecord


class HourlyForecast(Frozen):
    timestamp: datetime
    time: str
    temperature: float
    condition: Condition
    precip_chance: float


class DailyForecast(Frozen):
    date: str
    high: float
    low: float
    condition: Condition
    precip_chance: float
    moon_phase_name: MoonPhase
    moon_illumination: int


class WeatherSnapshot(Frozen):
    """Everything the dashboard renders for one location, temperatures in Celsius."""

    temperature: float
    feels_like: float
    condition: Condition
    location: str
    coordinates: Coordinates
    timezone: str
    current_date: str
    use_24_hour: bool
    sunrise: str
    sunset: str
    today_forecast: DayForecast
    tomorrow_forecast: TomorrowForecast
    details: WeatherDetails
    hourly_forecast: tuple[HourlyForecast, ...] = ()
    daily_forecast: tuple[DailyForecast, ...] = ()
    sea_data: SeaData | None = None


UNAVAILABLE = "Unavailable"

UNAVAILABLE_AIR_QUALITY = AirQualityRecord(aqi=0, description=UNAVAILABLE, dominant_pollutant="N/A")

UNKNOWN_POLLEN = PollenRecord()


# Primary timeline provider rows, parsed before aggregation.


class TimelineHour(BaseModel):
    """One hour of the primary forecast timeline."""

    timestamp: datetime
    temperature: float | None = None
    conditions: str | None = None
    precip_chance: float | None = None
    uv_index: float | None = None


class TimelineDay(BaseModel):
    """One day of the primary forecast timeline with its hours."""

    date: date
    timestamp: datetime
    temp_max: float | None = None
    temp_min: float | None = None
    conditions: str | None = None
    description: str | None = None
    precip_chance: float | None = None
    moon_phase: float | None = None
    sunrise: str | None = None
    sunset: str | None = None
    uv_index: float | None = None
    hours: list[TimelineHour] = []


class TimelineCurrent(BaseModel):
    """Current conditions block of the primary forecast."""

    temperature: float
    feels_like: float | None = None
    conditions: str | None = None
    wind_speed: float | None = None
    wind_direction: float | None = None
    humidity: float | None = None
    uv_index: float | None = None
    precip_chance: float | None = None
    sunrise: str | None = None
    sunset: str | None = None


class Timeline(BaseModel):
    """Parsed response from the primary timeline endpoint."""

    latitude: float
    longitude: float
    timezone: str
    resolved_address: str | None = None
    current: TimelineCurrent
    days: list[TimelineDay] = []
