# ABOUTME: Pure classification and unit helpers used when rendering weather readings.
# ABOUTME: Buckets UV, AQI, pollen, wind and rain values into labels and converts temperatures.

from weatherdash.models import PollenCategory

COMPASS_POINTS = (
    "N", "NNE", "NE", "ENE", "E", "ESE", "SE", "SSE",
    "S", "SSW", "SW", "WSW", "W", "WNW", "NW", "NNW",
)


def uv_category(uv: float) -> str:
    if uv >= 11:
        return "Extreme"
    if uv >= 8:
        return "Very High"
    if uv >= 6:
        return "High"
    if uv >= 3:
        return "Moderate"
    return "Low"


def aqi_category(aqi: float) -> str:
    """Label an AQI on the canonical good-high scale, where 100 is the cleanest air."""
    if aqi >= 80:
        return "Excellent"
    if aqi >= 60:
        return "Good"
    if aqi >= 40:
        return "Moderate"
    if aqi >= 20:
        return "Low"
    return "Poor"


def aqi_category_bad_high(aqi: float) -> str:
    """Label an AQI on a provider scale where larger numbers mean dirtier air."""
    if aqi <= 20:
        return "Good"
    if aqi <= 40:
        return "Fair"
    if aqi <= 60:
        return "Moderate"
    if aqi <= 80:
        return "Poor"
    if aqi <= 100:
        return "Very Poor"
    return "Extremely Poor"


def bad_high_to_canonical(aqi: float) -> int:
    """Flip a bad-high index onto the canonical good-high 0-100 scale."""
    return int(round(100 - min(max(aqi, 0), 100)))


def pollen_category(value: float) -> PollenCategory:
    """Bucket a pollen level on the canonical 0-100 scale."""
    if value >= 50:
        return PollenCategory.VERY_HIGH
    if value >= 35:
        return PollenCategory.HIGH
    if value >= 20:
        return PollenCategory.MODERATE
    return PollenCategory.LOW


def wind_description(speed_kmh: float) -> str:
    if speed_kmh < 5:
        return "Light breeze"
    if speed_kmh < 15:
        return "Moderate wind"
    if speed_kmh < 25:
        return "Strong wind"
    return "High wind"


def rain_description(chance: float) -> str:
    if chance < 30:
        return "Low chance of rain"
    if chance < 70:
        return "Moderate chance of rain"
    return "High chance of rain"


def compass_direction(degrees: float) -> str:
    """Map a bearing in degrees to one of 16 compass labels."""
    return COMPASS_POINTS[int(round(degrees / 22.5)) % 16]


def convert_temp(celsius: float, to_fahrenheit: bool) -> float:
    """Return Celsius unchanged, or the rounded Fahrenheit equivalent."""
    if not to_fahrenheit:
        return celsius
    return round(celsius * 9 / 5 + 32)
