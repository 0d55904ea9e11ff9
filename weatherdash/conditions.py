# ABOUTME: Maps free-text provider condition strings onto the canonical Condition set.
# ABOUTME: Clear skies resolve to sunny or clear depending on day/night at the forecast point's own time.

from datetime import datetime

from weatherdash.astro import is_nighttime
from weatherdash.models import Condition

# Checked in order; the first group with a keyword inside the text wins.
KEYWORD_GROUPS: tuple[tuple[tuple[str, ...], Condition], ...] = (
    (("clear", "sun"), Condition.SUNNY),
    (("rain", "drizzle", "thunder"), Condition.RAINY),
    (("snow", "ice", "sleet"), Condition.ICY),
    (("cloud", "overcast"), Condition.CLOUDY),
    (("wind",), Condition.WINDY),
)


def map_condition(
    raw_text: str | None,
    temperature: float | None = None,
    sunrise: str | None = None,
    sunset: str | None = None,
    instant: datetime | None = None,
    tz_name: str | None = None,
) -> Condition:
    """Classify a provider condition string.

    Clear-sky text becomes CLEAR only when sunrise, sunset, instant and timezone are all
    given and the instant is at night. Temperature is accepted but does not change the
    result. Unrecognised text defaults to SUNNY.
    """
    text = (raw_text or "").lower()
    for keywords, condition in KEYWORD_GROUPS:
        if any(keyword in text for keyword in keywords):
            break
    else:
        return Condition.SUNNY

    if condition is Condition.SUNNY:
        if sunrise and sunset and instant is not None and tz_name:
            return Condition.CLEAR if is_nighttime(instant, sunrise, sunset, tz_name) else Condition.SUNNY
        return Condition.SUNNY
    return condition
