# ABOUTME: Day/night and moon phase derivations from timestamps and provider strings.
# ABOUTME: Also parses and formats the local time-of-day strings used for sunrise and sunset.

from datetime import datetime, time, timezone
from zoneinfo import ZoneInfo

from weatherdash.errors import InvalidArgument
from weatherdash.models import MoonPhase

_TIME_FORMATS = ("%H:%M:%S", "%H:%M", "%I:%M %p", "%I:%M:%S %p")

_QUARTERS = {
    0.0: MoonPhase.NEW_MOON,
    0.25: MoonPhase.FIRST_QUARTER,
    0.5: MoonPhase.FULL_MOON,
    0.75: MoonPhase.LAST_QUARTER,
}


def parse_time_of_day(value: str) -> time:
    """Parse "06:12", "06:12:30" or "6:12 AM" into a time.

    Raises ValueError for anything else; callers are expected to pass provider output.
    """
    text = value.strip().upper()
    for fmt in _TIME_FORMATS:
        try:
            return datetime.strptime(text, fmt).time()
        except ValueError:
            continue
    raise ValueError(f"Unrecognised time of day: {value!r}")


def format_time_of_day(value: time | datetime, use_24_hour: bool) -> str:
    """Render a time as "18:05" or "6:05 PM"."""
    if use_24_hour:
        return value.strftime("%H:%M")
    hour = value.hour % 12 or 12
    return f"{hour}:{value.minute:02d} {'AM' if value.hour < 12 else 'PM'}"


def to_local(instant: datetime, tz_name: str) -> datetime:
    """Convert an instant to wall-clock time in ``tz_name``. Naive instants are taken as UTC."""
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(ZoneInfo(tz_name))


def _minutes(value: time | datetime) -> int:
    return value.hour * 60 + value.minute


def is_nighttime(instant: datetime, sunrise: str, sunset: str, tz_name: str) -> bool:
    """Whether ``instant`` falls before sunrise or after sunset on its local calendar day.

    The sunrise and sunset minutes themselves count as day. There is no polar handling:
    equal or inverted strings are compared mechanically.
    """
    current = _minutes(to_local(instant, tz_name))
    return current < _minutes(parse_time_of_day(sunrise)) or current > _minutes(parse_time_of_day(sunset))


def _check_fraction(fraction: float) -> None:
    if not 0 <= fraction < 1:
        raise InvalidArgument(f"Moon phase fraction must be in [0, 1), got {fraction}")


def moon_phase_name(fraction: float) -> MoonPhase:
    """Name the lunar phase for a cycle fraction (0 new, 0.5 full)."""
    _check_fraction(fraction)
    if fraction in _QUARTERS:
        return _QUARTERS[fraction]
    if fraction < 0.25:
        return MoonPhase.WAXING_CRESCENT
    if fraction < 0.5:
        return MoonPhase.WAXING_GIBBOUS
    if fraction < 0.75:
        return MoonPhase.WANING_GIBBOUS
    return MoonPhase.WANING_CRESCENT


def moon_illumination(fraction: float) -> int:
    """Approximate illuminated percentage as a triangular wave over the cycle.

    The real curve is closer to a cosine; this linear ramp is what the dashboard shows.
    """
    _check_fraction(fraction)
    lit = fraction * 2 if fraction < 0.5 else (1 - fraction) * 2
    return int(round(100 * lit))
