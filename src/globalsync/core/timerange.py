"""Pure hour-range and UTC-offset logic - no I/O dependencies."""

import math
import re
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

_OFFSET_PATTERN = re.compile(r"(GMT|UTC)([+-])(\d+(?:\.\d+)?)")
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def parse_offset(text: str) -> float:
    """
    Extract a signed UTC offset in hours from a label like "UTC+5.5".

    Both GMT and UTC prefixes are recognized. Returns 0.0 when the text
    does not match.
    """
    if not isinstance(text, str):
        return 0.0
    match = _OFFSET_PATTERN.search(text)
    if not match:
        return 0.0
    sign = 1 if match.group(2) == "+" else -1
    return sign * float(match.group(3))


def is_offset_label(text: str) -> bool:
    """Check whether text contains a recognizable "UTC+H" or "GMT+H" label."""
    return isinstance(text, str) and _OFFSET_PATTERN.search(text) is not None


def format_offset(offset: float) -> str:
    """Format an offset in hours as a "UTC+H" label."""
    sign = "+" if offset >= 0 else "-"
    value = abs(offset)
    if value == int(value):
        return f"UTC{sign}{int(value)}"
    return f"UTC{sign}{value:g}"


def migrate_timezone(text: str) -> str:
    """Rewrite a legacy "GMT+H" label to its "UTC+H" form."""
    if text.startswith("GMT"):
        return "UTC" + text[3:]
    return text


def normalize_hour(hour: float) -> float:
    """Wrap an hour value into [0, 24). Fractional hours are kept."""
    return ((hour % 24) + 24) % 24


def _parse_int(text: str | None) -> float:
    """Leading-integer coercion. Non-numeric text yields NaN."""
    if text is None:
        return math.nan
    match = _LEADING_INT.match(text)
    if not match:
        return math.nan
    return float(int(match.group(1)))


@dataclass(frozen=True)
class TimeRange:
    """
    An hour range such as "9-17" or "23-7".

    When start <= end the range is [start, end). Otherwise it wraps past
    midnight and covers [start, 24) and [0, end). Unparsable bounds are NaN
    and never contain any hour.
    """

    start: float
    end: float
    text: str = field(default="", compare=False)

    @classmethod
    def parse(cls, text: str) -> "TimeRange | None":
        """Parse "H-H" text. Returns None for an empty range."""
        if not text:
            return None
        start_str, sep, end_str = text.partition("-")
        return cls(
            start=_parse_int(start_str),
            end=_parse_int(end_str if sep else None),
            text=text,
        )

    @property
    def valid(self) -> bool:
        """Both bounds parsed as integers."""
        return not (math.isnan(self.start) or math.isnan(self.end))

    @property
    def wraps(self) -> bool:
        return self.start > self.end

    def contains(self, hour: float) -> bool:
        """Check whether a pre-normalized hour falls within the range."""
        if not self.valid:
            return False
        if self.start <= self.end:
            return self.start <= hour < self.end
        # Crosses midnight (e.g. 23-7)
        return hour >= self.start or hour < self.end


def is_hour_in_range(hour: float, time_range: "TimeRange | str | None") -> bool:
    """
    Check if an hour (0-24, may be fractional) is inside a range.

    An empty or unset range matches nothing.
    """
    if not time_range:
        return False
    if isinstance(time_range, str):
        time_range = TimeRange.parse(time_range)
        if time_range is None:
            return False
    return time_range.contains(hour)


def is_time_in_range(point_in_time: datetime, time_range: "TimeRange | str | None") -> bool:
    """Check if a datetime's hour-of-day falls inside a range."""
    return is_hour_in_range(point_in_time.hour, time_range)


def local_time(tz: str | float, now: datetime | None = None) -> datetime:
    """
    Wall-clock time at a UTC offset.

    tz is either an offset label ("UTC-8") or an offset in hours.
    """
    offset = parse_offset(tz) if isinstance(tz, str) else float(tz)
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    utc_now = now.astimezone(timezone.utc)
    return (utc_now + timedelta(hours=offset)).replace(tzinfo=None)


def detect_local_timezone(now: datetime | None = None) -> str:
    """Offset label for the host's current local timezone."""
    now = now or datetime.now().astimezone()
    if now.tzinfo is None:
        now = now.astimezone()
    utc_offset = now.utcoffset()
    if utc_offset is None:
        return "UTC+0"
    return format_offset(utc_offset.total_seconds() / 3600)


@dataclass(frozen=True)
class TimezoneInfo:
    """Common abbreviations and cities for an offset."""

    abbreviations: tuple[str, ...] = ()
    cities: tuple[str, ...] = ()


TIMEZONES: dict[str, TimezoneInfo] = {
    "UTC-12": TimezoneInfo(("BIT",), ("Baker Island",)),
    "UTC-11": TimezoneInfo(("SST",), ("Samoa", "Midway")),
    "UTC-10": TimezoneInfo(("HST",), ("Hawaii", "Honolulu")),
    "UTC-9": TimezoneInfo(("AKST",), ("Alaska", "Anchorage")),
    "UTC-8": TimezoneInfo(("PST", "PT"), ("Los Angeles", "Seattle", "Vancouver")),
    "UTC-7": TimezoneInfo(("MST", "PDT"), ("Denver", "Phoenix", "Calgary")),
    "UTC-6": TimezoneInfo(("CST", "MDT"), ("Chicago", "Dallas", "Mexico City")),
    "UTC-5": TimezoneInfo(("EST", "CDT"), ("New York", "Toronto", "Miami")),
    "UTC-4.5": TimezoneInfo(("VET",), ("Caracas",)),
    "UTC-4": TimezoneInfo(("AST", "EDT"), ("Halifax", "Santiago", "La Paz")),
    "UTC-3.5": TimezoneInfo(("NST",), ("Newfoundland",)),
    "UTC-3": TimezoneInfo(("ART", "BRT"), ("Buenos Aires", "São Paulo", "Montevideo")),
    "UTC-2": TimezoneInfo(("GST",), ("South Georgia",)),
    "UTC-1": TimezoneInfo(("CVT",), ("Cape Verde", "Azores")),
    "UTC+0": TimezoneInfo(("GMT", "UTC"), ("London", "Dublin", "Lisbon")),
    "UTC+1": TimezoneInfo(("CET",), ("Berlin", "Paris", "Rome", "Madrid")),
    "UTC+2": TimezoneInfo(("EET",), ("Cairo", "Helsinki", "Athens", "Kyiv")),
    "UTC+3": TimezoneInfo(("MSK",), ("Moscow", "Istanbul", "Riyadh", "Nairobi")),
    "UTC+3.5": TimezoneInfo(("IRST",), ("Tehran",)),
    "UTC+4": TimezoneInfo(("GST",), ("Dubai", "Baku", "Tbilisi")),
    "UTC+4.5": TimezoneInfo(("AFT",), ("Kabul",)),
    "UTC+5": TimezoneInfo(("PKT",), ("Karachi", "Tashkent", "Yekaterinburg")),
    "UTC+5.5": TimezoneInfo(("IST",), ("Mumbai", "Delhi", "Kolkata", "Bangalore")),
    "UTC+5.75": TimezoneInfo(("NPT",), ("Kathmandu",)),
    "UTC+6": TimezoneInfo(("BST",), ("Dhaka", "Almaty", "Omsk")),
    "UTC+6.5": TimezoneInfo(("MMT",), ("Yangon",)),
    "UTC+7": TimezoneInfo(("ICT",), ("Bangkok", "Jakarta", "Ho Chi Minh")),
    "UTC+8": TimezoneInfo(("CST", "SGT"), ("Beijing", "Singapore", "Manila", "Perth")),
    "UTC+9": TimezoneInfo(("JST", "KST"), ("Tokyo", "Seoul", "Pyongyang")),
    "UTC+9.5": TimezoneInfo(("ACST",), ("Adelaide", "Darwin")),
    "UTC+10": TimezoneInfo(("AEST",), ("Sydney", "Melbourne", "Brisbane")),
    "UTC+11": TimezoneInfo(("NCT",), ("New Caledonia", "Solomon Islands")),
    "UTC+12": TimezoneInfo(("NZST",), ("Auckland", "Wellington", "Fiji")),
    "UTC+13": TimezoneInfo(("NZDT",), ("Auckland (DST)", "Samoa")),
    "UTC+14": TimezoneInfo(("LINT",), ("Line Islands", "Kiribati")),
}

ALL_TIMEZONES: list[str] = list(TIMEZONES)


def timezone_info(label: str) -> TimezoneInfo:
    """Look up abbreviations and cities for an offset label (GMT or UTC prefix)."""
    return TIMEZONES.get(migrate_timezone(label), TimezoneInfo())


def format_timezone_display(label: str) -> str:
    """Format an offset label with its first abbreviation and city."""
    info = timezone_info(label)
    abbreviation = info.abbreviations[0] if info.abbreviations else ""
    city = info.cities[0] if info.cities else ""

    if abbreviation and city:
        return f"{label} ({abbreviation}/{city})"
    if abbreviation:
        return f"{label} ({abbreviation})"
    return label
