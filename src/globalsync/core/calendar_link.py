"""Calendar event link construction for collaboration windows - no I/O."""

from datetime import date, datetime, time, timedelta
from urllib.parse import urlencode

from .collaboration import CollaborationWindow

GOOGLE_CALENDAR_URL = "https://calendar.google.com/calendar/render"
DEFAULT_TITLE = "Team Collaboration"


def window_datetimes(window: CollaborationWindow, on_date: date) -> tuple[datetime, datetime]:
    """
    UTC start and end datetimes for a window on a given date.

    A window whose end hour is not after its start hour ends on the next day.
    """
    start = datetime.combine(on_date, time(window.start_hour))
    end_date = on_date if window.end_hour > window.start_hour else on_date + timedelta(days=1)
    end = datetime.combine(end_date, time(window.end_hour))
    return start, end


def _format_utc(dt: datetime) -> str:
    return dt.strftime("%Y%m%dT%H%M%SZ")


def build_calendar_url(
    window: CollaborationWindow,
    on_date: date,
    title: str = DEFAULT_TITLE,
) -> str:
    """
    Build a Google Calendar "create event" link for a window.

    Only builds the string; opening it is left to the caller.
    """
    start, end = window_datetimes(window, on_date)
    members = ", ".join(window.available_members)
    details = (
        f"Collaboration window ({window.format()} UTC, {window.period.value}).\n"
        f"Available: {members}"
    )
    params = {
        "action": "TEMPLATE",
        "text": title,
        "dates": f"{_format_utc(start)}/{_format_utc(end)}",
        "details": details,
    }
    return f"{GOOGLE_CALENDAR_URL}?{urlencode(params)}"
