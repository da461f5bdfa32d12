"""Pure collaboration-window logic - no I/O dependencies."""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import assert_never

from .roster import Participant
from .timerange import TimeRange, is_hour_in_range, normalize_hour

MIN_MEMBERS = 2


class DayPeriod(Enum):
    """Part of the (UTC) day a window starts in."""

    EARLY_MORNING = "early-morning"
    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"
    LATE_NIGHT = "late-night"

    @property
    def emoji(self) -> str:
        match self:
            case DayPeriod.EARLY_MORNING:
                return "🌅"
            case DayPeriod.MORNING:
                return "☀️"
            case DayPeriod.AFTERNOON:
                return "🌞"
            case DayPeriod.EVENING:
                return "🌆"
            case DayPeriod.LATE_NIGHT:
                return "🌙"
            case _:
                assert_never(self)


@dataclass
class CollaborationWindow:
    """A run of UTC hours during which the same people are awake."""

    start_hour: int
    end_hour: int
    available_members: list[str] = field(default_factory=list)
    period: DayPeriod = DayPeriod.LATE_NIGHT

    @property
    def member_count(self) -> int:
        return len(self.available_members)

    def duration_hours(self) -> int:
        """Window length in hours; end_hour may wrap past midnight."""
        return (self.end_hour - self.start_hour) % 24 or 24

    def format(self) -> str:
        """Format as "9 AM - 1 PM"."""
        return f"{format_hour(self.start_hour)} - {format_hour(self.end_hour)}"

    def to_dict(self) -> dict:
        return {
            "startHour": self.start_hour,
            "endHour": self.end_hour,
            "availableMembers": list(self.available_members),
            "period": self.period.value,
        }


@dataclass(frozen=True)
class _RosterEntry:
    name: str
    utc_offset: float
    work_hours: TimeRange | None
    sleep_hours: TimeRange | None


def format_hour(hour: int) -> str:
    """12-hour clock label for a whole hour."""
    if hour == 0:
        return "12 AM"
    if hour < 12:
        return f"{hour} AM"
    if hour == 12:
        return "12 PM"
    return f"{hour - 12} PM"


def period_of(hour: int) -> DayPeriod:
    """Bucket a UTC hour into a day period."""
    if 5 <= hour < 9:
        return DayPeriod.EARLY_MORNING
    if 9 <= hour < 12:
        return DayPeriod.MORNING
    if 12 <= hour < 17:
        return DayPeriod.AFTERNOON
    if 17 <= hour < 22:
        return DayPeriod.EVENING
    return DayPeriod.LATE_NIGHT


def _roster(personal: Participant, team: list[Participant]) -> list[_RosterEntry]:
    return [
        _RosterEntry(
            name=p.name,
            utc_offset=p.utc_offset,
            work_hours=TimeRange.parse(p.work_hours),
            sleep_hours=TimeRange.parse(p.sleep_hours),
        )
        for p in [personal, *team]
    ]


def _awake(roster: list[_RosterEntry], utc_hour: int) -> list[str]:
    names = []
    for entry in roster:
        # Fractional offsets keep a fractional local hour
        local_hour = normalize_hour(utc_hour + entry.utc_offset)
        if not is_hour_in_range(local_hour, entry.sleep_hours):
            names.append(entry.name)
    return names


def available_at(personal: Participant, team: list[Participant], utc_hour: int) -> list[str]:
    """
    Names of everyone not asleep at a UTC hour, in roster order.

    Working counts as available; only the sleep range excludes someone.
    """
    return _awake(_roster(personal, team), utc_hour)


def find_collaboration_windows(
    personal: Participant,
    team: list[Participant],
) -> list[CollaborationWindow]:
    """
    Find UTC windows where at least two people are awake.

    Pure function - no I/O. Scans all 24 UTC hours, so the result does not
    depend on the current time. Windows come back in ascending start-hour
    order; use best_windows() to rank them.
    """
    roster = _roster(personal, team)
    hourly: list[CollaborationWindow] = []

    for hour in range(24):
        names = _awake(roster, hour)
        if len(names) >= MIN_MEMBERS:
            hourly.append(
                CollaborationWindow(
                    start_hour=hour,
                    end_hour=(hour + 1) % 24,
                    available_members=names,
                    period=period_of(hour),
                )
            )

    return merge_windows(hourly)


def merge_windows(windows: list[CollaborationWindow]) -> list[CollaborationWindow]:
    """
    Merge consecutive windows with the same period and member list.

    Member lists must match in order, not just as sets. Windows with fewer
    than two members are dropped.
    """
    if not windows:
        return []

    merged = []
    current = replace(windows[0], available_members=list(windows[0].available_members))

    for nxt in windows[1:]:
        if (
            current.end_hour == nxt.start_hour
            and current.period == nxt.period
            and current.available_members == nxt.available_members
        ):
            current.end_hour = nxt.end_hour
        else:
            merged.append(current)
            current = replace(nxt, available_members=list(nxt.available_members))

    merged.append(current)
    return [w for w in merged if w.member_count >= MIN_MEMBERS]


def best_windows(windows: list[CollaborationWindow], limit: int = 3) -> list[CollaborationWindow]:
    """
    Rank windows by how many people they include.

    Ties keep their UTC start-hour order.
    """
    ranked = sorted(windows, key=lambda w: -w.member_count)
    return ranked[:limit]
