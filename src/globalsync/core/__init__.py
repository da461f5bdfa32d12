"""Functional core - pure business logic with no I/O."""

from .timerange import TimeRange, parse_offset, is_hour_in_range, is_time_in_range
from .schedule import Status, SchedulePeriod, classify_period, suggest_status, auto_update_status
from .roster import Participant, TeamMember, AppSnapshot, ThemeMode
from .collaboration import CollaborationWindow, DayPeriod, find_collaboration_windows, best_windows
from .share import (
    generate_share_string,
    decode_participant,
    encode_app_snapshot,
    decode_app_snapshot,
)
from .calendar_link import build_calendar_url

__all__ = [
    # Time ranges
    "TimeRange",
    "parse_offset",
    "is_hour_in_range",
    "is_time_in_range",
    # Schedule
    "Status",
    "SchedulePeriod",
    "classify_period",
    "suggest_status",
    "auto_update_status",
    # Roster
    "Participant",
    "TeamMember",
    "AppSnapshot",
    "ThemeMode",
    # Collaboration
    "CollaborationWindow",
    "DayPeriod",
    "find_collaboration_windows",
    "best_windows",
    # Share strings
    "generate_share_string",
    "decode_participant",
    "encode_app_snapshot",
    "decode_app_snapshot",
    # Calendar
    "build_calendar_url",
]
