"""Pure status and schedule classification logic - no I/O dependencies."""

import random
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import assert_never

from .timerange import TimeRange, is_time_in_range


class Status(Enum):
    """Participant status shown on the dashboard."""

    VIBING = "vibing"
    DEEPWORK = "deepwork"
    AFK = "afk"
    SLEEP = "sleep"
    PAIR = "pair"
    VOICE = "voice"

    @classmethod
    def parse(cls, value: str, default: "Status | None" = None) -> "Status | None":
        """Look up a status by its value, returning default if unknown."""
        try:
            return cls(value)
        except ValueError:
            return default


class SchedulePeriod(Enum):
    """Where the current local hour falls in a participant's schedule."""

    WORK = "work"
    SLEEP = "sleep"
    AVAILABLE = "available"


@dataclass(frozen=True)
class StatusInfo:
    """Display metadata for a status."""

    icon: str
    label: str
    description: str
    flavor_texts: tuple[str, ...]


DEFAULT_FLAVOR_TEXT = "Ready for action 🎯"


def status_info(status: Status) -> StatusInfo:
    """Display metadata for a status."""
    match status:
        case Status.VIBING:
            return StatusInfo(
                icon="🎵",
                label="Vibing/Shipping",
                description="In the flow, shipping code",
                flavor_texts=(
                    "AI-assisted beast mode 🦅",
                    "Prompt engineering excellence ✨",
                    "In the flow state 🎯",
                ),
            )
        case Status.DEEPWORK:
            return StatusInfo(
                icon="💼",
                label="Deep Work",
                description="Focused coding session",
                flavor_texts=(
                    "Terminal locked and loaded 🎯",
                    "Architecture mode engaged 🏗️",
                    "Zero distraction protocol 🔒",
                ),
            )
        case Status.AFK:
            return StatusInfo(
                icon="🚶",
                label="AFK/Grass",
                description="Away from keyboard",
                flavor_texts=(
                    "Coffee++ refill mission ☕",
                    "Stepping away from terminal 🧘",
                    "Touching grass protocol 🌿",
                ),
            )
        case Status.SLEEP:
            return StatusInfo(
                icon="😴",
                label="Sleep Mode",
                description="Offline for rest",
                flavor_texts=(
                    "Recharging for next sprint 🔋",
                    "Dream debugging in progress 💤",
                ),
            )
        case Status.PAIR:
            return StatusInfo(
                icon="💬",
                label="Ready to Pair",
                description="Available for collaboration",
                flavor_texts=(
                    "Pair debugging protocols ready 🤝",
                    "Code review mode standby 👀",
                    "Team sync ready to deploy 🚀",
                ),
            )
        case Status.VOICE:
            return StatusInfo(
                icon="🎙️",
                label="Voice/AI Chat",
                description="In voice or AI session",
                flavor_texts=(
                    "Prompt crafting in progress 🎨",
                    "Voice command protocols active 🎙️",
                ),
            )
        case _:
            assert_never(status)


def random_flavor_text(status: Status, rng: random.Random | None = None) -> str:
    """Pick a flavor text for a status."""
    texts = status_info(status).flavor_texts
    if not texts:
        return DEFAULT_FLAVOR_TEXT
    return (rng or random).choice(texts)


def classify_period(
    point_in_time: datetime,
    work_hours: TimeRange | str | None,
    sleep_hours: TimeRange | str | None,
) -> SchedulePeriod:
    """
    Classify a local time against work and sleep ranges.

    Sleep takes precedence over work when the ranges overlap.
    """
    if is_time_in_range(point_in_time, sleep_hours):
        return SchedulePeriod.SLEEP
    if is_time_in_range(point_in_time, work_hours):
        return SchedulePeriod.WORK
    return SchedulePeriod.AVAILABLE


def status_for_period(period: SchedulePeriod) -> Status:
    """Status implied by a schedule period."""
    match period:
        case SchedulePeriod.SLEEP:
            return Status.SLEEP
        case SchedulePeriod.WORK:
            return Status.DEEPWORK
        case SchedulePeriod.AVAILABLE:
            return Status.VIBING
        case _:
            assert_never(period)


def suggest_status(
    point_in_time: datetime,
    work_hours: TimeRange | str | None,
    sleep_hours: TimeRange | str | None,
) -> Status:
    """Suggested status for a local time, ignoring any manual status."""
    return status_for_period(classify_period(point_in_time, work_hours, sleep_hours))


def auto_update_status(
    point_in_time: datetime,
    work_hours: TimeRange | str | None,
    sleep_hours: TimeRange | str | None,
    auto_enabled: bool,
) -> Status | None:
    """
    Status to apply under auto-status, or None when auto-status is off.

    Callers only overwrite a participant's status when the result is not
    None and differs from the current status.
    """
    if not auto_enabled:
        return None
    return suggest_status(point_in_time, work_hours, sleep_hours)


@dataclass(frozen=True)
class SchedulePreset:
    """A named work/sleep schedule."""

    name: str
    work_hours: str
    sleep_hours: str
    description: str
    emoji: str


SCHEDULE_PRESETS: list[SchedulePreset] = [
    SchedulePreset("Standard 9-5", "9-17", "23-7", "Traditional office hours with evening sleep", "🏢"),
    SchedulePreset("Night Owl", "14-22", "3-11", "Late starter, productive evenings", "🦉"),
    SchedulePreset("Early Bird", "6-14", "21-5", "Early riser, morning productivity", "🐦"),
    SchedulePreset("Freelancer Flex", "10-18", "1-8", "Flexible schedule with late nights", "💻"),
    SchedulePreset("Global Remote", "8-16", "22-6", "Optimized for international collaboration", "🌍"),
    SchedulePreset("Student Schedule", "13-21", "2-9", "Late nights, late mornings", "🎓"),
    SchedulePreset("Shift Worker", "22-6", "8-16", "Night shift schedule", "🌙"),
    SchedulePreset("Always Available", "0-24", "", "No fixed schedule (not recommended!)", "⚡"),
]


def find_preset(work_hours: str, sleep_hours: str) -> SchedulePreset | None:
    """Find the preset matching a work/sleep pair exactly."""
    for preset in SCHEDULE_PRESETS:
        if preset.work_hours == work_hours and preset.sleep_hours == sleep_hours:
            return preset
    return None


def preset_by_name(name: str) -> SchedulePreset | None:
    """Case-insensitive preset lookup by name."""
    for preset in SCHEDULE_PRESETS:
        if preset.name.lower() == name.lower():
            return preset
    return None
