"""Pure participant and snapshot data model - no I/O dependencies."""

import time
import uuid
from dataclasses import dataclass, field, fields, replace
from enum import Enum

from .schedule import Status
from .timerange import migrate_timezone, parse_offset

DEFAULT_TIMEZONE = "UTC+0"
DEFAULT_WORK_HOURS = "9-17"
DEFAULT_SLEEP_HOURS = "23-7"


def now_ms() -> int:
    """Current time in epoch milliseconds."""
    return int(time.time() * 1000)


def new_member_id() -> str:
    return str(uuid.uuid4())


class ThemeMode(Enum):
    DARK = "dark"
    LIGHT = "light"


@dataclass
class Participant:
    """A person on the dashboard: either yourself or a team member."""

    name: str = ""
    timezone: str = DEFAULT_TIMEZONE
    status: Status = Status.VIBING
    work_hours: str = DEFAULT_WORK_HOURS
    sleep_hours: str = DEFAULT_SLEEP_HOURS
    auto_status: bool = True
    avatar: str | None = None

    @property
    def utc_offset(self) -> float:
        """Offset from UTC in hours (0.0 when the timezone label is unparsable)."""
        return parse_offset(self.timezone)

    def to_dict(self) -> dict:
        data = {
            "name": self.name,
            "timezone": self.timezone,
            "status": self.status.value,
            "workHours": self.work_hours,
            "sleepHours": self.sleep_hours,
            "autoStatus": self.auto_status,
        }
        if self.avatar:
            data["avatar"] = self.avatar
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "Participant":
        """Build from persisted JSON, filling missing fields with defaults."""
        return cls(**_participant_kwargs(data))


@dataclass
class TeamMember(Participant):
    """A team member with a stable id for update and removal."""

    id: str = field(default_factory=new_member_id)
    last_updated: int = field(default_factory=now_ms)

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["id"] = self.id
        data["lastUpdated"] = self.last_updated
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "TeamMember":
        kwargs = _participant_kwargs(data)
        return cls(
            **kwargs,
            id=data.get("id") or new_member_id(),
            last_updated=int(data.get("lastUpdated") or now_ms()),
        )

    @classmethod
    def from_participant(cls, participant: Participant) -> "TeamMember":
        """Promote a participant to a new team member with a fresh id."""
        return cls(**{f.name: getattr(participant, f.name) for f in fields(Participant)})


def _participant_kwargs(data: dict) -> dict:
    defaults = Participant()
    status = Status.parse(data.get("status", ""), default=defaults.status)
    return {
        "name": data.get("name", defaults.name),
        "timezone": migrate_timezone(data.get("timezone") or defaults.timezone),
        "status": status,
        "work_hours": data.get("workHours", defaults.work_hours),
        "sleep_hours": data.get("sleepHours", defaults.sleep_hours),
        "auto_status": bool(data.get("autoStatus", defaults.auto_status)),
        "avatar": data.get("avatar") or None,
    }


@dataclass
class AppSnapshot:
    """Whole application state: the unit of persistence and export."""

    personal: Participant = field(default_factory=Participant)
    team: list[TeamMember] = field(default_factory=list)
    theme: ThemeMode = ThemeMode.DARK
    show_help: bool = False

    def to_dict(self) -> dict:
        return {
            "personalInfo": self.personal.to_dict(),
            "teamMembers": [m.to_dict() for m in self.team],
            "theme": self.theme.value,
            "showHelp": self.show_help,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "AppSnapshot":
        """Build from persisted JSON, merging over the default snapshot."""
        theme = ThemeMode.LIGHT if data.get("theme") == "light" else ThemeMode.DARK
        return cls(
            personal=Participant.from_dict(data.get("personalInfo") or {}),
            team=[TeamMember.from_dict(m) for m in data.get("teamMembers") or []],
            theme=theme,
            show_help=bool(data.get("showHelp", False)),
        )

    def find_member(self, member_id: str) -> TeamMember | None:
        for member in self.team:
            if member.id == member_id:
                return member
        return None


def update_personal(snapshot: AppSnapshot, **updates) -> AppSnapshot:
    """Return a snapshot with fields of the personal profile replaced."""
    return replace(snapshot, personal=replace(snapshot.personal, **updates))


def add_team_member(snapshot: AppSnapshot, participant: Participant) -> AppSnapshot:
    """Return a snapshot with a new team member (fresh id and timestamp) appended."""
    member = TeamMember.from_participant(participant)
    return replace(snapshot, team=[*snapshot.team, member])


def update_team_member(snapshot: AppSnapshot, member_id: str, **updates) -> AppSnapshot:
    """
    Return a snapshot with one team member's fields merged.

    last_updated is refreshed on the updated member. An unknown id leaves
    the team unchanged.
    """
    updates.pop("id", None)
    updates.pop("last_updated", None)
    team = [
        replace(m, **updates, last_updated=now_ms()) if m.id == member_id else m
        for m in snapshot.team
    ]
    return replace(snapshot, team=team)


def remove_team_member(snapshot: AppSnapshot, member_id: str) -> AppSnapshot:
    """Return a snapshot without the given team member."""
    return replace(snapshot, team=[m for m in snapshot.team if m.id != member_id])


def toggle_theme(snapshot: AppSnapshot) -> AppSnapshot:
    theme = ThemeMode.LIGHT if snapshot.theme == ThemeMode.DARK else ThemeMode.DARK
    return replace(snapshot, theme=theme)


def toggle_help(snapshot: AppSnapshot) -> AppSnapshot:
    return replace(snapshot, show_help=not snapshot.show_help)
