"""Dashboard service shared by the CLI commands.

Owns the in-memory snapshot, loads it from a key-value store, and writes
the whole document back after every change. Long-running callers reload
before each change so edits made by other processes are not overwritten.
"""

import logging
from datetime import date, datetime, timezone

from .adapters.file_store import JsonFileStore
from .config import Config
from .core import roster
from .core.calendar_link import DEFAULT_TITLE, build_calendar_url
from .core.collaboration import CollaborationWindow, best_windows, find_collaboration_windows
from .core.roster import AppSnapshot, Participant, TeamMember
from .core.schedule import SchedulePeriod, auto_update_status, classify_period
from .core.share import (
    decode_app_snapshot,
    decode_participant,
    encode_app_snapshot,
    generate_share_string,
)
from .core.timerange import local_time
from .ports import KeyValueStore
from .storage import STORAGE_KEY, StorageError, load_snapshot, save_snapshot

logger = logging.getLogger(__name__)

SELF_LABEL = "(you)"


class AmbiguousMemberError(LookupError):
    """Raised when an id prefix matches more than one team member."""


class Dashboard:
    """Application state with an injected persistence port."""

    def __init__(self, store: KeyValueStore, key: str = STORAGE_KEY):
        self.store = store
        self.key = key
        self._snapshot = load_snapshot(store, key)

    def reload(self) -> AppSnapshot:
        """Re-read the stored snapshot, discarding the in-memory copy."""
        self._snapshot = load_snapshot(self.store, self.key)
        return self._snapshot

    @property
    def snapshot(self) -> AppSnapshot:
        return self._snapshot

    @property
    def personal(self) -> Participant:
        return self._snapshot.personal

    @property
    def team(self) -> list[TeamMember]:
        return self._snapshot.team

    def _commit(self, snapshot: AppSnapshot) -> AppSnapshot:
        self._snapshot = snapshot
        if not save_snapshot(self.store, snapshot, self.key):
            raise StorageError(f"Could not save changes under {self.key!r}")
        return snapshot

    # ============== Profile & Team ==============

    def update_personal(self, **updates) -> Participant:
        self._commit(roster.update_personal(self._snapshot, **updates))
        return self.personal

    def reset_profile(self) -> None:
        """Clear the personal name; the profile itself is never removed."""
        self.update_personal(name="")

    def add_member(self, participant: Participant) -> TeamMember:
        self._commit(roster.add_team_member(self._snapshot, participant))
        return self.team[-1]

    def update_member(self, member_id: str, **updates) -> TeamMember | None:
        """Merge fields into a team member. Returns None for an unknown id."""
        if self._snapshot.find_member(member_id) is None:
            return None
        self._commit(roster.update_team_member(self._snapshot, member_id, **updates))
        return self._snapshot.find_member(member_id)

    def remove_member(self, member_id: str) -> bool:
        if self._snapshot.find_member(member_id) is None:
            return False
        self._commit(roster.remove_team_member(self._snapshot, member_id))
        return True

    def find_member(self, ref: str) -> TeamMember | None:
        """
        Find a member by id, exact name (first match), or unique id prefix.

        Raises AmbiguousMemberError when a prefix matches several members.
        """
        if not ref:
            return None
        for member in self.team:
            if member.id == ref:
                return member
        for member in self.team:
            if member.name == ref:
                return member
        matches = [m for m in self.team if m.id.startswith(ref)]
        if len(matches) > 1:
            raise AmbiguousMemberError(f"{ref!r} matches {len(matches)} team members, use a longer id")
        return matches[0] if matches else None

    def toggle_theme(self) -> AppSnapshot:
        return self._commit(roster.toggle_theme(self._snapshot))

    def toggle_help(self) -> AppSnapshot:
        return self._commit(roster.toggle_help(self._snapshot))

    # ============== Share Strings ==============

    def export_profile(self) -> str:
        return generate_share_string(self.personal)

    def export_app(self) -> str:
        return encode_app_snapshot(self._snapshot)

    def import_member(self, share_string: str) -> TeamMember | None:
        """Add a team member from a profile string. None if it does not decode."""
        parsed = decode_participant(share_string.strip())
        if parsed is None or not parsed.name:
            logger.info("Rejected invalid profile share string")
            return None
        return self.add_member(parsed)

    def import_app(self, share_string: str) -> bool:
        """Replace the whole state from an app string. State is untouched on failure."""
        imported = decode_app_snapshot(share_string.strip())
        if imported is None:
            logger.info("Rejected invalid app share string")
            return False
        self._commit(imported)
        return True

    # ============== Schedule ==============

    def collaboration_windows(self) -> list[CollaborationWindow]:
        return find_collaboration_windows(self.personal, self.team)

    def best_windows(self, limit: int = 3) -> list[CollaborationWindow]:
        return best_windows(self.collaboration_windows(), limit)

    def calendar_url(
        self,
        window: CollaborationWindow,
        on_date: date | None = None,
        title: str = DEFAULT_TITLE,
    ) -> str:
        on_date = on_date or datetime.now(timezone.utc).date()
        return build_calendar_url(window, on_date, title)

    def period_of(self, participant: Participant, now: datetime | None = None) -> SchedulePeriod:
        current = local_time(participant.timezone, now)
        return classify_period(current, participant.work_hours, participant.sleep_hours)

    def tick(self, now: datetime | None = None) -> list[str]:
        """
        Apply auto-status to everyone who has it enabled.

        Only statuses that actually change are written. Returns the names of
        the participants whose status changed, with SELF_LABEL standing in
        for an unnamed personal profile. Raises StorageError if the result
        could not be saved.
        """
        now = now or datetime.now(timezone.utc)
        changed: list[str] = []
        snapshot = self._snapshot

        personal = snapshot.personal
        new_status = auto_update_status(
            local_time(personal.timezone, now),
            personal.work_hours,
            personal.sleep_hours,
            personal.auto_status,
        )
        if new_status is not None and new_status != personal.status:
            snapshot = roster.update_personal(snapshot, status=new_status)
            changed.append(personal.name or SELF_LABEL)

        for member in snapshot.team:
            new_status = auto_update_status(
                local_time(member.timezone, now),
                member.work_hours,
                member.sleep_hours,
                member.auto_status,
            )
            if new_status is not None and new_status != member.status:
                snapshot = roster.update_team_member(snapshot, member.id, status=new_status)
                changed.append(member.name)

        if changed:
            logger.debug(f"Auto-status updated: {', '.join(changed)}")
            self._commit(snapshot)
        return changed


def open_dashboard(config: Config) -> Dashboard:
    """Dashboard backed by the configured JSON store file."""
    return Dashboard(JsonFileStore(config.data_path), key=config.storage_key)
