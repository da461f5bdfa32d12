"""Share-string encoding for profiles and whole-app snapshots - no I/O."""

import logging

from .roster import AppSnapshot, Participant, TeamMember, ThemeMode
from .schedule import Status

logger = logging.getLogger(__name__)

PERSON_SCHEME = "GlobalSync://"
APP_SCHEME = "GlobalSyncApp://"

PERSON_DELIMITER = "|"
EMBEDDED_DELIMITER = "^"
TEAM_DELIMITER = "|"
SECTION_DELIMITER = "~"

MIN_FIELDS = 5


def encode_participant(participant: Participant, delimiter: str = PERSON_DELIMITER) -> str:
    """
    Join the seven profile fields with a delimiter (no scheme prefix).

    Field order: name, timezone, status, work hours, sleep hours, avatar,
    auto-status flag ("1" or "0").
    """
    parts = [
        participant.name,
        participant.timezone,
        participant.status.value,
        participant.work_hours,
        participant.sleep_hours,
        participant.avatar or "",
        "1" if participant.auto_status else "0",
    ]
    return delimiter.join(parts)


def _decode_fields(encoded: str, delimiter: str) -> Participant | None:
    parts = encoded.split(delimiter)
    if len(parts) < MIN_FIELDS:
        return None

    status = Status.parse(parts[2])
    if status is None:
        logger.debug(f"Unknown status {parts[2]!r} in share string, using vibing")
        status = Status.VIBING

    return Participant(
        name=parts[0],
        timezone=parts[1],
        status=status,
        work_hours=parts[3],
        sleep_hours=parts[4],
        avatar=(parts[5] if len(parts) > 5 else "") or None,
        auto_status=len(parts) > 6 and parts[6] == "1",
    )


def generate_share_string(participant: Participant) -> str:
    """Shareable "GlobalSync://" string for one profile."""
    return f"{PERSON_SCHEME}{encode_participant(participant)}"


def decode_participant(share_string: str) -> Participant | None:
    """
    Parse a "GlobalSync://" profile string.

    Returns None for a wrong prefix or too few fields. The name may still be
    empty; callers treat that as invalid.
    """
    if not isinstance(share_string, str) or not share_string.startswith(PERSON_SCHEME):
        return None
    return _decode_fields(share_string[len(PERSON_SCHEME) :], PERSON_DELIMITER)


def encode_app_snapshot(snapshot: AppSnapshot) -> str:
    """Shareable "GlobalSyncApp://" string for the whole app state."""
    personal = encode_participant(snapshot.personal, EMBEDDED_DELIMITER)
    team = TEAM_DELIMITER.join(
        encode_participant(member, EMBEDDED_DELIMITER) for member in snapshot.team
    )
    sections = [personal, team, snapshot.theme.value]
    return f"{APP_SCHEME}{SECTION_DELIMITER.join(sections)}"


def decode_app_snapshot(share_string: str) -> AppSnapshot | None:
    """
    Parse a "GlobalSyncApp://" string.

    The personal profile must decode with a name or the whole import fails.
    Team members that fail to decode are skipped. Every imported member gets
    a fresh id and timestamp.
    """
    if not isinstance(share_string, str) or not share_string.startswith(APP_SCHEME):
        return None

    sections = share_string[len(APP_SCHEME) :].split(SECTION_DELIMITER)
    if len(sections) != 3:
        return None
    personal_section, team_section, theme_section = sections

    personal = _decode_fields(personal_section, EMBEDDED_DELIMITER)
    if personal is None or not personal.name:
        return None

    team: list[TeamMember] = []
    if team_section.strip():
        for encoded in team_section.split(TEAM_DELIMITER):
            if not encoded.strip():
                continue
            member = _decode_fields(encoded, EMBEDDED_DELIMITER)
            if member is None or not member.name:
                logger.debug(f"Skipping malformed team member {encoded!r}")
                continue
            team.append(TeamMember.from_participant(member))

    theme = ThemeMode.LIGHT if theme_section == "light" else ThemeMode.DARK

    return AppSnapshot(personal=personal, team=team, theme=theme, show_help=False)
