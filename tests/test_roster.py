"""Tests for the participant and snapshot model."""

from unittest.mock import patch

import pytest

from globalsync.core.roster import (
    AppSnapshot,
    Participant,
    TeamMember,
    ThemeMode,
    add_team_member,
    remove_team_member,
    toggle_help,
    toggle_theme,
    update_personal,
    update_team_member,
)
from globalsync.core.schedule import Status


@pytest.fixture
def snapshot():
    return AppSnapshot(
        personal=Participant(name="Me", timezone="UTC+1"),
        team=[
            TeamMember(name="Ana", timezone="UTC-5", id="a1", last_updated=1000),
            TeamMember(name="Bo", timezone="UTC+9", id="b2", last_updated=1000),
        ],
    )


class TestParticipant:
    def test_defaults(self):
        p = Participant()
        assert p.name == ""
        assert p.timezone == "UTC+0"
        assert p.status == Status.VIBING
        assert (p.work_hours, p.sleep_hours) == ("9-17", "23-7")
        assert p.auto_status is True
        assert p.avatar is None

    def test_utc_offset(self):
        assert Participant(timezone="UTC+5.5").utc_offset == 5.5
        assert Participant(timezone="nowhere").utc_offset == 0.0

    def test_to_dict_uses_camel_case(self):
        data = Participant(name="Me", avatar="M").to_dict()
        assert data == {
            "name": "Me",
            "timezone": "UTC+0",
            "status": "vibing",
            "workHours": "9-17",
            "sleepHours": "23-7",
            "autoStatus": True,
            "avatar": "M",
        }

    def test_from_dict_fills_defaults_and_migrates(self):
        p = Participant.from_dict({"name": "Old", "timezone": "GMT+3", "status": "bogus"})
        assert p.timezone == "UTC+3"
        assert p.status == Status.VIBING
        assert p.work_hours == "9-17"


class TestTeamMember:
    def test_generates_id_and_timestamp(self):
        a, b = TeamMember(name="A"), TeamMember(name="B")
        assert a.id != b.id
        assert a.last_updated > 0

    def test_from_participant(self):
        member = TeamMember.from_participant(Participant(name="Cy", status=Status.AFK))
        assert member.name == "Cy"
        assert member.status == Status.AFK
        assert member.id

    def test_dict_roundtrip(self):
        member = TeamMember(name="Di", timezone="UTC-3", id="d4", last_updated=42)
        assert TeamMember.from_dict(member.to_dict()) == member

    def test_from_dict_without_id(self):
        member = TeamMember.from_dict({"name": "Ed"})
        assert member.id


class TestSnapshotOperations:
    def test_update_personal(self, snapshot):
        updated = update_personal(snapshot, status=Status.PAIR)
        assert updated.personal.status == Status.PAIR
        assert snapshot.personal.status == Status.VIBING

    def test_add_team_member(self, snapshot):
        updated = add_team_member(snapshot, Participant(name="Cy"))
        assert [m.name for m in updated.team] == ["Ana", "Bo", "Cy"]
        assert isinstance(updated.team[-1], TeamMember)
        assert len(snapshot.team) == 2

    @patch("globalsync.core.roster.now_ms", return_value=5000)
    def test_update_team_member_refreshes_timestamp(self, _mock_now, snapshot):
        updated = update_team_member(snapshot, "a1", status=Status.AFK, id="hijack", last_updated=1)
        ana = updated.find_member("a1")
        assert ana.status == Status.AFK
        assert ana.last_updated == 5000
        assert updated.find_member("b2").last_updated == 1000
        assert snapshot.find_member("a1").status == Status.VIBING

    def test_update_unknown_member_is_noop(self, snapshot):
        updated = update_team_member(snapshot, "zzz", name="Nobody")
        assert updated.team == snapshot.team

    def test_remove_team_member(self, snapshot):
        updated = remove_team_member(snapshot, "a1")
        assert [m.name for m in updated.team] == ["Bo"]

    def test_toggles(self, snapshot):
        assert toggle_theme(snapshot).theme == ThemeMode.LIGHT
        assert toggle_theme(toggle_theme(snapshot)).theme == ThemeMode.DARK
        assert toggle_help(snapshot).show_help is True


class TestSnapshotDict:
    def test_shape(self, snapshot):
        data = snapshot.to_dict()
        assert set(data) == {"personalInfo", "teamMembers", "theme", "showHelp"}
        assert data["teamMembers"][0]["id"] == "a1"

    def test_roundtrip(self, snapshot):
        assert AppSnapshot.from_dict(snapshot.to_dict()) == snapshot

    def test_from_empty_dict(self):
        assert AppSnapshot.from_dict({}) == AppSnapshot()

    def test_partial_personal_info_merged(self):
        snap = AppSnapshot.from_dict({"personalInfo": {"name": "Me"}, "theme": "light"})
        assert snap.personal.name == "Me"
        assert snap.personal.sleep_hours == "23-7"
        assert snap.theme == ThemeMode.LIGHT
