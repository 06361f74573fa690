"""Tests for player/spectator role changes and roster broadcasts."""

import pytest

from conftest import PORTS
from qute_server.errors import NotAPlayer, NotASpectator, RoomFull, UnknownRoom


def roster_records(sender, port):
    return [r for r in sender.to(port) if r["type"] == 6]


class TestPromote:
    def test_spectator_takes_free_seat(self, state, sender, connect):
        connect("u1", "u2", "u3")
        code = state.rooms.create("u1")
        state.rooms.join(code, "u2")
        state.rooms.join(code, "u3")
        state.roles.demote_to_spectator(code, "u2")
        sender.clear()

        index = state.roles.promote_to_player(code, "u3")

        room = state.rooms.get(code)
        assert index == 1
        assert room.players == ["u1", "u3"]
        assert list(room.spectators) == ["u2"]
        for sid in ("u1", "u2", "u3"):
            records = roster_records(sender, PORTS[sid])
            assert len(records) == 1
            assert [p["username"] for p in records[0]["roleChange"]] == ["u1", "u3"]

    def test_full_room_rejects_promotion(self, state, sender, connect):
        connect("u1", "u2", "u3")
        code = state.rooms.create("u1")
        state.rooms.join(code, "u2")
        state.rooms.join(code, "u3")
        sender.clear()

        with pytest.raises(RoomFull):
            state.roles.promote_to_player(code, "u3")
        assert list(state.rooms.get(code).spectators) == ["u3"]
        assert sender.sent == []

    def test_player_cannot_be_promoted(self, state, connect):
        connect("u1")
        code = state.rooms.create("u1")
        with pytest.raises(NotASpectator):
            state.roles.promote_to_player(code, "u1")

    def test_unknown_room(self, state, connect):
        connect("u1")
        with pytest.raises(UnknownRoom):
            state.roles.promote_to_player("123123", "u1")


class TestDemote:
    def test_player_becomes_spectator(self, state, sender, connect):
        connect("u1", "u2")
        code = state.rooms.create("u1")
        state.rooms.join(code, "u2")
        sender.clear()

        state.roles.demote_to_spectator(code, "u1")

        room = state.rooms.get(code)
        assert room.players == ["u2"]
        assert list(room.spectators) == ["u1"]
        assert len(roster_records(sender, PORTS["u1"])) == 1
        assert len(roster_records(sender, PORTS["u2"])) == 1

    def test_spectator_cannot_be_demoted(self, state, connect):
        connect("u1", "u2", "u3")
        code = state.rooms.create("u1")
        state.rooms.join(code, "u2")
        state.rooms.join(code, "u3")
        with pytest.raises(NotAPlayer):
            state.roles.demote_to_spectator(code, "u3")

    def test_last_player_leaving_sends_placeholder(self, state, sender, connect):
        connect("u1")
        code = state.rooms.create("u1")

        state.roles.demote_to_spectator(code, "u1")

        records = roster_records(sender, PORTS["u1"])
        assert records == [{"type": 6, "roleChange": [0, 1, 2]}]


class TestCharacterSelect:
    def test_player_selects_character(self, state, sender, connect):
        connect("u1", "u2")
        code = state.rooms.create("u1")
        state.rooms.join(code, "u2")
        sender.clear()

        state.roles.set_character(code, "u2", 4)

        assert state.sessions.get("u2").character == 4
        roster = roster_records(sender, PORTS["u1"])[0]["roleChange"]
        assert roster == [
            {"username": "u1", "character": "null", "port": "5001"},
            {"username": "u2", "character": "4", "port": "5002"},
        ]

    def test_clearing_character_still_broadcasts(self, state, sender, connect):
        connect("u1")
        code = state.rooms.create("u1")
        state.roles.set_character(code, "u1", None)
        state.roles.set_character(code, "u1", None)

        assert len(roster_records(sender, PORTS["u1"])) == 2
        assert state.sessions.get("u1").character is None

    def test_spectator_cannot_select(self, state, connect):
        connect("u1", "u2", "u3")
        code = state.rooms.create("u1")
        state.rooms.join(code, "u2")
        state.rooms.join(code, "u3")

        with pytest.raises(NotAPlayer):
            state.roles.set_character(code, "u3", 1)
        assert state.sessions.get("u3").character is None
