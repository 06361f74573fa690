"""Tests for the JSON wire codec and inbound record schemas."""

import json

import pytest

from qute_server.codec import decode_payload, encode_record, inbound_kind, parse_record
from qute_server.constants import InboundType
from qute_server.errors import MalformedRecord
from qute_server.schemas import (
    CharacterSelectRecord,
    ChatRecord,
    ConnectRecord,
    InputRecord,
    JoinRoomRecord,
    RemoteInput,
    RenameRecord,
    RosterChanged,
)


class TestDecode:
    def test_deep_nesting(self):
        with pytest.raises(MalformedRecord):
            decode_payload(b"[" * 60000)

    def test_object_payload(self):
        assert decode_payload(b'{"id": "a", "type": 2}') == {"id": "a", "type": 2}

    def test_non_object_payload(self):
        with pytest.raises(MalformedRecord):
            decode_payload(b'"just a string"')

    def test_invalid_json(self):
        with pytest.raises(MalformedRecord):
            decode_payload("{")


class TestInboundKind:
    def test_known_kind(self):
        assert inbound_kind({"type": 11}) is InboundType.MATCH_START

    @pytest.mark.parametrize("value", [None, 12, -1, "3", True, 2.0])
    def test_unhandled_kinds(self, value):
        assert inbound_kind({"type": value}) is None


class TestParseRecord:
    def test_room_code_is_normalised(self):
        record = parse_record({"id": "a", "room": 123456}, JoinRoomRecord)
        assert record.room == "123456"
        assert record.in_room

    def test_zero_room_is_not_in_room(self):
        record = parse_record({"id": "a", "room": "0"}, JoinRoomRecord)
        assert not record.in_room

    def test_input_fields_are_coerced(self):
        record = parse_record({"id": "a", "room": 100000, "key": "7", "press": "false"}, InputRecord)
        assert record.key == 7
        assert record.press is False

    def test_text_fields_accept_scalars(self):
        assert parse_record({"id": "a", "username": None}, ConnectRecord).username == ""
        assert parse_record({"id": "a", "username": 42}, RenameRecord).username == "42"
        chat = parse_record({"id": "a", "room": 100000, "message": True}, ChatRecord)
        assert chat.message == "true"

    def test_text_fields_reject_containers(self):
        with pytest.raises(MalformedRecord):
            parse_record({"id": "a", "room": 100000, "message": {"x": 1}}, ChatRecord)

    def test_character_true_is_rejected(self):
        with pytest.raises(MalformedRecord):
            parse_record({"id": "a", "room": 100000, "character": True}, CharacterSelectRecord)

    def test_missing_key_is_rejected(self):
        with pytest.raises(MalformedRecord) as excinfo:
            parse_record({"id": "a", "room": 100000, "press": True}, InputRecord)
        assert "key" in excinfo.value.reason


class TestEncode:
    def test_remote_input(self):
        data = json.loads(encode_record(RemoteInput(key=5, press=True, player=0)))
        assert data == {"type": 0, "key": 5, "press": True, "player": 0}

    def test_roster_uses_wire_field_name(self):
        data = json.loads(encode_record(RosterChanged(role_change=[0, 1, 2])))
        assert data == {"type": 6, "roleChange": [0, 1, 2]}
