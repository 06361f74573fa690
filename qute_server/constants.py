from enum import IntEnum


class InboundType(IntEnum):
    """Record kinds a client may send (the ``type`` field)."""

    INPUT = 0
    CHAT = 1
    CREATE_ROOM = 2
    JOIN_ROOM = 3
    EXIT_ROOM = 4
    JOIN_GAME = 5
    LEAVE_GAME = 6
    RENAME = 7
    DISCONNECT = 8
    CHARACTER_SELECT = 9
    ROSTER_NOTICE = 10
    MATCH_START = 11


class OutboundType(IntEnum):
    """Record kinds the server sends back."""

    REMOTE_INPUT = 0
    LOCAL_INPUT = 1
    CHAT = 2
    ROOM_CREATED = 3
    ROOM_JOINED = 4
    ROOM_EXITED = 5
    ROSTER_CHANGED = 6
    RENAMED = 7
    DISCONNECTED = 8
    CONNECTED = 9
    MATCH_STARTED = 10


MAX_PLAYERS = 2

# Room codes are 6-digit numbers; "0" is what clients send when not in a room.
ROOM_CODE_MIN = 100000
ROOM_CODE_MAX = 999999
ROOM_CODE_SPACE = ROOM_CODE_MAX - ROOM_CODE_MIN + 1
NO_ROOM = "0"

SPECTATOR_INDEX = -1

# Sent instead of an empty roster; clients treat it as "no players".
EMPTY_ROSTER_PLACEHOLDER: list[int] = [0, 1, 2]

__all__ = [
    "InboundType",
    "OutboundType",
    "MAX_PLAYERS",
    "ROOM_CODE_MIN",
    "ROOM_CODE_MAX",
    "ROOM_CODE_SPACE",
    "NO_ROOM",
    "SPECTATOR_INDEX",
    "EMPTY_ROSTER_PLACEHOLDER",
]
