"""Exception hierarchy for the relay core.

Core components raise these; the dispatcher catches :class:`RelayError`
and drops the offending record. Nothing here is ever reported back to a
client.
"""
from __future__ import annotations

from typing import Optional


class RelayError(Exception):
    """Base exception for all relay errors."""


class UnknownSession(RelayError):
    def __init__(self, session_id: str):
        self.session_id = session_id
        super().__init__(f"Unknown session {session_id!r}")


class UnknownRoom(RelayError):
    def __init__(self, code: str):
        self.code = code
        super().__init__(f"Unknown room {code!r}")


class NotAPlayer(RelayError):
    def __init__(self, code: str, session_id: str):
        self.code = code
        self.session_id = session_id
        super().__init__(f"Session {session_id!r} is not a player in room {code}")


class NotASpectator(RelayError):
    def __init__(self, code: str, session_id: str):
        self.code = code
        self.session_id = session_id
        super().__init__(f"Session {session_id!r} is not a spectator in room {code}")


class RoomFull(RelayError):
    def __init__(self, code: str):
        self.code = code
        super().__init__(f"Room {code} already has a full set of players")


class OpponentMissing(RelayError):
    """Input was sent while the room has fewer than two players."""

    def __init__(self, code: str):
        self.code = code
        super().__init__(f"Room {code} has no opponent to relay input to")


class RoomSpaceExhausted(RelayError):
    def __init__(self, attempts: int):
        self.attempts = attempts
        super().__init__(f"No free room code found after {attempts} attempts")


class MalformedRecord(RelayError):
    """An inbound payload could not be decoded or failed validation."""

    def __init__(self, reason: str, payload: Optional[object] = None):
        self.reason = reason
        self.payload = payload
        super().__init__(f"Malformed record: {reason}")


__all__ = [
    "RelayError",
    "UnknownSession",
    "UnknownRoom",
    "NotAPlayer",
    "NotASpectator",
    "RoomFull",
    "OpponentMissing",
    "RoomSpaceExhausted",
    "MalformedRecord",
]
