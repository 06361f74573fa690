"""Runtime state owned by one relay server process.

Sessions, rooms and the outbound sender hang off a ``ServerState``
instance that the transport, dispatcher and HTTP routers all receive by
reference.
"""
from __future__ import annotations

import random
from typing import Optional, Protocol

from . import relay
from .roles import RoleManager
from .room import ExitResult, RoomRegistry
from .schemas import OutboundRecord, Session
from .session import SessionRegistry


class Sender(Protocol):
    """Anything that can put one outbound record on the wire."""

    def send(self, record: OutboundRecord, address: str, port: int) -> None:
        ...


class ServerState:
    def __init__(
        self,
        sender: Sender,
        max_code_attempts: int = 1000,
        rng: Optional[random.Random] = None,
    ):
        self.sender = sender
        self.sessions = SessionRegistry()
        self.rooms = RoomRegistry(
            max_code_attempts=max_code_attempts,
            rng=rng,
            roster_listener=lambda room: relay.broadcast_roster(self, room.code),
        )
        self.roles = RoleManager(self)

    def connect(self, session_id: str, address: str, port: int, username: str = "") -> Session:
        """Register *session_id*; a reconnect first leaves the room it was in."""
        if session_id in self.sessions:
            self.rooms.leave_current(session_id)
        return self.sessions.connect(session_id, address, port, username)

    def disconnect(self, session_id: str) -> Optional[ExitResult]:
        """Leave the session's room (if any) and drop the session.

        Raises ``UnknownSession`` if *session_id* is not connected.
        """
        self.sessions.get(session_id)
        result = self.rooms.leave_current(session_id)
        self.sessions.disconnect(session_id)
        return result


__all__ = ["Sender", "ServerState"]
