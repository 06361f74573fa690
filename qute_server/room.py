from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Iterator, List, Optional

from .constants import (
    MAX_PLAYERS,
    NO_ROOM,
    ROOM_CODE_MAX,
    ROOM_CODE_MIN,
    ROOM_CODE_SPACE,
    SPECTATOR_INDEX,
)
from .errors import NotAPlayer, NotASpectator, RoomFull, RoomSpaceExhausted, UnknownRoom

logger = logging.getLogger(__name__)


class Role(str, Enum):
    PLAYER = "player"
    SPECTATOR = "spectator"


@dataclass(frozen=True)
class JoinResult:
    role: Role
    player_index: int


@dataclass(frozen=True)
class ExitResult:
    code: str
    role: Optional[Role]  # None when the session was not in the room
    room_deleted: bool = False

    @property
    def left(self) -> bool:
        return self.role is not None


class Room:
    """Membership of one match room.

    Only session ids are stored; the session records themselves live in
    the ``SessionRegistry``.
    """

    def __init__(self, code: str, owner_id: str):
        self.code = code
        self.players: List[str] = [owner_id]
        # Insertion-ordered set so broadcasts go out in join order.
        self.spectators: Dict[str, None] = {}

    # -------------------- Queries -------------------- #

    @property
    def occupants(self) -> List[str]:
        """Players first, then spectators."""
        return self.players + list(self.spectators)

    @property
    def occupant_count(self) -> int:
        return len(self.players) + len(self.spectators)

    @property
    def has_free_seat(self) -> bool:
        return len(self.players) < MAX_PLAYERS

    def role_of(self, session_id: str) -> Optional[Role]:
        if session_id in self.players:
            return Role.PLAYER
        if session_id in self.spectators:
            return Role.SPECTATOR
        return None

    def player_index(self, session_id: str) -> int:
        """Seat of *session_id*, or ``SPECTATOR_INDEX`` if it holds none."""
        try:
            return self.players.index(session_id)
        except ValueError:
            return SPECTATOR_INDEX

    # -------------------- Mutation -------------------- #

    def add_player(self, session_id: str) -> int:
        if not self.has_free_seat:
            raise RoomFull(self.code)
        self.players.append(session_id)
        return len(self.players) - 1

    def add_spectator(self, session_id: str) -> None:
        self.spectators[session_id] = None

    def remove(self, session_id: str) -> Optional[Role]:
        role = self.role_of(session_id)
        if role is Role.PLAYER:
            self.players.remove(session_id)
        elif role is Role.SPECTATOR:
            del self.spectators[session_id]
        return role

    def promote(self, session_id: str) -> int:
        """Move a spectator into the next free seat and return its index."""
        if session_id not in self.spectators:
            raise NotASpectator(self.code, session_id)
        index = self.add_player(session_id)
        del self.spectators[session_id]
        return index

    def demote(self, session_id: str) -> None:
        if session_id not in self.players:
            raise NotAPlayer(self.code, session_id)
        self.players.remove(session_id)
        self.spectators[session_id] = None


RosterListener = Callable[[Room], None]


class RoomRegistry:
    """Active rooms keyed by code, plus a reverse index from session id to code."""

    def __init__(
        self,
        max_code_attempts: int = 1000,
        rng: Optional[random.Random] = None,
        roster_listener: Optional[RosterListener] = None,
    ):
        self.max_code_attempts = max_code_attempts
        self.roster_listener = roster_listener
        self._rng = rng or random.Random()
        self._rooms: Dict[str, Room] = {}
        self._membership: Dict[str, str] = {}

    def __contains__(self, code: object) -> bool:
        return code in self._rooms

    def __len__(self) -> int:
        return len(self._rooms)

    def __iter__(self) -> Iterator[Room]:
        return iter(list(self._rooms.values()))

    def get(self, code: str) -> Room:
        room = self._rooms.get(code)
        if room is None:
            raise UnknownRoom(code)
        return room

    def find(self, code: str) -> Optional[Room]:
        return self._rooms.get(code)

    def room_of(self, session_id: str) -> Optional[str]:
        return self._membership.get(session_id)

    # ---------------------------------------------------------------------
    # Lifecycle
    # ---------------------------------------------------------------------

    def _generate_code(self) -> str:
        if len(self._rooms) >= ROOM_CODE_SPACE:
            raise RoomSpaceExhausted(0)
        for _ in range(self.max_code_attempts):
            code = str(self._rng.randint(ROOM_CODE_MIN, ROOM_CODE_MAX))
            if code not in self._rooms:
                return code
        raise RoomSpaceExhausted(self.max_code_attempts)

    def create(self, owner_id: str) -> str:
        """Open a new room with *owner_id* as player 0 and return its code."""
        code = self._generate_code()
        self.leave_current(owner_id)
        self._rooms[code] = Room(code, owner_id)
        self._membership[owner_id] = code
        logger.info(f"Room {code} created by {owner_id}")
        return code

    def join(self, code: str, session_id: str) -> JoinResult:
        """Seat *session_id* as a player if a seat is free, otherwise as a spectator."""
        room = self.get(code)
        current = self._membership.get(session_id)
        if current == code:
            role = room.role_of(session_id)
            return JoinResult(role=role, player_index=room.player_index(session_id))
        if current is not None:
            self.exit(current, session_id)

        if room.has_free_seat:
            index = room.add_player(session_id)
            result = JoinResult(role=Role.PLAYER, player_index=index)
        else:
            room.add_spectator(session_id)
            result = JoinResult(role=Role.SPECTATOR, player_index=SPECTATOR_INDEX)
        self._membership[session_id] = code
        logger.debug(f"{session_id} joined room {code} as {result.role.value}")
        return result

    def exit(self, code: str, session_id: str) -> ExitResult:
        """Remove *session_id* from room *code*, destroying the room if it empties.

        A no-op for the "no room" code, unknown rooms and non-members. When a
        player leaves a room that survives, the roster listener is notified.
        """
        room = self._rooms.get(code) if code != NO_ROOM else None
        if room is None:
            return ExitResult(code=code, role=None)
        role = room.role_of(session_id)
        if role is None:
            return ExitResult(code=code, role=None)

        self._membership.pop(session_id, None)
        if room.occupant_count == 1:
            del self._rooms[code]
            logger.info(f"Room {code} destroyed (last occupant {session_id} left)")
            return ExitResult(code=code, role=role, room_deleted=True)

        room.remove(session_id)
        logger.debug(f"{session_id} left room {code}")
        if role is Role.PLAYER and self.roster_listener is not None:
            self.roster_listener(room)
        return ExitResult(code=code, role=role)

    def leave_current(self, session_id: str) -> Optional[ExitResult]:
        """Exit whatever room *session_id* occupies, if any."""
        code = self._membership.get(session_id)
        if code is None:
            return None
        return self.exit(code, session_id)


__all__ = ["Role", "JoinResult", "ExitResult", "Room", "RoomRegistry", "RosterListener"]
