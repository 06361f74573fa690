from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from . import relay
from .errors import NotAPlayer

if TYPE_CHECKING:
    from .state import ServerState

logger = logging.getLogger(__name__)


class RoleManager:
    """Moves sessions between the players and spectators of a room.

    Every successful change is followed by a roster broadcast to the room.
    Preconditions that do not hold raise the matching ``RelayError``.
    """

    def __init__(self, state: ServerState):
        self.state = state

    def promote_to_player(self, code: str, session_id: str) -> int:
        """Seat a spectator; raises ``NotASpectator`` or ``RoomFull``."""
        room = self.state.rooms.get(code)
        index = room.promote(session_id)
        logger.debug(f"{session_id} promoted to player {index} in room {code}")
        relay.broadcast_roster(self.state, code)
        return index

    def demote_to_spectator(self, code: str, session_id: str) -> None:
        room = self.state.rooms.get(code)
        room.demote(session_id)
        logger.debug(f"{session_id} demoted to spectator in room {code}")
        relay.broadcast_roster(self.state, code)

    def set_character(self, code: str, session_id: str, character: Optional[int]) -> None:
        """Record a player's character pick (``None`` clears it) and rebroadcast."""
        room = self.state.rooms.get(code)
        if session_id not in room.players:
            raise NotAPlayer(code, session_id)
        self.state.sessions.set_character(session_id, character)
        relay.broadcast_roster(self.state, code)

    def notify_roster(self, code: str) -> None:
        relay.broadcast_roster(self.state, code)


__all__ = ["RoleManager"]
