"""Forwarding helpers that fan records out to the occupants of a room."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Union

from .constants import EMPTY_ROSTER_PLACEHOLDER, MAX_PLAYERS
from .errors import NotAPlayer, OpponentMissing
from .room import Room
from .schemas import (
    ChatBroadcast,
    LocalInput,
    MatchStarted,
    OutboundRecord,
    RemoteInput,
    RosterChanged,
    RosterEntry,
)

if TYPE_CHECKING:
    from .state import ServerState

logger = logging.getLogger(__name__)


def _send_to(state: ServerState, session_id: str, record: OutboundRecord) -> None:
    session = state.sessions.find(session_id)
    if session is None:
        logger.warning(f"Skipping send to {session_id}: no such session")
        return
    state.sender.send(record, session.address, session.port)


def send_to_room(state: ServerState, room: Room, record: OutboundRecord) -> None:
    """Send *record* to every player, then every spectator, of *room*."""
    for session_id in room.occupants:
        _send_to(state, session_id, record)


def _collect_roster(state: ServerState, room: Room) -> Union[List[RosterEntry], List[int]]:
    entries: List[RosterEntry] = []
    for session_id in room.players:
        session = state.sessions.get(session_id)
        entries.append(
            RosterEntry(
                username=session.username,
                character="null" if session.character is None else str(session.character),
                port=str(session.port),
            )
        )
    if not entries:
        return list(EMPTY_ROSTER_PLACEHOLDER)
    return entries


def broadcast_roster(state: ServerState, code: str) -> None:
    """Push the current player list of room *code* to everyone in it."""
    room = state.rooms.get(code)
    record = RosterChanged(role_change=_collect_roster(state, room))
    send_to_room(state, room, record)


def chat(state: ServerState, code: str, session_id: str, text: str) -> None:
    """Send ``"<username>: <text>"`` to the whole room, sender included."""
    session = state.sessions.get(session_id)
    room = state.rooms.get(code)
    send_to_room(state, room, ChatBroadcast(message=f"{session.username}: {text}"))


def relay_input(state: ServerState, code: str, session_id: str, key: int, pressed: bool) -> None:
    """Echo a key event to its sender and forward it to the opponent and spectators."""
    room = state.rooms.get(code)
    index = room.player_index(session_id)
    if index < 0:
        raise NotAPlayer(code, session_id)
    if len(room.players) < MAX_PLAYERS:
        raise OpponentMissing(code)
    opponent_id = room.players[1 - index]

    _send_to(state, session_id, LocalInput(key=key, press=pressed))
    remote = RemoteInput(key=key, press=pressed, player=index)
    _send_to(state, opponent_id, remote)
    for spectator_id in list(room.spectators):
        _send_to(state, spectator_id, remote)


def announce_match_start(state: ServerState, code: str) -> None:
    send_to_room(state, state.rooms.get(code), MatchStarted())


__all__ = [
    "send_to_room",
    "broadcast_roster",
    "chat",
    "relay_input",
    "announce_match_start",
]
