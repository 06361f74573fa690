"""Entry point for every inbound record.

Unknown client ids are always treated as a connect request, whatever kind
the record declares. Known ids are routed by ``type``. Core errors and
malformed payloads are dropped here; nothing is ever sent back to report
them.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Union

from . import relay
from .codec import decode_payload, inbound_kind, parse_record
from .constants import InboundType
from .errors import MalformedRecord, RelayError
from .schemas import (
    INBOUND_MODELS,
    ConnectRecord,
    Connected,
    Disconnected,
    InboundRecord,
    OutboundRecord,
    Renamed,
    RoomCreated,
    RoomExited,
    RoomJoined,
)
from .state import ServerState

logger = logging.getLogger(__name__)


class Dispatcher:
    def __init__(self, state: ServerState):
        self.state = state

    def dispatch(self, payload: Union[bytes, str, Dict[str, Any]], address: str, port: int) -> None:
        """Handle one inbound datagram from ``address:port`` to completion."""
        try:
            data = payload if isinstance(payload, dict) else decode_payload(payload)
            record = self._decode(data)
        except MalformedRecord as exc:
            logger.warning(f"Dropping record from {address}:{port}: {exc.reason}")
            return
        if record is None:
            return

        try:
            self._route(record, address, port)
        except RelayError as exc:
            logger.debug(f"Dropped {type(record).__name__} from {record.id}: {exc}")

    def _decode(self, data: Dict[str, Any]) -> Optional[InboundRecord]:
        envelope = parse_record(data, InboundRecord)
        if envelope.id not in self.state.sessions:
            return parse_record(data, ConnectRecord)
        kind = inbound_kind(data)
        if kind is None:
            logger.debug(f"Ignoring record of unknown type {data.get('type')!r} from {envelope.id}")
            return None
        return parse_record(data, INBOUND_MODELS[kind])

    def _reply(self, record: OutboundRecord, address: str, port: int) -> None:
        self.state.sender.send(record, address, port)

    def _route(self, record: InboundRecord, address: str, port: int) -> None:
        state = self.state
        kind = record.kind

        if kind is None:
            state.connect(record.id, address, port, record.username)
            self._reply(Connected(), address, port)
        elif kind == InboundType.INPUT:
            relay.relay_input(state, record.room, record.id, record.key, record.press)
        elif kind == InboundType.CHAT:
            relay.chat(state, record.room, record.id, record.message)
        elif kind == InboundType.CREATE_ROOM:
            code = state.rooms.create(record.id)
            self._reply(RoomCreated(room=int(code)), address, port)
        elif kind == InboundType.JOIN_ROOM:
            result = state.rooms.join(record.room, record.id)
            self._reply(RoomJoined(room=int(record.room), player=result.player_index), address, port)
        elif kind == InboundType.EXIT_ROOM:
            if not record.in_room or record.room not in state.rooms:
                return
            state.rooms.exit(record.room, record.id)
            self._reply(RoomExited(), address, port)
        elif kind == InboundType.JOIN_GAME:
            state.roles.promote_to_player(record.room, record.id)
        elif kind == InboundType.LEAVE_GAME:
            state.roles.demote_to_spectator(record.room, record.id)
        elif kind == InboundType.RENAME:
            state.sessions.rename(record.id, record.username)
            self._reply(Renamed(), address, port)
        elif kind == InboundType.DISCONNECT:
            state.disconnect(record.id)
            self._reply(Disconnected(), address, port)
        elif kind == InboundType.CHARACTER_SELECT:
            state.roles.set_character(record.room, record.id, record.character)
        elif kind == InboundType.ROSTER_NOTICE:
            state.roles.notify_roster(record.room)
        elif kind == InboundType.MATCH_START:
            relay.announce_match_start(state, record.room)


__all__ = ["Dispatcher"]
