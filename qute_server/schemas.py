"""Pydantic data schemas used across the relay server.

Inbound datagrams are validated into one record model per message kind
before they reach the dispatcher; outbound records are built from the
models below and serialised with ``by_alias=True``.
"""
from __future__ import annotations

from typing import Annotated, ClassVar, Dict, List, Optional, Type, Union

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, field_validator

from .constants import NO_ROOM, InboundType, OutboundType


def _coerce_session_id(value: object) -> object:
    # Clients may send numeric ids; they key the same session as their string form.
    if isinstance(value, bool):
        raise ValueError("id must be a string or number")
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str) and not value:
        raise ValueError("id must not be empty")
    return value


def _coerce_text(value: object) -> object:
    # Scalars are stringified; null reads as empty.
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    return value


def _coerce_room_code(value: object) -> object:
    if isinstance(value, bool):
        raise ValueError("room must be a number")
    if isinstance(value, int):
        if value < 0:
            raise ValueError("room must not be negative")
        return str(value)
    if isinstance(value, str):
        stripped = value.strip()
        if not stripped.isdigit():
            raise ValueError("room must be numeric")
        return str(int(stripped))
    raise ValueError("room must be a number")


SessionId = Annotated[str, BeforeValidator(_coerce_session_id)]
RoomCode = Annotated[str, BeforeValidator(_coerce_room_code)]
WireText = Annotated[str, BeforeValidator(_coerce_text)]

# -----------------------------
# Runtime
# -----------------------------


class Session(BaseModel):
    """A connected client and the endpoint its datagrams come from."""

    id: str
    address: str
    port: int
    username: str = ""
    character: Optional[int] = None  # unset until a player picks one


# -----------------------------
# Inbound records
# -----------------------------


class InboundRecord(BaseModel):
    model_config = ConfigDict(extra="ignore")

    kind: ClassVar[Optional[InboundType]] = None

    id: SessionId


class ConnectRecord(InboundRecord):
    """Any record carrying an unknown id is treated as a connect request."""

    username: WireText = ""


class RoomRecord(InboundRecord):
    room: RoomCode

    @property
    def in_room(self) -> bool:
        return self.room != NO_ROOM


class InputRecord(RoomRecord):
    kind = InboundType.INPUT

    key: int
    press: bool


class ChatRecord(RoomRecord):
    kind = InboundType.CHAT

    message: WireText


class CreateRoomRecord(InboundRecord):
    kind = InboundType.CREATE_ROOM


class JoinRoomRecord(RoomRecord):
    kind = InboundType.JOIN_ROOM


class ExitRoomRecord(RoomRecord):
    kind = InboundType.EXIT_ROOM


class JoinGameRecord(RoomRecord):
    kind = InboundType.JOIN_GAME


class LeaveGameRecord(RoomRecord):
    kind = InboundType.LEAVE_GAME


class RenameRecord(InboundRecord):
    kind = InboundType.RENAME

    username: WireText


class DisconnectRecord(InboundRecord):
    kind = InboundType.DISCONNECT


class CharacterSelectRecord(RoomRecord):
    kind = InboundType.CHARACTER_SELECT

    # ``false`` (or null) clears the selection.
    character: Optional[int] = None

    @field_validator("character", mode="before")
    @classmethod
    def _false_clears(cls, value: object) -> object:
        if value is False or value is None:
            return None
        if value is True:
            raise ValueError("character must be a number or false")
        return value


class RosterNoticeRecord(RoomRecord):
    kind = InboundType.ROSTER_NOTICE


class MatchStartRecord(RoomRecord):
    kind = InboundType.MATCH_START


INBOUND_MODELS: Dict[InboundType, Type[InboundRecord]] = {
    model.kind: model
    for model in (
        InputRecord,
        ChatRecord,
        CreateRoomRecord,
        JoinRoomRecord,
        ExitRoomRecord,
        JoinGameRecord,
        LeaveGameRecord,
        RenameRecord,
        DisconnectRecord,
        CharacterSelectRecord,
        RosterNoticeRecord,
        MatchStartRecord,
    )
}

# -----------------------------
# Outbound records
# -----------------------------


class OutboundRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class RemoteInput(OutboundRecord):
    type: OutboundType = OutboundType.REMOTE_INPUT
    key: int
    press: bool
    player: int


class LocalInput(OutboundRecord):
    type: OutboundType = OutboundType.LOCAL_INPUT
    key: int
    press: bool


class ChatBroadcast(OutboundRecord):
    type: OutboundType = OutboundType.CHAT
    message: str


class RoomCreated(OutboundRecord):
    type: OutboundType = OutboundType.ROOM_CREATED
    room: int


class RoomJoined(OutboundRecord):
    type: OutboundType = OutboundType.ROOM_JOINED
    room: int
    player: int


class RoomExited(OutboundRecord):
    type: OutboundType = OutboundType.ROOM_EXITED


class RosterEntry(BaseModel):
    """A player as listed in a roster broadcast; every field is a string on the wire."""

    username: str
    character: str
    port: str


class RosterChanged(OutboundRecord):
    type: OutboundType = OutboundType.ROSTER_CHANGED
    role_change: Union[List[RosterEntry], List[int]] = Field(alias="roleChange")


class Renamed(OutboundRecord):
    type: OutboundType = OutboundType.RENAMED


class Disconnected(OutboundRecord):
    type: OutboundType = OutboundType.DISCONNECTED


class Connected(OutboundRecord):
    type: OutboundType = OutboundType.CONNECTED


class MatchStarted(OutboundRecord):
    type: OutboundType = OutboundType.MATCH_STARTED


# -----------------------------
# HTTP monitoring responses
# -----------------------------


class PlayerView(BaseModel):
    index: int
    username: str
    character: Optional[int] = None


class RoomSummary(BaseModel):
    code: str
    player_count: int
    spectator_count: int
    players: List[str]


class RoomDetail(BaseModel):
    code: str
    players: List[PlayerView]
    spectators: List[str]


class HealthResponse(BaseModel):
    status: str = "ok"
    sessions: int
    rooms: int


__all__ = [
    # runtime
    "Session",
    "SessionId",
    "RoomCode",
    "WireText",
    # inbound
    "InboundRecord",
    "ConnectRecord",
    "RoomRecord",
    "InputRecord",
    "ChatRecord",
    "CreateRoomRecord",
    "JoinRoomRecord",
    "ExitRoomRecord",
    "JoinGameRecord",
    "LeaveGameRecord",
    "RenameRecord",
    "DisconnectRecord",
    "CharacterSelectRecord",
    "RosterNoticeRecord",
    "MatchStartRecord",
    "INBOUND_MODELS",
    # outbound
    "OutboundRecord",
    "RemoteInput",
    "LocalInput",
    "ChatBroadcast",
    "RoomCreated",
    "RoomJoined",
    "RoomExited",
    "RosterEntry",
    "RosterChanged",
    "Renamed",
    "Disconnected",
    "Connected",
    "MatchStarted",
    # monitoring
    "PlayerView",
    "RoomSummary",
    "RoomDetail",
    "HealthResponse",
]
