from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request

from ..room import Room
from ..schemas import HealthResponse, PlayerView, RoomDetail, RoomSummary
from ..state import ServerState

router = APIRouter(prefix="", tags=["rooms"])


def get_relay_state(request: Request) -> ServerState:
    state = getattr(request.app.state, "relay", None)
    if state is None:
        raise HTTPException(status_code=503, detail="Relay is not running")
    return state


def _username(state: ServerState, session_id: str) -> str:
    session = state.sessions.find(session_id)
    return session.username if session else "Unknown"


def _summarise(state: ServerState, room: Room) -> RoomSummary:
    return RoomSummary(
        code=room.code,
        player_count=len(room.players),
        spectator_count=len(room.spectators),
        players=[_username(state, sid) for sid in room.players],
    )


@router.get("/health", response_model=HealthResponse)
async def health(state: ServerState = Depends(get_relay_state)):
    return HealthResponse(sessions=len(state.sessions), rooms=len(state.rooms))


@router.get("/rooms", response_model=List[RoomSummary])
async def list_rooms(state: ServerState = Depends(get_relay_state)):
    return [_summarise(state, room) for room in state.rooms]


@router.get("/rooms/{code}", response_model=RoomDetail)
async def get_room(code: str, state: ServerState = Depends(get_relay_state)):
    room = state.rooms.find(code)
    if not room:
        raise HTTPException(status_code=404, detail="Room not found")
    players: List[PlayerView] = []
    for index, sid in enumerate(room.players):
        session = state.sessions.find(sid)
        players.append(
            PlayerView(
                index=index,
                username=session.username if session else "Unknown",
                character=session.character if session else None,
            )
        )
    return RoomDetail(
        code=room.code,
        players=players,
        spectators=[_username(state, sid) for sid in room.spectators],
    )
