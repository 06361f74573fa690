from __future__ import annotations

import logging
from typing import Dict, Optional

from .errors import UnknownSession
from .schemas import Session

logger = logging.getLogger(__name__)


class SessionRegistry:
    """Connected clients keyed by the id they send with every record."""

    def __init__(self) -> None:
        self._sessions: Dict[str, Session] = {}

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)

    def connect(self, session_id: str, address: str, port: int, username: str = "") -> Session:
        """Insert or overwrite the session for *session_id*; the character starts unset."""
        if session_id in self._sessions:
            logger.info(f"Session {session_id} reconnected from {address}:{port}")
        else:
            logger.info(f"Session {session_id} connected from {address}:{port}")
        session = Session(id=session_id, address=address, port=port, username=username)
        self._sessions[session_id] = session
        return session

    def get(self, session_id: str) -> Session:
        session = self._sessions.get(session_id)
        if session is None:
            raise UnknownSession(session_id)
        return session

    def find(self, session_id: str) -> Optional[Session]:
        return self._sessions.get(session_id)

    def rename(self, session_id: str, username: str) -> Session:
        session = self.get(session_id)
        session.username = username
        return session

    def set_character(self, session_id: str, character: Optional[int]) -> Session:
        session = self.get(session_id)
        session.character = character
        return session

    def disconnect(self, session_id: str) -> Session:
        """Remove and return the session.

        Room membership is not touched here; callers exit the session's
        room first (see ``ServerState.disconnect``).
        """
        session = self._sessions.pop(session_id, None)
        if session is None:
            raise UnknownSession(session_id)
        logger.info(f"Session {session_id} disconnected")
        return session


__all__ = ["SessionRegistry"]
