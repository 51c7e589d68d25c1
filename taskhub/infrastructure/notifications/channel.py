"""Per-user live session registry for notification websockets."""

from __future__ import annotations

import asyncio
import itertools
import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol

from taskhub.domain.exceptions import AuthenticationError

logger = logging.getLogger(__name__)

# RFC 6455 "policy violation" close code.
POLICY_VIOLATION = 1008


class LiveSocket(Protocol):
    async def accept(self) -> None: ...

    async def close(self, code: int = 1000) -> None: ...

    async def send_json(self, data: Any) -> None: ...


class ConnectionState(str, Enum):
    CONNECTING = "connecting"
    AUTHENTICATED = "authenticated"
    JOINED = "joined"
    DISCONNECTED = "disconnected"


@dataclass(eq=False)
class LiveSession:
    """One websocket connection and where it is in its lifecycle."""

    id: int
    websocket: LiveSocket
    state: ConnectionState = ConnectionState.CONNECTING
    user_id: int | None = None
    delivered: int = 0

    @property
    def is_joined(self) -> bool:
        return self.state is ConnectionState.JOINED


class RealtimeChannel:
    """Authenticate websocket connections and fan out pushes per user room.

    ``authenticator`` turns a token into a user id and raises
    :class:`AuthenticationError` (or ``ValueError``) for anything else.
    """

    def __init__(self, authenticator: Callable[[str], int]) -> None:
        self._authenticator = authenticator
        self._rooms: dict[int, dict[int, LiveSession]] = {}
        self._lock = asyncio.Lock()
        self._ids = itertools.count(1)

    async def handshake(self, websocket: LiveSocket, token: str | None) -> LiveSession:
        """Authenticate ``websocket`` and join it to its user's room."""

        session = LiveSession(id=next(self._ids), websocket=websocket)
        try:
            session.user_id = self._authenticate(token)
        except AuthenticationError:
            session.state = ConnectionState.DISCONNECTED
            await websocket.close(code=POLICY_VIOLATION)
            raise
        session.state = ConnectionState.AUTHENTICATED

        await websocket.accept()
        await self.join(session)
        return session

    async def join(self, session: LiveSession) -> None:
        if session.state is not ConnectionState.AUTHENTICATED or session.user_id is None:
            raise AuthenticationError("Only authenticated sessions can join a room")
        async with self._lock:
            self._rooms.setdefault(session.user_id, {})[session.id] = session
            session.state = ConnectionState.JOINED
        logger.info("Live session %s joined room %s", session.id, session.user_id)

    async def disconnect(self, session: LiveSession) -> None:
        """Drop ``session`` from its room. Safe to call more than once."""

        async with self._lock:
            self._remove(session)
        session.state = ConnectionState.DISCONNECTED

    async def push_to_user(self, user_id: int, payload: dict[str, Any]) -> int:
        """Send ``payload`` to every joined session of ``user_id``.

        Returns how many sessions received it. Nothing is queued for users
        without a joined session.
        """

        async with self._lock:
            sessions = [s for s in self._rooms.get(user_id, {}).values() if s.is_joined]

        delivered = 0
        for session in sessions:
            try:
                await session.websocket.send_json(payload)
            except Exception:
                logger.warning(
                    "Dropping live session %s of user %s after a failed send",
                    session.id,
                    user_id,
                    exc_info=True,
                )
                await self.disconnect(session)
                continue
            session.delivered += 1
            delivered += 1
        return delivered

    def session_count(self, user_id: int) -> int:
        return len(self._rooms.get(user_id, {}))

    def _authenticate(self, token: str | None) -> int:
        if not token:
            raise AuthenticationError("Missing token")
        try:
            return self._authenticator(token)
        except AuthenticationError:
            raise
        except ValueError as exc:
            raise AuthenticationError(str(exc)) from exc

    def _remove(self, session: LiveSession) -> None:
        if session.user_id is None:
            return
        room = self._rooms.get(session.user_id)
        if room is None:
            return
        room.pop(session.id, None)
        if not room:
            self._rooms.pop(session.user_id, None)


__all__ = [
    "ConnectionState",
    "LiveSession",
    "LiveSocket",
    "POLICY_VIOLATION",
    "RealtimeChannel",
]
