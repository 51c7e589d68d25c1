"""Websocket endpoint that streams notification frames to the authenticated user."""

from __future__ import annotations

import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from taskhub.domain.exceptions import AuthenticationError
from taskhub.infrastructure.notifications import RealtimeChannel

logger = logging.getLogger(__name__)

router = APIRouter(tags=["realtime"])


@router.websocket("/ws")
async def notifications_websocket(websocket: WebSocket) -> None:
    channel: RealtimeChannel = websocket.app.state.realtime_channel

    try:
        session = await channel.handshake(websocket, websocket.query_params.get("token"))
    except AuthenticationError as exc:
        logger.info("Rejected live connection: %s", exc)
        return

    try:
        while True:
            try:
                message = await websocket.receive_json()
            except ValueError:
                continue

            if isinstance(message, dict) and message.get("type") == "ping":
                await websocket.send_json({"type": "pong"})
    except WebSocketDisconnect:
        logger.debug("Live session %s closed by client", session.id)
    finally:
        await channel.disconnect(session)
