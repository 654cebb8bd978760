#!/usr/bin/env python3
"""
WebSocket endpoint for the messaging hub.

Frames are JSON text messages {"event": <name>, "data": {...}} in both
directions. The bearer token is read from the Authorization header or, for
browsers that cannot set headers on a WebSocket, the ?token= query parameter.
"""

import asyncio
import logging
from typing import Any, Optional

from fastapi import APIRouter, WebSocket, WebSocketDisconnect, status

from chat import ChatHub, Connection, AuthenticatedUser
from chat.events import ERROR
from core.security import AuthenticationError, extract_bearer_token

logger = logging.getLogger(__name__)

router = APIRouter(tags=["chat"])

# Application close code sent to a socket replaced by a newer login
SUPERSEDED_CLOSE_CODE = 4000


class WebSocketConnection(Connection):
    """Hub connection backed by a FastAPI WebSocket."""

    def __init__(self, user: AuthenticatedUser, websocket: WebSocket):
        super().__init__(user)
        self.websocket = websocket
        self._send_lock = asyncio.Lock()

    async def send_event(self, event: str, data: Any) -> None:
        # Pushes for other users interleave with this connection's replies
        async with self._send_lock:
            await self.websocket.send_json({"event": event, "data": data})

    async def close(self, reason: str = "") -> None:
        async with self._send_lock:
            await self.websocket.close(code=SUPERSEDED_CLOSE_CODE, reason=reason)


def _handshake_token(websocket: WebSocket) -> Optional[str]:
    token = extract_bearer_token(websocket.headers.get('authorization'))
    return token or websocket.query_params.get('token')


@router.websocket("/ws/chat")
async def chat_websocket(websocket: WebSocket):
    hub: ChatHub = websocket.app.state.chat_hub

    try:
        user = await hub.authenticate(_handshake_token(websocket))
    except AuthenticationError as e:
        logger.info(f"Rejected chat handshake from {websocket.client}: {e}")
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION, reason=str(e))
        return

    connection = WebSocketConnection(user, websocket)
    try:
        # Online from the moment the client sees the handshake complete
        await hub.connect(connection)
        await websocket.accept()
        while True:
            try:
                frame = await websocket.receive_json()
            except ValueError:
                frame = None

            if not isinstance(frame, dict):
                await connection.send_event(ERROR, {
                    'code': 'validation',
                    'message': 'Frames must be JSON objects',
                    'event': None,
                })
                continue

            await hub.dispatch(connection, frame.get('event'), frame.get('data'))
    except WebSocketDisconnect as e:
        logger.debug(f"User {user.id} closed the connection (code={e.code})")
    finally:
        await hub.disconnect(connection)
