"""Socket.IO server for real-time chat.

Thin transport adapter around the session orchestrator:
- Inbound events are validated and handed to the orchestrator
- The returned delivery plan is applied through ``SocketIOTransport``
- Socket.IO rooms mirror chat rooms so room broadcasts reach members

Every handler runs under one lock, so each inbound event is fully
processed (state and emits) before the next one starts.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Optional

import socketio
from pydantic import ValidationError

from huddle.config.settings import settings
from huddle.presence.deliveries import dispatch
from huddle.presence.errors import ConnectionAlreadyRegistered
from huddle.presence.schemas import ChatEvent, UpdateUserIn
from huddle.presence.session_orchestrator import SessionOrchestrator

logger = logging.getLogger(__name__)

# =============================================================================
# Socket.IO Server Configuration
# =============================================================================

sio = socketio.AsyncServer(
    async_mode="asgi",
    cors_allowed_origins=settings.cors_allowed_origins(),
    ping_timeout=settings.ping_timeout,
    ping_interval=settings.ping_interval,
    always_connect=True,  # connect handler emits before returning
    logger=False,  # Disable socket.io internal logging (too verbose)
    engineio_logger=False,
)

session_orchestrator = SessionOrchestrator()

_event_lock = asyncio.Lock()


class SocketIOTransport:
    """Delivers planned events through a Socket.IO server."""

    def __init__(self, server: socketio.AsyncServer):
        self.server = server

    async def unicast(self, sid: str, event: str, payload: Any) -> None:
        await self.server.emit(event, payload, to=sid)

    async def broadcast(
        self, room: str, event: str, payload: Any, skip_sid: Optional[str] = None
    ) -> None:
        await self.server.emit(event, payload, room=room, skip_sid=skip_sid)

    async def join_channel(self, sid: str, room: str) -> None:
        await self.server.enter_room(sid, room)

    async def leave_channel(self, sid: str, room: str) -> None:
        await self.server.leave_room(sid, room)


transport = SocketIOTransport(sio)


# =============================================================================
# Event Handlers
# =============================================================================

@sio.event
async def connect(sid: str, environ: Dict, auth: Optional[Dict] = None):
    """Handle new socket connection: assign a default user in the default room."""
    logger.info("[SocketIO] Connection attempt | sid=%s", sid)

    async with _event_lock:
        try:
            deliveries = session_orchestrator.connect(sid)
        except ConnectionAlreadyRegistered as e:
            logger.error("[SocketIO] Duplicate connect from transport | sid=%s: %s", sid, e)
            raise socketio.exceptions.ConnectionRefusedError("connection already registered")

        await dispatch(transport, deliveries)


@sio.event
async def disconnect(sid: str, reason: Any = None):
    """Handle socket disconnection."""
    async with _event_lock:
        deliveries = session_orchestrator.disconnect(sid)
        await dispatch(transport, deliveries)

    logger.info("[SocketIO] Disconnected | sid=%s reason=%s", sid, reason)


@sio.on(ChatEvent.CHAT_MESSAGE.value)
async def chat_message(sid: str, data: Any):
    """Relay a chat line to the sender's room."""
    if not isinstance(data, str):
        logger.warning("[SocketIO] chat message with non-text payload | sid=%s type=%s",
                       sid, type(data).__name__)
        return

    async with _event_lock:
        deliveries = session_orchestrator.send_message(sid, data)
        await dispatch(transport, deliveries)


@sio.on(ChatEvent.UPDATE_USER.value)
async def update_user(sid: str, data: Any):
    """Handle username and/or room change request."""
    try:
        request = UpdateUserIn.model_validate(data)
    except ValidationError as e:
        logger.warning("[SocketIO] Invalid update user payload | sid=%s: %s", sid, e)
        return

    async with _event_lock:
        deliveries = session_orchestrator.update_user(
            sid,
            username=request.username,
            room=request.room,
        )
        await dispatch(transport, deliveries)


# =============================================================================
# ASGI App
# =============================================================================

def create_socketio_app(other_app):
    """Create Socket.IO ASGI app wrapping another ASGI app.

    Args:
        other_app: The main ASGI app (e.g., FastAPI)

    Returns:
        Combined ASGI app with Socket.IO
    """
    return socketio.ASGIApp(sio, other_asgi_app=other_app)
