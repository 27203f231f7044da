"""Presence package: users, rooms and the session state machine."""

from huddle.presence.errors import (
    ConnectionAlreadyRegistered,
    PresenceError,
    UnknownConnection,
    UsernameConflict,
)
from huddle.presence.models import DEFAULT_ROOM, RoomSummary, User
from huddle.presence.presence_directory import PresenceDirectory
from huddle.presence.room_registry import RoomRegistry
from huddle.presence.session_orchestrator import SessionOrchestrator

__all__ = [
    "ConnectionAlreadyRegistered",
    "PresenceError",
    "UnknownConnection",
    "UsernameConflict",
    "DEFAULT_ROOM",
    "RoomSummary",
    "User",
    "PresenceDirectory",
    "RoomRegistry",
    "SessionOrchestrator",
]
