"""Presence data model: users and room summaries."""

from dataclasses import dataclass
from typing import Optional

DEFAULT_ROOM = "General"
USERNAME_PREFIX = "user"
USERNAME_MIN_DIGITS = 3


@dataclass
class User:
    """One active chat user, keyed by its socket id.

    ``room`` is the single source of truth for room membership; the room
    registry derives member lists from it.
    """
    sid: str
    username: str
    room: Optional[str] = DEFAULT_ROOM
    joined_seq: int = 0  # stamp of the last room join, orders rosters


@dataclass(frozen=True)
class RoomSummary:
    """Point-in-time view of a room for listings."""
    name: str
    user_count: int
