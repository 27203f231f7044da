"""Room membership registry.

Membership is read from ``User.room`` in the presence directory rather
than kept in a second set, so the two views cannot drift apart. The
registry only tracks which room names exist (in creation order) and
stamps each join so rosters list members in the order they arrived.
"""

from __future__ import annotations

import itertools
import logging
from typing import Dict, List

from huddle.presence.errors import UnknownConnection
from huddle.presence.models import DEFAULT_ROOM, RoomSummary, User
from huddle.presence.presence_directory import PresenceDirectory

logger = logging.getLogger(__name__)


class RoomRegistry:
    """Tracks rooms and derives their members from the presence directory."""

    def __init__(self, directory: PresenceDirectory) -> None:
        self._directory = directory
        self._rooms: Dict[str, None] = {DEFAULT_ROOM: None}
        self._join_seq = itertools.count(1)

    def join(self, sid: str, room_name: str) -> None:
        """Put a connection into ``room_name``, creating the room if needed.

        A connection is only ever in one room; joining a new room leaves
        the previous one first.

        Raises:
            UnknownConnection: If ``sid`` has no user in the directory
        """
        user = self._directory.lookup(sid)
        if user is None:
            raise UnknownConnection(sid)

        if user.room is not None and user.room != room_name:
            self.leave(sid, user.room)

        if room_name not in self._rooms:
            self._rooms[room_name] = None
            logger.info("[Rooms] Created room=%s", room_name)

        user.room = room_name
        user.joined_seq = next(self._join_seq)

    def leave(self, sid: str, room_name: str) -> None:
        """Take a connection out of ``room_name``.

        Empty rooms other than the default room are deleted. No-op when
        the connection is not in that room.
        """
        user = self._directory.lookup(sid)
        if user is None or user.room != room_name:
            return

        user.room = None
        if room_name != DEFAULT_ROOM and not self.members(room_name):
            self._rooms.pop(room_name, None)
            logger.info("[Rooms] Deleted empty room=%s", room_name)

    def has_room(self, room_name: str) -> bool:
        self._prune_empty_rooms()
        return room_name in self._rooms

    def members(self, room_name: str) -> List[User]:
        """Users currently in ``room_name``, in join order."""
        if room_name not in self._rooms:
            return []
        in_room = [u for u in self._directory.users() if u.room == room_name]
        return sorted(in_room, key=lambda u: u.joined_seq)

    def member_count(self, room_name: str) -> int:
        return len(self.members(room_name))

    def member_usernames(self, room_name: str) -> List[str]:
        return [u.username for u in self.members(room_name)]

    def list_rooms(self) -> List[RoomSummary]:
        """Snapshot of every existing room with its member count."""
        self._prune_empty_rooms()
        counts: Dict[str, int] = dict.fromkeys(self._rooms, 0)
        for user in self._directory.users():
            if user.room in counts:
                counts[user.room] += 1
        return [RoomSummary(name=name, user_count=count) for name, count in counts.items()]

    def _prune_empty_rooms(self) -> None:
        # Users unregistered without a prior leave() still vacate their room.
        occupied = {u.room for u in self._directory.users()}
        for name in [n for n in self._rooms if n != DEFAULT_ROOM and n not in occupied]:
            del self._rooms[name]
            logger.info("[Rooms] Deleted empty room=%s", name)
