"""PresenceDirectory maps live connections to chat users.

Owns username assignment and uniqueness:
- Default names are ``user`` + a zero-padded process-wide counter
- The counter never rewinds, so a default name is never handed out twice
- Renames are rejected when another active connection holds the name
"""

from __future__ import annotations

import itertools
import logging
from typing import Dict, List, Optional

from huddle.presence.errors import (
    ConnectionAlreadyRegistered,
    UnknownConnection,
    UsernameConflict,
)
from huddle.presence.models import (
    DEFAULT_ROOM,
    USERNAME_MIN_DIGITS,
    USERNAME_PREFIX,
    User,
)

logger = logging.getLogger(__name__)


class PresenceDirectory:
    """Registry of active users keyed by socket id."""

    def __init__(
        self,
        username_prefix: str = USERNAME_PREFIX,
        min_digits: int = USERNAME_MIN_DIGITS,
    ) -> None:
        self._users: Dict[str, User] = {}
        self._sids_by_username: Dict[str, str] = {}
        self._counter = itertools.count(1)
        self._username_prefix = username_prefix
        self._min_digits = min_digits

    def __len__(self) -> int:
        return len(self._users)

    def __contains__(self, sid: object) -> bool:
        return sid in self._users

    def register(self, sid: str) -> User:
        """Create a user with a fresh default username in the default room.

        Args:
            sid: Socket id supplied by the transport

        Returns:
            The newly created user

        Raises:
            ConnectionAlreadyRegistered: If ``sid`` already has a user
        """
        if sid in self._users:
            raise ConnectionAlreadyRegistered(sid)

        username = self._next_default_username()
        user = User(sid=sid, username=username, room=DEFAULT_ROOM)
        self._users[sid] = user
        self._sids_by_username[username] = sid
        logger.debug("[Presence] Registered | sid=%s username=%s (total: %d)",
                     sid, username, len(self._users))
        return user

    def lookup(self, sid: str) -> Optional[User]:
        return self._users.get(sid)

    def rename(self, sid: str, new_username: str) -> User:
        """Change a user's username in place.

        Renaming to the name the user already holds succeeds without
        changes. Room membership is untouched.

        Raises:
            UnknownConnection: If ``sid`` has no user
            UsernameConflict: If a different active user holds ``new_username``
        """
        user = self._users.get(sid)
        if user is None:
            raise UnknownConnection(sid)

        holder = self._sids_by_username.get(new_username)
        if holder is not None and holder != sid:
            raise UsernameConflict(new_username)

        old_username = user.username
        self._sids_by_username.pop(old_username, None)
        self._sids_by_username[new_username] = sid
        user.username = new_username
        logger.debug("[Presence] Renamed | sid=%s %s -> %s", sid, old_username, new_username)
        return user

    def unregister(self, sid: str) -> Optional[User]:
        """Remove a user record. Safe to call repeatedly.

        Returns:
            The removed user, or None if ``sid`` was not registered
        """
        user = self._users.pop(sid, None)
        if user is None:
            return None
        if self._sids_by_username.get(user.username) == sid:
            del self._sids_by_username[user.username]
        logger.debug("[Presence] Unregistered | sid=%s username=%s", sid, user.username)
        return user

    def is_username_taken(self, username: str) -> bool:
        return username in self._sids_by_username

    def users(self) -> List[User]:
        """All active users in registration order."""
        return list(self._users.values())

    def _next_default_username(self) -> str:
        # Skip names someone picked by hand; counter values are consumed either way.
        while True:
            candidate = f"{self._username_prefix}{next(self._counter):0{self._min_digits}d}"
            if not self.is_username_taken(candidate):
                return candidate
