"""SessionOrchestrator drives the per-connection chat state machine.

Each inbound intent (connect, chat message, update user, disconnect)
is handled in two phases:
1. Mutate the presence directory and room registry
2. Build the ordered delivery plan from the resulting state

Nothing is sent while state is half-updated, so counts and rosters in
every notification reflect the completed request. Consumers can rely on
``user left`` arriving before ``user joined`` for a room move, and on a
``username error`` never being paired with a room change.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from huddle.presence.deliveries import (
    Broadcast,
    Delivery,
    JoinChannel,
    LeaveChannel,
    Unicast,
)
from huddle.presence.errors import UsernameConflict
from huddle.presence.models import DEFAULT_ROOM, RoomSummary
from huddle.presence.presence_directory import PresenceDirectory
from huddle.presence.room_registry import RoomRegistry
from huddle.presence.schemas import (
    ChatEvent,
    ChatMessageOut,
    PresenceNoticeOut,
    RoomJoinedOut,
    RoomListEntryOut,
    RoomUsersOut,
    UserInfoOut,
    UsernameChangedOut,
    UsernameErrorOut,
    UserRenamedOut,
)

logger = logging.getLogger(__name__)


class SessionOrchestrator:
    """Owns both presence stores and turns intents into delivery plans."""

    def __init__(
        self,
        directory: Optional[PresenceDirectory] = None,
        registry: Optional[RoomRegistry] = None,
    ) -> None:
        self.directory = directory if directory is not None else PresenceDirectory()
        self.registry = registry if registry is not None else RoomRegistry(self.directory)

    # -------------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------------

    def connect(self, sid: str) -> List[Delivery]:
        """Register a new connection in the default room.

        Raises:
            ConnectionAlreadyRegistered: If the transport reuses a live sid
        """
        user = self.directory.register(sid)
        self.registry.join(sid, DEFAULT_ROOM)
        room = user.room

        logger.info("[Session] Connected | sid=%s user=%s room=%s", sid, user.username, room)

        return [
            JoinChannel(sid, room),
            Unicast(sid, ChatEvent.USER_INFO, self._user_info(sid)),
            *self._room_welcome(sid, room),
            Broadcast(room, ChatEvent.USER_JOINED, self._presence_notice(user.username, room), skip_sid=sid),
            Unicast(sid, ChatEvent.AVAILABLE_ROOMS, self._available_rooms()),
        ]

    def send_message(self, sid: str, text: str) -> List[Delivery]:
        """Relay a chat line to everyone in the sender's room, sender included."""
        user = self.directory.lookup(sid)
        if user is None:
            logger.debug("[Session] Dropping message from unknown sid=%s", sid)
            return []

        message = ChatMessageOut(room=user.room, username=user.username, text=text, sender_id=sid)
        return [Broadcast(user.room, ChatEvent.CHAT_MESSAGE, message.payload())]

    def update_user(
        self,
        sid: str,
        username: Optional[str] = None,
        room: Optional[str] = None,
    ) -> List[Delivery]:
        """Apply a rename and/or room move.

        Empty or missing values mean "not requested". A rename conflict
        aborts the whole update, including any requested room move.
        """
        user = self.directory.lookup(sid)
        if user is None:
            logger.debug("[Session] Ignoring update from unknown sid=%s", sid)
            return []

        old_username = user.username
        old_room = user.room
        username_changed = bool(username) and username != old_username
        room_changed = bool(room) and room != old_room

        if username_changed:
            try:
                self.directory.rename(sid, username)
            except UsernameConflict as exc:
                logger.info("[Session] Rename rejected | sid=%s requested=%s", sid, username)
                return [Unicast(sid, ChatEvent.USERNAME_ERROR, UsernameErrorOut(message=str(exc)).payload())]

        if room_changed:
            self.registry.leave(sid, old_room)
            self.registry.join(sid, room)

        deliveries: List[Delivery] = []

        if username_changed:
            logger.info("[Session] Renamed | sid=%s %s -> %s", sid, old_username, username)
            deliveries.append(Unicast(sid, ChatEvent.USERNAME_CHANGED, UsernameChangedOut(username=username).payload()))
            deliveries.append(Broadcast(
                old_room,
                ChatEvent.USER_RENAMED,
                UserRenamedOut(old_username=old_username, new_username=username).payload(),
                skip_sid=sid,
            ))

        if room_changed:
            logger.info("[Session] Moved | sid=%s user=%s %s -> %s", sid, user.username, old_room, room)
            deliveries.extend([
                LeaveChannel(sid, old_room),
                Broadcast(old_room, ChatEvent.USER_LEFT, self._presence_notice(user.username, old_room), skip_sid=sid),
                JoinChannel(sid, room),
                *self._room_welcome(sid, room),
                Broadcast(room, ChatEvent.USER_JOINED, self._presence_notice(user.username, room), skip_sid=sid),
            ])

        if username_changed or room_changed:
            deliveries.append(Unicast(sid, ChatEvent.USER_INFO, self._user_info(sid)))

        return deliveries

    def disconnect(self, sid: str) -> List[Delivery]:
        """Remove a connection and tell its former room. Idempotent."""
        user = self.directory.lookup(sid)
        if user is None:
            return []

        username, room = user.username, user.room
        self.registry.leave(sid, room)
        self.directory.unregister(sid)

        logger.info("[Session] Disconnected | sid=%s user=%s room=%s", sid, username, room)

        return [
            LeaveChannel(sid, room),
            Broadcast(room, ChatEvent.USER_LEFT, self._presence_notice(username, room), skip_sid=sid),
        ]

    def list_rooms(self) -> List[RoomSummary]:
        return self.registry.list_rooms()

    # -------------------------------------------------------------------------
    # Payload builders
    # -------------------------------------------------------------------------

    def _user_info(self, sid: str) -> dict:
        user = self.directory.lookup(sid)
        return UserInfoOut(username=user.username, room=user.room).payload()

    def _presence_notice(self, username: str, room: str) -> dict:
        return PresenceNoticeOut(
            username=username,
            room=room,
            user_count=self.registry.member_count(room),
        ).payload()

    def _room_welcome(self, sid: str, room: str) -> List[Delivery]:
        return [
            Unicast(sid, ChatEvent.ROOM_JOINED, RoomJoinedOut(
                room=room, user_count=self.registry.member_count(room)).payload()),
            Unicast(sid, ChatEvent.ROOM_USERS, RoomUsersOut(
                room=room, users=self.registry.member_usernames(room)).payload()),
        ]

    def _available_rooms(self) -> List[dict]:
        return [
            RoomListEntryOut(name=summary.name, user_count=summary.user_count).payload()
            for summary in self.registry.list_rooms()
        ]
