"""Socket.IO wire schemas for the chat protocol.

Event names are kept from the original browser client (space separated).
Outbound payload keys are camelCase on the wire.
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ChatEvent(str, Enum):
    """Socket.IO event names."""
    # client -> server
    CHAT_MESSAGE = "chat message"  # also server -> room
    UPDATE_USER = "update user"

    # server -> client
    USER_INFO = "user info"
    ROOM_JOINED = "room joined"
    ROOM_USERS = "room users"
    AVAILABLE_ROOMS = "available rooms"
    USER_JOINED = "user joined"
    USER_LEFT = "user left"
    USERNAME_CHANGED = "username changed"
    USER_RENAMED = "user renamed"
    USERNAME_ERROR = "username error"


# ---- client -> server ----

class UpdateUserIn(BaseModel):
    """Identity and/or room change request. Both fields are optional."""
    model_config = ConfigDict(extra="ignore")

    username: Optional[str] = None
    room: Optional[str] = None


# ---- server -> clients ----

class EventPayload(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def payload(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


class UserInfoOut(EventPayload):
    username: str
    room: str


class RoomJoinedOut(EventPayload):
    room: str
    user_count: int


class RoomUsersOut(EventPayload):
    room: str
    users: List[str] = []


class RoomListEntryOut(EventPayload):
    name: str
    user_count: int


class PresenceNoticeOut(EventPayload):
    """Payload of both ``user joined`` and ``user left``."""
    username: str
    room: str
    user_count: int


class UsernameChangedOut(EventPayload):
    username: str


class UserRenamedOut(EventPayload):
    old_username: str
    new_username: str


class UsernameErrorOut(EventPayload):
    message: str


class ChatMessageOut(EventPayload):
    room: str
    username: str
    text: str
    sender_id: str
