"""Presence error types."""


class PresenceError(Exception):
    """Base class for presence and room membership errors."""


class UsernameConflict(PresenceError):
    """Requested username is held by another active connection."""

    def __init__(self, username: str):
        self.username = username
        super().__init__(f"'{username}' is already in use.")


class ConnectionAlreadyRegistered(PresenceError):
    """The transport delivered a second connect for a live socket id."""

    def __init__(self, sid: str):
        self.sid = sid
        super().__init__(f"Connection {sid} is already registered")


class UnknownConnection(PresenceError, LookupError):
    """No user is registered for the given socket id."""

    def __init__(self, sid: str):
        self.sid = sid
        super().__init__(f"Connection {sid} is not registered")
