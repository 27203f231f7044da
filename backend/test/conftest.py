"""Pytest configuration and shared fixtures."""
import sys
from collections import defaultdict
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from huddle.presence.deliveries import dispatch
from huddle.presence.presence_directory import PresenceDirectory
from huddle.presence.room_registry import RoomRegistry
from huddle.presence.session_orchestrator import SessionOrchestrator


@dataclass
class RecordingTransport:
    """In-memory delivery transport that simulates Socket.IO rooms.

    Broadcasts reach whoever is subscribed to the channel at delivery
    time, so tests observe exactly what real clients would receive.
    """

    channels: Dict[str, List[str]] = field(default_factory=dict)  # room -> sids
    received: Dict[str, List[Dict[str, Any]]] = field(default_factory=lambda: defaultdict(list))
    calls: List[tuple] = field(default_factory=list)

    async def unicast(self, sid: str, event: str, payload: Any) -> None:
        self.calls.append(("unicast", sid, event, payload))
        self.received[sid].append({"event": event, "data": payload})

    async def broadcast(self, room: str, event: str, payload: Any, skip_sid: Optional[str] = None) -> None:
        self.calls.append(("broadcast", room, event, payload, skip_sid))
        for sid in self.channels.get(room, []):
            if sid != skip_sid:
                self.received[sid].append({"event": event, "data": payload})

    async def join_channel(self, sid: str, room: str) -> None:
        self.calls.append(("join", sid, room))
        members = self.channels.setdefault(room, [])
        if sid not in members:
            members.append(sid)

    async def leave_channel(self, sid: str, room: str) -> None:
        self.calls.append(("leave", sid, room))
        if sid in self.channels.get(room, []):
            self.channels[room].remove(sid)

    def events(self, sid: str, event: Optional[str] = None) -> List[Dict[str, Any]]:
        """Events received by a client, optionally filtered by name."""
        return [e for e in self.received[sid] if event is None or e["event"] == event]

    def event_names(self, sid: str) -> List[str]:
        return [e["event"] for e in self.received[sid]]

    def clear(self) -> None:
        self.received.clear()
        self.calls.clear()


@pytest.fixture
def directory():
    return PresenceDirectory()


@pytest.fixture
def registry(directory):
    return RoomRegistry(directory)


@pytest.fixture
def orchestrator(directory, registry):
    return SessionOrchestrator(directory, registry)


@pytest.fixture
def transport():
    return RecordingTransport()


@pytest.fixture
def chat(orchestrator, transport):
    """Drive the orchestrator and deliver its plans to the recording transport."""

    class ChatDriver:
        async def connect(self, sid: str):
            await dispatch(transport, orchestrator.connect(sid))

        async def say(self, sid: str, text: str):
            await dispatch(transport, orchestrator.send_message(sid, text))

        async def update(self, sid: str, username: Optional[str] = None, room: Optional[str] = None):
            await dispatch(transport, orchestrator.update_user(sid, username=username, room=room))

        async def disconnect(self, sid: str):
            await dispatch(transport, orchestrator.disconnect(sid))

    return ChatDriver()
