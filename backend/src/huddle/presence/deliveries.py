"""Outbound delivery plan.

The session orchestrator never talks to the network. It returns an
ordered list of deliveries which the transport adapter applies with
``dispatch``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Optional, Protocol, Union


class DeliveryTransport(Protocol):
    """Delivery capability the transport layer provides."""

    async def unicast(self, sid: str, event: str, payload: Any) -> None: ...

    async def broadcast(
        self, room: str, event: str, payload: Any, skip_sid: Optional[str] = None
    ) -> None: ...

    async def join_channel(self, sid: str, room: str) -> None: ...

    async def leave_channel(self, sid: str, room: str) -> None: ...


def _event_name(event: Any) -> str:
    return getattr(event, "value", event)


@dataclass(frozen=True)
class Unicast:
    sid: str
    event: str
    payload: Any

    async def apply(self, transport: DeliveryTransport) -> None:
        await transport.unicast(self.sid, _event_name(self.event), self.payload)


@dataclass(frozen=True)
class Broadcast:
    room: str
    event: str
    payload: Any
    skip_sid: Optional[str] = None

    async def apply(self, transport: DeliveryTransport) -> None:
        await transport.broadcast(self.room, _event_name(self.event), self.payload, self.skip_sid)


@dataclass(frozen=True)
class JoinChannel:
    sid: str
    room: str

    async def apply(self, transport: DeliveryTransport) -> None:
        await transport.join_channel(self.sid, self.room)


@dataclass(frozen=True)
class LeaveChannel:
    sid: str
    room: str

    async def apply(self, transport: DeliveryTransport) -> None:
        await transport.leave_channel(self.sid, self.room)


Delivery = Union[Unicast, Broadcast, JoinChannel, LeaveChannel]


async def dispatch(transport: DeliveryTransport, deliveries: Iterable[Delivery]) -> None:
    """Apply deliveries strictly in plan order."""
    for delivery in deliveries:
        await delivery.apply(transport)
