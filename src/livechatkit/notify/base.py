"""Abstract base class and types for the notification bus."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Coroutine
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any
from uuid import uuid4

from livechatkit.models.enums import NotificationType

INQUIRY_CHANNEL = "inquiry"


def room_channel(room_id: str) -> str:
    return f"room:{room_id}"


def user_channel(user_id: str) -> str:
    return f"user:{user_id}"


@dataclass
class Notification:
    """A change pushed to the clients watching a room, an agent or the queue."""

    type: NotificationType
    target_id: str
    data: dict[str, Any] = field(default_factory=dict)
    id: str = field(default_factory=lambda: uuid4().hex)
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))


NotificationCallback = Callable[[Notification], Coroutine[Any, Any, None]]


class NotificationBus(ABC):
    """Outbound delivery of room, agent and inquiry-queue notifications.

    Implement ``publish``/``subscribe``/``unsubscribe`` against any pub/sub
    transport. Coordinators only use the ``notify_*`` helpers, which map a
    target onto its channel.
    """

    @abstractmethod
    async def publish(self, channel: str, notification: Notification) -> None:
        """Deliver *notification* to the subscribers of *channel*."""
        ...

    @abstractmethod
    async def subscribe(self, channel: str, callback: NotificationCallback) -> str:
        """Subscribe to a channel.

        Returns:
            A subscription ID that can be used to unsubscribe.
        """
        ...

    @abstractmethod
    async def unsubscribe(self, subscription_id: str) -> bool:
        """Returns True if the subscription existed and was removed."""
        ...

    async def notify_room(self, room_id: str, notification: Notification) -> None:
        await self.publish(room_channel(room_id), notification)

    async def notify_user(self, user_id: str, notification: Notification) -> None:
        await self.publish(user_channel(user_id), notification)

    async def notify_inquiry_queue(self, notification: Notification) -> None:
        await self.publish(INQUIRY_CHANNEL, notification)

    async def close(self) -> None:
        """Release transport resources. The default does nothing."""
        return None
