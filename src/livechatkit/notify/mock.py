"""Recording notification bus for testing."""

from __future__ import annotations

from livechatkit.notify.base import Notification
from livechatkit.notify.memory import InMemoryNotificationBus


class MockNotificationBus(InMemoryNotificationBus):
    """Delivers like the in-memory bus and records every publish."""

    def __init__(self) -> None:
        super().__init__()
        self.published: list[tuple[str, Notification]] = []

    async def publish(self, channel: str, notification: Notification) -> None:
        self.published.append((channel, notification))
        await super().publish(channel, notification)

    def published_to(self, channel: str) -> list[Notification]:
        """Notifications published to *channel* so far, in order."""
        return [n for c, n in self.published if c == channel]
