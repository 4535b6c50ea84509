"""In-process notification bus."""

from __future__ import annotations

import asyncio
import logging
from uuid import uuid4

from livechatkit.notify.base import Notification, NotificationBus, NotificationCallback

logger = logging.getLogger("livechatkit.notify")


class InMemoryNotificationBus(NotificationBus):
    """Fans each notification out to the channel's subscribers in-process.

    Subscribers of a channel run concurrently; one that fails is logged and
    the others still receive the notification. Nothing is retained after
    delivery.
    """

    def __init__(self) -> None:
        self._channels: dict[str, dict[str, NotificationCallback]] = {}
        self._subscription_channel: dict[str, str] = {}  # subscription_id -> channel
        self._closed = False

    async def publish(self, channel: str, notification: Notification) -> None:
        if self._closed:
            return
        subscribers = list(self._channels.get(channel, {}).items())
        if not subscribers:
            return

        results = await asyncio.gather(
            *(callback(notification) for _, callback in subscribers),
            return_exceptions=True,
        )
        for (sub_id, _), result in zip(subscribers, results, strict=True):
            if isinstance(result, Exception):
                logger.error(
                    "Subscriber %s failed on %s: %s",
                    sub_id,
                    channel,
                    result,
                    extra={"target_id": notification.target_id},
                )

    async def subscribe(self, channel: str, callback: NotificationCallback) -> str:
        sub_id = uuid4().hex
        self._channels.setdefault(channel, {})[sub_id] = callback
        self._subscription_channel[sub_id] = channel
        return sub_id

    async def unsubscribe(self, subscription_id: str) -> bool:
        channel = self._subscription_channel.pop(subscription_id, None)
        if channel is None:
            return False
        subscribers = self._channels[channel]
        del subscribers[subscription_id]
        if not subscribers:
            del self._channels[channel]
        return True

    async def close(self) -> None:
        self._closed = True
        self._channels.clear()
        self._subscription_channel.clear()

    @property
    def subscription_count(self) -> int:
        return len(self._subscription_channel)
