"""Helpers shared by the coordinators."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Coroutine
from typing import Any

from livechatkit.models.agent import Agent
from livechatkit.models.enums import NotificationType, TransferUserType
from livechatkit.models.room import Room
from livechatkit.models.transfer import TransferredBy
from livechatkit.notify.base import Notification, NotificationBus

logger = logging.getLogger("livechatkit.notify")


def normalize_transferred_by(
    user: Agent, room: Room, user_type: TransferUserType | None = None
) -> TransferredBy:
    """Describe *user* as the initiator of a transfer of *room*.

    Without an explicit *user_type*, the serving agent is an ``agent`` and
    anybody else is a ``user``.
    """
    if user_type is None:
        serving = room.served_by.id if room.served_by is not None else None
        user_type = TransferUserType.AGENT if user.id == serving else TransferUserType.USER
    return TransferredBy(id=user.id, username=user.username, name=user.name, user_type=user_type)


class Notifier:
    """Fire-and-forget publishing on a :class:`NotificationBus`.

    Each publish runs in its own task; failures are logged and never reach
    the caller. ``drain()`` waits for everything scheduled so far.
    """

    def __init__(self, bus: NotificationBus) -> None:
        self._bus = bus
        self._tasks: set[asyncio.Task[None]] = set()

    @property
    def bus(self) -> NotificationBus:
        return self._bus

    def _spawn(self, delivery: Coroutine[Any, Any, None], notification: Notification) -> None:
        task = asyncio.get_running_loop().create_task(self._deliver(delivery, notification))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _deliver(
        self, delivery: Coroutine[Any, Any, None], notification: Notification
    ) -> None:
        try:
            await delivery
        except Exception:
            logger.exception(
                "Failed to publish %s for %s",
                notification.type,
                notification.target_id,
                extra={"target_id": notification.target_id},
            )

    def room(self, room_id: str, type: NotificationType, data: dict[str, Any]) -> None:
        notification = Notification(type=type, target_id=room_id, data=data)
        self._spawn(self._bus.notify_room(room_id, notification), notification)

    def user(self, user_id: str, type: NotificationType, data: dict[str, Any]) -> None:
        notification = Notification(type=type, target_id=user_id, data=data)
        self._spawn(self._bus.notify_user(user_id, notification), notification)

    def inquiry(self, target_id: str, data: dict[str, Any]) -> None:
        notification = Notification(
            type=NotificationType.INQUIRY_CHANGED, target_id=target_id, data=data
        )
        self._spawn(self._bus.notify_inquiry_queue(notification), notification)

    async def drain(self) -> None:
        while self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)
