"""Notification bus for room, agent and inquiry-queue subscribers."""

from livechatkit.notify.base import (
    INQUIRY_CHANNEL,
    Notification,
    NotificationBus,
    NotificationCallback,
    room_channel,
    user_channel,
)
from livechatkit.notify.memory import InMemoryNotificationBus
from livechatkit.notify.mock import MockNotificationBus

__all__ = [
    "INQUIRY_CHANNEL",
    "InMemoryNotificationBus",
    "MockNotificationBus",
    "Notification",
    "NotificationBus",
    "NotificationCallback",
    "room_channel",
    "user_channel",
]
