"""Room maintenance: removal, visitor changes and visitor status."""

from __future__ import annotations

import asyncio
import logging

from livechatkit.core._helpers import Notifier
from livechatkit.core.errors import (
    InvalidUserError,
    NotAllowedError,
    RoomNotFoundError,
    RoomRemovalError,
)
from livechatkit.directory.base import Directory
from livechatkit.models.enums import ClientAction, NotificationType, UserPresence
from livechatkit.models.results import UpdateResult
from livechatkit.models.room import Room
from livechatkit.models.visitor import Visitor
from livechatkit.policy.base import AccessPolicy
from livechatkit.store.base import ConversationStore

logger = logging.getLogger("livechatkit.rooms")


class RoomCoordinator:
    def __init__(
        self,
        store: ConversationStore,
        directory: Directory,
        access: AccessPolicy,
        notifier: Notifier,
    ) -> None:
        self._store = store
        self._directory = directory
        self._access = access
        self._notifier = notifier

    async def remove_room(self, room_id: str) -> None:
        """Delete a room with its transcript and inquiry.

        Every part is attempted even when another fails; any failure is
        raised afterwards as ``RoomRemovalError``.
        """
        logger.debug("Deleting room %s", room_id, extra={"room_id": room_id})
        room = await self._store.get_room(room_id)
        if room is None:
            raise RoomNotFoundError(f"Room {room_id} not found")

        inquiry = await self._store.get_inquiry_by_room_id(room_id)
        results = await asyncio.gather(
            self._store.remove_messages(room_id),
            self._store.remove_inquiry_by_room_id(room_id),
            self._store.remove_room(room_id),
            return_exceptions=True,
        )

        inquiry_result = results[1]
        if isinstance(inquiry_result, UpdateResult) and inquiry_result.deleted_count and inquiry:
            self._notifier.inquiry(
                inquiry.id,
                {"client_action": ClientAction.REMOVED, "room_id": room_id},
            )

        failures = [r for r in results if isinstance(r, BaseException)]
        for failure in failures:
            logger.error(
                "Error removing room %s: %s", room_id, failure, extra={"room_id": room_id}
            )
        if failures:
            raise RoomRemovalError(f"Error removing room {room_id}") from failures[0]

    async def change_room_visitor(self, user_id: str, room: Room, visitor: Visitor) -> Room | None:
        """Point *room* at *visitor* on behalf of *user_id*."""
        user = await self._directory.get_user(user_id)
        if user is None:
            raise InvalidUserError(f"User {user_id} not found")

        if not await self._access.can_access_room(room, user):
            raise NotAllowedError(f"User {user_id} cannot access room {room.id}")

        await self._store.change_room_visitor(room.id, visitor)
        self.notify_room_visitor_change(room.id, visitor)
        return await self._store.get_room(room.id)

    def notify_room_visitor_change(self, room_id: str, visitor: Visitor) -> None:
        self._notifier.room(
            room_id,
            NotificationType.VISITOR_DATA,
            {"visitor": visitor.model_dump(mode="json")},
        )

    async def notify_guest_status_changed(self, token: str, status: UserPresence) -> None:
        """Copy a visitor's presence onto its rooms and inquiries."""
        await self._store.update_visitor_status(token, status)

        result = await self._store.update_inquiry_visitor_status(token, status)
        if result.modified_count:
            self._notifier.inquiry(
                token,
                {"client_action": ClientAction.UPDATED, "visitor": {"status": status}},
            )
