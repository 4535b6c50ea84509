"""In-memory implementation of ConversationStore."""

from __future__ import annotations

from livechatkit.core.errors import RoomNotFoundError
from livechatkit.models.enums import UserPresence
from livechatkit.models.inquiry import Inquiry
from livechatkit.models.message import TranscriptMessage
from livechatkit.models.results import UpdateResult
from livechatkit.models.room import Room
from livechatkit.models.visitor import Visitor
from livechatkit.store.base import ConversationStore, visitor_ref


class InMemoryStore(ConversationStore):
    """Dict-based in-memory store for development and testing."""

    def __init__(self) -> None:
        self._rooms: dict[str, Room] = {}
        self._inquiries: dict[str, Inquiry] = {}  # room_id -> inquiry
        self._visitors: dict[str, Visitor] = {}
        self._messages: dict[str, list[TranscriptMessage]] = {}

    # Room operations

    async def create_room(self, room: Room) -> Room:
        self._rooms[room.id] = room
        self._messages.setdefault(room.id, [])
        return room

    async def get_room(self, room_id: str) -> Room | None:
        room = self._rooms.get(room_id)
        return room.model_copy(deep=True) if room is not None else None

    async def update_room(self, room: Room) -> Room:
        if room.id not in self._rooms:
            raise RoomNotFoundError(f"Room {room.id} not found")
        self._rooms[room.id] = room
        return room

    async def remove_room(self, room_id: str) -> UpdateResult:
        if self._rooms.pop(room_id, None) is None:
            return UpdateResult()
        return UpdateResult(matched_count=1, deleted_count=1)

    async def find_open_rooms_by_agent(self, agent_id: str) -> list[Room]:
        return [
            r.model_copy(deep=True)
            for r in self._rooms.values()
            if r.open and r.served_by is not None and r.served_by.id == agent_id
        ]

    async def change_room_visitor(self, room_id: str, visitor: Visitor) -> UpdateResult:
        room = self._rooms.get(room_id)
        if room is None:
            return UpdateResult()
        self._rooms[room_id] = room.model_copy(update={"visitor": visitor_ref(visitor)})
        return UpdateResult(matched_count=1, modified_count=1)

    async def update_visitor_status(self, token: str, status: UserPresence) -> UpdateResult:
        result = UpdateResult()
        for room_id, room in self._rooms.items():
            if room.visitor.token != token:
                continue
            result.matched_count += 1
            if room.visitor.status == status:
                continue
            visitor = room.visitor.model_copy(update={"status": status})
            self._rooms[room_id] = room.model_copy(update={"visitor": visitor})
            result.modified_count += 1
        return result

    # Inquiry operations

    async def create_inquiry(self, inquiry: Inquiry) -> Inquiry:
        self._inquiries[inquiry.room_id] = inquiry
        return inquiry

    async def get_inquiry_by_room_id(self, room_id: str) -> Inquiry | None:
        inquiry = self._inquiries.get(room_id)
        return inquiry.model_copy(deep=True) if inquiry is not None else None

    async def update_inquiry_by_room_id(self, room_id: str, inquiry: Inquiry) -> UpdateResult:
        if room_id not in self._inquiries:
            return UpdateResult()
        self._inquiries[room_id] = inquiry
        return UpdateResult(matched_count=1, modified_count=1)

    async def update_inquiry_visitor_status(
        self, token: str, status: UserPresence
    ) -> UpdateResult:
        result = UpdateResult()
        for room_id, inquiry in self._inquiries.items():
            if inquiry.visitor.token != token:
                continue
            result.matched_count += 1
            if inquiry.visitor.status == status:
                continue
            visitor = inquiry.visitor.model_copy(update={"status": status})
            self._inquiries[room_id] = inquiry.model_copy(update={"visitor": visitor})
            result.modified_count += 1
        return result

    async def remove_inquiry_by_room_id(self, room_id: str) -> UpdateResult:
        if self._inquiries.pop(room_id, None) is None:
            return UpdateResult()
        return UpdateResult(matched_count=1, deleted_count=1)

    # Visitor operations

    async def add_visitor(self, visitor: Visitor) -> Visitor:
        self._visitors[visitor.id] = visitor
        return visitor

    async def get_visitor(self, visitor_id: str) -> Visitor | None:
        visitor = self._visitors.get(visitor_id)
        return visitor.model_copy() if visitor is not None else None

    # Transcript operations

    async def add_message(self, message: TranscriptMessage) -> TranscriptMessage:
        self._messages.setdefault(message.room_id, []).append(message)
        return message

    async def list_messages(
        self, room_id: str, offset: int = 0, limit: int = 50
    ) -> list[TranscriptMessage]:
        messages = self._messages.get(room_id, [])
        return [m.model_copy() for m in messages[offset : offset + limit]]

    async def remove_messages(self, room_id: str) -> UpdateResult:
        messages = self._messages.pop(room_id, [])
        return UpdateResult(matched_count=len(messages), deleted_count=len(messages))
