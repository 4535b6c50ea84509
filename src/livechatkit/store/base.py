"""Abstract base class for conversation storage."""

from __future__ import annotations

from abc import ABC, abstractmethod

from livechatkit.models.enums import UserPresence
from livechatkit.models.inquiry import Inquiry
from livechatkit.models.message import TranscriptMessage
from livechatkit.models.results import UpdateResult
from livechatkit.models.room import Room, VisitorRef
from livechatkit.models.visitor import Visitor


class ConversationStore(ABC):
    """Persistent storage for rooms, inquiries, visitors and transcripts.

    Implement this ABC to plug in any storage backend (MongoDB, SQL, etc.).
    The library ships with `InMemoryStore` for development and testing.
    """

    # Room operations

    @abstractmethod
    async def create_room(self, room: Room) -> Room:
        """Persist a new room."""
        ...

    @abstractmethod
    async def get_room(self, room_id: str) -> Room | None:
        """Get a room by ID, or ``None`` if it doesn't exist."""
        ...

    @abstractmethod
    async def update_room(self, room: Room) -> Room:
        """Update an existing room."""
        ...

    @abstractmethod
    async def remove_room(self, room_id: str) -> UpdateResult:
        """Delete a room."""
        ...

    @abstractmethod
    async def find_open_rooms_by_agent(self, agent_id: str) -> list[Room]:
        """List open rooms currently served by *agent_id*."""
        ...

    @abstractmethod
    async def change_room_visitor(self, room_id: str, visitor: Visitor) -> UpdateResult:
        """Point a room at a different visitor."""
        ...

    @abstractmethod
    async def update_visitor_status(self, token: str, status: UserPresence) -> UpdateResult:
        """Update the visitor status on every room of the visitor *token*."""
        ...

    # Inquiry operations

    @abstractmethod
    async def create_inquiry(self, inquiry: Inquiry) -> Inquiry:
        """Persist a new inquiry."""
        ...

    @abstractmethod
    async def get_inquiry_by_room_id(self, room_id: str) -> Inquiry | None:
        """Get the inquiry bound to *room_id*."""
        ...

    @abstractmethod
    async def update_inquiry_by_room_id(self, room_id: str, inquiry: Inquiry) -> UpdateResult:
        """Replace the inquiry bound to *room_id*."""
        ...

    @abstractmethod
    async def update_inquiry_visitor_status(
        self, token: str, status: UserPresence
    ) -> UpdateResult:
        """Update the visitor status on every inquiry of the visitor *token*."""
        ...

    @abstractmethod
    async def remove_inquiry_by_room_id(self, room_id: str) -> UpdateResult:
        """Delete the inquiry bound to *room_id*."""
        ...

    # Visitor operations

    @abstractmethod
    async def get_visitor(self, visitor_id: str) -> Visitor | None:
        """Get a visitor by ID, enabled or not."""
        ...

    async def get_enabled_visitor(self, visitor_id: str) -> Visitor | None:
        """Get a visitor by ID, or ``None`` if missing or disabled."""
        visitor = await self.get_visitor(visitor_id)
        if visitor is None or not visitor.enabled:
            return None
        return visitor

    # Transcript operations

    @abstractmethod
    async def add_message(self, message: TranscriptMessage) -> TranscriptMessage:
        """Append a message to a room transcript."""
        ...

    @abstractmethod
    async def list_messages(
        self, room_id: str, offset: int = 0, limit: int = 50
    ) -> list[TranscriptMessage]:
        """List transcript messages of a room in insertion order."""
        ...

    @abstractmethod
    async def remove_messages(self, room_id: str) -> UpdateResult:
        """Delete the transcript of a room."""
        ...


def visitor_ref(visitor: Visitor) -> VisitorRef:
    """Build the room-side reference for *visitor*."""
    return VisitorRef(
        id=visitor.id,
        token=visitor.token,
        username=visitor.username,
        status=visitor.status,
    )
