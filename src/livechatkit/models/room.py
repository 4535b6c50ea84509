"""Room model."""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, Field

from livechatkit.models.enums import UserPresence


class ServedBy(BaseModel):
    """The agent currently assigned to a room."""

    id: str
    username: str
    ts: datetime = Field(default_factory=lambda: datetime.now(UTC))


class VisitorRef(BaseModel):
    """Reference to the visitor on the other end of a room."""

    id: str
    token: str
    username: str | None = None
    status: UserPresence | None = None


class Room(BaseModel):
    """A live-support conversation session."""

    id: str
    visitor: VisitorRef
    open: bool = True
    on_hold: bool = False
    served_by: ServedBy | None = None
    department_id: str | None = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
