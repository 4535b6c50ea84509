"""Transcript message model."""

from __future__ import annotations

from datetime import UTC, datetime
from uuid import uuid4

from pydantic import BaseModel, Field

from livechatkit.models.enums import MessageType
from livechatkit.models.transfer import TransferRecord


class MessageAuthor(BaseModel):
    id: str
    username: str


class TranscriptMessage(BaseModel):
    """A system entry appended to a room's transcript."""

    id: str = Field(default_factory=lambda: uuid4().hex)
    room_id: str
    type: MessageType
    author: MessageAuthor
    msg: str = ""
    token: str | None = None
    transfer_data: TransferRecord | None = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
