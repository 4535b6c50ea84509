"""Inquiry model."""

from __future__ import annotations

from datetime import UTC, datetime
from uuid import uuid4

from pydantic import BaseModel, Field

from livechatkit.models.enums import InquiryStatus
from livechatkit.models.room import VisitorRef


class Inquiry(BaseModel):
    """Queue-side record of a room awaiting or holding an agent."""

    id: str = Field(default_factory=lambda: uuid4().hex)
    room_id: str
    visitor: VisitorRef
    status: InquiryStatus = InquiryStatus.QUEUED
    department_id: str | None = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
