"""Transfer request and audit models."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, Field

from livechatkit.models.department import Department
from livechatkit.models.enums import TransferScope, TransferUserType


class TransferredBy(BaseModel):
    """Who initiated a transfer.

    ``id``, ``username`` and ``user_type`` are mandatory; ``name`` is the
    optional display name.
    """

    id: str = Field(min_length=1)
    username: str = Field(min_length=1)
    name: str | None = None
    user_type: TransferUserType


class TransferTarget(BaseModel):
    """An explicit destination agent."""

    id: str
    username: str | None = None
    name: str | None = None


class TransferData(BaseModel):
    """A transfer or return-to-queue request.

    ``transferred_by`` is kept loose here (a raw mapping is accepted) and
    validated by the history recorder before anything is persisted.
    """

    transferred_by: TransferredBy | dict[str, Any] | None = None
    room_id: str | None = None
    department_id: str | None = None
    department: Department | None = None
    transferred_to: TransferTarget | None = None
    scope: TransferScope | None = None
    comment: str | None = None
    client_action: bool = False


class TransferRecord(BaseModel):
    """Immutable audit entry describing one transfer or return event."""

    model_config = {"frozen": True}

    transferred_by: TransferredBy
    scope: TransferScope
    ts: datetime = Field(default_factory=lambda: datetime.now(UTC))
    comment: str | None = None
    previous_department: str | None = None
    next_department: str | None = None
    transferred_to: TransferTarget | None = None
