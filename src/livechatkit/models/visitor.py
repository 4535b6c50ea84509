"""Visitor model."""

from __future__ import annotations

from pydantic import BaseModel

from livechatkit.models.enums import UserPresence


class Visitor(BaseModel):
    """A guest contacting support."""

    id: str
    token: str
    username: str | None = None
    name: str | None = None
    department: str | None = None
    enabled: bool = True
    status: UserPresence | None = None
