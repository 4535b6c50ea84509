"""Department model."""

from __future__ import annotations

from pydantic import BaseModel


class Department(BaseModel):
    """A group of agents that rooms can be routed to."""

    id: str
    name: str
    enabled: bool = True
    fallback_forward_department: str | None = None
