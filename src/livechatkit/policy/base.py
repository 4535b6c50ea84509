"""Abstract base classes for external policy checks."""

from __future__ import annotations

from abc import ABC, abstractmethod

from livechatkit.models.agent import Agent
from livechatkit.models.room import Room


class BusinessHoursPolicy(ABC):
    """Decides when an agent may mark itself available."""

    @abstractmethod
    async def allow_agent_change_service_status(self, agent_id: str) -> bool:
        """Whether *agent_id* may switch to AVAILABLE right now."""
        ...


class AccessPolicy(ABC):
    """Decides whether a user may act on a room."""

    @abstractmethod
    async def can_access_room(self, room: Room, user: Agent) -> bool: ...


class AlwaysOpenPolicy(BusinessHoursPolicy):
    """No business hours: agents may become available at any time."""

    async def allow_agent_change_service_status(self, agent_id: str) -> bool:
        return True


class AllowAllAccessPolicy(AccessPolicy):
    async def can_access_room(self, room: Room, user: Agent) -> bool:
        return True
