"""Mock policies for testing."""

from __future__ import annotations

from livechatkit.models.agent import Agent
from livechatkit.models.room import Room
from livechatkit.policy.base import AccessPolicy, BusinessHoursPolicy


class MockBusinessHoursPolicy(BusinessHoursPolicy):
    """Allows or denies from a fixed answer, recording who asked."""

    def __init__(self, allow: bool = True, *, closed_for: set[str] | None = None) -> None:
        self.allow = allow
        self.closed_for = closed_for or set()
        self.calls: list[str] = []

    async def allow_agent_change_service_status(self, agent_id: str) -> bool:
        self.calls.append(agent_id)
        return self.allow and agent_id not in self.closed_for


class MockAccessPolicy(AccessPolicy):
    """Grants access to the listed user IDs only."""

    def __init__(self, allowed_users: set[str] | None = None) -> None:
        self.allowed_users = allowed_users or set()

    async def can_access_room(self, room: Room, user: Agent) -> bool:
        return user.id in self.allowed_users
