"""Abstract base class for the user directory."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from typing import Any

from livechatkit.models.agent import Agent
from livechatkit.models.enums import AgentStatus
from livechatkit.models.results import UpdateResult


class Directory(ABC):
    """Users, roles and livechat availability.

    Implement this ABC against the system that owns user accounts.
    The library ships with `InMemoryDirectory` for development and testing.
    """

    @abstractmethod
    async def get_user(self, user_id: str) -> Agent | None:
        """Get a user by ID."""
        ...

    @abstractmethod
    async def find_user_by_username(self, username: str) -> Agent | None:
        """Get a user by username."""
        ...

    @abstractmethod
    async def set_operator(self, user_id: str, operator: bool) -> UpdateResult:
        """Flag or unflag a user as a livechat operator."""
        ...

    @abstractmethod
    async def set_livechat_status(self, user_id: str, status: AgentStatus) -> UpdateResult:
        """Unconditionally set the livechat status of a user."""
        ...

    @abstractmethod
    async def set_livechat_status_if(
        self,
        user_id: str,
        status: AgentStatus,
        condition: Mapping[str, Any] | None = None,
        fields: Mapping[str, Any] | None = None,
    ) -> UpdateResult:
        """Set the livechat status (and *fields*) only if *condition* matches.

        *condition* maps user attribute names to the values they must
        currently hold. ``None`` matches any user.
        """
        ...

    @abstractmethod
    async def set_livechat_data(self, user_id: str, data: Mapping[str, Any]) -> UpdateResult:
        """Replace the free-form livechat data of a user."""
        ...

    @abstractmethod
    async def check_online_agents(
        self, agent_id: str | None = None, *, allow_idle: bool = False
    ) -> bool:
        """Whether *agent_id* (or any agent when ``None``) is online and available."""
        ...

    @abstractmethod
    async def count_bot_agents(self) -> int:
        """Count bot agents across all departments."""
        ...

    @abstractmethod
    async def has_role(self, user_id: str, role: str) -> bool:
        """Whether the user holds *role*."""
        ...

    @abstractmethod
    async def add_roles(self, user_id: str, roles: Iterable[str]) -> bool:
        """Grant *roles*. Returns ``False`` if the user does not exist or already
        holds all of them."""
        ...

    @abstractmethod
    async def remove_roles(self, user_id: str, roles: Iterable[str]) -> bool:
        """Revoke *roles*. Returns ``False`` if the user does not exist or held
        none of them."""
        ...
