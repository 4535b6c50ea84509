"""In-memory implementation of Directory."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from livechatkit.core.errors import InvalidInputError
from livechatkit.directory.base import Directory
from livechatkit.models.agent import Agent
from livechatkit.models.enums import AgentStatus, UserPresence
from livechatkit.models.results import UpdateResult


class InMemoryDirectory(Directory):
    """Dict-based user directory for development and testing."""

    def __init__(self, users: Iterable[Agent] = ()) -> None:
        self._users: dict[str, Agent] = {u.id: u for u in users}

    async def add_user(self, user: Agent) -> Agent:
        self._users[user.id] = user
        return user

    async def get_user(self, user_id: str) -> Agent | None:
        user = self._users.get(user_id)
        return user.model_copy(deep=True) if user is not None else None

    async def find_user_by_username(self, username: str) -> Agent | None:
        for user in self._users.values():
            if user.username == username:
                return user.model_copy(deep=True)
        return None

    def _apply(self, user_id: str, changes: Mapping[str, Any]) -> UpdateResult:
        user = self._users.get(user_id)
        if user is None:
            return UpdateResult()
        unknown = sorted(set(changes) - Agent.model_fields.keys())
        if unknown:
            raise InvalidInputError(f"Unknown agent fields: {', '.join(unknown)}")
        if all(getattr(user, k) == v for k, v in changes.items()):
            return UpdateResult(matched_count=1)
        self._users[user_id] = user.model_copy(update=dict(changes))
        return UpdateResult(matched_count=1, modified_count=1)

    async def set_operator(self, user_id: str, operator: bool) -> UpdateResult:
        return self._apply(user_id, {"operator": operator})

    async def set_livechat_status(self, user_id: str, status: AgentStatus) -> UpdateResult:
        return self._apply(
            user_id, {"status_livechat": status, "livechat_status_system_modified": False}
        )

    async def set_livechat_status_if(
        self,
        user_id: str,
        status: AgentStatus,
        condition: Mapping[str, Any] | None = None,
        fields: Mapping[str, Any] | None = None,
    ) -> UpdateResult:
        user = self._users.get(user_id)
        if user is None:
            return UpdateResult()
        if condition and not all(getattr(user, k, None) == v for k, v in condition.items()):
            return UpdateResult()
        return self._apply(user_id, {**(fields or {}), "status_livechat": status})

    async def set_livechat_data(self, user_id: str, data: Mapping[str, Any]) -> UpdateResult:
        return self._apply(user_id, {"livechat_data": dict(data)})

    def _is_online(self, user: Agent, allow_idle: bool) -> bool:
        if not user.is_livechat_agent or user.status_livechat != AgentStatus.AVAILABLE:
            return False
        if allow_idle:
            return user.status != UserPresence.OFFLINE
        return user.status == UserPresence.ONLINE

    async def check_online_agents(
        self, agent_id: str | None = None, *, allow_idle: bool = False
    ) -> bool:
        if agent_id is not None:
            user = self._users.get(agent_id)
            return user is not None and self._is_online(user, allow_idle)
        return any(self._is_online(u, allow_idle) for u in self._users.values())

    async def count_bot_agents(self) -> int:
        return sum(1 for u in self._users.values() if u.bot and u.is_livechat_agent)

    async def has_role(self, user_id: str, role: str) -> bool:
        user = self._users.get(user_id)
        return user is not None and role in user.roles

    async def add_roles(self, user_id: str, roles: Iterable[str]) -> bool:
        user = self._users.get(user_id)
        if user is None:
            return False
        merged = list(user.roles)
        merged.extend(r for r in roles if r not in merged)
        if len(merged) == len(user.roles):
            return False
        self._users[user_id] = user.model_copy(update={"roles": merged})
        return True

    async def remove_roles(self, user_id: str, roles: Iterable[str]) -> bool:
        user = self._users.get(user_id)
        if user is None:
            return False
        dropped = {str(r) for r in roles}
        kept = [r for r in user.roles if r not in dropped]
        if len(kept) == len(user.roles):
            return False
        self._users[user_id] = user.model_copy(update={"roles": kept})
        return True


