"""Agent livechat status and agent membership."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from typing import Any

from livechatkit.config import LivechatSettings
from livechatkit.core._helpers import Notifier
from livechatkit.core.errors import InvalidInputError, InvalidUserError, InvalidUserRoleError
from livechatkit.core.hooks import HookEngine
from livechatkit.departments.base import DepartmentStore
from livechatkit.directory.base import Directory
from livechatkit.models.agent import Agent
from livechatkit.models.enums import (
    AgentStatus,
    ClientAction,
    LifecycleHook,
    NotificationType,
    Role,
    UserPresence,
)
from livechatkit.models.results import UpdateResult
from livechatkit.policy.base import BusinessHoursPolicy
from livechatkit.store.base import ConversationStore

logger = logging.getLogger("livechatkit.agents")


class AgentStatusCoordinator:
    """Livechat availability of agents and the side effects of changing it.

    Status changes are persisted first; hooks and notifications that follow
    are fire-and-forget and cannot fail the change.
    """

    def __init__(
        self,
        store: ConversationStore,
        directory: Directory,
        departments: DepartmentStore,
        business_hours: BusinessHoursPolicy,
        hooks: HookEngine,
        notifier: Notifier,
        settings: LivechatSettings,
    ) -> None:
        self._store = store
        self._directory = directory
        self._departments = departments
        self._business_hours = business_hours
        self._hooks = hooks
        self._notifier = notifier
        self._settings = settings

    # -- Status ----------------------------------------------------------------

    async def set_status(self, agent_id: str, status: AgentStatus) -> UpdateResult:
        """Set the livechat status of *agent_id* unconditionally."""
        result = await self._directory.set_livechat_status(agent_id, status)
        self._hooks.fire(LifecycleHook.SET_USER_STATUS, {"user_id": agent_id, "status": status})

        if result.modified_count > 0:
            self._notifier.user(
                agent_id,
                NotificationType.USER_CHANGED,
                {
                    "client_action": ClientAction.UPDATED,
                    "diff": {
                        "status_livechat": status,
                        "livechat_status_system_modified": False,
                    },
                },
            )
        return result

    async def set_status_if(
        self,
        agent_id: str,
        status: AgentStatus,
        condition: Mapping[str, Any] | None = None,
        fields: Mapping[str, Any] | None = None,
    ) -> UpdateResult:
        """Set the livechat status only if *condition* matches the agent record.

        *fields* are written along with the status and included in the
        change notification.
        """
        for name, keys in (("condition", condition), ("fields", fields)):
            unknown = sorted(set(keys or ()) - Agent.model_fields.keys())
            if unknown:
                raise InvalidInputError(f"Unknown agent {name} keys: {', '.join(unknown)}")

        result = await self._directory.set_livechat_status_if(agent_id, status, condition, fields)

        if result.modified_count > 0:
            self._notifier.user(
                agent_id,
                NotificationType.USER_CHANGED,
                {
                    "client_action": ClientAction.UPDATED,
                    "diff": {**(fields or {}), "status_livechat": status},
                },
            )

        self._hooks.fire(LifecycleHook.SET_USER_STATUS, {"user_id": agent_id, "status": status})
        return result

    async def notify_agent_status_changed(
        self, agent_id: str, status: UserPresence | None = None
    ) -> None:
        """Propagate a presence change of *agent_id*.

        Broadcasts to the agent's open rooms only when agent info is shown
        to visitors.
        """
        if not status:
            return

        self._hooks.fire(
            LifecycleHook.AGENT_STATUS_CHANGED, {"user_id": agent_id, "status": status}
        )
        if not self._settings.show_agent_info:
            return

        for room in await self._store.find_open_rooms_by_agent(agent_id):
            self._notifier.room(room.id, NotificationType.AGENT_STATUS, {"status": status})

    async def allow_status_change(self, agent_id: str, status: AgentStatus) -> bool:
        """Whether *agent_id* may switch to *status*.

        Only becoming AVAILABLE is subject to business hours.
        """
        if status != AgentStatus.AVAILABLE:
            return True
        return await self._business_hours.allow_agent_change_service_status(agent_id)

    # -- Lifecycle -------------------------------------------------------------

    async def on_agent_activated(self, user: Agent) -> None:
        """Re-enable a deactivated user that already holds the agent role."""
        if Role.LIVECHAT_AGENT not in user.roles:
            raise InvalidUserRoleError(f"User {user.id} is not a livechat agent")
        await self._directory.set_operator(user.id, True)
        self._hooks.fire(LifecycleHook.AGENT_CREATED, {"user_id": user.id})

    async def on_agent_added(self, user: Agent) -> Agent:
        """Set up a user that was just granted the agent role."""
        status = (
            AgentStatus.AVAILABLE
            if user.status != UserPresence.OFFLINE
            else AgentStatus.NOT_AVAILABLE
        )
        await asyncio.gather(
            self._directory.set_operator(user.id, True),
            self.set_status(user.id, status),
        )
        self._hooks.fire(LifecycleHook.AGENT_CREATED, {"user_id": user.id})
        return user

    async def add_agent(self, username: str) -> Agent | bool:
        user = await self._require_username(username)
        if await self._directory.add_roles(user.id, [Role.LIVECHAT_AGENT]):
            return await self.on_agent_added(user)
        return False

    async def remove_agent(self, username: str) -> bool:
        user = await self._require_username(username)
        if not await self._directory.remove_roles(user.id, [Role.LIVECHAT_AGENT]):
            return False
        self._hooks.fire(LifecycleHook.AGENT_REMOVED, {"agent": user})
        return True

    async def add_manager(self, username: str) -> Agent | bool:
        user = await self._require_username(username)
        if await self._directory.add_roles(user.id, [Role.LIVECHAT_MANAGER]):
            return user
        return False

    async def remove_manager(self, username: str) -> bool:
        user = await self._require_username(username)
        return await self._directory.remove_roles(user.id, [Role.LIVECHAT_MANAGER])

    async def save_agent_info(
        self, agent_id: str, agent_data: Mapping[str, Any], department_ids: list[str]
    ) -> bool:
        """Store livechat data and sync department membership of an agent."""
        user = await self._directory.get_user(agent_id)
        if user is None:
            raise InvalidUserError(f"User {agent_id} not found")
        if not await self._directory.has_role(agent_id, Role.LIVECHAT_AGENT):
            raise InvalidUserRoleError(f"User {agent_id} is not a livechat agent")

        await self._directory.set_livechat_data(agent_id, agent_data)

        current = await self._departments.list_agent_departments(agent_id)
        to_remove = [d for d in current if d not in department_ids]
        to_add = [d for d in department_ids if d not in current]
        departments = await self._departments.find_departments([*to_remove, *to_add])
        logger.debug(
            "Updating departments of agent %s: +%s -%s",
            agent_id,
            to_add,
            to_remove,
            extra={"agent_id": agent_id},
        )
        await asyncio.gather(
            *(
                self._departments.remove_agent(dep.id, agent_id)
                if dep.id in to_remove
                else self._departments.add_agent(dep.id, agent_id)
                for dep in departments
            )
        )
        return True

    async def _require_username(self, username: str) -> Agent:
        user = await self._directory.find_user_by_username(username)
        if user is None:
            raise InvalidUserError(f"User {username} not found")
        return user
