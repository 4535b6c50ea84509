"""Agent availability for departments, with fallback departments."""

from __future__ import annotations

import logging

from livechatkit.config import LivechatSettings
from livechatkit.departments.base import DepartmentStore
from livechatkit.directory.base import Directory

logger = logging.getLogger("livechatkit.availability")


class AvailabilityResolver:
    """Answers whether any agent (human or bot) can take a conversation.

    Read-only: nothing here mutates a collaborator.
    """

    def __init__(
        self,
        directory: Directory,
        departments: DepartmentStore,
        settings: LivechatSettings,
    ) -> None:
        self._directory = directory
        self._departments = departments
        self._settings = settings

    async def online(
        self,
        department_id: str | None = None,
        *,
        skip_no_agent_setting: bool = False,
        skip_fallback: bool = False,
    ) -> bool:
        """Whether new conversations can be accepted for *department_id*.

        Short-circuits to ``True`` when chats are accepted without agents, or
        when conversations go to bots and at least one bot is live.
        """
        logger.debug(
            "Checking online agents%s",
            f" for department {department_id}" if department_id else "",
        )
        if not skip_no_agent_setting and self._settings.accept_chats_with_no_agents:
            logger.debug("Can accept without online agents: true")
            return True

        if self._settings.assign_new_conversation_to_bot:
            bots = await self._count_bot_agents(department_id)
            logger.debug("Found %d online bot agents", bots)
            if bots > 0:
                return True

        agents_online = await self.is_online(department_id, skip_fallback=skip_fallback)
        logger.debug(
            "Online agents%s: %s",
            f" for department {department_id}" if department_id else "",
            agents_online,
        )
        return agents_online

    async def is_online(
        self,
        department_id: str | None = None,
        agent_id: str | None = None,
        *,
        skip_fallback: bool = False,
    ) -> bool:
        """Whether a human agent is reachable.

        Args:
            department_id: Check agents of this department, then its fallback
                chain unless *skip_fallback*.
            agent_id: Check this one agent only; *department_id* is ignored.
            skip_fallback: Do not follow fallback departments.
        """
        allow_idle = self._settings.enabled_when_agent_idle
        if agent_id:
            return await self._directory.check_online_agents(agent_id, allow_idle=allow_idle)

        if not department_id:
            return await self._directory.check_online_agents(None, allow_idle=allow_idle)

        visited: set[str] = set()
        current: str | None = department_id
        while current:
            if current in visited:
                logger.warning(
                    "Fallback department cycle detected at %s",
                    current,
                    extra={"department_id": department_id},
                )
                return False
            visited.add(current)

            if await self._departments.check_online_for_department(
                current, allow_idle=allow_idle
            ):
                return True
            if skip_fallback:
                return False

            department = await self._departments.get_department(current)
            current = department.fallback_forward_department if department else None
            if current:
                logger.debug("No agents online, falling back to department %s", current)
        return False

    async def _count_bot_agents(self, department_id: str | None) -> int:
        if department_id:
            return await self._departments.count_bots_for_department(department_id)
        return await self._directory.count_bot_agents()
