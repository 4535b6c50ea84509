"""In-memory implementation of DepartmentStore."""

from __future__ import annotations

from collections.abc import Iterable

from livechatkit.departments.base import DepartmentStore
from livechatkit.directory.base import Directory
from livechatkit.models.department import Department


class InMemoryDepartmentStore(DepartmentStore):
    """Dict-based department store for development and testing.

    Agent liveness and bot flags are read from *directory*, so a user's
    presence is tracked in one place.
    """

    def __init__(self, directory: Directory, departments: Iterable[Department] = ()) -> None:
        self._directory = directory
        self._departments: dict[str, Department] = {d.id: d for d in departments}
        self._members: dict[str, set[str]] = {}  # department_id -> agent_ids

    async def add_department(self, department: Department) -> Department:
        self._departments[department.id] = department
        self._members.setdefault(department.id, set())
        return department

    async def get_department(self, department_id: str) -> Department | None:
        department = self._departments.get(department_id)
        return department.model_copy() if department is not None else None

    async def find_departments(self, department_ids: Iterable[str]) -> list[Department]:
        return [
            self._departments[d].model_copy()
            for d in dict.fromkeys(department_ids)
            if d in self._departments
        ]

    async def check_online_for_department(
        self, department_id: str, *, allow_idle: bool = False
    ) -> bool:
        for agent_id in self._members.get(department_id, set()):
            if await self._directory.check_online_agents(agent_id, allow_idle=allow_idle):
                return True
        return False

    async def count_bots_for_department(self, department_id: str) -> int:
        count = 0
        for agent_id in self._members.get(department_id, set()):
            user = await self._directory.get_user(agent_id)
            if user is not None and user.bot:
                count += 1
        return count

    async def list_agent_departments(self, agent_id: str) -> list[str]:
        return sorted(d for d, members in self._members.items() if agent_id in members)

    async def add_agent(self, department_id: str, agent_id: str) -> None:
        self._members.setdefault(department_id, set()).add(agent_id)

    async def remove_agent(self, department_id: str, agent_id: str) -> None:
        self._members.get(department_id, set()).discard(agent_id)
