"""Abstract base class for department storage."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable

from livechatkit.models.department import Department


class DepartmentStore(ABC):
    """Departments and their agent membership.

    Implement this ABC against the system that owns department configuration.
    The library ships with `InMemoryDepartmentStore` for development and testing.
    """

    @abstractmethod
    async def get_department(self, department_id: str) -> Department | None:
        """Get a department by ID, including its fallback department."""
        ...

    @abstractmethod
    async def find_departments(self, department_ids: Iterable[str]) -> list[Department]:
        """Get the existing departments among *department_ids*."""
        ...

    @abstractmethod
    async def check_online_for_department(
        self, department_id: str, *, allow_idle: bool = False
    ) -> bool:
        """Whether any agent of the department is online and available.

        With *allow_idle*, agents that are away or busy also count.
        """
        ...

    @abstractmethod
    async def count_bots_for_department(self, department_id: str) -> int:
        """Count bot agents that belong to the department."""
        ...

    @abstractmethod
    async def list_agent_departments(self, agent_id: str) -> list[str]:
        """IDs of the departments *agent_id* belongs to."""
        ...

    @abstractmethod
    async def add_agent(self, department_id: str, agent_id: str) -> None:
        """Add an agent to a department (idempotent)."""
        ...

    @abstractmethod
    async def remove_agent(self, department_id: str, agent_id: str) -> None:
        """Remove an agent from a department (idempotent)."""
        ...
