"""Abstract base class for the routing collaborator."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from livechatkit.models.inquiry import Inquiry
from livechatkit.models.room import Room
from livechatkit.models.transfer import TransferData
from livechatkit.models.visitor import Visitor


class RoutingProvider(ABC):
    """Performs the actual (re)assignment of rooms to agents.

    Choosing *which* agent receives a conversation is entirely up to the
    implementation; its results are returned to callers untouched.
    """

    @abstractmethod
    async def transfer_room(
        self, room: Room, visitor: Visitor, transfer_data: TransferData
    ) -> Any:
        """Move *room* to the agent or department described by *transfer_data*."""
        ...

    @abstractmethod
    async def unassign_agent(self, inquiry: Inquiry, department_id: str | None = None) -> Any:
        """Detach the serving agent and put *inquiry* back in the queue."""
        ...
