"""Mock routing provider for testing."""

from __future__ import annotations

from typing import Any

from livechatkit.models.inquiry import Inquiry
from livechatkit.models.room import Room
from livechatkit.models.transfer import TransferData
from livechatkit.models.visitor import Visitor
from livechatkit.routing.base import RoutingProvider


class MockRoutingProvider(RoutingProvider):
    """Records every call and returns canned results.

    Set ``transfer_error`` / ``unassign_error`` to make the matching call
    raise. ``fail_rooms`` makes ``transfer_room`` raise only for those room IDs.
    """

    def __init__(
        self,
        *,
        transfer_result: Any = True,
        unassign_result: Any = True,
        transfer_error: Exception | None = None,
        unassign_error: Exception | None = None,
        fail_rooms: set[str] | None = None,
    ) -> None:
        self.transfer_result = transfer_result
        self.unassign_result = unassign_result
        self.transfer_error = transfer_error
        self.unassign_error = unassign_error
        self.fail_rooms = fail_rooms or set()
        self.transfers: list[tuple[Room, Visitor, TransferData]] = []
        self.unassigns: list[tuple[Inquiry, str | None]] = []

    async def transfer_room(
        self, room: Room, visitor: Visitor, transfer_data: TransferData
    ) -> Any:
        self.transfers.append((room, visitor, transfer_data))
        if self.transfer_error is not None:
            raise self.transfer_error
        if room.id in self.fail_rooms:
            raise RuntimeError(f"transfer failed for room {room.id}")
        return self.transfer_result

    async def unassign_agent(self, inquiry: Inquiry, department_id: str | None = None) -> Any:
        self.unassigns.append((inquiry, department_id))
        if self.unassign_error is not None:
            raise self.unassign_error
        return self.unassign_result
