"""Transfers between agents and departments, and returns to the queue."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from pydantic import ValidationError

from livechatkit.core._helpers import normalize_transferred_by
from livechatkit.core.errors import (
    InvalidDepartmentError,
    InvalidInputError,
    InvalidUserError,
    ReturnToQueueFailedError,
    RoomClosedError,
    RoomOnHoldError,
)
from livechatkit.core.history import TransferHistoryRecorder
from livechatkit.core.hooks import HookEngine
from livechatkit.departments.base import DepartmentStore
from livechatkit.directory.base import Directory
from livechatkit.models.enums import LifecycleHook, ReturnToQueueStage, TransferScope
from livechatkit.models.inquiry import Inquiry
from livechatkit.models.message import TranscriptMessage
from livechatkit.models.room import Room
from livechatkit.models.transfer import TransferData
from livechatkit.models.visitor import Visitor
from livechatkit.routing.base import RoutingProvider
from livechatkit.store.base import ConversationStore

logger = logging.getLogger("livechatkit.transfer")


@dataclass
class ReturnToQueueSaga:
    """The two committed steps of a return to queue.

    Room, inquiry and history live in separate stores, so there is no
    transaction: ``stage`` records the last step that completed. A saga that
    stops at ``HISTORY_RECORDED`` left a history entry behind without the
    agent being unassigned.
    """

    room: Room
    inquiry: Inquiry
    transfer_data: TransferData
    department_id: str | None = None
    stage: ReturnToQueueStage = ReturnToQueueStage.PENDING
    history: TranscriptMessage | None = None
    unassign_result: Any = None
    error: Exception | None = field(default=None, repr=False)

    @property
    def history_recorded(self) -> bool:
        return self.stage in (ReturnToQueueStage.HISTORY_RECORDED, ReturnToQueueStage.COMPLETED)

    @property
    def completed(self) -> bool:
        return self.stage == ReturnToQueueStage.COMPLETED

    async def run(self, recorder: TransferHistoryRecorder, routing: RoutingProvider) -> None:
        try:
            self.history = await recorder.record(self.room, self.transfer_data)
            self.stage = ReturnToQueueStage.HISTORY_RECORDED
            self.unassign_result = await routing.unassign_agent(self.inquiry, self.department_id)
            self.stage = ReturnToQueueStage.COMPLETED
        except Exception as exc:
            self.error = exc
            raise


class TransferCoordinator:
    """Moves rooms between agents, departments and the unassigned queue.

    Picking the receiving agent is left to the routing provider.
    """

    def __init__(
        self,
        store: ConversationStore,
        directory: Directory,
        departments: DepartmentStore,
        routing: RoutingProvider,
        recorder: TransferHistoryRecorder,
        hooks: HookEngine,
    ) -> None:
        self._store = store
        self._directory = directory
        self._departments = departments
        self._routing = routing
        self._recorder = recorder
        self._hooks = hooks

    async def transfer(self, room: Room, visitor: Visitor, transfer_data: TransferData) -> Any:
        """Hand *room* to the routing provider for reassignment.

        Returns whatever the routing provider reports.

        Raises:
            RoomOnHoldError: The room is on hold.
            InvalidDepartmentError: ``transfer_data.department_id`` is unknown.
        """
        transferred_by = transfer_data.transferred_by
        logger.debug(
            "Transferring room %s [Transferred by: %s]",
            room.id,
            getattr(transferred_by, "id", None),
            extra={"room_id": room.id},
        )
        if room.on_hold:
            raise RoomOnHoldError(f"Room {room.id} is on hold")

        if transfer_data.department_id:
            department = await self._departments.get_department(transfer_data.department_id)
            if department is None:
                raise InvalidDepartmentError(
                    f"Department {transfer_data.department_id} not found"
                )
            transfer_data = transfer_data.model_copy(update={"department": department})
            logger.debug(
                "Transferring room %s to department %s",
                room.id,
                department.id,
                extra={"room_id": room.id},
            )

        return await self._routing.transfer_room(room, visitor, transfer_data)

    async def forward_open_chats(self, agent_id: str) -> None:
        """Transfer every open room of *agent_id* to its visitor's department.

        Rooms are processed one at a time. A room whose visitor is missing or
        disabled is skipped; a room whose transfer fails is logged and the
        remaining rooms are still processed.
        """
        logger.debug("Transferring open chats for user %s", agent_id)
        agent = await self._directory.get_user(agent_id)
        if agent is None:
            raise InvalidUserError(f"User {agent_id} not found")

        for room in await self._store.find_open_rooms_by_agent(agent_id):
            try:
                visitor = await self._store.get_enabled_visitor(room.visitor.id)
                if visitor is None:
                    logger.debug(
                        "Skipping room %s: visitor %s missing or disabled",
                        room.id,
                        room.visitor.id,
                        extra={"room_id": room.id},
                    )
                    continue
                await self.transfer(
                    room,
                    visitor,
                    TransferData(
                        transferred_by=normalize_transferred_by(agent, room),
                        department_id=visitor.department,
                    ),
                )
            except Exception:
                logger.exception(
                    "Failed to forward room %s of agent %s",
                    room.id,
                    agent_id,
                    extra={"room_id": room.id},
                )

    async def return_room_as_inquiry(
        self,
        room: Room,
        department_id: str | None = None,
        overrides: dict[str, Any] | None = None,
    ) -> bool:
        """Unassign the serving agent and put *room* back in the queue.

        Returns ``False`` when there is nothing to return: the room has no
        serving agent or no inquiry.

        Raises:
            RoomClosedError: The room is closed.
            RoomOnHoldError: The room is on hold.
            InvalidUserError: The serving agent does not exist.
            InvalidInputError: *overrides* do not describe valid transfer data.
            ReturnToQueueFailedError: Recording history or unassigning failed.
                The history entry may have been committed; see ``saga``.
        """
        logger.debug(
            "Transferring room %s to %squeue",
            room.id,
            "department " if department_id else "",
            extra={"room_id": room.id},
        )
        if not room.open:
            raise RoomClosedError(f"Room {room.id} is closed")

        if room.on_hold:
            raise RoomOnHoldError(f"Room {room.id} is on hold")

        if room.served_by is None:
            return False

        agent = await self._directory.get_user(room.served_by.id)
        if agent is None:
            raise InvalidUserError(f"User {room.served_by.id} not found")

        inquiry = await self._store.get_inquiry_by_room_id(room.id)
        if inquiry is None:
            return False

        transferred_by = normalize_transferred_by(agent, room)
        logger.debug(
            "Transferring room %s by user %s",
            room.id,
            transferred_by.id,
            extra={"room_id": room.id},
        )
        try:
            transfer_data = TransferData.model_validate(
                {
                    "room_id": room.id,
                    "scope": TransferScope.QUEUE,
                    "department_id": department_id,
                    "transferred_by": transferred_by,
                    **(overrides or {}),
                }
            )
        except ValidationError as exc:
            raise InvalidInputError(f"Invalid transfer data: {exc}") from exc

        saga = ReturnToQueueSaga(
            room=room,
            inquiry=inquiry,
            transfer_data=transfer_data,
            department_id=department_id,
        )
        try:
            await saga.run(self._recorder, self._routing)
        except Exception as exc:
            logger.exception(
                "Failed to return room %s to queue (stage: %s)",
                room.id,
                saga.stage,
                extra={"room_id": room.id, "inquiry_id": inquiry.id},
            )
            raise ReturnToQueueFailedError(
                f"Error returning room {room.id} to queue", saga
            ) from exc

        self._hooks.fire(LifecycleHook.AFTER_RETURN_ROOM_AS_INQUIRY, {"room": room})
        return True
