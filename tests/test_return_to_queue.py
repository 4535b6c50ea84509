"""Tests for TransferCoordinator.return_room_as_inquiry."""

from __future__ import annotations

from typing import Any

import pytest

from livechatkit.core.errors import (
    DependencyFailureError,
    InvalidInputError,
    InvalidUserError,
    PreconditionFailedError,
    ReturnToQueueFailedError,
    RoomClosedError,
    RoomOnHoldError,
)
from livechatkit.core.history import TransferHistoryRecorder
from livechatkit.core.hooks import HookEngine
from livechatkit.core.transfer import TransferCoordinator
from livechatkit.departments.memory import InMemoryDepartmentStore
from livechatkit.directory.memory import InMemoryDirectory
from livechatkit.models.enums import (
    LifecycleHook,
    MessageType,
    ReturnToQueueStage,
    TransferScope,
    TransferUserType,
)
from livechatkit.models.message import TranscriptMessage
from livechatkit.models.room import Room
from livechatkit.routing.mock import MockRoutingProvider
from livechatkit.store.memory import InMemoryStore
from tests.conftest import make_agent, make_inquiry, make_room


class _FailingHistoryStore(InMemoryStore):
    async def add_message(self, message: TranscriptMessage) -> TranscriptMessage:
        raise RuntimeError("transcript unavailable")


@pytest.fixture
def coordinator(
    store: InMemoryStore,
    directory: InMemoryDirectory,
    departments: InMemoryDepartmentStore,
    routing: MockRoutingProvider,
    hooks: HookEngine,
) -> TransferCoordinator:
    return TransferCoordinator(
        store, directory, departments, routing, TransferHistoryRecorder(store), hooks
    )


async def _seed(
    store: InMemoryStore, directory: InMemoryDirectory, **room_kwargs: Any
) -> Room:
    await directory.add_user(make_agent("agent-a"))
    room = make_room("room-1", **room_kwargs)
    await store.create_room(room)
    await store.create_inquiry(make_inquiry(room, "I1"))
    return room


class TestPreconditions:
    @pytest.mark.parametrize(
        ("room_kwargs", "error"),
        [
            ({"open": False}, RoomClosedError),
            ({"on_hold": True}, RoomOnHoldError),
        ],
    )
    async def test_rejected_without_side_effects(
        self,
        coordinator: TransferCoordinator,
        store: InMemoryStore,
        directory: InMemoryDirectory,
        routing: MockRoutingProvider,
        room_kwargs: dict[str, Any],
        error: type[Exception],
    ) -> None:
        room = await _seed(store, directory, **room_kwargs)

        with pytest.raises(error) as exc_info:
            await coordinator.return_room_as_inquiry(room)

        assert isinstance(exc_info.value, PreconditionFailedError)
        assert await store.list_messages(room.id) == []
        assert routing.unassigns == []

    async def test_closed_checked_before_on_hold(
        self,
        coordinator: TransferCoordinator,
        store: InMemoryStore,
        directory: InMemoryDirectory,
    ) -> None:
        room = await _seed(store, directory, open=False, on_hold=True)
        with pytest.raises(RoomClosedError):
            await coordinator.return_room_as_inquiry(room)

    async def test_unserved_room_returns_false(
        self,
        coordinator: TransferCoordinator,
        store: InMemoryStore,
        directory: InMemoryDirectory,
        routing: MockRoutingProvider,
    ) -> None:
        room = await _seed(store, directory, served_by=None)

        assert await coordinator.return_room_as_inquiry(room) is False
        assert await store.list_messages(room.id) == []
        assert routing.unassigns == []

    async def test_missing_inquiry_returns_false(
        self,
        coordinator: TransferCoordinator,
        store: InMemoryStore,
        directory: InMemoryDirectory,
        routing: MockRoutingProvider,
    ) -> None:
        await directory.add_user(make_agent("agent-a"))
        room = make_room("room-1")
        await store.create_room(room)

        assert await coordinator.return_room_as_inquiry(room) is False
        assert await store.list_messages(room.id) == []
        assert routing.unassigns == []

    async def test_unknown_serving_agent(
        self,
        coordinator: TransferCoordinator,
        store: InMemoryStore,
        routing: MockRoutingProvider,
    ) -> None:
        room = make_room("room-1", served_by="ghost")
        await store.create_room(room)
        await store.create_inquiry(make_inquiry(room))

        with pytest.raises(InvalidUserError):
            await coordinator.return_room_as_inquiry(room)
        assert routing.unassigns == []


class TestReturnToQueue:
    async def test_records_history_then_unassigns(
        self,
        coordinator: TransferCoordinator,
        store: InMemoryStore,
        directory: InMemoryDirectory,
        routing: MockRoutingProvider,
    ) -> None:
        room = await _seed(store, directory)

        assert await coordinator.return_room_as_inquiry(room) is True

        messages = await store.list_messages(room.id)
        assert len(messages) == 1
        entry = messages[0].transfer_data
        assert messages[0].type == MessageType.TRANSFER_HISTORY
        assert entry is not None
        assert entry.scope == TransferScope.QUEUE
        assert entry.transferred_by.id == "agent-a"
        assert entry.transferred_by.user_type == TransferUserType.AGENT

        assert len(routing.unassigns) == 1
        inquiry, department_id = routing.unassigns[0]
        assert inquiry.id == "I1"
        assert department_id is None

    async def test_department_passed_through(
        self,
        coordinator: TransferCoordinator,
        store: InMemoryStore,
        directory: InMemoryDirectory,
        routing: MockRoutingProvider,
    ) -> None:
        room = await _seed(store, directory)

        await coordinator.return_room_as_inquiry(room, "dep-x")

        _, department_id = routing.unassigns[0]
        assert department_id == "dep-x"
        [message] = await store.list_messages(room.id)
        assert message.transfer_data is not None
        assert message.transfer_data.next_department == "dep-x"

    async def test_overrides_merged_into_history(
        self,
        coordinator: TransferCoordinator,
        store: InMemoryStore,
        directory: InMemoryDirectory,
    ) -> None:
        room = await _seed(store, directory)

        await coordinator.return_room_as_inquiry(room, overrides={"comment": "shift ended"})

        [message] = await store.list_messages(room.id)
        assert message.transfer_data is not None
        assert message.transfer_data.comment == "shift ended"
        assert message.transfer_data.scope == TransferScope.QUEUE

    async def test_invalid_overrides_rejected(
        self,
        coordinator: TransferCoordinator,
        store: InMemoryStore,
        directory: InMemoryDirectory,
        routing: MockRoutingProvider,
    ) -> None:
        room = await _seed(store, directory)

        with pytest.raises(InvalidInputError):
            await coordinator.return_room_as_inquiry(room, overrides={"scope": "nowhere"})
        assert await store.list_messages(room.id) == []
        assert routing.unassigns == []

    async def test_fires_after_return_hook(
        self,
        coordinator: TransferCoordinator,
        store: InMemoryStore,
        directory: InMemoryDirectory,
        hooks: HookEngine,
    ) -> None:
        received: list[dict[str, Any]] = []

        @hooks.on(LifecycleHook.AFTER_RETURN_ROOM_AS_INQUIRY)
        async def capture(payload: dict[str, Any]) -> None:
            received.append(payload)

        room = await _seed(store, directory)
        await coordinator.return_room_as_inquiry(room)
        await hooks.drain()

        assert len(received) == 1
        assert received[0]["room"].id == room.id


class TestPartialFailure:
    async def test_history_failure_skips_unassign(
        self,
        directory: InMemoryDirectory,
        departments: InMemoryDepartmentStore,
        routing: MockRoutingProvider,
        hooks: HookEngine,
    ) -> None:
        store = _FailingHistoryStore()
        coordinator = TransferCoordinator(
            store, directory, departments, routing, TransferHistoryRecorder(store), hooks
        )
        room = await _seed(store, directory)

        with pytest.raises(ReturnToQueueFailedError) as exc_info:
            await coordinator.return_room_as_inquiry(room)

        saga = exc_info.value.saga
        assert saga.stage == ReturnToQueueStage.PENDING
        assert not saga.history_recorded
        assert isinstance(saga.error, RuntimeError)
        assert routing.unassigns == []

    async def test_unassign_failure_reports_recorded_history(
        self,
        coordinator: TransferCoordinator,
        store: InMemoryStore,
        directory: InMemoryDirectory,
        routing: MockRoutingProvider,
    ) -> None:
        routing.unassign_error = RuntimeError("routing down")
        room = await _seed(store, directory)

        with pytest.raises(ReturnToQueueFailedError) as exc_info:
            await coordinator.return_room_as_inquiry(room)

        error = exc_info.value
        assert isinstance(error, DependencyFailureError)
        assert error.code == "error-returning-inquiry"
        assert isinstance(error.__cause__, RuntimeError)
        assert error.saga.stage == ReturnToQueueStage.HISTORY_RECORDED
        assert error.saga.history is not None
        assert not error.saga.completed
        assert len(await store.list_messages(room.id)) == 1

    async def test_no_hook_on_failure(
        self,
        coordinator: TransferCoordinator,
        store: InMemoryStore,
        directory: InMemoryDirectory,
        routing: MockRoutingProvider,
        hooks: HookEngine,
    ) -> None:
        received: list[dict[str, Any]] = []

        @hooks.on(LifecycleHook.AFTER_RETURN_ROOM_AS_INQUIRY)
        async def capture(payload: dict[str, Any]) -> None:
            received.append(payload)

        routing.unassign_error = RuntimeError("routing down")
        room = await _seed(store, directory)
        with pytest.raises(ReturnToQueueFailedError):
            await coordinator.return_room_as_inquiry(room)
        await hooks.drain()

        assert received == []
