"""Livechat - entry point wiring coordinators to their collaborators."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any

from livechatkit.config import LivechatSettings
from livechatkit.core._helpers import Notifier
from livechatkit.core.agents import AgentStatusCoordinator
from livechatkit.core.availability import AvailabilityResolver
from livechatkit.core.errors import (
    DependencyFailureError,
    InvalidDepartmentError,
    InvalidInputError,
    InvalidTransferDataError,
    InvalidUserError,
    InvalidUserRoleError,
    InvalidVisitorError,
    LivechatError,
    NotAllowedError,
    NotFoundError,
    PreconditionFailedError,
    ReturnToQueueFailedError,
    RoomClosedError,
    RoomNotFoundError,
    RoomOnHoldError,
    RoomRemovalError,
)
from livechatkit.core.history import TransferHistoryRecorder
from livechatkit.core.hooks import HookEngine, HookFn, HookRegistration
from livechatkit.core.rooms import RoomCoordinator
from livechatkit.core.transfer import TransferCoordinator
from livechatkit.departments.base import DepartmentStore
from livechatkit.departments.memory import InMemoryDepartmentStore
from livechatkit.directory.base import Directory
from livechatkit.directory.memory import InMemoryDirectory
from livechatkit.models.agent import Agent
from livechatkit.models.enums import AgentStatus, LifecycleHook, UserPresence
from livechatkit.models.message import TranscriptMessage
from livechatkit.models.results import UpdateResult
from livechatkit.models.room import Room
from livechatkit.models.transfer import TransferData
from livechatkit.models.visitor import Visitor
from livechatkit.notify.base import NotificationBus
from livechatkit.notify.memory import InMemoryNotificationBus
from livechatkit.policy.base import (
    AccessPolicy,
    AllowAllAccessPolicy,
    AlwaysOpenPolicy,
    BusinessHoursPolicy,
)
from livechatkit.routing.base import RoutingProvider
from livechatkit.store.base import ConversationStore
from livechatkit.store.memory import InMemoryStore

__all__ = [
    "DependencyFailureError",
    "InvalidDepartmentError",
    "InvalidInputError",
    "InvalidTransferDataError",
    "InvalidUserError",
    "InvalidUserRoleError",
    "InvalidVisitorError",
    "Livechat",
    "LivechatError",
    "NotAllowedError",
    "NotFoundError",
    "PreconditionFailedError",
    "ReturnToQueueFailedError",
    "RoomClosedError",
    "RoomNotFoundError",
    "RoomOnHoldError",
    "RoomRemovalError",
]

logger = logging.getLogger("livechatkit.framework")


class Livechat:
    """Transfers, queue returns and agent availability for live support."""

    def __init__(
        self,
        routing: RoutingProvider,
        store: ConversationStore | None = None,
        directory: Directory | None = None,
        departments: DepartmentStore | None = None,
        business_hours: BusinessHoursPolicy | None = None,
        access: AccessPolicy | None = None,
        bus: NotificationBus | None = None,
        settings: LivechatSettings | None = None,
    ) -> None:
        """Initialise the livechat core.

        Args:
            routing: Performs the actual agent (re)assignment.
            store: Rooms, inquiries, visitors and transcripts. Defaults to
                ``InMemoryStore``.
            directory: Users, roles and livechat status. Defaults to
                ``InMemoryDirectory``.
            departments: Departments and membership. Defaults to
                ``InMemoryDepartmentStore`` over *directory*.
            business_hours: Gate for agents becoming available. Defaults to
                ``AlwaysOpenPolicy``.
            access: Gate for acting on a room. Defaults to
                ``AllowAllAccessPolicy``.
            bus: Outbound notifications. Defaults to
                ``InMemoryNotificationBus``.
            settings: Runtime settings, read at call time.
        """
        self._settings = settings or LivechatSettings()
        self._store = store or InMemoryStore()
        self._directory = directory or InMemoryDirectory()
        self._departments = departments or InMemoryDepartmentStore(self._directory)
        self._routing = routing
        self._bus = bus or InMemoryNotificationBus()
        self._hooks = HookEngine(default_timeout=self._settings.hook_timeout)
        self._notifier = Notifier(self._bus)

        self._availability = AvailabilityResolver(
            self._directory, self._departments, self._settings
        )
        self._history = TransferHistoryRecorder(self._store)
        self._transfers = TransferCoordinator(
            self._store,
            self._directory,
            self._departments,
            self._routing,
            self._history,
            self._hooks,
        )
        self._agents = AgentStatusCoordinator(
            self._store,
            self._directory,
            self._departments,
            business_hours or AlwaysOpenPolicy(),
            self._hooks,
            self._notifier,
            self._settings,
        )
        self._rooms = RoomCoordinator(
            self._store, self._directory, access or AllowAllAccessPolicy(), self._notifier
        )

    # -- Collaborators -----------------------------------------------------------

    @property
    def settings(self) -> LivechatSettings:
        return self._settings

    @property
    def store(self) -> ConversationStore:
        return self._store

    @property
    def directory(self) -> Directory:
        return self._directory

    @property
    def departments(self) -> DepartmentStore:
        return self._departments

    @property
    def bus(self) -> NotificationBus:
        return self._bus

    @property
    def hooks(self) -> HookEngine:
        return self._hooks

    # -- Hooks -------------------------------------------------------------------

    def hook(
        self, trigger: LifecycleHook, *, name: str = "", priority: int = 0
    ) -> Callable[[HookFn], HookFn]:
        """Decorator registering a fire-and-forget lifecycle hook."""
        return self._hooks.on(trigger, name=name, priority=priority)

    def add_hook(self, hook: HookRegistration) -> None:
        self._hooks.register(hook)

    # -- Rooms -------------------------------------------------------------------

    async def get_room(self, room_id: str) -> Room:
        """Get a room by ID. Raises RoomNotFoundError if missing."""
        room = await self._store.get_room(room_id)
        if room is None:
            raise RoomNotFoundError(f"Room {room_id} not found")
        return room

    async def get_visitor(self, visitor_id: str) -> Visitor:
        """Get an enabled visitor. Raises InvalidVisitorError if missing or disabled."""
        visitor = await self._store.get_enabled_visitor(visitor_id)
        if visitor is None:
            raise InvalidVisitorError(f"Visitor {visitor_id} not found")
        return visitor

    async def remove_room(self, room_id: str) -> None:
        await self._rooms.remove_room(room_id)

    async def change_room_visitor(self, user_id: str, room: Room, visitor: Visitor) -> Room | None:
        return await self._rooms.change_room_visitor(user_id, room, visitor)

    async def notify_guest_status_changed(self, token: str, status: UserPresence) -> None:
        await self._rooms.notify_guest_status_changed(token, status)

    # -- Availability ------------------------------------------------------------

    async def online(
        self,
        department_id: str | None = None,
        *,
        skip_no_agent_setting: bool = False,
        skip_fallback: bool = False,
    ) -> bool:
        return await self._availability.online(
            department_id,
            skip_no_agent_setting=skip_no_agent_setting,
            skip_fallback=skip_fallback,
        )

    async def is_online(
        self,
        department_id: str | None = None,
        agent_id: str | None = None,
        *,
        skip_fallback: bool = False,
    ) -> bool:
        return await self._availability.is_online(
            department_id, agent_id, skip_fallback=skip_fallback
        )

    # -- Transfers ---------------------------------------------------------------

    async def transfer(self, room: Room, visitor: Visitor, transfer_data: TransferData) -> Any:
        return await self._transfers.transfer(room, visitor, transfer_data)

    async def forward_open_chats(self, agent_id: str) -> None:
        await self._transfers.forward_open_chats(agent_id)

    async def return_room_as_inquiry(
        self,
        room: Room,
        department_id: str | None = None,
        overrides: dict[str, Any] | None = None,
    ) -> bool:
        return await self._transfers.return_room_as_inquiry(room, department_id, overrides)

    async def save_transfer_history(
        self, room: Room, transfer_data: TransferData
    ) -> TranscriptMessage:
        """Record a transfer performed elsewhere (e.g. by the routing provider)."""
        return await self._history.record(room, transfer_data)

    # -- Agents ------------------------------------------------------------------

    async def set_agent_status(self, agent_id: str, status: AgentStatus) -> UpdateResult:
        return await self._agents.set_status(agent_id, status)

    async def set_agent_status_if(
        self,
        agent_id: str,
        status: AgentStatus,
        condition: Mapping[str, Any] | None = None,
        fields: Mapping[str, Any] | None = None,
    ) -> UpdateResult:
        return await self._agents.set_status_if(agent_id, status, condition, fields)

    async def notify_agent_status_changed(
        self, agent_id: str, status: UserPresence | None = None
    ) -> None:
        await self._agents.notify_agent_status_changed(agent_id, status)

    async def allow_agent_status_change(self, agent_id: str, status: AgentStatus) -> bool:
        return await self._agents.allow_status_change(agent_id, status)

    async def on_agent_activated(self, user: Agent) -> None:
        await self._agents.on_agent_activated(user)

    async def on_agent_added(self, user: Agent) -> Agent:
        return await self._agents.on_agent_added(user)

    async def add_agent(self, username: str) -> Agent | bool:
        return await self._agents.add_agent(username)

    async def remove_agent(self, username: str) -> bool:
        return await self._agents.remove_agent(username)

    async def add_manager(self, username: str) -> Agent | bool:
        return await self._agents.add_manager(username)

    async def remove_manager(self, username: str) -> bool:
        return await self._agents.remove_manager(username)

    async def save_agent_info(
        self, agent_id: str, agent_data: Mapping[str, Any], department_ids: list[str]
    ) -> bool:
        return await self._agents.save_agent_info(agent_id, agent_data, department_ids)

    # -- Shutdown ----------------------------------------------------------------

    async def drain(self) -> None:
        """Wait for pending hooks and notifications to be delivered."""
        await self._hooks.drain()
        await self._notifier.drain()

    async def close(self) -> None:
        """Deliver what is pending, then release background resources."""
        await self.drain()
        await self._hooks.close()
        await self._bus.close()
        logger.debug("Livechat closed")
