"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from livechatkit.config import LivechatSettings
from livechatkit.core._helpers import Notifier
from livechatkit.core.framework import Livechat
from livechatkit.core.hooks import HookEngine
from livechatkit.departments.memory import InMemoryDepartmentStore
from livechatkit.directory.memory import InMemoryDirectory
from livechatkit.models.agent import Agent
from livechatkit.models.enums import AgentStatus, Role, UserPresence
from livechatkit.models.inquiry import Inquiry
from livechatkit.models.room import Room, ServedBy, VisitorRef
from livechatkit.models.visitor import Visitor
from livechatkit.notify.mock import MockNotificationBus
from livechatkit.routing.mock import MockRoutingProvider
from livechatkit.store.memory import InMemoryStore


@pytest.fixture
def settings() -> LivechatSettings:
    return LivechatSettings()


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def directory() -> InMemoryDirectory:
    return InMemoryDirectory()


@pytest.fixture
def departments(directory: InMemoryDirectory) -> InMemoryDepartmentStore:
    return InMemoryDepartmentStore(directory)


@pytest.fixture
def routing() -> MockRoutingProvider:
    return MockRoutingProvider()


@pytest.fixture
def bus() -> MockNotificationBus:
    return MockNotificationBus()


@pytest.fixture
def hooks() -> HookEngine:
    return HookEngine(default_timeout=1.0)


@pytest.fixture
def notifier(bus: MockNotificationBus) -> Notifier:
    return Notifier(bus)


@pytest.fixture
def livechat(
    routing: MockRoutingProvider,
    store: InMemoryStore,
    directory: InMemoryDirectory,
    departments: InMemoryDepartmentStore,
    bus: MockNotificationBus,
    settings: LivechatSettings,
) -> Livechat:
    return Livechat(
        routing,
        store=store,
        directory=directory,
        departments=departments,
        bus=bus,
        settings=settings,
    )


def make_agent(
    agent_id: str = "agent-a",
    username: str | None = None,
    *,
    presence: UserPresence = UserPresence.ONLINE,
    status_livechat: AgentStatus | None = AgentStatus.AVAILABLE,
    roles: list[str] | None = None,
    **kwargs: object,
) -> Agent:
    return Agent(
        id=agent_id,
        username=username or agent_id.replace("-", "."),
        name=f"Agent {agent_id}",
        roles=[Role.LIVECHAT_AGENT] if roles is None else roles,
        status=presence,
        status_livechat=status_livechat,
        **kwargs,  # type: ignore[arg-type]
    )


def make_visitor(
    visitor_id: str = "visitor-1",
    *,
    department: str | None = None,
    enabled: bool = True,
) -> Visitor:
    return Visitor(
        id=visitor_id,
        token=f"token-{visitor_id}",
        username=f"guest-{visitor_id}",
        department=department,
        enabled=enabled,
    )


def make_room(
    room_id: str = "room-1",
    *,
    served_by: str | None = "agent-a",
    visitor_id: str = "visitor-1",
    open: bool = True,
    on_hold: bool = False,
    department_id: str | None = None,
) -> Room:
    return Room(
        id=room_id,
        visitor=VisitorRef(id=visitor_id, token=f"token-{visitor_id}"),
        open=open,
        on_hold=on_hold,
        served_by=(
            ServedBy(id=served_by, username=served_by.replace("-", "."))
            if served_by
            else None
        ),
        department_id=department_id,
    )


def make_inquiry(room: Room, inquiry_id: str | None = None) -> Inquiry:
    return Inquiry(
        id=inquiry_id or f"inq-{room.id}",
        room_id=room.id,
        visitor=room.visitor,
        department_id=room.department_id,
    )
