"""Tests for AvailabilityResolver."""

from __future__ import annotations

import logging

import pytest

from livechatkit.config import LivechatSettings
from livechatkit.core.availability import AvailabilityResolver
from livechatkit.departments.memory import InMemoryDepartmentStore
from livechatkit.directory.memory import InMemoryDirectory
from livechatkit.models.department import Department
from livechatkit.models.enums import AgentStatus, UserPresence
from tests.conftest import make_agent


@pytest.fixture
def resolver(
    directory: InMemoryDirectory,
    departments: InMemoryDepartmentStore,
    settings: LivechatSettings,
) -> AvailabilityResolver:
    return AvailabilityResolver(directory, departments, settings)


async def _department(
    departments: InMemoryDepartmentStore,
    dep_id: str,
    *,
    fallback: str | None = None,
    agents: tuple[str, ...] = (),
) -> None:
    await departments.add_department(
        Department(id=dep_id, name=dep_id.upper(), fallback_forward_department=fallback)
    )
    for agent_id in agents:
        await departments.add_agent(dep_id, agent_id)


class TestIsOnlineGlobal:
    async def test_no_agents(self, resolver: AvailabilityResolver) -> None:
        assert await resolver.is_online() is False

    async def test_available_online_agent(
        self, resolver: AvailabilityResolver, directory: InMemoryDirectory
    ) -> None:
        await directory.add_user(make_agent("a1"))
        assert await resolver.is_online() is True

    async def test_not_available_agent_is_offline(
        self, resolver: AvailabilityResolver, directory: InMemoryDirectory
    ) -> None:
        await directory.add_user(make_agent("a1", status_livechat=AgentStatus.NOT_AVAILABLE))
        assert await resolver.is_online() is False

    async def test_idle_agent_counts_only_when_enabled(
        self,
        resolver: AvailabilityResolver,
        directory: InMemoryDirectory,
        settings: LivechatSettings,
    ) -> None:
        await directory.add_user(make_agent("a1", presence=UserPresence.AWAY))
        assert await resolver.is_online() is False

        settings.enabled_when_agent_idle = True
        assert await resolver.is_online() is True


class TestIsOnlineAgentHint:
    async def test_agent_hint_ignores_department(
        self,
        resolver: AvailabilityResolver,
        directory: InMemoryDirectory,
        departments: InMemoryDepartmentStore,
    ) -> None:
        await directory.add_user(make_agent("a1"))
        await _department(departments, "dep-empty")

        assert await resolver.is_online("dep-empty", agent_id="a1") is True

    async def test_agent_hint_offline(
        self, resolver: AvailabilityResolver, directory: InMemoryDirectory
    ) -> None:
        await directory.add_user(make_agent("a1", presence=UserPresence.OFFLINE))
        await directory.add_user(make_agent("a2"))

        assert await resolver.is_online(agent_id="a1") is False

    async def test_unknown_agent(self, resolver: AvailabilityResolver) -> None:
        assert await resolver.is_online(agent_id="ghost") is False


class TestIsOnlineDepartment:
    async def test_department_with_online_agent(
        self,
        resolver: AvailabilityResolver,
        directory: InMemoryDirectory,
        departments: InMemoryDepartmentStore,
    ) -> None:
        await directory.add_user(make_agent("a1"))
        await _department(departments, "dep-a", agents=("a1",))

        assert await resolver.is_online("dep-a") is True

    async def test_agent_outside_department_does_not_count(
        self,
        resolver: AvailabilityResolver,
        directory: InMemoryDirectory,
        departments: InMemoryDepartmentStore,
    ) -> None:
        await directory.add_user(make_agent("a1"))
        await _department(departments, "dep-a")

        assert await resolver.is_online("dep-a") is False

    async def test_falls_back_to_fallback_department(
        self,
        resolver: AvailabilityResolver,
        directory: InMemoryDirectory,
        departments: InMemoryDepartmentStore,
    ) -> None:
        await directory.add_user(make_agent("a1"))
        await _department(departments, "dep-a", fallback="dep-b")
        await _department(departments, "dep-b", agents=("a1",))

        assert await resolver.is_online("dep-a") is True

    async def test_fallback_chain_is_transitive(
        self,
        resolver: AvailabilityResolver,
        directory: InMemoryDirectory,
        departments: InMemoryDepartmentStore,
    ) -> None:
        await directory.add_user(make_agent("a1"))
        await _department(departments, "dep-a", fallback="dep-b")
        await _department(departments, "dep-b", fallback="dep-c")
        await _department(departments, "dep-c", agents=("a1",))

        assert await resolver.is_online("dep-a") is True

    async def test_skip_fallback(
        self,
        resolver: AvailabilityResolver,
        directory: InMemoryDirectory,
        departments: InMemoryDepartmentStore,
    ) -> None:
        await directory.add_user(make_agent("a1"))
        await _department(departments, "dep-a", fallback="dep-b")
        await _department(departments, "dep-b", agents=("a1",))

        assert await resolver.is_online("dep-a", skip_fallback=True) is False

    async def test_no_fallback_configured(
        self, resolver: AvailabilityResolver, departments: InMemoryDepartmentStore
    ) -> None:
        await _department(departments, "dep-a")
        assert await resolver.is_online("dep-a") is False

    async def test_unknown_department(self, resolver: AvailabilityResolver) -> None:
        assert await resolver.is_online("nope") is False

    async def test_idle_department_agent_counts_only_when_enabled(
        self,
        resolver: AvailabilityResolver,
        directory: InMemoryDirectory,
        departments: InMemoryDepartmentStore,
        settings: LivechatSettings,
    ) -> None:
        await directory.add_user(make_agent("a1", presence=UserPresence.BUSY))
        await _department(departments, "dep-a", agents=("a1",))
        assert await resolver.is_online("dep-a") is False

        settings.enabled_when_agent_idle = True
        assert await resolver.is_online("dep-a") is True

    async def test_self_loop_after_first_hop_terminates(
        self,
        resolver: AvailabilityResolver,
        departments: InMemoryDepartmentStore,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        # A -> B -> B
        await _department(departments, "dep-a", fallback="dep-b")
        await _department(departments, "dep-b", fallback="dep-b")

        with caplog.at_level(logging.WARNING, logger="livechatkit.availability"):
            assert await resolver.is_online("dep-a") is False
        assert "cycle" in caplog.text

    async def test_two_department_cycle_terminates(
        self, resolver: AvailabilityResolver, departments: InMemoryDepartmentStore
    ) -> None:
        await _department(departments, "dep-a", fallback="dep-b")
        await _department(departments, "dep-b", fallback="dep-a")

        assert await resolver.is_online("dep-a") is False

    async def test_cycle_with_online_agent_on_the_way(
        self,
        resolver: AvailabilityResolver,
        directory: InMemoryDirectory,
        departments: InMemoryDepartmentStore,
    ) -> None:
        await directory.add_user(make_agent("a1"))
        await _department(departments, "dep-a", fallback="dep-b")
        await _department(departments, "dep-b", fallback="dep-a", agents=("a1",))

        assert await resolver.is_online("dep-a") is True


class TestOnline:
    async def test_accept_without_agents(
        self, resolver: AvailabilityResolver, settings: LivechatSettings
    ) -> None:
        settings.accept_chats_with_no_agents = True
        assert await resolver.online() is True

    async def test_skip_no_agent_setting(
        self, resolver: AvailabilityResolver, settings: LivechatSettings
    ) -> None:
        settings.accept_chats_with_no_agents = True
        assert await resolver.online(skip_no_agent_setting=True) is False

    async def test_bot_in_department(
        self,
        resolver: AvailabilityResolver,
        directory: InMemoryDirectory,
        departments: InMemoryDepartmentStore,
        settings: LivechatSettings,
    ) -> None:
        settings.assign_new_conversation_to_bot = True
        await directory.add_user(make_agent("bot-1", bot=True, presence=UserPresence.OFFLINE))
        await _department(departments, "dep-a", agents=("bot-1",))

        assert await resolver.online("dep-a") is True

    async def test_bot_ignored_when_bot_assignment_disabled(
        self,
        resolver: AvailabilityResolver,
        directory: InMemoryDirectory,
        departments: InMemoryDepartmentStore,
    ) -> None:
        await directory.add_user(make_agent("bot-1", bot=True, presence=UserPresence.OFFLINE))
        await _department(departments, "dep-a", agents=("bot-1",))

        assert await resolver.online("dep-a") is False

    async def test_global_bot(
        self,
        resolver: AvailabilityResolver,
        directory: InMemoryDirectory,
        settings: LivechatSettings,
    ) -> None:
        settings.assign_new_conversation_to_bot = True
        await directory.add_user(make_agent("bot-1", bot=True, presence=UserPresence.OFFLINE))

        assert await resolver.online() is True

    async def test_delegates_to_agent_check(
        self,
        resolver: AvailabilityResolver,
        directory: InMemoryDirectory,
        departments: InMemoryDepartmentStore,
    ) -> None:
        await directory.add_user(make_agent("a1"))
        await _department(departments, "dep-a", fallback="dep-b")
        await _department(departments, "dep-b", agents=("a1",))

        assert await resolver.online("dep-a") is True
        assert await resolver.online("dep-a", skip_fallback=True) is False
