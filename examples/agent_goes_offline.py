"""Forwarding an agent's chats when they go offline.

Demonstrates the availability and transfer flow. Shows:
- AvailabilityResolver following a department's fallback chain
- set_agent_status notifying the agent's own channel
- forward_open_chats handing every open room to the routing provider

Run with:
    uv run python examples/agent_goes_offline.py
"""

from __future__ import annotations

import asyncio
import logging

from livechatkit import (
    Agent,
    AgentStatus,
    Department,
    InMemoryDepartmentStore,
    InMemoryDirectory,
    InMemoryStore,
    Livechat,
    MockRoutingProvider,
    Role,
    Room,
    ServedBy,
    UserPresence,
    Visitor,
    VisitorRef,
)


async def main() -> None:
    logging.basicConfig(level=logging.INFO)

    directory = InMemoryDirectory(
        [
            Agent(
                id="alice",
                username="alice",
                roles=[Role.LIVECHAT_AGENT],
                status=UserPresence.ONLINE,
                status_livechat=AgentStatus.AVAILABLE,
            )
        ]
    )
    departments = InMemoryDepartmentStore(
        directory,
        [
            Department(id="sales", name="Sales", fallback_forward_department="support"),
            Department(id="support", name="Support"),
        ],
    )
    await departments.add_agent("support", "alice")
    store = InMemoryStore()
    routing = MockRoutingProvider()
    livechat = Livechat(routing, store=store, directory=directory, departments=departments)

    # Nobody is in Sales, but its fallback has Alice
    print(f"Sales online: {await livechat.is_online('sales')}")
    direct = await livechat.is_online("sales", skip_fallback=True)
    print(f"Sales online without fallback: {direct}")

    for i in range(3):
        visitor = Visitor(id=f"guest-{i}", token=f"tok-{i}", department="support")
        await store.add_visitor(visitor)
        await store.create_room(
            Room(
                id=f"room-{i}",
                visitor=VisitorRef(id=visitor.id, token=visitor.token),
                served_by=ServedBy(id="alice", username="alice"),
            )
        )

    await livechat.set_agent_status("alice", AgentStatus.NOT_AVAILABLE)
    print(f"Sales online after Alice left: {await livechat.is_online('sales')}")

    await livechat.forward_open_chats("alice")
    for room, _, data in routing.transfers:
        print(f"  Forwarded {room.id} to department {data.department_id}")

    await livechat.close()


if __name__ == "__main__":
    asyncio.run(main())
