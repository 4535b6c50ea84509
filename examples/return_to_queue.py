"""Returning a room to the queue, and what happens when it fails.

Demonstrates:
- return_room_as_inquiry recording a transfer history entry
- Lifecycle hooks running after the caller has moved on
- ReturnToQueueFailedError reporting how far the operation got

Run with:
    uv run python examples/return_to_queue.py
"""

from __future__ import annotations

import asyncio
from typing import Any

from livechatkit import (
    Agent,
    InMemoryDirectory,
    Inquiry,
    LifecycleHook,
    Livechat,
    MockRoutingProvider,
    ReturnToQueueFailedError,
    Role,
    Room,
    ServedBy,
    VisitorRef,
)


async def seed(livechat: Livechat, room_id: str) -> Room:
    room = Room(
        id=room_id,
        visitor=VisitorRef(id="guest", token="tok"),
        served_by=ServedBy(id="bob", username="bob"),
    )
    await livechat.store.create_room(room)
    await livechat.store.create_inquiry(Inquiry(room_id=room.id, visitor=room.visitor))
    return room


async def main() -> None:
    routing = MockRoutingProvider()
    directory = InMemoryDirectory(
        [Agent(id="bob", username="bob", name="Bob", roles=[Role.LIVECHAT_AGENT])]
    )
    livechat = Livechat(routing, directory=directory)

    @livechat.hook(LifecycleHook.AFTER_RETURN_ROOM_AS_INQUIRY)
    async def announce(payload: dict[str, Any]) -> None:
        print(f"  [hook] room {payload['room'].id} is back in the queue")

    room = await seed(livechat, "room-ok")
    print(f"Returned: {await livechat.return_room_as_inquiry(room)}")
    await livechat.drain()

    for message in await livechat.store.list_messages(room.id):
        record = message.transfer_data
        assert record is not None
        print(f"  History: {record.transferred_by.username} -> {record.scope}")

    # The routing provider fails after the history entry is written
    routing.unassign_error = ConnectionError("routing service unreachable")
    room = await seed(livechat, "room-broken")
    try:
        await livechat.return_room_as_inquiry(room)
    except ReturnToQueueFailedError as exc:
        print(f"Failed ({exc.code}), stopped at stage: {exc.saga.stage}")
        print(f"  History recorded anyway: {exc.saga.history_recorded}")

    await livechat.close()


if __name__ == "__main__":
    asyncio.run(main())
