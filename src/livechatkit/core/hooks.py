"""Hook engine: an outbound queue of lifecycle events.

``fire()`` only enqueues. A dispatcher task pops each event and runs every
subscriber in its own task with a timeout, so subscriber latency or failure
never reaches the coordinator that fired the event.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Callable, Coroutine
from dataclasses import dataclass
from typing import Any

from livechatkit.models.enums import LifecycleHook

logger = logging.getLogger("livechatkit.hooks")

HookFn = Callable[[dict[str, Any]], Coroutine[Any, Any, None]]
_Event = tuple[LifecycleHook, dict[str, Any]]


@dataclass
class HookRegistration:
    """A registered hook function.

    Attributes:
        trigger: The lifecycle event the hook subscribes to.
        fn: The hook function, called with the event payload.
        priority: Lower numbers are scheduled first (default: 0)
        name: Optional name for logging and removal
        timeout: Max execution time in seconds. ``None`` uses the engine default.
    """

    trigger: LifecycleHook
    fn: HookFn
    priority: int = 0
    name: str = ""
    timeout: float | None = None


class HookEngine:
    """Manages lifecycle hook registration and fire-and-forget delivery."""

    def __init__(self, default_timeout: float = 30.0) -> None:
        self._hooks: list[HookRegistration] = []
        self._default_timeout = default_timeout
        self._outbox: asyncio.Queue[_Event] | None = None
        self._loop: asyncio.AbstractEventLoop | None = None
        self._dispatcher: asyncio.Task[None] | None = None
        self._inflight: set[asyncio.Task[None]] = set()

    def register(self, hook: HookRegistration) -> None:
        """Register a hook."""
        self._hooks.append(hook)

    def on(
        self, trigger: LifecycleHook, *, name: str = "", priority: int = 0
    ) -> Callable[[HookFn], HookFn]:
        """Decorator form of :meth:`register`."""

        def decorator(fn: HookFn) -> HookFn:
            self.register(
                HookRegistration(
                    trigger=trigger, fn=fn, priority=priority, name=name or fn.__name__
                )
            )
            return fn

        return decorator

    def unregister(self, name: str) -> bool:
        """Remove a hook by name."""
        for i, h in enumerate(self._hooks):
            if h.name == name:
                self._hooks.pop(i)
                return True
        return False

    def _get_hooks(self, trigger: LifecycleHook) -> list[HookRegistration]:
        hooks = [h for h in self._hooks if h.trigger == trigger]
        hooks.sort(key=lambda h: h.priority)
        return hooks

    def fire(self, trigger: LifecycleHook, payload: dict[str, Any]) -> None:
        """Enqueue *trigger* for delivery and return immediately.

        Must be called from a running event loop. The queue and dispatcher
        belong to that loop; firing from a new loop starts a fresh pair.
        """
        loop = asyncio.get_running_loop()
        if self._outbox is None or self._loop is not loop:
            self._outbox = asyncio.Queue()
            self._loop = loop
            self._dispatcher = None
            self._inflight = set()
        self._outbox.put_nowait((trigger, payload))
        if self._dispatcher is None or self._dispatcher.done():
            self._dispatcher = loop.create_task(self._dispatch(self._outbox))

    async def _dispatch(self, outbox: asyncio.Queue[_Event]) -> None:
        while True:
            trigger, payload = await outbox.get()
            try:
                for hook in self._get_hooks(trigger):
                    task = asyncio.create_task(self._run_one(hook, trigger, payload))
                    self._inflight.add(task)
                    task.add_done_callback(self._inflight.discard)
            finally:
                outbox.task_done()

    async def _run_one(
        self, hook: HookRegistration, trigger: LifecycleHook, payload: dict[str, Any]
    ) -> None:
        timeout = hook.timeout if hook.timeout is not None else self._default_timeout
        try:
            await asyncio.wait_for(hook.fn(payload), timeout=timeout)
        except TimeoutError:
            logger.warning(
                "Hook %s timed out after %.1fs",
                hook.name,
                timeout,
                extra={"trigger": str(trigger)},
            )
        except Exception:
            logger.exception("Hook %s failed", hook.name, extra={"trigger": str(trigger)})

    async def drain(self) -> None:
        """Wait until every fired event has been delivered to its hooks."""
        if self._outbox is None or self._loop is not asyncio.get_running_loop():
            return
        while True:
            await self._outbox.join()
            if not self._inflight:
                return
            await asyncio.gather(*self._inflight, return_exceptions=True)

    async def close(self) -> None:
        """Deliver what is pending, then stop the dispatcher."""
        await self.drain()
        if self._dispatcher is not None and self._loop is asyncio.get_running_loop():
            self._dispatcher.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._dispatcher
            self._dispatcher = None

    @property
    def pending(self) -> int:
        """Events queued or hooks still running."""
        queued = self._outbox.qsize() if self._outbox is not None else 0
        return queued + len(self._inflight)
