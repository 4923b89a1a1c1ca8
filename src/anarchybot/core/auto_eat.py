# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Periodic low-food auto-eat for Java sessions."""

from __future__ import annotations

import asyncio
import contextlib
from typing import TYPE_CHECKING, Any

from anarchybot.constants import AUTO_EAT_FOOD_THRESHOLD, AUTO_EAT_INTERVAL_S, EDIBLE_KEYWORDS
from anarchybot.logging import get_logger
from anarchybot.storage.log_store import LogKind
from anarchybot.transport.base import Variant

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from anarchybot.storage.log_store import LogSink
    from anarchybot.transport.base import ProtocolAdapter

logger = get_logger(__name__)


def is_edible(name: str) -> bool:
    lowered = name.lower()
    return any(keyword in lowered for keyword in EDIBLE_KEYWORDS)


def pick_food(items: Iterable[Any], name_of: Callable[[Any], str]) -> Any | None:
    """Return the first item whose name matches the edible allow-list."""
    for item in items:
        if is_edible(name_of(item)):
            return item
    return None


class AutoEatController:
    """Runs one eat check every ``interval_s`` while a session is attached."""

    def __init__(self, log_sink: LogSink, interval_s: float = AUTO_EAT_INTERVAL_S) -> None:
        self._log_sink = log_sink
        self._interval_s = interval_s
        self._adapter: ProtocolAdapter | None = None
        self._handle: Any = None
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def on_connect(self, adapter: ProtocolAdapter, handle: Any) -> None:
        self._adapter = adapter
        self._handle = handle
        if self.running:
            return
        self._task = asyncio.create_task(self._loop())

    async def on_disconnect(self) -> None:
        self._adapter = None
        self._handle = None
        task = self._task
        self._task = None
        if task and not task.done():
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task

    async def tick(self) -> str | None:
        """Run a single eat check.

        Returns:
            Name of the item eaten, or None when nothing was eaten
        """
        adapter, handle = self._adapter, self._handle
        if adapter is None or handle is None or adapter.variant is Variant.BEDROCK:
            return None

        food = await adapter.food_level(handle)
        if food is None or food > AUTO_EAT_FOOD_THRESHOLD:
            return None

        item = pick_food(await adapter.held_items(handle), adapter.item_name)
        if item is None:
            return None

        name = adapter.item_name(item)
        try:
            await adapter.eat(handle, item)
        except Exception as e:
            # Best effort: the next tick tries again.
            logger.debug("auto_eat_failed", item=name, error=str(e))
            return None

        self._log_sink.add_log(LogKind.INFO, f"Eating {name}...")
        return name

    async def _loop(self) -> None:
        try:
            while True:
                await asyncio.sleep(self._interval_s)
                try:
                    await self.tick()
                except Exception as e:
                    logger.warning("auto_eat_tick_failed", error=str(e))
        except asyncio.CancelledError:
            return
