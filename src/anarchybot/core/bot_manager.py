# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Lifecycle of the single bot session.

The manager owns at most one protocol session handle. Adapters report what
happens on the wire as canonical events; those are queued onto the event loop
and applied one at a time by a dispatcher task, which is the only writer of
the status snapshot.
"""

from __future__ import annotations

import asyncio
import contextlib
from enum import Enum
from typing import TYPE_CHECKING, Any

from anarchybot.constants import AUTO_EAT_INTERVAL_S, THREAT_RADIUS
from anarchybot.core.auto_eat import AutoEatController
from anarchybot.core.events import (
    TERMINAL_EVENTS,
    BotEvent,
    ChatReceived,
    HealthUpdated,
    InventoryUpdated,
    PositionUpdated,
    ProximityTick,
    SessionEnded,
    SessionEstablished,
    SessionRejected,
    TransportError,
)
from anarchybot.core.status import StatusSnapshot
from anarchybot.core.threat import ThreatScanner
from anarchybot.logging import get_logger
from anarchybot.storage.log_store import LogKind
from anarchybot.transport.base import Variant
from anarchybot.transport.bedrock import BedrockAdapter
from anarchybot.transport.bridge import JsBridge
from anarchybot.transport.java import JavaAdapter

if TYPE_CHECKING:
    from collections.abc import Mapping

    from anarchybot.settings import Settings
    from anarchybot.storage.config_store import SessionConfig
    from anarchybot.storage.log_store import LogSink
    from anarchybot.transport.base import ProtocolAdapter

logger = get_logger(__name__)


class StartResult(str, Enum):
    STARTED = "started"
    ALREADY_RUNNING = "already_running"
    FAILED = "failed"


class BotManager:
    """Starts, stops and observes one bot connection."""

    def __init__(
        self,
        log_sink: LogSink,
        adapters: Mapping[Variant, ProtocolAdapter] | None = None,
        *,
        auto_eat_interval_s: float = AUTO_EAT_INTERVAL_S,
        threat_radius: float = THREAT_RADIUS,
    ) -> None:
        self._log_sink = log_sink
        self._adapters: dict[Variant, ProtocolAdapter] = dict(adapters or default_adapters())
        self._scanner = ThreatScanner(threat_radius)
        self._auto_eat = AutoEatController(log_sink, interval_s=auto_eat_interval_s)

        self._status = StatusSnapshot()
        self._handle: Any = None
        self._adapter: ProtocolAdapter | None = None
        self._config: SessionConfig | None = None
        # Bumped whenever a session is torn down; events tagged with an older
        # generation are dropped.
        self._generation = 0
        self._last_error: str | None = None

        self._lock = asyncio.Lock()
        self._events: asyncio.Queue[tuple[int, BotEvent]] = asyncio.Queue()
        self._dispatcher: asyncio.Task[None] | None = None

    @classmethod
    def from_settings(cls, settings: Settings, log_sink: LogSink) -> BotManager:
        return cls(
            log_sink,
            default_adapters(java_auth_passthrough=settings.java_auth_passthrough),
            auto_eat_interval_s=settings.auto_eat_interval_s,
            threat_radius=settings.threat_radius,
        )

    @property
    def running(self) -> bool:
        return self._handle is not None

    @property
    def variant(self) -> Variant | None:
        return self._adapter.variant if self._adapter else None

    @property
    def last_error(self) -> str | None:
        return self._last_error

    def get_status(self) -> StatusSnapshot:
        return self._status

    def start_dispatcher(self) -> None:
        """Start the event dispatcher on the running loop (idempotent)."""
        if self._dispatcher is None or self._dispatcher.done():
            self._dispatcher = asyncio.create_task(self._dispatch_loop())

    async def start(self, config: SessionConfig) -> StartResult:
        """Open a session unless one already exists.

        Never raises; a construction failure is reported through the log sink
        and the return value.
        """
        async with self._lock:
            if self._handle is not None:
                logger.info("bot_start_ignored", reason="already_running")
                return StartResult.ALREADY_RUNNING

            self.start_dispatcher()
            variant = Variant.BEDROCK if config.use_bedrock else Variant.JAVA
            adapter = self._adapters[variant]
            self._adapter = adapter
            self._config = config
            self._last_error = None

            self._log_sink.add_log(
                LogKind.INFO,
                f"Connecting to {config.host}:{config.port} as {config.username} ({adapter.label})...",
            )

            generation = self._generation
            handle = None
            try:
                handle = await adapter.connect(config)
                adapter.bind(handle, self._make_emit(asyncio.get_running_loop(), generation))
            except Exception as e:
                self._last_error = str(e)
                self._log_sink.add_log(LogKind.ERROR, f"Failed to start bot: {e}")
                logger.error("bot_start_failed", variant=variant.value, error=str(e))
                if handle is not None:
                    await self._safe_disconnect(adapter, handle)
                self._generation += 1
                return StartResult.FAILED

            self._handle = handle
            self._auto_eat.on_connect(adapter, handle)
            logger.info(
                "bot_started",
                host=config.host,
                port=config.port,
                username=config.username,
                variant=variant.value,
            )
            return StartResult.STARTED

    async def stop(self) -> None:
        """Tear down the session, if any. Safe to call at any time."""
        async with self._lock:
            await self._auto_eat.on_disconnect()
            if self._handle is None:
                return

            adapter, handle = self._adapter, self._handle
            self._release()
            self._status = self._status.model_copy(update={"online": False, "position": None})
            if adapter is not None:
                await self._safe_disconnect(adapter, handle)
            self._log_sink.add_log(LogKind.INFO, "Bot disconnected manually.")
            logger.info("bot_stopped")

    async def chat(self, message: str) -> bool:
        """Send chat as the bot. Returns False (and does nothing) when offline."""
        if self._handle is None or self._adapter is None:
            return False
        try:
            await self._adapter.send_chat(self._handle, message)
        except Exception as e:
            self._log_sink.add_log(LogKind.ERROR, f"Failed to send chat: {e}")
            logger.warning("bot_chat_failed", error=str(e))
            return False
        self._log_sink.add_log(LogKind.CHAT, f"> {message}")
        return True

    async def flush(self) -> None:
        """Wait until every event emitted so far has been applied."""
        # Let call_soon_threadsafe callbacks land in the queue first.
        await asyncio.sleep(0)
        await self._events.join()

    async def close(self) -> None:
        """Stop the bot and the dispatcher."""
        await self.stop()
        task = self._dispatcher
        self._dispatcher = None
        if task and not task.done():
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task

    def _make_emit(self, loop: asyncio.AbstractEventLoop, generation: int):

        def emit(event: BotEvent) -> None:
            # Adapters may call this from the JS bridge thread.
            loop.call_soon_threadsafe(self._events.put_nowait, (generation, event))

        return emit

    def _release(self) -> None:
        self._handle = None
        self._generation += 1

    async def _safe_disconnect(self, adapter: ProtocolAdapter, handle: Any) -> None:
        try:
            await adapter.disconnect(handle)
        except Exception as e:
            logger.warning("bot_disconnect_failed", variant=adapter.variant.value, error=str(e))

    async def _dispatch_loop(self) -> None:
        while True:
            generation, event = await self._events.get()
            try:
                if generation != self._generation:
                    logger.debug("stale_event_dropped", event_type=type(event).__name__)
                    continue
                await self._apply(event, generation)
            except Exception as e:
                logger.error("event_apply_failed", event_type=type(event).__name__, error=str(e))
            finally:
                self._events.task_done()

    async def _apply(self, event: BotEvent, generation: int) -> None:
        label = self._adapter.label if self._adapter else "Bot"

        if isinstance(event, SessionEstablished):
            self._status = self._status.model_copy(update={"online": True})
            self._log_sink.add_log(LogKind.INFO, f"{label} bot joined the server.")
        elif isinstance(event, TERMINAL_EVENTS):
            await self._end_session(event, label, generation)
        elif isinstance(event, ChatReceived):
            if self._config is not None and event.speaker == self._config.username:
                return
            line = f"<{event.speaker}> {event.text}" if event.speaker else event.text
            self._log_sink.add_log(LogKind.CHAT, line)
        elif isinstance(event, HealthUpdated):
            self._status = self._status.model_copy(update={"health": event.health, "food": event.food})
        elif isinstance(event, PositionUpdated):
            self._status = self._status.model_copy(update={"position": event.to_position()})
        elif isinstance(event, InventoryUpdated):
            self._status = self._status.model_copy(update={"inventory_full": event.full})
        elif isinstance(event, ProximityTick):
            self_name = self._config.username if self._config else None
            nearby = self._scanner.count(event.origin, event.players, self_name)
            if nearby != self._status.nearby_players:
                self._status = self._status.model_copy(update={"nearby_players": nearby})
        else:
            logger.warning("unknown_event", event_type=type(event).__name__)

    async def _end_session(self, event: BotEvent, label: str, generation: int) -> None:
        # Position is deliberately kept; only stop() clears it.
        self._status = self._status.model_copy(update={"online": False})
        if isinstance(event, SessionEnded):
            self._log_sink.add_log(LogKind.WARNING, f"{label} bot disconnected: {event.reason}")
        elif isinstance(event, SessionRejected):
            self._last_error = event.reason
            self._log_sink.add_log(LogKind.ERROR, f"{label} bot was kicked: {event.reason}")
        elif isinstance(event, TransportError):
            self._last_error = event.message
            self._log_sink.add_log(LogKind.ERROR, f"{label} connection error: {event.message}")

        async with self._lock:
            adapter, handle = self._adapter, self._handle
            # A stop() or a newer session may have won the lock first.
            if handle is None or generation != self._generation:
                return
            await self._auto_eat.on_disconnect()
            self._release()
            if adapter is not None:
                await self._safe_disconnect(adapter, handle)
        logger.info("bot_session_ended", event_type=type(event).__name__)


def default_adapters(*, java_auth_passthrough: bool = False) -> dict[Variant, ProtocolAdapter]:
    """One adapter per variant sharing a single JS bridge."""
    bridge = JsBridge()
    return {
        Variant.JAVA: JavaAdapter(bridge, auth_passthrough=java_auth_passthrough),
        Variant.BEDROCK: BedrockAdapter(bridge),
    }
