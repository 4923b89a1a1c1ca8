# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Java edition adapter backed by mineflayer."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any

from anarchybot.constants import DEFAULT_JAVA_VERSION
from anarchybot.core.events import (
    ChatReceived,
    HealthUpdated,
    InventoryUpdated,
    PlayerSighting,
    PositionUpdated,
    ProximityTick,
    SessionEnded,
    SessionEstablished,
    SessionRejected,
    TransportError,
)
from anarchybot.core.status import Position
from anarchybot.logging import get_logger
from anarchybot.transport.base import Emit, ProtocolAdapter, Variant

if TYPE_CHECKING:
    from anarchybot.storage.config_store import SessionConfig
    from anarchybot.transport.bridge import JsBridge

logger = get_logger(__name__)


def _position(entity: Any) -> Position | None:
    if entity is None:
        return None
    pos = getattr(entity, "position", None)
    if pos is None:
        return None
    return Position(x=float(pos.x), y=float(pos.y), z=float(pos.z))


def _error_message(err: Any) -> str:
    message = getattr(err, "message", None)
    return str(message if message else err)


class JavaAdapter(ProtocolAdapter):
    """mineflayer ``Bot`` as a session handle."""

    variant = Variant.JAVA
    label = "Java"

    def __init__(self, bridge: JsBridge | None = None, *, auth_passthrough: bool = False) -> None:
        super().__init__(bridge)
        self._auth_passthrough = auth_passthrough

    def resolve_auth(self, configured: str) -> str:
        """Auth mode actually handed to mineflayer.

        The profile keeps whatever the operator chose; the client is forced to
        offline mode unless passthrough is enabled.
        """
        if self._auth_passthrough:
            return configured
        if configured != "offline":
            logger.warning("java_auth_forced_offline", configured=configured)
        return "offline"

    async def connect(self, config: SessionConfig) -> Any:
        return await asyncio.to_thread(self._create_bot, config)

    def _create_bot(self, config: SessionConfig) -> Any:
        mineflayer = self._bridge.require("mineflayer")
        return mineflayer.createBot(
            {
                "host": config.host,
                "port": config.port,
                "username": config.username,
                "version": config.version or DEFAULT_JAVA_VERSION,
                "auth": self.resolve_auth(config.auth),
            }
        )

    def bind(self, handle: Any, emit: Emit) -> None:
        bot = handle
        on = self._bridge.on

        def on_spawn(this: Any, *args: Any) -> None:
            emit(SessionEstablished())

        def on_end(this: Any, reason: Any = None, *args: Any) -> None:
            emit(SessionEnded(reason=str(reason or "")))

        def on_kicked(this: Any, reason: Any = None, *args: Any) -> None:
            emit(SessionRejected(reason=str(reason or "")))

        def on_error(this: Any, err: Any = None, *args: Any) -> None:
            emit(TransportError(message=_error_message(err)))

        # Self is the live client name, which differs from the profile
        # username under online auth.
        def on_chat(this: Any, username: Any, message: Any, *args: Any) -> None:
            if username and username == bot.username:
                return
            emit(ChatReceived(speaker=str(username or ""), text=str(message or "")))

        def on_health(this: Any, *args: Any) -> None:
            emit(HealthUpdated(health=float(bot.health or 0), food=float(bot.food or 0)))

        def on_move(this: Any, *args: Any) -> None:
            pos = _position(bot.entity)
            if pos is not None:
                emit(PositionUpdated(x=pos.x, y=pos.y, z=pos.z))

        def on_physics_tick(this: Any, *args: Any) -> None:
            origin = _position(bot.entity)
            if origin is None:
                return
            players = tuple(
                PlayerSighting(name=str(player.username), position=_position(player.entity))
                for player in self._bridge.values(bot.players)
                if player.username != bot.username
            )
            emit(ProximityTick(origin=origin, players=players))

        def on_update_slot(this: Any, *args: Any) -> None:
            emit(InventoryUpdated(full=int(bot.inventory.emptySlotCount()) == 0))

        on(bot, "spawn", on_spawn)
        on(bot, "end", on_end)
        on(bot, "kicked", on_kicked)
        on(bot, "error", on_error)
        on(bot, "chat", on_chat)
        on(bot, "health", on_health)
        on(bot, "move", on_move)
        on(bot, "physicsTick", on_physics_tick)
        on(bot.inventory, "updateSlot", on_update_slot)

    async def disconnect(self, handle: Any) -> None:
        await asyncio.to_thread(handle.quit)

    async def send_chat(self, handle: Any, text: str) -> None:
        await asyncio.to_thread(handle.chat, text)

    async def food_level(self, handle: Any) -> float | None:
        food = await asyncio.to_thread(lambda: handle.food)
        return None if food is None else float(food)

    async def held_items(self, handle: Any) -> list[Any]:
        return await asyncio.to_thread(lambda: list(handle.inventory.items()))

    async def eat(self, handle: Any, item: Any) -> None:
        def _equip_and_consume() -> None:
            handle.equip(item, "hand")
            handle.consume()

        await asyncio.to_thread(_equip_and_consume)
