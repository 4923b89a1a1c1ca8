# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Canonical bot events.

Protocol adapters translate library callbacks into these and hand them to the
bot manager, which is the only code that turns them into status changes and
log entries.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from anarchybot.core.status import Position


@dataclass(frozen=True)
class BotEvent:
    """Base class for canonical events."""


@dataclass(frozen=True)
class SessionEstablished(BotEvent):
    """The client joined/spawned on the server."""


@dataclass(frozen=True)
class SessionEnded(BotEvent):
    """The connection was closed."""

    reason: str = ""


@dataclass(frozen=True)
class SessionRejected(BotEvent):
    """The server kicked or refused the client."""

    reason: str = ""


@dataclass(frozen=True)
class TransportError(BotEvent):
    """The underlying client reported an error."""

    message: str = ""


@dataclass(frozen=True)
class ChatReceived(BotEvent):
    speaker: str
    text: str


@dataclass(frozen=True)
class HealthUpdated(BotEvent):
    health: float
    food: float


@dataclass(frozen=True)
class PositionUpdated(BotEvent):
    x: float
    y: float
    z: float

    def to_position(self) -> Position:
        return Position(x=self.x, y=self.y, z=self.z)


@dataclass(frozen=True)
class InventoryUpdated(BotEvent):
    full: bool


@dataclass(frozen=True)
class PlayerSighting:
    """A known player and its position, if the client has resolved one."""

    name: str
    position: Position | None = None


@dataclass(frozen=True)
class ProximityTick(BotEvent):
    """Physics tick carrying the bot's position and the players it knows about."""

    origin: Position | None
    players: tuple[PlayerSighting, ...] = field(default_factory=tuple)


TERMINAL_EVENTS = (SessionEnded, SessionRejected, TransportError)
