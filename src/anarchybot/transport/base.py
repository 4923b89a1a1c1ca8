# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Abstract base class for game protocol adapters."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from enum import Enum
from typing import TYPE_CHECKING, Any

from anarchybot.transport.bridge import JsBridge

if TYPE_CHECKING:
    from anarchybot.core.events import BotEvent
    from anarchybot.storage.config_store import SessionConfig

Emit = Callable[["BotEvent"], None]


class Variant(str, Enum):
    JAVA = "java"
    BEDROCK = "bedrock"


class ProtocolAdapter(ABC):
    """Binds one protocol family to the canonical event vocabulary.

    An adapter is stateless with respect to sessions: every call receives the
    handle returned by :meth:`connect`.
    """

    variant: Variant
    label: str

    def __init__(self, bridge: JsBridge | None = None) -> None:
        self._bridge = bridge if bridge is not None else JsBridge()

    @abstractmethod
    async def connect(self, config: SessionConfig) -> Any:
        """Construct the protocol client.

        Returns once the client object exists; login completes later and is
        reported through events.

        Args:
            config: Session configuration

        Returns:
            Opaque session handle
        """

    @abstractmethod
    def bind(self, handle: Any, emit: Emit) -> None:
        """Register protocol callbacks that translate into canonical events.

        Args:
            handle: Session handle from :meth:`connect`
            emit: Thread-safe sink for canonical events
        """

    @abstractmethod
    async def disconnect(self, handle: Any) -> None:
        """Close the session."""

    @abstractmethod
    async def send_chat(self, handle: Any, text: str) -> None:
        """Send a chat message as the bot."""

    async def food_level(self, handle: Any) -> float | None:
        """Current food level, or None when the protocol does not report it."""
        return None

    async def held_items(self, handle: Any) -> list[Any]:
        return []

    def item_name(self, item: Any) -> str:
        return str(getattr(item, "name", "") or "")

    async def eat(self, handle: Any, item: Any) -> None:
        raise NotImplementedError(f"{self.label} adapter cannot consume items")
