# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Bedrock edition adapter backed by bedrock-protocol.

The Bedrock client exposes no health, food, position or entity stream here,
so those status fields keep their defaults and auto-eat never runs.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any

from anarchybot.constants import DEFAULT_BEDROCK_VERSION
from anarchybot.core.events import ChatReceived, SessionEnded, SessionEstablished, SessionRejected, TransportError
from anarchybot.logging import get_logger
from anarchybot.transport.base import Emit, ProtocolAdapter, Variant

if TYPE_CHECKING:
    from anarchybot.storage.config_store import SessionConfig

logger = get_logger(__name__)

OFFLINE_AUTH_MODES = ("offline", "bedrock")


class BedrockAdapter(ProtocolAdapter):
    """bedrock-protocol ``Client`` as a session handle."""

    variant = Variant.BEDROCK
    label = "Bedrock"

    async def connect(self, config: SessionConfig) -> Any:
        return await asyncio.to_thread(self._create_client, config)

    def _create_client(self, config: SessionConfig) -> Any:
        bedrock = self._bridge.require("bedrock-protocol")
        return bedrock.createClient(
            {
                "host": config.host,
                "port": config.port,
                "username": config.username,
                "offline": config.auth in OFFLINE_AUTH_MODES,
                "version": config.version or DEFAULT_BEDROCK_VERSION,
                "skipPing": True,
            }
        )

    def bind(self, handle: Any, emit: Emit) -> None:
        client = handle
        on = self._bridge.on

        def on_join(this: Any, *args: Any) -> None:
            emit(SessionEstablished())

        def on_close(this: Any, *args: Any) -> None:
            emit(SessionEnded(reason="connection closed"))

        def on_kick(this: Any, packet: Any = None, *args: Any) -> None:
            reason = getattr(packet, "message", None) if packet is not None else None
            emit(SessionRejected(reason=str(reason or "")))

        def on_error(this: Any, err: Any = None, *args: Any) -> None:
            message = getattr(err, "message", None)
            emit(TransportError(message=str(message if message else err)))

        def on_text(this: Any, packet: Any = None, *args: Any) -> None:
            if packet is None:
                return
            emit(
                ChatReceived(
                    speaker=str(getattr(packet, "source_name", "") or ""),
                    text=str(getattr(packet, "message", "") or ""),
                )
            )

        # The server waits for these answers before sending the world; an
        # unanswered offer leaves the login hanging.
        def on_resource_packs_info(this: Any, *args: Any) -> None:
            logger.debug("bedrock_resource_packs_accepted", stage="info")
            client.queue("resource_pack_client_response", {"response_status": "have_all_packs", "resourcepack_ids": []})

        def on_resource_pack_stack(this: Any, *args: Any) -> None:
            logger.debug("bedrock_resource_packs_accepted", stage="stack")
            client.queue("resource_pack_client_response", {"response_status": "completed", "resourcepack_ids": []})

        on(client, "join", on_join)
        on(client, "close", on_close)
        on(client, "kick", on_kick)
        on(client, "error", on_error)
        on(client, "text", on_text)
        on(client, "resource_packs_info", on_resource_packs_info)
        on(client, "resource_pack_stack", on_resource_pack_stack)

    async def disconnect(self, handle: Any) -> None:
        await asyncio.to_thread(handle.disconnect)

    async def send_chat(self, handle: Any, text: str) -> None:
        packet = {
            "type": "chat",
            "needs_translation": False,
            "source_name": "",
            "xuid": "",
            "platform_chat_id": "",
            "message": text,
        }
        await asyncio.to_thread(handle.queue, "text", packet)
