# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Bot control API routes.

Start, stop, chat and status for the single bot managed by BotManager.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationError

from anarchybot.api.params import InvalidInput, parse_profile_id, read_json
from anarchybot.core.bot_manager import StartResult
from anarchybot.errors import ConfigStoreError
from anarchybot.logging import get_logger

if TYPE_CHECKING:
    from anarchybot.core.bot_manager import BotManager
    from anarchybot.storage.config_store import ConfigStore

logger = get_logger(__name__)


class ChatRequest(BaseModel):
    message: str | None = None


def create_router(manager: BotManager, config_store: ConfigStore) -> APIRouter:
    router = APIRouter(prefix="/api/bot")

    @router.get("/status")
    async def status():
        return manager.get_status().to_api()

    @router.post("/start")
    async def start(request: Request):
        try:
            profile_id = parse_profile_id(request.query_params.get("id"))
        except InvalidInput as e:
            return JSONResponse({"message": str(e)}, status_code=400)
        try:
            profile = config_store.get_config(profile_id)
        except ConfigStoreError as e:
            logger.error("profile_load_failed", profile_id=profile_id, error=str(e))
            return JSONResponse({"message": str(e)}, status_code=400)
        if profile is None:
            return JSONResponse({"message": "No configuration found"}, status_code=400)

        result = await manager.start(profile.to_session_config())
        if result is StartResult.FAILED:
            return JSONResponse(
                {"message": f"Failed to start bot: {manager.last_error}"},
                status_code=400,
            )
        if result is StartResult.ALREADY_RUNNING:
            return {"message": "Bot already running"}
        return {"message": "Bot starting..."}

    @router.post("/stop")
    async def stop():
        await manager.stop()
        return {"message": "Bot stopped"}

    @router.post("/chat")
    async def chat(request: Request):
        try:
            body = await read_json(request)
            message = ChatRequest.model_validate(body or {}).message
        except (InvalidInput, ValidationError) as e:
            logger.info("invalid_chat_request", error=str(e))
            return JSONResponse({"success": False}, status_code=400)
        if not message:
            return JSONResponse({"success": False}, status_code=400)
        await manager.chat(message)
        return {"success": True}

    return router
