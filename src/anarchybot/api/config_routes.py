# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Connection profile routes."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, Response
from pydantic import ValidationError

from anarchybot.api.params import InvalidInput, parse_profile_id, read_json
from anarchybot.errors import ProfileNotFoundError
from anarchybot.logging import get_logger
from anarchybot.storage.config_store import BotProfileInput

if TYPE_CHECKING:
    from anarchybot.storage.config_store import ConfigStore

logger = get_logger(__name__)


async def _parse_profile(request: Request) -> BotProfileInput | None:
    try:
        body = await read_json(request)
        if body is None:
            raise InvalidInput("Body is empty")
        return BotProfileInput.model_validate(body)
    except (InvalidInput, ValidationError) as e:
        logger.info("invalid_profile", error=str(e))
        return None


def create_router(config_store: ConfigStore) -> APIRouter:
    router = APIRouter(prefix="/api")

    @router.get("/config")
    async def get_config(request: Request):
        try:
            profile_id = parse_profile_id(request.query_params.get("id"))
        except InvalidInput as e:
            return JSONResponse({"message": str(e)}, status_code=400)
        if profile_id is None:
            return config_store.ensure_default().to_api()
        profile = config_store.get_config(profile_id)
        if profile is None:
            return JSONResponse({"message": f"Profile not found: {profile_id}"}, status_code=404)
        return profile.to_api()

    @router.post("/config")
    async def update_config(request: Request):
        data = await _parse_profile(request)
        if data is None:
            return JSONResponse({"message": "Invalid config"}, status_code=400)
        try:
            return config_store.update_config(data).to_api()
        except ProfileNotFoundError as e:
            return JSONResponse({"message": str(e)}, status_code=404)

    @router.get("/configs")
    async def list_configs():
        return [profile.to_api() for profile in config_store.list_configs()]

    @router.post("/configs")
    async def create_config(request: Request):
        data = await _parse_profile(request)
        if data is None:
            return JSONResponse({"message": "Invalid config"}, status_code=400)
        return JSONResponse(config_store.create_config(data).to_api(), status_code=201)

    @router.delete("/config/{profile_id}")
    async def delete_config(profile_id: str):
        try:
            parsed_id = parse_profile_id(profile_id)
        except InvalidInput as e:
            return JSONResponse({"message": str(e)}, status_code=400)
        try:
            config_store.delete_config(parsed_id)
        except ProfileNotFoundError as e:
            return JSONResponse({"message": str(e)}, status_code=404)
        return Response(status_code=204)

    return router
