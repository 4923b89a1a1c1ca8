# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Bot log API routes."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter
from fastapi.responses import Response

from anarchybot.constants import LOG_PAGE_SIZE

if TYPE_CHECKING:
    from anarchybot.storage.log_store import LogStore


def create_router(log_store: LogStore) -> APIRouter:
    router = APIRouter(prefix="/api")

    @router.get("/logs")
    async def get_logs(limit: int = LOG_PAGE_SIZE):
        """Newest entries first."""
        return [entry.model_dump(mode="json") for entry in log_store.get_logs(min(limit, LOG_PAGE_SIZE))]

    @router.delete("/logs")
    async def clear_logs():
        log_store.clear()
        return Response(status_code=204)

    return router
