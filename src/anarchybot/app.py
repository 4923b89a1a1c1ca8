# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""FastAPI application wiring the bot manager, stores and routes."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

import uvicorn
from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from anarchybot.api import bot_routes, config_routes, log_routes
from anarchybot.api.auth import token_guard
from anarchybot.core.bot_manager import BotManager
from anarchybot.errors import ConfigStoreError
from anarchybot.logging import configure_logging, get_logger
from anarchybot.paths import ensure_data_dir
from anarchybot.settings import Settings
from anarchybot.storage.config_store import ConfigStore
from anarchybot.storage.log_store import LogStore

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

logger = get_logger(__name__)


def create_app(
    settings: Settings | None = None,
    *,
    bot_manager: BotManager | None = None,
    config_store: ConfigStore | None = None,
    log_store: LogStore | None = None,
) -> FastAPI:
    """Create and configure the FastAPI app.

    Collaborators default to the ones described by ``settings``; tests pass
    their own.
    """
    if settings is None:
        settings = Settings()
    if log_store is None:
        log_store = LogStore(settings.log_capacity)
    if config_store is None:
        config_store = ConfigStore(settings.profiles_path)
    manager = bot_manager if bot_manager is not None else BotManager.from_settings(settings, log_store)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        manager.start_dispatcher()
        try:
            yield
        finally:
            await manager.close()

    app = FastAPI(title="AnarchyBot", lifespan=lifespan)
    app.state.bot_manager = manager
    app.state.config_store = config_store
    app.state.log_store = log_store

    guard = [Depends(token_guard(settings.api_token))]
    app.include_router(bot_routes.create_router(manager, config_store), dependencies=guard)
    app.include_router(config_routes.create_router(config_store), dependencies=guard)
    app.include_router(log_routes.create_router(log_store), dependencies=guard)

    @app.get("/api/health")
    async def health_check():
        return {"status": "ok"}

    @app.exception_handler(HTTPException)
    async def http_error(request: Request, exc: HTTPException):
        return JSONResponse({"message": exc.detail}, status_code=exc.status_code, headers=exc.headers)

    @app.exception_handler(ConfigStoreError)
    async def config_store_error(request: Request, exc: ConfigStoreError):
        logger.error("config_store_error", path=request.url.path, error=str(exc))
        return JSONResponse({"message": str(exc)}, status_code=500)

    return app


async def serve(settings: Settings | None = None) -> None:
    """Run the API server until interrupted."""
    settings = settings or Settings()
    ensure_data_dir(settings.data_dir)
    app = create_app(settings)

    logger.info("server_starting", host=settings.host, port=settings.port, data_dir=str(settings.data_dir))
    config = uvicorn.Config(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
    server = uvicorn.Server(config)
    await server.serve()


__all__ = ["create_app", "serve"]


if __name__ == "__main__":
    import asyncio

    _settings = Settings()
    configure_logging(_settings)
    asyncio.run(serve(_settings))
