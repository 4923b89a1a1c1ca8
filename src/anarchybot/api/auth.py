# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""API token guard for the control routes."""

from __future__ import annotations

import hmac

from fastapi import Header, HTTPException

from anarchybot.logging import get_logger

logger = get_logger(__name__)


def token_guard(api_token: str | None):
    """Build a dependency that checks ``Authorization: Bearer`` or ``X-API-Key``.

    With no token configured every request is allowed.
    """

    async def _guard(
        authorization: str | None = Header(default=None),
        x_api_key: str | None = Header(default=None),
    ) -> None:
        if not api_token:
            return
        presented = x_api_key
        if authorization and authorization.lower().startswith("bearer "):
            presented = authorization[7:].strip()
        if presented and hmac.compare_digest(presented, api_token):
            return
        logger.info("api_auth_rejected")
        raise HTTPException(status_code=401, detail="Unauthorized")

    return _guard
