# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Hand parsing of request input so bad values answer 400, not FastAPI's 422."""

from __future__ import annotations

from typing import Any

from fastapi import Request


class InvalidInput(ValueError):
    """Raised when a query value or body cannot be parsed."""


def parse_profile_id(raw: str | None) -> int | None:
    """Parse a profile id from a query or path value (empty means none)."""
    if raw is None or raw == "":
        return None
    try:
        return int(raw)
    except ValueError:
        raise InvalidInput(f"Invalid profile id: {raw!r}") from None


async def read_json(request: Request) -> Any:
    """Return the decoded JSON body, or None when the body is empty."""
    body = await request.body()
    if not body.strip():
        return None
    try:
        return await request.json()
    except ValueError as e:
        raise InvalidInput("Body is not valid JSON") from e
