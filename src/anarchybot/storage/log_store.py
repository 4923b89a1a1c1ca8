# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Operator-facing bot log.

The dashboard shows these entries; they are separate from the structlog
diagnostics, although every entry is mirrored there as well.
"""

from __future__ import annotations

import itertools
import time
from collections import deque
from enum import Enum
from typing import Protocol

from pydantic import BaseModel

from anarchybot.constants import DEFAULT_LOG_CAPACITY, LOG_PAGE_SIZE
from anarchybot.logging import get_logger

logger = get_logger(__name__)


class LogKind(str, Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CHAT = "chat"


class LogEntry(BaseModel):
    id: int
    type: LogKind
    message: str
    timestamp: str


class LogSink(Protocol):
    """Append-only destination for operator log entries."""

    def add_log(self, kind: LogKind, message: str) -> None: ...


_MIRROR_LEVELS = {
    LogKind.INFO: "info",
    LogKind.WARNING: "warning",
    LogKind.ERROR: "error",
    LogKind.CHAT: "info",
}


class LogStore:
    """In-memory log sink capped at ``capacity`` entries (oldest dropped)."""

    def __init__(self, capacity: int = DEFAULT_LOG_CAPACITY) -> None:
        self._entries: deque[LogEntry] = deque(maxlen=capacity)
        self._ids = itertools.count(1)

    def add_log(self, kind: LogKind | str, message: str) -> None:
        kind = LogKind(kind)
        entry = LogEntry(
            id=next(self._ids),
            type=kind,
            message=message,
            timestamp=time.strftime("%H:%M:%S"),
        )
        self._entries.append(entry)
        getattr(logger, _MIRROR_LEVELS[kind])("bot_log", kind=kind.value, message=message)

    def get_logs(self, limit: int = LOG_PAGE_SIZE) -> list[LogEntry]:
        """Return up to ``limit`` entries, newest first."""
        if limit <= 0:
            return []
        return list(itertools.islice(reversed(self._entries), limit))

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
