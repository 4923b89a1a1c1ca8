# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Profile and log storage."""

from __future__ import annotations

from anarchybot.storage.config_store import BotProfile, ConfigStore, SessionConfig
from anarchybot.storage.log_store import LogEntry, LogKind, LogSink, LogStore

__all__ = ["BotProfile", "ConfigStore", "LogEntry", "LogKind", "LogSink", "LogStore", "SessionConfig"]
