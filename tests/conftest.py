# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Pytest configuration and fixtures."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from fakes import FakeAdapter

from anarchybot.core.bot_manager import BotManager
from anarchybot.storage.config_store import ConfigStore, SessionConfig
from anarchybot.storage.log_store import LogStore
from anarchybot.transport.base import Variant

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture
def log_store() -> LogStore:
    return LogStore(capacity=100)


@pytest.fixture
def java_adapter() -> FakeAdapter:
    return FakeAdapter()


@pytest.fixture
def bedrock_adapter() -> FakeAdapter:
    return FakeAdapter(Variant.BEDROCK, "Bedrock")


@pytest.fixture
def manager(log_store: LogStore, java_adapter: FakeAdapter, bedrock_adapter: FakeAdapter) -> BotManager:
    return BotManager(
        log_store,
        {Variant.JAVA: java_adapter, Variant.BEDROCK: bedrock_adapter},
        auto_eat_interval_s=3600,
    )


@pytest.fixture
def java_config() -> SessionConfig:
    return SessionConfig(host="mc.example.org", port=25565, username="AnarchyBot", version="1.20.1")


@pytest.fixture
def bedrock_config() -> SessionConfig:
    return SessionConfig(
        host="be.example.org",
        port=19132,
        username="AnarchyBot",
        version="1.21.30",
        auth="bedrock",
        use_bedrock=True,
    )


@pytest.fixture
def config_store(tmp_path: Path) -> ConfigStore:
    return ConfigStore(tmp_path / "profiles.json")


