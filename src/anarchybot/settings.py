# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Application settings."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from anarchybot.constants import AUTO_EAT_INTERVAL_S, DEFAULT_LOG_CAPACITY, THREAT_RADIUS
from anarchybot.defaults import SERVER_HOST, SERVER_PORT
from anarchybot.paths import default_data_dir


class Settings(BaseSettings):
    data_dir: Path = Field(default_factory=default_data_dir)
    log_level: str = "INFO"
    log_format: Literal["console", "json"] = "console"
    host: str = SERVER_HOST
    port: int = SERVER_PORT
    api_token: str | None = None
    log_capacity: int = Field(default=DEFAULT_LOG_CAPACITY, ge=1)
    auto_eat_interval_s: float = Field(default=AUTO_EAT_INTERVAL_S, gt=0)
    threat_radius: float = Field(default=THREAT_RADIUS, gt=0)
    # mineflayer is always handed auth="offline" unless this is enabled
    java_auth_passthrough: bool = False

    model_config = SettingsConfigDict(
        env_prefix="ANARCHYBOT_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    @property
    def profiles_path(self) -> Path:
        return self.data_dir / "profiles.json"
