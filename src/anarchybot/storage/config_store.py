# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Persistent connection profiles.

Profiles are kept in a single JSON file and written atomically through a
temporary file.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from anarchybot.constants import DEFAULT_JAVA_VERSION, DEFAULT_SERVER_PORT, PROFILE_BEDROCK_VERSION
from anarchybot.errors import ConfigStoreError, ProfileNotFoundError
from anarchybot.logging import get_logger

logger = get_logger(__name__)

AuthType = Literal["offline", "microsoft", "bedrock"]


class SessionConfig(BaseModel):
    """Everything needed to open one protocol session."""

    host: str
    port: int
    username: str
    version: str | None = None
    auth: AuthType = "offline"
    use_bedrock: bool = False

    model_config = ConfigDict(frozen=True)


class BotProfileInput(BaseModel):
    """Profile fields accepted from the dashboard."""

    id: int | None = None
    name: str = "Default Profile"
    server_ip: str = Field(default="localhost", min_length=1)
    server_port: int = Field(default=DEFAULT_SERVER_PORT, ge=1, le=65535)
    username: str = Field(default="AnarchyBot", min_length=1, max_length=16)
    auth_type: AuthType = "offline"
    version: str | None = None
    is_bedrock: bool = False
    # Stored for the dashboard; the bot does not act on these.
    master_name: str = ""
    is_auto_farm: bool = False
    is_auto_defense: bool = False
    is_auto_trade: bool = False

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class BotProfile(BotProfileInput):
    id: int

    def to_session_config(self) -> SessionConfig:
        version = self.version or (PROFILE_BEDROCK_VERSION if self.is_bedrock else DEFAULT_JAVA_VERSION)
        return SessionConfig(
            host=self.server_ip,
            port=self.server_port,
            username=self.username,
            version=version,
            auth="bedrock" if self.is_bedrock else self.auth_type,
            use_bedrock=self.is_bedrock,
        )

    def to_api(self) -> dict:
        return self.model_dump(by_alias=True)


class ConfigStore:
    """JSON-backed store for bot profiles."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def _load(self) -> list[BotProfile]:
        if not self.path.exists():
            return []
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            return [BotProfile.model_validate(item) for item in data.get("profiles", [])]
        except (OSError, ValueError, ValidationError) as e:
            raise ConfigStoreError(f"Failed to read profiles from {self.path}: {e}") from e

    def _save(self, profiles: list[BotProfile]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = {"profiles": [p.model_dump(mode="json", by_alias=True) for p in profiles]}
        tmp = self.path.with_suffix(".tmp")
        tmp.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        tmp.replace(self.path)

    def list_configs(self) -> list[BotProfile]:
        return self._load()

    def get_config(self, profile_id: int | None = None) -> BotProfile | None:
        """Return the profile with ``profile_id``, or the first profile when omitted."""
        profiles = self._load()
        if profile_id is None:
            return profiles[0] if profiles else None
        return next((p for p in profiles if p.id == profile_id), None)

    def ensure_default(self) -> BotProfile:
        """Return the default profile, creating one when the store is empty."""
        profile = self.get_config()
        if profile is None:
            profile = self.update_config(BotProfileInput())
            logger.info("default_profile_created", profile_id=profile.id)
        return profile

    def update_config(self, data: BotProfileInput) -> BotProfile:
        """Create or update a profile.

        Without an id the default (first) profile is updated, or created when
        none exists.

        Raises:
            ProfileNotFoundError: If ``data.id`` does not exist
        """
        profiles = self._load()
        target_id = data.id
        if target_id is None and profiles:
            target_id = profiles[0].id

        fields = data.model_dump(exclude={"id"})
        if target_id is None:
            profile = BotProfile(id=1, **fields)
            profiles.append(profile)
        else:
            index = next((i for i, p in enumerate(profiles) if p.id == target_id), None)
            if index is None:
                raise ProfileNotFoundError(target_id)
            profile = BotProfile(id=target_id, **fields)
            profiles[index] = profile

        self._save(profiles)
        return profile

    def create_config(self, data: BotProfileInput) -> BotProfile:
        profiles = self._load()
        next_id = max((p.id for p in profiles), default=0) + 1
        profile = BotProfile(id=next_id, **data.model_dump(exclude={"id"}))
        profiles.append(profile)
        self._save(profiles)
        return profile

    def delete_config(self, profile_id: int) -> None:
        profiles = self._load()
        remaining = [p for p in profiles if p.id != profile_id]
        if len(remaining) == len(profiles):
            raise ProfileNotFoundError(profile_id)
        self._save(remaining)
