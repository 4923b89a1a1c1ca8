# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Exceptions raised by anarchybot."""

from __future__ import annotations


class AnarchyBotError(Exception):
    """Base class for anarchybot errors."""


class ConfigStoreError(AnarchyBotError):
    """Raised when the profile store cannot be read or written."""


class ProfileNotFoundError(ConfigStoreError):
    """Raised when a profile id does not exist."""

    def __init__(self, profile_id: int) -> None:
        super().__init__(f"Profile not found: {profile_id}")
        self.profile_id = profile_id


class AdapterError(AnarchyBotError):
    """Raised when a protocol client library cannot be loaded."""
