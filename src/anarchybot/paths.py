# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Filesystem paths for persisted data."""

from __future__ import annotations

import os
from pathlib import Path

from platformdirs import user_data_dir

ENV_DATA_DIR = "ANARCHYBOT_DATA_DIR"


def default_data_dir() -> Path:
    """Get the default data directory."""
    env_root = os.getenv(ENV_DATA_DIR)
    if env_root:
        return Path(env_root)
    return Path(user_data_dir("anarchybot", "anarchybot"))


def ensure_data_dir(data_dir: Path) -> Path:
    """Create the data directory if needed and return it."""
    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir
