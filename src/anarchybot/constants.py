# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Shared constants for anarchybot."""

from __future__ import annotations

# Protocol defaults
DEFAULT_JAVA_VERSION = "1.20.1"
DEFAULT_BEDROCK_VERSION = "1.21.30"
# Version used when a Bedrock profile leaves the version blank
PROFILE_BEDROCK_VERSION = "1.19.50"
DEFAULT_SERVER_PORT = 25565

# Vitals are reported on a 0-20 scale
MAX_HEALTH = 20.0
MAX_FOOD = 20.0

# Auto-eat
AUTO_EAT_INTERVAL_S = 5.0
AUTO_EAT_FOOD_THRESHOLD = 14
EDIBLE_KEYWORDS = ("apple", "bread", "beef", "chicken", "porkchop", "carrot")

# Threat scanner
THREAT_RADIUS = 30.0

# Log store
DEFAULT_LOG_CAPACITY = 500
LOG_PAGE_SIZE = 100
