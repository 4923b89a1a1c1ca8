# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Bot session lifecycle and state tracking.

Only leaf modules are re-exported here; ``anarchybot.transport`` imports
``anarchybot.core.events``, so the manager is imported from
``anarchybot.core.bot_manager`` directly.
"""

from __future__ import annotations

from anarchybot.core.status import Position, StatusSnapshot
from anarchybot.core.threat import ThreatScanner

__all__ = ["Position", "StatusSnapshot", "ThreatScanner"]
