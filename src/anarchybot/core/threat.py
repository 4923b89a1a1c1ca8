# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Proximity check over nearby players."""

from __future__ import annotations

from typing import TYPE_CHECKING

from anarchybot.constants import THREAT_RADIUS

if TYPE_CHECKING:
    from collections.abc import Iterable

    from anarchybot.core.events import PlayerSighting
    from anarchybot.core.status import Position


class ThreatScanner:
    """Counts other players inside a fixed radius of the bot."""

    def __init__(self, radius: float = THREAT_RADIUS) -> None:
        self.radius = radius

    def count(
        self,
        origin: Position | None,
        players: Iterable[PlayerSighting],
        self_name: str | None = None,
    ) -> int:
        """Count players strictly closer than ``radius`` to ``origin``.

        Args:
            origin: Bot position (None means nothing can be counted)
            players: Players known to the client
            self_name: The bot's own username, excluded from the count

        Returns:
            Number of nearby players
        """
        if origin is None:
            return 0
        return sum(
            1
            for player in players
            if player.name != self_name
            and player.position is not None
            and player.position.distance_to(origin) < self.radius
        )
