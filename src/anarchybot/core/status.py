# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Status snapshot of the running bot."""

from __future__ import annotations

import math

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from anarchybot.constants import MAX_FOOD, MAX_HEALTH


class Position(BaseModel):
    """World coordinate of the bot or another entity."""

    x: float
    y: float
    z: float

    model_config = ConfigDict(frozen=True)

    def distance_to(self, other: Position) -> float:
        return math.dist((self.x, self.y, self.z), (other.x, other.y, other.z))


class StatusSnapshot(BaseModel):
    """Last-known bot state as exposed by GET /api/bot/status.

    Instances are immutable. The bot manager replaces the whole snapshot with
    ``model_copy(update=...)`` so a reader never sees half of an update.
    """

    online: bool = False
    health: float = Field(default=MAX_HEALTH, ge=0, le=MAX_HEALTH)
    food: float = Field(default=MAX_FOOD, ge=0, le=MAX_FOOD)
    position: Position | None = None
    nearby_players: int = Field(default=0, ge=0)
    inventory_full: bool = False

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    def to_api(self) -> dict:
        return self.model_dump(by_alias=True)
