# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Tests for the auto-eat controller."""

from __future__ import annotations

from types import SimpleNamespace

import pytest
from fakes import FakeAdapter, FakeHandle, messages

from anarchybot.core.auto_eat import AutoEatController, is_edible, pick_food
from anarchybot.transport.base import Variant


def _item(name: str) -> SimpleNamespace:
    return SimpleNamespace(name=name)


@pytest.fixture
def controller(log_store) -> AutoEatController:
    return AutoEatController(log_store, interval_s=3600)


def test_edible_match_is_case_insensitive_substring() -> None:
    assert is_edible("cooked_beef")
    assert is_edible("Golden_Apple")
    assert is_edible("baked_potato") is False
    assert is_edible("diamond_sword") is False


def test_pick_food_returns_first_edible() -> None:
    items = [_item("stick"), _item("bread"), _item("cooked_chicken")]
    assert pick_food(items, lambda i: i.name).name == "bread"
    assert pick_food([_item("dirt")], lambda i: i.name) is None


@pytest.mark.asyncio
async def test_low_food_eats_exactly_one_item(controller, log_store) -> None:
    adapter = FakeAdapter()
    adapter.food = 10
    adapter.items = [_item("stick"), _item("cooked_beef"), _item("bread")]
    controller.on_connect(adapter, FakeHandle(1))

    assert await controller.tick() == "cooked_beef"
    assert adapter.eaten == ["cooked_beef"]
    assert messages(log_store, "info") == ["Eating cooked_beef..."]
    await controller.on_disconnect()


@pytest.mark.asyncio
@pytest.mark.parametrize("food", [15, 20, None])
async def test_no_eating_above_threshold_or_unknown(controller, food) -> None:
    adapter = FakeAdapter()
    adapter.food = food
    adapter.items = [_item("bread")]
    controller.on_connect(adapter, FakeHandle(1))

    assert await controller.tick() is None
    assert adapter.eaten == []
    await controller.on_disconnect()


@pytest.mark.asyncio
async def test_threshold_is_inclusive(controller) -> None:
    adapter = FakeAdapter()
    adapter.food = 14
    adapter.items = [_item("carrot")]
    controller.on_connect(adapter, FakeHandle(1))

    assert await controller.tick() == "carrot"
    await controller.on_disconnect()


@pytest.mark.asyncio
async def test_bedrock_never_eats(controller) -> None:
    adapter = FakeAdapter(Variant.BEDROCK, "Bedrock")
    adapter.food = 5
    adapter.items = [_item("bread")]
    controller.on_connect(adapter, FakeHandle(1))

    assert await controller.tick() is None
    assert adapter.eaten == []
    await controller.on_disconnect()


@pytest.mark.asyncio
async def test_no_session_no_eating(controller) -> None:
    assert await controller.tick() is None


@pytest.mark.asyncio
async def test_eat_failure_is_silent(controller, log_store) -> None:
    adapter = FakeAdapter()
    adapter.food = 3
    adapter.items = [_item("porkchop")]
    adapter.eat_error = RuntimeError("Consuming cancelled")
    controller.on_connect(adapter, FakeHandle(1))

    assert await controller.tick() is None
    assert len(log_store) == 0
    await controller.on_disconnect()


@pytest.mark.asyncio
async def test_running_follows_connect_and_disconnect(controller) -> None:
    assert controller.running is False
    controller.on_connect(FakeAdapter(), FakeHandle(1))
    assert controller.running is True
    await controller.on_disconnect()
    assert controller.running is False


@pytest.mark.asyncio
async def test_manager_runs_auto_eat_for_java_session(manager, java_adapter, java_config) -> None:
    java_adapter.food = 6
    java_adapter.items = [_item("apple")]
    await manager.start(java_config)

    assert await manager._auto_eat.tick() == "apple"
    await manager.stop()
    assert manager._auto_eat.running is False
