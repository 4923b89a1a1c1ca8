# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Tests for the HTTP API."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from anarchybot.app import create_app
from anarchybot.settings import Settings

PROFILE = {
    "name": "Anarchy",
    "serverIp": "mc.example.org",
    "serverPort": 25565,
    "username": "AnarchyBot",
    "authType": "offline",
    "version": "1.20.1",
    "isBedrock": False,
    "masterName": "Owner",
    "isAutoFarm": True,
    "isAutoDefense": False,
    "isAutoTrade": True,
}


def _app(tmp_path, manager, config_store, log_store, api_token=None):
    settings = Settings(data_dir=tmp_path, api_token=api_token)
    return create_app(settings, bot_manager=manager, config_store=config_store, log_store=log_store)


@pytest.fixture
def client(tmp_path, manager, config_store, log_store):
    with TestClient(_app(tmp_path, manager, config_store, log_store)) as test_client:
        yield test_client


def test_health(client) -> None:
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_status_defaults(client) -> None:
    response = client.get("/api/bot/status")

    assert response.status_code == 200
    assert response.json() == {
        "online": False,
        "health": 20.0,
        "food": 20.0,
        "position": None,
        "nearbyPlayers": 0,
        "inventoryFull": False,
    }


def test_start_without_profile(client, java_adapter) -> None:
    response = client.post("/api/bot/start")

    assert response.status_code == 400
    assert response.json() == {"message": "No configuration found"}
    assert java_adapter.connects == []


def test_start_and_stop(client, java_adapter, log_store) -> None:
    client.post("/api/config", json=PROFILE)

    response = client.post("/api/bot/start")
    assert response.status_code == 200
    assert response.json() == {"message": "Bot starting..."}
    # Online only once the server confirms the login.
    assert client.get("/api/bot/status").json()["online"] is False

    (config,) = java_adapter.connects
    assert (config.host, config.port, config.username) == ("mc.example.org", 25565, "AnarchyBot")

    response = client.post("/api/bot/start")
    assert response.json() == {"message": "Bot already running"}
    assert len(java_adapter.connects) == 1

    response = client.post("/api/bot/stop")
    assert response.status_code == 200
    assert response.json() == {"message": "Bot stopped"}
    assert len(java_adapter.disconnects) == 1


def test_start_selects_profile_by_id(client, bedrock_adapter, java_adapter) -> None:
    client.post("/api/config", json=PROFILE)
    created = client.post("/api/configs", json={**PROFILE, "name": "BE", "serverPort": 19132, "isBedrock": True})
    assert created.status_code == 201

    response = client.post("/api/bot/start", params={"id": created.json()["id"]})

    assert response.status_code == 200
    assert java_adapter.connects == []
    (config,) = bedrock_adapter.connects
    assert config.use_bedrock is True
    assert config.auth == "bedrock"


def test_start_failure(client, java_adapter) -> None:
    client.post("/api/config", json=PROFILE)
    java_adapter.connect_error = RuntimeError("bad host")

    response = client.post("/api/bot/start")

    assert response.status_code == 400
    assert response.json() == {"message": "Failed to start bot: bad host"}


def test_stop_when_idle(client) -> None:
    response = client.post("/api/bot/stop")
    assert response.status_code == 200
    assert response.json() == {"message": "Bot stopped"}


@pytest.mark.parametrize("body", [{}, {"message": ""}, None])
def test_chat_requires_message(client, body) -> None:
    response = client.post("/api/bot/chat", json=body)
    assert response.status_code == 400
    assert response.json() == {"success": False}


def test_chat_forwards_to_bot(client, java_adapter) -> None:
    client.post("/api/config", json=PROFILE)
    client.post("/api/bot/start")

    response = client.post("/api/bot/chat", json={"message": "hello"})

    assert response.status_code == 200
    assert response.json() == {"success": True}
    assert java_adapter.chats == ["hello"]


def test_get_config_creates_default(client, config_store) -> None:
    response = client.get("/api/config")

    assert response.status_code == 200
    data = response.json()
    assert data["id"] == 1
    assert data["serverIp"] == "localhost"
    assert data["username"] == "AnarchyBot"
    assert len(config_store.list_configs()) == 1


def test_update_config(client) -> None:
    response = client.post("/api/config", json=PROFILE)

    assert response.status_code == 200
    assert response.json() == {"id": 1, **PROFILE}

    response = client.post("/api/config", json={**PROFILE, "username": "Griefer"})
    assert response.json()["id"] == 1
    assert client.get("/api/config").json()["username"] == "Griefer"


@pytest.mark.parametrize(
    "body",
    [
        {**PROFILE, "serverPort": 70000},
        {**PROFILE, "username": ""},
        {**PROFILE, "authType": "password"},
    ],
)
def test_invalid_config(client, body) -> None:
    response = client.post("/api/config", json=body)
    assert response.status_code == 400
    assert response.json() == {"message": "Invalid config"}


def test_config_not_json(client) -> None:
    response = client.post("/api/config", content=b"not json", headers={"Content-Type": "application/json"})
    assert response.status_code == 400


def test_unknown_profile(client) -> None:
    assert client.get("/api/config", params={"id": 9}).status_code == 404
    assert client.post("/api/config", json={**PROFILE, "id": 9}).status_code == 404
    assert client.delete("/api/config/9").status_code == 404


def test_list_and_delete_configs(client) -> None:
    client.post("/api/config", json=PROFILE)
    client.post("/api/configs", json={**PROFILE, "name": "Second"})

    names = [p["name"] for p in client.get("/api/configs").json()]
    assert names == ["Anarchy", "Second"]

    assert client.delete("/api/config/1").status_code == 204
    assert [p["id"] for p in client.get("/api/configs").json()] == [2]


def test_logs(client, log_store) -> None:
    log_store.add_log("info", "first")
    log_store.add_log("chat", "<Steve> hi")

    response = client.get("/api/logs")

    assert response.status_code == 200
    entries = response.json()
    assert [e["message"] for e in entries] == ["<Steve> hi", "first"]
    assert entries[0]["type"] == "chat"
    assert set(entries[0]) == {"id", "type", "message", "timestamp"}

    assert client.delete("/api/logs").status_code == 204
    assert client.get("/api/logs").json() == []


def test_logs_page_is_capped(client, log_store) -> None:
    for i in range(120):
        log_store.add_log("info", f"line {i}")

    entries = client.get("/api/logs", params={"limit": 500}).json()

    assert len(entries) == 100
    assert entries[0]["message"] == "line 119"


@pytest.mark.parametrize("query", ["abc", "1.5"])
def test_start_with_malformed_id(client, java_adapter, query) -> None:
    response = client.post("/api/bot/start", params={"id": query})

    assert response.status_code == 400
    assert "message" in response.json()
    assert java_adapter.connects == []


@pytest.mark.parametrize(
    ("content", "json_body"),
    [
        (None, {"message": 5}),
        (None, {"message": ["hi"]}),
        (b"not json", None),
        (None, ["hi"]),
    ],
)
def test_chat_with_malformed_body(client, content, json_body) -> None:
    if content is not None:
        response = client.post("/api/bot/chat", content=content, headers={"Content-Type": "application/json"})
    else:
        response = client.post("/api/bot/chat", json=json_body)

    assert response.status_code == 400
    assert response.json() == {"success": False}


def test_malformed_config_ids(client) -> None:
    for response in (client.get("/api/config", params={"id": "abc"}), client.delete("/api/config/abc")):
        assert response.status_code == 400
        assert "message" in response.json()


def test_dashboard_fields_survive_reload(client, config_store) -> None:
    client.post("/api/config", json=PROFILE)

    data = client.get("/api/config").json()

    assert data["masterName"] == "Owner"
    assert data["isAutoFarm"] is True
    assert data["isAutoDefense"] is False
    assert data["isAutoTrade"] is True
    assert config_store.get_config().master_name == "Owner"


def test_injected_empty_log_store_is_used(client, log_store) -> None:
    assert len(log_store) == 0
    assert client.app.state.log_store is log_store

    log_store.add_log("info", "after startup")
    assert [e["message"] for e in client.get("/api/logs").json()] == ["after startup"]


class TestToken:
    @pytest.fixture
    def secured(self, tmp_path, manager, config_store, log_store):
        app = _app(tmp_path, manager, config_store, log_store, api_token="s3cret")
        with TestClient(app) as test_client:
            yield test_client

    def test_missing_token(self, secured) -> None:
        response = secured.get("/api/bot/status")
        assert response.status_code == 401
        assert response.json() == {"message": "Unauthorized"}

    def test_wrong_token(self, secured) -> None:
        response = secured.post("/api/bot/stop", headers={"Authorization": "Bearer nope"})
        assert response.status_code == 401

    def test_bearer_token(self, secured) -> None:
        response = secured.get("/api/bot/status", headers={"Authorization": "Bearer s3cret"})
        assert response.status_code == 200

    def test_api_key_header(self, secured) -> None:
        response = secured.get("/api/logs", headers={"X-API-Key": "s3cret"})
        assert response.status_code == 200

    def test_health_is_open(self, secured) -> None:
        assert secured.get("/api/health").status_code == 200
