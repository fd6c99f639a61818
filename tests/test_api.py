"""
Tests for the voice commands console API.
"""

import pytest
from fastapi.testclient import TestClient

from conftest import ambiguous
from voice_commands.api.app import app
from voice_commands.api.dependencies import (
    get_command_handler,
    get_session_handler,
    get_speech_handler,
)
from voice_commands.config import settings
from voice_commands.errors import CommandServiceError
from voice_commands.handlers import CommandHandler, SessionHandler, SpeechHandler
from voice_commands.services import CommandInput


@pytest.fixture
def command_input(pipeline, capture):
    return CommandInput(pipeline=pipeline, capture=capture, auto_submit=False)


@pytest.fixture
def client(command_input, store):
    """Create a test client wired to fake backends."""
    app.dependency_overrides[get_command_handler] = lambda: CommandHandler(command_input)
    app.dependency_overrides[get_speech_handler] = lambda: SpeechHandler(command_input)
    app.dependency_overrides[get_session_handler] = lambda: SessionHandler(store)
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_root(client):
    """Test root endpoint."""
    response = client.get("/")
    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Voice Commands Console API"


def test_health(client, gateway):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"

    gateway.capabilities = CommandServiceError("Error del servidor", status=500)
    assert client.get("/health").json()["backend_healthy"] is False


def test_examples(client):
    response = client.get("/examples")
    assert response.status_code == 200
    assert "top 10 productos más vendidos" in response.json()["products"]


def test_process_command(client, gateway):
    response = client.post("/commands/process", json={"text": "ventas de hoy"})

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["data"]["id"] == 42
    assert len(gateway.history_calls) == 1

    state = client.get("/commands/state").json()
    assert state["result"]["id"] == 42
    assert state["cache"]["total_entries"] == 1


def test_process_invalid_command(client, gateway):
    response = client.post("/commands/process", json={"text": "  "})

    assert response.status_code == 200
    assert response.json()["error"] == "El comando no puede estar vacío."
    assert gateway.process_calls == []


def test_process_ambiguous_and_suggestion(client, gateway):
    gateway.responses["ventas"] = ambiguous("Reporte Básico de Ventas")

    data = client.post("/commands/process", json={"text": "ventas"}).json()
    assert data["suggestions"][0]["name"] == "Reporte Básico de Ventas"

    response = client.post("/commands/suggestion", json={"name": "Reporte Básico de Ventas"})
    assert response.json()["success"] is True
    assert gateway.process_calls[-1] == "generar reporte básico de ventas"


def test_reuse(client, gateway):
    response = client.post("/commands/reuse", json={"text": "análisis ABC"})

    assert response.status_code == 200
    assert gateway.process_calls == ["análisis ABC"]


def test_history(client, gateway):
    response = client.get("/commands/history", params={"page": 2})

    assert response.status_code == 200
    assert gateway.history_calls == [{"page": 2, "page_size": 20}]


def test_history_failure(client, gateway):
    gateway.history = CommandServiceError("Sesión expirada. Por favor inicia sesión nuevamente.", status=401)

    response = client.get("/commands/history")

    assert response.status_code == 502
    assert response.json()["detail"].startswith("Sesión expirada")


def test_capabilities(client):
    response = client.get("/commands/capabilities")
    assert response.status_code == 200
    assert response.json() == {"report_types": ["ventas_basico"]}


def test_get_command(client, gateway):
    gateway.commands[7] = {"id": 7, "command_text": "ventas de hoy", "status": "EXECUTED"}
    gateway.commands[8] = CommandServiceError("Comando no encontrado", status=404)

    response = client.get("/commands/7")
    assert response.status_code == 200
    assert response.json()["status"] == "EXECUTED"

    assert client.get("/commands/8").status_code == 404


def test_download(client, saver):
    response = client.post("/commands/42/download/pdf")

    assert response.status_code == 200
    data = response.json()
    assert data["filename"].startswith("reporte_")
    assert data["filename"].endswith("_42.pdf")
    assert data["filename"] in saver.files


def test_download_failure(client, gateway):
    gateway.downloads[(42, "excel")] = CommandServiceError("Comando no encontrado", status=404)

    response = client.post("/commands/42/download/excel")

    assert response.status_code == 502
    assert response.json()["detail"] == "Comando no encontrado"


def test_download_unknown_kind(client):
    assert client.post("/commands/42/download/csv").status_code == 422


def test_clear_result_and_cache(client):
    client.post("/commands/process", json={"text": "ventas de hoy"})

    state = client.delete("/commands/result").json()
    assert state["result"] is None

    data = client.delete("/commands/cache").json()
    assert data["deleted_count"] == 1


def test_speech_flow(client, recognizer):
    assert client.get("/speech/state").json()["state"] == "idle"

    data = client.post("/speech/start").json()
    assert data["state"] == "listening"

    recognizer.say("ventas de hoy")
    client.post("/speech/stop")
    assert recognizer.stopped == 1
    recognizer.end()

    data = client.get("/speech/state").json()
    assert data["state"] == "idle"
    assert data["transcript"] == "ventas de hoy"

    data = client.post("/speech/reset").json()
    assert data["transcript"] == ""


def test_speech_toggle(client, recognizer):
    assert client.post("/speech/toggle").json()["is_listening"] is True
    client.post("/speech/toggle")
    assert recognizer.stopped == 1


def test_session_login_and_logout(client, store):
    assert client.get("/session").json()["authenticated"] is False

    response = client.post(
        "/session",
        json={"token": "abc123", "user": {"username": "ana", "profile": {"role": "ADMIN"}}},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["authenticated"] is True
    assert data["is_admin"] is True
    assert store.get(settings.auth_token_key) == "abc123"

    data = client.delete("/session").json()
    assert data["authenticated"] is False
    assert data["user"] is None
    assert store.get(settings.auth_token_key) is None


def test_session_login_requires_token(client):
    assert client.post("/session", json={"token": ""}).status_code == 422


def test_recently_viewed(client):
    assert client.post("/session/recently-viewed", json={"id": 1}).status_code == 401

    client.post("/session", json={"token": "abc123"})
    client.post("/session/recently-viewed", json={"id": 1, "name": "Laptop"})
    data = client.post("/session/recently-viewed", json={"id": 2, "name": "Mouse"}).json()
    assert [p["id"] for p in data["recently_viewed"]] == [2, 1]
    assert data["recently_viewed"][1]["name"] == "Laptop"

    data = client.delete("/session/recently-viewed").json()
    assert data["recently_viewed"] == []
