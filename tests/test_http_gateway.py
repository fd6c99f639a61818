"""
Tests for the REST command gateway using httpx.MockTransport.
"""

import asyncio
import json

import httpx
import pytest

from voice_commands.errors import CommandServiceError
from voice_commands.repositories import HttpCommandGateway, MemorySessionStore

BASE_URL = "http://backend.test/api/voice-commands/"


def run(coro):
    return asyncio.run(coro)


def make_gateway(handler, store=None) -> HttpCommandGateway:
    return HttpCommandGateway(
        base_url=BASE_URL,
        session_store=store,
        transport=httpx.MockTransport(handler),
    )


def call(gateway: HttpCommandGateway, method: str, *args, **kwargs):
    async def scenario():
        try:
            return await getattr(gateway, method)(*args, **kwargs)
        finally:
            await gateway.close()

    return run(scenario())


def test_process_command_posts_text_with_token():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["auth"] = request.headers.get("Authorization")
        seen["body"] = json.loads(request.content)
        return httpx.Response(
            200,
            json={
                "success": True,
                "data": {"id": 42, "status": "EXECUTED", "confidence_score": 0.92},
            },
        )

    store = MemorySessionStore({"authToken": "abc123"})
    response = call(make_gateway(handler, store), "process_command", "ventas de hoy")

    assert response.success
    assert response.data.id == 42
    assert seen["url"] == BASE_URL + "process/"
    assert seen["auth"] == "Token abc123"
    assert seen["body"] == {"text": "ventas de hoy"}


def test_no_token_no_header():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["auth"] = request.headers.get("Authorization")
        return httpx.Response(200, json={"success": True, "data": {}})

    call(make_gateway(handler, MemorySessionStore()), "process_command", "ventas de hoy")

    assert seen["auth"] is None


def test_soft_failure_is_returned_not_raised():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            json={
                "success": False,
                "data": {"error_message": "Comando ambiguo"},
                "suggestions": [{"name": "Reporte Básico de Ventas", "confidence": 0.6}],
            },
        )

    response = call(make_gateway(handler), "process_command", "ventas")

    assert not response.success
    assert response.suggestions[0].name == "Reporte Básico de Ventas"


@pytest.mark.parametrize(
    "status, body, message",
    [
        (400, {"error": "Texto inválido"}, "Texto inválido"),
        (400, {}, "Solicitud inválida"),
        (401, {}, "Sesión expirada. Por favor inicia sesión nuevamente."),
        (403, {}, "No tienes permisos para realizar esta acción"),
        (404, {}, "Comando no encontrado"),
        (408, {}, "El comando está tardando demasiado. Intenta con un reporte más simple."),
        (504, {}, "El comando está tardando demasiado. Intenta con un reporte más simple."),
        (500, {"error": "traceback"}, "Error del servidor. Intenta nuevamente en unos momentos."),
        (418, {"detail": "Soy una tetera"}, "Soy una tetera"),
        (409, {}, "Error desconocido"),
    ],
)
def test_status_errors(status, body, message):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status, json=body)

    with pytest.raises(CommandServiceError) as exc_info:
        call(make_gateway(handler), "process_command", "ventas de hoy")

    assert exc_info.value.message == message
    assert exc_info.value.status == status


def test_connection_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(CommandServiceError) as exc_info:
        call(make_gateway(handler), "process_command", "ventas de hoy")

    assert exc_info.value.message == "Error de conexión. Verifica tu internet e intenta nuevamente."
    assert exc_info.value.status is None


def test_timeout_uses_slow_command_message():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("slow", request=request)

    with pytest.raises(CommandServiceError) as exc_info:
        call(make_gateway(handler), "process_command", "ventas de hoy")

    assert exc_info.value.message.startswith("El comando está tardando demasiado")


def test_malformed_body_is_unexpected_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"data": "nope"})

    with pytest.raises(CommandServiceError) as exc_info:
        call(make_gateway(handler), "process_command", "ventas de hoy")

    assert exc_info.value.message == "Error inesperado"


ENTRY = {"id": 1, "command_text": "ventas de hoy", "status": "EXECUTED"}


@pytest.mark.parametrize(
    "body, count",
    [
        ([ENTRY], 1),
        ({"success": True, "data": [ENTRY]}, 1),
        ({"count": 31, "results": [ENTRY]}, 31),
    ],
)
def test_history_shapes(body, count):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["params"] = dict(request.url.params)
        return httpx.Response(200, json=body)

    response = call(make_gateway(handler), "get_history", page=2, page_size=None)

    assert response.success
    assert response.data[0].command_text == "ventas de hoy"
    assert response.count == count
    assert seen["params"] == {"page": "2"}


def test_history_reported_failure():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"success": False, "error": "Sin historial"})

    response = call(make_gateway(handler), "get_history")

    assert not response.success
    assert response.error == "Sin historial"


def test_download_returns_bytes():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        return httpx.Response(200, content=b"%PDF-1.4")

    content = call(make_gateway(handler), "download", 42, "pdf")

    assert content == b"%PDF-1.4"
    assert seen["path"] == "/api/voice-commands/42/download/pdf/"


def test_download_rejects_json():
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected")

    with pytest.raises(ValueError):
        call(make_gateway(handler), "download", 42, "json")


def test_capabilities_and_command():
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("capabilities/"):
            return httpx.Response(200, json={"report_types": ["ventas_basico"]})
        return httpx.Response(200, json=ENTRY)

    assert call(make_gateway(handler), "get_capabilities") == {"report_types": ["ventas_basico"]}
    assert call(make_gateway(handler), "get_command", 1) == ENTRY


def test_is_available():
    def down(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503)

    assert call(make_gateway(down), "is_available") is False
