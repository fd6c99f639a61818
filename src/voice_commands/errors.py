"""Error types and message tables shared across layers.

Every user-facing failure ends up as a Spanish message string. Remote
payloads carry their error text under different keys depending on the
endpoint, so `error_message_of` is the single place that knows the lookup
order.
"""

from typing import Any

GENERIC_PROCESS_ERROR = "No se pudo procesar el comando"
TRANSPORT_PROCESS_ERROR = "Error al procesar el comando"
CONNECTION_ERROR = "Error de conexión. Verifica tu internet e intenta nuevamente."
UNEXPECTED_ERROR = "Error inesperado"
UNKNOWN_ERROR = "Error desconocido"

HTTP_STATUS_MESSAGES: dict[int, str] = {
    400: "Solicitud inválida",
    401: "Sesión expirada. Por favor inicia sesión nuevamente.",
    403: "No tienes permisos para realizar esta acción",
    404: "Comando no encontrado",
    408: "El comando está tardando demasiado. Intenta con un reporte más simple.",
    504: "El comando está tardando demasiado. Intenta con un reporte más simple.",
}
SERVER_ERROR = "Error del servidor. Intenta nuevamente en unos momentos."

# Statuses whose message may be overridden by the server's own text
_SERVER_TEXT_STATUSES = {400}

# Lookup order for error text inside a payload
_ERROR_KEYS = ("error_message", "error", "detail", "message")


class CommandServiceError(Exception):
    """Transport or server failure talking to the command backend."""

    def __init__(
        self,
        message: str,
        status: int | None = None,
        details: Any = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status = status
        self.details = details


class SessionStoreError(Exception):
    """Raised when persisted session state cannot be read or written."""


class SpeechRecognizerError(Exception):
    """Raised by a recognizer that cannot begin a listening session."""


def error_message_of(payload: Any, fallback: str = UNKNOWN_ERROR) -> str:
    """Extract a human-readable error message from a remote payload.

    Precedence: ``data.error_message``, then the top-level keys
    ``error_message``, ``error``, ``detail`` and ``message``. Pydantic
    models are read through ``model_dump``. Returns ``fallback`` when none
    of them holds a non-empty string.

    Args:
        payload: Decoded JSON body (dict), pydantic model, or anything else
        fallback: Message used when nothing usable is found

    Returns:
        The extracted message
    """
    if hasattr(payload, "model_dump"):
        payload = payload.model_dump()

    if not isinstance(payload, dict):
        return fallback

    data = payload.get("data")
    if isinstance(data, dict):
        nested = data.get("error_message")
        if isinstance(nested, str) and nested:
            return nested

    for key in _ERROR_KEYS:
        value = payload.get(key)
        if isinstance(value, str) and value:
            return value

    return fallback


def message_for_status(status: int, payload: Any = None) -> str:
    """Map an HTTP status code to the fixed user-facing message table.

    Args:
        status: HTTP status code of the failed response
        payload: Decoded response body, if any

    Returns:
        The message to show for this failure
    """
    if status in _SERVER_TEXT_STATUSES:
        return error_message_of(payload, HTTP_STATUS_MESSAGES[status])
    if status in HTTP_STATUS_MESSAGES:
        return HTTP_STATUS_MESSAGES[status]
    if 500 <= status < 600:
        return SERVER_ERROR
    return error_message_of(payload, UNKNOWN_ERROR)
