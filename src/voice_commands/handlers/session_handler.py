"""HTTP handlers for the backend session."""

from fastapi import HTTPException, status

from voice_commands.dto import LoginRequest, SessionResponse, ViewedProductRequest
from voice_commands.protocols import SessionStore
from voice_commands.services import session


class SessionHandler:
    """Stores the auth token the gateway sends with every backend call.

    The token is issued by the backend's own login; the console only keeps
    it (and the profile that came with it) in the session store.
    """

    def __init__(self, store: SessionStore) -> None:
        self._store = store

    async def login(self, request: LoginRequest) -> SessionResponse:
        """Handle POST /session requests."""
        session.login(self._store, request.token, request.user)
        return self._snapshot()

    async def logout(self) -> SessionResponse:
        """Handle DELETE /session requests."""
        session.logout(self._store)
        return self._snapshot()

    async def get_session(self) -> SessionResponse:
        """Handle GET /session requests."""
        return self._snapshot()

    async def remember_viewed(self, request: ViewedProductRequest) -> SessionResponse:
        """Handle POST /session/recently-viewed requests.

        Raises:
            HTTPException: 401 if nobody is logged in
        """
        if not session.is_authenticated(self._store):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Debes iniciar sesión",
            )
        session.remember_recently_viewed(self._store, request.model_dump())
        return self._snapshot()

    async def clear_viewed(self) -> SessionResponse:
        """Handle DELETE /session/recently-viewed requests."""
        session.clear_recently_viewed(self._store)
        return self._snapshot()

    def _snapshot(self) -> SessionResponse:
        return SessionResponse(
            authenticated=session.is_authenticated(self._store),
            is_admin=session.is_admin(self._store),
            user=session.current_user(self._store),
            recently_viewed=session.recently_viewed(self._store),
        )
