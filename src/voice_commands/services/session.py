"""Session helpers over a SessionStore.

The store holds three well-known keys: the auth token the gateway sends
with every request, the cached user profile, and the recently viewed
products list.
"""

import logging
from typing import Any

from voice_commands.config import settings
from voice_commands.protocols import SessionStore

logger = logging.getLogger(__name__)

USER_KEY = "user"
RECENTLY_VIEWED_KEY = "recentlyViewedProducts"
RECENTLY_VIEWED_LIMIT = 10
ADMIN_ROLE = "ADMIN"


def login(store: SessionStore, token: str, user: dict[str, Any] | None = None) -> None:
    """Persist the auth token and, if given, the user profile."""
    if not token:
        raise ValueError("token must not be empty")
    store.set(settings.auth_token_key, token)
    if user is not None:
        store.set(USER_KEY, user)
    logger.info("Session started for %s", (user or {}).get("username", "unknown user"))


def logout(store: SessionStore) -> None:
    """Forget the auth token and the cached user profile."""
    store.remove(settings.auth_token_key)
    store.remove(USER_KEY)
    logger.info("Session closed")


def current_user(store: SessionStore) -> dict[str, Any] | None:
    return store.get(USER_KEY)


def is_authenticated(store: SessionStore) -> bool:
    return bool(store.get(settings.auth_token_key))


def is_admin(store: SessionStore) -> bool:
    """Whether the cached profile carries the administrator role."""
    user = current_user(store) or {}
    profile = user.get("profile") or {}
    return profile.get("role") == ADMIN_ROLE


def remember_recently_viewed(
    store: SessionStore,
    product: dict[str, Any],
    limit: int = RECENTLY_VIEWED_LIMIT,
) -> list[dict[str, Any]]:
    """Put ``product`` at the front of the recently viewed list.

    Any earlier entry with the same ``id`` is dropped and the list is cut
    to ``limit`` items.

    Args:
        store: Session store holding the list
        product: Product summary with at least an ``id``
        limit: Maximum number of products kept

    Returns:
        The updated list, most recent first
    """
    if "id" not in product:
        raise ValueError("product must have an 'id'")

    viewed = [p for p in recently_viewed(store) if p.get("id") != product["id"]]
    viewed = [product, *viewed][:limit]
    store.set(RECENTLY_VIEWED_KEY, viewed)
    return viewed


def recently_viewed(store: SessionStore) -> list[dict[str, Any]]:
    viewed = store.get(RECENTLY_VIEWED_KEY)
    return viewed if isinstance(viewed, list) else []


def clear_recently_viewed(store: SessionStore) -> None:
    store.remove(RECENTLY_VIEWED_KEY)
