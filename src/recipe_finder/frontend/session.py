"""Session context: who is signed in, and with which bearer token.

The context is an explicit object handed to the gateway, stores and router.
It persists to a tab-scoped key/value storage under the ``user`` and ``token``
keys so a reload in the same tab keeps the session.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final, Protocol

import orjson
from pydantic import ValidationError

from recipe_finder.frontend.models import User
from recipe_finder.observability.logging import get_logger


if TYPE_CHECKING:
    from collections.abc import Callable


logger = get_logger(__name__)

USER_KEY: Final[str] = "user"
TOKEN_KEY: Final[str] = "token"


class TabStorage(Protocol):
    """String key/value storage that lives as long as the browser tab."""

    def get_item(self, key: str) -> str | None: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


class MemoryTabStorage:
    """In-process :class:`TabStorage`."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._items: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def __contains__(self, key: object) -> bool:
        return key in self._items


class SessionContext:
    """The authenticated identity and its bearer credential.

    Two states: anonymous (no user) and authenticated (user and token).
    Listeners registered with :meth:`subscribe` are called after every
    transition.
    """

    def __init__(self, storage: TabStorage) -> None:
        self._storage = storage
        self._user: User | None = None
        self._token: str | None = None
        self._listeners: list[Callable[[SessionContext], None]] = []
        self._restore()

    def _restore(self) -> None:
        raw_user = self._storage.get_item(USER_KEY)
        token = self._storage.get_item(TOKEN_KEY)
        if not raw_user or not token:
            return
        try:
            self._user = User.model_validate(orjson.loads(raw_user))
        except (orjson.JSONDecodeError, ValidationError):
            logger.warning("Discarding unreadable stored session")
            self._storage.remove_item(USER_KEY)
            self._storage.remove_item(TOKEN_KEY)
            return
        self._token = token

    @property
    def user(self) -> User | None:
        """The signed-in user, or None when anonymous."""
        return self._user

    @property
    def token(self) -> str | None:
        """The bearer token, or None when anonymous."""
        return self._token

    @property
    def is_authenticated(self) -> bool:
        return self._user is not None and self._token is not None

    def login(self, user: User, token: str) -> None:
        """Enter the authenticated state and persist it."""
        self._user = user
        self._token = token
        self._storage.set_item(USER_KEY, orjson.dumps(user.model_dump()).decode())
        self._storage.set_item(TOKEN_KEY, token)
        self._notify()

    def update_user(self, user: User) -> None:
        """Replace the stored identity, keeping the token."""
        if not self.is_authenticated:
            msg = "Cannot update the user of an anonymous session"
            raise RuntimeError(msg)
        self._user = user
        self._storage.set_item(USER_KEY, orjson.dumps(user.model_dump()).decode())
        self._notify()

    def logout(self) -> None:
        """Return to the anonymous state and clear storage."""
        self._user = None
        self._token = None
        self._storage.remove_item(USER_KEY)
        self._storage.remove_item(TOKEN_KEY)
        self._notify()

    def subscribe(self, listener: Callable[[SessionContext], None]) -> None:
        """Call ``listener`` after every session change."""
        self._listeners.append(listener)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)
