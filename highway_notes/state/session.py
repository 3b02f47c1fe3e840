"""
Per-browser session context.

Owns the bearer token and the signed-in user of one browser. The token
lives in a persistent key-value store (NiceGUI ``app.storage.user`` in the
running app); the user is kept in memory. Observers are notified on every
change.
"""

from typing import Callable, Dict, List, MutableMapping, Optional, Protocol

from highway_notes.api.schemas import User
from highway_notes.utils.logger import get_logger

logger = get_logger(__name__)

SessionObserver = Callable[["SessionContext"], None]


class TokenStore(Protocol):
    def get(self) -> Optional[str]: ...

    def set(self, token: str) -> None: ...

    def clear(self) -> None: ...


class MemoryTokenStore:
    """Volatile store used before the persistent one is bound, and in tests."""

    def __init__(self, token: Optional[str] = None) -> None:
        self._token = token

    def get(self) -> Optional[str]:
        return self._token

    def set(self, token: str) -> None:
        self._token = token

    def clear(self) -> None:
        self._token = None


class MappingTokenStore:
    """
    Store the token under a fixed key of a mutable mapping.

    The mapping is resolved lazily so NiceGUI storage can be bound before
    it has been loaded.
    """

    def __init__(
        self,
        mapping: Callable[[], MutableMapping[str, object]],
        key: str = "token",
    ) -> None:
        self._mapping = mapping
        self._key = key

    def get(self) -> Optional[str]:
        value = self._mapping().get(self._key)
        return value if isinstance(value, str) and value else None

    def set(self, token: str) -> None:
        self._mapping()[self._key] = token

    def clear(self) -> None:
        self._mapping().pop(self._key, None)


class SessionContext:
    """
    Authenticated-user state with an explicit login/logout lifecycle.

    A present token means the user is authenticated. The token's validity
    is only discovered lazily, when the API answers 401.
    """

    def __init__(self, store: Optional[TokenStore] = None) -> None:
        self._store: TokenStore = store or MemoryTokenStore()
        self._user: Optional[User] = None
        self._observers: List[SessionObserver] = []

    @property
    def store(self) -> TokenStore:
        return self._store

    @property
    def token(self) -> Optional[str]:
        return self._store.get()

    @property
    def user(self) -> Optional[User]:
        return self._user

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None

    def hydrate(self, store: Optional[TokenStore] = None) -> bool:
        """
        Bind the persistent store (if given) and pick up a saved token.

        Returns:
            True when a persisted token was found.
        """
        if store is not None:
            self._store = store

        authenticated = self.is_authenticated
        logger.info(
            "Session hydrated",
            extra={"authenticated": authenticated},
        )
        self._notify()
        return authenticated

    def login(self, token: str, user: Optional[User] = None) -> None:
        if not token:
            raise ValueError("Cannot start a session without a token")

        self._store.set(token)
        self._user = user
        logger.info(
            "Session started",
            extra={"email": user.email if user else None},
        )
        self._notify()

    def logout(self) -> None:
        self._store.clear()
        self._user = None
        logger.info("Session cleared")
        self._notify()

    def subscribe(self, observer: SessionObserver) -> Callable[[], None]:
        """
        Register an observer.

        Returns:
            A callable that removes the observer again.
        """
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def _notify(self) -> None:
        for observer in list(self._observers):
            try:
                observer(self)
            except Exception:
                # A broken page must not keep other observers stale
                logger.exception("Session observer failed")


class SessionRegistry:
    """
    One ``SessionContext`` per browser, created and hydrated on first use.

    Contexts never leak across browser ids, so a login in one browser
    neither authenticates nor signs out another.
    """

    def __init__(self) -> None:
        self._sessions: Dict[str, SessionContext] = {}

    def get(
        self,
        browser_id: str,
        store_factory: Callable[[], TokenStore],
    ) -> SessionContext:
        ctx = self._sessions.get(browser_id)
        if ctx is None:
            ctx = SessionContext(store_factory())
            ctx.hydrate()
            self._sessions[browser_id] = ctx
        return ctx

    def __len__(self) -> int:
        return len(self._sessions)


sessions = SessionRegistry()
