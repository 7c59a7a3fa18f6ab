"""Client-side view of the current identity.

Holds at most one signed-in session and tells subscribers whenever it
changes. Subscribers are called once on subscribe with the current state,
so a late subscriber never misses the initial resolution.
"""

from collections.abc import Callable

from src.devlog.core.logging import get_logger
from src.devlog.identity.base import Identity, IdentityProvider, IdentitySession

logger = get_logger(__name__)

IdentityCallback = Callable[[Identity | None], None]


class IdentityClient:
    def __init__(self, provider: IdentityProvider):
        self._provider = provider
        self._session: IdentitySession | None = None
        self._subscribers: list[IdentityCallback] = []

    @property
    def current_identity(self) -> Identity | None:
        return self._session.identity if self._session is not None else None

    @property
    def token(self) -> str | None:
        return self._session.token if self._session is not None else None

    def subscribe(self, callback: IdentityCallback) -> Callable[[], None]:
        """Register ``callback`` and return a handle that unregisters it."""
        self._subscribers.append(callback)
        callback(self.current_identity)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    async def restore(self, token: str | None) -> Identity | None:
        """Resolve a previously issued token into the current session."""
        identity = await self._provider.verify_token(token) if token else None
        self._set_session(IdentitySession(token, identity) if token and identity else None)
        return identity

    async def sign_in(self, email: str, password: str) -> Identity:
        session = await self._provider.sign_in(email, password)
        self._set_session(session)
        return session.identity

    async def sign_out(self) -> None:
        if self._session is None:
            return
        token = self._session.token
        self._set_session(None)
        await self._provider.sign_out(token)

    def _set_session(self, session: IdentitySession | None) -> None:
        previous = self.current_identity
        self._session = session
        if session is None and previous is None:
            return
        if session is not None and session.identity == previous:
            return
        for callback in list(self._subscribers):
            try:
                callback(self.current_identity)
            except Exception:
                logger.exception("Identity subscriber failed")
