"""Session provider: the single owner of the current session."""

import inspect
import logging
from collections.abc import Callable

from labexchange.core.errors import LabExchangeError, StoreError
from labexchange.core.ports import AuthBackend, Session, SessionListener, SessionState

logger = logging.getLogger(__name__)


class SessionProvider:
    """Owns the current session and publishes every change to subscribers.

    Other components read the session through ``get_session`` or a change
    subscription; only ``start``, ``sign_in`` and ``sign_out`` write it.
    Subscribers may be plain callables or coroutine functions; coroutine
    subscribers are awaited in subscription order.
    """

    def __init__(self, auth: AuthBackend) -> None:
        self._auth = auth
        self._session: Session | None = None
        self._state = SessionState.UNKNOWN
        self._subscribers: list[SessionListener] = []

    @property
    def state(self) -> SessionState:
        return self._state

    def get_session(self) -> Session | None:
        return self._session

    def on_change(self, callback: SessionListener) -> Callable[[], None]:
        """Subscribe to session changes. Returns an unsubscribe function."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    async def start(self, access_token: str | None = None) -> Session | None:
        """Resolve the session at application start."""
        session = None
        if access_token:
            try:
                session = await self._auth.resolve(access_token)
            except LabExchangeError as e:
                logger.warning(f"Could not resolve stored session: {e}")
        await self._set(session)
        return session

    async def sign_in(self, email: str, password: str) -> Session:
        session = await self._auth.sign_in(email, password)
        await self._set(session)
        logger.info(f"Signed in user {session.user.id}")
        return session

    async def sign_out(self) -> None:
        """Sign out through the auth backend, then drop the local session.

        Raises:
            StoreError: if the backend rejects the sign-out. The local session
                is kept in that case.
        """
        session = self._session
        if session is None:
            return
        try:
            await self._auth.sign_out(session)
        except LabExchangeError as e:
            raise StoreError(e.message or "Error signing out") from e
        await self._set(None)
        logger.info(f"Signed out user {session.user.id}")

    async def _set(self, session: Session | None) -> None:
        self._session = session
        self._state = SessionState.AUTHENTICATED if session else SessionState.ANONYMOUS
        for callback in list(self._subscribers):
            try:
                result = callback(session)
                if inspect.isawaitable(result):
                    await result
            except Exception as e:
                # One broken subscriber must not hide the change from the rest
                logger.error(f"Session subscriber failed: {e}")
