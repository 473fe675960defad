"""Session-gated navigation for owner-only views."""

import logging

from labexchange.core.generation import FetchGeneration
from labexchange.core.ports import Navigator, Notifier, Session, SessionSource, SessionState

logger = logging.getLogger(__name__)

SIGN_IN_PATH = "/auth"


class OwnerOnlyView:
    """Base class for views that show data belonging to the signed-in user.

    Subclasses implement ``load`` (fetch for ``self.session``) and ``clear``
    (drop any owner data held locally). Views never read the session on
    their own; the navigator hands it over through ``activate``.
    """

    def __init__(self, navigator: Navigator, notifier: Notifier) -> None:
        self.navigator = navigator
        self.notifier = notifier
        self.session: Session | None = None
        self.loading = True
        self._generation = FetchGeneration()

    def show_loading(self) -> None:
        self.loading = True

    async def activate(self, session: Session) -> None:
        if self.session is not None and self.session.user.id != session.user.id:
            self.invalidate()
        self.session = session
        await self.load()

    async def load(self) -> None:
        raise NotImplementedError

    def clear(self) -> None:
        raise NotImplementedError

    def invalidate(self) -> None:
        """Forget the session and any owner data; pending fetches go stale."""
        self.session = None
        self.loading = True
        self._generation.invalidate()
        self.clear()

    def unmount(self) -> None:
        self._generation.close()


class SessionGatedNavigator:
    """Three-state gate (unknown, anonymous, authenticated) for owner-only views.

    While the session is unknown, mounted views show a loading affordance.
    Anonymous sessions are redirected to sign-in. Authenticated sessions
    activate the view, which is the only point where owner data is fetched.
    """

    def __init__(
        self,
        sessions: SessionSource,
        navigator: Navigator,
        notifier: Notifier,
    ) -> None:
        self._sessions = sessions
        self._navigator = navigator
        self._notifier = notifier
        self._views: list[OwnerOnlyView] = []
        self._unsubscribe = sessions.on_change(self._on_session_change)

    @property
    def state(self) -> SessionState:
        return self._sessions.state

    @property
    def mounted(self) -> list[OwnerOnlyView]:
        return list(self._views)

    async def mount(self, view: OwnerOnlyView) -> None:
        state = self.state
        if state == SessionState.ANONYMOUS:
            self._redirect([view])
            return

        self._views.append(view)
        if state == SessionState.UNKNOWN:
            view.show_loading()
            return

        session = self._sessions.get_session()
        if session is not None:
            await view.activate(session)

    def unmount(self, view: OwnerOnlyView) -> None:
        if view in self._views:
            self._views.remove(view)
        view.unmount()

    def close(self) -> None:
        self._unsubscribe()
        for view in list(self._views):
            self.unmount(view)

    async def _on_session_change(self, session: Session | None) -> None:
        views = list(self._views)
        if session is None:
            self._views.clear()
            self._redirect(views)
            return
        for view in views:
            await view.activate(session)

    def _redirect(self, views: list[OwnerOnlyView]) -> None:
        for view in views:
            view.invalidate()
        if not views:
            return
        logger.info(f"Redirecting {len(views)} owner-only view(s) to sign-in")
        self._notifier.notify(
            "Authentication Required",
            "You must be signed in to view this page.",
            "destructive",
        )
        self._navigator.navigate(SIGN_IN_PATH)
