"""Site header actions."""

from labexchange.core.errors import LabExchangeError
from labexchange.core.feedback import report_error
from labexchange.core.ports import Navigator, Notifier, SessionSource

HOME_PATH = "/"


async def sign_out(sessions: SessionSource, navigator: Navigator, notifier: Notifier) -> bool:
    """Sign out from the header menu.

    On failure the session is kept and the user stays where they are.
    """
    try:
        await sessions.sign_out()
    except LabExchangeError as e:
        report_error(e, notifier, navigator, HOME_PATH, title="Error signing out")
        return False

    notifier.notify("Signed Out", "You have been successfully signed out.")
    navigator.navigate(HOME_PATH)
    return True
