"""Turn lifecycle errors into notifications and redirects."""

import logging

from labexchange.core.errors import (
    AuthenticationRequired,
    LabExchangeError,
    NotFound,
    Unauthorized,
    ValidationError,
)
from labexchange.core.navigator import SIGN_IN_PATH
from labexchange.core.ports import Navigator, Notifier

logger = logging.getLogger(__name__)


def report_error(
    error: LabExchangeError,
    notifier: Notifier,
    navigator: Navigator,
    redirect: str,
    fallback: str = "An unknown error occurred.",
    title: str = "Error",
) -> None:
    """Notify the user about ``error`` and navigate where the error demands.

    AuthenticationRequired goes to sign-in; Unauthorized and NotFound go to
    ``redirect``; anything else stays on the current view.
    """
    message = error.message or fallback
    if isinstance(error, AuthenticationRequired):
        notifier.notify("Authentication Required", message, "destructive")
        navigator.navigate(SIGN_IN_PATH)
    elif isinstance(error, Unauthorized):
        notifier.notify("Unauthorized", message, "destructive")
        navigator.navigate(redirect)
    elif isinstance(error, NotFound):
        notifier.notify("Not Found", message, "destructive")
        navigator.navigate(redirect)
    elif isinstance(error, ValidationError):
        notifier.notify("Invalid input", message, "destructive")
    else:
        logger.warning(f"Store call failed: {message}")
        notifier.notify(title, message, "destructive")
