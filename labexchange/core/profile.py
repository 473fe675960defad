"""Seller profile page."""

import logging
from collections.abc import Mapping
from typing import Any

from labexchange.core.errors import LabExchangeError
from labexchange.core.feedback import report_error
from labexchange.core.navigator import OwnerOnlyView
from labexchange.core.ports import Navigator, Notifier, ProfileStore
from labexchange.core.results import FieldError, Invalid
from labexchange.core.validation import validate_profile_update
from labexchange.schemas.profile import ProfileResponse

logger = logging.getLogger(__name__)

PROFILE_PATH = "/profile"


class ProfileController(OwnerOnlyView):
    """Loads and edits the signed-in user's seller profile.

    A user without a profile row simply gets an empty form. email and
    verified are shown but never submitted.
    """

    def __init__(self, store: ProfileStore, navigator: Navigator, notifier: Notifier) -> None:
        super().__init__(navigator, notifier)
        self.store = store
        self.profile: ProfileResponse | None = None
        self.values: dict[str, Any] = {"full_name": "", "company": ""}
        self.errors: list[FieldError] = []
        self.is_submitting = False

    @property
    def email(self) -> str | None:
        if self.profile and self.profile.email:
            return self.profile.email
        return self.session.user.email if self.session else None

    @property
    def verified(self) -> bool:
        return bool(self.profile and self.profile.verified)

    async def load(self) -> None:
        if self.session is None:
            return
        token = self._generation.begin()
        self.loading = True
        try:
            lookup = await self.store.get(self.session.user.id)
        except LabExchangeError as e:
            if self._generation.is_current(token):
                self.loading = False
                logger.error(f"Could not load profile: {e}")
                self.notifier.notify("Error", "Could not load profile.", "destructive")
            return

        if not self._generation.is_current(token):
            return
        self.profile = lookup.profile
        if lookup.profile is not None:
            self.values = {
                "full_name": lookup.profile.full_name or "",
                "company": lookup.profile.company or "",
            }
        self.loading = False

    def clear(self) -> None:
        self.profile = None
        self.values = {"full_name": "", "company": ""}
        self.errors = []

    async def save(self, values: Mapping[str, Any] | None = None) -> ProfileResponse | None:
        if values is not None:
            self.values = {**self.values, **values}
        result = validate_profile_update(self.values)
        if isinstance(result, Invalid):
            self.errors = result.errors
            return None
        self.errors = []
        if self.session is None:
            return None

        token = self._generation.begin()
        self.is_submitting = True
        try:
            profile = await self.store.update(
                self.session.user.id, result.value.model_dump(include={"full_name", "company"})
            )
        except LabExchangeError as e:
            if self._generation.is_current(token):
                report_error(
                    e, self.notifier, self.navigator, PROFILE_PATH, "Failed to update profile."
                )
            return None
        finally:
            self.is_submitting = False

        if not self._generation.is_current(token):
            logger.debug("Discarding profile save that resolved after sign-out")
            return None
        self.profile = profile
        self.notifier.notify("Success", "Profile updated successfully.")
        return profile
