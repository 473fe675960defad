"""Listing form controller: create and edit a listing."""

import logging
from collections.abc import Mapping
from enum import StrEnum
from typing import Any

from labexchange.core.errors import (
    AuthenticationRequired,
    LabExchangeError,
    NotFound,
    Unauthorized,
)
from labexchange.core.feedback import report_error
from labexchange.core.guard import is_owner
from labexchange.core.navigator import OwnerOnlyView
from labexchange.core.ports import EquipmentStore, Listing, Navigator, Notifier
from labexchange.core.results import FieldError, Invalid
from labexchange.core.validation import validate_listing_draft
from labexchange.models.enums import AvailabilityStatus
from labexchange.schemas.equipment import MUTABLE_FIELDS

logger = logging.getLogger(__name__)

DASHBOARD_PATH = "/dashboard"

DEFAULT_VALUES: dict[str, Any] = {
    "name": "",
    "brand": "",
    "model": "",
    "description": "",
    "price": 0,
    "condition": "good",
    "category": "",
    "location": "",
}


class FormMode(StrEnum):
    CREATE = "create"
    EDIT = "edit"


class ListingFormController(OwnerOnlyView):
    """Drives the "list equipment" form in create or edit mode.

    The mode is picked by the presence of ``edit_id``. In edit mode the target
    record is fetched and its ownership checked before any of its fields are
    copied into ``values``. Submissions are sanitized and validated locally;
    no store call is made for an invalid draft, and navigation to the
    dashboard waits for the store to confirm the write.
    """

    def __init__(
        self,
        store: EquipmentStore,
        navigator: Navigator,
        notifier: Notifier,
        edit_id: int | None = None,
    ) -> None:
        super().__init__(navigator, notifier)
        self.store = store
        self.edit_id = edit_id
        self.values: dict[str, Any] = dict(DEFAULT_VALUES)
        self.errors: list[FieldError] = []
        self.is_submitting = False
        self.failure: LabExchangeError | None = None
        self._record: Listing | None = None

    @property
    def mode(self) -> FormMode:
        return FormMode.EDIT if self.edit_id is not None else FormMode.CREATE

    @property
    def title(self) -> str:
        return "Edit Your Equipment" if self.mode == FormMode.EDIT else "List Your Equipment"

    @property
    def submit_label(self) -> str:
        if self.is_submitting:
            return "Submitting..."
        return "Save Changes" if self.mode == FormMode.EDIT else "List Equipment"

    def field_errors(self, name: str) -> list[str]:
        return Invalid(self.errors).for_field(name)

    async def load(self) -> None:
        """Prepare the form; in edit mode fetch and ownership-check the target."""
        self.failure = None
        if self.mode == FormMode.CREATE:
            self.loading = False
            return

        token = self._generation.begin()
        self.loading = True
        try:
            record = await self._fetch_owned(self.edit_id)
        except LabExchangeError as e:
            if not self._generation.is_current(token):
                return
            self.failure = e
            self.loading = False
            report_error(e, self.notifier, self.navigator, DASHBOARD_PATH)
            return

        if not self._generation.is_current(token):
            logger.debug(f"Discarding stale load of listing {self.edit_id}")
            return
        self._record = record
        self.values = {name: _form_value(getattr(record, name)) for name in MUTABLE_FIELDS}
        self.loading = False

    async def _fetch_owned(self, listing_id: int) -> Listing:
        if self.session is None:
            raise AuthenticationRequired("You must be signed in to manage equipment.")
        try:
            record = await self.store.get(listing_id)
        except NotFound as e:
            raise NotFound("Could not load equipment data.") from e
        # Checked before any field reaches the form
        if not is_owner(self.session, record.owner_id):
            raise Unauthorized("You do not have permission to edit this equipment.")
        return record

    async def submit(self, values: Mapping[str, Any] | None = None) -> Listing | None:
        """Validate and persist the draft. Returns the stored listing on success."""
        if values is not None:
            self.values = {**self.values, **values}

        result = validate_listing_draft(self.values)
        if isinstance(result, Invalid):
            self.errors = result.errors
            return None
        self.errors = []
        draft = result.value

        if self.session is None:
            self.values = dict(DEFAULT_VALUES)
            report_error(
                AuthenticationRequired("You must be signed in to manage equipment."),
                self.notifier,
                self.navigator,
                DASHBOARD_PATH,
            )
            return None
        if self.mode == FormMode.EDIT and self._record is None:
            report_error(
                Unauthorized("You do not have permission to edit this equipment."),
                self.notifier,
                self.navigator,
                DASHBOARD_PATH,
            )
            return None

        fields = draft.model_dump(mode="json", include=set(MUTABLE_FIELDS))
        owner_id = self.session.user.id
        token = self._generation.begin()
        self.is_submitting = True
        try:
            if self.mode == FormMode.CREATE:
                listing = await self.store.insert(
                    {
                        **fields,
                        "owner_id": owner_id,
                        "availability_status": AvailabilityStatus.AVAILABLE.value,
                        "images": [],
                        "tags": [],
                    }
                )
            else:
                listing = await self.store.update(self.edit_id, fields)
        except LabExchangeError as e:
            if self._generation.is_current(token):
                report_error(e, self.notifier, self.navigator, DASHBOARD_PATH)
            return None
        finally:
            self.is_submitting = False

        # Signed out or unmounted while the write was pending
        if not self._generation.is_current(token):
            logger.debug(f"Discarding result of stale submit by user {owner_id}")
            return None

        if self.mode == FormMode.CREATE:
            logger.info(f"Created listing {listing.id} for user {owner_id}")
            self.notifier.notify("Success!", "Your equipment has been listed.")
        else:
            logger.info(f"Updated listing {listing.id}")
            self.notifier.notify("Success!", "Your equipment has been updated.")
        self.navigator.navigate(DASHBOARD_PATH)
        return listing

    def clear(self) -> None:
        self.values = dict(DEFAULT_VALUES)
        self.errors = []
        self._record = None


def _form_value(value: Any) -> Any:
    if value is None:
        return ""
    return getattr(value, "value", value)
