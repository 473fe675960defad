"""Seller dashboard: the signed-in user's own listings."""

import logging

from labexchange.core.errors import AuthenticationRequired, LabExchangeError
from labexchange.core.feedback import report_error
from labexchange.core.guard import can_delete, can_edit
from labexchange.core.navigator import OwnerOnlyView
from labexchange.core.ports import (
    Direction,
    EquipmentStore,
    Listing,
    ListingQuery,
    Navigator,
    Notifier,
    Order,
)

logger = logging.getLogger(__name__)

LIST_EQUIPMENT_PATH = "/list-equipment"


class DashboardView(OwnerOnlyView):
    """Owner's listings, newest first, with edit and confirmed delete."""

    def __init__(self, store: EquipmentStore, navigator: Navigator, notifier: Notifier) -> None:
        super().__init__(navigator, notifier)
        self.store = store
        self.listings: list[Listing] = []
        self.pending_delete: int | None = None

    @property
    def delete_dialog_open(self) -> bool:
        return self.pending_delete is not None

    async def load(self) -> None:
        if self.session is None:
            return
        token = self._generation.begin()
        self.loading = True
        try:
            listings = await self.store.list(
                ListingQuery(owner_id=self.session.user.id),
                Order("created_at", Direction.DESC),
            )
        except LabExchangeError as e:
            if self._generation.is_current(token):
                self.loading = False
                report_error(
                    e, self.notifier, self.navigator, "/", "Failed to load your equipment."
                )
            return

        if not self._generation.is_current(token):
            logger.debug("Discarding stale dashboard fetch")
            return
        self.listings = list(listings)
        self.loading = False

    def clear(self) -> None:
        self.listings = []
        self.pending_delete = None

    def _find(self, listing_id: int) -> Listing | None:
        return next((item for item in self.listings if item.id == listing_id), None)

    def edit(self, listing_id: int) -> None:
        listing = self._find(listing_id)
        if listing is None or not can_edit(self.session, listing):
            return
        self.navigator.navigate(f"{LIST_EQUIPMENT_PATH}?edit={listing_id}")

    def create(self) -> None:
        self.navigator.navigate(LIST_EQUIPMENT_PATH)

    def request_delete(self, listing_id: int) -> None:
        """Open the confirmation dialog; nothing is deleted yet."""
        listing = self._find(listing_id)
        if listing is None or not can_delete(self.session, listing):
            return
        self.pending_delete = listing_id

    def cancel_delete(self) -> None:
        self.pending_delete = None

    async def confirm_delete(self) -> bool:
        """Delete the listing awaiting confirmation. Irreversible."""
        listing_id = self.pending_delete
        if listing_id is None:
            return False
        token = self._generation.begin()
        try:
            if self.session is None:
                raise AuthenticationRequired("You must be signed in to delete listings.")
            await self.store.delete(listing_id)
        except LabExchangeError as e:
            if self._generation.is_current(token):
                report_error(e, self.notifier, self.navigator, "/", "Failed to delete listing.")
            return False
        finally:
            self.pending_delete = None

        logger.info(f"Deleted listing {listing_id}")
        if not self._generation.is_current(token):
            return True
        self.notifier.notify("Success", "Equipment listing deleted.")
        await self.load()
        return True
