"""Listing detail page with the contact-seller flow."""

import logging
from collections.abc import Callable

from labexchange.core.errors import LabExchangeError, NotFound
from labexchange.core.feedback import report_error
from labexchange.core.generation import FetchGeneration
from labexchange.core.guard import capabilities
from labexchange.core.ports import EquipmentStore, Listing, Navigator, Notifier, Session
from labexchange.models.enums import CertificationStatus

logger = logging.getLogger(__name__)

BROWSE_PATH = "/equipment"
EMAIL_NOT_AVAILABLE = "not available"


def format_price(price: float) -> str:
    """Format a price as US dollars, e.g. 8500 -> "$8,500.00"."""
    return f"${price:,.2f}"


class ListingDetailView:
    """Single listing with seller summary.

    The seller's email is never part of the listing itself. It is fetched
    only after a signed-in buyer asks to contact the seller and then confirms
    the dialog.
    """

    def __init__(
        self,
        store: EquipmentStore,
        get_session: Callable[[], Session | None],
        navigator: Navigator,
        notifier: Notifier,
    ) -> None:
        self.store = store
        self._get_session = get_session
        self.navigator = navigator
        self.notifier = notifier
        self.listing: Listing | None = None
        self.loading = True
        self.contact_dialog_open = False
        self.seller_email: str | None = None
        self._generation = FetchGeneration()

    @property
    def is_certified(self) -> bool:
        return (
            self.listing is not None
            and self.listing.certification_status == CertificationStatus.CERTIFIED
        )

    @property
    def is_verified_seller(self) -> bool:
        return bool(self.listing and self.listing.seller and self.listing.seller.verified)

    @property
    def price_label(self) -> str:
        return format_price(self.listing.price) if self.listing else ""

    @property
    def can_edit(self) -> bool:
        if self.listing is None:
            return False
        return capabilities(self._get_session(), self.listing).edit

    async def mount(self, listing_id: int | None) -> None:
        self.listing = None
        self.seller_email = None
        self.contact_dialog_open = False
        if listing_id is None:
            self.loading = False
            report_error(
                NotFound("Equipment ID is missing."), self.notifier, self.navigator, BROWSE_PATH
            )
            return

        token = self._generation.begin()
        self.loading = True
        try:
            listing = await self.store.get(listing_id)
        except LabExchangeError as e:
            if self._generation.is_current(token):
                logger.error(f"Error fetching equipment details: {e}")
                self.loading = False
                report_error(
                    e,
                    self.notifier,
                    self.navigator,
                    BROWSE_PATH,
                    "Failed to load equipment details.",
                )
            return

        if not self._generation.is_current(token):
            return
        self.listing = listing
        self.loading = False

    def unmount(self) -> None:
        self._generation.close()

    def contact_seller(self) -> None:
        """Ask to contact the seller. Anonymous users are told to sign in."""
        if self._get_session() is None:
            self.notifier.notify(
                "Authentication Required", "Please sign in to contact the seller."
            )
            return
        self.contact_dialog_open = True

    async def confirm_contact(self) -> str | None:
        """Reveal the seller's email after the buyer confirmed the dialog."""
        if not self.contact_dialog_open or self.listing is None:
            return None
        if self._get_session() is None:
            self.contact_dialog_open = False
            return None
        try:
            contact = await self.store.contact(self.listing.id)
        except LabExchangeError as e:
            self.contact_dialog_open = False
            report_error(e, self.notifier, self.navigator, BROWSE_PATH)
            return None
        self.seller_email = contact.email or EMAIL_NOT_AVAILABLE
        return self.seller_email

    def dismiss_contact(self) -> None:
        self.contact_dialog_open = False
