"""Public listing collection with local search and filters."""

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, replace

from labexchange.core.errors import LabExchangeError
from labexchange.core.generation import FetchGeneration
from labexchange.core.ports import Direction, EquipmentStore, Listing, ListingQuery, Notifier, Order
from labexchange.models.enums import AvailabilityStatus, Condition

logger = logging.getLogger(__name__)

ALL = "all"
EMPTY_MESSAGE = "No equipment found"
CONDITIONS = [condition.value for condition in Condition]


@dataclass(frozen=True)
class ListingFilters:
    """Search term plus category and condition selections ("all" = any)."""

    search: str = ""
    category: str = ALL
    condition: str = ALL


def matches_search(listing: Listing, term: str) -> bool:
    """Case-insensitive substring match on name, brand or category."""
    needle = term.lower()
    return (
        needle in listing.name.lower()
        or needle in listing.brand.lower()
        or needle in listing.category.lower()
    )


def matches_category(listing: Listing, category: str) -> bool:
    return category == ALL or listing.category == category


def matches_condition(listing: Listing, condition: str) -> bool:
    return condition == ALL or listing.condition == condition


def filter_listings(listings: Iterable[Listing], filters: ListingFilters) -> list[Listing]:
    """Apply all three predicates; order of the input is preserved."""
    return [
        listing
        for listing in listings
        if matches_search(listing, filters.search)
        and matches_category(listing, filters.category)
        and matches_condition(listing, filters.condition)
    ]


def distinct_categories(listings: Iterable[Listing]) -> list[str]:
    """Distinct categories in first-seen order."""
    return list(dict.fromkeys(listing.category for listing in listings))


class ListingCollectionView:
    """Browse view over all available listings, newest first.

    The store is read once per ``mount`` or ``refresh``. Every filter change
    recomputes ``visible`` synchronously from the loaded listings. A fetch
    result is applied only if no newer fetch started and the view is still
    mounted.
    """

    def __init__(self, store: EquipmentStore, notifier: Notifier) -> None:
        self.store = store
        self.notifier = notifier
        self.listings: list[Listing] = []
        self.categories: list[str] = []
        self.filters = ListingFilters()
        self.visible: list[Listing] = []
        self.loading = True
        self._generation = FetchGeneration()

    @property
    def count(self) -> int:
        return len(self.visible)

    @property
    def is_empty(self) -> bool:
        return not self.loading and not self.visible

    @property
    def summary(self) -> str:
        if self.is_empty:
            return EMPTY_MESSAGE
        return f"{self.count} items available"

    @property
    def conditions(self) -> list[str]:
        return list(CONDITIONS)

    async def mount(self) -> None:
        await self.refresh()

    def unmount(self) -> None:
        self._generation.close()

    async def refresh(self) -> None:
        token = self._generation.begin()
        self.loading = True
        try:
            listings = await self.store.list(
                ListingQuery(availability_status=AvailabilityStatus.AVAILABLE),
                Order("created_at", Direction.DESC),
            )
        except LabExchangeError as e:
            if self._generation.is_current(token):
                logger.error(f"Error fetching equipment: {e}")
                self.loading = False
                self.notifier.notify(
                    "Error", "Failed to load equipment. Please try again.", "destructive"
                )
            return

        if not self._generation.is_current(token):
            logger.debug(f"Discarding stale equipment fetch (generation {token})")
            return
        self._apply(listings)

    def _apply(self, listings: Sequence[Listing]) -> None:
        self.listings = list(listings)
        self.categories = distinct_categories(self.listings)
        self.loading = False
        self._recompute()

    def set_search(self, term: str) -> None:
        self.update_filters(search=term)

    def set_category(self, category: str) -> None:
        self.update_filters(category=category)

    def set_condition(self, condition: str) -> None:
        self.update_filters(condition=condition)

    def update_filters(self, **changes: str) -> None:
        self.filters = replace(self.filters, **changes)
        self._recompute()

    def clear_filters(self) -> None:
        self.filters = ListingFilters()
        self._recompute()

    def _recompute(self) -> None:
        self.visible = filter_listings(self.listings, self.filters)
