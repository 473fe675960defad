"""Tests for the listing form controller."""

import asyncio

import pytest
from fakes import HeldEquipmentStore, InMemoryEquipmentStore, make_listing, make_session

from labexchange.core.errors import StoreError
from labexchange.core.form import DEFAULT_VALUES, FormMode, ListingFormController
from labexchange.core.navigator import SIGN_IN_PATH, SessionGatedNavigator
from labexchange.core.session import SessionProvider
from labexchange.models.enums import AvailabilityStatus

DRAFT = {
    "name": "  Olympus BX51 ",
    "brand": "Olympus",
    "model": "BX51",
    "description": "",
    "price": "8500",
    "condition": "excellent",
    "category": "Microscopes",
    "location": " Boston ",
}


async def signed_in_form(store, navigator, notifier, edit_id=None, user_id=1):
    form = ListingFormController(store, navigator, notifier, edit_id=edit_id)
    await form.activate(make_session(user_id))
    return form


class TestCreate:
    @pytest.mark.asyncio
    async def test_create_round_trip(self, store, navigator, notifier):
        form = await signed_in_form(store, navigator, notifier)
        assert form.mode == FormMode.CREATE
        assert form.title == "List Your Equipment"

        listing = await form.submit(DRAFT)

        assert listing is not None
        stored = await store.get(listing.id)
        assert stored.name == "Olympus BX51"
        assert stored.brand == "Olympus"
        assert stored.model == "BX51"
        assert stored.description is None
        assert stored.price == 8500.0
        assert stored.condition == "excellent"
        assert stored.category == "Microscopes"
        assert stored.location == "Boston"
        assert stored.owner_id == 1
        assert stored.availability_status == AvailabilityStatus.AVAILABLE
        assert stored.images == []
        assert stored.tags == []
        assert navigator.paths == ["/dashboard"]
        assert notifier.titles == ["Success!"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("price", [0, -5, "0", "abc"])
    async def test_invalid_price_never_reaches_store(self, store, navigator, notifier, price):
        form = await signed_in_form(store, navigator, notifier)

        result = await form.submit({**DRAFT, "price": price})

        assert result is None
        assert store.calls == []
        assert form.field_errors("price") == ["Price must be a positive number"]
        assert navigator.paths == []

    @pytest.mark.asyncio
    async def test_over_length_input_never_reaches_store(self, store, navigator, notifier):
        form = await signed_in_form(store, navigator, notifier)

        await form.submit({**DRAFT, "location": "x" * 300})

        assert store.calls == []
        assert form.field_errors("location")

    @pytest.mark.asyncio
    async def test_store_failure_keeps_state_and_stays(self, store, navigator, notifier):
        form = await signed_in_form(store, navigator, notifier)
        store.fail_with = StoreError("duplicate key value")

        result = await form.submit(DRAFT)

        assert result is None
        assert navigator.paths == []
        assert notifier.messages == [("Error", "duplicate key value", "destructive")]
        assert form.values["name"] == DRAFT["name"]
        assert not form.is_submitting

    @pytest.mark.asyncio
    async def test_create_without_session_drops_draft(self, store, navigator, notifier):
        form = ListingFormController(store, navigator, notifier)

        result = await form.submit(DRAFT)

        assert result is None
        assert store.calls == []
        assert navigator.paths == ["/auth"]
        assert form.values == DEFAULT_VALUES

    @pytest.mark.asyncio
    async def test_navigation_waits_for_store(self, navigator, notifier):
        seen_paths = []

        class CheckingStore(InMemoryEquipmentStore):
            async def insert(self, record):
                seen_paths.append(list(navigator.paths))
                return await super().insert(record)

        form = await signed_in_form(CheckingStore(), navigator, notifier)
        await form.submit(DRAFT)

        assert seen_paths == [[]]
        assert navigator.paths == ["/dashboard"]


class TestEdit:
    @pytest.mark.asyncio
    async def test_edit_loads_owned_record(self, store, navigator, notifier):
        store.add(make_listing(5, owner_id=1, name="Nikon Eclipse", model=None))

        form = await signed_in_form(store, navigator, notifier, edit_id=5)

        assert form.mode == FormMode.EDIT
        assert form.submit_label == "Save Changes"
        assert not form.loading
        assert form.values["name"] == "Nikon Eclipse"
        assert form.values["model"] == ""
        assert form.values["condition"] == "good"

    @pytest.mark.asyncio
    async def test_edit_foreign_record_never_populates(self, store, navigator, notifier):
        store.add(make_listing(5, owner_id=2, name="Secret draft"))

        form = await signed_in_form(store, navigator, notifier, edit_id=5, user_id=1)

        assert form.values == DEFAULT_VALUES
        assert "Secret draft" not in form.values.values()
        assert navigator.paths == ["/dashboard"]
        assert notifier.titles == ["Unauthorized"]

        await form.submit(DRAFT)
        assert "update" not in store.call_names()

    @pytest.mark.asyncio
    async def test_edit_missing_record(self, store, navigator, notifier):
        form = await signed_in_form(store, navigator, notifier, edit_id=404)

        assert navigator.paths == ["/dashboard"]
        assert notifier.descriptions == ["Could not load equipment data."]
        assert form.values == DEFAULT_VALUES

    @pytest.mark.asyncio
    async def test_edit_updates_only_mutable_fields(self, store, navigator, notifier):
        original = store.add(make_listing(5, owner_id=1, name="Nikon Eclipse"))
        form = await signed_in_form(store, navigator, notifier, edit_id=5)

        listing = await form.submit({"price": "1200", "condition": "fair"})

        _, (listing_id, fields) = store.calls[-2]
        assert listing_id == 5
        assert set(fields) == {
            "name", "brand", "model", "description", "price", "condition", "category", "location"
        }
        assert listing.price == 1200.0
        assert listing.owner_id == original.owner_id
        assert listing.created_at == original.created_at
        assert listing.availability_status == original.availability_status
        assert navigator.paths == ["/dashboard"]
        assert notifier.descriptions == ["Your equipment has been updated."]

    @pytest.mark.asyncio
    async def test_backend_rejection_redirects(self, navigator, notifier):
        # Backend says the acting user is someone else
        store = InMemoryEquipmentStore(acting_user=99)
        store.add(make_listing(5, owner_id=1))
        form = await signed_in_form(store, navigator, notifier, edit_id=5)

        result = await form.submit({"price": "1"})

        assert result is None
        assert store.records[5].price == 100.0
        assert navigator.paths == ["/dashboard"]
        assert notifier.titles == ["Unauthorized"]

    @pytest.mark.asyncio
    async def test_sign_out_clears_loaded_values(self, store, navigator, notifier):
        store.add(make_listing(5, owner_id=1, name="Nikon Eclipse"))
        form = await signed_in_form(store, navigator, notifier, edit_id=5)

        form.invalidate()

        assert form.values == DEFAULT_VALUES
        assert form.session is None


class TestSubmitAfterSignOut:
    @pytest.mark.asyncio
    async def test_create_resolving_after_sign_out_is_dropped(self, navigator, notifier):
        store = HeldEquipmentStore()
        form = await signed_in_form(store, navigator, notifier)

        pending = asyncio.create_task(form.submit(DRAFT))
        await asyncio.sleep(0)
        assert form.is_submitting
        form.invalidate()
        store.release.set()

        assert await pending is None
        assert navigator.paths == []
        assert notifier.messages == []
        assert form.values == DEFAULT_VALUES
        assert not form.is_submitting

    @pytest.mark.asyncio
    async def test_failure_after_sign_out_is_not_reported(self, navigator, notifier):
        store = HeldEquipmentStore()
        form = await signed_in_form(store, navigator, notifier)
        store.fail_with = StoreError("connection reset")

        pending = asyncio.create_task(form.submit(DRAFT))
        await asyncio.sleep(0)
        form.unmount()
        store.release.set()

        assert await pending is None
        assert notifier.messages == []
        assert navigator.paths == []

    @pytest.mark.asyncio
    async def test_edit_stays_on_sign_in_after_sign_out(self, auth_backend, navigator, notifier):
        sessions = SessionProvider(auth_backend)
        gate = SessionGatedNavigator(sessions, navigator, notifier)
        await sessions.sign_in("seller@example.com", "pw")
        store = HeldEquipmentStore()
        store.add(make_listing(5, owner_id=1))
        form = ListingFormController(store, navigator, notifier, edit_id=5)
        await gate.mount(form)

        pending = asyncio.create_task(form.submit({"price": "1200"}))
        await asyncio.sleep(0)
        await sessions.sign_out()
        store.release.set()

        assert await pending is None
        assert navigator.paths == [SIGN_IN_PATH]
        assert notifier.titles == ["Authentication Required"]
