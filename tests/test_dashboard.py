"""Tests for the seller dashboard."""

import asyncio

import pytest
from fakes import HeldEquipmentStore, InMemoryEquipmentStore, make_listing, make_session

from labexchange.core.dashboard import LIST_EQUIPMENT_PATH, DashboardView
from labexchange.core.errors import StoreError


@pytest.fixture
def owner_store():
    store = InMemoryEquipmentStore(acting_user=1)
    store.add(make_listing(1, owner_id=1, name="Old scope"))
    store.add(make_listing(2, owner_id=2, name="Not mine"))
    store.add(make_listing(3, owner_id=1, name="New scope", availability_status="sold"))
    return store


async def active_dashboard(store, navigator, notifier, user_id=1):
    view = DashboardView(store, navigator, notifier)
    await view.activate(make_session(user_id))
    return view


@pytest.mark.asyncio
async def test_lists_own_listings_newest_first(owner_store, navigator, notifier):
    view = await active_dashboard(owner_store, navigator, notifier)

    assert [row.id for row in view.listings] == [3, 1]
    _, query = owner_store.calls[0]
    assert query.owner_id == 1
    assert query.availability_status is None


@pytest.mark.asyncio
async def test_edit_navigates_to_form(owner_store, navigator, notifier):
    view = await active_dashboard(owner_store, navigator, notifier)

    view.edit(1)
    view.create()

    assert navigator.paths == [f"{LIST_EQUIPMENT_PATH}?edit=1", LIST_EQUIPMENT_PATH]


@pytest.mark.asyncio
async def test_delete_needs_confirmation(owner_store, navigator, notifier):
    view = await active_dashboard(owner_store, navigator, notifier)

    view.request_delete(1)
    assert view.delete_dialog_open
    assert "delete" not in owner_store.call_names()

    view.cancel_delete()
    assert not view.delete_dialog_open
    assert await view.confirm_delete() is False
    assert 1 in owner_store.records


@pytest.mark.asyncio
async def test_confirmed_delete_removes_and_reloads(owner_store, navigator, notifier):
    view = await active_dashboard(owner_store, navigator, notifier)

    view.request_delete(1)
    assert await view.confirm_delete() is True

    assert 1 not in owner_store.records
    assert [row.id for row in view.listings] == [3]
    assert notifier.messages == [("Success", "Equipment listing deleted.", "default")]
    assert owner_store.call_names() == ["list", "delete", "get", "list"]


@pytest.mark.asyncio
async def test_delete_of_unlisted_record_is_ignored(owner_store, navigator, notifier):
    view = await active_dashboard(owner_store, navigator, notifier)

    view.request_delete(2)

    assert not view.delete_dialog_open
    assert await view.confirm_delete() is False
    assert 2 in owner_store.records


@pytest.mark.asyncio
async def test_backend_rejection_reported(navigator, notifier):
    store = InMemoryEquipmentStore(acting_user=99)
    store.add(make_listing(1, owner_id=1))
    view = await active_dashboard(store, navigator, notifier)

    view.request_delete(1)
    assert await view.confirm_delete() is False

    assert 1 in store.records
    assert notifier.titles == ["Unauthorized"]
    assert not view.delete_dialog_open


@pytest.mark.asyncio
async def test_load_failure_reported(owner_store, navigator, notifier):
    owner_store.fail_with = StoreError("")

    view = await active_dashboard(owner_store, navigator, notifier)

    assert view.listings == []
    assert not view.loading
    assert notifier.descriptions == ["Failed to load your equipment."]
    assert navigator.paths == []


@pytest.mark.asyncio
async def test_delete_resolving_after_sign_out_does_not_reload(navigator, notifier):
    store = HeldEquipmentStore(acting_user=1)
    store.add(make_listing(1, owner_id=1))
    store.add(make_listing(2, owner_id=1))
    view = await active_dashboard(store, navigator, notifier)
    view.request_delete(1)

    pending = asyncio.create_task(view.confirm_delete())
    await asyncio.sleep(0)
    view.invalidate()
    store.release.set()

    assert await pending is True
    assert 1 not in store.records
    assert view.listings == []
    assert notifier.messages == []
    assert store.call_names() == ["list", "delete", "get"]


@pytest.mark.asyncio
async def test_delete_failure_after_unmount_is_not_reported(navigator, notifier):
    store = HeldEquipmentStore(acting_user=1)
    store.add(make_listing(1, owner_id=1))
    view = await active_dashboard(store, navigator, notifier)
    view.request_delete(1)
    store.fail_with = StoreError("connection reset")

    pending = asyncio.create_task(view.confirm_delete())
    await asyncio.sleep(0)
    view.unmount()
    store.release.set()

    assert await pending is False
    assert 1 in store.records
    assert notifier.messages == []
    assert not view.delete_dialog_open
