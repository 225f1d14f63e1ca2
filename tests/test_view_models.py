"""Tests for the per-screen state holders."""

import pytest

from inventory.models.item import Item
from inventory.schemas.item import ItemDetails
from inventory.ui.home import HomeViewModel
from inventory.ui.item_details import ItemDetailsViewModel
from inventory.ui.item_edit import ItemEditViewModel
from inventory.ui.item_entry import ItemEntryViewModel


class TestHomeViewModel:
    async def test_initial_state_is_empty(self, repository):
        view_model = HomeViewModel(repository)
        try:
            assert view_model.home_ui_state.item_list == []
        finally:
            await view_model.aclose()

    async def test_tracks_latest_item_list(self, repository, pen, game):
        view_model = HomeViewModel(repository)
        try:
            await repository.insert_item(pen)
            await repository.insert_item(game)

            state = await view_model.wait_for(
                lambda s: len(s.item_list) == 2, timeout=5
            )
            assert state.item_list == [game, pen]
        finally:
            await view_model.aclose()

    async def test_listeners_receive_each_snapshot(self, repository, pen):
        view_model = HomeViewModel(repository)
        seen = []
        view_model.add_listener(lambda state: seen.append(state.item_list))
        try:
            await view_model.wait_for(lambda s: True)
            await repository.insert_item(pen)
            await view_model.wait_for(lambda s: s.item_list == [pen], timeout=5)

            assert seen[-1] == [pen]
        finally:
            await view_model.aclose()

    async def test_close_ends_subscription(self, repository, store):
        view_model = HomeViewModel(repository)
        await view_model.wait_for(lambda s: store.active_subscriptions == 1, timeout=5)

        await view_model.aclose()

        assert view_model.closed
        assert store.active_subscriptions == 0


class TestItemEntryViewModel:
    async def test_update_ui_state_computes_validity(self, repository):
        view_model = ItemEntryViewModel(repository)

        view_model.update_ui_state(ItemDetails(name="TV", price="", quantity="5"))
        assert not view_model.item_ui_state.is_entry_valid

        view_model.update_ui_state(ItemDetails(name="TV", price="abc", quantity="5"))
        assert view_model.item_ui_state.is_entry_valid

    async def test_save_persists_lossy_draft(self, repository):
        view_model = ItemEntryViewModel(repository)
        view_model.update_ui_state(ItemDetails(name="TV", price="abc", quantity="5"))

        new_id = await view_model.save_item()

        stored = await repository.get_item_stream(new_id).first()
        assert stored == Item(id=new_id, name="TV", price=0.0, quantity=5)

    async def test_save_coerces_oversized_quantity_to_zero(self, repository):
        view_model = ItemEntryViewModel(repository)
        view_model.update_ui_state(
            ItemDetails(name="TV", price="1", quantity="99999999999999999999")
        )

        new_id = await view_model.save_item()

        stored = await repository.get_item_stream(new_id).first()
        assert stored == Item(id=new_id, name="TV", price=1.0, quantity=0)

    async def test_save_with_invalid_draft_does_nothing(self, repository):
        view_model = ItemEntryViewModel(repository)
        view_model.update_ui_state(ItemDetails(name="", price="1", quantity="1"))

        assert await view_model.save_item() is None
        assert await repository.get_all_items_stream().first() == []


class TestItemEditViewModel:
    async def test_loads_item_into_valid_draft(self, repository, pen):
        await repository.insert_item(pen)
        view_model = ItemEditViewModel(pen.id, repository)
        try:
            state = await view_model.wait_until_loaded()

            assert state.is_entry_valid
            assert state.item_details == ItemDetails(
                id=1, name="Pen", price="200.0", quantity="30"
            )
        finally:
            await view_model.aclose()

    async def test_waits_for_item_to_exist(self, repository, pen):
        view_model = ItemEditViewModel(pen.id, repository)
        try:
            assert not view_model.loaded
            await repository.insert_item(pen)

            state = await view_model.wait_until_loaded()
            assert state.item_details.name == "Pen"
        finally:
            await view_model.aclose()

    async def test_update_item_overwrites_same_row(self, repository, pen, game):
        await repository.insert_item(pen)
        await repository.insert_item(game)
        view_model = ItemEditViewModel(pen.id, repository)
        await view_model.wait_until_loaded()

        view_model.update_ui_state(
            view_model.item_ui_state.item_details.model_copy(update={"price": "180"})
        )
        assert await view_model.update_item()

        assert await repository.get_all_items_stream().first() == [
            game,
            pen.copy(price=180.0),
        ]

    async def test_update_item_with_invalid_draft_does_nothing(self, repository, pen):
        await repository.insert_item(pen)
        view_model = ItemEditViewModel(pen.id, repository)
        await view_model.wait_until_loaded()

        view_model.update_ui_state(
            view_model.item_ui_state.item_details.model_copy(update={"quantity": ""})
        )

        assert not await view_model.update_item()
        assert await repository.get_item_stream(pen.id).first() == pen


class TestItemDetailsViewModel:
    async def _open(self, repository, item):
        view_model = ItemDetailsViewModel(item.id, repository)
        await view_model.wait_for(lambda s: s.item_details.id == item.id, timeout=5)
        return view_model

    async def test_shows_item(self, repository, pen):
        await repository.insert_item(pen)
        view_model = await self._open(repository, pen)
        try:
            assert view_model.ui_state.item_details == pen.to_item_details()
            assert not view_model.ui_state.out_of_stock
        finally:
            await view_model.aclose()

    async def test_sell_decrements_quantity(self, repository, pen):
        await repository.insert_item(pen)
        view_model = await self._open(repository, pen)
        try:
            await view_model.reduce_quantity_by_one()

            state = await view_model.wait_for(
                lambda s: s.item_details.quantity == "29", timeout=5
            )
            assert not state.out_of_stock
            assert await repository.get_item_stream(pen.id).first() == pen.copy(quantity=29)
        finally:
            await view_model.aclose()

    async def test_last_sale_marks_out_of_stock(self, repository):
        item = Item(id=5, name="Lamp", price=9.0, quantity=1)
        await repository.insert_item(item)
        view_model = await self._open(repository, item)
        try:
            await view_model.reduce_quantity_by_one()

            state = await view_model.wait_for(lambda s: s.out_of_stock, timeout=5)
            assert state.item_details.quantity == "0"
        finally:
            await view_model.aclose()

    async def test_sell_when_out_of_stock_is_noop(self, repository):
        item = Item(id=5, name="Lamp", price=9.0, quantity=0)
        await repository.insert_item(item)
        view_model = await self._open(repository, item)
        try:
            assert view_model.ui_state.out_of_stock

            await view_model.reduce_quantity_by_one()

            assert view_model.ui_state.out_of_stock
            assert await repository.get_item_stream(item.id).first() == item
        finally:
            await view_model.aclose()

    async def test_delete_removes_item(self, repository, pen, game):
        await repository.insert_item(pen)
        await repository.insert_item(game)
        view_model = await self._open(repository, pen)
        try:
            await view_model.delete_item()

            assert await repository.get_item_stream(pen.id).first() is None
            assert await repository.get_all_items_stream().first() == [game]
            # The last known item stays on screen until navigation
            assert view_model.ui_state.item_details.name == "Pen"
        finally:
            await view_model.aclose()


class TestViewModelScope:
    async def test_launch_after_close_is_rejected(self, repository):
        view_model = ItemEntryViewModel(repository)
        view_model.close()

        async def noop():
            return None

        coro = noop()
        with pytest.raises(RuntimeError):
            view_model.launch(coro)
        coro.close()

    async def test_wait_for_surfaces_background_failure(self, repository):
        view_model = ItemEntryViewModel(repository)

        async def boom():
            raise ValueError("disk gone")

        waiter = view_model.wait_for(lambda s: s.is_entry_valid, timeout=5)
        view_model.launch(boom())

        with pytest.raises(ValueError, match="disk gone"):
            await waiter
