from unittest.mock import Mock

import pytest

from retail_cart.exceptions import CartApiError, NoResponseError, UnsupportedCartOperation
from retail_cart.services.cart_api import CartApiClient
from retail_cart.services.cart_store import CartStore
from retail_cart.services.cart_sync import CartSyncService


@pytest.fixture
def client(cart_data):
    client = Mock(spec=CartApiClient)
    client.get_cart.return_value = cart_data
    return client


@pytest.fixture
def sync(store, client):
    return CartSyncService(store, client)


class TestLoad:

    def test_load_replaces_store_state(self, client, cart_data):
        sync = CartSyncService(CartStore(), client)

        state = sync.load("tok")

        assert state.cart_id == 42
        assert len(sync.store.items) == 5
        client.get_cart.assert_called_once_with("tok")


class TestOptimisticUpdates:

    def test_confirmed_update_is_kept(self, sync, client):
        assert sync.update_quantity("tok", 102, 4) is True

        assert sync.store.find_item(102, "additional").quantity == 4
        client.update_product_quantity.assert_called_once_with(102, 4, "tok")

    def test_rejected_update_is_rolled_back(self, sync, client):
        client.update_product_quantity.side_effect = CartApiError("Out of stock", status_code=400)

        with pytest.raises(CartApiError, match="Out of stock"):
            sync.update_quantity("tok", 102, 40)

        potato = sync.store.find_item(102, "additional")
        assert potato.quantity == 2
        assert potato.total_price == 500

    def test_unknown_item_makes_no_call(self, sync, client):
        assert sync.update_quantity("tok", 999, 4) is False

        client.update_product_quantity.assert_not_called()

    def test_package_quantity_is_refused_before_any_call(self, sync, client):
        with pytest.raises(UnsupportedCartOperation):
            sync.update_quantity("tok", 7, 2, "package")

        client.update_package_quantity.assert_not_called()


class TestOptimisticRemoval:

    def test_remove_package_calls_package_endpoint(self, sync, client):
        assert sync.remove("tok", 7, "package") is True

        client.remove_package.assert_called_once_with(7, "tok")
        assert sync.store.state.packages == []

    def test_failed_removal_is_rolled_back(self, sync, client):
        client.remove_product.side_effect = NoResponseError()

        with pytest.raises(NoResponseError):
            sync.remove("tok", 201, "additional")

        assert sync.store.find_item(201, "additional") is not None
        assert len(sync.store.state.additional_items) == 2

    def test_second_removal_is_a_no_op(self, sync, client):
        sync.remove("tok", 201, "additional")

        assert sync.remove("tok", 201, "additional") is False
        client.remove_product.assert_called_once_with(201, "tok")

    def test_bulk_removal_keeps_confirmed_removals(self, sync, client):
        client.remove_product.side_effect = [None, CartApiError("nope", status_code=500)]

        with pytest.raises(CartApiError):
            sync.remove_products("tok", [101, 102, 201])

        ids = [i.id for i in sync.store.items if i.item_type == "additional"]
        assert ids == [102, 201]
        assert [g.package_name for g in sync.store.state.additional_items] == ["miscellaneous", "fruits"]

    def test_bulk_removal(self, sync, client):
        assert sync.remove_products("tok", [101, 201]) == [101, 201]

        assert client.remove_product.call_count == 2
        assert [i.id for i in sync.store.items if i.item_type == "additional"] == [102]


class TestDeferredUpdates:

    def test_queued_quantity_is_local_only(self, sync, client):
        assert sync.queue_quantity(101, 250) is True

        assert sync.store.find_item(101, "additional").quantity == 250
        assert sync.pending == {101: 250}
        client.update_product_quantity.assert_not_called()

    def test_flush_pushes_then_refetches(self, sync, client):
        sync.queue_quantity(101, 250)
        sync.queue_quantity(102, 3)

        sync.flush_pending("tok")

        assert client.update_product_quantity.call_count == 2
        client.get_cart.assert_called_once_with("tok")
        assert sync.pending == {}

    def test_failed_flush_restores_unsent_quantities(self, sync, client):
        sync.queue_quantity(101, 250)
        sync.queue_quantity(102, 3)
        client.update_product_quantity.side_effect = [None, CartApiError("Out of stock")]

        with pytest.raises(CartApiError, match="Out of stock"):
            sync.flush_pending("tok")

        assert sync.store.find_item(101, "additional").quantity == 250
        assert sync.store.find_item(102, "additional").quantity == 2
        assert sync.pending == {}
        client.get_cart.assert_not_called()

    def test_requeued_item_rolls_back_to_last_confirmed_quantity(self, sync, client):
        sync.queue_quantity(102, 3)
        sync.queue_quantity(102, 5)
        client.update_product_quantity.side_effect = CartApiError("nope")

        with pytest.raises(CartApiError):
            sync.flush_pending("tok")

        assert sync.store.find_item(102, "additional").quantity == 2
        assert sync.confirmed == {}

    def test_queue_unknown_item(self, sync):
        assert sync.queue_quantity(999, 1) is False
        assert sync.pending == {}


class TestConcurrentMutations:
    """A rollback only undoes its own change, never another request's."""

    def test_failed_update_keeps_removal_confirmed_meanwhile(self, sync, client):
        def remove_package_then_fail(item_id, quantity, token):
            assert sync.remove("tok", 7, "package") is True
            raise CartApiError("Out of stock", status_code=400)

        client.update_product_quantity.side_effect = remove_package_then_fail

        with pytest.raises(CartApiError):
            sync.update_quantity("tok", 102, 40)

        client.remove_package.assert_called_once_with(7, "tok")
        assert sync.store.state.packages == []
        assert sync.store.find_item(102, "additional").quantity == 2

    def test_failed_removal_keeps_update_confirmed_meanwhile(self, sync, client):
        def update_then_fail(item_id, token):
            assert sync.update_quantity("tok", 102, 5) is True
            raise NoResponseError()

        client.remove_product.side_effect = update_then_fail

        with pytest.raises(NoResponseError):
            sync.remove("tok", 201, "additional")

        assert sync.store.find_item(201, "additional") is not None
        assert sync.store.find_item(102, "additional").quantity == 5

    def test_rollback_does_not_overwrite_a_newer_quantity(self, sync, client):
        def overwrite_then_fail(item_id, quantity, token):
            sync.queue_quantity(102, 7)
            raise CartApiError("nope")

        client.update_product_quantity.side_effect = overwrite_then_fail

        with pytest.raises(CartApiError):
            sync.update_quantity("tok", 102, 40)

        assert sync.store.find_item(102, "additional").quantity == 7
