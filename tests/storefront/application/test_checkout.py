"""Tests for the checkout coordinator: cart to Order plus OrderItems."""

import pytest
from protean.exceptions import ValidationError
from storefront.checkout.coordinator import CheckoutCoordinator
from storefront.checkout.customer import CustomerInfo
from storefront.checkout.records import OrderRecords
from storefront.exceptions import PersistenceError
from storefront.order.status import OrderStatus


@pytest.fixture()
def records():
    return OrderRecords()


@pytest.fixture()
def filled_cart(cart, water, soap):
    cart.add(water, 2)
    cart.add(soap, 3)
    return cart


class TestCheckoutValidation:
    def test_empty_cart_is_rejected_without_writes(self, cart, customer_info, records):
        with pytest.raises(ValidationError) as exc_info:
            CheckoutCoordinator(records).submit(cart, customer_info)

        assert "cart" in exc_info.value.messages
        assert records.list_orders() == []

    def test_missing_details_are_reported_per_field(self, filled_cart, records):
        info = CustomerInfo(name="Maria Silva", email="maria@example.com")

        with pytest.raises(ValidationError) as exc_info:
            CheckoutCoordinator(records).submit(filled_cart, info)

        assert set(exc_info.value.messages) == {"phone", "address"}
        assert exc_info.value.messages["phone"] == ["Phone is required"]
        assert records.list_orders() == []
        assert filled_cart.count() == 5


class TestSuccessfulCheckout:
    def test_order_carries_cart_total_and_pending_status(self, filled_cart, customer_info, records):
        order = CheckoutCoordinator(records).submit(filled_cart, customer_info)

        assert order.total_amount == 35.0
        assert order.status == OrderStatus.PENDING.value
        assert order.customer_email == "maria@example.com"
        assert order.delivery_address == "Rua das Flores, 123"
        assert order.checkout_key

    def test_one_item_per_cart_entry(self, filled_cart, customer_info, records, water, soap):
        order = CheckoutCoordinator(records).submit(filled_cart, customer_info)

        items = {item.product_id: item for item in records.items_for(order.id)}
        assert set(items) == {str(water.id), str(soap.id)}
        assert items[str(water.id)].quantity == 2
        assert items[str(water.id)].total_price == 20.0
        assert items[str(soap.id)].quantity == 3
        assert items[str(soap.id)].total_price == 15.0
        assert sum(item.total_price for item in items.values()) == order.total_amount

    def test_cart_is_cleared(self, filled_cart, customer_info, records):
        CheckoutCoordinator(records).submit(filled_cart, customer_info)
        assert filled_cart.is_empty()

    def test_clearing_notifies_the_cart_channel(self, filled_cart, cart_channel, customer_info, records):
        calls = []
        cart_channel.subscribe(lambda: calls.append(1))

        CheckoutCoordinator(records).submit(filled_cart, customer_info)
        assert calls == [1]

    def test_total_is_frozen_against_later_price_changes(self, filled_cart, customer_info, records, water):
        water.price = 99.0
        order = CheckoutCoordinator(records).submit(filled_cart, customer_info)
        assert order.total_amount == 35.0


class TestInterruptedCheckout:
    def test_item_failure_keeps_order_and_cart(self, filled_cart, customer_info, flaky_records):
        records = flaky_records(fail_on_item=2)

        with pytest.raises(PersistenceError):
            CheckoutCoordinator(records).submit(filled_cart, customer_info, checkout_key="attempt-1")

        orders = records.list_orders()
        assert len(orders) == 1
        assert orders[0].total_amount == 35.0
        assert len(records.items_for(orders[0].id)) == 1
        assert filled_cart.count() == 5

    def test_retry_with_same_key_resumes_the_order(self, filled_cart, customer_info, flaky_records):
        records = flaky_records(fail_on_item=2)
        coordinator = CheckoutCoordinator(records)
        with pytest.raises(PersistenceError):
            coordinator.submit(filled_cart, customer_info, checkout_key="attempt-1")

        records.heal()
        order = coordinator.submit(filled_cart, customer_info, checkout_key="attempt-1")

        assert len(records.list_orders()) == 1
        items = records.items_for(order.id)
        assert len(items) == 2
        assert len({item.product_id for item in items}) == 2
        assert filled_cart.is_empty()

    def test_retry_with_new_key_creates_a_second_order(self, filled_cart, customer_info, flaky_records):
        records = flaky_records(fail_on_item=2)
        coordinator = CheckoutCoordinator(records)
        with pytest.raises(PersistenceError):
            coordinator.submit(filled_cart, customer_info, checkout_key="attempt-1")

        records.heal()
        coordinator.submit(filled_cart, customer_info, checkout_key="attempt-2")

        assert len(records.list_orders()) == 2

    def test_reused_key_with_different_cart_is_rejected(self, filled_cart, customer_info, records, water):
        CheckoutCoordinator(records).submit(filled_cart, customer_info, checkout_key="attempt-1")

        filled_cart.add(water, 1)
        with pytest.raises(ValidationError) as exc_info:
            CheckoutCoordinator(records).submit(filled_cart, customer_info, checkout_key="attempt-1")
        assert "checkout_key" in exc_info.value.messages
        assert filled_cart.count() == 1

    def test_order_failure_writes_nothing(self, filled_cart, customer_info, flaky_records):
        records = flaky_records(fail_on_order=True)

        with pytest.raises(PersistenceError) as exc_info:
            CheckoutCoordinator(records).submit(filled_cart, customer_info)

        assert exc_info.value.operation == "create order"
        assert records.list_orders() == []
        assert records.items_attempted == 0
        assert filled_cart.count() == 5
