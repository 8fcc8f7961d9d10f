"""Shared fixtures for the storefront tests."""

import pytest
from protean import current_domain
from storefront.cart.channel import CartChannel
from storefront.cart.memory_storage import InMemoryCartStorage
from storefront.cart.store import CartStore
from storefront.catalogue.product import Product, ProductCategory
from storefront.checkout.customer import CustomerInfo
from storefront.checkout.records import OrderRecords
from storefront.identity.user import CurrentUser, Role


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
@pytest.fixture()
def cart_storage():
    return InMemoryCartStorage()


@pytest.fixture()
def cart_channel():
    return CartChannel()


@pytest.fixture()
def cart(cart_storage, cart_channel):
    return CartStore(cart_storage, cart_channel)


# ---------------------------------------------------------------------------
# Catalogue
# ---------------------------------------------------------------------------
@pytest.fixture()
def make_product():
    def _make(name="Água Mineral 500ml", price=10.0, persist=False, **details):
        details.setdefault("category", ProductCategory.BEBIDAS.value)
        details.setdefault("unit", "un")
        product = Product.register(name=name, price=price, **details)
        if persist:
            current_domain.repository_for(Product).add(product)
        return product

    return _make


@pytest.fixture()
def water(make_product):
    return make_product("Água Mineral 500ml", 10.0)


@pytest.fixture()
def soap(make_product):
    return make_product("Sabonete Neutro", 5.0, category=ProductCategory.HIGIENE.value)


# ---------------------------------------------------------------------------
# People
# ---------------------------------------------------------------------------
@pytest.fixture()
def shopper():
    return CurrentUser(email="maria@example.com", full_name="Maria Silva", role=Role.CUSTOMER.value)


@pytest.fixture()
def other_shopper():
    return CurrentUser(email="joao@example.com", full_name="João Souza", role=Role.CUSTOMER.value)


@pytest.fixture()
def admin():
    return CurrentUser(email="admin@example.com", full_name="Ana Admin", role=Role.ADMIN.value)


@pytest.fixture()
def customer_info():
    return CustomerInfo(
        name="Maria Silva",
        email="maria@example.com",
        phone="+55 11 99999-0000",
        address="Rua das Flores, 123",
        notes="Ring twice",
    )


# ---------------------------------------------------------------------------
# Order records with injectable failures
# ---------------------------------------------------------------------------
class FlakyOrderRecords(OrderRecords):
    """Order records whose writes fail on demand, like a dropped connection."""

    def __init__(self, fail_on_item=None, fail_on_order=False, fail_on_status=False, fail_on_list=False):
        self.fail_on_item = fail_on_item
        self.fail_on_order = fail_on_order
        self.fail_on_status = fail_on_status
        self.fail_on_list = fail_on_list
        self.items_attempted = 0

    @staticmethod
    def _connection_reset():
        raise ConnectionError("connection reset by peer")

    def create_order(self, customer, total_amount, checkout_key=None):
        if self.fail_on_order:
            return self._call("create order", self._connection_reset)
        return super().create_order(customer, total_amount, checkout_key)

    def create_item(self, order_id, entry):
        self.items_attempted += 1
        if self.items_attempted == self.fail_on_item:
            return self._call("create order item", self._connection_reset)
        return super().create_item(order_id, entry)

    def update_status(self, order_id, status):
        if self.fail_on_status:
            return self._call("update order status", self._connection_reset)
        return super().update_status(order_id, status)

    def list_orders(self, **filters):
        if self.fail_on_list:
            return self._call("list orders", self._connection_reset)
        return super().list_orders(**filters)

    def heal(self):
        self.fail_on_item = None
        self.fail_on_order = False
        self.fail_on_status = False
        self.fail_on_list = False


@pytest.fixture()
def flaky_records():
    return FlakyOrderRecords
