"""Shared BDD fixtures and step definitions for the storefront."""

import pytest
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then, when
from storefront.cart.badge import CartBadge
from storefront.cart.store import CartStore


@pytest.fixture()
def products():
    return {}


@pytest.fixture()
def error():
    """Container for the exception a When step captured."""
    return {"exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a catalogue product "{name}" priced {price:f}'))
def catalogue_product(make_product, products, name, price):
    products[name] = make_product(name, price, persist=True)


@given("an empty cart with a header badge", target_fixture="badge")
def empty_cart_with_badge(cart_storage, cart_channel):
    return CartBadge(CartStore(cart_storage, cart_channel))


@given(parsers.cfparse('{quantity:d} units of "{name}" are added to the cart'))
@when(parsers.cfparse('{quantity:d} units of "{name}" are added to the cart'))
def add_to_cart(cart, products, error, quantity, name):
    try:
        cart.add(products[name], quantity)
    except ValidationError as exc:
        error["exc"] = exc


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse("the header badge shows {count:d}"))
def badge_shows(badge, count):
    assert badge.count == count
