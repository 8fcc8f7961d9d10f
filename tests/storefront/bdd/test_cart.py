"""BDD tests for the shared shopping cart."""

import pytest
from protean.exceptions import ValidationError
from pytest_bdd import parsers, scenarios, then, when

scenarios("features/cart.feature")


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.cfparse('the quantity of "{name}" is set to {quantity:d}'))
def set_quantity(cart, products, name, quantity):
    cart.set_quantity(products[name].id, quantity)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse("the cart has {count:d} entry"))
def cart_has_one_entry(cart, count):
    assert len(cart.load()) == count


@then(parsers.cfparse("the cart has {count:d} entries"))
def cart_has_entries(cart, count):
    assert len(cart.load()) == count


@then(parsers.cfparse('the cart holds {quantity:d} units of "{name}"'))
def cart_holds(cart, products, quantity, name):
    assert cart.quantity_of(products[name].id) == quantity


@then(parsers.cfparse("the cart total is {total:f}"))
def cart_total(cart, total):
    assert cart.total() == pytest.approx(total)


@then("the cart change is rejected")
def cart_change_rejected(error):
    assert isinstance(error["exc"], ValidationError)
