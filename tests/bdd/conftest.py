"""Shared BDD fixtures and step definitions for the order lifecycle."""

import pytest
from protean.utils.globals import current_domain
from pytest_bdd import given, parsers, then
from storefront.catalogue.product import Product
from storefront.customer.user import User
from storefront.order.lifecycle import OrderLifecycle


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def lifecycle():
    return OrderLifecycle()


@pytest.fixture()
def products():
    """Products created by the scenario, by name."""
    return {}


@pytest.fixture()
def outcome():
    """Container for the order under test and any captured error."""
    return {"order": None, "exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("a registered user", target_fixture="user")
def registered_user():
    user = User.register(name="Jane Doe", email="jane@example.com")
    current_domain.repository_for(User).add(user)
    return user


@given(parsers.cfparse('a product "{name}" priced {price:f} with {stock:d} in stock'))
def product_in_stock(products, name, price, stock):
    product = Product.add(
        name=name,
        description=f"{name} description",
        category="Gadgets",
        price=price,
        stock_quantity=stock,
    )
    current_domain.repository_for(Product).add(product)
    products[name] = product


# ---------------------------------------------------------------------------
# Then steps (shared)
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the order is "{status}"'))
def order_status_is(lifecycle, outcome, status):
    assert lifecycle.get_order(outcome["order"].id).status == status


@then(parsers.cfparse('"{name}" has {stock:d} in stock'))
def product_stock_is(products, name, stock):
    assert current_domain.repository_for(Product).get(products[name].id).stock_quantity == stock
