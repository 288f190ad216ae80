import os
from pathlib import Path

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/bdd/" in test_path:
            item.add_marker(pytest.mark.bdd)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(scope="session")
def _storefront_domain(request):
    """Initialize the storefront domain once per session."""
    os.environ["PROTEAN_ENV"] = request.config.option.env

    from storefront.domain import storefront

    storefront.init()
    return storefront


@pytest.fixture(scope="session", autouse=True)
def setup_db(_storefront_domain):
    from storefront.utils.db import drop_db, setup_db

    setup_db(_storefront_domain)

    yield

    drop_db(_storefront_domain)


@pytest.fixture(autouse=True)
def run_around_tests(_storefront_domain):
    """Push domain context before each test, cleanup after."""
    ctx = _storefront_domain.domain_context()
    ctx.push()

    yield

    from protean import current_domain

    for _, provider in current_domain.providers.items():
        provider._data_reset()

    for _, broker in current_domain.brokers.items():
        broker._data_reset()

    current_domain.event_store.store._data_reset()
    ctx.pop()


# ---------------------------------------------------------------------------
# Shared fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def user():
    from protean import current_domain
    from storefront.customer.user import User

    user = User.register(name="Jane Doe", email="jane@example.com")
    current_domain.repository_for(User).add(user)
    return user


@pytest.fixture()
def make_product():
    """Factory that persists a product with the given price and stock."""
    from protean import current_domain
    from storefront.catalogue.product import Product

    def _make(name="Widget", price=100.0, stock=10, category="Gadgets"):
        product = Product.add(
            name=name,
            description=f"{name} description",
            category=category,
            price=price,
            stock_quantity=stock,
        )
        current_domain.repository_for(Product).add(product)
        return product

    return _make


@pytest.fixture()
def stock_of():
    """Current persisted stock of a product."""
    from protean import current_domain
    from storefront.catalogue.product import Product

    def _stock(product):
        return current_domain.repository_for(Product).get(product.id).stock_quantity

    return _stock
