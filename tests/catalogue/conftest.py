import os

import pytest


@pytest.fixture(scope="session")
def _catalogue_domain(request):
    """Initialize the catalogue domain once per session."""
    os.environ["PROTEAN_ENV"] = request.config.option.env

    from catalogue.domain import catalogue

    catalogue.init()
    return catalogue


@pytest.fixture(scope="session", autouse=True)
def setup_db(_catalogue_domain):
    from catalogue.domain import catalogue
    from catalogue.utils.db import drop_db, setup_db

    setup_db(catalogue)

    yield

    drop_db(catalogue)


@pytest.fixture(autouse=True)
def run_around_tests(_catalogue_domain):
    """Push domain context before each test, cleanup after."""
    ctx = _catalogue_domain.domain_context()
    ctx.push()

    yield

    from protean import current_domain

    for _, provider in current_domain.providers.items():
        provider._data_reset()

    current_domain.event_store.store._data_reset()
    ctx.pop()


@pytest.fixture()
def repository():
    from catalogue.product.product import Product
    from protean import current_domain

    return current_domain.repository_for(Product)


@pytest.fixture()
def admin():
    from catalogue.api.auth import CurrentUser

    return CurrentUser(id="admin-1", name="Admin User", is_admin=True)


@pytest.fixture()
def make_product(repository):
    """Persist a product built from the stub defaults plus ``overrides``."""
    from catalogue import settings

    def _make(**overrides):
        return repository.create({**settings.STUB_PRODUCT_DEFAULTS, "user_id": "admin-1", **overrides})

    return _make


@pytest.fixture()
def shopper():
    """Factory for authenticated, non-admin users."""
    from catalogue.api.auth import CurrentUser

    def _shopper(user_id, name=None):
        return CurrentUser(id=user_id, name=name or user_id.title())

    return _shopper
