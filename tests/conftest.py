from decimal import Decimal
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from storefront.data.models import Address, Category, Product, User
from storefront.data.seed import ALICE_ID, seed
from storefront.main import create_app
from storefront.repos.auth_store import AuthStore
from storefront.repos.memory_store import MemoryStore
from storefront.utils.ids import new_id, utcnow


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)


@pytest.fixture()
def store():
    return MemoryStore()


@pytest.fixture()
def seeded_store(store):
    seed(store)
    return store


@pytest.fixture()
def auth_store():
    return AuthStore()


@pytest.fixture()
def app(seeded_store, auth_store):
    return create_app(store=seeded_store, auth_store=auth_store, seed=False)


@pytest.fixture()
def client(app):
    return TestClient(app)


@pytest.fixture()
def token(auth_store):
    return auth_store.login("alice@example.com", "password123").token


@pytest.fixture()
def auth_headers(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def alice_id():
    return ALICE_ID


@pytest.fixture()
def address():
    return Address(street="1 Main St", city="Springfield", state="IL", postal_code="62701", country="USA")


@pytest.fixture()
def make_category(store):
    def _make(name="Misc", parent_id=None):
        now = utcnow()
        return store.create_category(
            Category(id=new_id(), name=name, parent_id=parent_id, created_at=now, updated_at=now)
        )

    return _make


@pytest.fixture()
def make_product(store):
    def _make(name="Widget", price="10.00", stock=10, category_id="1", description=""):
        now = utcnow()
        return store.create_product(
            Product(
                id=new_id(),
                name=name,
                description=description,
                price=Decimal(price),
                stock=stock,
                category_id=category_id,
                created_at=now,
                updated_at=now,
            )
        )

    return _make


@pytest.fixture()
def make_user(store, address):
    def _make(name="Test User", email=None, with_address=True):
        now = utcnow()
        return store.create_user(
            User(
                id=new_id(),
                email=email or f"{new_id()}@example.com",
                name=name,
                address=address if with_address else None,
                created_at=now,
                updated_at=now,
            )
        )

    return _make
