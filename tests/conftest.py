import itertools
import os
from pathlib import Path

import pytest
from protean.integrations.pytest import DomainFixture


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Select the config overlay before the domain is first imported."""
    os.environ["PROTEAN_ENV"] = session.config.option.env


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
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)
        elif "/bdd/" in test_path:
            item.add_marker(pytest.mark.bdd)


@pytest.fixture(scope="session")
def storefront_bed():
    from storefront.domain import storefront

    bed = DomainFixture(storefront)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(storefront_bed):
    with storefront_bed.domain_context():
        yield


# ---------------------------------------------------------------------------
# Accounts
# ---------------------------------------------------------------------------
@pytest.fixture()
def sign_up():
    """Factory: sign up a user and return the stored ``User``."""
    from protean import current_domain
    from storefront.identity.account import SignUp
    from storefront.identity.user import User

    def _sign_up(name="Jane Shopper", email="jane@example.com", password="secret-pass"):
        user_id = current_domain.process(SignUp(name=name, email=email, password=password), asynchronous=False)
        return current_domain.repository_for(User).get(user_id)

    return _sign_up


@pytest.fixture()
def customer(sign_up):
    return sign_up()


@pytest.fixture()
def other_customer(sign_up):
    return sign_up(name="Sam Other", email="sam@example.com")


@pytest.fixture()
def admin(sign_up):
    from protean import current_domain
    from storefront.identity.account import PromoteToAdmin
    from storefront.identity.user import User

    user = sign_up(name="Ada Admin", email="admin@example.com")
    current_domain.process(PromoteToAdmin(user_id=str(user.id)), asynchronous=False)
    return current_domain.repository_for(User).get(user.id)


@pytest.fixture()
def auth_headers():
    """Factory: bearer headers for a stored ``User``."""
    from storefront.identity.tokens import issue_token

    def _headers(user):
        return {"Authorization": f"Bearer {issue_token(user)}"}

    return _headers


# ---------------------------------------------------------------------------
# Catalogue
# ---------------------------------------------------------------------------
@pytest.fixture()
def add_product():
    """Factory: list a product and return its id."""
    from protean import current_domain
    from storefront.catalogue.management import AddProduct

    counter = itertools.count(1)

    def _add_product(**overrides):
        number = next(counter)
        data = {
            "name": f"Product {number}",
            "description": "A sturdy, well made product.",
            "price": 10.0,
            "stock": 5,
            "category": "general",
        }
        data.update(overrides)
        return current_domain.process(AddProduct(**data), asynchronous=False)

    return _add_product


@pytest.fixture()
def product_id(add_product):
    return add_product(name="Walnut Desk", price=250.0)


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
@pytest.fixture()
def fill_cart():
    """Factory: add each product once to the user's cart, in the given order."""
    from protean import current_domain
    from storefront.cart.items import AddToCart

    def _fill_cart(user_id, *product_ids):
        for pid in product_ids:
            current_domain.process(AddToCart(user_id=str(user_id), product_id=pid), asynchronous=False)

    return _fill_cart


# ---------------------------------------------------------------------------
# HTTP
# ---------------------------------------------------------------------------
@pytest.fixture()
def client():
    from fastapi.testclient import TestClient
    from storefront.api import create_app

    return TestClient(create_app())
