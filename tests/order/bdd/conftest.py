"""Shared BDD fixtures and step definitions for ordering."""

from uuid import uuid4

import pytest
from protean import current_domain
from pytest_bdd import given, parsers
from storefront.cart.items import AddToCart
from storefront.catalogue.management import AddProduct
from storefront.order.placement import PlaceOrder

SHIPPING = {"address": "221B Baker Street", "city": "London", "zip": "NW16XE", "country": "UK"}


# ---------------------------------------------------------------------------
# Scalar fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def products():
    """Product ids listed during the scenario, keyed by name."""
    return {}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("a customer", target_fixture="shopper_id")
def _():
    return str(uuid4())


@given(parsers.cfparse('the catalogue lists "{name}" at {price:f}'))
def _(products, name, price):
    products[name] = current_domain.process(
        AddProduct(
            name=name,
            description=f"{name}, made to last.",
            price=price,
            stock=10,
            category="home",
        ),
        asynchronous=False,
    )


@given(parsers.cfparse('the customer added "{name}" to the cart'))
def _(shopper_id, products, name):
    current_domain.process(AddToCart(user_id=shopper_id, product_id=products[name]), asynchronous=False)


@given(parsers.cfparse('the customer added "{name}" to the cart {count:d} times'))
def _(shopper_id, products, name, count):
    for _ in range(count):
        current_domain.process(AddToCart(user_id=shopper_id, product_id=products[name]), asynchronous=False)


@given(parsers.cfparse('the customer placed an order paying by "{method}"'), target_fixture="order_id")
def _(shopper_id, method):
    command = PlaceOrder(user_id=shopper_id, payment_method=method, **SHIPPING)
    return current_domain.process(command, asynchronous=False)
