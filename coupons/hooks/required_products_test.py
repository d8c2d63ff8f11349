"""Tests for the required products validation hook"""

import logging

import pytest

from coupons.factories import BasketFactory, BasketItemFactory, CouponFactory, ProductFactory
from coupons.hooks.required_products import (
    RequiredProductsValidator,
    _validate_required_products,
)
from coupons.required_products import (
    REASON_MALFORMED_CONFIGURATION,
    REASON_UNMET_REQUIREMENT,
    REASON_UNSUPPORTED_SCHEMA_VERSION,
    serialize_requirement,
)

pytestmark = [pytest.mark.django_db]


@pytest.fixture()
def products():
    return ProductFactory.create_batch(3)


@pytest.fixture()
def basket():
    return BasketFactory.create()


def test_no_required_products_abstains(basket):
    """Coupons without required products are left to the other hooks."""
    coupon = CouponFactory.create(required_products=None)

    assert _validate_required_products(basket=basket, coupon=coupon) is None


def test_required_products_in_basket(basket, products):
    """The coupon is valid when the basket holds every required product."""
    coupon = CouponFactory.create(
        required_products=serialize_requirement([p.id for p in products[:2]])
    )
    for product in products[:2]:
        BasketItemFactory.create(basket=basket, product=product)

    assert _validate_required_products(basket=basket, coupon=coupon).is_valid


def test_required_products_missing(basket, products):
    """Missing products are reported with their required quantities."""
    coupon = CouponFactory.create(
        required_products=serialize_requirement([p.id for p in products])
    )
    BasketItemFactory.create(basket=basket, product=products[0])

    outcome = _validate_required_products(basket=basket, coupon=coupon)

    assert outcome.is_valid is False
    assert outcome.reason == REASON_UNMET_REQUIREMENT
    assert outcome.missing_products == {products[1].id: 1, products[2].id: 1}


def test_required_quantity_summed_across_lines(basket, products):
    """Quantities for the same product on several lines count together."""
    product = products[0]
    coupon = CouponFactory.create(
        required_products={
            "version": "1.0.0",
            "required_products": {str(product.id): 3},
        }
    )
    BasketItemFactory.create(basket=basket, product=product, quantity=1)
    BasketItemFactory.create(basket=basket, product=product, quantity=1)

    assert _validate_required_products(basket=basket, coupon=coupon).is_valid is False

    BasketItemFactory.create(basket=basket, product=product, quantity=1)

    assert _validate_required_products(basket=basket, coupon=coupon).is_valid


def test_legacy_required_products(basket, products):
    """Coupons storing the legacy string format are still checked."""
    coupon = CouponFactory.create(
        required_products=f"{products[0].id}, {products[1].id}"
    )
    BasketItemFactory.create(basket=basket, product=products[0])

    outcome = _validate_required_products(basket=basket, coupon=coupon)

    assert outcome.missing_products == {products[1].id: 1}


def test_unsupported_version_logs_warning(basket, products, caplog):
    """Unknown versions are rejected and logged."""
    coupon = CouponFactory.create(
        required_products={
            "version": "2.0.0",
            "required_products": {str(products[0].id): 1},
        }
    )
    BasketItemFactory.create(basket=basket, product=products[0])

    with caplog.at_level(logging.WARNING):
        outcome = _validate_required_products(basket=basket, coupon=coupon)

    assert outcome.reason == REASON_UNSUPPORTED_SCHEMA_VERSION
    assert "unsupported version" in caplog.text


def test_malformed_logs_warning(basket, caplog):
    """Malformed data is rejected and logged."""
    coupon = CouponFactory.create(required_products="12,twelve")

    with caplog.at_level(logging.WARNING):
        outcome = _validate_required_products(basket=basket, coupon=coupon)

    assert outcome.reason == REASON_MALFORMED_CONFIGURATION
    assert "malformed required products" in caplog.text


def test_hookimpl_calls_internal_function(mocker, basket):
    """The hook implementation delegates to the internal function"""
    coupon = CouponFactory.create()
    patched = mocker.patch(
        "coupons.hooks.required_products._validate_required_products"
    )

    result = RequiredProductsValidator().validate_required_products(
        basket=basket, coupon=coupon
    )

    patched.assert_called_once_with(basket=basket, coupon=coupon)
    assert result == patched.return_value
