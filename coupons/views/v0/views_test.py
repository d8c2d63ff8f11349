"""Tests for coupons v0 views"""

import pytest
from django.urls import reverse
from rest_framework import status

from coupons.factories import (
    BasketFactory,
    BasketItemFactory,
    CouponFactory,
    ProductFactory,
)
from coupons.models import BasketCoupon, BasketItem
from coupons.required_products import (
    REASON_MALFORMED_CONFIGURATION,
    REASON_UNMET_REQUIREMENT,
    REASON_UNSUPPORTED_SCHEMA_VERSION,
    serialize_requirement,
)

pytestmark = [pytest.mark.django_db]


@pytest.fixture()
def products():
    return ProductFactory.create_batch(2)


@pytest.fixture()
def basket(user):
    return BasketFactory.create(user=user)


def test_basket_list_only_own(user_drf_client, basket):
    """Users only see their own basket"""
    BasketFactory.create()

    resp = user_drf_client.get(reverse("basket-list"))

    assert resp.status_code == status.HTTP_200_OK
    assert [item["id"] for item in resp.json()] == [basket.id]


def test_basket_requires_login(client):
    """Anonymous users can't see baskets"""
    resp = client.get(reverse("basket-list"))

    assert resp.status_code == status.HTTP_403_FORBIDDEN


def test_add_product_to_basket(user_drf_client, user, products):
    """Adding a product twice increases its quantity"""
    product = products[0]
    url = reverse("add_product_to_basket", kwargs={"product_id": product.id})

    resp = user_drf_client.post(url, {"quantity": 2})
    assert resp.status_code == status.HTTP_200_OK

    resp = user_drf_client.post(url, {})
    assert resp.status_code == status.HTTP_200_OK

    item = BasketItem.objects.get(basket__user=user, product=product)
    assert item.quantity == 3
    assert resp.json()["basket_items"][0]["quantity"] == 3


def test_add_product_to_basket_bad_quantity(user_drf_client, products):
    """Quantities must be positive"""
    resp = user_drf_client.post(
        reverse("add_product_to_basket", kwargs={"product_id": products[0].id}),
        {"quantity": 0},
    )

    assert resp.status_code == status.HTTP_400_BAD_REQUEST
    assert "quantity" in resp.json()["errors"]


def test_add_product_to_basket_not_found(user_drf_client):
    """Adding a missing product returns 404"""
    resp = user_drf_client.post(
        reverse("add_product_to_basket", kwargs={"product_id": 99999}), {}
    )

    assert resp.status_code == status.HTTP_404_NOT_FOUND
    assert resp.json()["error"] == "Product not found"


def test_apply_coupon(user_drf_client, basket, products):
    """A coupon with all its required products in the basket is applied"""
    coupon = CouponFactory.create(
        required_products=serialize_requirement([p.id for p in products])
    )
    for product in products:
        BasketItemFactory.create(basket=basket, product=product)

    resp = user_drf_client.post(
        reverse("apply_coupon"), {"coupon_code": coupon.coupon_code}
    )

    assert resp.status_code == status.HTTP_200_OK
    assert resp.json()["coupons"][0]["redeemed_coupon"]["coupon_code"] == (
        coupon.coupon_code
    )
    assert BasketCoupon.objects.filter(
        redeemed_basket=basket, redeemed_coupon=coupon
    ).exists()


def test_apply_coupon_missing_products(user_drf_client, basket, products):
    """A coupon with missing required products is rejected with details"""
    coupon = CouponFactory.create(
        required_products=serialize_requirement([p.id for p in products])
    )
    BasketItemFactory.create(basket=basket, product=products[0])

    resp = user_drf_client.post(
        reverse("apply_coupon"), {"coupon_code": coupon.coupon_code}
    )

    assert resp.status_code == status.HTTP_400_BAD_REQUEST
    assert resp.json() == {
        "error": "This coupon requires specific products in the cart.",
        "reason": REASON_UNMET_REQUIREMENT,
        "missing_products": [{"product_id": products[1].id, "quantity": 1}],
    }
    assert BasketCoupon.objects.filter(redeemed_basket=basket).exists() is False


@pytest.mark.parametrize(
    "required_products, reason",
    [
        (
            {"version": "2.0.0", "required_products": {"1": 1}},
            REASON_UNSUPPORTED_SCHEMA_VERSION,
        ),
        ("1,two", REASON_MALFORMED_CONFIGURATION),
    ],
)
def test_apply_coupon_not_valid(user_drf_client, basket, required_products, reason):
    """Bad configuration gives the generic message"""
    coupon = CouponFactory.create(required_products=required_products)

    resp = user_drf_client.post(
        reverse("apply_coupon"), {"coupon_code": coupon.coupon_code}
    )

    assert resp.status_code == status.HTTP_400_BAD_REQUEST
    assert resp.json()["error"] == "This coupon is not valid."
    assert resp.json()["reason"] == reason
    assert resp.json()["missing_products"] == []


def test_apply_coupon_not_found(user_drf_client):
    """Unknown codes return 404"""
    resp = user_drf_client.post(reverse("apply_coupon"), {"coupon_code": "nope"})

    assert resp.status_code == status.HTTP_404_NOT_FOUND
    assert resp.json()["error"] == "Coupon 'nope' not found"


def test_apply_coupon_no_code(user_drf_client):
    """The coupon code is required"""
    resp = user_drf_client.post(reverse("apply_coupon"), {})

    assert resp.status_code == status.HTTP_400_BAD_REQUEST
    assert "coupon_code" in resp.json()["errors"]


def test_remove_product_drops_coupon(user_drf_client, basket, products):
    """Removing a required product takes the coupon off the basket"""
    coupon = CouponFactory.create(
        required_products=serialize_requirement([products[0].id])
    )
    BasketItemFactory.create(basket=basket, product=products[0])
    BasketItemFactory.create(basket=basket, product=products[1])
    user_drf_client.post(reverse("apply_coupon"), {"coupon_code": coupon.coupon_code})

    resp = user_drf_client.delete(
        reverse("remove_product_from_basket", kwargs={"product_id": products[0].id})
    )

    assert resp.status_code == status.HTTP_200_OK
    assert resp.json()["removed_coupons"] == [coupon.coupon_code]
    assert resp.json()["coupons"] == []
    assert basket.coupons.count() == 0


def test_remove_product_not_in_basket(user_drf_client, basket, products):
    """Removing a product that isn't in the basket returns 404"""
    resp = user_drf_client.delete(
        reverse("remove_product_from_basket", kwargs={"product_id": products[0].id})
    )

    assert resp.status_code == status.HTTP_404_NOT_FOUND
