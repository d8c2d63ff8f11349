"""Coupons v0 URLs."""

from django.urls import include, path
from rest_framework.routers import SimpleRouter

from coupons.views.v0 import (
    BasketViewSet,
    add_product_to_basket,
    apply_coupon,
    remove_product_from_basket,
)

router = SimpleRouter()
router.register(r"baskets", BasketViewSet, basename="basket")

urlpatterns = [
    path(
        "baskets/products/<int:product_id>/",
        add_product_to_basket,
        name="add_product_to_basket",
    ),
    path(
        "baskets/products/<int:product_id>/remove/",
        remove_product_from_basket,
        name="remove_product_from_basket",
    ),
    path(
        "baskets/apply_coupon/",
        apply_coupon,
        name="apply_coupon",
    ),
    path("", include(router.urls)),
]
