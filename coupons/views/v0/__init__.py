"""
Coupons API views: basket contents and coupon application.
"""

import logging

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.viewsets import ReadOnlyModelViewSet

from coupons.api import (
    apply_coupon_to_basket,
    check_basket_coupons_for_validity,
    establish_basket,
    get_coupon,
)
from coupons.exceptions import CouponInvalidError, CouponNotFoundError
from coupons.models import Basket, BasketItem, Product
from coupons.serializers.v0 import BasketSerializer
from coupons.serializers.v0.requests import (
    AddProductToBasketSerializer,
    ApplyCouponSerializer,
)

log = logging.getLogger(__name__)


class BasketViewSet(ReadOnlyModelViewSet):
    """API view set for Basket"""

    serializer_class = BasketSerializer
    permission_classes = (IsAuthenticated,)

    def get_queryset(self):
        """Return only baskets owned by this user."""

        return Basket.objects.filter(user=self.request.user).prefetch_related(
            "basket_items__product", "coupons__redeemed_coupon"
        )


@api_view(["POST"])
@permission_classes((IsAuthenticated,))
def add_product_to_basket(request, product_id):
    """
    Add a product to the basket for the currently logged in user. Adding a
    product that's already in the basket increases its quantity.

    POST Args:
        quantity (int): quantity of the product to add (defaults to 1)

    Returns:
        Response: HTTP response
    """
    serializer = AddProductToBasketSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        product = Product.objects.get(id=product_id)
    except Product.DoesNotExist:
        return Response(
            {"error": "Product not found"}, status=status.HTTP_404_NOT_FOUND
        )

    basket = establish_basket(request)
    (basket_item, created) = BasketItem.objects.get_or_create(
        basket=basket,
        product=product,
        defaults={"quantity": serializer.validated_data["quantity"]},
    )

    if not created:
        basket_item.quantity += serializer.validated_data["quantity"]
        basket_item.save(update_fields=("quantity", "updated_on"))

    return Response(BasketSerializer(basket).data, status=status.HTTP_200_OK)


@api_view(["DELETE"])
@permission_classes((IsAuthenticated,))
def remove_product_from_basket(request, product_id):
    """
    Remove a product from the basket for the currently logged in user, then
    drop any applied coupons that no longer apply to what's left.

    Returns:
        Response: HTTP response
    """
    basket = establish_basket(request)
    deleted, _ = BasketItem.objects.filter(
        basket=basket, product_id=product_id
    ).delete()

    if not deleted:
        return Response(
            {"error": "Product not in basket"}, status=status.HTTP_404_NOT_FOUND
        )

    removed = check_basket_coupons_for_validity(basket)
    data = BasketSerializer(basket).data
    data["removed_coupons"] = [coupon.coupon_code for coupon in removed]

    return Response(data, status=status.HTTP_200_OK)


@api_view(["POST"])
@permission_classes((IsAuthenticated,))
def apply_coupon(request):
    """
    Apply a coupon to the basket for the currently logged in user.

    POST Args:
        coupon_code (str): coupon code to apply to the basket

    Returns:
        Response: HTTP response
    """
    serializer = ApplyCouponSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    coupon_code = serializer.validated_data["coupon_code"]

    basket = establish_basket(request)

    try:
        coupon = get_coupon(coupon_code)
        apply_coupon_to_basket(basket, coupon)
    except CouponNotFoundError:
        return Response(
            {"error": f"Coupon '{coupon_code}' not found"},
            status=status.HTTP_404_NOT_FOUND,
        )
    except CouponInvalidError as exc:
        return Response(
            {
                "error": str(exc),
                "reason": exc.outcome.reason,
                "missing_products": [
                    {"product_id": product_id, "quantity": quantity}
                    for product_id, quantity in sorted(
                        exc.outcome.missing_products.items()
                    )
                ],
            },
            status=status.HTTP_400_BAD_REQUEST,
        )

    return Response(BasketSerializer(basket).data, status=status.HTTP_200_OK)
