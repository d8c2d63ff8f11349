"""
Request serializers for the coupons API.

Kept apart from the response serializers so they only describe input.
"""

from rest_framework import serializers


class AddProductToBasketSerializer(serializers.Serializer):
    """Quantity of a product to add to the basket."""

    quantity = serializers.IntegerField(min_value=1, default=1)


class ApplyCouponSerializer(serializers.Serializer):
    """Coupon code to apply to the basket."""

    coupon_code = serializers.CharField(max_length=50)
