"""Serializers for coupons and baskets."""

from rest_framework import serializers

from coupons.models import Basket, BasketCoupon, BasketItem, Coupon, Product


class ProductSerializer(serializers.ModelSerializer):
    """Product Serializer"""

    class Meta:
        model = Product
        fields = ["id", "price", "description", "is_active"]


class CouponSerializer(serializers.ModelSerializer):
    """Coupon Serializer. Required products are exposed as a list of ids."""

    required_products = serializers.SerializerMethodField()

    def get_required_products(self, instance):
        spec = instance.requirement

        if spec is None:
            return []

        return [
            {"product_id": product_id, "quantity": quantity}
            for product_id, quantity in sorted(spec.required_products.items())
        ]

    class Meta:
        model = Coupon
        fields = ["id", "coupon_code", "amount", "discount_type", "required_products"]


class BasketItemSerializer(serializers.ModelSerializer):
    """BasketItem model serializer"""

    product = ProductSerializer(read_only=True)

    class Meta:
        model = BasketItem
        fields = ["id", "basket", "product", "quantity"]


class BasketCouponSerializer(serializers.ModelSerializer):
    """BasketCoupon model serializer"""

    redeemed_coupon = CouponSerializer(read_only=True)

    class Meta:
        model = BasketCoupon
        fields = ["id", "redemption_date", "redeemed_coupon"]


class BasketSerializer(serializers.ModelSerializer):
    """Basket model serializer, with items and applied coupons"""

    basket_items = BasketItemSerializer(many=True, read_only=True)
    coupons = BasketCouponSerializer(many=True, read_only=True)

    class Meta:
        model = Basket
        fields = ["id", "user", "basket_items", "coupons"]
