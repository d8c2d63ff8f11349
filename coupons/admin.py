"""Admin management for Coupons module"""

from django.contrib import admin

from coupons.forms import CouponAdminForm
from coupons.models import Basket, BasketCoupon, BasketItem, Coupon, Product


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    """Admin for Product"""

    model = Product
    search_fields = ["description", "price"]
    list_display = ["id", "description", "price", "is_active"]

    def has_delete_permission(self, request, obj=None):
        """Disable the delete permission for Product models"""
        return False

    def get_queryset(self, request):
        """
        Return the all objects for the Product Admin
        """
        return self.model.all_objects.get_queryset()


@admin.register(Coupon)
class CouponAdmin(admin.ModelAdmin):
    """Admin for Coupon"""

    model = Coupon
    form = CouponAdminForm
    search_fields = ["coupon_code"]
    list_display = ["id", "coupon_code", "discount_type", "amount", "has_required_products"]

    @admin.display(boolean=True, description="Required products")
    def has_required_products(self, obj):
        return bool(obj.required_products)


@admin.register(Basket)
class BasketAdmin(admin.ModelAdmin):
    """Admin for Basket"""

    model = Basket
    search_fields = ["user__email", "user__username"]
    list_display = ["id", "user"]


@admin.register(BasketItem)
class BasketItemAdmin(admin.ModelAdmin):
    """Admin for BasketItem"""

    model = BasketItem
    list_display = ["id", "product", "quantity"]


@admin.register(BasketCoupon)
class BasketCouponAdmin(admin.ModelAdmin):
    """Admin for BasketCoupon"""

    model = BasketCoupon
    list_display = ["id", "redeemed_basket", "redeemed_coupon"]
