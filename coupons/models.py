import logging

from django.conf import settings
from django.db import models
from django.utils.functional import cached_property
from mitol.common.models import TimestampedModel

from coupons.constants import (
    DISCOUNT_TYPE_DOLLARS_OFF,
    DISCOUNT_TYPE_FIXED_PRICE,
    DISCOUNT_TYPE_PERCENT_OFF,
    DISCOUNT_TYPES,
)
from coupons.required_products import (
    MalformedRequirementError,
    RequirementSpec,
    build_cart_contents,
    parse_requirement,
    serialize_requirement,
)

log = logging.getLogger(__name__)


class ProductsQuerySet(models.QuerySet):
    """Queryset to block delete and instead mark the items in_active"""

    def delete(self):
        self.update(is_active=False)


class ActiveUndeleteManager(models.Manager):
    """Query manager for active objects"""

    def get_queryset(self):
        """Getting the active queryset for manager"""
        return ProductsQuerySet(self.model, using=self._db).filter(is_active=True)


class Product(TimestampedModel):
    """Representation of a purchasable product."""

    price = models.DecimalField(max_digits=7, decimal_places=2, help_text="")
    description = models.TextField()
    is_active = models.BooleanField(
        default=True,
        null=False,
        help_text="Controls visibility of the product in the app.",
    )

    objects = ActiveUndeleteManager()
    all_objects = models.Manager()

    def delete(self):
        self.is_active = False
        self.save(update_fields=("is_active",))

    def __str__(self):
        return f"#{self.id} {self.description} {self.price}"


class Coupon(TimestampedModel):
    """
    A discount code. required_products holds the products that must be in the
    basket for the code to apply, either as a legacy comma separated string or
    as a versioned record (see coupons.required_products).
    """

    coupon_code = models.CharField(max_length=50, unique=True)
    amount = models.DecimalField(
        decimal_places=5,
        max_digits=20,
    )
    discount_type = models.CharField(choices=DISCOUNT_TYPES, max_length=30)
    required_products = models.JSONField(
        null=True,
        blank=True,
        help_text="Products that must be in the basket for this coupon to apply.",
    )

    def __str__(self):
        return f"{self.amount} {self.discount_type} - {self.coupon_code}"

    def friendly_format(self):
        amount = "{:.2f}".format(self.amount)

        if self.discount_type == DISCOUNT_TYPE_PERCENT_OFF:
            return f"{amount}% off"
        elif self.discount_type == DISCOUNT_TYPE_DOLLARS_OFF:
            return f"${amount} off"
        elif self.discount_type == DISCOUNT_TYPE_FIXED_PRICE:
            return f"a fixed price of ${amount}"

        return "Indeterminate Discount"

    @cached_property
    def requirement(self) -> RequirementSpec | None:
        """
        The parsed required products for this coupon.

        Returns None if the stored data can't be read.
        """
        try:
            return parse_requirement(self.required_products)
        except MalformedRequirementError:
            log.warning(
                "Coupon %s has malformed required products data: %r",
                self.coupon_code,
                self.required_products,
            )
            return None

    def set_required_products(self, products):
        """
        Store the given products (or product ids) as the required products,
        in the versioned format. Does not save.
        """
        product_ids = [
            product.id if isinstance(product, Product) else product
            for product in products
        ]

        self.required_products = (
            serialize_requirement(product_ids) if product_ids else None
        )
        self.__dict__.pop("requirement", None)


class Basket(TimestampedModel):
    """Represents a User's basket."""

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="basket"
    )

    def __str__(self):
        return f"Basket for {self.user}"

    def get_products(self):
        """
        Returns the products that have been added to the basket so far.
        """

        return [item.product for item in self.basket_items.all()]

    def get_cart_contents(self) -> dict[int, int]:
        """
        Returns the basket contents as product id -> total quantity. Lines
        for the same product are added together.
        """

        return build_cart_contents(
            self.basket_items.values_list("product_id", "quantity")
        )


class BasketItem(TimestampedModel):
    """Represents one or more products in a user's basket."""

    product = models.ForeignKey(
        Product, on_delete=models.CASCADE, related_name="basket_item"
    )
    basket = models.ForeignKey(
        Basket, on_delete=models.CASCADE, related_name="basket_items"
    )
    quantity = models.PositiveIntegerField(default=1)

    def __str__(self):
        return f"{self.quantity} x {self.product}"


class BasketCoupon(TimestampedModel):
    """Records a coupon applied to a basket."""

    redemption_date = models.DateTimeField()
    redeemed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="+",
    )
    redeemed_coupon = models.ForeignKey(
        Coupon,
        on_delete=models.CASCADE,
        related_name="basket_redemptions",
    )
    redeemed_basket = models.ForeignKey(
        Basket, on_delete=models.CASCADE, related_name="coupons"
    )

    def __str__(self):
        return f"{self.redeemed_basket}: {self.redeemed_coupon}"
