"""Coupons APIs"""

import logging

from django.db import transaction
from mitol.common.utils.datetime import now_in_utc

from coupons.exceptions import CouponInvalidError, CouponNotFoundError
from coupons.models import Basket, BasketCoupon, Coupon
from coupons.required_products import ValidationOutcome
from main.plugin_manager import get_plugin_manager

log = logging.getLogger(__name__)


def establish_basket(request):
    """
    Gets or creates the user's basket.

    Args:
        request (HttpRequest): The current request object.
    """
    user = request.user
    (basket, _) = Basket.objects.get_or_create(user=user)

    return basket


def check_coupon_for_basket(coupon, basket) -> ValidationOutcome:
    """
    Runs the coupon validation hooks for the basket.

    Args:
        - coupon (Coupon|str): the coupon to check (if a string, loads the coupon code specified)
        - basket (Basket): the current basket
    Returns:
        ValidationOutcome: the first invalid outcome reported by a hook, or a
        valid outcome if none of them objected
    """
    if not isinstance(coupon, Coupon):
        coupon = get_coupon(coupon)

    pm = get_plugin_manager()
    outcomes = pm.hook.coupon_validate(basket=basket, coupon=coupon)

    for outcome in outcomes:
        if outcome is not None and not outcome.is_valid:
            return outcome

    return ValidationOutcome.valid()


def get_coupon(coupon_code):
    """
    Loads a coupon by code.

    Raises:
        CouponNotFoundError: if there's no coupon with that code
    """
    try:
        return Coupon.objects.get(coupon_code=coupon_code)
    except Coupon.DoesNotExist as exc:
        raise CouponNotFoundError(f"Coupon '{coupon_code}' not found") from exc


def apply_coupon_to_basket(basket, coupon):
    """
    Applies a coupon to the basket, replacing any coupon already applied.

    Args:
        - basket (Basket): the current basket
        - coupon (Coupon): the coupon to apply
    Returns:
        BasketCoupon: the record of the applied coupon
    Raises:
        CouponInvalidError: if any validation hook rejects the coupon
    """
    outcome = check_coupon_for_basket(coupon, basket)

    if not outcome.is_valid:
        log.info(
            "Coupon %s rejected for basket %s: %s",
            coupon.coupon_code,
            basket.id,
            outcome.reason,
        )
        raise CouponInvalidError(coupon, outcome)

    with transaction.atomic():
        BasketCoupon.objects.filter(redeemed_basket=basket).delete()

        return BasketCoupon.objects.create(
            redeemed_basket=basket,
            redeemed_coupon=coupon,
            redeemed_by=basket.user,
            redemption_date=now_in_utc(),
        )


def check_basket_coupons_for_validity(basket):
    """
    Re-checks the coupons applied to the basket, removing any that no longer
    apply (for instance, because a required product was taken out).

    Args:
        - basket (Basket): the current basket
    Returns:
        list of Coupon: the coupons that were removed
    """
    removed = []

    for basket_coupon in basket.coupons.select_related("redeemed_coupon").all():
        coupon = basket_coupon.redeemed_coupon

        if not check_coupon_for_basket(coupon, basket).is_valid:
            log.info(
                "Removing coupon %s from basket %s, it no longer applies",
                coupon.coupon_code,
                basket.id,
            )
            basket_coupon.delete()
            removed.append(coupon)

    return removed
