"""Coupon validation hooks."""

import logging

import pluggy

from coupons.required_products import (
    REASON_MALFORMED_CONFIGURATION,
    REASON_UNSUPPORTED_SCHEMA_VERSION,
    evaluate,
)

hookimpl = pluggy.HookimplMarker("coupons_required_products")
log = logging.getLogger(__name__)


def _validate_required_products(basket, coupon):
    """Check the basket against the coupon's required products, if it has any."""

    if coupon.required_products in (None, "", {}):
        return None

    outcome = evaluate(coupon.required_products, basket.get_cart_contents())

    if outcome.reason == REASON_MALFORMED_CONFIGURATION:
        log.warning(
            "Coupon %s has malformed required products data, rejecting: %r",
            coupon.coupon_code,
            coupon.required_products,
        )
    elif outcome.reason == REASON_UNSUPPORTED_SCHEMA_VERSION:
        log.warning(
            "Coupon %s has required products data with unsupported version %r, rejecting",
            coupon.coupon_code,
            coupon.required_products.get("version"),
        )
    elif not outcome:
        log.debug(
            "Basket %s is missing products %s for coupon %s",
            basket.id,
            outcome.missing_products,
            coupon.coupon_code,
        )

    return outcome


class RequiredProductsValidator:
    """Wrapper class for the required products check."""

    @hookimpl(specname="coupon_validate")
    def validate_required_products(self, basket, coupon):
        """Call the internal function (so we can test it)"""

        return _validate_required_products(basket=basket, coupon=coupon)
