"""User-facing messages for coupon validation."""

from django.utils.translation import gettext_lazy as _

from coupons.required_products import (
    REASON_MALFORMED_CONFIGURATION,
    REASON_UNMET_REQUIREMENT,
    REASON_UNSUPPORTED_SCHEMA_VERSION,
)

COUPON_NOT_VALID = _("This coupon is not valid.")
COUPON_REQUIRES_PRODUCTS = _("This coupon requires specific products in the cart.")

OUTCOME_MESSAGES = {
    REASON_UNMET_REQUIREMENT: COUPON_REQUIRES_PRODUCTS,
    REASON_UNSUPPORTED_SCHEMA_VERSION: COUPON_NOT_VALID,
    REASON_MALFORMED_CONFIGURATION: COUPON_NOT_VALID,
}


def message_for_outcome(outcome):
    """Return the message to show for an invalid ValidationOutcome."""
    return OUTCOME_MESSAGES.get(outcome.reason, COUPON_NOT_VALID)
