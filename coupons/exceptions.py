"""Exceptions for coupons app."""

from coupons.messages import message_for_outcome


class CouponInvalidError(Exception):
    """
    Raised when a coupon can't be applied to a basket.

    Carries the coupon and the ValidationOutcome that rejected it; the string
    form is the message to show the user.
    """

    def __init__(self, coupon, outcome):
        self.coupon = coupon
        self.outcome = outcome
        super().__init__(str(message_for_outcome(outcome)))


class CouponNotFoundError(Exception):
    """Raised when the requested coupon code doesn't exist."""
