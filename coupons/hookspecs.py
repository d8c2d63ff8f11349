"""Hookspecs for the coupons app."""

import pluggy

hookspec = pluggy.HookspecMarker("coupons_required_products")


@hookspec
def coupon_validate(basket, coupon):
    """
    Validate a coupon using the current basket.

    Each implementation checks one restriction on the coupon (dates, required
    products, etc.) against what's in the basket. All implementations are
    called; the caller rejects the coupon if any of them reports it invalid.

    Args:
    basket (Basket): the current basket
    coupon (Coupon): the coupon under consideration

    Returns:
    - ValidationOutcome|None: the outcome of the check, or None if the hook
      has nothing to say about this coupon
    """
