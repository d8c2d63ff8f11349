"""Tests for the plugin manager"""

from coupons.hooks.required_products import RequiredProductsValidator
from main.plugin_manager import get_plugin_manager


def test_get_plugin_manager():
    """The required products validator is registered for coupon_validate"""
    pm = get_plugin_manager()

    assert pm.project_name == "coupons_required_products"
    assert any(
        isinstance(plugin, RequiredProductsValidator) for plugin in pm.get_plugins()
    )
    assert [impl.function.__name__ for impl in pm.hook.coupon_validate.get_hookimpls()] == [
        "validate_required_products"
    ]
