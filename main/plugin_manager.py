"""Plugin manager for coupons required products."""

import pluggy

from coupons import hookspecs as coupons_hookspecs
from coupons.hooks.required_products import RequiredProductsValidator


def get_plugin_manager():
    """Return the plugin manager for the app."""

    pm = pluggy.PluginManager("coupons_required_products")

    pm.add_hookspecs(coupons_hookspecs)

    pm.register(RequiredProductsValidator())

    pm.load_setuptools_entrypoints("coupons_required_products")
    return pm
