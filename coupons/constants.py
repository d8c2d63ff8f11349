"""Constants for coupons."""

REQUIRED_PRODUCTS_VERSION = "1.0.0"

REQUIRED_PRODUCTS_FORMAT_LEGACY = "legacy"
REQUIRED_PRODUCTS_FORMAT_VERSIONED = "versioned"

ALL_REQUIRED_PRODUCTS_FORMATS = [
    REQUIRED_PRODUCTS_FORMAT_LEGACY,
    REQUIRED_PRODUCTS_FORMAT_VERSIONED,
]

DISCOUNT_TYPE_PERCENT_OFF = "percent-off"
DISCOUNT_TYPE_DOLLARS_OFF = "dollars-off"
DISCOUNT_TYPE_FIXED_PRICE = "fixed-price"

ALL_DISCOUNT_TYPES = [
    DISCOUNT_TYPE_PERCENT_OFF,
    DISCOUNT_TYPE_DOLLARS_OFF,
    DISCOUNT_TYPE_FIXED_PRICE,
]
DISCOUNT_TYPES = list(zip(ALL_DISCOUNT_TYPES, ALL_DISCOUNT_TYPES))
