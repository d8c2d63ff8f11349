"""
Required products matching for coupons.

A coupon can be restricted so that it only applies when the basket holds a
configured set of products. The requirement is stored on the coupon in one of
two formats:

- legacy: a comma separated string of product ids ("42, 43")
- versioned: {"version": "1.0.0", "required_products": {"42": 1, "43": 2}}

Both are normalized into a RequirementSpec by parse_requirement and checked
against the basket contents by evaluate. Nothing in here touches the database.
"""

from dataclasses import dataclass, field
from types import MappingProxyType

from coupons.constants import (
    REQUIRED_PRODUCTS_FORMAT_LEGACY,
    REQUIRED_PRODUCTS_FORMAT_VERSIONED,
    REQUIRED_PRODUCTS_VERSION,
)

REASON_UNMET_REQUIREMENT = "unmet-requirement"
REASON_UNSUPPORTED_SCHEMA_VERSION = "unsupported-schema-version"
REASON_MALFORMED_CONFIGURATION = "malformed-configuration"

ALL_REASONS = [
    REASON_UNMET_REQUIREMENT,
    REASON_UNSUPPORTED_SCHEMA_VERSION,
    REASON_MALFORMED_CONFIGURATION,
]


class MalformedRequirementError(ValueError):
    """Raised when stored required products data can't be read."""


@dataclass(frozen=True)
class LegacyRequirement:
    """Comma separated product ids, each implicitly required once."""

    text: str


@dataclass(frozen=True)
class VersionedRequirement:
    """Structured requirement record with an explicit schema version."""

    version: str
    required_products: dict


@dataclass(frozen=True)
class RequirementSpec:
    """
    Normalized requirement: product id -> minimum quantity in the basket.

    version is None for legacy data, which has no schema version to check.
    A spec built directly defaults to the current version.
    """

    required_products: dict = field(default_factory=dict)
    version: str | None = REQUIRED_PRODUCTS_VERSION
    source_format: str = REQUIRED_PRODUCTS_FORMAT_VERSIONED

    @property
    def is_empty(self):
        return len(self.required_products) == 0

    @property
    def is_supported_version(self):
        """Legacy data is always supported; versioned data must match exactly."""
        if self.source_format == REQUIRED_PRODUCTS_FORMAT_LEGACY:
            return True

        return self.version == REQUIRED_PRODUCTS_VERSION


@dataclass(frozen=True)
class ValidationOutcome:
    """Result of checking a basket against a coupon's required products."""

    is_valid: bool
    reason: str | None = None
    missing_products: dict = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(
            self, "missing_products", MappingProxyType(dict(self.missing_products))
        )

    def __bool__(self):
        return self.is_valid

    @classmethod
    def valid(cls):
        return cls(is_valid=True)

    @classmethod
    def invalid(cls, reason, missing_products=None):
        if reason not in ALL_REASONS:
            raise ValueError(f"Unknown validation reason {reason}")

        return cls(
            is_valid=False, reason=reason, missing_products=missing_products or {}
        )


def _parse_product_id(value):
    """Coerce a product id (int or digit string) to a non-negative int."""
    if isinstance(value, bool):
        raise MalformedRequirementError(f"Invalid product id {value!r}")

    if isinstance(value, int):
        product_id = value
    elif (
        isinstance(value, str)
        and value.strip().isascii()
        and value.strip().isdigit()
    ):
        product_id = int(value.strip())
    else:
        raise MalformedRequirementError(f"Invalid product id {value!r}")

    if product_id < 0:
        raise MalformedRequirementError(f"Invalid product id {value!r}")

    return product_id


def _parse_quantity(value):
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise MalformedRequirementError(f"Invalid required quantity {value!r}")

    return value


def _parse_legacy(requirement: LegacyRequirement) -> RequirementSpec:
    required = {}

    for token in requirement.text.split(","):
        if not token.strip():
            continue

        required[_parse_product_id(token)] = 1

    return RequirementSpec(
        required_products=required,
        version=None,
        source_format=REQUIRED_PRODUCTS_FORMAT_LEGACY,
    )


def _parse_versioned(requirement: VersionedRequirement) -> RequirementSpec:
    if not isinstance(requirement.version, str):
        raise MalformedRequirementError(
            f"Invalid schema version {requirement.version!r}"
        )

    products = requirement.required_products
    if products is None:
        products = {}

    if not isinstance(products, dict):
        raise MalformedRequirementError(
            f"Expected a mapping of required products, got {type(products).__name__}"
        )

    required = {
        _parse_product_id(product_id): _parse_quantity(quantity)
        for product_id, quantity in products.items()
    }

    return RequirementSpec(
        required_products=required,
        version=requirement.version,
        source_format=REQUIRED_PRODUCTS_FORMAT_VERSIONED,
    )


def parse_requirement(raw) -> RequirementSpec:
    """
    Normalize stored required products data into a RequirementSpec.

    Args:
        raw (None|str|dict|LegacyRequirement|VersionedRequirement|RequirementSpec):
            the value as stored on the coupon, or an already tagged value

    Returns:
        RequirementSpec: the normalized requirement (empty if nothing is set)

    Raises:
        MalformedRequirementError: if the data can't be read
    """
    if isinstance(raw, RequirementSpec):
        return raw

    if raw is None or raw == "" or raw == {}:
        return RequirementSpec()

    if isinstance(raw, str):
        raw = LegacyRequirement(text=raw)
    elif isinstance(raw, dict):
        if "version" not in raw:
            raise MalformedRequirementError("Required products data has no version")

        raw = VersionedRequirement(
            version=raw["version"],
            required_products=raw.get("required_products"),
        )

    if isinstance(raw, LegacyRequirement):
        return _parse_legacy(raw)

    if isinstance(raw, VersionedRequirement):
        return _parse_versioned(raw)

    raise MalformedRequirementError(
        f"Unrecognized required products data of type {type(raw).__name__}"
    )


def build_cart_contents(line_items) -> dict[int, int]:
    """
    Sum quantities per product across basket lines.

    Args:
        line_items (iterable of (int, int)): (product id, quantity) pairs

    Returns:
        dict: product id -> total quantity
    """
    contents = {}

    for product_id, quantity in line_items:
        contents[product_id] = contents.get(product_id, 0) + quantity

    return contents


def evaluate(requirement, cart: dict[int, int]) -> ValidationOutcome:
    """
    Check the cart against the required products for a coupon.

    Args:
        requirement: stored required products data or a parsed RequirementSpec
        cart (dict): product id -> quantity in the basket

    Returns:
        ValidationOutcome: valid, or invalid with the reason and any
        products that are missing (id -> required quantity)
    """
    try:
        spec = parse_requirement(requirement)
    except MalformedRequirementError:
        return ValidationOutcome.invalid(REASON_MALFORMED_CONFIGURATION)

    if spec.is_empty:
        return ValidationOutcome.valid()

    if not spec.is_supported_version:
        return ValidationOutcome.invalid(REASON_UNSUPPORTED_SCHEMA_VERSION)

    missing_products = {
        product_id: quantity
        for product_id, quantity in spec.required_products.items()
        if cart.get(product_id, 0) < quantity
    }

    if not missing_products:
        return ValidationOutcome.valid()

    return ValidationOutcome.invalid(REASON_UNMET_REQUIREMENT, missing_products)


def serialize_requirement(product_ids) -> dict:
    """
    Build the versioned record for a set of products, each required once.

    Args:
        product_ids (iterable of int): the required product ids

    Returns:
        dict: data suitable for storing in Coupon.required_products
    """
    return {
        "version": REQUIRED_PRODUCTS_VERSION,
        "required_products": {
            str(product_id): 1 for product_id in sorted(set(map(int, product_ids)))
        },
    }


def requirement_product_ids(raw) -> list[int]:
    """
    Return the configured product ids, or an empty list if they can't be read.

    Ids are returned whatever the schema version, so the admin can show what
    an unsupported record still requires.
    """
    try:
        spec = parse_requirement(raw)
    except MalformedRequirementError:
        return []

    return sorted(spec.required_products)
