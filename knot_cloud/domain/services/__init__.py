"""Domain services package."""

from .addressing import gateway_address_for
from .value_codec import coerce_value, parse_value

__all__ = ["gateway_address_for", "parse_value", "coerce_value"]
