"""
Pricing Errors
==============
Exception hierarchy raised by the pricing core.

All errors derive from ``ValueError`` so that callers which only care about
"bad input" can keep catching the builtin.
"""


class PricingError(ValueError):
    """Base class for pricing failures."""


class InvalidArgumentError(PricingError):
    """A numeric input or tariff field is negative, out of range or not a number."""


class IncompleteConfigurationError(PricingError):
    """A required tariff field is missing, or the tariff document is unreadable."""


class EmptyCartError(InvalidArgumentError):
    """A checkout quote was requested for a cart with no lines."""


class OutsideServiceAreaError(PricingError):
    """The drop point is not covered by any kitchen."""
