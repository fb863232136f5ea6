"""
Core Business Logic
====================
Tariff configuration, order pricing and service-area lookup.
"""

from mealcart.core.exceptions import (
    EmptyCartError,
    IncompleteConfigurationError,
    InvalidArgumentError,
    OutsideServiceAreaError,
    PricingError,
)
from mealcart.core.pricing import (
    PricingEngine,
    PricingRequest,
    PricingResult,
    compute_total,
    get_pricing_engine,
)
from mealcart.core.tariff import TariffConfig, load_tariff

__all__ = [
    "PricingEngine",
    "PricingRequest",
    "PricingResult",
    "compute_total",
    "get_pricing_engine",
    "TariffConfig",
    "load_tariff",
    "PricingError",
    "InvalidArgumentError",
    "IncompleteConfigurationError",
    "EmptyCartError",
    "OutsideServiceAreaError",
]
