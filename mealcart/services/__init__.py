"""
Business Services
=================
Service layer for checkout pricing.
"""

from mealcart.services.checkout import (
    CheckoutQuote,
    CheckoutService,
    cart_item_total,
    get_checkout_service,
)

__all__ = ["CheckoutService", "CheckoutQuote", "cart_item_total", "get_checkout_service"]
