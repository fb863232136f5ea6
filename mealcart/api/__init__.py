"""
API Package
===========
HTTP routes for the pricing service.
"""

from mealcart.api.router import api_router

__all__ = ["api_router"]
