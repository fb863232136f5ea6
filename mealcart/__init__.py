"""
Mealcart Pricing
================
Order pricing service for the meal-subscription checkout.
"""

__version__ = "1.0.0"
