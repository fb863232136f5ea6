"""
Pydantic Schemas
================
Request/Response models for API validation.
"""

from mealcart.schemas.pricing import (
    CartLine,
    CartQuoteRequest,
    CartQuoteResponse,
    KitchenSummary,
    QuoteRequest,
    QuoteResponse,
)

__all__ = [
    "QuoteRequest",
    "QuoteResponse",
    "CartLine",
    "CartQuoteRequest",
    "CartQuoteResponse",
    "KitchenSummary",
]
