"""
Pricing Schemas
===============
Pydantic models for the pricing API.
"""

from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Any

from pydantic import BaseModel, Field, field_validator

from mealcart.core.distance import Coordinates
from mealcart.core.pricing import pricing_context

KM = Decimal("0.01")


def _round_km(v: Any) -> Any:
    # Distances are reported like amounts: string decimals with two places
    if isinstance(v, float):
        v = Decimal(str(v))
    if isinstance(v, Decimal) and v.is_finite():
        with localcontext(pricing_context()):
            return v.quantize(KM, rounding=ROUND_HALF_UP)
    return v


class QuoteRequest(BaseModel):
    """Price an order from its item total and delivery distance."""

    item_total: Decimal = Field(..., ge=0, description="Sum of the cart line items")
    distance_km: Decimal = Field(..., ge=0, description="Kitchen to drop point distance in km")


class CartLine(BaseModel):
    """A single cart line: a meal, its quantity and any curry option surcharge."""

    meal_id: int
    name: str | None = None
    quantity: int = Field(..., ge=1)
    unit_price: Decimal = Field(..., ge=0)
    option_price: Decimal = Field(default=Decimal("0"), ge=0, description="Curry option price adjustment")


class CartQuoteRequest(BaseModel):
    """
    Price a whole cart.

    Either ``distance_km`` or ``drop_point`` must be given; an explicit
    distance wins over the nearest-kitchen lookup.
    """

    items: list[CartLine]
    distance_km: Decimal | None = Field(default=None, ge=0)
    drop_point: Coordinates | None = None


class QuoteResponse(BaseModel):
    """Itemised payable breakdown, amounts with two decimal places."""

    to_pay: Decimal
    item_total: Decimal
    gst: Decimal
    service_tax: Decimal
    discount: Decimal
    delivery_fee: Decimal
    delivery_discount: Decimal | None = None
    small_order_fee: Decimal
    packaging_fee: Decimal
    taxes_and_charges: Decimal

    class Config:
        from_attributes = True


class KitchenSummary(BaseModel):
    """Kitchen serving a drop point."""

    id: int
    area: str
    distance_km: Decimal = Field(..., description="Distance in km, two decimal places")
    within_service_area: bool

    @field_validator("distance_km", mode="before")
    @classmethod
    def round_distance(cls, v: Any) -> Any:
        return _round_km(v)


class CartQuoteResponse(BaseModel):
    """Cart quote with the distance it was priced at."""

    quote: QuoteResponse
    item_count: int
    distance_km: Decimal = Field(..., description="Distance in km, two decimal places")
    kitchen: KitchenSummary | None = None

    @field_validator("distance_km", mode="before")
    @classmethod
    def round_distance(cls, v: Any) -> Any:
        return _round_km(v)
