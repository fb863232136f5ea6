"""
Checkout Service
================
Prices a cart: aggregates its lines, resolves the delivery distance and runs
the pricing engine.
"""

from dataclasses import dataclass
from decimal import Decimal
from functools import lru_cache
from typing import Any, Iterable, Optional

import structlog

from mealcart.config import settings
from mealcart.core.distance import (
    Coordinates,
    Kitchen,
    ServiceArea,
    find_nearest_kitchen,
    load_kitchens,
)
from mealcart.core.exceptions import EmptyCartError, InvalidArgumentError, OutsideServiceAreaError
from mealcart.core.pricing import PricingEngine, PricingResult, get_pricing_engine, to_decimal
from mealcart.schemas.pricing import CartLine

logger = structlog.get_logger()


@dataclass(frozen=True)
class CheckoutQuote:
    """A priced cart together with the distance it was priced at."""

    result: PricingResult
    item_count: int
    distance_km: Decimal
    service_area: Optional[ServiceArea] = None


def cart_item_total(lines: Iterable[CartLine]) -> Decimal:
    """
    Sum a cart: ``quantity * (unit_price + option_price)`` per line.

    Raises:
        EmptyCartError: the cart has no lines
    """
    lines = list(lines)
    if not lines:
        raise EmptyCartError("Your cart is empty")

    return sum(
        (Decimal(line.quantity) * (line.unit_price + line.option_price) for line in lines),
        Decimal("0"),
    )


@lru_cache
def get_kitchens() -> tuple[Kitchen, ...]:
    """Get cached kitchen locations."""
    return tuple(load_kitchens(settings.kitchens_config_path))


class CheckoutService:
    """Service for pricing carts at checkout."""

    def __init__(
        self,
        engine: Optional[PricingEngine] = None,
        kitchens: Optional[Iterable[Kitchen]] = None,
    ):
        self.pricing = engine or get_pricing_engine()
        self.kitchens = tuple(kitchens) if kitchens is not None else get_kitchens()

    def check_service_area(self, drop_point: Coordinates) -> ServiceArea:
        """Find the nearest kitchen and whether it delivers to ``drop_point``."""
        return find_nearest_kitchen(drop_point, self.kitchens)

    def quote_cart(
        self,
        lines: Iterable[CartLine],
        distance_km: Any = None,
        drop_point: Optional[Coordinates] = None,
    ) -> CheckoutQuote:
        """
        Price a cart.

        The delivery distance is ``distance_km`` when given, otherwise the
        distance from ``drop_point`` to the nearest kitchen.

        Raises:
            EmptyCartError: the cart has no lines
            InvalidArgumentError: neither a distance nor a drop point was given
            OutsideServiceAreaError: no kitchen delivers to the drop point
        """
        lines = list(lines)
        item_total = cart_item_total(lines)

        service_area = None
        if distance_km is not None:
            distance = to_decimal(distance_km, "distance_km")
        elif drop_point is not None:
            service_area = self.check_service_area(drop_point)
            if not service_area.within_service_area:
                raise OutsideServiceAreaError(
                    f"Drop point is {service_area.distance_km:.1f} km from the nearest kitchen "
                    f"({service_area.kitchen.area}), outside its "
                    f"{service_area.kitchen.service_radius:g} km service radius"
                )
            distance = Decimal(str(service_area.distance_km))
        else:
            raise InvalidArgumentError("Either distance_km or drop_point is required")

        result = self.pricing.quote(item_total, distance)

        logger.info(
            "Priced cart",
            items=len(lines),
            item_total=str(result.item_total),
            distance_km=str(distance),
            kitchen=service_area.kitchen.area if service_area else None,
            to_pay=str(result.to_pay),
        )

        return CheckoutQuote(
            result=result,
            item_count=len(lines),
            distance_km=distance,
            service_area=service_area,
        )


def get_checkout_service() -> CheckoutService:
    """Get a checkout service bound to the active engine and kitchens."""
    return CheckoutService()
