"""
Pricing Endpoints
=================
API endpoints for pricing orders and carts.
"""

from typing import Annotated

import structlog
from fastapi import APIRouter, Depends, HTTPException, status
from prometheus_client import Counter

from mealcart.core.exceptions import OutsideServiceAreaError, PricingError
from mealcart.core.pricing import PricingEngine, get_pricing_engine
from mealcart.schemas.pricing import (
    CartQuoteRequest,
    CartQuoteResponse,
    KitchenSummary,
    QuoteRequest,
    QuoteResponse,
)
from mealcart.services.checkout import CheckoutService, get_checkout_service

router = APIRouter()
logger = structlog.get_logger()

QUOTES_TOTAL = Counter(
    "mealcart_quotes_total",
    "Order quotes computed",
    ["endpoint", "outcome"],
)


@router.post(
    "/quote",
    response_model=QuoteResponse,
    response_model_exclude_none=True,
    summary="Price an order",
    description="Price an order from its item total and delivery distance using the active tariff",
)
async def quote_order(
    request: QuoteRequest,
    engine: Annotated[PricingEngine, Depends(get_pricing_engine)],
) -> QuoteResponse:
    """
    Price an order.

    Returns the full breakdown:
    - Delivery fee (and delivery discount above the free-delivery threshold)
    - Flat discount or small-order fee
    - Packaging fee, GST and service tax
    - Total payable
    """
    try:
        result = engine.quote(request.item_total, request.distance_km)
    except PricingError as e:
        QUOTES_TOTAL.labels(endpoint="quote", outcome="rejected").inc()
        logger.warning("Rejected quote request", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        ) from e
    except Exception as e:
        QUOTES_TOTAL.labels(endpoint="quote", outcome="error").inc()
        logger.error("Failed to price order", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to price order",
        ) from e

    QUOTES_TOTAL.labels(endpoint="quote", outcome="ok").inc()
    return QuoteResponse.model_validate(result)


@router.post(
    "/cart",
    response_model=CartQuoteResponse,
    response_model_exclude_none=True,
    summary="Price a cart",
    description="Aggregate cart lines, resolve the delivery distance and price the order",
)
async def quote_cart(
    request: CartQuoteRequest,
    service: Annotated[CheckoutService, Depends(get_checkout_service)],
) -> CartQuoteResponse:
    """
    Price a cart.

    The delivery distance is taken from ``distance_km`` when given, otherwise
    from the nearest kitchen to ``drop_point``.
    """
    try:
        checkout = service.quote_cart(
            request.items,
            distance_km=request.distance_km,
            drop_point=request.drop_point,
        )
    except OutsideServiceAreaError as e:
        QUOTES_TOTAL.labels(endpoint="cart", outcome="rejected").inc()
        logger.warning("Drop point outside service area", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(e),
        ) from e
    except PricingError as e:
        QUOTES_TOTAL.labels(endpoint="cart", outcome="rejected").inc()
        logger.warning("Rejected cart quote", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        ) from e
    except Exception as e:
        QUOTES_TOTAL.labels(endpoint="cart", outcome="error").inc()
        logger.error("Failed to price cart", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to price cart",
        ) from e

    QUOTES_TOTAL.labels(endpoint="cart", outcome="ok").inc()

    kitchen = None
    if checkout.service_area is not None:
        kitchen = KitchenSummary(
            id=checkout.service_area.kitchen.id,
            area=checkout.service_area.kitchen.area,
            distance_km=checkout.service_area.distance_km,
            within_service_area=checkout.service_area.within_service_area,
        )

    return CartQuoteResponse(
        quote=QuoteResponse.model_validate(checkout.result),
        item_count=checkout.item_count,
        distance_km=checkout.distance_km,
        kitchen=kitchen,
    )
