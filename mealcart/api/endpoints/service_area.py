"""
Service Area Endpoints
======================
Check whether a kitchen delivers to a drop point.
"""

from typing import Annotated

import structlog
from fastapi import APIRouter, Depends, HTTPException, status

from mealcart.core.distance import Coordinates
from mealcart.core.exceptions import OutsideServiceAreaError
from mealcart.schemas.pricing import KitchenSummary
from mealcart.services.checkout import CheckoutService, get_checkout_service

router = APIRouter()
logger = structlog.get_logger()


@router.post(
    "/check",
    response_model=KitchenSummary,
    summary="Check service availability",
    description="Find the nearest kitchen to a drop point and whether it delivers there",
)
async def check_service_area(
    drop_point: Coordinates,
    service: Annotated[CheckoutService, Depends(get_checkout_service)],
) -> KitchenSummary:
    try:
        area = service.check_service_area(drop_point)
    except OutsideServiceAreaError as e:
        logger.warning("Service area check failed", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(e),
        ) from e

    return KitchenSummary(
        id=area.kitchen.id,
        area=area.kitchen.area,
        distance_km=area.distance_km,
        within_service_area=area.within_service_area,
    )
