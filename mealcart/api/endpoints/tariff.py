"""
Tariff Endpoints
================
API endpoints for the active discount and delivery settings.
"""

from typing import Annotated, Any

import structlog
from fastapi import APIRouter, Depends, HTTPException, status

from mealcart.core.pricing import PricingEngine, get_pricing_engine

router = APIRouter()
logger = structlog.get_logger()


@router.get(
    "",
    summary="Get active tariff",
    description="Get the delivery, discount, tax and fee settings used for pricing",
)
async def get_tariff(
    engine: Annotated[PricingEngine, Depends(get_pricing_engine)],
) -> dict[str, Any]:
    """Return the active tariff as a camelCase settings document."""
    return engine.tariff.to_document()


@router.post(
    "/reload",
    summary="Reload tariff configuration",
    description="Reload the tariff from the YAML file",
)
async def reload_tariff(
    engine: Annotated[PricingEngine, Depends(get_pricing_engine)],
) -> dict[str, str]:
    """
    Reload the tariff from the YAML file.

    Useful for updating delivery and discount settings without restarting the
    service. A broken file leaves the current tariff in place.
    """
    try:
        engine.reload()
        return {"status": "ok", "message": "Tariff configuration reloaded"}
    except Exception as e:
        logger.error("Failed to reload tariff", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to reload tariff configuration",
        ) from e
