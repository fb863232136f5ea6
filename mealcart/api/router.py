"""
API Router
==========
Main API router combining all endpoint modules.
"""

from fastapi import APIRouter

from mealcart.api.endpoints import health, pricing, service_area, tariff

api_router = APIRouter()

# Include endpoint routers
api_router.include_router(health.router, tags=["Health"])
api_router.include_router(pricing.router, prefix="/pricing", tags=["Pricing"])
api_router.include_router(service_area.router, prefix="/service-area", tags=["Service Area"])
api_router.include_router(tariff.router, prefix="/tariff", tags=["Tariff"])
