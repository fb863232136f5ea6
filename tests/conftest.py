"""
Test Configuration
==================
Pytest fixtures for Mealcart pricing tests.
"""

from collections.abc import Generator
from decimal import ROUND_HALF_UP
from pathlib import Path

import pytest
import yaml
from fastapi.testclient import TestClient

from mealcart.core.distance import Kitchen
from mealcart.core.pricing import PricingEngine, get_pricing_engine
from mealcart.core.tariff import TariffConfig
from mealcart.main import app
from mealcart.services.checkout import CheckoutService, get_checkout_service


@pytest.fixture
def tariff_document() -> dict:
    """Settings document in the stored camelCase shape."""
    return {
        "delivery": {
            "baseFee": 30,
            "extraPerKm": 5,
            "freeDeliveryThreshold": 500,
            "minDistance": 5,
            "deliveryFeeFreePercentage": 50,
        },
        "discount": {"flatDiscount": 20, "minOrderValue": 300},
        "tax": {"gstPercent": 5, "serviceTax": 1},
        "fees": {"smallOrderFee": 15, "packagingFee": 10},
    }


@pytest.fixture
def tariff(tariff_document: dict) -> TariffConfig:
    return TariffConfig.from_mapping(tariff_document)


@pytest.fixture
def tariff_file(tmp_path: Path, tariff_document: dict) -> Path:
    """Tariff YAML file on disk."""
    path = tmp_path / "tariff.yaml"
    path.write_text(yaml.safe_dump(tariff_document))
    return path


@pytest.fixture
def engine(tariff_file: Path) -> PricingEngine:
    """Pricing engine reading the test tariff file."""
    return PricingEngine(config_path=str(tariff_file), rounding=ROUND_HALF_UP)


@pytest.fixture
def kitchens() -> list[Kitchen]:
    return [
        Kitchen(id=1, area="Gachibowli", pincode="500032", lat=17.4401, lng=78.3489, service_radius=8),
        Kitchen(id=2, area="Madhapur", pincode="500081", lat=17.4483, lng=78.3915, service_radius=6),
    ]


@pytest.fixture
def checkout_service(engine: PricingEngine, kitchens: list[Kitchen]) -> CheckoutService:
    return CheckoutService(engine=engine, kitchens=kitchens)


@pytest.fixture
def client(
    engine: PricingEngine,
    checkout_service: CheckoutService,
) -> Generator[TestClient, None, None]:
    """Create test client with the test engine and kitchens."""
    app.dependency_overrides[get_pricing_engine] = lambda: engine
    app.dependency_overrides[get_checkout_service] = lambda: checkout_service

    with TestClient(app) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
def sample_cart() -> list[dict]:
    """Sample cart lines for testing."""
    return [
        {"meal_id": 1, "name": "Veg Thali", "quantity": 2, "unit_price": "120", "option_price": "15"},
        {"meal_id": 4, "name": "Egg Curry Meal", "quantity": 1, "unit_price": "150"},
    ]
