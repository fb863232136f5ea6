"""
Tariff Configuration
====================
Delivery, discount, tax and fee rules applied to every order.

Field names follow Python conventions; the camelCase keys of the stored
"DiscountAndDeliverySettings" document are accepted as aliases so a settings
document can be loaded as-is.
"""

from decimal import Decimal
from pathlib import Path
from typing import Any, Mapping

import structlog
import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from mealcart.core.exceptions import IncompleteConfigurationError, InvalidArgumentError

logger = structlog.get_logger()

DEFAULT_MIN_DISTANCE_KM = Decimal("5")
DEFAULT_FREE_DELIVERY_PERCENTAGE = Decimal("50")

DEFAULT_TARIFF: dict[str, Any] = {
    "delivery": {
        "baseFee": 30,
        "extraPerKm": 5,
        "freeDeliveryThreshold": 500,
        "deliveryFeeFreePercentage": 50,
        "minDistance": 5,
    },
    "discount": {"flatDiscount": 20, "minOrderValue": 300},
    "tax": {"gstPercent": 5, "serviceTax": 1},
    "fees": {"smallOrderFee": 15, "packagingFee": 10},
}


class _TariffSection(BaseModel):
    """Common behaviour for tariff sections."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    @field_validator("*", mode="before")
    @classmethod
    def coerce_decimal(cls, v: Any) -> Any:
        # Floats go through str() so 0.1 stays 0.1 rather than its binary expansion
        if isinstance(v, bool):
            raise ValueError("boolean is not a valid amount")
        if isinstance(v, float):
            v = Decimal(str(v))
        if isinstance(v, Decimal) and not v.is_finite():
            raise ValueError("amount must be a finite number")
        return v


class DeliveryTariff(_TariffSection):
    """Distance-based delivery fee rules."""

    base_fee: Decimal = Field(..., ge=0, alias="baseFee")
    extra_per_km: Decimal = Field(..., ge=0, alias="extraPerKm")
    free_delivery_threshold: Decimal = Field(..., ge=0, alias="freeDeliveryThreshold")
    delivery_fee_free_percentage: Decimal = Field(
        default=DEFAULT_FREE_DELIVERY_PERCENTAGE,
        ge=0,
        le=100,
        alias="deliveryFeeFreePercentage",
        description="Share of the delivery fee still charged once the free-delivery threshold is passed",
    )
    min_distance: Decimal = Field(default=DEFAULT_MIN_DISTANCE_KM, ge=0, alias="minDistance")
    # Stored with the settings but not used when pricing an order
    peak_charge: Decimal | None = Field(default=None, ge=0, alias="peakCharge")


class DiscountTariff(_TariffSection):
    """Flat order discount rules."""

    flat_discount: Decimal = Field(..., ge=0, alias="flatDiscount")
    min_order_value: Decimal = Field(..., ge=0, alias="minOrderValue")


class TaxTariff(_TariffSection):
    """Tax percentages, both applied to the pre-tax subtotal."""

    gst_percent: Decimal = Field(..., ge=0, le=100, alias="gstPercent")
    service_tax: Decimal = Field(..., ge=0, le=100, alias="serviceTax")


class FeeTariff(_TariffSection):
    """Fixed surcharges."""

    small_order_fee: Decimal = Field(..., ge=0, alias="smallOrderFee")
    packaging_fee: Decimal = Field(..., ge=0, alias="packagingFee")


class TariffConfig(BaseModel):
    """Complete tariff applied when pricing an order."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    delivery: DeliveryTariff
    discount: DiscountTariff
    tax: TaxTariff
    fees: FeeTariff

    @classmethod
    def from_mapping(cls, data: Any) -> "TariffConfig":
        """
        Build a tariff from a plain mapping (YAML or JSON document).

        Raises:
            IncompleteConfigurationError: a required field is missing
            InvalidArgumentError: a field is negative, out of range or not numeric
        """
        if not isinstance(data, Mapping):
            raise IncompleteConfigurationError(
                f"Tariff document must be a mapping, got {type(data).__name__}"
            )

        try:
            return cls.model_validate(dict(data))
        except ValidationError as e:
            raise _translate_validation_error(e) from e

    def to_document(self) -> dict[str, Any]:
        """Return the tariff as a camelCase settings document."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


def _translate_validation_error(error: ValidationError) -> Exception:
    """Map a pydantic validation error onto the pricing error taxonomy."""
    details = error.errors()
    missing = [".".join(str(part) for part in d["loc"]) for d in details if d["type"] == "missing"]
    if missing:
        return IncompleteConfigurationError(
            f"Tariff is missing required field(s): {', '.join(missing)}"
        )

    problems = "; ".join(
        f"{'.'.join(str(part) for part in d['loc'])}: {d['msg']}" for d in details
    )
    return InvalidArgumentError(f"Invalid tariff: {problems}")


def load_tariff(path: str | Path) -> TariffConfig:
    """
    Load a tariff from a YAML file.

    Falls back to the built-in default tariff when the file does not exist.
    """
    config_file = Path(path)

    if not config_file.exists():
        logger.warning("Tariff config not found, using defaults", path=str(path))
        return TariffConfig.from_mapping(DEFAULT_TARIFF)

    try:
        with open(config_file) as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise IncompleteConfigurationError(f"Unable to read tariff config {path}: {e}") from e

    tariff = TariffConfig.from_mapping(data if data is not None else {})
    logger.info("Loaded tariff configuration", path=str(path))
    return tariff
