"""
Order Pricing Engine
====================
Turns a cart's item total, a delivery distance and a tariff into an itemised
payable breakdown: delivery fee, discounts, surcharges, taxes and grand total.
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Context, Decimal, DecimalException, InvalidOperation, localcontext
from functools import lru_cache
from typing import Any, Mapping, Optional

import structlog

from mealcart.config import settings
from mealcart.core.exceptions import InvalidArgumentError
from mealcart.core.tariff import TariffConfig, load_tariff

logger = structlog.get_logger()

MONEY = Decimal("0.01")
HUNDRED = Decimal("100")
ZERO = Decimal("0")

# Working precision for pricing arithmetic. Amounts whose two-place rounding
# needs more significant digits than this are rejected as invalid input.
PRICING_PRECISION = 60


def pricing_context() -> Context:
    """Decimal context used for pricing arithmetic and money rounding."""
    return Context(prec=PRICING_PRECISION)


def to_decimal(value: Any, name: str) -> Decimal:
    """Convert a numeric input to a finite Decimal, going through str() for floats."""
    if isinstance(value, bool):
        raise InvalidArgumentError(f"{name} must be a number, got {value!r}")
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError) as e:
        raise InvalidArgumentError(f"{name} must be a number, got {value!r}") from e
    if not amount.is_finite():
        raise InvalidArgumentError(f"{name} must be finite, got {value!r}")
    return amount


@dataclass(frozen=True)
class PricingRequest:
    """Inputs for a single pricing computation."""

    item_total: Decimal
    distance_km: Decimal
    tariff: TariffConfig

    def __post_init__(self) -> None:
        item_total = to_decimal(self.item_total, "item_total")
        distance_km = to_decimal(self.distance_km, "distance_km")
        if item_total < 0:
            raise InvalidArgumentError(f"item_total must be >= 0, got {item_total}")
        if distance_km < 0:
            raise InvalidArgumentError(f"distance_km must be >= 0, got {distance_km}")

        tariff = self.tariff
        if not isinstance(tariff, TariffConfig):
            tariff = TariffConfig.from_mapping(tariff)

        object.__setattr__(self, "item_total", item_total)
        object.__setattr__(self, "distance_km", distance_km)
        object.__setattr__(self, "tariff", tariff)


@dataclass(frozen=True)
class PricingResult:
    """Itemised payable breakdown. Every amount has exactly two decimal places."""

    to_pay: Decimal
    item_total: Decimal
    gst: Decimal
    service_tax: Decimal
    discount: Decimal
    delivery_fee: Decimal
    small_order_fee: Decimal
    packaging_fee: Decimal
    taxes_and_charges: Decimal
    delivery_discount: Optional[Decimal] = None

    def to_dict(self) -> dict[str, str]:
        """Return the camelCase breakdown rendered by the checkout client."""
        result = {
            "toPay": str(self.to_pay),
            "itemTotal": str(self.item_total),
            "gst": str(self.gst),
            "serviceTax": str(self.service_tax),
            "discount": str(self.discount),
            "deliveryFee": str(self.delivery_fee),
            "smallOrderFee": str(self.small_order_fee),
            "packagingFee": str(self.packaging_fee),
            "taxesAndCharges": str(self.taxes_and_charges),
        }
        if self.delivery_discount is not None:
            result["deliveryDiscount"] = str(self.delivery_discount)
        return result


def compute_total(request: PricingRequest, rounding: str = ROUND_HALF_UP) -> PricingResult:
    """
    Price an order.

    All arithmetic is exact decimal; amounts are rounded to two places only
    when the result is built.

    Note the thresholds differ on purpose: the delivery discount needs the
    item total to be strictly above ``free_delivery_threshold``, while the
    order discount applies from ``min_order_value`` inclusive.

    Raises:
        InvalidArgumentError: an amount is too large to price exactly
    """
    try:
        with localcontext(pricing_context()):
            return _compute_total(request, rounding)
    except DecimalException as e:
        raise InvalidArgumentError(
            f"Order is too large to price: item_total={request.item_total}, "
            f"distance_km={request.distance_km}"
        ) from e


def _compute_total(request: PricingRequest, rounding: str) -> PricingResult:
    tariff = request.tariff
    delivery = tariff.delivery
    item_total = request.item_total
    distance_km = request.distance_km

    # Distance-based delivery fee
    if distance_km <= delivery.min_distance:
        full_delivery_fee = delivery.base_fee
    else:
        full_delivery_fee = (
            delivery.base_fee + (distance_km - delivery.min_distance) * delivery.extra_per_km
        )

    if item_total > delivery.free_delivery_threshold:
        delivery_fee = full_delivery_fee * delivery.delivery_fee_free_percentage / HUNDRED
        delivery_discount = full_delivery_fee - delivery_fee
    else:
        delivery_fee = full_delivery_fee
        delivery_discount = ZERO

    min_order_value = tariff.discount.min_order_value
    discount = tariff.discount.flat_discount if item_total >= min_order_value else ZERO
    small_order_fee = tariff.fees.small_order_fee if item_total < min_order_value else ZERO
    packaging_fee = tariff.fees.packaging_fee

    sub_total = item_total - discount + delivery_fee + small_order_fee + packaging_fee

    # Both taxes use the same base; they are summed, never compounded
    gst = sub_total * tariff.tax.gst_percent / HUNDRED
    service_tax = sub_total * tariff.tax.service_tax / HUNDRED
    total_tax = gst + service_tax

    to_pay = sub_total + total_tax
    taxes_and_charges = delivery_fee + small_order_fee + packaging_fee + total_tax

    def money(amount: Decimal) -> Decimal:
        return amount.quantize(MONEY, rounding=rounding)

    return PricingResult(
        to_pay=money(to_pay),
        item_total=money(item_total),
        gst=money(gst),
        service_tax=money(service_tax),
        discount=money(discount),
        delivery_fee=money(delivery_fee),
        small_order_fee=money(small_order_fee),
        packaging_fee=money(packaging_fee),
        taxes_and_charges=money(taxes_and_charges),
        delivery_discount=money(delivery_discount) if delivery_discount > 0 else None,
    )


class PricingEngine:
    """
    Order pricing engine bound to the active tariff.

    Loads the tariff from YAML configuration; ``reload`` swaps in a freshly
    read tariff without restarting the service.
    """

    def __init__(
        self,
        tariff: TariffConfig | Mapping[str, Any] | None = None,
        config_path: Optional[str] = None,
        rounding: Optional[str] = None,
    ):
        self.config_path = config_path or settings.tariff_config_path
        self.rounding = rounding or settings.decimal_rounding
        if tariff is None:
            self._tariff = load_tariff(self.config_path)
        elif isinstance(tariff, TariffConfig):
            self._tariff = tariff
        else:
            self._tariff = TariffConfig.from_mapping(tariff)

    @property
    def tariff(self) -> TariffConfig:
        return self._tariff

    def reload(self) -> None:
        """
        Reload the tariff from the configuration file.

        If the file cannot be loaded the current tariff stays active and the
        error is raised to the caller.
        """
        try:
            tariff = load_tariff(self.config_path)
        except Exception as e:
            logger.error("Failed to reload tariff, keeping current one", path=self.config_path, error=str(e))
            raise
        self._tariff = tariff

    def quote(self, item_total: Any, distance_km: Any) -> PricingResult:
        """
        Price an order with the active tariff.

        Args:
            item_total: Sum of the cart line items
            distance_km: Distance from the kitchen to the drop point

        Returns:
            Itemised payable breakdown
        """
        request = PricingRequest(item_total=item_total, distance_km=distance_km, tariff=self._tariff)
        result = compute_total(request, rounding=self.rounding)

        logger.debug(
            "Computed order total",
            item_total=str(request.item_total),
            distance_km=str(request.distance_km),
            to_pay=str(result.to_pay),
        )
        return result


@lru_cache
def get_pricing_engine() -> PricingEngine:
    """Get cached pricing engine instance."""
    return PricingEngine()
