"""
Service Area
============
Great-circle distance from a drop point to the nearest kitchen.
"""

import math
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

import structlog
import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from mealcart.core.exceptions import IncompleteConfigurationError, OutsideServiceAreaError

logger = structlog.get_logger()

EARTH_RADIUS_KM = 6371.0


class Coordinates(BaseModel):
    """A point on the map in decimal degrees."""

    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)


class Kitchen(BaseModel):
    """A kitchen that dispatches orders within its service radius."""

    id: int
    area: str
    pincode: str | None = None
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)
    service_radius: float = Field(..., ge=0, alias="serviceRadius", description="Radius in km")

    model_config = ConfigDict(populate_by_name=True)

    @property
    def coordinates(self) -> Coordinates:
        return Coordinates(lat=self.lat, lng=self.lng)


@dataclass(frozen=True)
class ServiceArea:
    """Nearest kitchen to a drop point and whether it delivers there."""

    kitchen: Kitchen
    distance_km: float
    within_service_area: bool


def haversine_km(origin: Coordinates, destination: Coordinates) -> float:
    """Return the great-circle distance between two points in kilometres."""
    d_lat = math.radians(destination.lat - origin.lat)
    d_lng = math.radians(destination.lng - origin.lng)

    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(origin.lat))
        * math.cos(math.radians(destination.lat))
        * math.sin(d_lng / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def find_nearest_kitchen(point: Coordinates, kitchens: Iterable[Kitchen]) -> ServiceArea:
    """
    Find the kitchen closest to ``point``.

    Ties keep the kitchen listed first.

    Raises:
        OutsideServiceAreaError: no kitchens are configured
    """
    nearest = None
    min_distance = math.inf

    for kitchen in kitchens:
        distance = haversine_km(point, kitchen.coordinates)
        if distance < min_distance:
            min_distance = distance
            nearest = kitchen

    if nearest is None:
        raise OutsideServiceAreaError("No kitchen locations available")

    return ServiceArea(
        kitchen=nearest,
        distance_km=min_distance,
        within_service_area=min_distance <= nearest.service_radius,
    )


def load_kitchens(path: str | Path) -> list[Kitchen]:
    """Load kitchen locations from a YAML list; a missing file yields no kitchens."""
    config_file = Path(path)

    if not config_file.exists():
        logger.warning("Kitchen config not found, no service area configured", path=str(path))
        return []

    try:
        with open(config_file) as f:
            data = yaml.safe_load(f) or {}
        kitchens = [Kitchen.model_validate(item) for item in data.get("kitchens", [])]
    except (OSError, yaml.YAMLError, AttributeError, ValidationError) as e:
        raise IncompleteConfigurationError(f"Unable to read kitchen config {path}: {e}") from e

    logger.info("Loaded kitchen locations", path=str(path), count=len(kitchens))
    return kitchens
