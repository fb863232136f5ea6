"""
Service Area Tests
==================
Tests for distance and nearest-kitchen lookup.
"""

from pathlib import Path

import pytest

from mealcart.core.distance import (
    Coordinates,
    Kitchen,
    find_nearest_kitchen,
    haversine_km,
    load_kitchens,
)
from mealcart.core.exceptions import IncompleteConfigurationError, OutsideServiceAreaError


class TestHaversine:
    """Great-circle distance."""

    def test_same_point(self):
        point = Coordinates(lat=17.4401, lng=78.3489)
        assert haversine_km(point, point) == 0

    def test_one_degree_of_latitude(self):
        distance = haversine_km(Coordinates(lat=0, lng=0), Coordinates(lat=1, lng=0))
        assert distance == pytest.approx(111.19, abs=0.01)

    def test_symmetric(self):
        a = Coordinates(lat=17.4401, lng=78.3489)
        b = Coordinates(lat=17.4483, lng=78.3915)
        assert haversine_km(a, b) == pytest.approx(haversine_km(b, a))

    def test_coordinates_are_range_checked(self):
        with pytest.raises(ValueError):
            Coordinates(lat=91, lng=0)


class TestNearestKitchen:
    """Nearest kitchen and service radius."""

    def test_picks_closest_kitchen(self, kitchens: list[Kitchen]):
        area = find_nearest_kitchen(Coordinates(lat=17.4483, lng=78.3915), kitchens)

        assert area.kitchen.area == "Madhapur"
        assert area.distance_km == pytest.approx(0)
        assert area.within_service_area

    def test_between_kitchens(self, kitchens: list[Kitchen]):
        # Slightly west of Gachibowli
        area = find_nearest_kitchen(Coordinates(lat=17.4401, lng=78.33), kitchens)

        assert area.kitchen.area == "Gachibowli"
        assert 1 < area.distance_km < 3
        assert area.within_service_area

    def test_outside_service_radius(self, kitchens: list[Kitchen]):
        area = find_nearest_kitchen(Coordinates(lat=17.0, lng=78.0), kitchens)

        assert area.kitchen.area == "Gachibowli"
        assert area.distance_km > area.kitchen.service_radius
        assert not area.within_service_area

    def test_boundary_is_inside(self):
        kitchen = Kitchen(id=1, area="Hub", lat=0, lng=0, service_radius=0)
        area = find_nearest_kitchen(Coordinates(lat=0, lng=0), [kitchen])

        assert area.within_service_area

    def test_tie_keeps_first_listed(self):
        first = Kitchen(id=1, area="First", lat=10, lng=10, service_radius=5)
        second = Kitchen(id=2, area="Second", lat=10, lng=10, service_radius=5)

        area = find_nearest_kitchen(Coordinates(lat=10, lng=10.01), [first, second])

        assert area.kitchen.id == 1

    def test_no_kitchens(self):
        with pytest.raises(OutsideServiceAreaError):
            find_nearest_kitchen(Coordinates(lat=10, lng=10), [])


class TestLoadKitchens:
    """Reading the kitchen YAML file."""

    def test_load_from_file(self, tmp_path: Path):
        path = tmp_path / "kitchens.yaml"
        path.write_text(
            "kitchens:\n"
            "  - {id: 7, area: Kukatpally, pincode: '500072', lat: 17.4948, lng: 78.3996, serviceRadius: 5}\n"
        )

        kitchens = load_kitchens(path)

        assert len(kitchens) == 1
        assert kitchens[0].area == "Kukatpally"
        assert kitchens[0].service_radius == 5

    def test_missing_file(self, tmp_path: Path):
        assert load_kitchens(tmp_path / "absent.yaml") == []

    def test_invalid_entry(self, tmp_path: Path):
        path = tmp_path / "kitchens.yaml"
        path.write_text("kitchens:\n  - {id: 7, area: Kukatpally}\n")

        with pytest.raises(IncompleteConfigurationError):
            load_kitchens(path)

    def test_shipped_config_is_valid(self):
        path = Path(__file__).resolve().parent.parent / "config" / "kitchens.yaml"

        kitchens = load_kitchens(path)

        assert kitchens
        assert all(k.service_radius > 0 for k in kitchens)
