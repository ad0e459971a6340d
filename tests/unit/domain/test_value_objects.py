"""Unit tests for Macronutrients, Quantity and ExpirationDate."""

from dataclasses import FrozenInstanceError
from datetime import datetime, timedelta, timezone

import pytest

from nutrifex.domain.core.enums import ExpirationType, MeasurementUnit, QuantityType
from nutrifex.domain.core.value_objects import ExpirationDate, Macronutrients, Quantity
from nutrifex.domain.core.value_objects.macronutrients import round_half_up
from nutrifex.domain.shared.errors import ValidationError

NOW = datetime(2025, 1, 15, 12, 0, 0, tzinfo=timezone.utc)


class TestMacronutrients:
    """Test Macronutrients value object."""

    def test_create_valid(self) -> None:
        m = Macronutrients.create(calories=200, protein=10, carbohydrates=30, fat=5)

        assert m.calories == 200
        assert m.to_dict() == {"calories": 200, "protein": 10, "carbohydrates": 30, "fat": 5}

    @pytest.mark.parametrize("field", ["calories", "protein", "carbohydrates", "fat"])
    def test_negative_value_raises(self, field: str) -> None:
        """Test every field rejects negative values."""
        values = {"calories": 1.0, "protein": 1.0, "carbohydrates": 1.0, "fat": 1.0}
        values[field] = -0.1

        with pytest.raises(ValidationError, match="cannot be negative"):
            Macronutrients(**values)

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_value_raises(self, value: float) -> None:
        with pytest.raises(ValidationError, match="finite"):
            Macronutrients(calories=value, protein=1, carbohydrates=1, fat=1)
        with pytest.raises(ValidationError):
            Macronutrients(1, 1, 1, 1).calculate_for_quantity(value)

    def test_empty(self) -> None:
        assert Macronutrients.empty() == Macronutrients(0, 0, 0, 0)

    def test_calculate_for_quantity_scales(self) -> None:
        """Test half serving halves every value."""
        m = Macronutrients(calories=200, protein=10, carbohydrates=30, fat=5)

        half = m.calculate_for_quantity(0.5)

        assert half == Macronutrients(calories=100.0, protein=5.0, carbohydrates=15.0, fat=2.5)

    def test_calculate_for_quantity_rounds_half_up(self) -> None:
        """Test 1.25 rounds to 1.3, not to the even 1.2."""
        m = Macronutrients(calories=10, protein=1, carbohydrates=0, fat=0)

        scaled = m.calculate_for_quantity(0.125)

        assert scaled.calories == 1.3
        assert scaled.protein == 0.1

    def test_calculate_for_quantity_negative_ratio_raises(self) -> None:
        with pytest.raises(ValidationError):
            Macronutrients(1, 1, 1, 1).calculate_for_quantity(-1)

    def test_add(self) -> None:
        a = Macronutrients(100, 5, 10, 2)
        b = Macronutrients(50, 1, 2, 3)

        assert a + b == Macronutrients(150, 6, 12, 5)
        assert a.add(b) == a + b

    def test_immutable(self) -> None:
        m = Macronutrients(1, 1, 1, 1)

        with pytest.raises(FrozenInstanceError):
            m.calories = 5  # type: ignore[misc]

    def test_round_half_up(self) -> None:
        assert round_half_up(0.25) == 0.3
        assert round_half_up(0.24) == 0.2
        assert round_half_up(2.0) == 2.0


class TestQuantity:
    """Test Quantity value object."""

    def test_factories_set_type(self) -> None:
        assert Quantity.by_weight(100).type == QuantityType.BY_WEIGHT
        assert Quantity.by_volume(250).unit == MeasurementUnit.MILLILITER
        assert Quantity.by_unit(3).unit == MeasurementUnit.PIECE

    def test_negative_amount_raises(self) -> None:
        with pytest.raises(ValidationError, match="cannot be negative"):
            Quantity.by_weight(-1)

    @pytest.mark.parametrize("amount", [float("nan"), float("inf")])
    def test_non_finite_amount_raises(self, amount: float) -> None:
        with pytest.raises(ValidationError, match="finite"):
            Quantity.by_weight(amount)

    @pytest.mark.parametrize(
        "unit,quantity_type",
        [
            (MeasurementUnit.LITER, QuantityType.BY_WEIGHT),
            (MeasurementUnit.GRAM, QuantityType.BY_VOLUME),
            (MeasurementUnit.KILOGRAM, QuantityType.BY_UNIT),
        ],
    )
    def test_incompatible_unit_raises(
        self, unit: MeasurementUnit, quantity_type: QuantityType
    ) -> None:
        with pytest.raises(ValidationError, match="not compatible"):
            Quantity(amount=1, unit=unit, type=quantity_type)

    def test_string_values_are_coerced(self) -> None:
        q = Quantity(amount=1, unit="LITER", type="BY_VOLUME")  # type: ignore[arg-type]

        assert q.unit is MeasurementUnit.LITER
        assert q.type is QuantityType.BY_VOLUME

    def test_unknown_unit_raises(self) -> None:
        with pytest.raises(ValidationError, match="Invalid MeasurementUnit"):
            Quantity(amount=1, unit="CUP", type=QuantityType.BY_VOLUME)  # type: ignore[arg-type]

    def test_zero_and_is_empty(self) -> None:
        zero = Quantity.zero(MeasurementUnit.PIECE, QuantityType.BY_UNIT)

        assert zero.is_empty()
        assert not Quantity.by_unit(1).is_empty()

    def test_add_and_subtract(self) -> None:
        q = Quantity.by_weight(100)

        assert q.add(Quantity.by_weight(50)).amount == 150
        assert q.subtract(Quantity.by_weight(30)).amount == 70
        assert q.amount == 100

    def test_subtract_below_zero_raises(self) -> None:
        with pytest.raises(ValidationError, match="negative"):
            Quantity.by_weight(10).subtract(Quantity.by_weight(11))

    def test_different_units_raise(self) -> None:
        grams = Quantity.by_weight(100, MeasurementUnit.GRAM)
        kilos = Quantity.by_weight(1, MeasurementUnit.KILOGRAM)

        with pytest.raises(ValidationError, match="different units"):
            grams.add(kilos)
        with pytest.raises(ValidationError, match="different units"):
            grams.subtract(kilos)


class TestExpirationDate:
    """Test ExpirationDate value object."""

    def test_naive_datetime_raises(self) -> None:
        with pytest.raises(ValidationError, match="timezone-aware"):
            ExpirationDate.best_before(datetime(2025, 1, 1))

    def test_is_expired_strictly_before(self) -> None:
        assert ExpirationDate.use_by(NOW - timedelta(seconds=1)).is_expired(NOW)
        assert not ExpirationDate.use_by(NOW).is_expired(NOW)

    @pytest.mark.parametrize(
        "offset,expected",
        [
            (timedelta(days=3), 3),
            (timedelta(days=2, hours=1), 3),
            (timedelta(hours=1), 1),
            (timedelta(0), 0),
            (timedelta(hours=-1), 0),
            (timedelta(days=-1), -1),
            (timedelta(days=-1, hours=-1), -1),
        ],
    )
    def test_days_until_expiration_rounds_up(self, offset: timedelta, expected: int) -> None:
        assert ExpirationDate.best_before(NOW + offset).days_until_expiration(NOW) == expected

    def test_is_expiring_soon_window(self) -> None:
        """Test exactly threshold days is inside, one more day is outside."""
        assert ExpirationDate.best_before(NOW + timedelta(days=3)).is_expiring_soon(3, NOW)
        assert not ExpirationDate.best_before(NOW + timedelta(days=4)).is_expiring_soon(3, NOW)
        assert not ExpirationDate.best_before(NOW - timedelta(days=1)).is_expiring_soon(3, NOW)

    def test_expired_less_than_a_day_ago_counts_as_expiring(self) -> None:
        exp = ExpirationDate.best_before(NOW - timedelta(hours=5))

        assert exp.is_expired(NOW)
        assert exp.is_expiring_soon(3, NOW)

    def test_safety_critical(self) -> None:
        assert ExpirationDate.use_by(NOW).is_safety_critical()
        assert not ExpirationDate.best_before(NOW).is_safety_critical()

    def test_create_coerces_type(self) -> None:
        exp = ExpirationDate.create(NOW, "USE_BY")  # type: ignore[arg-type]

        assert exp.type is ExpirationType.USE_BY
