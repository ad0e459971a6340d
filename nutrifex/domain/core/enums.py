"""Enumerations shared by food and pantry entities.

All enums are str-based so their values persist as plain TEXT columns.
"""

from enum import Enum
from typing import Any, Type, TypeVar

from nutrifex.domain.shared.errors import ValidationError


class FoodCategory(str, Enum):
    """Classification of food items for organization and filtering."""

    FRUIT = "FRUIT"
    VEGETABLE = "VEGETABLE"
    MEAT = "MEAT"
    FISH = "FISH"
    DAIRY = "DAIRY"
    GRAIN = "GRAIN"
    LEGUME = "LEGUME"
    NUT = "NUT"
    BEVERAGE = "BEVERAGE"
    CONDIMENT = "CONDIMENT"
    SNACK = "SNACK"
    OTHER = "OTHER"


class FoodState(str, Enum):
    """Physical form of a food item."""

    SOLID = "SOLID"
    LIQUID = "LIQUID"
    POWDER = "POWDER"
    GEL = "GEL"
    SEMI_SOLID = "SEMI_SOLID"


class MeasurementUnit(str, Enum):
    """Units for measuring food quantities."""

    # Weight
    GRAM = "GRAM"
    KILOGRAM = "KILOGRAM"

    # Volume
    MILLILITER = "MILLILITER"
    LITER = "LITER"

    # Count
    PIECE = "PIECE"
    SERVING = "SERVING"


class QuantityType(str, Enum):
    """How a food quantity is tracked.

    - BY_WEIGHT: grams or kilograms
    - BY_VOLUME: milliliters or liters
    - BY_UNIT: pieces or servings
    """

    BY_WEIGHT = "BY_WEIGHT"
    BY_VOLUME = "BY_VOLUME"
    BY_UNIT = "BY_UNIT"

    def compatible_units(self) -> frozenset[MeasurementUnit]:
        """Units that may be used with this quantity type.

        Example:
            >>> MeasurementUnit.GRAM in QuantityType.BY_WEIGHT.compatible_units()
            True
        """
        return _COMPATIBLE_UNITS[self]


_COMPATIBLE_UNITS = {
    QuantityType.BY_WEIGHT: frozenset({MeasurementUnit.GRAM, MeasurementUnit.KILOGRAM}),
    QuantityType.BY_VOLUME: frozenset({MeasurementUnit.MILLILITER, MeasurementUnit.LITER}),
    QuantityType.BY_UNIT: frozenset({MeasurementUnit.PIECE, MeasurementUnit.SERVING}),
}


class ExpirationType(str, Enum):
    """Kind of expiration date.

    - BEST_BEFORE: quality degrades after the date, still safe to eat
    - USE_BY: safety deadline, do not consume after the date
    """

    BEST_BEFORE = "BEST_BEFORE"
    USE_BY = "USE_BY"


E = TypeVar("E", bound=Enum)


def coerce_enum(enum_cls: Type[E], value: Any) -> E:
    """Convert a raw value to enum_cls, raising ValidationError on failure."""
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError as e:
        raise ValidationError(f"Invalid {enum_cls.__name__}: {value!r}") from e
