"""Food aggregate root - a food definition referenced by pantry items."""

import math
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any, Dict, Optional, Union

from nutrifex.domain.core.enums import (
    FoodCategory,
    FoodState,
    MeasurementUnit,
    QuantityType,
    coerce_enum,
)
from nutrifex.domain.core.value_objects.macronutrients import Macronutrients
from nutrifex.domain.core.value_objects.timestamps import ensure_aware, utc_now
from nutrifex.domain.shared.errors import ValidationError

FoodId = str

MAX_NAME_LENGTH = 200

MacronutrientsInput = Union[Macronutrients, Dict[str, float]]


def _validate_name(name: Any) -> None:
    if not isinstance(name, str) or not name.strip():
        raise ValidationError("Food name is required")
    if len(name) > MAX_NAME_LENGTH:
        raise ValidationError(f"Food name must be {MAX_NAME_LENGTH} characters or less")


def _as_macronutrients(value: MacronutrientsInput) -> Macronutrients:
    if isinstance(value, Macronutrients):
        return value
    return Macronutrients.from_dict(value)


@dataclass(frozen=True)
class Food:
    """
    Aggregate Root: nutritional definition of a food.

    A Food is a template: it carries the macronutrients for one
    serving_size worth of the food. PantryItem references it for
    inventory tracking.

    Invariants:
    - id is non-empty and never changes
    - name is non-empty and at most 200 characters
    - serving_size > 0
    - created_at/updated_at are timezone-aware

    Identity: Defined by id
    Mutability: None. Every update_* returns a new Food with a fresh
    updated_at; the receiver is left untouched.
    """

    id: FoodId
    name: str
    macronutrients: Macronutrients
    serving_size: float
    state: FoodState
    category: FoodCategory
    default_quantity_type: QuantityType
    default_unit: MeasurementUnit
    created_at: datetime
    updated_at: datetime
    description: Optional[str] = None
    brand: Optional[str] = None
    barcode: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate invariants on every build, including reconstruction."""
        if not isinstance(self.id, str) or not self.id.strip():
            raise ValidationError("Food ID is required")

        _validate_name(self.name)

        if not isinstance(self.macronutrients, Macronutrients):
            raise ValidationError("Food macronutrients must be a Macronutrients value object")

        if (
            self.serving_size is None
            or not math.isfinite(self.serving_size)
            or self.serving_size <= 0
        ):
            raise ValidationError(f"Serving size must be greater than 0, got {self.serving_size}")

        object.__setattr__(self, "state", coerce_enum(FoodState, self.state))
        object.__setattr__(self, "category", coerce_enum(FoodCategory, self.category))
        object.__setattr__(
            self,
            "default_quantity_type",
            coerce_enum(QuantityType, self.default_quantity_type),
        )
        object.__setattr__(self, "default_unit", coerce_enum(MeasurementUnit, self.default_unit))

        ensure_aware(self.created_at, "created_at")
        ensure_aware(self.updated_at, "updated_at")

    @classmethod
    def create(
        cls,
        id: FoodId,
        name: str,
        macronutrients: MacronutrientsInput,
        serving_size: float,
        state: FoodState,
        category: FoodCategory,
        default_quantity_type: QuantityType,
        default_unit: MeasurementUnit,
        description: Optional[str] = None,
        brand: Optional[str] = None,
        barcode: Optional[str] = None,
    ) -> "Food":
        """
        Factory method to create a new Food.

        Args:
            id: Unique identifier
            name: Display name (1-200 characters)
            macronutrients: Values per serving_size
            serving_size: Reference amount the macronutrients refer to
            state: Physical form
            category: Food category
            default_quantity_type: How pantry items of this food are tracked
            default_unit: Default unit for pantry items

        Returns:
            New Food with created_at == updated_at == now

        Raises:
            ValidationError: If any invariant is violated

        Example:
            >>> food = Food.create(
            ...     id="apple",
            ...     name="Apple",
            ...     macronutrients={"calories": 52, "protein": 0.3, "carbohydrates": 14, "fat": 0.2},
            ...     serving_size=100,
            ...     state=FoodState.SOLID,
            ...     category=FoodCategory.FRUIT,
            ...     default_quantity_type=QuantityType.BY_WEIGHT,
            ...     default_unit=MeasurementUnit.GRAM,
            ... )
        """
        now = utc_now()
        return cls(
            id=id,
            name=name,
            description=description,
            macronutrients=_as_macronutrients(macronutrients),
            serving_size=serving_size,
            state=state,
            category=category,
            default_quantity_type=default_quantity_type,
            default_unit=default_unit,
            brand=brand,
            barcode=barcode,
            created_at=now,
            updated_at=now,
        )

    def calculate_macronutrients_for_quantity(self, quantity: float) -> Macronutrients:
        """
        Macronutrients for a quantity expressed in the serving_size unit.

        Args:
            quantity: Amount in the same unit as serving_size

        Raises:
            ValidationError: If quantity is not positive
        """
        if quantity is None or not math.isfinite(quantity) or quantity <= 0:
            raise ValidationError(f"Quantity must be greater than 0, got {quantity}")

        return self.macronutrients.calculate_for_quantity(quantity / self.serving_size)

    def update_name(self, name: str) -> "Food":
        _validate_name(name)
        return replace(self, name=name, updated_at=utc_now())

    def update_description(self, description: Optional[str]) -> "Food":
        return replace(self, description=description, updated_at=utc_now())

    def update_macronutrients(self, macronutrients: MacronutrientsInput) -> "Food":
        return replace(
            self,
            macronutrients=_as_macronutrients(macronutrients),
            updated_at=utc_now(),
        )

    def update_category(self, category: FoodCategory) -> "Food":
        return replace(self, category=category, updated_at=utc_now())

    def update_state(self, state: FoodState) -> "Food":
        return replace(self, state=state, updated_at=utc_now())
