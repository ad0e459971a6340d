"""Quantity value object.

Immutable amount with a measurement unit and tracking type.
The unit must belong to the set allowed by the type.
"""

import math
from dataclasses import dataclass
from typing import Any, Dict

from nutrifex.domain.core.enums import MeasurementUnit, QuantityType, coerce_enum
from nutrifex.domain.shared.errors import ValidationError


@dataclass(frozen=True)
class Quantity:
    """Value object for an amount with unit.

    Attributes:
        amount: Non-negative numeric amount
        unit: Measurement unit, compatible with type
        type: Weight, volume or count based tracking

    Examples:
        >>> q = Quantity.by_weight(100, MeasurementUnit.GRAM)
        >>> q.subtract(Quantity.by_weight(30, MeasurementUnit.GRAM)).amount
        70

        >>> Quantity(5, MeasurementUnit.LITER, QuantityType.BY_WEIGHT)
        Traceback (most recent call last):
        ...
        nutrifex.domain.shared.errors.ValidationError: Unit LITER is not compatible with type BY_WEIGHT

    Raises:
        ValidationError: If amount is negative or unit does not match type.
    """

    amount: float
    unit: MeasurementUnit
    type: QuantityType

    def __post_init__(self) -> None:
        """Validate quantity invariants."""
        object.__setattr__(self, "unit", coerce_enum(MeasurementUnit, self.unit))
        object.__setattr__(self, "type", coerce_enum(QuantityType, self.type))

        if self.amount is None or not math.isfinite(self.amount):
            raise ValidationError(f"Quantity amount must be a finite number, got {self.amount}")
        if self.amount < 0:
            raise ValidationError(f"Quantity amount cannot be negative, got {self.amount}")

        if self.unit not in self.type.compatible_units():
            raise ValidationError(
                f"Unit {self.unit.value} is not compatible with type {self.type.value}"
            )

    @classmethod
    def create(cls, amount: float, unit: MeasurementUnit, type: QuantityType) -> "Quantity":
        return cls(amount=amount, unit=unit, type=type)

    @classmethod
    def zero(cls, unit: MeasurementUnit, type: QuantityType) -> "Quantity":
        """Zero amount for the given unit and type."""
        return cls(amount=0, unit=unit, type=type)

    @classmethod
    def by_weight(cls, amount: float, unit: MeasurementUnit = MeasurementUnit.GRAM) -> "Quantity":
        return cls(amount=amount, unit=unit, type=QuantityType.BY_WEIGHT)

    @classmethod
    def by_volume(
        cls, amount: float, unit: MeasurementUnit = MeasurementUnit.MILLILITER
    ) -> "Quantity":
        return cls(amount=amount, unit=unit, type=QuantityType.BY_VOLUME)

    @classmethod
    def by_unit(cls, amount: float, unit: MeasurementUnit = MeasurementUnit.PIECE) -> "Quantity":
        return cls(amount=amount, unit=unit, type=QuantityType.BY_UNIT)

    def is_empty(self) -> bool:
        """True when amount is exactly zero."""
        return self.amount == 0

    def add(self, other: "Quantity") -> "Quantity":
        """Add another quantity with the same unit.

        Raises:
            ValidationError: If units differ.
        """
        if self.unit != other.unit:
            raise ValidationError("Cannot add quantities with different units")
        return Quantity(amount=self.amount + other.amount, unit=self.unit, type=self.type)

    def subtract(self, other: "Quantity") -> "Quantity":
        """Subtract another quantity with the same unit.

        Raises:
            ValidationError: If units differ or the result would be negative.
        """
        if self.unit != other.unit:
            raise ValidationError("Cannot subtract quantities with different units")

        new_amount = self.amount - other.amount
        if new_amount < 0:
            raise ValidationError(
                f"Cannot subtract {other.amount} from {self.amount}: result would be negative"
            )
        return Quantity(amount=new_amount, unit=self.unit, type=self.type)

    def to_dict(self) -> Dict[str, Any]:
        return {"amount": self.amount, "unit": self.unit.value, "type": self.type.value}

    def __str__(self) -> str:
        return f"{self.amount:g} {self.unit.value}"
