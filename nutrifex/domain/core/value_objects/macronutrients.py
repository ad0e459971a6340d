"""Macronutrients value object.

Immutable representation of the four main macronutrients.
Every operation returns a new instance.
"""

import math
from dataclasses import dataclass
from typing import Dict

from nutrifex.domain.shared.errors import ValidationError


def round_half_up(value: float, digits: int = 1) -> float:
    """Round half away from zero for non-negative values.

    Python's round() uses banker's rounding, so 0.25 would become 0.2.
    Scaled nutrients must round 0.25 to 0.3.
    """
    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor


@dataclass(frozen=True)
class Macronutrients:
    """Value object for calories and macronutrient grams.

    Attributes:
        calories: Energy in kcal
        protein: Protein in grams
        carbohydrates: Carbohydrates in grams
        fat: Fat in grams

    Examples:
        >>> m = Macronutrients(calories=200, protein=10, carbohydrates=30, fat=5)
        >>> m.calculate_for_quantity(0.5).calories
        100.0

        >>> (m + m).protein
        20

    Raises:
        ValidationError: If any value is negative or not finite.
    """

    calories: float
    protein: float
    carbohydrates: float
    fat: float

    def __post_init__(self) -> None:
        """Validate macronutrient invariants."""
        for field_name in ("calories", "protein", "carbohydrates", "fat"):
            value = getattr(self, field_name)
            if value is None or not math.isfinite(value):
                raise ValidationError(
                    f"{field_name.capitalize()} must be a finite number, got {value}"
                )
            if value < 0:
                raise ValidationError(f"{field_name.capitalize()} cannot be negative, got {value}")

    @classmethod
    def create(
        cls, calories: float, protein: float, carbohydrates: float, fat: float
    ) -> "Macronutrients":
        """Create validated macronutrients."""
        return cls(calories=calories, protein=protein, carbohydrates=carbohydrates, fat=fat)

    @classmethod
    def empty(cls) -> "Macronutrients":
        """All-zero macronutrients."""
        return cls(calories=0.0, protein=0.0, carbohydrates=0.0, fat=0.0)

    @classmethod
    def from_dict(cls, data: Dict[str, float]) -> "Macronutrients":
        """Build from a mapping with calories/protein/carbohydrates/fat keys."""
        try:
            return cls(
                calories=data["calories"],
                protein=data["protein"],
                carbohydrates=data["carbohydrates"],
                fat=data["fat"],
            )
        except KeyError as e:
            raise ValidationError(f"Missing macronutrient field: {e}") from e

    def calculate_for_quantity(self, ratio: float) -> "Macronutrients":
        """Scale all values by ratio, rounded to one decimal.

        Args:
            ratio: Multiplier (e.g., 2.0 for a double serving)

        Returns:
            New Macronutrients with scaled values.

        Raises:
            ValidationError: If ratio is negative.
        """
        if not math.isfinite(ratio) or ratio < 0:
            raise ValidationError(f"Ratio cannot be negative, got {ratio}")

        return Macronutrients(
            calories=round_half_up(self.calories * ratio),
            protein=round_half_up(self.protein * ratio),
            carbohydrates=round_half_up(self.carbohydrates * ratio),
            fat=round_half_up(self.fat * ratio),
        )

    def add(self, other: "Macronutrients") -> "Macronutrients":
        """Field-wise sum with another instance."""
        return Macronutrients(
            calories=self.calories + other.calories,
            protein=self.protein + other.protein,
            carbohydrates=self.carbohydrates + other.carbohydrates,
            fat=self.fat + other.fat,
        )

    def __add__(self, other: "Macronutrients") -> "Macronutrients":
        if not isinstance(other, Macronutrients):
            return NotImplemented
        return self.add(other)

    def to_dict(self) -> Dict[str, float]:
        """Plain dict representation."""
        return {
            "calories": self.calories,
            "protein": self.protein,
            "carbohydrates": self.carbohydrates,
            "fat": self.fat,
        }

    def __str__(self) -> str:
        return (
            f"{self.calories:.1f} kcal "
            f"(P {self.protein:.1f}g / C {self.carbohydrates:.1f}g / F {self.fat:.1f}g)"
        )
