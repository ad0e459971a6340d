"""Food <-> FoodRow mapping."""

from typing import ClassVar, Tuple

from nutrifex.domain.core.entities.food import Food
from nutrifex.domain.core.value_objects.macronutrients import Macronutrients
from nutrifex.domain.core.value_objects.timestamps import from_storage_text, to_storage_text
from nutrifex.infrastructure.persistence.mappers.base import RowMapper
from nutrifex.infrastructure.persistence.mappers.rows import FoodRow


class FoodMapper(RowMapper[Food, FoodRow]):
    """
    Flattens Macronutrients into four columns and enums into their values.

    Round trip: FoodMapper.to_domain(FoodMapper.to_persistence(food)) == food
    """

    row_model = FoodRow
    COLUMNS: ClassVar[Tuple[str, ...]] = tuple(FoodRow.model_fields)

    @classmethod
    def to_persistence(cls, food: Food) -> FoodRow:
        return FoodRow(
            id=food.id,
            name=food.name,
            description=food.description,
            macronutrients_calories=food.macronutrients.calories,
            macronutrients_protein=food.macronutrients.protein,
            macronutrients_carbohydrates=food.macronutrients.carbohydrates,
            macronutrients_fat=food.macronutrients.fat,
            serving_size=food.serving_size,
            state=food.state.value,
            category=food.category.value,
            default_quantity_type=food.default_quantity_type.value,
            default_unit=food.default_unit.value,
            brand=food.brand,
            barcode=food.barcode,
            created_at=to_storage_text(food.created_at),
            updated_at=to_storage_text(food.updated_at),
        )

    @classmethod
    def to_domain(cls, row: FoodRow) -> Food:
        """
        Rebuild a Food from its row.

        Raises:
            ValidationError: If the stored values violate Food invariants
        """
        return Food(
            id=row.id,
            name=row.name,
            description=row.description,
            macronutrients=Macronutrients(
                calories=row.macronutrients_calories,
                protein=row.macronutrients_protein,
                carbohydrates=row.macronutrients_carbohydrates,
                fat=row.macronutrients_fat,
            ),
            serving_size=row.serving_size,
            state=row.state,
            category=row.category,
            default_quantity_type=row.default_quantity_type,
            default_unit=row.default_unit,
            brand=row.brand,
            barcode=row.barcode,
            created_at=from_storage_text(row.created_at),
            updated_at=from_storage_text(row.updated_at),
        )
