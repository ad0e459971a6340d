"""Entity <-> row mappers."""

from nutrifex.infrastructure.persistence.mappers.food_mapper import FoodMapper
from nutrifex.infrastructure.persistence.mappers.pantry_item_mapper import PantryItemMapper
from nutrifex.infrastructure.persistence.mappers.rows import FoodRow, PantryItemRow

__all__ = ["FoodMapper", "FoodRow", "PantryItemMapper", "PantryItemRow"]
