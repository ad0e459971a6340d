"""Domain entities for the pantry bounded context."""

from .food import Food, FoodId
from .pantry_item import PantryItem, PantryItemId

__all__ = [
    "Food",
    "FoodId",
    "PantryItem",
    "PantryItemId",
]
