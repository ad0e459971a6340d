"""Composable query specifications for foods and pantry items."""

from .base import (
    AndSpecification,
    MatchAll,
    NotSpecification,
    OrSpecification,
    QueryFragment,
    Specification,
    merge_params,
    unique_param,
)
from .food_specifications import (
    FoodByBarcodeSpecification,
    FoodByBrandSpecification,
    FoodByCategorySpecification,
    FoodByIdSpecification,
    FoodByNameSearchSpecification,
    FoodByStateSpecification,
    FoodSpecifications,
    FoodWithMaxCaloriesSpecification,
    FoodWithMinCaloriesSpecification,
    escape_like,
)
from .pantry_item_specifications import (
    PantryItemByFoodIdSpecification,
    PantryItemByIdSpecification,
    PantryItemByLocationSpecification,
    PantryItemEmptySpecification,
    PantryItemExpiredSpecification,
    PantryItemExpiringSpecification,
    PantryItemLowQuantitySpecification,
    PantryItemNotExpiredSpecification,
    PantryItemSpecifications,
)

__all__ = [
    "AndSpecification",
    "MatchAll",
    "NotSpecification",
    "OrSpecification",
    "QueryFragment",
    "Specification",
    "merge_params",
    "unique_param",
    "FoodByBarcodeSpecification",
    "FoodByBrandSpecification",
    "FoodByCategorySpecification",
    "FoodByIdSpecification",
    "FoodByNameSearchSpecification",
    "FoodByStateSpecification",
    "FoodSpecifications",
    "FoodWithMaxCaloriesSpecification",
    "FoodWithMinCaloriesSpecification",
    "escape_like",
    "PantryItemByFoodIdSpecification",
    "PantryItemByIdSpecification",
    "PantryItemByLocationSpecification",
    "PantryItemEmptySpecification",
    "PantryItemExpiredSpecification",
    "PantryItemExpiringSpecification",
    "PantryItemLowQuantitySpecification",
    "PantryItemNotExpiredSpecification",
    "PantryItemSpecifications",
]
