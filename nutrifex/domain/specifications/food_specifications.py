"""Reusable specifications for Food queries.

Column names match the ``foods`` table.
"""

from datetime import datetime
from typing import Any, Optional

from nutrifex.domain.core.entities.food import Food, FoodId
from nutrifex.domain.core.enums import FoodCategory, FoodState, coerce_enum
from nutrifex.domain.specifications.base import (
    FieldEqualsSpecification,
    QueryFragment,
    Specification,
    unique_param,
)

LIKE_ESCAPE = "\\"

# Registered on every SQLite connection as str.casefold
CASEFOLD_FUNCTION = "casefold"


def escape_like(term: str) -> str:
    """Escape LIKE wildcards so the term matches literally.

    Example:
        >>> escape_like("50%_off")
        '50\\\\%\\\\_off'
    """
    return (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


class FoodByIdSpecification(FieldEqualsSpecification[Food]):
    column = "id"

    def value_of(self, entity: Food) -> Any:
        return entity.id


class FoodByCategorySpecification(FieldEqualsSpecification[Food]):
    column = "category"

    def __init__(self, category: FoodCategory) -> None:
        super().__init__(coerce_enum(FoodCategory, category))

    def value_of(self, entity: Food) -> Any:
        return entity.category


class FoodByStateSpecification(FieldEqualsSpecification[Food]):
    column = "state"

    def __init__(self, state: FoodState) -> None:
        super().__init__(coerce_enum(FoodState, state))

    def value_of(self, entity: Food) -> Any:
        return entity.state


class FoodByBrandSpecification(FieldEqualsSpecification[Food]):
    column = "brand"
    nullable = True

    def value_of(self, entity: Food) -> Any:
        return entity.brand


class FoodByBarcodeSpecification(FieldEqualsSpecification[Food]):
    column = "barcode"
    nullable = True

    def value_of(self, entity: Food) -> Any:
        return entity.barcode


class FoodByNameSearchSpecification(Specification[Food]):
    """Case-insensitive substring match on the food name.

    Both sides are folded with str.casefold, in SQL through the function
    SQLiteDatabase registers, so accented names match the same way in
    memory and in storage.
    """

    def __init__(self, search_term: str) -> None:
        self.search_term = search_term
        self.param = unique_param("name_search")

    def is_satisfied_by(self, entity: Food) -> bool:
        return self.search_term.casefold() in entity.name.casefold()

    def to_query_fragment(self, now: Optional[datetime] = None) -> QueryFragment:
        pattern = f"%{escape_like(self.search_term.casefold())}%"
        return QueryFragment(
            clause=f"{CASEFOLD_FUNCTION}(name) LIKE :{self.param} ESCAPE '{LIKE_ESCAPE}'",
            params={self.param: pattern},
        )

    def __repr__(self) -> str:
        return f"FoodByNameSearchSpecification({self.search_term!r})"


class FoodWithMinCaloriesSpecification(Specification[Food]):
    def __init__(self, min_calories: float) -> None:
        self.min_calories = min_calories
        self.param = unique_param("min_calories")

    def is_satisfied_by(self, entity: Food) -> bool:
        return entity.macronutrients.calories >= self.min_calories

    def to_query_fragment(self, now: Optional[datetime] = None) -> QueryFragment:
        return QueryFragment(
            clause=f"macronutrients_calories >= :{self.param}",
            params={self.param: self.min_calories},
        )

    def __repr__(self) -> str:
        return f"FoodWithMinCaloriesSpecification({self.min_calories!r})"


class FoodWithMaxCaloriesSpecification(Specification[Food]):
    def __init__(self, max_calories: float) -> None:
        self.max_calories = max_calories
        self.param = unique_param("max_calories")

    def is_satisfied_by(self, entity: Food) -> bool:
        return entity.macronutrients.calories <= self.max_calories

    def to_query_fragment(self, now: Optional[datetime] = None) -> QueryFragment:
        return QueryFragment(
            clause=f"macronutrients_calories <= :{self.param}",
            params={self.param: self.max_calories},
        )

    def __repr__(self) -> str:
        return f"FoodWithMaxCaloriesSpecification({self.max_calories!r})"


class FoodSpecifications:
    """Static constructors for Food specifications."""

    @staticmethod
    def by_id(food_id: FoodId) -> FoodByIdSpecification:
        return FoodByIdSpecification(food_id)

    @staticmethod
    def by_category(category: FoodCategory) -> FoodByCategorySpecification:
        return FoodByCategorySpecification(category)

    @staticmethod
    def by_state(state: FoodState) -> FoodByStateSpecification:
        return FoodByStateSpecification(state)

    @staticmethod
    def by_name_search(search_term: str) -> FoodByNameSearchSpecification:
        return FoodByNameSearchSpecification(search_term)

    @staticmethod
    def with_min_calories(min_calories: float) -> FoodWithMinCaloriesSpecification:
        return FoodWithMinCaloriesSpecification(min_calories)

    @staticmethod
    def with_max_calories(max_calories: float) -> FoodWithMaxCaloriesSpecification:
        return FoodWithMaxCaloriesSpecification(max_calories)

    @staticmethod
    def by_brand(brand: str) -> FoodByBrandSpecification:
        return FoodByBrandSpecification(brand)

    @staticmethod
    def by_barcode(barcode: str) -> FoodByBarcodeSpecification:
        return FoodByBarcodeSpecification(barcode)
