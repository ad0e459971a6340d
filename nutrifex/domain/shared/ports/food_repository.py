"""Food repository port (interface).

Defines the contract for Food persistence.
The domain defines the port, infrastructure provides the implementation.
"""

from typing import List, Optional, Protocol

from nutrifex.domain.core.entities.food import Food, FoodId
from nutrifex.domain.shared.ports.pagination import Page
from nutrifex.domain.specifications.base import Specification


class IFoodRepository(Protocol):
    """
    Interface for Food persistence operations.

    Implementations:
    - SQLiteFoodRepository (production)
    - InMemoryFoodRepository (testing)

    Results are ordered by name ascending, then id ascending.
    Repositories hold no cached state: every call reads storage.

    Example usage:
        >>> async def add_apple(foods: IFoodRepository) -> None:
        ...     apple = Food.create(id="apple", name="Apple", ...)
        ...     await foods.save(apple)
        ...     fruit = await foods.find(FoodSpecifications.by_category(FoodCategory.FRUIT))
    """

    async def save(self, food: Food) -> None:
        """
        Insert a new Food.

        Raises:
            StorageError: If a Food with the same id already exists
        """
        ...

    async def find_by_id(self, food_id: FoodId) -> Food:
        """
        Retrieve a Food by id.

        Raises:
            NotFoundError: If no Food has this id
        """
        ...

    async def find_by_id_or_none(self, food_id: FoodId) -> Optional[Food]:
        """Retrieve a Food by id, or None when absent."""
        ...

    async def find(self, spec: Specification[Food]) -> List[Food]:
        """
        Retrieve all Foods satisfying a specification.

        Example:
            >>> spec = FoodSpecifications.by_category(FoodCategory.FRUIT) & (
            ...     FoodSpecifications.with_max_calories(60)
            ... )
            >>> light_fruit = await repository.find(spec)
        """
        ...

    async def find_all(self) -> List[Food]:
        ...

    async def update(self, food: Food) -> None:
        """
        Overwrite the stored Food with the same id.

        Raises:
            NotFoundError: If no Food has this id
        """
        ...

    async def delete(self, food_id: FoodId) -> None:
        """
        Delete a Food. Deleting a missing id is a no-op.

        Pantry items referencing the Food are deleted with it.
        """
        ...

    async def count(self, spec: Optional[Specification[Food]] = None) -> int:
        """Number of Foods matching spec (all Foods when spec is None)."""
        ...

    async def exists(self, food_id: FoodId) -> bool:
        ...

    async def find_with_pagination(
        self,
        spec: Specification[Food],
        skip: int,
        take: int,
    ) -> Page[Food]:
        """
        Retrieve one page of Foods satisfying a specification.

        Args:
            spec: Filter (use MatchAll() for every Food)
            skip: Number of matches to skip (>= 0)
            take: Maximum number of items to return (>= 0)

        Returns:
            Page with the items and the total match count

        Raises:
            ValueError: If skip or take is negative
        """
        ...
