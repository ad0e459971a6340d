"""In-memory food repository implementation.

Provides an in-memory implementation of IFoodRepository for testing.
Filters with Specification.is_satisfied_by() and mirrors the SQLite
adapter: same ordering, same errors, cascade delete of pantry items.
"""

from typing import List, Optional

import structlog

from nutrifex.domain.core.entities.food import Food, FoodId
from nutrifex.domain.shared.errors import NotFoundError, StorageError
from nutrifex.domain.shared.ports.pagination import Page, validate_window
from nutrifex.domain.specifications.base import MatchAll, Specification
from nutrifex.infrastructure.persistence.in_memory.store import InMemoryStore

logger = structlog.get_logger(__name__)


def _ordered(foods: List[Food]) -> List[Food]:
    return sorted(foods, key=lambda food: (food.name, food.id))


class InMemoryFoodRepository:
    """
    In-memory implementation of IFoodRepository.

    Example:
        >>> repository = InMemoryFoodRepository()
        >>> await repository.save(apple)
        >>> await repository.exists("apple")
        True
    """

    def __init__(self, store: Optional[InMemoryStore] = None) -> None:
        self._store = store if store is not None else InMemoryStore()

    async def save(self, food: Food) -> None:
        """
        Raises:
            StorageError: If the id is already stored
        """
        if food.id in self._store.foods:
            raise StorageError(f"Food {food.id} already exists")
        self._store.foods[food.id] = food
        logger.debug("entity_inserted", table="foods", id=food.id)

    async def find_by_id(self, food_id: FoodId) -> Food:
        food = self._store.foods.get(food_id)
        if food is None:
            raise NotFoundError("Food", food_id)
        return food

    async def find_by_id_or_none(self, food_id: FoodId) -> Optional[Food]:
        return self._store.foods.get(food_id)

    async def find(self, spec: Specification[Food]) -> List[Food]:
        return _ordered([food for food in self._store.foods.values() if spec.is_satisfied_by(food)])

    async def find_all(self) -> List[Food]:
        return await self.find(MatchAll())

    async def update(self, food: Food) -> None:
        if food.id not in self._store.foods:
            raise NotFoundError("Food", food.id)
        self._store.foods[food.id] = food

    async def delete(self, food_id: FoodId) -> None:
        """Delete a Food and, like ON DELETE CASCADE, its pantry items."""
        if self._store.foods.pop(food_id, None) is None:
            return
        orphans = [
            item_id
            for item_id, item in self._store.pantry_items.items()
            if item.food_id == food_id
        ]
        for item_id in orphans:
            del self._store.pantry_items[item_id]
        logger.debug("entity_deleted", table="foods", id=food_id, cascaded=len(orphans))

    async def count(self, spec: Optional[Specification[Food]] = None) -> int:
        return len(await self.find(spec or MatchAll()))

    async def exists(self, food_id: FoodId) -> bool:
        return food_id in self._store.foods

    async def find_with_pagination(
        self,
        spec: Specification[Food],
        skip: int,
        take: int,
    ) -> Page[Food]:
        validate_window(skip, take)
        matches = await self.find(spec)
        return Page(items=matches[skip : skip + take], total=len(matches))
