"""PantryItem repository port (interface)."""

from typing import List, Optional, Protocol

from nutrifex.domain.core.entities.food import FoodId
from nutrifex.domain.core.entities.pantry_item import PantryItem, PantryItemId
from nutrifex.domain.shared.ports.pagination import Page
from nutrifex.domain.specifications.base import Specification


class IPantryItemRepository(Protocol):
    """
    Interface for PantryItem persistence operations.

    Storage keeps only the food id of each item; reads resolve the Food
    entities again. Results are ordered by created_at descending, then
    id ascending.

    Implementations:
    - SQLitePantryItemRepository (production)
    - InMemoryPantryItemRepository (testing)
    """

    async def save(self, item: PantryItem) -> None:
        """
        Insert a new PantryItem.

        Raises:
            ReferenceIntegrityError: If the referenced Food is not stored
            StorageError: If an item with the same id already exists
        """
        ...

    async def find_by_id(self, item_id: PantryItemId) -> PantryItem:
        """
        Retrieve a PantryItem by id.

        Raises:
            NotFoundError: If no item has this id
            ReferenceIntegrityError: If the referenced Food is missing
        """
        ...

    async def find_by_id_or_none(self, item_id: PantryItemId) -> Optional[PantryItem]:
        ...

    async def find(self, spec: Specification[PantryItem]) -> List[PantryItem]:
        """
        Retrieve all items satisfying a specification.

        Example:
            >>> fridge_soon = await repository.find(
            ...     PantryItemSpecifications.by_location("Fridge")
            ...     & PantryItemSpecifications.expiring(3)
            ... )
        """
        ...

    async def find_all(self) -> List[PantryItem]:
        ...

    async def find_by_food_id(self, food_id: FoodId) -> List[PantryItem]:
        """All items of one Food, resolving the Food once."""
        ...

    async def update(self, item: PantryItem) -> None:
        """
        Overwrite the stored item with the same id.

        Raises:
            NotFoundError: If no item has this id
            ReferenceIntegrityError: If the new Food reference is not stored
        """
        ...

    async def delete(self, item_id: PantryItemId) -> None:
        """Delete an item. Deleting a missing id is a no-op."""
        ...

    async def delete_by_food_id(self, food_id: FoodId) -> None:
        ...

    async def count(self, spec: Optional[Specification[PantryItem]] = None) -> int:
        ...

    async def exists(self, item_id: PantryItemId) -> bool:
        ...

    async def find_with_pagination(
        self,
        spec: Specification[PantryItem],
        skip: int,
        take: int,
    ) -> Page[PantryItem]:
        """
        Retrieve one page of items satisfying a specification.

        Raises:
            ValueError: If skip or take is negative
        """
        ...
