"""In-memory pantry item repository implementation.

Items are stored as entities but their Food is looked up again from the
shared store on every read, as the SQLite adapter re-reads the foods
table. A stored Food update is therefore visible through its items.
"""

from typing import List, Optional

import structlog

from nutrifex.domain.core.entities.food import FoodId
from nutrifex.domain.core.entities.pantry_item import PantryItem, PantryItemId
from nutrifex.domain.shared.errors import NotFoundError, ReferenceIntegrityError, StorageError
from nutrifex.domain.shared.ports.pagination import Page, validate_window
from nutrifex.domain.specifications.base import MatchAll, Specification
from nutrifex.infrastructure.persistence.in_memory.store import InMemoryStore

logger = structlog.get_logger(__name__)


def _ordered(items: List[PantryItem]) -> List[PantryItem]:
    # created_at DESC, id ASC
    by_id = sorted(items, key=lambda item: item.id)
    return sorted(by_id, key=lambda item: item.created_at, reverse=True)


class InMemoryPantryItemRepository:
    """In-memory implementation of IPantryItemRepository."""

    def __init__(self, store: Optional[InMemoryStore] = None) -> None:
        self._store = store if store is not None else InMemoryStore()

    def _require_food(self, item: PantryItem) -> None:
        if item.food_id not in self._store.foods:
            raise ReferenceIntegrityError(
                f"PantryItem {item.id} references missing Food {item.food_id}"
            )

    def _resolve(self, item: PantryItem) -> PantryItem:
        food = self._store.foods.get(item.food_id)
        if food is None:
            raise ReferenceIntegrityError(
                f"PantryItem {item.id} references missing Food {item.food_id}"
            )
        return PantryItem.from_persistence(
            id=item.id,
            food_id=item.food_id,
            food=food,
            quantity=item.quantity,
            expiration=item.expiration,
            purchased_at=item.purchased_at,
            location=item.location,
            notes=item.notes,
            created_at=item.created_at,
            updated_at=item.updated_at,
        )

    def _all(self) -> List[PantryItem]:
        return [self._resolve(item) for item in self._store.pantry_items.values()]

    async def save(self, item: PantryItem) -> None:
        """
        Raises:
            ReferenceIntegrityError: If the Food is not stored
            StorageError: If the id is already stored
        """
        self._require_food(item)
        if item.id in self._store.pantry_items:
            raise StorageError(f"PantryItem {item.id} already exists")
        self._store.pantry_items[item.id] = item
        logger.debug("entity_inserted", table="pantry_items", id=item.id)

    async def find_by_id(self, item_id: PantryItemId) -> PantryItem:
        item = await self.find_by_id_or_none(item_id)
        if item is None:
            raise NotFoundError("PantryItem", item_id)
        return item

    async def find_by_id_or_none(self, item_id: PantryItemId) -> Optional[PantryItem]:
        item = self._store.pantry_items.get(item_id)
        return self._resolve(item) if item is not None else None

    async def find(self, spec: Specification[PantryItem]) -> List[PantryItem]:
        return _ordered([item for item in self._all() if spec.is_satisfied_by(item)])

    async def find_all(self) -> List[PantryItem]:
        return await self.find(MatchAll())

    async def find_by_food_id(self, food_id: FoodId) -> List[PantryItem]:
        return _ordered([item for item in self._all() if item.food_id == food_id])

    async def update(self, item: PantryItem) -> None:
        if item.id not in self._store.pantry_items:
            raise NotFoundError("PantryItem", item.id)
        self._require_food(item)
        self._store.pantry_items[item.id] = item

    async def delete(self, item_id: PantryItemId) -> None:
        self._store.pantry_items.pop(item_id, None)

    async def delete_by_food_id(self, food_id: FoodId) -> None:
        for item_id in [i.id for i in self._store.pantry_items.values() if i.food_id == food_id]:
            del self._store.pantry_items[item_id]

    async def count(self, spec: Optional[Specification[PantryItem]] = None) -> int:
        return len(await self.find(spec or MatchAll()))

    async def exists(self, item_id: PantryItemId) -> bool:
        return item_id in self._store.pantry_items

    async def find_with_pagination(
        self,
        spec: Specification[PantryItem],
        skip: int,
        take: int,
    ) -> Page[PantryItem]:
        validate_window(skip, take)
        matches = await self.find(spec)
        return Page(items=matches[skip : skip + take], total=len(matches))
