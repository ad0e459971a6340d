"""In-memory Unit of Work: rollback restores a snapshot of the store."""

from typing import Optional

from nutrifex.infrastructure.persistence.in_memory.food_repository import InMemoryFoodRepository
from nutrifex.infrastructure.persistence.in_memory.pantry_item_repository import (
    InMemoryPantryItemRepository,
)
from nutrifex.infrastructure.persistence.in_memory.store import InMemoryStore, Snapshot
from nutrifex.infrastructure.persistence.unit_of_work import BaseUnitOfWork


class InMemoryUnitOfWork(BaseUnitOfWork):
    def __init__(self, store: Optional[InMemoryStore] = None) -> None:
        super().__init__()
        self._store = store if store is not None else InMemoryStore()
        self._foods = InMemoryFoodRepository(self._store)
        self._pantry_items = InMemoryPantryItemRepository(self._store)
        self._snapshot: Optional[Snapshot] = None

    @property
    def store(self) -> InMemoryStore:
        return self._store

    @property
    def foods(self) -> InMemoryFoodRepository:
        return self._foods

    @property
    def pantry_items(self) -> InMemoryPantryItemRepository:
        return self._pantry_items

    async def _begin(self) -> None:
        self._snapshot = self._store.snapshot()

    async def _commit(self) -> None:
        self._snapshot = None

    async def _rollback(self) -> None:
        if self._snapshot is not None:
            self._store.restore(self._snapshot)
        self._snapshot = None
