"""In-memory repository adapters (testing and REPOSITORY_BACKEND=inmemory)."""

from nutrifex.infrastructure.persistence.in_memory.food_repository import InMemoryFoodRepository
from nutrifex.infrastructure.persistence.in_memory.pantry_item_repository import (
    InMemoryPantryItemRepository,
)
from nutrifex.infrastructure.persistence.in_memory.store import InMemoryStore
from nutrifex.infrastructure.persistence.in_memory.unit_of_work import InMemoryUnitOfWork

__all__ = [
    "InMemoryFoodRepository",
    "InMemoryPantryItemRepository",
    "InMemoryStore",
    "InMemoryUnitOfWork",
]
