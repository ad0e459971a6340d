"""SQLite repository adapters."""

from nutrifex.infrastructure.persistence.sqlite.base import SQLiteBaseRepository
from nutrifex.infrastructure.persistence.sqlite.food_repository import SQLiteFoodRepository
from nutrifex.infrastructure.persistence.sqlite.pantry_item_repository import (
    SQLitePantryItemRepository,
)
from nutrifex.infrastructure.persistence.sqlite.unit_of_work import SQLiteUnitOfWork

__all__ = [
    "SQLiteBaseRepository",
    "SQLiteFoodRepository",
    "SQLitePantryItemRepository",
    "SQLiteUnitOfWork",
]
