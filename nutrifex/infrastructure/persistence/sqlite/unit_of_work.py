"""SQLite Unit of Work: repositories sharing one database transaction."""

from nutrifex.infrastructure.database.ports import IDatabase
from nutrifex.infrastructure.persistence.sqlite.food_repository import SQLiteFoodRepository
from nutrifex.infrastructure.persistence.sqlite.pantry_item_repository import (
    SQLitePantryItemRepository,
)
from nutrifex.infrastructure.persistence.unit_of_work import BaseUnitOfWork


class SQLiteUnitOfWork(BaseUnitOfWork):
    """
    Unit of Work over one SQLiteDatabase.

    Both repositories use the same connection, so their statements
    between begin_transaction() and commit() form one SQL transaction.
    """

    def __init__(self, db: IDatabase) -> None:
        super().__init__()
        self._db = db
        self._foods = SQLiteFoodRepository(db)
        self._pantry_items = SQLitePantryItemRepository(db)

    @property
    def foods(self) -> SQLiteFoodRepository:
        return self._foods

    @property
    def pantry_items(self) -> SQLitePantryItemRepository:
        return self._pantry_items

    async def _begin(self) -> None:
        await self._db.begin_transaction()

    async def _commit(self) -> None:
        await self._db.commit()

    async def _rollback(self) -> None:
        await self._db.rollback()
