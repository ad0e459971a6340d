"""SQLite implementation of IPantryItemRepository."""

from typing import Dict, List, Sequence

import structlog

from nutrifex.domain.core.entities.food import Food, FoodId
from nutrifex.domain.core.entities.pantry_item import PantryItem
from nutrifex.domain.shared.errors import ReferenceIntegrityError
from nutrifex.infrastructure.database.ports import Record
from nutrifex.infrastructure.persistence.mappers.food_mapper import FoodMapper
from nutrifex.infrastructure.persistence.mappers.pantry_item_mapper import PantryItemMapper
from nutrifex.infrastructure.persistence.sqlite.base import SQLiteBaseRepository

logger = structlog.get_logger(__name__)

# Stay below SQLite's bound-parameter limit
FOOD_BATCH_SIZE = 500


class SQLitePantryItemRepository(SQLiteBaseRepository[PantryItem]):
    """
    Pantry items stored in the ``pantry_items`` table with a food_id reference.

    Reads resolve Foods with one batched ``IN (...)`` lookup over the
    distinct food ids of the result. Ordered by created_at descending,
    then id ascending.
    """

    table_name = "pantry_items"
    entity_name = "PantryItem"
    order_by = "created_at DESC, id ASC"
    mapper = PantryItemMapper

    def _entity_id(self, entity: PantryItem) -> str:
        return entity.id

    async def _to_entities(self, records: List[Record]) -> List[PantryItem]:
        rows = [PantryItemMapper.from_record(record) for record in records]
        food_ids = list(dict.fromkeys(row.food_id for row in rows))
        foods = await self._load_foods(food_ids)

        items = []
        for row in rows:
            food = foods.get(row.food_id)
            if food is None:
                raise ReferenceIntegrityError(
                    f"PantryItem {row.id} references missing Food {row.food_id}"
                )
            items.append(PantryItemMapper.to_domain(row, food))
        return items

    async def _load_foods(self, food_ids: Sequence[FoodId]) -> Dict[FoodId, Food]:
        foods: Dict[FoodId, Food] = {}
        for start in range(0, len(food_ids), FOOD_BATCH_SIZE):
            batch = food_ids[start : start + FOOD_BATCH_SIZE]
            placeholders = ", ".join("?" for _ in batch)
            records = await self._db.get_all(
                f"SELECT {FoodMapper.column_list()} FROM foods WHERE id IN ({placeholders})",
                tuple(batch),
            )
            for record in records:
                food = FoodMapper.to_domain(FoodMapper.from_record(record))
                foods[food.id] = food
        return foods

    async def find_by_food_id(self, food_id: FoodId) -> List[PantryItem]:
        """All items of one Food. The Food is read once."""
        records = await self._db.get_all(self._select("food_id = :food_id"), {"food_id": food_id})
        if not records:
            return []

        food_record = await self._db.get_one(
            f"SELECT {FoodMapper.column_list()} FROM foods WHERE id = :id", {"id": food_id}
        )
        if food_record is None:
            raise ReferenceIntegrityError(f"PantryItems reference missing Food {food_id}")

        food = FoodMapper.to_domain(FoodMapper.from_record(food_record))
        return [
            PantryItemMapper.to_domain(PantryItemMapper.from_record(record), food)
            for record in records
        ]

    async def delete_by_food_id(self, food_id: FoodId) -> None:
        result = await self._db.run(
            "DELETE FROM pantry_items WHERE food_id = :food_id", {"food_id": food_id}
        )
        logger.debug(
            "pantry_items_deleted_by_food",
            food_id=food_id,
            deleted=result.rows_affected,
        )
