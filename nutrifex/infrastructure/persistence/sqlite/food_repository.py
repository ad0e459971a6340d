"""SQLite implementation of IFoodRepository."""

from typing import List

from nutrifex.domain.core.entities.food import Food
from nutrifex.infrastructure.database.ports import Record
from nutrifex.infrastructure.persistence.mappers.food_mapper import FoodMapper
from nutrifex.infrastructure.persistence.sqlite.base import SQLiteBaseRepository


class SQLiteFoodRepository(SQLiteBaseRepository[Food]):
    """
    Foods stored in the ``foods`` table, ordered by name then id.

    Deleting a Food cascades to its pantry items through the foreign key.

    Example:
        >>> repo = SQLiteFoodRepository(db)
        >>> await repo.save(apple)
        >>> await repo.count(FoodSpecifications.by_category(FoodCategory.FRUIT))
        1
    """

    table_name = "foods"
    entity_name = "Food"
    order_by = "name ASC, id ASC"
    mapper = FoodMapper

    def _entity_id(self, entity: Food) -> str:
        return entity.id

    async def _to_entities(self, records: List[Record]) -> List[Food]:
        return [FoodMapper.to_domain(FoodMapper.from_record(record)) for record in records]
