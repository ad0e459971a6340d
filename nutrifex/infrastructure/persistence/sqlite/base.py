"""Base SQLite repository with reusable patterns.

Provides common functionality for the SQLite repositories:
- Specification -> WHERE clause rendering
- Deterministic ordering and pagination
- Insert/update statements derived from the mapper columns
- NotFoundError on missing rows
- Logging

Concrete repositories inherit from SQLiteBaseRepository and implement
_to_entities(), the only step that differs between aggregates.
"""

from abc import ABC, abstractmethod
from typing import Any, ClassVar, Dict, Generic, List, Optional, Type, TypeVar

import structlog

from nutrifex.domain.shared.errors import NotFoundError
from nutrifex.domain.shared.ports.pagination import Page, validate_window
from nutrifex.domain.specifications.base import MatchAll, QueryFragment, Specification
from nutrifex.infrastructure.database.ports import IDatabase, Record
from nutrifex.infrastructure.persistence.mappers.base import RowMapper

TEntity = TypeVar("TEntity")

logger = structlog.get_logger(__name__)


class SQLiteBaseRepository(ABC, Generic[TEntity]):
    """
    Abstract base class for SQLite repositories.

    Subclasses set:
    - table_name: SQL table
    - entity_name: Name used in NotFoundError
    - order_by: ORDER BY clause giving a total order
    - mapper: RowMapper for the aggregate

    Repositories keep no state besides the database handle; every call
    reads storage.
    """

    table_name: ClassVar[str]
    entity_name: ClassVar[str]
    order_by: ClassVar[str]
    mapper: ClassVar[Type[RowMapper[Any, Any]]]

    def __init__(self, db: IDatabase) -> None:
        self._db = db

    # ============================================================
    # Abstract Methods (must be implemented)
    # ============================================================

    @abstractmethod
    async def _to_entities(self, records: List[Record]) -> List[TEntity]:
        """Convert raw records to entities, keeping their order."""
        pass

    @abstractmethod
    def _entity_id(self, entity: TEntity) -> str:
        pass

    # ============================================================
    # Protected Utility Methods (for subclasses)
    # ============================================================

    def _select(self, where: str) -> str:
        return (
            f"SELECT {self.mapper.column_list()} FROM {self.table_name} "
            f"WHERE {where} ORDER BY {self.order_by}"
        )

    async def _find_records(
        self,
        fragment: QueryFragment,
        take: Optional[int] = None,
        skip: int = 0,
    ) -> List[Record]:
        sql = self._select(fragment.clause)
        params: Dict[str, Any] = dict(fragment.params)
        if take is not None:
            sql += " LIMIT :page_limit OFFSET :page_offset"
            params["page_limit"] = take
            params["page_offset"] = skip
        return await self._db.get_all(sql, params)

    async def _insert(self, entity: TEntity) -> None:
        sql = (
            f"INSERT INTO {self.table_name} ({self.mapper.column_list()}) "
            f"VALUES ({self.mapper.placeholders()})"
        )
        await self._db.run(sql, self.mapper.insert_parameters(entity))
        logger.debug("entity_inserted", table=self.table_name, id=self._entity_id(entity))

    async def _update(self, entity: TEntity) -> None:
        sql = f"UPDATE {self.table_name} SET {self.mapper.update_assignments()} WHERE id = ?"
        result = await self._db.run(sql, self.mapper.update_parameters(entity))
        entity_id = self._entity_id(entity)
        if result.rows_affected == 0:
            raise NotFoundError(self.entity_name, entity_id)
        logger.debug("entity_updated", table=self.table_name, id=entity_id)

    # ============================================================
    # Repository Operations
    # ============================================================

    async def save(self, entity: TEntity) -> None:
        await self._insert(entity)

    async def update(self, entity: TEntity) -> None:
        await self._update(entity)

    async def find_by_id_or_none(self, entity_id: str) -> Optional[TEntity]:
        record = await self._db.get_one(self._select("id = :id"), {"id": entity_id})
        if record is None:
            return None
        entities = await self._to_entities([record])
        return entities[0]

    async def find_by_id(self, entity_id: str) -> TEntity:
        entity = await self.find_by_id_or_none(entity_id)
        if entity is None:
            raise NotFoundError(self.entity_name, entity_id)
        return entity

    async def find(self, spec: Specification[TEntity]) -> List[TEntity]:
        return await self._to_entities(await self._find_records(spec.to_query_fragment()))

    async def find_all(self) -> List[TEntity]:
        return await self.find(MatchAll())

    async def find_with_pagination(
        self,
        spec: Specification[TEntity],
        skip: int,
        take: int,
    ) -> Page[TEntity]:
        validate_window(skip, take)
        # one render, so total and items share the same clock reading
        fragment = spec.to_query_fragment()
        total = await self._count(fragment)
        records = await self._find_records(fragment, take=take, skip=skip)
        return Page(items=await self._to_entities(records), total=total)

    async def count(self, spec: Optional[Specification[TEntity]] = None) -> int:
        return await self._count((spec or MatchAll()).to_query_fragment())

    async def _count(self, fragment: QueryFragment) -> int:
        record = await self._db.get_one(
            f"SELECT COUNT(*) AS total FROM {self.table_name} WHERE {fragment.clause}",
            fragment.params,
        )
        return int(record["total"]) if record is not None else 0

    async def exists(self, entity_id: str) -> bool:
        record = await self._db.get_one(
            f"SELECT 1 AS found FROM {self.table_name} WHERE id = :id LIMIT 1",
            {"id": entity_id},
        )
        return record is not None

    async def delete(self, entity_id: str) -> None:
        """Delete by id. Missing ids are ignored."""
        result = await self._db.run(
            f"DELETE FROM {self.table_name} WHERE id = :id", {"id": entity_id}
        )
        logger.debug(
            "entity_deleted",
            table=self.table_name,
            id=entity_id,
            deleted=result.rows_affected,
        )
