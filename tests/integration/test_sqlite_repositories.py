"""SQLite-only repository behaviour: batched Food lookups and corrupt storage."""

from datetime import datetime
from typing import Any, Callable, List, Optional

import pytest

from nutrifex.domain.core.entities.food import Food
from nutrifex.domain.core.entities.pantry_item import PantryItem
from nutrifex.domain.shared.errors import ReferenceIntegrityError, StorageError
from nutrifex.domain.specifications import MatchAll, QueryFragment
from nutrifex.infrastructure.database.connection import SQLiteDatabase
from nutrifex.infrastructure.persistence.mappers.food_mapper import FoodMapper
from nutrifex.infrastructure.persistence.sqlite import pantry_item_repository
from nutrifex.infrastructure.persistence.sqlite.unit_of_work import SQLiteUnitOfWork


def _count_get_all(monkeypatch: pytest.MonkeyPatch, db: SQLiteDatabase) -> List[str]:
    """Record the SQL of every get_all call on db."""
    calls: List[str] = []
    original = db.get_all

    async def counting(sql: str, params: Any = None) -> Any:
        calls.append(sql)
        return await original(sql, params)

    monkeypatch.setattr(db, "get_all", counting)
    return calls


class CountingMatchAll(MatchAll):
    """MatchAll that records how often it is rendered."""

    def __init__(self) -> None:
        self.renders = 0

    def to_query_fragment(self, now: Optional[datetime] = None) -> QueryFragment:
        self.renders += 1
        return super().to_query_fragment(now)


async def _orphan_item(db: SQLiteDatabase) -> None:
    # bypass the foreign key to simulate a dangling reference
    await db.execute("PRAGMA foreign_keys = OFF")
    await db.run(
        "INSERT INTO pantry_items (id, food_id, quantity_amount, quantity_unit, quantity_type, "
        "expiration_date, expiration_type, created_at, updated_at) VALUES "
        "('orphan', 'gone', 1, 'PIECE', 'BY_UNIT', '2025-01-20T00:00:00.000000Z', 'USE_BY', "
        "'2025-01-15T12:00:00.000000Z', '2025-01-15T12:00:00.000000Z')"
    )
    await db.execute("PRAGMA foreign_keys = ON")


class TestFoodResolution:
    """Test how pantry reads load their Foods."""

    @pytest.mark.asyncio
    async def test_find_all_loads_foods_in_one_batch(
        self,
        monkeypatch: pytest.MonkeyPatch,
        database: SQLiteDatabase,
        sqlite_uow: SQLiteUnitOfWork,
        make_food: Callable[..., Food],
        make_pantry_item: Callable[..., PantryItem],
    ) -> None:
        foods = [make_food(id=f"food-{n}", name=f"Food {n}") for n in range(3)]
        for position, food in enumerate(foods):
            await sqlite_uow.foods.save(food)
            await sqlite_uow.pantry_items.save(make_pantry_item(id=f"a{position}", food=food))
            await sqlite_uow.pantry_items.save(make_pantry_item(id=f"b{position}", food=food))
        calls = _count_get_all(monkeypatch, database)

        items = await sqlite_uow.pantry_items.find_all()

        assert len(items) == 6
        assert all(item.food == foods[int(item.id[1])] for item in items)
        assert len(calls) == 2
        assert "IN (?, ?, ?)" in calls[1]

    @pytest.mark.asyncio
    async def test_batches_are_chunked(
        self,
        monkeypatch: pytest.MonkeyPatch,
        database: SQLiteDatabase,
        sqlite_uow: SQLiteUnitOfWork,
        make_food: Callable[..., Food],
        make_pantry_item: Callable[..., PantryItem],
    ) -> None:
        monkeypatch.setattr(pantry_item_repository, "FOOD_BATCH_SIZE", 2)
        for n in range(5):
            food = make_food(id=f"food-{n}", name=f"Food {n}")
            await sqlite_uow.foods.save(food)
            await sqlite_uow.pantry_items.save(make_pantry_item(id=f"i{n}", food=food))
        calls = _count_get_all(monkeypatch, database)

        items = await sqlite_uow.pantry_items.find_all()

        assert sorted(item.food_id for item in items) == [f"food-{n}" for n in range(5)]
        assert len(calls) == 4

    @pytest.mark.asyncio
    async def test_empty_result_skips_food_lookup(
        self,
        monkeypatch: pytest.MonkeyPatch,
        database: SQLiteDatabase,
        sqlite_uow: SQLiteUnitOfWork,
    ) -> None:
        calls = _count_get_all(monkeypatch, database)

        assert await sqlite_uow.pantry_items.find_all() == []
        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_dangling_reference_fails_whole_read(
        self,
        database: SQLiteDatabase,
        sqlite_uow: SQLiteUnitOfWork,
        make_food: Callable[..., Food],
        make_pantry_item: Callable[..., PantryItem],
    ) -> None:
        await sqlite_uow.foods.save(make_food())
        await sqlite_uow.pantry_items.save(make_pantry_item())
        await _orphan_item(database)

        with pytest.raises(ReferenceIntegrityError):
            await sqlite_uow.pantry_items.find_all()
        with pytest.raises(ReferenceIntegrityError):
            await sqlite_uow.pantry_items.find_by_id("orphan")
        with pytest.raises(ReferenceIntegrityError):
            await sqlite_uow.pantry_items.find_by_food_id("gone")
        assert (await sqlite_uow.pantry_items.find_by_id("item-1")).food.id == "food-apple"


class TestCorruptRecords:
    @pytest.mark.asyncio
    async def test_invalid_row_is_storage_error(
        self,
        database: SQLiteDatabase,
        sqlite_uow: SQLiteUnitOfWork,
        make_food: Callable[..., Food],
    ) -> None:
        await database.run(
            f"INSERT INTO foods ({FoodMapper.column_list()}) VALUES ({FoodMapper.placeholders()})",
            FoodMapper.insert_parameters(make_food()),
        )
        await database.run("UPDATE foods SET macronutrients_calories = -5")

        with pytest.raises(StorageError, match="Corrupt"):
            await sqlite_uow.foods.find_by_id("food-apple")

    @pytest.mark.asyncio
    async def test_timestamps_stored_as_utc_text(
        self,
        database: SQLiteDatabase,
        sqlite_uow: SQLiteUnitOfWork,
        make_food: Callable[..., Food],
    ) -> None:
        await sqlite_uow.foods.save(make_food())

        record = await database.get_one("SELECT created_at FROM foods")

        assert record == {"created_at": "2025-01-15T12:00:00.000000Z"}


class TestPagination:
    @pytest.mark.asyncio
    async def test_specification_rendered_once_per_page(
        self, sqlite_uow: SQLiteUnitOfWork, make_food: Callable[..., Food]
    ) -> None:
        """Test total and items come from the same rendered fragment."""
        for n in range(3):
            await sqlite_uow.foods.save(make_food(id=f"food-{n}", name=f"Food {n}"))
        spec = CountingMatchAll()

        page = await sqlite_uow.foods.find_with_pagination(spec, skip=1, take=1)

        assert page.total == 3
        assert [f.id for f in page.items] == ["food-1"]
        assert spec.renders == 1
