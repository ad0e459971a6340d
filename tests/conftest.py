"""Shared test fixtures.

Builders return factories so each test picks only the fields it cares
about. Database fixtures use a private in-memory SQLite database that is
migrated fresh for every test.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, AsyncIterator, Callable, Optional

import pytest
import pytest_asyncio

from nutrifex.domain.core.entities.food import Food
from nutrifex.domain.core.entities.pantry_item import PantryItem
from nutrifex.domain.core.enums import (
    ExpirationType,
    FoodCategory,
    FoodState,
    MeasurementUnit,
    QuantityType,
)
from nutrifex.domain.core.value_objects.expiration_date import ExpirationDate
from nutrifex.domain.core.value_objects.macronutrients import Macronutrients
from nutrifex.domain.core.value_objects.quantity import Quantity
from nutrifex.infrastructure.database.connection import SQLiteDatabase
from nutrifex.infrastructure.database.initializer import initialize_database
from nutrifex.infrastructure.persistence.in_memory.unit_of_work import InMemoryUnitOfWork
from nutrifex.infrastructure.persistence.sqlite.unit_of_work import SQLiteUnitOfWork

REFERENCE_TIME = datetime(2025, 1, 15, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def reference_time() -> datetime:
    """Fixed instant used as "now" by time-based checks."""
    return REFERENCE_TIME


@pytest.fixture
def make_food() -> Callable[..., Food]:
    """Factory for Food entities with sensible defaults."""

    def _make(
        id: str = "food-apple",
        name: str = "Apple",
        calories: float = 52.0,
        protein: float = 0.3,
        carbohydrates: float = 14.0,
        fat: float = 0.2,
        serving_size: float = 100.0,
        state: FoodState = FoodState.SOLID,
        category: FoodCategory = FoodCategory.FRUIT,
        default_quantity_type: QuantityType = QuantityType.BY_WEIGHT,
        default_unit: MeasurementUnit = MeasurementUnit.GRAM,
        description: Optional[str] = None,
        brand: Optional[str] = None,
        barcode: Optional[str] = None,
        created_at: datetime = REFERENCE_TIME,
        updated_at: Optional[datetime] = None,
    ) -> Food:
        return Food(
            id=id,
            name=name,
            description=description,
            macronutrients=Macronutrients(
                calories=calories,
                protein=protein,
                carbohydrates=carbohydrates,
                fat=fat,
            ),
            serving_size=serving_size,
            state=state,
            category=category,
            default_quantity_type=default_quantity_type,
            default_unit=default_unit,
            brand=brand,
            barcode=barcode,
            created_at=created_at,
            updated_at=updated_at or created_at,
        )

    return _make


@pytest.fixture
def make_pantry_item(make_food: Callable[..., Food]) -> Callable[..., PantryItem]:
    """Factory for PantryItem entities.

    expires_in is relative to REFERENCE_TIME.
    """

    def _make(
        id: str = "item-1",
        food: Optional[Food] = None,
        amount: float = 100.0,
        unit: MeasurementUnit = MeasurementUnit.GRAM,
        quantity_type: QuantityType = QuantityType.BY_WEIGHT,
        expires_in: timedelta = timedelta(days=10),
        expiration_type: ExpirationType = ExpirationType.BEST_BEFORE,
        location: Optional[str] = None,
        notes: Optional[str] = None,
        purchased_at: Optional[datetime] = None,
        created_at: datetime = REFERENCE_TIME,
        updated_at: Optional[datetime] = None,
    ) -> PantryItem:
        return PantryItem(
            id=id,
            food=food if food is not None else make_food(),
            quantity=Quantity(amount=amount, unit=unit, type=quantity_type),
            expiration=ExpirationDate(date=REFERENCE_TIME + expires_in, type=expiration_type),
            purchased_at=purchased_at,
            location=location,
            notes=notes,
            created_at=created_at,
            updated_at=updated_at or created_at,
        )

    return _make


@pytest_asyncio.fixture
async def database() -> AsyncIterator[SQLiteDatabase]:
    """Migrated in-memory SQLite database, closed after the test."""
    db = SQLiteDatabase(":memory:")
    await initialize_database(db)
    yield db
    await db.close()


@pytest_asyncio.fixture
async def sqlite_uow(database: SQLiteDatabase) -> SQLiteUnitOfWork:
    return SQLiteUnitOfWork(database)


@pytest.fixture
def inmemory_uow() -> InMemoryUnitOfWork:
    return InMemoryUnitOfWork()


@pytest_asyncio.fixture(params=["sqlite", "inmemory"])
async def uow(request: Any, database: SQLiteDatabase) -> Any:
    """Both Unit of Work backends; tests using it run once per backend."""
    if request.param == "sqlite":
        return SQLiteUnitOfWork(database)
    return InMemoryUnitOfWork()
