"""Unit of Work factory for the persistence layer.

Environment-based backend selection:
- REPOSITORY_BACKEND=sqlite (default): SQLite, requires an open database
- REPOSITORY_BACKEND=inmemory: dictionaries, for fast isolated tests

Usage:
    from nutrifex.infrastructure.database import open_database
    from nutrifex.infrastructure.persistence.factory import create_unit_of_work

    db = await open_database()         # NUTRIFEX_DB_PATH
    uow = create_unit_of_work(db)      # SQLiteUnitOfWork

    uow = create_unit_of_work()        # InMemoryUnitOfWork when REPOSITORY_BACKEND=inmemory
"""

from datetime import datetime
from typing import Optional, Union

from nutrifex.domain.specifications.pantry_item_specifications import (
    PantryItemExpiringSpecification,
)
from nutrifex.infrastructure.config import (
    get_expiring_threshold_days,
    get_repository_backend,
    load_environment,
)
from nutrifex.infrastructure.database.ports import IDatabase
from nutrifex.infrastructure.persistence.in_memory.unit_of_work import InMemoryUnitOfWork
from nutrifex.infrastructure.persistence.sqlite.unit_of_work import SQLiteUnitOfWork

UnitOfWork = Union[SQLiteUnitOfWork, InMemoryUnitOfWork]


def create_unit_of_work(database: Optional[IDatabase] = None) -> UnitOfWork:
    """Create a Unit of Work for the configured backend.

    Args:
        database: Open database. Passing one always selects SQLite.

    Returns:
        SQLiteUnitOfWork or InMemoryUnitOfWork

    Raises:
        ValueError: If REPOSITORY_BACKEND is unknown, or is sqlite and no
            database was given
    """
    load_environment()
    if database is not None:
        return SQLiteUnitOfWork(database)

    backend = get_repository_backend()
    if backend == "inmemory":
        return InMemoryUnitOfWork()

    raise ValueError(
        "REPOSITORY_BACKEND=sqlite requires a database. "
        "Pass the result of open_database() or use REPOSITORY_BACKEND=inmemory"
    )


def create_expiring_specification(
    reference_time: Optional[datetime] = None,
) -> PantryItemExpiringSpecification:
    """Expiring-soon specification using NUTRIFEX_EXPIRING_THRESHOLD_DAYS."""
    return PantryItemExpiringSpecification(get_expiring_threshold_days(), reference_time)
