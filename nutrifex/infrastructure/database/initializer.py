"""Database initialization: connection pragmas plus pending migrations."""

from typing import List, Optional, Sequence

import structlog

from nutrifex.infrastructure.config import load_environment
from nutrifex.infrastructure.database.connection import SQLiteDatabase
from nutrifex.infrastructure.database.migrations import (
    Migration,
    MigrationResult,
    MigrationRunner,
    all_migrations,
)
from nutrifex.infrastructure.database.ports import IDatabase

logger = structlog.get_logger(__name__)


async def initialize_database(
    db: IDatabase,
    migrations: Optional[Sequence[Migration]] = None,
) -> List[MigrationResult]:
    """
    Prepare a database for use by the repositories.

    Opens it if needed, enables foreign keys (required for the cascade
    from foods to pantry_items), sets synchronous=NORMAL, switches file
    databases to WAL and runs pending migrations.

    Args:
        db: Database to prepare
        migrations: Migrations to apply (default: all known)

    Returns:
        Migrations applied by this call

    Raises:
        StorageError: If a pragma fails
        MigrationError: If a migration fails
    """
    if not db.is_open:
        await db.open()

    await db.execute("PRAGMA foreign_keys = ON")
    await db.execute("PRAGMA synchronous = NORMAL")
    if not db.is_memory:
        await db.execute("PRAGMA journal_mode = WAL")

    runner = MigrationRunner(db)
    results = await runner.run(all_migrations() if migrations is None else migrations)

    logger.info(
        "database_initialized",
        applied=[result.version for result in results],
    )
    return results


async def open_database(path: Optional[str] = None) -> SQLiteDatabase:
    """
    Create, open and initialize a SQLiteDatabase.

    Args:
        path: Database path (default: NUTRIFEX_DB_PATH), after loading .env

    Example:
        >>> db = await open_database(":memory:")
        >>> try:
        ...     uow = SQLiteUnitOfWork(db)
        ... finally:
        ...     await db.close()
    """
    load_environment()
    db = SQLiteDatabase(path)
    await db.open()
    try:
        await initialize_database(db)
    except Exception:
        await db.close()
        raise
    return db
