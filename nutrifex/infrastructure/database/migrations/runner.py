"""Migration runner with a ledger table.

Each migration runs in its own transaction together with its ledger
row, so a failed migration leaves neither schema changes nor a record.
"""

from datetime import datetime
from typing import Any, Awaitable, Callable, List, Sequence, Set

import structlog

from nutrifex.domain.core.value_objects.timestamps import to_storage_text, utc_now
from nutrifex.domain.shared.errors import MigrationError
from nutrifex.infrastructure.database.migrations.base import (
    Migration,
    MigrationResult,
    MigrationStatus,
)
from nutrifex.infrastructure.database.ports import IDatabase

logger = structlog.get_logger(__name__)

CREATE_LEDGER = """
CREATE TABLE IF NOT EXISTS migrations (
    version INTEGER PRIMARY KEY,
    name TEXT NOT NULL,
    executed_at TEXT NOT NULL
)
"""


class MigrationRunner:
    """
    Applies, reverts and reports migrations against one database.

    Example:
        >>> runner = MigrationRunner(db)
        >>> results = await runner.run([InitialSchemaMigration()])
        >>> [r.version for r in results]
        [1]
        >>> await runner.run([InitialSchemaMigration()])  # already applied
        []
    """

    def __init__(self, db: IDatabase) -> None:
        self._db = db

    async def _ensure_ledger(self) -> None:
        await self._db.execute(CREATE_LEDGER)

    async def applied_versions(self) -> Set[int]:
        await self._ensure_ledger()
        rows = await self._db.get_all("SELECT version FROM migrations")
        return {int(row["version"]) for row in rows}

    async def run(self, migrations: Sequence[Migration]) -> List[MigrationResult]:
        """
        Apply pending migrations in ascending version order.

        Returns:
            One result per migration applied by this call

        Raises:
            MigrationError: On the first failing migration; later ones
                are not attempted
        """
        applied = await self.applied_versions()
        results: List[MigrationResult] = []

        for migration in sorted(migrations, key=lambda m: m.version):
            if migration.version in applied:
                continue

            executed_at = utc_now()
            await self._in_transaction(migration, "up", self._apply, migration, executed_at)
            results.append(
                MigrationResult(
                    version=migration.version,
                    name=migration.name,
                    executed_at=executed_at,
                )
            )
            logger.info("migration_applied", version=migration.version, name=migration.name)

        return results

    async def rollback(
        self, migrations: Sequence[Migration], to_version: int
    ) -> List[MigrationResult]:
        """
        Revert applied migrations with version > to_version, newest first.

        Raises:
            MigrationError: On the first failing down()
        """
        applied = await self.applied_versions()
        results: List[MigrationResult] = []

        for migration in sorted(migrations, key=lambda m: m.version, reverse=True):
            if migration.version not in applied or migration.version <= to_version:
                continue

            await self._in_transaction(migration, "down", self._revert, migration)
            results.append(
                MigrationResult(
                    version=migration.version,
                    name=migration.name,
                    executed_at=utc_now(),
                )
            )
            logger.info("migration_reverted", version=migration.version, name=migration.name)

        return results

    async def status(self, migrations: Sequence[Migration]) -> List[MigrationStatus]:
        applied = await self.applied_versions()
        return [
            MigrationStatus(
                version=migration.version,
                name=migration.name,
                applied=migration.version in applied,
            )
            for migration in sorted(migrations, key=lambda m: m.version)
        ]

    async def _apply(self, migration: Migration, executed_at: datetime) -> None:
        await migration.up(self._db)
        await self._db.run(
            "INSERT INTO migrations (version, name, executed_at) VALUES (?, ?, ?)",
            (migration.version, migration.name, to_storage_text(executed_at)),
        )

    async def _revert(self, migration: Migration) -> None:
        await migration.down(self._db)
        await self._db.run("DELETE FROM migrations WHERE version = ?", (migration.version,))

    async def _in_transaction(
        self,
        migration: Migration,
        direction: str,
        step: Callable[..., Awaitable[None]],
        *args: Any,
    ) -> None:
        await self._db.begin_transaction()
        try:
            await step(*args)
            await self._db.commit()
        except Exception as e:
            logger.error(
                "migration_failed",
                version=migration.version,
                name=migration.name,
                direction=direction,
                error=str(e),
            )
            if self._db.in_transaction:
                try:
                    await self._db.rollback()
                except Exception as rollback_error:
                    logger.error(
                        "migration_rollback_failed",
                        version=migration.version,
                        error=str(rollback_error),
                    )
            raise MigrationError(migration.version, migration.name, e) from e
