"""Schema migrations, in version order."""

from typing import List

from nutrifex.infrastructure.database.migrations.base import (
    Migration,
    MigrationResult,
    MigrationStatus,
)
from nutrifex.infrastructure.database.migrations.m001_initial_schema import (
    InitialSchemaMigration,
)
from nutrifex.infrastructure.database.migrations.runner import MigrationRunner


def all_migrations() -> List[Migration]:
    """Every known migration, ascending by version."""
    return [InitialSchemaMigration()]


__all__ = [
    "InitialSchemaMigration",
    "Migration",
    "MigrationResult",
    "MigrationRunner",
    "MigrationStatus",
    "all_migrations",
]
