"""SQLite storage: connection, migrations and initialization."""

from nutrifex.infrastructure.database.connection import SQLiteDatabase, translate_sqlite_error
from nutrifex.infrastructure.database.initializer import initialize_database, open_database
from nutrifex.infrastructure.database.ports import IDatabase, Params, Record, RunResult

__all__ = [
    "IDatabase",
    "Params",
    "Record",
    "RunResult",
    "SQLiteDatabase",
    "initialize_database",
    "open_database",
    "translate_sqlite_error",
]
