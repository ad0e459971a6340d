"""SQLite implementation of the storage collaborator.

The sqlite3 connection lives on a dedicated single-thread executor, so
every statement on one SQLiteDatabase runs in order on the same thread
while the event loop stays free.

The connection runs in autocommit mode (isolation_level=None); a
transaction exists only between begin_transaction() and commit() or
rollback().
"""

import asyncio
import functools
import sqlite3
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, List, Optional, TypeVar

import structlog

from nutrifex.domain.shared.errors import (
    NutrifexError,
    ReferenceIntegrityError,
    StorageError,
    TransactionStateError,
)
from nutrifex.domain.specifications.food_specifications import CASEFOLD_FUNCTION
from nutrifex.infrastructure.config import get_database_path, is_memory_database
from nutrifex.infrastructure.database.ports import Params, Record, RunResult

logger = structlog.get_logger(__name__)

R = TypeVar("R")


def translate_sqlite_error(error: sqlite3.Error, sql: str) -> NutrifexError:
    """
    Map a sqlite3 error to the domain error taxonomy.

    Foreign key failures become ReferenceIntegrityError; everything else
    (including UNIQUE and CHECK violations) becomes StorageError.
    """
    message = str(error)
    if isinstance(error, sqlite3.IntegrityError) and "FOREIGN KEY" in message.upper():
        return ReferenceIntegrityError(f"Referenced record does not exist: {message}")
    statement = " ".join(sql.split())
    return StorageError(f"{message} [{statement}]")


class SQLiteDatabase:
    """
    Async facade over one sqlite3 connection.

    Example:
        >>> async with SQLiteDatabase(":memory:") as db:
        ...     await db.execute("CREATE TABLE t (id TEXT PRIMARY KEY)")
        ...     await db.run("INSERT INTO t (id) VALUES (:id)", {"id": "a"})
        ...     rows = await db.get_all("SELECT id FROM t")
    """

    def __init__(self, path: Optional[str] = None) -> None:
        """
        Args:
            path: Database file path or ":memory:" (default: NUTRIFEX_DB_PATH)
        """
        self._path = path if path is not None else get_database_path()
        self._connection: Optional[sqlite3.Connection] = None
        self._executor: Optional[ThreadPoolExecutor] = None
        self._in_transaction = False

    @property
    def path(self) -> str:
        return self._path

    @property
    def is_open(self) -> bool:
        return self._connection is not None

    @property
    def in_transaction(self) -> bool:
        return self._in_transaction

    @property
    def is_memory(self) -> bool:
        return is_memory_database(self._path)

    async def __aenter__(self) -> "SQLiteDatabase":
        await self.open()
        return self

    async def __aexit__(self, exc_type: Any, exc: Any, tb: Any) -> None:
        await self.close()

    async def open(self) -> None:
        """Open the connection. Opening an open database is a no-op."""
        if self._connection is not None:
            return

        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="nutrifex-sqlite")
        try:
            self._connection = await self._submit(self._connect)
        except sqlite3.Error as e:
            self._executor.shutdown(wait=False)
            self._executor = None
            logger.error("database_open_failed", path=self._path, error=str(e))
            raise StorageError(f"Cannot open database {self._path}: {e}") from e

        logger.info("database_opened", path=self._path)

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(
            self._path,
            check_same_thread=False,
            isolation_level=None,
            uri=self._path.startswith("file:"),
        )
        conn.row_factory = sqlite3.Row
        conn.create_function(CASEFOLD_FUNCTION, 1, _casefold, deterministic=True)
        return conn

    async def close(self) -> None:
        """Close the connection. Uncommitted work is discarded."""
        if self._connection is None:
            return

        connection = self._connection
        executor = self._executor
        self._connection = None
        self._executor = None
        self._in_transaction = False

        try:
            await self._submit(connection.close, executor=executor)
        except sqlite3.Error as e:
            raise StorageError(f"Cannot close database {self._path}: {e}") from e
        finally:
            if executor is not None:
                executor.shutdown(wait=True)

        logger.info("database_closed", path=self._path)

    async def execute(self, sql: str) -> None:
        await self._call(sql, lambda conn: conn.execute(sql))

    async def run(self, sql: str, params: Params = None) -> RunResult:
        def _run(conn: sqlite3.Connection) -> RunResult:
            cursor = conn.execute(sql, _bindings(params))
            return RunResult(last_insert_id=cursor.lastrowid or 0, rows_affected=cursor.rowcount)

        return await self._call(sql, _run)

    async def get_one(self, sql: str, params: Params = None) -> Optional[Record]:
        def _get_one(conn: sqlite3.Connection) -> Optional[Record]:
            row = conn.execute(sql, _bindings(params)).fetchone()
            return dict(row) if row is not None else None

        return await self._call(sql, _get_one)

    async def get_all(self, sql: str, params: Params = None) -> List[Record]:
        def _get_all(conn: sqlite3.Connection) -> List[Record]:
            return [dict(row) for row in conn.execute(sql, _bindings(params)).fetchall()]

        return await self._call(sql, _get_all)

    async def begin_transaction(self) -> None:
        """
        Raises:
            TransactionStateError: If a transaction is already active
        """
        if self._in_transaction:
            raise TransactionStateError("Transaction already in progress")
        await self.execute("BEGIN")
        self._in_transaction = True

    async def commit(self) -> None:
        """
        Commit the active transaction.

        The database is out of the transaction afterwards even if COMMIT
        fails; in that case the pending work is rolled back.

        Raises:
            TransactionStateError: If no transaction is active
        """
        if not self._in_transaction:
            raise TransactionStateError("No transaction in progress")
        try:
            await self.execute("COMMIT")
        except NutrifexError:
            await self._abandon_transaction()
            raise
        finally:
            self._in_transaction = False

    async def rollback(self) -> None:
        """
        Raises:
            TransactionStateError: If no transaction is active
        """
        if not self._in_transaction:
            raise TransactionStateError("No transaction in progress")
        try:
            await self.execute("ROLLBACK")
        finally:
            self._in_transaction = False

    async def _abandon_transaction(self) -> None:
        connection = self._connection
        if connection is None or not connection.in_transaction:
            return
        try:
            await self._submit(connection.execute, "ROLLBACK")
        except sqlite3.Error as e:
            logger.error("rollback_after_failed_commit_failed", path=self._path, error=str(e))

    async def _call(
        self,
        sql: str,
        operation: Callable[[sqlite3.Connection], R],
    ) -> R:
        connection = self._require_connection()
        logger.debug("sql", sql=sql)
        try:
            return await self._submit(operation, connection)
        except sqlite3.Error as e:
            translated = translate_sqlite_error(e, sql)
            logger.warning(
                "sql_failed",
                sql=sql,
                error=str(e),
                error_type=type(translated).__name__,
            )
            raise translated from e

    def _require_connection(self) -> sqlite3.Connection:
        if self._connection is None:
            raise StorageError(f"Database {self._path} is not open")
        return self._connection

    async def _submit(
        self,
        fn: Callable[..., R],
        *args: Any,
        executor: Optional[ThreadPoolExecutor] = None,
    ) -> R:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(
            executor or self._executor, functools.partial(fn, *args)
        )


def _casefold(value: Optional[str]) -> Optional[str]:
    return value.casefold() if value is not None else None


def _bindings(params: Params) -> Any:
    if params is None:
        return ()
    if isinstance(params, (list, tuple, dict)):
        return params
    if hasattr(params, "keys"):
        return dict(params)
    return tuple(params)
