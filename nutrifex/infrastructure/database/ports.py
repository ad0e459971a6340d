"""Storage collaborator port used by repositories, migrations and the unit of work."""

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Protocol, Sequence, Union

Params = Union[Mapping[str, Any], Sequence[Any], None]
Record = Dict[str, Any]


@dataclass(frozen=True)
class RunResult:
    """Outcome of a write statement."""

    last_insert_id: int
    rows_affected: int


class IDatabase(Protocol):
    """
    Interface for an async SQL connection with one level of transactions.

    Placeholders are either named (``:name`` with a mapping) or
    positional (``?`` with a sequence).

    Errors:
        ReferenceIntegrityError: Foreign key constraint violations
        StorageError: Any other engine failure, or use while closed
        TransactionStateError: Out-of-sequence begin/commit/rollback
    """

    @property
    def is_open(self) -> bool:
        ...

    @property
    def in_transaction(self) -> bool:
        ...

    @property
    def is_memory(self) -> bool:
        ...

    async def open(self) -> None:
        ...

    async def close(self) -> None:
        ...

    async def execute(self, sql: str) -> None:
        """Run one statement that returns no rows (DDL, PRAGMA)."""
        ...

    async def run(self, sql: str, params: Params = None) -> RunResult:
        """Run one write statement."""
        ...

    async def get_one(self, sql: str, params: Params = None) -> Optional[Record]:
        """First row of a query, or None."""
        ...

    async def get_all(self, sql: str, params: Params = None) -> List[Record]:
        ...

    async def begin_transaction(self) -> None:
        ...

    async def commit(self) -> None:
        ...

    async def rollback(self) -> None:
        ...
