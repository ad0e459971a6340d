"""Unit of Work port (interface).

Groups repository operations into one atomic transaction.
"""

from typing import AsyncContextManager, Awaitable, Callable, Protocol, TypeVar

from nutrifex.domain.shared.ports.food_repository import IFoodRepository
from nutrifex.domain.shared.ports.pantry_item_repository import IPantryItemRepository

R = TypeVar("R")


class IUnitOfWork(Protocol):
    """
    Interface for transactional work across repositories.

    States: idle and in-transaction. begin_transaction() is only valid
    when idle; commit() and rollback() only when in a transaction.
    After commit or rollback the unit of work is idle again, even when
    the storage call fails.

    Example usage:
        >>> async def stock_apple(uow: IUnitOfWork) -> None:
        ...     async def work(tx: IUnitOfWork) -> None:
        ...         await tx.foods.save(apple)
        ...         await tx.pantry_items.save(apple_item)
        ...     await uow.execute(work)

        >>> async with uow.transaction():
        ...     await uow.foods.save(apple)
    """

    @property
    def foods(self) -> IFoodRepository:
        ...

    @property
    def pantry_items(self) -> IPantryItemRepository:
        ...

    @property
    def in_transaction(self) -> bool:
        ...

    async def begin_transaction(self) -> None:
        """
        Start a transaction.

        Raises:
            TransactionStateError: If a transaction is already active
        """
        ...

    async def commit(self) -> None:
        """
        Commit the active transaction.

        Raises:
            TransactionStateError: If no transaction is active
        """
        ...

    async def rollback(self) -> None:
        """
        Roll back the active transaction.

        Raises:
            TransactionStateError: If no transaction is active
        """
        ...

    async def execute(self, work: Callable[["IUnitOfWork"], Awaitable[R]]) -> R:
        """
        Run work inside a transaction.

        Commits when work returns, rolls back and re-raises the original
        error when it raises.

        Raises:
            TransactionStateError: If called while a transaction is active
        """
        ...

    def transaction(self) -> AsyncContextManager["IUnitOfWork"]:
        """Async context manager with the same semantics as execute()."""
        ...
