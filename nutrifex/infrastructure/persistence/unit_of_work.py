"""Unit of Work state machine shared by the storage adapters.

States: idle and in-transaction. Adapters supply the storage hooks
_begin(), _commit() and _rollback(); this class owns the state checks,
execute() and transaction().
"""

from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from typing import AsyncIterator, Awaitable, Callable, TypeVar

import structlog

from nutrifex.domain.shared.errors import TransactionStateError

logger = structlog.get_logger(__name__)

R = TypeVar("R")


class BaseUnitOfWork(ABC):
    def __init__(self) -> None:
        self._active = False

    @property
    def in_transaction(self) -> bool:
        return self._active

    @abstractmethod
    async def _begin(self) -> None:
        pass

    @abstractmethod
    async def _commit(self) -> None:
        pass

    @abstractmethod
    async def _rollback(self) -> None:
        pass

    async def begin_transaction(self) -> None:
        if self._active:
            raise TransactionStateError("Transaction already in progress")
        await self._begin()
        self._active = True
        logger.debug("transaction_started", uow=type(self).__name__)

    async def commit(self) -> None:
        if not self._active:
            raise TransactionStateError("No transaction in progress")
        try:
            await self._commit()
        finally:
            self._active = False
        logger.info("transaction_committed", uow=type(self).__name__)

    async def rollback(self) -> None:
        if not self._active:
            raise TransactionStateError("No transaction in progress")
        try:
            await self._rollback()
        finally:
            self._active = False
        logger.warning("transaction_rolled_back", uow=type(self).__name__)

    async def execute(self, work: Callable[["BaseUnitOfWork"], Awaitable[R]]) -> R:
        """
        Run work inside a transaction.

        Args:
            work: Coroutine function receiving this unit of work

        Returns:
            Whatever work returns, after a successful commit

        Raises:
            TransactionStateError: If a transaction is already active
            Exception: The error raised by work, after rollback

        Example:
            >>> async def stock(uow):
            ...     await uow.foods.save(apple)
            ...     await uow.pantry_items.save(apple_item)
            >>> await uow.execute(stock)
        """
        if self._active:
            raise TransactionStateError("execute() cannot be nested in an active transaction")

        await self.begin_transaction()
        try:
            result = await work(self)
        except BaseException as error:
            await self._rollback_after(error)
            raise
        await self.commit()
        return result

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator["BaseUnitOfWork"]:
        """
        Context-manager form of execute().

        Example:
            >>> async with uow.transaction():
            ...     await uow.foods.save(apple)
        """
        if self._active:
            raise TransactionStateError("transaction() cannot be nested in an active transaction")

        await self.begin_transaction()
        try:
            yield self
        except BaseException as error:
            await self._rollback_after(error)
            raise
        await self.commit()

    async def _rollback_after(self, error: BaseException) -> None:
        # the caller re-raises the original error
        try:
            await self.rollback()
        except Exception as rollback_error:
            logger.error(
                "rollback_failed",
                uow=type(self).__name__,
                error=str(rollback_error),
                original_error=repr(error),
            )
