"""Migration contract."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime

from nutrifex.infrastructure.database.ports import IDatabase


class Migration(ABC):
    """
    One versioned schema change.

    Subclasses set ``version`` (unique, ascending) and ``name`` and
    implement up() and down(). Both run inside a transaction opened by
    the MigrationRunner, so they must not begin or commit themselves.
    """

    version: int
    name: str

    @abstractmethod
    async def up(self, db: IDatabase) -> None:
        """Apply the change."""
        pass

    @abstractmethod
    async def down(self, db: IDatabase) -> None:
        """Revert the change."""
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}(version={self.version}, name={self.name!r})"


@dataclass(frozen=True)
class MigrationResult:
    """A migration applied (or reverted) by the runner."""

    version: int
    name: str
    executed_at: datetime


@dataclass(frozen=True)
class MigrationStatus:
    version: int
    name: str
    applied: bool
