"""Column bookkeeping shared by the row mappers.

Every SQL fragment a repository needs for INSERT and UPDATE is derived
from one COLUMNS tuple, itself taken from the row model field order.
"""

from typing import Any, ClassVar, Generic, Mapping, Tuple, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from nutrifex.domain.shared.errors import StorageError

TEntity = TypeVar("TEntity")
TRow = TypeVar("TRow", bound=BaseModel)

ID_COLUMN = "id"


class RowMapper(Generic[TEntity, TRow]):
    """
    Stateless helpers around a row model.

    Subclasses set ``row_model`` and ``COLUMNS`` and implement
    to_persistence(); entity-specific to_domain() signatures live on the
    subclasses.
    """

    row_model: ClassVar[Type[BaseModel]]
    COLUMNS: ClassVar[Tuple[str, ...]]

    @classmethod
    def to_persistence(cls, entity: TEntity) -> TRow:
        raise NotImplementedError

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> TRow:
        """
        Validate a raw storage record into the row model.

        Raises:
            StorageError: If the record does not match the schema
        """
        try:
            return cls.row_model.model_validate(dict(record))  # type: ignore[return-value]
        except PydanticValidationError as e:
            raise StorageError(
                f"Corrupt {cls.row_model.__name__} record {record.get(ID_COLUMN)!r}: {e}"
            ) from e

    @classmethod
    def column_list(cls) -> str:
        return ", ".join(cls.COLUMNS)

    @classmethod
    def placeholders(cls) -> str:
        return ", ".join("?" for _ in cls.COLUMNS)

    @classmethod
    def insert_parameters(cls, entity: TEntity) -> Tuple[Any, ...]:
        """Values in COLUMNS order, for ``VALUES ({placeholders()})``."""
        row = cls.to_persistence(entity).model_dump()
        return tuple(row[column] for column in cls.COLUMNS)

    @classmethod
    def update_assignments(cls) -> str:
        """``col = ?`` pairs for every column except id."""
        return ", ".join(f"{column} = ?" for column in cls.COLUMNS if column != ID_COLUMN)

    @classmethod
    def update_parameters(cls, entity: TEntity) -> Tuple[Any, ...]:
        """Non-id values in COLUMNS order followed by the id, for ``WHERE id = ?``."""
        row = cls.to_persistence(entity).model_dump()
        values = [row[column] for column in cls.COLUMNS if column != ID_COLUMN]
        return (*values, row[ID_COLUMN])
