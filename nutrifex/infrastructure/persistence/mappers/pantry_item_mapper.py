"""PantryItem <-> PantryItemRow mapping."""

from typing import ClassVar, Tuple

from nutrifex.domain.core.entities.food import Food
from nutrifex.domain.core.entities.pantry_item import PantryItem
from nutrifex.domain.core.value_objects.expiration_date import ExpirationDate
from nutrifex.domain.core.value_objects.quantity import Quantity
from nutrifex.domain.core.value_objects.timestamps import (
    from_storage_text,
    optional_from_storage_text,
    optional_to_storage_text,
    to_storage_text,
)
from nutrifex.infrastructure.persistence.mappers.base import RowMapper
from nutrifex.infrastructure.persistence.mappers.rows import PantryItemRow


class PantryItemMapper(RowMapper[PantryItem, PantryItemRow]):
    """
    Stores the Food as food_id; to_domain() needs the Food loaded separately.
    """

    row_model = PantryItemRow
    COLUMNS: ClassVar[Tuple[str, ...]] = tuple(PantryItemRow.model_fields)

    @classmethod
    def to_persistence(cls, item: PantryItem) -> PantryItemRow:
        return PantryItemRow(
            id=item.id,
            food_id=item.food_id,
            quantity_amount=item.quantity.amount,
            quantity_unit=item.quantity.unit.value,
            quantity_type=item.quantity.type.value,
            expiration_date=to_storage_text(item.expiration.date),
            expiration_type=item.expiration.type.value,
            purchased_at=optional_to_storage_text(item.purchased_at),
            location=item.location,
            notes=item.notes,
            created_at=to_storage_text(item.created_at),
            updated_at=to_storage_text(item.updated_at),
        )

    @classmethod
    def to_domain(cls, row: PantryItemRow, food: Food) -> PantryItem:
        """
        Rebuild a PantryItem from its row and its Food.

        Raises:
            ReferenceIntegrityError: If food.id != row.food_id
            ValidationError: If stored values violate invariants
        """
        return PantryItem.from_persistence(
            id=row.id,
            food_id=row.food_id,
            food=food,
            quantity=Quantity(
                amount=row.quantity_amount,
                unit=row.quantity_unit,
                type=row.quantity_type,
            ),
            expiration=ExpirationDate(
                date=from_storage_text(row.expiration_date),
                type=row.expiration_type,
            ),
            purchased_at=optional_from_storage_text(row.purchased_at),
            location=row.location,
            notes=row.notes,
            created_at=from_storage_text(row.created_at),
            updated_at=from_storage_text(row.updated_at),
        )
