"""PantryItem aggregate root - a tracked quantity of a Food in inventory."""

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional

from nutrifex.domain.core.entities.food import Food, FoodId
from nutrifex.domain.core.value_objects.expiration_date import (
    DEFAULT_EXPIRING_THRESHOLD_DAYS,
    ExpirationDate,
)
from nutrifex.domain.core.value_objects.macronutrients import Macronutrients
from nutrifex.domain.core.value_objects.quantity import Quantity
from nutrifex.domain.core.value_objects.timestamps import ensure_aware, utc_now
from nutrifex.domain.shared.errors import ReferenceIntegrityError, ValidationError

PantryItemId = str


@dataclass(frozen=True)
class PantryItem:
    """
    Aggregate Root: something the user has in the house.

    Tracks quantity, expiration and storage details of one Food.
    The Food is held by value; persistence stores only its id.

    Invariants:
    - id is non-empty
    - food is present
    - quantity.amount >= 0 (enforced by Quantity)
    - created_at/updated_at/purchased_at are timezone-aware

    Identity: Defined by id
    Mutability: None. Mutators return a new PantryItem with a fresh
    updated_at and leave the receiver unchanged.
    """

    id: PantryItemId
    food: Food
    quantity: Quantity
    expiration: ExpirationDate
    created_at: datetime
    updated_at: datetime
    purchased_at: Optional[datetime] = None
    location: Optional[str] = None
    notes: Optional[str] = None

    def __post_init__(self) -> None:
        if not isinstance(self.id, str) or not self.id.strip():
            raise ValidationError("PantryItem ID is required")

        if not isinstance(self.food, Food):
            raise ValidationError("Food reference is required")

        if not isinstance(self.quantity, Quantity):
            raise ValidationError("PantryItem quantity must be a Quantity value object")

        if not isinstance(self.expiration, ExpirationDate):
            raise ValidationError("PantryItem expiration must be an ExpirationDate value object")

        ensure_aware(self.created_at, "created_at")
        ensure_aware(self.updated_at, "updated_at")
        if self.purchased_at is not None:
            ensure_aware(self.purchased_at, "purchased_at")

    @classmethod
    def create(
        cls,
        id: PantryItemId,
        food: Food,
        quantity: Quantity,
        expiration: ExpirationDate,
        purchased_at: Optional[datetime] = None,
        location: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> "PantryItem":
        """
        Factory method to create a new PantryItem.

        Args:
            id: Unique identifier
            food: The referenced Food
            quantity: Current amount on hand
            expiration: Expiration date with its type
            purchased_at: Optional purchase instant
            location: Optional storage location (e.g. "Fridge")
            notes: Optional free text

        Returns:
            New PantryItem with created_at == updated_at == now

        Raises:
            ValidationError: If any invariant is violated
        """
        now = utc_now()
        return cls(
            id=id,
            food=food,
            quantity=quantity,
            expiration=expiration,
            purchased_at=purchased_at,
            location=location,
            notes=notes,
            created_at=now,
            updated_at=now,
        )

    @classmethod
    def from_persistence(
        cls,
        *,
        id: PantryItemId,
        food_id: FoodId,
        food: Food,
        quantity: Quantity,
        expiration: ExpirationDate,
        created_at: datetime,
        updated_at: datetime,
        purchased_at: Optional[datetime] = None,
        location: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> "PantryItem":
        """
        Reconstruct a PantryItem from stored data.

        Args:
            food_id: The food id recorded with the item
            food: The Food loaded separately for that id

        Raises:
            ReferenceIntegrityError: If food.id does not match food_id
            ValidationError: If stored data violates an invariant
        """
        if food.id != food_id:
            raise ReferenceIntegrityError(
                f"Food ID mismatch: item {id} references {food_id}, got food {food.id}"
            )

        return cls(
            id=id,
            food=food,
            quantity=quantity,
            expiration=expiration,
            purchased_at=purchased_at,
            location=location,
            notes=notes,
            created_at=created_at,
            updated_at=updated_at,
        )

    @property
    def food_id(self) -> FoodId:
        return self.food.id

    # Queries

    def is_expired(self, reference: Optional[datetime] = None) -> bool:
        return self.expiration.is_expired(reference)

    def is_expiring_soon(
        self,
        threshold_days: int = DEFAULT_EXPIRING_THRESHOLD_DAYS,
        reference: Optional[datetime] = None,
    ) -> bool:
        return self.expiration.is_expiring_soon(threshold_days, reference)

    def days_until_expiration(self, reference: Optional[datetime] = None) -> int:
        return self.expiration.days_until_expiration(reference)

    def is_low(self, threshold: float) -> bool:
        """True when the amount on hand is at or below threshold."""
        return self.quantity.amount <= threshold

    def is_empty(self) -> bool:
        return self.quantity.is_empty()

    def calculate_current_macronutrients(self) -> Macronutrients:
        """
        Macronutrients for the current quantity.

        Assumes quantity is expressed in the same unit as the
        food's serving_size.
        """
        ratio = self.quantity.amount / self.food.serving_size
        return self.food.macronutrients.calculate_for_quantity(ratio)

    # Mutators

    def consume(self, amount: float) -> "PantryItem":
        """
        Consume part of the item.

        Args:
            amount: Amount to remove, in the current unit

        Returns:
            New PantryItem with the reduced quantity

        Raises:
            ValidationError: If amount <= 0 or exceeds what is left

        Example:
            >>> item.quantity.amount
            100
            >>> item.consume(30).quantity.amount
            70
        """
        if amount is None or amount <= 0:
            raise ValidationError("Consume amount must be greater than 0")

        consumed = Quantity(amount=amount, unit=self.quantity.unit, type=self.quantity.type)
        return replace(
            self,
            quantity=self.quantity.subtract(consumed),
            updated_at=utc_now(),
        )

    def add_quantity(self, amount: float) -> "PantryItem":
        """
        Add more of the same food to the item.

        Raises:
            ValidationError: If amount <= 0
        """
        if amount is None or amount <= 0:
            raise ValidationError("Add amount must be greater than 0")

        added = Quantity(amount=amount, unit=self.quantity.unit, type=self.quantity.type)
        return replace(self, quantity=self.quantity.add(added), updated_at=utc_now())

    def update_quantity(self, quantity: Quantity) -> "PantryItem":
        return replace(self, quantity=quantity, updated_at=utc_now())

    def update_expiration(self, expiration: ExpirationDate) -> "PantryItem":
        return replace(self, expiration=expiration, updated_at=utc_now())

    def update_location(self, location: Optional[str]) -> "PantryItem":
        return replace(self, location=location, updated_at=utc_now())

    def update_notes(self, notes: Optional[str]) -> "PantryItem":
        return replace(self, notes=notes, updated_at=utc_now())
