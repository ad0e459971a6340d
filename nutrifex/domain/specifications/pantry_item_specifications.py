"""Reusable specifications for PantryItem queries.

Column names match the ``pantry_items`` table. Time-based specifications
take an optional reference_time; without one, the current time is read
each time the specification is evaluated or rendered. A composite reads
the clock once per render and hands that instant to all its operands.

Timestamps are compared as fixed-width UTC text, which orders exactly
like the instants it encodes.
"""

from datetime import datetime, timedelta
from typing import Any, Optional

from nutrifex.domain.core.entities.food import FoodId
from nutrifex.domain.core.entities.pantry_item import PantryItem, PantryItemId
from nutrifex.domain.core.value_objects.expiration_date import (
    DEFAULT_EXPIRING_THRESHOLD_DAYS,
    ONE_DAY,
)
from nutrifex.domain.core.value_objects.timestamps import (
    ensure_aware,
    to_storage_text,
    utc_now,
)
from nutrifex.domain.specifications.base import (
    FieldEqualsSpecification,
    QueryFragment,
    Specification,
    unique_param,
)


class PantryItemByIdSpecification(FieldEqualsSpecification[PantryItem]):
    column = "id"

    def value_of(self, entity: PantryItem) -> Any:
        return entity.id


class PantryItemByFoodIdSpecification(FieldEqualsSpecification[PantryItem]):
    column = "food_id"

    def value_of(self, entity: PantryItem) -> Any:
        return entity.food_id


class PantryItemByLocationSpecification(FieldEqualsSpecification[PantryItem]):
    column = "location"
    nullable = True

    def value_of(self, entity: PantryItem) -> Any:
        return entity.location


class _TimeBasedSpecification(Specification[PantryItem]):
    def __init__(self, reference_time: Optional[datetime] = None) -> None:
        if reference_time is not None:
            ensure_aware(reference_time, "reference_time")
        self.reference_time = reference_time

    def _reference(self, now: Optional[datetime] = None) -> datetime:
        if self.reference_time is not None:
            return self.reference_time
        return now if now is not None else utc_now()


class PantryItemExpiredSpecification(_TimeBasedSpecification):
    """Items whose expiration instant is strictly before the reference."""

    def __init__(self, reference_time: Optional[datetime] = None) -> None:
        super().__init__(reference_time)
        self.param = unique_param("expired_before")

    def is_satisfied_by(self, entity: PantryItem) -> bool:
        return entity.is_expired(self._reference())

    def to_query_fragment(self, now: Optional[datetime] = None) -> QueryFragment:
        return QueryFragment(
            clause=f"expiration_date < :{self.param}",
            params={self.param: to_storage_text(self._reference(now))},
        )

    def __repr__(self) -> str:
        return f"PantryItemExpiredSpecification(reference_time={self.reference_time!r})"


class PantryItemNotExpiredSpecification(_TimeBasedSpecification):
    def __init__(self, reference_time: Optional[datetime] = None) -> None:
        super().__init__(reference_time)
        self.param = unique_param("not_expired_from")

    def is_satisfied_by(self, entity: PantryItem) -> bool:
        return not entity.is_expired(self._reference())

    def to_query_fragment(self, now: Optional[datetime] = None) -> QueryFragment:
        return QueryFragment(
            clause=f"expiration_date >= :{self.param}",
            params={self.param: to_storage_text(self._reference(now))},
        )

    def __repr__(self) -> str:
        return f"PantryItemNotExpiredSpecification(reference_time={self.reference_time!r})"


class PantryItemExpiringSpecification(_TimeBasedSpecification):
    """
    Items expiring within threshold_days of the reference.

    Matches 0 <= ceil((expiration - reference) / 1 day) <= threshold_days,
    which is the half-open window
    (reference - 1 day, reference + threshold_days]. An item that expired
    less than a day ago is still counted (0 days left).
    """

    def __init__(
        self,
        threshold_days: int = DEFAULT_EXPIRING_THRESHOLD_DAYS,
        reference_time: Optional[datetime] = None,
    ) -> None:
        super().__init__(reference_time)
        if threshold_days < 0:
            raise ValueError(f"threshold_days must be >= 0, got {threshold_days}")
        self.threshold_days = threshold_days
        self.lower_param = unique_param("expiring_after")
        self.upper_param = unique_param("expiring_until")

    def is_satisfied_by(self, entity: PantryItem) -> bool:
        return entity.is_expiring_soon(self.threshold_days, self._reference())

    def to_query_fragment(self, now: Optional[datetime] = None) -> QueryFragment:
        reference = self._reference(now)
        lower = reference - ONE_DAY
        upper = reference + timedelta(days=self.threshold_days)
        return QueryFragment(
            clause=(
                f"expiration_date > :{self.lower_param} "
                f"AND expiration_date <= :{self.upper_param}"
            ),
            params={
                self.lower_param: to_storage_text(lower),
                self.upper_param: to_storage_text(upper),
            },
        )

    def __repr__(self) -> str:
        return (
            f"PantryItemExpiringSpecification({self.threshold_days!r}, "
            f"reference_time={self.reference_time!r})"
        )


class PantryItemLowQuantitySpecification(Specification[PantryItem]):
    def __init__(self, threshold: float) -> None:
        self.threshold = threshold
        self.param = unique_param("low_quantity")

    def is_satisfied_by(self, entity: PantryItem) -> bool:
        return entity.is_low(self.threshold)

    def to_query_fragment(self, now: Optional[datetime] = None) -> QueryFragment:
        return QueryFragment(
            clause=f"quantity_amount <= :{self.param}",
            params={self.param: self.threshold},
        )

    def __repr__(self) -> str:
        return f"PantryItemLowQuantitySpecification({self.threshold!r})"


class PantryItemEmptySpecification(Specification[PantryItem]):
    def is_satisfied_by(self, entity: PantryItem) -> bool:
        return entity.is_empty()

    def to_query_fragment(self, now: Optional[datetime] = None) -> QueryFragment:
        return QueryFragment(clause="quantity_amount = 0")

    def __repr__(self) -> str:
        return "PantryItemEmptySpecification()"


class PantryItemSpecifications:
    """Static constructors for PantryItem specifications."""

    @staticmethod
    def by_id(item_id: PantryItemId) -> PantryItemByIdSpecification:
        return PantryItemByIdSpecification(item_id)

    @staticmethod
    def by_food_id(food_id: FoodId) -> PantryItemByFoodIdSpecification:
        return PantryItemByFoodIdSpecification(food_id)

    @staticmethod
    def expired(reference_time: Optional[datetime] = None) -> PantryItemExpiredSpecification:
        return PantryItemExpiredSpecification(reference_time)

    @staticmethod
    def expiring(
        threshold_days: int = DEFAULT_EXPIRING_THRESHOLD_DAYS,
        reference_time: Optional[datetime] = None,
    ) -> PantryItemExpiringSpecification:
        return PantryItemExpiringSpecification(threshold_days, reference_time)

    @staticmethod
    def not_expired(
        reference_time: Optional[datetime] = None,
    ) -> PantryItemNotExpiredSpecification:
        return PantryItemNotExpiredSpecification(reference_time)

    @staticmethod
    def low_quantity(threshold: float) -> PantryItemLowQuantitySpecification:
        return PantryItemLowQuantitySpecification(threshold)

    @staticmethod
    def empty() -> PantryItemEmptySpecification:
        return PantryItemEmptySpecification()

    @staticmethod
    def by_location(location: str) -> PantryItemByLocationSpecification:
        return PantryItemByLocationSpecification(location)
