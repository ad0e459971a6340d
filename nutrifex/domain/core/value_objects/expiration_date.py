"""ExpirationDate value object.

Typed expiration date distinguishing quality (best before) from
safety (use by) deadlines, with expiry state derived relative to a
reference instant.
"""

import math
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Dict, Optional

from nutrifex.domain.core.enums import ExpirationType, coerce_enum
from nutrifex.domain.core.value_objects.timestamps import (
    ensure_aware,
    to_storage_text,
    utc_now,
)

ONE_DAY = timedelta(days=1)
DEFAULT_EXPIRING_THRESHOLD_DAYS = 3


@dataclass(frozen=True)
class ExpirationDate:
    """Value object for an expiration date with its type.

    Attributes:
        date: Timezone-aware expiration instant
        type: BEST_BEFORE or USE_BY

    Examples:
        >>> from datetime import timezone
        >>> now = datetime(2025, 1, 1, tzinfo=timezone.utc)
        >>> exp = ExpirationDate.use_by(now + timedelta(days=3))
        >>> exp.days_until_expiration(now)
        3
        >>> exp.is_expiring_soon(3, now)
        True
        >>> exp.is_safety_critical()
        True

    Raises:
        ValidationError: If date is naive or type is unknown.
    """

    date: datetime
    type: ExpirationType

    def __post_init__(self) -> None:
        """Validate expiration invariants."""
        ensure_aware(self.date, "Expiration date")
        object.__setattr__(self, "type", coerce_enum(ExpirationType, self.type))

    @classmethod
    def create(cls, date: datetime, type: ExpirationType) -> "ExpirationDate":
        return cls(date=date, type=type)

    @classmethod
    def best_before(cls, date: datetime) -> "ExpirationDate":
        return cls(date=date, type=ExpirationType.BEST_BEFORE)

    @classmethod
    def use_by(cls, date: datetime) -> "ExpirationDate":
        return cls(date=date, type=ExpirationType.USE_BY)

    def is_expired(self, reference: Optional[datetime] = None) -> bool:
        """True when the date is strictly before reference (default: now)."""
        return self.date < (reference or utc_now())

    def days_until_expiration(self, reference: Optional[datetime] = None) -> int:
        """Whole days until expiration, rounded up.

        Negative once expired by a full day or more. An item expired
        less than a day ago reports 0.
        """
        diff = self.date - (reference or utc_now())
        return math.ceil(diff / ONE_DAY)

    def is_expiring_soon(
        self,
        threshold_days: int = DEFAULT_EXPIRING_THRESHOLD_DAYS,
        reference: Optional[datetime] = None,
    ) -> bool:
        """True when 0 <= days_until_expiration <= threshold_days."""
        days_left = self.days_until_expiration(reference)
        return 0 <= days_left <= threshold_days

    def is_safety_critical(self) -> bool:
        """USE_BY dates are safety deadlines."""
        return self.type == ExpirationType.USE_BY

    def to_dict(self) -> Dict[str, Any]:
        return {"date": to_storage_text(self.date), "type": self.type.value}

    def __str__(self) -> str:
        label = "use by" if self.is_safety_critical() else "best before"
        return f"{label} {self.date.date().isoformat()}"
