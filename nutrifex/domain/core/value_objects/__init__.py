"""Core value objects for the pantry domain.

Immutable value objects that form the building blocks of domain entities.
All value objects are frozen dataclasses with value-based equality.
"""

from .expiration_date import DEFAULT_EXPIRING_THRESHOLD_DAYS, ExpirationDate
from .macronutrients import Macronutrients
from .quantity import Quantity

__all__ = [
    "DEFAULT_EXPIRING_THRESHOLD_DAYS",
    "ExpirationDate",
    "Macronutrients",
    "Quantity",
]
