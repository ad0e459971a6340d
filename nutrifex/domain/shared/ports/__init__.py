"""Domain ports (interfaces for infrastructure adapters)."""

from nutrifex.domain.shared.ports.food_repository import IFoodRepository
from nutrifex.domain.shared.ports.pagination import Page, validate_window
from nutrifex.domain.shared.ports.pantry_item_repository import IPantryItemRepository
from nutrifex.domain.shared.ports.unit_of_work import IUnitOfWork

__all__ = [
    "IFoodRepository",
    "IPantryItemRepository",
    "IUnitOfWork",
    "Page",
    "validate_window",
]
