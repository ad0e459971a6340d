"""Shared dictionary storage for the in-memory repositories."""

from dataclasses import dataclass, field
from typing import Dict, Tuple

from nutrifex.domain.core.entities.food import Food, FoodId
from nutrifex.domain.core.entities.pantry_item import PantryItem, PantryItemId

Snapshot = Tuple[Dict[FoodId, Food], Dict[PantryItemId, PantryItem]]


@dataclass
class InMemoryStore:
    """
    Foods and pantry items shared by both in-memory repositories.

    Entities are immutable, so shallow dictionary copies are complete
    snapshots.

    Thread safety: NOT thread-safe
    Persistence: Data lost on process restart
    """

    foods: Dict[FoodId, Food] = field(default_factory=dict)
    pantry_items: Dict[PantryItemId, PantryItem] = field(default_factory=dict)

    def snapshot(self) -> Snapshot:
        return dict(self.foods), dict(self.pantry_items)

    def restore(self, snapshot: Snapshot) -> None:
        foods, pantry_items = snapshot
        self.foods = dict(foods)
        self.pantry_items = dict(pantry_items)

    def clear(self) -> None:
        self.foods.clear()
        self.pantry_items.clear()
