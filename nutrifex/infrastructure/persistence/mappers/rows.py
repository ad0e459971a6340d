"""Row models: the flat shape of foods and pantry_items records.

Field order is the column order used by every INSERT and UPDATE.
Timestamps are fixed-width UTC text (see timestamps.STORAGE_FORMAT).
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class FoodRow(BaseModel):
    """
    One record of the foods table.

    Example:
        >>> row = FoodRow.model_validate(record)
        >>> row.macronutrients_calories
        52.0
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    macronutrients_calories: float = Field(..., ge=0)
    macronutrients_protein: float = Field(..., ge=0)
    macronutrients_carbohydrates: float = Field(..., ge=0)
    macronutrients_fat: float = Field(..., ge=0)
    serving_size: float = Field(..., gt=0)
    state: str
    category: str
    default_quantity_type: str
    default_unit: str
    brand: Optional[str] = None
    barcode: Optional[str] = None
    created_at: str
    updated_at: str


class PantryItemRow(BaseModel):
    """One record of the pantry_items table. The Food is stored by id only."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str = Field(..., min_length=1)
    food_id: str = Field(..., min_length=1)
    quantity_amount: float = Field(..., ge=0)
    quantity_unit: str
    quantity_type: str
    expiration_date: str
    expiration_type: str
    purchased_at: Optional[str] = None
    location: Optional[str] = None
    notes: Optional[str] = None
    created_at: str
    updated_at: str
