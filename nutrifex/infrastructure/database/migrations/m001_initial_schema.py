"""Initial schema: foods and pantry_items.

Columns mirror the FoodRow and PantryItemRow models one-to-one.
Timestamps are fixed-width UTC text, so TEXT comparison orders them.
"""

from nutrifex.infrastructure.database.migrations.base import Migration
from nutrifex.infrastructure.database.ports import IDatabase

CREATE_FOODS = """
CREATE TABLE IF NOT EXISTS foods (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    description TEXT,
    macronutrients_calories REAL NOT NULL,
    macronutrients_protein REAL NOT NULL,
    macronutrients_carbohydrates REAL NOT NULL,
    macronutrients_fat REAL NOT NULL,
    serving_size REAL NOT NULL,
    state TEXT NOT NULL,
    category TEXT NOT NULL,
    default_quantity_type TEXT NOT NULL,
    default_unit TEXT NOT NULL,
    brand TEXT,
    barcode TEXT,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL
)
"""

CREATE_PANTRY_ITEMS = """
CREATE TABLE IF NOT EXISTS pantry_items (
    id TEXT PRIMARY KEY,
    food_id TEXT NOT NULL,
    quantity_amount REAL NOT NULL,
    quantity_unit TEXT NOT NULL,
    quantity_type TEXT NOT NULL,
    expiration_date TEXT NOT NULL,
    expiration_type TEXT NOT NULL,
    purchased_at TEXT,
    location TEXT,
    notes TEXT,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL,
    FOREIGN KEY (food_id) REFERENCES foods(id) ON DELETE CASCADE
)
"""

INDEXES = (
    "CREATE INDEX IF NOT EXISTS idx_foods_name ON foods(name)",
    "CREATE INDEX IF NOT EXISTS idx_foods_category ON foods(category)",
    "CREATE INDEX IF NOT EXISTS idx_foods_state ON foods(state)",
    "CREATE INDEX IF NOT EXISTS idx_foods_barcode ON foods(barcode)",
    "CREATE INDEX IF NOT EXISTS idx_pantry_items_food_id ON pantry_items(food_id)",
    "CREATE INDEX IF NOT EXISTS idx_pantry_items_expiration_date "
    "ON pantry_items(expiration_date)",
    "CREATE INDEX IF NOT EXISTS idx_pantry_items_location ON pantry_items(location)",
)


class InitialSchemaMigration(Migration):
    version = 1
    name = "initial_schema"

    async def up(self, db: IDatabase) -> None:
        await db.execute(CREATE_FOODS)
        await db.execute(CREATE_PANTRY_ITEMS)
        for statement in INDEXES:
            await db.execute(statement)

    async def down(self, db: IDatabase) -> None:
        # children first
        await db.execute("DROP TABLE IF EXISTS pantry_items")
        await db.execute("DROP TABLE IF EXISTS foods")
