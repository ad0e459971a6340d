"""Core domain model: enums, value objects and entities."""
