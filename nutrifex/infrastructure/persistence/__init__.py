"""Persistence adapters: mappers, SQLite and in-memory repositories, unit of work."""
