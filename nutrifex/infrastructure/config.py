"""Configuration utilities for infrastructure layer.

Values come from environment variables. load_environment() loads a
``.env`` file found from the working directory; variables already set in
the process environment win over the file.

Example .env:
    NUTRIFEX_DB_PATH=data/pantry.db
    REPOSITORY_BACKEND=sqlite
    LOG_LEVEL=DEBUG
    NUTRIFEX_EXPIRING_THRESHOLD_DAYS=5
"""

import os
from typing import Optional

from dotenv import find_dotenv, load_dotenv

MEMORY_DATABASE = ":memory:"

_SUPPORTED_BACKENDS = ("sqlite", "inmemory")


def load_environment(dotenv_path: Optional[str] = None) -> bool:
    """
    Load variables from a .env file without overriding the environment.

    Called by open_database() and create_unit_of_work(), so applications
    only need to call it when they read configuration earlier.

    Args:
        dotenv_path: File to load (default: .env found from the working directory)

    Returns:
        True if a file was found and loaded
    """
    path = dotenv_path if dotenv_path is not None else find_dotenv(usecwd=True)
    return load_dotenv(path, override=False)


def get_database_path() -> str:
    """
    Get SQLite database path.

    Returns:
        Path from NUTRIFEX_DB_PATH, defaults to "nutrifex.db".
        ":memory:" selects a private in-memory database.
    """
    return os.getenv("NUTRIFEX_DB_PATH", "nutrifex.db")


def get_repository_backend() -> str:
    """
    Get repository backend name.

    Returns:
        "sqlite" (default) or "inmemory"

    Raises:
        ValueError: If REPOSITORY_BACKEND holds an unknown value
    """
    backend = os.getenv("REPOSITORY_BACKEND", "sqlite").strip().lower()
    if backend not in _SUPPORTED_BACKENDS:
        raise ValueError(
            f"Unsupported REPOSITORY_BACKEND={backend!r}. "
            f"Use one of: {', '.join(_SUPPORTED_BACKENDS)}"
        )
    return backend


def get_log_level() -> str:
    return os.getenv("LOG_LEVEL", "INFO").upper()


def get_expiring_threshold_days() -> int:
    """
    Get default window for "expiring soon" queries.

    Returns:
        Days from NUTRIFEX_EXPIRING_THRESHOLD_DAYS, defaults to 3

    Raises:
        ValueError: If the value is not a non-negative integer
    """
    raw = os.getenv("NUTRIFEX_EXPIRING_THRESHOLD_DAYS", "3")
    try:
        days = int(raw)
    except ValueError as e:
        raise ValueError(f"NUTRIFEX_EXPIRING_THRESHOLD_DAYS must be an integer, got {raw!r}") from e
    if days < 0:
        raise ValueError(f"NUTRIFEX_EXPIRING_THRESHOLD_DAYS must be >= 0, got {days}")
    return days


def is_memory_database(path: str) -> bool:
    return path == MEMORY_DATABASE or path.startswith("file::memory:")
