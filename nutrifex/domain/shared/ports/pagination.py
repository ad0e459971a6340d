"""Pagination result shared by repository ports."""

from dataclasses import dataclass
from typing import Generic, List, TypeVar

T = TypeVar("T")


def validate_window(skip: int, take: int) -> None:
    """Reject negative pagination bounds.

    Raises:
        ValueError: If skip or take is negative.
    """
    if skip < 0:
        raise ValueError(f"skip must be >= 0, got {skip}")
    if take < 0:
        raise ValueError(f"take must be >= 0, got {take}")


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of results plus the total number of matches.

    Attributes:
        items: Entities in this page, in repository order
        total: Number of matches ignoring skip/take
    """

    items: List[T]
    total: int
