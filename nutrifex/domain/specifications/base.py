"""Specification pattern base classes.

A specification answers one question two ways: in memory through
is_satisfied_by() and in SQL through to_query_fragment(). Both answers
must agree for every entity.

Placeholders are named (``:name``). Every parameterized instance gets
its own placeholder names, so the same specification type can appear
any number of times in one composite tree.
"""

import itertools
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Generic, Mapping, Optional, TypeVar

from nutrifex.domain.core.value_objects.timestamps import utc_now

T = TypeVar("T")

_param_sequence = itertools.count(1)


def unique_param(base: str) -> str:
    """Placeholder name unique within the process.

    Example:
        >>> unique_param("category")  # doctest: +SKIP
        'category_17'
    """
    return f"{base}_{next(_param_sequence)}"


def merge_params(*sources: Mapping[str, Any]) -> Dict[str, Any]:
    """Merge parameter maps.

    Raises:
        ValueError: If one name is bound to two different values.
    """
    merged: Dict[str, Any] = {}
    for source in sources:
        for name, value in source.items():
            if name in merged and merged[name] != value:
                raise ValueError(
                    f"Query parameter {name!r} bound to conflicting values: "
                    f"{merged[name]!r} and {value!r}"
                )
            merged[name] = value
    return merged


@dataclass(frozen=True)
class QueryFragment:
    """A SQL boolean expression plus its named parameter values."""

    clause: str
    params: Dict[str, Any] = field(default_factory=dict)


class Specification(ABC, Generic[T]):
    """
    Abstract specification over entities of type T.

    Combinators return new composite specifications and never mutate
    their operands:

        >>> spec = FoodSpecifications.by_category(FoodCategory.FRUIT) & ~(
        ...     FoodSpecifications.with_min_calories(100)
        ... )
    """

    @abstractmethod
    def is_satisfied_by(self, entity: T) -> bool:
        """True when entity matches."""
        pass

    @abstractmethod
    def to_query_fragment(self, now: Optional[datetime] = None) -> QueryFragment:
        """
        SQL expression selecting exactly the matching rows.

        Args:
            now: Instant used by clock-based specifications without their own
                reference_time. Composites read the clock once and pass the
                same instant to every operand.
        """
        pass

    def and_(self, other: "Specification[T]") -> "Specification[T]":
        return AndSpecification(self, other)

    def or_(self, other: "Specification[T]") -> "Specification[T]":
        return OrSpecification(self, other)

    def not_(self) -> "Specification[T]":
        return NotSpecification(self)

    def __and__(self, other: "Specification[T]") -> "Specification[T]":
        return self.and_(other)

    def __or__(self, other: "Specification[T]") -> "Specification[T]":
        return self.or_(other)

    def __invert__(self) -> "Specification[T]":
        return self.not_()


class AndSpecification(Specification[T]):
    def __init__(self, left: Specification[T], right: Specification[T]) -> None:
        self.left = left
        self.right = right

    def is_satisfied_by(self, entity: T) -> bool:
        return self.left.is_satisfied_by(entity) and self.right.is_satisfied_by(entity)

    def to_query_fragment(self, now: Optional[datetime] = None) -> QueryFragment:
        now = now or utc_now()
        left = self.left.to_query_fragment(now)
        right = self.right.to_query_fragment(now)
        return QueryFragment(
            clause=f"({left.clause}) AND ({right.clause})",
            params=merge_params(left.params, right.params),
        )

    def __repr__(self) -> str:
        return f"AndSpecification({self.left!r}, {self.right!r})"


class OrSpecification(Specification[T]):
    def __init__(self, left: Specification[T], right: Specification[T]) -> None:
        self.left = left
        self.right = right

    def is_satisfied_by(self, entity: T) -> bool:
        return self.left.is_satisfied_by(entity) or self.right.is_satisfied_by(entity)

    def to_query_fragment(self, now: Optional[datetime] = None) -> QueryFragment:
        now = now or utc_now()
        left = self.left.to_query_fragment(now)
        right = self.right.to_query_fragment(now)
        return QueryFragment(
            clause=f"({left.clause}) OR ({right.clause})",
            params=merge_params(left.params, right.params),
        )

    def __repr__(self) -> str:
        return f"OrSpecification({self.left!r}, {self.right!r})"


class NotSpecification(Specification[T]):
    def __init__(self, inner: Specification[T]) -> None:
        self.inner = inner

    def is_satisfied_by(self, entity: T) -> bool:
        return not self.inner.is_satisfied_by(entity)

    def to_query_fragment(self, now: Optional[datetime] = None) -> QueryFragment:
        inner = self.inner.to_query_fragment(now)
        return QueryFragment(clause=f"NOT ({inner.clause})", params=dict(inner.params))

    def __repr__(self) -> str:
        return f"NotSpecification({self.inner!r})"


class MatchAll(Specification[Any]):
    """Matches every entity. Used for unfiltered counts and pages."""

    def is_satisfied_by(self, entity: Any) -> bool:
        return True

    def to_query_fragment(self, now: Optional[datetime] = None) -> QueryFragment:
        return QueryFragment(clause="1 = 1")

    def __repr__(self) -> str:
        return "MatchAll()"


class FieldEqualsSpecification(Specification[T]):
    """
    Equality on one column, with the matching entity attribute read by
    subclasses through value_of().

    Subclasses set ``column`` and implement value_of(). Nullable columns
    compare with IS so that NOT keeps rows holding NULL, as the in-memory
    check does.
    """

    column: str = ""
    nullable: bool = False

    def __init__(self, expected: Any) -> None:
        self.expected = expected
        self.param = unique_param(self.column)

    @abstractmethod
    def value_of(self, entity: T) -> Any:
        pass

    def is_satisfied_by(self, entity: T) -> bool:
        return self.value_of(entity) == self.expected

    def to_query_fragment(self, now: Optional[datetime] = None) -> QueryFragment:
        operator = "IS" if self.nullable else "="
        return QueryFragment(
            clause=f"{self.column} {operator} :{self.param}",
            params={self.param: _sql_value(self.expected)},
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.expected!r})"


def _sql_value(value: Any) -> Any:
    # str enums bind as their value
    return getattr(value, "value", value)
