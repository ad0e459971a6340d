"""Unit tests for the specification engine and concrete specifications."""

from datetime import datetime, timedelta
from typing import Callable

import pytest

from nutrifex.domain.core.entities import Food, PantryItem
from nutrifex.domain.core.enums import FoodCategory, FoodState
from nutrifex.domain.specifications import (
    AndSpecification,
    FoodSpecifications,
    MatchAll,
    NotSpecification,
    OrSpecification,
    PantryItemSpecifications,
    QueryFragment,
    escape_like,
    merge_params,
)


class TestCompositeSpecifications:
    """Test and/or/not combinators."""

    def test_and_or_not_truth_tables(self, make_food: Callable[..., Food]) -> None:
        apple = make_food(category=FoodCategory.FRUIT, calories=52)
        fruit = FoodSpecifications.by_category(FoodCategory.FRUIT)
        rich = FoodSpecifications.with_min_calories(100)

        assert not (fruit & rich).is_satisfied_by(apple)
        assert (fruit | rich).is_satisfied_by(apple)
        assert (~rich).is_satisfied_by(apple)
        assert not fruit.not_().is_satisfied_by(apple)

    def test_method_and_operator_forms_are_equivalent(self) -> None:
        left = FoodSpecifications.by_state(FoodState.SOLID)
        right = FoodSpecifications.by_brand("Acme")

        assert isinstance(left.and_(right), AndSpecification)
        assert isinstance(left & right, AndSpecification)
        assert isinstance(left.or_(right), OrSpecification)
        assert isinstance(left | right, OrSpecification)
        assert isinstance(~left, NotSpecification)

    def test_combinators_do_not_mutate_operands(self) -> None:
        spec = FoodSpecifications.by_brand("Acme")
        before = spec.to_query_fragment()

        _ = spec & FoodSpecifications.by_barcode("123")
        _ = ~spec

        assert spec.to_query_fragment() == before

    def test_fragments_parenthesize_operands(self) -> None:
        a = FoodSpecifications.by_brand("A")
        b = FoodSpecifications.by_brand("B")
        c = FoodSpecifications.by_brand("C")

        fragment = ((a | b) & ~c).to_query_fragment()

        assert fragment.clause == (
            f"((brand IS :{a.param}) OR (brand IS :{b.param})) AND (NOT (brand IS :{c.param}))"
        )
        assert fragment.params == {a.param: "A", b.param: "B", c.param: "C"}

    def test_same_specification_type_twice_keeps_both_values(self) -> None:
        """Test two instances of one type never share a placeholder."""
        fruit = FoodSpecifications.by_category(FoodCategory.FRUIT)
        nut = FoodSpecifications.by_category(FoodCategory.NUT)

        fragment = (fruit | nut).to_query_fragment()

        assert fruit.param != nut.param
        assert sorted(fragment.params.values()) == ["FRUIT", "NUT"]

    def test_same_instance_twice_is_allowed(self) -> None:
        fruit = FoodSpecifications.by_category(FoodCategory.FRUIT)

        fragment = (fruit & fruit).to_query_fragment()

        assert fragment.params == {fruit.param: "FRUIT"}

    def test_merge_params_conflict_raises(self) -> None:
        with pytest.raises(ValueError, match="conflicting"):
            merge_params({"x": 1}, {"x": 2})

        assert merge_params({"x": 1}, {"x": 1, "y": 2}) == {"x": 1, "y": 2}

    def test_match_all(self, make_food: Callable[..., Food]) -> None:
        assert MatchAll().is_satisfied_by(make_food())
        assert MatchAll().to_query_fragment() == QueryFragment(clause="1 = 1")


class TestFoodSpecifications:
    """Test concrete Food specifications."""

    def test_by_id(self, make_food: Callable[..., Food]) -> None:
        spec = FoodSpecifications.by_id("food-apple")

        assert spec.is_satisfied_by(make_food(id="food-apple"))
        assert not spec.is_satisfied_by(make_food(id="food-pear"))
        assert spec.to_query_fragment().clause == f"id = :{spec.param}"

    def test_category_binds_enum_value(self) -> None:
        spec = FoodSpecifications.by_category(FoodCategory.DAIRY)

        assert spec.to_query_fragment().params == {spec.param: "DAIRY"}

    def test_calorie_bounds_are_inclusive(self, make_food: Callable[..., Food]) -> None:
        food = make_food(calories=100)

        assert FoodSpecifications.with_min_calories(100).is_satisfied_by(food)
        assert FoodSpecifications.with_max_calories(100).is_satisfied_by(food)
        assert not FoodSpecifications.with_min_calories(100.1).is_satisfied_by(food)

    def test_name_search_is_case_insensitive_substring(
        self, make_food: Callable[..., Food]
    ) -> None:
        spec = FoodSpecifications.by_name_search("APP")

        assert spec.is_satisfied_by(make_food(name="Green apple"))
        assert not spec.is_satisfied_by(make_food(name="Pear"))

    def test_name_search_folds_non_ascii(self, make_food: Callable[..., Food]) -> None:
        assert FoodSpecifications.by_name_search("édam").is_satisfied_by(make_food(name="Édam"))
        assert FoodSpecifications.by_name_search("ÄPFEL").is_satisfied_by(
            make_food(name="Über Äpfel")
        )
        assert FoodSpecifications.by_name_search("STRASSE").is_satisfied_by(
            make_food(name="Straßenbrot")
        )

    def test_name_search_escapes_wildcards(self) -> None:
        spec = FoodSpecifications.by_name_search("50%_Off")

        fragment = spec.to_query_fragment()

        assert fragment.clause == f"casefold(name) LIKE :{spec.param} ESCAPE '\\'"
        assert fragment.params == {spec.param: "%50\\%\\_off%"}

    def test_escape_like(self) -> None:
        assert escape_like("a\\b") == "a\\\\b"
        assert escape_like("plain") == "plain"

    def test_brand_and_barcode(self, make_food: Callable[..., Food]) -> None:
        food = make_food(brand="Acme", barcode="8001234567890")

        assert FoodSpecifications.by_brand("Acme").is_satisfied_by(food)
        assert FoodSpecifications.by_barcode("8001234567890").is_satisfied_by(food)
        assert not FoodSpecifications.by_brand("Other").is_satisfied_by(make_food())


class TestPantryItemSpecifications:
    """Test concrete PantryItem specifications."""

    @pytest.mark.parametrize(
        "expires_in,expected",
        [
            (timedelta(days=3), True),
            (timedelta(days=4), False),
            (timedelta(days=-1), False),
            (timedelta(hours=-23), True),
            (timedelta(0), True),
        ],
    )
    def test_expiring_window(
        self,
        make_pantry_item: Callable[..., PantryItem],
        reference_time: datetime,
        expires_in: timedelta,
        expected: bool,
    ) -> None:
        spec = PantryItemSpecifications.expiring(3, reference_time)

        assert spec.is_satisfied_by(make_pantry_item(expires_in=expires_in)) is expected

    def test_expiring_fragment_bounds(self, reference_time: datetime) -> None:
        spec = PantryItemSpecifications.expiring(3, reference_time)

        fragment = spec.to_query_fragment()

        assert fragment.clause == (
            f"expiration_date > :{spec.lower_param} AND expiration_date <= :{spec.upper_param}"
        )
        assert fragment.params == {
            spec.lower_param: "2025-01-14T12:00:00.000000Z",
            spec.upper_param: "2025-01-18T12:00:00.000000Z",
        }

    def test_expiring_rejects_negative_threshold(self) -> None:
        with pytest.raises(ValueError):
            PantryItemSpecifications.expiring(-1)

    def test_expired_and_not_expired_partition(
        self, make_pantry_item: Callable[..., PantryItem], reference_time: datetime
    ) -> None:
        expired = PantryItemSpecifications.expired(reference_time)
        fresh = PantryItemSpecifications.not_expired(reference_time)

        for offset in (timedelta(days=-2), timedelta(0), timedelta(seconds=1)):
            item = make_pantry_item(expires_in=offset)
            assert expired.is_satisfied_by(item) != fresh.is_satisfied_by(item)

        assert expired.is_satisfied_by(make_pantry_item(expires_in=timedelta(seconds=-1)))
        assert fresh.is_satisfied_by(make_pantry_item(expires_in=timedelta(0)))

    def test_expired_fragment(self, reference_time: datetime) -> None:
        spec = PantryItemSpecifications.expired(reference_time)

        assert spec.to_query_fragment() == QueryFragment(
            clause=f"expiration_date < :{spec.param}",
            params={spec.param: "2025-01-15T12:00:00.000000Z"},
        )

    def test_quantity_specifications(self, make_pantry_item: Callable[..., PantryItem]) -> None:
        low = PantryItemSpecifications.low_quantity(50)
        empty = PantryItemSpecifications.empty()

        assert low.is_satisfied_by(make_pantry_item(amount=50))
        assert not low.is_satisfied_by(make_pantry_item(amount=51))
        assert empty.is_satisfied_by(make_pantry_item(amount=0))
        assert empty.to_query_fragment().clause == "quantity_amount = 0"

    def test_by_food_id_and_location(
        self, make_food: Callable[..., Food], make_pantry_item: Callable[..., PantryItem]
    ) -> None:
        item = make_pantry_item(food=make_food(id="food-milk"), location="Fridge")

        assert PantryItemSpecifications.by_food_id("food-milk").is_satisfied_by(item)
        assert PantryItemSpecifications.by_location("Fridge").is_satisfied_by(item)
        assert not PantryItemSpecifications.by_location("Freezer").is_satisfied_by(item)
        assert PantryItemSpecifications.by_id("item-1").is_satisfied_by(item)

    def test_triple_nesting_matches_manual_evaluation(
        self, make_pantry_item: Callable[..., PantryItem], reference_time: datetime
    ) -> None:
        spec = (
            PantryItemSpecifications.by_location("Fridge")
            & (
                PantryItemSpecifications.expiring(3, reference_time)
                | ~PantryItemSpecifications.low_quantity(10)
            )
        ) | PantryItemSpecifications.expired(reference_time)

        cases = [
            make_pantry_item(location="Fridge", amount=5, expires_in=timedelta(days=2)),
            make_pantry_item(location="Fridge", amount=5, expires_in=timedelta(days=9)),
            make_pantry_item(location="Fridge", amount=50, expires_in=timedelta(days=9)),
            make_pantry_item(location="Pantry", amount=50, expires_in=timedelta(days=-5)),
            make_pantry_item(location="Pantry", amount=50, expires_in=timedelta(days=2)),
        ]

        assert [spec.is_satisfied_by(item) for item in cases] == [True, False, True, True, False]
        assert len(spec.to_query_fragment().params) == 5


class TestClockBasedComposition:
    """Test rendering of specifications that read the clock."""

    def test_reused_instances_bind_one_instant(self) -> None:
        """Test an instance without reference_time can appear in both OR branches."""
        fresh = PantryItemSpecifications.not_expired()
        soon = PantryItemSpecifications.expiring(3)
        spec = (fresh & soon & PantryItemSpecifications.by_location("Fridge")) | (
            fresh & soon & PantryItemSpecifications.by_location("Shelf")
        )

        fragment = spec.to_query_fragment()

        assert fragment.clause.count(f":{fresh.param}") == 2
        assert fragment.clause.count(f":{soon.upper_param}") == 2
        assert len(fragment.params) == 5

    def test_operands_share_the_render_instant(self, reference_time: datetime) -> None:
        fresh = PantryItemSpecifications.not_expired()
        expired = PantryItemSpecifications.expired()

        fragment = (fresh | expired).to_query_fragment(reference_time)

        assert fragment.params == {
            fresh.param: "2025-01-15T12:00:00.000000Z",
            expired.param: "2025-01-15T12:00:00.000000Z",
        }

    def test_explicit_reference_time_wins(self, reference_time: datetime) -> None:
        pinned = PantryItemSpecifications.expired(reference_time)

        fragment = pinned.to_query_fragment(reference_time + timedelta(days=30))

        assert fragment.params == {pinned.param: "2025-01-15T12:00:00.000000Z"}
