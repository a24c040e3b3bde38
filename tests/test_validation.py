"""Tests for nutritional data validation and display helpers."""

import pytest

from grocery_nutrition.domain.nutrition import NutritionalFacts
from grocery_nutrition.services.validation import (
    format_allergens,
    format_nutritional_value,
    generate_recommendations,
    nutritional_summary,
    validate_nutritional_data,
)
from tests.conftest import YOGURT_FACTS


def test_valid_facts_have_no_errors() -> None:
    result = validate_nutritional_data(YOGURT_FACTS)

    assert result.is_valid
    assert result.errors == []
    assert not result.has_warnings


def test_missing_macros_are_errors() -> None:
    result = validate_nutritional_data(NutritionalFacts(calories=100))

    assert not result.is_valid
    assert len(result.errors) == 3
    assert any("Proteins" in error for error in result.errors)
    assert any("Carbs" in error for error in result.errors)
    assert any("Fats" in error for error in result.errors)


def test_saturated_fats_above_total_fats_is_error() -> None:
    facts = NutritionalFacts(
        calories=100, proteins=5, carbs=10, fats=4.5, saturated_fats=6
    )

    result = validate_nutritional_data(facts)

    assert result.errors == ["Saturated fats cannot exceed total fats"]


def test_calorie_mismatch_is_only_a_warning() -> None:
    # Macros add up to 4*5 + 4*10 + 9*4.5 = 100.5 kcal.
    facts = NutritionalFacts(calories=300, proteins=5, carbs=10, fats=4.5)

    result = validate_nutritional_data(facts)

    assert result.is_valid
    assert result.has_warnings
    assert "macronutrients" in result.warnings[0]


def test_high_sodium_and_sugar_warn() -> None:
    facts = NutritionalFacts(
        calories=200, proteins=5, carbs=40, fats=0.5, sodium=2500, sugar=35
    )

    result = validate_nutritional_data(facts)

    assert result.is_valid
    assert len(result.warnings) == 2


def test_recommendations_sorted_by_priority() -> None:
    facts = NutritionalFacts(
        proteins=12, fiber=8, sodium=700, sugar=20, is_vegan=True
    )

    recommendations = generate_recommendations(facts)

    assert [item.priority for item in recommendations] == [
        "high",
        "medium",
        "low",
        "low",
        "low",
    ]
    assert recommendations[0].kind == "warning"
    assert "sodium" in recommendations[0].message
    assert recommendations[-1].kind == "info"


def test_recommendations_empty_without_facts() -> None:
    assert generate_recommendations(None) == []
    assert generate_recommendations(NutritionalFacts()) == []


def test_summary_lists_macros() -> None:
    assert nutritional_summary(YOGURT_FACTS) == (
        "Contains 60.0 kcal per 100g with 10.0g of protein, 4.0g of carbs, "
        "0.50g of fat."
    )


def test_summary_mentions_features_and_traits() -> None:
    facts = NutritionalFacts(
        calories=350, proteins=12, fiber=5, is_vegan=True, is_organic=True
    )

    summary = nutritional_summary(facts)

    assert "It is a good source of fiber and high in protein" in summary
    assert summary.endswith("Product is vegan, organic.")


def test_summary_without_facts() -> None:
    assert nutritional_summary(None) == "No nutritional information available."


@pytest.mark.parametrize(
    ("value", "decimals", "expected"),
    [
        (None, 1, "0"),
        (float("nan"), 1, "0"),
        (0, 1, "0"),
        (0.25, 1, "0.25"),
        (12.34, 1, "12.3"),
        (7, 0, "7"),
    ],
)
def test_format_nutritional_value(
    value: float | None, decimals: int, expected: str
) -> None:
    assert format_nutritional_value(value, decimals) == expected


def test_format_allergens_passes_unknown_keys() -> None:
    assert format_allergens(["milk", "nuts", "lupin"]) == [
        "Milk",
        "Tree nuts",
        "lupin",
    ]
