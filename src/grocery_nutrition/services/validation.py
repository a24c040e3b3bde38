"""Validation, advice and display helpers for nutritional data."""

import math
from collections.abc import Iterable

from grocery_nutrition.domain.nutrition import (
    NutritionalFacts,
    Recommendation,
    ValidationResult,
)

MACRO_TOLERANCE = 0.2

_PRIORITY_ORDER = {"high": 3, "medium": 2, "low": 1}

ALLERGEN_LABELS = {
    "gluten": "Gluten",
    "sulphur-dioxide-and-sulphites": "Sulphites",
    "eggs": "Eggs",
    "milk": "Milk",
    "nuts": "Tree nuts",
    "peanuts": "Peanuts",
    "fish": "Fish",
    "shellfish": "Shellfish",
    "soy": "Soy",
    "sesame": "Sesame",
}


def validate_nutritional_data(facts: NutritionalFacts) -> ValidationResult:
    """Check required macros and coherence before persisting facts.

    Calories that disagree with the macro sum are reported as a warning only.
    """
    errors: list[str] = []
    warnings: list[str] = []

    if facts.calories <= 0:
        errors.append("Calories are required and must be a positive number")
    if facts.proteins <= 0:
        errors.append("Proteins are required and must be a positive number")
    if facts.carbs <= 0:
        errors.append("Carbs are required and must be a positive number")
    if facts.fats <= 0:
        errors.append("Fats are required and must be a positive number")

    macro_calories = facts.proteins * 4 + facts.carbs * 4 + facts.fats * 9
    if abs(facts.calories - macro_calories) > facts.calories * MACRO_TOLERANCE:
        warnings.append(
            "Calories do not match the sum of macronutrients (over 20% difference)"
        )

    if facts.sodium > 2000:
        warnings.append("Very high sodium content (>2000mg per 100g)")
    if facts.sugar > 30:
        warnings.append("Very high sugar content (>30g per 100g)")
    if facts.saturated_fats > facts.fats:
        errors.append("Saturated fats cannot exceed total fats")

    return ValidationResult(errors=errors, warnings=warnings)


def generate_recommendations(facts: NutritionalFacts | None) -> list[Recommendation]:
    """Return advice for a profile, highest priority first."""
    if facts is None:
        return []
    recommendations: list[Recommendation] = []
    if facts.sodium > 600:
        recommendations.append(
            Recommendation(
                kind="warning",
                message="High sodium content. Consume in moderation if you "
                "have hypertension.",
                priority="high",
            )
        )
    if facts.sugar > 15:
        recommendations.append(
            Recommendation(
                kind="warning",
                message="High sugar content. Consider lower-sugar options.",
                priority="medium",
            )
        )
    if facts.saturated_fats > 5:
        recommendations.append(
            Recommendation(
                kind="warning",
                message="High saturated fat content. Moderate your intake.",
                priority="medium",
            )
        )
    if facts.fiber > 6:
        recommendations.append(
            Recommendation(
                kind="positive",
                message="Excellent source of fiber.",
                priority="low",
            )
        )
    if facts.proteins > 10:
        recommendations.append(
            Recommendation(
                kind="positive",
                message="Good source of protein.",
                priority="low",
            )
        )
    if facts.is_organic:
        recommendations.append(
            Recommendation(
                kind="info",
                message="Organic product.",
                priority="low",
            )
        )
    if facts.is_vegan:
        recommendations.append(
            Recommendation(
                kind="info",
                message="Vegan product, free of animal-derived ingredients.",
                priority="low",
            )
        )
    return sorted(
        recommendations,
        key=lambda item: _PRIORITY_ORDER[item.priority],
        reverse=True,
    )


def nutritional_summary(facts: NutritionalFacts | None) -> str:
    """Return a short plain-text description of a profile."""
    if facts is None:
        return "No nutritional information available."

    parts = [f"Contains {format_nutritional_value(facts.calories)} kcal per 100g"]
    macros = []
    if facts.proteins:
        macros.append(f"{format_nutritional_value(facts.proteins)}g of protein")
    if facts.carbs:
        macros.append(f"{format_nutritional_value(facts.carbs)}g of carbs")
    if facts.fats:
        macros.append(f"{format_nutritional_value(facts.fats)}g of fat")
    if macros:
        parts[0] = f"{parts[0]} with {', '.join(macros)}"

    features = []
    if facts.fiber > 3:
        features.append("a good source of fiber")
    if facts.proteins > 10:
        features.append("high in protein")
    if facts.sodium > 600:
        features.append("high in sodium")
    if facts.sugar > 15:
        features.append("high in sugar")
    if features:
        parts.append(f"It is {' and '.join(features)}")

    special = []
    if facts.is_vegan:
        special.append("vegan")
    if facts.is_gluten_free:
        special.append("gluten free")
    if facts.is_organic:
        special.append("organic")
    if special:
        parts.append(f"Product is {', '.join(special)}")

    return ". ".join(parts) + "."


def format_nutritional_value(value: float | None, decimals: int = 1) -> str:
    """Format a nutrient amount for display."""
    if value is None or math.isnan(value) or value == 0:
        return "0"
    if value < 1:
        return f"{value:.2f}"
    return f"{value:.{decimals}f}"


def format_allergens(allergens: Iterable[str]) -> list[str]:
    """Return display labels for allergen keys, passing unknown keys through."""
    return [ALLERGEN_LABELS.get(allergen, allergen) for allergen in allergens]
