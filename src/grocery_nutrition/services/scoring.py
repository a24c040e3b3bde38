"""Nutritional scoring, daily values and traffic-light classification."""

import logging
import math
from dataclasses import replace

from grocery_nutrition.domain.nutrition import (
    Nutrient,
    NutritionalFacts,
    ScoreCategory,
    TrafficLight,
)

BASE_SCORE = 5.0
MIN_SCORE = 0.0
MAX_SCORE = 10.0

# Reference daily intake for an average adult.
DAILY_VALUES: dict[Nutrient, float] = {
    Nutrient.CALORIES: 2000,
    Nutrient.PROTEIN: 50,
    Nutrient.CARBS: 300,
    Nutrient.FATS: 65,
    Nutrient.SATURATED_FATS: 20,
    Nutrient.FIBER: 25,
    Nutrient.SODIUM: 2300,
    Nutrient.SUGAR: 50,
}

# (low, high) per 100 g; sodium in mg, everything else in g.
TRAFFIC_LIGHT_THRESHOLDS: dict[Nutrient, tuple[float, float]] = {
    Nutrient.SODIUM: (120, 600),
    Nutrient.SUGAR: (5, 22.5),
    Nutrient.SATURATED_FATS: (1.5, 5),
    Nutrient.FATS: (3, 17.5),
    Nutrient.FIBER: (3, 6),
    Nutrient.PROTEIN: (6, 12),
}

HIGHER_IS_BETTER = frozenset({Nutrient.FIBER, Nutrient.PROTEIN})

_logger = logging.getLogger(__name__)


def score(facts: NutritionalFacts | None) -> float:
    """Return the 0-10 heuristic health score for a facts record."""
    if facts is None:
        return MIN_SCORE
    value = BASE_SCORE
    if facts.proteins > 10:
        value += 1
    if facts.fiber > 3:
        value += 1
    if facts.sugar > 15:
        value -= 1.5
    if facts.saturated_fats > 5:
        value -= 1
    if facts.sodium > 400:
        value -= 1
    return max(MIN_SCORE, min(MAX_SCORE, value))


def with_score(facts: NutritionalFacts) -> NutritionalFacts:
    """Return a copy of the facts carrying its computed score."""
    return replace(facts, score=score(facts))


def category(value: float) -> ScoreCategory:
    """Map a score to its qualitative category."""
    if value >= 8:
        return ScoreCategory.EXCELLENT
    if value >= 6:
        return ScoreCategory.GOOD
    if value >= 4:
        return ScoreCategory.FAIR
    return ScoreCategory.POOR


def daily_value_percentage(
    value: float | None, nutrient: Nutrient | str, portion_g: float = 100
) -> int:
    """Return the percentage of the daily value contained in a portion."""
    if not value or math.isnan(value):
        return 0
    resolved = Nutrient.parse(nutrient)
    if resolved is None:
        _logger.debug("No daily value for nutrient %s", nutrient)
        return 0
    portion_value = value * portion_g / 100
    return round_half_up(portion_value / DAILY_VALUES[resolved] * 100)


def traffic_light(
    value: float | None, nutrient: Nutrient | str, portion_g: float = 100
) -> TrafficLight:
    """Classify a nutrient amount as green, yellow, red or gray."""
    if not value or math.isnan(value) or portion_g <= 0:
        return TrafficLight.GRAY
    resolved = Nutrient.parse(nutrient)
    thresholds = TRAFFIC_LIGHT_THRESHOLDS.get(resolved) if resolved else None
    if thresholds is None:
        _logger.debug("No traffic-light thresholds for nutrient %s", nutrient)
        return TrafficLight.GRAY

    low, high = thresholds
    normalized = value * 100 / portion_g
    if resolved in HIGHER_IS_BETTER:
        if normalized >= high:
            return TrafficLight.GREEN
        if normalized >= low:
            return TrafficLight.YELLOW
        return TrafficLight.RED

    if normalized <= low:
        return TrafficLight.GREEN
    if normalized <= high:
        return TrafficLight.YELLOW
    return TrafficLight.RED


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up."""
    return math.floor(value + 0.5)
