"""Metric-by-metric comparison of nutritional facts."""

from collections.abc import Sequence

from grocery_nutrition.domain.nutrition import (
    ComparisonError,
    ComparisonResult,
    MetricComparison,
    MetricLeaders,
    Nutrient,
    NutritionalFacts,
    Side,
)
from grocery_nutrition.services.scoring import round_half_up

# Ordered metrics with their direction: True when lower is better.
COMPARISON_METRICS: tuple[tuple[Nutrient, bool], ...] = (
    (Nutrient.CALORIES, True),
    (Nutrient.PROTEIN, False),
    (Nutrient.FIBER, False),
    (Nutrient.SODIUM, True),
    (Nutrient.SUGAR, True),
    (Nutrient.SATURATED_FATS, True),
)

MISSING_DATA_MESSAGE = "One or both products have no nutritional information"


def compare(
    facts_a: NutritionalFacts | None,
    facts_b: NutritionalFacts | None,
    label_a: str = "A",
    label_b: str = "B",
) -> ComparisonResult | ComparisonError:
    """Compare two records metric by metric and pick an overall winner.

    Each metric casts one vote for the side with the better value; equal
    values abstain. The side with more votes wins, equal votes are a tie.
    """
    if facts_a is None or facts_b is None:
        return ComparisonError(message=MISSING_DATA_MESSAGE)

    metrics: list[MetricComparison] = []
    score_a = 0
    score_b = 0
    for nutrient, lower_is_better in COMPARISON_METRICS:
        value_a = facts_a.value_of(nutrient)
        value_b = facts_b.value_of(nutrient)
        winner = _metric_winner(value_a, value_b, lower_is_better=lower_is_better)
        if winner is Side.A:
            score_a += 1
        elif winner is Side.B:
            score_b += 1
        metrics.append(
            MetricComparison(
                metric=nutrient,
                value_a=value_a,
                value_b=value_b,
                winner=winner,
                absolute_diff=abs(value_a - value_b),
                percent_diff=(
                    round_half_up((value_a - value_b) / value_b * 100)
                    if value_b > 0
                    else 0
                ),
            )
        )

    if score_a > score_b:
        winner = Side.A
        message = f"{label_a} is nutritionally better"
    elif score_b > score_a:
        winner = Side.B
        message = f"{label_b} is nutritionally better"
    else:
        winner = Side.TIE
        message = "Both products are nutritionally similar"

    return ComparisonResult(
        metrics=metrics,
        winner=winner,
        score_a=score_a,
        score_b=score_b,
        total_metrics=len(COMPARISON_METRICS),
        message=message,
    )


def metric_leaders(
    entries: Sequence[tuple[str, NutritionalFacts]], metric: Nutrient
) -> MetricLeaders | None:
    """Return the best and worst labelled entry for one metric.

    Entries keep their order; the first occurrence wins when values repeat.
    Returns None when fewer than two entries are given.
    """
    if len(entries) < 2:
        return None
    lower_is_better = dict(COMPARISON_METRICS).get(metric, True)
    values = [(label, facts.value_of(metric)) for label, facts in entries]

    best = values[0]
    worst = values[0]
    for entry in values[1:]:
        if _is_better(entry[1], best[1], lower_is_better=lower_is_better):
            best = entry
        if _is_better(worst[1], entry[1], lower_is_better=lower_is_better):
            worst = entry
    return MetricLeaders(metric=metric, best=best, worst=worst, values=values)


def _metric_winner(
    value_a: float, value_b: float, *, lower_is_better: bool
) -> Side | None:
    if value_a == value_b:
        return None
    if _is_better(value_a, value_b, lower_is_better=lower_is_better):
        return Side.A
    return Side.B


def _is_better(candidate: float, other: float, *, lower_is_better: bool) -> bool:
    if lower_is_better:
        return candidate < other
    return candidate > other
