"""Nutrition domain models."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum, StrEnum


class Nutrient(StrEnum):
    """Supported nutrient keys."""

    CALORIES = "calories"
    PROTEIN = "protein"
    CARBS = "carbs"
    FATS = "fats"
    SATURATED_FATS = "saturatedFats"
    FIBER = "fiber"
    SODIUM = "sodium"
    SUGAR = "sugar"

    @classmethod
    def parse(cls, key: "str | Nutrient") -> "Nutrient | None":
        """Return the nutrient for a key or alias, or None if unsupported."""
        if isinstance(key, Nutrient):
            return key
        try:
            return cls(key)
        except ValueError:
            return _NUTRIENT_ALIASES.get(key)


_NUTRIENT_ALIASES = {
    "proteins": Nutrient.PROTEIN,
    "totalFats": Nutrient.FATS,
}

_FIELD_BY_NUTRIENT = {
    Nutrient.CALORIES: "calories",
    Nutrient.PROTEIN: "proteins",
    Nutrient.CARBS: "carbs",
    Nutrient.FATS: "fats",
    Nutrient.SATURATED_FATS: "saturated_fats",
    Nutrient.FIBER: "fiber",
    Nutrient.SODIUM: "sodium",
    Nutrient.SUGAR: "sugar",
}


@dataclass(frozen=True)
class NutritionalFacts:
    """Nutritional facts per 100 g or 100 ml."""

    calories: float = 0.0
    proteins: float = 0.0
    carbs: float = 0.0
    fats: float = 0.0
    fiber: float = 0.0
    sodium: float = 0.0
    sugar: float = 0.0
    saturated_fats: float = 0.0
    ingredients: tuple[str, ...] = ()
    allergens: frozenset[str] = field(default_factory=frozenset)
    is_vegan: bool = False
    is_vegetarian: bool = False
    is_gluten_free: bool = False
    is_organic: bool = False
    source: str | None = None
    score: float | None = None

    def value_of(self, nutrient: Nutrient) -> float:
        """Return the numeric value stored for a nutrient."""
        return getattr(self, _FIELD_BY_NUTRIENT[nutrient])

    @classmethod
    def from_mapping(cls, data: Mapping[str, object]) -> "NutritionalFacts":
        """Build facts from a camelCase document, treating missing numbers as 0."""
        score = data.get("score")
        return cls(
            calories=_number(data.get("calories")),
            proteins=_number(data.get("proteins", data.get("protein"))),
            carbs=_number(data.get("carbs")),
            fats=_number(data.get("fats", data.get("totalFats"))),
            fiber=_number(data.get("fiber")),
            sodium=_number(data.get("sodium")),
            sugar=_number(data.get("sugar")),
            saturated_fats=_number(data.get("saturatedFats")),
            ingredients=tuple(str(item) for item in data.get("ingredients") or ()),
            allergens=frozenset(str(item) for item in data.get("allergens") or ()),
            is_vegan=bool(data.get("isVegan", False)),
            is_vegetarian=bool(data.get("isVegetarian", False)),
            is_gluten_free=bool(data.get("isGlutenFree", False)),
            is_organic=bool(data.get("isOrganic", False)),
            source=data.get("source"),
            score=None if score is None else _number(score),
        )

    def to_mapping(self) -> dict[str, object]:
        """Serialize facts to the camelCase document shape."""
        return {
            "calories": self.calories,
            "proteins": self.proteins,
            "carbs": self.carbs,
            "fats": self.fats,
            "fiber": self.fiber,
            "sodium": self.sodium,
            "sugar": self.sugar,
            "saturatedFats": self.saturated_fats,
            "ingredients": list(self.ingredients),
            "allergens": sorted(self.allergens),
            "isVegan": self.is_vegan,
            "isVegetarian": self.is_vegetarian,
            "isGlutenFree": self.is_gluten_free,
            "isOrganic": self.is_organic,
            "source": self.source,
            "score": self.score,
        }


def _number(value: object) -> float:
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


class ScoreCategory(Enum):
    """Qualitative band for a nutritional score."""

    EXCELLENT = ("Excellent", "green", "Very healthy choice")
    GOOD = ("Good", "yellow", "Moderately healthy choice")
    FAIR = ("Fair", "orange", "Consume in moderation")
    POOR = ("Poor", "red", "Look for healthier alternatives")

    def __init__(self, label: str, severity: str, description: str) -> None:
        self.label = label
        self.severity = severity
        self.description = description


class TrafficLight(StrEnum):
    """Traffic-light classification of a single nutrient value."""

    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"
    GRAY = "gray"


class Side(StrEnum):
    """Side of a two-way comparison."""

    A = "A"
    B = "B"
    TIE = "tie"


@dataclass(frozen=True)
class MetricComparison:
    """Comparison of a single metric between two products."""

    metric: Nutrient
    value_a: float
    value_b: float
    winner: Side | None
    absolute_diff: float
    percent_diff: int


@dataclass(frozen=True)
class ComparisonResult:
    """Outcome of comparing two nutritional facts records."""

    metrics: list[MetricComparison]
    winner: Side
    score_a: int
    score_b: int
    total_metrics: int
    message: str


@dataclass(frozen=True)
class ComparisonError:
    """Structured error returned when a comparison cannot be made."""

    message: str


@dataclass(frozen=True)
class MetricLeaders:
    """Best and worst entries for one metric across several products."""

    metric: Nutrient
    best: tuple[str, float]
    worst: tuple[str, float]
    values: list[tuple[str, float]]


@dataclass(frozen=True)
class ValidationResult:
    """Validation errors and advisory warnings for nutritional data."""

    errors: list[str]
    warnings: list[str]

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def has_warnings(self) -> bool:
        return bool(self.warnings)


@dataclass(frozen=True)
class Recommendation:
    """Advice derived from a nutritional profile."""

    kind: str
    message: str
    priority: str
