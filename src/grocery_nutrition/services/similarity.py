"""Similar product ranking by macro-nutrient closeness."""

from collections.abc import Iterable, Iterator

from grocery_nutrition.domain.nutrition import Nutrient, NutritionalFacts
from grocery_nutrition.domain.products import Product, SimilarProduct

SIMILARITY_METRICS = (
    Nutrient.CALORIES,
    Nutrient.PROTEIN,
    Nutrient.CARBS,
    Nutrient.FATS,
)
TRAIT_BONUS = 0.1
MIN_SIMILARITY = 0.3


def rank_similar(
    reference: Product, candidates: Iterable[Product], limit: int = 5
) -> Iterator[SimilarProduct]:
    """Yield candidates most similar to the reference, best first.

    Candidates must share the reference category and carry nutritional facts.
    Equal similarities are ordered by product id.
    """
    if reference.nutrition is None or limit <= 0:
        return iter(())

    scored = []
    for candidate in candidates:
        if (
            candidate.id == reference.id
            or candidate.nutrition is None
            or candidate.category != reference.category
        ):
            continue
        value = similarity(reference.nutrition, candidate.nutrition)
        if value > MIN_SIMILARITY:
            scored.append(SimilarProduct(product=candidate, similarity=value))

    scored.sort(key=lambda item: (-item.similarity, item.product.id))
    return iter(scored[:limit])


def similarity(reference: NutritionalFacts, candidate: NutritionalFacts) -> float:
    """Return the similarity heuristic between two facts records."""
    total = 0.0
    factors = 0
    for nutrient in SIMILARITY_METRICS:
        value_a = reference.value_of(nutrient)
        value_b = candidate.value_of(nutrient)
        if value_a > 0 and value_b > 0:
            total += 1 - abs(value_a - value_b) / max(value_a, value_b)
            factors += 1

    if reference.is_vegan == candidate.is_vegan:
        total += TRAIT_BONUS
    if reference.is_gluten_free == candidate.is_gluten_free:
        total += TRAIT_BONUS
    if reference.is_organic == candidate.is_organic:
        total += TRAIT_BONUS

    if factors == 0:
        return 0.0
    return total / factors
