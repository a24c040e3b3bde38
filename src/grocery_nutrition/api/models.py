"""Pydantic models for API request payloads."""

from pydantic import BaseModel, ConfigDict, Field

from grocery_nutrition.domain.nutrition import NutritionalFacts


class NutritionalFactsPayload(BaseModel):
    """Nutritional facts per 100 g as submitted by clients."""

    model_config = ConfigDict(populate_by_name=True)

    calories: float = Field(default=0, ge=0)
    proteins: float = Field(default=0, ge=0)
    carbs: float = Field(default=0, ge=0)
    fats: float = Field(default=0, ge=0)
    fiber: float = Field(default=0, ge=0)
    sodium: float = Field(default=0, ge=0)
    sugar: float = Field(default=0, ge=0)
    saturated_fats: float = Field(default=0, ge=0, alias="saturatedFats")
    ingredients: list[str] = Field(default_factory=list)
    allergens: list[str] = Field(default_factory=list)
    is_vegan: bool = Field(default=False, alias="isVegan")
    is_vegetarian: bool = Field(default=False, alias="isVegetarian")
    is_gluten_free: bool = Field(default=False, alias="isGlutenFree")
    is_organic: bool = Field(default=False, alias="isOrganic")
    source: str | None = None

    def to_facts(self) -> NutritionalFacts:
        """Convert the payload into a domain record."""
        return NutritionalFacts(
            calories=self.calories,
            proteins=self.proteins,
            carbs=self.carbs,
            fats=self.fats,
            fiber=self.fiber,
            sodium=self.sodium,
            sugar=self.sugar,
            saturated_fats=self.saturated_fats,
            ingredients=tuple(self.ingredients),
            allergens=frozenset(self.allergens),
            is_vegan=self.is_vegan,
            is_vegetarian=self.is_vegetarian,
            is_gluten_free=self.is_gluten_free,
            is_organic=self.is_organic,
            source=self.source,
        )


class ContributionRequest(BaseModel):
    """Nutritional data contributed by a user."""

    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(alias="userId", min_length=1)
    nutritional_data: NutritionalFactsPayload = Field(alias="nutritionalData")


class ReviewRequest(BaseModel):
    """Admin decision on a pending contribution."""

    model_config = ConfigDict(populate_by_name=True)

    admin_id: str = Field(alias="adminId", min_length=1)
    reason: str | None = None


class ProductReviewRequest(BaseModel):
    """A user's review of a product."""

    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(alias="userId", min_length=1)
    username: str | None = None
    rating: int
    comment: str | None = None


class ComparisonRequest(BaseModel):
    """Products a user wants to keep as a comparison."""

    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(alias="userId", min_length=1)
    product_ids: list[str] = Field(alias="productIds")
