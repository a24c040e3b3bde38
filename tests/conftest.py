"""Shared test fixtures."""

from collections.abc import Sequence
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from uuid import uuid4

import pytest

from grocery_nutrition.config import Settings
from grocery_nutrition.containers import AppContainer
from grocery_nutrition.domain.audit import AuditEvent
from grocery_nutrition.domain.comparisons import SavedComparison
from grocery_nutrition.domain.contributions import Contribution, ContributionStatus
from grocery_nutrition.domain.nutrition import NutritionalFacts
from grocery_nutrition.domain.products import Product
from grocery_nutrition.domain.reviews import ProductRating, Review
from grocery_nutrition.services.audit import AuditRepository, AuditService
from grocery_nutrition.services.contributions import (
    ContributionRepository,
    ContributionService,
)
from grocery_nutrition.services.products import ProductRepository, ProductService
from grocery_nutrition.services.reviews import ReviewRepository, ReviewService
from grocery_nutrition.services.saved_comparisons import (
    ComparisonRepository,
    SavedComparisonService,
)
from grocery_nutrition.services.stats import StatsRepository, StatsService

YOGURT_FACTS = NutritionalFacts(
    calories=60,
    proteins=10,
    carbs=4,
    fats=0.5,
    fiber=0,
    sodium=50,
    sugar=4,
    saturated_fats=0.3,
    allergens=frozenset({"milk"}),
    is_vegetarian=True,
)


def make_product(  # noqa: PLR0913
    product_id: str,
    *,
    name: str = "Product",
    brand: str = "Brand",
    category: str = "dairy",
    nutrition: NutritionalFacts | None = YOGURT_FACTS,
    updated_at: datetime | None = None,
) -> Product:
    """Build a product with sensible defaults."""
    return Product(
        id=product_id,
        name=name,
        brand=brand,
        category=category,
        nutrition=nutrition,
        updated_at=updated_at,
    )


@dataclass
class InMemoryProductRepository(ProductRepository):
    """In-memory product repository for tests."""

    products: dict[str, Product] = field(default_factory=dict)
    saved: list[tuple[str, NutritionalFacts]] = field(default_factory=list)

    def add(self, product: Product) -> Product:
        self.products[product.id] = product
        return product

    def get_product(self, product_id: str) -> Product | None:
        return self.products.get(product_id)

    def list_products(self, category: str | None, limit: int) -> list[Product]:
        results = [
            product
            for product in self.products.values()
            if category is None or product.category == category
        ]
        return results[:limit]

    def save_nutrition(self, product_id: str, facts: NutritionalFacts) -> Product:
        self.saved.append((product_id, facts))
        updated = replace(
            self.products[product_id],
            nutrition=facts,
            updated_at=datetime.now(tz=UTC),
        )
        self.products[product_id] = updated
        return updated

    def save_rating(self, rating: ProductRating) -> Product:
        updated = replace(
            self.products[rating.product_id],
            average_rating=rating.average_rating,
            total_reviews=rating.total_reviews,
        )
        self.products[rating.product_id] = updated
        return updated


@dataclass
class InMemoryContributionRepository(ContributionRepository):
    """In-memory contribution repository for tests."""

    contributions: dict[str, Contribution] = field(default_factory=dict)

    def create_contribution(
        self, product_id: str, user_id: str, facts: NutritionalFacts
    ) -> Contribution:
        contribution = Contribution(
            id=str(uuid4()),
            product_id=product_id,
            user_id=user_id,
            facts=facts,
            status=ContributionStatus.PENDING,
            created_at=datetime.now(tz=UTC),
        )
        self.contributions[contribution.id] = contribution
        return contribution

    def get_contribution(self, contribution_id: str) -> Contribution | None:
        return self.contributions.get(contribution_id)

    def list_pending(self, limit: int) -> list[Contribution]:
        pending = [
            item
            for item in self.contributions.values()
            if item.status == ContributionStatus.PENDING
        ]
        return pending[:limit]

    def mark_reviewed(  # noqa: PLR0913
        self,
        contribution_id: str,
        status: ContributionStatus,
        reviewed_by: str,
        reviewed_at: datetime,
        rejection_reason: str | None = None,
    ) -> Contribution | None:
        current = self.contributions[contribution_id]
        if current.status != ContributionStatus.PENDING:
            return None
        updated = replace(
            current,
            status=status,
            reviewed_by=reviewed_by,
            reviewed_at=reviewed_at,
            rejection_reason=rejection_reason,
        )
        self.contributions[contribution_id] = updated
        return updated

    def reopen(self, contribution_id: str) -> None:
        self.contributions[contribution_id] = replace(
            self.contributions[contribution_id],
            status=ContributionStatus.PENDING,
            reviewed_by=None,
            reviewed_at=None,
            rejection_reason=None,
        )


@dataclass
class InMemoryAuditRepository(AuditRepository):
    """In-memory audit repository for tests."""

    events: list[AuditEvent] = field(default_factory=list)

    def create_event(self, event: AuditEvent) -> None:
        self.events.append(event)

    def list_events(
        self, entity_type: str, entity_id: str, limit: int
    ) -> list[AuditEvent]:
        matching = [
            event
            for event in reversed(self.events)
            if event.entity_type == entity_type and event.entity_id == entity_id
        ]
        return matching[:limit]


@dataclass
class InMemoryReviewRepository(ReviewRepository):
    """In-memory review repository for tests."""

    reviews: list[Review] = field(default_factory=list)

    def create_review(  # noqa: PLR0913
        self,
        product_id: str,
        user_id: str,
        rating: int,
        username: str | None,
        comment: str | None,
    ) -> Review:
        review = Review(
            id=str(uuid4()),
            product_id=product_id,
            user_id=user_id,
            rating=rating,
            username=username,
            comment=comment,
            created_at=datetime.now(tz=UTC),
        )
        self.reviews.append(review)
        return review

    def list_reviews(self, product_id: str) -> list[Review]:
        return [
            review
            for review in reversed(self.reviews)
            if review.product_id == product_id and not review.reported
        ]


@dataclass
class InMemoryComparisonRepository(ComparisonRepository):
    """In-memory saved comparison repository for tests."""

    comparisons: dict[str, SavedComparison] = field(default_factory=dict)

    def create_comparison(
        self, user_id: str, product_ids: Sequence[str]
    ) -> SavedComparison:
        comparison = SavedComparison(
            id=str(uuid4()),
            user_id=user_id,
            product_ids=tuple(product_ids),
            created_at=datetime.now(tz=UTC),
        )
        self.comparisons[comparison.id] = comparison
        return comparison

    def get_comparison(self, comparison_id: str) -> SavedComparison | None:
        return self.comparisons.get(comparison_id)

    def list_for_user(self, user_id: str) -> list[SavedComparison]:
        return [
            item
            for item in reversed(self.comparisons.values())
            if item.user_id == user_id
        ]


@dataclass
class InMemoryStatsRepository(StatsRepository):
    """Counts rows held by the other in-memory repositories."""

    products: InMemoryProductRepository
    contributions: InMemoryContributionRepository
    reviews: InMemoryReviewRepository

    def count_products_with_nutrition(self) -> int:
        return sum(
            1
            for product in self.products.products.values()
            if product.has_nutritional_info
        )

    def count_approved_contributions(self) -> int:
        return sum(
            1
            for item in self.contributions.contributions.values()
            if item.status == ContributionStatus.APPROVED
        )

    def count_reviews(self) -> int:
        return len(self.reviews.reviews)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="service-key",
        admin_token="admin-token",
    )


@pytest.fixture
def product_repository() -> InMemoryProductRepository:
    return InMemoryProductRepository()


@pytest.fixture
def product_service(product_repository: InMemoryProductRepository) -> ProductService:
    return ProductService(product_repository)


@pytest.fixture
def audit_repository() -> InMemoryAuditRepository:
    return InMemoryAuditRepository()


@pytest.fixture
def audit_service(audit_repository: InMemoryAuditRepository) -> AuditService:
    return AuditService(audit_repository)


@pytest.fixture
def contribution_repository() -> InMemoryContributionRepository:
    return InMemoryContributionRepository()


@pytest.fixture
def contribution_service(
    contribution_repository: InMemoryContributionRepository,
    product_service: ProductService,
    audit_service: AuditService,
) -> ContributionService:
    return ContributionService(
        repository=contribution_repository,
        product_service=product_service,
        audit_service=audit_service,
    )


@pytest.fixture
def review_repository() -> InMemoryReviewRepository:
    return InMemoryReviewRepository()


@pytest.fixture
def review_service(
    review_repository: InMemoryReviewRepository, product_service: ProductService
) -> ReviewService:
    return ReviewService(review_repository, product_service)


@pytest.fixture
def comparison_service(product_service: ProductService) -> SavedComparisonService:
    return SavedComparisonService(InMemoryComparisonRepository(), product_service)


@pytest.fixture
def stats_service(
    product_repository: InMemoryProductRepository,
    contribution_repository: InMemoryContributionRepository,
    review_repository: InMemoryReviewRepository,
) -> StatsService:
    return StatsService(
        InMemoryStatsRepository(
            products=product_repository,
            contributions=contribution_repository,
            reviews=review_repository,
        )
    )


@pytest.fixture
def container(  # noqa: PLR0913
    settings: Settings,
    product_service: ProductService,
    contribution_service: ContributionService,
    audit_service: AuditService,
    review_service: ReviewService,
    comparison_service: SavedComparisonService,
    stats_service: StatsService,
) -> AppContainer:
    return AppContainer(
        settings=settings,
        product_service=product_service,
        contribution_service=contribution_service,
        audit_service=audit_service,
        review_service=review_service,
        comparison_service=comparison_service,
        stats_service=stats_service,
    )
