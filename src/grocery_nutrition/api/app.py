"""FastAPI application factory."""

import logging

from fastapi import FastAPI, HTTPException, Query, Request, status

from grocery_nutrition.api.admin import router as admin_router
from grocery_nutrition.api.admin import serialize_contribution
from grocery_nutrition.api.models import (
    ComparisonRequest,
    ContributionRequest,
    ProductReviewRequest,
)
from grocery_nutrition.app_logging import configure_logging
from grocery_nutrition.containers import AppContainer
from grocery_nutrition.domain.comparisons import SavedComparison
from grocery_nutrition.domain.nutrition import (
    ComparisonError,
    ComparisonResult,
    MetricLeaders,
)
from grocery_nutrition.domain.products import Product, SimilarProduct
from grocery_nutrition.domain.reviews import Review
from grocery_nutrition.services.catalog import ProductFilters
from grocery_nutrition.services.contributions import InvalidContributionError
from grocery_nutrition.services.products import ProductNotFoundError
from grocery_nutrition.services.provinces import lookup_province, province_options
from grocery_nutrition.services.reviews import InvalidReviewError
from grocery_nutrition.services.saved_comparisons import (
    ComparisonNotFoundError,
    InvalidComparisonError,
)

UNPROCESSABLE_STATUS = 422


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    app = FastAPI()
    app.state.container = container

    app.include_router(admin_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/products")
    async def list_products(  # noqa: PLR0913
        request: Request,
        category: str | None = None,
        min_score: float | None = Query(default=None, ge=0, le=10),
        max_calories: float | None = Query(default=None, ge=0),
        is_vegan: bool = False,
        is_gluten_free: bool = False,
        is_organic: bool = False,
        exclude_allergens: list[str] | None = Query(default=None),
        sort_by: str | None = None,
        order: str = "desc",
        limit: int | None = Query(default=None, ge=1),
    ) -> dict[str, object]:
        """Browse the catalog with nutrition filters."""
        state_container: AppContainer = request.app.state.container
        filters = ProductFilters(
            category=category,
            min_score=min_score,
            max_calories=max_calories,
            is_vegan=is_vegan,
            is_gluten_free=is_gluten_free,
            is_organic=is_organic,
            exclude_allergens=exclude_allergens or [],
        )
        products = state_container.product_service.browse(
            filters, sort_by=sort_by, order=order, limit=limit
        )
        return {"products": [_serialize_product(product) for product in products]}

    @app.get("/products/{product_id}/nutrition")
    async def product_nutrition(
        product_id: str,
        request: Request,
        portion_g: float | None = Query(default=None, gt=0),
    ) -> dict[str, object]:
        """Return the nutrition profile of a product."""
        state_container: AppContainer = request.app.state.container
        try:
            return state_container.product_service.nutrition_profile(
                product_id, portion_g
            )
        except ProductNotFoundError as exc:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND) from exc

    @app.get("/products/{product_id}/similar")
    async def similar_products(
        product_id: str,
        request: Request,
        limit: int | None = Query(default=None, ge=1),
    ) -> dict[str, object]:
        """Return products with a similar nutritional profile."""
        state_container: AppContainer = request.app.state.container
        try:
            similar = state_container.product_service.similar_products(
                product_id, limit
            )
        except ProductNotFoundError as exc:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND) from exc
        return {"products": [_serialize_similar(item) for item in similar]}

    @app.get("/compare")
    async def compare_products(a: str, b: str, request: Request) -> dict[str, object]:
        """Compare two products metric by metric."""
        state_container: AppContainer = request.app.state.container
        result = state_container.product_service.compare_products(a, b)
        return _serialize_comparison(result)

    @app.post(
        "/products/{product_id}/contributions",
        status_code=status.HTTP_201_CREATED,
    )
    async def submit_contribution(
        product_id: str, payload: ContributionRequest, request: Request
    ) -> dict[str, object]:
        """Submit nutritional data for admin review."""
        state_container: AppContainer = request.app.state.container
        try:
            contribution, warnings = state_container.contribution_service.submit(
                product_id, payload.user_id, payload.nutritional_data.to_facts()
            )
        except ProductNotFoundError as exc:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND) from exc
        except InvalidContributionError as exc:
            logger.info("Rejected invalid contribution for product %s", product_id)
            raise HTTPException(
                status_code=UNPROCESSABLE_STATUS,
                detail={
                    "errors": exc.validation.errors,
                    "warnings": exc.validation.warnings,
                },
            ) from exc
        return {
            "contribution": serialize_contribution(contribution),
            "warnings": warnings,
        }

    @app.get("/products/{product_id}/reviews")
    async def list_reviews(product_id: str, request: Request) -> dict[str, object]:
        """Return visible reviews of a product."""
        state_container: AppContainer = request.app.state.container
        try:
            reviews = state_container.review_service.list_reviews(product_id)
        except ProductNotFoundError as exc:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND) from exc
        return {"reviews": [_serialize_review(review) for review in reviews]}

    @app.post(
        "/products/{product_id}/reviews",
        status_code=status.HTTP_201_CREATED,
    )
    async def add_review(
        product_id: str, payload: ProductReviewRequest, request: Request
    ) -> dict[str, object]:
        """Add a review and return the product's refreshed rating."""
        state_container: AppContainer = request.app.state.container
        try:
            review, rating = state_container.review_service.add_review(
                product_id,
                payload.user_id,
                payload.rating,
                username=payload.username,
                comment=payload.comment,
            )
        except ProductNotFoundError as exc:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND) from exc
        except InvalidReviewError as exc:
            raise HTTPException(
                status_code=UNPROCESSABLE_STATUS, detail=str(exc)
            ) from exc
        return {
            "review": _serialize_review(review),
            "average_rating": rating.average_rating,
            "total_reviews": rating.total_reviews,
        }

    @app.post("/comparisons", status_code=status.HTTP_201_CREATED)
    async def save_comparison(
        payload: ComparisonRequest, request: Request
    ) -> dict[str, object]:
        """Save a comparison of two or more products."""
        state_container: AppContainer = request.app.state.container
        try:
            comparison = state_container.comparison_service.save(
                payload.user_id, payload.product_ids
            )
        except ProductNotFoundError as exc:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND) from exc
        except InvalidComparisonError as exc:
            raise HTTPException(
                status_code=UNPROCESSABLE_STATUS, detail=str(exc)
            ) from exc
        return {"comparison": _serialize_saved_comparison(comparison)}

    @app.get("/comparisons/{comparison_id}")
    async def get_comparison(
        comparison_id: str, request: Request
    ) -> dict[str, object]:
        """Return a saved comparison with per-metric leaders."""
        state_container: AppContainer = request.app.state.container
        service = state_container.comparison_service
        try:
            comparison = service.get(comparison_id)
        except ComparisonNotFoundError as exc:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND) from exc
        return {
            "comparison": _serialize_saved_comparison(comparison),
            "leaders": [
                _serialize_leaders(item) for item in service.leaders(comparison)
            ],
        }

    @app.get("/users/{user_id}/comparisons")
    async def list_user_comparisons(
        user_id: str, request: Request
    ) -> dict[str, object]:
        """Return comparisons saved by a user."""
        state_container: AppContainer = request.app.state.container
        comparisons = state_container.comparison_service.list_for_user(user_id)
        return {
            "comparisons": [
                _serialize_saved_comparison(item) for item in comparisons
            ]
        }

    @app.get("/stats")
    async def platform_stats(request: Request) -> dict[str, object]:
        """Return catalog-wide counters."""
        state_container: AppContainer = request.app.state.container
        stats = state_container.stats_service.platform_stats()
        return {
            "total_products": stats.total_products,
            "total_contributions": stats.total_contributions,
            "total_reviews": stats.total_reviews,
            "last_updated": stats.last_updated.isoformat(),
        }

    @app.get("/provinces")
    async def list_provinces() -> dict[str, object]:
        """Return province codes and names for filter menus."""
        return {
            "provinces": [
                {"code": code, "name": name} for code, name in province_options()
            ]
        }

    @app.get("/provinces/{code}")
    async def resolve_province(code: str) -> dict[str, object]:
        """Resolve a province code to its display name."""
        resolution = lookup_province(code)
        return {
            "code": resolution.code,
            "name": resolution.name,
            "known": resolution.known,
        }

    return app


def _serialize_product(product: Product) -> dict[str, object]:
    return {
        "id": product.id,
        "name": product.name,
        "brand": product.brand,
        "category": product.category,
        "price": product.price,
        "has_nutritional_info": product.has_nutritional_info,
        "score": product.nutrition.score if product.nutrition else None,
        "average_rating": product.average_rating,
        "total_reviews": product.total_reviews,
        "updated_at": product.updated_at.isoformat() if product.updated_at else None,
    }


def _serialize_similar(item: SimilarProduct) -> dict[str, object]:
    return {**_serialize_product(item.product), "similarity": item.similarity}


def _serialize_comparison(
    result: ComparisonResult | ComparisonError,
) -> dict[str, object]:
    if isinstance(result, ComparisonError):
        return {"error": result.message}
    return {
        "winner": result.winner.value,
        "score_a": result.score_a,
        "score_b": result.score_b,
        "total_metrics": result.total_metrics,
        "message": result.message,
        "metrics": {
            metric.metric.value: {
                "value_a": metric.value_a,
                "value_b": metric.value_b,
                "winner": metric.winner.value if metric.winner else None,
                "absolute_diff": metric.absolute_diff,
                "percent_diff": metric.percent_diff,
            }
            for metric in result.metrics
        },
    }


def _serialize_review(review: Review) -> dict[str, object]:
    return {
        "id": review.id,
        "product_id": review.product_id,
        "user_id": review.user_id,
        "username": review.username,
        "rating": review.rating,
        "comment": review.comment,
        "helpful": review.helpful,
        "created_at": review.created_at.isoformat() if review.created_at else None,
    }


def _serialize_saved_comparison(comparison: SavedComparison) -> dict[str, object]:
    return {
        "id": comparison.id,
        "user_id": comparison.user_id,
        "product_ids": list(comparison.product_ids),
        "shared": comparison.shared,
        "public": comparison.public,
        "created_at": comparison.created_at.isoformat()
        if comparison.created_at
        else None,
    }


def _serialize_leaders(leaders: MetricLeaders) -> dict[str, object]:
    return {
        "metric": leaders.metric.value,
        "best": {"product_id": leaders.best[0], "value": leaders.best[1]},
        "worst": {"product_id": leaders.worst[0], "value": leaders.worst[1]},
    }
