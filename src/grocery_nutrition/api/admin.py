"""Admin API endpoints with simple token auth."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

from grocery_nutrition.api.models import ReviewRequest  # noqa: TC001
from grocery_nutrition.services.contributions import (
    ContributionAlreadyReviewedError,
    ContributionNotFoundError,
)
from grocery_nutrition.services.products import ProductNotFoundError

if TYPE_CHECKING:
    from grocery_nutrition.containers import AppContainer
    from grocery_nutrition.domain.contributions import Contribution

router = APIRouter(prefix="/admin", tags=["admin"])


def _get_admin_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.admin_token


async def require_admin(
    x_admin_token: str | None = Header(default=None),
    admin_token: str = Depends(_get_admin_token),
) -> None:
    """Ensure requests include a valid admin token."""
    if not x_admin_token or x_admin_token != admin_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


@router.get("/health", dependencies=[Depends(require_admin)])
async def admin_health() -> dict[str, str]:
    """Admin health check endpoint."""
    return {"status": "ok"}


@router.get("/contributions", dependencies=[Depends(require_admin)])
async def list_contributions(request: Request, limit: int = 50) -> dict[str, object]:
    """Return contributions awaiting review."""
    container: AppContainer = request.app.state.container
    pending = container.contribution_service.list_pending(limit)
    return {"contributions": [serialize_contribution(item) for item in pending]}


@router.post(
    "/contributions/{contribution_id}/approve",
    dependencies=[Depends(require_admin)],
)
async def approve_contribution(
    contribution_id: str, payload: ReviewRequest, request: Request
) -> dict[str, object]:
    """Approve a contribution and apply it to the product."""
    container: AppContainer = request.app.state.container
    try:
        reviewed = container.contribution_service.approve(
            contribution_id, payload.admin_id
        )
    except (ContributionNotFoundError, ProductNotFoundError) as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND) from exc
    except ContributionAlreadyReviewedError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT) from exc
    return {"contribution": serialize_contribution(reviewed)}


@router.post(
    "/contributions/{contribution_id}/reject",
    dependencies=[Depends(require_admin)],
)
async def reject_contribution(
    contribution_id: str, payload: ReviewRequest, request: Request
) -> dict[str, object]:
    """Reject a contribution with an optional reason."""
    container: AppContainer = request.app.state.container
    try:
        reviewed = container.contribution_service.reject(
            contribution_id, payload.admin_id, payload.reason
        )
    except ContributionNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND) from exc
    except ContributionAlreadyReviewedError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT) from exc
    return {"contribution": serialize_contribution(reviewed)}


@router.get(
    "/products/{product_id}/nutrition-history",
    dependencies=[Depends(require_admin)],
)
async def nutrition_history(
    product_id: str, request: Request, limit: int = 20
) -> dict[str, object]:
    """Return approved nutrition changes for a product."""
    container: AppContainer = request.app.state.container
    events = container.audit_service.nutrition_history(product_id, limit)
    return {
        "events": [
            {
                "actor_id": event.actor_id,
                "event_type": event.event_type,
                "occurred_at": event.occurred_at.isoformat()
                if event.occurred_at
                else None,
                "before": event.before,
                "after": event.after,
            }
            for event in events
        ]
    }


def serialize_contribution(contribution: Contribution) -> dict[str, object]:
    """Return the JSON shape of a contribution."""
    return {
        "id": contribution.id,
        "product_id": contribution.product_id,
        "user_id": contribution.user_id,
        "status": contribution.status.value,
        "nutritional_data": contribution.facts.to_mapping(),
        "created_at": contribution.created_at.isoformat()
        if contribution.created_at
        else None,
        "reviewed_by": contribution.reviewed_by,
        "reviewed_at": contribution.reviewed_at.isoformat()
        if contribution.reviewed_at
        else None,
        "rejection_reason": contribution.rejection_reason,
    }
