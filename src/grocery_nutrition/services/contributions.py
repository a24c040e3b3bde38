"""Review workflow for user-submitted nutritional data."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol

from grocery_nutrition.domain.contributions import Contribution, ContributionStatus
from grocery_nutrition.domain.nutrition import NutritionalFacts, ValidationResult
from grocery_nutrition.services.audit import AuditService
from grocery_nutrition.services.products import ProductService
from grocery_nutrition.services.validation import validate_nutritional_data

_logger = logging.getLogger(__name__)


class InvalidContributionError(ValueError):
    """Raised when submitted nutritional data fails validation."""

    def __init__(self, validation: ValidationResult) -> None:
        super().__init__("; ".join(validation.errors))
        self.validation = validation


class ContributionNotFoundError(LookupError):
    """Raised when a contribution id does not exist."""


class ContributionAlreadyReviewedError(RuntimeError):
    """Raised when reviewing a contribution that is no longer pending."""


class ContributionRepository(Protocol):
    """Persistence interface for nutritional contributions."""

    def create_contribution(
        self, product_id: str, user_id: str, facts: NutritionalFacts
    ) -> Contribution:
        """Create a pending contribution and return it."""

    def get_contribution(self, contribution_id: str) -> Contribution | None:
        """Return a contribution by id, if present."""

    def list_pending(self, limit: int) -> list[Contribution]:
        """Return pending contributions, newest first."""

    def mark_reviewed(  # noqa: PLR0913
        self,
        contribution_id: str,
        status: ContributionStatus,
        reviewed_by: str,
        reviewed_at: datetime,
        rejection_reason: str | None = None,
    ) -> Contribution | None:
        """Set the review outcome if the contribution is still pending.

        Returns None when another reviewer got there first.
        """

    def reopen(self, contribution_id: str) -> None:
        """Put a contribution back into the pending state."""


@dataclass
class ContributionService:
    """Application service for submitting and reviewing contributions."""

    repository: ContributionRepository
    product_service: ProductService
    audit_service: AuditService

    def submit(
        self, product_id: str, user_id: str, facts: NutritionalFacts
    ) -> tuple[Contribution, list[str]]:
        """Validate and store a contribution, returning it with any warnings."""
        self.product_service.get_product(product_id)
        validation = validate_nutritional_data(facts)
        if not validation.is_valid:
            raise InvalidContributionError(validation)
        contribution = self.repository.create_contribution(product_id, user_id, facts)
        _logger.info(
            "Contribution submitted: id=%s product_id=%s warnings=%s",
            contribution.id,
            product_id,
            len(validation.warnings),
        )
        return contribution, validation.warnings

    def list_pending(self, limit: int = 50) -> list[Contribution]:
        """Return contributions awaiting review."""
        return self.repository.list_pending(limit)

    def approve(self, contribution_id: str, admin_id: str) -> Contribution:
        """Apply a contribution's facts to its product and mark it approved.

        The contribution is claimed before the product is written; if the
        product write fails the contribution is reopened and nothing is
        audited.
        """
        contribution = self._get_pending(contribution_id)
        before = self.product_service.get_product(contribution.product_id).nutrition
        reviewed = self._claim(
            contribution_id, ContributionStatus.APPROVED, admin_id, reason=None
        )
        try:
            product = self.product_service.update_nutrition(
                contribution.product_id, contribution.facts
            )
        except Exception:
            _logger.warning(
                "Approval failed, reopening contribution: id=%s", contribution_id
            )
            self.repository.reopen(contribution_id)
            raise
        self.audit_service.record_approval(
            admin_id, contribution, before=before, after=product.nutrition
        )
        _logger.info("Contribution approved: id=%s", contribution_id)
        return reviewed

    def reject(
        self, contribution_id: str, admin_id: str, reason: str | None = None
    ) -> Contribution:
        """Mark a contribution rejected without touching the product."""
        contribution = self._get_pending(contribution_id)
        reviewed = self._claim(
            contribution_id, ContributionStatus.REJECTED, admin_id, reason=reason
        )
        self.audit_service.record_rejection(admin_id, contribution, reason)
        _logger.info("Contribution rejected: id=%s", contribution_id)
        return reviewed

    def _claim(
        self,
        contribution_id: str,
        status: ContributionStatus,
        admin_id: str,
        reason: str | None,
    ) -> Contribution:
        reviewed = self.repository.mark_reviewed(
            contribution_id,
            status,
            reviewed_by=admin_id,
            reviewed_at=datetime.now(tz=UTC),
            rejection_reason=reason,
        )
        if reviewed is None:
            raise ContributionAlreadyReviewedError(contribution_id)
        return reviewed

    def _get_pending(self, contribution_id: str) -> Contribution:
        contribution = self.repository.get_contribution(contribution_id)
        if contribution is None:
            raise ContributionNotFoundError(contribution_id)
        if contribution.status != ContributionStatus.PENDING:
            raise ContributionAlreadyReviewedError(contribution_id)
        return contribution
