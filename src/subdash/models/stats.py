"""Analytics output and filter query value types."""

from __future__ import annotations

from decimal import Decimal

from pydantic import Field

from subdash.models.base import SubDashModel
from subdash.models.subscription import Category, Status

NO_FILTER = "all"


class StatsSummary(SubDashModel):
    """Aggregate statistics over one snapshot of subscriptions."""

    total: int = 0
    active: int = 0
    expired: int = 0
    monthly_spending: Decimal = Field(default=Decimal("0.00"), alias="monthlySpending")
    upcoming_renewals: int = Field(default=0, alias="upcomingRenewals")


class SubscriptionQuery(SubDashModel):
    """Search term plus optional status/category filters. None means no filter."""

    search_term: str = ""
    status_filter: Status | None = None
    category_filter: Category | None = None

    @classmethod
    def from_options(
        cls,
        search: str | None = None,
        status: str | None = None,
        category: str | None = None,
    ) -> "SubscriptionQuery":
        """Build a query from CLI-style strings, where "all" or empty means no filter."""
        return cls(
            search_term=search or "",
            status_filter=None if not status or status == NO_FILTER else Status(status),
            category_filter=None if not category or category == NO_FILTER else Category(category),
        )

    @property
    def is_identity(self) -> bool:
        return not self.search_term and self.status_filter is None and self.category_filter is None
