"""Dashboard service — fetches a snapshot and runs analytics over it."""

from __future__ import annotations

from datetime import date
from typing import Any

from subdash.core.session import Session
from subdash.models.stats import SubscriptionQuery
from subdash.models.subscription import Subscription
from subdash.services import analytics
from subdash.services.api_client import SubscriptionAPI
from subdash.services.filtering import filter_subscriptions
from subdash.services.validation import build_subscription_payload


class DashboardService:
    """Business logic behind the stats, listing and add commands."""

    def __init__(self, api: SubscriptionAPI, session: Session) -> None:
        self.api = api
        self.session = session

    def snapshot(self) -> tuple[Subscription, ...]:
        """Fetch the signed-in user's subscriptions."""
        return self.api.list_subscriptions(self.session.user.id)

    def get_overview(self, today: date, recent_limit: int = 6) -> dict[str, Any]:
        """Stats, renewal alerts and recent subscriptions over one snapshot."""
        subs = self.snapshot()
        return {
            "stats": analytics.summarize(subs, today),
            "upcoming": analytics.upcoming_renewals(subs, today),
            "recent": analytics.recent(subs, limit=recent_limit),
            "has_subscriptions": bool(subs),
        }

    def search(self, query: SubscriptionQuery) -> tuple[tuple[Subscription, ...], int]:
        """Return (matching subscriptions, size of the unfiltered snapshot)."""
        subs = self.snapshot()
        return filter_subscriptions(subs, query), len(subs)

    def get_spending_breakdown(self) -> dict[str, Any]:
        subs = self.snapshot()
        return {
            "monthly_total": analytics.monthly_spending(subs),
            "by_category": analytics.spending_by_category(subs),
        }

    def add_subscription(self, data: dict[str, Any]) -> Subscription:
        """Validate form input and create the subscription remotely."""
        payload = build_subscription_payload(data)
        return self.api.create_subscription(self.session.user.id, payload)
