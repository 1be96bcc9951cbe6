"""Search and filter over a snapshot of subscriptions."""

from __future__ import annotations

from collections.abc import Sequence

from subdash.models.stats import SubscriptionQuery
from subdash.models.subscription import Subscription


def matches(sub: Subscription, query: SubscriptionQuery) -> bool:
    """True when `sub` satisfies the text, status and category predicates."""
    if query.search_term and query.search_term.lower() not in sub.name.lower():
        return False
    if query.status_filter is not None and sub.status != query.status_filter:
        return False
    if query.category_filter is not None and sub.category != query.category_filter:
        return False
    return True


def filter_subscriptions(
    records: Sequence[Subscription],
    query: SubscriptionQuery,
) -> tuple[Subscription, ...]:
    """Return the records matching `query`, in their original order."""
    return tuple(s for s in records if matches(s, query))
