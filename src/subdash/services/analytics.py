"""Subscription analytics — spend normalization, renewal window, summary stats.

Everything here is a pure function over a snapshot of Subscription records.
The current day is always passed in, never read from the clock.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, localcontext

from subdash.models.stats import StatsSummary
from subdash.models.subscription import Category, Status, Subscription

RENEWAL_WINDOW_DAYS = 7

_CENTS = Decimal("0.01")


def round_money(amount: Decimal) -> Decimal:
    """Round to 2 decimal places, half-up, at any magnitude."""
    amount = Decimal(amount)
    with localcontext() as ctx:
        # quantize needs every integer digit plus the two cents digits
        ctx.prec = max(ctx.prec, amount.adjusted() + 4)
        return amount.quantize(_CENTS, rounding=ROUND_HALF_UP)


def _as_day(now: date | datetime) -> date:
    if isinstance(now, datetime):
        return now.date()
    return now


def days_until_renewal(sub: Subscription, now: date | datetime) -> int | None:
    """Whole calendar days from `now` to the renewal date, or None if there is none."""
    if sub.renewal_date is None:
        return None
    return (sub.renewal_date - _as_day(now)).days


def is_upcoming_renewal(
    sub: Subscription,
    now: date | datetime,
    window_days: int = RENEWAL_WINDOW_DAYS,
) -> bool:
    """True for an active subscription renewing within [0, window_days] days."""
    if sub.status is not Status.ACTIVE:
        return False
    days = days_until_renewal(sub, now)
    if days is None:
        return False
    return 0 <= days <= window_days


def monthly_spending(records: Sequence[Subscription]) -> Decimal:
    """Sum of monthly-equivalent prices of active subscriptions, rounded.

    Currencies are added as-is; nothing is converted.
    """
    total = sum(
        (s.monthly_cost for s in records if s.status is Status.ACTIVE),
        Decimal(0),
    )
    return round_money(total)


def summarize(records: Sequence[Subscription], now: date | datetime) -> StatsSummary:
    """Compute counts, normalized monthly spend, and upcoming renewals."""
    return StatsSummary(
        total=len(records),
        active=sum(1 for s in records if s.status is Status.ACTIVE),
        expired=sum(1 for s in records if s.status is Status.EXPIRED),
        monthly_spending=monthly_spending(records),
        upcoming_renewals=sum(1 for s in records if is_upcoming_renewal(s, now)),
    )


def upcoming_renewals(records: Sequence[Subscription], now: date | datetime) -> list[Subscription]:
    """Subscriptions inside the renewal window, soonest first."""
    due = [s for s in records if is_upcoming_renewal(s, now)]
    # sort is stable, so ties keep source order
    due.sort(key=lambda s: s.renewal_date)
    return due


def recent(records: Sequence[Subscription], limit: int = 6) -> list[Subscription]:
    """The first `limit` subscriptions, in source order."""
    return list(records[: max(limit, 0)])


def spending_by_category(records: Sequence[Subscription]) -> dict[Category, Decimal]:
    """Monthly-equivalent spend of active subscriptions, per category."""
    totals: dict[Category, Decimal] = {}
    for s in records:
        if s.status is not Status.ACTIVE:
            continue
        totals[s.category] = totals.get(s.category, Decimal(0)) + s.monthly_cost
    return {cat: round_money(amount) for cat, amount in totals.items()}
