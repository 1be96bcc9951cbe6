"""Tests for spend normalization, renewal window and summary stats."""

from datetime import date, datetime, timedelta
from decimal import Decimal

import pytest

from subdash.models.stats import StatsSummary
from subdash.models.subscription import Category, Frequency, Subscription, monthly_equivalent
from subdash.services.analytics import (
    days_until_renewal,
    is_upcoming_renewal,
    monthly_spending,
    recent,
    round_money,
    spending_by_category,
    summarize,
    upcoming_renewals,
)

TODAY = date(2024, 5, 10)


def _sub(name="Netflix", **overrides) -> Subscription:
    data = {
        "id": f"sub-{name.lower()}",
        "name": name,
        "price": "10.00",
        "currency": "INR",
        "frequency": "monthly",
        "category": "entertainment",
        "status": "active",
    }
    data.update(overrides)
    return Subscription(**data)


class TestMonthlyEquivalent:
    def test_yearly(self):
        assert monthly_equivalent(Decimal("12.00"), Frequency.YEARLY) == Decimal("1.00")

    def test_daily(self):
        assert monthly_equivalent(Decimal("1.00"), Frequency.DAILY) == Decimal("30.00")

    def test_weekly(self):
        assert monthly_equivalent(Decimal("1.00"), Frequency.WEEKLY) == Decimal("4.00")

    def test_monthly(self):
        assert monthly_equivalent(Decimal("1.00"), Frequency.MONTHLY) == Decimal("1.00")

    def test_unknown_cadence_passes_through(self):
        assert monthly_equivalent(Decimal("5"), "fortnightly") == Decimal("5")

    def test_model_property(self):
        assert _sub(price="120", frequency="yearly").monthly_cost == Decimal("10")


class TestSummarize:
    def test_empty(self):
        summary = summarize([], TODAY)
        assert summary == StatsSummary()
        assert summary.total == 0
        assert summary.monthly_spending == Decimal("0")
        assert summary.upcoming_renewals == 0

    def test_scenario(self):
        records = [
            _sub("Music", price=9.99, frequency="monthly"),
            _sub("Cloud", price=99, frequency="yearly"),
            _sub("Gym", price=5, frequency="weekly", status="cancelled"),
        ]
        summary = summarize(records, TODAY)
        assert summary.total == 3
        assert summary.active == 2
        assert summary.expired == 0
        assert summary.monthly_spending == Decimal("18.24")

    def test_counts_by_status(self):
        records = [
            _sub("A"),
            _sub("B", status="expired"),
            _sub("C", status="expired"),
            _sub("D", status="cancelled"),
        ]
        summary = summarize(records, TODAY)
        assert (summary.total, summary.active, summary.expired) == (4, 1, 2)

    def test_inactive_records_do_not_spend(self):
        records = [_sub("A", status="expired", price="50"), _sub("B", status="cancelled", price="50")]
        assert summarize(records, TODAY).monthly_spending == Decimal("0")

    def test_always_two_decimal_places(self):
        summary = summarize([_sub(price="0.333")], TODAY)
        assert summary.monthly_spending == Decimal("0.33")
        assert summary.monthly_spending.as_tuple().exponent == -2

        whole = summarize([_sub(price="7")], TODAY)
        assert str(whole.monthly_spending) == "7.00"

    def test_huge_price_still_rounds(self):
        summary = summarize([_sub(price=Decimal("1e27"))], TODAY)
        assert summary.monthly_spending == Decimal("1e27")
        assert summary.monthly_spending.as_tuple().exponent == -2
        assert round_money(Decimal("123456789012345678901234567890.125")) == Decimal(
            "123456789012345678901234567890.13"
        )

    def test_rounds_half_up(self):
        assert summarize([_sub(price="0.125")], TODAY).monthly_spending == Decimal("0.13")
        assert round_money(Decimal("2.675")) == Decimal("2.68")

    def test_yearly_sum_rounded_once(self):
        # 10/12 + 10/12 = 1.6666..., rounded after summing
        records = [_sub("A", price="10", frequency="yearly"), _sub("B", price="10", frequency="yearly")]
        assert summarize(records, TODAY).monthly_spending == Decimal("1.67")

    def test_adding_active_record_never_decreases_spend(self):
        records = [_sub("A", price="3.50", frequency="weekly"), _sub("B", price="100", frequency="yearly")]
        before = summarize(records, TODAY).monthly_spending
        after = summarize(records + [_sub("C", price="0.01", frequency="yearly")], TODAY).monthly_spending
        assert after >= before

    def test_currencies_are_added_without_conversion(self):
        records = [_sub("A", price="10", currency="USD"), _sub("B", price="10", currency="INR")]
        assert monthly_spending(records) == Decimal("20.00")

    def test_input_is_not_mutated(self):
        records = (_sub("A", renewalDate="2024-05-12"), _sub("B", status="expired"))
        snapshot = [r.model_dump() for r in records]
        summarize(records, TODAY)
        assert [r.model_dump() for r in records] == snapshot


class TestRenewalWindow:
    @pytest.mark.parametrize(
        "offset,expected",
        [(-1, False), (0, True), (1, True), (7, True), (8, False)],
    )
    def test_boundaries(self, offset, expected):
        sub = _sub(renewalDate=TODAY + timedelta(days=offset))
        assert is_upcoming_renewal(sub, TODAY) is expected
        assert summarize([sub], TODAY).upcoming_renewals == int(expected)

    def test_missing_renewal_date_is_excluded(self):
        sub = _sub()
        assert days_until_renewal(sub, TODAY) is None
        assert not is_upcoming_renewal(sub, TODAY)

    def test_inactive_is_excluded(self):
        for status in ("expired", "cancelled"):
            sub = _sub(status=status, renewalDate=TODAY)
            assert not is_upcoming_renewal(sub, TODAY)

    def test_datetime_now_uses_calendar_day(self):
        late_evening = datetime(2024, 5, 10, 23, 59)
        sub = _sub(renewalDate="2024-05-17")
        assert days_until_renewal(sub, late_evening) == 7
        assert is_upcoming_renewal(sub, late_evening)

    def test_renewal_datetime_string_is_truncated(self):
        sub = _sub(renewalDate="2024-05-17T18:30:00.000Z")
        assert sub.renewal_date == date(2024, 5, 17)
        assert is_upcoming_renewal(sub, TODAY)

    def test_upcoming_renewals_sorted_soonest_first(self):
        records = [
            _sub("Later", renewalDate="2024-05-16"),
            _sub("Overdue", renewalDate="2024-05-01"),
            _sub("Soon", renewalDate="2024-05-11"),
            _sub("Far", renewalDate="2024-06-30"),
        ]
        assert [s.name for s in upcoming_renewals(records, TODAY)] == ["Soon", "Later"]


class TestSupplementaryViews:
    def test_recent_keeps_source_order(self):
        records = [_sub(str(i)) for i in range(8)]
        assert [s.name for s in recent(records)] == ["0", "1", "2", "3", "4", "5"]
        assert recent(records, limit=0) == []

    def test_spending_by_category(self):
        records = [
            _sub("Netflix", price="10"),
            _sub("Prime", price="120", frequency="yearly"),
            _sub("Gym", price="2", frequency="weekly", category="lifestyle"),
            _sub("Old", price="99", category="games", status="expired"),
        ]
        by_cat = spending_by_category(records)
        assert by_cat == {Category.ENTERTAINMENT: Decimal("20.00"), Category.LIFESTYLE: Decimal("8.00")}
        assert Category.GAMES not in by_cat
