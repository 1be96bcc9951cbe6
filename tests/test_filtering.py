"""Tests for the search/status/category filter."""

import pytest

from subdash.models.stats import SubscriptionQuery
from subdash.models.subscription import Category, Status, Subscription
from subdash.services.filtering import filter_subscriptions, matches


def _sub(name, status="active", category="entertainment") -> Subscription:
    return Subscription(
        id=f"sub-{name.lower()}",
        name=name,
        price="9.99",
        currency="USD",
        frequency="monthly",
        status=status,
        category=category,
    )


@pytest.fixture
def records():
    return (
        _sub("Netflix"),
        _sub("Gym", status="cancelled", category="lifestyle"),
        _sub("Internet Radio", category="entertainment", status="expired"),
        _sub("Chess.com", category="games"),
        _sub("FT Weekly", category="finance"),
    )


class TestFilter:
    def test_identity_query_returns_everything_in_order(self, records):
        assert filter_subscriptions(records, SubscriptionQuery()) == records
        assert SubscriptionQuery().is_identity

    def test_search_status_intersection(self):
        records = [_sub("Netflix"), _sub("Gym", status="cancelled", category="lifestyle")]
        query = SubscriptionQuery(search_term="net", status_filter=Status.ACTIVE)
        assert filter_subscriptions(records, query) == (records[0],)

    def test_search_is_case_insensitive(self, records):
        result = filter_subscriptions(records, SubscriptionQuery(search_term="NET"))
        assert [s.name for s in result] == ["Netflix", "Internet Radio"]

    def test_search_is_plain_substring(self, records):
        result = filter_subscriptions(records, SubscriptionQuery(search_term=".com"))
        assert [s.name for s in result] == ["Chess.com"]

    def test_status_filter(self, records):
        result = filter_subscriptions(records, SubscriptionQuery(status_filter=Status.ACTIVE))
        assert [s.name for s in result] == ["Netflix", "Chess.com", "FT Weekly"]

    def test_category_filter(self, records):
        result = filter_subscriptions(records, SubscriptionQuery(category_filter=Category.ENTERTAINMENT))
        assert [s.name for s in result] == ["Netflix", "Internet Radio"]

    def test_all_three_predicates_must_hold(self, records):
        query = SubscriptionQuery(
            search_term="net",
            status_filter=Status.EXPIRED,
            category_filter=Category.ENTERTAINMENT,
        )
        assert [s.name for s in filter_subscriptions(records, query)] == ["Internet Radio"]

    def test_no_match(self, records):
        assert filter_subscriptions(records, SubscriptionQuery(search_term="spotify")) == ()

    def test_empty_input(self):
        assert filter_subscriptions([], SubscriptionQuery(search_term="x")) == ()

    def test_matches_single_record(self):
        assert matches(_sub("Netflix"), SubscriptionQuery(search_term="flix"))
        assert not matches(_sub("Netflix"), SubscriptionQuery(category_filter=Category.GAMES))


class TestQueryFromOptions:
    def test_all_means_no_filter(self):
        query = SubscriptionQuery.from_options(search="", status="all", category="all")
        assert query.status_filter is None
        assert query.category_filter is None
        assert query.is_identity

    def test_none_means_no_filter(self):
        assert SubscriptionQuery.from_options().is_identity

    def test_concrete_values(self):
        query = SubscriptionQuery.from_options(search="gym", status="cancelled", category="lifestyle")
        assert query.search_term == "gym"
        assert query.status_filter is Status.CANCELLED
        assert query.category_filter is Category.LIFESTYLE

    def test_unknown_status_rejected(self):
        with pytest.raises(ValueError):
            SubscriptionQuery.from_options(status="paused")
