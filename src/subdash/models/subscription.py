"""Subscription record and its enumerations."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any

from pydantic import Field, field_validator

from subdash.models.base import SubDashModel


class Currency(str, Enum):
    USD = "USD"
    EUR = "EUR"
    INR = "INR"
    YEN = "YEN"


class Frequency(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


class Category(str, Enum):
    SPORTS = "sports"
    ENTERTAINMENT = "entertainment"
    LIFESTYLE = "lifestyle"
    TECHNOLOGY = "technology"
    FINANCE = "finance"
    POLITICS = "politics"
    GAMES = "games"


class Status(str, Enum):
    ACTIVE = "active"
    EXPIRED = "expired"
    CANCELLED = "cancelled"


DAYS_PER_MONTH = 30
WEEKS_PER_MONTH = 4
MONTHS_PER_YEAR = 12


def monthly_equivalent(price: Decimal, frequency: Frequency) -> Decimal:
    """Convert a price billed at `frequency` to its monthly equivalent.

    Linear approximation (30-day and 4-week months), not calendar-exact.
    Any other cadence passes the price through unchanged.
    """
    if frequency == Frequency.DAILY:
        return price * DAYS_PER_MONTH
    elif frequency == Frequency.WEEKLY:
        return price * WEEKS_PER_MONTH
    elif frequency == Frequency.YEARLY:
        return price / MONTHS_PER_YEAR
    return price  # monthly


def parse_calendar_date(value: Any) -> date | None:
    """Reduce an ISO date/datetime string (or date/datetime) to a calendar date."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        return date.fromisoformat(text[:10])


class Subscription(SubDashModel):
    """A subscription record as supplied by the record source."""

    id: str = Field(alias="_id")
    name: str = Field(min_length=1)
    price: Decimal = Field(ge=0)
    currency: Currency
    frequency: Frequency
    category: Category
    status: Status
    renewal_date: date | None = Field(default=None, alias="renewalDate")
    start_date: date | None = Field(default=None, alias="startDate")
    payment_method: str = Field(default="", alias="paymentMethod")
    user_id: str | None = Field(default=None, alias="userId")

    @field_validator("price", mode="before")
    @classmethod
    def _price_from_float(cls, value: Any) -> Any:
        # 9.99 must become Decimal("9.99"), not the binary float expansion
        if isinstance(value, float):
            return str(value)
        return value

    @field_validator("renewal_date", "start_date", mode="before")
    @classmethod
    def _day_granularity(cls, value: Any) -> date | None:
        return parse_calendar_date(value)

    @property
    def is_active(self) -> bool:
        return self.status is Status.ACTIVE

    @property
    def monthly_cost(self) -> Decimal:
        """Price normalized to a monthly equivalent (unrounded)."""
        return monthly_equivalent(self.price, self.frequency)
