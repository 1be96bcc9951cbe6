"""Field-level validation for new subscription input.

Mirrors the constraints of the create-subscription form: each field gets at
most one message, and an empty mapping means the input is valid.
"""

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation
from typing import Any

from subdash.core.exceptions import ValidationError
from subdash.models.subscription import Category, Currency, Frequency, parse_calendar_date

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 100

_LEADING_NUMBER = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def parse_price(value: Any) -> Decimal:
    """Parse a price the way the form does.

    Like `parseFloat(text) || 0`: the leading number is used and trailing
    junk ignored ("12abc" is 12); no leading number at all counts as 0.
    """
    if isinstance(value, bool) or value is None:
        return Decimal(0)
    match = _LEADING_NUMBER.match(str(value))
    if match is None:
        return Decimal(0)
    try:
        price = Decimal(match.group(1))
    except InvalidOperation:
        return Decimal(0)
    if not price.is_finite():
        return Decimal(0)
    return price


def _check_enum(value: Any, enum_cls: type, message: str) -> str | None:
    try:
        enum_cls(value)
    except ValueError:
        return message
    return None


def validate_subscription_input(data: dict[str, Any]) -> dict[str, str]:
    """Return a mapping of field name to violation message."""
    errors: dict[str, str] = {}

    # length is checked on the raw text; only the payload is stripped
    name = str(data.get("name") or "")
    if len(name) < NAME_MIN_LENGTH:
        errors["name"] = f"Name must be at least {NAME_MIN_LENGTH} characters"
    elif len(name) > NAME_MAX_LENGTH:
        errors["name"] = f"Name must be less than {NAME_MAX_LENGTH} characters"

    if parse_price(data.get("price")) < 0:
        errors["price"] = "Price must be positive"

    msg = _check_enum(data.get("currency"), Currency, "Invalid currency")
    if msg:
        errors["currency"] = msg
    msg = _check_enum(data.get("frequency"), Frequency, "Invalid frequency")
    if msg:
        errors["frequency"] = msg
    msg = _check_enum(data.get("category"), Category, "Invalid category")
    if msg:
        errors["category"] = msg

    if not str(data.get("paymentMethod") or "").strip():
        errors["paymentMethod"] = "Payment method is required"

    start = data.get("startDate")
    if start is None or start == "":
        errors["startDate"] = "Start date is required"
    else:
        try:
            parse_calendar_date(start)
        except (ValueError, TypeError):
            errors["startDate"] = "Start date must be a valid date"

    return errors


def build_subscription_payload(data: dict[str, Any]) -> dict[str, Any]:
    """Validate and normalize form input into the wire payload for POST /subscriptions.

    Raises ValidationError carrying the field mapping when anything is wrong.
    """
    errors = validate_subscription_input(data)
    if errors:
        raise ValidationError(errors)

    start = parse_calendar_date(data["startDate"])
    return {
        "name": str(data["name"]).strip(),
        "price": float(parse_price(data.get("price"))),
        "currency": Currency(data["currency"]).value,
        "frequency": Frequency(data["frequency"]).value,
        "category": Category(data["category"]).value,
        "paymentMethod": str(data["paymentMethod"]).strip(),
        "startDate": start.isoformat() if start else None,
    }
