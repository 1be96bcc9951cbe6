"""Subscription listing, search and creation commands."""

from __future__ import annotations

from datetime import date

import click

from subdash.cli.main import JsonGroup, SubDashContext, pass_context
from subdash.models.stats import NO_FILTER, SubscriptionQuery
from subdash.models.subscription import Category, Currency, Frequency, Status
from subdash.output.formatter import format_date, money, status_badge

_STATUS_CHOICES = [NO_FILTER] + [s.value for s in Status]
_CATEGORY_CHOICES = [NO_FILTER] + [c.value for c in Category]


@click.group(cls=JsonGroup)
@pass_context
def subscriptions(ctx: SubDashContext) -> None:
    """Manage subscriptions (list, add, spending)."""
    pass


@subscriptions.command("list")
@click.option("--search", "-s", default="", help="Case-insensitive substring of the name.")
@click.option("--status", type=click.Choice(_STATUS_CHOICES), default=NO_FILTER, help="Filter by status.")
@click.option(
    "--category", type=click.Choice(_CATEGORY_CHOICES), default=NO_FILTER, help="Filter by category."
)
@pass_context
def subscriptions_list(ctx: SubDashContext, search: str, status: str, category: str) -> None:
    """List subscriptions, optionally searched and filtered."""
    query = SubscriptionQuery.from_options(search=search, status=status, category=category)
    svc = ctx.get_service()
    matched, total = svc.search(query)

    if ctx.json_mode:
        ctx.formatter.json([s.to_wire() for s in matched])
        return

    if not matched:
        if total == 0:
            ctx.formatter.info("No subscriptions yet. Add one with: subdash subscriptions add")
        else:
            ctx.formatter.info("No subscriptions match your filters.")
        return

    date_fmt = ctx.config["display"]["date_format"]
    rows = []
    for s in matched:
        rows.append([
            s.name,
            status_badge(s.status),
            f"{money(s.price, s.currency)}/{s.frequency.value}",
            s.category.value,
            s.payment_method or "—",
            format_date(s.renewal_date, date_fmt),
        ])

    ctx.formatter.table(
        title=f"Subscriptions ({len(matched)} of {total})",
        columns=[
            ("Name", "bold"),
            ("Status", ""),
            ("Price", "green"),
            ("Category", ""),
            ("Payment", "dim"),
            ("Renewal", "cyan"),
        ],
        rows=rows,
    )


@subscriptions.command("add")
@click.option("--name", prompt="Subscription name", help="Subscription name.")
@click.option("--price", prompt="Price", default="0", help="Price per billing period.")
@click.option(
    "--currency",
    type=click.Choice([c.value for c in Currency]),
    default=Currency.INR.value,
    prompt="Currency",
    help="Currency the price is in.",
)
@click.option(
    "--frequency",
    type=click.Choice([f.value for f in Frequency]),
    default=Frequency.MONTHLY.value,
    prompt="Frequency",
    help="Billing frequency.",
)
@click.option(
    "--category",
    type=click.Choice([c.value for c in Category]),
    default=Category.ENTERTAINMENT.value,
    prompt="Category",
    help="Category.",
)
@click.option("--payment-method", prompt="Payment method", help="Card, UPI, PayPal, ...")
@click.option(
    "--start-date",
    prompt="Start date (YYYY-MM-DD)",
    default=lambda: date.today().isoformat(),
    help="First billing day (YYYY-MM-DD).",
)
@pass_context
def subscriptions_add(
    ctx: SubDashContext,
    name: str,
    price: str,
    currency: str,
    frequency: str,
    category: str,
    payment_method: str,
    start_date: str,
) -> None:
    """Add a subscription."""
    svc = ctx.get_service()
    sub = svc.add_subscription({
        "name": name,
        "price": price,
        "currency": currency,
        "frequency": frequency,
        "category": category,
        "paymentMethod": payment_method,
        "startDate": start_date,
    })

    if ctx.json_mode:
        ctx.formatter.json(sub.to_wire())
    else:
        ctx.formatter.success(
            f"Added subscription: {sub.name}, {money(sub.price, sub.currency)}/{sub.frequency.value}"
        )


@subscriptions.command("spending")
@pass_context
def subscriptions_spending(ctx: SubDashContext) -> None:
    """Show monthly-equivalent spending by category."""
    svc = ctx.get_service()
    breakdown = svc.get_spending_breakdown()
    currency = ctx.config["display"]["default_currency"]

    if ctx.json_mode:
        ctx.formatter.json({
            "monthly_total": str(breakdown["monthly_total"]),
            "by_category": {cat.value: str(amount) for cat, amount in breakdown["by_category"].items()},
        })
        return

    ctx.formatter.print("\n[bold cyan]Monthly Spending[/bold cyan]")
    ctx.formatter.print(f"  Total: {money(breakdown['monthly_total'], currency)}")
    if breakdown["by_category"]:
        ctx.formatter.print("\n  [bold]By Category:[/bold]")
        for cat, amount in sorted(breakdown["by_category"].items(), key=lambda x: -x[1]):
            ctx.formatter.print(f"    {cat.value}: {money(amount, currency)}")
    ctx.formatter.print("\n  [dim]Amounts in different currencies are added without conversion.[/dim]")
