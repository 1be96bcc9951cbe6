"""Dashboard overview: stats, renewal alerts, recent subscriptions."""

from __future__ import annotations

from datetime import date, datetime

import click

from subdash.cli.main import SubDashContext, pass_context
from subdash.output.formatter import format_date, money, status_badge
from subdash.services.analytics import RENEWAL_WINDOW_DAYS, days_until_renewal


@click.command()
@click.option(
    "--today",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="Evaluate renewals as of this day (YYYY-MM-DD). Defaults to today.",
)
@pass_context
def stats(ctx: SubDashContext, today: datetime | None) -> None:
    """Show spending stats and upcoming renewals."""
    as_of = today.date() if today else date.today()
    display = ctx.config["display"]
    svc = ctx.get_service()
    overview = svc.get_overview(as_of, recent_limit=int(display["recent_limit"]))
    summary = overview["stats"]

    if ctx.json_mode:
        ctx.formatter.json({
            "stats": summary.to_wire(),
            "upcoming": [s.to_wire() for s in overview["upcoming"]],
            "recent": [s.to_wire() for s in overview["recent"]],
        })
        return

    date_fmt = display["date_format"]
    ctx.formatter.panel(
        f"Total subscriptions: [bold]{summary.total}[/bold]\n"
        f"Active: [green]{summary.active}[/green]   Expired: [yellow]{summary.expired}[/yellow]\n"
        f"Monthly spending: [bold]{money(summary.monthly_spending, display['default_currency'])}[/bold]\n"
        f"Renewals ({RENEWAL_WINDOW_DAYS} days): [cyan]{summary.upcoming_renewals}[/cyan]",
        title=f"Dashboard — {format_date(as_of, date_fmt)}",
    )

    if overview["upcoming"]:
        rows = []
        for s in overview["upcoming"]:
            days = days_until_renewal(s, as_of)
            rows.append([
                s.name,
                money(s.price, s.currency),
                format_date(s.renewal_date, date_fmt),
                "today" if days == 0 else f"in {days}d",
            ])
        ctx.formatter.table(
            title="Upcoming Renewals",
            columns=[("Name", "bold"), ("Price", "green"), ("Renews", "cyan"), ("When", "yellow")],
            rows=rows,
        )

    if not overview["has_subscriptions"]:
        ctx.formatter.info("No subscriptions yet. Add your first one with: subdash subscriptions add")
        return

    rows = []
    for s in overview["recent"]:
        rows.append([
            s.name,
            status_badge(s.status),
            f"{money(s.price, s.currency)}/{s.frequency.value}",
            format_date(s.renewal_date, date_fmt),
            s.category.value,
        ])
    ctx.formatter.table(
        title="Recent Subscriptions",
        columns=[
            ("Name", "bold"),
            ("Status", ""),
            ("Price", "green"),
            ("Renewal", "cyan"),
            ("Category", "dim"),
        ],
        rows=rows,
    )
