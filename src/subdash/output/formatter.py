"""Dual-mode output — Rich for humans, JSON for agents."""

from __future__ import annotations

import json
from datetime import date
from decimal import Decimal
from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from subdash.models.subscription import Currency, Status

# Human output goes to stdout; in JSON mode, human messages go to stderr
_console = Console()
_err_console = Console(stderr=True)

CURRENCY_SYMBOLS = {
    Currency.INR: "₹",
    Currency.USD: "$",
    Currency.EUR: "€",
    Currency.YEN: "¥",
}

_STATUS_STYLES = {
    Status.ACTIVE: "green",
    Status.EXPIRED: "yellow",
    Status.CANCELLED: "red",
}


class OutputFormatter:
    """Routes output to Rich (human) or JSON (agent) depending on mode."""

    def __init__(self, json_mode: bool = False) -> None:
        self.json_mode = json_mode

    # ── JSON output ──────────────────────────────────────────────

    def json(self, data: Any, status: str = "success") -> None:
        """Print structured JSON to stdout."""
        envelope = {"status": status, "data": data}
        print(json.dumps(envelope, indent=2, default=str))

    def json_error(self, message: str, code: int = 1, details: Any = None) -> None:
        """Print a JSON error envelope to stdout."""
        error: dict[str, Any] = {"message": message, "code": code}
        if details:
            error["details"] = details
        print(json.dumps({"status": "error", "error": error}, indent=2))

    # ── Human output ─────────────────────────────────────────────

    def print(self, message: str = "", **kwargs: Any) -> None:
        """Print a message, routing to stderr in JSON mode."""
        console = _err_console if self.json_mode else _console
        console.print(message, **kwargs)

    def success(self, message: str) -> None:
        if self.json_mode:
            return
        _console.print(f"[green]✓[/green] {message}")

    def error(self, message: str) -> None:
        console = _err_console if self.json_mode else _console
        console.print(f"[red]✗[/red] {message}")

    def info(self, message: str) -> None:
        if self.json_mode:
            return
        _console.print(f"[dim]ℹ[/dim] {message}")

    def table(
        self,
        title: str,
        columns: list[tuple[str, str]],
        rows: list[list[str]],
        data_for_json: list[dict[str, Any]] | None = None,
    ) -> None:
        """Print a table (Rich for humans, JSON for agents).

        columns: list of (header, style) tuples
        rows: list of row data (strings)
        data_for_json: if provided, used as the JSON payload instead of rows
        """
        if self.json_mode:
            self.json(data_for_json if data_for_json is not None else [dict(zip([c[0] for c in columns], r)) for r in rows])
            return

        table = Table(title=title, show_header=True, header_style="bold cyan")
        for header, style in columns:
            table.add_column(header, style=style)
        for row in rows:
            table.add_row(*row)
        _console.print(table)

    def panel(self, content: str, title: str = "", border_style: str = "blue") -> None:
        if self.json_mode:
            return
        _console.print(Panel(content, title=title, border_style=border_style))


def money(amount: Decimal | float, currency: Currency | str | None = None) -> str:
    """Format an amount with its currency symbol and 2 decimals."""
    symbol = ""
    if currency is not None:
        try:
            symbol = CURRENCY_SYMBOLS.get(Currency(currency), "")
        except ValueError:
            symbol = ""
    value = Decimal(str(amount)) if isinstance(amount, float) else Decimal(amount)
    return f"{symbol}{value:,.2f}"


def format_date(value: date | str | None, fmt: str = "%b %d, %Y") -> str:
    """Format a calendar date for display."""
    if not value:
        return "—"
    if isinstance(value, str):
        try:
            value = date.fromisoformat(value[:10])
        except ValueError:
            return value
    return value.strftime(fmt)


def status_badge(status: Status | str) -> str:
    """Rich markup for a capitalized, coloured status label."""
    try:
        status = Status(status)
    except ValueError:
        return str(status)
    style = _STATUS_STYLES[status]
    return f"[{style}]{status.value.capitalize()}[/{style}]"
