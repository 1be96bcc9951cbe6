"""Root CLI group — entry point for all SubDash commands."""

from __future__ import annotations

from typing import Any

import click
import httpx

from subdash import __version__
from subdash.core.exceptions import SubDashError, ValidationError
from subdash.output.formatter import OutputFormatter


class SubDashContext:
    """Shared context passed through Click commands."""

    # Swapped for an httpx.MockTransport in tests
    transport: httpx.BaseTransport | None = None

    def __init__(self, json_mode: bool = False) -> None:
        self.json_mode = json_mode
        self.formatter = OutputFormatter(json_mode=json_mode)
        self._config: dict[str, Any] | None = None
        self._session_store = None
        self._api = None

    @property
    def config(self) -> dict[str, Any]:
        """Lazy-load and return the merged configuration."""
        if self._config is None:
            from subdash.core.config import load_config

            self._config = load_config()
        return self._config

    @property
    def session_store(self):
        if self._session_store is None:
            from subdash.core.session import SessionStore

            self._session_store = SessionStore()
        return self._session_store

    def get_api(self, authenticated: bool = True):
        """Return an API client, carrying the stored session when `authenticated`."""
        if self._api is None:
            from subdash.services.api_client import SubscriptionAPI

            session = self.session_store.require() if authenticated else None
            api_cfg = self.config["api"]
            self._api = SubscriptionAPI(
                base_url=api_cfg["base_url"],
                session=session,
                timeout=float(api_cfg["timeout_seconds"]),
                transport=self.transport,
            )
        return self._api

    def get_service(self):
        """Return a DashboardService for the signed-in user."""
        from subdash.services.dashboard_service import DashboardService

        api = self.get_api()
        return DashboardService(api, api.session)

    def close(self) -> None:
        if self._api is not None:
            self._api.close()
            self._api = None


pass_context = click.make_pass_decorator(SubDashContext, ensure=True)


class JsonGroup(click.Group):
    """Click group that reports SubDashError through the formatter and exits 1."""

    def invoke(self, ctx: click.Context) -> Any:
        try:
            return super().invoke(ctx)
        except SubDashError as e:
            obj = ctx.find_object(SubDashContext) or SubDashContext()
            details = e.errors if isinstance(e, ValidationError) else None
            if obj.json_mode:
                obj.formatter.json_error(str(e), details=details)
            elif details:
                obj.formatter.error("Subscription not saved:")
                for field, message in details.items():
                    obj.formatter.print(f"  [bold]{field}[/bold]: {message}")
            else:
                obj.formatter.error(str(e))
            ctx.exit(1)


@click.group(cls=JsonGroup)
@click.option("--json", "json_mode", is_flag=True, help="Output JSON for agent consumption.")
@click.option("-v", "--verbose", is_flag=True, help="Log debug output to stderr.")
@click.version_option(__version__, prog_name="SubDash")
@click.pass_context
def cli(ctx: click.Context, json_mode: bool, verbose: bool) -> None:
    """SubDash — track subscriptions, spending and upcoming renewals."""
    from subdash.core.logging import setup_logging

    ctx.obj = SubDashContext(json_mode=json_mode)
    ctx.call_on_close(ctx.obj.close)

    log_cfg = ctx.obj.config["logging"]
    setup_logging(level="DEBUG" if verbose else log_cfg["level"], fmt=log_cfg["format"])


# ── Register subcommands ──────────────────────────────────────────

from subdash.cli.auth import profile, signin, signout, signup, whoami
cli.add_command(signin)
cli.add_command(signup)
cli.add_command(signout)
cli.add_command(whoami)
cli.add_command(profile)

from subdash.cli.stats import stats
cli.add_command(stats)

from subdash.cli.subscriptions_cmd import subscriptions
cli.add_command(subscriptions)

from subdash.cli.config_cmd import config
cli.add_command(config)
