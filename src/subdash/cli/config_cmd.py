"""Show and edit the TOML configuration."""

from __future__ import annotations

import click

from subdash.cli.main import JsonGroup, SubDashContext, pass_context


@click.group(cls=JsonGroup)
def config() -> None:
    """Show or change settings (API URL, display, logging)."""
    pass


@config.command("show")
@pass_context
def config_show(ctx: SubDashContext) -> None:
    """Print the effective configuration."""
    from subdash.core.config import get_config_path

    cfg = ctx.config
    if ctx.json_mode:
        ctx.formatter.json(cfg)
        return

    ctx.formatter.print(f"[dim]{get_config_path()}[/dim]")
    for section, values in cfg.items():
        ctx.formatter.print(f"\n[bold]\\[{section}][/bold]")
        for key, value in values.items():
            ctx.formatter.print(f"  {key} = {value!r}")


@config.command("set")
@click.argument("key")
@click.argument("value")
@pass_context
def config_set(ctx: SubDashContext, key: str, value: str) -> None:
    """Set SECTION.KEY to VALUE, e.g. `subdash config set api.base_url https://...`."""
    from subdash.core.config import set_value

    updated = set_value(key, value)
    section, _, name = key.partition(".")
    if ctx.json_mode:
        ctx.formatter.json({key: updated[section][name]})
    else:
        ctx.formatter.success(f"{key} = {updated[section][name]!r}")
