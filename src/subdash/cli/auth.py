"""Sign-in, sign-up, sign-out and profile commands."""

from __future__ import annotations

import click

from subdash.cli.main import SubDashContext, pass_context


@click.command()
@click.option("--email", prompt="Email", help="Account email.")
@click.option("--password", prompt="Password", hide_input=True, help="Account password.")
@pass_context
def signin(ctx: SubDashContext, email: str, password: str) -> None:
    """Sign in and remember the session."""
    api = ctx.get_api(authenticated=False)
    session = api.sign_in(email, password)
    ctx.session_store.save(session)

    if ctx.json_mode:
        ctx.formatter.json({"user": session.user.to_wire()})
    else:
        ctx.formatter.success(f"Signed in as {session.user.name or session.user.email}")


@click.command()
@click.option("--name", prompt="Name", help="Display name.")
@click.option("--email", prompt="Email", help="Account email.")
@click.option(
    "--password", prompt="Password", hide_input=True, confirmation_prompt=True, help="Account password."
)
@pass_context
def signup(ctx: SubDashContext, name: str, email: str, password: str) -> None:
    """Create an account and sign in."""
    api = ctx.get_api(authenticated=False)
    session = api.sign_up(name, email, password)
    ctx.session_store.save(session)

    if ctx.json_mode:
        ctx.formatter.json({"user": session.user.to_wire()})
    else:
        ctx.formatter.success(f"Welcome, {session.user.name}! You are signed in.")


@click.command()
@pass_context
def signout(ctx: SubDashContext) -> None:
    """Forget the stored session."""
    ctx.session_store.clear()
    if ctx.json_mode:
        ctx.formatter.json({"signed_out": True})
    else:
        ctx.formatter.success("Signed out.")


@click.command()
@pass_context
def whoami(ctx: SubDashContext) -> None:
    """Show the signed-in user from the local session."""
    session = ctx.session_store.require()
    if ctx.json_mode:
        ctx.formatter.json(session.user.to_wire())
        return
    ctx.formatter.print(f"[bold]{session.user.name}[/bold] <{session.user.email}>")


@click.command()
@pass_context
def profile(ctx: SubDashContext) -> None:
    """Fetch and show the signed-in user's profile."""
    api = ctx.get_api()
    user = api.get_user(api.session.user.id)

    if ctx.json_mode:
        ctx.formatter.json(user.to_wire())
        return

    ctx.formatter.print("\n[bold cyan]Profile[/bold cyan]")
    ctx.formatter.print(f"  Name: {user.name}")
    ctx.formatter.print(f"  Email: {user.email}")
    ctx.formatter.print(f"  ID: {user.id}")
