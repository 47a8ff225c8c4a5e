"""MeshForge CLI - command-line access to the CNC session state."""

from __future__ import annotations

import asyncio
import dataclasses
import json

import click

from meshforge.config import Settings
from meshforge.utils.logging import setup_logging


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.option("--json-output", is_flag=True, help="Output in JSON format")
@click.option("--mock", is_flag=True, help="Use simulated ports and status (same as MESHFORGE_MOCK=1)")
@click.pass_context
def cli(ctx: click.Context, debug: bool, json_output: bool, mock: bool) -> None:
    """MeshForge - GRBL-HAL CNC control session."""
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug
    ctx.obj["json_output"] = json_output
    setup_logging(level="DEBUG" if debug else "WARNING", json_output=json_output)
    try:
        settings = Settings.from_env()
    except ValueError as exc:
        raise click.BadParameter(str(exc)) from exc
    if mock:
        settings = dataclasses.replace(settings, mock=True)
    ctx.obj["settings"] = settings


@cli.command()
@click.pass_context
def ports(ctx: click.Context) -> None:
    """List serial ports and the port that would be selected."""
    session = _make_session(ctx)
    port_list = asyncio.run(session.refresh_ports())

    if session.ports.error:
        click.echo(f"Error: {session.ports.error}", err=True)
        ctx.exit(1)

    selected = session.ports.selected
    if ctx.obj.get("json_output"):
        click.echo(json.dumps({
            "ports": [p.model_dump() for p in port_list],
            "selected": selected.name if selected else None,
        }, indent=2))
        return

    if not port_list:
        click.echo("No serial ports found.")
        return
    click.echo(f"Found {len(port_list)} port(s):")
    for p in port_list:
        marker = "*" if selected and p.name == selected.name else " "
        click.echo(f" {marker} {p.name:<16} {p.title}")


@cli.command()
@click.pass_context
def status(ctx: click.Context) -> None:
    """Fetch one machine status snapshot."""
    from meshforge.models.machine import format_status

    session = _make_session(ctx)
    category = asyncio.run(session.poller.refresh_state())
    poller = session.poller

    if ctx.obj.get("json_output"):
        click.echo(json.dumps({
            "category": category.value,
            "label": poller.state_label,
            "mock": poller.mock_mode,
            "error": poller.error,
            "status": poller.status.model_dump() if poller.status else None,
        }, indent=2))
    elif poller.status is not None:
        click.echo(format_status(poller.status))
        click.echo(f"Category: {category.value}")

    if poller.error:
        click.echo(f"Error: {poller.error}", err=True)
        ctx.exit(1)


@cli.command()
@click.argument("state")
@click.pass_context
def classify(ctx: click.Context, state: str) -> None:
    """Show the operational category of a controller STATE token."""
    from meshforge.session.classifier import classify as classify_state

    category = classify_state(state)
    if ctx.obj.get("json_output"):
        click.echo(json.dumps({"state": state, "category": category.value}))
    else:
        click.echo(category.value)


@cli.command()
@click.option("--host", default="127.0.0.1", help="Bind address")
@click.option("--port", type=int, default=8000, help="HTTP port")
@click.option("--no-ui", is_flag=True, help="API only, no web dashboard")
@click.pass_context
def serve(ctx: click.Context, host: str, port: int, no_ui: bool) -> None:
    """Start the web server (API + dashboard)."""
    import uvicorn
    from meshforge.api.app import create_app

    app = create_app(enable_ui=not no_ui, settings=ctx.obj["settings"])
    uvicorn.run(app, host=host, port=port)


def _make_session(ctx: click.Context):
    """Helper to build a session from CLI options."""
    from meshforge.backend import create_backend
    from meshforge.session.model import MachineSession

    settings = ctx.obj["settings"]
    return MachineSession(create_backend(settings), settings=settings)


if __name__ == "__main__":
    cli()
