"""Command-line interface for infracore."""

import asyncio
import uuid
from collections.abc import Awaitable, Callable
from enum import Enum
from pathlib import Path
from typing import Any, TypeVar

import structlog
import typer
from rich.console import Console
from rich.table import Table

from .client import Client
from .config import ClientConfig, load_config
from .core.resource import ManagedResourceClient
from .models import Firewall, FirewallListOpts, PrimaryIP, PrimaryIPListOpts, Volume, VolumeListOpts
from .models.common import NamedListOpts, enum_value
from .observability import LogContext, configure_logging
from .utils.exceptions import ClientError

app = typer.Typer(
    name="infracore",
    help="infracore - Inspect and manage firewalls, volumes and Primary IPs",
    add_completion=False,
)

console = Console()
logger = structlog.get_logger(__name__)

T = TypeVar("T")


class Kind(str, Enum):
    FIREWALL = "firewall"
    VOLUME = "volume"
    PRIMARY_IP = "primary-ip"


_LIST_OPTS: dict[Kind, type[NamedListOpts]] = {
    Kind.FIREWALL: FirewallListOpts,
    Kind.VOLUME: VolumeListOpts,
    Kind.PRIMARY_IP: PrimaryIPListOpts,
}


def _kind_client(client: Client, kind: Kind) -> ManagedResourceClient:
    if kind == Kind.FIREWALL:
        return client.firewall
    if kind == Kind.VOLUME:
        return client.volume
    return client.primary_ip


def _describe(entity: Any) -> dict[str, str]:
    """Flatten an entity into display columns."""
    row = {"ID": str(entity.id), "Name": entity.name}
    if isinstance(entity, Firewall):
        row["Rules"] = str(len(entity.rules))
        row["Applied To"] = str(len(entity.applied_to))
    elif isinstance(entity, Volume):
        row["Size (GB)"] = str(entity.size)
        row["Status"] = enum_value(entity.status)
        row["Server"] = str(entity.server.id) if entity.server else "-"
        row["Location"] = entity.location.name
    elif isinstance(entity, PrimaryIP):
        row["IP"] = entity.ip
        row["Type"] = enum_value(entity.type)
        row["Assignee"] = str(entity.assignee_id) if entity.assignee_id is not None else "-"
        row["Datacenter"] = entity.datacenter.name
    row["Labels"] = ", ".join(f"{k}={v}" for k, v in sorted(entity.labels.items())) or "-"
    row["Created"] = entity.created.isoformat()
    return row


def _load(ctx: typer.Context) -> ClientConfig:
    config: ClientConfig = ctx.obj["config"]
    if config.api is None:
        raise ClientError("No API token configured (set HCLOUD_TOKEN or use --config)")
    return config


def _run(ctx: typer.Context, command: str, body: Callable[[Client], Awaitable[T]]) -> T:
    """Run an async command body against a fresh client, turning errors into exit code 1."""

    async def runner() -> T:
        config = _load(ctx)
        async with Client.from_config(config.api) as client:
            return await body(client)

    try:
        with LogContext(command=command, session_id=ctx.obj["session_id"]):
            return asyncio.run(runner())
    except ClientError as e:
        console.print(f"\n[red]ERROR:[/red] {e}")
        raise typer.Exit(code=1) from e


@app.callback()
def main(
    ctx: typer.Context,
    config_file: Path | None = typer.Option(None, "--config", "-c", help="YAML config file"),
    log_level: str | None = typer.Option(
        None, "--log-level", help="Log verbosity: DEBUG, INFO, WARNING, ERROR"
    ),
    json_logs: bool = typer.Option(False, "--json-logs", help="Emit logs as JSON"),
) -> None:
    """Global options shared by every command."""
    try:
        config = load_config(config_file)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"\n[red]ERROR: Configuration failed:[/red] {e}")
        raise typer.Exit(code=1) from e

    configure_logging(
        level=log_level or config.logging.level,
        json_logs=json_logs or config.logging.format == "json",
        log_file=config.logging.file,
    )
    ctx.obj = {"config": config, "session_id": str(uuid.uuid4())[:8]}


@app.command("list")
def list_resources(
    ctx: typer.Context,
    kind: Kind = typer.Argument(..., help="Resource kind"),
    name: str = typer.Option("", "--name", help="Only entries with this exact name"),
    label_selector: str = typer.Option("", "--selector", "-l", help="Label selector"),
    sort: list[str] = typer.Option([], "--sort", help="Sort key, e.g. name:desc (repeatable)"),
) -> None:
    """
    List every resource of a kind, walking all pages.

    Examples:
        infracore list volume
        infracore list firewall --selector env=prod --sort name:desc
    """
    opts = _LIST_OPTS[kind](name=name, label_selector=label_selector, sort=list(sort))
    entities = _run(ctx, "list", lambda client: _kind_client(client, kind).all_with_opts(opts))

    if not entities:
        console.print(f"[yellow]No {kind.value} found[/yellow]")
        return

    rows = [_describe(entity) for entity in entities]
    table = Table(title=f"{kind.value} ({len(rows)})")
    for column in rows[0]:
        table.add_column(column, style="cyan" if column == "ID" else None)
    for row in rows:
        table.add_row(*row.values())
    console.print(table)


@app.command()
def get(
    ctx: typer.Context,
    kind: Kind = typer.Argument(..., help="Resource kind"),
    id_or_name: str = typer.Argument(..., help="Numeric ID or name"),
) -> None:
    """Show one resource, looked up by ID or name."""

    async def body(client: Client) -> Any:
        entity, _ = await _kind_client(client, kind).get(id_or_name)
        return entity

    entity = _run(ctx, "get", body)
    if entity is None:
        console.print(f"[red]ERROR:[/red] {kind.value} {id_or_name!r} not found")
        raise typer.Exit(code=1)

    table = Table(show_header=False)
    table.add_column("Field", style="bold")
    table.add_column("Value")
    for field_name, value in _describe(entity).items():
        table.add_row(field_name, value)
    console.print(table)


@app.command()
def delete(
    ctx: typer.Context,
    kind: Kind = typer.Argument(..., help="Resource kind"),
    id_or_name: str = typer.Argument(..., help="Numeric ID or name"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
) -> None:
    """Delete one resource, looked up by ID or name."""
    if not yes and not typer.confirm(f"Delete {kind.value} {id_or_name!r}?"):
        raise typer.Exit()

    async def body(client: Client) -> Any:
        kind_client = _kind_client(client, kind)
        entity, _ = await kind_client.get(id_or_name)
        if entity is None:
            return None
        await kind_client.delete(entity)
        return entity

    entity = _run(ctx, "delete", body)
    if entity is None:
        console.print(f"[red]ERROR:[/red] {kind.value} {id_or_name!r} not found")
        raise typer.Exit(code=1)
    console.print(f"[green]OK:[/green] Deleted {kind.value} {entity.name} ({entity.id})")


@app.command()
def wait(
    ctx: typer.Context,
    action_id: int = typer.Argument(..., help="Action ID"),
    poll_interval: float | None = typer.Option(
        None, "--poll-interval", help="Seconds between refreshes"
    ),
) -> None:
    """Wait until an action has finished."""

    async def body(client: Client) -> Any:
        action, _ = await client.action.get_by_id(action_id)
        if action is None:
            return None
        finished = await client.action.wait_for(action, poll_interval=poll_interval)
        return finished[0]

    action = _run(ctx, "wait", body)
    if action is None:
        console.print(f"[red]ERROR:[/red] action {action_id} not found")
        raise typer.Exit(code=1)
    console.print(f"[green]OK:[/green] Action {action.id} ({action.command}) {enum_value(action.status)}")


if __name__ == "__main__":
    app()
