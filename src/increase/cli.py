from __future__ import annotations

import json
import logging
from typing import Any, NoReturn, Optional, Union

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from increase.client import Client
from increase.errors import IncreaseError
from increase.pagination import ALL
from increase.resource import Resource
from increase.resources.catalog import RESOURCES, lookup


app = typer.Typer(no_args_is_help=True, add_completion=False)

console = Console()

_TABLE_COLUMNS = ("id", "type", "status", "created_at")


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@app.callback()
def main_options(
    ctx: typer.Context,
    api_key: Optional[str] = typer.Option(None, envvar="INCREASE_API_KEY", help="API key"),
    sandbox: bool = typer.Option(False, help="Talk to the sandbox environment"),
    base_url: Optional[str] = typer.Option(None, help="Override the API base URL"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every request"),
) -> None:
    _setup_logging(verbose)
    overrides: dict[str, Any] = {}
    if api_key:
        overrides["api_key"] = api_key
    if sandbox:
        overrides["environment"] = "sandbox"
    if base_url:
        overrides["base_url"] = base_url
    ctx.obj = overrides


def _resource_cls(name: str) -> type[Resource]:
    try:
        return lookup(name)
    except KeyError as e:
        raise typer.BadParameter(str(e.args[0]))


def _open(ctx: typer.Context, name: str) -> Resource:
    cls = _resource_cls(name)
    try:
        return cls(client=Client(**(ctx.obj or {})))
    except IncreaseError as e:
        _fail(e)


def _fail(e: Exception) -> NoReturn:
    console.print(f"[bold red]error[/bold red]: {e}")
    raise typer.Exit(code=1)


def _parse_limit(raw: Optional[str]) -> Union[int, str, None]:
    if raw is None:
        return None
    if raw.strip().lower() == ALL:
        return ALL
    try:
        value = int(raw)
    except ValueError:
        raise typer.BadParameter(f"limit must be an integer or '{ALL}', got {raw!r}")
    if value < 0:
        raise typer.BadParameter(f"limit must be >= 0, got {value}")
    return value


def _parse_params(pairs: list[str]) -> dict[str, str]:
    out: dict[str, str] = {}
    for p in pairs:
        key, sep, value = p.partition("=")
        if not sep or not key:
            raise typer.BadParameter(f"expected key=value, got {p!r}")
        out[key] = value
    return out


def _print_items(items: list[Any], format: str) -> None:
    if format.lower() == "json":
        console.print(json.dumps(items, indent=2, default=str))
        return

    columns = [c for c in _TABLE_COLUMNS if any(isinstance(i, dict) and c in i for i in items)]
    if not columns:
        console.print(json.dumps(items, indent=2, default=str))
        return

    table = Table(show_header=True, header_style="bold")
    for c in columns:
        table.add_column(c.upper(), no_wrap=(c == "id"))
    for item in items:
        table.add_row(*[str(item.get(c, "")) for c in columns])
    console.print(table)


@app.command()
def endpoints(
    resource: Optional[str] = typer.Argument(None, help="Only show this resource"),
) -> None:
    """Show every registered operation and its URL shape."""
    classes = [_resource_cls(resource)] if resource else [RESOURCES[k] for k in sorted(RESOURCES)]

    table = Table(show_header=True, header_style="bold")
    table.add_column("RESOURCE", no_wrap=True)
    table.add_column("OPERATION", no_wrap=True)
    table.add_column("METHOD", no_wrap=True)
    table.add_column("PATH")
    table.add_column("PAGINATED", no_wrap=True)

    for cls in classes:
        root = cls.resource_url()
        for name, spec in cls.endpoints().items():
            path = root if spec.shape == "/" else root + spec.shape
            table.add_row(cls.RESOURCE_TYPE, name, spec.http_method, path, "yes" if spec.paginated else "")

    console.print(table)


@app.command("list")
def list_cmd(
    ctx: typer.Context,
    resource: str = typer.Argument(..., help="Resource type, e.g. events"),
    limit: Optional[str] = typer.Option(None, help="Max items (integer) or 'all'; omit for one page"),
    param: list[str] = typer.Option([], "--param", "-p", help="Filter as key=value (repeatable)"),
    format: str = typer.Option("table", help="Output format: table|json"),
) -> None:
    """List a resource, following cursors up to --limit."""
    params: dict[str, Any] = _parse_params(param)
    if "limit" in params:
        if limit is not None:
            raise typer.BadParameter("give the limit either as --limit or as -p limit=..., not both")
        limit = params.pop("limit")
    parsed = _parse_limit(limit)
    if parsed is not None:
        params["limit"] = parsed

    res = _open(ctx, resource)
    if "list" not in res.endpoints():
        raise typer.BadParameter(f"{resource} has no list operation")

    try:
        items = res.list(params)
    except IncreaseError as e:
        _fail(e)

    console.print(f"[bold]{res.resource_name()}:[/bold] {len(items)}")
    _print_items(items, format)


@app.command()
def retrieve(
    ctx: typer.Context,
    resource: str = typer.Argument(..., help="Resource type, e.g. events"),
    id: str = typer.Argument(..., help="Object ID"),
    format: str = typer.Option("json", help="Output format: json|table"),
) -> None:
    """Fetch one object by ID."""
    res = _open(ctx, resource)
    if "retrieve" not in res.endpoints():
        raise typer.BadParameter(f"{resource} has no retrieve operation")

    try:
        obj = res.retrieve(id)
    except IncreaseError as e:
        _fail(e)

    if format.lower() == "json":
        console.print(json.dumps(obj.to_dict(), indent=2, default=str))
        return
    _print_items([obj.to_dict()], format)


@app.command()
def ping() -> None:
    console.print("pong")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
