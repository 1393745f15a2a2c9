"""libpixel CLI - Generate, sign and verify LibPixel URLs."""

import json
import sys
import tomllib
from pathlib import Path
from typing import Any, cast

import click
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from libpixel.client import Client
from libpixel.common.errors import LibPixelError
from libpixel.common.logging import setup_logging
from libpixel.common.settings import Settings
from libpixel.params import ParamValue, coerce_param

console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)


def _load_config(path: str | None) -> dict[str, Any]:
    if not path:
        return {}
    config_path = Path(path).expanduser()
    if not config_path.exists():
        err_console.print(f"[red]Config not found: {config_path}[/red]")
        sys.exit(1)

    raw = config_path.read_bytes()
    if config_path.suffix.lower() == ".toml":
        data = tomllib.loads(raw.decode("utf-8"))
    else:
        data = json.loads(raw.decode("utf-8"))

    if isinstance(data, dict) and isinstance(data.get("cli"), dict):
        return cast(dict[str, Any], data["cli"])
    return cast(dict[str, Any], data) if isinstance(data, dict) else {}


def _parse_params(values: tuple[str, ...]) -> dict[str, ParamValue]:
    params: dict[str, ParamValue] = {}
    for item in values:
        name, sep, raw = item.partition("=")
        if not sep or not name:
            raise click.BadParameter(f"expected name=value, got {item!r}", param_hint="--param")
        params[name] = coerce_param(raw)
    return params


def _client(ctx: click.Context) -> Client:
    return cast(Client, ctx.obj["client"])


@click.group()
@click.option("--host", default=None, help="LibPixel host (e.g. test.libpx.com)")
@click.option("--https/--http", "https", default=None, help="Scheme for generated URLs")
@click.option("--secret", default=None, help="Shared signing secret")
@click.option(
    "--config",
    type=click.Path(exists=False, dir_okay=False),
    help="Path to CLI config (JSON or TOML with optional [cli] section)",
)
@click.pass_context
def cli(
    ctx: click.Context,
    host: str | None,
    https: bool | None,
    secret: str | None,
    config: str | None,
) -> None:
    """libpixel CLI - Generate and sign LibPixel image URLs."""
    config_data = _load_config(config)
    # Config file values override the environment
    overrides = {key: value for key, value in config_data.items() if key in Settings.model_fields}
    try:
        settings = Settings(**overrides)
    except ValidationError as e:
        err_console.print(f"[red]Invalid config: {escape(str(e))}[/red]")
        sys.exit(1)
    setup_logging(settings.log_level, settings.log_format)

    ctx.ensure_object(dict)
    ctx.obj["client"] = Client(
        host=host or settings.host,
        https=settings.https if https is None else https,
        secret=secret or settings.secret,
    )


@cli.command("sign")
@click.argument("url")
@click.pass_context
def sign_cmd(ctx: click.Context, url: str) -> None:
    """Sign an existing URL."""
    client = _client(ctx)
    if not client.secret:
        err_console.print("[yellow]No secret configured, signing with an empty key[/yellow]")
    try:
        console.print(client.sign(url), markup=False, soft_wrap=True)
    except LibPixelError as e:
        err_console.print(f"[red]Error: {escape(e.message)}[/red]")
        sys.exit(1)


@cli.command("url")
@click.argument("path", default="/")
@click.option("--param", "-p", "params", multiple=True, help="Image parameter as name=value")
@click.pass_context
def url_cmd(ctx: click.Context, path: str, params: tuple[str, ...]) -> None:
    """Generate a URL for PATH, signed when a secret is configured."""
    client = _client(ctx)
    if not client.host:
        err_console.print("[red]A host is required to generate URLs (--host)[/red]")
        sys.exit(1)
    try:
        console.print(client.url(path, _parse_params(params)), markup=False, soft_wrap=True)
    except LibPixelError as e:
        err_console.print(f"[red]Error: {escape(e.message)}[/red]")
        sys.exit(1)


@cli.command("verify")
@click.argument("url")
@click.pass_context
def verify_cmd(ctx: click.Context, url: str) -> None:
    """Verify the signature of a URL."""
    try:
        is_valid = _client(ctx).verify(url)
    except LibPixelError as e:
        err_console.print(f"[red]Error: {escape(e.message)}[/red]")
        sys.exit(1)

    if is_valid:
        console.print("[green]✓ Signature is valid[/green]")
    else:
        console.print("[red]✗ Signature is invalid[/red]")
        sys.exit(1)


def main() -> None:
    """CLI entry point."""
    cli(obj={})


if __name__ == "__main__":
    main()
