"""oauthsig CLI - Compute and check OAuth 1.0 signatures."""

import sys
from collections.abc import Callable
from typing import Any, TypeVar

import click
from rich.console import Console
from rich.table import Table

from oauthsig.common.errors import OAuthProblemError
from oauthsig.common.logging import setup_logging
from oauthsig.common.settings import get_settings
from oauthsig.message import OAUTH_SIGNATURE_METHOD, OAuthConsumer, OAuthMessage
from oauthsig.signature.base import SignatureMethod, build_base_string
from oauthsig.signature.registry import default_registry, new_method

console = Console()
err_console = Console(stderr=True)

F = TypeVar("F", bound=Callable[..., Any])


def _parse_param(
    ctx: click.Context, param: click.Parameter, values: tuple[str, ...]
) -> list[tuple[str, str]]:
    pairs: list[tuple[str, str]] = []
    for value in values:
        name, sep, rest = value.partition("=")
        if not sep or not name:
            raise click.BadParameter(f"expected name=value, got {value!r}")
        pairs.append((name, rest))
    return pairs


def request_options(f: F) -> F:
    """Attach the request and secret options shared by every signing command."""
    options = [
        click.argument("http_method"),
        click.argument("url"),
        click.option(
            "-p",
            "--param",
            "params",
            multiple=True,
            callback=_parse_param,
            help="Request parameter as name=value (repeatable)",
        ),
        click.option("--consumer-secret", default="", help="Consumer secret"),
        click.option("--token-secret", default="", help="Token secret"),
    ]
    for option in reversed(options):
        f = option(f)
    return f


def _build_message(http_method: str, url: str, params: list[tuple[str, str]]) -> OAuthMessage:
    return OAuthMessage(method=http_method.upper(), url=url, parameters=params)


def _resolve(
    name: str | None, message: OAuthMessage, consumer_secret: str, token_secret: str
) -> SignatureMethod:
    declared = message.signature_method
    if name and declared and name != declared:
        err_console.print(
            f"[red]Error: --method {name} conflicts with oauth_signature_method={declared}[/red]"
        )
        sys.exit(2)
    name = name or declared or get_settings().default_signature_method
    consumer = OAuthConsumer(consumer_key=message.consumer_key or "", consumer_secret=consumer_secret)
    try:
        method = new_method(name, consumer, token_secret)
    except OAuthProblemError as exc:
        err_console.print(f"[red]Error: {exc.message}[/red]")
        err_console.print(f"[yellow]Acceptable: {', '.join(default_registry.names())}[/yellow]")
        sys.exit(2)
    # The signed message must name the method that signed it.
    if declared is None:
        message.add_parameter(OAUTH_SIGNATURE_METHOD, name)
    return method


@click.group()
@click.option("--log-level", default=None, help="Override the configured log level")
def cli(log_level: str | None) -> None:
    """oauthsig CLI - Build base strings, sign and verify OAuth 1.0 requests."""
    setup_logging(level=log_level)


@cli.command("base-string")
@request_options
def base_string(
    http_method: str,
    url: str,
    params: list[tuple[str, str]],
    consumer_secret: str,
    token_secret: str,
) -> None:
    """Print the signature base string for a request."""
    message = _build_message(http_method, url, params)
    click.echo(
        build_base_string(message.method, message.url, message.parameters, consumer_secret, token_secret)
    )


@cli.command()
@request_options
@click.option("--method", "signature_method", default=None, help="Signature method name")
@click.option("--header", is_flag=True, help="Print an Authorization header instead")
def sign(
    http_method: str,
    url: str,
    params: list[tuple[str, str]],
    consumer_secret: str,
    token_secret: str,
    signature_method: str | None,
    header: bool,
) -> None:
    """Sign a request and print the signature."""
    message = _build_message(http_method, url, params)
    method = _resolve(signature_method, message, consumer_secret, token_secret)
    signature = method.sign(message)
    click.echo(message.to_authorization_header() if header else signature)


@cli.command()
@request_options
@click.option("--method", "signature_method", default=None, help="Signature method name")
@click.option("--signature", required=True, help="Signature to check")
def verify(
    http_method: str,
    url: str,
    params: list[tuple[str, str]],
    consumer_secret: str,
    token_secret: str,
    signature_method: str | None,
    signature: str,
) -> None:
    """Verify a signature for a request."""
    message = _build_message(http_method, url, params)
    method = _resolve(signature_method, message, consumer_secret, token_secret)
    if method.verify_base_string(signature, method.get_base_string(message)):
        console.print("[green]Signature is valid[/green]")
    else:
        console.print("[red]Signature is INVALID[/red]")
        sys.exit(1)


@cli.command()
def methods() -> None:
    """List the registered signature methods."""
    table = Table(title="Signature Methods")
    table.add_column("Name", style="cyan")
    table.add_column("Implementation", style="green")

    for name in default_registry.names():
        method = new_method(name, OAuthConsumer(consumer_key=""))
        table.add_row(name, type(method).__name__)

    console.print(table)


def main() -> None:
    """CLI entry point."""
    cli()


if __name__ == "__main__":
    main()
